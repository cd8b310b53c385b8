"""Innamark Text - invisible watermarks in ordinary text."""
from .transcoding import AlphabetTranscoding, DEFAULT_TRANSCODING, DecodingInvalidByteError
from .separators import (
    SeparatorStrategy,
    SkipInsertPosition,
    SingleSeparatorChar,
    StartEndSeparatorChars,
)
from .carrier import TextCarrier, InvalidEncodingError, InvalidEncodingWarning
from .watermarker import (
    TextWatermarker,
    default_placement,
    IncompleteWatermarkWarning,
    OversizedWatermarkWarning,
    ContainsAlphabetCharsError,
    RemoveWatermarksGetProblemWarning,
    AlphabetContainsSeparatorError,
    InvalidSeparatorCharError,
    AddedWatermarkSuccess,
)
from .plain import PlainTextWatermarker

__all__ = [
    "AlphabetTranscoding",
    "DEFAULT_TRANSCODING",
    "DecodingInvalidByteError",
    "SeparatorStrategy",
    "SkipInsertPosition",
    "SingleSeparatorChar",
    "StartEndSeparatorChars",
    "TextCarrier",
    "InvalidEncodingError",
    "InvalidEncodingWarning",
    "TextWatermarker",
    "default_placement",
    "IncompleteWatermarkWarning",
    "OversizedWatermarkWarning",
    "ContainsAlphabetCharsError",
    "RemoveWatermarksGetProblemWarning",
    "AlphabetContainsSeparatorError",
    "InvalidSeparatorCharError",
    "AddedWatermarkSuccess",
    "PlainTextWatermarker",
]
