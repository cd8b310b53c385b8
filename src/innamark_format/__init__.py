"""Innamark Format - tagged binary watermark records."""
from .layout import Layout, Variant
from .record import Innamark, IncompleteTagError, InvalidTagError
from .fields import (
    NotEnoughDataError,
    MismatchedSizeWarning,
    InvalidChecksumWarning,
    InvalidHashWarning,
)
from .codec import (
    parse,
    from_watermark,
    to_innamarks,
    encode_record,
    decode_record,
    UnknownTagError,
    FailedInnamarkExtractionsWarning,
)

__all__ = [
    "Layout",
    "Variant",
    "Innamark",
    "IncompleteTagError",
    "InvalidTagError",
    "NotEnoughDataError",
    "MismatchedSizeWarning",
    "InvalidChecksumWarning",
    "InvalidHashWarning",
    "parse",
    "from_watermark",
    "to_innamarks",
    "encode_record",
    "decode_record",
    "UnknownTagError",
    "FailedInnamarkExtractionsWarning",
]
