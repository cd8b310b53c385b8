"""Innamark Core - diagnostics, raw watermarks and shared primitives."""
from .status import (
    Event,
    SuccessEvent,
    WarningEvent,
    ErrorEvent,
    Severity,
    Status,
    Result,
    WatermarkError,
    WatermarkWarning,
)
from .watermark import Watermark, StringDecodeWarning
from .aggregate import most_frequent, squash, aggregate, MultipleMostFrequentWarning

__all__ = [
    "Event",
    "SuccessEvent",
    "WarningEvent",
    "ErrorEvent",
    "Severity",
    "Status",
    "Result",
    "WatermarkError",
    "WatermarkWarning",
    "Watermark",
    "StringDecodeWarning",
    "most_frequent",
    "squash",
    "aggregate",
    "MultipleMostFrequentWarning",
]
