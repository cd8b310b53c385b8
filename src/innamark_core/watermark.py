"""Raw watermark - an opaque, immutable byte sequence."""
from __future__ import annotations

from .status import Result, Status, WarningEvent


class StringDecodeWarning(WarningEvent):
    def message(self) -> str:
        return "Could not decode the watermark as UTF-8, invalid bytes were replaced."


class Watermark:
    """Byte-for-byte comparable watermark."""

    def __init__(self, raw: bytes | bytearray | list[int]):
        self._raw = bytes(raw)

    @classmethod
    def from_string(cls, text: str) -> Watermark:
        return cls(text.encode("utf-8"))

    @property
    def raw(self) -> bytes:
        return self._raw

    def as_text(self, source: str = "Watermark") -> Result[str]:
        text = self._raw.decode("utf-8", errors="replace")
        status = Status.success()
        if "\uFFFD" in text:
            status.add_event(StringDecodeWarning(source))
        return status.into(text)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Watermark):
            return NotImplemented
        return type(self) is type(other) and self._raw == other._raw

    def __hash__(self) -> int:
        return hash(self._raw)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._raw.hex()})"
