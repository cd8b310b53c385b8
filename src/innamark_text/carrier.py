"""Text carrier - the mutable text a watermark is spliced into."""
from __future__ import annotations

from innamark_core.status import ErrorEvent, Result, Status, WarningEvent

SOURCE = "TextCarrier"


class InvalidEncodingError(ErrorEvent):
    def __init__(self, reason: str):
        super().__init__(SOURCE)
        self.reason = reason

    def message(self) -> str:
        return f"Cannot parse text: Input contains invalid byte(s) ({self.reason})."


class InvalidEncodingWarning(WarningEvent):
    def __init__(self, reason: str):
        super().__init__(SOURCE)
        self.reason = reason

    def message(self) -> str:
        return f"Input contains invalid byte(s) that were replaced ({self.reason})."


class TextCarrier:
    """Holds text content that watermarkers read and replace."""

    def __init__(self, content: str = ""):
        self.content = content

    @classmethod
    def from_string(cls, text: str) -> TextCarrier:
        return cls(text)

    @classmethod
    def from_bytes(cls, data: bytes, strict: bool = True) -> Result[TextCarrier]:
        """Decode UTF-8 bytes.

        In strict mode invalid bytes are an error, otherwise they are
        replaced and reported as a warning.
        """
        try:
            return Result.success(cls(bytes(data).decode("utf-8")))
        except UnicodeDecodeError as e:
            if strict:
                return InvalidEncodingError(e.reason).into_result()
            status = Status(InvalidEncodingWarning(e.reason))
            return status.into(cls(bytes(data).decode("utf-8", errors="replace")))

    def to_bytes(self) -> bytes:
        return self.content.encode("utf-8")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TextCarrier):
            return NotImplemented
        return self.content == other.content

    def __repr__(self) -> str:
        return f"TextCarrier({self.content!r})"
