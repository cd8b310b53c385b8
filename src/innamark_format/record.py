"""Innamark - tagged watermark records.

The first byte of a record is a capability tag selecting which metadata
fields follow (size, checksum or hash) and whether the payload is deflate
compressed. See layout.Variant for the twelve defined tags.
"""
from __future__ import annotations

from innamark_core import compression
from innamark_core.protocol import TAG_INDEX, TAG_SIZE
from innamark_core.status import ErrorEvent, Result, Status
from innamark_core.watermark import Watermark

from . import fields
from .fields import NotEnoughDataError
from .layout import Variant

SOURCE = "Innamark"


class IncompleteTagError(ErrorEvent):
    def __init__(self):
        super().__init__(SOURCE)

    def message(self) -> str:
        return f"Cannot validate a watermark without a complete tag ({TAG_SIZE} byte(s))."


class InvalidTagError(ErrorEvent):
    def __init__(self, source: str, expected_tag: int, actual_tag: int):
        super().__init__(source)
        self.expected_tag = expected_tag
        self.actual_tag = actual_tag

    def message(self) -> str:
        return f"Expected tag: {self.expected_tag}, but was: {self.actual_tag}."


class Innamark(Watermark):
    """A watermark whose bytes follow one of the tagged record layouts.

    Use Innamark.new() to build a record around a payload and
    codec.parse() to read one from untrusted bytes.
    """

    def __init__(self, variant: Variant, raw: bytes | bytearray | list[int]):
        super().__init__(raw)
        self.variant = variant

    @classmethod
    def new(cls, variant: Variant, payload: bytes) -> Innamark:
        """Build a record carrying payload with all metadata fields filled in."""
        layout = variant.layout
        body = compression.deflate(payload) if layout.compressed else bytes(payload)

        buf = bytearray(layout.payload_offset + len(body))
        buf[TAG_INDEX] = layout.tag
        if layout.size_range is not None:
            r = layout.size_range
            buf[r.start:r.stop] = fields.encode_size(len(buf))
        buf[layout.payload_offset:] = body
        raw = bytes(buf)

        # Digests go in last: they cover every other byte of the record
        if layout.checksum_range is not None:
            raw = fields.fill_checksum(raw, layout.checksum_range, variant.source).value
        if layout.hash_range is not None:
            raw = fields.fill_hash(raw, layout.hash_range, variant.source).value

        return cls(variant, raw)

    @classmethod
    def from_string(cls, variant: Variant, text: str) -> Innamark:
        return cls.new(variant, text.encode("utf-8"))

    @property
    def tag(self) -> int:
        return self.variant.tag

    @property
    def source(self) -> str:
        return self.variant.source

    def extract_tag(self) -> int:
        if len(self.raw) < TAG_SIZE:
            raise ValueError("Cannot extract tag from empty watermark.")
        return self.raw[TAG_INDEX]

    def content(self) -> Result[bytes]:
        """The decompressed payload without tag and metadata fields."""
        offset = self.variant.layout.payload_offset
        if len(self.raw) < offset:
            return NotEnoughDataError(self.source, offset).into_result()

        payload = self.raw[offset:]
        if self.variant.layout.compressed:
            return compression.inflate(payload)
        return Result.success(payload)

    def validate(self) -> Status:
        """Run every check that applies to the variant and collect the findings."""
        if len(self.raw) < TAG_SIZE:
            return IncompleteTagError().into()

        layout = self.variant.layout
        status = Status.success()

        actual = self.extract_tag()
        if actual != layout.tag:
            status.add_event(InvalidTagError(self.source, layout.tag, actual))

        if layout.size_range is not None:
            status.append_status(fields.validate_size(self.raw, layout.size_range, self.source))
        if layout.checksum_range is not None:
            status.append_status(
                fields.validate_checksum(self.raw, layout.checksum_range, self.source)
            )
        if layout.hash_range is not None:
            status.append_status(fields.validate_hash(self.raw, layout.hash_range, self.source))
        if layout.compressed and len(self.raw) >= layout.payload_offset:
            status.append_status(self.content().status)

        return status

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Innamark):
            return NotImplemented if not isinstance(other, Watermark) else False
        return self.variant is other.variant and self.raw == other.raw

    def __hash__(self) -> int:
        return hash((self.variant.tag, self.raw))

    def __repr__(self) -> str:
        return f"{self.variant.layout.name}({self.raw.hex()})"
