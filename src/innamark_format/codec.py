"""Parse untrusted bytes into Innamark records and serialize new ones."""
from __future__ import annotations

from collections.abc import Iterable

from innamark_core.protocol import TAG_INDEX, TAG_SIZE
from innamark_core.status import ErrorEvent, Result, Status, WarningEvent
from innamark_core.watermark import Watermark

from .fields import NotEnoughDataError
from .layout import Variant
from .record import SOURCE, Innamark

DEFAULT_VARIANT = Variant.SIZED_CRC32


class UnknownTagError(ErrorEvent):
    def __init__(self, tag: int):
        super().__init__(SOURCE)
        self.tag = tag

    def message(self) -> str:
        return f"Unknown watermark tag: {self.tag}."


class FailedInnamarkExtractionsWarning(WarningEvent):
    def message(self) -> str:
        return "Could not extract and convert all watermarks to Innamarks."


def parse(data: bytes | bytearray) -> Result[Innamark]:
    """Parse data as an Innamark and validate it.

    Errors:
    - Fewer bytes than a tag
    - The tag byte matches none of the defined variants
    Validation findings (size, checksum, hash, compression) are attached to
    the returned status next to the record.
    """
    if len(data) < TAG_SIZE:
        return NotEnoughDataError(SOURCE, TAG_SIZE).into_result()

    tag = data[TAG_INDEX]
    variant = Variant.from_tag(tag)
    if variant is None:
        return UnknownTagError(tag).into_result()

    record = Innamark(variant, data)
    return record.validate().into(record)


def from_watermark(watermark: Watermark) -> Result[Innamark]:
    return parse(watermark.raw)


def to_innamarks(
    watermarks: Result[list[Watermark]] | Iterable[Watermark],
    source: str = SOURCE,
) -> Result[list[Innamark]]:
    """Convert every watermark into a validated Innamark.

    If some conversions fail but at least one succeeds, the error is
    downgraded to a FailedInnamarkExtractionsWarning so the recovered
    records are not lost.
    """
    status = Status.success()
    if isinstance(watermarks, Result):
        status.append_status(watermarks.status, override_severity=True)
        if watermarks.value is None:
            return status.into()
        items = watermarks.value
    else:
        items = list(watermarks)

    records: list[Innamark] = []
    for watermark in items:
        res = from_watermark(watermark)
        status.append_status(res.status)
        if res.value is not None:
            records.append(res.value)

    if status.is_error and records:
        status.add_event(FailedInnamarkExtractionsWarning(source), override_severity=True)

    if status.is_error:
        return status.into()
    return status.into(records)


def encode_record(payload: bytes, variant: Variant = DEFAULT_VARIANT) -> bytes:
    """Serialize payload as a tagged record for out-of-band storage."""
    return Innamark.new(variant, payload).raw


def decode_record(data: bytes | bytearray) -> Result[Innamark]:
    """Inverse of encode_record; the record is validated."""
    return parse(bytes(data))
