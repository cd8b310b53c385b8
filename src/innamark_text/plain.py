"""String-in, string-out facade over TextWatermarker."""
from __future__ import annotations

from innamark_core.status import Result
from innamark_core.watermark import Watermark
from innamark_format.codec import to_innamarks
from innamark_format.record import Innamark

from .carrier import TextCarrier
from .separators import SeparatorStrategy
from .transcoding import DEFAULT_TRANSCODING, AlphabetTranscoding
from .watermarker import Placement, TextWatermarker, default_placement

SOURCE = "PlainTextWatermarker"


class PlainTextWatermarker:
    def __init__(
        self,
        transcoding: AlphabetTranscoding = DEFAULT_TRANSCODING,
        separator_strategy: SeparatorStrategy | None = None,
        placement: Placement = default_placement,
    ):
        # Raises WatermarkError for an invalid separator configuration
        self.watermarker = TextWatermarker.build(
            transcoding, separator_strategy, placement
        ).unwrap()

    def add_watermark(self, cover: str, watermark: str | bytes | Watermark) -> Result[str]:
        """Return cover with watermark embedded.

        The status carries the same warnings and errors as
        TextWatermarker.add_watermark. On error the cover is returned as is.
        """
        if isinstance(watermark, str):
            watermark = watermark.encode("utf-8")
        carrier = TextCarrier.from_string(cover)
        status = self.watermarker.add_watermark(carrier, watermark).status
        return status.into(carrier.content)

    def contains_watermark(self, cover: str) -> bool:
        return self.watermarker.contains_watermark(TextCarrier.from_string(cover))

    def get_watermarks(
        self, cover: str, squash: bool = False, single_watermark: bool = False
    ) -> Result[list[Watermark]]:
        return self.watermarker.get_watermarks(
            TextCarrier.from_string(cover), squash=squash, single_watermark=single_watermark
        )

    def get_watermark_as_bytes(self, cover: str) -> Result[bytes]:
        """The most frequent watermark, empty if the cover carries none."""
        res = self.get_watermarks(cover, single_watermark=True)
        if not res.value:
            return res.with_value(None) if res.is_error else res.with_value(b"")
        return res.with_value(res.value[0].raw)

    def get_watermark_as_string(self, cover: str) -> Result[str]:
        res = self.get_watermarks(cover, single_watermark=True)
        if not res.value:
            return res.with_value(None) if res.is_error else res.with_value("")

        text = res.value[0].as_text(SOURCE)
        res.append_status(text.status)
        return res.with_value(text.value)

    def get_innamarks(self, cover: str, squash: bool = False) -> Result[list[Innamark]]:
        """All watermarks parsed and validated as Innamark records."""
        return to_innamarks(self.get_watermarks(cover, squash=squash), source=SOURCE)

    def remove_watermarks(self, cover: str) -> Result[str]:
        carrier = TextCarrier.from_string(cover)
        status = self.watermarker.remove_watermarks(carrier).status
        return status.into(carrier.content)
