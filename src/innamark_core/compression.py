"""Raw deflate compression used for compressed payloads."""
from __future__ import annotations

import zlib

from .protocol import COMPRESSION_LEVEL, COMPRESSION_WBITS
from .status import ErrorEvent, Result


class InflationError(ErrorEvent):
    def __init__(self, reason: str):
        super().__init__("Compression.inflate")
        self.reason = reason

    def message(self) -> str:
        return f"Error inflating bytes: {self.reason}."


def deflate(data: bytes) -> bytes:
    """Compress data into a raw deflate stream."""
    compressor = zlib.compressobj(COMPRESSION_LEVEL, zlib.DEFLATED, COMPRESSION_WBITS)
    return compressor.compress(bytes(data)) + compressor.flush()


def inflate(data: bytes) -> Result[bytes]:
    """Decompress a raw deflate stream.

    Truncated streams are reported like corrupt ones.
    """
    decompressor = zlib.decompressobj(COMPRESSION_WBITS)
    try:
        out = decompressor.decompress(bytes(data))
        out += decompressor.flush()
    except zlib.error as e:
        return InflationError(str(e)).into_result()

    if not decompressor.eof:
        return InflationError("incomplete or truncated stream").into_result()

    return Result.success(out)
