"""Byte layouts of the twelve tagged record variants.

Field order after the tag byte is fixed: size, then checksum or hash, then
the payload. No variant carries both a checksum and a hash.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from innamark_core.protocol import (
    CHECKSUM_SIZE,
    FLAG_CHECKSUM,
    FLAG_COMPRESSED,
    FLAG_HASH,
    FLAG_SIZED,
    HASH_SIZE,
    SIZE_SIZE,
    TAG_SIZE,
)


@dataclass(frozen=True)
class Layout:
    tag: int
    name: str

    @property
    def compressed(self) -> bool:
        return bool(self.tag & FLAG_COMPRESSED)

    @property
    def sized(self) -> bool:
        return bool(self.tag & FLAG_SIZED)

    @property
    def checksum(self) -> bool:
        return bool(self.tag & FLAG_CHECKSUM)

    @property
    def hash(self) -> bool:
        return bool(self.tag & FLAG_HASH)

    @property
    def size_range(self) -> range | None:
        if not self.sized:
            return None
        return range(TAG_SIZE, TAG_SIZE + SIZE_SIZE)

    def _digest_start(self) -> int:
        return TAG_SIZE + (SIZE_SIZE if self.sized else 0)

    @property
    def checksum_range(self) -> range | None:
        if not self.checksum:
            return None
        start = self._digest_start()
        return range(start, start + CHECKSUM_SIZE)

    @property
    def hash_range(self) -> range | None:
        if not self.hash:
            return None
        start = self._digest_start()
        return range(start, start + HASH_SIZE)

    @property
    def payload_offset(self) -> int:
        offset = self._digest_start()
        if self.checksum:
            offset += CHECKSUM_SIZE
        if self.hash:
            offset += HASH_SIZE
        return offset


class Variant(Enum):
    RAW = Layout(0x00, "RawInnamark")
    SIZED = Layout(0x20, "SizedInnamark")
    CRC32 = Layout(0x10, "CRC32Innamark")
    SIZED_CRC32 = Layout(0x30, "SizedCRC32Innamark")
    SHA3256 = Layout(0x08, "SHA3256Innamark")
    SIZED_SHA3256 = Layout(0x28, "SizedSHA3256Innamark")
    COMPRESSED_RAW = Layout(0x40, "CompressedRawInnamark")
    COMPRESSED_SIZED = Layout(0x60, "CompressedSizedInnamark")
    COMPRESSED_CRC32 = Layout(0x50, "CompressedCRC32Innamark")
    COMPRESSED_SIZED_CRC32 = Layout(0x70, "CompressedSizedCRC32Innamark")
    COMPRESSED_SHA3256 = Layout(0x48, "CompressedSHA3256Innamark")
    COMPRESSED_SIZED_SHA3256 = Layout(0x68, "CompressedSizedSHA3256Innamark")

    @property
    def layout(self) -> Layout:
        return self.value

    @property
    def tag(self) -> int:
        return self.value.tag

    @property
    def source(self) -> str:
        return f"Innamark.{self.value.name}"

    @classmethod
    def from_tag(cls, tag: int) -> Variant | None:
        return _BY_TAG.get(tag)


_BY_TAG: dict[int, Variant] = {v.tag: v for v in Variant}
