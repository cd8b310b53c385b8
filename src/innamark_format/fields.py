"""Size, checksum and hash field algorithms shared by all record variants.

Every function takes the raw record bytes and the byte range of its field.
Checksums and hashes cover the whole record with only their own field
replaced by zero placeholders.
"""
from __future__ import annotations

import hashlib
import struct
import zlib

from innamark_core.protocol import (
    CHECKSUM_FMT,
    CHECKSUM_PLACEHOLDER,
    HASH_ALGORITHM,
    HASH_PLACEHOLDER,
    SIZE_FMT,
)
from innamark_core.status import ErrorEvent, Result, Status, WarningEvent


class NotEnoughDataError(ErrorEvent):
    def __init__(self, source: str, minimum_bytes_required: int):
        super().__init__(source)
        self.minimum_bytes_required = minimum_bytes_required

    def message(self) -> str:
        return f"At least {self.minimum_bytes_required} bytes are required."


class MismatchedSizeWarning(WarningEvent):
    def __init__(self, source: str, expected_size: int, actual_size: int):
        super().__init__(source)
        self.expected_size = expected_size
        self.actual_size = actual_size

    def message(self) -> str:
        return f"Expected {self.expected_size} bytes, but extracted {self.actual_size} bytes."


class InvalidChecksumWarning(WarningEvent):
    def __init__(self, source: str, expected_checksum: int, actual_checksum: int):
        super().__init__(source)
        self.expected_checksum = expected_checksum
        self.actual_checksum = actual_checksum

    def message(self) -> str:
        return (
            f"Expected checksum: 0x{self.expected_checksum:08x}, "
            f"but was: 0x{self.actual_checksum:08x}."
        )


class InvalidHashWarning(WarningEvent):
    def __init__(self, source: str, expected_hash: bytes, actual_hash: bytes):
        super().__init__(source)
        self.expected_hash = bytes(expected_hash)
        self.actual_hash = bytes(actual_hash)

    def message(self) -> str:
        return f"Expected hash: {self.expected_hash.hex()}, but was: {self.actual_hash.hex()}."


def _read_field(raw: bytes, field: range, source: str) -> Result[bytes]:
    if len(raw) < field.stop:
        return NotEnoughDataError(source, field.stop).into_result()
    return Result.success(raw[field.start:field.stop])


def with_placeholder(raw: bytes, field: range, fill: int) -> bytes:
    """Copy of raw with the field bytes replaced by fill."""
    return raw[:field.start] + bytes([fill]) * len(field) + raw[field.stop:]


def write_field(raw: bytes, field: range, value: bytes) -> bytes:
    if len(value) != len(field):
        raise ValueError(f"Field needs {len(field)} bytes, got {len(value)}")
    return raw[:field.start] + value + raw[field.stop:]


# --- Size ---

def encode_size(size: int) -> bytes:
    return struct.pack(SIZE_FMT, size)


def extract_size(raw: bytes, field: range, source: str) -> Result[int]:
    res = _read_field(raw, field, source)
    if res.value is None:
        return res.with_value(None)
    (size,) = struct.unpack(SIZE_FMT, res.value)
    return Result.success(size)


def validate_size(raw: bytes, field: range, source: str) -> Status:
    res = extract_size(raw, field, source)
    if not res.is_success:
        return res.status
    if res.value != len(raw):
        return MismatchedSizeWarning(source, res.value, len(raw)).into()
    return Status.success()


# --- Checksum ---

def crc32(data: bytes) -> int:
    return zlib.crc32(data) & 0xFFFFFFFF


def extract_checksum(raw: bytes, field: range, source: str) -> Result[int]:
    res = _read_field(raw, field, source)
    if res.value is None:
        return res.with_value(None)
    (checksum,) = struct.unpack(CHECKSUM_FMT, res.value)
    return Result.success(checksum)


def calculate_checksum(raw: bytes, field: range, source: str) -> Result[int]:
    if len(raw) < field.stop:
        return NotEnoughDataError(source, field.stop).into_result()
    return Result.success(crc32(with_placeholder(raw, field, CHECKSUM_PLACEHOLDER)))


def fill_checksum(raw: bytes, field: range, source: str) -> Result[bytes]:
    """Return raw with the checksum field holding the record's checksum."""
    res = calculate_checksum(raw, field, source)
    if res.value is None:
        return res.with_value(None)
    return Result.success(write_field(raw, field, struct.pack(CHECKSUM_FMT, res.value)))


def validate_checksum(raw: bytes, field: range, source: str) -> Status:
    extracted = extract_checksum(raw, field, source)
    if not extracted.is_success:
        return extracted.status
    calculated = calculate_checksum(raw, field, source)
    if not calculated.is_success:
        return calculated.status

    if extracted.value != calculated.value:
        return InvalidChecksumWarning(source, extracted.value, calculated.value).into()
    return Status.success()


# --- Hash ---

def sha3_256(data: bytes) -> bytes:
    return hashlib.new(HASH_ALGORITHM, data).digest()


def extract_hash(raw: bytes, field: range, source: str) -> Result[bytes]:
    return _read_field(raw, field, source)


def calculate_hash(raw: bytes, field: range, source: str) -> Result[bytes]:
    if len(raw) < field.stop:
        return NotEnoughDataError(source, field.stop).into_result()
    return Result.success(sha3_256(with_placeholder(raw, field, HASH_PLACEHOLDER)))


def fill_hash(raw: bytes, field: range, source: str) -> Result[bytes]:
    """Return raw with the hash field holding the record's hash."""
    res = calculate_hash(raw, field, source)
    if res.value is None:
        return res.with_value(None)
    return Result.success(write_field(raw, field, res.value))


def validate_hash(raw: bytes, field: range, source: str) -> Status:
    extracted = extract_hash(raw, field, source)
    if not extracted.is_success:
        return extracted.status
    calculated = calculate_hash(raw, field, source)
    if not calculated.is_success:
        return calculated.status

    if extracted.value != calculated.value:
        return InvalidHashWarning(source, extracted.value, calculated.value).into()
    return Status.success()
