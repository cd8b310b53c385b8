import hashlib
import struct
import zlib

import pytest

from innamark_core.compression import InflationError
from innamark_core.status import Result
from innamark_core.watermark import Watermark
from innamark_format import (
    FailedInnamarkExtractionsWarning,
    Innamark,
    InvalidChecksumWarning,
    InvalidHashWarning,
    InvalidTagError,
    MismatchedSizeWarning,
    NotEnoughDataError,
    UnknownTagError,
    Variant,
    decode_record,
    encode_record,
    parse,
    to_innamarks,
)

DEFINED_TAGS = {0x00, 0x20, 0x10, 0x30, 0x08, 0x28, 0x40, 0x60, 0x50, 0x70, 0x48, 0x68}
PAYLOADS = [b"", b"Lorem ipsum dolor sit amet", bytes(range(256))]


def event_types(status):
    return [type(e) for e in status.events]


def test_variant_table():
    assert {v.tag for v in Variant} == DEFINED_TAGS
    assert len(Variant) == 12
    for v in Variant:
        assert not (v.layout.checksum and v.layout.hash)


def test_field_ranges():
    assert Variant.SIZED.layout.size_range == range(1, 5)
    assert Variant.CRC32.layout.checksum_range == range(1, 5)
    assert Variant.SIZED_CRC32.layout.checksum_range == range(5, 9)
    assert Variant.SHA3256.layout.hash_range == range(1, 33)
    assert Variant.COMPRESSED_SIZED_SHA3256.layout.hash_range == range(5, 37)
    assert Variant.COMPRESSED_SIZED_SHA3256.layout.payload_offset == 37
    assert Variant.RAW.layout.payload_offset == 1


@pytest.mark.parametrize("variant", list(Variant))
@pytest.mark.parametrize("payload", PAYLOADS)
def test_roundtrip_every_variant(variant, payload):
    record = Innamark.new(variant, payload)
    assert record.raw[0] == variant.tag

    res = parse(record.raw)
    assert res.is_success, str(res.status)
    assert res.value == record
    assert res.value.content().value == payload


def test_sized_layout_bytes():
    record = Innamark.new(Variant.SIZED, b"Lorem")
    assert record.raw == b"\x20" + (10).to_bytes(4, "little") + b"Lorem"


def test_checksum_covers_whole_record():
    payload = b"Lorem ipsum"
    record = Innamark.new(Variant.SIZED_CRC32, payload)
    size = 1 + 4 + 4 + len(payload)
    zeroed = b"\x30" + struct.pack("<I", size) + b"\x00" * 4 + payload
    assert record.raw[5:9] == struct.pack("<I", zlib.crc32(zeroed))


def test_hash_covers_whole_record():
    payload = b"Lorem ipsum"
    record = Innamark.new(Variant.SHA3256, payload)
    zeroed = b"\x08" + b"\x00" * 32 + payload
    assert record.raw[1:33] == hashlib.sha3_256(zeroed).digest()


def test_compressed_payload_is_deflated():
    payload = b"abc" * 100
    record = Innamark.new(Variant.COMPRESSED_RAW, payload)
    assert len(record.raw) < len(payload)
    assert zlib.decompress(record.raw[1:], -15) == payload


def test_parse_empty_input():
    res = parse(b"")
    assert res.is_error
    assert event_types(res.status) == [NotEnoughDataError]
    assert str(res.events[0]) == "Error (Innamark): At least 1 bytes are required."


def test_parse_completeness():
    for tag in range(256):
        res = parse(bytes([tag]))
        if tag in DEFINED_TAGS:
            assert UnknownTagError not in event_types(res.status), tag
        else:
            assert event_types(res.status) == [UnknownTagError], tag
            assert res.events[0].tag == tag


def test_unknown_tag_message():
    assert str(UnknownTagError(255)) == "Error (Innamark): Unknown watermark tag: 255."


def test_invalid_tag_after_mutation():
    record = Innamark.new(Variant.SIZED, b"Lorem")
    tampered = Innamark(Variant.SIZED, b"\xff" + record.raw[1:])
    status = tampered.validate()
    assert status.is_error
    (event,) = status.events
    assert isinstance(event, InvalidTagError)
    assert str(event) == "Error (Innamark.SizedInnamark): Expected tag: 32, but was: 255."


def test_size_mismatch():
    record = Innamark.new(Variant.SIZED, b"Lorem")
    res = parse(record.raw + b"!")
    assert res.is_warning
    (event,) = res.events
    assert isinstance(event, MismatchedSizeWarning)
    assert str(event) == (
        "Warning (Innamark.SizedInnamark): Expected 10 bytes, but extracted 11 bytes."
    )


def test_too_short_for_declared_field():
    res = parse(b"\x30\x01\x02")
    assert res.is_error
    assert event_types(res.status) == [NotEnoughDataError, NotEnoughDataError]
    assert res.events[0].minimum_bytes_required == 5
    assert res.events[1].minimum_bytes_required == 9


@pytest.mark.parametrize(
    "variant",
    [v for v in Variant if v.layout.checksum or v.layout.hash],
)
def test_tamper_detection(variant):
    record = Innamark.new(variant, b"Lorem ipsum dolor sit amet")
    expected = InvalidChecksumWarning if variant.layout.checksum else InvalidHashWarning
    size_range = variant.layout.size_range or range(0)

    for i in range(1, len(record.raw)):
        raw = bytearray(record.raw)
        raw[i] ^= 0x01
        types = event_types(Innamark(variant, raw).validate())

        assert expected in types, i
        assert (MismatchedSizeWarning in types) == (i in size_range), i
        assert set(types) <= {expected, MismatchedSizeWarning, InflationError}


def test_checksum_warning_message():
    event = InvalidChecksumWarning("Innamark.CRC32Innamark", 0xDEADBEEF, 0x1)
    assert str(event) == (
        "Warning (Innamark.CRC32Innamark): Expected checksum: 0xdeadbeef, but was: 0x00000001."
    )


def test_all_checks_run():
    record = Innamark.new(Variant.COMPRESSED_SIZED_CRC32, b"Lorem ipsum")
    raw = bytearray(record.raw) + b"\x00\x00"
    types = event_types(Innamark(Variant.COMPRESSED_SIZED_CRC32, raw).validate())
    assert MismatchedSizeWarning in types
    assert InvalidChecksumWarning in types


def test_corrupt_compressed_payload():
    raw = b"\x40\xff\xff\xff"
    res = parse(raw)
    assert res.is_error
    assert event_types(res.status) == [InflationError]
    assert res.value.content().is_error


def test_records_differ_by_variant():
    raw_a = Innamark.new(Variant.RAW, b"x")
    assert raw_a == Innamark(Variant.RAW, b"\x00x")
    assert raw_a != Watermark(b"\x00x")
    assert raw_a != Innamark(Variant.SIZED, b"\x00x")


def test_to_innamarks_keeps_partial_success():
    good = Watermark(Innamark.new(Variant.SIZED_CRC32, b"ok").raw)
    bad = Watermark(b"\xff")

    res = to_innamarks([good, bad])
    assert res.is_warning
    assert [r.content().value for r in res.value] == [b"ok"]
    assert event_types(res.status) == [UnknownTagError, FailedInnamarkExtractionsWarning]


def test_to_innamarks_all_failed():
    res = to_innamarks([Watermark(b"\xff"), Watermark(b"")])
    assert res.is_error
    assert res.value is None


def test_record_interface_for_containers():
    data = encode_record(b"metadata")
    assert data[0] == Variant.SIZED_CRC32.tag
    res = decode_record(data)
    assert res.is_success
    assert res.value.content().value == b"metadata"

    hashed = encode_record(b"metadata", Variant.COMPRESSED_SHA3256)
    assert decode_record(hashed).value.variant is Variant.COMPRESSED_SHA3256


def test_to_innamarks_leaves_input_result_untouched():
    good = Watermark(Innamark.new(Variant.RAW, b"ok").raw)
    extracted = Result.success([Watermark(b"\xff"), good])

    res = to_innamarks(extracted)
    assert res.is_warning
    assert res.status is not extracted.status
    assert extracted.is_success
    assert extracted.events == []

    failed = Result.success([Watermark(b"\xff")])
    assert to_innamarks(failed).is_error
    assert failed.is_success
