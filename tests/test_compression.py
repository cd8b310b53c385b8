import zlib

from innamark_core.compression import InflationError, deflate, inflate


def test_deflate_is_raw_stream():
    data = b"Lorem ipsum dolor sit amet " * 8
    packed = deflate(data)
    assert len(packed) < len(data)
    # No zlib header: a raw decompressor reads it directly
    assert zlib.decompress(packed, -15) == data


def test_inflate_roundtrip_including_empty():
    for data in [b"", b"a", bytes(range(256))]:
        res = inflate(deflate(data))
        assert res.is_success
        assert res.value == data


def test_inflate_garbage_is_error():
    res = inflate(b"\xff\xff\xff\xff")
    assert res.is_error
    assert res.value is None
    assert isinstance(res.events[0], InflationError)
    assert str(res.events[0]).startswith("Error (Compression.inflate): Error inflating bytes:")


def test_inflate_truncated_is_error():
    packed = deflate(b"Lorem ipsum dolor sit amet " * 8)
    res = inflate(packed[: len(packed) // 2])
    assert res.is_error
