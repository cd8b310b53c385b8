import pytest

from innamark_core.protocol import DEFAULT_ALPHABET
from innamark_core.status import WatermarkError
from innamark_core.watermark import StringDecodeWarning, Watermark
from innamark_format import Variant, encode_record
from innamark_text import ContainsAlphabetCharsError, PlainTextWatermarker, SingleSeparatorChar

REPLACEMENT = chr(0xFFFD)

LOREM = (
    "Lorem ipsum dolor sit amet, consectetur adipiscing elit, sed do eiusmod tempor "
    "incididunt ut labore et dolore magna aliqua. Blandit volutpat maecenas "
    "volutpat blandit aliquam etiam erat velit."
)


def words(n):
    return " ".join(["a"] * n)


@pytest.fixture
def watermarker():
    return PlainTextWatermarker()


def test_string_roundtrip(watermarker):
    res = watermarker.add_watermark(LOREM, "Hi")
    assert res.is_success
    marked = res.value
    assert marked != LOREM
    assert len(marked) == len(LOREM)
    assert watermarker.contains_watermark(marked)

    text = watermarker.get_watermark_as_string(marked)
    assert text.is_success
    assert text.value == "Hi"

    raw = watermarker.get_watermark_as_bytes(marked)
    assert raw.value == b"Hi"

    assert watermarker.get_watermarks(marked, squash=True).value == [Watermark(b"Hi")]


def test_accepts_watermark_objects(watermarker):
    marked = watermarker.add_watermark(LOREM, Watermark(b"Hi")).value
    assert watermarker.get_watermark_as_bytes(marked).value == b"Hi"


def test_no_watermark_gives_empty_value(watermarker):
    assert watermarker.get_watermark_as_bytes(LOREM).value == b""
    res = watermarker.get_watermark_as_string(LOREM)
    assert res.is_success
    assert res.value == ""


def test_invalid_utf8_watermark_warns(watermarker):
    marked = watermarker.add_watermark(words(10), b"\xff\xfe").value
    res = watermarker.get_watermark_as_string(marked)
    assert res.is_warning
    (event,) = res.events
    assert isinstance(event, StringDecodeWarning)
    assert event.source == "PlainTextWatermarker"
    assert res.value == REPLACEMENT * 2


def test_error_returns_cover_unchanged(watermarker):
    marked = watermarker.add_watermark(LOREM, "Hi").value
    res = watermarker.add_watermark(marked, "Yo")
    assert res.is_error
    assert isinstance(res.events[0], ContainsAlphabetCharsError)
    assert res.value == marked


def test_get_innamarks(watermarker):
    marked = watermarker.add_watermark(words(60), encode_record(b"meta")).value
    res = watermarker.get_innamarks(marked)
    assert res.is_success
    (record,) = res.value
    assert record.variant is Variant.SIZED_CRC32
    assert record.content().value == b"meta"


def test_remove_watermarks(watermarker):
    marked = watermarker.add_watermark(LOREM, "Hi").value
    res = watermarker.remove_watermarks(marked)
    assert res.is_success
    assert res.value == LOREM
    assert not watermarker.contains_watermark(res.value)


def test_invalid_configuration_raises():
    with pytest.raises(WatermarkError):
        PlainTextWatermarker(separator_strategy=SingleSeparatorChar(DEFAULT_ALPHABET[0]))
