from innamark_core.aggregate import (
    MultipleMostFrequentWarning,
    aggregate,
    most_frequent,
    squash,
)
from innamark_core.watermark import Watermark
from innamark_format import Innamark, Variant

A = Watermark(b"A")
B = Watermark(b"B")
C = Watermark(b"C")


def test_most_frequent_tie_keeps_all_tied_groups():
    res = most_frequent([A, B, A, C, B])
    assert res.is_warning
    (event,) = res.events
    assert isinstance(event, MultipleMostFrequentWarning)
    assert event.count == 2
    assert str(event) == "Warning (Watermark.most_frequent): 2 most frequent watermarks found!"
    assert res.value == [A, A, B, B]


def test_most_frequent_single_winner():
    res = most_frequent([A, B, A, C])
    assert res.is_success
    assert res.events == []
    assert res.value == [A, A]


def test_most_frequent_empty():
    res = most_frequent([])
    assert res.is_success
    assert res.value == []


def test_squash_keeps_first_appearance_order():
    assert squash([B, A, B, C, A]) == [B, A, C]
    assert squash([]) == []


def test_aggregate_flags():
    items = [A, B, A, C, B]
    assert aggregate(items).value == items
    assert aggregate(items, squash_copies=True).value == [A, B, C]

    res = aggregate(items, squash_copies=True, single_watermark=True)
    assert res.is_warning
    assert res.value == [A, B]

    res = aggregate([A, B, A], squash_copies=True, single_watermark=True)
    assert res.is_success
    assert res.value == [A]


def test_records_and_raw_watermarks_group_apart():
    record = Innamark.new(Variant.RAW, b"A")
    raw = Watermark(record.raw)
    res = most_frequent([record, raw, record])
    assert res.is_success
    assert res.value == [record, record]
    assert squash([record, raw]) == [record, raw]
