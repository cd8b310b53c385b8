"""Collapse many recovered watermark copies into distinct or most frequent values."""
from __future__ import annotations

from collections.abc import Sequence
from typing import TypeVar

import numpy as np
import pandas as pd

from .status import Result, Status, WarningEvent

W = TypeVar("W")


class MultipleMostFrequentWarning(WarningEvent):
    def __init__(self, count: int):
        super().__init__("Watermark.most_frequent")
        self.count = count

    def message(self) -> str:
        return f"{self.count} most frequent watermarks found!"


def _group_codes(watermarks: Sequence[W]) -> tuple[np.ndarray, np.ndarray]:
    """Group by equality via hashing.

    Returns one group code per watermark (codes follow first appearance) and
    the size of every group.
    """
    keys = pd.Series(list(watermarks), dtype=object)
    codes, _ = pd.factorize(keys, sort=False)
    return codes, np.bincount(codes)


def most_frequent(watermarks: Sequence[W]) -> Result[list[W]]:
    """Return every copy of the most frequent watermark.

    Ties are not resolved: all tied groups are returned (in order of first
    appearance) together with a MultipleMostFrequentWarning.
    """
    if len(watermarks) == 0:
        return Result.success([])

    codes, counts = _group_codes(watermarks)
    top = counts.max()
    tied = np.flatnonzero(counts == top)

    out: list[W] = []
    for code in tied:
        out.extend(w for w, c in zip(watermarks, codes) if c == code)

    status = Status.success()
    if len(tied) > 1:
        status.add_event(MultipleMostFrequentWarning(int(len(tied))))
    return status.into(out)


def squash(watermarks: Sequence[W]) -> list[W]:
    """Distinct watermarks in order of first appearance."""
    return list(dict.fromkeys(watermarks))


def aggregate(
    watermarks: Sequence[W],
    squash_copies: bool = False,
    single_watermark: bool = False,
) -> Result[list[W]]:
    """Apply the most-frequent filter and then squashing, as requested."""
    result: Result[list[W]] = Result.success(list(watermarks))
    if single_watermark:
        result = most_frequent(watermarks)
    if squash_copies and result.value is not None:
        result = result.with_value(squash(result.value))
    return result
