"""How consecutive watermark copies are delimited inside a text."""
from __future__ import annotations

from collections.abc import Collection, Iterable, Iterator, Sequence
from dataclasses import dataclass

Span = tuple[int, int]


class SeparatorStrategy:
    separator_chars: tuple[str, ...] = ()

    def wrap(self, encoded: Iterable[str]) -> Iterator[str]:
        """Surround one encoded copy with the strategy's delimiters."""
        raise NotImplementedError

    def chunk_size(self, length: int) -> int:
        """Insert positions consumed by one copy of `length` characters."""
        return length

    def find_spans(
        self, text: str, insert_positions: Sequence[int], alphabet: Collection[str]
    ) -> list[Span]:
        """Half-open [start, stop) index ranges that each hold one copy."""
        raise NotImplementedError


@dataclass(frozen=True)
class SkipInsertPosition(SeparatorStrategy):
    """Leave one insert position unused after each copy."""

    @property
    def separator_chars(self) -> tuple[str, ...]:
        return ()

    def wrap(self, encoded: Iterable[str]) -> Iterator[str]:
        yield from encoded

    def chunk_size(self, length: int) -> int:
        return length + 1

    def find_spans(
        self, text: str, insert_positions: Sequence[int], alphabet: Collection[str]
    ) -> list[Span]:
        # An insert position still free after a non-alphabet char ends a copy
        spans: list[Span] = []
        last = 0
        for pos in insert_positions:
            if pos > 0 and text[pos - 1] not in alphabet:
                spans.append((last, pos))
                last = pos
        return spans


@dataclass(frozen=True)
class SingleSeparatorChar(SeparatorStrategy):
    """Close every copy with `char`; back-to-back copies share it."""

    char: str

    @property
    def separator_chars(self) -> tuple[str, ...]:
        return (self.char,)

    def wrap(self, encoded: Iterable[str]) -> Iterator[str]:
        yield from encoded
        yield self.char

    def find_spans(
        self, text: str, insert_positions: Sequence[int], alphabet: Collection[str]
    ) -> list[Span]:
        spans: list[Span] = []
        last = 0
        for pos, c in enumerate(text):
            if c == self.char:
                spans.append((last, pos))
                last = pos + 1
        return spans


@dataclass(frozen=True)
class StartEndSeparatorChars(SeparatorStrategy):
    """Open every copy with `start` and close it with `end`."""

    start: str
    end: str

    @property
    def separator_chars(self) -> tuple[str, ...]:
        return (self.start, self.end)

    def wrap(self, encoded: Iterable[str]) -> Iterator[str]:
        yield self.start
        yield from encoded
        yield self.end

    def find_spans(
        self, text: str, insert_positions: Sequence[int], alphabet: Collection[str]
    ) -> list[Span]:
        spans: list[Span] = []
        start: int | None = None
        last_end = -1
        for pos, c in enumerate(text):
            if c == self.start:
                start = pos + 1
            elif c == self.end:
                # Lone end: assume the copy began right after the previous end
                if start is None:
                    start = last_end + 1
                spans.append((start, pos))
                start = None
                last_end = pos
        return spans
