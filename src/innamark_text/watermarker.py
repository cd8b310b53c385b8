"""Text steganography engine.

Watermark bytes are transcoded into invisible space characters that replace
insert positions (by default: every ordinary space) of a text. The text is
filled with as many copies as fit; copies are delimited by the configured
separator strategy so that interleaved watermarks can be told apart on
extraction.
"""
from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence

from innamark_core.aggregate import aggregate
from innamark_core.protocol import INSERT_CHAR, REPLACEMENT_CHAR, SEPARATOR_CHAR
from innamark_core.status import (
    ErrorEvent,
    Result,
    Status,
    SuccessEvent,
    WarningEvent,
)
from innamark_core.watermark import Watermark

from .carrier import TextCarrier
from .separators import SeparatorStrategy, SingleSeparatorChar, StartEndSeparatorChars
from .transcoding import DEFAULT_TRANSCODING, AlphabetTranscoding

SOURCE = "TextWatermarker"

Placement = Callable[[str], Iterable[int]]


def unicode_repr(char: str) -> str:
    return f"\\u{ord(char):04X}"


def _chars_list(chars: Iterable[str]) -> str:
    return "[" + ",".join(f"'{unicode_repr(c)}'" for c in chars) + "]"


class IncompleteWatermarkWarning(WarningEvent):
    def __init__(self):
        super().__init__(f"{SOURCE}.get_watermarks")

    def message(self) -> str:
        return "Could not restore a complete watermark!"


class OversizedWatermarkWarning(WarningEvent):
    def __init__(self, watermark_size: int, insertable_size: int):
        super().__init__(f"{SOURCE}.add_watermark")
        self.watermark_size = watermark_size
        self.insertable_size = insertable_size

    def message(self) -> str:
        return (
            f"Could only insert {self.insertable_size} of {self.watermark_size} characters "
            "from the Watermark into the text."
        )


class ContainsAlphabetCharsError(ErrorEvent):
    def __init__(self, chars: Sequence[str]):
        super().__init__(f"{SOURCE}.add_watermark")
        self.chars = list(chars)

    def message(self) -> str:
        return (
            "The text contains characters of the watermark transcoding alphabet. Adding a "
            "Watermark would potentially make the text unusable! Maybe the text already "
            "contains a watermark?\n\n"
            f"Contained Chars:\n{_chars_list(self.chars)}."
        )


class RemoveWatermarksGetProblemWarning(WarningEvent):
    def __init__(self):
        super().__init__(f"{SOURCE}.remove_watermarks")

    def message(self) -> str:
        return "There was a problem extracting the watermarks. They got removed anyways."


class AlphabetContainsSeparatorError(ErrorEvent):
    def __init__(self, chars: Sequence[str]):
        super().__init__(f"{SOURCE}.build")
        self.chars = list(chars)

    def message(self) -> str:
        return f"The alphabet contains separator char(s): {_chars_list(self.chars)}."


class InvalidSeparatorCharError(ErrorEvent):
    def __init__(self, separators: Sequence[str]):
        super().__init__(f"{SOURCE}.build")
        self.separators = list(separators)

    def message(self) -> str:
        return f"Separators must be exactly one char, got: {self.separators!r}."


class AddedWatermarkSuccess(SuccessEvent):
    def __init__(self, start_positions: Sequence[int]):
        super().__init__()
        self.start_positions = list(start_positions)

    def message(self) -> str:
        return (
            f"Added Watermark {len(self.start_positions)} times. "
            f"Positions: {self.start_positions}."
        )


def default_placement(text: str) -> list[int]:
    """Every ordinary space is an insert position."""
    return [i for i, c in enumerate(text) if c == INSERT_CHAR]


def _raw(watermark: Watermark | bytes | bytearray) -> bytes:
    if isinstance(watermark, Watermark):
        return watermark.raw
    return bytes(watermark)


class TextWatermarker:
    """Embed, extract and remove watermarks in text.

    - transcoding: maps bytes onto the invisible alphabet
    - separator_strategy: delimits consecutive copies
    - placement: yields the indices that may carry a watermark char
    """

    def __init__(
        self,
        transcoding: AlphabetTranscoding = DEFAULT_TRANSCODING,
        separator_strategy: SeparatorStrategy | None = None,
        placement: Placement = default_placement,
    ):
        if separator_strategy is None:
            separator_strategy = SingleSeparatorChar(SEPARATOR_CHAR)
        self.transcoding = transcoding
        self.separator_strategy = separator_strategy
        self.placement = placement

        # Every char that may be part of an embedded watermark
        self.full_alphabet: tuple[str, ...] = (
            tuple(separator_strategy.separator_chars) + transcoding.alphabet
        )
        self._full_set = frozenset(self.full_alphabet)
        self._transcoding_set = frozenset(transcoding.alphabet)

    @classmethod
    def build(
        cls,
        transcoding: AlphabetTranscoding = DEFAULT_TRANSCODING,
        separator_strategy: SeparatorStrategy | None = None,
        placement: Placement = default_placement,
    ) -> Result[TextWatermarker]:
        """Validate the configuration and create a TextWatermarker.

        Fails if a separator is not a single char or is part of the
        transcoding alphabet.
        """
        if separator_strategy is None:
            separator_strategy = SingleSeparatorChar(SEPARATOR_CHAR)

        malformed = [c for c in separator_strategy.separator_chars if len(c) != 1]
        if malformed:
            return InvalidSeparatorCharError(malformed).into_result()

        clashes = [c for c in separator_strategy.separator_chars if c in transcoding.alphabet]
        if isinstance(separator_strategy, StartEndSeparatorChars):
            if separator_strategy.start == separator_strategy.end:
                clashes.append(separator_strategy.start)
        if clashes:
            return AlphabetContainsSeparatorError(clashes).into_result()

        return Result.success(cls(transcoding, separator_strategy, placement))

    @classmethod
    def default(cls) -> TextWatermarker:
        return cls.build().value

    def insert_positions(self, text: str) -> list[int]:
        return list(self.placement(text))

    def separated_watermark(self, watermark: Watermark | bytes) -> list[str]:
        """Encoded watermark chars including its separators."""
        encoded = self.transcoding.encode(_raw(watermark))
        return list(self.separator_strategy.wrap(encoded))

    def get_minimum_insert_positions(self, watermark: Watermark | bytes) -> int:
        """Insert positions a text needs to carry one full copy."""
        return self.separator_strategy.chunk_size(len(self.separated_watermark(watermark)))

    def get_available_insert_positions(self, carrier: TextCarrier) -> int:
        return len(self.insert_positions(carrier.content))

    def contains_watermark(self, carrier: TextCarrier) -> bool:
        return any(c in self._full_set for c in carrier.content)

    def add_watermark(
        self, carrier: TextCarrier, watermark: Watermark | bytes
    ) -> Result[list[int]]:
        """Fill the carrier with copies of watermark.

        Returns the start position of every (possibly partial) copy.
        Errors if the text already contains chars of the full alphabet.
        Warns if not even one full copy fits; the copy is then cut short.
        """
        text = carrier.content
        if any(c in self._full_set for c in text):
            contained = [c for c in self.full_alphabet if c in text]
            return ContainsAlphabetCharsError(contained).into_result()

        positions = self.insert_positions(text)
        separated = self.separated_watermark(watermark)
        chunk = self.separator_strategy.chunk_size(len(separated))

        chars = list(text)
        start_positions: list[int] = []
        for i in range(0, len(positions), chunk):
            block = positions[i:i + chunk]
            start_positions.append(block[0])
            for pos, c in zip(block, separated):
                chars[pos] = c
        carrier.content = "".join(chars)

        if len(positions) < chunk:
            warning = OversizedWatermarkWarning(chunk, len(positions))
            return warning.into_result(start_positions)

        return AddedWatermarkSuccess(start_positions).into_result(start_positions)

    def get_watermarks(
        self,
        carrier: TextCarrier,
        squash: bool = False,
        single_watermark: bool = False,
    ) -> Result[list[Watermark]]:
        """Decode every watermark copy found in the carrier.

        - squash: keep only distinct watermarks
        - single_watermark: keep only the most frequent watermark
        Without any delimited copy, the whole text is decoded as one
        watermark and an IncompleteWatermarkWarning is added.
        """
        text = carrier.content
        spans = self.separator_strategy.find_spans(
            text, self.insert_positions(text), self._transcoding_set
        )
        delimited = bool(spans)
        if not delimited:
            spans = [(0, len(text))]

        status = Status.success()
        watermarks: list[Watermark] = []
        found_content = False
        for start, stop in spans:
            content = [c for c in text[start:stop] if c in self._transcoding_set]
            if not content:
                continue
            found_content = True

            decoded = self.transcoding.decode(content)
            status.append_status(decoded.status)
            if decoded.value:
                watermarks.append(Watermark(decoded.value))

        if not delimited and found_content:
            status.add_event(IncompleteWatermarkWarning())

        result = aggregate(watermarks, squash_copies=squash, single_watermark=single_watermark)
        status.append_status(result.status)
        return status.into(result.value)

    def remove_watermarks(self, carrier: TextCarrier) -> Result[list[Watermark]]:
        """Replace every watermark char with a space and return what was found.

        Extraction problems never block the removal; they are downgraded to
        a RemoveWatermarksGetProblemWarning.
        """
        extracted = self.get_watermarks(carrier)
        status = extracted.status
        watermarks = extracted.value if extracted.value is not None else []

        carrier.content = "".join(
            REPLACEMENT_CHAR if c in self._full_set else c for c in carrier.content
        )

        if not status.is_success:
            status.add_event(RemoveWatermarksGetProblemWarning(), override_severity=True)

        return status.into(watermarks)
