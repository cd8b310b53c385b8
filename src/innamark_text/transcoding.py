"""Bytes <-> invisible characters, positional base-K over a fixed alphabet."""
from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence

from innamark_core.protocol import DEFAULT_ALPHABET
from innamark_core.status import Result, Status, WarningEvent

SOURCE = "AlphabetTranscoding"


class DecodingInvalidByteError(WarningEvent):
    def __init__(self, invalid_byte: int):
        super().__init__(f"{SOURCE}.decode")
        self.invalid_byte = invalid_byte

    def message(self) -> str:
        return f"Decoding produced an invalid byte: {self.invalid_byte}."


def digits_per_byte(base: int) -> int:
    """Number of base-`base` digits needed for values 0..255."""
    if base < 2:
        raise ValueError(f"Alphabet needs at least 2 characters, got {base}")
    digits = 1
    while base ** digits < 256:
        digits += 1
    return digits


class AlphabetTranscoding:
    """Encode each byte as a fixed number of alphabet characters.

    Digits are emitted least significant first.
    """

    def __init__(self, alphabet: Sequence[str] = DEFAULT_ALPHABET):
        if len(set(alphabet)) != len(alphabet):
            raise ValueError("Alphabet characters must be unique")
        self.alphabet: tuple[str, ...] = tuple(alphabet)
        self.base = len(self.alphabet)
        self.digits_per_byte = digits_per_byte(self.base)
        self._digit_value = {c: i for i, c in enumerate(self.alphabet)}

    def encode(self, data: bytes) -> Iterator[str]:
        for byte in data:
            for _ in range(self.digits_per_byte):
                byte, digit = divmod(byte, self.base)
                yield self.alphabet[digit]

    def decode(self, chars: Iterable[str]) -> Result[bytes]:
        """Decode alphabet characters back into bytes.

        Chunks decoding to a value above 255 are dropped with a warning. A
        trailing chunk with too few digits is not a byte and is dropped.
        """
        status = Status.success()
        out = bytearray()
        chunk: list[int] = []

        for c in chars:
            try:
                chunk.append(self._digit_value[c])
            except KeyError:
                raise ValueError(f"Character {c!r} is not part of the alphabet") from None
            if len(chunk) < self.digits_per_byte:
                continue

            value = sum(d * self.base ** i for i, d in enumerate(chunk))
            chunk.clear()
            if value <= 0xFF:
                out.append(value)
            else:
                status.add_event(DecodingInvalidByteError(value))

        return status.into(bytes(out))

    def __repr__(self) -> str:
        return f"AlphabetTranscoding(base={self.base})"


DEFAULT_TRANSCODING = AlphabetTranscoding()
