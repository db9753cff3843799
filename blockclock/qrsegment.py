"""QR Code data segments: character modes, bit packing and length accounting."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Iterable, Iterator, Sequence

ALPHANUMERIC_CHARSET = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ $%*+-./:"
"""Characters allowed in alphanumeric mode; each maps to its index."""

MAX_BIT_LENGTH = 32767
"""Largest bit length a segment, or a whole set of segments, may have."""

VERSION_MIN = 1
VERSION_MAX = 40

_ALPHANUMERIC_INDEX = {ch: i for i, ch in enumerate(ALPHANUMERIC_CHARSET)}


class Mode(IntEnum):
    """How a segment's data bits are interpreted; the value is the mode indicator."""

    NUMERIC = 0x1
    ALPHANUMERIC = 0x2
    BYTE = 0x4
    KANJI = 0x8
    ECI = 0x7


_CHAR_COUNT_BITS = {
    Mode.NUMERIC: (10, 12, 14),
    Mode.ALPHANUMERIC: (9, 11, 13),
    Mode.BYTE: (8, 16, 16),
    Mode.KANJI: (8, 10, 12),
    Mode.ECI: (0, 0, 0),
}


@dataclass(frozen=True)
class Segment:
    """A run of data in one mode, its bits packed big endian into ``data``."""

    mode: Mode
    num_chars: int
    data: bytes
    bit_length: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "mode", Mode(self.mode))
        object.__setattr__(self, "data", bytes(self.data))
        if self.num_chars < 0:
            raise ValueError("character count must not be negative")
        if not 0 <= self.bit_length <= MAX_BIT_LENGTH:
            raise ValueError("bit length out of range")
        if self.bit_length > len(self.data) * 8:
            raise ValueError("bit length exceeds the data buffer")

    def bits(self) -> Iterator[int]:
        """Yield the segment's data bits, most significant first."""
        for i in range(self.bit_length):
            yield (self.data[i >> 3] >> (7 - (i & 7))) & 1


class _BitWriter:
    def __init__(self) -> None:
        self._bits: list[int] = []

    def append(self, value: int, count: int) -> None:
        if not 0 <= count <= 16 or value < 0 or value >> count:
            raise ValueError("value does not fit in the given number of bits")
        self._bits.extend((value >> i) & 1 for i in reversed(range(count)))

    def __len__(self) -> int:
        return len(self._bits)

    def to_bytes(self) -> bytes:
        out = bytearray((len(self._bits) + 7) // 8)
        for i, bit in enumerate(self._bits):
            if bit:
                out[i >> 3] |= 0x80 >> (i & 7)
        return bytes(out)


def is_numeric(text: str) -> bool:
    """Return True if every character of ``text`` is a decimal digit 0-9."""
    return all("0" <= ch <= "9" for ch in text)


def is_alphanumeric(text: str) -> bool:
    """Return True if every character of ``text`` is in the alphanumeric set."""
    return all(ch in _ALPHANUMERIC_INDEX for ch in text)


def segment_bit_length(mode: Mode, num_chars: int) -> int:
    """Return the data bits needed for ``num_chars`` characters in ``mode``.

    For ECI mode ``num_chars`` must be 0 and the worst case is returned.
    Raises ValueError when the result would exceed 32767 bits.
    """
    mode = Mode(mode)
    if num_chars < 0:
        raise ValueError("character count must not be negative")
    if num_chars > MAX_BIT_LENGTH:
        raise ValueError("too many characters for a segment")
    if mode is Mode.NUMERIC:
        result = (num_chars * 10 + 2) // 3
    elif mode is Mode.ALPHANUMERIC:
        result = (num_chars * 11 + 1) // 2
    elif mode is Mode.BYTE:
        result = num_chars * 8
    elif mode is Mode.KANJI:
        result = num_chars * 13
    elif num_chars == 0:
        result = 3 * 8
    else:
        raise ValueError("an ECI segment has no characters")
    if result > MAX_BIT_LENGTH:
        raise ValueError("segment data too long")
    return result


def segment_buffer_size(mode: Mode, num_chars: int) -> int:
    """Return the number of bytes needed to hold such a segment's data."""
    return (segment_bit_length(mode, num_chars) + 7) // 8


def make_bytes(data: bytes | bytearray | Iterable[int]) -> Segment:
    """Return a byte-mode segment holding ``data`` unchanged."""
    payload = bytes(data)
    bit_length = segment_bit_length(Mode.BYTE, len(payload))
    return Segment(Mode.BYTE, len(payload), payload, bit_length)


def make_numeric(digits: str) -> Segment:
    """Return a numeric-mode segment for a string of decimal digits."""
    if not is_numeric(digits):
        raise ValueError("numeric segment accepts only digits 0-9")
    expected = segment_bit_length(Mode.NUMERIC, len(digits))
    writer = _BitWriter()
    for start in range(0, len(digits), 3):
        chunk = digits[start : start + 3]
        writer.append(int(chunk), len(chunk) * 3 + 1)
    assert len(writer) == expected
    return Segment(Mode.NUMERIC, len(digits), writer.to_bytes(), len(writer))


def make_alphanumeric(text: str) -> Segment:
    """Return an alphanumeric-mode segment for ``text``."""
    if not is_alphanumeric(text):
        raise ValueError("text contains characters outside the alphanumeric set")
    expected = segment_bit_length(Mode.ALPHANUMERIC, len(text))
    writer = _BitWriter()
    for start in range(0, len(text), 2):
        pair = text[start : start + 2]
        if len(pair) == 2:
            value = _ALPHANUMERIC_INDEX[pair[0]] * 45 + _ALPHANUMERIC_INDEX[pair[1]]
            writer.append(value, 11)
        else:
            writer.append(_ALPHANUMERIC_INDEX[pair], 6)
    assert len(writer) == expected
    return Segment(Mode.ALPHANUMERIC, len(text), writer.to_bytes(), len(writer))


def make_eci(assign_val: int) -> Segment:
    """Return an Extended Channel Interpretation designator segment."""
    writer = _BitWriter()
    if assign_val < 0:
        raise ValueError("ECI assignment value must not be negative")
    if assign_val < (1 << 7):
        writer.append(assign_val, 8)
    elif assign_val < (1 << 14):
        writer.append(2, 2)
        writer.append(assign_val, 14)
    elif assign_val < 1_000_000:
        writer.append(6, 3)
        writer.append(assign_val >> 10, 11)
        writer.append(assign_val & 0x3FF, 10)
    else:
        raise ValueError("ECI assignment value out of range")
    return Segment(Mode.ECI, 0, writer.to_bytes(), len(writer))


def char_count_bits(mode: Mode, version: int) -> int:
    """Return the width of the character count field for ``mode`` at ``version``."""
    if not VERSION_MIN <= version <= VERSION_MAX:
        raise ValueError("version out of range")
    return _CHAR_COUNT_BITS[Mode(mode)][(version + 7) // 17]


def total_bits(segs: Sequence[Segment], version: int) -> int | None:
    """Return the bits needed to encode ``segs`` at ``version``.

    Returns None when a segment's length does not fit its count field
    or the total exceeds 32767 bits.
    """
    result = 0
    for seg in segs:
        ccbits = char_count_bits(seg.mode, version)
        if seg.num_chars >= (1 << ccbits):
            return None
        result += 4 + ccbits + seg.bit_length
        if result > MAX_BIT_LENGTH:
            return None
    return result