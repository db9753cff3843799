"""QR Code encoding: version selection, data bit stream assembly, masking."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

from blockclock.qrecc import Ecc, add_ecc_and_interleave, num_data_codewords
from blockclock.qrmatrix import (
    Mask,
    apply_mask,
    draw_codewords,
    draw_format_bits,
    draw_function_patterns,
    function_module_grid,
    penalty_score,
)
from blockclock.qrsegment import (
    VERSION_MAX,
    VERSION_MIN,
    Mode,
    Segment,
    char_count_bits,
    is_alphanumeric,
    is_numeric,
    make_alphanumeric,
    make_bytes,
    make_numeric,
    segment_buffer_size,
    total_bits,
)

_PAD_BYTES = (0xEC, 0x11)


class DataTooLongError(ValueError):
    """Raised when the data does not fit any version in the allowed range."""


@dataclass(frozen=True)
class QrCode:
    """An encoded QR Code symbol; ``modules[y][x]`` is True for a dark module."""

    version: int
    ecl: Ecc
    mask: Mask
    modules: tuple[tuple[bool, ...], ...]

    @property
    def size(self) -> int:
        """Side length of the symbol in modules, between 21 and 177."""
        return len(self.modules)

    def get_module(self, x: int, y: int) -> bool:
        """Return True if the module at ``(x, y)`` is dark; out of bounds is light."""
        return 0 <= x < self.size and 0 <= y < self.size and self.modules[y][x]


def _buffer_len_for_version(version: int) -> int:
    size = version * 4 + 17
    return (size * size + 7) // 8 + 1


def _check_range(min_version: int, max_version: int) -> None:
    if not VERSION_MIN <= min_version <= max_version <= VERSION_MAX:
        raise ValueError(
            f"versions must satisfy {VERSION_MIN} <= min_version <= max_version <= {VERSION_MAX}"
        )


def encode_text(
    text: str,
    ecl: Ecc = Ecc.LOW,
    min_version: int = VERSION_MIN,
    max_version: int = VERSION_MAX,
    mask: Mask = Mask.AUTO,
    boost_ecl: bool = True,
) -> QrCode:
    """Encode ``text`` in numeric, alphanumeric or UTF-8 byte mode."""
    _check_range(min_version, max_version)
    if not text:
        return encode_segments_advanced([], ecl, min_version, max_version, mask, boost_ecl)

    buf_len = _buffer_len_for_version(max_version)
    if is_numeric(text):
        mode, payload_len = Mode.NUMERIC, len(text)
    elif is_alphanumeric(text):
        mode, payload_len = Mode.ALPHANUMERIC, len(text)
    else:
        payload = text.encode("utf-8")
        mode, payload_len = Mode.BYTE, len(payload)

    try:
        needed = segment_buffer_size(mode, payload_len)
    except ValueError:
        raise DataTooLongError("text too long for a QR Code") from None
    if needed > buf_len:
        raise DataTooLongError("text too long for the largest allowed version")

    if mode is Mode.NUMERIC:
        seg = make_numeric(text)
    elif mode is Mode.ALPHANUMERIC:
        seg = make_alphanumeric(text)
    else:
        seg = make_bytes(payload)
    return encode_segments_advanced([seg], ecl, min_version, max_version, mask, boost_ecl)


def encode_binary(
    data: bytes | bytearray | Iterable[int],
    ecl: Ecc = Ecc.LOW,
    min_version: int = VERSION_MIN,
    max_version: int = VERSION_MAX,
    mask: Mask = Mask.AUTO,
    boost_ecl: bool = True,
) -> QrCode:
    """Encode binary ``data`` in byte mode."""
    try:
        seg = make_bytes(data)
    except ValueError:
        raise DataTooLongError("data too long for a QR Code") from None
    return encode_segments_advanced([seg], ecl, min_version, max_version, mask, boost_ecl)


def encode_segments(segs: Sequence[Segment], ecl: Ecc = Ecc.LOW) -> QrCode:
    """Encode ``segs`` at the smallest version, choosing the mask and boosting ECC."""
    return encode_segments_advanced(segs, ecl, VERSION_MIN, VERSION_MAX, Mask.AUTO, True)


def _data_codewords(segs: Sequence[Segment], version: int, capacity_bits: int) -> bytes:
    bits: list[int] = []

    def append(value: int, count: int) -> None:
        bits.extend((value >> i) & 1 for i in reversed(range(count)))

    for seg in segs:
        append(int(seg.mode), 4)
        append(seg.num_chars, char_count_bits(seg.mode, version))
        bits.extend(seg.bits())

    append(0, min(4, capacity_bits - len(bits)))
    append(0, (8 - len(bits) % 8) % 8)
    pad = 0
    while len(bits) < capacity_bits:
        append(_PAD_BYTES[pad], 8)
        pad ^= 1

    out = bytearray(len(bits) // 8)
    for i, bit in enumerate(bits):
        if bit:
            out[i >> 3] |= 0x80 >> (i & 7)
    return bytes(out)


def encode_segments_advanced(
    segs: Sequence[Segment],
    ecl: Ecc = Ecc.LOW,
    min_version: int = VERSION_MIN,
    max_version: int = VERSION_MAX,
    mask: Mask = Mask.AUTO,
    boost_ecl: bool = True,
) -> QrCode:
    """Encode ``segs`` at the smallest version in range.

    Raises DataTooLongError if no version in the range can hold the data.
    """
    _check_range(min_version, max_version)
    ecl = Ecc(ecl)
    mask = Mask(mask)
    segs = list(segs)

    for version in range(min_version, max_version + 1):
        used = total_bits(segs, version)
        if used is not None and used <= num_data_codewords(version, ecl) * 8:
            break
    else:
        raise DataTooLongError("data does not fit any version in the given range")

    if boost_ecl:
        for candidate in (Ecc.MEDIUM, Ecc.QUARTILE, Ecc.HIGH):
            if used <= num_data_codewords(version, candidate) * 8:
                ecl = candidate

    capacity_bits = num_data_codewords(version, ecl) * 8
    data = _data_codewords(segs, version, capacity_bits)
    raw = add_ecc_and_interleave(data, version, ecl)

    is_function = function_module_grid(version)
    grid = [row[:] for row in is_function]
    draw_codewords(grid, is_function, raw)
    draw_function_patterns(grid, version)

    if mask is Mask.AUTO:
        best_penalty = None
        for candidate in list(Mask)[1:]:
            apply_mask(grid, is_function, candidate)
            draw_format_bits(grid, ecl, candidate)
            penalty = penalty_score(grid)
            if best_penalty is None or penalty < best_penalty:
                mask, best_penalty = candidate, penalty
            apply_mask(grid, is_function, candidate)

    apply_mask(grid, is_function, mask)
    draw_format_bits(grid, ecl, mask)
    return QrCode(version, ecl, mask, tuple(tuple(row) for row in grid))