"""QR Code module grid: function patterns, codeword placement, masking and penalty scoring.

A grid is a square list of rows, ``grid[y][x]``, where True is a dark module.
"""

from __future__ import annotations

from collections import deque
from enum import IntEnum
from typing import Iterator, Sequence

from blockclock.qrecc import Ecc
from blockclock.qrsegment import VERSION_MAX, VERSION_MIN

Grid = list[list[bool]]

_PENALTY_N1 = 3
_PENALTY_N2 = 3
_PENALTY_N3 = 40
_PENALTY_N4 = 10

_SIZE_MIN = VERSION_MIN * 4 + 17
_SIZE_MAX = VERSION_MAX * 4 + 17


class Mask(IntEnum):
    """Mask pattern of a QR Code; AUTO asks the encoder to choose one."""

    AUTO = -1
    MASK_0 = 0
    MASK_1 = 1
    MASK_2 = 2
    MASK_3 = 3
    MASK_4 = 4
    MASK_5 = 5
    MASK_6 = 6
    MASK_7 = 7

    def inverts(self, x: int, y: int) -> bool:
        """Return True if this mask flips the module at ``(x, y)``."""
        if self is Mask.MASK_0:
            return (x + y) % 2 == 0
        if self is Mask.MASK_1:
            return y % 2 == 0
        if self is Mask.MASK_2:
            return x % 3 == 0
        if self is Mask.MASK_3:
            return (x + y) % 3 == 0
        if self is Mask.MASK_4:
            return (x // 3 + y // 2) % 2 == 0
        if self is Mask.MASK_5:
            return x * y % 2 + x * y % 3 == 0
        if self is Mask.MASK_6:
            return (x * y % 2 + x * y % 3) % 2 == 0
        if self is Mask.MASK_7:
            return ((x + y) % 2 + x * y % 3) % 2 == 0
        raise ValueError("AUTO is not a concrete mask pattern")


def _check_version(version: int) -> None:
    if not VERSION_MIN <= version <= VERSION_MAX:
        raise ValueError(f"version must be between {VERSION_MIN} and {VERSION_MAX}")


def _size(grid: Sequence[Sequence[bool]]) -> int:
    size = len(grid)
    if not _SIZE_MIN <= size <= _SIZE_MAX or any(len(row) != size for row in grid):
        raise ValueError("grid must be square with a side between 21 and 177")
    return size


def _concrete_mask(mask: Mask) -> Mask:
    mask = Mask(mask)
    if mask is Mask.AUTO:
        raise ValueError("a concrete mask pattern is required")
    return mask


def _set_unbounded(grid: Grid, x: int, y: int, dark: bool) -> None:
    size = len(grid)
    if 0 <= x < size and 0 <= y < size:
        grid[y][x] = dark


def _fill_rectangle(grid: Grid, left: int, top: int, width: int, height: int) -> None:
    for y in range(top, top + height):
        for x in range(left, left + width):
            grid[y][x] = True


def _alignment_centres(version: int) -> Iterator[tuple[int, int]]:
    positions = alignment_pattern_positions(version)
    last = len(positions) - 1
    for i, px in enumerate(positions):
        for j, py in enumerate(positions):
            # Skip the three finder corners.
            if (i, j) in ((0, 0), (0, last), (last, 0)):
                continue
            yield px, py


def alignment_pattern_positions(version: int) -> tuple[int, ...]:
    """Return the ascending alignment pattern coordinates used on both axes."""
    _check_version(version)
    if version == 1:
        return ()
    num_align = version // 7 + 2
    if version == 32:
        step = 26
    else:
        step = (version * 4 + num_align * 2 + 1) // (num_align * 2 - 2) * 2
    last = version * 4 + 10
    tail = [last - step * k for k in range(num_align - 1)]
    return (6, *reversed(tail))


def function_module_grid(version: int) -> Grid:
    """Return a grid of the version's size with every function module dark."""
    _check_version(version)
    size = version * 4 + 17
    grid = [[False] * size for _ in range(size)]

    _fill_rectangle(grid, 6, 0, 1, size)
    _fill_rectangle(grid, 0, 6, size, 1)

    _fill_rectangle(grid, 0, 0, 9, 9)
    _fill_rectangle(grid, size - 8, 0, 8, 9)
    _fill_rectangle(grid, 0, size - 8, 9, 8)

    for cx, cy in _alignment_centres(version):
        _fill_rectangle(grid, cx - 2, cy - 2, 5, 5)

    if version >= 7:
        _fill_rectangle(grid, size - 11, 0, 3, 6)
        _fill_rectangle(grid, 0, size - 11, 6, 3)
    return grid


def draw_function_patterns(grid: Grid, version: int) -> None:
    """Draw the light parts of the function patterns and the version blocks.

    Function modules must already be dark, as left by function_module_grid().
    Format bits are not drawn.
    """
    _check_version(version)
    size = _size(grid)
    if size != version * 4 + 17:
        raise ValueError("grid size does not match the version")

    for i in range(7, size - 7, 2):
        grid[i][6] = False
        grid[6][i] = False

    for dy in range(-4, 5):
        for dx in range(-4, 5):
            if max(abs(dx), abs(dy)) in (2, 4):
                _set_unbounded(grid, 3 + dx, 3 + dy, False)
                _set_unbounded(grid, size - 4 + dx, 3 + dy, False)
                _set_unbounded(grid, 3 + dx, size - 4 + dy, False)

    for cx, cy in _alignment_centres(version):
        for dy in range(-1, 2):
            for dx in range(-1, 2):
                grid[cy + dy][cx + dx] = dx == 0 and dy == 0

    if version >= 7:
        rem = version
        for _ in range(12):
            rem = (rem << 1) ^ ((rem >> 11) * 0x1F25)
        bits = version << 12 | rem
        for i in range(6):
            for j in range(3):
                k = size - 11 + j
                dark = bool(bits & 1)
                grid[i][k] = dark
                grid[k][i] = dark
                bits >>= 1


def draw_format_bits(grid: Grid, ecl: Ecc, mask: Mask) -> None:
    """Draw both copies of the format information for ``ecl`` and ``mask``."""
    mask = _concrete_mask(mask)
    ecl = Ecc(ecl)
    size = _size(grid)

    data = ecl.format_bits << 3 | int(mask)
    rem = data
    for _ in range(10):
        rem = (rem << 1) ^ ((rem >> 9) * 0x537)
    bits = (data << 10 | rem) ^ 0x5412

    def bit(i: int) -> bool:
        return (bits >> i) & 1 != 0

    for i in range(6):
        grid[i][8] = bit(i)
    grid[7][8] = bit(6)
    grid[8][8] = bit(7)
    grid[8][7] = bit(8)
    for i in range(9, 15):
        grid[8][14 - i] = bit(i)

    for i in range(8):
        grid[8][size - 1 - i] = bit(i)
    for i in range(8, 15):
        grid[size - 15 + i][8] = bit(i)
    grid[size - 8][8] = True


def _zigzag(size: int) -> Iterator[tuple[int, int]]:
    right = size - 1
    while right >= 1:
        if right == 6:
            right = 5
        upward = ((right + 1) & 2) == 0
        for vert in range(size):
            y = size - 1 - vert if upward else vert
            for x in (right, right - 1):
                yield x, y
        right -= 2


def draw_codewords(grid: Grid, is_function: Sequence[Sequence[bool]], data: bytes | Sequence[int]) -> None:
    """Place the raw codewords on the non-function modules in zigzag order.

    Remainder modules left over after the data are set light. Raises
    ValueError if the data does not fit.
    """
    size = _size(grid)
    if _size(is_function) != size:
        raise ValueError("function module map does not match the grid")
    data = bytes(data)
    slots = [(x, y) for x, y in _zigzag(size) if not is_function[y][x]]
    total = len(data) * 8
    if total > len(slots):
        raise ValueError("codewords do not fit in the grid")
    for i, (x, y) in enumerate(slots):
        grid[y][x] = i < total and (data[i >> 3] >> (7 - (i & 7))) & 1 == 1


def apply_mask(grid: Grid, is_function: Sequence[Sequence[bool]], mask: Mask) -> None:
    """XOR the non-function modules with ``mask``; applying it twice undoes it."""
    mask = _concrete_mask(mask)
    size = _size(grid)
    if _size(is_function) != size:
        raise ValueError("function module map does not match the grid")
    for y, (row, fixed) in enumerate(zip(grid, is_function)):
        for x in range(size):
            if not fixed[x] and mask.inverts(x, y):
                row[x] = not row[x]


def _add_history(run_length: int, history: deque[int], size: int) -> None:
    if history[0] == 0:
        run_length += size  # light border before the first run
    history.appendleft(run_length)


def _count_finder_patterns(history: deque[int]) -> int:
    n = history[1]
    core = (
        n > 0
        and history[2] == n
        and history[3] == n * 3
        and history[4] == n
        and history[5] == n
    )
    return int(core and history[0] >= n * 4 and history[6] >= n) + int(
        core and history[6] >= n * 4 and history[0] >= n
    )


def _line_penalty(line: Sequence[bool], size: int) -> int:
    result = 0
    run_color = False
    run_length = 0
    history: deque[int] = deque([0] * 7, maxlen=7)
    for color in line:
        if color == run_color:
            run_length += 1
            if run_length == 5:
                result += _PENALTY_N1
            elif run_length > 5:
                result += 1
        else:
            _add_history(run_length, history, size)
            if not run_color:
                result += _count_finder_patterns(history) * _PENALTY_N3
            run_color = color
            run_length = 1
    if run_color:
        _add_history(run_length, history, size)
        run_length = 0
    _add_history(run_length + size, history, size)  # light border after the last run
    result += _count_finder_patterns(history) * _PENALTY_N3
    return result


def penalty_score(grid: Sequence[Sequence[bool]]) -> int:
    """Return the mask-selection penalty score of the grid's current modules."""
    size = _size(grid)
    result = sum(_line_penalty(row, size) for row in grid)
    result += sum(_line_penalty(column, size) for column in zip(*grid))

    for upper, lower in zip(grid, grid[1:]):
        for x in range(size - 1):
            color = upper[x]
            if color == upper[x + 1] == lower[x] == lower[x + 1]:
                result += _PENALTY_N2

    dark = sum(sum(row) for row in grid)
    total = size * size
    k = (abs(dark * 20 - total * 10) + total - 1) // total - 1
    result += k * _PENALTY_N4
    return result