import copy

import pytest

from blockclock.qrecc import Ecc, add_ecc_and_interleave, num_data_codewords, num_raw_data_modules
from blockclock.qrmatrix import (
    Mask,
    alignment_pattern_positions,
    apply_mask,
    draw_codewords,
    draw_format_bits,
    draw_function_patterns,
    function_module_grid,
    penalty_score,
)


def _count_dark(grid, is_function=None):
    return sum(
        1
        for y, row in enumerate(grid)
        for x, dark in enumerate(row)
        if dark and (is_function is None or not is_function[y][x])
    )


def _built(version):
    is_function = function_module_grid(version)
    grid = function_module_grid(version)
    raw = num_raw_data_modules(version) // 8
    draw_codewords(grid, is_function, bytes((i * 37) & 0xFF for i in range(raw)))
    draw_function_patterns(grid, version)
    return grid, is_function


def test_alignment_positions_version_one_is_empty():
    assert alignment_pattern_positions(1) == ()


@pytest.mark.parametrize("version", range(2, 41))
def test_alignment_positions_shape(version):
    positions = alignment_pattern_positions(version)
    assert len(positions) == version // 7 + 2
    assert positions[0] == 6
    assert positions[-1] == version * 4 + 10
    assert list(positions) == sorted(set(positions))


@pytest.mark.parametrize("version", [0, 41])
def test_alignment_positions_rejects_bad_version(version):
    with pytest.raises(ValueError):
        alignment_pattern_positions(version)


@pytest.mark.parametrize("version", range(1, 41))
def test_function_grid_leaves_raw_data_modules(version):
    grid = function_module_grid(version)
    size = version * 4 + 17
    assert len(grid) == size
    assert all(len(row) == size for row in grid)
    assert size * size - _count_dark(grid) == num_raw_data_modules(version)


def test_function_patterns_timing_and_finders():
    version = 3
    grid = function_module_grid(version)
    draw_function_patterns(grid, version)
    size = len(grid)
    for i in range(8, size - 8):
        assert grid[6][i] == (i % 2 == 0)
        assert grid[i][6] == (i % 2 == 0)
    assert grid[3][3] and grid[0][0]
    assert not grid[1][1]
    assert not grid[7][7]
    assert grid[3][size - 4] and grid[size - 4][3]


def test_function_patterns_do_not_touch_data_modules():
    version = 7
    is_function = function_module_grid(version)
    grid = [[True] * len(row) for row in is_function]
    draw_function_patterns(grid, version)
    for y, row in enumerate(grid):
        for x, dark in enumerate(row):
            if not is_function[y][x]:
                assert dark


def test_version_blocks_are_mirrored():
    version = 10
    grid = function_module_grid(version)
    draw_function_patterns(grid, version)
    size = len(grid)
    for i in range(6):
        for k in range(size - 11, size - 8):
            assert grid[i][k] == grid[k][i]


def test_function_patterns_reject_mismatched_grid():
    with pytest.raises(ValueError):
        draw_function_patterns(function_module_grid(2), 3)


@pytest.mark.parametrize("mask", [m for m in Mask if m is not Mask.AUTO])
@pytest.mark.parametrize("ecl", list(Ecc))
def test_format_bits_copies_agree(ecl, mask):
    grid = function_module_grid(2)
    draw_format_bits(grid, ecl, mask)
    size = len(grid)
    first = [grid[i][8] for i in range(6)] + [grid[7][8], grid[8][8], grid[8][7]]
    first += [grid[8][14 - i] for i in range(9, 15)]
    second = [grid[8][size - 1 - i] for i in range(8)]
    second += [grid[size - 15 + i][8] for i in range(8, 15)]
    assert first == second
    assert grid[size - 8][8]


def test_format_bits_differ_between_masks():
    patterns = set()
    for mask in range(8):
        grid = function_module_grid(1)
        draw_format_bits(grid, Ecc.LOW, Mask(mask))
        patterns.add(tuple(map(tuple, grid)))
    assert len(patterns) == 8


def test_format_bits_reject_auto():
    with pytest.raises(ValueError):
        draw_format_bits(function_module_grid(1), Ecc.LOW, Mask.AUTO)


@pytest.mark.parametrize("version", [1, 2, 7])
def test_codewords_all_ones_fill_data_bits(version):
    is_function = function_module_grid(version)
    grid = function_module_grid(version)
    raw = num_raw_data_modules(version) // 8
    draw_codewords(grid, is_function, b"\xff" * raw)
    assert _count_dark(grid, is_function) == raw * 8


def test_codewords_dark_count_matches_popcount():
    version = 1
    is_function = function_module_grid(version)
    grid = function_module_grid(version)
    data = add_ecc_and_interleave(bytes(range(num_data_codewords(version, Ecc.LOW))), version, Ecc.LOW)
    draw_codewords(grid, is_function, data)
    assert _count_dark(grid, is_function) == sum(bin(b).count("1") for b in data)


def test_codewords_zero_leaves_data_light():
    is_function = function_module_grid(2)
    grid = [[True] * len(row) for row in is_function]
    draw_codewords(grid, is_function, bytes(num_raw_data_modules(2) // 8))
    assert _count_dark(grid, is_function) == 0


def test_codewords_too_long_rejected():
    is_function = function_module_grid(1)
    grid = function_module_grid(1)
    with pytest.raises(ValueError):
        draw_codewords(grid, is_function, bytes(num_raw_data_modules(1) // 8 + 1))


@pytest.mark.parametrize("mask", range(8))
def test_apply_mask_twice_is_identity(mask):
    grid, is_function = _built(2)
    original = copy.deepcopy(grid)
    apply_mask(grid, is_function, Mask(mask))
    assert grid != original
    apply_mask(grid, is_function, Mask(mask))
    assert grid == original


def test_apply_mask_keeps_function_modules():
    grid, is_function = _built(3)
    original = copy.deepcopy(grid)
    apply_mask(grid, is_function, Mask.MASK_5)
    for y, row in enumerate(grid):
        for x, dark in enumerate(row):
            if is_function[y][x]:
                assert dark == original[y][x]


def test_apply_mask_zero_on_blank_grid():
    size = 21
    grid = [[False] * size for _ in range(size)]
    blank = [[False] * size for _ in range(size)]
    apply_mask(grid, blank, Mask.MASK_0)
    for y in range(size):
        for x in range(size):
            assert grid[y][x] == ((x + y) % 2 == 0)


def test_apply_mask_rejects_auto():
    grid, is_function = _built(1)
    with pytest.raises(ValueError):
        apply_mask(grid, is_function, Mask.AUTO)


def test_penalty_transpose_invariant():
    grid, is_function = _built(4)
    apply_mask(grid, is_function, Mask.MASK_3)
    draw_format_bits(grid, Ecc.MEDIUM, Mask.MASK_3)
    transposed = [list(col) for col in zip(*grid)]
    assert penalty_score(grid) == penalty_score(transposed)
    assert penalty_score(grid) >= 0


def test_penalty_prefers_checkerboard_to_blank():
    size = 21
    blank = [[False] * size for _ in range(size)]
    checker = [[(x + y) % 2 == 0 for x in range(size)] for y in range(size)]
    assert penalty_score(blank) > penalty_score(checker)


def test_penalty_rejects_bad_grid():
    with pytest.raises(ValueError):
        penalty_score([[False] * 5 for _ in range(5)])