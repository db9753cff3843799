"""Error correction for QR Codes: capacity tables, Reed-Solomon and block interleaving."""

from __future__ import annotations

from enum import IntEnum
from typing import Sequence

from blockclock.qrsegment import VERSION_MAX, VERSION_MIN

REED_SOLOMON_DEGREE_MAX = 30
"""Largest number of ECC codewords in one block, per the tables below."""


class Ecc(IntEnum):
    """Error correction level, in ascending order of protection."""

    LOW = 0  # tolerates about 7% erroneous codewords
    MEDIUM = 1  # about 15%
    QUARTILE = 2  # about 25%
    HIGH = 3  # about 30%

    @property
    def format_bits(self) -> int:
        """The two-bit value this level takes in the format information."""
        return (1, 0, 3, 2)[self]


# Index 0 of each row is padding; versions run from 1 to 40.
_ECC_CODEWORDS_PER_BLOCK = (
    (-1, 7, 10, 15, 20, 26, 18, 20, 24, 30, 18, 20, 24, 26, 30, 22, 24, 28, 30, 28, 28,
     28, 28, 30, 30, 26, 28, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30),
    (-1, 10, 16, 26, 18, 24, 16, 18, 22, 22, 26, 30, 22, 22, 24, 24, 28, 28, 26, 26, 26,
     26, 28, 28, 28, 28, 28, 28, 28, 28, 28, 28, 28, 28, 28, 28, 28, 28, 28, 28, 28),
    (-1, 13, 22, 18, 26, 18, 24, 18, 22, 20, 24, 28, 26, 24, 20, 30, 24, 28, 28, 26, 30,
     28, 30, 30, 30, 30, 28, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30),
    (-1, 17, 28, 22, 16, 22, 28, 26, 26, 24, 28, 24, 28, 22, 24, 24, 30, 28, 28, 26, 28,
     30, 24, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30),
)

_NUM_ERROR_CORRECTION_BLOCKS = (
    (-1, 1, 1, 1, 1, 1, 2, 2, 2, 2, 4, 4, 4, 4, 4, 6, 6, 6, 6, 7, 8,
     8, 9, 9, 10, 12, 12, 12, 13, 14, 15, 16, 17, 18, 19, 19, 20, 21, 22, 24, 25),
    (-1, 1, 1, 1, 2, 2, 4, 4, 4, 5, 5, 5, 8, 9, 9, 10, 10, 11, 13, 14, 16,
     17, 17, 18, 20, 21, 23, 25, 26, 28, 29, 31, 33, 35, 37, 38, 40, 43, 45, 47, 49),
    (-1, 1, 1, 2, 2, 4, 4, 6, 6, 8, 8, 8, 10, 12, 16, 12, 17, 16, 18, 21, 20,
     23, 23, 25, 27, 29, 34, 34, 35, 38, 40, 43, 45, 48, 51, 53, 56, 59, 62, 65, 68),
    (-1, 1, 1, 2, 4, 4, 4, 5, 6, 8, 8, 11, 11, 16, 16, 18, 16, 19, 21, 25, 25,
     25, 34, 30, 32, 35, 37, 40, 42, 45, 48, 51, 54, 57, 60, 63, 66, 70, 74, 77, 81),
)


def _check_version(version: int) -> None:
    if not VERSION_MIN <= version <= VERSION_MAX:
        raise ValueError(f"version must be between {VERSION_MIN} and {VERSION_MAX}")


def num_raw_data_modules(version: int) -> int:
    """Return the data bits a symbol of ``version`` holds once function modules are excluded.

    Includes remainder bits, so the result need not be a multiple of 8.
    """
    _check_version(version)
    result = (16 * version + 128) * version + 64
    if version >= 2:
        num_align = version // 7 + 2
        result -= (25 * num_align - 10) * num_align - 55
        if version >= 7:
            result -= 36
    return result


def num_data_codewords(version: int, ecl: Ecc) -> int:
    """Return the number of 8-bit data codewords (not ECC) for ``version`` at ``ecl``."""
    ecl = Ecc(ecl)
    return (
        num_raw_data_modules(version) // 8
        - _ECC_CODEWORDS_PER_BLOCK[ecl][version] * _NUM_ERROR_CORRECTION_BLOCKS[ecl][version]
    )


def reed_solomon_multiply(x: int, y: int) -> int:
    """Return the product of two elements of GF(2^8) modulo 0x11D."""
    if not (0 <= x <= 0xFF and 0 <= y <= 0xFF):
        raise ValueError("field elements must be in the range 0-255")
    z = 0
    for i in reversed(range(8)):
        z = ((z << 1) ^ ((z >> 7) * 0x11D)) & 0xFF
        z ^= ((y >> i) & 1) * x
    return z


def reed_solomon_divisor(degree: int) -> bytes:
    """Return the generator polynomial of ``degree``, highest power first, leading 1 omitted."""
    if not 1 <= degree <= REED_SOLOMON_DEGREE_MAX:
        raise ValueError(f"degree must be between 1 and {REED_SOLOMON_DEGREE_MAX}")
    result = [0] * degree
    result[-1] = 1
    root = 1
    # Multiply by (x - r^i) for each i, where r = 0x02 generates the field.
    for _ in range(degree):
        for j in range(degree):
            result[j] = reed_solomon_multiply(result[j], root)
            if j + 1 < degree:
                result[j] ^= result[j + 1]
        root = reed_solomon_multiply(root, 0x02)
    return bytes(result)


def reed_solomon_remainder(data: bytes | Sequence[int], divisor: bytes | Sequence[int]) -> bytes:
    """Return the ECC codewords: ``data`` times x^degree modulo the generator ``divisor``."""
    degree = len(divisor)
    if not 1 <= degree <= REED_SOLOMON_DEGREE_MAX:
        raise ValueError(f"divisor degree must be between 1 and {REED_SOLOMON_DEGREE_MAX}")
    result = [0] * degree
    for byte in data:
        factor = byte ^ result[0]
        result = result[1:] + [0]
        result = [r ^ reed_solomon_multiply(g, factor) for r, g in zip(result, divisor)]
    return bytes(result)


def add_ecc_and_interleave(data: bytes | Sequence[int], version: int, ecl: Ecc) -> bytes:
    """Split ``data`` into blocks, append ECC to each and interleave them into raw codewords."""
    ecl = Ecc(ecl)
    data = bytes(data)
    expected = num_data_codewords(version, ecl)
    if len(data) != expected:
        raise ValueError(f"expected {expected} data codewords, got {len(data)}")

    num_blocks = _NUM_ERROR_CORRECTION_BLOCKS[ecl][version]
    block_ecc_len = _ECC_CODEWORDS_PER_BLOCK[ecl][version]
    raw_codewords = num_raw_data_modules(version) // 8
    num_short_blocks = num_blocks - raw_codewords % num_blocks
    short_block_data_len = raw_codewords // num_blocks - block_ecc_len

    divisor = reed_solomon_divisor(block_ecc_len)
    blocks: list[bytes] = []
    eccs: list[bytes] = []
    pos = 0
    for i in range(num_blocks):
        length = short_block_data_len + (0 if i < num_short_blocks else 1)
        block = data[pos : pos + length]
        pos += length
        blocks.append(block)
        eccs.append(reed_solomon_remainder(block, divisor))

    result = bytearray()
    for j in range(short_block_data_len + 1):
        result.extend(block[j] for block in blocks if j < len(block))
    for j in range(block_ecc_len):
        result.extend(ecc[j] for ecc in eccs)
    return bytes(result)