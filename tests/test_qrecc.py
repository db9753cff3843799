import pytest

from blockclock.qrecc import (
    Ecc,
    add_ecc_and_interleave,
    num_data_codewords,
    num_raw_data_modules,
    reed_solomon_divisor,
    reed_solomon_multiply,
    reed_solomon_remainder,
)


def test_raw_data_modules_bounds():
    assert num_raw_data_modules(1) == 208
    assert num_raw_data_modules(40) == 29648


def test_raw_data_modules_increase_with_version():
    values = [num_raw_data_modules(v) for v in range(1, 41)]
    assert values == sorted(values)
    assert len(set(values)) == 40


@pytest.mark.parametrize("version", [0, 41, -3])
def test_raw_data_modules_rejects_bad_version(version):
    with pytest.raises(ValueError):
        num_raw_data_modules(version)


def test_data_codewords_bounds():
    assert num_data_codewords(1, Ecc.HIGH) == 9
    assert num_data_codewords(40, Ecc.LOW) == 2956


@pytest.mark.parametrize("version", [1, 5, 10, 27, 40])
def test_data_codewords_decrease_with_level(version):
    counts = [num_data_codewords(version, ecl) for ecl in Ecc]
    assert counts == sorted(counts, reverse=True)
    assert all(c < num_raw_data_modules(version) // 8 for c in counts)


def test_ecc_format_bits():
    levels = list(Ecc)
    assert [e.format_bits for e in levels] == [1, 0, 3, 2]
    assert [num_data_codewords(1, e) for e in levels] == [19, 16, 13, 9]


def test_multiply_identities():
    for x in range(256):
        assert reed_solomon_multiply(x, 1) == x
        assert reed_solomon_multiply(x, 0) == 0


def test_multiply_commutes():
    for x in range(0, 256, 7):
        for y in range(0, 256, 11):
            assert reed_solomon_multiply(x, y) == reed_solomon_multiply(y, x)


def test_multiply_reduces_by_field_polynomial():
    assert reed_solomon_multiply(0x02, 0x80) == 0x1D


def test_multiply_rejects_out_of_range():
    with pytest.raises(ValueError):
        reed_solomon_multiply(256, 1)


def test_divisor_length_and_leading_behaviour():
    for degree in (1, 7, 10, 30):
        assert len(reed_solomon_divisor(degree)) == degree


@pytest.mark.parametrize("degree", [0, 31])
def test_divisor_rejects_bad_degree(degree):
    with pytest.raises(ValueError):
        reed_solomon_divisor(degree)


@pytest.mark.parametrize("degree", [7, 10, 17, 30])
def test_codeword_is_divisible_by_generator(degree):
    divisor = reed_solomon_divisor(degree)
    data = bytes((i * 37 + 5) & 0xFF for i in range(19))
    ecc = reed_solomon_remainder(data, divisor)
    assert len(ecc) == degree
    assert reed_solomon_remainder(data + ecc, divisor) == bytes(degree)


def test_remainder_of_zero_data_is_zero():
    divisor = reed_solomon_divisor(10)
    assert reed_solomon_remainder(bytes(16), divisor) == bytes(10)


def test_remainder_rejects_empty_divisor():
    with pytest.raises(ValueError):
        reed_solomon_remainder(b"abc", b"")


def test_interleave_single_block_appends_ecc():
    n = num_data_codewords(1, Ecc.LOW)
    data = bytes(range(n))
    result = add_ecc_and_interleave(data, 1, Ecc.LOW)
    assert len(result) == num_raw_data_modules(1) // 8
    ecc_len = len(result) - n
    assert result[:n] == data
    assert result[n:] == reed_solomon_remainder(data, reed_solomon_divisor(ecc_len))


@pytest.mark.parametrize("version,ecl", [(5, Ecc.QUARTILE), (10, Ecc.HIGH), (40, Ecc.MEDIUM)])
def test_interleave_keeps_data_bytes(version, ecl):
    n = num_data_codewords(version, ecl)
    data = bytes((i * 13 + 1) & 0xFF for i in range(n))
    result = add_ecc_and_interleave(data, version, ecl)
    assert len(result) == num_raw_data_modules(version) // 8
    assert sorted(result[:n]) == sorted(data)
    assert result[0] == data[0]


def test_interleave_rejects_wrong_length():
    n = num_data_codewords(3, Ecc.MEDIUM)
    with pytest.raises(ValueError):
        add_ecc_and_interleave(bytes(n + 1), 3, Ecc.MEDIUM)