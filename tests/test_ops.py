"""
Tests for kernel ops: MASK, ROTATE, REVERSE on fixed-width ints.
"""

import pytest

from correlbit.kernel.ops import (
    all_ones,
    mask_bits,
    cyclic_left_shift,
    cyclic_right_shift,
    reverse_bits,
    popcount,
    bits_disjoint,
)


def test_all_ones():
    assert all_ones(0) == 0
    assert all_ones(1) == 1
    assert all_ones(5) == 0b11111
    with pytest.raises(ValueError):
        all_ones(-1)


def test_mask_drops_high_bits():
    assert mask_bits(0b10110, 3) == 0b110
    assert mask_bits(0b10110, 0) == 0
    assert mask_bits(1 << 200 | 5, 8) == 5


def test_mask_negative_inputs_never_negative():
    assert mask_bits(-1, 4) == 0b1111
    assert mask_bits(-2, 3) == 0b110
    for n in range(0, 12):
        for v in (-1, -7, -(1 << 40)):
            m = mask_bits(v, n)
            assert 0 <= m < (1 << n) or (n == 0 and m == 0)


def test_cyclic_right_shift_wraps_low_bit():
    assert cyclic_right_shift(0b001, 3, 1) == 0b100
    assert cyclic_right_shift(0b011, 3, 1) == 0b101
    assert cyclic_right_shift(0b101, 3, 1) == 0b110


def test_cyclic_left_shift_wraps_high_bit():
    assert cyclic_left_shift(0b100, 3, 1) == 0b001
    assert cyclic_left_shift(0b0110, 4, 2) == 0b1001


def test_cyclic_shift_k_modulo_n():
    v, n = 0b10110, 5
    assert cyclic_right_shift(v, n, 0) == v
    assert cyclic_right_shift(v, n, n) == v
    assert cyclic_right_shift(v, n, 7) == cyclic_right_shift(v, n, 2)
    assert cyclic_left_shift(v, n, 12) == cyclic_left_shift(v, n, 2)


def test_left_right_inverse():
    v, n = 0b1100101, 7
    for k in range(n + 2):
        assert cyclic_left_shift(cyclic_right_shift(v, n, k), n, k) == v


def test_cyclic_shift_zero_width():
    assert cyclic_right_shift(0, 0, 3) == 0
    assert cyclic_left_shift(0, 0, 3) == 0


def test_reverse_bits():
    assert reverse_bits(0b0011, 4) == 0b1100
    assert reverse_bits(0b0011, 5) == 0b11000
    assert reverse_bits(0b1, 1) == 0b1
    assert reverse_bits(0, 0) == 0


def test_reverse_involution():
    n = 9
    for v in (0, 1, 0b101100101, 0b111111111, 0b100000000):
        assert reverse_bits(reverse_bits(v, n), n) == v


def test_popcount_and_disjoint():
    assert popcount(0) == 0
    assert popcount(0b1011) == 3
    assert bits_disjoint(0b1010, 0b0101)
    assert not bits_disjoint(0b1010, 0b0010)
