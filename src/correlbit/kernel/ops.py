"""
Kernel Ops: MASK, ROTATE, REVERSE on fixed-width integers

Pure functions over (value, n) pairs, where value holds the n
least-significant bits of a bit sequence. Bit j is position j; bit n-1 is
the most significant and is rendered first.

All results are masked to n bits. n == 0 is always legal and yields 0.
"""


# ============================================================================
# MASK
# ============================================================================

def all_ones(n: int) -> int:
    """
    Return 2^n - 1 (n ones).

    Raises:
        ValueError: If n is negative.
    """
    if n < 0:
        raise ValueError(f"Bit width must be non-negative, got {n}")
    return (1 << n) - 1


def mask_bits(value: int, n: int) -> int:
    """
    Keep the n low bits of value.

    Python ints are two's-complement for bitwise ops, so a negative value
    contributes only its low n bits and never leaks a sign.

    Examples:
        >>> mask_bits(0b10110, 3)
        6
        >>> mask_bits(-1, 4)
        15
    """
    return value & all_ones(n)


# ============================================================================
# ROTATE (cyclic; wraps within n bits)
# ============================================================================

def cyclic_left_shift(value: int, n: int, k: int) -> int:
    """
    Rotate the n-bit pattern of value left by k positions.

    Bits leaving at position n-1 re-enter at position 0. k is taken modulo n.

    Edge case:
        n == 0 returns 0.
    """
    if n == 0:
        return 0
    k %= n
    value = mask_bits(value, n)
    return ((value << k) | (value >> (n - k))) & all_ones(n)


def cyclic_right_shift(value: int, n: int, k: int) -> int:
    """
    Rotate the n-bit pattern of value right by k positions.

    Bits leaving at position 0 re-enter at position n-1.

    Examples:
        >>> cyclic_right_shift(0b001, 3, 1)
        4
    """
    if n == 0:
        return 0
    return cyclic_left_shift(value, n, n - (k % n))


# ============================================================================
# REVERSE
# ============================================================================

def reverse_bits(value: int, n: int) -> int:
    """
    Mirror the n-bit pattern: bit i moves to bit n-1-i.

    Examples:
        >>> reverse_bits(0b0011, 4)
        12
    """
    out = 0
    for i in range(n):
        if (value >> i) & 1:
            out |= 1 << (n - 1 - i)
    return out


# ============================================================================
# BITWISE
# ============================================================================

def popcount(value: int) -> int:
    """Number of set bits in a non-negative int."""
    return bin(value).count('1')


def bits_disjoint(a: int, b: int) -> bool:
    """True iff a and b have no set bit in common."""
    return (a & b) == 0
