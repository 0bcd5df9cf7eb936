"""
Kernel Component: Orbits and the Correlative Property

A sequence s of length n > 0 is correlative when it is non-zero and
s & r != 0 for every r in its orbit:

  rotations(s)               = s, s>>1, s>>2, ..., s>>(n-1)     (n terms)
  rotations_and_reversals(s) = rotations(s)[1:] + rotations(rev(s))
                                                             (2n-1 terms)

The orbit is walked one right rotation at a time, so each term carries its
provenance relative to s (e.g. "110 [rev>>2]").

Witness order is fixed: proper rotations first, then rotations of the
reversal starting with the reversal itself.
"""

from itertools import chain, islice
from typing import Iterator

from .bits import BitSequence, EMPTY


def rotations(s: BitSequence) -> Iterator[BitSequence]:
    """
    Yield s and its successive single-step right rotations, exactly
    s.length terms in total.

    Edge case:
        length 0 yields nothing.
    """
    r = s
    for _ in range(s.length):
        yield r
        r = r.rotate_right(1)


def rotations_and_reversals(s: BitSequence) -> Iterator[BitSequence]:
    """
    Yield the n-1 proper rotations of s, then the n rotations of its reversal.
    """
    return chain(islice(rotations(s), 1, None), rotations(s.reverse()))


def is_correlative(s: BitSequence) -> bool:
    """
    True iff s is non-zero and meets every term of its orbit.

    Examples:
        >>> is_correlative(BitSequence.from_int(0b011, 3))
        True
        >>> is_correlative(BitSequence.from_int(0b001, 3))
        False
    """
    if s.is_zero():
        return False
    return all(not s.disjoint(r) for r in rotations_and_reversals(s))


def non_correlate(s: BitSequence) -> BitSequence:
    """
    First orbit term disjoint from s, or EMPTY if there is none.

    Zero sequences return EMPTY.
    """
    if s.is_zero():
        return EMPTY
    for r in rotations_and_reversals(s):
        if s.disjoint(r):
            return r
    return EMPTY


def justification(s: BitSequence) -> str:
    """
    Human-readable proof of the verdict for s.

    Correlative: one "s / r OK" block per orbit term, blank line between.
    Otherwise: a single "s / witness NOT OK" block.
    """
    if is_correlative(s):
        return "\n".join(
            f"{s}\n{r} OK\n" for r in rotations_and_reversals(s)
        )
    return f"{s}\n{non_correlate(s)} NOT OK\n"
