"""
Kernel Component: BitSequence

Immutable fixed-length bit sequence with rotation/reversal bookkeeping.

Representation:
  - value: Python int holding exactly `length` significant bits
  - length: number of bits (>= 0)
  - provenance: how this sequence was reached from some reference
    sequence (net right rotations, reversed or not); display only

Identity:
  Equality, ordering and hashing use (length, value) only. Ordering is by
  length first, then value. Provenance is excluded from every comparison.

Invariant:
  0 <= value < 2^length, enforced on every construction.
"""

from dataclasses import dataclass, field
from typing import Iterator

from .ops import (
    mask_bits,
    cyclic_left_shift,
    cyclic_right_shift,
    reverse_bits,
    popcount,
    bits_disjoint,
)


@dataclass(frozen=True)
class Provenance:
    """Net right rotation count and reversal flag relative to a reference."""
    rotation: int = 0
    reversed: bool = False

    def is_identity(self) -> bool:
        return self.rotation == 0 and not self.reversed

    def annotation(self) -> str:
        """Suffix such as ' [rev>>2]', or '' for the identity."""
        if self.is_identity():
            return ""
        rev = "rev" if self.reversed else ""
        shift = "" if self.rotation == 0 else f">>{self.rotation}"
        return f" [{rev}{shift}]"


IDENTITY = Provenance()


@dataclass(frozen=True, order=True)
class BitSequence:
    """
    Fixed-length bit sequence.

    Construct with BitSequence.from_int(value, length). Direct construction
    also masks value to length bits.

    Raises:
        ValueError: If length is negative.
    """
    length: int
    value: int
    provenance: Provenance = field(default=IDENTITY, compare=False, repr=False)

    def __post_init__(self):
        if self.length < 0:
            raise ValueError(f"Length must be non-negative, got {self.length}")
        object.__setattr__(self, "value", mask_bits(self.value, self.length))

    @classmethod
    def from_int(cls, value: int, length: int) -> "BitSequence":
        """New sequence of the given length from the low `length` bits of value."""
        return cls(length, value)

    def _derive(self, value: int, rotation: int, reversed_: bool) -> "BitSequence":
        return BitSequence(self.length, value, Provenance(rotation, reversed_))

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def __str__(self) -> str:
        return self.bits() + self.provenance.annotation()

    def bits(self) -> str:
        """MSB-first bit string without provenance annotation."""
        if self.length == 0:
            return ""
        return format(self.value, f"0{self.length}b")

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def size(self) -> int:
        return self.length

    @property
    def rotation(self) -> int:
        return self.provenance.rotation

    @property
    def is_reversed(self) -> bool:
        return self.provenance.reversed

    def to_int(self) -> int:
        return self.value

    def bit_count(self) -> int:
        return popcount(self.value)

    def bit_length(self) -> int:
        return self.value.bit_length()

    def is_zero(self) -> bool:
        return self.value == 0

    def clear(self) -> "BitSequence":
        """Same bits, provenance reset to the identity."""
        return BitSequence(self.length, self.value)

    # ------------------------------------------------------------------
    # Transformations
    # ------------------------------------------------------------------

    def rotate_right(self, k: int) -> "BitSequence":
        """
        Cyclic right rotation by k (mod length).

        Provenance advances by one step per call, whatever k is.
        """
        n = self.length
        if n == 0:
            return self
        p = self.provenance
        return self._derive(
            cyclic_right_shift(self.value, n, k), (p.rotation + 1) % n, p.reversed
        )

    def rotate_left(self, k: int) -> "BitSequence":
        """
        Cyclic left rotation by k (mod length).

        Provenance steps back by one per call, whatever k is.
        """
        n = self.length
        if n == 0:
            return self
        p = self.provenance
        return self._derive(
            cyclic_left_shift(self.value, n, k), (n + p.rotation - 1) % n, p.reversed
        )

    def reverse(self) -> "BitSequence":
        """Bit i moves to bit length-1-i; reversal flag flips."""
        n = self.length
        if n == 0:
            return self
        p = self.provenance
        return self._derive(
            reverse_bits(self.value, n), (n - p.rotation) % n, not p.reversed
        )

    def concatenate(self, other: "BitSequence") -> "BitSequence":
        """self in the high bits, other in the low bits."""
        n = self.length + other.length
        return BitSequence(n, (self.value << other.length) | other.value)

    def disjoint(self, other: "BitSequence") -> bool:
        """True iff no set bit is shared. Lengths are not compared."""
        return bits_disjoint(self.value, other.value)

    # ------------------------------------------------------------------
    # Correlative property (see kernel.orbit)
    # ------------------------------------------------------------------

    def rotations(self) -> Iterator["BitSequence"]:
        from .orbit import rotations
        return rotations(self)

    def rotations_and_reversals(self) -> Iterator["BitSequence"]:
        from .orbit import rotations_and_reversals
        return rotations_and_reversals(self)

    def correlative(self) -> bool:
        from .orbit import is_correlative
        return is_correlative(self)

    def non_correlate(self) -> "BitSequence":
        from .orbit import non_correlate
        return non_correlate(self)

    def justification(self) -> str:
        from .orbit import justification
        return justification(self)


EMPTY = BitSequence(0, 0)
