"""
Kernel: bit sequences, orbits, correlative search

Components:
  - ops: MASK, ROTATE, REVERSE on fixed-width ints
  - bits: BitSequence value type with provenance
  - orbit: rotations, rotations_and_reversals, correlative predicate, witnesses
  - search: windowed enumeration of correlative sequences
"""

from .ops import (
    all_ones,
    mask_bits,
    cyclic_left_shift,
    cyclic_right_shift,
    reverse_bits,
    popcount,
    bits_disjoint
)
from .bits import (
    BitSequence,
    Provenance,
    IDENTITY,
    EMPTY
)
from .orbit import (
    rotations,
    rotations_and_reversals,
    is_correlative,
    non_correlate,
    justification
)
from .search import (
    SearchReceipt,
    candidate_window,
    correlative_sequences,
    minimal_correlative,
    search_receipts
)

__all__ = [
    # Ops
    "all_ones",
    "mask_bits",
    "cyclic_left_shift",
    "cyclic_right_shift",
    "reverse_bits",
    "popcount",
    "bits_disjoint",

    # Bits
    "BitSequence",
    "Provenance",
    "IDENTITY",
    "EMPTY",

    # Orbit
    "rotations",
    "rotations_and_reversals",
    "is_correlative",
    "non_correlate",
    "justification",

    # Search
    "SearchReceipt",
    "candidate_window",
    "correlative_sequences",
    "minimal_correlative",
    "search_receipts",

    # Receipts
    "kernel_receipts",
]


def kernel_receipts(section_label: str, fixtures: list[dict]) -> dict:
    """
    Generate receipts for kernel operations using fixed fixtures.

    Args:
        section_label: ASCII identifier (e.g., "kernel-fixtures").
        fixtures: List of dicts with keys:
            - "value": int
            - "length": int
            - "label": str (description)

    Returns:
        dict: Receipt digest with one proof record per fixture.
    """
    from ..core import Receipts, blake3_hash, serialize_bits_be

    receipts = Receipts(section_label)

    records = []
    for fix in fixtures:
        s = BitSequence.from_int(fix["value"], fix["length"])

        # reverse o reverse == id
        involution_ok = s.reverse().reverse() == s

        # n single-step rotations return to s
        r = s
        for _ in range(s.length):
            r = r.rotate_right(1)
        closure_ok = r == s

        # left undoes right
        inverse_ok = s.rotate_right(1).rotate_left(1) == s

        witness = non_correlate(s)

        records.append({
            "label": fix["label"],
            "bits": s.bits(),
            "bits_hash": blake3_hash(serialize_bits_be(s)),
            "reverse_involution_ok": involution_ok,
            "rotation_closure_ok": closure_ok,
            "rotation_inverse_ok": inverse_ok,
            "correlative": is_correlative(s),
            "witness": str(witness)
        })

    receipts.put("fixtures", records)
    receipts.put("all_ok", all(
        rec["reverse_involution_ok"] and rec["rotation_closure_ok"] and rec["rotation_inverse_ok"]
        for rec in records
    ))

    return receipts.digest()
