"""
Tests for orbits and the correlative property.

Verifies:
  - Orbit sizes (n rotations, 2n-1 rotations and reversals) and order
  - Literal verdicts: 011 yes, 001 no (witness 100), zero no, "1" yes
  - Witness provenance rendering
  - Justification text for both verdicts
  - Verdict is constant across the rotation/reversal orbit
  - kernel_receipts() proofs on fixtures
"""

import pytest

from correlbit.kernel import (
    BitSequence,
    EMPTY,
    rotations,
    rotations_and_reversals,
    is_correlative,
    non_correlate,
    justification,
    kernel_receipts,
)
from correlbit.core import assert_double_run_equal, Receipts


def B(value, length):
    return BitSequence.from_int(value, length)


def test_rotations_count_and_order():
    s = B(0b011, 3)
    rots = list(rotations(s))
    assert [r.bits() for r in rots] == ["011", "101", "110"]
    assert [r.rotation for r in rots] == [0, 1, 2]


def test_rotations_and_reversals_order():
    s = B(0b011, 3)
    terms = [str(r) for r in rotations_and_reversals(s)]
    assert terms == [
        "101 [>>1]",
        "110 [>>2]",
        "110 [rev]",
        "011 [rev>>1]",
        "101 [rev>>2]",
    ]


def test_orbit_lengths():
    for n in range(1, 9):
        s = B(0b1, n)
        assert len(list(rotations(s))) == n
        assert len(list(rotations_and_reversals(s))) == 2 * n - 1


def test_orbit_of_empty_is_empty():
    assert list(rotations(EMPTY)) == []
    assert list(rotations_and_reversals(EMPTY)) == []


def test_orbit_is_restartable():
    s = B(0b0111, 4)
    assert list(s.rotations_and_reversals()) == list(s.rotations_and_reversals())


# ═══════════════════════════════════════════════════════════════════════
# Verdicts
# ═══════════════════════════════════════════════════════════════════════

def test_011_is_correlative():
    s = B(3, 3)
    assert s.correlative()
    assert is_correlative(s)
    assert s.non_correlate() == EMPTY


def test_001_is_not_correlative():
    s = B(1, 3)
    assert not s.correlative()
    w = s.non_correlate()
    assert w == B(0b100, 3)
    assert str(w) == "100 [>>1]"
    assert s.disjoint(w)


def test_zero_never_correlative():
    assert not B(0, 5).correlative()
    assert B(0, 5).non_correlate() == EMPTY
    assert not B(0, 1).correlative()
    assert not EMPTY.correlative()


def test_single_bit_length_one():
    assert B(1, 1).correlative()


def test_all_ones_correlative():
    for n in range(1, 12):
        assert B((1 << n) - 1, n).correlative()


def test_witness_from_reversal_side():
    # 1001100101 meets every translate but not 3 - S (reverse, then >>6)
    c = B(0b1001100101, 10)
    assert all(not c.disjoint(r) for r in list(rotations(c))[1:])
    w = c.non_correlate()
    assert w == B(0b0110011010, 10)
    assert str(w) == "0110011010 [rev>>6]"


def test_correlative_matches_brute_force_definition():
    # brute force over value-level rotations and reflections
    def brute(value, n):
        if value == 0:
            return False
        bits = {i for i in range(n) if (value >> i) & 1}
        for t in range(1, n):
            if not bits & {(i + t) % n for i in bits}:
                return False
        for t in range(n):
            if not bits & {(t - i) % n for i in bits}:
                return False
        return True

    for n in range(1, 8):
        for value in range(1 << n):
            assert B(value, n).correlative() == brute(value, n), (value, n)


@pytest.mark.parametrize("value,n", [
    (0b0111, 4),
    (0b00111, 5),
    (0b001100101, 9),
    (0b0001011, 7),
])
def test_verdict_constant_across_orbit(value, n):
    s = B(value, n)
    verdict = s.correlative()
    for r in list(rotations(s)) + list(rotations(s.reverse())):
        assert r.correlative() == verdict


# ═══════════════════════════════════════════════════════════════════════
# Justification
# ═══════════════════════════════════════════════════════════════════════

def test_justification_correlative():
    text = justification(B(0b011, 3))
    assert text == (
        "011\n101 [>>1] OK\n\n"
        "011\n110 [>>2] OK\n\n"
        "011\n110 [rev] OK\n\n"
        "011\n011 [rev>>1] OK\n\n"
        "011\n101 [rev>>2] OK\n"
    )
    assert "NOT OK" not in text


def test_justification_not_correlative():
    assert B(0b001, 3).justification() == "001\n100 [>>1] NOT OK\n"


def test_justification_zero():
    assert B(0, 2).justification() == "00\n NOT OK\n"


# ═══════════════════════════════════════════════════════════════════════
# Kernel receipts
# ═══════════════════════════════════════════════════════════════════════

FIXTURES = [
    {"label": "empty", "value": 0, "length": 0},
    {"label": "one", "value": 1, "length": 1},
    {"label": "011", "value": 0b011, "length": 3},
    {"label": "001", "value": 0b001, "length": 3},
    {"label": "mixed_10", "value": 0b1001100101, "length": 10},
]


def test_kernel_receipts_proofs():
    digest = kernel_receipts("kernel-fixtures", FIXTURES)
    payload = digest["payload"]
    assert payload["all_ok"] is True

    by_label = {rec["label"]: rec for rec in payload["fixtures"]}
    assert by_label["empty"]["correlative"] is False
    assert by_label["one"]["correlative"] is True
    assert by_label["011"]["correlative"] is True
    assert by_label["011"]["witness"] == ""
    assert by_label["001"]["witness"] == "100 [>>1]"
    assert by_label["mixed_10"]["witness"] == "0110011010 [rev>>6]"


def test_kernel_receipts_deterministic():
    def build():
        r = Receipts("kernel-double-run")
        r.put("digest", kernel_receipts("kernel-fixtures", FIXTURES)["section_hash"])
        return r

    assert_double_run_equal(build)
