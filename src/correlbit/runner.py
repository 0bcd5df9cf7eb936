"""
Correlative Concatenation Runner

Question: if a and b are correlative, is a.b (concatenation) correlative?
Answer: not always. This runner finds the evidence.

Reports:
  - mins:  lexicographically minimal correlative sequence per length
  - first: first counterexample (a, b) plus a full justification
  - all:   every counterexample within the given length bounds

Each report comes with a sealed receipt section so runs can be compared by
hash (see run_with_determinism_check).
"""

import sys
from typing import Iterator, List, NamedTuple, Optional, Tuple

from .core import Receipts, blake3_hash, serialize_sequences_be
from .core.registry import param_registry
from .kernel import (
    BitSequence,
    EMPTY,
    correlative_sequences,
    minimal_correlative
)


class CounterExample(NamedTuple):
    """Correlative a and b whose concatenation a.b is not correlative."""
    a: BitSequence
    b: BitSequence

    @property
    def concatenation(self) -> BitSequence:
        return self.a.concatenate(self.b)

    @property
    def witness(self) -> BitSequence:
        return self.concatenation.non_correlate()


# ============================================================================
# Queries
# ============================================================================

def find_mins(n_lo: int, n_hi: int, k: Optional[int] = None) -> List[Tuple[int, BitSequence]]:
    """
    Minimal correlative sequence for each length in [n_lo, n_hi].

    Lengths where the window holds no correlative sequence map to EMPTY.
    k defaults to the registry's min_window.
    """
    if k is None:
        k = param_registry()["min_window"]
    return [(n, minimal_correlative(n, k)) for n in range(n_lo, n_hi + 1)]


def counter_examples(
    m_lo: int,
    m_hi: int,
    n_lo: int,
    n_hi: int,
    k: int
) -> Iterator[CounterExample]:
    """
    Lazily yield counterexamples to closure under concatenation.

    a ranges over correlative sequences of length m in [m_lo, m_hi], b over
    correlative sequences of length n in [n_lo, n_hi], both from windows of
    parameter k. Order: m, a, n, b.
    """
    for m in range(m_lo, m_hi + 1):
        for a in correlative_sequences(m, k):
            for n in range(n_lo, n_hi + 1):
                for b in correlative_sequences(n, k):
                    if not a.concatenate(b).correlative():
                        yield CounterExample(a, b)


def find_first_counter_example(
    m_lo: int,
    m_hi: int,
    n_lo: int,
    n_hi: int,
    k: int
) -> Optional[CounterExample]:
    """First counterexample in scan order, or None."""
    return next(counter_examples(m_lo, m_hi, n_lo, n_hi, k), None)


# ============================================================================
# Formatting
# ============================================================================

def format_mins(rows: List[Tuple[int, BitSequence]]) -> List[str]:
    return [f"min({n}) = {s}" for n, s in rows]


def format_counter_example(ce: CounterExample) -> str:
    a, b = ce.a, ce.b
    return f"a = {a} ({a.size}), b = {b} ({b.size}), c'= {ce.witness}"


def format_first_counter_example(ce: Optional[CounterExample]) -> str:
    """
    Pair, witness and the three justifications, or "Not found".
    """
    if ce is None:
        return "Not found"

    a, b, c = ce.a, ce.b, ce.concatenation
    parts = [
        f"a.b = {a}.{b}\nc'  = {c.non_correlate()}\n\nJustification\n\n",
        f"a\n{a.justification()}\n",
        f"b\n{b.justification()}\n",
        f"a.b\n{c.justification()}\n",
    ]
    return "".join(parts)


# ============================================================================
# Sessions
# ============================================================================

def run_mins(n_lo: int, n_hi: int, k: Optional[int] = None) -> Tuple[List[str], dict]:
    rows = find_mins(n_lo, n_hi, k)

    receipts = Receipts("mins")
    receipts.put("range", [n_lo, n_hi])
    receipts.put("k", param_registry()["min_window"] if k is None else k)
    receipts.put("mins", [s.bits() for _, s in rows])
    receipts.put("mins_hash", blake3_hash(serialize_sequences_be(s for _, s in rows)))
    receipts.put("empty_lengths", [n for n, s in rows if s == EMPTY])

    return format_mins(rows), receipts.digest()


def run_first(m_lo: int, m_hi: int, n_lo: int, n_hi: int, k: int) -> Tuple[List[str], dict]:
    ce = find_first_counter_example(m_lo, m_hi, n_lo, n_hi, k)

    receipts = Receipts("first-counterexample")
    receipts.put("bounds", [m_lo, m_hi, n_lo, n_hi])
    receipts.put("k", k)
    receipts.put("found", ce is not None)
    if ce is not None:
        receipts.put("a", ce.a.bits())
        receipts.put("b", ce.b.bits())
        receipts.put("witness", str(ce.witness))

    return [format_first_counter_example(ce)], receipts.digest()


def run_all(m_lo: int, m_hi: int, n_lo: int, n_hi: int, k: int) -> Tuple[List[str], dict]:
    found = list(counter_examples(m_lo, m_hi, n_lo, n_hi, k))

    receipts = Receipts("counterexamples")
    receipts.put("bounds", [m_lo, m_hi, n_lo, n_hi])
    receipts.put("k", k)
    receipts.put("count", len(found))
    receipts.put("pairs", [[ce.a.bits(), ce.b.bits()] for ce in found])

    return [format_counter_example(ce) for ce in found], receipts.digest()


def run(
    mins_range: Tuple[int, int] = (1, 30),
    first_bounds: Tuple[int, int, int, int, int] = (1, 1, 1, 9, 3),
    all_bounds: Tuple[int, int, int, int, int] = (1, 1, 1, 9, 100)
) -> Tuple[List[str], dict]:
    """
    Full session: minima, first counterexample, then all counterexamples.

    Returns:
        (lines, receipts): report lines and receipts keyed by section.
    """
    lines = []
    receipts = {}

    for section, (out, digest) in (
        ("mins", run_mins(*mins_range)),
        ("first", run_first(*first_bounds)),
        ("all", run_all(*all_bounds)),
    ):
        lines.extend(out)
        receipts[section] = digest

    return lines, receipts


def run_with_determinism_check(runner, *args) -> Tuple[List[str], dict]:
    """
    Call runner(*args) twice and verify identical output and section hashes.

    runner is one of run, run_mins, run_first, run_all.

    Raises:
        RuntimeError: If lines or any section hash differ between runs.
    """
    lines1, receipts1 = runner(*args)
    lines2, receipts2 = runner(*args)

    if lines1 != lines2:
        raise RuntimeError("Determinism check failed: report lines differ")

    sections1 = _section_hashes(receipts1)
    sections2 = _section_hashes(receipts2)

    for key in sorted(set(sections1) | set(sections2)):
        if key not in sections1:
            raise RuntimeError(f"Determinism check failed: section '{key}' missing in run 1")
        if key not in sections2:
            raise RuntimeError(f"Determinism check failed: section '{key}' missing in run 2")
        if sections1[key] != sections2[key]:
            raise RuntimeError(
                f"Determinism check failed: section '{key}' differs\n"
                f"  Run 1: {sections1[key]}\n"
                f"  Run 2: {sections2[key]}"
            )

    return lines1, {
        "sections": receipts1,
        "determinism.double_run_ok": True,
        "determinism.sections_checked": len(sections1),
    }


def _section_hashes(receipts: dict) -> dict:
    # single digest or {section: digest}
    if "section_hash" in receipts:
        return {receipts["section"]: receipts["section_hash"]}
    return {name: d["section_hash"] for name, d in receipts.items()}


# ============================================================================
# CLI Entry Point
# ============================================================================

def main(argv=None) -> int:
    import argparse
    import json

    parser = argparse.ArgumentParser(
        prog="correlbit",
        description="Correlative bit sequences and concatenation counterexamples",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Minimal correlative sequences for lengths 1..30
  correlbit mins 1 30

  # First counterexample with |a| in 1..1, |b| in 1..9, window k=3
  correlbit first 1 1 1 9 --window 3

  # All counterexamples, wide window
  correlbit all 1 1 1 9 --window 100

  # Default session, receipts to file, double-run check
  correlbit session --receipts receipts.json --determinism-check

Set DEBUG_SEARCH=1 to trace every candidate on stderr.
        """
    )

    parser.add_argument(
        "--receipts",
        type=str,
        default=None,
        help="Write receipts JSON to this file. Default: not written."
    )
    parser.add_argument(
        "--determinism-check",
        action="store_true",
        help="Run twice and compare section hashes. Default: False."
    )

    sub = parser.add_subparsers(dest="command", required=True)

    p_mins = sub.add_parser("mins", help="Minimal correlative sequence per length")
    p_mins.add_argument("n_lo", type=int)
    p_mins.add_argument("n_hi", type=int)
    p_mins.add_argument("--window", type=int, default=None,
                        help="Window parameter k. Default: registry min_window.")

    for name, help_text, default_k in (
        ("first", "First counterexample with justification", 3),
        ("all", "All counterexamples in the bounds", 100),
    ):
        p = sub.add_parser(name, help=help_text)
        p.add_argument("m_lo", type=int)
        p.add_argument("m_hi", type=int)
        p.add_argument("n_lo", type=int)
        p.add_argument("n_hi", type=int)
        p.add_argument("--window", type=int, default=default_k,
                       help=f"Window parameter k. Default: {default_k}.")

    sub.add_parser("session", help="mins 1..30, first (1,1,1,9,3), all (1,1,1,9,100)")

    args = parser.parse_args(argv)

    if args.command == "mins":
        bounds = [args.n_lo, args.n_hi]
        runner, run_args = run_mins, (args.n_lo, args.n_hi, args.window)
    elif args.command == "first":
        bounds = [args.m_lo, args.m_hi, args.n_lo, args.n_hi]
        runner, run_args = run_first, (*bounds, args.window)
    elif args.command == "all":
        bounds = [args.m_lo, args.m_hi, args.n_lo, args.n_hi]
        runner, run_args = run_all, (*bounds, args.window)
    else:
        bounds = []
        runner, run_args = run, ()

    if any(b < 0 for b in bounds):
        print(f"Error: lengths must be non-negative: {bounds}", file=sys.stderr)
        return 1

    try:
        if args.determinism_check:
            lines, receipts = run_with_determinism_check(runner, *run_args)
        else:
            lines, receipts = runner(*run_args)
    except (ValueError, RuntimeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    for line in lines:
        print(line)

    if args.receipts:
        with open(args.receipts, 'w') as f:
            json.dump(receipts, f, indent=2)
        print(f"Receipts written to: {args.receipts}", file=sys.stderr)

    return 0


if __name__ == "__main__":
    sys.exit(main())
