"""
Kernel Component: Windowed Search for Correlative Sequences

Heuristic enumeration of correlative sequences of length n.

Window (n >= 2, window parameter k):
  start = 2^(n//2) - 1
  end   = 2^min(n//2 + k, n) - 1
  candidates: start, start+2, ..., end   (all odd; bit 0 always set)

Only values inside the window are examined. The search is NOT exhaustive
over all 2^n patterns; larger k widens the window.

Special lengths:
  n == 0 -> nothing
  n == 1 -> exactly "1"
"""

import os
import sys
from typing import Iterator, Tuple, TypedDict

from .bits import BitSequence, EMPTY
from .ops import all_ones
from .orbit import is_correlative


class SearchReceipt(TypedDict):
    n: int
    k: int
    window_start: int
    window_end: int
    candidates_examined: int
    found_count: int
    found_hash: str
    min: str


def candidate_window(n: int, k: int) -> Tuple[int, int]:
    """
    Return (start, end) of the candidate window for n >= 2.

    end < start when k is negative; the window is then empty.

    Raises:
        ValueError: If n < 2.
    """
    if n < 2:
        raise ValueError(f"Candidate window is defined for n >= 2, got {n}")
    half = n // 2
    return all_ones(half), all_ones(max(0, min(half + k, n)))


def correlative_sequences(n: int, k: int) -> Iterator[BitSequence]:
    """
    Lazily yield correlative sequences of length n found in the window.

    Results come out in ascending value order. Each call starts a fresh scan.

    Args:
        n: Sequence length (>= 0).
        k: Window parameter; the highest candidate bit is n//2 + k - 1.

    Raises:
        ValueError: If n is negative.
    """
    if n < 0:
        raise ValueError(f"Length must be non-negative, got {n}")
    return _scan(n, k)


def _scan(n: int, k: int) -> Iterator[BitSequence]:
    if n == 0:
        return
    if n == 1:
        yield BitSequence.from_int(1, 1)
        return

    start, end = candidate_window(n, k)
    debug = os.environ.get("DEBUG_SEARCH")
    if debug:
        print(f"[search] n={n} k={k} window=[{start}, {end}]", file=sys.stderr)

    for value in range(start, end + 1, 2):
        s = BitSequence.from_int(value, n)
        ok = is_correlative(s)
        if debug:
            print(f"[search]   {s} {'correlative' if ok else '-'}", file=sys.stderr)
        if ok:
            yield s


def minimal_correlative(n: int, k: int = 1) -> BitSequence:
    """
    Smallest correlative sequence of length n in the window, or EMPTY.
    """
    return min(correlative_sequences(n, k), default=EMPTY)


def search_receipts(n: int, k: int) -> dict:
    """
    Run one windowed search and seal its outcome in a receipt digest.

    Payload keys:
      - n, k
      - window_start, window_end (both 0 when n < 2)
      - candidates_examined
      - found_count
      - found_hash: BLAKE3 of the SEQ1 frame of all results, in scan order
      - min: rendering of the minimal result ("" if none)
    """
    from ..core import Receipts, blake3_hash, serialize_sequences_be

    if n >= 2:
        start, end = candidate_window(n, k)
        examined = max(0, (end - start) // 2 + 1)
    else:
        start, end = 0, 0
        examined = 1 if n == 1 else 0

    found = list(correlative_sequences(n, k))

    receipt: SearchReceipt = {
        "n": n,
        "k": k,
        "window_start": start,
        "window_end": end,
        "candidates_examined": examined,
        "found_count": len(found),
        "found_hash": blake3_hash(serialize_sequences_be(found)),
        "min": min(found, default=EMPTY).bits(),
    }

    receipts = Receipts(f"search-n{n}-k{k}")
    for key, value in receipt.items():
        receipts.put(key, value)
    return receipts.digest()
