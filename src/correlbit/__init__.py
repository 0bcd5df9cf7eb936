"""
correlbit: Correlative Bit Sequences

A bit sequence is correlative (Hawley's property) if it shares a set bit
with every proper rotation of itself and every rotation of its reversal.
This package tests and enumerates such sequences and searches for
counterexamples to closure under concatenation.
"""

__version__ = "0.1.0"

from .kernel import (
    BitSequence,
    EMPTY,
    correlative_sequences,
    minimal_correlative,
    is_correlative,
    non_correlate,
    justification
)
from .runner import (
    CounterExample,
    find_mins,
    counter_examples,
    find_first_counter_example
)

__all__ = [
    "BitSequence",
    "EMPTY",
    "correlative_sequences",
    "minimal_correlative",
    "is_correlative",
    "non_correlate",
    "justification",
    "CounterExample",
    "find_mins",
    "counter_examples",
    "find_first_counter_example",
]
