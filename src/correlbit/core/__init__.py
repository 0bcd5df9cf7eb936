"""
Core foundation: receipts, hashing, serialization, parameter registry.
"""

from .registry import param_registry, RegistryError
from .hashing import blake3_hash
from .bytesio import (
    serialize_bits_be,
    serialize_sequences_be,
    SerializationError
)
from .receipts import (
    Receipts,
    assert_double_run_equal,
    ReceiptError,
    DeterminismError
)

__all__ = [
    # Registry
    "param_registry",
    "RegistryError",

    # Hashing
    "blake3_hash",

    # Serialization
    "serialize_bits_be",
    "serialize_sequences_be",
    "SerializationError",

    # Receipts
    "Receipts",
    "assert_double_run_equal",
    "ReceiptError",
    "DeterminismError",
]
