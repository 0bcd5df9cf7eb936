"""
Core Component: Parameter Registry

Frozen constants for the bit-sequence kernel and the correlative search.
Every receipt carries the hash of this registry, so a change to any value
here shows up as a different section_hash.

No randomness, no environment leakage, no optionals.
"""


def param_registry() -> dict:
    """
    Returns a frozen mapping of all global constants used by correlbit.

    Keys and values are JSON-serializable primitives or lists/tuples.

    Returns:
        dict: Frozen parameter mapping with exact keys and values.

    Raises:
        RegistryError: If any required key is missing (internal consistency check).
    """
    registry = {
        # Version binding for receipts and byte frames
        "format_version": "1",

        # Rendering: bit length-1 first, bit 0 last
        "bit_order": "msb-first",

        # Every orbit walk advances by a single right rotation
        "rotation_step": 1,

        # Order in which witnesses are searched
        "orbit_order": ["proper-rotations", "reversal-rotations"],

        # Candidate window for length n >= 2 and window parameter k
        "search_window": {
            "start": "2^(n//2) - 1",
            "end": "2^min(n//2 + k, n) - 1",
            "step": 2
        },

        # Default window parameter for minimal sequences
        "min_window": 1,

        # Hashing
        "hash_algo": "BLAKE3",

        # Byte frame tags for serialization (ASCII 4-byte tags)
        "byte_frame_tags": {
            "BITS": "BIT1",
            "SEQUENCES": "SEQ1"
        }
    }

    required_keys = {
        "format_version", "bit_order", "rotation_step", "orbit_order",
        "search_window", "min_window", "hash_algo", "byte_frame_tags"
    }

    actual_keys = set(registry.keys())
    if actual_keys != required_keys:
        missing = required_keys - actual_keys
        extra = actual_keys - required_keys
        raise RegistryError(
            f"param_registry() key mismatch. Missing: {missing}, Extra: {extra}"
        )

    return registry


class RegistryError(Exception):
    """Raised when param_registry() has missing or unexpected keys."""
    pass
