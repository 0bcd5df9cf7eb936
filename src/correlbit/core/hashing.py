"""
Core Component: BLAKE3 Hashing

Single hash function behind receipts and sequence fingerprints.
"""

import blake3


def blake3_hash(data: bytes) -> str:
    """
    Return the lowercase hex BLAKE3-256 digest of data.

    Unkeyed and unseeded: the same bytes always give the same 64-character
    string.
    """
    hasher = blake3.blake3()
    hasher.update(data)
    return hasher.hexdigest()
