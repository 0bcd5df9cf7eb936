"""
Core Component: Byte Serialization (Big-Endian)

Stable byte encoding of bit sequences, used for hashing in receipts.

Frame for one sequence:
  - 4 ASCII bytes tag: b"BIT1"
  - 4 bytes length n (uint32, big-endian)
  - ceil(n/8) bytes: the value, big-endian (bit n-1 lands in the first
    payload byte, bit 0 in the last)

Frame for a list of sequences:
  - 4 ASCII bytes tag: b"SEQ1"
  - 4 bytes count (uint32, big-endian)
  - one BIT1 frame per sequence, in the given order

Only (length, value) is encoded. Rotation/reversal provenance is not.
"""

import math

_MAX_UINT32 = (1 << 32) - 1


def serialize_bits_be(seq) -> bytes:
    """
    Encode one bit sequence as a BIT1 frame.

    Args:
        seq: BitSequence (anything with .length and .value).

    Returns:
        bytes: Deterministic serialization.

    Raises:
        SerializationError: If length is negative or exceeds uint32, or the
            value does not fit in length bits.
    """
    n = seq.length
    value = seq.value

    if n < 0 or n > _MAX_UINT32:
        raise SerializationError(f"Length out of uint32 range: {n}")
    if value < 0 or value >> n:
        raise SerializationError(
            f"Value {value} does not fit in {n} bits"
        )

    stream = bytearray()
    stream.extend(b"BIT1")
    stream.extend(n.to_bytes(4, byteorder='big'))
    stream.extend(value.to_bytes(math.ceil(n / 8), byteorder='big'))

    return bytes(stream)


def serialize_sequences_be(seqs) -> bytes:
    """
    Encode an ordered collection of bit sequences as a SEQ1 frame.

    Args:
        seqs: Iterable of BitSequence. Order is preserved.

    Returns:
        bytes: Deterministic serialization.

    Raises:
        SerializationError: If there are more than 2^32-1 sequences or any
            single sequence cannot be encoded.
    """
    frames = [serialize_bits_be(s) for s in seqs]
    if len(frames) > _MAX_UINT32:
        raise SerializationError(f"Too many sequences: {len(frames)}")

    stream = bytearray()
    stream.extend(b"SEQ1")
    stream.extend(len(frames).to_bytes(4, byteorder='big'))
    for frame in frames:
        stream.extend(frame)

    return bytes(stream)


class SerializationError(Exception):
    """Raised when a sequence cannot be encoded in the frozen byte format."""
    pass
