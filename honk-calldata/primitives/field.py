"""BN254 scalar field GF(r) used by UltraHonk public inputs.

Uses galois for the field type. The primitive element is fixed to 5 so class
construction does not have to factor r - 1.
"""

from typing import Iterable, List

import galois
import numpy as np

# --- Field Construction ---

BN254_SCALAR_PRIME = 0x30644E72E131A029B85045B68181585D2833E84879B9709143E1F593F0000001

Fr = galois.GF(BN254_SCALAR_PRIME, primitive_element=5, verify=False)
"""Scalar field GF(r) of the BN254 curve."""

# Public inputs are serialized as one 32-byte big-endian word per element
FIELD_BYTES = 32


# --- Byte Conversion ---

def field_to_bytes(value: int) -> bytes:
    """Encode a field element as a 32-byte big-endian word."""
    return int(Fr(int(value))).to_bytes(FIELD_BYTES, "big")


def bytes_to_fields(buf: bytes) -> Fr:
    """Split a buffer of 32-byte big-endian words into field elements.

    Raises:
        ValueError: If the length is not a multiple of 32 or a word is not
            a canonical element (>= r)
    """
    if len(buf) % FIELD_BYTES != 0:
        raise ValueError(
            f"Buffer length {len(buf)} is not a multiple of {FIELD_BYTES}"
        )
    if not buf:
        return Fr.Zeros(0)
    words = np.frombuffer(buf, dtype=np.uint8).reshape(-1, FIELD_BYTES)
    return Fr([int.from_bytes(w.tobytes(), "big") for w in words])


def fields_to_hex(values: Iterable[int]) -> List[str]:
    """Format field elements as 0x-prefixed 64-digit hex strings."""
    return ["0x" + field_to_bytes(v).hex() for v in values]
