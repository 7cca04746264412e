"""Byte-buffer flattening for calldata inputs.

The calldata generator takes public inputs as one contiguous byte buffer in
circuit declaration order, with no separators between field elements.
"""

import sys
from typing import Iterable, Sequence, Union

import numpy as np

from primitives.encoding import hex_to_bytes
from primitives.errors import CapacityExceeded, MalformedArtifact

# --- Type Aliases ---
ByteLike = Union[bytes, bytearray, memoryview, np.ndarray]

MAX_BUFFER_SIZE = sys.maxsize


def _as_uint8(buf: ByteLike) -> np.ndarray:
    """View a byte-like object as a flat uint8 array without copying.

    Raises:
        MalformedArtifact: For numpy arrays of any dtype other than uint8
    """
    if isinstance(buf, np.ndarray):
        if buf.dtype != np.uint8:
            raise MalformedArtifact("ndarray", reason=f"expected a uint8 buffer, got dtype {buf.dtype}")
        return buf.reshape(-1)
    return np.frombuffer(buf, dtype=np.uint8)


def flatten_byte_arrays(buffers: Sequence[ByteLike]) -> bytes:
    """Concatenate byte buffers in order, with no padding between them.

    Args:
        buffers: Ordered byte buffers

    Returns:
        A new buffer of length sum(len(b) for b in buffers)

    Raises:
        CapacityExceeded: If the total length is not addressable
        MalformedArtifact: If a numpy buffer is not uint8
    """
    arrays = [_as_uint8(b) for b in buffers]
    total = sum(a.size for a in arrays)
    if total > MAX_BUFFER_SIZE:
        raise CapacityExceeded(total, MAX_BUFFER_SIZE)
    if not arrays:
        return b""
    return np.concatenate(arrays).tobytes()


def flatten_fields_as_array(fields: Iterable[str]) -> bytes:
    """Decode hex field elements and flatten them into one buffer.

    Decoding stops at the first invalid element; InvalidHexInput propagates.
    """
    return flatten_byte_arrays([hex_to_bytes(f) for f in fields])
