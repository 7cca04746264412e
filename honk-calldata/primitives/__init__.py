"""Primitives - Byte-level encoding of field elements and buffers."""

from primitives.buffers import (
    MAX_BUFFER_SIZE,
    flatten_byte_arrays,
    flatten_fields_as_array,
)
from primitives.encoding import hex_to_bytes, strip_hex_prefix
from primitives.errors import (
    BackendError,
    CalldataError,
    CapacityExceeded,
    InvalidHexInput,
    MalformedArtifact,
)
from primitives.field import (
    BN254_SCALAR_PRIME,
    FIELD_BYTES,
    Fr,
    bytes_to_fields,
    field_to_bytes,
    fields_to_hex,
)

__all__ = [
    # Encoding
    "hex_to_bytes",
    "strip_hex_prefix",
    # Buffers
    "flatten_byte_arrays",
    "flatten_fields_as_array",
    "MAX_BUFFER_SIZE",
    # Field
    "Fr",
    "BN254_SCALAR_PRIME",
    "FIELD_BYTES",
    "field_to_bytes",
    "bytes_to_fields",
    "fields_to_hex",
    # Errors
    "CalldataError",
    "InvalidHexInput",
    "CapacityExceeded",
    "MalformedArtifact",
    "BackendError",
]
