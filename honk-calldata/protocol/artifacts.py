"""Proof and verification-key artifacts returned by the proving backend.

A backend hands back either the raw bytes directly or a wrapper carrying the
bytes under a backend-specific field name ("data" for verification keys,
"proof" for proofs). Both shapes are modeled as an explicit sum type so the
extractor discriminates exhaustively on the variant first.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Mapping, Union

import numpy as np

from primitives.errors import MalformedArtifact

VK_FIELD = "data"
PROOF_FIELD = "proof"
PUBLIC_INPUTS_FIELD = "publicInputs"

_BYTE_TYPES = (bytes, bytearray, memoryview)


# --- Artifact Variants ---

@dataclass(frozen=True)
class RawArtifact:
    """Artifact that is itself the byte buffer."""
    data: bytes


@dataclass(frozen=True)
class WrappedArtifact:
    """Artifact carrying its byte buffer under a named field.

    source is a mapping (fields are keys) or any other object (fields are
    attributes, including properties, slots and namedtuple fields).
    """
    source: Any = field(default_factory=dict)

    def get(self, name: str) -> Any:
        if isinstance(self.source, Mapping):
            return self.source.get(name)
        return getattr(self.source, name, None)

    def field_names(self) -> List[str]:
        if isinstance(self.source, Mapping):
            return sorted(str(k) for k in self.source)
        return sorted(n for n in dir(self.source) if not n.startswith("_"))


Artifact = Union[RawArtifact, WrappedArtifact]

# Values that can never carry a named byte field
_OPAQUE_TYPES = (str, int, float, complex, type(None))


def _is_byte_buffer(value: Any) -> bool:
    if isinstance(value, _BYTE_TYPES):
        return True
    return isinstance(value, np.ndarray) and value.dtype == np.uint8 and value.ndim == 1


def _to_bytes(value: Any) -> bytes:
    if isinstance(value, bytes):
        return value
    if isinstance(value, np.ndarray):
        return value.tobytes()
    return bytes(value)


def _malformed(obj: Any, reason: str) -> MalformedArtifact:
    """Build a MalformedArtifact describing what obj looks like."""
    wrapped = obj if isinstance(obj, WrappedArtifact) else WrappedArtifact(obj)
    return MalformedArtifact(type(obj).__name__, wrapped.field_names(), reason)


def as_artifact(obj: Any) -> Artifact:
    """Classify backend output into one of the two artifact variants.

    Byte-like values (including 1-D uint8 numpy arrays) become RawArtifact;
    mappings and other objects become WrappedArtifact over their fields.

    Raises:
        MalformedArtifact: If obj is a scalar, a string, None or a class
    """
    if isinstance(obj, (RawArtifact, WrappedArtifact)):
        return obj
    if _is_byte_buffer(obj):
        return RawArtifact(_to_bytes(obj))
    if isinstance(obj, _OPAQUE_TYPES) or isinstance(obj, type):
        raise MalformedArtifact(type(obj).__name__, reason="expected bytes or a wrapper object")
    return WrappedArtifact(obj)


# --- Extraction ---

def extract_bytes(artifact: Any, wrapper_field_name: str) -> bytes:
    """Return the raw byte buffer of a proof or verification-key artifact.

    Args:
        artifact: Backend output (raw bytes or wrapper)
        wrapper_field_name: Field holding the bytes when artifact is a wrapper

    Returns:
        The artifact bytes. A raw artifact is returned as-is.

    Raises:
        MalformedArtifact: If neither shape yields a byte buffer
    """
    art = as_artifact(artifact)
    if isinstance(art, RawArtifact):
        return art.data

    value = art.get(wrapper_field_name)
    if not _is_byte_buffer(value):
        raise _malformed(artifact, f"no byte buffer under {wrapper_field_name!r}")
    return _to_bytes(value)


def extract_public_inputs(artifact: Any, field_name: str = PUBLIC_INPUTS_FIELD) -> List[str]:
    """Return the public-input hex strings carried by a wrapped proof.

    Raises:
        MalformedArtifact: If the proof is raw or the field is not a list of str
    """
    art = as_artifact(artifact)
    if isinstance(art, RawArtifact):
        raise MalformedArtifact("RawArtifact", reason="raw proof carries no public inputs")

    value = art.get(field_name)
    if not isinstance(value, (list, tuple)) or not all(isinstance(v, str) for v in value):
        raise _malformed(artifact, f"expected a list of hex strings under {field_name!r}")
    return list(value)


# --- Persistence ---

def write_artifact_bytes(path: Union[str, Path], data: bytes) -> Path:
    """Write raw artifact bytes, replacing any previous file."""
    path = Path(path)
    path.write_bytes(data)
    return path
