"""Protocol - Proof artifacts, calldata and pipeline orchestration."""

from protocol.artifacts import (
    Artifact,
    RawArtifact,
    WrappedArtifact,
    as_artifact,
    extract_bytes,
    extract_public_inputs,
    write_artifact_bytes,
)
from protocol.backends import (
    BbBackend,
    CalldataGenerator,
    CircuitExecutor,
    GaragaCalldataGenerator,
    NargoExecutor,
    ProofBackend,
)
from protocol.calldata import (
    calldata_to_json,
    load_calldata,
    write_calldata,
)
from protocol.config import PipelineConfig
from protocol.flavor import HonkFlavor
from protocol.pipeline import PipelineResult, generate_calldata

__all__ = [
    # Artifacts
    "Artifact",
    "RawArtifact",
    "WrappedArtifact",
    "as_artifact",
    "extract_bytes",
    "extract_public_inputs",
    "write_artifact_bytes",
    # Calldata
    "calldata_to_json",
    "write_calldata",
    "load_calldata",
    # Collaborators
    "CircuitExecutor",
    "ProofBackend",
    "CalldataGenerator",
    "NargoExecutor",
    "BbBackend",
    "GaragaCalldataGenerator",
    # Pipeline
    "HonkFlavor",
    "PipelineConfig",
    "PipelineResult",
    "generate_calldata",
]
