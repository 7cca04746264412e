"""End-to-end calldata generation.

Flow:
    1. Execute the circuit to get a witness
    2. Prove, then derive the verification key
    3. Extract raw VK and proof bytes and write target/vk, target/proof
    4. Flatten public inputs, generate calldata, write target/calldata.json

Steps 1-3 are fatal on error. Step 4 runs after the raw artifacts are on
disk, so its failures are logged and the calldata artifact is skipped.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from primitives.buffers import flatten_fields_as_array
from primitives.errors import BackendError, InvalidHexInput, MalformedArtifact
from protocol.artifacts import (
    PROOF_FIELD,
    VK_FIELD,
    extract_bytes,
    extract_public_inputs,
    write_artifact_bytes,
)
from protocol.backends import CalldataGenerator, CircuitExecutor, ProofBackend
from protocol.calldata import write_calldata
from protocol.config import PipelineConfig
from protocol.flavor import HonkFlavor

logger = logging.getLogger(__name__)


@dataclass
class PipelineResult:
    """Artifacts produced by one run. calldata is None when skipped."""
    flavor: HonkFlavor
    vk_path: Path
    proof_path: Path
    calldata_path: Optional[Path] = None
    calldata: Optional[List[str]] = None


def generate_calldata(
    config: PipelineConfig,
    executor: CircuitExecutor,
    backend: ProofBackend,
    generator: CalldataGenerator,
) -> PipelineResult:
    """Run the full pipeline for one proof/VK/calldata triple.

    The backend is closed on return, whether or not the run succeeded.
    """
    flavor = config.flavor
    try:
        logger.info("Executing %s to generate witness", config.program)
        witness = executor.execute(config.inputs)

        logger.info("Generating %s proof", flavor.name.lower())
        proof = backend.generate_proof(witness, flavor)

        logger.info("Extracting verification key")
        vk = backend.get_verification_key(flavor)
        logger.debug("VK type: %s, proof type: %s", type(vk).__name__, type(proof).__name__)

        vk_bytes = extract_bytes(vk, VK_FIELD)
        proof_bytes = extract_bytes(proof, PROOF_FIELD)

        config.output_dir.mkdir(parents=True, exist_ok=True)
        write_artifact_bytes(config.vk_path, vk_bytes)
        logger.info("Wrote VK (%d bytes) to %s", len(vk_bytes), config.vk_path)
        write_artifact_bytes(config.proof_path, proof_bytes)
        logger.info("Wrote proof (%d bytes) to %s", len(proof_bytes), config.proof_path)

        result = PipelineResult(flavor, config.vk_path, config.proof_path)

        try:
            public_inputs = flatten_fields_as_array(extract_public_inputs(proof))
            elements = generator.generate(proof_bytes, public_inputs, vk_bytes, flavor)
        except (MalformedArtifact, InvalidHexInput, BackendError) as e:
            logger.error("Skipping calldata generation: %s", e)
            return result

        logger.debug("Calldata: %s", elements)
        result.calldata = write_calldata(elements, config.calldata_path)
        result.calldata_path = config.calldata_path
        logger.info("Wrote %d calldata elements to %s", len(result.calldata), config.calldata_path)
        return result
    finally:
        backend.close()
