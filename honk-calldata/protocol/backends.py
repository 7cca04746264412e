"""External collaborators: circuit execution, proving and calldata generation.

The pipeline only depends on the three Protocol interfaces below. The
concrete adapters drive the Noir toolchain CLIs:

    nargo execute            -> witness (target/<program>.gz)
    bb prove / bb write_vk   -> proof, public_inputs, vk
    garaga calldata          -> calldata elements

Each tool runs to completion; a non-zero exit raises BackendError with the
captured stderr.
"""

import json
import logging
import shutil
import subprocess
import tempfile
from pathlib import Path
from typing import Any, List, Mapping, Optional, Protocol, Sequence, Union

from primitives.errors import BackendError
from primitives.field import bytes_to_fields, fields_to_hex
from protocol.artifacts import (
    PROOF_FIELD,
    PUBLIC_INPUTS_FIELD,
    RawArtifact,
    WrappedArtifact,
)
from protocol.flavor import HonkFlavor

logger = logging.getLogger(__name__)

# bb output file names
BB_PROOF_FILE = "proof"
BB_PUBLIC_INPUTS_FILE = "public_inputs"
BB_VK_FILE = "vk"

# nargo always compiles and writes witnesses to <project>/target
NARGO_BUILD_DIR = "target"


# --- Interfaces ---

class CircuitExecutor(Protocol):
    def execute(self, inputs: Mapping[str, Any]) -> Path:
        """Run the circuit on named inputs and return the witness path."""
        ...


class ProofBackend(Protocol):
    def generate_proof(self, witness: Path, flavor: HonkFlavor) -> Any:
        ...

    def get_verification_key(self, flavor: HonkFlavor) -> Any:
        ...

    def close(self) -> None:
        ...


class CalldataGenerator(Protocol):
    def generate(self, proof: bytes, public_inputs: bytes, vk: bytes,
                 flavor: HonkFlavor) -> List[Any]:
        ...


# --- Process Helper ---

def run_tool(cmd: Sequence[str], cwd: Optional[Path] = None) -> str:
    """Run an external tool and return its stdout.

    Raises:
        BackendError: If the binary is missing or exits non-zero
    """
    logger.debug("Running %s", " ".join(cmd))
    try:
        result = subprocess.run(
            list(cmd), cwd=cwd, capture_output=True, text=True, check=False
        )
    except FileNotFoundError as e:
        raise BackendError(cmd, None, str(e)) from e

    if result.returncode != 0:
        raise BackendError(cmd, result.returncode, result.stderr)
    return result.stdout


# --- nargo ---

def _toml_value(value: Any) -> str:
    """Format a circuit input as a Prover.toml value."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, str)):
        return json.dumps(str(value))
    if isinstance(value, (list, tuple)):
        return "[" + ", ".join(_toml_value(v) for v in value) + "]"
    raise ValueError(f"Unsupported circuit input type {type(value).__name__}")


def format_prover_toml(inputs: Mapping[str, Any]) -> str:
    """Render circuit inputs as Prover.toml (scalars and flat arrays only)."""
    lines = []
    for name, value in inputs.items():
        lines.append(f"{name} = {_toml_value(value)}")
    return "\n".join(lines) + "\n"


class NargoExecutor:
    """Executes a Noir program with `nargo execute`."""

    def __init__(self, project_dir: Union[str, Path], program_name: str,
                 nargo_bin: str = "nargo",
                 build_dir: Optional[Union[str, Path]] = None) -> None:
        self.project_dir = Path(project_dir)
        self.program_name = program_name
        self.nargo_bin = nargo_bin
        self.build_dir = Path(build_dir) if build_dir is not None else self.project_dir / NARGO_BUILD_DIR

    def execute(self, inputs: Mapping[str, Any]) -> Path:
        (self.project_dir / "Prover.toml").write_text(format_prover_toml(inputs))
        run_tool([self.nargo_bin, "execute", self.program_name], cwd=self.project_dir)
        witness = self.build_dir / f"{self.program_name}.gz"
        logger.info("Witness written to %s", witness)
        return witness


# --- bb ---

class BbBackend:
    """UltraHonk prover backed by the `bb` CLI.

    Outputs land in a private temporary directory that close() removes.
    """

    def __init__(self, bytecode_path: Union[str, Path], bb_bin: str = "bb") -> None:
        self.bytecode_path = Path(bytecode_path)
        self.bb_bin = bb_bin
        self._work_dir = Path(tempfile.mkdtemp(prefix="honk-bb-"))

    def __enter__(self) -> "BbBackend":
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()

    def _base_args(self, command: str, flavor: HonkFlavor) -> List[str]:
        return [
            self.bb_bin, command,
            "--scheme", "ultra_honk",
            "--oracle_hash", flavor.oracle_hash,
            "-b", str(self.bytecode_path),
            "-o", str(self._work_dir),
        ]

    def generate_proof(self, witness: Path, flavor: HonkFlavor) -> WrappedArtifact:
        """Prove and return {proof: bytes, publicInputs: [hex, ...]}."""
        run_tool(self._base_args("prove", flavor) + ["-w", str(witness)])
        proof = (self._work_dir / BB_PROOF_FILE).read_bytes()
        public_path = self._work_dir / BB_PUBLIC_INPUTS_FILE
        public_bytes = public_path.read_bytes() if public_path.exists() else b""
        return WrappedArtifact({
            PROOF_FIELD: proof,
            PUBLIC_INPUTS_FIELD: fields_to_hex(bytes_to_fields(public_bytes)),
        })

    def get_verification_key(self, flavor: HonkFlavor) -> RawArtifact:
        run_tool(self._base_args("write_vk", flavor))
        return RawArtifact((self._work_dir / BB_VK_FILE).read_bytes())

    def close(self) -> None:
        shutil.rmtree(self._work_dir, ignore_errors=True)


# --- garaga ---

def parse_calldata_output(stdout: str) -> List[int]:
    """Parse `garaga calldata --format array` output into integers."""
    text = stdout.strip()
    if not text:
        raise ValueError("garaga produced no calldata output")
    # Only the last line carries the array; earlier lines are progress output
    values = json.loads(text.splitlines()[-1])
    if not isinstance(values, list):
        raise ValueError(f"Expected a calldata array, got {type(values).__name__}")
    return [int(v) for v in values]


class GaragaCalldataGenerator:
    """Calldata generator backed by the `garaga calldata` CLI."""

    def __init__(self, garaga_bin: str = "garaga") -> None:
        self.garaga_bin = garaga_bin

    def generate(self, proof: bytes, public_inputs: bytes, vk: bytes,
                 flavor: HonkFlavor) -> List[int]:
        with tempfile.TemporaryDirectory(prefix="honk-garaga-") as tmp:
            tmp_dir = Path(tmp)
            (tmp_dir / BB_PROOF_FILE).write_bytes(proof)
            (tmp_dir / BB_PUBLIC_INPUTS_FILE).write_bytes(public_inputs)
            (tmp_dir / BB_VK_FILE).write_bytes(vk)
            cmd = [
                self.garaga_bin, "calldata",
                "--system", flavor.garaga_system,
                "--vk", str(tmp_dir / BB_VK_FILE),
                "--proof", str(tmp_dir / BB_PROOF_FILE),
                "--public-inputs", str(tmp_dir / BB_PUBLIC_INPUTS_FILE),
                "--format", "array",
            ]
            stdout = run_tool(cmd)
        try:
            return parse_calldata_output(stdout)
        except (ValueError, TypeError) as e:
            raise BackendError(cmd, 0, f"unreadable calldata output ({e}): {stdout}") from e
