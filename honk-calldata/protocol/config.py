"""Pipeline run configuration."""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

from protocol.backends import NARGO_BUILD_DIR
from protocol.flavor import HonkFlavor

DEFAULT_PROGRAM = "hello_world"
DEFAULT_INPUTS: Dict[str, Any] = {"x": 15, "y": 14}

VK_FILE = "vk"
PROOF_FILE = "proof"
CALLDATA_FILE = "calldata.json"


@dataclass
class PipelineConfig:
    """Where the Noir project lives, what to feed it and which flavor to use.

    Attributes:
        flavor: Proof flavor; always explicit, there is no default
        project_dir: Noir project root (holds Nargo.toml)
        program: Compiled program name (target/<program>.json)
        target_dir: Output directory for vk, proof and calldata.json, relative
            to project_dir unless absolute. The compiled program and witness
            stay in nargo's own build directory (<project_dir>/target).
        inputs: Named circuit inputs written to Prover.toml
    """
    flavor: HonkFlavor
    project_dir: Path = field(default_factory=Path)
    program: str = DEFAULT_PROGRAM
    target_dir: Path = Path("target")
    inputs: Dict[str, Any] = field(default_factory=lambda: dict(DEFAULT_INPUTS))
    nargo_bin: str = "nargo"
    bb_bin: str = "bb"
    garaga_bin: str = "garaga"

    @property
    def output_dir(self) -> Path:
        return self.project_dir / self.target_dir

    @property
    def build_dir(self) -> Path:
        return self.project_dir / NARGO_BUILD_DIR

    @property
    def bytecode_path(self) -> Path:
        return self.build_dir / f"{self.program}.json"

    @property
    def vk_path(self) -> Path:
        return self.output_dir / VK_FILE

    @property
    def proof_path(self) -> Path:
        return self.output_dir / PROOF_FILE

    @property
    def calldata_path(self) -> Path:
        return self.output_dir / CALLDATA_FILE

    @classmethod
    def from_json(cls, path: str, flavor: Optional[HonkFlavor] = None) -> "PipelineConfig":
        """Load configuration from a JSON file.

        Relative projectDir values resolve against the file's directory.
        An explicit flavor argument takes precedence over the file.
        """
        with open(path) as f:
            j = json.load(f)
        return cls._load(j, Path(path).parent, flavor)

    @classmethod
    def _load(cls, j: dict, base_dir: Path, flavor: Optional[HonkFlavor]) -> "PipelineConfig":
        if flavor is None:
            if "flavor" not in j:
                raise ValueError("Configuration must set 'flavor' (keccak or starknet)")
            flavor = HonkFlavor.parse(j["flavor"])

        inputs = j.get("inputs", DEFAULT_INPUTS)
        if not isinstance(inputs, dict):
            raise ValueError(f"'inputs' must be an object, got {type(inputs).__name__}")

        return cls(
            flavor=flavor,
            project_dir=base_dir / j.get("projectDir", "."),
            program=j.get("program", DEFAULT_PROGRAM),
            target_dir=Path(j.get("targetDir", "target")),
            inputs=dict(inputs),
            nargo_bin=j.get("nargoBin", "nargo"),
            bb_bin=j.get("bbBin", "bb"),
            garaga_bin=j.get("garagaBin", "garaga"),
        )
