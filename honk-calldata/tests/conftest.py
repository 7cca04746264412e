"""
Shared fixtures: in-memory stand-ins for the external toolchain.
"""

import sys
from pathlib import Path

import pytest

# tests/ is inside honk-calldata/, so parent is the project directory
project_dir = Path(__file__).parent.parent
if str(project_dir) not in sys.path:
    sys.path.insert(0, str(project_dir))

from protocol.artifacts import RawArtifact, WrappedArtifact
from protocol.config import PipelineConfig
from protocol.flavor import HonkFlavor

VK_BYTES = bytes(range(16))
PROOF_BYTES = bytes(range(100, 132))
PUBLIC_INPUTS = ["0x" + "00" * 31 + "0f", "0x" + "00" * 31 + "0e"]


class FakeExecutor:
    def __init__(self):
        self.inputs = None

    def execute(self, inputs):
        self.inputs = dict(inputs)
        return Path("witness.gz")


class FakeBackend:
    """Returns a wrapped proof and a raw VK unless told otherwise."""

    def __init__(self, proof=None, vk=None):
        self.proof = proof if proof is not None else WrappedArtifact({
            "proof": PROOF_BYTES,
            "publicInputs": list(PUBLIC_INPUTS),
        })
        self.vk = vk if vk is not None else RawArtifact(VK_BYTES)
        self.flavors = []
        self.closed = False

    def generate_proof(self, witness, flavor):
        self.flavors.append(flavor)
        return self.proof

    def get_verification_key(self, flavor):
        self.flavors.append(flavor)
        return self.vk

    def close(self):
        self.closed = True


class FakeGenerator:
    def __init__(self, elements=None, error=None):
        self.elements = elements if elements is not None else [1, 2**200, 3]
        self.error = error
        self.calls = []

    def generate(self, proof, public_inputs, vk, flavor):
        self.calls.append((proof, public_inputs, vk, flavor))
        if self.error is not None:
            raise self.error
        return list(self.elements)


@pytest.fixture
def config(tmp_path) -> PipelineConfig:
    return PipelineConfig(flavor=HonkFlavor.STARKNET, project_dir=tmp_path)
