"""
Tests for proof / verification-key artifact extraction.
"""

from collections import namedtuple
from types import SimpleNamespace

import numpy as np
import pytest

from primitives.errors import MalformedArtifact
from protocol.artifacts import (
    RawArtifact,
    WrappedArtifact,
    as_artifact,
    extract_bytes,
    extract_public_inputs,
    write_artifact_bytes,
)

ProofData = namedtuple("ProofData", ["proof", "publicInputs"])


class SlottedVk:
    __slots__ = ("data",)

    def __init__(self, data):
        self.data = data


class PropertyProof:
    def __init__(self, raw):
        self._raw = raw

    @property
    def proof(self):
        return self._raw


class TestAsArtifact:
    """Test classification of backend output into the two variants."""

    def test_bytes_are_raw(self):
        assert as_artifact(b"\x01\x02") == RawArtifact(b"\x01\x02")

    def test_uint8_array_is_raw(self):
        art = as_artifact(np.array([1, 2], dtype=np.uint8))
        assert art == RawArtifact(b"\x01\x02")

    def test_mapping_is_wrapped(self):
        art = as_artifact({"data": b"\x01"})
        assert isinstance(art, WrappedArtifact)
        assert art.get("data") == b"\x01"

    def test_object_is_wrapped(self):
        art = as_artifact(SimpleNamespace(proof=b"\x01"))
        assert isinstance(art, WrappedArtifact)
        assert art.get("proof") == b"\x01"
        assert art.field_names() == ["proof"]

    def test_variants_pass_through(self):
        raw = RawArtifact(b"")
        assert as_artifact(raw) is raw

    @pytest.mark.parametrize("value", [None, 42, "0x1234", 1.5])
    def test_opaque_values_rejected(self, value):
        with pytest.raises(MalformedArtifact) as exc_info:
            as_artifact(value)
        assert exc_info.value.type_name == type(value).__name__


class TestExtractBytes:
    """Test raw-buffer extraction for VK ("data") and proof ("proof")."""

    def test_raw_identity(self):
        buf = b"\x00\x01\x02"
        assert extract_bytes(buf, "data") is buf

    def test_raw_variant(self):
        assert extract_bytes(RawArtifact(b"\x05"), "proof") == b"\x05"

    def test_wrapped_mapping(self):
        assert extract_bytes({"data": b"\x01\x02"}, "data") == b"\x01\x02"

    def test_wrapped_object(self):
        proof = SimpleNamespace(proof=bytearray(b"\x09"), publicInputs=[])
        assert extract_bytes(proof, "proof") == b"\x09"

    def test_namedtuple_wrapper(self):
        proof = ProofData(b"\x01", ["0x01"])
        assert extract_bytes(proof, "proof") == b"\x01"
        assert extract_public_inputs(proof) == ["0x01"]

    def test_slots_wrapper(self):
        assert extract_bytes(SlottedVk(b"\x02"), "data") == b"\x02"

    def test_property_wrapper(self):
        assert extract_bytes(PropertyProof(b"\x03"), "proof") == b"\x03"

    def test_slots_wrapper_missing_field_reports_attributes(self):
        with pytest.raises(MalformedArtifact) as exc_info:
            extract_bytes(SlottedVk(b"\x02"), "proof")
        assert exc_info.value.type_name == "SlottedVk"
        assert exc_info.value.fields == ["data"]

    def test_wrapped_numpy_field(self):
        vk = {"data": np.array([7, 8], dtype=np.uint8)}
        assert extract_bytes(vk, "data") == b"\x07\x08"

    def test_empty_wrapper_fails(self):
        with pytest.raises(MalformedArtifact) as exc_info:
            extract_bytes({}, "data")
        assert exc_info.value.type_name == "dict"
        assert exc_info.value.fields == []

    def test_wrong_field_name_reports_fields(self):
        with pytest.raises(MalformedArtifact) as exc_info:
            extract_bytes({"proof": b"\x01", "publicInputs": []}, "data")
        err = exc_info.value
        assert err.fields == ["proof", "publicInputs"]
        assert "'data'" in str(err)

    def test_non_buffer_field_fails(self):
        with pytest.raises(MalformedArtifact):
            extract_bytes({"data": "0x1234"}, "data")

    def test_object_without_field(self):
        with pytest.raises(MalformedArtifact) as exc_info:
            extract_bytes(SimpleNamespace(other=1), "proof")
        assert exc_info.value.type_name == "SimpleNamespace"
        assert exc_info.value.fields == ["other"]

    def test_is_also_type_error(self):
        with pytest.raises(TypeError):
            extract_bytes(None, "data")


class TestExtractPublicInputs:
    def test_wrapped_proof(self):
        proof = {"proof": b"", "publicInputs": ["0x01", "0x02"]}
        assert extract_public_inputs(proof) == ["0x01", "0x02"]

    def test_raw_proof_has_none(self):
        with pytest.raises(MalformedArtifact):
            extract_public_inputs(b"\x01\x02")

    def test_missing_field(self):
        with pytest.raises(MalformedArtifact):
            extract_public_inputs({"proof": b""})

    def test_non_string_entries(self):
        with pytest.raises(MalformedArtifact):
            extract_public_inputs({"publicInputs": [1, 2]})


class TestWriteArtifactBytes:
    def test_replaces_content(self, tmp_path):
        path = tmp_path / "vk"
        path.write_bytes(b"old content that is longer")
        write_artifact_bytes(path, b"\x01\x02")
        assert path.read_bytes() == b"\x01\x02"
