#!/usr/bin/env python3
"""
Tests for the contract artifact registry
"""

import json
import pytest

from migrations.artifacts import ArtifactRegistry
from migrations.mock_chain import AMAL_ABI, write_artifact
from migrations.exceptions import ArtifactNotFoundError


class TestArtifactRegistry:
    """Test class for ArtifactRegistry.resolve"""

    def test_resolve_truffle_layout(self, build_dir):
        registry = ArtifactRegistry(str(build_dir))
        artifact = registry.resolve("AMAL")

        assert artifact.name == "AMAL"
        assert artifact.abi == AMAL_ABI
        assert artifact.bytecode == "0x6080604052"
        assert artifact.path == str(build_dir / "AMAL.json")
        assert artifact.is_deployable

    def test_resolve_hardhat_layout(self, tmp_path):
        """Hardhat nests artifacts under <Source>.sol/ and stores bytecode without a prefix"""
        nested = tmp_path / "artifacts" / "contracts" / "AMAL.sol"
        write_artifact(nested, "AMAL", bytecode="6080604052")
        (nested / "AMAL.dbg.json").write_text(json.dumps({"buildInfo": "x"}))

        registry = ArtifactRegistry(str(tmp_path / "artifacts"))
        artifact = registry.resolve("AMAL")

        assert artifact.bytecode == "0x6080604052"
        assert registry.names() == ["AMAL"]

    def test_resolve_bytecode_object(self, tmp_path):
        write_artifact(tmp_path, "AMAL", bytecode={"object": "6080"})
        assert ArtifactRegistry(str(tmp_path)).resolve("AMAL").bytecode == "0x6080"

    def test_resolve_missing_artifact(self, build_dir):
        registry = ArtifactRegistry(str(build_dir))

        with pytest.raises(ArtifactNotFoundError) as excinfo:
            registry.resolve("Missing")
        assert excinfo.value.name == "Missing"

    def test_resolve_malformed_json(self, tmp_path):
        (tmp_path / "AMAL.json").write_text("{not json")

        with pytest.raises(ArtifactNotFoundError, match="could not read"):
            ArtifactRegistry(str(tmp_path)).resolve("AMAL")

    def test_resolve_without_abi(self, tmp_path):
        (tmp_path / "AMAL.json").write_text(json.dumps({"bytecode": "0x60"}))

        with pytest.raises(ArtifactNotFoundError, match="has no ABI"):
            ArtifactRegistry(str(tmp_path)).resolve("AMAL")

    def test_interface_is_not_deployable(self, tmp_path):
        write_artifact(tmp_path, "IAMAL", bytecode="0x")
        assert not ArtifactRegistry(str(tmp_path)).resolve("IAMAL").is_deployable

    def test_resolve_is_cached(self, build_dir):
        registry = ArtifactRegistry(str(build_dir))
        first = registry.resolve("AMAL")

        (build_dir / "AMAL.json").unlink()
        assert registry.resolve("AMAL") is first

    def test_names(self, build_dir):
        write_artifact(build_dir, "Migrations")
        assert ArtifactRegistry(str(build_dir)).names() == ["AMAL", "Migrations"]
