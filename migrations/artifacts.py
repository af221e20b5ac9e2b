"""
Contract artifact registry
Resolves compiled contracts (ABI + bytecode) by name from a build directory.

Both common layouts are supported:
- Truffle: build/contracts/<Name>.json
- Hardhat: artifacts/contracts/<File>.sol/<Name>.json
"""

import os
import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, List

from .exceptions import ArtifactNotFoundError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ArtifactHandle:
    """Compiled contract artifact"""
    name: str
    abi: List[Dict[str, Any]]
    bytecode: str
    path: str

    @property
    def is_deployable(self) -> bool:
        # Interfaces and abstract contracts compile to empty bytecode
        return self.bytecode not in ("", "0x")


def _normalize_bytecode(raw: Any) -> str:
    if isinstance(raw, dict):
        raw = raw.get("object", "")
    if not raw:
        return "0x"
    raw = str(raw)
    return raw if raw.startswith("0x") else f"0x{raw}"


class ArtifactRegistry:
    def __init__(self, build_dir: str):
        self.build_dir = build_dir
        self._cache: Dict[str, ArtifactHandle] = {}

    def _find(self, name: str):
        direct = os.path.join(self.build_dir, f"{name}.json")
        if os.path.isfile(direct):
            return direct
        for root, _dirs, files in os.walk(self.build_dir):
            if f"{name}.json" in files:
                return os.path.join(root, f"{name}.json")
        return None

    def resolve(self, name: str) -> ArtifactHandle:
        """
        Load the artifact for a contract name.

        Args:
            name: Contract name, e.g. "AMAL"

        Returns:
            The artifact handle

        Raises:
            ArtifactNotFoundError: if no readable artifact exists for the name
        """
        if name in self._cache:
            return self._cache[name]

        path = self._find(name)
        if path is None:
            logger.error(f"No artifact for {name} under {self.build_dir}")
            raise ArtifactNotFoundError(name, f"not found under {self.build_dir}")

        try:
            with open(path, 'r') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ArtifactNotFoundError(name, f"could not read {path}: {e}") from e

        abi = data.get('abi') if isinstance(data, dict) else None
        if not isinstance(abi, list):
            raise ArtifactNotFoundError(name, f"{path} has no ABI")

        artifact = ArtifactHandle(
            name=name,
            abi=abi,
            bytecode=_normalize_bytecode(data.get('bytecode')),
            path=path,
        )
        logger.info(f"Resolved artifact {name} from {path}")
        self._cache[name] = artifact
        return artifact

    def names(self) -> List[str]:
        """List the artifact names available in the build directory."""
        found = set()
        for _root, _dirs, files in os.walk(self.build_dir):
            for filename in files:
                if filename.endswith(".json") and not filename.endswith(".dbg.json"):
                    found.add(filename[:-len(".json")])
        return sorted(found)
