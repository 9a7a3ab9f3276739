"""
Artifact loader for compiled Cairo contracts.

This module locates and parses the Sierra class definition and the CASM
compiled class that `scarb build` writes for each contract, and exposes
helpers to inspect what is available in the build output directory.
"""

import asyncio
import json
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Any, List, Optional, Tuple, Union

from starknet_py.common import create_sierra_compiled_contract
from starknet_py.hash.sierra_class_hash import compute_sierra_class_hash

from ..errors import ArtifactParseError, ArtifactReadError

# Get the package root directory
PACKAGE_DIR = Path(__file__).parent.parent
PROJECT_ROOT = PACKAGE_DIR.parent
# Scarb writes dev profile artifacts here
ARTIFACTS_DIR = PROJECT_ROOT / "target" / "dev"

CLASS_DEFINITION_SUFFIX = ".contract_class.json"
COMPILED_CLASS_SUFFIX = ".compiled_contract_class.json"

PathLike = Union[str, Path]


@dataclass(frozen=True)
class CompiledArtifactPair:
    """Parsed Sierra class definition and CASM compiled class of one contract."""

    class_definition: Dict[str, Any]
    compiled_class: Dict[str, Any]

    @property
    def abi(self) -> list:
        abi = self.class_definition.get("abi", [])
        # Older toolchains emit the ABI as an encoded JSON string
        if isinstance(abi, str):
            return json.loads(abi)
        return abi

    def class_definition_json(self) -> str:
        return json.dumps(self.class_definition)

    def compiled_class_json(self) -> str:
        return json.dumps(self.compiled_class)


def _resolve_dir(artifacts_dir: Optional[PathLike]) -> Path:
    return Path(artifacts_dir) if artifacts_dir is not None else ARTIFACTS_DIR


def artifact_paths(
    contract_name: str,
    artifacts_dir: Optional[PathLike] = None
) -> Tuple[Path, Path]:
    """
    Resolve the artifact file paths for a contract.

    Args:
        contract_name: Scarb contract name (e.g., 'voting_Poll')
        artifacts_dir: Build output directory, defaults to target/dev
            beside the package

    Returns:
        (class definition path, compiled class path)

    Raises:
        ValueError: If the contract name is empty
    """
    if not contract_name:
        raise ValueError("Contract name is required")

    directory = _resolve_dir(artifacts_dir)
    return (
        directory / f"{contract_name}{CLASS_DEFINITION_SUFFIX}",
        directory / f"{contract_name}{COMPILED_CLASS_SUFFIX}",
    )


async def _read_json(path: Path) -> Dict[str, Any]:
    try:
        raw = await asyncio.to_thread(path.read_bytes)
    except FileNotFoundError as e:
        raise ArtifactReadError(
            f"Artifact file not found: {path}\n"
            f"Make sure the contract has been compiled with 'scarb build'",
            path,
        ) from e
    except OSError as e:
        raise ArtifactReadError(f"Could not read artifact {path}: {e}", path) from e

    try:
        return json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise ArtifactParseError(f"Malformed JSON in artifact {path}: {e}", path) from e


async def read_compiled_artifacts(
    contract_name: str,
    artifacts_dir: Optional[PathLike] = None
) -> CompiledArtifactPair:
    """
    Read and parse both artifacts of a contract concurrently.

    Either both documents are returned or the call fails; a one-sided
    result is never exposed.

    Args:
        contract_name: Scarb contract name
        artifacts_dir: Build output directory, defaults to target/dev

    Returns:
        CompiledArtifactPair with the parsed documents

    Raises:
        ArtifactReadError: If either file is missing or unreadable
        ArtifactParseError: If either file is not valid JSON
    """
    sierra_path, casm_path = artifact_paths(contract_name, artifacts_dir)

    class_definition, compiled_class = await asyncio.gather(
        _read_json(sierra_path),
        _read_json(casm_path),
    )

    return CompiledArtifactPair(
        class_definition=class_definition,
        compiled_class=compiled_class,
    )


def load_artifacts(
    contract_name: str,
    artifacts_dir: Optional[PathLike] = None
) -> CompiledArtifactPair:
    """Blocking variant of read_compiled_artifacts."""
    return asyncio.run(read_compiled_artifacts(contract_name, artifacts_dir))


def get_abi(contract_name: str, artifacts_dir: Optional[PathLike] = None) -> list:
    """
    Get the ABI for a specific contract.

    Args:
        contract_name: Name of the contract
        artifacts_dir: Build output directory

    Returns:
        Contract ABI as a list
    """
    return load_artifacts(contract_name, artifacts_dir).abi


def compute_class_hash(artifacts: CompiledArtifactPair) -> int:
    """Compute the Sierra class hash the network will assign on declare."""
    compiled = create_sierra_compiled_contract(
        compiled_contract=artifacts.class_definition_json()
    )
    return compute_sierra_class_hash(compiled)


def list_available_contracts(artifacts_dir: Optional[PathLike] = None) -> List[str]:
    """
    List the contracts with a class definition in the build directory.

    Returns:
        Sorted list of contract names
    """
    directory = _resolve_dir(artifacts_dir)
    if not directory.is_dir():
        return []

    return sorted(
        path.name[: -len(CLASS_DEFINITION_SUFFIX)]
        for path in directory.glob(f"*{CLASS_DEFINITION_SUFFIX}")
    )


def validate_artifacts(artifacts_dir: Optional[PathLike] = None) -> Dict[str, bool]:
    """
    Validate that every listed contract has a loadable artifact pair.

    Returns:
        Dictionary mapping contract names to availability status
    """
    status = {}
    for contract_name in list_available_contracts(artifacts_dir):
        try:
            load_artifacts(contract_name, artifacts_dir)
            status[contract_name] = True
        except (ArtifactReadError, ArtifactParseError):
            status[contract_name] = False

    return status
