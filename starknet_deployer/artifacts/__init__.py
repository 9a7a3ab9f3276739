"""Artifact loading utilities for compiled Cairo contracts."""
from .loader import (
    CompiledArtifactPair,
    get_abi,
    load_artifacts,
    read_compiled_artifacts,
)

__all__ = [
    "CompiledArtifactPair",
    "get_abi",
    "load_artifacts",
    "read_compiled_artifacts",
]
