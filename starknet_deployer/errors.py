"""
Error types raised by the deployer.

Every error carries the process exit code the CLI translates it to.
"""

from pathlib import Path
from typing import Optional


class DeployerError(Exception):
    """Base class for all deployer failures."""

    exit_code = 1


class ConfigError(DeployerError):
    """Required configuration is absent or malformed."""

    exit_code = 3


class ArtifactReadError(DeployerError):
    """An artifact file is missing or could not be read."""

    exit_code = 4

    def __init__(self, message: str, path: Optional[Path] = None):
        super().__init__(message)
        self.path = path


class ArtifactParseError(DeployerError):
    """An artifact file is not valid UTF-8 JSON."""

    exit_code = 5

    def __init__(self, message: str, path: Optional[Path] = None):
        super().__init__(message)
        self.path = path


class ConstructorArgumentError(DeployerError, ValueError):
    """Constructor arguments do not match the contract ABI."""

    exit_code = 6


class RemoteError(DeployerError):
    """The node rejected a request or a transaction failed."""

    exit_code = 7
