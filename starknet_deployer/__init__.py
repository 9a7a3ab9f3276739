"""
Starknet Contract Deployer Package

Reads the compiled artifacts of a Cairo contract and declares and deploys
it to a Starknet network in one step.
"""

__version__ = "1.0.0"

from .artifacts.loader import (
    CompiledArtifactPair,
    get_abi,
    list_available_contracts,
    load_artifacts,
    read_compiled_artifacts,
    validate_artifacts,
)
from .config import DeployerConfig
from .contracts.deployer import (
    ContractDeployer,
    DeploymentResult,
    build_constructor_args,
    deploy_contract,
)
from .errors import (
    ArtifactParseError,
    ArtifactReadError,
    ConfigError,
    ConstructorArgumentError,
    DeployerError,
    RemoteError,
)

__all__ = [
    'CompiledArtifactPair',
    'get_abi',
    'list_available_contracts',
    'load_artifacts',
    'read_compiled_artifacts',
    'validate_artifacts',
    'DeployerConfig',
    'ContractDeployer',
    'DeploymentResult',
    'build_constructor_args',
    'deploy_contract',
    'ArtifactParseError',
    'ArtifactReadError',
    'ConfigError',
    'ConstructorArgumentError',
    'DeployerError',
    'RemoteError',
]
