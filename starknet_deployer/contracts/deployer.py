"""
Declare-and-deploy driver for compiled Cairo contracts.

This module provides a high-level interface for registering a contract class
on a Starknet network and instantiating it at a fresh address in one step.
"""

import secrets
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

import aiohttp
from loguru import logger
from starknet_py.constants import FIELD_PRIME
from starknet_py.contract import Contract
from starknet_py.net.account.account import Account
from starknet_py.net.client_errors import ClientError
from starknet_py.net.full_node_client import FullNodeClient
from starknet_py.net.signer.stark_curve_signer import KeyPair
from starknet_py.transaction_errors import TransactionFailedError

from ..artifacts.loader import (
    CompiledArtifactPair,
    compute_class_hash,
    read_compiled_artifacts,
)
from ..config import DeployerConfig
from ..errors import ConstructorArgumentError, RemoteError

# JSON-RPC error code for an unknown class hash
CLASS_HASH_NOT_FOUND = 28

REMOTE_FAILURES = (ClientError, TransactionFailedError, aiohttp.ClientError)


@dataclass(frozen=True)
class DeploymentResult:
    """Outcome of one declare-and-deploy."""

    contract_address: int
    class_hash: int
    salt: int
    deploy_transaction_hash: int
    declare_transaction_hash: Optional[int] = None

    @property
    def address_hex(self) -> str:
        return hex(self.contract_address)

    @property
    def was_declared(self) -> bool:
        return self.declare_transaction_hash is not None


def generate_salt() -> int:
    """Random non-zero felt used to make the deployment address unique."""
    return secrets.randbelow(FIELD_PRIME - 1) + 1


def build_constructor_args(
    abi: List[Dict[str, Any]],
    constructor_args: Optional[Mapping[str, Any]] = None
) -> List[Any]:
    """
    Compile constructor arguments against the contract ABI.

    Args:
        abi: Sierra ABI of the class definition
        constructor_args: Values keyed by constructor input name

    Returns:
        Argument values in the order the constructor declares them

    Raises:
        ConstructorArgumentError: If names are missing or unknown
    """
    supplied = dict(constructor_args or {})

    constructor = next(
        (item for item in abi if item.get("type") == "constructor"),
        None
    )
    expected = [inp["name"] for inp in constructor.get("inputs", [])] if constructor else []

    missing = [name for name in expected if name not in supplied]
    unknown = sorted(set(supplied) - set(expected))

    if not constructor and supplied:
        raise ConstructorArgumentError(
            f"Contract has no constructor but arguments were given: {', '.join(unknown)}"
        )
    if missing:
        raise ConstructorArgumentError(
            f"Missing constructor argument(s): {', '.join(missing)}"
        )
    if unknown:
        raise ConstructorArgumentError(
            f"Unknown constructor argument(s): {', '.join(unknown)}. "
            f"Expected: {', '.join(expected) or 'none'}"
        )

    return [supplied[name] for name in expected]


async def connect_account(config: DeployerConfig) -> Tuple[FullNodeClient, Account]:
    """
    Build the node client and the deployer account.

    No request is made unless the chain id has to be fetched from the node.

    Raises:
        RemoteError: If the chain id cannot be fetched
    """
    client = FullNodeClient(node_url=config.rpc_endpoint)

    chain = config.chain_id
    if chain is None:
        try:
            chain = int(await client.get_chain_id(), 16)
        except REMOTE_FAILURES as e:
            raise RemoteError(f"Could not fetch chain id from {config.rpc_endpoint}: {e}") from e
        logger.debug(f"Chain id from node: {hex(chain)}")

    account = Account(
        client=client,
        address=config.account_address,
        key_pair=KeyPair.from_private_key(config.private_key),
        chain=chain,
    )
    return client, account


class ContractDeployer:
    """
    Declares contract classes and deploys instances through an account.

    The class is declared only when the node does not know it yet; the
    deployment goes through the Universal Deployer with a random salt.
    """

    def __init__(self, client: FullNodeClient, account: Account):
        self.client = client
        self.account = account

    async def is_declared(self, class_hash: int) -> bool:
        try:
            await self.client.get_class_by_hash(class_hash)
        except ClientError as e:
            if e.code == CLASS_HASH_NOT_FOUND:
                return False
            raise
        return True

    async def declare_and_deploy(
        self,
        artifacts: CompiledArtifactPair,
        constructor_args: Optional[Mapping[str, Any]] = None,
        salt: Optional[int] = None
    ) -> DeploymentResult:
        """
        Declare the class if needed, then deploy one instance of it.

        Args:
            artifacts: Parsed class definition and compiled class
            constructor_args: Constructor values keyed by input name
            salt: Deployment salt, random when omitted

        Returns:
            DeploymentResult with the new contract address

        Raises:
            ConstructorArgumentError: If arguments do not match the ABI
            RemoteError: If the node or a transaction fails
        """
        calldata = build_constructor_args(artifacts.abi, constructor_args)
        salt = generate_salt() if salt is None else salt
        class_hash = compute_class_hash(artifacts)

        try:
            if await self.is_declared(class_hash):
                logger.info(f"Class {hex(class_hash)} already declared, skipping declare")
                declare_hash = None
                deploy_result = await Contract.deploy_contract_v3(
                    account=self.account,
                    class_hash=class_hash,
                    abi=artifacts.abi,
                    constructor_args=calldata,
                    salt=salt,
                    auto_estimate=True,
                )
            else:
                logger.info(f"Declaring class {hex(class_hash)}...")
                declare_result = await Contract.declare_v3(
                    account=self.account,
                    compiled_contract=artifacts.class_definition_json(),
                    compiled_contract_casm=artifacts.compiled_class_json(),
                    auto_estimate=True,
                )
                await declare_result.wait_for_acceptance()
                declare_hash = declare_result.hash
                logger.info(f"Declare transaction accepted: {hex(declare_hash)}")

                deploy_result = await declare_result.deploy_v3(
                    constructor_args=calldata,
                    salt=salt,
                    auto_estimate=True,
                )

            logger.info(f"Deploy transaction sent: {hex(deploy_result.hash)}")
            await deploy_result.wait_for_acceptance()
        except REMOTE_FAILURES as e:
            raise RemoteError(f"Declare-and-deploy failed: {e}") from e

        return DeploymentResult(
            contract_address=deploy_result.deployed_contract.address,
            class_hash=class_hash,
            salt=salt,
            deploy_transaction_hash=deploy_result.hash,
            declare_transaction_hash=declare_hash,
        )


async def deploy_contract(
    config: DeployerConfig,
    contract_name: str,
    constructor_args: Optional[Mapping[str, Any]] = None,
    artifacts_dir: Optional[Union[str, Path]] = None,
    salt: Optional[int] = None
) -> DeploymentResult:
    """
    Read a contract's artifacts and declare-and-deploy it.

    Args:
        config: Node endpoint and account credentials
        contract_name: Scarb contract name
        constructor_args: Constructor values keyed by input name
        artifacts_dir: Build output directory, defaults to target/dev
        salt: Deployment salt, random when omitted

    Returns:
        DeploymentResult
    """
    artifacts = await read_compiled_artifacts(contract_name, artifacts_dir)
    logger.debug(f"Loaded artifacts for {contract_name}")

    client, account = await connect_account(config)
    logger.info(f"Account connected: {hex(config.account_address)}")

    deployer = ContractDeployer(client, account)
    return await deployer.declare_and_deploy(artifacts, constructor_args, salt)
