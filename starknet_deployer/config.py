"""
Deployer configuration.

Values are read once from the process environment (optionally seeded from a
.env file) into an immutable DeployerConfig that is passed explicitly to the
deployment code.
"""

import os
from dataclasses import dataclass, field
from typing import Mapping, Optional

from dotenv import find_dotenv, load_dotenv
from starknet_py.net.models import StarknetChainId

from .errors import ConfigError

RPC_ENDPOINT_VAR = "RPC_ENDPOINT"
ADDRESS_VAR = "DEPLOYER_ADDRESS"
PRIVATE_KEY_VAR = "DEPLOYER_PRIVATE_KEY"
CHAIN_ID_VAR = "STARKNET_CHAIN_ID"

REQUIRED_VARS = (RPC_ENDPOINT_VAR, ADDRESS_VAR, PRIVATE_KEY_VAR)

CHAIN_ALIASES = {
    "SN_MAIN": StarknetChainId.MAINNET,
    "MAINNET": StarknetChainId.MAINNET,
    "SN_SEPOLIA": StarknetChainId.SEPOLIA,
    "SEPOLIA": StarknetChainId.SEPOLIA,
}


def parse_felt(value: str, name: str) -> int:
    """Parse a hex (0x-prefixed) or decimal field element."""
    text = value.strip()
    try:
        number = int(text, 16) if text.lower().startswith("0x") else int(text)
    except ValueError:
        raise ConfigError(f"{name} must be a hex or decimal number, got {value!r}") from None
    if number < 0:
        raise ConfigError(f"{name} must not be negative, got {value!r}")
    return number


def parse_chain_id(value: str) -> int:
    """
    Parse a chain id given as a known name, a number, or a short string.

    Unknown names such as 'KATANA' are encoded as Cairo short strings, the
    way Starknet chain ids are defined.
    """
    text = value.strip()
    if text.upper() in CHAIN_ALIASES:
        return CHAIN_ALIASES[text.upper()]
    if text.lower().startswith("0x") or text.isdigit():
        return parse_felt(text, CHAIN_ID_VAR)
    if not text.isascii() or len(text) > 31:
        raise ConfigError(f"{CHAIN_ID_VAR} is not a valid chain id: {value!r}")
    return int.from_bytes(text.encode("ascii"), "big")


@dataclass(frozen=True)
class DeployerConfig:
    """Node endpoint and deployer account credentials."""

    rpc_endpoint: str
    account_address: int
    private_key: int = field(repr=False)
    chain_id: Optional[int] = None

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        env_file: Optional[str] = None
    ) -> "DeployerConfig":
        """
        Build the configuration from environment variables.

        Args:
            environ: Mapping to read instead of os.environ
            env_file: .env file loaded into os.environ first (only used
                when environ is not given)

        Returns:
            DeployerConfig

        Raises:
            ConfigError: If a required variable is missing or malformed
        """
        if environ is None:
            load_dotenv(env_file or find_dotenv(usecwd=True))
            environ = os.environ

        missing = [name for name in REQUIRED_VARS if not environ.get(name, "").strip()]
        if missing:
            raise ConfigError(
                f"Missing required environment variable(s): {', '.join(missing)}"
            )

        chain_id = None
        raw_chain = environ.get(CHAIN_ID_VAR, "").strip()
        if raw_chain:
            chain_id = parse_chain_id(raw_chain)

        return cls(
            rpc_endpoint=environ[RPC_ENDPOINT_VAR].strip(),
            account_address=parse_felt(environ[ADDRESS_VAR], ADDRESS_VAR),
            private_key=parse_felt(environ[PRIVATE_KEY_VAR], PRIVATE_KEY_VAR),
            chain_id=chain_id,
        )
