"""
Command line entry point: declare and deploy a compiled Cairo contract.

Usage:
    starknet-deploy voting_Poll
    starknet-deploy my_token --arg owner=0x123 --arg supply=1000
"""

import argparse
import asyncio
import json
import sys
from typing import Any, Dict, List, Optional

from loguru import logger

from .config import DeployerConfig
from .contracts.deployer import deploy_contract
from .errors import DeployerError

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<level>{message}</level>"
)


def configure_logging(verbose: bool = False) -> None:
    logger.remove()
    logger.add(sys.stderr, format=LOG_FORMAT, level="DEBUG" if verbose else "INFO")


def parse_value(text: str) -> Any:
    """Integers (decimal or 0x hex) become ints, everything else stays a string."""
    try:
        if text.lower().startswith("0x"):
            return int(text, 16)
        return int(text)
    except ValueError:
        return text


def _felt(text: str) -> int:
    value = parse_value(text)
    if not isinstance(value, int):
        raise argparse.ArgumentTypeError(f"not a number: {text!r}")
    return value


def _named_arg(text: str) -> tuple:
    name, sep, value = text.partition("=")
    if not sep or not name:
        raise argparse.ArgumentTypeError(f"expected NAME=VALUE, got {text!r}")
    return name, parse_value(value)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="starknet-deploy",
        description="Declare and deploy a compiled Cairo contract to Starknet",
    )
    parser.add_argument("contract", help="contract name as written by scarb build (e.g. voting_Poll)")
    parser.add_argument(
        "--arg", dest="args", action="append", type=_named_arg, default=[],
        metavar="NAME=VALUE", help="constructor argument (repeatable)",
    )
    parser.add_argument(
        "--constructor-args", metavar="JSON",
        help="constructor arguments as a JSON object (numeric strings become integers)",
    )
    parser.add_argument("--artifacts-dir", help="build output directory (default: target/dev)")
    parser.add_argument("--salt", type=_felt, help="deployment salt (default: random)")
    parser.add_argument("--env-file", help=".env file to load")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser


def collect_constructor_args(
    parser: argparse.ArgumentParser,
    raw_json: Optional[str],
    named: List[tuple]
) -> Dict[str, Any]:
    constructor_args: Dict[str, Any] = {}
    if raw_json:
        try:
            constructor_args = json.loads(raw_json)
        except json.JSONDecodeError as e:
            parser.error(f"--constructor-args is not valid JSON: {e}")
        if not isinstance(constructor_args, dict):
            parser.error("--constructor-args must be a JSON object")
        constructor_args = {
            name: parse_value(value) if isinstance(value, str) else value
            for name, value in constructor_args.items()
        }
    constructor_args.update(dict(named))
    return constructor_args


def main(argv: Optional[List[str]] = None) -> int:
    """Run one deployment and return the process exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)
    constructor_args = collect_constructor_args(parser, args.constructor_args, args.args)

    configure_logging(args.verbose)

    try:
        config = DeployerConfig.from_env(env_file=args.env_file)
        print(f"Deploying {args.contract} from account {hex(config.account_address)}")

        result = asyncio.run(deploy_contract(
            config,
            args.contract,
            constructor_args=constructor_args,
            artifacts_dir=args.artifacts_dir,
            salt=args.salt,
        ))
    except DeployerError as e:
        logger.error(f"{type(e).__name__}: {e}")
        return e.exit_code
    except Exception as e:
        logger.exception(f"Unexpected error: {e}")
        return 1

    print(f"✅ Contract has been deployed with the address: {result.address_hex}")
    return 0


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
