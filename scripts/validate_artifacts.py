#!/usr/bin/env python3
"""Validate that every compiled contract in the build directory is loadable"""

import sys
from pathlib import Path

# Add parent directory to path so we can import the package
sys.path.insert(0, str(Path(__file__).parent.parent))

from starknet_deployer.artifacts.loader import (
    ARTIFACTS_DIR,
    list_available_contracts,
    load_artifacts,
)
from starknet_deployer.errors import ArtifactParseError, ArtifactReadError


def validate(artifacts_dir=None):
    """Validate that all compiled contracts have a loadable artifact pair"""
    directory = artifacts_dir or ARTIFACTS_DIR
    print(f"Validating artifacts in {directory}...")

    contracts = list_available_contracts(directory)
    print(f"\nFound {len(contracts)} compiled contracts:")

    all_valid = True
    for name in contracts:
        try:
            artifacts = load_artifacts(name, directory)
            abi_len = len(artifacts.abi)
            casm_len = len(artifacts.compiled_class.get("bytecode", []))

            if not casm_len:
                print(f"  ⚠️  {name}: No CASM bytecode found")
                all_valid = False
            else:
                print(f"  ✅ {name}: {abi_len} ABI items, {casm_len} CASM words")
        except (ArtifactReadError, ArtifactParseError) as e:
            print(f"  ❌ {name}: {e}")
            all_valid = False

    print()
    if not contracts:
        print("❌ No contracts found, run 'scarb build' first")
        return 1
    if all_valid:
        print("✅ All contracts valid!")
        return 0
    else:
        print("❌ Some contracts failed validation")
        return 1


if __name__ == "__main__":
    sys.exit(validate(sys.argv[1] if len(sys.argv) > 1 else None))
