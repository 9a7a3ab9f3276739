"""Shared fixtures for deployer tests"""

import json

import pytest

from starknet_deployer.artifacts.loader import CompiledArtifactPair


SIERRA_ABI = [
    {
        "type": "impl",
        "name": "PollImpl",
        "interface_name": "voting::IPoll",
    },
    {
        "type": "constructor",
        "name": "constructor",
        "inputs": [
            {"name": "owner", "type": "core::starknet::contract_address::ContractAddress"},
            {"name": "duration", "type": "core::integer::u64"},
        ],
    },
]


@pytest.fixture
def class_definition():
    """Minimal Sierra class definition"""
    return {
        "sierra_program": ["0x1", "0x2"],
        "contract_class_version": "0.1.0",
        "entry_points_by_type": {"EXTERNAL": [], "L1_HANDLER": [], "CONSTRUCTOR": []},
        "abi": SIERRA_ABI,
    }


@pytest.fixture
def compiled_class():
    """Minimal CASM compiled class"""
    return {
        "prime": "0x800000000000011000000000000000000000000000000000000000000000001",
        "compiler_version": "2.6.3",
        "bytecode": ["0xa0680017fff8000", "0x7"],
        "entry_points_by_type": {"EXTERNAL": [], "L1_HANDLER": [], "CONSTRUCTOR": []},
    }


@pytest.fixture
def artifacts(class_definition, compiled_class):
    return CompiledArtifactPair(
        class_definition=class_definition,
        compiled_class=compiled_class,
    )


@pytest.fixture
def artifacts_dir(tmp_path, class_definition, compiled_class):
    """Build directory holding one compiled contract named voting_Poll"""
    (tmp_path / "voting_Poll.contract_class.json").write_text(json.dumps(class_definition))
    (tmp_path / "voting_Poll.compiled_contract_class.json").write_text(json.dumps(compiled_class))
    return tmp_path
