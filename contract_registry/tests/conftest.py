"""Shared fixtures for contract registry tests."""

import json

import pytest

from contract_registry.catalogue import ContractEntry
from contract_registry.config import RegistrySettings
from contract_registry.infrastructure.artifact_source import InMemoryArtifactSource
from contract_registry.registry import ContractRegistry

STAKING_ADDRESS = "0x000000000000000000000000000000000000dEaD"
SETTINGS_ADDRESS = "0x1111111111111111111111111111111111111111"
SQTOKEN_ADDRESS = "0x2222222222222222222222222222222222222222"

STAKE_ABI = [
    {
        "type": "function",
        "name": "stake",
        "inputs": [
            {"name": "amount", "type": "uint256", "internalType": "uint256"}
        ],
        "outputs": [],
        "stateMutability": "nonpayable"
    },
    {
        "type": "event",
        "name": "Staked",
        "inputs": [
            {"name": "account", "type": "address", "indexed": True},
            {"name": "amount", "type": "uint256", "indexed": False}
        ],
        "anonymous": False
    }
]

SETTINGS_ABI = [
    {
        "type": "function",
        "name": "getContractAddress",
        "inputs": [{"name": "sc", "type": "uint8"}],
        "outputs": [{"name": "", "type": "address"}],
        "stateMutability": "view"
    }
]

TOKEN_ABI = [
    {
        "type": "function",
        "name": "transfer",
        "inputs": [
            {"name": "to", "type": "address"},
            {"name": "value", "type": "uint256"}
        ],
        "outputs": [{"name": "", "type": "bool"}],
        "stateMutability": "nonpayable"
    },
    {
        "type": "event",
        "name": "Transfer",
        "inputs": [
            {"name": "from", "type": "address", "indexed": True},
            {"name": "to", "type": "address", "indexed": True},
            {"name": "value", "type": "uint256", "indexed": False}
        ],
        "anonymous": False
    }
]

TEST_CONTRACTS = [
    ContractEntry(name="Settings", accessor="settings", artifact="Settings"),
    ContractEntry(name="Staking", accessor="staking", artifact="Staking"),
    ContractEntry(name="SQToken", accessor="sqtoken", artifact="SQToken", layer="root"),
]


@pytest.fixture
def testnet_book():
    """Flat address book as published by the older deployment scripts."""
    return {
        "Settings": {"address": SETTINGS_ADDRESS},
        "Staking": {"address": STAKING_ADDRESS.lower()},
        "SQToken": {"address": SQTOKEN_ADDRESS},
    }


@pytest.fixture
def kepler_book():
    """Layered address book with root and child chain deployments."""
    return {
        "root": {
            "SQToken": {"address": SQTOKEN_ADDRESS, "bytecodeHash": "0xabc"},
        },
        "child": {
            "Settings": {"address": SETTINGS_ADDRESS},
            "Staking": {
                "innerAddress": "0x3333333333333333333333333333333333333333",
                "address": STAKING_ADDRESS,
                "bytecodeHash": "0xdef",
                "lastUpdate": "Tue, 02 Jan 2024 10:00:00 GMT"
            },
        },
    }


@pytest.fixture
def artifacts():
    """One artifact per shape: bare ABI, Hardhat wrapper, Foundry wrapper."""
    return {
        "Settings": json.dumps(SETTINGS_ABI),
        "Staking": json.dumps({
            "contractName": "Staking",
            "abi": STAKE_ABI,
            "bytecode": "0x6080",
            "deployedBytecode": "0x6081"
        }),
        "SQToken": json.dumps({
            "abi": TOKEN_ABI,
            "bytecode": {"object": "0x6082", "linkReferences": {}}
        }),
    }


@pytest.fixture
def registry_settings():
    return RegistrySettings(default_network="kepler", strict_network=True)


@pytest.fixture
def source(testnet_book, kepler_book, artifacts):
    return InMemoryArtifactSource(
        address_books={
            "testnet": json.dumps(testnet_book),
            "kepler": json.dumps(kepler_book),
        },
        artifacts=artifacts
    )


@pytest.fixture
def registry(source, registry_settings):
    return ContractRegistry(source, contracts=TEST_CONTRACTS, registry_settings=registry_settings)
