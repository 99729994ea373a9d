"""
Contract Registry

Network-aware access to deployed contracts: look up the deployed address of
a catalogued contract in the network's address book, validate its ABI, and
bind both to a web3 client.

Structure:
- core/: Networks, error types, contract handles, web3 client construction
- infrastructure/: Address book and ABI parsing, artifact sources
- catalogue.py: Table of catalogued contracts
- registry.py: ContractRegistry and convenience functions
- config.py: Settings
"""

__version__ = "0.1.0"

from .config import settings, RegistrySettings
from .core import (
    RegistryError,
    ArtifactBundleError,
    RegistryUsageError,
    MalformedAddressBook,
    MalformedArtifact,
    MalformedAbi,
    UnknownContract,
    UnknownNetwork,
    InvalidAddressFormat,
    ClientConstructionFailed,
    Network,
    NetworkConfig,
    DEFAULT_NETWORK,
    resolve_network,
    get_network_config,
    ContractHandle,
    create_client
)
from .infrastructure import (
    AddressBook,
    ContractAbi,
    ContractArtifact,
    lookup_address,
    load_abi,
    load_artifact,
    ArtifactSource,
    FileSystemArtifactSource,
    PackageArtifactSource,
    InMemoryArtifactSource,
    HttpArtifactSource
)
from .catalogue import CONTRACTS, ContractEntry
from .registry import ContractRegistry, default_registry, build_handle, get_contract

__all__ = [
    "settings",
    "RegistrySettings",
    "RegistryError",
    "ArtifactBundleError",
    "RegistryUsageError",
    "MalformedAddressBook",
    "MalformedArtifact",
    "MalformedAbi",
    "UnknownContract",
    "UnknownNetwork",
    "InvalidAddressFormat",
    "ClientConstructionFailed",
    "Network",
    "NetworkConfig",
    "DEFAULT_NETWORK",
    "resolve_network",
    "get_network_config",
    "ContractHandle",
    "create_client",
    "AddressBook",
    "ContractAbi",
    "ContractArtifact",
    "lookup_address",
    "load_abi",
    "load_artifact",
    "ArtifactSource",
    "FileSystemArtifactSource",
    "PackageArtifactSource",
    "InMemoryArtifactSource",
    "HttpArtifactSource",
    "CONTRACTS",
    "ContractEntry",
    "ContractRegistry",
    "default_registry",
    "build_handle",
    "get_contract",
    "__version__"
]
