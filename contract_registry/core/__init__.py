"""Core registry types: networks, errors, handles and web3 client construction."""

from .errors import (
    RegistryError,
    ArtifactBundleError,
    RegistryUsageError,
    MalformedAddressBook,
    MalformedArtifact,
    MalformedAbi,
    UnknownContract,
    UnknownNetwork,
    InvalidAddressFormat,
    ClientConstructionFailed
)
from .networks import (
    Network,
    NetworkConfig,
    NetworkCurrency,
    DEFAULT_NETWORK,
    NETWORK_CONFIGS,
    default_network,
    resolve_network,
    get_network_config
)
from .handle import ContractHandle
from .blockchain_client import create_client, bind_contract

__all__ = [
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
    "NetworkCurrency",
    "DEFAULT_NETWORK",
    "NETWORK_CONFIGS",
    "default_network",
    "resolve_network",
    "get_network_config",
    "ContractHandle",
    "create_client",
    "bind_contract",
]
