"""
Supported networks and their chain metadata.

Each network has exactly one address book in the artifact bundle. The chain
metadata follows EIP-3085 so it can be handed to wallets unchanged.
"""

import logging
from enum import Enum
from typing import Any, Dict, List, Optional, Union
from pydantic import BaseModel, Field

from ..config import settings
from .errors import UnknownNetwork

logger = logging.getLogger(__name__)


class Network(str, Enum):
    """Networks with a published contract deployment."""
    MAINNET = "mainnet"
    KEPLER = "kepler"
    TESTNET = "testnet"


# Network that all services use unless configured otherwise
DEFAULT_NETWORK = Network.KEPLER

CHAIN_ICON_URL = "https://icons.llamao.fi/icons/chains/rsz_polygon.jpg"
SUBQUERY_IPFS_URL = "https://unauthipfs.subquery.network/ipfs/api/v0"

# Chains whose blocks carry POA extra data
POA_CHAIN_IDS = {137, 80001}


class NetworkCurrency(BaseModel):
    """Native currency of a chain."""

    name: str
    symbol: str
    decimals: int = 18


class NetworkConfig(BaseModel):
    """Chain metadata and service endpoints for one network."""

    chain_id: int = Field(description="EIP-155 chain id")
    chain_name: str = Field(default="", description="Human readable chain name")
    rpc_urls: List[str] = Field(default_factory=list)
    block_explorer_urls: List[str] = Field(default_factory=list)
    icon_urls: List[str] = Field(default_factory=list)
    native_currency: NetworkCurrency
    subql_urls: List[str] = Field(default_factory=list, description="SubQuery network GraphQL endpoints")
    ipfs_urls: List[str] = Field(default_factory=list)
    explorer_urls: List[str] = Field(default_factory=list)

    @property
    def is_poa(self) -> bool:
        return self.chain_id in POA_CHAIN_IDS

    def to_add_chain_params(self) -> Dict[str, Any]:
        """
        Render the wallet_addEthereumChain (EIP-3085) parameters.

        Returns:
            Dictionary with camelCase keys and a hex chain id
        """
        return {
            "chainId": hex(self.chain_id),
            "chainName": self.chain_name,
            "rpcUrls": list(self.rpc_urls),
            "blockExplorerUrls": list(self.block_explorer_urls),
            "iconUrls": list(self.icon_urls),
            "nativeCurrency": self.native_currency.model_dump(),
        }


_MATIC = NetworkCurrency(name="Matic Token", symbol="MATIC", decimals=18)

NETWORK_CONFIGS: Dict[Network, NetworkConfig] = {
    # Mainnet deployment has not published endpoints yet
    Network.MAINNET: NetworkConfig(
        chain_id=137,
        icon_urls=[CHAIN_ICON_URL],
        native_currency=_MATIC,
    ),
    Network.KEPLER: NetworkConfig(
        chain_id=137,
        chain_name="Polygon",
        rpc_urls=[
            "https://polygon-rpc.com",
            "https://polygon.api.onfinality.io/rpc",
        ],
        block_explorer_urls=["https://polygonscan.com"],
        icon_urls=[CHAIN_ICON_URL],
        native_currency=_MATIC,
        subql_urls=["https://api.subquery.network/sq/subquery/kepler-network"],
        ipfs_urls=[SUBQUERY_IPFS_URL],
        explorer_urls=["https://kepler.subquery.network"],
    ),
    Network.TESTNET: NetworkConfig(
        chain_id=80001,
        chain_name="Polygon Mumbai",
        rpc_urls=[
            "https://rpc.ankr.com/polygon_mumbai",
            "https://polygon-mumbai.api.onfinality.io/rpc",
        ],
        block_explorer_urls=["https://mumbai.polygonscan.com"],
        icon_urls=[CHAIN_ICON_URL],
        native_currency=_MATIC,
        subql_urls=["https://api.subquery.network/sq/subquery/kepler-testnet"],
        ipfs_urls=[SUBQUERY_IPFS_URL],
        explorer_urls=["https://kepler.thechaindata.com"],
    ),
}


def default_network() -> Network:
    """Get the configured default network."""
    return Network(settings.default_network)


def resolve_network(
    name: Union[str, Network],
    *,
    strict: bool = False,
    default: Optional[Network] = None
) -> Network:
    """
    Get the network from its lower-case name.

    Matching is case-sensitive. Unknown names fall back to the default
    network unless strict resolution is requested.

    Args:
        name: Network name such as "mainnet", "kepler" or "testnet"
        strict: Raise UnknownNetwork instead of falling back
        default: Fallback network (the configured default when omitted)

    Returns:
        The matching Network

    Raises:
        UnknownNetwork: If strict is set and the name is not recognized
    """
    if isinstance(name, Network):
        return name

    for network in Network:
        if network.value == name:
            return network

    if strict:
        raise UnknownNetwork(
            f"Unknown network {name!r}. Available: {[n.value for n in Network]}",
            network=str(name)
        )

    fallback = default or default_network()
    logger.warning(f"Unknown network {name!r}, falling back to {fallback.value}")
    return fallback


def get_network_config(network: Union[str, Network]) -> NetworkConfig:
    """Get the chain metadata for a network."""
    return NETWORK_CONFIGS[resolve_network(network)]
