"""Web3 client construction for registry networks."""

import logging
from typing import Any, Dict, List, Optional, Union

from web3 import AsyncWeb3, Web3
from web3.middleware import ExtraDataToPOAMiddleware

from ..config import settings
from .errors import ClientConstructionFailed
from .networks import NETWORK_CONFIGS, Network, resolve_network

logger = logging.getLogger(__name__)


def create_client(
    network: Union[str, Network],
    rpc_url: Optional[str] = None,
    asynchronous: bool = False
) -> Union[Web3, AsyncWeb3]:
    """
    Create a web3 client for a network.

    No request is sent; connectivity is checked on first use.

    Args:
        network: Network or network name
        rpc_url: RPC endpoint (defaults to settings.rpc_url, then the network's first RPC URL)
        asynchronous: Return an AsyncWeb3 instead of a Web3

    Returns:
        Configured Web3 or AsyncWeb3 instance

    Raises:
        UnknownNetwork: If strict resolution is configured and the name is unknown
        ClientConstructionFailed: If no RPC URL is known or the client cannot be built
    """
    resolved = resolve_network(network, strict=settings.strict_network)
    network_config = NETWORK_CONFIGS[resolved]
    network_name = resolved.value

    url = rpc_url or settings.rpc_url or next(iter(network_config.rpc_urls), None)
    if not url:
        raise ClientConstructionFailed("No RPC URL configured", network=network_name)

    try:
        if asynchronous:
            w3: Any = AsyncWeb3(AsyncWeb3.AsyncHTTPProvider(url))
        else:
            w3 = Web3(Web3.HTTPProvider(url))

        # Add PoA middleware for Polygon chains
        if network_config.is_poa:
            w3.middleware_onion.inject(ExtraDataToPOAMiddleware, layer=0)

    except Exception as e:
        logger.error(f"Error creating web3 client for {network_name}: {e}")
        raise ClientConstructionFailed(f"Could not create web3 client: {e}", network=network_name) from e

    logger.info(f"Created {'async ' if asynchronous else ''}web3 client for {network_name} (chain {network_config.chain_id}) at {url}")
    return w3


def bind_contract(
    client: Any,
    address: str,
    abi: List[Dict[str, Any]],
    contract_name: Optional[str] = None,
    network: Optional[str] = None
) -> Any:
    """
    Build a web3 contract object on a caller-supplied client.

    Raises:
        ClientConstructionFailed: If the client cannot build the contract
    """
    try:
        return client.eth.contract(address=address, abi=abi)
    except Exception as e:
        logger.error(f"Error binding contract {contract_name} at {address}: {e}")
        raise ClientConstructionFailed(
            f"Could not construct contract object: {e}",
            contract=contract_name,
            network=network
        ) from e
