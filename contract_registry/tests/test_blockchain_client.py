"""Tests for web3 client construction."""

from unittest.mock import patch

import pytest
from web3 import AsyncWeb3, Web3

from contract_registry.config import settings
from contract_registry.core.blockchain_client import create_client
from contract_registry.core.errors import ClientConstructionFailed, UnknownNetwork
from contract_registry.core.networks import Network


class TestCreateClient:
    """Test creating web3 clients for registry networks."""

    def setup_method(self):
        self._rpc_patch = patch.object(settings, "rpc_url", None)
        self._rpc_patch.start()

    def teardown_method(self):
        self._rpc_patch.stop()

    def test_uses_first_network_rpc(self):
        w3 = create_client(Network.TESTNET)

        assert isinstance(w3, Web3)
        assert w3.provider.endpoint_uri == "https://rpc.ankr.com/polygon_mumbai"

    def test_explicit_rpc_url(self):
        w3 = create_client("kepler", rpc_url="http://localhost:8545")
        assert w3.provider.endpoint_uri == "http://localhost:8545"

    def test_settings_rpc_url(self):
        with patch.object(settings, "rpc_url", "http://127.0.0.1:9545"):
            w3 = create_client(Network.KEPLER)
        assert w3.provider.endpoint_uri == "http://127.0.0.1:9545"

    def test_async_client(self):
        w3 = create_client(Network.KEPLER, asynchronous=True)
        assert isinstance(w3, AsyncWeb3)

    def test_poa_middleware_injected(self):
        w3 = create_client(Network.KEPLER)
        assert "ExtraDataToPOAMiddleware" in repr(list(w3.middleware_onion))

    def test_network_without_rpc(self):
        """Mainnet has no published RPC endpoints yet."""
        with pytest.raises(ClientConstructionFailed) as exc_info:
            create_client(Network.MAINNET)
        assert exc_info.value.network == "mainnet"

    def test_mainnet_with_override(self):
        w3 = create_client(Network.MAINNET, rpc_url="http://localhost:8545")
        assert w3.provider.endpoint_uri == "http://localhost:8545"

    def test_unknown_network_is_rejected(self):
        with patch.object(settings, "strict_network", True):
            with pytest.raises(UnknownNetwork):
                create_client("tesnet")

    def test_unknown_network_falls_back_when_permissive(self):
        with patch.object(settings, "strict_network", False), \
                patch.object(settings, "default_network", "testnet"):
            w3 = create_client("tesnet")
        assert w3.provider.endpoint_uri == "https://rpc.ankr.com/polygon_mumbai"
