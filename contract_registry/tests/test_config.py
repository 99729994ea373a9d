"""Basic tests for registry settings."""

import pytest
from pydantic import ValidationError

from contract_registry.config import RegistrySettings


class TestRegistrySettings:
    """Test settings defaults and environment overrides."""

    def test_defaults(self, monkeypatch):
        for name in ("CONTRACTS_DEFAULT_NETWORK", "CONTRACTS_STRICT_NETWORK", "CONTRACTS_ARTIFACTS_DIR", "CONTRACTS_ENVIRONMENT"):
            monkeypatch.delenv(name, raising=False)

        config = RegistrySettings(_env_file=None)

        assert config.default_network == "kepler"
        assert config.strict_network is True
        assert config.artifacts_dir == "./publish"
        assert config.is_development()

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("CONTRACTS_DEFAULT_NETWORK", "testnet")
        monkeypatch.setenv("CONTRACTS_STRICT_NETWORK", "false")
        monkeypatch.setenv("CONTRACTS_ENVIRONMENT", "production")

        config = RegistrySettings(_env_file=None)

        assert config.default_network == "testnet"
        assert config.strict_network is False
        assert config.is_production()

    def test_rejects_unknown_default_network(self):
        with pytest.raises(ValidationError):
            RegistrySettings(_env_file=None, default_network="goerli")
