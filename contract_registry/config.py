"""Configuration management for the contract registry."""

from typing import Literal, Optional
from pathlib import Path
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# The optional .env file lives in the project root, next to the package
PROJECT_DIR = Path(__file__).parent.parent
ENV_FILE_PATH = PROJECT_DIR / ".env"


class RegistrySettings(BaseSettings):
    """Settings for network selection and artifact lookup."""

    model_config = SettingsConfigDict(
        env_prefix="CONTRACTS_",
        env_file=str(ENV_FILE_PATH),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Network selection
    default_network: Literal["mainnet", "kepler", "testnet"] = Field(
        default="kepler",
        description="Network used when none is given or an unknown name is resolved permissively"
    )
    strict_network: bool = Field(
        default=True,
        description="Reject unknown network names in registry lookups and create_client instead of falling back to the default"
    )

    # Artifact bundle produced by the contract build pipeline
    artifacts_dir: str = Field(
        default="./publish",
        description="Directory holding <network>.json address books and ABI/<Name>.json artifacts"
    )

    # Client construction
    rpc_url: Optional[str] = Field(default=None, description="RPC endpoint overriding the network defaults")

    # Environment
    environment: str = Field(default="development", description="Environment (development, production)")
    debug: bool = Field(default=False, description="Debug mode")

    @classmethod
    def from_env(cls) -> "RegistrySettings":
        """Create settings from environment variables."""
        return cls()

    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment.lower() == "production"

    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment.lower() == "development"


# Global settings instance
settings = RegistrySettings.from_env()
