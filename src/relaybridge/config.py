"""Application configuration using pydantic-settings.

Credentials and RPC endpoints are read once from the environment (or .env)
and passed into the API and chain clients.
"""

from functools import lru_cache
from typing import Optional

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from relaybridge.chains import BASE_SEPOLIA_CHAIN_ID, CHAINS, SEPOLIA_CHAIN_ID
from relaybridge.exceptions import ConfigurationError


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # ======================
    # Relay API
    # ======================
    relay_api_key: str = Field(default="", description="Relay API key sent as bearer token")
    relay_api_url: str = Field(
        default="https://api.relay.link", description="Relay API base URL"
    )
    relay_source: str = Field(
        default="my-dapp", description="Value of the x-relay-source header"
    )
    relay_referrer: str = Field(
        default="relay.link", description="Referrer used for quotes and indexing"
    )
    http_timeout: float = Field(default=30.0, description="HTTP request timeout in seconds")

    # ======================
    # Signing
    # ======================
    private_key: Optional[str] = Field(
        default=None, description="Hex private key used to sign transfers"
    )

    # ======================
    # Chain RPC Endpoints
    # ======================
    eth_sepolia_rpc_url: str = Field(
        default=CHAINS[SEPOLIA_CHAIN_ID].default_rpc_url,
        validation_alias=AliasChoices("ETH_SEPOLIA_RPC", "ETH_SEPOLIA_RPC_URL"),
        description="Ethereum Sepolia RPC URL",
    )
    base_sepolia_rpc_url: str = Field(
        default=CHAINS[BASE_SEPOLIA_CHAIN_ID].default_rpc_url,
        validation_alias=AliasChoices("BASE_SEPOLIA_RPC", "BASE_SEPOLIA_RPC_URL"),
        description="Base Sepolia RPC URL",
    )

    # ======================
    # Polling
    # ======================
    poll_interval: float = Field(default=2.0, description="Seconds between status checks")
    poll_timeout: float = Field(default=60.0, description="Seconds before polling gives up")
    receipt_timeout: int = Field(
        default=120, description="Seconds to wait for a transaction receipt"
    )

    debug: bool = Field(default=False, description="Enable debug logging")

    @field_validator("eth_sepolia_rpc_url", "base_sepolia_rpc_url")
    @classmethod
    def validate_rpc_url(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("RPC URL must not be empty")
        return value.strip()

    @property
    def has_signer(self) -> bool:
        """Check if a signing key is configured."""
        return bool(self.private_key)

    @property
    def rpc_urls(self) -> dict[int, str]:
        """Ordered chain ID -> RPC URL table."""
        return {
            SEPOLIA_CHAIN_ID: self.eth_sepolia_rpc_url,
            BASE_SEPOLIA_CHAIN_ID: self.base_sepolia_rpc_url,
        }

    def get_rpc_url(self, chain_id: int) -> str:
        """Get RPC URL for a chain.

        Raises:
            ConfigurationError: If no endpoint is configured for the chain
        """
        url = self.rpc_urls.get(chain_id)
        if not url:
            supported = ", ".join(str(cid) for cid in self.rpc_urls)
            raise ConfigurationError(
                f"No RPC endpoint configured for chain {chain_id} (supported: {supported})"
            )
        return url

    def require_private_key(self) -> str:
        """Return the signing key or fail before any network call."""
        if not self.private_key:
            raise ConfigurationError("PRIVATE_KEY not found in environment variables")
        return self.private_key

    def get_safe_dict(self) -> dict:
        """Return settings dict with secrets redacted."""
        return {
            "relay_api_url": self.relay_api_url,
            "relay_api_key": "***" if self.relay_api_key else "(not set)",
            "relay_source": self.relay_source,
            "relay_referrer": self.relay_referrer,
            "private_key": "***" if self.private_key else "(not set)",
            "chains": {
                str(chain_id): {"name": CHAINS[chain_id].name, "rpc": url}
                for chain_id, url in self.rpc_urls.items()
            },
            "polling": {
                "interval": self.poll_interval,
                "timeout": self.poll_timeout,
            },
            "debug": self.debug,
        }


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
