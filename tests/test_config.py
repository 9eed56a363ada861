"""Tests for settings."""

import pytest
from pydantic import ValidationError

from relaybridge.config import Settings, get_settings
from relaybridge.exceptions import ConfigurationError


class TestSettings:
    """Tests for Settings."""

    def test_defaults(self, settings_no_key):
        assert settings_no_key.relay_api_url == "https://api.relay.link"
        assert settings_no_key.relay_source == "my-dapp"
        assert settings_no_key.poll_interval == 2.0
        assert settings_no_key.poll_timeout == 60.0
        assert settings_no_key.has_signer is False

    def test_rpc_table(self, settings):
        assert list(settings.rpc_urls) == [11155111, 84532]
        assert settings.get_rpc_url(84532) == "https://base-sepolia.example"

    def test_unknown_chain(self, settings):
        with pytest.raises(ConfigurationError, match="chain 1 "):
            settings.get_rpc_url(1)

    def test_empty_rpc_url_rejected_at_load(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, eth_sepolia_rpc_url="  ")

    def test_rpc_url_from_env(self, monkeypatch):
        monkeypatch.setenv("ETH_SEPOLIA_RPC", "https://rpc.from.env")

        assert Settings(_env_file=None).eth_sepolia_rpc_url == "https://rpc.from.env"

    def test_private_key_from_env(self, monkeypatch):
        monkeypatch.setenv("PRIVATE_KEY", "0x01")

        settings = get_settings()
        assert settings.require_private_key() == "0x01"
        assert get_settings() is settings

    def test_require_private_key(self, settings_no_key):
        with pytest.raises(ConfigurationError, match="PRIVATE_KEY"):
            settings_no_key.require_private_key()

    def test_safe_dict_redacts_secrets(self, settings):
        data = settings.get_safe_dict()

        assert data["relay_api_key"] == "***"
        assert data["private_key"] == "***"
        assert data["chains"]["84532"]["name"] == "Base Sepolia"
        assert "ac0974" not in str(data)
