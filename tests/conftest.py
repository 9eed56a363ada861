"""Pytest configuration and fixtures."""

import os

import pytest

# Set test environment
os.environ["RELAY_API_KEY"] = "test-api-key"
os.environ["DEBUG"] = "false"
os.environ.pop("PRIVATE_KEY", None)

from relaybridge.config import Settings, get_settings

# Well-known development key (Hardhat account #0), never funded on real networks
TEST_PRIVATE_KEY = "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80"
TEST_ADDRESS = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"

USDC_SEPOLIA = "0x1c7D4B196Cb0C7B01d743Fbc6116a902379C7238"
USDC_BASE_SEPOLIA = "0x036CbD53842c5426634e7929541eC2318f3dCF7e"
RECIPIENT = "0x3e34b27a9bf37D8424e1a58aC7fc4D06914B76B9"

# Trimmed quote body as returned by POST /quote
SAMPLE_QUOTE = {
    "steps": [
        {
            "id": "deposit",
            "action": "Confirm transaction in your wallet",
            "description": "Depositing funds to the relayer to execute the swap for USDC",
            "kind": "transaction",
            "requestId": "0x1edf2158f0075fbaf75f64b8db9b7f56d1dcac1ac1eed7ccd8a44587b8e4596f",
            "depositAddress": "0x3e34b27a9bf37d8424e1a58ac7fc4d06914b76b9",
            "items": [
                {
                    "status": "incomplete",
                    "data": {
                        "from": TEST_ADDRESS,
                        "to": "0x1c7d4b196cb0c7b01d743fbc6116a902379c7238",
                        "data": "0xa9059cbb0000000000000000000000003e34b27a9bf37d8424e1a58ac7fc4d06914b76b9000000000000000000000000000000000000000000000000000000000019f0a0",
                        "value": "0",
                        "chainId": 11155111,
                        "gas": "59745",
                        "maxFeePerGas": "135695787",
                        "maxPriorityFeePerGas": "135695776",
                    },
                    "check": {
                        "endpoint": "/intents/status?requestId=0x1edf2158f0075fbaf75f64b8db9b7f56d1dcac1ac1eed7ccd8a44587b8e4596f",
                        "method": "GET",
                    },
                }
            ],
        }
    ],
    "fees": {"relayer": {"amount": "1000"}},
    "details": {"currencyOut": {"amountFormatted": "1.69"}},
}


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Make get_settings() re-read the environment for each test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings() -> Settings:
    """Settings with a signing key and no .env file."""
    return Settings(
        _env_file=None,
        relay_api_key="test-api-key",
        private_key=TEST_PRIVATE_KEY,
        eth_sepolia_rpc_url="https://sepolia.example",
        base_sepolia_rpc_url="https://base-sepolia.example",
    )


@pytest.fixture
def settings_no_key() -> Settings:
    """Settings without a signing key."""
    return Settings(_env_file=None, relay_api_key="test-api-key", private_key=None)
