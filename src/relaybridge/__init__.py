"""Relay Protocol bridging client with on-chain transfer helpers."""

from relaybridge.chain_client import ChainClient
from relaybridge.config import Settings, get_settings
from relaybridge.exceptions import (
    ChainError,
    ConfigurationError,
    PollTimeoutError,
    RelayApiError,
    RelayBridgeError,
)
from relaybridge.models import (
    BalanceResult,
    Quote,
    QuoteRequest,
    QuoteStep,
    StatusResult,
    StepItem,
    TransferRequest,
)
from relaybridge.poller import wait_for_success
from relaybridge.relay_api import RelayApiClient

__version__ = "0.1.0"

__all__ = [
    "BalanceResult",
    "ChainClient",
    "ChainError",
    "ConfigurationError",
    "PollTimeoutError",
    "Quote",
    "QuoteRequest",
    "QuoteStep",
    "RelayApiClient",
    "RelayApiError",
    "RelayBridgeError",
    "Settings",
    "StatusResult",
    "StepItem",
    "TransferRequest",
    "get_settings",
    "wait_for_success",
]
