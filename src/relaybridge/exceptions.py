"""Error types raised by relaybridge components.

Every component surfaces failures to its caller; nothing here is retried.
"""

from typing import Any, Optional


class RelayBridgeError(Exception):
    """Base class for all relaybridge errors."""

    phase = "operation"


class ConfigurationError(RelayBridgeError):
    """Raised when a required credential or chain setting is missing."""

    phase = "configuration"


class RelayApiError(RelayBridgeError):
    """Raised when the Relay API returns a non-2xx response or is unreachable."""

    def __init__(
        self,
        phase: str,
        message: str,
        status_code: Optional[int] = None,
        body: Any = None,
    ):
        self.phase = phase
        self.status_code = status_code
        self.body = body
        detail = f" (HTTP {status_code})" if status_code is not None else ""
        super().__init__(f"{message}{detail}")


class ChainError(RelayBridgeError):
    """Raised on RPC failure, insufficient funds or a reverted transaction."""

    def __init__(
        self, message: str, tx_hash: Optional[str] = None, phase: str = "transfer"
    ):
        self.phase = phase
        self.tx_hash = tx_hash
        super().__init__(message)


class PollTimeoutError(RelayBridgeError):
    """Raised when a status poll does not observe success before its deadline."""

    phase = "status"

    def __init__(self, timeout: float, attempts: int, last_status: Optional[dict] = None):
        self.timeout = timeout
        self.attempts = attempts
        self.last_status = last_status
        super().__init__(
            f"Timeout waiting for success after {attempts} checks ({timeout}s)"
        )
