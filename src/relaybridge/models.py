"""Request and response shapes exchanged with the Relay API and the chain.

All of these are transient: built for a single call and never persisted.
"""

from dataclasses import dataclass, field
from typing import Any, Optional

SUCCESS_STATUS = "success"


@dataclass
class QuoteRequest:
    """Body of a POST /quote request.

    `amount` is a decimal string in the origin token's smallest unit.
    """

    user: str
    origin_chain_id: int
    destination_chain_id: int
    origin_currency: str
    destination_currency: str
    recipient: str
    amount: str
    trade_type: str = "EXACT_INPUT"
    referrer: str = "relay.link"
    use_external_liquidity: bool = False
    use_deposit_address: bool = False
    topup_gas: bool = False
    refund_to: Optional[str] = None

    def __post_init__(self):
        self.amount = str(self.amount)
        if not self.amount.isdigit():
            raise ValueError(
                f"Quote amount must be an integer string in smallest units, got {self.amount!r}"
            )
        for name in ("origin_chain_id", "destination_chain_id"):
            if int(getattr(self, name)) <= 0:
                raise ValueError(f"{name} must be a positive integer")

    def to_dict(self) -> dict:
        """Convert to the camelCase body the API expects."""
        data = {
            "user": self.user,
            "originChainId": self.origin_chain_id,
            "destinationChainId": self.destination_chain_id,
            "originCurrency": self.origin_currency,
            "destinationCurrency": self.destination_currency,
            "recipient": self.recipient,
            "tradeType": self.trade_type,
            "amount": self.amount,
            "referrer": self.referrer,
            "useExternalLiquidity": self.use_external_liquidity,
            "useDepositAddress": self.use_deposit_address,
            "topupGas": self.topup_gas,
        }
        if self.refund_to:
            data["refundTo"] = self.refund_to
        return data


@dataclass
class StatusCheck:
    """Polling descriptor attached to a step item."""

    endpoint: str
    method: str = "GET"


@dataclass
class StepItem:
    """A single executable item of a quote step."""

    status: str
    data: dict = field(default_factory=dict)  # Raw transaction fields
    check: Optional[StatusCheck] = None

    @classmethod
    def from_dict(cls, data: dict) -> "StepItem":
        check = data.get("check")
        return cls(
            status=data.get("status", ""),
            data=data.get("data") or {},
            check=StatusCheck(
                endpoint=check["endpoint"],
                method=check.get("method", "GET"),
            ) if check else None,
        )


@dataclass
class QuoteStep:
    """An execution step returned in a quote."""

    id: str
    action: str = ""
    description: str = ""
    kind: str = ""
    request_id: Optional[str] = None
    deposit_address: Optional[str] = None
    items: list[StepItem] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> "QuoteStep":
        return cls(
            id=data.get("id", ""),
            action=data.get("action", ""),
            description=data.get("description", ""),
            kind=data.get("kind", ""),
            request_id=data.get("requestId"),
            deposit_address=data.get("depositAddress"),
            items=[StepItem.from_dict(item) for item in data.get("items") or []],
        )


@dataclass
class Quote:
    """Quote response. The full body is kept in `raw`."""

    steps: list[QuoteStep]
    raw: dict = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict) -> "Quote":
        return cls(
            steps=[QuoteStep.from_dict(step) for step in data.get("steps") or []],
            raw=data,
        )

    @property
    def first_item(self) -> Optional[StepItem]:
        """First item of the first step that has any."""
        for step in self.steps:
            if step.items:
                return step.items[0]
        return None

    @property
    def request_id(self) -> Optional[str]:
        return next((s.request_id for s in self.steps if s.request_id), None)

    @property
    def deposit_address(self) -> Optional[str]:
        return next((s.deposit_address for s in self.steps if s.deposit_address), None)

    @property
    def check_endpoint(self) -> Optional[str]:
        item = self.first_item
        if item and item.check:
            return item.check.endpoint
        return None

    @property
    def details(self) -> dict:
        return self.raw.get("details") or {}

    @property
    def fees(self) -> dict:
        return self.raw.get("fees") or {}


@dataclass
class TransferRequest:
    """A token transfer. `amount` is human-readable ("1.5").

    A missing `token_address` means the chain's native asset.
    """

    to: str
    amount: str
    chain_id: int = 11155111
    currency: str = "ETH"
    token_address: Optional[str] = None

    @property
    def is_native(self) -> bool:
        return self.token_address is None


@dataclass
class BalanceResult:
    """Balance of a wallet in native units or an ERC-20 token."""

    symbol: str
    decimals: int
    raw: int
    formatted: str


@dataclass
class StatusResult:
    """Intent status. Anything other than "success" is still pending."""

    status: str
    raw: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict) -> "StatusResult":
        return cls(status=str(data.get("status", "")), raw=data)

    @property
    def is_success(self) -> bool:
        return self.status == SUCCESS_STATUS
