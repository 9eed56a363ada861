"""End-to-end call sequences built from the API client, chain client and poller.

Two flows are provided:
- transfer_and_index: send tokens on-chain, then register the hash with Relay
- bridge_with_quote: check balance, fetch a quote, optionally execute its
  first transaction and wait for the intent to succeed
"""

import logging
from dataclasses import dataclass
from typing import Any, Optional

from relaybridge.chain_client import ChainClient
from relaybridge.models import Quote, QuoteRequest, TransferRequest
from relaybridge.relay_api import RelayApiClient
from relaybridge.units import format_units, to_smallest_unit

logger = logging.getLogger(__name__)


@dataclass
class BridgeResult:
    """Outcome of a quote-driven bridge."""

    quote: Quote
    tx_hash: Optional[str] = None
    status: Optional[dict] = None
    sufficient_balance: bool = True


async def transfer_and_index(
    relay: RelayApiClient,
    chain: ChainClient,
    request: TransferRequest,
    referrer: Optional[str] = None,
) -> tuple[str, Any]:
    """Transfer funds and index the resulting transaction with Relay.

    Returns:
        (tx_hash, index response body)
    """
    tx_hash = await chain.transfer(request)
    logger.info(f"Transfer completed: {tx_hash}")

    index_result = await relay.index_transaction(
        tx_hash=tx_hash,
        chain_id=request.chain_id,
        referrer=referrer,
    )
    return tx_hash, index_result


async def bridge_with_quote(
    relay: RelayApiClient,
    chain: ChainClient,
    origin_chain_id: int,
    destination_chain_id: int,
    origin_currency: str,
    destination_currency: str,
    recipient: str,
    amount: str,
    execute: bool = False,
    use_deposit_address: bool = False,
    interval: Optional[float] = None,
    timeout: Optional[float] = None,
) -> BridgeResult:
    """Quote (and optionally execute) a cross-chain move of an ERC20 token.

    Args:
        origin_currency: ERC20 token address on the origin chain
        amount: Human-readable amount of the origin token (e.g. "0.2")
        execute: Send the quote's first transaction and wait for success
        use_deposit_address: Ask Relay for a deposit address flow

    Low balance is only logged: the quote is still requested so the caller
    can inspect it.
    """
    user = chain.address
    balance = await chain.get_balance(user, origin_currency, chain_id=origin_chain_id)

    amount_raw = to_smallest_unit(amount, balance.decimals)
    sufficient = balance.raw >= amount_raw
    if not sufficient:
        logger.warning(
            f"Insufficient balance: have {balance.formatted} {balance.symbol}, "
            f"need {format_units(amount_raw, balance.decimals)}"
        )

    quote = await relay.get_quote(
        QuoteRequest(
            user=user,
            origin_chain_id=origin_chain_id,
            destination_chain_id=destination_chain_id,
            origin_currency=origin_currency,
            destination_currency=destination_currency,
            recipient=recipient,
            amount=str(amount_raw),
            referrer=relay.settings.relay_referrer,
            use_deposit_address=use_deposit_address,
        )
    )
    result = BridgeResult(quote=quote, sufficient_balance=sufficient)

    if quote.deposit_address:
        logger.info(f"Deposit address: {quote.deposit_address}")

    if not execute:
        return result

    item = quote.first_item
    if item is None or not item.data:
        logger.warning("Quote has no executable transaction, nothing to send")
        return result

    result.tx_hash = await chain.send_transaction(item.data)
    logger.info(f"Transaction confirmed: {result.tx_hash}")

    if item.check:
        result.status = await relay.wait_for_success(
            item.check.endpoint, interval=interval, timeout=timeout
        )
    return result
