"""Command line entry point.

Usage:
    relaybridge chains
    relaybridge quote --origin-chain 11155111 --dest-chain 84532 \\
        --origin-currency 0x... --dest-currency 0x... --recipient 0x... --amount 1700000
    relaybridge balance --wallet 0x... [--token 0x...] [--chain 84532]
    relaybridge transfer --to 0x... --amount 1 --token 0x... [--index]
    relaybridge status --request-id 0x...
    relaybridge wait --endpoint "/intents/status?requestId=0x..."
    relaybridge bridge --origin-currency 0x... --dest-currency 0x... \\
        --recipient 0x... --amount 0.2 [--execute]
"""

import argparse
import asyncio
import dataclasses
import json
import logging
import sys
from typing import Any, Optional

from dotenv import load_dotenv
from pydantic import ValidationError

from relaybridge.chain_client import ChainClient
from relaybridge.chains import BASE_SEPOLIA_CHAIN_ID, SEPOLIA_CHAIN_ID
from relaybridge.config import Settings, get_settings
from relaybridge.exceptions import ConfigurationError, RelayApiError, RelayBridgeError
from relaybridge.flows import bridge_with_quote, transfer_and_index
from relaybridge.models import QuoteRequest, TransferRequest
from relaybridge.relay_api import RelayApiClient

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="relaybridge", description="Relay Protocol bridging client"
    )
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("config", help="Show configuration with secrets redacted")
    sub.add_parser("chains", help="List chains supported by Relay")

    quote = sub.add_parser("quote", help="Request a bridge quote")
    _add_route_args(quote)
    quote.add_argument("--user", help="Quoting wallet (defaults to the signer)")
    quote.add_argument("--amount", required=True, help="Amount in origin smallest units")
    quote.add_argument("--trade-type", default="EXACT_INPUT")
    quote.add_argument("--refund-to", help="Refund address")
    quote.add_argument("--deposit-address", action="store_true", help="Use deposit address flow")
    quote.add_argument("--topup-gas", action="store_true")
    quote.add_argument("--external-liquidity", action="store_true")

    balance = sub.add_parser("balance", help="Show native or ERC20 balance")
    balance.add_argument("--wallet", help="Wallet address (defaults to the signer)")
    balance.add_argument("--token", help="ERC20 contract address")
    balance.add_argument("--chain", type=int, default=SEPOLIA_CHAIN_ID)

    transfer = sub.add_parser("transfer", help="Transfer native ETH or an ERC20 token")
    transfer.add_argument("--to", required=True)
    transfer.add_argument("--amount", required=True, help="Human-readable amount, e.g. 1.5")
    transfer.add_argument("--chain", type=int, default=SEPOLIA_CHAIN_ID)
    transfer.add_argument("--currency", default="ETH", help="Label used in logs")
    transfer.add_argument("--token", help="ERC20 contract address (omit for native)")
    transfer.add_argument("--index", action="store_true", help="Index the tx with Relay")

    status = sub.add_parser("status", help="Get intent status")
    status.add_argument("--request-id", required=True)

    wait = sub.add_parser("wait", help="Poll a status endpoint until success")
    wait.add_argument("--endpoint", required=True)
    wait.add_argument("--interval", type=float, help="Seconds between checks")
    wait.add_argument("--timeout", type=float, help="Seconds before giving up")

    bridge = sub.add_parser("bridge", help="Quote and optionally execute a bridge")
    _add_route_args(bridge)
    bridge.add_argument("--amount", required=True, help="Human-readable origin amount")
    bridge.add_argument("--execute", action="store_true", help="Send the quote transaction")
    bridge.add_argument("--deposit-address", action="store_true", help="Use deposit address flow")
    bridge.add_argument("--interval", type=float)
    bridge.add_argument("--timeout", type=float)

    return parser


def _add_route_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--origin-chain", type=int, default=SEPOLIA_CHAIN_ID)
    parser.add_argument("--dest-chain", type=int, default=BASE_SEPOLIA_CHAIN_ID)
    parser.add_argument("--origin-currency", required=True)
    parser.add_argument("--dest-currency", required=True)
    parser.add_argument("--recipient", required=True)


async def run(args: argparse.Namespace, settings: Settings) -> Any:
    """Execute a parsed command and return something printable."""
    relay = RelayApiClient(settings)
    chain = ChainClient(settings)

    if args.command == "config":
        return settings.get_safe_dict()

    if args.command == "chains":
        return await relay.get_chains()

    if args.command == "quote":
        quote = await relay.get_quote(
            QuoteRequest(
                user=args.user or chain.address,
                origin_chain_id=args.origin_chain,
                destination_chain_id=args.dest_chain,
                origin_currency=args.origin_currency,
                destination_currency=args.dest_currency,
                recipient=args.recipient,
                amount=args.amount,
                trade_type=args.trade_type,
                referrer=settings.relay_referrer,
                use_external_liquidity=args.external_liquidity,
                use_deposit_address=args.deposit_address,
                topup_gas=args.topup_gas,
                refund_to=args.refund_to,
            )
        )
        return quote.raw

    if args.command == "balance":
        return await chain.get_balance(
            args.wallet or chain.address, args.token, chain_id=args.chain
        )

    if args.command == "transfer":
        request = TransferRequest(
            to=args.to,
            amount=args.amount,
            chain_id=args.chain,
            currency=args.currency,
            token_address=args.token,
        )
        if args.index:
            tx_hash, index_result = await transfer_and_index(relay, chain, request)
            return {"txHash": tx_hash, "index": index_result}
        return {"txHash": await chain.transfer(request)}

    if args.command == "status":
        return await relay.get_status(args.request_id)

    if args.command == "wait":
        return await relay.wait_for_success(
            args.endpoint, interval=args.interval, timeout=args.timeout
        )

    if args.command == "bridge":
        result = await bridge_with_quote(
            relay,
            chain,
            origin_chain_id=args.origin_chain,
            destination_chain_id=args.dest_chain,
            origin_currency=args.origin_currency,
            destination_currency=args.dest_currency,
            recipient=args.recipient,
            amount=args.amount,
            execute=args.execute,
            use_deposit_address=args.deposit_address,
            interval=args.interval,
            timeout=args.timeout,
        )
        return {
            "quote": result.quote.raw,
            "txHash": result.tx_hash,
            "status": result.status,
            "sufficientBalance": result.sufficient_balance,
        }

    raise ValueError(f"Unknown command: {args.command}")


def _to_jsonable(value: Any) -> Any:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)
    return value


def _load_settings() -> Settings:
    try:
        return get_settings()
    except ValidationError as e:
        raise ConfigurationError(f"Invalid settings: {e}") from e


def main(argv: Optional[list[str]] = None) -> int:
    load_dotenv()
    args = build_parser().parse_args(argv)

    try:
        settings = _load_settings()
        logging.basicConfig(
            level=logging.DEBUG if settings.debug else logging.INFO,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        )
        result = asyncio.run(run(args, settings))
    except RelayApiError as e:
        detail = f": {e.body}" if e.body is not None else ""
        print(f"{e.phase.capitalize()} failed: {e}{detail}", file=sys.stderr)
        return 1
    except RelayBridgeError as e:
        print(f"{e.phase.capitalize()} failed: {e}", file=sys.stderr)
        return 1
    except ValueError as e:
        print(f"Invalid argument: {e}", file=sys.stderr)
        return 1

    print(json.dumps(_to_jsonable(result), indent=2, default=str))
    return 0
