"""On-chain balance reads and transfers via web3.py.

Supports native ETH transfers and ERC20 token transfers on the configured
test networks. Nonce and gas handling use the node's defaults; a failed
transfer is never retried.
"""

import asyncio
import logging
from typing import Any, Callable, Optional

from eth_account import Account
from web3 import Web3
from web3.exceptions import Web3Exception

from relaybridge.chains import SEPOLIA_CHAIN_ID, get_chain
from relaybridge.config import Settings
from relaybridge.exceptions import ChainError
from relaybridge.models import BalanceResult, TransferRequest
from relaybridge.units import format_units, to_smallest_unit

logger = logging.getLogger(__name__)

ERC20_ABI = [
    {
        "inputs": [{"name": "to", "type": "address"}, {"name": "amount", "type": "uint256"}],
        "name": "transfer",
        "outputs": [{"name": "", "type": "bool"}],
        "stateMutability": "nonpayable",
        "type": "function",
    },
    {
        "inputs": [{"name": "owner", "type": "address"}],
        "name": "balanceOf",
        "outputs": [{"name": "", "type": "uint256"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [],
        "name": "decimals",
        "outputs": [{"name": "", "type": "uint8"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [],
        "name": "symbol",
        "outputs": [{"name": "", "type": "string"}],
        "stateMutability": "view",
        "type": "function",
    },
]

# Integer fields of a transaction payload handed out by the Relay API
_TX_INT_FIELDS = ("value", "gas", "gasPrice", "maxFeePerGas", "maxPriorityFeePerGas", "nonce")

# requests' connection errors are OSErrors; pre-v7 web3 raises ValueError for RPC errors
_RPC_ERRORS = (Web3Exception, ValueError, OSError)


def _default_web3(rpc_url: str) -> Web3:
    return Web3(Web3.HTTPProvider(rpc_url))


class ChainClient:
    """Reads balances and submits signed transfers."""

    def __init__(
        self,
        settings: Settings,
        chain_id: int = SEPOLIA_CHAIN_ID,
        web3_factory: Optional[Callable[[str], Web3]] = None,
    ):
        """Initialize chain client.

        Args:
            settings: Application settings (signing key and RPC table)
            chain_id: Chain used when a call does not name one
            web3_factory: Builds a Web3 instance from an RPC URL
        """
        self.settings = settings
        self.chain_id = chain_id
        self._web3_factory = web3_factory or _default_web3

    def web3(self, chain_id: Optional[int] = None) -> Web3:
        """Create a Web3 instance for a chain.

        Raises:
            ConfigurationError: If the chain has no configured RPC endpoint
        """
        return self._web3_factory(self.settings.get_rpc_url(chain_id or self.chain_id))

    def get_account(self):
        """Get the signing account.

        Raises:
            ConfigurationError: If no private key is configured
        """
        return Account.from_key(self.settings.require_private_key())

    @property
    def address(self) -> str:
        """Address of the configured signer."""
        return self.get_account().address

    def explorer_url(self, chain_id: int, tx_hash: str) -> str:
        """Block explorer link for a transaction."""
        return get_chain(chain_id).tx_url(tx_hash)

    async def _rpc(
        self, what: str, fn: Callable[..., Any], *args: Any, phase: str = "transfer"
    ) -> Any:
        """Run a blocking web3 call off the event loop, mapping failures to ChainError."""
        try:
            return await asyncio.to_thread(fn, *args)
        except _RPC_ERRORS as e:
            logger.error(f"RPC call failed ({what}): {type(e).__name__}: {e}")
            raise ChainError(f"{what} failed: {e}", phase=phase) from e

    def _token(self, w3: Web3, token_address: str):
        return w3.eth.contract(address=Web3.to_checksum_address(token_address), abi=ERC20_ABI)

    async def get_balance(
        self,
        wallet_address: str,
        token_address: Optional[str] = None,
        chain_id: Optional[int] = None,
    ) -> BalanceResult:
        """Get native or ERC20 balance of a wallet.

        Args:
            wallet_address: Wallet to query
            token_address: ERC20 contract, or None for the native asset
            chain_id: Chain to query (defaults to the client's chain)

        Returns:
            BalanceResult with raw smallest units and formatted amount

        Raises:
            ValueError: If wallet_address is missing
            ChainError: If an RPC call fails
        """
        if not wallet_address:
            raise ValueError("wallet_address is required")

        chain = get_chain(chain_id or self.chain_id)
        w3 = self.web3(chain.chain_id)
        owner = Web3.to_checksum_address(wallet_address)

        if token_address is None:
            raw = await self._rpc("get_balance", w3.eth.get_balance, owner, phase="balance")
            symbol, decimals = chain.symbol, chain.decimals
        else:
            token = self._token(w3, token_address)
            raw, decimals, symbol = await asyncio.gather(
                self._rpc("balanceOf", token.functions.balanceOf(owner).call, phase="balance"),
                self._rpc("decimals", token.functions.decimals().call, phase="balance"),
                self._rpc("symbol", token.functions.symbol().call, phase="balance"),
            )

        balance = BalanceResult(
            symbol=symbol,
            decimals=int(decimals),
            raw=int(raw),
            formatted=format_units(raw, int(decimals)),
        )
        logger.info(f"Balance of {owner} on {chain.name}: {balance.formatted} {balance.symbol}")
        return balance

    async def transfer(self, request: TransferRequest) -> str:
        """Transfer native ETH or an ERC20 token and wait for confirmation.

        Args:
            request: Recipient, human-readable amount, chain and optional token

        Returns:
            Transaction hash (0x-prefixed)

        Raises:
            ConfigurationError: If no signing key or RPC endpoint is configured
            ChainError: On RPC failure, insufficient funds or revert
        """
        account = self.get_account()
        chain = get_chain(request.chain_id)
        w3 = self.web3(chain.chain_id)
        to = Web3.to_checksum_address(request.to)

        logger.info(
            f"Transferring {request.amount} {request.currency} "
            f"({request.token_address or 'native'}) to {to} from {account.address}"
        )

        if request.is_native:
            value = to_smallest_unit(request.amount, chain.decimals)
            tx = {"from": account.address, "to": to, "value": value}
        else:
            token = self._token(w3, request.token_address)
            decimals = await self._rpc("decimals", token.functions.decimals().call)
            amount = to_smallest_unit(request.amount, int(decimals))
            logger.debug(f"Amount to send: {amount} (decimals={decimals})")
            tx = await self._rpc(
                "build transfer",
                token.functions.transfer(to, amount).build_transaction,
                {"from": account.address},
            )

        tx_hash = await self._sign_and_send(w3, account, tx)
        logger.info(f"Sent {request.amount} {request.currency} to {to}: {tx_hash}")
        logger.info(f"View on explorer: {chain.tx_url(tx_hash)}")
        return tx_hash

    async def send_transaction(self, tx_data: dict) -> str:
        """Sign and send a pre-built transaction payload from a quote step item.

        The payload is relayed as given; only the sender is replaced by the
        configured signer and numeric strings are converted to integers.
        """
        account = self.get_account()
        chain_id = int(tx_data.get("chainId") or self.chain_id)
        w3 = self.web3(chain_id)

        tx: dict = {
            "from": account.address,
            "to": Web3.to_checksum_address(tx_data["to"]),
            "data": tx_data.get("data") or "0x",
            "chainId": chain_id,
        }
        for name in _TX_INT_FIELDS:
            if tx_data.get(name) is not None:
                tx[name] = int(tx_data[name])
        tx.setdefault("value", 0)

        logger.info(f"Sending quote transaction to {tx['to']} on chain {chain_id}")
        tx_hash = await self._sign_and_send(w3, account, tx)
        logger.info(f"View on explorer: {self.explorer_url(chain_id, tx_hash)}")
        return tx_hash

    async def _sign_and_send(self, w3: Web3, account, tx: dict) -> str:
        """Fill missing defaults, sign, broadcast and wait for the receipt."""
        if "nonce" not in tx:
            tx["nonce"] = await self._rpc(
                "get nonce", w3.eth.get_transaction_count, account.address, "pending"
            )
        if "chainId" not in tx:
            tx["chainId"] = await self._rpc("get chain id", lambda: w3.eth.chain_id)
        if "gas" not in tx:
            tx["gas"] = await self._rpc("estimate gas", w3.eth.estimate_gas, tx)
        if "gasPrice" not in tx and "maxFeePerGas" not in tx:
            tx["gasPrice"] = await self._rpc("get gas price", lambda: w3.eth.gas_price)

        signed = account.sign_transaction(tx)
        sent = await self._rpc(
            "send transaction", w3.eth.send_raw_transaction, signed.raw_transaction
        )
        tx_hash = Web3.to_hex(sent)
        logger.info(f"Tx hash: {tx_hash}, waiting for confirmation...")

        receipt = await self._rpc(
            "wait for receipt",
            w3.eth.wait_for_transaction_receipt,
            sent,
            self.settings.receipt_timeout,
        )
        if receipt["status"] == 0:
            logger.error(f"Transaction {tx_hash} reverted")
            raise ChainError(f"Transaction {tx_hash} failed (reverted)", tx_hash=tx_hash)

        return tx_hash
