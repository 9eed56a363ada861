"""Chain metadata for the networks relaybridge can transfer on.

Only two test networks are supported:
- Ethereum Sepolia (11155111)
- Base Sepolia (84532)

RPC endpoints live in settings; this table holds the static parts.
"""

from dataclasses import dataclass

from relaybridge.exceptions import ConfigurationError

SEPOLIA_CHAIN_ID = 11155111
BASE_SEPOLIA_CHAIN_ID = 84532


@dataclass(frozen=True)
class ChainConfig:
    """Static configuration for an EVM chain."""

    name: str
    chain_id: int
    symbol: str  # Native asset symbol
    explorer_url: str
    default_rpc_url: str
    decimals: int = 18

    def tx_url(self, tx_hash: str) -> str:
        """Block explorer link for a transaction."""
        return f"{self.explorer_url}/tx/{tx_hash}"


# ======================
# Chain Configurations
# ======================

CHAINS: dict[int, ChainConfig] = {
    SEPOLIA_CHAIN_ID: ChainConfig(
        name="Sepolia",
        chain_id=SEPOLIA_CHAIN_ID,
        symbol="ETH",
        explorer_url="https://sepolia.etherscan.io",
        default_rpc_url="https://ethereum-sepolia-rpc.publicnode.com",
    ),
    BASE_SEPOLIA_CHAIN_ID: ChainConfig(
        name="Base Sepolia",
        chain_id=BASE_SEPOLIA_CHAIN_ID,
        symbol="ETH",
        explorer_url="https://sepolia.basescan.org",
        default_rpc_url="https://sepolia.base.org",
    ),
}


def get_chain(chain_id: int) -> ChainConfig:
    """Get chain configuration by ID.

    Raises:
        ConfigurationError: If the chain is not supported
    """
    chain = CHAINS.get(chain_id)
    if chain is None:
        supported = ", ".join(str(cid) for cid in CHAINS)
        raise ConfigurationError(
            f"Unsupported chain ID {chain_id} (supported: {supported})"
        )
    return chain

