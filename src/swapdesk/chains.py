"""Chain registry and cross-chain trading policy.

Supports 7 chains:
- EVM: ethereum, base, polygon, optimism, arbitrum, bsc (mutually cross-chain compatible)
- Non-EVM: solana (same-chain trades only)
"""

import logging
from dataclasses import dataclass
from typing import Optional

from swapdesk.errors import OK, ChainPolicyViolation, CheckResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChainConfig:
    """Configuration for a blockchain."""

    key: str  # chain key used throughout swapdesk
    name: str
    native_symbol: str
    network_id: str  # GeckoTerminal network id
    recall_chain: str  # Recall specific-chain name
    is_evm: bool = True
    chain_id: Optional[int] = None  # EVM chains only


# ======================
# Chain Configurations
# ======================

CHAINS: dict[str, ChainConfig] = {
    "ethereum": ChainConfig(
        key="ethereum",
        name="Ethereum",
        native_symbol="ETH",
        network_id="eth",
        recall_chain="eth",
        chain_id=1,
    ),
    "base": ChainConfig(
        key="base",
        name="Base",
        native_symbol="ETH",
        network_id="base",
        recall_chain="base",
        chain_id=8453,
    ),
    "polygon": ChainConfig(
        key="polygon",
        name="Polygon",
        native_symbol="MATIC",
        network_id="polygon_pos",
        recall_chain="polygon",
        chain_id=137,
    ),
    "optimism": ChainConfig(
        key="optimism",
        name="Optimism",
        native_symbol="ETH",
        network_id="optimism",
        recall_chain="optimism",
        chain_id=10,
    ),
    "arbitrum": ChainConfig(
        key="arbitrum",
        name="Arbitrum",
        native_symbol="ETH",
        network_id="arbitrum",
        recall_chain="arbitrum",
        chain_id=42161,
    ),
    "bsc": ChainConfig(
        key="bsc",
        name="BNB Smart Chain",
        native_symbol="BNB",
        network_id="bsc",
        recall_chain="bsc",
        chain_id=56,
    ),
    "solana": ChainConfig(
        key="solana",
        name="Solana",
        native_symbol="SOL",
        network_id="solana",
        recall_chain="svm",
        is_evm=False,
    ),
}

# Order matters for user-facing messages
EVM_CHAINS: tuple[str, ...] = ("ethereum", "base", "polygon", "optimism", "arbitrum", "bsc")

# Chain that unrecognized tokens default to
FALLBACK_CHAIN = "solana"

# Native and wrapped-native assets -> home chain
NATIVE_HOME_CHAINS = {
    "ETH": "ethereum",
    "WETH": "ethereum",
    "SOL": "solana",
    "WSOL": "solana",
    "BNB": "bsc",
    "WBNB": "bsc",
    "MATIC": "polygon",
    "WMATIC": "polygon",
    "POL": "polygon",
}

STABLECOINS = frozenset({"USDC", "USDT", "DAI", "USDBC", "USDC.E", "BUSD", "FRAX", "TUSD"})

# Solana ecosystem and meme tokens
SOLANA_TOKENS = frozenset({
    "BONK", "WIF", "JUP", "RAY", "ORCA", "PYTH", "SAMO", "MNDE", "JTO",
    "POPCAT", "MEW", "BOME", "SLERF", "HNT", "RENDER", "W", "TNSR",
})


# ======================
# Helper Functions
# ======================

def get_chain(key: str) -> Optional[ChainConfig]:
    """Get chain configuration by chain key."""
    return CHAINS.get(key.lower())


def is_evm_chain(key: str) -> bool:
    return key.lower() in EVM_CHAINS


def get_network_id(key: str) -> str:
    """Map a chain key to its GeckoTerminal network id (unknown keys map to themselves)."""
    chain = get_chain(key)
    return chain.network_id if chain else key


def get_chain_for_network(network_id: str) -> Optional[str]:
    """Reverse of get_network_id."""
    for chain in CHAINS.values():
        if chain.network_id == network_id:
            return chain.key
    return None


def default_chain_for(symbol: str) -> str:
    """Infer the chain a token symbol most likely trades on.

    Native and wrapped-native assets map to their home chain, stablecoins
    to ethereum, known Solana ecosystem tokens to solana. Anything else
    defaults to solana.
    """
    sym = symbol.strip().upper()

    if sym in NATIVE_HOME_CHAINS:
        return NATIVE_HOME_CHAINS[sym]
    if sym in STABLECOINS:
        return "ethereum"
    if sym in SOLANA_TOKENS:
        return "solana"
    return FALLBACK_CHAIN


def validate_cross_chain(from_chain: str, to_chain: str) -> CheckResult:
    """Check whether a trade route between two chains is allowed.

    Same-chain routes are always valid. Cross-chain routes are valid only
    when both ends are EVM chains.
    """
    src = from_chain.lower()
    dst = to_chain.lower()

    if src == dst:
        return OK

    if is_evm_chain(src) and is_evm_chain(dst):
        return OK

    logger.debug(f"Rejected cross-chain route {src} -> {dst}")
    return CheckResult(error=ChainPolicyViolation(src, dst, list(EVM_CHAINS)))
