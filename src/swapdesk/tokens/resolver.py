"""Token symbol to contract address resolution.

Tiers, first match wins:
1. Literal - the input already looks like an address
2. Static table - curated well-known tokens per chain
3. Cache - addresses found earlier in this session
4. Remote - pool search, filtered to the chain's network

When every tier misses, the symbol is passed through unchanged with
source UNRESOLVED rather than raising.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from swapdesk.chains import get_network_id
from swapdesk.errors import ResolutionFailure
from swapdesk.providers.base import PoolSearch
from swapdesk.tokens.cache import ResolutionCache
from swapdesk.tokens.static import get_static_address

logger = logging.getLogger(__name__)

# Longer inputs are treated as addresses (covers Solana base58 mints)
LITERAL_MIN_LENGTH = 31


class TokenSource(str, Enum):
    """Which resolution tier produced an address."""

    LITERAL = "literal"
    STATIC_TABLE = "static_table"
    CACHE = "cache"
    REMOTE = "remote"
    UNRESOLVED = "unresolved"


@dataclass(frozen=True)
class TokenRef:
    """A token symbol together with its resolved address on one chain."""

    symbol: str
    chain_key: str
    resolved_address: Optional[str]
    source: TokenSource

    @property
    def is_resolved(self) -> bool:
        return self.source != TokenSource.UNRESOLVED

    @property
    def address(self) -> str:
        """Address to submit; the raw symbol when unresolved."""
        return self.resolved_address if self.resolved_address is not None else self.symbol

    def to_dict(self) -> dict:
        return {
            "symbol": self.symbol,
            "chain_key": self.chain_key,
            "resolved_address": self.resolved_address,
            "address": self.address,
            "source": self.source.value,
        }


def looks_like_address(value: str) -> bool:
    """Check whether a token input is already an on-chain address."""
    return value.lower().startswith("0x") or len(value) >= LITERAL_MIN_LENGTH


class AddressResolver:
    """Resolves (symbol, chain) pairs to contract addresses."""

    def __init__(
        self,
        pool_search: PoolSearch,
        cache: Optional[ResolutionCache] = None,
        static_table: Optional[dict[str, dict[str, str]]] = None,
    ):
        self.pool_search = pool_search
        self.cache = cache if cache is not None else ResolutionCache()
        self.static_table = static_table

    async def resolve(self, symbol: str, chain_key: str) -> TokenRef:
        """Resolve a token symbol on a chain. Never raises on a miss."""
        symbol = symbol.strip()
        chain_key = chain_key.lower()

        if looks_like_address(symbol):
            return TokenRef(symbol, chain_key, symbol, TokenSource.LITERAL)

        address = get_static_address(chain_key, symbol, self.static_table)
        if address:
            logger.debug(f"Resolved {symbol} on {chain_key} from static table")
            return TokenRef(symbol, chain_key, address, TokenSource.STATIC_TABLE)

        address = self.cache.get(chain_key, symbol)
        if address:
            logger.debug(f"Resolved {symbol} on {chain_key} from cache")
            return TokenRef(symbol, chain_key, address, TokenSource.CACHE)

        try:
            address = await self._search_remote(symbol, chain_key)
        except ResolutionFailure as e:
            logger.warning(f"{e}; passing symbol through unresolved")
            return TokenRef(symbol, chain_key, None, TokenSource.UNRESOLVED)

        if address is None:
            logger.warning(
                f"No {get_network_id(chain_key)} pool found for {symbol}; "
                f"passing symbol through unresolved"
            )
            return TokenRef(symbol, chain_key, None, TokenSource.UNRESOLVED)

        self.cache.set(chain_key, symbol, address)
        logger.info(f"Resolved {symbol} on {chain_key} via pool search: {address}")
        return TokenRef(symbol, chain_key, address, TokenSource.REMOTE)

    async def _search_remote(self, symbol: str, chain_key: str) -> Optional[str]:
        """Search pools for the symbol and take the matching side's address.

        Raises:
            ResolutionFailure: If the search itself failed
        """
        network = get_network_id(chain_key)

        try:
            pools = await self.pool_search.search(symbol)
        except Exception as e:
            raise ResolutionFailure(symbol, chain_key, f"{type(e).__name__}: {e}") from e

        for pool in pools:
            if pool.network != network:
                continue
            token = pool.token_matching(symbol)
            if token is not None:
                return token.address

        return None
