"""External providers.

- GeckoTerminal: pool search for token address discovery
- Recall: trade execution and balances
- CoinGecko: spot prices
"""

from swapdesk.providers.base import (
    BalanceSource,
    ExecutionClient,
    Pool,
    PoolSearch,
    PoolToken,
    PriceQuote,
    PriceSource,
)
from swapdesk.providers.coingecko import CoinGeckoPriceSource
from swapdesk.providers.geckoterminal import GeckoTerminalPoolSearch
from swapdesk.providers.recall import RecallClient

__all__ = [
    # Base classes
    "BalanceSource",
    "ExecutionClient",
    "Pool",
    "PoolSearch",
    "PoolToken",
    "PriceQuote",
    "PriceSource",
    # Providers
    "CoinGeckoPriceSource",
    "GeckoTerminalPoolSearch",
    "RecallClient",
]
