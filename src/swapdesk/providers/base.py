"""Abstract interfaces for external market data and execution providers."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Optional

from swapdesk.balances import BalanceSnapshot
from swapdesk.trading.models import ResolvedTrade


@dataclass(frozen=True)
class PoolToken:
    """One side of a liquidity pool."""

    symbol: str
    address: Optional[str]
    name: Optional[str] = None


@dataclass(frozen=True)
class Pool:
    """A liquidity pool record, used to harvest token/address associations."""

    network: str  # provider network id, e.g. "eth", "solana"
    base_token: PoolToken
    quote_token: PoolToken
    address: Optional[str] = None
    name: Optional[str] = None
    price_usd: Optional[Decimal] = None
    volume_24h_usd: Optional[Decimal] = None
    liquidity_usd: Optional[Decimal] = None

    def token_matching(self, symbol: str) -> Optional[PoolToken]:
        """Return the side whose symbol matches, base side first."""
        wanted = symbol.upper()
        for token in (self.base_token, self.quote_token):
            if token.symbol and token.symbol.upper() == wanted and token.address:
                return token
        return None


@dataclass(frozen=True)
class PriceQuote:
    """Spot price of a token in USD."""

    symbol: str
    coin_id: str
    price: Decimal
    change_24h: Optional[Decimal] = None
    market_cap: Optional[Decimal] = None


class PoolSearch(ABC):
    """Searches liquidity pools by free text."""

    @abstractmethod
    async def search(self, query: str) -> list[Pool]:
        """
        Search pools matching a token symbol, name or address.

        Returns:
            Matching pools; empty when nothing matches or the query is too short
        """
        pass


class ExecutionClient(ABC):
    """Submits resolved trades to the remote trading API."""

    @abstractmethod
    async def execute(
        self,
        credentials: str,
        environment: str,
        trade: ResolvedTrade,
    ) -> dict[str, Any]:
        """
        Execute a resolved trade.

        Args:
            credentials: API key for the trading account
            environment: Target environment (e.g., "sandbox")
            trade: Fully resolved trade

        Returns:
            Receipt returned by the remote API

        Raises:
            ExecutionError: On non-success responses or transport failure
        """
        pass


class BalanceSource(ABC):
    """Supplies balance snapshots for the trading account."""

    @abstractmethod
    async def get_balances(self, credentials: str, environment: str) -> BalanceSnapshot:
        pass


class PriceSource(ABC):
    """Looks up spot prices."""

    @abstractmethod
    async def get_price(self, symbol: str) -> Optional[PriceQuote]:
        pass
