"""CoinGecko spot price lookup.

Free API, no authentication required.
"""

import logging
from decimal import Decimal, InvalidOperation
from typing import Optional

import httpx

from swapdesk.providers.base import PriceQuote, PriceSource

logger = logging.getLogger(__name__)

COINGECKO_API = "https://api.coingecko.com/api/v3"

# Common symbols -> CoinGecko coin ids
SYMBOL_TO_ID = {
    "BTC": "bitcoin",
    "ETH": "ethereum",
    "SOL": "solana",
    "USDC": "usd-coin",
    "USDT": "tether",
    "BNB": "binancecoin",
    "ADA": "cardano",
    "DOT": "polkadot",
    "MATIC": "matic-network",
    "AVAX": "avalanche-2",
    "LINK": "chainlink",
    "UNI": "uniswap",
    "ATOM": "cosmos",
    "XRP": "ripple",
    "DOGE": "dogecoin",
    "SHIB": "shiba-inu",
    "ARB": "arbitrum",
    "OP": "optimism",
}


def get_coin_id(symbol: str) -> str:
    return SYMBOL_TO_ID.get(symbol.upper(), symbol.lower())


def _decimal(value) -> Optional[Decimal]:
    if value is None:
        return None
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError):
        return None


class CoinGeckoPriceSource(PriceSource):
    """Price source backed by CoinGecko's simple price endpoint."""

    def __init__(
        self,
        base_url: str = COINGECKO_API,
        timeout: float = 10.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._http_client = client

    async def _get_client(self) -> httpx.AsyncClient:
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(timeout=self.timeout)
        return self._http_client

    async def close(self) -> None:
        if self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None

    async def get_price(self, symbol: str) -> Optional[PriceQuote]:
        """Get current USD price for a token, or None if unknown."""
        coin_id = get_coin_id(symbol)

        try:
            client = await self._get_client()
            response = await client.get(
                f"{self.base_url}/simple/price",
                headers={"Accept": "application/json"},
                params={
                    "ids": coin_id,
                    "vs_currencies": "usd",
                    "include_24hr_change": "true",
                    "include_market_cap": "true",
                },
            )
            if response.status_code != 200:
                logger.warning(f"CoinGecko price error for {symbol}: {response.status_code}")
                return None

            data = response.json()

        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"CoinGecko price error: {e}")
            return None

        coin = data.get(coin_id) if isinstance(data, dict) else None
        if not coin or coin.get("usd") is None:
            logger.debug(f"Coin not found: {symbol}")
            return None

        return PriceQuote(
            symbol=symbol.upper(),
            coin_id=coin_id,
            price=Decimal(str(coin["usd"])),
            change_24h=_decimal(coin.get("usd_24h_change")),
            market_cap=_decimal(coin.get("usd_market_cap")),
        )
