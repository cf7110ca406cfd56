"""GeckoTerminal pool search.

Used only to harvest token symbol -> address associations for the
address resolver.
API docs: https://www.geckoterminal.com/dex-api
"""

import logging
import re
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

import httpx

from swapdesk.providers.base import Pool, PoolSearch, PoolToken

logger = logging.getLogger(__name__)

GECKOTERMINAL_API = "https://api.geckoterminal.com/api/v2"

# Queries shorter than this are not sent
MIN_QUERY_LENGTH = 2

# Trailing fee tier in pool names, e.g. "PEPE / WETH 0.3%"
_FEE_TIER_RE = re.compile(r"\s*\d+(\.\d+)?%\s*$")


def _is_contract_address(value: Optional[str]) -> bool:
    if not value:
        return False
    return value.lower().startswith("0x") and len(value) > 10


def parse_symbols_from_name(name: Optional[str]) -> Optional[tuple[str, str]]:
    """Parse base and quote symbols from a pool name.

    "WBTC / WETH 0.05%" -> ("WBTC", "WETH")
    """
    if not name:
        return None

    clean = _FEE_TIER_RE.sub("", name).strip()
    parts = [p.strip() for p in clean.split("/")]
    if len(parts) < 2:
        return None

    base, quote = parts[0], parts[1]
    if _is_contract_address(base) or _is_contract_address(quote):
        return None
    return base, quote


def _network_from_id(pool_id: Optional[str]) -> str:
    """Pool ids have the form <network>_<address>."""
    if not pool_id:
        return "unknown"
    return pool_id.split("_")[0] or "unknown"


def _address_from_id(token_id: Optional[str]) -> Optional[str]:
    if not token_id or "_" not in token_id:
        return None
    return token_id.split("_", 1)[1] or None


def _decimal_or_none(value: Any) -> Optional[Decimal]:
    if value is None:
        return None
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError):
        return None


def transform_pool(raw: dict) -> Pool:
    """Convert a GeckoTerminal pool resource into a Pool."""
    attrs = raw.get("attributes") or {}
    relationships = raw.get("relationships") or {}

    base_rel = (relationships.get("base_token") or {}).get("data") or {}
    quote_rel = (relationships.get("quote_token") or {}).get("data") or {}

    symbols = parse_symbols_from_name(attrs.get("name"))
    if symbols:
        base_symbol, quote_symbol = symbols
    else:
        base_symbol = quote_symbol = "???"
        base_from_id = (base_rel.get("id") or "").split("_")[-1].upper()
        quote_from_id = (quote_rel.get("id") or "").split("_")[-1].upper()
        if base_from_id and not _is_contract_address(base_from_id):
            base_symbol = base_from_id
        if quote_from_id and not _is_contract_address(quote_from_id):
            quote_symbol = quote_from_id

    volume = attrs.get("volume_usd") or {}

    return Pool(
        network=_network_from_id(raw.get("id")),
        address=attrs.get("address"),
        name=attrs.get("name"),
        base_token=PoolToken(
            symbol=base_symbol,
            address=attrs.get("base_token_address") or _address_from_id(base_rel.get("id")),
            name=attrs.get("base_token_name"),
        ),
        quote_token=PoolToken(
            symbol=quote_symbol,
            address=attrs.get("quote_token_address") or _address_from_id(quote_rel.get("id")),
            name=attrs.get("quote_token_name"),
        ),
        price_usd=_decimal_or_none(attrs.get("base_token_price_usd")),
        volume_24h_usd=_decimal_or_none(volume.get("h24")),
        liquidity_usd=_decimal_or_none(attrs.get("reserve_in_usd")),
    )


class GeckoTerminalPoolSearch(PoolSearch):
    """Pool search backed by the GeckoTerminal public API."""

    def __init__(
        self,
        base_url: str = GECKOTERMINAL_API,
        timeout: float = 30.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._http_client = client

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(timeout=self.timeout)
        return self._http_client

    async def close(self) -> None:
        if self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None

    async def search(self, query: str) -> list[Pool]:
        """Search pools across all networks. Never raises."""
        if not query or len(query.strip()) < MIN_QUERY_LENGTH:
            return []

        try:
            client = await self._get_client()
            response = await client.get(
                f"{self.base_url}/search/pools",
                params={"query": query.strip()},
                headers={"Accept": "application/json"},
            )

            if response.status_code != 200:
                logger.warning(
                    f"GeckoTerminal search failed: {response.status_code} - {response.text[:200]}"
                )
                return []

            data = response.json()

        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"GeckoTerminal search error: {e}")
            return []

        items = data.get("data") if isinstance(data, dict) else None
        if not isinstance(items, list):
            logger.debug(f"GeckoTerminal returned no pools for {query!r}")
            return []

        pools = [transform_pool(item) for item in items if isinstance(item, dict)]
        logger.debug(f"GeckoTerminal returned {len(pools)} pool(s) for {query!r}")
        return pools
