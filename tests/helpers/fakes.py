"""Fake collaborators for orchestrator and resolver tests."""

import asyncio
from typing import Any, Optional

from swapdesk.providers.base import ExecutionClient, Pool, PoolSearch, PoolToken
from swapdesk.refresh import DataRefresh
from swapdesk.trading.models import ResolvedTrade


def make_pool(network: str, base: tuple[str, str], quote: tuple[str, str]) -> Pool:
    """Build a pool from (symbol, address) pairs."""
    return Pool(
        network=network,
        base_token=PoolToken(symbol=base[0], address=base[1]),
        quote_token=PoolToken(symbol=quote[0], address=quote[1]),
    )


class FakePoolSearch(PoolSearch):
    """Pool search returning canned pools and counting calls."""

    def __init__(self, pools: Optional[list[Pool]] = None, error: Optional[Exception] = None):
        self.pools = pools or []
        self.error = error
        self.queries: list[str] = []

    @property
    def calls(self) -> int:
        return len(self.queries)

    async def search(self, query: str) -> list[Pool]:
        self.queries.append(query)
        await asyncio.sleep(0)
        if self.error is not None:
            raise self.error
        return list(self.pools)


class FakeExecutionClient(ExecutionClient):
    """Execution client recording submitted trades."""

    def __init__(self, receipt: Optional[dict] = None, error: Optional[Exception] = None):
        self.receipt = receipt if receipt is not None else {"success": True, "transaction": {"id": "tx-1"}}
        self.error = error
        self.trades: list[ResolvedTrade] = []
        self.gate: Optional[asyncio.Event] = None

    async def execute(self, credentials: str, environment: str, trade: ResolvedTrade) -> dict[str, Any]:
        self.trades.append(trade)
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        return self.receipt


class RecordingRefresh(DataRefresh):
    def __init__(self):
        self.calls: list[list] = []

    def invalidate(self, topics=None) -> None:
        self.calls.append(sorted(t.value for t in topics) if topics else [])
