"""Pytest configuration and fixtures."""

import os

import pytest

# Set test environment
os.environ["ENVIRONMENT"] = "test"
os.environ["DEBUG"] = "true"
os.environ["RECALL_API_KEY"] = "test-key"
os.environ["RECALL_ENVIRONMENT"] = "sandbox"
os.environ["RECALL_COMPETITION_ID"] = ""
os.environ["TELEGRAM_BOT_TOKEN"] = ""

from swapdesk.balances import BalanceSnapshot
from swapdesk.errors import ExecutionError
from swapdesk.notifications.base import LogNotifier
from swapdesk.tokens.cache import ResolutionCache
from swapdesk.tokens.resolver import AddressResolver
from swapdesk.trading.orchestrator import TradeOrchestrator
from tests.helpers import FakeExecutionClient, FakePoolSearch, RecordingRefresh


@pytest.fixture
def pool_search() -> FakePoolSearch:
    return FakePoolSearch()


@pytest.fixture
def cache() -> ResolutionCache:
    return ResolutionCache()


@pytest.fixture
def resolver(pool_search, cache) -> AddressResolver:
    return AddressResolver(pool_search, cache=cache)


@pytest.fixture
def execution_client() -> FakeExecutionClient:
    return FakeExecutionClient()


@pytest.fixture
def failing_execution_client() -> FakeExecutionClient:
    return FakeExecutionClient(
        error=ExecutionError('Trade failed (400): {"error":"Insufficient liquidity"}', status_code=400)
    )


@pytest.fixture
def notifier() -> LogNotifier:
    return LogNotifier()


@pytest.fixture
def refresh() -> RecordingRefresh:
    return RecordingRefresh()


@pytest.fixture
def usdc_balances() -> BalanceSnapshot:
    """Scenario balances: 100 USDC."""
    return BalanceSnapshot.from_api([{"token": "USDC", "amount": 100}])


@pytest.fixture
def orchestrator(resolver, execution_client, notifier, refresh, usdc_balances) -> TradeOrchestrator:
    return TradeOrchestrator(
        resolver=resolver,
        execution_client=execution_client,
        credentials="test-key",
        environment="sandbox",
        balances=usdc_balances,
        notifier=notifier,
        refresh=refresh,
    )
