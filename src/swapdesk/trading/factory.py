"""Factory functions wiring a trading session from settings."""

import logging
from dataclasses import dataclass
from typing import Optional

from swapdesk.balances import BalanceSnapshot, BalanceStore
from swapdesk.config import Settings, get_settings
from swapdesk.notifications.base import LogNotifier, NotificationSink
from swapdesk.providers.coingecko import CoinGeckoPriceSource
from swapdesk.providers.geckoterminal import GeckoTerminalPoolSearch
from swapdesk.providers.recall import RecallClient
from swapdesk.refresh import RefreshBus, Topic
from swapdesk.tokens.cache import ResolutionCache
from swapdesk.tokens.resolver import AddressResolver
from swapdesk.trading.commands import CommandDispatcher
from swapdesk.trading.orchestrator import TradeOrchestrator

logger = logging.getLogger(__name__)


@dataclass
class TradingSession:
    """Everything one user session needs, sharing a single proposal slot."""

    orchestrator: TradeOrchestrator
    dispatcher: CommandDispatcher
    balance_store: BalanceStore
    refresh: RefreshBus
    resolver: AddressResolver
    recall: RecallClient
    pool_search: GeckoTerminalPoolSearch
    price_source: CoinGeckoPriceSource
    notifier: NotificationSink

    async def load_balances(self) -> BalanceSnapshot:
        """Fetch balances if stale and hand them to the orchestrator."""
        snapshot = await self.balance_store.get_snapshot()
        self.orchestrator.update_balances(snapshot)
        return snapshot

    async def close(self) -> None:
        await self.recall.close()
        await self.pool_search.close()
        await self.price_source.close()
        close_notifier = getattr(self.notifier, "close", None)
        if close_notifier is not None:
            await close_notifier()


def create_notifier(settings: Settings) -> NotificationSink:
    """Telegram notifier when configured, log notifier otherwise."""
    if settings.has_telegram:
        from swapdesk.notifications.telegram import create_telegram_notifier

        logger.info("Trade notifications will be sent to Telegram")
        return create_telegram_notifier(settings.telegram_bot_token, settings.telegram_chat_id)
    return LogNotifier()


def create_session(
    settings: Optional[Settings] = None,
    notifier: Optional[NotificationSink] = None,
    cache: Optional[ResolutionCache] = None,
) -> TradingSession:
    """Create a trading session backed by the real providers."""
    settings = settings or get_settings()
    notifier = notifier or create_notifier(settings)

    recall = RecallClient(settings=settings)
    pool_search = GeckoTerminalPoolSearch(
        base_url=settings.geckoterminal_api_url,
        timeout=settings.http_timeout,
    )
    price_source = CoinGeckoPriceSource(
        base_url=settings.coingecko_api_url,
        timeout=settings.http_timeout,
    )
    resolver = AddressResolver(pool_search, cache=cache or ResolutionCache())

    async def fetch_balances() -> BalanceSnapshot:
        return await recall.get_balances(settings.recall_api_key, settings.recall_environment)

    balance_store = BalanceStore(fetch_balances, stale_seconds=settings.balance_stale_seconds)
    refresh = RefreshBus()
    refresh.subscribe(Topic.BALANCES, balance_store.invalidate)

    orchestrator = TradeOrchestrator(
        resolver=resolver,
        execution_client=recall,
        credentials=settings.recall_api_key,
        environment=settings.recall_environment,
        notifier=notifier,
        refresh=refresh,
        default_reason=settings.default_trade_reason,
        block_unresolved=settings.block_unresolved_tokens,
    )

    return TradingSession(
        orchestrator=orchestrator,
        dispatcher=CommandDispatcher(orchestrator, price_source),
        balance_store=balance_store,
        refresh=refresh,
        resolver=resolver,
        recall=recall,
        pool_search=pool_search,
        price_source=price_source,
        notifier=notifier,
    )
