"""Trade proposal state machine and command dispatch."""

from swapdesk.trading.models import (
    ResolvedTrade,
    TradeProposal,
    TradeState,
    TradeStatus,
)

__all__ = [
    "ResolvedTrade",
    "TradeProposal",
    "TradeState",
    "TradeStatus",
]
