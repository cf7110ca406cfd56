"""Request dependencies."""

import logging

import httpx
from fastapi import HTTPException, Request

from swapdesk.trading.factory import TradingSession

logger = logging.getLogger(__name__)


def get_session(request: Request) -> TradingSession:
    """The trading session owned by this application instance."""
    return request.app.state.session


async def refresh_balances(session: TradingSession) -> None:
    """Load balances for the checks, mapping fetch failures to 502."""
    try:
        await session.load_balances()
    except (httpx.HTTPError, ValueError) as e:
        logger.error(f"Failed to fetch balances: {e}")
        raise HTTPException(status_code=502, detail=f"Failed to fetch balances: {e}")
