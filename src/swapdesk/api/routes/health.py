"""Health check endpoints."""

from fastapi import APIRouter, Depends

from swapdesk import __version__
from swapdesk.api.deps import get_session
from swapdesk.config import get_settings
from swapdesk.trading.factory import TradingSession

router = APIRouter()


@router.get("/health")
async def health_check():
    """Basic health check endpoint."""
    return {"status": "healthy", "service": "swapdesk"}


@router.get("/health/detailed")
async def detailed_health(session: TradingSession = Depends(get_session)):
    """Health check with trading state and configuration info.

    Reports "degraded" when no Recall key is configured, since every
    trade execution would then be rejected.
    """
    settings = get_settings()
    recall_configured = bool(settings.recall_api_key)
    return {
        "status": "healthy" if recall_configured else "degraded",
        "service": "swapdesk",
        "version": __version__,
        "recall_configured": recall_configured,
        "trade_status": session.orchestrator.status.value,
        "balances_stale": session.balance_store.is_stale,
        "cached_addresses": len(session.resolver.cache),
        "config": settings.get_safe_dict(),
    }
