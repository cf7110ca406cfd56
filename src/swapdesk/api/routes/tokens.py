"""Token resolution and chain policy endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from swapdesk.api.contracts import ChainCheckResponse, ChainDefaultResponse, TokenResolveResponse
from swapdesk.api.deps import get_session
from swapdesk.chains import default_chain_for, validate_cross_chain
from swapdesk.trading.factory import TradingSession

router = APIRouter(tags=["tokens"])


@router.get("/tokens/resolve", response_model=TokenResolveResponse)
async def resolve_token(
    symbol: str = Query(..., min_length=1),
    chain: Optional[str] = Query(None, description="Chain key; inferred from the symbol when omitted"),
    session: TradingSession = Depends(get_session),
) -> dict:
    """Resolve a token symbol to its contract address."""
    ref = await session.resolver.resolve(symbol, chain or default_chain_for(symbol))
    return ref.to_dict()


@router.get("/chains/default", response_model=ChainDefaultResponse)
async def get_default_chain(symbol: str = Query(..., min_length=1)) -> dict:
    """Get the chain a token symbol defaults to."""
    return {"symbol": symbol, "chain_key": default_chain_for(symbol)}


@router.get("/chains/validate", response_model=ChainCheckResponse)
async def check_route(
    from_chain: str = Query(..., min_length=1),
    to_chain: str = Query(..., min_length=1),
) -> dict:
    """Check whether a trade between two chains is allowed."""
    result = validate_cross_chain(from_chain, to_chain)
    return {
        "from_chain": from_chain,
        "to_chain": to_chain,
        "valid": result.ok,
        "message": result.message,
    }
