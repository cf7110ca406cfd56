"""Trade proposal endpoints.

A trade is proposed, then explicitly confirmed or cancelled. Only one
proposal is live at a time; proposing again replaces it.
"""

from fastapi import APIRouter, Depends, HTTPException

from swapdesk.api.contracts import TradeStateResponse
from swapdesk.api.deps import get_session, refresh_balances
from swapdesk.errors import InvalidTransition
from swapdesk.trading.commands import TradePayload
from swapdesk.trading.factory import TradingSession

router = APIRouter(prefix="/trades", tags=["trades"])


@router.get("/state", response_model=TradeStateResponse)
async def get_trade_state(session: TradingSession = Depends(get_session)) -> dict:
    """Get the current state of the proposal slot."""
    return session.orchestrator.state.to_dict()


@router.post("/propose", response_model=TradeStateResponse)
async def propose_trade(
    request: TradePayload,
    session: TradingSession = Depends(get_session),
) -> dict:
    """Propose a trade.

    Chains default from the token symbols when omitted. A proposal that
    breaks the chain policy or exceeds the balance comes back as failed.
    """
    await refresh_balances(session)
    try:
        state = session.orchestrator.propose(
            from_token=request.from_token,
            to_token=request.to_token,
            amount=request.amount,
            from_chain=request.from_chain,
            to_chain=request.to_chain,
            reason=request.reason,
        )
    except InvalidTransition as e:
        raise HTTPException(status_code=409, detail=e.message)
    return state.to_dict()


@router.post("/confirm", response_model=TradeStateResponse)
async def confirm_trade(session: TradingSession = Depends(get_session)) -> dict:
    """Confirm and execute the live proposal."""
    await refresh_balances(session)
    try:
        state = await session.orchestrator.confirm()
    except InvalidTransition as e:
        raise HTTPException(status_code=409, detail=e.message)
    return state.to_dict()


@router.post("/cancel", response_model=TradeStateResponse)
async def cancel_trade(session: TradingSession = Depends(get_session)) -> dict:
    """Cancel the live proposal."""
    try:
        state = session.orchestrator.cancel()
    except InvalidTransition as e:
        raise HTTPException(status_code=409, detail=e.message)
    return state.to_dict()
