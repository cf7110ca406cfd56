"""Tagged command endpoint for chat assistants."""

from typing import Any

from fastapi import APIRouter, Depends, HTTPException

from swapdesk.api.contracts import CommandResponse
from swapdesk.api.deps import get_session, refresh_balances
from swapdesk.errors import CommandValidationError, InvalidTransition
from swapdesk.trading.commands import TradeCommand, parse_command
from swapdesk.trading.factory import TradingSession

router = APIRouter(tags=["commands"])


@router.post("/commands", response_model=CommandResponse)
async def run_command(
    body: dict[str, Any],
    session: TradingSession = Depends(get_session),
) -> dict:
    """Run a ``{"kind": "price" | "trade", "payload": {...}}`` command.

    Trade commands only propose; use /trades/confirm to execute.
    """
    try:
        command = parse_command(body)
    except CommandValidationError as e:
        raise HTTPException(status_code=422, detail=e.message)

    if isinstance(command, TradeCommand):
        await refresh_balances(session)

    try:
        result = await session.dispatcher.dispatch(command)
    except InvalidTransition as e:
        raise HTTPException(status_code=409, detail=e.message)
    return result.to_dict()
