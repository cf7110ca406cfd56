"""Tagged commands for price lookups and trade proposals.

Commands arrive as ``{"kind": "price" | "trade", "payload": {...}}``, for
example from a chat assistant's tool call, and are validated before they
reach the orchestrator. A trade command only proposes; confirmation is a
separate user action.
"""

import json
import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, field_validator

from swapdesk.chains import CHAINS
from swapdesk.errors import CommandValidationError
from swapdesk.providers.base import PriceQuote, PriceSource
from swapdesk.trading.models import TradeState
from swapdesk.trading.orchestrator import TradeOrchestrator

logger = logging.getLogger(__name__)

# Tool-call function names -> command kinds
TOOL_KINDS = {
    "execute_trade": "trade",
    "propose_trade": "trade",
    "get_price": "price",
    "get_crypto_price": "price",
}


class PricePayload(BaseModel):
    """Price lookup parameters."""

    symbol: str = Field(..., min_length=1, description="Token symbol, e.g. ETH")


class TradePayload(BaseModel):
    """Trade proposal parameters."""

    model_config = ConfigDict(populate_by_name=True)

    from_token: str = Field(..., alias="fromToken", min_length=1, description="Token to sell")
    to_token: str = Field(..., alias="toToken", min_length=1, description="Token to buy")
    amount: Decimal = Field(..., gt=0, description="Amount of from_token to trade")
    reason: Optional[str] = Field(None, description="Optional reason for the trade")
    from_chain: Optional[str] = Field(None, alias="fromChain", description="Source chain key")
    to_chain: Optional[str] = Field(None, alias="toChain", description="Destination chain key")

    @field_validator("from_chain", "to_chain")
    @classmethod
    def _known_chain(cls, value: Optional[str]) -> Optional[str]:
        if value is None or value == "":
            return None
        key = value.lower()
        if key not in CHAINS:
            raise ValueError(f"unknown chain {value!r}; expected one of {', '.join(CHAINS)}")
        return key


class PriceCommand(BaseModel):
    kind: Literal["price"]
    payload: PricePayload


class TradeCommand(BaseModel):
    kind: Literal["trade"]
    payload: TradePayload


Command = Annotated[Union[PriceCommand, TradeCommand], Field(discriminator="kind")]

_command_adapter: TypeAdapter = TypeAdapter(Command)


def parse_command(data: Any) -> Union[PriceCommand, TradeCommand]:
    """Validate a raw command.

    Raises:
        CommandValidationError: If the command does not match its schema
    """
    try:
        return _command_adapter.validate_python(data)
    except ValidationError as e:
        raise CommandValidationError(f"Invalid command: {e}") from e


def command_from_tool_call(name: str, arguments: Union[str, dict]) -> Union[PriceCommand, TradeCommand]:
    """Build a command from a language-model tool call.

    Raises:
        CommandValidationError: For unknown tools or malformed arguments
    """
    kind = TOOL_KINDS.get(name)
    if kind is None:
        raise CommandValidationError(f"Unknown tool: {name}")

    if isinstance(arguments, str):
        try:
            arguments = json.loads(arguments or "{}")
        except json.JSONDecodeError as e:
            raise CommandValidationError(f"Tool arguments are not valid JSON: {e}") from e

    return parse_command({"kind": kind, "payload": arguments})


@dataclass
class CommandResult:
    """Outcome of a dispatched command."""

    kind: str
    success: bool
    message: str
    state: Optional[TradeState] = None
    price: Optional[PriceQuote] = None

    def to_dict(self) -> dict:
        data: dict[str, Any] = {
            "kind": self.kind,
            "success": self.success,
            "message": self.message,
        }
        if self.state is not None:
            data["state"] = self.state.to_dict()
        if self.price is not None:
            data["price"] = {
                "symbol": self.price.symbol,
                "coin_id": self.price.coin_id,
                "price": str(self.price.price),
                "change_24h": str(self.price.change_24h) if self.price.change_24h is not None else None,
                "market_cap": str(self.price.market_cap) if self.price.market_cap is not None else None,
            }
        return data


class CommandDispatcher:
    """Routes validated commands to the price source or the orchestrator."""

    def __init__(self, orchestrator: TradeOrchestrator, price_source: PriceSource):
        self.orchestrator = orchestrator
        self.price_source = price_source

    async def dispatch(self, command: Union[PriceCommand, TradeCommand, dict]) -> CommandResult:
        if isinstance(command, dict):
            command = parse_command(command)

        logger.info(f"Dispatching {command.kind} command")
        if isinstance(command, PriceCommand):
            return await self._price(command.payload)
        return self._trade(command.payload)

    async def _price(self, payload: PricePayload) -> CommandResult:
        quote = await self.price_source.get_price(payload.symbol)
        if quote is None:
            return CommandResult(
                kind="price",
                success=False,
                message=f"Price not available for {payload.symbol.upper()}",
            )
        return CommandResult(
            kind="price",
            success=True,
            message=f"{quote.symbol} is ${quote.price}",
            price=quote,
        )

    def _trade(self, payload: TradePayload) -> CommandResult:
        state = self.orchestrator.propose(
            from_token=payload.from_token,
            to_token=payload.to_token,
            amount=payload.amount,
            from_chain=payload.from_chain,
            to_chain=payload.to_chain,
            reason=payload.reason,
        )

        if state.proposal is None:
            return CommandResult(kind="trade", success=False, message=state.reason or "", state=state)

        return CommandResult(
            kind="trade",
            success=True,
            message=f"Please confirm: {state.proposal.describe()}",
            state=state,
        )
