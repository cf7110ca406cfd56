"""API request/response contracts."""

from typing import Any, Optional

from pydantic import BaseModel, Field


class ProposalView(BaseModel):
    from_token: str
    to_token: str
    amount: str
    from_chain: str
    to_chain: str
    reason: str
    created_at: float


class ResolvedTradeView(BaseModel):
    from_chain_key: str
    to_chain_key: str
    from_token_address: str
    to_token_address: str
    amount: str
    reason: str
    from_symbol: str = ""
    to_symbol: str = ""
    warnings: list[str] = Field(default_factory=list)


class TradeStateResponse(BaseModel):
    """Current state of the proposal slot."""

    status: str = Field(..., description="idle, proposed, executing, settled, failed or cancelled")
    proposal: Optional[ProposalView] = None
    trade: Optional[ResolvedTradeView] = None
    receipt: Optional[dict[str, Any]] = None
    reason: Optional[str] = Field(None, description="Failure reason, suitable for display")


class TokenResolveResponse(BaseModel):
    symbol: str
    chain_key: str
    resolved_address: Optional[str] = None
    address: str
    source: str


class ChainDefaultResponse(BaseModel):
    symbol: str
    chain_key: str


class ChainCheckResponse(BaseModel):
    from_chain: str
    to_chain: str
    valid: bool
    message: str = ""


class CommandResponse(BaseModel):
    kind: str
    success: bool
    message: str
    state: Optional[TradeStateResponse] = None
    price: Optional[dict[str, Optional[str]]] = None
