"""Trade proposal and state models."""

import time
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Any, Optional


@dataclass(frozen=True)
class TradeProposal:
    """A requested token swap. Immutable once created."""

    from_token: str
    to_token: str
    amount: Decimal
    from_chain: str
    to_chain: str
    reason: str
    created_at: float = field(default_factory=time.time)

    @property
    def is_cross_chain(self) -> bool:
        return self.from_chain != self.to_chain

    def describe(self) -> str:
        return f"{self.amount} {self.from_token} ({self.from_chain}) → {self.to_token} ({self.to_chain})"

    def to_dict(self) -> dict:
        return {
            "from_token": self.from_token,
            "to_token": self.to_token,
            "amount": str(self.amount),
            "from_chain": self.from_chain,
            "to_chain": self.to_chain,
            "reason": self.reason,
            "created_at": self.created_at,
        }


@dataclass(frozen=True)
class ResolvedTrade:
    """A trade with both token addresses resolved, ready for submission."""

    from_chain_key: str
    to_chain_key: str
    from_token_address: str
    to_token_address: str
    amount: Decimal
    reason: str
    from_symbol: str = ""
    to_symbol: str = ""
    warnings: tuple[str, ...] = ()

    def to_dict(self) -> dict:
        return {
            "from_chain_key": self.from_chain_key,
            "to_chain_key": self.to_chain_key,
            "from_token_address": self.from_token_address,
            "to_token_address": self.to_token_address,
            "amount": str(self.amount),
            "reason": self.reason,
            "from_symbol": self.from_symbol,
            "to_symbol": self.to_symbol,
            "warnings": list(self.warnings),
        }


class TradeStatus(str, Enum):
    """Lifecycle of the single proposal slot."""

    IDLE = "idle"
    PROPOSED = "proposed"
    EXECUTING = "executing"
    SETTLED = "settled"
    FAILED = "failed"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class TradeState:
    """Tagged state of the orchestrator.

    Only the field matching the status is set: ``proposal`` for PROPOSED and
    EXECUTING, ``receipt`` for SETTLED, ``reason`` for FAILED.
    """

    status: TradeStatus
    proposal: Optional[TradeProposal] = None
    receipt: Optional[dict[str, Any]] = None
    reason: Optional[str] = None
    trade: Optional[ResolvedTrade] = None

    @classmethod
    def idle(cls) -> "TradeState":
        return cls(TradeStatus.IDLE)

    @classmethod
    def proposed(cls, proposal: TradeProposal) -> "TradeState":
        return cls(TradeStatus.PROPOSED, proposal=proposal)

    @classmethod
    def executing(cls, proposal: TradeProposal, trade: ResolvedTrade) -> "TradeState":
        return cls(TradeStatus.EXECUTING, proposal=proposal, trade=trade)

    @classmethod
    def settled(cls, receipt: dict[str, Any], trade: Optional[ResolvedTrade] = None) -> "TradeState":
        return cls(TradeStatus.SETTLED, receipt=receipt, trade=trade)

    @classmethod
    def failed(cls, reason: str) -> "TradeState":
        return cls(TradeStatus.FAILED, reason=reason)

    @classmethod
    def cancelled(cls) -> "TradeState":
        return cls(TradeStatus.CANCELLED)

    def to_dict(self) -> dict:
        return {
            "status": self.status.value,
            "proposal": self.proposal.to_dict() if self.proposal else None,
            "trade": self.trade.to_dict() if self.trade else None,
            "receipt": self.receipt,
            "reason": self.reason,
        }
