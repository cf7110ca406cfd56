"""Exception taxonomy for trade proposal, resolution and execution."""

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional


class SwapdeskError(Exception):
    """Base class for all swapdesk errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class TradeValidationError(SwapdeskError):
    """A proposal failed a synchronous policy or balance check.

    Fatal to the current proposal, never retried.
    """
    pass


class ChainPolicyViolation(TradeValidationError):
    """Cross-chain route not allowed by the chain policy."""

    def __init__(self, from_chain: str, to_chain: str, allowed: list[str]):
        self.from_chain = from_chain
        self.to_chain = to_chain
        self.allowed = allowed
        super().__init__(
            f"Cross-chain trade {from_chain} → {to_chain} is not supported. "
            f"Cross-chain trades are only allowed between EVM chains "
            f"({', '.join(allowed)}); Solana cross-chain trading is unsupported."
        )


class MissingBalance(TradeValidationError):
    """No balance entry for the token being sold."""

    def __init__(self, symbol: str):
        self.symbol = symbol
        super().__init__(f"You don't have any {symbol} in your balance")


class InsufficientBalance(TradeValidationError):
    """Requested amount exceeds the available balance."""

    def __init__(self, symbol: str, available: Decimal, requested: Decimal):
        self.symbol = symbol
        self.available = available
        self.requested = requested
        super().__init__(
            f"Insufficient balance. You have {available} {symbol}, "
            f"but trying to trade {requested}"
        )


class ResolutionFailure(SwapdeskError):
    """A token symbol could not be resolved to a contract address."""

    def __init__(self, symbol: str, chain_key: str, detail: str = ""):
        self.symbol = symbol
        self.chain_key = chain_key
        message = f"Could not resolve {symbol} on {chain_key}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class ExecutionError(SwapdeskError):
    """The remote execution API rejected or failed the trade."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)


class InvalidTransition(SwapdeskError):
    """An orchestrator action was requested from a state that does not allow it."""

    def __init__(self, action: str, status: str):
        self.action = action
        self.status = status
        super().__init__(f"Cannot {action} while trade is {status}")


class CommandValidationError(SwapdeskError):
    """A tagged command did not match its schema."""
    pass


@dataclass(frozen=True)
class CheckResult:
    """Outcome of a synchronous trade check: ok, or the error that failed it."""

    error: Optional[TradeValidationError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def message(self) -> str:
        return self.error.message if self.error else ""

    def raise_for_error(self) -> None:
        """Raise the carried error, if any."""
        if self.error is not None:
            raise self.error


OK = CheckResult()
