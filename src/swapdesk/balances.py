"""Balance snapshots and the balance sufficiency check.

The snapshot is supplied by an external balance source and is read-only here;
BalanceStore only caches it and drops it when asked to invalidate.
"""

import logging
import time
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any, Awaitable, Callable, Iterable, Optional, Union

from swapdesk.errors import OK, CheckResult, InsufficientBalance, MissingBalance

logger = logging.getLogger(__name__)

Number = Union[Decimal, int, float, str]


def to_decimal(value: Any, default: Decimal = Decimal("0")) -> Decimal:
    """Parse a number-like value, returning default when it cannot be parsed."""
    if value is None or value == "":
        return default
    try:
        result = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError):
        return default
    # NaN and infinities cannot be ordered against balances
    if not result.is_finite():
        return default
    return result


@dataclass(frozen=True)
class BalanceEntry:
    """A single token balance."""

    symbol: str
    amount: Decimal
    value_usd: Decimal = Decimal("0")
    chain: Optional[str] = None


class BalanceSnapshot:
    """Token balances keyed by symbol, case-insensitively."""

    def __init__(self, entries: Iterable[BalanceEntry] = ()):
        self._entries: dict[str, BalanceEntry] = {}
        for entry in entries:
            # First entry wins when a symbol is held on several chains
            self._entries.setdefault(entry.symbol.upper(), entry)

    @classmethod
    def from_api(cls, raw: Any) -> "BalanceSnapshot":
        """Build a snapshot from a balances API payload.

        Accepts either ``{"balances": [...]}`` or a bare list. Each item may
        carry its symbol under ``symbol`` or ``token`` and its USD value under
        ``value`` or ``usdValue``.
        """
        if isinstance(raw, dict):
            items = raw.get("balances") or []
        elif isinstance(raw, list):
            items = raw
        else:
            items = []

        entries = []
        for item in items:
            if not isinstance(item, dict):
                continue
            symbol = item.get("symbol") or item.get("token")
            if not symbol:
                continue
            entries.append(
                BalanceEntry(
                    symbol=str(symbol),
                    amount=to_decimal(item.get("amount")),
                    value_usd=to_decimal(item.get("value") or item.get("usdValue")),
                    chain=item.get("specificChain") or item.get("chain"),
                )
            )
        return cls(entries)

    @classmethod
    def from_amounts(cls, amounts: dict[str, Number]) -> "BalanceSnapshot":
        """Build a snapshot from a plain ``{symbol: amount}`` mapping."""
        return cls(BalanceEntry(symbol=s, amount=to_decimal(a)) for s, a in amounts.items())

    def get(self, symbol: str) -> Optional[BalanceEntry]:
        return self._entries.get(symbol.upper())

    def __contains__(self, symbol: object) -> bool:
        return isinstance(symbol, str) and symbol.upper() in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self):
        return iter(self._entries.values())

    @property
    def total_value_usd(self) -> Decimal:
        return sum((e.value_usd for e in self._entries.values()), Decimal("0"))


def check_sufficient(balances: BalanceSnapshot, from_symbol: str, amount: Number) -> CheckResult:
    """Check a proposed trade amount against the available balance.

    An amount equal to the available balance is allowed.
    """
    entry = balances.get(from_symbol)
    if entry is None:
        return CheckResult(error=MissingBalance(from_symbol))

    requested = to_decimal(amount)
    if requested > entry.amount:
        return CheckResult(error=InsufficientBalance(from_symbol, entry.amount, requested))

    return OK


class BalanceStore:
    """Caches the balance snapshot from a fetcher and reloads it when stale.

    Subscribe ``invalidate`` to the balances refresh topic so settled trades
    force a reload on next access.
    """

    def __init__(
        self,
        fetcher: Callable[[], Awaitable[BalanceSnapshot]],
        stale_seconds: float = 15.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._fetcher = fetcher
        self._stale_seconds = stale_seconds
        self._clock = clock
        self._snapshot: Optional[BalanceSnapshot] = None
        self._fetched_at: float = 0.0

    @property
    def is_stale(self) -> bool:
        if self._snapshot is None:
            return True
        return self._clock() - self._fetched_at >= self._stale_seconds

    async def get_snapshot(self) -> BalanceSnapshot:
        """Return the cached snapshot, fetching a fresh one when stale."""
        if self.is_stale:
            self._snapshot = await self._fetcher()
            self._fetched_at = self._clock()
            logger.debug(f"Fetched balance snapshot with {len(self._snapshot)} token(s)")
        return self._snapshot

    def set_snapshot(self, snapshot: BalanceSnapshot) -> None:
        self._snapshot = snapshot
        self._fetched_at = self._clock()

    def invalidate(self) -> None:
        """Mark the snapshot stale."""
        logger.debug("Balance snapshot invalidated")
        self._snapshot = None
