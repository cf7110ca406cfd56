"""Trade proposal state machine.

    IDLE -> PROPOSED -> EXECUTING -> SETTLED | FAILED
            PROPOSED -> CANCELLED -> IDLE

The orchestrator owns a single proposal slot: at most one live proposal per
session. A new proposal replaces any proposal that is not executing. Policy
and balance checks run synchronously before any network access; a proposal
failing them goes straight to FAILED and never becomes PROPOSED.
"""

import asyncio
import logging
from decimal import Decimal
from typing import Optional, Union

from swapdesk.balances import BalanceSnapshot, check_sufficient, to_decimal
from swapdesk.chains import default_chain_for, validate_cross_chain
from swapdesk.errors import (
    CheckResult,
    ExecutionError,
    InvalidTransition,
    ResolutionFailure,
    TradeValidationError,
)
from swapdesk.notifications.base import LogNotifier, NotificationKind, NotificationSink
from swapdesk.providers.base import ExecutionClient
from swapdesk.refresh import ALL_TOPICS, DataRefresh
from swapdesk.tokens.resolver import AddressResolver, TokenRef
from swapdesk.trading.models import ResolvedTrade, TradeProposal, TradeState, TradeStatus

logger = logging.getLogger(__name__)


class TradeOrchestrator:
    """Drives a single trade proposal from request to settlement."""

    def __init__(
        self,
        resolver: AddressResolver,
        execution_client: ExecutionClient,
        credentials: str,
        environment: str,
        balances: Optional[BalanceSnapshot] = None,
        notifier: Optional[NotificationSink] = None,
        refresh: Optional[DataRefresh] = None,
        default_reason: str = "TRADE",
        block_unresolved: bool = False,
    ):
        self.resolver = resolver
        self.execution_client = execution_client
        self.credentials = credentials
        self.environment = environment
        self.balances = balances if balances is not None else BalanceSnapshot()
        self.notifier = notifier or LogNotifier()
        self.refresh = refresh
        self.default_reason = default_reason
        self.block_unresolved = block_unresolved

        self._slot: Optional[TradeProposal] = None
        self._state = TradeState.idle()
        self.history: list[TradeState] = []

    # ======================
    # Accessors
    # ======================

    @property
    def state(self) -> TradeState:
        return self._state

    @property
    def status(self) -> TradeStatus:
        return self._state.status

    @property
    def proposal(self) -> Optional[TradeProposal]:
        """The live proposal, if any."""
        return self._slot

    def update_balances(self, balances: BalanceSnapshot) -> None:
        """Replace the balance snapshot used by the checks."""
        self.balances = balances

    # ======================
    # Transitions
    # ======================

    def propose(
        self,
        from_token: str,
        to_token: str,
        amount: Union[Decimal, int, float, str],
        from_chain: Optional[str] = None,
        to_chain: Optional[str] = None,
        reason: Optional[str] = None,
        balances: Optional[BalanceSnapshot] = None,
    ) -> TradeState:
        """Propose a trade, replacing any live proposal.

        Raises:
            InvalidTransition: If a trade is currently executing
        """
        if self.status == TradeStatus.EXECUTING:
            raise InvalidTransition("propose", self.status.value)

        if balances is not None:
            self.balances = balances

        if self._slot is not None:
            logger.info(f"Replacing live proposal: {self._slot.describe()}")
            self._slot = None

        requested = to_decimal(amount)
        if requested <= 0:
            return self._fail(TradeValidationError(f"Amount must be greater than zero, got {amount}"))

        proposal = TradeProposal(
            from_token=from_token.strip(),
            to_token=to_token.strip(),
            amount=requested,
            from_chain=(from_chain or default_chain_for(from_token)).lower(),
            to_chain=(to_chain or default_chain_for(to_token)).lower(),
            reason=reason or self.default_reason,
        )

        check = self._check(proposal)
        if not check.ok:
            return self._fail(check.error)

        self._slot = proposal
        return self._transition(TradeState.proposed(proposal))

    async def confirm(self) -> TradeState:
        """Confirm the live proposal: re-check, resolve addresses, execute.

        Raises:
            InvalidTransition: If there is no proposal awaiting confirmation
        """
        if self.status != TradeStatus.PROPOSED or self._slot is None:
            raise InvalidTransition("confirm", self.status.value)

        proposal = self._slot

        # Balances or parameters may have changed since the proposal was made
        check = self._check(proposal)
        if not check.ok:
            return self._fail(check.error)

        from_ref, to_ref = await asyncio.gather(
            self.resolver.resolve(proposal.from_token, proposal.from_chain),
            self.resolver.resolve(proposal.to_token, proposal.to_chain),
        )

        if self._slot is not proposal or self.status != TradeStatus.PROPOSED:
            logger.info(f"Proposal changed during address resolution; not submitting {proposal.describe()}")
            return self._state

        warnings = tuple(
            f"{ref.symbol} on {ref.chain_key} could not be resolved; using the symbol as address"
            for ref in (from_ref, to_ref)
            if not ref.is_resolved
        )
        if warnings and self.block_unresolved:
            unresolved = next(ref for ref in (from_ref, to_ref) if not ref.is_resolved)
            return self._fail(ResolutionFailure(unresolved.symbol, unresolved.chain_key))

        trade = self._build_trade(proposal, from_ref, to_ref, warnings)
        self._transition(TradeState.executing(proposal, trade))

        handle = self.notifier.show(NotificationKind.LOADING, "Executing trade...")
        try:
            receipt = await self.execution_client.execute(self.credentials, self.environment, trade)
        except ExecutionError as e:
            return self._fail(e, prefix="Trade failed: ")
        except Exception as e:
            logger.exception("Unexpected error executing trade")
            return self._fail(ExecutionError(f"{type(e).__name__}: {e}"), prefix="Trade failed: ")
        finally:
            self.notifier.dismiss(handle)

        if isinstance(receipt, dict) and receipt.get("success") is False:
            error = receipt.get("error") or "execution was rejected"
            return self._fail(ExecutionError(str(error)), prefix="Trade failed: ")

        return self._settle(proposal, trade, receipt)

    def cancel(self) -> TradeState:
        """Cancel the live proposal and return to idle.

        Raises:
            InvalidTransition: If there is no proposal awaiting confirmation
        """
        if self.status != TradeStatus.PROPOSED:
            raise InvalidTransition("cancel", self.status.value)

        logger.info(f"Cancelled proposal: {self._slot.describe() if self._slot else '-'}")
        self._slot = None
        cancelled = self._transition(TradeState.cancelled())
        self._transition(TradeState.idle())
        return cancelled

    # ======================
    # Internals
    # ======================

    def _check(self, proposal: TradeProposal) -> CheckResult:
        check = validate_cross_chain(proposal.from_chain, proposal.to_chain)
        if not check.ok:
            return check
        return check_sufficient(self.balances, proposal.from_token, proposal.amount)

    @staticmethod
    def _build_trade(
        proposal: TradeProposal,
        from_ref: TokenRef,
        to_ref: TokenRef,
        warnings: tuple[str, ...],
    ) -> ResolvedTrade:
        for warning in warnings:
            logger.warning(warning)
        return ResolvedTrade(
            from_chain_key=proposal.from_chain,
            to_chain_key=proposal.to_chain,
            from_token_address=from_ref.address,
            to_token_address=to_ref.address,
            amount=proposal.amount,
            reason=proposal.reason,
            from_symbol=proposal.from_token,
            to_symbol=proposal.to_token,
            warnings=warnings,
        )

    def _settle(self, proposal: TradeProposal, trade: ResolvedTrade, receipt: dict) -> TradeState:
        self._slot = None
        state = self._transition(TradeState.settled(receipt, trade))

        if self.refresh is not None:
            try:
                self.refresh.invalidate(ALL_TOPICS)
            except Exception as e:
                logger.error(f"Data refresh failed after settlement: {e}")

        self.notifier.show(
            NotificationKind.SUCCESS,
            f"Trade executed! {proposal.amount} {proposal.from_token} → {proposal.to_token}",
        )
        return state

    def _fail(self, error: Exception, prefix: str = "") -> TradeState:
        self._slot = None
        reason = getattr(error, "message", None) or str(error)
        logger.warning(f"Proposal failed: {reason}")
        message = reason if reason.startswith(prefix.rstrip(": ")) else f"{prefix}{reason}"
        self.notifier.show(NotificationKind.ERROR, message)
        return self._transition(TradeState.failed(reason))

    def _transition(self, state: TradeState) -> TradeState:
        if state.status != self._state.status:
            logger.info(f"Trade state {self._state.status.value} -> {state.status.value}")
        self._state = state
        self.history.append(state)
        return state
