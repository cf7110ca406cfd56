"""Recall trading API client.

Endpoints used:
- POST /api/trade/execute
- GET  /api/agent/balances
"""

import logging
from typing import Any, Optional

import httpx

from swapdesk.balances import BalanceSnapshot
from swapdesk.chains import get_chain
from swapdesk.config import Settings, get_settings
from swapdesk.errors import ExecutionError
from swapdesk.providers.base import BalanceSource, ExecutionClient
from swapdesk.trading.models import ResolvedTrade

logger = logging.getLogger(__name__)


def _chain_fields(chain_key: str) -> tuple[str, str]:
    """Return the (chain family, specific chain) pair Recall expects."""
    chain = get_chain(chain_key)
    if chain is None:
        return "evm", chain_key
    return ("evm" if chain.is_evm else "svm"), chain.recall_chain


class RecallClient(ExecutionClient, BalanceSource):
    """Client for the Recall competitions trading API."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.settings = settings or get_settings()
        self._http_client = client

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(timeout=self.settings.http_timeout)
        return self._http_client

    async def close(self) -> None:
        if self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None

    @staticmethod
    def _headers(credentials: str) -> dict:
        return {
            "Authorization": f"Bearer {credentials}",
            "Content-Type": "application/json",
        }

    def build_execute_body(self, trade: ResolvedTrade) -> dict[str, Any]:
        """Build the request body for /api/trade/execute."""
        from_chain, from_specific = _chain_fields(trade.from_chain_key)
        to_chain, to_specific = _chain_fields(trade.to_chain_key)

        body: dict[str, Any] = {
            "fromToken": trade.from_token_address,
            "toToken": trade.to_token_address,
            "amount": float(trade.amount),
            "reason": trade.reason or self.settings.default_trade_reason,
            "fromChain": from_chain,
            "toChain": to_chain,
            "fromSpecificChain": from_specific,
            "toSpecificChain": to_specific,
        }
        if self.settings.recall_competition_id:
            body["competitionId"] = self.settings.recall_competition_id
        return body

    async def execute(
        self,
        credentials: str,
        environment: str,
        trade: ResolvedTrade,
    ) -> dict[str, Any]:
        """Execute a trade and return the API receipt.

        Raises:
            ExecutionError: On non-2xx status or transport failure
        """
        try:
            base_url = self.settings.get_recall_base_url(environment)
        except ValueError as e:
            raise ExecutionError(str(e)) from e

        body = self.build_execute_body(trade)
        logger.info(
            f"Submitting trade {trade.amount} {trade.from_symbol or trade.from_token_address} -> "
            f"{trade.to_symbol or trade.to_token_address} ({environment})"
        )

        try:
            client = await self._get_client()
            response = await client.post(
                f"{base_url}/api/trade/execute",
                headers=self._headers(credentials),
                json=body,
            )
        except httpx.HTTPError as e:
            raise ExecutionError(f"Trade failed: {type(e).__name__}: {e}") from e

        if not response.is_success:
            text = response.text or response.reason_phrase
            raise ExecutionError(
                f"Trade failed ({response.status_code}): {text}",
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as e:
            raise ExecutionError(f"Trade failed: invalid response body ({e})") from e

    async def get_balances(self, credentials: str, environment: str) -> BalanceSnapshot:
        """Fetch the agent's balances.

        Raises:
            httpx.HTTPStatusError: On non-2xx status
        """
        base_url = self.settings.get_recall_base_url(environment)
        params = {}
        if self.settings.recall_competition_id:
            params["competitionId"] = self.settings.recall_competition_id

        client = await self._get_client()
        response = await client.get(
            f"{base_url}/api/agent/balances",
            headers=self._headers(credentials),
            params=params,
        )
        response.raise_for_status()
        return BalanceSnapshot.from_api(response.json())
