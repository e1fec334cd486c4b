"""
REST Store Implementation

Talks to the finance API:
    GET  /data          -> {"transactions": [...], "goals": [...]}
    POST /transactions  -> created transaction
    POST /goals         -> created goal

TRADEOFFS:
- No retries. A failed call is reported to the user, who decides
  whether to resubmit or reload.
- JSON numbers are parsed straight into Decimal so amounts never pass
  through float on the way in.
"""

from decimal import Decimal
from typing import Any, Optional

import httpx
import pydantic
import structlog

from finance_tracker.config import StoreSettings, get_settings
from finance_tracker.models import Goal, GoalDraft, Transaction, TransactionDraft
from finance_tracker.services.store.interface import (
    FinanceData,
    FinanceStoreInterface,
    InvalidResponseError,
    TransportError,
)


FETCH_FAILED_MESSAGE = "Failed to fetch data from the server."
ADD_TRANSACTION_FAILED_MESSAGE = "Failed to add transaction."
ADD_GOAL_FAILED_MESSAGE = "Failed to add goal."


class HttpFinanceStore(FinanceStoreInterface):
    """
    Store backed by the finance REST API.

    Pass a preconfigured httpx.AsyncClient to control transport
    (tests use httpx.MockTransport); otherwise one is created from
    StoreSettings on first use.
    """

    def __init__(
        self,
        settings: Optional[StoreSettings] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self._settings = settings or get_settings().store
        self._client = client
        self._owns_client = client is None
        self._logger = structlog.get_logger(__name__)

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self._settings.base_url,
                timeout=self._settings.timeout_seconds,
                headers={"Accept": "application/json"},
            )
        return self._client

    async def close(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def _request(
        self,
        method: str,
        path: str,
        fallback_message: str,
        payload: Optional[dict] = None,
    ) -> Any:
        """
        Send one request and return the decoded JSON body.

        Raises TransportError for network failures and non-2xx answers.
        The server's "error" field is used as message when present.
        """
        client = self._get_client()
        try:
            response = await client.request(method, path, json=payload)
        except httpx.HTTPError as e:
            self._logger.error("store_request_failed", method=method, path=path, error=str(e))
            raise TransportError(fallback_message) from e

        if not response.is_success:
            message = _server_error_message(response) or fallback_message
            self._logger.error(
                "store_request_rejected",
                method=method,
                path=path,
                status_code=response.status_code,
                error=message,
            )
            raise TransportError(message, status_code=response.status_code)

        try:
            return response.json(parse_float=Decimal)
        except ValueError as e:
            raise InvalidResponseError(f"{method} {path} returned a non-JSON body") from e

    async def fetch_data(self) -> FinanceData:
        body = await self._request("GET", "/data", FETCH_FAILED_MESSAGE)
        if not isinstance(body, dict):
            raise InvalidResponseError("GET /data did not return an object")
        try:
            return FinanceData(
                transactions=tuple(
                    Transaction.model_validate(t) for t in body.get("transactions") or []
                ),
                goals=tuple(Goal.model_validate(g) for g in body.get("goals") or []),
            )
        except pydantic.ValidationError as e:
            raise InvalidResponseError(f"GET /data returned invalid records: {e}") from e

    async def create_transaction(self, draft: TransactionDraft) -> Transaction:
        body = await self._request(
            "POST", "/transactions", ADD_TRANSACTION_FAILED_MESSAGE, payload=draft.to_payload()
        )
        try:
            return Transaction.model_validate(body)
        except pydantic.ValidationError as e:
            raise InvalidResponseError(f"POST /transactions returned an invalid record: {e}") from e

    async def create_goal(self, draft: GoalDraft) -> Goal:
        body = await self._request(
            "POST", "/goals", ADD_GOAL_FAILED_MESSAGE, payload=draft.to_payload()
        )
        try:
            return Goal.model_validate(body)
        except pydantic.ValidationError as e:
            raise InvalidResponseError(f"POST /goals returned an invalid record: {e}") from e


def _server_error_message(response: httpx.Response) -> Optional[str]:
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return None
