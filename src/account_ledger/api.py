"""HTTP client for the account and transaction backend.

All methods are synchronous and intended to be called from
``run_worker(..., thread=True)`` workers so they don't block the event loop.
Remote failures never raise out of the resource classes: they come back as an
:class:`~account_ledger.models.ApiResponse` with ``success=False``.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Any

import httpx

from account_ledger.errors import LedgerError
from account_ledger.logging_setup import get_logger
from account_ledger.models import (
    AccountSummary,
    ApiResponse,
    NewTransaction,
    RenderRequest,
    TransactionRecord,
    TransactionType,
)

logger = get_logger(__name__)


class ApiError(LedgerError):
    """Raised when a backend request fails or returns a malformed payload."""


class ApiClient:
    """Thin wrapper around :class:`httpx.Client` for the backend envelope.

    Args:
        base_url: Backend root URL (e.g. ``http://localhost:8000``).
        timeout: Per-request timeout in seconds.
        transport: Optional custom transport, mainly for tests.
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 10.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._client = httpx.Client(
            base_url=base_url,
            timeout=timeout,
            transport=transport,
            headers={"Accept": "application/json"},
        )

    def close(self) -> None:
        """Close the underlying connection pool."""
        self._client.close()

    def request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, str] | None = None,
        json: dict[str, Any] | None = None,
    ) -> ApiResponse:
        """Send a request and decode the ``{success, data|error}`` envelope.

        Args:
            method: HTTP method.
            path: Path relative to the base URL.
            params: Optional query parameters.
            json: Optional JSON body.

        Returns:
            The decoded response.

        Raises:
            ApiError: On transport errors, non-JSON bodies or bodies without
                a ``success`` flag.
        """
        logger.debug("%s %s params=%s", method, path, params)
        try:
            response = self._client.request(method, path, params=params, json=json)
        except httpx.HTTPError as exc:
            raise ApiError(f"Network error: {exc}") from exc

        try:
            payload = response.json()
        except ValueError as exc:
            raise ApiError(
                f"Backend returned {response.status_code} with a non-JSON body"
            ) from exc

        if not isinstance(payload, dict) or "success" not in payload:
            raise ApiError(f"Backend returned {response.status_code} without a status")

        if payload["success"]:
            return ApiResponse(success=True, data=payload.get("data"))
        error = payload.get("error") or f"Request failed ({response.status_code})"
        return ApiResponse.failure(str(error))


def _parse_decimal(value: Any) -> Decimal:
    try:
        return Decimal(str(value))
    except InvalidOperation as exc:
        raise ApiError(f"Invalid amount: {value!r}") from exc


def _parse_timestamp(value: str) -> datetime:
    """Parse ``2019-03-10 03:20:41`` or ISO 8601 timestamps."""
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except (AttributeError, ValueError) as exc:
        raise ApiError(f"Invalid timestamp: {value!r}") from exc


def parse_account(data: dict) -> AccountSummary:
    """Parse an account from backend JSON.

    Raises:
        ApiError: If required keys are missing.
    """
    try:
        return AccountSummary(
            id=str(data["id"]),
            name=str(data["name"]),
            sum=_parse_decimal(data.get("sum", 0)),
        )
    except (KeyError, TypeError) as exc:
        raise ApiError(f"Malformed account: {data!r}") from exc


def parse_transaction(data: dict) -> TransactionRecord:
    """Parse a transaction from backend JSON.

    Raises:
        ApiError: If required keys are missing or have invalid values.
    """
    try:
        return TransactionRecord(
            id=str(data["id"]),
            name=str(data["name"]),
            sum=_parse_decimal(data["sum"]),
            type=TransactionType(str(data["type"]).lower()),
            created_at=_parse_timestamp(data["created_at"]),
            account_id=str(data.get("account_id", "")),
        )
    except (KeyError, TypeError, ValueError) as exc:
        raise ApiError(f"Malformed transaction: {data!r}") from exc


def _call(client: ApiClient, method: str, path: str, **kwargs: Any) -> ApiResponse:
    """Run a request, folding :class:`ApiError` into a failed response."""
    try:
        return client.request(method, path, **kwargs)
    except ApiError as exc:
        logger.warning("%s %s failed: %s", method, path, exc)
        return ApiResponse.failure(str(exc))


class AccountResource:
    """Read and delete accounts."""

    def __init__(self, client: ApiClient) -> None:
        self._client = client

    def get(self, account_id: str) -> ApiResponse:
        """Fetch one account; ``data`` is an :class:`AccountSummary`."""
        response = _call(self._client, "GET", f"/account/{account_id}")
        if not response.success:
            return response
        try:
            return ApiResponse(success=True, data=parse_account(response.data))
        except ApiError as exc:
            return ApiResponse.failure(str(exc))

    def list(self) -> ApiResponse:
        """Fetch every account; ``data`` is a list of :class:`AccountSummary`."""
        response = _call(self._client, "GET", "/account")
        if not response.success:
            return response
        try:
            return ApiResponse(
                success=True, data=[parse_account(a) for a in response.data or []]
            )
        except ApiError as exc:
            return ApiResponse.failure(str(exc))

    def remove(self, account_id: str) -> ApiResponse:
        """Delete an account."""
        return _call(self._client, "DELETE", "/account", json={"id": account_id})


class TransactionResource:
    """List, create and delete transactions of an account."""

    def __init__(self, client: ApiClient) -> None:
        self._client = client

    def list(self, request: RenderRequest) -> ApiResponse:
        """Fetch the transactions matching *request*.

        ``data`` is a list of :class:`TransactionRecord`.
        """
        response = _call(self._client, "GET", "/transaction", params=request.params())
        if not response.success:
            return response
        try:
            return ApiResponse(
                success=True,
                data=[parse_transaction(t) for t in response.data or []],
            )
        except ApiError as exc:
            return ApiResponse.failure(str(exc))

    def create(self, transaction: NewTransaction) -> ApiResponse:
        """Create an income or expense."""
        return _call(self._client, "PUT", "/transaction", json=transaction.to_json())

    def remove(self, account_id: str, transaction_id: str) -> ApiResponse:
        """Delete one transaction of *account_id*."""
        return _call(
            self._client,
            "DELETE",
            "/transaction",
            json={"id": transaction_id, "account_id": account_id},
        )
