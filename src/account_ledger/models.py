"""Data models for accounts, transactions and render requests."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any


class TransactionType(Enum):
    """Direction of money for a transaction."""

    INCOME = "income"
    EXPENSE = "expense"

    @property
    def label(self) -> str:
        """Return the human-readable label for this type."""
        match self:
            case TransactionType.INCOME:
                return "Income"
            case TransactionType.EXPENSE:
                return "Expense"


@dataclass
class RenderRequest:
    """Parameters used to populate the transactions view.

    ``filters`` holds any extra query parameters forwarded verbatim to the
    transaction list endpoint.
    """

    account_id: str
    filters: dict[str, str] = field(default_factory=dict)

    def params(self) -> dict[str, str]:
        """Return the query parameters for the transaction list call."""
        return {**self.filters, "account_id": self.account_id}


@dataclass(frozen=True)
class AccountSummary:
    """An account as returned by the backend."""

    id: str
    name: str
    sum: Decimal = Decimal("0")


@dataclass(frozen=True)
class TransactionRecord:
    """A single income or expense belonging to an account."""

    id: str
    name: str
    sum: Decimal
    type: TransactionType
    created_at: datetime
    account_id: str = ""

    @property
    def signed_sum(self) -> Decimal:
        """Return the sum with a negative sign for expenses."""
        if self.type is TransactionType.EXPENSE:
            return -abs(self.sum)
        return abs(self.sum)


@dataclass
class NewTransaction:
    """Payload for creating a transaction."""

    account_id: str
    name: str
    sum: Decimal
    type: TransactionType

    def to_json(self) -> dict[str, Any]:
        """Return the JSON body expected by the backend."""
        return {
            "account_id": self.account_id,
            "name": self.name,
            "sum": str(self.sum),
            "type": self.type.value,
        }


@dataclass
class ApiResponse:
    """Outcome of a backend call: a success flag plus payload or error."""

    success: bool
    data: Any = None
    error: str | None = None

    @classmethod
    def failure(cls, error: str) -> ApiResponse:
        """Build a failed response carrying *error*."""
        return cls(success=False, error=error)
