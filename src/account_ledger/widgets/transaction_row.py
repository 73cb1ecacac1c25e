"""A single row of the transaction list."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.widgets import Button, Label

from account_ledger.formatter import format_amount, format_date
from account_ledger.models import TransactionRecord, TransactionType


class RemoveTransactionButton(Button):
    """Delete button that carries the id of its transaction."""

    def __init__(self, transaction_id: str, **kwargs) -> None:
        super().__init__("Delete", variant="error", classes="transaction-remove", **kwargs)
        self.transaction_id = transaction_id


class TransactionRow(Horizontal):
    """Name, date, amount and delete control of one transaction."""

    def __init__(self, record: TransactionRecord) -> None:
        kind = (
            "transaction-income"
            if record.type is TransactionType.INCOME
            else "transaction-expense"
        )
        super().__init__(classes=f"transaction {kind}")
        self.record = record

    def compose(self) -> ComposeResult:
        """Create the row layout."""
        record = self.record
        with Vertical(classes="transaction-info"):
            yield Label(record.name, classes="transaction-title")
            yield Label(format_date(record.created_at), classes="transaction-date")
        yield Label(format_amount(record.signed_sum), classes="transaction-sum")
        yield RemoveTransactionButton(record.id)
