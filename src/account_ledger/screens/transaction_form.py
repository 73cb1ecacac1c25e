"""Modal form for creating an income or expense."""

from __future__ import annotations

from decimal import Decimal, InvalidOperation

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Label, Select, Static

from account_ledger.models import NewTransaction, TransactionType


class TransactionFormScreen(ModalScreen[NewTransaction | None]):
    """Centered modal form for a new income or expense."""

    BINDINGS = [
        Binding("escape", "cancel", "Cancel"),
    ]

    def __init__(
        self,
        transaction_type: TransactionType,
        accounts: list[tuple[str, str]],
        account_id: str | None = None,
    ) -> None:
        """Initialize the form modal.

        Args:
            transaction_type: Whether the form creates an income or an expense.
            accounts: ``(name, id)`` pairs offered in the account selector.
            account_id: Account preselected in the selector, if any.
        """
        super().__init__()
        self.transaction_type = transaction_type
        self.accounts = accounts
        self.account_id = account_id

    def compose(self) -> ComposeResult:
        """Create the modal form layout."""
        known_ids = {account_id for _, account_id in self.accounts}
        select_kwargs = {}
        if self.account_id in known_ids:
            select_kwargs["value"] = self.account_id

        with Vertical(id="txn-form-dialog"):
            yield Static(f"New {self.transaction_type.label}", id="txn-form-title")

            with Horizontal(classes="form-field"):
                yield Label("Name:")
                yield Input(placeholder="e.g. Salary", id="txn-input-name")

            with Horizontal(classes="form-field"):
                yield Label("Sum:")
                yield Input(placeholder="0.00", id="txn-input-sum")

            with Horizontal(classes="form-field"):
                yield Label("Account:")
                yield Select(
                    self.accounts,
                    prompt="Choose account",
                    id="txn-input-account",
                    **select_kwargs,
                )

            with Horizontal(id="txn-form-buttons"):
                yield Button("Cancel", id="btn-txn-cancel")
                yield Button("Create", variant="primary", id="btn-txn-save")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        """Handle button presses."""
        event.stop()
        if event.button.id == "btn-txn-save":
            self._save()
        elif event.button.id == "btn-txn-cancel":
            self.dismiss(None)

    def action_cancel(self) -> None:
        """Cancel the form."""
        self.dismiss(None)

    def _save(self) -> None:
        """Validate the fields and dismiss with a :class:`NewTransaction`."""
        name = self.query_one("#txn-input-name", Input).value.strip()
        sum_str = self.query_one("#txn-input-sum", Input).value.strip()
        account_id = self.query_one("#txn-input-account", Select).value

        if not name:
            self.notify("Name is required", severity="error", timeout=3)
            return

        try:
            amount = Decimal(sum_str.replace(",", "."))
        except InvalidOperation:
            self.notify(f"Invalid sum: {sum_str}", severity="error", timeout=3)
            return

        if not amount.is_finite() or amount <= 0:
            self.notify("Sum must be positive", severity="error", timeout=3)
            return

        if not isinstance(account_id, str):
            self.notify("Account is required", severity="error", timeout=3)
            return

        self.dismiss(
            NewTransaction(
                account_id=account_id,
                name=name,
                sum=amount,
                type=self.transaction_type,
            )
        )
