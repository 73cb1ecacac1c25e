"""Transactions pane: host widget of the transactions page controller."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, VerticalScroll
from textual.widget import Widget
from textual.widgets import Button, Label

from account_ledger.api import AccountResource, TransactionResource
from account_ledger.coordinator import AppCoordinator
from account_ledger.screens.confirm import ConfirmationGate, ModalConfirmationGate
from account_ledger.widgets.transactions_page import PLACEHOLDER_TITLE, TransactionsPage


class TransactionsPane(Widget):
    """Widget showing the selected account's transactions.

    Composes the regions expected by
    :class:`~account_ledger.widgets.transactions_page.TransactionsPage` and
    forwards button presses to it.
    """

    BINDINGS = [
        Binding("r", "refresh", "Reload", show=True),
        Binding("D", "remove_account", "Remove account", show=True),
    ]

    def __init__(
        self,
        accounts: AccountResource,
        transactions: TransactionResource,
        coordinator: AppCoordinator,
        confirm: ConfirmationGate | None = None,
        **kwargs,
    ) -> None:
        """Initialise the pane.

        Args:
            accounts: Account backend resource.
            transactions: Transaction backend resource.
            coordinator: Notified after successful deletions.
            confirm: Confirmation gate; defaults to a modal dialog.
        """
        super().__init__(**kwargs)
        self._accounts = accounts
        self._transactions = transactions
        self._coordinator = coordinator
        self._confirm = confirm
        self.page: TransactionsPage | None = None

    def compose(self) -> ComposeResult:
        """Create the title bar and the list region."""
        with Horizontal(classes="content-header"):
            yield Label(PLACEHOLDER_TITLE, classes="content-title")
            yield Button("Remove account", variant="error", classes="remove-account")
        yield VerticalScroll(classes="content")

    def on_mount(self) -> None:
        """Bind the controller once the regions exist."""
        self.page = TransactionsPage(
            self,
            accounts=self._accounts,
            transactions=self._transactions,
            confirm=self._confirm or ModalConfirmationGate(self.app),
            coordinator=self._coordinator,
        )

    def on_button_pressed(self, event: Button.Pressed) -> None:
        """Route presses on page controls to the controller."""
        if self.page is not None and self.page.dispatch(event.button):
            event.stop()

    def action_refresh(self) -> None:
        """Reload the displayed account."""
        if self.page is not None:
            self.page.update()

    def action_remove_account(self) -> None:
        """Delete the displayed account (with confirmation)."""
        if self.page is not None:
            self.page.remove_account()
