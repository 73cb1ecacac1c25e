"""Accounts list pane widget."""

from __future__ import annotations

from textual import work
from textual.app import ComposeResult
from textual.binding import Binding
from textual.message import Message
from textual.widget import Widget
from textual.widgets import DataTable, Label

from account_ledger.api import AccountResource
from account_ledger.formatter import format_amount
from account_ledger.logging_setup import get_logger
from account_ledger.models import AccountSummary, ApiResponse

logger = get_logger(__name__)


class AccountsPane(Widget):
    """Widget showing all accounts with their current balances."""

    BINDINGS = [
        Binding("j", "cursor_down", "Down", show=False),
        Binding("k", "cursor_up", "Up", show=False),
    ]

    class Selected(Message):
        """Posted when the user opens an account."""

        def __init__(self, account_id: str) -> None:
            super().__init__()
            self.account_id = account_id

    def __init__(self, accounts: AccountResource, **kwargs) -> None:
        """Initialize the pane.

        Args:
            accounts: Account backend resource.
        """
        super().__init__(**kwargs)
        self._resource = accounts
        self.accounts: list[AccountSummary] = []

    def compose(self) -> ComposeResult:
        """Create the pane layout."""
        yield Label("Accounts", id="accounts-title")
        yield DataTable(id="accounts-table")

    def on_mount(self) -> None:
        """Set up the DataTable and load the accounts."""
        table = self.query_one("#accounts-table", DataTable)
        table.cursor_type = "row"
        table.add_column("Account", key="name")
        table.add_column("Balance", key="sum")
        self.reload()

    def reload(self) -> None:
        """Reload the account list from the backend."""
        self._load_accounts()

    @work(thread=True, group="accounts-load")
    def _load_accounts(self) -> None:
        """Fetch accounts in a background thread."""
        response = self._resource.list()
        self.app.call_from_thread(self._apply_accounts, response)

    def _apply_accounts(self, response: ApiResponse) -> None:
        if not response.success:
            logger.error("Could not load accounts: %s", response.error)
            self.notify(
                f"Could not load accounts: {response.error}", severity="error", timeout=8
            )
            return
        self.accounts = response.data
        self._update_table()

    def _update_table(self) -> None:
        """Refresh the DataTable with the current accounts."""
        table = self.query_one("#accounts-table", DataTable)
        table.clear()
        for account in self.accounts:
            table.add_row(account.name, format_amount(account.sum), key=account.id)

    def choices(self) -> list[tuple[str, str]]:
        """Return ``(name, id)`` pairs for account selectors."""
        return [(account.name, account.id) for account in self.accounts]

    # --- Actions ---

    def action_cursor_down(self) -> None:
        """Move cursor down in the table."""
        self.query_one("#accounts-table", DataTable).action_cursor_down()

    def action_cursor_up(self) -> None:
        """Move cursor up in the table."""
        self.query_one("#accounts-table", DataTable).action_cursor_up()

    # --- Event handlers ---

    def on_data_table_row_selected(self, event: DataTable.RowSelected) -> None:
        """Open the account under the cursor."""
        event.stop()
        if event.row_key.value is not None:
            self.post_message(self.Selected(event.row_key.value))
