"""Main Textual application for account-ledger."""

from __future__ import annotations

from functools import partial

from textual import work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.widgets import Static

from account_ledger.api import AccountResource, TransactionResource
from account_ledger.logging_setup import get_logger
from account_ledger.modals import Modal, ModalRegistry
from account_ledger.models import (
    ApiResponse,
    NewTransaction,
    RenderRequest,
    TransactionType,
)
from account_ledger.screens.confirm import ConfirmationGate
from account_ledger.screens.transaction_form import TransactionFormScreen
from account_ledger.widgets.accounts_pane import AccountsPane
from account_ledger.widgets.launcher import (
    EXPENSE_MODAL,
    INCOME_MODAL,
    LauncherToolbar,
)
from account_ledger.widgets.transactions_pane import TransactionsPane

logger = get_logger(__name__)

_FOOTER_TEXT = (
    "\\[↵] Open  \\[i] Income  \\[e] Expense  \\[D] Remove account  "
    "\\[r] Reload  \\[q] Quit"
)


class AccountLedgerApp(App):
    """A TUI for browsing accounts and pruning their transactions.

    The app is the cross-widget coordinator: widgets call
    :meth:`refresh_all` / :meth:`refresh_current` after a successful mutation.
    """

    TITLE = "account-ledger"
    CSS_PATH = "styles/app.tcss"

    BINDINGS = [
        Binding("i", "open_modal('new_income')", "Income", show=False),
        Binding("e", "open_modal('new_expense')", "Expense", show=False),
        Binding("q", "quit", "Quit"),
    ]

    def __init__(
        self,
        accounts: AccountResource,
        transactions: TransactionResource,
        *,
        confirm: ConfirmationGate | None = None,
        theme: str | None = None,
    ) -> None:
        """Initialize the app.

        Args:
            accounts: Account backend resource.
            transactions: Transaction backend resource.
            confirm: Confirmation gate for deletions; defaults to a modal.
            theme: Saved Textual theme name, if any.
        """
        super().__init__()
        self.accounts = accounts
        self.transactions = transactions
        self._confirm = confirm
        if theme:
            self.theme = theme
        self.modals = ModalRegistry()
        for name, kind in (
            (INCOME_MODAL, TransactionType.INCOME),
            (EXPENSE_MODAL, TransactionType.EXPENSE),
        ):
            self.modals.register(
                name,
                Modal(self, partial(self._transaction_form, kind), self._on_form_result),
            )

    def compose(self) -> ComposeResult:
        """Create the app layout."""
        with Horizontal(id="main"):
            yield AccountsPane(self.accounts, id="accounts")
            with Vertical(id="page"):
                yield LauncherToolbar(self.modals, id="launcher")
                yield TransactionsPane(
                    self.accounts,
                    self.transactions,
                    coordinator=self,
                    confirm=self._confirm,
                    id="transactions",
                )
        yield Static(_FOOTER_TEXT, id="footer-bar")

    @property
    def transactions_pane(self) -> TransactionsPane:
        return self.query_one(TransactionsPane)

    # ------------------------------------------------------------------
    # Coordinator hooks
    # ------------------------------------------------------------------

    def refresh_all(self) -> None:
        """Reload the account list and the transactions page."""
        self.query_one(AccountsPane).reload()
        page = self.transactions_pane.page
        if page is not None:
            page.update()

    def refresh_current(self) -> None:
        """Reload the current page and the account balances."""
        self.refresh_all()

    # ------------------------------------------------------------------
    # Events and actions
    # ------------------------------------------------------------------

    def on_accounts_pane_selected(self, message: AccountsPane.Selected) -> None:
        """Show the transactions of the account chosen in the accounts pane."""
        page = self.transactions_pane.page
        if page is not None:
            page.render(RenderRequest(account_id=message.account_id))

    def action_open_modal(self, name: str) -> None:
        """Open a registered modal by name."""
        self.modals.get(name).open()

    # ------------------------------------------------------------------
    # Transaction creation
    # ------------------------------------------------------------------

    def _transaction_form(self, kind: TransactionType) -> TransactionFormScreen:
        page = self.transactions_pane.page
        current = page.last_request if page is not None else None
        return TransactionFormScreen(
            kind,
            self.query_one(AccountsPane).choices(),
            account_id=current.account_id if current is not None else None,
        )

    def _on_form_result(self, result: NewTransaction | None) -> None:
        if result is not None:
            self._create_transaction(result)

    @work(thread=True, group="create-transaction")
    def _create_transaction(self, transaction: NewTransaction) -> None:
        """Send the new transaction to the backend in a background thread."""
        response = self.transactions.create(transaction)
        self.call_from_thread(self._transaction_created, transaction, response)

    def _transaction_created(
        self, transaction: NewTransaction, response: ApiResponse
    ) -> None:
        if not response.success:
            logger.error("Could not create transaction: %s", response.error)
            self.notify(
                f"Could not create transaction: {response.error}",
                severity="error",
                timeout=8,
            )
            return
        self.notify(f"{transaction.type.label} added", timeout=3)
        self.refresh_current()
