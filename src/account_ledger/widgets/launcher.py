"""Toolbar with the "new income" and "new expense" buttons."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.css.query import NoMatches, WrongType
from textual.widget import Widget
from textual.widgets import Button

from account_ledger.errors import InvalidHostError
from account_ledger.modals import ModalRegistry

INCOME_MODAL = "new_income"
EXPENSE_MODAL = "new_expense"


class CreateTransactionLauncher:
    """Opens the income or expense creation modal for the host's buttons.

    Raises:
        InvalidHostError: If *host* is missing or lacks either button.
    """

    def __init__(self, host: Widget | None, modals: ModalRegistry) -> None:
        if not isinstance(host, Widget):
            raise InvalidHostError("CreateTransactionLauncher needs a host widget")
        self.host = host
        self.modals = modals
        try:
            income = host.query_one(".create-income-button", Button)
            expense = host.query_one(".create-expense-button", Button)
        except (NoMatches, WrongType) as exc:
            raise InvalidHostError(f"Host is missing a required control: {exc}") from exc
        self._targets = {income: INCOME_MODAL, expense: EXPENSE_MODAL}

    def dispatch(self, button: Button) -> bool:
        """Open the modal bound to *button*; return whether it was one of ours."""
        name = self._targets.get(button)
        if name is None:
            return False
        self.modals.get(name).open()
        return True


class LauncherToolbar(Widget):
    """Fixed-height toolbar holding the create-transaction buttons."""

    def __init__(self, modals: ModalRegistry, **kwargs) -> None:
        super().__init__(**kwargs)
        self._modals = modals
        self.launcher: CreateTransactionLauncher | None = None

    def compose(self) -> ComposeResult:
        """Create the two launcher buttons."""
        yield Button("+ Income", variant="success", classes="create-income-button")
        yield Button("- Expense", variant="warning", classes="create-expense-button")

    def on_mount(self) -> None:
        """Bind the launcher once the buttons exist."""
        self.launcher = CreateTransactionLauncher(self, self._modals)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        """Open the matching creation modal."""
        if self.launcher is not None and self.launcher.dispatch(event.button):
            event.stop()
