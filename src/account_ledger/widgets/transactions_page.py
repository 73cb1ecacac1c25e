"""Controller that keeps the transactions view in sync with the backend.

The controller is bound to a host widget exposing four regions, looked up
by class name:

- ``.content-title``: label showing the account name
- ``.content``: container holding one :class:`TransactionRow` per transaction
- ``.remove-account``: button deleting the whole account
- ``.transaction-remove``: one button per row, carrying ``transaction_id``

The host forwards every ``Button.Pressed`` to :meth:`TransactionsPage.dispatch`.
"""

from __future__ import annotations

import asyncio
import copy
from functools import partial
from typing import Any, Callable

from textual.css.query import NoMatches, WrongType
from textual.widget import Widget
from textual.widgets import Button, Label

from account_ledger.api import AccountResource, TransactionResource
from account_ledger.coordinator import AppCoordinator
from account_ledger.errors import InvalidHostError
from account_ledger.logging_setup import get_logger
from account_ledger.models import ApiResponse, RenderRequest, TransactionRecord
from account_ledger.screens.confirm import ConfirmationGate
from account_ledger.widgets.transaction_row import (
    RemoveTransactionButton,
    TransactionRow,
)

logger = get_logger(__name__)

PLACEHOLDER_TITLE = "Account name"

_RENDER_GROUP = "transactions-page-render"
_MUTATION_GROUP = "transactions-page-mutation"


class TransactionsPage:
    """Renders one account's transactions and handles deletions.

    Every :meth:`render` and :meth:`clear` bumps a render token. Responses are
    applied on the UI thread only while their token is still the latest, so
    a slow response for a superseded request is dropped instead of mixing
    with newer content.

    Args:
        host: The widget containing the title, list and remove controls.
        accounts: Account backend resource.
        transactions: Transaction backend resource.
        confirm: Gate asked before any deletion.
        coordinator: Notified after a successful deletion.

    Raises:
        InvalidHostError: If *host* is missing or lacks a required region.
    """

    def __init__(
        self,
        host: Widget | None,
        *,
        accounts: AccountResource,
        transactions: TransactionResource,
        confirm: ConfirmationGate,
        coordinator: AppCoordinator,
    ) -> None:
        if not isinstance(host, Widget):
            raise InvalidHostError("TransactionsPage needs a host widget")
        self.host = host
        self.accounts = accounts
        self.transactions = transactions
        self.confirm = confirm
        self.coordinator = coordinator

        self.last_request: RenderRequest | None = None
        self.title: str = PLACEHOLDER_TITLE
        self._token = 0
        self._handlers: dict[Button, Callable[[], None]] = {}
        self._swap_lock = asyncio.Lock()

        try:
            self._title_label()
            self._content()
        except (NoMatches, WrongType) as exc:
            raise InvalidHostError(f"Host is missing a required region: {exc}") from exc
        self.register_events()

    # ------------------------------------------------------------------
    # Host regions
    # ------------------------------------------------------------------

    def _title_label(self) -> Label:
        return self.host.query_one(".content-title", Label)

    def _content(self) -> Widget:
        return self.host.query_one(".content")

    # ------------------------------------------------------------------
    # Handler binding
    # ------------------------------------------------------------------

    def register_events(self) -> None:
        """Rebuild the handler table from the controls currently in the host.

        The previous table is replaced, never extended, so each control has
        exactly one handler and removed controls have none.

        Raises:
            InvalidHostError: If the host has no remove-account control.
        """
        try:
            remove_account = self.host.query_one(".remove-account", Button)
        except (NoMatches, WrongType) as exc:
            raise InvalidHostError(f"Host is missing a required region: {exc}") from exc

        handlers: dict[Button, Callable[[], None]] = {remove_account: self.remove_account}
        for button in self.host.query(".transaction-remove").results(
            RemoveTransactionButton
        ):
            handlers[button] = partial(self.remove_transaction, button.transaction_id)
        self._handlers = handlers

    def dispatch(self, button: Button) -> bool:
        """Run the handler bound to *button*.

        Returns:
            ``True`` if the button is a live control of this page.
        """
        handler = self._handlers.get(button)
        if handler is None:
            return False
        handler()
        return True

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def render(self, request: RenderRequest | None) -> None:
        """Store *request* and load the account and its transactions.

        With ``None`` nothing is fetched and the view is left as is.
        """
        self._token += 1
        self.last_request = copy.deepcopy(request)
        if request is None:
            return
        self.host.run_worker(
            partial(self._load, copy.deepcopy(request), self._token),
            thread=True,
            group=_RENDER_GROUP,
            description=f"load account {request.account_id}",
        )

    def update(self) -> None:
        """Render the last request again; no-op when there is none."""
        if self.last_request is None:
            return
        self.render(self.last_request)

    async def clear(self) -> None:
        """Empty the list, reset the title and forget the last request."""
        self._token += 1
        self.last_request = None
        self._render_title(PLACEHOLDER_TITLE)
        await self._render_transactions([], self._token)

    def _load(self, request: RenderRequest, token: int) -> None:
        """Fetch the account, then its transactions (worker thread)."""
        response = self.accounts.get(request.account_id)
        if not self._call_from_thread(self._apply_account, token, response):
            return
        response = self.transactions.list(request)
        self._call_from_thread(self._apply_transactions, token, response)

    def _call_from_thread(self, callback: Callable[..., Any], *args: Any) -> Any:
        return self.host.app.call_from_thread(callback, *args)

    def _is_current(self, token: int) -> bool:
        if token != self._token:
            logger.debug("Ignoring stale response (token %d, current %d)", token, self._token)
            return False
        return True

    def _apply_account(self, token: int, response: ApiResponse) -> bool:
        """Show the account name; return whether the list should be loaded."""
        if not self._is_current(token):
            return False
        if not response.success:
            self._report("Could not load account", response.error)
            return False
        self._render_title(response.data.name)
        return True

    async def _apply_transactions(self, token: int, response: ApiResponse) -> None:
        if not self._is_current(token):
            return
        if not response.success:
            self._report("Could not load transactions", response.error)
            return
        await self._render_transactions(response.data, token)

    def _render_title(self, name: str) -> None:
        self.title = name
        self._title_label().update(name)

    async def _render_transactions(
        self, records: list[TransactionRecord], token: int
    ) -> None:
        """Replace the list region and bind handlers to the new controls.

        Swaps run one at a time. Once a swap has started it mounts its rows
        even if a newer request arrives meanwhile, so the list is never left
        empty under a title it does not belong to.
        """
        async with self._swap_lock:
            if token != self._token:
                logger.debug("Skipping stale list swap (token %d)", token)
                return
            rows = [TransactionRow(record) for record in records]
            content = self._content()
            with self.host.app.batch_update():
                await content.remove_children()
                if rows:
                    await content.mount_all(rows)
            self.register_events()

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def remove_account(self) -> None:
        """Delete the displayed account after confirmation."""
        if self.last_request is None:
            self.host.notify("No account selected", severity="warning", timeout=3)
            return
        account_id = self.last_request.account_id

        def on_answer(confirmed: bool) -> None:
            if not confirmed:
                return
            self.host.run_worker(
                partial(self._remove_account, account_id),
                thread=True,
                group=_MUTATION_GROUP,
                description=f"remove account {account_id}",
            )

        self.confirm.ask(
            f"Remove account \"{self.title}\" (id {account_id}) "
            "together with all of its transactions?",
            on_answer,
        )

    def remove_transaction(self, transaction_id: str) -> None:
        """Delete one transaction of the displayed account after confirmation."""
        if self.last_request is None:
            self.host.notify("No account selected", severity="warning", timeout=3)
            return
        account_id = self.last_request.account_id

        def on_answer(confirmed: bool) -> None:
            if not confirmed:
                return
            self.host.run_worker(
                partial(self._remove_transaction, account_id, transaction_id),
                thread=True,
                group=_MUTATION_GROUP,
                description=f"remove transaction {transaction_id}",
            )

        self.confirm.ask(
            f"Remove transaction {transaction_id} from \"{self.title}\"?",
            on_answer,
        )

    def _remove_account(self, account_id: str) -> None:
        response = self.accounts.remove(account_id)
        self._call_from_thread(self._account_removed, account_id, response)

    async def _account_removed(self, account_id: str, response: ApiResponse) -> None:
        if not response.success:
            self._report("Could not remove account", response.error)
            return
        logger.info("Removed account %s", account_id)
        await self.clear()
        self.coordinator.refresh_all()
        self.host.notify("Account removed", timeout=3)

    def _remove_transaction(self, account_id: str, transaction_id: str) -> None:
        response = self.transactions.remove(account_id, transaction_id)
        self._call_from_thread(self._transaction_removed, transaction_id, response)

    def _transaction_removed(self, transaction_id: str, response: ApiResponse) -> None:
        if not response.success:
            self._report("Could not remove transaction", response.error)
            return
        logger.info("Removed transaction %s", transaction_id)
        self.coordinator.refresh_current()
        self.host.notify("Transaction removed", timeout=3)

    def _report(self, context: str, error: str | None) -> None:
        message = f"{context}: {error or 'unknown error'}"
        logger.error(message)
        self.host.notify(message, severity="error", timeout=8)
