"""Shared test fixtures and fakes."""

from __future__ import annotations

import asyncio
import threading
from datetime import datetime
from decimal import Decimal
from typing import Callable

import pytest
from textual.app import App, ComposeResult
from textual.pilot import Pilot

from account_ledger.models import (
    AccountSummary,
    ApiResponse,
    NewTransaction,
    RenderRequest,
    TransactionRecord,
    TransactionType,
)
from account_ledger.widgets.transactions_page import TransactionsPage
from account_ledger.widgets.transactions_pane import TransactionsPane


class FakeAccountResource:
    """In-memory stand-in for :class:`account_ledger.api.AccountResource`."""

    def __init__(self, accounts: list[AccountSummary] | None = None) -> None:
        self.accounts = {a.id: a for a in accounts or []}
        self.calls: list[tuple[str, ...]] = []
        self.fail_remove = False
        self.fail_list = False

    def get(self, account_id: str) -> ApiResponse:
        self.calls.append(("get", account_id))
        account = self.accounts.get(account_id)
        if account is None:
            return ApiResponse.failure(f"Account {account_id} not found")
        return ApiResponse(success=True, data=account)

    def list(self) -> ApiResponse:
        self.calls.append(("list",))
        if self.fail_list:
            return ApiResponse.failure("Backend unavailable")
        return ApiResponse(success=True, data=list(self.accounts.values()))

    def remove(self, account_id: str) -> ApiResponse:
        self.calls.append(("remove", account_id))
        if self.fail_remove:
            return ApiResponse.failure("Account is locked")
        self.accounts.pop(account_id, None)
        return ApiResponse(success=True)

    def count(self, name: str) -> int:
        return sum(1 for call in self.calls if call[0] == name)


class FakeTransactionResource:
    """In-memory stand-in for :class:`account_ledger.api.TransactionResource`.

    ``gates`` maps an account id to an event the list call waits on, and
    ``started`` is set for an account as soon as its list call begins.
    """

    def __init__(self, records: dict[str, list[TransactionRecord]] | None = None) -> None:
        self.records = {k: list(v) for k, v in (records or {}).items()}
        self.calls: list[tuple[str, ...]] = []
        self.created: list[NewTransaction] = []
        self.failing_lists: set[str] = set()
        self.fail_remove = False
        self.fail_create = False
        self.gates: dict[str, threading.Event] = {}
        self.started: dict[str, threading.Event] = {}

    def list(self, request: RenderRequest) -> ApiResponse:
        account_id = request.account_id
        self.calls.append(("list", account_id))
        self.started.setdefault(account_id, threading.Event()).set()
        gate = self.gates.get(account_id)
        if gate is not None:
            gate.wait(5)
        if account_id in self.failing_lists:
            return ApiResponse.failure("Transactions unavailable")
        return ApiResponse(success=True, data=list(self.records.get(account_id, [])))

    def remove(self, account_id: str, transaction_id: str) -> ApiResponse:
        self.calls.append(("remove", account_id, transaction_id))
        if self.fail_remove:
            return ApiResponse.failure("Transaction is locked")
        self.records[account_id] = [
            r for r in self.records.get(account_id, []) if r.id != transaction_id
        ]
        return ApiResponse(success=True)

    def create(self, transaction: NewTransaction) -> ApiResponse:
        self.calls.append(("create", transaction.account_id))
        if self.fail_create:
            return ApiResponse.failure("Invalid transaction")
        self.created.append(transaction)
        return ApiResponse(success=True)

    def count(self, name: str) -> int:
        return sum(1 for call in self.calls if call[0] == name)


class StaticConfirmationGate:
    """Confirmation gate that always gives the same answer."""

    def __init__(self, answer: bool) -> None:
        self.answer = answer
        self.messages: list[str] = []

    def ask(self, message: str, on_answer: Callable[[bool], None]) -> None:
        self.messages.append(message)
        on_answer(self.answer)


class RecordingCoordinator:
    """Coordinator that counts refreshes and optionally re-renders the page."""

    def __init__(self) -> None:
        self.refresh_all_calls = 0
        self.refresh_current_calls = 0
        self.app: PageApp | None = None

    def refresh_all(self) -> None:
        self.refresh_all_calls += 1

    def refresh_current(self) -> None:
        self.refresh_current_calls += 1
        if self.app is not None:
            self.app.page.update()


class PageApp(App):
    """Minimal app hosting a single TransactionsPane."""

    def __init__(
        self,
        accounts: FakeAccountResource,
        transactions: FakeTransactionResource,
        confirm: StaticConfirmationGate,
        coordinator: RecordingCoordinator,
    ) -> None:
        super().__init__()
        self.accounts_resource = accounts
        self.transactions_resource = transactions
        self.confirm = confirm
        self.coordinator = coordinator
        coordinator.app = self

    def compose(self) -> ComposeResult:
        yield TransactionsPane(
            self.accounts_resource,
            self.transactions_resource,
            coordinator=self.coordinator,
            confirm=self.confirm,
            id="transactions",
        )

    @property
    def page(self) -> TransactionsPage:
        page = self.query_one(TransactionsPane).page
        assert page is not None
        return page


async def settle(pilot: Pilot, timeout: float = 5.0) -> None:
    """Wait until every worker has finished and pending messages are handled."""
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout
    while True:
        await pilot.pause()
        if all(worker.is_finished for worker in pilot.app.workers):
            break
        if loop.time() > deadline:
            raise AssertionError("workers did not finish in time")
        await asyncio.sleep(0.01)
    await pilot.pause()


async def wait_until(pilot: Pilot, predicate: Callable[[], bool], timeout: float = 5.0) -> None:
    """Wait until *predicate* holds."""
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout
    while not predicate():
        if loop.time() > deadline:
            raise AssertionError("condition not met in time")
        await pilot.pause()
        await asyncio.sleep(0.01)


def make_record(
    record_id: str,
    kind: TransactionType,
    amount: str,
    name: str = "",
    account_id: str = "7",
) -> TransactionRecord:
    return TransactionRecord(
        id=record_id,
        name=name or f"Transaction {record_id}",
        sum=Decimal(amount),
        type=kind,
        created_at=datetime(2019, 3, 10, 3, 20, 41),
        account_id=account_id,
    )


@pytest.fixture
def accounts() -> FakeAccountResource:
    """Two accounts: 7 (Savings) and 8 (Wallet)."""
    return FakeAccountResource(
        [
            AccountSummary(id="7", name="Savings", sum=Decimal("60")),
            AccountSummary(id="8", name="Wallet", sum=Decimal("15")),
        ]
    )


@pytest.fixture
def transactions() -> FakeTransactionResource:
    """Account 7 has an income and an expense, account 8 one expense."""
    return FakeTransactionResource(
        {
            "7": [
                make_record("1", TransactionType.INCOME, "100", name="Salary"),
                make_record("2", TransactionType.EXPENSE, "40", name="Groceries"),
            ],
            "8": [
                make_record("3", TransactionType.EXPENSE, "15", name="Coffee", account_id="8"),
            ],
        }
    )


@pytest.fixture
def coordinator() -> RecordingCoordinator:
    return RecordingCoordinator()


@pytest.fixture
def make_app(
    accounts: FakeAccountResource,
    transactions: FakeTransactionResource,
    coordinator: RecordingCoordinator,
) -> Callable[..., PageApp]:
    """Build a PageApp whose confirmation gate answers *confirm*."""

    def factory(confirm: bool = True) -> PageApp:
        return PageApp(accounts, transactions, StaticConfirmationGate(confirm), coordinator)

    return factory
