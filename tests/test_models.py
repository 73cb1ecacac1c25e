"""Tests for data models."""

from datetime import datetime
from decimal import Decimal

from account_ledger.models import (
    ApiResponse,
    NewTransaction,
    RenderRequest,
    TransactionRecord,
    TransactionType,
)


class TestTransactionType:
    def test_labels(self):
        assert TransactionType.INCOME.label == "Income"
        assert TransactionType.EXPENSE.label == "Expense"


class TestTransactionRecord:
    def _record(self, kind: TransactionType, amount: str) -> TransactionRecord:
        return TransactionRecord(
            id="1",
            name="x",
            sum=Decimal(amount),
            type=kind,
            created_at=datetime(2019, 3, 10),
        )

    def test_income_is_positive(self):
        assert self._record(TransactionType.INCOME, "100").signed_sum == Decimal("100")

    def test_expense_is_negative(self):
        assert self._record(TransactionType.EXPENSE, "40").signed_sum == Decimal("-40")

    def test_expense_already_negative(self):
        assert self._record(TransactionType.EXPENSE, "-40").signed_sum == Decimal("-40")


class TestRenderRequest:
    def test_params_include_filters(self):
        request = RenderRequest(account_id="7", filters={"type": "income"})
        assert request.params() == {"type": "income", "account_id": "7"}

    def test_account_id_wins_over_filter(self):
        request = RenderRequest(account_id="7", filters={"account_id": "8"})
        assert request.params()["account_id"] == "7"


class TestApiResponse:
    def test_failure(self):
        response = ApiResponse.failure("boom")
        assert not response.success
        assert response.data is None
        assert response.error == "boom"


class TestNewTransaction:
    def test_to_json(self):
        payload = NewTransaction(
            account_id="7", name="Coffee", sum=Decimal("3.20"), type=TransactionType.EXPENSE
        )
        assert payload.to_json() == {
            "account_id": "7",
            "name": "Coffee",
            "sum": "3.20",
            "type": "expense",
        }
