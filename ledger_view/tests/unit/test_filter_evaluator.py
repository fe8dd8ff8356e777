# ledger_view/tests/unit/test_filter_evaluator.py

import pytest
from datetime import date, datetime, timezone
from decimal import Decimal

from ledger_view.core.enums.currency import Currency
from ledger_view.core.enums.transaction_type import TransactionType
from ledger_view.core.models.filters import TransactionFilters
from ledger_view.core.models.transaction import Transaction
from ledger_view.logic.filter_evaluator import TransactionFilterEvaluator

@pytest.fixture
def evaluator():
    """Provides a TransactionFilterEvaluator instance for tests."""
    return TransactionFilterEvaluator()

@pytest.fixture
def transactions():
    """A small canonical set spread over three days, types and currencies."""
    return [
        Transaction(id="t000001", type=TransactionType.DEPOSIT, amount=Decimal("100"), currency=Currency.USD,
                    date=datetime(2024, 1, 1, 9, 30, tzinfo=timezone.utc), description="Salary payment"),
        Transaction(id="t000002", type=TransactionType.WITHDRAW, amount=Decimal("40"), currency=Currency.EUR,
                    date=datetime(2024, 1, 1, 18, 0, tzinfo=timezone.utc), description="Card withdrawal"),
        Transaction(id="t000003", type=TransactionType.DEPOSIT, amount=Decimal("10"), currency=Currency.USD,
                    date=datetime(2024, 1, 2, 12, 0, tzinfo=timezone.utc), description="Refund"),
        Transaction(id="T000104", type=TransactionType.TRANSFER, amount=Decimal("250"), currency=Currency.BTC,
                    date=datetime(2024, 1, 3, 23, 59, tzinfo=timezone.utc)),
    ]

def ids(transactions):
    return [txn.id for txn in transactions]

def test_empty_filters_return_input_unchanged(evaluator, transactions):
    """No constraints keep every transaction in its original order."""
    result = evaluator.filter_transactions(transactions, TransactionFilters())
    assert result == transactions
    assert result is not transactions

def test_filter_by_type(evaluator, transactions):
    result = evaluator.filter_transactions(transactions, TransactionFilters(type="deposit"))
    assert ids(result) == ["t000001", "t000003"]

def test_filter_by_currency(evaluator, transactions):
    result = evaluator.filter_transactions(transactions, TransactionFilters(currency="EUR"))
    assert ids(result) == ["t000002"]

def test_date_bounds_are_inclusive_calendar_days(evaluator, transactions):
    """A late-evening transaction on date_to is still inside the range."""
    filters = TransactionFilters(date_from=date(2024, 1, 2), date_to=date(2024, 1, 3))
    assert ids(evaluator.filter_transactions(transactions, filters)) == ["t000003", "T000104"]

def test_date_from_excludes_earlier_days(evaluator, transactions):
    filters = TransactionFilters(dateFrom="2024-01-02")
    assert ids(evaluator.filter_transactions(transactions, filters)) == ["t000003", "T000104"]

def test_date_to_excludes_later_days(evaluator, transactions):
    filters = TransactionFilters(dateTo="2024-01-01")
    assert ids(evaluator.filter_transactions(transactions, filters)) == ["t000001", "t000002"]

def test_min_amount_is_inclusive(evaluator, transactions):
    filters = TransactionFilters(min_amount=Decimal("100"))
    assert ids(evaluator.filter_transactions(transactions, filters)) == ["t000001", "T000104"]

@pytest.mark.parametrize("threshold", [0, -5, "0", "-0.01"])
def test_non_positive_min_amount_is_no_filter(evaluator, transactions, threshold):
    """Zero or negative thresholds behave exactly like an absent threshold."""
    filters = TransactionFilters(min_amount=threshold)
    assert filters.min_amount is None
    assert evaluator.filter_transactions(transactions, filters) == transactions

def test_search_matches_id_case_insensitively(evaluator, transactions):
    """'t000' matches both lower- and upper-case id prefixes."""
    result = evaluator.filter_transactions(transactions, TransactionFilters(search="t000"))
    assert ids(result) == ["t000001", "t000002", "t000003", "T000104"]

    result = evaluator.filter_transactions(transactions, TransactionFilters(search="T0001"))
    assert ids(result) == ["T000104"]

def test_search_matches_description_substring(evaluator, transactions):
    result = evaluator.filter_transactions(transactions, TransactionFilters(search="CARD"))
    assert ids(result) == ["t000002"]

def test_search_without_description_only_checks_id(evaluator, transactions):
    """A missing description counts as an empty string, not an error."""
    assert evaluator.matches(transactions[3], TransactionFilters(search="refund")) is False
    assert evaluator.matches(transactions[3], TransactionFilters(search="104")) is True

def test_constraints_combine_with_and(evaluator, transactions):
    filters = TransactionFilters(type="deposit", currency="USD", min_amount="50")
    assert ids(evaluator.filter_transactions(transactions, filters)) == ["t000001"]

def test_filtered_set_is_subset_and_idempotent(evaluator, transactions):
    filters = TransactionFilters(search="t", date_to="2024-01-02", min_amount="20")
    once = evaluator.filter_transactions(transactions, filters)
    twice = evaluator.filter_transactions(once, filters)

    assert all(txn in transactions for txn in once)
    assert twice == once
