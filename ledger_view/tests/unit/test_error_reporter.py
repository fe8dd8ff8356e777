# ledger_view/tests/unit/test_error_reporter.py

import pytest
from ledger_view.logic.error_reporter import ErrorReporter

@pytest.fixture
def error_reporter():
    """Provides a fresh ErrorReporter instance for each test."""
    return ErrorReporter()

def test_add_error_single(error_reporter):
    error_reporter.add_error("t000001", "Validation error: amount: Input should be greater than or equal to 0")

    errors = error_reporter.get_errors()
    assert len(errors) == 1
    assert errors[0].transaction_id == "t000001"
    assert error_reporter.has_errors() is True
    assert error_reporter.has_errors_for("t000001") is True
    assert error_reporter.has_errors_for("t000002") is False

def test_add_error_duplicate_id_appends_reason(error_reporter):
    error_reporter.add_error("t000001", "Validation error: currency: Field required")
    error_reporter.add_error("t000001", "Duplicate transaction id")

    errors = error_reporter.get_errors()
    assert len(errors) == 1
    assert errors[0].error_reason == "Validation error: currency: Field required; Duplicate transaction id"

def test_add_error_duplicate_id_does_not_append_same_reason(error_reporter):
    error_reporter.add_error("t000001", "Duplicate transaction id")
    error_reporter.add_error("t000001", "Duplicate transaction id")

    assert error_reporter.get_errors()[0].error_reason == "Duplicate transaction id"

def test_clear_errors(error_reporter):
    error_reporter.add_error("t000001", "Test error")
    error_reporter.clear()

    assert error_reporter.get_errors() == []
    assert error_reporter.has_errors() is False
    assert error_reporter.has_errors_for("t000001") is False
