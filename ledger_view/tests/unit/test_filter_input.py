# ledger_view/tests/unit/test_filter_input.py

import anyio
import pytest
from datetime import date
from decimal import Decimal
from unittest.mock import MagicMock

from ledger_view.logic.debounce import Debouncer
from ledger_view.logic.error_reporter import ErrorReporter
from ledger_view.logic.parser import TransactionParser
from ledger_view.services.filter_input import DebouncedFilterInput
from ledger_view.services.transaction_store import TransactionViewStore

pytestmark = pytest.mark.anyio

WAIT = 0.02

@pytest.fixture
def mock_store():
    """Mock TransactionViewStore for isolating the input boundary."""
    return MagicMock(spec=TransactionViewStore)

@pytest.fixture
def filter_input(mock_store):
    return DebouncedFilterInput(mock_store, search_debounce_seconds=WAIT, min_amount_debounce_seconds=WAIT)

async def test_debouncer_only_fires_latest_call():
    callback = MagicMock()
    debounced = Debouncer(WAIT, callback)

    debounced("a")
    debounced("ab")
    debounced("abc")
    assert debounced.pending is True
    callback.assert_not_called()

    await anyio.sleep(WAIT * 5)

    callback.assert_called_once_with("abc")
    assert debounced.pending is False

async def test_debouncer_flush_and_cancel():
    callback = MagicMock()
    debounced = Debouncer(10, callback)

    debounced(1)
    debounced.flush()
    callback.assert_called_once_with(1)

    debounced(2)
    debounced.cancel()
    debounced.flush() # Nothing pending any more
    callback.assert_called_once_with(1)

async def test_burst_of_search_input_reaches_store_once(filter_input, mock_store):
    for text in ("s", "sa", "sal", "salary"):
        filter_input.on_search_change(text)

    await anyio.sleep(WAIT * 5)

    mock_store.set_filters.assert_called_once_with({"search": "salary"})

async def test_min_amount_input_is_debounced_separately(filter_input, mock_store):
    filter_input.on_search_change("card")
    filter_input.on_min_amount_change("1")
    filter_input.on_min_amount_change("15")

    await anyio.sleep(WAIT * 5)

    assert mock_store.set_filters.call_count == 2
    mock_store.set_filters.assert_any_call({"search": "card"})
    mock_store.set_filters.assert_any_call({"min_amount": "15"})

async def test_flush_applies_pending_input_immediately(filter_input, mock_store):
    filter_input.on_search_change("refund")
    filter_input.flush()
    mock_store.set_filters.assert_called_once_with({"search": "refund"})

async def test_cancel_drops_pending_input(filter_input, mock_store):
    filter_input.on_min_amount_change("99")
    filter_input.cancel()

    await anyio.sleep(WAIT * 5)

    mock_store.set_filters.assert_not_called()

async def test_quick_date_range_is_applied_immediately(filter_input, mock_store):
    filter_input.apply_quick_date_range(7, today=date(2024, 3, 10))
    mock_store.set_filters.assert_called_once_with(
        {"date_from": date(2024, 3, 3), "date_to": date(2024, 3, 10)}
    )

async def test_blank_and_invalid_input_clear_filters_on_a_real_store():
    reporter = ErrorReporter()
    store = TransactionViewStore(
        data_source=MagicMock(), parser=TransactionParser(reporter), error_reporter=reporter
    )
    filter_input = DebouncedFilterInput(store, WAIT, WAIT)

    filter_input.on_min_amount_change("25")
    filter_input.flush()
    assert store.filters.min_amount == Decimal("25")

    filter_input.on_min_amount_change("abc")
    filter_input.on_search_change("")
    filter_input.flush()
    assert store.filters.min_amount is None
    assert store.filters.search is None
