# ledger_view/services/filter_input.py

import logging
from datetime import date, timedelta
from typing import Optional

from ledger_view.logic.debounce import Debouncer
from ledger_view.services.transaction_store import TransactionViewStore

logger = logging.getLogger(__name__)

class DebouncedFilterInput:
    """
    Boundary between raw, keystroke-level user input and the view store.

    Free-text search and the minimum amount are debounced so that a burst of
    typing triggers a single recomputation over the canonical set. Raw text is
    handed to the store as is; the filter model normalizes blanks,
    unparseable numbers and non-positive thresholds to "no filter".
    """
    def __init__(
        self,
        store: TransactionViewStore,
        search_debounce_seconds: float = 0.3,
        min_amount_debounce_seconds: float = 0.5
    ):
        self._store = store
        self._search = Debouncer(search_debounce_seconds, self._apply_search)
        self._min_amount = Debouncer(min_amount_debounce_seconds, self._apply_min_amount)

    def on_search_change(self, text: str):
        self._search(text)

    def on_min_amount_change(self, text: str):
        self._min_amount(text)

    def apply_quick_date_range(self, days: int, today: Optional[date] = None):
        """Immediately restricts the view to the last `days` days, today included."""
        today = today or date.today()
        self._store.set_filters({"date_from": today - timedelta(days=days), "date_to": today})

    def flush(self):
        """Applies any pending input right away."""
        self._search.flush()
        self._min_amount.flush()

    def cancel(self):
        self._search.cancel()
        self._min_amount.cancel()

    def _apply_search(self, text: str):
        logger.debug(f"Applying search input {text!r}.")
        self._store.set_filters({"search": text})

    def _apply_min_amount(self, text: str):
        logger.debug(f"Applying minimum amount input {text!r}.")
        self._store.set_filters({"min_amount": text})
