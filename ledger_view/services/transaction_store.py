# ledger_view/services/transaction_store.py

import inspect
import logging
from datetime import date
from typing import Any, Callable, Mapping, Optional, Union

from ledger_view.core.enums.currency import Currency
from ledger_view.core.enums.loading_state import LoadingState
from ledger_view.core.models.filters import Sort, TransactionFilters
from ledger_view.core.models.response import ErroredTransaction, StoreSnapshot
from ledger_view.core.models.stats import TransactionStats
from ledger_view.core.models.transaction import Transaction
from ledger_view.logic.error_reporter import ErrorReporter
from ledger_view.logic.filter_evaluator import TransactionFilterEvaluator
from ledger_view.logic.parser import TransactionParser
from ledger_view.logic.sorter import TransactionSorter
from ledger_view.logic.stats_aggregator import StatsAggregator
from ledger_view.services.data_source import TransactionDataSource

logger = logging.getLogger(__name__)

Listener = Callable[[StoreSnapshot], None]

DEFAULT_LOAD_ERROR = "Failed to load transactions"

class TransactionViewStore:
    """
    Holds the canonical transaction set together with the active filters and
    sort order, and keeps the derived view and statistics in sync
    with them.

    Every mutation runs filter -> sort -> aggregate before returning. Derived
    state is memoized on (canonical generation, filters, sort), so stages whose
    inputs did not change are skipped; in particular a sort change never
    re-aggregates, because aggregation does not depend on display order.
    New derived values are computed first and swapped in together, so readers
    never observe a half-updated store.
    """
    def __init__(
        self,
        data_source: TransactionDataSource,
        parser: TransactionParser,
        error_reporter: ErrorReporter,
        filter_evaluator: Optional[TransactionFilterEvaluator] = None,
        sorter: Optional[TransactionSorter] = None,
        aggregator: Optional[StatsAggregator] = None,
        default_load_count: int = 10000
    ):
        # Dependency Injection: the composition root owns and wires the store
        self._data_source = data_source
        self._parser = parser
        self._error_reporter = error_reporter
        self._filter_evaluator = filter_evaluator or TransactionFilterEvaluator()
        self._sorter = sorter or TransactionSorter()
        self._aggregator = aggregator or StatsAggregator(self._sorter)
        self._default_load_count = default_load_count

        self._all_transactions: tuple[Transaction, ...] = ()
        self._generation = 0
        self._load_token = 0
        self._loading_state = LoadingState.IDLE
        self._error: Optional[str] = None
        self._rejected: list[ErroredTransaction] = []
        self._filters = TransactionFilters()
        self._sort = Sort()

        self._filtered: tuple[Transaction, ...] = ()
        self._view: tuple[Transaction, ...] = ()
        self._stats = TransactionStats()
        self._filtered_key = (self._generation, self._filters)
        self._view_key = (self._generation, self._filters, self._sort)

        self._listeners: list[Listener] = []

    # --- Reads ---

    @property
    def transactions(self) -> tuple[Transaction, ...]:
        """The filtered and sorted view."""
        return self._view

    @property
    def all_transactions(self) -> tuple[Transaction, ...]:
        return self._all_transactions

    @property
    def stats(self) -> TransactionStats:
        return self._stats

    @property
    def loading_state(self) -> LoadingState:
        return self._loading_state

    @property
    def error(self) -> Optional[str]:
        return self._error

    @property
    def filters(self) -> TransactionFilters:
        return self._filters

    @property
    def sort(self) -> Sort:
        return self._sort

    @property
    def rejected_records(self) -> list[ErroredTransaction]:
        """Raw records skipped by the load that produced the canonical set."""
        return list(self._rejected)

    def snapshot(self) -> StoreSnapshot:
        # Everything in here is already validated and immutable
        return StoreSnapshot.model_construct(
            transactions=self._view,
            stats=self._stats,
            loading_state=self._loading_state,
            error=self._error,
            filters=self._filters,
            sort=self._sort,
        )

    def available_currencies(self) -> list[Currency]:
        """Distinct currencies present in the canonical set, sorted."""
        return sorted({txn.currency for txn in self._all_transactions}, key=lambda c: c.value)

    def date_range(self) -> tuple[Optional[date], Optional[date]]:
        """First and last calendar day of the canonical set, or (None, None) when empty."""
        if not self._all_transactions:
            return None, None
        days = [txn.day for txn in self._all_transactions]
        return min(days), max(days)

    # --- Subscriptions ---

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Registers `listener` to receive a snapshot after every settled
        mutation. Returns a callable that unsubscribes it.
        """
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self):
        if not self._listeners:
            return
        snapshot = self.snapshot()
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                logger.exception(f"Store listener {listener!r} failed; continuing with the others.")

    # --- Mutations ---

    async def load(self, count: Optional[int] = None):
        """
        Replaces the canonical set with up to `count` records from the data
        source. Failures never propagate: they leave the store in the error
        state with a message, keeping the previously loaded data and its
        derived view and statistics. Calling load again retries.
        """
        if count is None:
            count = self._default_load_count
        self._load_token += 1
        token = self._load_token

        logger.info(f"Loading {count} transactions...")
        self._loading_state = LoadingState.LOADING
        self._error = None
        self._notify()

        try:
            raw_transactions = self._data_source.fetch_transactions(count)
            if inspect.isawaitable(raw_transactions):
                raw_transactions = await raw_transactions
            if token != self._load_token:
                logger.info("Discarding result of a superseded load.")
                return
            # No await from here on, so no other load can write to the reporter
            self._error_reporter.clear()
            transactions = self._parser.parse_transactions(raw_transactions)
            rejected = self._error_reporter.get_errors()
        except Exception as e:
            if token != self._load_token:
                logger.info("Discarding failure of a superseded load.")
                return
            logger.exception(f"Failed to load transactions: {e}")
            self._loading_state = LoadingState.ERROR
            self._error = str(e) or DEFAULT_LOAD_ERROR
            self._notify()
            return

        self._all_transactions = tuple(transactions)
        self._rejected = rejected
        self._generation += 1
        self._recompute()
        self._loading_state = LoadingState.SUCCESS
        logger.info(
            f"Loaded {len(self._all_transactions)} transactions "
            f"({len(self.rejected_records)} rejected), {len(self._view)} visible."
        )
        self._notify()

    def set_filters(self, partial: Union[TransactionFilters, Mapping[str, Any]]):
        """
        Shallow-merges `partial` into the active filters. Keys given as None
        clear that filter; keys left out keep their current value.
        """
        if not isinstance(partial, TransactionFilters):
            partial = TransactionFilters.model_validate(dict(partial))
        self._filters = self._filters.merged(partial)
        logger.debug(f"Filters set to {self._filters.model_dump(exclude_none=True)}.")
        self._recompute()
        self._notify()

    def clear_filters(self):
        self._filters = TransactionFilters()
        self._recompute()
        self._notify()

    def set_sort(self, sort: Union[Sort, Mapping[str, Any]]):
        """Replaces the sort order wholesale and re-sorts the view."""
        if not isinstance(sort, Sort):
            sort = Sort.model_validate(dict(sort))
        self._sort = sort
        self._recompute()
        self._notify()

    # --- Pipeline ---

    def _recompute(self):
        filtered_key = (self._generation, self._filters)
        view_key = (self._generation, self._filters, self._sort)

        if view_key == self._view_key:
            logger.debug("Derived state is current; nothing to recompute.")
            return

        filtered, stats = self._filtered, self._stats
        if filtered_key != self._filtered_key:
            filtered = tuple(self._filter_evaluator.filter_transactions(self._all_transactions, self._filters))
            # Statistics come from the filtered, unsorted set
            stats = self._aggregator.aggregate(filtered)
        view = tuple(self._sorter.sort_transactions(filtered, self._sort))

        self._filtered, self._view, self._stats = filtered, view, stats
        self._filtered_key, self._view_key = filtered_key, view_key
        logger.debug(f"Recomputed view: {len(view)} of {len(self._all_transactions)} transactions.")
