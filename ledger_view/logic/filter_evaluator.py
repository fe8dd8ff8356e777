# ledger_view/logic/filter_evaluator.py

import logging
from decimal import Decimal
from typing import Sequence

from ledger_view.core.models.filters import TransactionFilters
from ledger_view.core.models.transaction import Transaction

logger = logging.getLogger(__name__)

class TransactionFilterEvaluator:
    """
    Decides whether a transaction belongs to the view against the given filter
    criteria. All active constraints must pass; no constraints match
    everything.
    """

    def matches(self, transaction: Transaction, filters: TransactionFilters) -> bool:
        day = transaction.day

        if filters.date_from is not None and day < filters.date_from:
            return False

        if filters.date_to is not None and day > filters.date_to:
            return False

        if filters.type is not None and transaction.type != filters.type:
            return False

        # Zero or negative thresholds are no threshold at all
        if filters.min_amount is not None and filters.min_amount > Decimal(0):
            if transaction.amount < filters.min_amount:
                return False

        if filters.currency is not None and transaction.currency != filters.currency:
            return False

        if filters.search:
            search_term = filters.search.lower()
            description = (transaction.description or "").lower()
            if search_term not in description and search_term not in transaction.id.lower():
                return False

        return True

    def filter_transactions(
        self,
        transactions: Sequence[Transaction],
        filters: TransactionFilters
    ) -> list[Transaction]:
        """
        Returns the transactions matching `filters`, keeping their input order.
        """
        if filters.is_empty():
            return list(transactions)

        filtered = [txn for txn in transactions if self.matches(txn, filters)]
        logger.debug(f"Filter kept {len(filtered)} of {len(transactions)} transactions.")
        return filtered
