# ledger_view/logic/error_reporter.py

import logging

from ledger_view.core.models.response import ErroredTransaction

logger = logging.getLogger(__name__)

class ErrorReporter:
    """
    Collects the raw records rejected during a load, keyed by record id.
    Reset before each load parses its records.
    """
    def __init__(self):
        self._errored_transactions: dict[str, ErroredTransaction] = {}

    def add_error(self, transaction_id: str, error_reason: str):
        """
        Records a rejection. A second reason for the same id is appended,
        unless it repeats one already recorded.
        """
        logger.warning(f"Rejected record {transaction_id}: {error_reason}")
        existing = self._errored_transactions.get(transaction_id)
        if existing is None:
            self._errored_transactions[transaction_id] = ErroredTransaction(
                transaction_id=transaction_id,
                error_reason=error_reason
            )
        elif error_reason not in existing.error_reason:
            existing.error_reason += f"; {error_reason}"

    def get_errors(self) -> list[ErroredTransaction]:
        return list(self._errored_transactions.values())

    def has_errors(self) -> bool:
        return bool(self._errored_transactions)

    def has_errors_for(self, transaction_id: str) -> bool:
        return transaction_id in self._errored_transactions

    def clear(self):
        self._errored_transactions = {}
