# ledger_view/logic/parser.py

import logging
from typing import Any, Iterable, Mapping, Union
from pydantic import ValidationError, TypeAdapter

from ledger_view.core.models.transaction import Transaction
from ledger_view.logic.error_reporter import ErrorReporter

logger = logging.getLogger(__name__)

UNKNOWN_ID = "UNKNOWN_ID"

RawTransaction = Union[Mapping[str, Any], Transaction]

class TransactionParser:
    """
    Turns the records handed over by a data source into validated, immutable
    Transaction objects. Records that fail validation, or that reuse an id
    already seen in the same batch, are left out of the result and reported
    to the shared ErrorReporter.
    """
    def __init__(self, error_reporter: ErrorReporter):
        self._single_transaction_adapter = TypeAdapter(Transaction)
        self._error_reporter = error_reporter

    def parse_transactions(self, raw_transactions: Iterable[RawTransaction]) -> list[Transaction]:
        parsed_transactions: list[Transaction] = []
        seen_ids: set[str] = set()

        for raw_txn in raw_transactions:
            if isinstance(raw_txn, Transaction):
                transaction = raw_txn
            elif isinstance(raw_txn, Mapping):
                transaction = self._validate(raw_txn)
                if transaction is None:
                    continue
            else:
                self._error_reporter.add_error(
                    UNKNOWN_ID, f"Unsupported record type: {type(raw_txn).__name__}"
                )
                continue

            if transaction.id in seen_ids:
                self._error_reporter.add_error(transaction.id, "Duplicate transaction id")
                continue

            seen_ids.add(transaction.id)
            parsed_transactions.append(transaction)

        logger.info(
            f"TransactionParser: accepted {len(parsed_transactions)} records, "
            f"rejected {len(self._error_reporter.get_errors())}."
        )
        return parsed_transactions

    def _validate(self, raw_txn: Mapping[str, Any]):
        transaction_id = str(raw_txn.get("id") or UNKNOWN_ID)
        try:
            return self._single_transaction_adapter.validate_python(dict(raw_txn))
        except ValidationError as e:
            error_messages = "; ".join(
                f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in e.errors()
            )
            self._error_reporter.add_error(transaction_id, f"Validation error: {error_messages}")
            return None
