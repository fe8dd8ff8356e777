# ledger_view/logic/sorter.py

import locale
from functools import cmp_to_key
from typing import Sequence

from ledger_view.core.enums.sort import SortDirection, SortField
from ledger_view.core.models.filters import Sort
from ledger_view.core.models.transaction import Transaction

def _compare(left, right) -> int:
    return (left > right) - (left < right)

class TransactionSorter:
    """
    Responsible for ordering the filtered transactions for display.
    """

    def compare(self, a: Transaction, b: Transaction, sort: Sort) -> int:
        """
        Compares two transactions on the single active sort field.

        Returns -1 when `a` goes before `b`, 1 when after and 0 when they tie.
        A descending direction inverts the base comparison; ties stay ties.
        """
        if sort.field == SortField.DATE:
            result = _compare(a.date.timestamp(), b.date.timestamp())
        elif sort.field == SortField.AMOUNT:
            result = _compare(a.amount, b.amount)
        else:
            result = _compare(locale.strcoll(a.type.value, b.type.value), 0)

        return -result if sort.direction == SortDirection.DESC else result

    def sort_transactions(
        self,
        transactions: Sequence[Transaction],
        sort: Sort
    ) -> list[Transaction]:
        """
        Returns a sorted copy of the transactions.

        Python's sort is stable, so transactions that compare equal keep
        their relative input order in both directions.

        Args:
            transactions: Transactions to order, typically the filtered set.
            sort: The active sort order.

        Returns:
            A new list; the input sequence is left untouched.
        """
        return sorted(transactions, key=cmp_to_key(lambda a, b: self.compare(a, b, sort)))

    def sort_chronologically(self, transactions: Sequence[Transaction]) -> list[Transaction]:
        """Oldest first; ties keep their input order."""
        return sorted(transactions, key=lambda txn: txn.date.timestamp())
