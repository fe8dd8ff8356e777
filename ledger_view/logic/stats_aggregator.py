# ledger_view/logic/stats_aggregator.py

import logging
from datetime import date
from decimal import Decimal
from typing import Optional, Sequence

from ledger_view.core.enums.transaction_type import TransactionType
from ledger_view.core.models.stats import BalancePoint, TransactionStats
from ledger_view.core.models.transaction import Transaction
from ledger_view.logic.sorter import TransactionSorter

logger = logging.getLogger(__name__)

class StatsAggregator:
    """
    Derives type totals, the running balance and the daily balance history
    from a transaction sequence.

    The running balance only makes sense in chronological order, so the input
    is re-sorted by date here regardless of how the caller displays it. This
    makes the output independent of the display sort.
    """
    def __init__(self, sorter: Optional[TransactionSorter] = None):
        self._sorter = sorter or TransactionSorter()

    def aggregate(self, transactions: Sequence[Transaction]) -> TransactionStats:
        chronological = self._sorter.sort_chronologically(transactions)

        running_balance = Decimal(0)
        totals = {
            TransactionType.DEPOSIT: Decimal(0),
            TransactionType.WITHDRAW: Decimal(0),
            TransactionType.TRANSFER: Decimal(0),
        }
        # { day: [balance after the day's last transaction, transaction count] }
        daily: dict[date, list] = {}

        for transaction in chronological:
            totals[transaction.type] += transaction.amount

            if transaction.type == TransactionType.DEPOSIT:
                running_balance += transaction.amount
            elif transaction.type == TransactionType.WITHDRAW:
                running_balance -= transaction.amount
            # Transfers are balance-neutral: the engine does not tell sub-accounts apart.

            day_entry = daily.setdefault(transaction.day, [running_balance, 0])
            day_entry[0] = running_balance
            day_entry[1] += 1

        balance_history = tuple(
            BalancePoint(date=day, balance=balance, transactions=count)
            for day, (balance, count) in sorted(daily.items())
        )

        logger.debug(
            f"Aggregated {len(transactions)} transactions into {len(balance_history)} daily points. "
            f"Current balance: {running_balance}."
        )

        return TransactionStats(
            total_transactions=len(transactions),
            total_deposits=totals[TransactionType.DEPOSIT],
            total_withdraws=totals[TransactionType.WITHDRAW],
            total_transfers=totals[TransactionType.TRANSFER],
            current_balance=running_balance,
            balance_history=balance_history,
        )
