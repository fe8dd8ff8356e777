# ledger_view/core/models/stats.py

import datetime
from decimal import Decimal
from pydantic import BaseModel, Field, ConfigDict


class BalancePoint(BaseModel):
    """
    End-of-day running balance for one calendar day, plus the number of
    transactions that occurred on that day.
    """
    date: datetime.date = Field(..., description="Calendar day (no time component)")
    balance: Decimal = Field(..., description="Running balance after the day's last transaction")
    transactions: int = Field(..., ge=0, description="Number of transactions on that day")

    model_config = ConfigDict(frozen=True)


class TransactionStats(BaseModel):
    """
    Aggregates derived from a (filtered) transaction sequence.
    Type totals are magnitudes; only the running balance nets deposits
    against withdrawals.
    """
    total_transactions: int = Field(0, ge=0)
    total_deposits: Decimal = Field(default=Decimal(0))
    total_withdraws: Decimal = Field(default=Decimal(0))
    total_transfers: Decimal = Field(default=Decimal(0))
    current_balance: Decimal = Field(default=Decimal(0))
    balance_history: tuple[BalancePoint, ...] = Field(default_factory=tuple)

    model_config = ConfigDict(frozen=True)
