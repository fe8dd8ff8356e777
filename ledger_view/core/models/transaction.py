# ledger_view/core/models/transaction.py

from datetime import date, datetime, timezone
from typing import Optional
from pydantic import BaseModel, Field, condecimal, ConfigDict

from ledger_view.core.enums.transaction_type import TransactionType
from ledger_view.core.enums.currency import Currency


def calendar_day(moment: datetime) -> date:
    """
    Returns the calendar day of a timestamp, dropping the time of day.
    Timezone-aware timestamps are normalized to UTC first so that the same
    instant always lands on the same day.
    """
    if moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc)
    return moment.date()


class Transaction(BaseModel):
    """
    Represents a single ledger transaction.
    The amount is a non-negative magnitude; its sign is implied by the type.
    """
    id: str = Field(..., min_length=1, description="Unique identifier for the transaction")
    type: TransactionType = Field(..., description="Type of transaction (deposit, withdraw, transfer)")
    amount: condecimal(ge=0) = Field(..., description="Magnitude of the transaction in its currency")
    currency: Currency = Field(..., description="Currency of the transaction")
    date: datetime = Field(..., description="Timestamp the transaction occurred (ISO format)")
    description: Optional[str] = Field(None, description="Free text shown alongside the transaction")

    model_config = ConfigDict(
        frozen=True,
        from_attributes=True,
        extra='ignore'
    )

    @property
    def day(self):
        """Calendar day the transaction belongs to."""
        # 'date' is shadowed by the field inside the class body
        return calendar_day(self.date)
