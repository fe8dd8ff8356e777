# ledger_view/core/models/filters.py

import logging
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Optional
from pydantic import BaseModel, Field, ConfigDict, field_validator

from ledger_view.core.enums.currency import Currency
from ledger_view.core.enums.sort import SortDirection, SortField
from ledger_view.core.enums.transaction_type import TransactionType
from ledger_view.core.models.transaction import calendar_day

logger = logging.getLogger(__name__)


def _parse_calendar_day(value: Any) -> Optional[date]:
    if isinstance(value, datetime):
        return calendar_day(value)
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    try:
        return calendar_day(datetime.fromisoformat(text.replace("Z", "+00:00")))
    except ValueError:
        pass
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        logger.debug(f"Ignoring unparseable date bound {value!r}.")
        return None


class TransactionFilters(BaseModel):
    """
    Active filter criteria. Every field is optional and all present
    fields must match (AND). Malformed input never raises: it is normalized
    to an absent constraint, the same as if the field had not been given.
    """
    date_from: Optional[date] = Field(None, alias="dateFrom", description="Inclusive lower calendar-day bound")
    date_to: Optional[date] = Field(None, alias="dateTo", description="Inclusive upper calendar-day bound")
    type: Optional[TransactionType] = Field(None, description="Exact transaction type")
    currency: Optional[Currency] = Field(None, description="Exact currency")
    min_amount: Optional[Decimal] = Field(None, alias="minAmount", description="Inclusive lower amount bound, ignored when <= 0")
    search: Optional[str] = Field(None, description="Case-insensitive substring of description or id")

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        extra='ignore'
    )

    @field_validator("date_from", "date_to", mode="before")
    @classmethod
    def _normalize_day(cls, value: Any) -> Optional[date]:
        return _parse_calendar_day(value)

    @field_validator("type", mode="before")
    @classmethod
    def _normalize_type(cls, value: Any) -> Optional[TransactionType]:
        if isinstance(value, TransactionType):
            return value
        if isinstance(value, str) and TransactionType.is_valid(value):
            return TransactionType(value)
        return None

    @field_validator("currency", mode="before")
    @classmethod
    def _normalize_currency(cls, value: Any) -> Optional[Currency]:
        if isinstance(value, Currency):
            return value
        if isinstance(value, str) and Currency.is_valid(value):
            return Currency(value)
        return None

    @field_validator("min_amount", mode="before")
    @classmethod
    def _normalize_min_amount(cls, value: Any) -> Optional[Decimal]:
        if value is None or isinstance(value, bool):
            return None
        try:
            amount = Decimal(str(value).strip())
        except InvalidOperation:
            return None
        # A zero or negative threshold means "no threshold"
        if not amount.is_finite() or amount <= 0:
            return None
        return amount

    @field_validator("search", mode="before")
    @classmethod
    def _normalize_search(cls, value: Any) -> Optional[str]:
        if not isinstance(value, str) or value == "":
            return None
        return value

    def is_empty(self) -> bool:
        return all(getattr(self, name) is None for name in type(self).model_fields)

    def merged(self, partial: "TransactionFilters") -> "TransactionFilters":
        """
        Shallow merge: fields explicitly set on `partial` (including ones set
        to None, which clears them) replace ours; omitted fields are kept.
        """
        updates = {name: getattr(partial, name) for name in partial.model_fields_set}
        return self.model_copy(update=updates)


class Sort(BaseModel):
    """Active sort order: exactly one field and a direction."""
    field: SortField = Field(SortField.DATE, description="Field the view is ordered by")
    direction: SortDirection = Field(SortDirection.DESC, description="asc or desc")

    model_config = ConfigDict(frozen=True, extra='ignore')
