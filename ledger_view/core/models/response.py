# ledger_view/core/models/response.py

import datetime
from typing import Optional
from pydantic import BaseModel, Field, ConfigDict

from ledger_view.core.enums.currency import Currency
from ledger_view.core.enums.loading_state import LoadingState
from ledger_view.core.models.filters import Sort, TransactionFilters
from ledger_view.core.models.stats import TransactionStats
from ledger_view.core.models.transaction import Transaction

class ErroredTransaction(BaseModel):
    """
    Represents a raw record that was rejected while loading, along with the reason.
    """
    transaction_id: str = Field(..., description="The ID of the rejected record.")
    error_reason: str = Field(..., description="The reason why the record was rejected.")

class StoreSnapshot(BaseModel):
    """
    Read-only picture of the view store once a mutation has settled.
    """
    transactions: tuple[Transaction, ...] = Field(default_factory=tuple, description="Filtered and sorted view")
    stats: TransactionStats = Field(default_factory=TransactionStats)
    loading_state: LoadingState = LoadingState.IDLE
    error: Optional[str] = None
    filters: TransactionFilters = Field(default_factory=TransactionFilters)
    sort: Sort = Field(default_factory=Sort)

    model_config = ConfigDict(frozen=True)

class StoreStateResponse(BaseModel):
    loading_state: LoadingState
    error: Optional[str] = None
    total_loaded: int = Field(..., description="Size of the canonical set")
    total_visible: int = Field(..., description="Size of the filtered view")
    rejected_records: list[ErroredTransaction] = Field(default_factory=list)

class TransactionPage(BaseModel):
    """
    One page of the current view. Paging is applied after filtering and sorting.
    """
    transactions: list[Transaction]
    total: int = Field(..., description="Total number of transactions in the view")
    offset: int
    limit: int

class DateRange(BaseModel):
    min_date: Optional[datetime.date] = None
    max_date: Optional[datetime.date] = None

class CatalogResponse(BaseModel):
    """
    Values derived from the canonical set that filter controls bind to.
    """
    currencies: list[Currency] = Field(default_factory=list)
    date_range: DateRange = Field(default_factory=DateRange)
