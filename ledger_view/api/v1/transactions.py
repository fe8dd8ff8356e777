# ledger_view/api/v1/transactions.py

from typing import Any, Optional
from fastapi import APIRouter, Body, Depends, HTTPException, Query, Request, status

from ledger_view.core.config.settings import Settings, settings
from ledger_view.core.enums.loading_state import LoadingState
from ledger_view.core.models.filters import Sort, TransactionFilters
from ledger_view.core.models.request import LoadRequest
from ledger_view.core.models.response import CatalogResponse, DateRange, StoreStateResponse, TransactionPage
from ledger_view.core.models.stats import TransactionStats
from ledger_view.logic.error_reporter import ErrorReporter
from ledger_view.logic.parser import TransactionParser
from ledger_view.services.data_source import build_default_data_source
from ledger_view.services.transaction_store import TransactionViewStore

router = APIRouter(prefix="/transactions")

def build_transaction_store(app_settings: Settings = settings) -> TransactionViewStore:
    """
    Wires a TransactionViewStore with its dependencies. Called once by the
    composition root; the instance lives on app.state.
    """
    error_reporter = ErrorReporter()
    return TransactionViewStore(
        data_source=build_default_data_source(app_settings),
        parser=TransactionParser(error_reporter=error_reporter),
        error_reporter=error_reporter,
        default_load_count=app_settings.DEFAULT_LOAD_COUNT
    )

# Dependency: hands endpoints the app-wide store
def get_transaction_store(request: Request) -> TransactionViewStore:
    return request.app.state.transaction_store

def _state_response(store: TransactionViewStore) -> StoreStateResponse:
    return StoreStateResponse(
        loading_state=store.loading_state,
        error=store.error,
        total_loaded=len(store.all_transactions),
        total_visible=len(store.transactions),
        rejected_records=store.rejected_records
    )

@router.post(
    "/load",
    response_model=StoreStateResponse,
    summary="Load or reload the canonical transaction set",
    description="Replaces the loaded transactions with `count` records from the data source "
                "and recomputes the view and statistics. A failed load keeps the previous data."
)
async def load_transactions_endpoint(
    payload: Optional[LoadRequest] = None,
    store: TransactionViewStore = Depends(get_transaction_store)
) -> StoreStateResponse:
    await store.load(payload.count if payload else None)
    if store.loading_state == LoadingState.ERROR:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=store.error)
    return _state_response(store)

@router.get("", response_model=TransactionPage, summary="Page through the filtered and sorted view")
async def list_transactions_endpoint(
    offset: int = Query(0, ge=0),
    limit: int = Query(50, ge=1, le=1000),
    store: TransactionViewStore = Depends(get_transaction_store)
) -> TransactionPage:
    view = store.transactions
    return TransactionPage(
        transactions=list(view[offset:offset + limit]),
        total=len(view),
        offset=offset,
        limit=limit
    )

@router.get("/stats", response_model=TransactionStats, summary="Statistics of the filtered set")
async def get_stats_endpoint(store: TransactionViewStore = Depends(get_transaction_store)) -> TransactionStats:
    return store.stats

@router.get("/state", response_model=StoreStateResponse, summary="Loading state and view size")
async def get_state_endpoint(store: TransactionViewStore = Depends(get_transaction_store)) -> StoreStateResponse:
    return _state_response(store)

@router.get("/meta", response_model=CatalogResponse, summary="Currencies and date range of the loaded set")
async def get_catalog_endpoint(store: TransactionViewStore = Depends(get_transaction_store)) -> CatalogResponse:
    min_date, max_date = store.date_range()
    return CatalogResponse(
        currencies=store.available_currencies(),
        date_range=DateRange(min_date=min_date, max_date=max_date)
    )

@router.get("/filters", response_model=TransactionFilters, summary="Active filters")
async def get_filters_endpoint(store: TransactionViewStore = Depends(get_transaction_store)) -> TransactionFilters:
    return store.filters

@router.patch(
    "/filters",
    response_model=TransactionFilters,
    summary="Merge filter changes",
    description="Fields sent as null clear that filter; fields left out are unchanged. "
                "Malformed values are treated as no filter."
)
async def update_filters_endpoint(
    partial: dict[str, Any] = Body(...),
    store: TransactionViewStore = Depends(get_transaction_store)
) -> TransactionFilters:
    store.set_filters(partial)
    return store.filters

@router.delete("/filters", response_model=TransactionFilters, summary="Clear all filters")
async def clear_filters_endpoint(store: TransactionViewStore = Depends(get_transaction_store)) -> TransactionFilters:
    store.clear_filters()
    return store.filters

@router.get("/sort", response_model=Sort, summary="Active sort")
async def get_sort_endpoint(store: TransactionViewStore = Depends(get_transaction_store)) -> Sort:
    return store.sort

@router.put("/sort", response_model=Sort, summary="Replace the sort order")
async def set_sort_endpoint(
    sort: Sort,
    store: TransactionViewStore = Depends(get_transaction_store)
) -> Sort:
    store.set_sort(sort)
    return store.sort
