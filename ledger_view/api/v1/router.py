# ledger_view/api/v1/router.py

from fastapi import APIRouter
from ledger_view.api.v1.transactions import router as transactions_router

# Create a main router for API version 1
router = APIRouter()

router.include_router(transactions_router, tags=["Transactions"])
