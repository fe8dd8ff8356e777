# ledger_view/core/enums/sort.py

from enum import Enum

class SortField(str, Enum):
    """Fields the transaction view can be ordered by. Only one is active at a time."""
    DATE = "date"
    AMOUNT = "amount"
    TYPE = "type"

class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"
