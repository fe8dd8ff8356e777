# ledger_view/core/enums/loading_state.py

from enum import Enum

class LoadingState(str, Enum):
    """
    Lifecycle of the canonical transaction set held by the view store:
    idle -> loading -> success | error
    """
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"
