# ledger_view/logic/debounce.py

import asyncio
import logging
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)

class Debouncer:
    """
    Delays a callback until `wait_seconds` have passed without another call.
    Each call replaces the pending one, so only the latest arguments are used.
    Must be used from inside a running asyncio event loop.
    """
    def __init__(self, wait_seconds: float, callback: Callable[..., Any]):
        self._wait_seconds = wait_seconds
        self._callback = callback
        self._handle: Optional[asyncio.TimerHandle] = None
        self._pending_args: tuple = ()

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def __call__(self, *args: Any):
        self.cancel()
        self._pending_args = args
        loop = asyncio.get_running_loop()
        self._handle = loop.call_later(self._wait_seconds, self._fire)

    def flush(self):
        """Runs the pending call immediately, if there is one."""
        if self._handle is None:
            return
        self._handle.cancel()
        self._fire()

    def cancel(self):
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _fire(self):
        args = self._pending_args
        self._handle = None
        self._pending_args = ()
        logger.debug(f"Debouncer firing {getattr(self._callback, '__name__', self._callback)} after {self._wait_seconds}s.")
        self._callback(*args)
