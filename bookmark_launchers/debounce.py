"""Trailing-edge debouncing on the asyncio event loop."""
import asyncio
import logging
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class Debouncer:
    """Run a callback once, ``delay`` seconds after the last trigger.

    Every trigger cancels the pending timer before scheduling a new one, so a
    burst of triggers collapses into a single call. Triggers and the callback
    all run on the event loop thread.
    """

    def __init__(self, delay: float, callback: Callable[[], None]):
        self.delay = delay
        self._callback = callback
        self._handle: Optional[asyncio.TimerHandle] = None

    @property
    def pending(self) -> bool:
        """True while a callback is scheduled."""
        return self._handle is not None

    def trigger(self) -> None:
        """(Re)start the quiet period."""
        self.cancel()
        loop = asyncio.get_running_loop()
        self._handle = loop.call_later(self.delay, self._fire)

    def cancel(self) -> None:
        """Drop the pending callback, if any."""
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _fire(self) -> None:
        self._handle = None
        try:
            self._callback()
        except Exception:
            logger.exception("Debounced callback failed")
