"""Bookmark count indicator shown by the multi-browser variant."""
import logging
from typing import Optional, Protocol

logger = logging.getLogger(__name__)


class CountIndicator(Protocol):
    """Protocol for the host's status-area widget."""

    def register(self) -> None:
        ...

    def update(self, count: int) -> None:
        ...

    def remove(self) -> None:
        ...


class LoggingIndicator:
    """Indicator for hosts without a status area: logs and remembers the count."""

    def __init__(self):
        self.count: Optional[int] = None
        self.registered = False

    def register(self) -> None:
        self.registered = True

    def update(self, count: int) -> None:
        if count != self.count:
            logger.info("%d bookmark launcher%s", count, "" if count == 1 else "s")
        self.count = count

    def remove(self) -> None:
        self.registered = False
        self.count = None
