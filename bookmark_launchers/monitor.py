"""Watch the bookmarks file for completed writes."""
import asyncio
import logging
from pathlib import Path
from typing import Callable, Optional, Protocol

from watchfiles import Change, awatch

logger = logging.getLogger(__name__)

# Changes that leave a readable file behind
SETTLED_CHANGES = (Change.added, Change.modified)

RETRY_DELAY = 5.0  # Seconds before watching again after a watcher failure


class Monitor(Protocol):
    """Anything that can watch a path and report settled changes."""

    async def start(self) -> None:
        ...

    async def stop(self) -> None:
        ...


class SettledChangeFilter:
    """watchfiles filter accepting only writes to one file."""

    def __init__(self, path: Path):
        self.name = path.name

    def __call__(self, change: Change, path: str) -> bool:
        return change in SETTLED_CHANGES and Path(path).name == self.name


class _StopWhen:
    """Stop event for awatch that also trips once a condition holds.

    watchfiles polls ``is_set()`` from its watcher thread between steps.
    """

    def __init__(self, event: asyncio.Event, condition: Callable[[], bool]):
        self._event = event
        self._condition = condition

    def is_set(self) -> bool:
        return self._event.is_set() or self._condition()

    def set(self) -> None:
        self._event.set()


def nearest_existing_ancestor(path: Path) -> Path:
    for candidate in path.parents:
        if candidate.is_dir():
            return candidate
    return Path(path.anchor or ".")


class BookmarksMonitor:
    """Report settled changes to a bookmarks file.

    The parent directory is watched rather than the file itself because
    browsers replace the bookmarks file by renaming a temporary file over it.
    Each batch watchfiles yields has already been coalesced, so it counts as
    one "changes done" notification.

    If the profile directory does not exist yet (browser never started), the
    closest existing ancestor is watched until it appears.
    """

    def __init__(self, path: Path, on_change: Callable[[], None]):
        self.path = path
        self._on_change = on_change
        self._stop_event: Optional[asyncio.Event] = None
        self._task: Optional[asyncio.Task] = None

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def start(self) -> None:
        """Start watching (non-blocking)."""
        if self.is_running:
            return
        self._stop_event = asyncio.Event()
        self._task = asyncio.create_task(self._run())
        logger.info("Monitoring %s", self.path)

    async def stop(self) -> None:
        """Stop watching and wait for the watcher task to finish."""
        if self._stop_event is not None:
            self._stop_event.set()
        if self._task is not None:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
        self._task = None
        self._stop_event = None

    async def _run(self) -> None:
        while not self._stop_event.is_set():
            try:
                if self.path.parent.is_dir():
                    await self._watch_file()
                else:
                    await self._wait_for_directory()
            except asyncio.CancelledError:
                raise
            except Exception as e:
                logger.error("Failed to monitor bookmarks file %s: %s", self.path, e)
                try:
                    await asyncio.wait_for(self._stop_event.wait(), timeout=RETRY_DELAY)
                except asyncio.TimeoutError:
                    pass

    async def _watch_file(self) -> None:
        directory = self.path.parent
        # Ends early if the profile directory goes away
        stop = _StopWhen(self._stop_event, lambda: not directory.is_dir())
        async for changes in awatch(
            directory,
            watch_filter=SettledChangeFilter(self.path),
            stop_event=stop,
            recursive=False,
        ):
            logger.debug("Bookmarks changes: %s", changes)
            self._on_change()

    async def _wait_for_directory(self) -> None:
        directory = self.path.parent
        ancestor = nearest_existing_ancestor(directory)
        logger.warning("%s does not exist yet, waiting for it in %s", directory, ancestor)

        stop = _StopWhen(self._stop_event, directory.is_dir)
        async for _ in awatch(ancestor, stop_event=stop, recursive=False):
            pass

        if not self._stop_event.is_set():
            logger.info("%s appeared", directory)
            # The file may have been written before the directory watch starts
            self._on_change()
