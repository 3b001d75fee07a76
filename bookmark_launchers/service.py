"""Keeps the launcher directory in sync with the browser's bookmarks.

Flow:
  1. The monitor reports a settled change to the bookmarks file
  2. The debouncer waits for a quiet period, restarting on every change
  3. regenerate() locates, parses and rewrites all launcher files
  4. The shell refresher makes the launcher notice the new files

Everything runs on one asyncio event loop; callbacks never overlap.
"""
import asyncio
import logging
from pathlib import Path
from typing import Callable, Optional

from bookmark_launchers.bookmarks_reader import read_bookmarks
from bookmark_launchers.config import Config
from bookmark_launchers.debounce import Debouncer
from bookmark_launchers.desktop_writer import clear_desktop_files, write_desktop_files
from bookmark_launchers.errors import DirectoryError, SourceNotFound
from bookmark_launchers.indicator import CountIndicator, LoggingIndicator
from bookmark_launchers.locator import locate_bookmarks_file, require_bookmarks_file
from bookmark_launchers.monitor import BookmarksMonitor, Monitor
from bookmark_launchers.refresh import ShellRefresher

logger = logging.getLogger(__name__)

MonitorFactory = Callable[[Path, Callable[[], None]], Monitor]


class LauncherService:
    """Owns the monitor, the debounce timer and the generated files."""

    def __init__(
        self,
        config: Config,
        indicator: Optional[CountIndicator] = None,
        monitor_factory: MonitorFactory = BookmarksMonitor,
    ):
        self.config = config
        self.variant = config.variant
        self.indicator: Optional[CountIndicator] = None
        if self.variant.show_indicator:
            self.indicator = indicator or LoggingIndicator()
        self._monitor_factory = monitor_factory
        self._monitor: Optional[Monitor] = None
        self._debouncer = Debouncer(config.debounce_delay, self._on_quiet)
        self._refresher = ShellRefresher(
            config.applications_dir,
            prefix=self.variant.file_prefix,
            delay=config.refresh_delay,
        )
        self._running = False

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def update_pending(self) -> bool:
        """True while a debounced regeneration is scheduled."""
        return self._debouncer.pending

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def start(self) -> None:
        """Generate launchers once and start following changes."""
        if self._running:
            return
        self._running = True

        if self.indicator is not None:
            self.indicator.register()

        self.regenerate()
        self._refresher.trigger()

        watched = self._watched_path()
        self._monitor = self._monitor_factory(watched, self.on_bookmarks_changed)
        await self._monitor.start()

    async def stop(self) -> None:
        """Stop following changes and remove every generated launcher."""
        if not self._running:
            return
        self._running = False

        if self._monitor is not None:
            await self._monitor.stop()
            self._monitor = None

        self._debouncer.cancel()

        removed = clear_desktop_files(self.config.target_dir)
        logger.info("Removed %d bookmark launchers", removed)
        self._refresher.trigger()

        if self.indicator is not None:
            self.indicator.remove()

        # Give the shell a chance to see the placeholder before it goes
        await asyncio.sleep(self._refresher.delay)
        self._refresher.close()

    # ------------------------------------------------------------------
    # Pipeline
    # ------------------------------------------------------------------

    def regenerate(self) -> int:
        """Rewrite the launcher directory from the current bookmarks.

        Returns:
            Number of launcher files written
        """
        target_dir = self.config.target_dir

        try:
            source = require_bookmarks_file(self.variant.sources)
        except SourceNotFound as e:
            logger.warning("%s", e)
            bookmarks = []
        else:
            bookmarks = read_bookmarks(source, self.variant.roots)

        try:
            written = write_desktop_files(target_dir, bookmarks, self.variant)
        except DirectoryError as e:
            logger.error("Bookmark launchers not updated: %s", e)
            return 0

        logger.info("Wrote %d bookmark launchers to %s", len(written), target_dir)

        if self.indicator is not None:
            self.indicator.update(len(written))

        return len(written)

    def on_bookmarks_changed(self) -> None:
        """Monitor callback: schedule a regeneration after the quiet period."""
        if not self._running:
            return
        logger.info("Bookmarks changed, scheduling update")
        self._debouncer.trigger()

    def _on_quiet(self) -> None:
        self.regenerate()
        self._refresher.trigger()

    def _watched_path(self) -> Path:
        located = locate_bookmarks_file(self.variant.sources)
        # Nothing installed yet; follow the preferred browser
        return located or self.variant.sources[0][1]
