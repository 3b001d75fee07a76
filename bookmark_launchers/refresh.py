"""Nudge the desktop shell into rescanning its application directory.

Launchers tend to cache the contents of ``~/.local/share/applications`` and
do not always notice changes inside a subdirectory. Creating and shortly
afterwards deleting a hidden placeholder entry in the top-level directory
produces a modification event they do react to.
"""
import asyncio
import logging
import uuid
from pathlib import Path
from typing import Dict, Optional

from bookmark_launchers.config import DESKTOP_SUFFIX

logger = logging.getLogger(__name__)

PLACEHOLDER_CONTENTS = """[Desktop Entry]
Type=Application
Name=Refresh Trigger
Exec=true
NoDisplay=true
"""


class ShellRefresher:
    """Creates short-lived placeholder entries in the applications directory."""

    def __init__(self, applications_dir: Path, prefix: str = "bookmarks", delay: float = 0.5):
        self.applications_dir = applications_dir
        self.prefix = prefix
        self.delay = delay
        self._pending: Dict[Path, asyncio.TimerHandle] = {}

    @property
    def pending(self) -> int:
        """Number of placeholders waiting to be deleted."""
        return len(self._pending)

    def trigger(self) -> Optional[Path]:
        """Create a placeholder and schedule its removal.

        Returns:
            Path of the placeholder, or None if it could not be created
        """
        path = self.applications_dir / f"{self.prefix}-refresh-{uuid.uuid4().hex}{DESKTOP_SUFFIX}"
        try:
            self.applications_dir.mkdir(parents=True, exist_ok=True)
            path.write_text(PLACEHOLDER_CONTENTS, encoding="utf-8")
        except OSError as e:
            logger.error("Could not create refresh placeholder %s: %s", path, e)
            return None

        loop = asyncio.get_running_loop()
        self._pending[path] = loop.call_later(self.delay, self._remove, path)
        return path

    def close(self) -> None:
        """Delete any outstanding placeholders now."""
        for path, handle in list(self._pending.items()):
            handle.cancel()
            self._remove(path)

    def _remove(self, path: Path) -> None:
        self._pending.pop(path, None)
        try:
            path.unlink()
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.error("Could not delete refresh placeholder %s: %s", path, e)
