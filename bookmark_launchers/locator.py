"""Find the bookmarks file to read."""
import logging
from pathlib import Path
from typing import Iterable, Optional, Tuple

from bookmark_launchers.errors import SourceNotFound

logger = logging.getLogger(__name__)


def locate_bookmarks_file(candidates: Iterable[Tuple[str, Path]]) -> Optional[Path]:
    """Return the first candidate bookmarks file that exists.

    Args:
        candidates: (label, path) pairs in priority order

    Returns:
        Path of the selected bookmarks file, or None if none exist
    """
    for label, path in candidates:
        if path.exists():
            logger.info("Using %s bookmarks: %s", label, path)
            return path
    return None


def require_bookmarks_file(candidates: Iterable[Tuple[str, Path]]) -> Path:
    """Like locate_bookmarks_file, but raise when nothing is found.

    Raises:
        SourceNotFound: If no candidate path exists
    """
    candidates = list(candidates)
    path = locate_bookmarks_file(candidates)
    if path is None:
        tried = ", ".join(str(p) for _, p in candidates) or "<none>"
        raise SourceNotFound(f"No bookmarks file found (tried: {tried})")
    return path
