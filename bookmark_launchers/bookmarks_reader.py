"""Chromium-style bookmarks reader."""
import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, List

from bookmark_launchers.errors import ParseError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Bookmark:
    """A single URL bookmark, title and url exactly as stored by the browser."""
    title: str
    url: str


def load_bookmarks_file(bookmarks_path: Path) -> Dict[str, Any]:
    """Load a bookmarks JSON file.

    Args:
        bookmarks_path: Path to the bookmarks file

    Returns:
        Parsed JSON bookmarks data

    Raises:
        ParseError: If the file is missing, unreadable, not UTF-8 or not JSON
    """
    try:
        raw = bookmarks_path.read_bytes()
    except OSError as e:
        raise ParseError(f"Could not read {bookmarks_path}: {e}") from e

    try:
        data = json.loads(raw.decode("utf-8"))
    except UnicodeDecodeError as e:
        raise ParseError(f"{bookmarks_path} is not valid UTF-8: {e}") from e
    except json.JSONDecodeError as e:
        raise ParseError(f"{bookmarks_path} is not valid JSON: {e}") from e
    except RecursionError as e:
        raise ParseError(f"{bookmarks_path} is nested too deeply: {e}") from e

    if not isinstance(data, dict):
        raise ParseError(f"{bookmarks_path} does not contain a JSON object")

    return data


def extract_bookmarks(node: Any, bookmarks: List[Bookmark]) -> None:
    """Extract bookmarks from a bookmarks tree node, depth first.

    Args:
        node: Current node in the bookmarks tree
        bookmarks: List to accumulate bookmarks
    """
    stack = [node]
    while stack:
        current = stack.pop()
        if not isinstance(current, dict):
            continue

        if current.get("type") == "url":
            bookmarks.append(Bookmark(title=str(current.get("name", "")), url=str(current.get("url", ""))))
            continue

        children = current.get("children")
        if isinstance(children, list):
            # Reversed so the first child is visited first
            stack.extend(reversed(children))


def parse_bookmarks(data: Dict[str, Any], roots: Iterable[str]) -> List[Bookmark]:
    """Flatten the named roots of a parsed bookmarks document.

    Missing roots contribute nothing.
    """
    all_bookmarks: List[Bookmark] = []

    root_nodes = data.get("roots")
    if not isinstance(root_nodes, dict):
        return all_bookmarks

    for root_name in roots:
        if root_name in root_nodes:
            extract_bookmarks(root_nodes[root_name], all_bookmarks)

    return all_bookmarks


def read_bookmarks(bookmarks_path: Path, roots: Iterable[str] = ("bookmark_bar",)) -> List[Bookmark]:
    """Read all URL bookmarks below the given roots.

    Failures are logged and yield an empty list.

    Args:
        bookmarks_path: Path to the bookmarks file
        roots: Root folder keys to read, in order

    Returns:
        Bookmarks in document order (pre-order, root order first)
    """
    try:
        data = load_bookmarks_file(bookmarks_path)
    except ParseError as e:
        logger.error("Failed to load bookmarks: %s", e)
        return []

    return parse_bookmarks(data, roots)
