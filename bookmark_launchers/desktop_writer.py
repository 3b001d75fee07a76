"""Write bookmarks out as .desktop launcher files.

The target directory is owned by this module: every pass removes all
``.desktop`` files in it and writes one file per bookmark. Nothing is
diffed, so after a successful pass the directory mirrors the bookmark
list exactly. The delete-then-write sequence is not atomic.
"""
import logging
import re
from pathlib import Path
from typing import Iterable, List, Sequence

from bookmark_launchers.bookmarks_reader import Bookmark
from bookmark_launchers.config import DESKTOP_SUFFIX, POSITIONAL_NAMING, VariantConfig
from bookmark_launchers.errors import DirectoryError, WriteError

logger = logging.getLogger(__name__)

MAX_FILENAME_STEM = 50

_NON_ALNUM = re.compile(r"[^A-Za-z0-9]+")


# ---------------------------------------------------------------------------
# Naming
# ---------------------------------------------------------------------------

def positional_filename(prefix: str, index: int) -> str:
    return f"{prefix}-{index}{DESKTOP_SUFFIX}"


def sanitize_title(title: str, max_length: int = MAX_FILENAME_STEM) -> str:
    """Turn a bookmark title into a filename stem.

    Runs of non-alphanumeric characters collapse to a single ``-``.
    """
    stem = _NON_ALNUM.sub("-", title).strip("-")[:max_length].rstrip("-")
    return stem or "bookmark"


def desktop_filenames(bookmarks: Sequence[Bookmark], variant: VariantConfig) -> List[str]:
    """Generate one unique filename per bookmark, in order."""
    if variant.naming == POSITIONAL_NAMING:
        return [positional_filename(variant.file_prefix, i) for i in range(len(bookmarks))]

    names: List[str] = []
    seen = set()
    for bookmark in bookmarks:
        stem = sanitize_title(bookmark.title)
        candidate = stem
        n = 2
        while candidate in seen:
            suffix = f"-{n}"
            # Keep the suffixed stem within the length limit
            candidate = stem[:MAX_FILENAME_STEM - len(suffix)].rstrip("-") + suffix
            n += 1
        seen.add(candidate)
        names.append(candidate + DESKTOP_SUFFIX)
    return names


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------

def escape_value(value: str) -> str:
    """Escape a string value for a desktop entry key."""
    return (
        value.replace("\\", "\\\\")
        .replace("\n", "\\n")
        .replace("\r", "\\r")
        .replace("\t", "\\t")
    )


def quote_exec_argument(arg: str) -> str:
    """Quote one argument of an Exec= command line."""
    for ch in ("\\", '"', "`", "$"):
        arg = arg.replace(ch, "\\" + ch)
    # % starts a field code
    arg = arg.replace("%", "%%")
    return f'"{arg}"'


def display_name(bookmark: Bookmark, variant: VariantConfig) -> str:
    name = bookmark.title
    if variant.naming == POSITIONAL_NAMING:
        name = name.replace("/", "-")
    return name


def render_desktop_entry(bookmark: Bookmark, variant: VariantConfig) -> str:
    """Render the launcher file contents for a bookmark."""
    # Exec is escaped twice: once as a command line, once as a string value
    exec_line = escape_value(f"{variant.launch_command} {quote_exec_argument(bookmark.url)}")
    return (
        "[Desktop Entry]\n"
        "Type=Application\n"
        f"Name={escape_value(display_name(bookmark, variant))}\n"
        f"Exec={exec_line}\n"
        f"Icon={variant.icon}\n"
        f"Categories={variant.categories}\n"
    )


# ---------------------------------------------------------------------------
# Filesystem
# ---------------------------------------------------------------------------

def ensure_directory(target_dir: Path) -> None:
    """Create the launcher directory if needed.

    Raises:
        DirectoryError: If the directory cannot be created
    """
    try:
        target_dir.mkdir(mode=0o755, parents=True, exist_ok=True)
    except OSError as e:
        raise DirectoryError(f"Could not create {target_dir}: {e}") from e


def clear_desktop_files(target_dir: Path) -> int:
    """Delete every .desktop file directly inside target_dir.

    A missing or unreadable directory counts as nothing to delete.

    Returns:
        Number of files removed
    """
    try:
        entries = list(target_dir.iterdir())
    except FileNotFoundError:
        return 0
    except OSError as e:
        logger.warning("Could not list %s: %s", target_dir, e)
        return 0

    removed = 0
    for entry in entries:
        if not entry.name.endswith(DESKTOP_SUFFIX):
            continue
        try:
            entry.unlink()
            removed += 1
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning("Could not delete %s: %s", entry, e)
    return removed


def write_desktop_file(path: Path, contents: str) -> None:
    """Write one launcher file.

    Raises:
        WriteError: If the file cannot be written
    """
    try:
        path.write_text(contents, encoding="utf-8")
    except OSError as e:
        raise WriteError(f"Could not write {path}: {e}") from e


def write_desktop_files(target_dir: Path, bookmarks: Iterable[Bookmark], variant: VariantConfig) -> List[Path]:
    """Replace the launcher files in target_dir with one per bookmark.

    Args:
        target_dir: Directory holding generated launcher files
        bookmarks: Bookmarks to write, in order
        variant: Naming and launch settings

    Returns:
        Paths of the files that were written

    Raises:
        DirectoryError: If target_dir cannot be created
    """
    ensure_directory(target_dir)
    clear_desktop_files(target_dir)

    bookmarks = list(bookmarks)
    written: List[Path] = []
    for bookmark, filename in zip(bookmarks, desktop_filenames(bookmarks, variant)):
        path = target_dir / filename
        try:
            write_desktop_file(path, render_desktop_entry(bookmark, variant))
        except WriteError as e:
            logger.warning("Skipping bookmark %r: %s", bookmark.title, e)
            continue
        written.append(path)

    return written
