"""Exceptions raised while turning bookmarks into launchers."""


class LauncherError(Exception):
    """Base class for all bookmark launcher failures."""


class SourceNotFound(LauncherError):
    """None of the candidate bookmarks files exist."""


class ParseError(LauncherError):
    """The bookmarks file could not be read or decoded."""


class WriteError(LauncherError):
    """A single desktop file could not be written."""


class DirectoryError(LauncherError):
    """The launcher directory could not be created or listed."""
