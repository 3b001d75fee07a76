"""Browser bookmarks exposed as launchable desktop applications."""

__version__ = "0.1.0"
