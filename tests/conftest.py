"""Shared fixtures for tests."""
import copy
import json
import pytest
from pathlib import Path

from bookmark_launchers.config import Config, multi_browser_variant, simple_variant


SAMPLE_BOOKMARKS = {
    "checksum": "test",
    "roots": {
        "bookmark_bar": {
            "children": [
                {
                    "id": "1",
                    "name": "Python Docs",
                    "type": "url",
                    "url": "https://docs.python.org"
                },
                {
                    "id": "2",
                    "name": "Work",
                    "type": "folder",
                    "children": [
                        {
                            "id": "3",
                            "name": "Jira Board",
                            "type": "url",
                            "url": "https://jira.example.com/board"
                        },
                        {
                            "id": "4",
                            "name": "Confluence",
                            "type": "url",
                            "url": "https://confluence.example.com"
                        }
                    ]
                },
                {
                    "id": "5",
                    "name": "Tutorials",
                    "type": "folder",
                    "children": [
                        {
                            "id": "6",
                            "name": "SQLite Guide",
                            "type": "url",
                            "url": "https://sqlite.org/guide"
                        }
                    ]
                }
            ],
            "id": "0",
            "name": "Bookmarks Bar",
            "type": "folder"
        },
        "other": {
            "children": [
                {
                    "id": "7",
                    "name": "Stack Overflow",
                    "type": "url",
                    "url": "https://stackoverflow.com"
                }
            ],
            "id": "100",
            "name": "Other Bookmarks",
            "type": "folder"
        },
        "synced": {
            "children": [],
            "id": "200",
            "name": "Mobile Bookmarks",
            "type": "folder"
        }
    },
    "version": 1
}


def write_bookmarks(path: Path, data: dict) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=3), encoding="utf-8")
    return path


@pytest.fixture
def sample_bookmarks_data():
    """A fresh copy of the sample bookmarks document."""
    return copy.deepcopy(SAMPLE_BOOKMARKS)


@pytest.fixture
def sample_bookmarks_path(tmp_path):
    """Create a temporary bookmarks file with sample data."""
    return write_bookmarks(tmp_path / "profile" / "Bookmarks", SAMPLE_BOOKMARKS)


@pytest.fixture
def applications_dir(tmp_path):
    return tmp_path / "applications"


@pytest.fixture
def simple_config(tmp_path, sample_bookmarks_path, applications_dir):
    """Simple variant reading the sample file, with short timers."""
    variant = simple_variant(tmp_path)
    variant.sources = [("Test", sample_bookmarks_path)]
    return Config(
        variant=variant,
        applications_dir=applications_dir,
        debounce_delay=0.05,
        refresh_delay=0.05,
    )


@pytest.fixture
def multi_config(tmp_path, sample_bookmarks_path, applications_dir):
    """Multi-browser variant whose second candidate is the sample file."""
    variant = multi_browser_variant(tmp_path)
    variant.sources = [
        ("Missing", tmp_path / "missing" / "Bookmarks"),
        ("Test", sample_bookmarks_path),
    ]
    return Config(
        variant=variant,
        applications_dir=applications_dir,
        debounce_delay=0.05,
        refresh_delay=0.05,
    )


class FakeMonitor:
    """Stands in for BookmarksMonitor; tests fire on_change by hand."""

    def __init__(self, path, on_change):
        self.path = path
        self.on_change = on_change
        self.started = False
        self.stopped = False

    async def start(self):
        self.started = True

    async def stop(self):
        self.stopped = True


@pytest.fixture
def monitors():
    """List that collects every FakeMonitor created through fake_monitor_factory."""
    return []


@pytest.fixture
def fake_monitor_factory(monitors):
    def factory(path, on_change):
        monitor = FakeMonitor(path, on_change)
        monitors.append(monitor)
        return monitor
    return factory
