"""Tests for monitor module."""
import asyncio
import logging
import os
import pytest

from watchfiles import Change

from bookmark_launchers.monitor import BookmarksMonitor, SettledChangeFilter, nearest_existing_ancestor


class TestSettledChangeFilter:
    def test_accepts_writes_to_watched_file(self, tmp_path):
        accept = SettledChangeFilter(tmp_path / "Bookmarks")
        assert accept(Change.modified, str(tmp_path / "Bookmarks"))
        assert accept(Change.added, str(tmp_path / "Bookmarks"))

    def test_rejects_deletes(self, tmp_path):
        accept = SettledChangeFilter(tmp_path / "Bookmarks")
        assert not accept(Change.deleted, str(tmp_path / "Bookmarks"))

    def test_rejects_other_files(self, tmp_path):
        accept = SettledChangeFilter(tmp_path / "Bookmarks")
        assert not accept(Change.modified, str(tmp_path / "Bookmarks.bak"))
        assert not accept(Change.added, str(tmp_path / "Preferences"))


class TestNearestExistingAncestor:
    def test_finds_closest_directory(self, tmp_path):
        assert nearest_existing_ancestor(tmp_path / "a" / "b" / "Bookmarks") == tmp_path

    def test_parent_exists(self, tmp_path):
        (tmp_path / "a").mkdir()
        assert nearest_existing_ancestor(tmp_path / "a" / "Bookmarks") == tmp_path / "a"


async def wait_for(event, timeout=10):
    await asyncio.wait_for(event.wait(), timeout=timeout)


@pytest.mark.asyncio
class TestBookmarksMonitor:
    async def test_start_and_stop(self, sample_bookmarks_path):
        monitor = BookmarksMonitor(sample_bookmarks_path, lambda: None)
        await monitor.start()
        assert monitor.is_running
        await monitor.stop()
        assert not monitor.is_running

    async def test_reports_write(self, sample_bookmarks_path):
        changed = asyncio.Event()
        monitor = BookmarksMonitor(sample_bookmarks_path, changed.set)
        await monitor.start()
        try:
            # Let the watcher thread come up before writing
            await asyncio.sleep(0.5)
            sample_bookmarks_path.write_text('{"roots": {}}')
            await wait_for(changed)
        finally:
            await monitor.stop()
        assert changed.is_set()

    async def test_reports_replace_by_rename(self, sample_bookmarks_path):
        changed = asyncio.Event()
        monitor = BookmarksMonitor(sample_bookmarks_path, changed.set)
        await monitor.start()
        try:
            await asyncio.sleep(0.5)
            temp = sample_bookmarks_path.with_name("Bookmarks.tmp")
            temp.write_text('{"roots": {}}')
            os.replace(temp, sample_bookmarks_path)
            await wait_for(changed)
        finally:
            await monitor.stop()
        assert changed.is_set()

    async def test_waits_for_missing_profile_directory(self, tmp_path, caplog):
        bookmarks_path = tmp_path / "vivaldi" / "Default" / "Bookmarks"
        changed = asyncio.Event()
        monitor = BookmarksMonitor(bookmarks_path, changed.set)

        with caplog.at_level(logging.WARNING):
            await monitor.start()
            await asyncio.sleep(0.5)
        try:
            assert monitor.is_running
            assert "does not exist yet" in caplog.text
            assert not changed.is_set()

            bookmarks_path.parent.mkdir(parents=True)
            bookmarks_path.write_text('{"roots": {}}')
            await wait_for(changed)

            # Later writes are seen through the profile directory watch
            changed.clear()
            await asyncio.sleep(0.5)
            bookmarks_path.write_text('{"roots": {"other": {}}}')
            await wait_for(changed)
        finally:
            await monitor.stop()
        assert not monitor.is_running

    async def test_stop_while_waiting_for_directory(self, tmp_path):
        monitor = BookmarksMonitor(tmp_path / "missing" / "Bookmarks", lambda: None)
        await monitor.start()
        await asyncio.sleep(0.2)
        await monitor.stop()
        assert not monitor.is_running
