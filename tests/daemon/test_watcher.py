"""Tests for daemon watcher module.

Tests cover:
- is_relevant_change() filtering
- SaveWatcher.handle_changes() batching
- SaveWatcher start/stop lifecycle against a real directory
"""

from __future__ import annotations

import asyncio
from pathlib import Path

import pytest
from watchfiles import Change

from layerlens.config.models import IndexConfig
from layerlens.daemon.watcher import SaveWatcher, is_relevant_change

ROOT = Path("/project")


class TestIsRelevantChange:
    """Tests for is_relevant_change function."""

    @pytest.mark.parametrize(
        ("path", "expected"),
        [
            (ROOT / "main.css", True),
            (ROOT / "styles" / "base.scss", True),
            (ROOT / "styles" / "legacy.sass", True),
            (ROOT / "README.md", False),
            (ROOT / "node_modules" / "lib" / "x.css", False),
            (ROOT / "dist" / "bundle.css", False),
            (ROOT / ".git" / "index", False),
            (Path("/elsewhere/main.css"), False),
        ],
    )
    def test_default_config(self, path: Path, expected: bool) -> None:
        assert is_relevant_change(ROOT, path, IndexConfig()) is expected

    def test_custom_include(self) -> None:
        config = IndexConfig(include_globs=["**/*.less"])
        assert is_relevant_change(ROOT, ROOT / "a.less", config)
        assert not is_relevant_change(ROOT, ROOT / "a.css", config)

    def test_existing_directory_is_relevant(self, tmp_path: Path) -> None:
        (tmp_path / "theme.v2").mkdir()
        assert is_relevant_change(tmp_path, tmp_path / "theme.v2", IndexConfig())

    def test_gone_extensionless_path_is_relevant(self, tmp_path: Path) -> None:
        assert is_relevant_change(tmp_path, tmp_path / "styles", IndexConfig())

    def test_existing_extensionless_file_is_ignored(self, tmp_path: Path) -> None:
        (tmp_path / "Makefile").write_text("all:\n")
        assert not is_relevant_change(tmp_path, tmp_path / "Makefile", IndexConfig())

    def test_excluded_directory_itself_is_ignored(self, tmp_path: Path) -> None:
        (tmp_path / "node_modules").mkdir()
        assert not is_relevant_change(tmp_path, tmp_path / "node_modules", IndexConfig())
        assert not is_relevant_change(tmp_path, tmp_path / "pkg" / "dist", IndexConfig())

    def test_root_itself_is_ignored(self, tmp_path: Path) -> None:
        assert not is_relevant_change(tmp_path, tmp_path, IndexConfig())


class TestHandleChanges:
    """Tests for SaveWatcher.handle_changes."""

    def _watcher(self) -> tuple[SaveWatcher, list[int]]:
        calls: list[int] = []
        watcher = SaveWatcher(root=ROOT, on_change=lambda: calls.append(1))
        return watcher, calls

    def test_relevant_batch_fires_once(self) -> None:
        # Given
        watcher, calls = self._watcher()
        changes = {
            (Change.modified, str(ROOT / "a.css")),
            (Change.added, str(ROOT / "b.scss")),
            (Change.deleted, str(ROOT / "c.sass")),
        }

        # When
        fired = watcher.handle_changes(changes)

        # Then
        assert fired is True
        assert calls == [1]

    def test_irrelevant_batch_ignored(self) -> None:
        watcher, calls = self._watcher()

        fired = watcher.handle_changes(
            [
                (Change.modified, str(ROOT / "app.ts")),
                (Change.added, str(ROOT / "node_modules" / "pkg" / "x.css")),
            ]
        )

        assert fired is False
        assert calls == []

    def test_deleted_stylesheet_is_relevant(self) -> None:
        watcher, calls = self._watcher()

        assert watcher.handle_changes([(Change.deleted, str(ROOT / "gone.css"))])
        assert calls == [1]

    def test_directory_rename_fires(self) -> None:
        """Renaming a stylesheet directory reports only the directory paths."""
        # Given
        watcher, calls = self._watcher()

        # When
        fired = watcher.handle_changes(
            [(Change.deleted, str(ROOT / "styles")), (Change.added, str(ROOT / "theme"))]
        )

        # Then
        assert fired is True
        assert calls == [1]


class TestSaveWatcherLifecycle:
    """SaveWatcher against a real directory."""

    @pytest.mark.asyncio
    async def test_not_running_before_start(self, tmp_path: Path) -> None:
        watcher = SaveWatcher(root=tmp_path, on_change=lambda: None)
        assert watcher.running is False

    @pytest.mark.asyncio
    async def test_start_and_stop(self, tmp_path: Path) -> None:
        watcher = SaveWatcher(root=tmp_path, on_change=lambda: None)

        await watcher.start()
        assert watcher.running is True

        await watcher.stop()
        assert watcher.running is False

    @pytest.mark.asyncio
    async def test_saving_stylesheet_fires_on_change(self, tmp_path: Path) -> None:
        # Given
        fired = asyncio.Event()
        watcher = SaveWatcher(root=tmp_path, on_change=fired.set)
        await watcher.start()
        await asyncio.sleep(0.3)

        try:
            # When
            (tmp_path / "main.css").write_text("@layer base;")

            # Then
            await asyncio.wait_for(fired.wait(), timeout=5.0)
        finally:
            await watcher.stop()
