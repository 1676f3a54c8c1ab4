"""Save watcher using watchfiles for async filesystem monitoring.

Design:
- watchfiles reports batches of changed paths under the project root
- Batches are filtered to stylesheet files and directories outside excluded ones
- Any relevant batch fires on_change() once; debouncing lives in the index
"""

from __future__ import annotations

import asyncio
import contextlib
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from pathlib import Path

import structlog
from watchfiles import Change, awatch

from layerlens.config.models import IndexConfig
from layerlens.files.source import is_excluded_dir, matches_any

logger = structlog.get_logger()


def _relative_posix(root: Path, path: Path) -> str | None:
    try:
        return path.relative_to(root).as_posix()
    except ValueError:
        return None


def is_relevant_change(root: Path, path: Path, config: IndexConfig) -> bool:
    """True if a change at ``path`` can alter the set of scanned stylesheets.

    That is a stylesheet the index would scan, or a directory (existing, or
    gone and extension-less) outside the excluded ones, since renaming or
    deleting a directory only reports the directory itself.
    """
    rel_path = _relative_posix(root, path)
    if rel_path is None or rel_path == ".":
        return False
    if matches_any(rel_path, config.exclude_globs) or is_excluded_dir(
        rel_path, config.exclude_globs
    ):
        return False
    if matches_any(rel_path, config.include_globs):
        return True
    return path.is_dir() or (not path.exists() and not path.suffix)


@dataclass
class SaveWatcher:
    """Fires ``on_change`` when stylesheets, or directories that may hold them, change."""

    root: Path
    on_change: Callable[[], None]
    config: IndexConfig = field(default_factory=IndexConfig)

    _watch_task: asyncio.Task[None] | None = field(default=None, init=False)
    _stop_event: asyncio.Event = field(default_factory=asyncio.Event, init=False)

    @property
    def running(self) -> bool:
        return self._watch_task is not None and not self._watch_task.done()

    async def start(self) -> None:
        """Start watching for file changes."""
        if self._watch_task is not None:
            return
        self._stop_event.clear()
        self._watch_task = asyncio.create_task(self._watch_loop())
        logger.info("save_watcher_started", root=str(self.root))

    async def stop(self) -> None:
        """Stop watching for file changes."""
        self._stop_event.set()
        if self._watch_task is not None:
            self._watch_task.cancel()
            with contextlib.suppress(asyncio.CancelledError, asyncio.TimeoutError):
                await asyncio.wait_for(self._watch_task, timeout=2.0)
            self._watch_task = None
        logger.info("save_watcher_stopped")

    def handle_changes(self, changes: Iterable[tuple[Change, str]]) -> bool:
        """Forward a batch to on_change if it touches a relevant file.

        Returns True when on_change was fired.
        """
        relevant = [
            path_str
            for _change, path_str in changes
            if is_relevant_change(self.root, Path(path_str), self.config)
        ]
        if not relevant:
            return False
        logger.debug("stylesheets_changed", count=len(relevant), sample=relevant[:5])
        self.on_change()
        return True

    async def _watch_loop(self) -> None:
        while not self._stop_event.is_set():
            try:
                async for changes in awatch(
                    self.root,
                    stop_event=self._stop_event,
                    ignore_permission_denied=True,
                ):
                    self.handle_changes(changes)
            except asyncio.CancelledError:
                raise
            except Exception as e:
                if self._stop_event.is_set():
                    return
                logger.error("watcher_error", error=str(e))
                # Brief backoff before retry
                await asyncio.sleep(1.0)
