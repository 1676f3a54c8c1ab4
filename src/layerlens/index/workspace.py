"""Workspace-wide layer-order index with debounced, non-blocking rebuilds.

Design:
- One WorkspaceIndex per project root; callers hold a reference to it
- A rebuild enumerates stylesheet files, reads them one at a time (each read
  is a suspension point), and builds a brand new CandidateSet
- The snapshot is swapped in a single assignment, so readers see either the
  old or the new complete set
- schedule_rebuild() cancels and re-arms a pending timer; it never cancels a
  rebuild that is already running
- Every rebuild, direct or debounced, waits for the one in flight, so swaps land
  in start order
- ensure_fresh() attaches to the latest rebuild and never raises
"""

from __future__ import annotations

import asyncio
import contextlib
import time
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

import structlog

from layerlens.config.models import IndexConfig
from layerlens.files.source import FileSource
from layerlens.index.extraction import scan_file
from layerlens.index.models import CandidateSet, DeclaredOrder, FileScan, SkipReason

logger = structlog.get_logger()


class IndexState(Enum):
    """Workspace index state."""

    IDLE = "idle"
    SCHEDULED = "scheduled"
    REBUILDING = "rebuilding"
    STOPPED = "stopped"


@dataclass
class IndexStatus:
    """Current index status."""

    state: IndexState
    generation: int
    candidates: int
    files_scanned: int = 0
    files_skipped: int = 0
    last_duration_sec: float | None = None
    last_error: str | None = None


@dataclass
class WorkspaceIndex:
    """Owns the CandidateSet for one project root."""

    root: Path
    source: FileSource
    config: IndexConfig = field(default_factory=IndexConfig)

    _snapshot: CandidateSet = field(default_factory=CandidateSet.empty, init=False)
    _state: IndexState = field(default=IndexState.IDLE, init=False)
    _generation: int = field(default=0, init=False)
    _debounce_task: asyncio.Task[None] | None = field(default=None, init=False)
    _rebuild_task: asyncio.Task[CandidateSet] | None = field(default=None, init=False)
    _last_duration: float | None = field(default=None, init=False)
    _last_error: str | None = field(default=None, init=False)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def current_snapshot(self) -> CandidateSet:
        return self._snapshot

    @property
    def status(self) -> IndexStatus:
        snapshot = self._snapshot
        return IndexStatus(
            state=self._state,
            generation=snapshot.generation,
            candidates=len(snapshot),
            files_scanned=snapshot.files_scanned,
            files_skipped=snapshot.files_skipped,
            last_duration_sec=self._last_duration,
            last_error=self._last_error,
        )

    # ------------------------------------------------------------------
    # Scheduling
    # ------------------------------------------------------------------

    def schedule_rebuild(self) -> None:
        """Start a rebuild after the quiet period, restarting the timer if one is pending."""
        if self._state == IndexState.STOPPED:
            return

        if self._debounce_task is not None and not self._debounce_task.done():
            self._debounce_task.cancel()

        loop = asyncio.get_running_loop()
        self._debounce_task = loop.create_task(self._debounced_start())
        if self._state == IndexState.IDLE:
            self._state = IndexState.SCHEDULED
        logger.debug("rebuild_scheduled", debounce_sec=self.config.debounce_sec)

    async def _debounced_start(self) -> None:
        try:
            await asyncio.sleep(self.config.debounce_sec)
        except asyncio.CancelledError:
            return
        self._start_rebuild()

    def _start_rebuild(self) -> asyncio.Task[CandidateSet]:
        previous = self._rebuild_task
        loop = asyncio.get_running_loop()
        self._rebuild_task = loop.create_task(self._chained_rebuild(previous))
        return self._rebuild_task

    async def _chained_rebuild(self, previous: asyncio.Task[CandidateSet] | None) -> CandidateSet:
        if previous is not None and not previous.done():
            await asyncio.wait([previous])
        return await self._scan_and_swap()

    async def ensure_fresh(self) -> None:
        """Wait for the most recently started rebuild, starting one if none ever ran."""
        task = self._rebuild_task
        if task is None:
            if self._state == IndexState.STOPPED:
                return
            task = self._start_rebuild()
        # shield: a cancelled query must not cancel the shared rebuild
        await asyncio.shield(task)

    # ------------------------------------------------------------------
    # Rebuild
    # ------------------------------------------------------------------

    async def rebuild(self) -> CandidateSet:
        """Scan the project now and return the new CandidateSet.

        The scan is queued behind any rebuild already in flight, and
        ensure_fresh() callers attach to it. Enumeration failures keep the
        previous snapshot and are recorded in ``status.last_error``; they are
        never raised to the caller. After stop() this returns the current
        snapshot unchanged.
        """
        if self._state == IndexState.STOPPED:
            return self._snapshot
        return await asyncio.shield(self._start_rebuild())

    async def _scan_and_swap(self) -> CandidateSet:
        if self._state == IndexState.STOPPED:
            return self._snapshot
        self._state = IndexState.REBUILDING
        started = time.monotonic()
        logger.info("rebuild_started", root=str(self.root))
        try:
            file_ids = await self.source.find_files(
                self.config.include_globs,
                self.config.exclude_globs,
                self.config.max_files,
            )
            scans = [await self._scan_one(file_id) for file_id in file_ids]
        except Exception as e:
            self._last_error = str(e)
            logger.error("rebuild_failed", root=str(self.root), error=str(e))
            return self._snapshot
        finally:
            self._last_duration = time.monotonic() - started
            self._settle_state()

        self._generation += 1
        self._snapshot = _aggregate(scans, self._generation)
        self._last_error = None
        logger.info(
            "rebuild_completed",
            generation=self._generation,
            files=self._snapshot.files_scanned,
            skipped=self._snapshot.files_skipped,
            candidates=len(self._snapshot),
            duration_sec=round(self._last_duration, 3),
        )
        return self._snapshot

    def _settle_state(self) -> None:
        if self._state == IndexState.STOPPED:
            return
        pending = self._debounce_task is not None and not self._debounce_task.done()
        self._state = IndexState.SCHEDULED if pending else IndexState.IDLE

    async def _scan_one(self, file_id: str) -> FileScan:
        try:
            data = await self.source.read_file(file_id, self.config.max_file_bytes)
        except Exception as e:
            logger.debug("file_read_failed", file=file_id, error=str(e))
            return FileScan(file_id=file_id, skipped=SkipReason.UNREADABLE)
        return scan_file(file_id, data, self.config.max_file_bytes)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def stop(self) -> None:
        """Cancel any pending timer and wait for the in-flight rebuild."""
        if self._debounce_task is not None and not self._debounce_task.done():
            self._debounce_task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._debounce_task
        if self._rebuild_task is not None and not self._rebuild_task.done():
            await asyncio.wait([self._rebuild_task])
        self._state = IndexState.STOPPED
        logger.debug("workspace_index_stopped", root=str(self.root))


def _aggregate(scans: list[FileScan], generation: int) -> CandidateSet:
    """Fold per-file outcomes into one CandidateSet.

    This is the single place where skipped files are discarded: an unreadable,
    oversized or undecodable file contributes nothing and is only logged.
    """
    declarations: list[DeclaredOrder] = []
    skipped = 0
    for scan in scans:
        if not scan.ok:
            skipped += 1
            logger.debug("file_skipped", file=scan.file_id, reason=scan.skipped.value)
            continue
        declarations.extend(scan.declarations)
    return CandidateSet(
        declarations=tuple(declarations),
        generation=generation,
        files_scanned=len(scans) - skipped,
        files_skipped=skipped,
    )
