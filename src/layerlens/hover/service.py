"""Hover query orchestration.

Resolves "what is under cursor P on this line" by running the lexical scanner,
waiting for the workspace index, and ranking candidates. Absence of a match
is a normal result; nothing here raises to the caller for missing data.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

import structlog

from layerlens.core.logging import clear_query_id, set_query_id
from layerlens.hover.models import KeywordHover, NameHover, NotApplicable, QueryResult, QueryStage
from layerlens.index.extraction import decode_text
from layerlens.index.lexical import extract_names, find_prelude_end, locate_keyword
from layerlens.index.ranking import pick_best
from layerlens.index.workspace import WorkspaceIndex

logger = structlog.get_logger()


class HoverService:
    """Answers hover queries against one WorkspaceIndex."""

    def __init__(self, index: WorkspaceIndex) -> None:
        self._index = index

    @property
    def index(self) -> WorkspaceIndex:
        return self._index

    async def hover(self, line_text: str, cursor: int) -> QueryResult:
        """Structured hover result for ``cursor`` (a code-point offset) on ``line_text``."""
        set_query_id()
        try:
            return await self._resolve(line_text, cursor)
        finally:
            clear_query_id()

    async def _resolve(self, line_text: str, cursor: int) -> QueryResult:
        log = logger.bind(cursor=cursor)
        log.debug("hover_stage", stage=QueryStage.LOCATING_TOKEN.value)

        keyword = locate_keyword(line_text)
        if keyword is None:
            return self._done(log, NotApplicable())
        prelude_end = find_prelude_end(line_text, keyword.end)
        if not keyword.start <= cursor <= prelude_end:
            return self._done(log, NotApplicable())

        if keyword.contains(cursor):
            return self._done(log, KeywordHover(span=keyword))

        local_names = extract_names(line_text, keyword.end, prelude_end)
        hit = next((t for t in local_names if t.span.contains(cursor)), None)
        if hit is None:
            return self._done(log, NotApplicable())

        log.debug("hover_stage", stage=QueryStage.AWAITING_INDEX.value, name=hit.name)
        await self._index.ensure_fresh()

        log.debug("hover_stage", stage=QueryStage.RANKING.value, name=hit.name)
        best = pick_best(hit.name, self._index.current_snapshot())

        result = NameHover(
            name=hit.name,
            span=hit.span,
            matched_order=best,
            local_fallback_order=tuple(t.name for t in local_names),
        )
        return self._done(log, result)

    def _done(self, log: structlog.stdlib.BoundLogger, result: QueryResult) -> QueryResult:
        log.debug("hover_resolved", stage=QueryStage.DONE.value, kind=result.kind)
        return result

    async def hover_at(self, file_path: Path, line: int, column: int) -> QueryResult:
        """Hover for a zero-based (line, column) in a file on disk.

        Lines are split on ``\\n`` only and a BOM is dropped, the same way the
        workspace scan numbers declarations. Missing files or lines past the
        end are NotApplicable.
        """
        loop = asyncio.get_running_loop()
        try:
            data = await loop.run_in_executor(None, file_path.read_bytes)
            text = decode_text(data)
        except (OSError, UnicodeDecodeError) as e:
            logger.debug("hover_file_unreadable", file=str(file_path), error=str(e))
            return NotApplicable()
        lines = text.split("\n")
        if not 0 <= line < len(lines):
            return NotApplicable()
        return await self.hover(lines[line].removesuffix("\r"), column)
