"""Structured hover results.

Renderers turn these into tooltips or terminal output; they never need to
re-run ranking.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from layerlens.index.models import DeclaredOrder, JumpTarget, Span


class QueryStage(str, Enum):
    """Stages a hover query passes through before it is done."""

    LOCATING_TOKEN = "locating_token"
    AWAITING_INDEX = "awaiting_index"
    RANKING = "ranking"
    DONE = "done"


@dataclass(frozen=True, slots=True)
class NotApplicable:
    """Cursor is not over the keyword or a layer name."""

    kind: str = "not_applicable"

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind}


@dataclass(frozen=True, slots=True)
class KeywordHover:
    """Cursor is over the ``@layer`` keyword itself."""

    span: Span
    kind: str = "keyword"

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, "start": self.span.start, "end": self.span.end}


@dataclass(frozen=True, slots=True)
class NameHover:
    """Cursor is over a layer name inside an ``@layer`` prelude."""

    name: str
    span: Span
    matched_order: DeclaredOrder | None
    local_fallback_order: tuple[str, ...]
    kind: str = "name"

    @property
    def effective_order(self) -> tuple[str, ...]:
        """The project declaration when one was found, else the names on this line."""
        if self.matched_order is not None:
            return self.matched_order.names
        return self.local_fallback_order

    @property
    def position(self) -> int | None:
        """One-based index of ``name`` in ``effective_order``."""
        try:
            return self.effective_order.index(self.name) + 1
        except ValueError:
            return None

    @property
    def jump_target(self) -> JumpTarget | None:
        if self.matched_order is None:
            return None
        return JumpTarget.from_order(self.matched_order)

    def to_dict(self) -> dict[str, Any]:
        target = self.jump_target
        return {
            "kind": self.kind,
            "name": self.name,
            "start": self.span.start,
            "end": self.span.end,
            "order": list(self.effective_order),
            "position": self.position,
            "matched": self.matched_order.to_dict() if self.matched_order else None,
            "local_order": list(self.local_fallback_order),
            "jump_target": target.to_dict() if target else None,
        }


QueryResult = NotApplicable | KeywordHover | NameHover
