"""Hover queries: cursor position in, structured result out."""

from layerlens.hover.models import (
    KeywordHover,
    NameHover,
    NotApplicable,
    QueryResult,
    QueryStage,
)
from layerlens.hover.service import HoverService

__all__ = [
    "HoverService",
    "KeywordHover",
    "NameHover",
    "NotApplicable",
    "QueryResult",
    "QueryStage",
]
