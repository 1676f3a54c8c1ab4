"""Index module - workspace-wide cascade layer order index.

Public API:
- WorkspaceIndex: rebuild / schedule_rebuild / ensure_fresh / current_snapshot
- pick_best: candidate ranking
- extract_declarations, scan_file: per-file declaration extraction
- locate_keyword, find_prelude_end, is_cursor_in_prelude, extract_names:
  single-line lexical scanning
"""

from layerlens.index.extraction import extract_declarations, scan_file
from layerlens.index.lexical import (
    extract_names,
    find_prelude_end,
    is_cursor_in_prelude,
    locate_keyword,
)
from layerlens.index.models import (
    CandidateSet,
    DeclaredOrder,
    FileScan,
    JumpTarget,
    NameToken,
    SkipReason,
    SourceLocation,
    Span,
)
from layerlens.index.ranking import pick_best
from layerlens.index.workspace import IndexState, IndexStatus, WorkspaceIndex

__all__ = [
    # Models
    "CandidateSet",
    "DeclaredOrder",
    "FileScan",
    "JumpTarget",
    "NameToken",
    "SkipReason",
    "SourceLocation",
    "Span",
    # Lexical
    "extract_names",
    "find_prelude_end",
    "is_cursor_in_prelude",
    "locate_keyword",
    # Extraction / ranking
    "extract_declarations",
    "pick_best",
    "scan_file",
    # Workspace
    "IndexState",
    "IndexStatus",
    "WorkspaceIndex",
]
