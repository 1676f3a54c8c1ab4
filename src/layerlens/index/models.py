"""Value types for the layer-order index.

All offsets are Python ``str`` indices (Unicode code points). Lines and
columns are zero-based.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from enum import Enum
from pathlib import PurePosixPath
from typing import Any

# ============================================================================
# ENUMS
# ============================================================================


class SkipReason(str, Enum):
    """Why a file contributed no declarations to a rebuild."""

    UNREADABLE = "unreadable"
    OVERSIZED = "oversized"
    UNDECODABLE = "undecodable"


# ============================================================================
# LEXICAL TYPES
# ============================================================================


@dataclass(frozen=True, slots=True)
class Span:
    """Character range on one line. ``end`` is the index just past the token."""

    start: int
    end: int

    def contains(self, offset: int) -> bool:
        """Inclusive on both ends, so a cursor right after the token still hits."""
        return self.start <= offset <= self.end


@dataclass(frozen=True, slots=True)
class NameToken:
    """A layer name found on a line, with absolute offsets."""

    name: str
    start: int
    end: int

    @property
    def span(self) -> Span:
        return Span(self.start, self.end)


# ============================================================================
# DECLARATIONS
# ============================================================================


@dataclass(frozen=True, slots=True)
class SourceLocation:
    """Where a declaration statement starts."""

    file_id: str
    line: int
    column: int


@dataclass(frozen=True, slots=True)
class DeclaredOrder:
    """One ``@layer a, b, c;`` statement found in the project."""

    names: tuple[str, ...]
    location: SourceLocation
    preview: str

    def __post_init__(self) -> None:
        if not self.names:
            raise ValueError("DeclaredOrder requires at least one layer name")
        if len(set(self.names)) != len(self.names):
            raise ValueError(f"DeclaredOrder names must be distinct: {self.names!r}")

    def __len__(self) -> int:
        return len(self.names)

    def __contains__(self, name: object) -> bool:
        return name in self.names

    def position_of(self, name: str) -> int | None:
        """One-based position of ``name``, or None when absent."""
        try:
            return self.names.index(name) + 1
        except ValueError:
            return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "names": list(self.names),
            "file": self.location.file_id,
            "line": self.location.line,
            "column": self.location.column,
            "preview": self.preview,
        }


@dataclass(frozen=True, slots=True)
class CandidateSet(Sequence[DeclaredOrder]):
    """Every declaration from one workspace snapshot, in discovery order.

    Replaced wholesale by each rebuild; never patched in place.
    """

    declarations: tuple[DeclaredOrder, ...] = ()
    generation: int = 0
    files_scanned: int = 0
    files_skipped: int = 0

    @classmethod
    def empty(cls) -> CandidateSet:
        return cls()

    def __len__(self) -> int:
        return len(self.declarations)

    def __iter__(self) -> Iterator[DeclaredOrder]:
        return iter(self.declarations)

    def __getitem__(self, index: int) -> DeclaredOrder:  # type: ignore[override]
        return self.declarations[index]


@dataclass(frozen=True, slots=True)
class FileScan:
    """Outcome of scanning one file. ``skipped`` is set when nothing was read."""

    file_id: str
    declarations: tuple[DeclaredOrder, ...] = field(default=())
    skipped: SkipReason | None = None

    @property
    def ok(self) -> bool:
        return self.skipped is None


# ============================================================================
# NAVIGATION
# ============================================================================


@dataclass(frozen=True, slots=True)
class JumpTarget:
    """Destination for the "open declaration" action."""

    file_id: str
    line: int
    column: int

    @classmethod
    def from_order(cls, order: DeclaredOrder) -> JumpTarget:
        loc = order.location
        return cls(file_id=loc.file_id, line=loc.line, column=loc.column)

    @property
    def label(self) -> str:
        """Short ``file.scss:12`` label with a one-based line number."""
        name = PurePosixPath(self.file_id).name or "file"
        return f"{name}:{self.line + 1}"

    def to_dict(self) -> dict[str, Any]:
        return {"file": self.file_id, "line": self.line, "column": self.column}
