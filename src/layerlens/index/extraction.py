"""Declaration extraction - find every ``@layer a, b, c;`` statement in a file.

The whole file text is scanned at once (statements may span lines). Block
forms (``@layer x { ... }``) never match because the name list stops at
``{``. Statements whose name list is empty after trimming are dropped and
scanning continues.
"""

from __future__ import annotations

import re
from collections.abc import Iterator

from layerlens.config.constants import LAYER_KEYWORD, MAX_FILE_BYTES_DEFAULT, PREVIEW_MAX_CHARS
from layerlens.index.models import DeclaredOrder, FileScan, SkipReason, SourceLocation

STATEMENT_RE = re.compile(re.escape(LAYER_KEYWORD) + r"\s+([^;{]+);", re.IGNORECASE)

_WHITESPACE_RE = re.compile(r"\s+")


def parse_name_list(list_text: str) -> tuple[str, ...]:
    """Split on commas, trim, drop empties, keep the first occurrence of each name."""
    seen: dict[str, None] = {}
    for part in list_text.split(","):
        name = part.strip()
        if name:
            seen.setdefault(name, None)
    return tuple(seen)


def line_and_column(text: str, index: int) -> tuple[int, int]:
    """Zero-based (line, column) of ``index``, counting ``\\n`` only."""
    line = text.count("\n", 0, index)
    last_newline = text.rfind("\n", 0, index)
    return line, index - (last_newline + 1)


def make_preview(statement: str) -> str:
    """Collapse whitespace, trim, and cut at PREVIEW_MAX_CHARS."""
    return _WHITESPACE_RE.sub(" ", statement).strip()[:PREVIEW_MAX_CHARS]


def iter_declarations(text: str, file_id: str) -> Iterator[DeclaredOrder]:
    for m in STATEMENT_RE.finditer(text):
        names = parse_name_list(m.group(1))
        if not names:
            continue
        line, column = line_and_column(text, m.start())
        yield DeclaredOrder(
            names=names,
            location=SourceLocation(file_id=file_id, line=line, column=column),
            preview=make_preview(m.group(0)),
        )


def extract_declarations(file_text: str, file_id: str = "") -> list[DeclaredOrder]:
    """All order declarations in ``file_text``, in source order."""
    return list(iter_declarations(file_text, file_id))


def decode_text(data: bytes) -> str:
    """Strict UTF-8 decode. A leading BOM is dropped.

    Raises:
        UnicodeDecodeError: If the bytes are not valid UTF-8.
    """
    return data.decode("utf-8-sig")


def scan_file(
    file_id: str,
    data: bytes,
    max_bytes: int = MAX_FILE_BYTES_DEFAULT,
) -> FileScan:
    """Scan raw file bytes. Never raises; size and decode failures become skips."""
    if len(data) > max_bytes:
        return FileScan(file_id=file_id, skipped=SkipReason.OVERSIZED)
    try:
        text = decode_text(data)
    except UnicodeDecodeError:
        return FileScan(file_id=file_id, skipped=SkipReason.UNDECODABLE)
    return FileScan(file_id=file_id, declarations=tuple(iter_declarations(text, file_id)))
