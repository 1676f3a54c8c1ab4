"""File enumeration and reads for the workspace scan.

Pure filesystem I/O. No index dependency. The index talks to a FileSource,
so editors can plug in their own workspace API and tests can use an
in-memory fake.
"""

from __future__ import annotations

import asyncio
import fnmatch
import os
import re
from collections.abc import Sequence
from pathlib import Path
from typing import Protocol, runtime_checkable

from layerlens.core.errors import IndexScanError

_BRACE_RE = re.compile(r"\{([^{}]*)\}")


@runtime_checkable
class FileSource(Protocol):
    """Directory-glob-and-read service consumed by WorkspaceIndex."""

    async def find_files(
        self,
        include: Sequence[str],
        exclude: Sequence[str],
        max_results: int,
    ) -> list[str]:
        """File identifiers matching ``include`` and not ``exclude``, in a stable order."""
        ...

    async def read_file(self, file_id: str, max_bytes: int | None = None) -> bytes:
        """Raw file contents. May raise OSError.

        With ``max_bytes`` set, at most ``max_bytes + 1`` bytes are returned,
        which is enough for the caller to tell that the file is too large.
        """
        ...


def expand_braces(pattern: str) -> list[str]:
    """Expand ``{a,b}`` alternatives: ``*.{css,scss}`` -> ``*.css``, ``*.scss``."""
    m = _BRACE_RE.search(pattern)
    if m is None:
        return [pattern]
    head, tail = pattern[: m.start()], pattern[m.end() :]
    expanded: list[str] = []
    for alt in m.group(1).split(","):
        expanded.extend(expand_braces(f"{head}{alt}{tail}"))
    return expanded


def glob_match(rel_path: str, pattern: str) -> bool:
    """Match a POSIX relative path against a ``**/``-style glob.

    ``fnmatch`` lets ``*`` cross ``/``, so ``**/x`` is tried both as written
    and with the leading ``**/`` removed to cover files at the root.
    """
    for pat in expand_braces(pattern):
        if fnmatch.fnmatchcase(rel_path, pat):
            return True
        if pat.startswith("**/") and fnmatch.fnmatchcase(rel_path, pat[3:]):
            return True
    return False


def matches_any(rel_path: str, patterns: Sequence[str]) -> bool:
    return any(glob_match(rel_path, p) for p in patterns)


def is_excluded_dir(rel_dir: str, exclude: Sequence[str]) -> bool:
    """True if anything inside ``rel_dir`` would be excluded (``**/name/**`` style)."""
    return matches_any(f"{rel_dir}/", exclude)


class LocalFileSource:
    """FileSource over the local filesystem rooted at ``root``."""

    def __init__(self, root: Path) -> None:
        self._root = root

    @property
    def root(self) -> Path:
        return self._root

    def _walk(self, include: Sequence[str], exclude: Sequence[str], max_results: int) -> list[str]:
        if not self._root.is_dir():
            raise IndexScanError.root_not_found(str(self._root))

        found: list[str] = []
        for dirpath, dirnames, filenames in os.walk(self._root):
            rel_dir = Path(dirpath).relative_to(self._root).as_posix()
            prefix = "" if rel_dir == "." else f"{rel_dir}/"
            # Prune in-place; sort so enumeration order is deterministic
            dirnames[:] = sorted(d for d in dirnames if not is_excluded_dir(f"{prefix}{d}", exclude))
            for filename in sorted(filenames):
                rel_path = f"{prefix}{filename}"
                if matches_any(rel_path, include) and not matches_any(rel_path, exclude):
                    found.append(rel_path)
                    if len(found) >= max_results:
                        return found
        return found

    async def find_files(
        self,
        include: Sequence[str],
        exclude: Sequence[str],
        max_results: int,
    ) -> list[str]:
        loop = asyncio.get_running_loop()
        try:
            return await loop.run_in_executor(None, self._walk, include, exclude, max_results)
        except OSError as e:
            raise IndexScanError.enumeration_failed(str(self._root), str(e)) from e

    def resolve(self, file_id: str) -> Path:
        return self._root / file_id

    def _read_bounded(self, file_id: str, max_bytes: int | None) -> bytes:
        path = self.resolve(file_id)
        if max_bytes is None:
            return path.read_bytes()
        with path.open("rb") as f:
            return f.read(max_bytes + 1)

    async def read_file(self, file_id: str, max_bytes: int | None = None) -> bytes:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self._read_bounded, file_id, max_bytes)
