"""Root conftest.py for test configuration.

Ensures local src/ directory takes priority over any installed packages and
provides an in-memory FileSource shared by index and hover tests.
"""

import asyncio
import sys
from collections.abc import Callable, Sequence
from pathlib import Path

import pytest

# Insert local src directory at the beginning of sys.path
# This ensures that the local layerlens package is used, not any installed one
_src_dir = Path(__file__).parent.parent / "src"
if str(_src_dir) not in sys.path:
    sys.path.insert(0, str(_src_dir))

from layerlens.config.models import IndexConfig  # noqa: E402
from layerlens.files.source import matches_any  # noqa: E402
from layerlens.index.workspace import WorkspaceIndex  # noqa: E402


class FakeFileSource:
    """In-memory FileSource. Values that are exceptions are raised on read."""

    def __init__(self, files: dict[str, bytes | str | Exception]) -> None:
        self.files = files
        self.find_calls = 0
        self.read_calls: list[str] = []
        self.find_error: Exception | None = None
        self.read_delay = 0.0

    async def find_files(
        self,
        include: Sequence[str],
        exclude: Sequence[str],
        max_results: int,
    ) -> list[str]:
        self.find_calls += 1
        if self.find_error is not None:
            raise self.find_error
        found = [
            f
            for f in self.files
            if matches_any(f, include) and not matches_any(f, exclude)
        ]
        return found[:max_results]

    async def read_file(self, file_id: str, max_bytes: int | None = None) -> bytes:
        self.read_calls.append(file_id)
        if self.read_delay:
            await asyncio.sleep(self.read_delay)
        value = self.files[file_id]
        if isinstance(value, Exception):
            raise value
        if isinstance(value, str):
            value = value.encode("utf-8")
        return value if max_bytes is None else value[: max_bytes + 1]


@pytest.fixture
def fake_source() -> Callable[[dict[str, bytes | str | Exception]], FakeFileSource]:
    """Factory for in-memory file sources."""
    return FakeFileSource


@pytest.fixture
def make_index() -> Callable[..., tuple[WorkspaceIndex, FakeFileSource]]:
    """Build a WorkspaceIndex over in-memory files with a short debounce."""

    def _make(
        files: dict[str, bytes | str | Exception],
        **config: object,
    ) -> tuple[WorkspaceIndex, FakeFileSource]:
        source = FakeFileSource(files)
        index_config = IndexConfig(**{"debounce_sec": 0.02, **config})  # type: ignore[arg-type]
        index = WorkspaceIndex(root=Path("/project"), source=source, config=index_config)
        return index, source

    return _make
