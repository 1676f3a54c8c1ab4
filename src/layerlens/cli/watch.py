"""layerlens watch command - keep the layer index fresh while files are saved."""

import asyncio
import contextlib
from pathlib import Path

import click
from rich.console import Console

from layerlens.cli.utils import configure_project_logging, is_verbose, load_project_config
from layerlens.daemon.watcher import SaveWatcher
from layerlens.files.source import LocalFileSource
from layerlens.index.workspace import IndexStatus, WorkspaceIndex

_POLL_SEC = 0.25


def _status_line(status: IndexStatus) -> str:
    if status.last_error:
        return f"[red]✗[/red] rebuild failed: {status.last_error}"
    duration = status.last_duration_sec or 0.0
    return (
        f"[green]✓[/green] {status.candidates} declaration(s) from "
        f"{status.files_scanned} file(s) in {duration:.2f}s"
    )


async def _run(index: WorkspaceIndex, watcher: SaveWatcher, console: Console) -> None:
    await watcher.start()
    index.schedule_rebuild()
    seen_generation = 0
    seen_error: str | None = None
    try:
        while True:
            await asyncio.sleep(_POLL_SEC)
            status = index.status
            if status.generation != seen_generation or status.last_error != seen_error:
                seen_generation = status.generation
                seen_error = status.last_error
                console.print(_status_line(status), highlight=False)
    finally:
        await watcher.stop()
        await index.stop()


@click.command()
@click.argument(
    "path", default=".", type=click.Path(exists=True, file_okay=False, path_type=Path)
)
@click.pass_context
def watch_command(ctx: click.Context, path: Path) -> None:
    """Rebuild the layer index whenever a stylesheet changes.

    PATH is the project root (default: current directory). Stop with Ctrl+C.
    """
    root = path.resolve()
    config = load_project_config(root)
    configure_project_logging(config, verbose=is_verbose(ctx))
    index = WorkspaceIndex(root=root, source=LocalFileSource(root), config=config.index)
    watcher = SaveWatcher(root=root, on_change=index.schedule_rebuild, config=config.index)
    console = Console(stderr=True)

    console.print(f"Watching {root} (Ctrl+C to stop)", highlight=False)
    with contextlib.suppress(KeyboardInterrupt):
        asyncio.run(_run(index, watcher, console))
