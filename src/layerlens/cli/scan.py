"""layerlens scan command - list every declared layer order in a project."""

import asyncio
import json
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from layerlens.cli.utils import configure_project_logging, is_verbose, load_project_config
from layerlens.files.source import LocalFileSource
from layerlens.index.models import CandidateSet
from layerlens.index.workspace import WorkspaceIndex


def _render_table(snapshot: CandidateSet) -> Table:
    table = Table(show_header=True, header_style="bold")
    table.add_column("Location", style="cyan", no_wrap=True)
    table.add_column("#", justify="right")
    table.add_column("Order")
    for order in snapshot:
        loc = order.location
        table.add_row(f"{loc.file_id}:{loc.line + 1}", str(len(order)), ", ".join(order.names))
    return table


@click.command()
@click.argument(
    "path", default=".", type=click.Path(exists=True, file_okay=False, path_type=Path)
)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def scan_command(ctx: click.Context, path: Path, as_json: bool) -> None:
    """Scan stylesheets and list every @layer order declaration.

    PATH is the project root (default: current directory).
    """
    root = path.resolve()
    config = load_project_config(root)
    configure_project_logging(config, verbose=is_verbose(ctx))
    index = WorkspaceIndex(root=root, source=LocalFileSource(root), config=config.index)

    snapshot = asyncio.run(index.rebuild())
    status = index.status
    if status.last_error:
        raise click.ClickException(f"Scan failed: {status.last_error}")

    if as_json:
        click.echo(
            json.dumps(
                {
                    "root": str(root),
                    "files_scanned": snapshot.files_scanned,
                    "files_skipped": snapshot.files_skipped,
                    "declarations": [order.to_dict() for order in snapshot],
                }
            )
        )
        return

    console = Console()
    if snapshot:
        console.print(_render_table(snapshot))
    console.print(
        f"{len(snapshot)} declaration(s) in {snapshot.files_scanned} file(s)"
        f", {snapshot.files_skipped} skipped",
        highlight=False,
    )
