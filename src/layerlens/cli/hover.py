"""layerlens hover command - resolve the layer order under a cursor position."""

import asyncio
import json
from pathlib import Path

import click

from layerlens.cli.utils import (
    configure_project_logging,
    find_project_root,
    is_verbose,
    load_project_config,
)
from layerlens.files.source import LocalFileSource
from layerlens.hover.models import KeywordHover, NameHover, QueryResult
from layerlens.hover.service import HoverService
from layerlens.index.workspace import WorkspaceIndex


def _echo_result(result: QueryResult) -> None:
    if isinstance(result, KeywordHover):
        click.echo("@layer: declares cascade layers and fixes their relative priority.")
        click.echo("Names may be comma-separated and dotted (e.g. utilities.buttons).")
        return
    if not isinstance(result, NameHover):
        click.echo("No layer information at this position.")
        return

    click.echo(f"Layer: {result.name}")
    order = result.effective_order
    if result.position is None or len(order) < 2:
        click.echo("No declared order includes this layer.")
        return

    click.echo(f"Position: {result.position} / {len(order)}")
    click.echo(f"Declared order: {', '.join(order)}")
    target = result.jump_target
    if target is not None and result.matched_order is not None:
        click.echo(f"Declared in: {target.label} ({target.file_id})")
        click.echo(f"Preview: {result.matched_order.preview}")
    else:
        click.echo("Declared in: this line")


@click.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("line", type=click.IntRange(min=0))
@click.argument("column", type=click.IntRange(min=0))
@click.option(
    "--root",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=None,
    help="Project root (default: nearest directory with .layerlens or .git)",
)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def hover_command(
    ctx: click.Context,
    file: Path,
    line: int,
    column: int,
    root: Path | None,
    as_json: bool,
) -> None:
    """Show the declared layer order for a position in FILE.

    LINE and COLUMN are zero-based.
    """
    project_root = root.resolve() if root else find_project_root(file)
    config = load_project_config(project_root)
    configure_project_logging(config, verbose=is_verbose(ctx))
    index = WorkspaceIndex(
        root=project_root, source=LocalFileSource(project_root), config=config.index
    )
    service = HoverService(index)

    result = asyncio.run(service.hover_at(file.resolve(), line, column))

    if as_json:
        click.echo(json.dumps(result.to_dict()))
    else:
        _echo_result(result)
