"""LayerLens CLI - layerlens command."""

import click

from layerlens import __version__
from layerlens.cli.hover import hover_command
from layerlens.cli.scan import scan_command
from layerlens.cli.watch import watch_command
from layerlens.core.logging import configure_logging


@click.group()
@click.version_option(version=__version__, prog_name="layerlens")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """LayerLens - find the declared order of CSS cascade layers in a project."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    configure_logging(level="DEBUG" if verbose else "WARNING")


cli.add_command(scan_command, name="scan")
cli.add_command(hover_command, name="hover")
cli.add_command(watch_command, name="watch")


if __name__ == "__main__":
    cli()
