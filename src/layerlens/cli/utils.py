"""CLI utilities."""

from pathlib import Path

import click

from layerlens.config.constants import CONFIG_DIR_NAME
from layerlens.config.loader import load_config
from layerlens.config.models import LayerLensConfig
from layerlens.core.errors import LayerLensError
from layerlens.core.logging import configure_logging

_ROOT_MARKERS = (CONFIG_DIR_NAME, ".git")


def find_project_root(start_path: Path | None = None) -> Path:
    """Find the project root from the given path.

    Walks up the directory tree looking for a .layerlens or .git directory.
    Falls back to the starting directory when neither is found.

    Args:
        start_path: Starting directory to search from (default: cwd)

    Returns:
        Path to project root
    """
    if start_path is None:
        start_path = Path.cwd()

    start = start_path.resolve()
    if start.is_file():
        start = start.parent

    current = start
    while True:
        if any((current / marker).exists() for marker in _ROOT_MARKERS):
            return current
        if current == current.parent:
            return start
        current = current.parent


def load_project_config(project_root: Path) -> LayerLensConfig:
    """Load config, turning config errors into a clean CLI failure."""
    try:
        return load_config(project_root)
    except LayerLensError as e:
        raise click.ClickException(str(e)) from e


def configure_project_logging(config: LayerLensConfig, *, verbose: bool = False) -> None:
    """Apply the project's logging outputs. ``-v`` forces DEBUG on every output."""
    logging_config = config.logging
    if verbose:
        logging_config = logging_config.model_copy(
            update={
                "level": "DEBUG",
                "outputs": [
                    output.model_copy(update={"level": "DEBUG"})
                    for output in logging_config.outputs
                ],
            }
        )
    configure_logging(config=logging_config)


def is_verbose(ctx: click.Context) -> bool:
    return bool((ctx.find_root().obj or {}).get("verbose", False))
