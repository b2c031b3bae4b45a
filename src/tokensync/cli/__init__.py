"""
design-tokens-sync command line.

Commands:
- validate: Check the tokens file
- sync: Validate and generate every configured output
- watch: Re-sync whenever the tokens file changes
- inspect: Print the normalized token set
- targets: List available output targets
- config: Show the resolved configuration
"""

from __future__ import annotations

import typer

from .project import config_command, targets_command, watch_command
from .tokens import inspect_command, sync_command, validate_command
from .utils import configure_logging, get_version, version_callback

app = typer.Typer(
    help="Sync design tokens to CSS, Tailwind, TypeScript, SCSS and mobile platforms.",
    no_args_is_help=True,
)


@app.callback()
def main_callback(
    version: bool | None = typer.Option(
        None,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show version and environment information",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """design-tokens-sync global options."""
    configure_logging(verbose)


app.command(name="validate")(validate_command)
app.command(name="sync")(sync_command)
app.command(name="watch")(watch_command)
app.command(name="inspect")(inspect_command)
app.command(name="targets")(targets_command)
app.command(name="config")(config_command)


def main() -> None:
    app()


__all__ = ["app", "get_version", "main"]
