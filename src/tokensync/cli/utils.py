"""
Shared CLI helpers: version flag, logging setup, config loading, diagnostics.
"""

from __future__ import annotations

import logging
import os
import platform
from pathlib import Path

import typer

from ..config import TokenSyncConfig, resolve_config
from ..core.errors import ConfigError

LOG_LEVEL_ENV = "TOKENSYNC_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def get_version() -> str:
    from tokensync import __version__

    return __version__


def version_callback(value: bool) -> None:
    """Display version and environment information."""
    if value:
        typer.echo(f"design-tokens-sync version {get_version()}")
        typer.echo("")
        typer.echo("Environment:")
        typer.echo(f"  Python:        {platform.python_implementation()} {platform.python_version()}")
        typer.echo(f"  Platform:      {platform.system()} {platform.release()}")
        raise typer.Exit()


def configure_logging(verbose: bool = False) -> None:
    """Configure root logging from ``--verbose`` or ``TOKENSYNC_LOG_LEVEL``."""
    if verbose:
        level = logging.DEBUG
    else:
        name = os.getenv(LOG_LEVEL_ENV, "WARNING").upper()
        level = getattr(logging, name, logging.WARNING)
    logging.basicConfig(level=level, format=LOG_FORMAT)


def load_cli_config(config: Path | None, input_path: Path | None = None) -> TokenSyncConfig:
    """Resolve config for a command, exiting with code 1 on config errors."""
    try:
        cfg = resolve_config(config)
    except ConfigError as e:
        typer.echo(f"Config error: {e}", err=True)
        raise typer.Exit(code=1)

    if input_path is not None:
        tokens = cfg.tokens.model_copy(update={"input": input_path.resolve()})
        cfg = cfg.model_copy(update={"tokens": tokens})
    return cfg


def print_human_diagnostics(errors: list[str], warnings: list[str]) -> None:
    """Print diagnostics in human-readable format."""
    if errors:
        typer.echo("Validation failed:\n", err=True)
        for err in errors:
            typer.echo(f"ERROR: {err}", err=True)

    if warnings:
        typer.echo("Validation warnings:\n", err=False)
        for warn in warnings:
            typer.echo(f"WARNING: {warn}", err=False)

    if not errors and not warnings:
        typer.echo("OK: tokens are valid.")
