"""
Project commands: watch, targets, config.
"""

from __future__ import annotations

import time
from datetime import datetime
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from ..core.errors import TokenSyncError
from ..core.generators import TARGETS
from ..core.ir.report import SyncResult
from ..watcher import TokenWatcher
from .tokens import ConfigOption
from .utils import load_cli_config

console = Console()


def _report_sync(result: SyncResult | None, error: TokenSyncError | None) -> None:
    stamp = datetime.now().strftime("%H:%M:%S")
    if error is not None:
        typer.echo(f"[{stamp}] Sync failed: {error.message}", err=True)
        report = getattr(error, "report", None)
        if report is not None:
            for err in report.errors:
                typer.echo(f"  ERROR: {err}", err=True)
    elif result is not None:
        typer.echo(f"[{stamp}] Sync completed: {len(result.written_paths)} file(s) written")
        for name, message in result.errors.items():
            typer.echo(f"  ERROR: {name}: {message}", err=True)


def watch_command(
    config: Path | None = ConfigOption,
    force: bool = typer.Option(False, "--force", help="Generate even if validation fails"),
) -> None:
    """
    Watch the tokens file and re-sync on every change.

    Press Ctrl+C to stop.
    """
    cfg = load_cli_config(config)
    watcher = TokenWatcher(
        cfg.pipeline(),
        force=force,
        poll_interval=cfg.watch.poll_interval,
        debounce=cfg.watch.debounce,
        on_sync=_report_sync,
    )

    watcher.sync_now()
    watcher.start()
    typer.echo(f"Watching {watcher.path} for changes (Ctrl+C to stop)")

    try:
        while watcher.running:
            time.sleep(0.5)
    except KeyboardInterrupt:
        typer.echo("\nStopping watch mode...")
    finally:
        watcher.stop()


def targets_command() -> None:
    """
    List the available output targets.
    """
    table = Table(title="Output targets")
    table.add_column("Target", style="cyan")
    table.add_column("Description")
    table.add_column("Default path", style="dim")
    for descriptor in TARGETS.values():
        table.add_row(descriptor.name, descriptor.label, descriptor.default_path)
    console.print(table)


def config_command(config: Path | None = ConfigOption) -> None:
    """
    Show the resolved configuration.
    """
    cfg = load_cli_config(config)

    typer.secho("Design Tokens Configuration", bold=True)
    typer.echo(f"  Source:   {cfg.source or 'defaults'}")
    typer.echo(f"  Input:    {cfg.input_path}")
    typer.echo(f"  Required: {', '.join(cfg.tokens.validation.required)}")
    typer.echo(f"  Optional: {', '.join(cfg.tokens.validation.optional)}")
    typer.echo(f"  Resolve references: {'yes' if cfg.tokens.resolve_references else 'no'}")
    typer.echo(
        f"  Watch:    poll every {cfg.watch.poll_interval}s, debounce {cfg.watch.debounce}s"
    )

    table = Table(title="Outputs")
    table.add_column("Target", style="cyan")
    table.add_column("Path")
    for name, path in cfg.output_paths().items():
        table.add_row(name, str(path))
    console.print(table)
