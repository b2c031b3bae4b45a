"""
Token commands: validate, sync, inspect.
"""

from __future__ import annotations

import asyncio
import json
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from ..core.errors import TokenSyncError, TokenValidationError
from ..core.ir.report import SyncResult, ValidationReport
from .utils import load_cli_config, print_human_diagnostics

console = Console()

ConfigOption = typer.Option(None, "--config", "-c", help="Path to a config file")
InputOption = typer.Option(None, "--input", "-i", help="Tokens file (overrides config)")
FormatOption = typer.Option("human", "--format", "-f", help="Output format: 'human' or 'json'")


def _print_summary(report: ValidationReport) -> None:
    summary = report.summary
    typer.echo(
        f"\n{summary.total_categories} categories, {summary.validated_tokens} tokens, "
        f"{summary.error_count} error(s), {summary.warning_count} warning(s)"
    )


def _print_sync_result(result: SyncResult) -> None:
    if result.results:
        table = Table(title="Generated files")
        table.add_column("Target", style="cyan")
        table.add_column("Path")
        for name, generated in result.results.items():
            table.add_row(name, str(generated.path))
        console.print(table)

    for name, message in result.errors.items():
        typer.echo(f"ERROR: {name}: {message}", err=True)


def validate_command(
    config: Path | None = ConfigOption,
    input: Path | None = InputOption,
    format: str = FormatOption,
) -> None:
    """
    Validate the tokens file against the configured rules.

    Exits 1 when there are errors; warnings alone exit 0.
    """
    cfg = load_cli_config(config, input)
    pipeline = cfg.pipeline()

    try:
        report = asyncio.run(pipeline.validate())
    except TokenSyncError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    if format == "json":
        typer.echo(report.model_dump_json(by_alias=True, indent=2))
    else:
        print_human_diagnostics(report.errors, report.warnings)
        _print_summary(report)

    if not report.is_valid:
        raise typer.Exit(code=1)


def sync_command(
    config: Path | None = ConfigOption,
    input: Path | None = InputOption,
    force: bool = typer.Option(False, "--force", help="Generate even if validation fails"),
    target: list[str] | None = typer.Option(
        None,
        "--target",
        "-t",
        help="Target to generate (repeatable); defaults to every configured output",
    ),
    format: str = FormatOption,
) -> None:
    """
    Validate the tokens and generate every configured output.

    Examples:
        design-tokens-sync sync                     # All configured outputs
        design-tokens-sync sync -t css -t flutter   # Selected targets
        design-tokens-sync sync --force             # Ignore validation errors
    """
    cfg = load_cli_config(config, input)
    pipeline = cfg.pipeline()

    try:
        result = asyncio.run(pipeline.sync(force=force, targets=target or None))
    except TokenValidationError as e:
        print_human_diagnostics(e.report.errors, e.report.warnings)
        typer.echo("\nFix the errors above or re-run with --force.", err=True)
        raise typer.Exit(code=1)
    except TokenSyncError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    if format == "json":
        data = {
            "report": result.report.model_dump(by_alias=True) if result.report else None,
            "written": {name: str(r.path) for name, r in result.results.items()},
            "errors": result.errors,
        }
        typer.echo(json.dumps(data, indent=2))
    else:
        if result.report and result.report.warnings:
            print_human_diagnostics([], result.report.warnings)
        _print_sync_result(result)

    if not result.ok:
        raise typer.Exit(code=1)


def inspect_command(
    config: Path | None = ConfigOption,
    input: Path | None = InputOption,
) -> None:
    """
    Print the normalized token set as JSON.
    """
    cfg = load_cli_config(config, input)
    pipeline = cfg.pipeline()

    try:
        tokens = asyncio.run(pipeline.load())
    except TokenSyncError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    typer.echo(json.dumps(tokens.to_json_dict(), indent=2, ensure_ascii=False))
