"""Tests for CLI commands."""

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from tokensync.cli import app


@pytest.fixture
def cli_runner():
    """Return a CLI test runner."""
    return CliRunner()


@pytest.fixture
def test_project(tmp_path: Path, flat_tokens):
    """Create a temporary project with tokens and a config file."""
    (tmp_path / "design").mkdir()
    (tmp_path / "design" / "tokens.json").write_text(json.dumps(flat_tokens), encoding="utf-8")

    config = tmp_path / "design-tokens.toml"
    config.write_text(
        """
[tokens]
input = "design/tokens.json"

[output]
css = "build/tokens.css"
tailwind = "build/tailwind.config.js"
flutter = "build/design_tokens.dart"
"""
    )
    return tmp_path


def invalid_project(tmp_path: Path) -> Path:
    (tmp_path / "tokens.json").write_text(json.dumps({"spacing": {"sm": "0.5rem"}}))
    config = tmp_path / "design-tokens.json"
    config.write_text(json.dumps({"output": {"css": "out/tokens.css", "tailwind": None}}))
    return config


def test_version(cli_runner: CliRunner):
    result = cli_runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert "design-tokens-sync version" in result.stdout


def test_validate_command_success(cli_runner: CliRunner, test_project: Path):
    """Valid tokens exit 0 and print a summary."""
    result = cli_runner.invoke(app, ["validate", "-c", str(test_project / "design-tokens.toml")])
    assert result.exit_code == 0
    assert "4 categories, 31 tokens, 0 error(s)" in result.stdout


def test_validate_command_with_errors(cli_runner: CliRunner, tmp_path: Path):
    """Invalid tokens exit 1 with ERROR lines."""
    config = invalid_project(tmp_path)
    result = cli_runner.invoke(app, ["validate", "--config", str(config)])
    assert result.exit_code == 1
    assert "ERROR: Missing required token category: colors" in result.output


def test_validate_json_format(cli_runner: CliRunner, test_project: Path):
    result = cli_runner.invoke(
        app, ["validate", "-c", str(test_project / "design-tokens.toml"), "--format", "json"]
    )
    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert data["isValid"] is True
    assert data["summary"]["validatedTokens"] == 31


def test_validate_input_override(cli_runner: CliRunner, test_project: Path, tmp_path: Path):
    other = tmp_path / "other.json"
    other.write_text(json.dumps({"spacing": {"sm": "0.5rem"}}))

    result = cli_runner.invoke(
        app,
        ["validate", "-c", str(test_project / "design-tokens.toml"), "--input", str(other)],
    )
    assert result.exit_code == 1


def test_validate_missing_tokens_file(cli_runner: CliRunner, tmp_path: Path):
    config = tmp_path / "design-tokens.json"
    config.write_text(json.dumps({"tokens": {"input": "missing.json"}}))

    result = cli_runner.invoke(app, ["validate", "-c", str(config)])
    assert result.exit_code == 1
    assert "Tokens file not found" in result.output


def test_invalid_config(cli_runner: CliRunner, tmp_path: Path):
    config = tmp_path / "design-tokens.json"
    config.write_text(json.dumps({"output": {"sketch": "out.sketch"}}))

    result = cli_runner.invoke(app, ["validate", "-c", str(config)])
    assert result.exit_code == 1
    assert "Config error" in result.output


def test_sync_command_writes_outputs(cli_runner: CliRunner, test_project: Path):
    result = cli_runner.invoke(app, ["sync", "-c", str(test_project / "design-tokens.toml")])
    assert result.exit_code == 0
    assert "Generated files" in result.stdout
    for name in ("tokens.css", "tailwind.config.js", "design_tokens.dart"):
        assert (test_project / "build" / name).exists()


def test_sync_selected_target(cli_runner: CliRunner, test_project: Path):
    result = cli_runner.invoke(
        app, ["sync", "-c", str(test_project / "design-tokens.toml"), "-t", "flutter"]
    )
    assert result.exit_code == 0
    assert (test_project / "build" / "design_tokens.dart").exists()
    assert not (test_project / "build" / "tokens.css").exists()


def test_sync_unknown_target(cli_runner: CliRunner, test_project: Path):
    result = cli_runner.invoke(
        app, ["sync", "-c", str(test_project / "design-tokens.toml"), "-t", "sketch"]
    )
    assert result.exit_code == 1
    assert "Unknown target 'sketch'" in result.output


def test_sync_json_format(cli_runner: CliRunner, test_project: Path):
    result = cli_runner.invoke(
        app, ["sync", "-c", str(test_project / "design-tokens.toml"), "-f", "json"]
    )
    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert set(data["written"]) == {"css", "tailwind", "flutter"}
    assert data["errors"] == {}
    assert data["report"]["isValid"] is True


def test_sync_blocks_on_validation_errors(cli_runner: CliRunner, tmp_path: Path):
    config = invalid_project(tmp_path)

    result = cli_runner.invoke(app, ["sync", "-c", str(config)])
    assert result.exit_code == 1
    assert "re-run with --force" in result.output
    assert not (tmp_path / "out" / "tokens.css").exists()


def test_sync_force(cli_runner: CliRunner, tmp_path: Path):
    config = invalid_project(tmp_path)

    result = cli_runner.invoke(app, ["sync", "-c", str(config), "--force"])
    assert result.exit_code == 0
    assert (tmp_path / "out" / "tokens.css").exists()


def test_inspect_command(cli_runner: CliRunner, test_project: Path):
    result = cli_runner.invoke(app, ["inspect", "-c", str(test_project / "design-tokens.toml")])
    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert data["colors"]["primary"]["500"] == "#3b82f6"
    assert "borderRadius" in data


def test_targets_command(cli_runner: CliRunner):
    result = cli_runner.invoke(app, ["targets"])
    assert result.exit_code == 0
    assert "Output targets" in result.stdout
    assert "flutter" in result.stdout


def test_config_command(cli_runner: CliRunner, test_project: Path):
    config = test_project / "design-tokens.toml"
    result = cli_runner.invoke(app, ["config", "-c", str(config)])
    assert result.exit_code == 0
    assert "Design Tokens Configuration" in result.stdout
    assert f"Source:   {config}" in result.stdout
    assert "Required: colors" in result.stdout
    assert "Resolve references: no" in result.stdout
