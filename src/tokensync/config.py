"""
Configuration loading for design-tokens-sync.

Config is discovered next to the project, in order:

    design-tokens.toml
    design-tokens.yaml / design-tokens.yml
    .design-tokensrc.json
    design-tokens.json
    pyproject.toml  ([tool.design-tokens])

Relative paths in the config are resolved against the directory of the file
that declared them. Without any config file the defaults below apply,
relative to the working directory.
"""

from __future__ import annotations

import json
import logging
import tomllib
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .core.errors import ConfigError
from .core.generators import TARGETS, get_target
from .core.pipeline import TokenPipeline
from .core.validator import ValidatorConfig

logger = logging.getLogger(__name__)

CONFIG_FILES: tuple[str, ...] = (
    "design-tokens.toml",
    "design-tokens.yaml",
    "design-tokens.yml",
    ".design-tokensrc.json",
    "design-tokens.json",
)
PYPROJECT_FILE = "pyproject.toml"
PYPROJECT_TABLE = "design-tokens"


# =============================================================================
# Schema
# =============================================================================


class TokensSection(BaseModel):
    """Input file and validation rules."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    input: Path = Path("tokens.json")
    validation: ValidatorConfig = Field(default_factory=ValidatorConfig)
    resolve_references: bool = Field(default=False, alias="resolveReferences")


class OutputSection(BaseModel):
    """Output path per target; unset targets are not generated."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    css: Path | None = Path("src/styles/tokens.css")
    tailwind: Path | None = Path("tailwind.config.js")
    typescript: Path | None = None
    scss: Path | None = None
    react_native: Path | None = Field(default=None, alias="reactNative")
    expo: Path | None = None
    flutter: Path | None = None
    ios: Path | None = None
    android: Path | None = None
    xamarin: Path | None = None

    def targets(self) -> dict[str, Path]:
        """Configured targets in generation order."""
        configured = {name: getattr(self, name) for name in TARGETS}
        return {name: path for name, path in configured.items() if path is not None}


class WatchSection(BaseModel):
    """Polling watcher timing, in seconds."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    poll_interval: float = Field(default=0.5, gt=0, alias="pollInterval")
    debounce: float = Field(default=0.3, ge=0)


class TokenSyncConfig(BaseModel):
    """Complete design-tokens-sync configuration."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    tokens: TokensSection = Field(default_factory=TokensSection)
    output: OutputSection = Field(default_factory=OutputSection)
    watch: WatchSection = Field(default_factory=WatchSection)

    # Directory relative paths are resolved against
    base_dir: Path = Field(default_factory=Path.cwd, exclude=True)
    source: Path | None = Field(default=None, exclude=True)

    @field_validator("output", mode="before")
    @classmethod
    def _known_targets(cls, value: Any) -> Any:
        if isinstance(value, dict):
            for name in value:
                try:
                    get_target(name)
                except KeyError as e:
                    raise ValueError(str(e.args[0])) from e
        return value

    def resolve(self, path: Path) -> Path:
        return path if path.is_absolute() else self.base_dir / path

    @property
    def input_path(self) -> Path:
        return self.resolve(self.tokens.input)

    def output_paths(self) -> dict[str, Path]:
        return {name: self.resolve(path) for name, path in self.output.targets().items()}

    def pipeline(self) -> TokenPipeline:
        """Build a TokenPipeline from this configuration."""
        return TokenPipeline(
            self.input_path,
            self.output_paths(),
            validator_config=self.tokens.validation,
            resolve_references=self.tokens.resolve_references,
        )


# =============================================================================
# Loading
# =============================================================================


def _read_data(path: Path) -> dict[str, Any]:
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e

    try:
        if path.name == PYPROJECT_FILE:
            data = tomllib.loads(content).get("tool", {}).get(PYPROJECT_TABLE, {})
        elif path.suffix == ".toml":
            data = tomllib.loads(content)
        elif path.suffix in (".yaml", ".yml"):
            data = yaml.safe_load(content)
        else:
            data = json.loads(content)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")
    return data


def load_config(path: Path) -> TokenSyncConfig:
    """Load and validate a config file.

    Args:
        path: A TOML, YAML or JSON config file, or a pyproject.toml.

    Returns:
        TokenSyncConfig with paths relative to the file's directory.

    Raises:
        ConfigError: If the file is missing, unparsable or fails validation.
    """
    path = Path(path)
    if not path.exists():
        raise ConfigError(f"Config file not found: {path}")

    data = _read_data(path)
    try:
        config = TokenSyncConfig.model_validate(
            {**data, "base_dir": path.parent.resolve(), "source": path}
        )
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {path}: {e}") from e

    logger.info(f"Loaded config from {path}")
    return config


def _has_pyproject_table(path: Path) -> bool:
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except (OSError, tomllib.TOMLDecodeError):
        return False
    return PYPROJECT_TABLE in data.get("tool", {})


def find_config(start: Path | None = None) -> Path | None:
    """Return the first config file found in ``start`` (default: cwd)."""
    directory = Path(start) if start else Path.cwd()

    for name in CONFIG_FILES:
        candidate = directory / name
        if candidate.is_file():
            return candidate

    pyproject = directory / PYPROJECT_FILE
    if pyproject.is_file() and _has_pyproject_table(pyproject):
        return pyproject
    return None


def resolve_config(explicit: Path | None = None, start: Path | None = None) -> TokenSyncConfig:
    """Load the explicit config, else a discovered one, else defaults."""
    if explicit is not None:
        return load_config(explicit)

    found = find_config(start)
    if found is not None:
        return load_config(found)

    logger.debug("No config file found, using defaults")
    return TokenSyncConfig(base_dir=Path(start) if start else Path.cwd())
