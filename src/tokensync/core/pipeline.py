"""
Load -> normalize -> validate -> generate orchestration.

The pipeline caches one loaded document (raw JSON plus its canonical token
set) and replaces it as a single object on reload, so a generator that is
still rendering the previous set is never affected.
"""

from __future__ import annotations

import asyncio
import json
import logging
import time
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from .errors import (
    ConfigError,
    TokenFileNotFoundError,
    TokenLoadError,
    TokenValidationError,
    make_load_error,
)
from .generators import TargetDescriptor, generate, get_target
from .ir.report import GenerationResult, SyncResult, ValidationReport
from .ir.tokens import CanonicalTokenSet
from .normalizer import normalize
from .references import resolve_references
from .validator import ValidatorConfig, validate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoadedTokens:
    """A parsed token document and its canonical form."""

    path: Path
    raw: dict[str, Any]
    tokens: CanonicalTokenSet


class TokenPipeline:
    """
    Orchestrates loading, validation and generation for one token file.

    Example:
        pipeline = TokenPipeline("tokens.json", {"css": "src/styles/tokens.css"})
        result = await pipeline.sync()
        print(result.written_paths)
    """

    def __init__(
        self,
        input_path: str | Path,
        outputs: Mapping[str, str | Path] | None = None,
        *,
        validator_config: ValidatorConfig | None = None,
        resolve_references: bool = False,
    ):
        self.input_path = Path(input_path)
        self.outputs: dict[str, Path] = {}
        for name, path in (outputs or {}).items():
            self.outputs[self._descriptor(name).name] = Path(path)
        self.validator_config = validator_config or ValidatorConfig()
        self.resolve_references = resolve_references
        self._loaded: LoadedTokens | None = None
        self._lock = asyncio.Lock()

    @staticmethod
    def _descriptor(name: str) -> TargetDescriptor:
        try:
            return get_target(name)
        except KeyError as e:
            raise ConfigError(str(e.args[0])) from e

    @property
    def tokens(self) -> CanonicalTokenSet | None:
        """The cached canonical set, or None before the first load."""
        return self._loaded.tokens if self._loaded else None

    # -------------------------------------------------------------------------
    # Loading
    # -------------------------------------------------------------------------

    def _read(self) -> str:
        try:
            return self.input_path.read_text(encoding="utf-8")
        except FileNotFoundError as e:
            raise TokenFileNotFoundError(f"Tokens file not found: {self.input_path}") from e
        except OSError as e:
            raise TokenLoadError(f"Failed to read tokens file {self.input_path}: {e}") from e

    def _parse(self, text: str) -> LoadedTokens:
        try:
            raw = json.loads(text)
        except json.JSONDecodeError as e:
            raise make_load_error(
                f"Invalid JSON in tokens file: {e.msg}",
                file=self.input_path,
                line=e.lineno,
                column=e.colno,
                source=text,
            ) from e

        tokens = normalize(raw, source=str(self.input_path))
        if self.resolve_references:
            tokens = resolve_references(tokens)
        return LoadedTokens(path=self.input_path, raw=raw, tokens=tokens)

    async def _load(self, force_reload: bool) -> LoadedTokens:
        async with self._lock:
            if self._loaded is not None and not force_reload:
                return self._loaded

            start = time.perf_counter()
            text = await asyncio.to_thread(self._read)
            loaded = self._parse(text)
            self._loaded = loaded

            elapsed_ms = (time.perf_counter() - start) * 1000
            logger.info(f"Loaded {loaded.tokens.token_count()} tokens from {self.input_path}")
            logger.debug(f"Load took {elapsed_ms:.1f}ms")
            return loaded

    async def load(self, force_reload: bool = False) -> CanonicalTokenSet:
        """Load and normalize the token file, using the cache unless forced.

        Concurrent callers share a single read.

        Raises:
            TokenFileNotFoundError: If the input file does not exist.
            TokenLoadError: If the file is unreadable or not valid JSON.
            MalformedInputError: If the document is not a JSON object.
            CircularReferenceError: If reference resolution finds a cycle.
        """
        return (await self._load(force_reload)).tokens

    async def reload(self) -> CanonicalTokenSet:
        return await self.load(force_reload=True)

    def invalidate_cache(self) -> None:
        """Drop the cached document; the next load reads the file again."""
        self._loaded = None
        logger.debug("Token cache invalidated")

    async def _ensure_loaded(self) -> LoadedTokens:
        return await self._load(force_reload=False)

    # -------------------------------------------------------------------------
    # Validation and generation
    # -------------------------------------------------------------------------

    async def validate(self) -> ValidationReport:
        """Validate the cached raw document (loading it first if needed)."""
        loaded = await self._ensure_loaded()
        return validate(loaded.raw, self.validator_config)

    def _selected(self, targets: Iterable[str] | None) -> dict[str, Path]:
        if targets is None:
            return dict(self.outputs)
        selected: dict[str, Path] = {}
        for name in targets:
            descriptor = self._descriptor(name)
            selected[descriptor.name] = self.outputs.get(
                descriptor.name, Path(descriptor.default_path)
            )
        return selected

    async def generate(self, targets: Iterable[str] | None = None) -> SyncResult:
        """Render the selected targets concurrently.

        Args:
            targets: Target names; defaults to every configured output. A
                named target without a configured path uses its default path.

        Returns:
            SyncResult whose ``errors`` maps each failed target to its message.
            A failing target never prevents the others from being written.
        """
        loaded = await self._ensure_loaded()
        selected = self._selected(targets)
        if not selected:
            logger.warning("No output targets configured")
            return SyncResult()

        names = list(selected)
        outcomes = await asyncio.gather(
            *(
                asyncio.to_thread(generate, get_target(name), loaded.tokens, selected[name])
                for name in names
            ),
            return_exceptions=True,
        )

        results: dict[str, GenerationResult] = {}
        errors: dict[str, str] = {}
        for name, outcome in zip(names, outcomes, strict=True):
            if isinstance(outcome, GenerationResult):
                results[name] = outcome
            elif isinstance(outcome, Exception):
                logger.error(f"Failed to generate {name}: {outcome}")
                errors[name] = str(outcome)
            else:
                raise outcome

        return SyncResult(results=results, errors=errors)

    async def sync(self, force: bool = False, targets: Iterable[str] | None = None) -> SyncResult:
        """Reload, validate and generate.

        Args:
            force: Generate even when validation reports errors.
            targets: Target names; defaults to every configured output.

        Raises:
            TokenValidationError: If validation fails and ``force`` is False.
        """
        await self.reload()
        report = await self.validate()

        if not report.is_valid:
            if not force:
                raise TokenValidationError(
                    f"Token validation failed with {len(report.errors)} error(s)", report
                )
            logger.warning(f"Generating despite {len(report.errors)} validation error(s)")

        for warning in report.warnings:
            logger.warning(warning)

        result = await self.generate(targets)
        return result.model_copy(update={"report": report})
