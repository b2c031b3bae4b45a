"""
Validation and generation result types.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


class ValidationSummary(BaseModel):
    """Counts reported alongside validation findings."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    total_categories: int = Field(default=0, alias="totalCategories")
    validated_tokens: int = Field(default=0, alias="validatedTokens")
    error_count: int = Field(default=0, alias="errorCount")
    warning_count: int = Field(default=0, alias="warningCount")


class ValidationReport(BaseModel):
    """Outcome of validating a token document.

    ``errors`` block generation unless the caller forces it;
    ``warnings`` never do.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    is_valid: bool = Field(alias="isValid")
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    summary: ValidationSummary = Field(default_factory=ValidationSummary)

    @classmethod
    def build(
        cls,
        errors: list[str],
        warnings: list[str],
        *,
        total_categories: int = 0,
        validated_tokens: int = 0,
    ) -> ValidationReport:
        return cls(
            is_valid=not errors,
            errors=list(errors),
            warnings=list(warnings),
            summary=ValidationSummary(
                total_categories=total_categories,
                validated_tokens=validated_tokens,
                error_count=len(errors),
                warning_count=len(warnings),
            ),
        )


class GenerationResult(BaseModel):
    """A rendered target and where it was written."""

    model_config = ConfigDict(frozen=True)

    target: str
    path: Path
    content: str


class SyncResult(BaseModel):
    """Manifest returned by a pipeline sync.

    ``written_paths`` lists every file successfully written, in target order,
    for collaborators such as a version-control stage step.
    """

    model_config = ConfigDict(frozen=True)

    report: ValidationReport | None = None
    results: dict[str, GenerationResult] = Field(default_factory=dict)
    errors: dict[str, str] = Field(default_factory=dict)

    @property
    def written_paths(self) -> list[Path]:
        return [result.path for result in self.results.values()]

    @property
    def ok(self) -> bool:
        return not self.errors
