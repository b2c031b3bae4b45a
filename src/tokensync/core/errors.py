"""
Error types for design token loading, validation, and generation.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .ir.report import ValidationReport


class TokenSyncError(Exception):
    """Base exception for all design-tokens-sync errors."""

    def __init__(self, message: str, context: Optional["ErrorContext"] = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.context.format()}\n{self.message}"
        return self.message


class TokenLoadError(TokenSyncError):
    """
    Raised when the token document cannot be loaded.

    Examples:
    - File cannot be read
    - Invalid JSON
    """

    pass


class TokenFileNotFoundError(TokenLoadError):
    """Raised when the configured tokens file does not exist."""

    pass


class MalformedInputError(TokenLoadError):
    """
    Raised when the parsed document is not a JSON object.

    Per-token problems are never raised; they are reported by the validator.
    """

    pass


class TokenValidationError(TokenSyncError):
    """Raised by the pipeline when validation fails and sync is not forced."""

    def __init__(self, message: str, report: "ValidationReport"):
        self.report = report
        super().__init__(message)


class CircularReferenceError(TokenSyncError):
    """Raised when token references form a cycle."""

    def __init__(self, chain: list[str]):
        self.chain = chain
        super().__init__(f"circular reference: {' -> '.join(chain)}")


class GenerationError(TokenSyncError):
    """
    Raised when a target fails to render or write.

    Examples:
    - Output directory cannot be created
    - Output file is not writable
    """

    def __init__(self, message: str, target: str, path: Path | None = None):
        self.target = target
        self.path = path
        super().__init__(message)


class ConfigError(TokenSyncError):
    """Raised when the configuration file is missing, unreadable, or invalid."""

    pass


@dataclass
class ErrorContext:
    """
    Source location of an error inside a token or config file.

    Attributes:
        file: Path to the file
        line: Line number (1-indexed)
        column: Column number (1-indexed)
        snippet: Optional source excerpt around the error
    """

    file: Path
    line: int
    column: int
    snippet: str | None = None

    def format(self) -> str:
        """
        Format error context as a human-readable string.

        Returns:
            Formatted string like: "tokens.json:10:5"
        """
        location = f"{self.file}:{self.line}:{self.column}"
        if self.snippet:
            return f"{location}\n{self._format_snippet()}"
        return location

    def _format_snippet(self) -> str:
        """Format snippet with line numbers and an error marker."""
        if not self.snippet:
            return ""

        lines = self.snippet.split("\n")
        formatted = []

        # Snippet starts up to 2 lines before the error
        start_line = max(1, self.line - 2)

        for i, line in enumerate(lines):
            line_num = start_line + i
            prefix = f"{line_num:4d} | "
            formatted.append(prefix + line)

            if line_num == self.line:
                marker_pos = len(prefix) + self.column - 1
                formatted.append(" " * marker_pos + "^^^")

        return "\n".join(formatted)


def snippet_around(text: str, line: int, radius: int = 2) -> str:
    """Return the lines of ``text`` within ``radius`` of ``line`` (1-indexed)."""
    lines = text.splitlines()
    start = max(1, line - radius)
    end = min(len(lines), line + radius)
    return "\n".join(lines[start - 1 : end])


def make_load_error(
    message: str,
    file: Path,
    line: int,
    column: int,
    source: str | None = None,
) -> TokenLoadError:
    """
    Helper to create a TokenLoadError with location context.

    Args:
        message: Error description
        file: Token file path
        line: Line number (1-indexed)
        column: Column number (1-indexed)
        source: Full file text, used to build a snippet

    Returns:
        TokenLoadError with context attached
    """
    snippet = snippet_around(source, line) if source else None
    context = ErrorContext(file=file, line=line, column=column, snippet=snippet)
    return TokenLoadError(message, context)
