"""
Target descriptors and the generic render/write driver.

Every output format is a :class:`TargetDescriptor`: a header, an ordered
list of sections (each renders one category and is skipped when that
category is empty), and an optional footer. One driver turns a descriptor
plus a CanonicalTokenSet into text, so targets differ only in their section
formatters and value coercions.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from ..errors import GenerationError
from ..ir.report import GenerationResult
from ..ir.tokens import CanonicalTokenSet, TokenMap

logger = logging.getLogger(__name__)

HEADER_TITLE = "Design Tokens - Auto-generated"
HEADER_NOTICE = "Do not edit this file manually"

Lines = list[str]
SectionRenderer = Callable[[CanonicalTokenSet], Lines]


def _always(tokens: CanonicalTokenSet) -> bool:
    return True


@dataclass(frozen=True)
class Section:
    """One block of output, rendered only when ``when(tokens)`` holds."""

    render: SectionRenderer
    when: Callable[[CanonicalTokenSet], bool] = _always


@dataclass(frozen=True)
class TargetDescriptor:
    """Declarative description of an output format."""

    name: str
    label: str
    default_path: str
    header: tuple[str, ...]
    sections: tuple[Section, ...] = ()
    footer: SectionRenderer | None = None
    trailing_newline: bool = False
    aliases: tuple[str, ...] = field(default=())


def coerce_tokens(tokens: Any) -> CanonicalTokenSet:
    """Substitute an empty set for ``None`` or anything that is not a token set."""
    if isinstance(tokens, CanonicalTokenSet):
        return tokens
    if tokens is not None:
        logger.debug(f"Ignoring non-token input of type {type(tokens).__name__}")
    return CanonicalTokenSet.empty()


def render(descriptor: TargetDescriptor, tokens: Any) -> str:
    """Render a target's full file content."""
    token_set = coerce_tokens(tokens)

    lines: Lines = list(descriptor.header)
    for section in descriptor.sections:
        if section.when(token_set):
            lines.extend(section.render(token_set))
    if descriptor.footer is not None:
        lines.extend(descriptor.footer(token_set))

    content = "\n".join(lines)
    if descriptor.trailing_newline and not content.endswith("\n"):
        content += "\n"
    return content


def write_output(path: Path, content: str) -> Path:
    """Write ``content`` to ``path``, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


def generate(descriptor: TargetDescriptor, tokens: Any, output_path: str | Path) -> GenerationResult:
    """Render a target and write it to ``output_path``.

    Raises:
        GenerationError: If the file cannot be written.
    """
    path = Path(output_path)
    start = time.perf_counter()
    content = render(descriptor, tokens)

    try:
        write_output(path, content)
    except OSError as e:
        raise GenerationError(
            f"Failed to write {descriptor.label} output to {path}: {e}",
            target=descriptor.name,
            path=path,
        ) from e

    elapsed_ms = (time.perf_counter() - start) * 1000
    logger.info(f"Generated {descriptor.label}: {path}")
    logger.debug(f"{descriptor.name} rendered {len(content)} chars in {elapsed_ms:.1f}ms")
    return GenerationResult(target=descriptor.name, path=path, content=content)


# =============================================================================
# Section helpers
# =============================================================================


def comment_header(prefix: str, kind: str, *extra: str) -> tuple[str, ...]:
    """Standard two-line header in a given comment syntax."""
    lines = [f"{prefix} {HEADER_TITLE} {kind}".rstrip(), f"{prefix} {HEADER_NOTICE}"]
    lines.extend(f"{prefix} {line}" for line in extra)
    return tuple(lines)


def has(getter: Callable[[CanonicalTokenSet], Any]) -> Callable[[CanonicalTokenSet], bool]:
    """Section predicate: the category returned by ``getter`` is non-empty."""

    def predicate(tokens: CanonicalTokenSet) -> bool:
        value = getter(tokens)
        if hasattr(value, "is_empty"):
            return not value.is_empty()
        return bool(value)

    return predicate


def block(open_line: str, body: Sequence[str], close_line: str, *, blank_after: bool = True) -> Lines:
    lines = [open_line, *body, close_line]
    if blank_after:
        lines.append("")
    return lines


def entries(
    values: TokenMap,
    fmt: Callable[[str, Any], str],
) -> Lines:
    """Format every ``(key, value)`` pair of a flat category; ``None`` values are skipped."""
    return [fmt(key, value) for key, value in values.items() if value is not None]


def color_entries(
    tokens: CanonicalTokenSet,
    fmt: Callable[[str, str, Any], str | None],
) -> Lines:
    """Format every color leaf; ``None`` values and formatters returning None are skipped."""
    lines: Lines = []
    for family, shades in tokens.colors.items():
        for shade, value in shades.items():
            if value is None:
                continue
            line = fmt(family, shade, value)
            if line is not None:
                lines.append(line)
    return lines
