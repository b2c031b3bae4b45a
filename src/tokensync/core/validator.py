"""
Structural and semantic validation for design token documents.

Validates categories, color and size syntax, shade naming, typography,
duplicate values, key collisions, and references. Validation never raises:
every finding is collected into a ValidationReport, and the caller decides
whether errors are fatal.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .coercion import css_value, is_reference
from .ir.raw import RawTree, count_leaves
from .ir.report import ValidationReport
from .ir.tokens import TYPOGRAPHY_GROUPS, CanonicalTokenSet, TokenValue
from .normalizer import (
    InputShape,
    category_tree,
    detect_shape,
    extract_categories,
    normalize,
)
from .references import find_reference_problems

# =============================================================================
# Validation Constants
# =============================================================================

_HEX_COLOR = re.compile(r"^#([A-Fa-f0-9]{6}|[A-Fa-f0-9]{3})$")
_RGB_COLOR = re.compile(r"^rgba?\([\d\s,./]+\)$", re.IGNORECASE)
_HSL_COLOR = re.compile(r"^hsla?\([\d\s,%./]+\)$", re.IGNORECASE)
_COLOR_KEYWORD = re.compile(r"^[a-z]+$", re.IGNORECASE)
_CSS_SIZE = re.compile(r"^[\d.]+([a-z%]+)?$", re.IGNORECASE)
_NUMERIC_SHADE = re.compile(r"^\d+$")

SHADE_MIN = 50
SHADE_MAX = 950
SHADE_STEP = 50
COMMON_SHADES: tuple[str, ...] = ("100", "200", "300", "400", "500", "600", "700", "800", "900")

# Misspelled category -> intended category
COMMON_TYPOS: dict[str, str] = {
    "colour": "colors",
    "color": "colors",
    "spacings": "spacing",
    "typo": "typography",
    "fonts": "typography",
}

# Values that legitimately repeat across many tokens
DUPLICATE_EXEMPT_VALUES = frozenset({"0", "transparent"})


class ValidatorConfig(BaseModel):
    """Rules the validator applies; passed explicitly to :func:`validate`."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    required: list[str] = Field(default_factory=lambda: ["colors"])
    optional: list[str] = Field(
        default_factory=lambda: ["spacing", "typography", "borderRadius"]
    )
    check_references: bool = Field(default=True, alias="checkReferences")


# =============================================================================
# Value checks
# =============================================================================


def _as_text(value: TokenValue) -> str | None:
    """Numbers are checked on their decimal form; other non-strings fail."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        return css_value(value)
    if isinstance(value, str):
        return value
    return None


def is_valid_color(value: Any) -> bool:
    """Hex (3/6 digits), rgb()/rgba(), hsl()/hsla(), a keyword, or a reference."""
    if not isinstance(value, str):
        return False
    return bool(
        _HEX_COLOR.match(value)
        or _RGB_COLOR.match(value)
        or _HSL_COLOR.match(value)
        or _COLOR_KEYWORD.match(value)
        or is_reference(value)
    )


def is_valid_size(value: Any) -> bool:
    """``<number><optional unit>`` or a reference."""
    text = _as_text(value)
    if text is None:
        return False
    return bool(_CSS_SIZE.match(text)) or is_reference(text)


def is_valid_spacing(value: Any) -> bool:
    """``0``, ``<number><optional unit>``, or a reference."""
    return _as_text(value) == "0" or is_valid_size(value)


def is_numeric_shade(shade: str) -> bool:
    return bool(_NUMERIC_SHADE.match(shade))


# =============================================================================
# Validation subject
# =============================================================================


@dataclass
class _Subject:
    """Everything the individual checks look at, computed once."""

    raw: dict[str, Any]
    categories: dict[str, Any]
    tree: RawTree
    tokens: CanonicalTokenSet
    config: ValidatorConfig


# =============================================================================
# Checks
# =============================================================================


def validate_structure(subject: _Subject) -> tuple[list[str], list[str]]:
    """Token Studio metadata shape and misspelled category names."""
    errors: list[str] = []
    warnings: list[str] = []
    raw = subject.raw

    if detect_shape(raw) is InputShape.TOKEN_STUDIO:
        if "$themes" in raw and not isinstance(raw["$themes"], list):
            warnings.append("$themes should be an array in Figma Token Studio format")
        if "$metadata" in raw and not isinstance(raw["$metadata"], dict):
            warnings.append("$metadata should be an object in Figma Token Studio format")

    for typo, correct in COMMON_TYPOS.items():
        if typo in subject.categories and correct not in subject.categories:
            warnings.append(f'Found "{typo}" - did you mean "{correct}"?')

    return errors, warnings


def validate_categories(subject: _Subject) -> tuple[list[str], list[str]]:
    """Required categories (errors), optional categories (warnings), colors.primary."""
    errors: list[str] = []
    warnings: list[str] = []
    categories = subject.categories

    for category in subject.config.required:
        node = categories.get(category)
        if node is None or (isinstance(node, dict) and not node):
            errors.append(f"Missing required token category: {category}")
        elif not isinstance(node, dict):
            errors.append(f"Invalid token category structure: {category}")

    if isinstance(categories.get("colors"), dict) and not subject.tokens.colors.get("primary"):
        errors.append("Missing required color category: colors.primary")

    for category in subject.config.optional:
        if category not in categories:
            warnings.append(f"Optional token category not found: {category}")

    return errors, warnings


def validate_colors(subject: _Subject) -> tuple[list[str], list[str]]:
    """Color syntax and shade naming conventions."""
    errors: list[str] = []
    warnings: list[str] = []

    for family, shades in subject.tokens.colors.items():
        for shade, value in shades.items():
            if not is_valid_color(value):
                errors.append(f'Invalid color value: colors.{family}.{shade} = "{value}"')

            if is_numeric_shade(shade):
                number = int(shade)
                if number < SHADE_MIN or number > SHADE_MAX or number % SHADE_STEP != 0:
                    warnings.append(
                        f"Unusual shade value: colors.{family}.{shade} "
                        f"(consider using 50, 100, 200... 900, 950)"
                    )

        if any(is_numeric_shade(shade) for shade in shades):
            missing = [shade for shade in COMMON_SHADES if shade not in shades]
            if missing:
                warnings.append(
                    f"Consider adding common shades to colors.{family}: {', '.join(missing)}"
                )

    return errors, warnings


def validate_spacing(subject: _Subject) -> tuple[list[str], list[str]]:
    """Spacing values must be 0, a size, or a reference."""
    errors: list[str] = []

    for key, value in subject.tokens.spacing.items():
        if not is_valid_spacing(value):
            errors.append(f'Invalid spacing value: spacing.{key} = "{value}"')

    return errors, []


def validate_typography(subject: _Subject) -> tuple[list[str], list[str]]:
    """Sans font present, font families non-empty, font sizes well-formed."""
    errors: list[str] = []
    warnings: list[str] = []
    typography = subject.tokens.typography

    if "sans" not in typography.font_family:
        errors.append("Missing sans-serif font family (typography.fontFamily.sans)")

    for key, value in typography.font_family.items():
        if not isinstance(value, str) or not value.strip():
            errors.append(f'Invalid font family: typography.fontFamily.{key} = "{value}"')

    for key, value in typography.font_size.items():
        if not is_valid_size(value):
            errors.append(f'Invalid font size: typography.fontSize.{key} = "{value}"')

    raw_typography = subject.tree.subtree("typography")
    if raw_typography is not None:
        for group in raw_typography.children:
            if group not in TYPOGRAPHY_GROUPS:
                warnings.append(
                    f"Unknown typography group: typography.{group} "
                    f"(expected one of {', '.join(TYPOGRAPHY_GROUPS)})"
                )

    return errors, warnings


def _duplicate_key(value: TokenValue) -> str:
    return value if isinstance(value, str) else json.dumps(value)


def validate_consistency(subject: _Subject) -> tuple[list[str], list[str]]:
    """Duplicate values and canonical key collisions.

    Only tokens that came from the input are compared, so defaults never
    produce duplicate warnings.
    """
    warnings: list[str] = []
    tokens = subject.tokens

    paths_by_value: dict[str, list[str]] = {}
    display: dict[str, str] = {}
    for path, value in tokens.iter_leaves():
        if path not in tokens.provenance:
            continue
        key = _duplicate_key(value)
        paths_by_value.setdefault(key, []).append(path)
        display.setdefault(key, css_value(value))

    for key, paths in paths_by_value.items():
        if len(paths) > 1 and display[key] not in DUPLICATE_EXEMPT_VALUES:
            warnings.append(f'Duplicate value "{display[key]}" found in: {", ".join(paths)}')

    for canonical, raw_paths in tokens.provenance.items():
        if len(raw_paths) > 1:
            warnings.append(
                f"Token key collision: {canonical} is produced by "
                f"{', '.join(raw_paths)} (last one wins)"
            )

    return [], warnings


def validate_references(subject: _Subject) -> tuple[list[str], list[str]]:
    """Circular references (errors) and references to unknown tokens (warnings)."""
    if not subject.config.check_references:
        return [], []
    return find_reference_problems(subject.tokens)


_CHECKS = (
    validate_structure,
    validate_categories,
    validate_colors,
    validate_spacing,
    validate_typography,
    validate_consistency,
    validate_references,
)


# =============================================================================
# Entry point
# =============================================================================


def validate(raw: Any, config: ValidatorConfig | None = None) -> ValidationReport:
    """Validate a parsed token document of either input shape.

    Args:
        raw: Parsed JSON document, or an already normalized CanonicalTokenSet.
            A token set is checked as-is; the document-level checks see only
            the tokens its provenance attributes to the input, so defaults
            are treated the same as for the raw document.
        config: Category rules; defaults to :class:`ValidatorConfig`.

    Returns:
        ValidationReport with all errors and warnings.
    """
    tokens: CanonicalTokenSet | None = None
    if isinstance(raw, CanonicalTokenSet):
        tokens = raw
        raw = tokens.input_data()

    if not isinstance(raw, dict):
        return ValidationReport.build(["Tokens must be an object"], [])

    subject = _Subject(
        raw=raw,
        categories=extract_categories(raw),
        tree=category_tree(raw),
        tokens=tokens if tokens is not None else normalize(raw),
        config=config or ValidatorConfig(),
    )

    errors: list[str] = []
    warnings: list[str] = []
    for check in _CHECKS:
        check_errors, check_warnings = check(subject)
        errors.extend(check_errors)
        warnings.extend(check_warnings)

    categories = [node for node in subject.tree.children.values() if isinstance(node, RawTree)]
    return ValidationReport.build(
        errors,
        warnings,
        total_categories=len(categories),
        validated_tokens=sum(count_leaves(node) for node in categories),
    )
