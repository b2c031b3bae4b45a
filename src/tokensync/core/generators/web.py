"""
Web targets: CSS custom properties, SCSS variables, Tailwind theme, TypeScript.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any

from ..coercion import capitalize, css_value, js_key, kebab_case
from ..ir.tokens import CanonicalTokenSet, TokenMap, TokenValue
from .base import (
    HEADER_NOTICE,
    HEADER_TITLE,
    Lines,
    Section,
    TargetDescriptor,
    block,
    color_entries,
    comment_header,
    entries,
    has,
)

# =============================================================================
# Shared variable-style sections (CSS and SCSS)
# =============================================================================

Getter = Callable[[CanonicalTokenSet], TokenMap]

# (section title, variable prefix, getter) for single-level categories
_CSS_FLAT: tuple[tuple[str, str, Getter], ...] = (
    ("Spacing", "spacing", lambda t: t.spacing),
    ("Border Radius", "border-radius", lambda t: t.border_radius),
)
_CSS_TRAILING: tuple[tuple[str, str, Getter], ...] = (
    ("Shadows", "shadow", lambda t: t.shadows),
    ("Opacity", "opacity", lambda t: t.opacity),
    ("Z-Index", "z-index", lambda t: t.z_index),
)


def _variable_sections(
    comment: Callable[[str], str],
    declare: Callable[[str, TokenValue], str],
    flat_before_typography: tuple[tuple[str, str, Getter], ...],
    flat_after_typography: tuple[tuple[str, str, Getter], ...],
) -> tuple[Section, ...]:
    """Build the category sections shared by the CSS and SCSS targets."""

    def flat(title: str, prefix: str, getter: Getter) -> Section:
        return Section(
            render=lambda t: [
                comment(title),
                *entries(getter(t), lambda k, v: declare(f"{prefix}-{k}", v)),
                "",
            ],
            when=has(getter),
        )

    def colors(t: CanonicalTokenSet) -> Lines:
        body = color_entries(t, lambda f, s, v: declare(f"color-{f}-{s}", v))
        return [comment("Colors"), *body, ""]

    def typography(t: CanonicalTokenSet) -> Lines:
        lines = [comment("Typography")]
        for group, values in t.typography.groups().items():
            lines.extend(entries(values, lambda k, v, g=group: declare(f"typography-{g}-{k}", v)))
        return [*lines, ""]

    def transitions(t: CanonicalTokenSet) -> Lines:
        lines = [comment("Transitions")]
        for group, values in t.transitions.groups().items():
            lines.extend(entries(values, lambda k, v, g=group: declare(f"transition-{g}-{k}", v)))
        return [*lines, ""]

    return (
        Section(colors, when=has(lambda t: t.colors)),
        *(flat(*entry) for entry in flat_before_typography),
        Section(typography, when=has(lambda t: t.typography)),
        *(flat(*entry) for entry in flat_after_typography),
        Section(transitions, when=has(lambda t: t.transitions)),
        flat("Breakpoints", "breakpoint", lambda t: t.breakpoints),
    )


# =============================================================================
# CSS
# =============================================================================


def _css_footer(tokens: CanonicalTokenSet) -> Lines:
    utilities = color_entries(
        tokens,
        lambda f, s, v: f".text-{f}-{s} {{ color: var(--color-{f}-{s}); }}",
    )
    return ["}", "", "/* Utility Classes */", *utilities]


CSS = TargetDescriptor(
    name="css",
    label="CSS",
    default_path="src/styles/tokens.css",
    header=(f"/* {HEADER_TITLE} */", f"/* {HEADER_NOTICE} */", "", ":root {"),
    sections=_variable_sections(
        comment=lambda title: f"  /* {title} */",
        declare=lambda name, value: f"  --{name}: {css_value(value)};",
        flat_before_typography=_CSS_FLAT,
        flat_after_typography=_CSS_TRAILING,
    ),
    footer=_css_footer,
)


# =============================================================================
# SCSS
# =============================================================================


def _scss_named(category: str, getter: Getter) -> tuple[str, str, Getter]:
    return capitalize(category), kebab_case(category), getter


SCSS = TargetDescriptor(
    name="scss",
    label="SCSS",
    default_path="src/styles/tokens.scss",
    header=(*comment_header("//", "SCSS Variables"), ""),
    sections=_variable_sections(
        comment=lambda title: f"// {title}",
        declare=lambda name, value: f"${name}: {css_value(value)};",
        flat_before_typography=(("Spacing", "spacing", lambda t: t.spacing),),
        flat_after_typography=(
            _scss_named("borderRadius", lambda t: t.border_radius),
            _scss_named("shadows", lambda t: t.shadows),
            _scss_named("opacity", lambda t: t.opacity),
            _scss_named("zIndex", lambda t: t.z_index),
        ),
    ),
)


# =============================================================================
# Tailwind
# =============================================================================


def tailwind_theme(tokens: CanonicalTokenSet) -> dict[str, Any]:
    """Map categories onto ``theme.extend`` keys, omitting empty ones."""
    candidates: dict[str, Any] = {
        "colors": tokens.colors,
        "spacing": tokens.spacing,
        "borderRadius": tokens.border_radius,
        **tokens.typography.groups(),
        "boxShadow": tokens.shadows,
        "opacity": tokens.opacity,
        "zIndex": tokens.z_index,
        "transitionDuration": tokens.transitions.duration,
        "transitionTimingFunction": tokens.transitions.easing,
        "screens": tokens.breakpoints,
    }
    return {key: value for key, value in candidates.items() if value}


def _tailwind_body(tokens: CanonicalTokenSet) -> Lines:
    config = {"theme": {"extend": tailwind_theme(tokens)}}
    return [f"export default {json.dumps(config, indent=2, ensure_ascii=False)};"]


TAILWIND = TargetDescriptor(
    name="tailwind",
    label="Tailwind config",
    default_path="tailwind.config.js",
    header=(
        "/** @type {import('tailwindcss').Config} */",
        f"// {HEADER_TITLE} Tailwind Configuration",
        f"// {HEADER_NOTICE}",
        "",
    ),
    sections=(Section(_tailwind_body),),
    trailing_newline=True,
)


# =============================================================================
# TypeScript
# =============================================================================


def _ts_type(value: TokenValue) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    return "string"


def _ts_members(values: TokenMap, indent: str) -> Lines:
    return [f"{indent}{json.dumps(key)}: {_ts_type(value)};" for key, value in values.items()]


def _ts_nested(name: str, groups: dict[str, TokenMap]) -> Lines:
    body: Lines = []
    for group, values in groups.items():
        if values:
            body.extend([f"  {js_key(group)}: {{", *_ts_members(values, "    "), "  };"])
    return block(f"export interface {name} {{", body, "}")


def _ts_flat(name: str, getter: Getter) -> Section:
    return Section(
        render=lambda t: block(f"export interface {name} {{", _ts_members(getter(t), "  "), "}"),
        when=has(getter),
    )


# (property name, interface name, getter) in output order
_TS_CATEGORIES: tuple[tuple[str, str, Callable[[CanonicalTokenSet], Any]], ...] = (
    ("colors", "Colors", lambda t: t.colors),
    ("spacing", "Spacing", lambda t: t.spacing),
    ("typography", "Typography", lambda t: t.typography),
    ("borderRadius", "BorderRadius", lambda t: t.border_radius),
    ("shadows", "Shadows", lambda t: t.shadows),
    ("opacity", "Opacity", lambda t: t.opacity),
    ("zIndex", "ZIndex", lambda t: t.z_index),
    ("transitions", "Transitions", lambda t: t.transitions),
    ("breakpoints", "Breakpoints", lambda t: t.breakpoints),
)


def _ts_root(tokens: CanonicalTokenSet) -> Lines:
    body = [
        f"  {prop}: {interface};"
        for prop, interface, getter in _TS_CATEGORIES
        if has(getter)(tokens)
    ]
    body.extend(["  source: string;", "  lastLoaded: string;"])
    return [
        *block("export interface DesignTokens {", body, "}"),
        "// Token value constants",
        "declare const tokens: DesignTokens;",
        "export default tokens;",
    ]


TYPESCRIPT = TargetDescriptor(
    name="typescript",
    label="TypeScript definitions",
    default_path="src/types/tokens.d.ts",
    header=(*comment_header("//", "TypeScript Definitions"), ""),
    sections=(
        Section(lambda t: _ts_nested("Colors", t.colors), when=has(lambda t: t.colors)),
        _ts_flat("Spacing", lambda t: t.spacing),
        Section(
            lambda t: _ts_nested("Typography", t.typography.groups()),
            when=has(lambda t: t.typography),
        ),
        _ts_flat("BorderRadius", lambda t: t.border_radius),
        _ts_flat("Shadows", lambda t: t.shadows),
        _ts_flat("Opacity", lambda t: t.opacity),
        _ts_flat("ZIndex", lambda t: t.z_index),
        Section(
            lambda t: _ts_nested("Transitions", t.transitions.groups()),
            when=has(lambda t: t.transitions),
        ),
        _ts_flat("Breakpoints", lambda t: t.breakpoints),
    ),
    footer=_ts_root,
)

WEB_TARGETS: tuple[TargetDescriptor, ...] = (CSS, TAILWIND, TYPESCRIPT, SCSS)
