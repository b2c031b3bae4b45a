"""
Format generators.

Each target is a declarative :class:`TargetDescriptor`; ``generate_<target>``
renders it for a CanonicalTokenSet, writes the file and returns a
GenerationResult.

Usage:
    from tokensync.core.generators import generate_css, TARGETS

    result = generate_css(tokens, "src/styles/tokens.css")
    print(result.content)
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from ..ir.report import GenerationResult
from .base import TargetDescriptor, generate, render, write_output
from .mobile import ANDROID, EXPO, FLUTTER, IOS, MOBILE_TARGETS, REACT_NATIVE, XAMARIN
from .web import CSS, SCSS, TAILWIND, TYPESCRIPT, WEB_TARGETS, tailwind_theme

# name -> descriptor, in generation order
TARGETS: dict[str, TargetDescriptor] = {
    descriptor.name: descriptor for descriptor in (*WEB_TARGETS, *MOBILE_TARGETS)
}

_ALIASES: dict[str, str] = {
    alias: descriptor.name for descriptor in TARGETS.values() for alias in descriptor.aliases
}


def get_target(name: str) -> TargetDescriptor:
    """Look up a target by name or alias (``reactNative`` -> ``react_native``).

    Raises:
        KeyError: If the name is unknown.
    """
    canonical = _ALIASES.get(name, name)
    if canonical not in TARGETS:
        raise KeyError(f"Unknown target '{name}'. Available: {', '.join(TARGETS)}")
    return TARGETS[canonical]


def generate_css(tokens: Any, output_path: str | Path) -> GenerationResult:
    return generate(CSS, tokens, output_path)


def generate_tailwind(tokens: Any, output_path: str | Path) -> GenerationResult:
    return generate(TAILWIND, tokens, output_path)


def generate_typescript(tokens: Any, output_path: str | Path) -> GenerationResult:
    return generate(TYPESCRIPT, tokens, output_path)


def generate_scss(tokens: Any, output_path: str | Path) -> GenerationResult:
    return generate(SCSS, tokens, output_path)


def generate_react_native(tokens: Any, output_path: str | Path) -> GenerationResult:
    return generate(REACT_NATIVE, tokens, output_path)


def generate_expo(tokens: Any, output_path: str | Path) -> GenerationResult:
    return generate(EXPO, tokens, output_path)


def generate_flutter(tokens: Any, output_path: str | Path) -> GenerationResult:
    return generate(FLUTTER, tokens, output_path)


def generate_ios(tokens: Any, output_path: str | Path) -> GenerationResult:
    return generate(IOS, tokens, output_path)


def generate_android(tokens: Any, output_path: str | Path) -> GenerationResult:
    return generate(ANDROID, tokens, output_path)


def generate_xamarin(tokens: Any, output_path: str | Path) -> GenerationResult:
    return generate(XAMARIN, tokens, output_path)


__all__ = [
    "TARGETS",
    "TargetDescriptor",
    "generate",
    "generate_android",
    "generate_css",
    "generate_expo",
    "generate_flutter",
    "generate_ios",
    "generate_react_native",
    "generate_scss",
    "generate_tailwind",
    "generate_typescript",
    "generate_xamarin",
    "get_target",
    "render",
    "tailwind_theme",
    "write_output",
]
