"""Shared pytest fixtures for design-tokens-sync tests."""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest


@pytest.fixture
def flat_tokens() -> dict[str, Any]:
    """A complete flat token document that validates without errors."""
    return {
        "colors": {
            "primary": {
                "50": "#eff6ff",
                "100": "#dbeafe",
                "200": "#bfdbfe",
                "300": "#93c5fd",
                "400": "#60a5fa",
                "500": "#3b82f6",
                "600": "#2563eb",
                "700": "#1d4ed8",
                "800": "#1e40af",
                "900": "#1e3a8a",
            },
            "neutral": {
                "50": "#fafafa",
                "100": "#f5f5f5",
                "200": "#e5e5e5",
                "300": "#d4d4d4",
                "400": "#a3a3a3",
                "500": "#737373",
                "600": "#525252",
                "700": "#404040",
                "800": "#262626",
                "900": "#171717",
            },
        },
        "spacing": {"1": "0.25rem", "4": "1rem", "8": "2rem", "px": "1px"},
        "typography": {
            "fontFamily": {"sans": "Inter, sans-serif", "mono": "Fira Code, monospace"},
            "fontSize": {"base": "1rem", "lg": "1.125rem"},
            "fontWeight": {"bold": "700"},
        },
        "borderRadius": {"md": "0.375rem", "full": "9999px"},
    }


@pytest.fixture
def token_studio_tokens() -> dict[str, Any]:
    """A Figma Token Studio document with core and semantic sets."""
    return {
        "core": {
            "colors": {
                "primary": {
                    "500": {"value": "#3b82f6", "type": "color"},
                    "600": {"value": "#2563eb", "type": "color"},
                },
            },
            "spacing": {"sm": {"value": "0.5rem", "type": "spacing"}},
        },
        "semantic": {
            "colors": {
                "primary": {"500": {"value": "#1d4ed8", "type": "color"}},
                "text": {"default": {"value": "{core.colors.primary.600}", "type": "color"}},
            },
        },
        "$themes": [],
        "$metadata": {"tokenSetOrder": ["core", "semantic"]},
    }


@pytest.fixture
def write_tokens(tmp_path: Path) -> Callable[[Any], Path]:
    """Write a token document to ``tmp_path/tokens.json`` and return its path."""

    def _write(data: Any, name: str = "tokens.json") -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        return path

    return _write
