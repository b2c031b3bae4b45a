"""
Default token sets applied when a category is missing from the input.

A missing category is never an error: the normalizer fills it from here so
generators never have to special-case an absent category.
"""

from __future__ import annotations

from .ir.tokens import TokenMap

# =============================================================================
# Typography
# =============================================================================

DEFAULT_FONT_FAMILY: TokenMap = {
    "sans": "Inter, system-ui, sans-serif",
    "mono": "Fira Code, monospace",
}

# =============================================================================
# Shape
# =============================================================================

DEFAULT_SHADOWS: TokenMap = {
    "sm": "0 1px 2px 0 rgb(0 0 0 / 0.05)",
    "md": "0 4px 6px -1px rgb(0 0 0 / 0.1)",
    "lg": "0 10px 15px -3px rgb(0 0 0 / 0.1)",
    "xl": "0 20px 25px -5px rgb(0 0 0 / 0.1)",
}

DEFAULT_OPACITY: TokenMap = {
    "0": "0",
    "25": "0.25",
    "50": "0.5",
    "75": "0.75",
    "100": "1",
}

# =============================================================================
# Layering
# =============================================================================

DEFAULT_Z_INDEX: TokenMap = {
    "auto": 0,
    "base": 1,
    "dropdown": 1000,
    "modal": 1040,
    "popover": 1050,
    "tooltip": 1060,
}

# =============================================================================
# Motion
# =============================================================================

DEFAULT_TRANSITION_DURATION: TokenMap = {
    "fast": "150ms",
    "normal": "300ms",
    "slow": "500ms",
}

DEFAULT_TRANSITION_EASING: TokenMap = {
    "linear": "linear",
    "ease": "ease",
    "ease-in": "ease-in",
    "ease-out": "ease-out",
    "ease-in-out": "ease-in-out",
}

# =============================================================================
# Layout
# =============================================================================

DEFAULT_BREAKPOINTS: TokenMap = {
    "sm": "640px",
    "md": "768px",
    "lg": "1024px",
    "xl": "1280px",
    "2xl": "1536px",
}


def default_for(category: str) -> TokenMap:
    """Return a fresh copy of the default set for a flat category.

    Categories without a default return an empty dict.
    """
    defaults: dict[str, TokenMap] = {
        "shadows": DEFAULT_SHADOWS,
        "opacity": DEFAULT_OPACITY,
        "zIndex": DEFAULT_Z_INDEX,
        "breakpoints": DEFAULT_BREAKPOINTS,
    }
    return dict(defaults.get(category, {}))
