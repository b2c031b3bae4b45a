"""
Canonical token set IR.

The CanonicalTokenSet is the single normalized representation every
generator consumes, regardless of whether the input was a flat document or a
Token Studio ``core``/``semantic`` document.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

TokenValue = str | int | float | bool | None

TokenMap = dict[str, TokenValue]

# Category names as they appear in input documents, in canonical order
CATEGORY_NAMES: tuple[str, ...] = (
    "colors",
    "spacing",
    "typography",
    "borderRadius",
    "shadows",
    "opacity",
    "zIndex",
    "transitions",
    "breakpoints",
)

TYPOGRAPHY_GROUPS: tuple[str, ...] = (
    "fontFamily",
    "fontSize",
    "fontWeight",
    "lineHeight",
    "letterSpacing",
)

TRANSITION_GROUPS: tuple[str, ...] = ("duration", "easing")


def _now_iso() -> str:
    return datetime.now(UTC).isoformat()


class Typography(BaseModel):
    """Typography token groups."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    font_family: TokenMap = Field(default_factory=dict, alias="fontFamily")
    font_size: TokenMap = Field(default_factory=dict, alias="fontSize")
    font_weight: TokenMap = Field(default_factory=dict, alias="fontWeight")
    line_height: TokenMap = Field(default_factory=dict, alias="lineHeight")
    letter_spacing: TokenMap = Field(default_factory=dict, alias="letterSpacing")

    def groups(self) -> dict[str, TokenMap]:
        """Groups keyed by their document name, in canonical order."""
        return {
            "fontFamily": self.font_family,
            "fontSize": self.font_size,
            "fontWeight": self.font_weight,
            "lineHeight": self.line_height,
            "letterSpacing": self.letter_spacing,
        }

    def is_empty(self) -> bool:
        return not any(self.groups().values())


class Transitions(BaseModel):
    """Transition duration and easing tokens."""

    model_config = ConfigDict(frozen=True)

    duration: TokenMap = Field(default_factory=dict)
    easing: TokenMap = Field(default_factory=dict)

    def groups(self) -> dict[str, TokenMap]:
        return {"duration": self.duration, "easing": self.easing}

    def is_empty(self) -> bool:
        return not self.duration and not self.easing


class CanonicalTokenSet(BaseModel):
    """Normalized, flattened, default-filled design tokens.

    Instances are treated as immutable: reloads build a new set.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    colors: dict[str, TokenMap] = Field(default_factory=dict)
    spacing: TokenMap = Field(default_factory=dict)
    typography: Typography = Field(default_factory=Typography)
    border_radius: TokenMap = Field(default_factory=dict, alias="borderRadius")
    shadows: TokenMap = Field(default_factory=dict)
    opacity: TokenMap = Field(default_factory=dict)
    z_index: TokenMap = Field(default_factory=dict, alias="zIndex")
    transitions: Transitions = Field(default_factory=Transitions)
    breakpoints: TokenMap = Field(default_factory=dict)

    source: str = "tokens.json"
    last_loaded: str = Field(default_factory=_now_iso, alias="lastLoaded")

    # canonical dotted path -> raw dotted paths that produced it
    provenance: dict[str, list[str]] = Field(default_factory=dict, exclude=True, repr=False)

    @classmethod
    def empty(cls) -> CanonicalTokenSet:
        """A set with every category empty (no defaults applied)."""
        return cls()

    def flat_categories(self) -> dict[str, TokenMap]:
        """Single-level categories keyed by document name."""
        return {
            "spacing": self.spacing,
            "borderRadius": self.border_radius,
            "shadows": self.shadows,
            "opacity": self.opacity,
            "zIndex": self.z_index,
            "breakpoints": self.breakpoints,
        }

    def iter_leaves(self) -> Iterator[tuple[str, TokenValue]]:
        """Yield ``(canonical_path, value)`` for every token, in canonical order.

        Paths look like ``colors.primary.500``, ``typography.fontSize.base``,
        ``transitions.duration.fast`` or ``spacing.4``.
        """
        for family, shades in self.colors.items():
            for shade, value in shades.items():
                yield f"colors.{family}.{shade}", value
        for key, value in self.spacing.items():
            yield f"spacing.{key}", value
        for group, values in self.typography.groups().items():
            for key, value in values.items():
                yield f"typography.{group}.{key}", value
        for name in ("borderRadius", "shadows", "opacity", "zIndex"):
            for key, value in self.flat_categories()[name].items():
                yield f"{name}.{key}", value
        for group, values in self.transitions.groups().items():
            for key, value in values.items():
                yield f"transitions.{group}.{key}", value
        for key, value in self.breakpoints.items():
            yield f"breakpoints.{key}", value

    def lookup(self, canonical_path: str) -> TokenValue:
        """Return the value at a canonical path.

        Raises:
            KeyError: If no token lives at that path.
        """
        for path, value in self.iter_leaves():
            if path == canonical_path:
                return value
        raise KeyError(canonical_path)

    def map_values(self, fn: Callable[[str, TokenValue], TokenValue]) -> CanonicalTokenSet:
        """Return a copy with ``fn(canonical_path, value)`` applied to every token."""

        def apply(prefix: str, values: TokenMap) -> TokenMap:
            return {key: fn(f"{prefix}.{key}", value) for key, value in values.items()}

        return self.model_copy(
            update={
                "colors": {
                    family: apply(f"colors.{family}", shades)
                    for family, shades in self.colors.items()
                },
                "spacing": apply("spacing", self.spacing),
                "typography": Typography(
                    **{
                        group: apply(f"typography.{group}", values)
                        for group, values in self.typography.groups().items()
                    }
                ),
                "border_radius": apply("borderRadius", self.border_radius),
                "shadows": apply("shadows", self.shadows),
                "opacity": apply("opacity", self.opacity),
                "z_index": apply("zIndex", self.z_index),
                "transitions": Transitions(
                    **{
                        group: apply(f"transitions.{group}", values)
                        for group, values in self.transitions.groups().items()
                    }
                ),
                "breakpoints": apply("breakpoints", self.breakpoints),
            }
        )

    def token_count(self) -> int:
        return sum(1 for _ in self.iter_leaves())

    def design_data(self) -> dict[str, Any]:
        """Dump design values only, without load metadata."""
        return self.model_dump(by_alias=True, exclude={"source", "last_loaded"})

    def input_data(self) -> dict[str, Any]:
        """Rebuild the document from tokens that came from the input.

        Only leaves recorded in ``provenance`` are kept, so filled-in defaults
        are left out. Colors, typography and transitions keep their group
        level; other categories are flat.
        """
        data: dict[str, Any] = {}
        for path, value in self.iter_leaves():
            if path not in self.provenance:
                continue
            category, rest = path.split(".", 1)
            node = data.setdefault(category, {})
            if category in ("colors", "typography", "transitions"):
                group, rest = rest.split(".", 1)
                node = node.setdefault(group, {})
            node[rest] = value
        return data

    def to_json_dict(self) -> dict[str, Any]:
        """Dump using the document's camelCase category names."""
        return self.model_dump(by_alias=True, mode="json")
