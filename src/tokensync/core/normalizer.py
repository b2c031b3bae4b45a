"""
Token normalization.

Turns a parsed token document (flat, or a Token Studio document with
``core``/``semantic`` sets) into a CanonicalTokenSet:

1. detect the input shape
2. merge Token Studio sets in declaration order (later sets win per leaf)
3. flatten every category depth-first, joining nested keys with ``-``
4. fill missing categories with their defaults

References such as ``{colors.primary.500}`` are kept verbatim; see
:mod:`tokensync.core.references` for the opt-in resolution pass.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from enum import StrEnum
from typing import Any

from .defaults import (
    DEFAULT_FONT_FAMILY,
    DEFAULT_TRANSITION_DURATION,
    DEFAULT_TRANSITION_EASING,
    default_for,
)
from .errors import MalformedInputError
from .ir.raw import RawLeaf, RawNode, RawTree, is_leaf_mapping, parse_raw_node
from .ir.tokens import (
    CATEGORY_NAMES,
    TYPOGRAPHY_GROUPS,
    CanonicalTokenSet,
    TokenMap,
    TokenValue,
    Transitions,
    Typography,
)

logger = logging.getLogger(__name__)

# Top-level keys that mark a Token Studio document
TOKEN_STUDIO_MARKERS: tuple[str, ...] = ("core", "semantic", "$themes", "$metadata")

# Separate top-level transition categories accepted alongside ``transitions``
TRANSITION_CATEGORY_ALIASES: dict[str, str] = {
    "transitionDuration": "duration",
    "transitionEasing": "easing",
}

KNOWN_CATEGORIES: frozenset[str] = frozenset(CATEGORY_NAMES) | frozenset(
    TRANSITION_CATEGORY_ALIASES
)

# Key used when a leaf sits where a group was expected ("white": "#fff")
DEFAULT_KEY = "DEFAULT"


class InputShape(StrEnum):
    """Recognized top-level document shapes."""

    FLAT = "flat"
    TOKEN_STUDIO = "token_studio"


# =============================================================================
# Shape detection and set merging
# =============================================================================


def detect_shape(raw: dict[str, Any]) -> InputShape:
    """Return TOKEN_STUDIO if any Token Studio marker key is present."""
    if any(marker in raw for marker in TOKEN_STUDIO_MARKERS):
        return InputShape.TOKEN_STUDIO
    return InputShape.FLAT


def _deep_merge(base: dict[str, Any], overlay: dict[str, Any]) -> dict[str, Any]:
    """Merge ``overlay`` onto ``base`` without mutating either.

    Groups merge recursively; leaves (scalars and ``{value: ...}`` objects)
    from the overlay replace whatever was there.
    """
    merged = dict(base)
    for key, value in overlay.items():
        current = merged.get(key)
        if (
            isinstance(current, dict)
            and isinstance(value, dict)
            and not is_leaf_mapping(current)
            and not is_leaf_mapping(value)
        ):
            merged[key] = _deep_merge(current, value)
        else:
            merged[key] = value
    return merged


def merge_token_sets(raw: dict[str, Any]) -> dict[str, Any]:
    """Merge Token Studio sets into one category mapping.

    Sets are applied in declaration order so ``semantic`` overlays ``core``.
    ``$``-prefixed keys (``$themes``, ``$metadata``) are metadata and skipped.
    A top-level key that is itself a category name is merged as a category.
    """
    merged: dict[str, Any] = {}
    for key, value in raw.items():
        if key.startswith("$"):
            continue
        if not isinstance(value, dict):
            logger.debug(f"Skipping non-object token set '{key}'")
            continue
        if key in KNOWN_CATEGORIES:
            merged = _deep_merge(merged, {key: value})
        else:
            merged = _deep_merge(merged, value)
    return merged


def extract_categories(raw: dict[str, Any]) -> dict[str, Any]:
    """Return the category mapping for either input shape."""
    shape = detect_shape(raw)
    logger.debug(f"Detected {shape.value} token document")
    if shape is InputShape.TOKEN_STUDIO:
        return merge_token_sets(raw)
    return raw


def category_tree(raw: dict[str, Any]) -> RawTree:
    """Build the RawTree of categories for either input shape."""
    categories = extract_categories(raw)
    return RawTree(children={str(k): parse_raw_node(v) for k, v in categories.items()})


# =============================================================================
# Flattening
# =============================================================================


def iter_flattened(
    node: RawNode, key: str = "", path: str = ""
) -> Iterator[tuple[str, TokenValue, str]]:
    """Yield ``(joined_key, value, raw_dotted_path)`` depth-first.

    Nested keys are joined with ``-``; ``path`` keeps the ``.``-joined
    document path for provenance.
    """
    if isinstance(node, RawLeaf):
        yield key or DEFAULT_KEY, node.value, path
        return
    for child_key, child in node.children.items():
        yield from iter_flattened(
            child,
            f"{key}-{child_key}" if key else child_key,
            f"{path}.{child_key}" if path else child_key,
        )


class _Flattener:
    """Flattens categories while recording which raw paths fed each key."""

    def __init__(self) -> None:
        self.provenance: dict[str, list[str]] = {}

    def flatten(self, node: RawNode | None, canonical_prefix: str, raw_path: str) -> TokenMap:
        values: TokenMap = {}
        if node is None:
            return values
        for key, value, path in iter_flattened(node, path=raw_path):
            # Later paths win on collision; the validator reports it
            values[key] = value
            self.provenance.setdefault(f"{canonical_prefix}.{key}", []).append(path)
        return values

    def colors(self, node: RawNode | None) -> dict[str, TokenMap]:
        if node is None:
            return {}
        families: dict[str, RawNode] = (
            dict(node.children) if isinstance(node, RawTree) else {DEFAULT_KEY: node}
        )
        colors: dict[str, TokenMap] = {}
        for family, family_node in families.items():
            colors[family] = self.flatten(family_node, f"colors.{family}", f"colors.{family}")
        return colors

    def typography(self, node: RawNode | None) -> Typography:
        groups: dict[str, TokenMap] = {}
        for group in TYPOGRAPHY_GROUPS:
            subtree = node.get(group) if isinstance(node, RawTree) else None
            groups[group] = self.flatten(
                subtree, f"typography.{group}", f"typography.{group}"
            )

        if not groups["fontFamily"]:
            groups["fontFamily"] = dict(DEFAULT_FONT_FAMILY)

        return Typography(**groups)

    def transitions(self, tree: RawTree) -> Transitions:
        groups: dict[str, TokenMap] = {"duration": {}, "easing": {}}
        seen: set[str] = set()

        transitions = tree.subtree("transitions")
        if transitions is not None:
            for group in groups:
                subtree = transitions.get(group)
                if subtree is not None:
                    seen.add(group)
                    groups[group].update(
                        self.flatten(subtree, f"transitions.{group}", f"transitions.{group}")
                    )

        for category, group in TRANSITION_CATEGORY_ALIASES.items():
            node = tree.get(category)
            if node is not None:
                seen.add(group)
                groups[group].update(self.flatten(node, f"transitions.{group}", category))

        if "duration" not in seen:
            groups["duration"] = dict(DEFAULT_TRANSITION_DURATION)
        if "easing" not in seen:
            groups["easing"] = dict(DEFAULT_TRANSITION_EASING)

        return Transitions(**groups)

    def with_default(self, tree: RawTree, category: str) -> TokenMap:
        node = tree.get(category)
        if node is None:
            return default_for(category)
        return self.flatten(node, category, category)


# =============================================================================
# Normalization
# =============================================================================


def normalize(raw: Any, *, source: str = "tokens.json") -> CanonicalTokenSet:
    """Normalize a parsed token document into a CanonicalTokenSet.

    Args:
        raw: Parsed JSON document (flat or Token Studio shape).
        source: Provenance label stored on the result.

    Returns:
        A new CanonicalTokenSet with defaults filled in.

    Raises:
        MalformedInputError: If ``raw`` is not a JSON object.
    """
    if not isinstance(raw, dict):
        raise MalformedInputError(
            f"Token document must be a JSON object, got {type(raw).__name__}"
        )

    tree = category_tree(raw)
    flattener = _Flattener()

    tokens = CanonicalTokenSet(
        colors=flattener.colors(tree.get("colors")),
        spacing=flattener.flatten(tree.get("spacing"), "spacing", "spacing"),
        typography=flattener.typography(tree.get("typography")),
        border_radius=flattener.flatten(tree.get("borderRadius"), "borderRadius", "borderRadius"),
        shadows=flattener.with_default(tree, "shadows"),
        opacity=flattener.with_default(tree, "opacity"),
        z_index=flattener.with_default(tree, "zIndex"),
        transitions=flattener.transitions(tree),
        breakpoints=flattener.with_default(tree, "breakpoints"),
        source=source,
        provenance=flattener.provenance,
    )

    logger.debug(f"Normalized {tokens.token_count()} tokens from {source}")
    return tokens
