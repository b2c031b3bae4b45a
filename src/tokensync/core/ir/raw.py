"""
Raw token tree types.

A parsed token document is turned into an explicit tagged union once, so the
normalizer and validator never have to probe ``dict`` objects for ``value``
keys at every level:

    RawNode = RawLeaf | RawTree
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

from .tokens import TokenValue

# Keys that carry a leaf's value in Token Studio / DTCG documents
VALUE_KEYS = ("value", "$value")
TYPE_KEYS = ("type", "$type")
DESCRIPTION_KEYS = ("description", "$description")


@dataclass(frozen=True)
class RawLeaf:
    """A single token: a bare scalar or a ``{value, type?, description?}`` object."""

    value: TokenValue
    type: str | None = None
    description: str | None = None


@dataclass(frozen=True)
class RawTree:
    """A group of tokens keyed by name, in document order."""

    children: dict[str, RawNode] = field(default_factory=dict)

    def get(self, key: str) -> RawNode | None:
        return self.children.get(key)

    def subtree(self, key: str) -> RawTree | None:
        """Return the child tree at ``key``, or None if absent or a leaf."""
        node = self.children.get(key)
        return node if isinstance(node, RawTree) else None

    def __len__(self) -> int:
        return len(self.children)


RawNode = RawLeaf | RawTree


def is_leaf_mapping(obj: Any) -> bool:
    """True for a Token Studio leaf object (a mapping carrying ``value``/``$value``)."""
    return isinstance(obj, dict) and any(
        key in obj and obj[key] is not None for key in VALUE_KEYS
    )


def _first(obj: dict[str, Any], keys: tuple[str, ...]) -> Any:
    for key in keys:
        if key in obj and obj[key] is not None:
            return obj[key]
    return None


def _scalar(value: Any) -> TokenValue:
    # Token Studio font stacks arrive as arrays
    if isinstance(value, list):
        return ", ".join(str(item) for item in value)
    if isinstance(value, dict):
        # Composite token values (typography, shadow objects) are kept as JSON text
        return json.dumps(value, separators=(",", ":"))
    return value


def parse_raw_node(obj: Any) -> RawNode:
    """Build a RawNode from a parsed JSON value."""
    if is_leaf_mapping(obj):
        type_ = _first(obj, TYPE_KEYS)
        description = _first(obj, DESCRIPTION_KEYS)
        return RawLeaf(
            value=_scalar(_first(obj, VALUE_KEYS)),
            type=str(type_) if type_ is not None else None,
            description=str(description) if description is not None else None,
        )
    if isinstance(obj, dict):
        return RawTree(children={str(k): parse_raw_node(v) for k, v in obj.items()})
    return RawLeaf(value=_scalar(obj))


def count_leaves(node: RawNode) -> int:
    """Number of leaves below ``node`` (a leaf counts as one)."""
    if isinstance(node, RawLeaf):
        return 1
    return sum(count_leaves(child) for child in node.children.values())


def iter_raw_leaves(node: RawNode, path: str = ""):
    """Yield ``(dotted_path, RawLeaf)`` pairs depth-first in document order."""
    if isinstance(node, RawLeaf):
        yield path, node
        return
    for key, child in node.children.items():
        child_path = f"{path}.{key}" if path else key
        yield from iter_raw_leaves(child, child_path)
