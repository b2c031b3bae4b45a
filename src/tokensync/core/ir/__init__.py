"""
Intermediate representation for design tokens.

Re-exports the raw tree union, the canonical token set, and result types.
"""

from .raw import RawLeaf, RawNode, RawTree, count_leaves, iter_raw_leaves, parse_raw_node
from .report import GenerationResult, SyncResult, ValidationReport, ValidationSummary
from .tokens import (
    CATEGORY_NAMES,
    TRANSITION_GROUPS,
    TYPOGRAPHY_GROUPS,
    CanonicalTokenSet,
    TokenMap,
    TokenValue,
    Transitions,
    Typography,
)

__all__ = [
    # Raw tree
    "RawLeaf",
    "RawNode",
    "RawTree",
    "count_leaves",
    "iter_raw_leaves",
    "parse_raw_node",
    # Canonical set
    "CATEGORY_NAMES",
    "TRANSITION_GROUPS",
    "TYPOGRAPHY_GROUPS",
    "CanonicalTokenSet",
    "TokenMap",
    "TokenValue",
    "Transitions",
    "Typography",
    # Results
    "GenerationResult",
    "SyncResult",
    "ValidationReport",
    "ValidationSummary",
]
