"""
Token reference resolution.

Normalization keeps ``{colors.primary.500}`` style references verbatim.
This module is the separate, opt-in second pass: it indexes every token of
a CanonicalTokenSet and substitutes references with the values they point
to, detecting cycles along the way.

A reference is looked up by canonical path (``colors.primary.500``), by the
raw document path recorded during flattening (``colors.brand.light.100``),
and finally without a leading token-set segment (``core.colors.primary.500``).
"""

from __future__ import annotations

import logging
import re

from .coercion import css_value
from .errors import CircularReferenceError
from .ir.tokens import CanonicalTokenSet, TokenValue

logger = logging.getLogger(__name__)

REFERENCE_PATTERN = re.compile(r"\{([^{}]+)\}")


class ReferenceIndex:
    """Maps reference paths onto canonical token paths."""

    def __init__(self, tokens: CanonicalTokenSet):
        self.values: dict[str, TokenValue] = dict(tokens.iter_leaves())
        self.aliases: dict[str, str] = {path: path for path in self.values}
        for canonical, raw_paths in tokens.provenance.items():
            if canonical not in self.values:
                continue
            for raw_path in raw_paths:
                self.aliases.setdefault(raw_path, canonical)

    def target(self, reference: str) -> str | None:
        """Return the canonical path a reference points to, or None."""
        reference = reference.strip()
        if reference in self.aliases:
            return self.aliases[reference]
        _, _, without_set = reference.partition(".")
        if without_set and without_set in self.aliases:
            return self.aliases[without_set]
        return None


class _Resolver:
    def __init__(self, index: ReferenceIndex):
        self.index = index
        self.resolved: dict[str, TokenValue] = {}
        self.unresolved: list[tuple[str, str]] = []

    def resolve_path(self, path: str, stack: list[str]) -> TokenValue:
        if path in self.resolved:
            return self.resolved[path]
        if path in stack:
            raise CircularReferenceError(stack[stack.index(path) :] + [path])

        stack.append(path)
        try:
            value = self.substitute(path, self.index.values[path], stack)
        finally:
            stack.pop()

        self.resolved[path] = value
        return value

    def substitute(self, path: str, value: TokenValue, stack: list[str]) -> TokenValue:
        if not isinstance(value, str) or "{" not in value:
            return value

        whole = REFERENCE_PATTERN.fullmatch(value)
        if whole:
            target = self.index.target(whole.group(1))
            if target is None:
                self.unresolved.append((path, value))
                return value
            # A whole-value reference keeps the referenced type (numbers stay numbers)
            return self.resolve_path(target, stack)

        def replace(match: re.Match[str]) -> str:
            target = self.index.target(match.group(1))
            if target is None:
                self.unresolved.append((path, match.group(0)))
                return match.group(0)
            return css_value(self.resolve_path(target, stack))

        return REFERENCE_PATTERN.sub(replace, value)


def resolve_references(tokens: CanonicalTokenSet) -> CanonicalTokenSet:
    """Return a new token set with every resolvable reference substituted.

    Unknown references are left verbatim.

    Raises:
        CircularReferenceError: If references form a cycle.
    """
    resolver = _Resolver(ReferenceIndex(tokens))
    result = tokens.map_values(lambda path, value: resolver.resolve_path(path, []))

    for path, reference in resolver.unresolved:
        logger.debug(f"Unresolved reference {reference} at {path}")
    return result


def find_reference_problems(tokens: CanonicalTokenSet) -> tuple[list[str], list[str]]:
    """Check references without raising.

    Returns:
        ``(errors, warnings)``: circular references are errors, references to
        unknown tokens are warnings.
    """
    errors: list[str] = []
    warnings: list[str] = []
    index = ReferenceIndex(tokens)
    resolver = _Resolver(index)
    seen_cycles: set[frozenset[str]] = set()

    for path, value in index.values.items():
        if not isinstance(value, str) or "{" not in value:
            continue
        try:
            resolver.resolve_path(path, [])
        except CircularReferenceError as e:
            cycle = frozenset(e.chain)
            if cycle not in seen_cycles:
                seen_cycles.add(cycle)
                errors.append(e.message)

    reported: set[tuple[str, str]] = set()
    for path, reference in resolver.unresolved:
        if (path, reference) in reported:
            continue
        reported.add((path, reference))
        warnings.append(f"Unresolved token reference {reference} at {path}")

    return errors, warnings
