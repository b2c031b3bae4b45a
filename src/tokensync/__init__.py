"""
design-tokens-sync - one design token file, every platform.

Normalizes a JSON design token document (flat or Figma Token Studio) and
generates CSS, SCSS, Tailwind, TypeScript, React Native, Expo, Flutter, iOS,
Android and Xamarin outputs from it.
"""

from __future__ import annotations

import re
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _metadata_version
from pathlib import Path as _Path

from .core import (
    CanonicalTokenSet,
    TokenPipeline,
    TokenSyncError,
    ValidationReport,
    normalize,
    validate,
)

DISTRIBUTION_NAME = "design-tokens-sync"


def _get_version() -> str:
    """Get version from pyproject.toml (editable) or importlib.metadata (installed)."""
    pyproject = _Path(__file__).parent.parent.parent / "pyproject.toml"
    if pyproject.exists():
        content = pyproject.read_text(encoding="utf-8")
        if match := re.search(r'^version\s*=\s*["\']([^"\']+)["\']', content, re.MULTILINE):
            return match.group(1)

    try:
        return _metadata_version(DISTRIBUTION_NAME)
    except PackageNotFoundError:
        return "0.0.0"


__version__ = _get_version()

__all__ = [
    "__version__",
    "CanonicalTokenSet",
    "TokenPipeline",
    "TokenSyncError",
    "ValidationReport",
    "normalize",
    "validate",
]
