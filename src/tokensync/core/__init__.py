"""
Token normalization, validation and cross-format generation.
"""

from .errors import (
    CircularReferenceError,
    ConfigError,
    GenerationError,
    MalformedInputError,
    TokenFileNotFoundError,
    TokenLoadError,
    TokenSyncError,
    TokenValidationError,
)
from .ir import CanonicalTokenSet, GenerationResult, SyncResult, ValidationReport
from .normalizer import detect_shape, normalize
from .pipeline import TokenPipeline
from .references import find_reference_problems, resolve_references
from .validator import ValidatorConfig, validate

__all__ = [
    "CanonicalTokenSet",
    "CircularReferenceError",
    "ConfigError",
    "GenerationError",
    "GenerationResult",
    "MalformedInputError",
    "SyncResult",
    "TokenFileNotFoundError",
    "TokenLoadError",
    "TokenPipeline",
    "TokenSyncError",
    "TokenValidationError",
    "ValidationReport",
    "ValidatorConfig",
    "detect_shape",
    "find_reference_problems",
    "normalize",
    "resolve_references",
    "validate",
]
