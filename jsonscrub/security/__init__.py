"""
jsonscrub Security and Validation System.

This module provides security limits and exception handling.
"""

from .exceptions import (
    ErrorSuggestionEngine,
    FieldExtractionError,
    FieldNotFoundError,
    FieldPathError,
    InvalidInputError,
    ParseError,
    Position,
    RecordProcessingError,
    RepairError,
    SecurityError,
    TypeMismatchError,
    UnsupportedTypeError,
    jsonscrubError,
)
from .limits import LimitValidator

__all__ = [
    "jsonscrubError",
    "InvalidInputError",
    "UnsupportedTypeError",
    "TypeMismatchError",
    "ParseError",
    "RepairError",
    "SecurityError",
    "FieldExtractionError",
    "FieldPathError",
    "FieldNotFoundError",
    "RecordProcessingError",
    "ErrorSuggestionEngine",
    "Position",
    "LimitValidator",
]
