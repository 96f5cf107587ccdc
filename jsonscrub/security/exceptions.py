"""
Exception classes and error suggestions for jsonscrub.

Every terminal failure of sanitize() or repair() surfaces as exactly one of the
exceptions defined here. The classes also inherit from the closest builtin
(ValueError or TypeError) so callers can catch them generically.
"""

import json
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Position:
    """1-based line/column location inside the attempted text."""

    line: int
    column: int

    def __str__(self) -> str:
        return f"line {self.line}, column {self.column}"


class jsonscrubError(Exception):
    """Base exception for all jsonscrub errors."""

    def __init__(
        self,
        message: str,
        position: Optional[Position] = None,
        suggestions: Optional[list[str]] = None,
    ):
        self.message = message
        self.position = position
        self.suggestions = suggestions or []
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        msg = self.message
        if self.position:
            msg += f" at {self.position}"
        if self.suggestions:
            msg += "\n\nSuggestions:"
            for suggestion in self.suggestions:
                msg += f"\n  - {suggestion}"
        return msg


class InvalidInputError(jsonscrubError, ValueError):
    """Raised when the input is None or an empty string."""


class UnsupportedTypeError(jsonscrubError, TypeError):
    """Raised when the input is neither a string nor a JSON object/array."""


class TypeMismatchError(jsonscrubError, TypeError):
    """Raised when repair mode receives anything but a string."""


class SecurityError(jsonscrubError):
    """Raised when the input exceeds a configured security limit."""


class ParseError(jsonscrubError, ValueError):
    """Raised when every parse attempt of the normalizer has failed."""

    def __init__(
        self,
        original_message: str,
        preview: str = "",
        position: Optional[Position] = None,
        suggestions: Optional[list[str]] = None,
    ):
        self.original_message = original_message
        self.preview = preview
        message = f"Failed to parse JSON after sanitization: {original_message}"
        if preview:
            message += f"\n\nCleaned string preview: {preview}"
        super().__init__(message, position, suggestions)


class RepairError(jsonscrubError, ValueError):
    """Raised when both smart repair and the normalizer fallback failed."""

    def __init__(self, repair_message: str, sanitize_message: str):
        self.repair_message = repair_message
        self.sanitize_message = sanitize_message
        super().__init__(
            f"Failed to repair JSON: {repair_message}\n\n"
            f"Original sanitization error: {sanitize_message}"
        )


class FieldExtractionError(jsonscrubError, KeyError):
    """Base class for failures resolving a field path inside a record."""

    def __init__(self, message: str, path: str):
        self.path = path
        super().__init__(message)

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return self.message


class FieldPathError(FieldExtractionError):
    """An intermediate path segment is missing or not an object."""


class FieldNotFoundError(FieldExtractionError):
    """The final path segment resolved to nothing."""


class RecordProcessingError(jsonscrubError):
    """Raised by the record processor when error handling is 'stop'."""

    def __init__(self, message: str, item_index: int):
        self.item_index = item_index
        super().__init__(f"Failed to sanitize JSON: {message} (item {item_index})")


class ErrorSuggestionEngine:
    """Maps standard json diagnostics to actionable hints."""

    _HINTS = {
        "Expecting property name enclosed in double quotes": (
            "Object keys must be double-quoted; unquoted or single-quoted "
            "keys are fixed by repair mode"
        ),
        "Expecting ',' delimiter": (
            "A comma is missing between two values or properties"
        ),
        "Expecting ':' delimiter": "A colon is missing after an object key",
        "Unterminated string": "A string literal is missing its closing quote",
        "Invalid control character": (
            "Raw control characters inside strings must be escaped"
        ),
        "Invalid \\escape": "A backslash escape inside a string is not valid JSON",
        "Extra data": "The text contains more than one JSON value",
        "Expecting value": "A value is missing or the text is not JSON at all",
    }

    @classmethod
    def suggest(cls, message: str) -> list[str]:
        """Return hints for a parser diagnostic, always ending with repair mode."""
        suggestions = [hint for key, hint in cls._HINTS.items() if key in message]
        suggestions.append("Try repair mode for aggressive structural repair")
        return suggestions

    @staticmethod
    def position_from(error: Exception) -> Optional[Position]:
        """Extract a Position from a json.JSONDecodeError, if it is one."""
        if isinstance(error, json.JSONDecodeError):
            return Position(error.lineno, error.colno)
        return None
