"""
Text normalization preprocessing steps.

This module contains steps that normalize JSON text formatting: surrounding
whitespace, line endings and quote characters. It also holds the control
character escape that the parse fallback chain runs on failed text.
"""

from ..core.constants import CONTROL_CHAR_ESCAPE_MAP
from ..core.regex_engine import get_engine
from ..utils.config import PreprocessingConfig
from .base import PreprocessingStepBase

SINGLE_QUOTED_RUN_PATTERN = r"'([^']*)'"


class WhitespaceNormalizer(PreprocessingStepBase):
    """Trims leading and trailing whitespace."""

    def process(self, text: str, _config: PreprocessingConfig) -> str:
        """Strip surrounding whitespace."""
        return text.strip()


class LineEndingNormalizer(PreprocessingStepBase):
    """Converts CRLF and lone CR line endings to LF."""

    def should_apply(self, config: PreprocessingConfig) -> bool:
        """Apply if line ending normalization is enabled."""
        return config.normalize_line_endings

    def process(self, text: str, config: PreprocessingConfig) -> str:
        """Normalize line endings."""
        return text.replace("\r\n", "\n").replace("\r", "\n")


class QuoteNormalizer(PreprocessingStepBase):
    """
    Converts single-quoted runs to double-quoted strings.

    Naive: an apostrophe inside a single-quoted string, or a
    double quote inside one, ends up misquoted.
    """

    def process(self, text: str, _config: PreprocessingConfig) -> str:
        """Replace '...' with "..."."""
        return get_engine().sub(SINGLE_QUOTED_RUN_PATTERN, r'"\1"', text)


def escape_control_characters(text: str) -> str:
    """
    Escape raw newlines, carriage returns and tabs inside string literals.

    Walks the text tracking whether it is inside a double-quoted string;
    control characters outside strings are left alone.
    """
    result = []
    in_string = False
    escape_next = False

    for char in text:
        if escape_next:
            escape_next = False
            result.append(char)
            continue

        if in_string and char in CONTROL_CHAR_ESCAPE_MAP:
            result.append(CONTROL_CHAR_ESCAPE_MAP[char])
            continue

        if char == "\\" and in_string:
            escape_next = True
        elif char == '"':
            in_string = not in_string
        result.append(char)

    return "".join(result)
