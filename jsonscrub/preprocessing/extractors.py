"""
Content extraction preprocessing steps.

This module contains the steps that peel transport wrappers off the JSON text:
a byte order mark, markdown code fences and a layer of JSON string encoding.
"""

import json

from ..core.constants import BYTE_ORDER_MARK, DOUBLE_ENCODING_UNESCAPES
from ..core.regex_engine import IGNORECASE, get_engine
from ..utils.config import PreprocessingConfig
from .base import PreprocessingStepBase

OPENING_FENCE_PATTERN = r"^```\s*(?:json)?\s*\n?"
CLOSING_FENCE_PATTERN = r"\n?```\s*$"


class BOMStripper(PreprocessingStepBase):
    """Removes a single byte order mark at offset 0."""

    def should_apply(self, config: PreprocessingConfig) -> bool:
        """Apply if BOM stripping is enabled."""
        return config.strip_bom

    def process(self, text: str, config: PreprocessingConfig) -> str:
        """Drop the leading BOM, if any."""
        if text.startswith(BYTE_ORDER_MARK):
            return text[len(BYTE_ORDER_MARK) :]
        return text


class MarkdownExtractor(PreprocessingStepBase):
    """Strips markdown code fences wrapping the JSON."""

    def should_apply(self, config: PreprocessingConfig) -> bool:
        """Apply if markdown extraction is enabled."""
        return config.extract_from_markdown

    def process(self, text: str, config: PreprocessingConfig) -> str:
        """Remove an opening ```json fence and a closing ``` fence."""
        return self.strip_fences(text)

    @staticmethod
    def strip_fences(text: str) -> str:
        """Remove the leading and trailing fence, then re-trim."""
        engine = get_engine()
        result = engine.sub(OPENING_FENCE_PATTERN, "", text, count=1, flags=IGNORECASE)
        result = engine.sub(CLOSING_FENCE_PATTERN, "", result, count=1)
        return result.strip()


class DoubleEncodingUnwrapper(PreprocessingStepBase):
    """Unwraps a JSON document that was encoded as a JSON string."""

    def should_apply(self, config: PreprocessingConfig) -> bool:
        """Apply if double-encoding unwrapping is enabled."""
        return config.unwrap_double_encoding

    def process(self, text: str, config: PreprocessingConfig) -> str:
        """Replace a quoted JSON string by its content, if it is one."""
        return self.unwrap(text)

    @staticmethod
    def unwrap(text: str) -> str:
        """
        Decode one layer of JSON string encoding.

        Text that does not start with a quote, does not parse, or parses to
        something other than a string is returned unchanged.
        """
        if not text.startswith('"'):
            return text

        try:
            inner = json.loads(text)
        except ValueError:
            return text

        if not isinstance(inner, str):
            return text

        for escaped, unescaped in DOUBLE_ENCODING_UNESCAPES:
            inner = inner.replace(escaped, unescaped)
        return inner.strip()
