"""
Structure repair preprocessing steps.

This module contains the regex rewrites that fix separators and keys: trailing
commas, missing commas between adjacent strings and unquoted object keys.
They have no grammar awareness and can misfire on text inside string values.
"""

from ..core.regex_engine import get_engine
from ..utils.config import PreprocessingConfig
from .base import PreprocessingStepBase

TRAILING_COMMA_PATTERN = r",(\s*[}\]])"
ADJACENT_STRINGS_PATTERN = r'"(\s+)"'
BARE_KEY_PATTERN = r"([{,]\s*)([A-Za-z_$][A-Za-z0-9_$]*)\s*:"


class TrailingCommaFixer(PreprocessingStepBase):
    """Removes commas followed only by whitespace and a closing bracket."""

    def __init__(self, always: bool = False):
        self.always = always

    def should_apply(self, config: PreprocessingConfig) -> bool:
        """Apply if trailing comma removal is enabled."""
        return self.always or config.remove_trailing_commas

    def process(self, text: str, config: PreprocessingConfig) -> str:
        """Delete trailing commas before } and ]."""
        return self.fix(text)

    @staticmethod
    def fix(text: str) -> str:
        """Delete trailing commas before } and ]."""
        return get_engine().sub(TRAILING_COMMA_PATTERN, r"\1", text)


class MissingCommaFixer(PreprocessingStepBase):
    """Inserts a comma between two quoted strings separated by whitespace only."""

    def process(self, text: str, _config: PreprocessingConfig) -> str:
        """Turn '"a" "b"' into '"a", "b"'."""
        return get_engine().sub(ADJACENT_STRINGS_PATTERN, r'",\1"', text)


class KeyQuoter(PreprocessingStepBase):
    """Quotes bare identifier keys that follow '{' or ','."""

    def process(self, text: str, _config: PreprocessingConfig) -> str:
        """Turn '{name: 1}' into '{"name": 1}'."""
        return get_engine().sub(BARE_KEY_PATTERN, r'\1"\2":', text)
