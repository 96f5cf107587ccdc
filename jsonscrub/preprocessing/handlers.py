"""
Comment handling for preprocessing.

This module removes JavaScript-style comments from JSON text. The normalizer
uses a line-based guard against stripping ``//`` inside string values; the
heuristic repairer uses the plain form.
"""

from ..core.regex_engine import MULTILINE, get_engine
from ..utils.config import PreprocessingConfig
from .base import PreprocessingStepBase

BLOCK_COMMENT_PATTERN = r"/\*[\s\S]*?\*/"
LINE_COMMENT_PATTERN = r"//.*$"


class CommentHandler(PreprocessingStepBase):
    """Removes block and line comments from JSON text."""

    def __init__(self, string_aware: bool = True):
        self.string_aware = string_aware

    def should_apply(self, config: PreprocessingConfig) -> bool:
        """Apply if comment removal is enabled."""
        return config.remove_comments

    def process(self, text: str, config: PreprocessingConfig) -> str:
        """Remove block comments first, then line comments."""
        result = self.remove_block_comments(text)
        if self.string_aware:
            return self.remove_line_comments(result)
        return get_engine().sub(LINE_COMMENT_PATTERN, "", result, flags=MULTILINE)

    @staticmethod
    def remove_block_comments(text: str) -> str:
        """Remove /* ... */ comments, spanning newlines, non-greedy."""
        return get_engine().sub(BLOCK_COMMENT_PATTERN, "", text)

    @staticmethod
    def remove_line_comments(text: str) -> str:
        """
        Remove // comments that start outside a string literal.

        Whether a ``//`` is inside a string is decided per line by counting the
        unescaped double quotes in front of it: an even count means outside.
        Strings spanning several lines defeat this count; it is an
        approximation that keeps URLs inside string values intact.
        """
        lines = text.split("\n")
        for index, line in enumerate(lines):
            cut = CommentHandler._find_line_comment(line)
            if cut != -1:
                lines[index] = line[:cut]
        return "\n".join(lines)

    @staticmethod
    def _find_line_comment(line: str) -> int:
        """Return the offset of the first // outside a string, or -1."""
        start = line.find("//")
        while start != -1:
            if _count_unescaped_quotes(line, start) % 2 == 0:
                return start
            start = line.find("//", start + 2)
        return -1


def _count_unescaped_quotes(line: str, end: int) -> int:
    """Count double quotes in line[:end] not preceded by an odd backslash run."""
    count = 0
    for i in range(end):
        if line[i] != '"':
            continue
        backslashes = 0
        j = i - 1
        while j >= 0 and line[j] == "\\":
            backslashes += 1
            j -= 1
        if backslashes % 2 == 0:
            count += 1
    return count
