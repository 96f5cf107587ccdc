"""
JSON preprocessing module.

This module provides the preprocessing pipeline that cleans almost-JSON text
before parsing, and the regex rewrites used by heuristic repair. Each step is
a small single-responsibility component composed into a pipeline.
"""

from .base import PreprocessingStepBase
from .extractors import BOMStripper, DoubleEncodingUnwrapper, MarkdownExtractor
from .handlers import CommentHandler
from .normalizers import (
    LineEndingNormalizer,
    QuoteNormalizer,
    WhitespaceNormalizer,
    escape_control_characters,
)
from .pipeline import PreprocessingPipeline
from .repairers import KeyQuoter, MissingCommaFixer, TrailingCommaFixer

__all__ = [
    "PreprocessingPipeline",
    "PreprocessingStepBase",
    "BOMStripper",
    "MarkdownExtractor",
    "DoubleEncodingUnwrapper",
    "CommentHandler",
    "WhitespaceNormalizer",
    "LineEndingNormalizer",
    "QuoteNormalizer",
    "escape_control_characters",
    "TrailingCommaFixer",
    "MissingCommaFixer",
    "KeyQuoter",
]
