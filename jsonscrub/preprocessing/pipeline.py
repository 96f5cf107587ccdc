"""
Step pipelines for the normalizer and the heuristic repairer.

This module implements the pipeline pattern used for both the normalizer
stages and the heuristic repair rewrites. Step order matters: later steps
assume earlier ones already normalized encoding and structure.
"""

from typing import Optional

from ..core.interfaces import PreprocessingStep
from ..utils.config import PreprocessingConfig
from .extractors import BOMStripper, DoubleEncodingUnwrapper, MarkdownExtractor
from .handlers import CommentHandler
from .normalizers import LineEndingNormalizer, QuoteNormalizer, WhitespaceNormalizer
from .repairers import KeyQuoter, MissingCommaFixer, TrailingCommaFixer


class PreprocessingPipeline:
    """Ordered list of steps run over a text one after the other."""

    def __init__(self, steps: Optional[list[PreprocessingStep]] = None):
        self.steps = steps or []

    def add_step(self, step: PreprocessingStep) -> None:
        """Append a step; steps run in insertion order."""
        self.steps.append(step)

    def process(self, text: str, config: Optional[PreprocessingConfig] = None) -> str:
        """Run every step whose should_apply() accepts config."""
        if config is None:
            config = PreprocessingConfig()

        result = text
        for step in self.steps:
            if step.should_apply(config):
                result = step.process(result, config)
        return result

    @classmethod
    def create_envelope_pipeline(cls) -> "PreprocessingPipeline":
        """Create the BOM strip and trim prefix of the default pipeline."""
        pipeline = cls()
        pipeline.add_step(BOMStripper())
        pipeline.add_step(WhitespaceNormalizer())
        return pipeline

    @classmethod
    def create_default_pipeline(cls) -> "PreprocessingPipeline":
        """Create the normalizer pipeline with its eight ordered stages."""
        pipeline = cls.create_envelope_pipeline()

        # Content extraction steps
        pipeline.add_step(MarkdownExtractor())
        pipeline.add_step(DoubleEncodingUnwrapper())

        # Cleanup steps
        pipeline.add_step(TrailingCommaFixer())
        pipeline.add_step(CommentHandler(string_aware=True))

        # Final normalization
        pipeline.add_step(LineEndingNormalizer())
        pipeline.add_step(WhitespaceNormalizer())

        return pipeline

    @classmethod
    def create_heuristic_pipeline(cls) -> "PreprocessingPipeline":
        """Create the heuristic repair rewrites in their fixed order."""
        pipeline = cls()
        pipeline.add_step(CommentHandler(string_aware=False))
        pipeline.add_step(QuoteNormalizer())
        pipeline.add_step(MissingCommaFixer())
        pipeline.add_step(KeyQuoter())
        pipeline.add_step(TrailingCommaFixer(always=True))
        return pipeline
