"""
Base class for preprocessing steps.

Normalizer stages and heuristic repair rewrites share this base so either
kind can be placed in a PreprocessingPipeline.
"""

from ..utils.config import PreprocessingConfig


class PreprocessingStepBase:
    """Default behaviour shared by every preprocessing step."""

    def should_apply(self, _config: PreprocessingConfig) -> bool:
        """Steps without a configuration switch always run."""
        return True

    def process(self, text: str, _config: PreprocessingConfig) -> str:
        """Return the transformed text."""
        raise NotImplementedError(f"{type(self).__name__} must implement process()")
