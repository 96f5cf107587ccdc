"""
Input limits for jsonscrub.

Every string is checked here before the regex-driven stages see it.
"""

from ..utils.config import ParseLimits
from .exceptions import SecurityError


class LimitValidator:
    """Rejects input outside the configured ParseLimits."""

    def __init__(self, limits: ParseLimits):
        self.limits = limits

    def validate_input_size(self, text: str) -> None:
        """Raise SecurityError if text is longer than max_input_size."""
        size = len(text)
        if size > self.limits.max_input_size:
            raise SecurityError(
                f"Input size {size} exceeds limit {self.limits.max_input_size}",
                suggestions=["Raise ParseLimits.max_input_size or split the input"],
            )
