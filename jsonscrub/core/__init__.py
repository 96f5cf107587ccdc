"""
jsonscrub Core Engine.

This module provides the sanitize/repair entry points and the result type.
"""

from .constants import ParseStage, RepairKind
from .engine import repair, sanitize
from .result import SanitizeResult

__all__ = ["sanitize", "repair", "SanitizeResult", "ParseStage", "RepairKind"]
