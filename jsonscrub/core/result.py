"""
The value returned by every sanitize() and repair() call.
"""

from dataclasses import dataclass
from typing import Any, Optional

from .constants import ParseStage, RepairKind


@dataclass(frozen=True)
class SanitizeResult:
    """
    Outcome of a successful sanitize or repair.

    ``parsed`` is always ``json.loads(cleaned_string)`` unless
    ``was_already_parsed`` is set, in which case ``parsed`` is the caller's
    own object and ``cleaned_string`` its pretty-printed serialization.
    """

    cleaned_string: str
    parsed: Any
    original: Any
    was_already_parsed: bool
    was_repaired: Optional[bool] = None
    repair_kind: Optional[RepairKind] = None
    stage: ParseStage = ParseStage.DIRECT

    @property
    def original_type(self) -> str:
        """JSON-style type name of the input as received."""
        if isinstance(self.original, str):
            return "string"
        if isinstance(self.original, list):
            return "array"
        if isinstance(self.original, dict):
            return "object"
        return type(self.original).__name__
