"""
Core interfaces and protocols for the sanitization system.

This module defines the contracts that pipeline steps and repair routines
implement, so either can be swapped without touching the engine.
"""

from typing import Any, Protocol

from .constants import RepairKind


class PreprocessingStep(Protocol):
    """Protocol for preprocessing steps in the preprocessing pipeline."""

    def process(self, text: str, config: Any) -> str:
        """Process the input text according to this preprocessing step."""
        ...

    def should_apply(self, config: Any) -> bool:
        """Determine if this step should be applied given the configuration."""
        ...


class RepairRoutine(Protocol):
    """Protocol for a text-to-text repair variant."""

    kind: RepairKind

    def repair(self, text: str) -> str:
        """Return a rewritten text, raising ValueError if it cannot help."""
        ...
