"""
jsonscrub Repair System.

This module provides the heuristic and grammar-aware repair routines.
"""

from .strategies import (
    GrammarRepairer,
    HeuristicRepairer,
    RepairOutcome,
    is_strict_json,
    repair_text,
    strict_loads,
)

__all__ = [
    "repair_text",
    "is_strict_json",
    "strict_loads",
    "RepairOutcome",
    "HeuristicRepairer",
    "GrammarRepairer",
]
