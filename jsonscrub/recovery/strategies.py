"""
Repair strategies for jsonscrub.

This module implements the shared repair routine used as the last fallback of
sanitize() and as the primary transform of repair(). Two variants exist and
are tagged so callers can tell which guarantees apply:

- heuristic: regex rewrites (comments, single quotes, missing commas between
  strings, bare keys, trailing commas). No parser, so it can misfire on
  pathological input such as apostrophes inside single-quoted strings or
  text inside values that looks like a key.
- grammar: the json_repair library, which balances brackets and inserts
  separators with knowledge of the JSON structure.
"""

import json
import logging
from dataclasses import dataclass
from typing import Any, Optional

from json_repair import repair_json

from ..core.constants import BYTE_ORDER_MARK, STRUCTURED_START_CHARS, RepairKind
from ..core.interfaces import RepairRoutine
from ..preprocessing.pipeline import PreprocessingPipeline
from ..utils.config import RepairStrategy

logger = logging.getLogger(__name__)

# Errors json.loads raises on bad input; deep nesting exhausts the C scanner
PARSE_FAILURES = (ValueError, RecursionError)


@dataclass(frozen=True)
class RepairOutcome:
    """A repaired text and the variant that produced it."""

    text: str
    kind: RepairKind


class HeuristicRepairer:
    """Regex-only repair, no grammar awareness."""

    kind = RepairKind.HEURISTIC

    def __init__(self) -> None:
        self.pipeline = PreprocessingPipeline.create_heuristic_pipeline()

    def repair(self, text: str) -> str:
        """Apply the heuristic rewrites in order."""
        return self.pipeline.process(text)


class GrammarRepairer:
    """Parser-based repair through json_repair."""

    kind = RepairKind.GRAMMAR

    def repair(self, text: str) -> str:
        """
        Repair text with json_repair.

        Raises:
            ValueError: If json_repair gives up and returns an empty document
        """
        repaired = repair_json(text, ensure_ascii=False)
        if not isinstance(repaired, str) or repaired.strip() in ("", '""'):
            raise ValueError("json_repair could not recover a JSON value")
        return repaired


def looks_structured(text: str) -> bool:
    """Check whether trimmed text starts like an object, array or string."""
    return text.strip().startswith(STRUCTURED_START_CHARS)


def wrap_as_string_literal(text: str) -> str:
    """Wrap arbitrary text as a JSON string literal."""
    return json.dumps(text.strip(), ensure_ascii=False)


def is_strict_json(text: str) -> bool:
    """Check whether text already parses as strict JSON."""
    try:
        strict_loads(text)
    except PARSE_FAILURES:
        return False
    return True


def strict_loads(text: str) -> Any:
    """json.loads that rejects NaN, Infinity and -Infinity."""
    return json.loads(text, parse_constant=_reject_constant)


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Non-standard JSON constant: {name}")


def _routines_for(strategy: RepairStrategy) -> list[RepairRoutine]:
    if strategy == RepairStrategy.HEURISTIC:
        return [HeuristicRepairer()]
    if strategy == RepairStrategy.GRAMMAR:
        return [GrammarRepairer()]
    return [GrammarRepairer(), HeuristicRepairer()]


def repair_text(
    text: str, strategy: RepairStrategy = RepairStrategy.HEURISTIC
) -> RepairOutcome:
    """
    Run the repair routine over text.

    Surrounding whitespace and a byte order mark are dropped first. Text
    that does not start like JSON is wrapped as a string literal, so some
    valid JSON token always comes out. Text that already parses is returned
    untouched. Otherwise the variants selected by strategy are tried in order;
    the last one's result is returned even if it still does not parse.

    Args:
        text: The text to repair
        strategy: Which variant(s) to use

    Returns:
        RepairOutcome with the rewritten text and the variant tag
    """
    text = text.strip().lstrip(BYTE_ORDER_MARK).strip()
    if not looks_structured(text):
        return RepairOutcome(wrap_as_string_literal(text), RepairKind.LITERAL)

    if is_strict_json(text):
        return RepairOutcome(text, RepairKind.NONE)

    routines = _routines_for(strategy)
    outcome: Optional[RepairOutcome] = None
    for routine in routines:
        try:
            repaired = routine.repair(text)
        except PARSE_FAILURES as e:
            logger.debug("%s repair failed: %s", routine.kind.value, e)
            continue

        outcome = RepairOutcome(repaired, routine.kind)
        if is_strict_json(repaired):
            return outcome
        logger.debug("%s repair produced invalid JSON", routine.kind.value)

    if outcome is None:
        raise ValueError("No repair routine could process the text")
    return outcome
