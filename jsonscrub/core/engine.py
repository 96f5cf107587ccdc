"""
Sanitize and repair entry points for jsonscrub.

sanitize() runs the normalizer: ordered text stages, a strict parse and a chain
of fallbacks (control character escaping, then the repair routine on the
transformed and on the original text). repair() runs the repair routine first
and falls back to the normalizer. Both are pure functions; nothing is cached
between calls.
"""

import json
import logging
from collections.abc import Iterator
from typing import Any, Optional

from ..preprocessing.normalizers import escape_control_characters
from ..preprocessing.pipeline import PreprocessingPipeline
from ..recovery.strategies import PARSE_FAILURES, RepairOutcome, repair_text, strict_loads
from ..security.exceptions import (
    ErrorSuggestionEngine,
    InvalidInputError,
    ParseError,
    RepairError,
    TypeMismatchError,
    UnsupportedTypeError,
)
from ..security.limits import LimitValidator
from ..utils.config import RepairStrategy, SanitizeConfig
from .constants import PRETTY_PRINT_INDENT, ParseStage, RepairKind
from .result import SanitizeResult

# Candidate texts of the parse chain: (stage, text, repair variant)
Candidate = tuple[ParseStage, str, Optional[RepairKind]]


def sanitize(value: Any, config: Optional[SanitizeConfig] = None) -> SanitizeResult:
    """
    Normalize an almost-JSON value into a parsed value and a clean string.

    Args:
        value: A string to clean, or an already parsed dict/list
        config: Optional SanitizeConfig for preprocessing, fallbacks and limits

    Returns:
        SanitizeResult describing the parsed value and the text it came from

    Raises:
        InvalidInputError: If value is None or the empty string
        UnsupportedTypeError: If value is not a string, dict or list
        SecurityError: If the string exceeds the configured input size
        ParseError: If every parse attempt failed
    """
    config = config or SanitizeConfig()
    _validate_not_empty(value)

    if isinstance(value, (dict, list)):
        return _sanitize_structured(value)

    if not isinstance(value, str):
        raise UnsupportedTypeError(
            "Input must be a string or object",
            suggestions=[f"Got {type(value).__name__}; pass JSON text or a dict/list"],
        )

    return _sanitize_string(value, config)


def repair(value: Any, config: Optional[SanitizeConfig] = None) -> SanitizeResult:
    """
    Aggressively repair malformed JSON text ("smart repair").

    The repair routine runs first (grammar-aware, then heuristic, unless
    config.repair_strategy says otherwise). If its output does not parse, the
    normalizer result is returned instead.

    Raises:
        TypeMismatchError: If value is not a string
        InvalidInputError: If value is the empty string
        SecurityError: If the string exceeds the configured input size
        RepairError: If both the repair routine and the normalizer failed
    """
    config = config or SanitizeConfig()

    if not isinstance(value, str):
        raise TypeMismatchError(
            "Smart Repair mode requires string input",
            suggestions=["Use sanitize() for values that are already parsed"],
        )
    _validate_not_empty(value)
    _validate_input_size(value, config)

    logger = _get_logger(config)
    try:
        outcome = repair_text(value, config.repair_strategy)
        parsed = strict_loads(outcome.text)
    except PARSE_FAILURES as repair_error:
        logger.debug("Smart repair failed, falling back to sanitize: %s", repair_error)
        try:
            return _sanitize_string(value, config)
        except ParseError as sanitize_error:
            raise RepairError(str(repair_error), sanitize_error.message) from sanitize_error

    return SanitizeResult(
        cleaned_string=outcome.text,
        parsed=parsed,
        original=value,
        was_already_parsed=False,
        was_repaired=outcome.text.strip() != value.strip(),
        repair_kind=outcome.kind,
        stage=ParseStage.SMART_REPAIR,
    )


def _validate_not_empty(value: Any) -> None:
    """Reject None and the empty string."""
    if value is None or value == "":
        raise InvalidInputError("Input must be a non-empty string or object")


def _validate_input_size(text: str, config: SanitizeConfig) -> None:
    """Validate input size against the configured limits."""
    assert config.limits is not None
    LimitValidator(config.limits).validate_input_size(text)


def _get_logger(config: SanitizeConfig) -> logging.Logger:
    return config.logger or logging.getLogger(__name__)


def _sanitize_structured(value: Any) -> SanitizeResult:
    """Pretty-print an already parsed object or array."""
    try:
        cleaned = json.dumps(
            value, indent=PRETTY_PRINT_INDENT, ensure_ascii=False, allow_nan=False
        )
    except (TypeError, ValueError, RecursionError) as e:
        raise UnsupportedTypeError(f"Structured input is not JSON serializable: {e}") from e

    return SanitizeResult(
        cleaned_string=cleaned,
        parsed=value,
        original=value,
        was_already_parsed=True,
        stage=ParseStage.ALREADY_PARSED,
    )


def _sanitize_string(text: str, config: SanitizeConfig) -> SanitizeResult:
    """Run the normalizer stages and the parse fallback chain over text."""
    _validate_input_size(text, config)
    logger = _get_logger(config)
    preprocessing = config.preprocessing_config

    # Already valid JSON is returned as-is after BOM strip and trim
    envelope = PreprocessingPipeline.create_envelope_pipeline().process(text, preprocessing)
    direct = _attempt_direct_parse(envelope)
    if direct is not None:
        return SanitizeResult(
            cleaned_string=envelope,
            parsed=direct[0],
            original=text,
            was_already_parsed=False,
            stage=ParseStage.DIRECT,
        )

    transformed = PreprocessingPipeline.create_default_pipeline().process(
        text, preprocessing
    )

    first_error: Optional[Exception] = None
    for stage, candidate, kind in _parse_candidates(text, transformed, config):
        try:
            parsed = strict_loads(candidate)
        except PARSE_FAILURES as e:
            logger.debug("Parse attempt '%s' failed: %s", stage.value, e)
            if first_error is None:
                first_error = e
            continue

        if stage != ParseStage.NORMALIZED:
            logger.debug("Recovered JSON through fallback '%s'", stage.value)
        return SanitizeResult(
            cleaned_string=candidate,
            parsed=parsed,
            original=text,
            was_already_parsed=False,
            repair_kind=kind,
            stage=stage,
        )

    raise _build_parse_error(first_error, transformed, config)


def _attempt_direct_parse(text: str) -> Optional[tuple[Any]]:
    """
    Parse text that needs no transformation.

    A JSON string whose content is itself an object or array is a
    double-encoded document and is left to the full pipeline.
    """
    try:
        parsed = strict_loads(text)
    except PARSE_FAILURES:
        return None

    if isinstance(parsed, str) and parsed.strip().startswith(("{", "[")):
        return None
    return (parsed,)


def _parse_candidates(
    text: str, transformed: str, config: SanitizeConfig
) -> Iterator[Candidate]:
    """Yield the texts of the parse chain lazily, cheapest first."""
    fallback = config.fallback
    assert fallback is not None

    yield ParseStage.NORMALIZED, transformed, None

    if fallback.escape_control_characters:
        escaped = escape_control_characters(transformed)
        if escaped != transformed:
            yield ParseStage.CONTROL_CHARACTERS, escaped, None

    if fallback.repair_transformed:
        outcome = _attempt_repair(transformed, config.fallback_strategy)
        if outcome is not None:
            yield ParseStage.REPAIRED, outcome.text, outcome.kind

    if fallback.repair_original:
        outcome = _attempt_repair(text, config.fallback_strategy)
        if outcome is not None:
            yield ParseStage.REPAIRED_ORIGINAL, outcome.text, outcome.kind


def _attempt_repair(text: str, strategy: RepairStrategy) -> Optional[RepairOutcome]:
    """Run the repair routine, treating a routine failure as no candidate."""
    try:
        return repair_text(text, strategy)
    except PARSE_FAILURES:
        return None


def _build_parse_error(
    error: Optional[Exception], transformed: str, config: SanitizeConfig
) -> ParseError:
    """Create a ParseError with a bounded preview of the attempted text."""
    message = str(error) if error is not None else "No parse attempt was made"
    limit = config.preview_length
    preview = transformed[:limit]
    if len(transformed) > limit:
        preview += "..."

    return ParseError(
        message,
        preview=preview,
        position=ErrorSuggestionEngine.position_from(error) if error else None,
        suggestions=ErrorSuggestionEngine.suggest(message),
    )
