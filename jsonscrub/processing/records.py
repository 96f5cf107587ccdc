"""
Record processing for batches of JSON-bearing records.

This module applies sanitize() or repair() to one field of every record in a
batch, projects the result into the requested output shape and applies the
per-record error policy (stop the batch, or annotate the record and go on).
"""

import copy
import logging
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from ..core.engine import repair, sanitize
from ..core.result import SanitizeResult
from ..security.exceptions import (
    FieldNotFoundError,
    FieldPathError,
    RecordProcessingError,
    jsonscrubError,
)
from ..utils.config import SanitizeConfig

logger = logging.getLogger(__name__)


class OutputMode(Enum):
    """Shape of the value written to the output field."""

    PARSED = "parsed"
    STRING = "string"
    BOTH = "both"
    REPAIR = "repair"


class ErrorHandlingMode(Enum):
    """What to do when a record cannot be sanitized."""

    STOP = "stop"
    CONTINUE = "continue"


@dataclass
class ProcessorOptions:
    """Per-batch options for RecordProcessor."""

    input_field: str = "json"
    output_mode: OutputMode = OutputMode.PARSED
    output_field: str = "sanitized"
    keep_original: bool = False
    error_handling: ErrorHandlingMode = ErrorHandlingMode.STOP

    def __post_init__(self) -> None:
        # Accept plain strings, e.g. options loaded from a settings file
        self.output_mode = OutputMode(self.output_mode)
        self.error_handling = ErrorHandlingMode(self.error_handling)
        if not self.input_field:
            raise ValueError("input_field must not be empty")
        if not self.output_field:
            raise ValueError("output_field must not be empty")


def extract_field(record: Mapping[str, Any], path: str) -> Any:
    """
    Resolve a dot-delimited field path inside a record.

    A key that literally contains dots wins over nested lookup.

    Raises:
        FieldPathError: If an intermediate segment is missing or not an object
        FieldNotFoundError: If the final value is missing or None
    """
    if path in record:
        value = record[path]
    else:
        segments = path.split(".")
        current: Any = record
        for depth, segment in enumerate(segments[:-1]):
            current = current.get(segment) if isinstance(current, Mapping) else None
            if not isinstance(current, Mapping):
                walked = ".".join(segments[: depth + 1])
                raise FieldPathError(
                    f"Field path '{path}' is broken at '{walked}': "
                    "segment is missing or not an object",
                    path,
                )
        value = current.get(segments[-1])

    if value is None:
        raise FieldNotFoundError(f"Field '{path}' not found in input data", path)
    return value


def project_result(result: SanitizeResult, mode: OutputMode) -> Any:
    """Project a SanitizeResult into the value stored in the output field."""
    if mode == OutputMode.PARSED:
        return result.parsed
    if mode == OutputMode.STRING:
        return result.cleaned_string
    if mode == OutputMode.BOTH:
        return {
            "parsed": result.parsed,
            "cleanedString": result.cleaned_string,
            "wasAlreadyParsed": result.was_already_parsed,
            "wasRepaired": result.was_repaired,
            "originalType": result.original_type,
        }
    if mode == OutputMode.REPAIR:
        return {
            "parsed": result.parsed,
            "repairedString": result.cleaned_string,
            "wasRepaired": bool(result.was_repaired),
            "originalInput": result.original,
        }
    raise ValueError(f"Unknown output mode: {mode}")


class RecordProcessor:
    """Sanitizes one field of each record of a batch."""

    def __init__(
        self,
        options: Optional[ProcessorOptions] = None,
        config: Optional[SanitizeConfig] = None,
    ):
        self.options = options or ProcessorOptions()
        self.config = config or SanitizeConfig()

    def process(self, records: Iterable[Mapping[str, Any]]) -> list[dict[str, Any]]:
        """Process a whole batch and return the output records."""
        return list(self.iter_process(records))

    def iter_process(
        self, records: Iterable[Mapping[str, Any]]
    ) -> Iterator[dict[str, Any]]:
        """
        Process records lazily, one output record per input record.

        Raises:
            RecordProcessingError: On the first failing record when error
                handling is 'stop'
        """
        for item_index, record in enumerate(records):
            try:
                output = self._process_record(record)
            except jsonscrubError as e:
                if self.options.error_handling == ErrorHandlingMode.STOP:
                    raise RecordProcessingError(str(e), item_index) from e
                logger.debug("Record %d failed, continuing: %s", item_index, e)
                output = self._error_record(record, e, item_index)
            yield output

    def _process_record(self, record: Mapping[str, Any]) -> dict[str, Any]:
        value = extract_field(record, self.options.input_field)
        if self.options.output_mode == OutputMode.REPAIR:
            result = repair(value, self.config)
        else:
            result = sanitize(value, self.config)

        output = self._base_record(record)
        output[self.options.output_field] = project_result(
            result, self.options.output_mode
        )
        return output

    def _error_record(
        self, record: Mapping[str, Any], error: Exception, item_index: int
    ) -> dict[str, Any]:
        output = self._base_record(record)
        output["error"] = {
            "message": str(error),
            "type": type(error).__name__,
            "itemIndex": item_index,
        }
        return output

    def _base_record(self, record: Mapping[str, Any]) -> dict[str, Any]:
        if self.options.keep_original:
            return copy.deepcopy(dict(record))
        return {}
