"""
jsonscrub - scrubs almost-JSON until it parses.

jsonscrub takes text that is nearly JSON (LLM output wrapped in markdown
fences, configs with comments and trailing commas, documents that were JSON
encoded twice) and returns the parsed value together with a clean JSON string,
using the least invasive transformation that works.

Key Features:
- Already valid JSON passes through untouched
- Strips BOMs, markdown fences, comments and trailing commas
- Unwraps double-encoded JSON documents
- Escapes raw newlines and tabs inside string values
- Smart repair of unquoted keys, single quotes and missing commas, backed by
  the json_repair library with a regex heuristic fallback
- Batch processing of records with per-record error handling

Quick Start:
    import jsonscrub

    result = jsonscrub.sanitize('```json\\n{"a": 1,}\\n```')
    result.parsed          # {'a': 1}
    result.cleaned_string  # '{"a": 1}'

    result = jsonscrub.repair("{name: 'John', age: 30}")
    result.parsed          # {'name': 'John', 'age': 30}
    result.was_repaired    # True
"""

from .core.constants import ParseStage, RepairKind
from .core.engine import repair, sanitize
from .core.result import SanitizeResult
from .processing.records import (
    ErrorHandlingMode,
    OutputMode,
    ProcessorOptions,
    RecordProcessor,
    extract_field,
    project_result,
)
from .recovery.strategies import RepairOutcome, repair_text
from .security.exceptions import (
    FieldNotFoundError,
    FieldPathError,
    InvalidInputError,
    ParseError,
    RecordProcessingError,
    RepairError,
    SecurityError,
    TypeMismatchError,
    UnsupportedTypeError,
    jsonscrubError,
)
from .utils.config import (
    ErrorReporting,
    FallbackSettings,
    ParseLimits,
    PreprocessingConfig,
    RepairStrategy,
    SanitizeConfig,
)

__version__ = "0.1.0"
__author__ = "jsonscrub contributors"

__all__ = [
    # Entry points
    "sanitize", "repair", "repair_text",
    # Results
    "SanitizeResult", "RepairOutcome", "ParseStage", "RepairKind",
    # Configuration classes
    "SanitizeConfig", "PreprocessingConfig", "FallbackSettings",
    "ErrorReporting", "ParseLimits", "RepairStrategy",
    # Exception classes
    "jsonscrubError", "InvalidInputError", "UnsupportedTypeError",
    "TypeMismatchError", "ParseError", "RepairError", "SecurityError",
    "FieldPathError", "FieldNotFoundError", "RecordProcessingError",
    # Record processing
    "RecordProcessor", "ProcessorOptions", "OutputMode", "ErrorHandlingMode",
    "extract_field", "project_result",
]
