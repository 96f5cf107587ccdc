"""
jsonscrub Record Processing.

This module applies sanitize()/repair() across batches of records.
"""

from .records import (
    ErrorHandlingMode,
    OutputMode,
    ProcessorOptions,
    RecordProcessor,
    extract_field,
    project_result,
)

__all__ = [
    "RecordProcessor",
    "ProcessorOptions",
    "OutputMode",
    "ErrorHandlingMode",
    "extract_field",
    "project_result",
]
