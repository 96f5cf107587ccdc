"""
Common constants and enums used across the jsonscrub library.
"""

from enum import Enum

BYTE_ORDER_MARK = "\ufeff"

# Characters a structured JSON token may start with
STRUCTURED_START_CHARS = ("[", "{", '"')

# Raw control characters escaped inside string literals by the fallback pass
CONTROL_CHAR_ESCAPE_MAP = {
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}

# Literal sequences unescaped after a double-encoded document is unwrapped.
# Backslash goes last so earlier replacements are not processed twice.
DOUBLE_ENCODING_UNESCAPES = (
    ('\\"', '"'),
    ("\\n", "\n"),
    ("\\r", "\r"),
    ("\\t", "\t"),
    ("\\\\", "\\"),
)

PRETTY_PRINT_INDENT = 2


class RepairKind(Enum):
    """Tag for the repair routine variant that produced a text."""

    HEURISTIC = "heuristic"
    GRAMMAR = "grammar"
    LITERAL = "literal"  # Non-JSON text wrapped as a string literal
    NONE = "none"  # Text already parsed, returned untouched


class ParseStage(Enum):
    """Which attempt of the parse chain produced a result."""

    ALREADY_PARSED = "already_parsed"
    DIRECT = "direct"
    NORMALIZED = "normalized"
    CONTROL_CHARACTERS = "control_characters"
    REPAIRED = "repaired"
    REPAIRED_ORIGINAL = "repaired_original"
    SMART_REPAIR = "smart_repair"
