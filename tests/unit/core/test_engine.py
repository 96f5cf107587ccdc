"""
Test cases for the jsonscrub core engine.

Tests focus on the sanitize() stage order and its fallback chain. The
individual preprocessing steps are covered in the preprocessing tests.
"""

import json
import logging
import unittest

import jsonscrub
from jsonscrub.core.constants import ParseStage, RepairKind
from jsonscrub.core.engine import sanitize
from jsonscrub.security.exceptions import (
    InvalidInputError,
    ParseError,
    SecurityError,
    UnsupportedTypeError,
)
from jsonscrub.utils.config import (
    FallbackSettings,
    ParseLimits,
    PreprocessingConfig,
    SanitizeConfig,
)


class TestStructuredInput(unittest.TestCase):
    """Test values that are already parsed."""

    def test_object_is_pretty_printed(self):
        """Test that a dict passes through with a two-space pretty print."""
        value = {"a": 1, "b": [1, 2]}
        result = sanitize(value)

        self.assertTrue(result.was_already_parsed)
        self.assertIs(result.parsed, value)
        self.assertIs(result.original, value)
        self.assertEqual(json.loads(result.cleaned_string), value)
        self.assertEqual(result.cleaned_string, json.dumps(value, indent=2))
        self.assertEqual(result.stage, ParseStage.ALREADY_PARSED)
        self.assertIsNone(result.was_repaired)

    def test_array_input(self):
        """Test that a list is treated like an object."""
        value = [1, {"x": None}]
        result = sanitize(value)

        self.assertIs(result.parsed, value)
        self.assertEqual(result.original_type, "array")

    def test_non_ascii_kept_verbatim(self):
        """Test that pretty printing does not escape non-ASCII characters."""
        result = sanitize({"name": "Zoë"})
        self.assertIn("Zoë", result.cleaned_string)

    def test_unserializable_structure(self):
        """Test that a dict holding a set is rejected."""
        with self.assertRaises(UnsupportedTypeError):
            sanitize({"values": {1, 2}})


class TestDirectPath(unittest.TestCase):
    """Test that valid JSON is returned untouched."""

    def test_valid_json_is_only_trimmed(self):
        """Test cleaned_string equals the trimmed input for valid JSON."""
        text = '  \n{"a": 1,   "b": "x"}\t '
        result = sanitize(text)

        self.assertEqual(result.cleaned_string, text.strip())
        self.assertEqual(result.parsed, {"a": 1, "b": "x"})
        self.assertFalse(result.was_already_parsed)
        self.assertEqual(result.original, text)
        self.assertEqual(result.stage, ParseStage.DIRECT)

    def test_scalars(self):
        """Test that top-level scalars are accepted."""
        self.assertEqual(sanitize("42").parsed, 42)
        self.assertIsNone(sanitize("null").parsed)
        self.assertIs(sanitize("true").parsed, True)

    def test_plain_json_string(self):
        """Test that a JSON string without a nested document stays a string."""
        result = sanitize('"hello"')
        self.assertEqual(result.parsed, "hello")
        self.assertEqual(result.cleaned_string, '"hello"')
        self.assertEqual(result.original_type, "string")

    def test_byte_order_mark(self):
        """Test that a leading BOM is dropped."""
        result = sanitize('\ufeff{"a": 1}')
        self.assertEqual(result.parsed, {"a": 1})
        self.assertEqual(result.cleaned_string, '{"a": 1}')


class TestNormalizerStages(unittest.TestCase):
    """Test the transforms applied when the direct parse fails."""

    def test_markdown_fence(self):
        """Test stripping a ```json fence."""
        result = sanitize('```json\n{"a": 1}\n```')
        self.assertEqual(result.parsed, {"a": 1})
        self.assertEqual(result.cleaned_string, '{"a": 1}')
        self.assertEqual(result.stage, ParseStage.NORMALIZED)

    def test_markdown_fence_case_insensitive(self):
        """Test that the language token is matched case-insensitively."""
        result = sanitize('```JSON\n[1, 2]\n```')
        self.assertEqual(result.parsed, [1, 2])

    def test_markdown_fence_without_language(self):
        """Test a bare ``` fence."""
        result = sanitize("```\n[1, 2]\n```")
        self.assertEqual(result.parsed, [1, 2])

    def test_trailing_commas(self):
        """Test removal of commas before closing brackets."""
        result = sanitize('{"a": 1, "b": [1, 2,],}')
        self.assertEqual(result.parsed, {"a": 1, "b": [1, 2]})
        self.assertEqual(result.cleaned_string, '{"a": 1, "b": [1, 2]}')

    def test_comments_preserve_urls(self):
        """Test that comments go and URLs inside strings stay."""
        text = (
            "{\n"
            "  // comment\n"
            '  "url": "http://example.com", /* block */ "n": 1\n'
            "}"
        )
        result = sanitize(text)
        self.assertEqual(result.parsed, {"url": "http://example.com", "n": 1})
        self.assertNotIn("comment", result.cleaned_string)
        self.assertNotIn("block", result.cleaned_string)

    def test_trailing_line_comment(self):
        """Test a comment after the closing brace."""
        result = sanitize('{"a": 1} // done')
        self.assertEqual(result.cleaned_string, '{"a": 1}')

    def test_double_encoded_document(self):
        """Test unwrapping a JSON document encoded as a JSON string."""
        result = sanitize('"{\\"a\\": 1}"')
        self.assertEqual(result.parsed, {"a": 1})
        self.assertEqual(result.cleaned_string, '{"a": 1}')
        self.assertEqual(result.stage, ParseStage.NORMALIZED)

    def test_crlf_line_endings(self):
        """Test that CRLF is normalized to LF in the cleaned string."""
        result = sanitize('{\r\n  "a": 1,\r\n}')
        self.assertEqual(result.cleaned_string, '{\n  "a": 1\n}')
        self.assertEqual(result.parsed, {"a": 1})


class TestFallbackChain(unittest.TestCase):
    """Test the fallbacks after a failed strict parse."""

    def test_control_characters_in_strings(self):
        """Test escaping of raw newlines and tabs inside strings."""
        result = sanitize('{"text": "line1\nline2\tend"}')
        self.assertEqual(result.parsed, {"text": "line1\nline2\tend"})
        self.assertEqual(result.stage, ParseStage.CONTROL_CHARACTERS)
        self.assertIsNone(result.repair_kind)

    def test_repair_of_transformed_text(self):
        """Test that bare keys and single quotes reach the repair routine."""
        result = sanitize("{name: 'John', age: 30}")
        self.assertEqual(result.parsed, {"name": "John", "age": 30})
        self.assertEqual(result.cleaned_string, '{"name": "John", "age": 30}')
        self.assertEqual(result.stage, ParseStage.REPAIRED)
        self.assertEqual(result.repair_kind, RepairKind.HEURISTIC)

    def test_repair_of_original_text(self):
        """Test the last fallback when repairing the transformed text is off."""
        config = SanitizeConfig(fallback=FallbackSettings(repair_transformed=False))
        result = sanitize("{name: 'x'}", config)
        self.assertEqual(result.parsed, {"name": "x"})
        self.assertEqual(result.stage, ParseStage.REPAIRED_ORIGINAL)

    def test_fallbacks_disabled(self):
        """Test that disabling every fallback turns recoverable text into an error."""
        config = SanitizeConfig(
            fallback=FallbackSettings(
                escape_control_characters=False,
                repair_transformed=False,
                repair_original=False,
            )
        )
        with self.assertRaises(ParseError):
            sanitize('{"text": "a\nb"}', config)

    def test_conservative_preprocessing_keeps_string(self):
        """Test that without unwrapping a double-encoded document stays a string."""
        config = SanitizeConfig(preprocessing_config=PreprocessingConfig.conservative())
        result = sanitize('"{\\"a\\": 1}"', config)
        self.assertEqual(result.parsed, '{"a": 1}')


class TestErrors(unittest.TestCase):
    """Test input validation and terminal parse failures."""

    def test_invalid_inputs(self):
        """Test the error kind for each invalid input."""
        for value in (None, ""):
            with self.subTest(value=value):
                with self.assertRaises(InvalidInputError) as cm:
                    sanitize(value)
                self.assertIn(
                    "Input must be a non-empty string or object", str(cm.exception)
                )

        for value in (123, True, 1.5):
            with self.subTest(value=value):
                with self.assertRaises(UnsupportedTypeError) as cm:
                    sanitize(value)
                self.assertIn("Input must be a string or object", str(cm.exception))

    def test_errors_are_builtin_compatible(self):
        """Test that callers can catch builtin exception types."""
        with self.assertRaises(ValueError):
            sanitize("")
        with self.assertRaises(TypeError):
            sanitize(123)

    def test_parse_error_details(self):
        """Test the message, preview, position and suggestions of a ParseError."""
        with self.assertRaises(ParseError) as cm:
            sanitize('{"invalid": json}')

        error = cm.exception
        self.assertIn("Failed to parse JSON after sanitization", str(error))
        self.assertIn("Expecting value", error.original_message)
        self.assertEqual(error.preview, '{"invalid": json}')
        self.assertIn('Cleaned string preview: {"invalid": json}', str(error))
        self.assertEqual(error.position.line, 1)
        self.assertEqual(error.position.column, 13)
        self.assertIn("Try repair mode for aggressive structural repair", error.suggestions)

    def test_preview_is_truncated(self):
        """Test that long previews are cut and marked."""
        text = '{"a": ' + "x" * 300 + "}"
        with self.assertRaises(ParseError) as cm:
            sanitize(text)

        preview = cm.exception.preview
        self.assertEqual(len(preview), 203)
        self.assertTrue(preview.endswith("..."))

    def test_nan_is_rejected(self):
        """Test that non-standard constants never parse."""
        with self.assertRaises(ParseError):
            sanitize('{"a": NaN}')

    def test_input_size_limit(self):
        """Test that oversized input is rejected before processing."""
        config = SanitizeConfig(limits=ParseLimits(max_input_size=10))
        with self.assertRaises(SecurityError):
            sanitize('{"a": 1, "b": 2}', config)

    def test_blank_text_is_not_rejected(self):
        """Test that whitespace-only text goes through the fallback chain."""
        result = sanitize("   \n")
        self.assertEqual(result.parsed, "")
        self.assertEqual(result.cleaned_string, '""')
        self.assertEqual(result.stage, ParseStage.REPAIRED)
        self.assertEqual(result.repair_kind, RepairKind.LITERAL)

        config = SanitizeConfig(
            fallback=FallbackSettings(repair_transformed=False, repair_original=False)
        )
        with self.assertRaises(ParseError):
            sanitize("   ", config)

    def test_deep_nesting_raises_parse_error(self):
        """Test that exhausting the parser recursion surfaces as a ParseError."""
        with self.assertRaises(ParseError) as cm:
            sanitize("[" * 100000)
        self.assertTrue(cm.exception.preview.endswith("..."))


class TestProperties(unittest.TestCase):
    """Test properties that hold across inputs."""

    def test_idempotence(self):
        """Test sanitizing a cleaned string gives the same result."""
        inputs = [
            '```json\n{"a": 1, "b": [1, 2,],}\n```',
            '\ufeff  {"x": "y"}  ',
            '"{\\"a\\": [true, null]}"',
            '{"text": "a\nb"}',
            "{name: 'John'}",
        ]
        for text in inputs:
            with self.subTest(text=text):
                first = sanitize(text)
                second = sanitize(first.cleaned_string)
                self.assertEqual(second.parsed, first.parsed)
                self.assertEqual(second.cleaned_string, first.cleaned_string)

    def test_cleaned_string_always_parses(self):
        """Test that the cleaned string is strict JSON for every success."""
        for text in ("[1, 2,]", "// note\n[3]", '{"t": "a\tb"}'):
            with self.subTest(text=text):
                result = sanitize(text)
                self.assertEqual(json.loads(result.cleaned_string), result.parsed)

    def test_package_level_entry_point(self):
        """Test that the package exposes sanitize."""
        self.assertEqual(jsonscrub.sanitize("[1,]").parsed, [1])


class TestLogging(unittest.TestCase):
    """Test the debug trail of the fallback chain."""

    def test_fallback_is_logged(self):
        """Test that a recovery through a fallback is logged at DEBUG."""
        with self.assertLogs("jsonscrub.core.engine", level="DEBUG") as logs:
            sanitize('{"text": "a\nb"}')
        self.assertTrue(any("control_characters" in line for line in logs.output))

    def test_custom_logger(self):
        """Test that a configured logger receives the messages."""
        logger = logging.getLogger("jsonscrub.tests.custom")
        config = SanitizeConfig(logger=logger)
        with self.assertLogs("jsonscrub.tests.custom", level="DEBUG"):
            sanitize('{"text": "a\nb"}', config)


if __name__ == "__main__":
    unittest.main()
