"""
Configuration and limits for jsonscrub.

This module defines the preprocessing switches, fallback behaviour, error
reporting options and security limits used by sanitize() and repair().
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class RepairStrategy(Enum):
    """Which repair routine variant to run."""

    HEURISTIC = "heuristic"  # Regex rewrites, never reaches for a parser
    GRAMMAR = "grammar"  # json_repair, understands nesting and separators
    AUTO = "auto"  # Grammar-aware first, heuristic when it gives up


@dataclass
class ParseLimits:
    """Security limits applied before any text is processed."""

    max_input_size: int = 10 * 1024 * 1024

    def __post_init__(self) -> None:
        if self.max_input_size <= 0:
            raise ValueError("max_input_size must be positive")


@dataclass
class ExtractionSettings:
    """Settings for unwrapping JSON from its transport envelope."""

    strip_bom: bool = True
    extract_from_markdown: bool = True
    unwrap_double_encoding: bool = True


@dataclass
class CleanupSettings:
    """Settings for syntax cleanup inside the JSON text."""

    remove_trailing_commas: bool = True
    remove_comments: bool = True
    normalize_line_endings: bool = True


@dataclass
class PreprocessingConfig:
    """Granular control over the normalizer stages."""

    extraction: Optional[ExtractionSettings] = None
    cleanup: Optional[CleanupSettings] = None

    def __post_init__(self) -> None:
        if self.extraction is None:
            self.extraction = ExtractionSettings()
        if self.cleanup is None:
            self.cleanup = CleanupSettings()

    @property
    def strip_bom(self) -> bool:
        """Whether to drop a leading byte order mark."""
        assert self.extraction is not None
        return self.extraction.strip_bom

    @property
    def extract_from_markdown(self) -> bool:
        """Whether to strip markdown code fences."""
        assert self.extraction is not None
        return self.extraction.extract_from_markdown

    @property
    def unwrap_double_encoding(self) -> bool:
        """Whether to unwrap JSON documents encoded inside a JSON string."""
        assert self.extraction is not None
        return self.extraction.unwrap_double_encoding

    @property
    def remove_trailing_commas(self) -> bool:
        """Whether to drop commas directly before a closing bracket."""
        assert self.cleanup is not None
        return self.cleanup.remove_trailing_commas

    @property
    def remove_comments(self) -> bool:
        """Whether to strip block and line comments."""
        assert self.cleanup is not None
        return self.cleanup.remove_comments

    @property
    def normalize_line_endings(self) -> bool:
        """Whether to convert CRLF and CR line endings to LF."""
        assert self.cleanup is not None
        return self.cleanup.normalize_line_endings

    @classmethod
    def conservative(cls) -> "PreprocessingConfig":
        """Create a configuration that skips the lossy stages."""
        return cls(
            extraction=ExtractionSettings(unwrap_double_encoding=False),
            cleanup=CleanupSettings(remove_comments=False),
        )

    @classmethod
    def from_features(cls, enabled_features: set[str]) -> "PreprocessingConfig":
        """Create configuration from a set of enabled feature names."""
        config = cls(
            extraction=ExtractionSettings(
                strip_bom=False,
                extract_from_markdown=False,
                unwrap_double_encoding=False,
            ),
            cleanup=CleanupSettings(
                remove_trailing_commas=False,
                remove_comments=False,
                normalize_line_endings=False,
            ),
        )

        field_mapping = {
            "strip_bom": ("extraction", "strip_bom"),
            "extract_from_markdown": ("extraction", "extract_from_markdown"),
            "unwrap_double_encoding": ("extraction", "unwrap_double_encoding"),
            "remove_trailing_commas": ("cleanup", "remove_trailing_commas"),
            "remove_comments": ("cleanup", "remove_comments"),
            "normalize_line_endings": ("cleanup", "normalize_line_endings"),
        }

        for feature_name in enabled_features:
            if feature_name not in field_mapping:
                raise ValueError(f"Unknown preprocessing feature: {feature_name}")
            group_name, attr_name = field_mapping[feature_name]
            setattr(getattr(config, group_name), attr_name, True)

        return config


@dataclass
class FallbackSettings:
    """Which parse fallbacks the normalizer may try after the strict parse."""

    escape_control_characters: bool = True
    repair_transformed: bool = True
    repair_original: bool = True


@dataclass
class ErrorReporting:
    """Error reporting and preview settings."""

    preview_length: int = 200


@dataclass
class SanitizeConfig:
    """Configuration options for sanitize() and repair()."""

    limits: Optional[ParseLimits] = None
    preprocessing_config: Optional[PreprocessingConfig] = None
    fallback: Optional[FallbackSettings] = None
    error_reporting: Optional[ErrorReporting] = None
    fallback_strategy: RepairStrategy = RepairStrategy.HEURISTIC
    repair_strategy: RepairStrategy = RepairStrategy.AUTO
    logger: Optional[logging.Logger] = None

    def __post_init__(self) -> None:
        if self.limits is None:
            self.limits = ParseLimits()
        if self.preprocessing_config is None:
            self.preprocessing_config = PreprocessingConfig()
        if self.fallback is None:
            self.fallback = FallbackSettings()
        if self.error_reporting is None:
            self.error_reporting = ErrorReporting()

    @property
    def preview_length(self) -> int:
        """Number of characters of attempted text quoted in a ParseError."""
        assert self.error_reporting is not None
        return self.error_reporting.preview_length
