"""Exception hierarchy for ccspell.

Defines all custom exceptions used throughout the implementation.
"""

from __future__ import annotations


class SpellError(Exception):
    """Base exception for all ccspell errors."""
    pass


class FilterFormatError(SpellError):
    """Raised when a persisted filter does not carry the CCBF magic tag."""
    pass


class UnsupportedVersionError(FilterFormatError):
    """Raised when a persisted filter declares an unknown format version."""

    def __init__(self, version: int):
        super().__init__(f"Unsupported bloom filter version: {version}")
        self.version = version


class FilterTruncatedError(SpellError, OSError):
    """Raised when a persisted filter ends before its declared bit array."""

    def __init__(self, expected: int, actual: int):
        super().__init__(f"Truncated bloom filter: expected {expected} bytes, got {actual}")
        self.expected = expected
        self.actual = actual


class DictionaryDecodeError(SpellError, ValueError):
    """Raised when a dictionary line is not valid UTF-8 under fail-fast policy."""

    def __init__(self, line_number: int):
        super().__init__(f"Dictionary line {line_number} is not valid UTF-8")
        self.line_number = line_number


class ConfigError(SpellError):
    """Raised when configuration is missing or invalid."""
    pass
