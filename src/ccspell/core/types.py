"""Common type definitions for ccspell.

Defines fundamental types used across all components.
"""

from __future__ import annotations

from enum import Enum

Item = str


class Verdict(Enum):
    """Outcome of a membership check."""

    PROBABLY_PRESENT = "probably present"
    POSSIBLY_ABSENT = "possibly absent"


class DecodePolicy(Enum):
    """How bulk build treats dictionary lines that are not valid UTF-8."""

    SKIP_INVALID = "skip-invalid"
    FAIL_FAST = "fail-fast"


CheckResult = tuple[Item, Verdict]
