"""Configuration for ccspell.

Defines the tunable parameters of the command-line front end and loads them
from TOML. The bloom filter engine never reads configuration itself.
"""

from __future__ import annotations

import logging
import tomllib  # Python 3.11+
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

from .errors import ConfigError
from .types import DecodePolicy

DEFAULT_FILTER_PATH = "default_words.bf"


@dataclass
class SpellConfig:
    """Configuration parameters for building and checking filters.

    Attributes:
        filter_path: Filter file written by build and read by check
        size: Bit count for newly built filters
        hash_functions: Hash digests per word for newly built filters
        decode_policy: "skip-invalid" or "fail-fast" for undecodable lines
        log_level: Root logging level name
    """

    filter_path: str = DEFAULT_FILTER_PATH
    size: int = 3_670_016  # 448 KiB of bits
    hash_functions: int = 4
    decode_policy: str = DecodePolicy.SKIP_INVALID.value
    log_level: str = "WARNING"

    def __post_init__(self) -> None:
        for name in ("size", "hash_functions"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                raise ConfigError(f"{name} must be a positive integer, got {value!r}")
        if not isinstance(self.filter_path, str) or not self.filter_path:
            raise ConfigError(f"filter_path must be a non-empty string, got {self.filter_path!r}")
        try:
            DecodePolicy(self.decode_policy)
        except (ValueError, TypeError):
            raise ConfigError(f"Unknown decode_policy: {self.decode_policy!r}") from None
        if not isinstance(logging.getLevelName(str(self.log_level).upper()), int):
            raise ConfigError(f"Unknown log_level: {self.log_level!r}")

    @property
    def policy(self) -> DecodePolicy:
        return DecodePolicy(self.decode_policy)

    @staticmethod
    def from_dict(d: dict[str, Any]) -> SpellConfig:
        section = d.get("ccspell", d)
        if not isinstance(section, dict):
            raise ConfigError("[ccspell] must be a table")
        known = {f.name for f in fields(SpellConfig)}
        unknown = sorted(set(section) - known)
        if unknown:
            raise ConfigError(f"Unknown configuration keys: {', '.join(unknown)}")
        return SpellConfig(**section)


def load_config(path: Path) -> SpellConfig:
    """Load a SpellConfig from a TOML file."""
    if not path.exists():
        raise ConfigError(f"Config file not found: {path}")
    try:
        raw = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e
    try:
        data = tomllib.loads(raw)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {path}: {e}") from e
    return SpellConfig.from_dict(data)
