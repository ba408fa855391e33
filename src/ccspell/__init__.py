"""ccspell - Bloom filter spell checker in Python."""

__version__ = "0.1.0"

from .components.bloom import BloomFilter
from .components.dictionary import iter_dictionary
from .core.config import SpellConfig, load_config
from .core.errors import (
    SpellError,
    FilterFormatError,
    UnsupportedVersionError,
    FilterTruncatedError,
    DictionaryDecodeError,
    ConfigError,
)
from .core.types import Item, Verdict, DecodePolicy, CheckResult
from .interfaces.bloom import MembershipFilter

__all__ = [
    "BloomFilter",
    "iter_dictionary",
    "SpellConfig",
    "load_config",
    "SpellError",
    "FilterFormatError",
    "UnsupportedVersionError",
    "FilterTruncatedError",
    "DictionaryDecodeError",
    "ConfigError",
    "Item",
    "Verdict",
    "DecodePolicy",
    "CheckResult",
    "MembershipFilter",
]
