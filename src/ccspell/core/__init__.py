"""ccspell core package."""

from .config import SpellConfig, load_config
from .types import CheckResult, DecodePolicy, Item, Verdict

__all__ = ["SpellConfig", "load_config", "CheckResult", "DecodePolicy", "Item", "Verdict"]
