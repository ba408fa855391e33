"""Protocol definition for membership filters."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import Protocol, runtime_checkable

from ..core.types import CheckResult, Item


@runtime_checkable
class MembershipFilter(Protocol):
    """Probabilistic set membership test."""

    def insert(self, item: Item) -> None:
        """Add item to the filter."""
        ...

    def query(self, item: Item) -> bool:
        """Return True if item may be present; False if definitely absent.

        Invariants:
            - Never False for an item inserted into this filter
        """
        ...

    def __contains__(self, item: Item) -> bool:
        ...

    def check_words(self, words: Iterable[Item]) -> list[CheckResult]:
        """Return a verdict for each word, in input order."""
        ...

    def serialize(self) -> bytes:
        """Serialize filter to bytes."""
        ...

    @classmethod
    def deserialize(cls, data: bytes) -> MembershipFilter:
        """Deserialize filter from bytes."""
        ...

    def save(self, path: str | Path) -> None:
        """Persist filter to path."""
        ...

    @classmethod
    def load(cls, path: str | Path) -> MembershipFilter:
        """Read filter from path."""
        ...
