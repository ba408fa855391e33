"""Dictionary file reader."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

logger = logging.getLogger(__name__)


def iter_dictionary(path: str | Path) -> Iterator[bytes]:
    """Yield raw lines of a newline-delimited word list.

    Lines are returned undecoded, terminators included, so the caller decides
    how to treat bytes that are not valid text.
    """
    path = Path(path)
    logger.debug(f"Reading dictionary {path}")
    with open(path, "rb") as f:
        yield from f
