"""Bloom filter implementation.

Fixed-size bit-array bloom filter with seeded xxHash64 digests and the
CCBF v1 on-disk format.
"""

from __future__ import annotations

import logging
import os
import struct
from collections.abc import Iterable
from pathlib import Path

import xxhash
from bitarray import bitarray

from ..core.errors import (
    DictionaryDecodeError,
    FilterFormatError,
    FilterTruncatedError,
    UnsupportedVersionError,
)
from ..core.types import CheckResult, DecodePolicy, Item, Verdict

logger = logging.getLogger(__name__)

# Header format: [magic "CCBF" (4B)][version (2B)][hash_functions (2B)][size (4B)], big-endian
# Payload: bit array as little-endian 64-bit words, bit b of byte k = position k*8+b
MAGIC = b"CCBF"
VERSION = 1
HEADER = struct.Struct(">4sHHI")
WORD_BYTES = 8

MAX_SIZE = 2**32 - 1
MAX_HASH_FUNCTIONS = 2**16 - 1


class BloomFilter:
    """Probabilistic set membership test over a fixed-size bit array.

    Args:
        size: Number of addressable bit positions
        hash_functions: Number of seeded digests computed per item

    Invariants:
        - False positives are possible
        - False negatives are not possible
        - Bits are only ever set, never cleared
        - size and hash_functions are fixed at creation time
    """

    def __init__(self, size: int, hash_functions: int):
        if size <= 0 or size > MAX_SIZE:
            raise ValueError(f"size must be in 1..{MAX_SIZE}, got {size}")
        if hash_functions <= 0 or hash_functions > MAX_HASH_FUNCTIONS:
            raise ValueError(
                f"hash_functions must be in 1..{MAX_HASH_FUNCTIONS}, got {hash_functions}"
            )
        self.size = size
        self.hash_functions = hash_functions
        self.bits = bitarray(size, endian="little")
        self.bits.setall(False)

    def __repr__(self) -> str:
        return f"BloomFilter(size={self.size}, hash_functions={self.hash_functions})"

    @property
    def is_empty(self) -> bool:
        """True until the first bit is set."""
        return not self.bits.any()

    def hash(self, item: Item) -> list[int]:
        """Return one 64-bit digest per hash function, in seed order."""
        # Strings hash as their UTF-8 bytes followed by a 0xFF terminator
        data = item.encode("utf-8") + b"\xff"
        return [xxhash.xxh64(data, seed=i).intdigest() for i in range(self.hash_functions)]

    def insert(self, item: Item) -> None:
        """Add item to the filter."""
        for digest in self.hash(item):
            self.bits[digest % self.size] = True

    def query(self, item: Item) -> bool:
        """Return True if item may be present; False if definitely absent."""
        for digest in self.hash(item):
            if not self.bits[digest % self.size]:
                return False
        return True

    def __contains__(self, item: Item) -> bool:
        return self.query(item)

    def check_words(self, words: Iterable[Item]) -> list[CheckResult]:
        """Query each word independently and return (word, verdict) pairs."""
        return [
            (word, Verdict.PROBABLY_PRESENT if self.query(word) else Verdict.POSSIBLY_ABSENT)
            for word in words
        ]

    def serialize(self) -> bytes:
        """Serialize filter to CCBF v1 bytes."""
        header = HEADER.pack(MAGIC, VERSION, self.hash_functions, self.size)
        payload = self.bits.tobytes()
        # Pad the payload out to whole words
        payload += b"\x00" * (-len(payload) % WORD_BYTES)
        return header + payload

    @classmethod
    def deserialize(cls, data: bytes) -> BloomFilter:
        """Deserialize filter from CCBF v1 bytes."""
        if len(data) < HEADER.size:
            raise FilterTruncatedError(HEADER.size, len(data))

        magic, version, hash_functions, size = HEADER.unpack_from(data)
        if magic != MAGIC:
            raise FilterFormatError(f"Invalid bloom filter header: {magic!r}")
        if version != VERSION:
            raise UnsupportedVersionError(version)
        if size == 0 or hash_functions == 0:
            raise FilterFormatError(
                f"Invalid bloom filter parameters: size={size}, hash_functions={hash_functions}"
            )

        byte_size = (size + 7) // 8
        payload = data[HEADER.size:HEADER.size + byte_size]
        if len(payload) < byte_size:
            raise FilterTruncatedError(HEADER.size + byte_size, len(data))

        bf = cls(size, hash_functions)
        bits = bitarray(endian="little")
        bits.frombytes(payload)
        # Pad bits past size are ignored
        del bits[size:]
        bf.bits = bits
        return bf

    def save(self, path: str | Path) -> None:
        """Write the filter to path, replacing any existing file atomically."""
        path = Path(path)
        data = self.serialize()
        temp_path = path.with_name(path.name + ".tmp")
        try:
            with open(temp_path, "wb") as f:
                f.write(data)
                f.flush()
                os.fsync(f.fileno())
            os.replace(temp_path, path)
        except BaseException:
            temp_path.unlink(missing_ok=True)
            raise
        logger.debug(f"Saved bloom filter to {path} ({len(data)} bytes)")

    @classmethod
    def load(cls, path: str | Path) -> BloomFilter:
        """Read a filter previously written by save()."""
        path = Path(path)
        with open(path, "rb") as f:
            data = f.read()
        bf = cls.deserialize(data)
        logger.debug(
            f"Loaded bloom filter from {path}: size={bf.size}, hash_functions={bf.hash_functions}"
        )
        return bf

    @classmethod
    def build_from_source(
        cls,
        lines: Iterable[str | bytes],
        path: str | Path,
        size: int,
        hash_functions: int,
        policy: DecodePolicy | str = DecodePolicy.SKIP_INVALID,
    ) -> BloomFilter:
        """Insert every dictionary line into a fresh filter and save it to path.

        Args:
            lines: Dictionary lines, with or without their line terminators
            path: Destination filter file
            size: Bit count of the new filter
            hash_functions: Digests per word of the new filter
            policy: What to do with lines that are not valid UTF-8

        Returns:
            The populated filter

        Raises:
            DictionaryDecodeError: Undecodable line under DecodePolicy.FAIL_FAST
        """
        policy = DecodePolicy(policy)
        bf = cls(size, hash_functions)
        inserted = 0
        skipped = 0

        for line_number, line in enumerate(lines, start=1):
            try:
                if isinstance(line, bytes):
                    line = line.decode("utf-8")
                else:
                    # Lone surrogates (e.g. from surrogateescape) are not valid text
                    line.encode("utf-8")
            except UnicodeError as e:
                if policy is DecodePolicy.FAIL_FAST:
                    raise DictionaryDecodeError(line_number) from e
                logger.debug(f"Skipping undecodable dictionary line {line_number}")
                skipped += 1
                continue
            bf.insert(_strip_terminator(line))
            inserted += 1

        bf.save(path)
        logger.info(
            f"Bloom filter created from {inserted} words ({skipped} skipped) and saved as '{path}'"
        )
        return bf


def _strip_terminator(line: str) -> str:
    """Drop one trailing "\\n" or "\\r\\n"."""
    if line.endswith("\n"):
        line = line[:-1]
        if line.endswith("\r"):
            line = line[:-1]
    return line
