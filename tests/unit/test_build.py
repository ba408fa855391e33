"""Unit tests for bulk build from dictionary lines."""

import logging
import shutil
import tempfile
from pathlib import Path

import pytest

from ccspell.components.bloom import BloomFilter
from ccspell.components.dictionary import iter_dictionary
from ccspell.core.errors import DictionaryDecodeError
from ccspell.core.types import DecodePolicy


@pytest.fixture
def temp_dir():
    """Create temporary directory for tests."""
    tmpdir = tempfile.mkdtemp()
    yield tmpdir
    shutil.rmtree(tmpdir, ignore_errors=True)


@pytest.fixture
def filter_path(temp_dir):
    return Path(temp_dir) / "words.bf"


def test_build_from_lines(filter_path):
    """Test the four-word scenario."""
    words = ["hello", "world", "foo", "bar"]

    bf = BloomFilter.build_from_source(words, filter_path, 100, 3)

    for word in words:
        assert bf.query(word)
    assert not bf.query("baz")


def test_build_persists_filter(filter_path):
    bf = BloomFilter.build_from_source(["hello", "world"], filter_path, 100, 3)

    loaded = BloomFilter.load(filter_path)

    assert loaded.bits == bf.bits
    assert loaded.size == 100
    assert loaded.hash_functions == 3


def test_build_strips_line_terminators(filter_path):
    lines = [b"hello\n", b"world\r\n", "foo\n", "bar"]

    bf = BloomFilter.build_from_source(lines, filter_path, 1000, 3)

    expected = BloomFilter(1000, 3)
    for word in ["hello", "world", "foo", "bar"]:
        expected.insert(word)
    assert bf.bits == expected.bits


def test_build_keeps_inner_whitespace(filter_path):
    bf = BloomFilter.build_from_source([b"ice cream\n"], filter_path, 1000, 3)

    assert bf.query("ice cream")


def test_build_skips_invalid_lines(filter_path):
    lines = [b"hello\n", b"\xff\xfe\n", b"world\n"]

    bf = BloomFilter.build_from_source(lines, filter_path, 100, 3)

    expected = BloomFilter(100, 3)
    expected.insert("hello")
    expected.insert("world")
    assert bf.bits == expected.bits
    assert filter_path.exists()


def test_build_fail_fast(filter_path):
    lines = [b"hello\n", b"\xff\xfe\n", b"world\n"]

    with pytest.raises(DictionaryDecodeError) as exc:
        BloomFilter.build_from_source(
            lines, filter_path, 100, 3, policy=DecodePolicy.FAIL_FAST
        )

    assert exc.value.line_number == 2
    assert isinstance(exc.value, ValueError)
    assert not filter_path.exists()


def test_build_accepts_policy_names(filter_path):
    with pytest.raises(DictionaryDecodeError):
        BloomFilter.build_from_source([b"\x80"], filter_path, 100, 3, policy="fail-fast")

    bf = BloomFilter.build_from_source([b"\x80"], filter_path, 100, 3, policy="skip-invalid")
    assert bf.is_empty


def test_build_skips_str_lines_with_surrogates(filter_path):
    bf = BloomFilter.build_from_source(["ok", "bad\udcff", "fine"], filter_path, 100, 3)

    expected = BloomFilter(100, 3)
    expected.insert("ok")
    expected.insert("fine")
    assert bf.bits == expected.bits
    assert filter_path.exists()


def test_build_fail_fast_on_str_lines_with_surrogates(filter_path):
    with pytest.raises(DictionaryDecodeError) as exc:
        BloomFilter.build_from_source(
            ["ok", "bad\udcff"], filter_path, 100, 3, policy=DecodePolicy.FAIL_FAST
        )

    assert exc.value.line_number == 2
    assert not filter_path.exists()


def test_build_rejects_unknown_policy(filter_path):
    with pytest.raises(ValueError):
        BloomFilter.build_from_source(["hello"], filter_path, 100, 3, policy="lenient")


def test_build_empty_source(filter_path):
    bf = BloomFilter.build_from_source([], filter_path, 64, 2)

    assert bf.is_empty
    assert BloomFilter.load(filter_path).is_empty


def test_build_logs_summary(filter_path, caplog):
    caplog.set_level(logging.INFO, logger="ccspell")

    BloomFilter.build_from_source([b"hello\n", b"\xff\n", b"world\n"], filter_path, 100, 3)

    assert "2 words (1 skipped)" in caplog.text


def test_build_from_dictionary_file(temp_dir, filter_path):
    dict_path = Path(temp_dir) / "dict.txt"
    dict_path.write_bytes(b"hello\nworld\nfoo\nbar\n")

    bf = BloomFilter.build_from_source(iter_dictionary(dict_path), filter_path, 100, 3)

    for word in ["hello", "world", "foo", "bar"]:
        assert bf.query(word)
    assert not bf.query("baz")
