# ccspell command line: --build writes a filter file from a word list, --check reports a verdict per word.
from __future__ import annotations

import argparse
import dataclasses
import logging
import sys
from pathlib import Path

from ccspell import __version__
from ccspell.components.bloom import BloomFilter
from ccspell.components.dictionary import iter_dictionary
from ccspell.core.config import SpellConfig, load_config
from ccspell.core.errors import ConfigError, SpellError
from ccspell.core.types import DecodePolicy, Verdict
from ccspell.interfaces.bloom import MembershipFilter

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="ccspell", description="Spell checker using a Bloom Filter"
    )
    p.add_argument(
        "--build",
        type=Path,
        metavar="FILE",
        help="Builds a Bloom Filter from a dictionary file",
    )
    p.add_argument("--size", type=int, help="Bit count of the filter to build")
    p.add_argument(
        "--num-hashes",
        "--num_hashes",
        dest="num_hashes",
        type=int,
        help="Hash functions per word for the filter to build",
    )
    p.add_argument(
        "--check",
        nargs="+",
        metavar="WORD",
        help="Checks if words are in the dictionary",
    )
    p.add_argument(
        "--filter",
        type=Path,
        help="Filter file to write or read (default: default_words.bf)",
    )
    p.add_argument(
        "--strict",
        action="store_true",
        help="Fail the build on dictionary lines that are not valid UTF-8",
    )
    p.add_argument("--config", type=Path, help="TOML configuration file")
    p.add_argument(
        "-v", "--verbose", action="count", default=0, help="Increase log verbosity"
    )
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return p


def resolve_config(args: argparse.Namespace) -> SpellConfig:
    """Merge the optional config file with command-line overrides."""
    config = load_config(args.config) if args.config else SpellConfig()
    overrides = {}
    if args.size is not None:
        overrides["size"] = args.size
    if args.num_hashes is not None:
        overrides["hash_functions"] = args.num_hashes
    if args.filter is not None:
        overrides["filter_path"] = str(args.filter)
    if args.strict:
        overrides["decode_policy"] = DecodePolicy.FAIL_FAST.value
    if args.verbose:
        overrides["log_level"] = "INFO" if args.verbose == 1 else "DEBUG"
    return dataclasses.replace(config, **overrides)


def setup_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def format_result(word: str, verdict: Verdict) -> str:
    if verdict is Verdict.PROBABLY_PRESENT:
        return f"'{word}' is probably spelled correctly."
    return f"'{word}' might be misspelled."


def report(bloom: MembershipFilter, words: list[str]) -> None:
    for word, verdict in bloom.check_words(words):
        print(format_result(word, verdict))


def main(argv: list[str] | None = None) -> int:
    argv = argv if argv is not None else sys.argv[1:]
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = resolve_config(args)
    except ConfigError as e:
        print(f"Error in configuration: {e}", file=sys.stderr)
        return 2

    if args.build is None and not args.check:
        parser.print_usage(sys.stderr)
        return 2

    setup_logging(config.log_level)

    if args.build is not None:
        try:
            BloomFilter.build_from_source(
                iter_dictionary(args.build),
                config.filter_path,
                config.size,
                config.hash_functions,
                config.policy,
            )
        except (SpellError, OSError, ValueError) as e:
            print(f"Error building bloom filter: {e}", file=sys.stderr)
            return 1
        print(f"Bloom filter created and saved as '{config.filter_path}'")

    if args.check:
        try:
            bloom = BloomFilter.load(config.filter_path)
        except (SpellError, OSError) as e:
            print(f"Error loading file {config.filter_path}: {e}", file=sys.stderr)
            return 1
        logger.debug(f"Checking {len(args.check)} words against {bloom!r}")
        try:
            report(bloom, args.check)
        except UnicodeError as e:
            print(f"Error checking words: {e}", file=sys.stderr)
            return 1

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
