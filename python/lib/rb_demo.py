#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""Demo driver for the fixed‑width word dictionary.

Usage:
    python rb_demo.py [--input PATH] [--count N] [--width L] \
        [--strategy rescan|snapshot] [--log-level LEVEL]

Reads ``N`` words (all of them when ``N`` is 0), prints the complete tree,
deletes every word starting with a vowel and prints the reduced tree.

Values default to environment variables RB_DEMO_INPUT, RB_DEMO_COUNT,
RB_DEMO_WIDTH, RB_DEMO_STRATEGY and RB_DEMO_LOG_LEVEL when set.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import List, Optional, TextIO

from dictionary_printer import write_tree
from red_black_tree import DEFAULT_KEY_WIDTH, RedBlackTree
from word_reader import load_tree

logger = logging.getLogger(__name__)

VOWELS = frozenset(b"aeiou")
DEFAULT_COUNT = 100


def config_logging(level: str) -> None:
    FORMAT = "[%(filename)s:%(lineno)s - %(funcName)s ] %(message)s"
    logging.basicConfig(format=FORMAT, level=level.upper())


def starts_with_vowel(key: bytes) -> bool:
    return key[0] in VOWELS


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    env = os.environ
    parser = argparse.ArgumentParser(
        description="Build a red-black word dictionary and drop vowel-initial words"
    )
    parser.add_argument(
        "--input",
        default=env.get("RB_DEMO_INPUT"),
        help="file with whitespace-separated words (default: stdin)",
    )
    parser.add_argument(
        "--count",
        type=int,
        default=int(env.get("RB_DEMO_COUNT", DEFAULT_COUNT)),
        help="number of words to read, 0 for all",
    )
    parser.add_argument(
        "--width",
        type=int,
        default=int(env.get("RB_DEMO_WIDTH", DEFAULT_KEY_WIDTH)),
    )
    parser.add_argument(
        "--strategy",
        choices=("rescan", "snapshot"),
        default=env.get("RB_DEMO_STRATEGY", "rescan"),
    )
    parser.add_argument(
        "--log-level",
        dest="log_level",
        default=env.get("RB_DEMO_LOG_LEVEL", "WARNING"),
    )
    return parser.parse_args(argv)


def run(
    source: TextIO,
    out: TextIO,
    count: Optional[int] = DEFAULT_COUNT,
    width: int = DEFAULT_KEY_WIDTH,
    strategy: str = "rescan",
) -> RedBlackTree:
    tree = RedBlackTree(width=width)
    loaded = load_tree(tree, source, limit=count)
    logger.info("loaded %d words", loaded)

    out.write("Complete tree:\n")
    write_tree(tree, out)

    removed = tree.delete_where(starts_with_vowel, strategy=strategy)
    logger.info("removed %d vowel-initial words", removed)

    out.write("\nReduced tree:\n")
    write_tree(tree, out)
    return tree


def main(
    argv: Optional[List[str]] = None,
    stdin: Optional[TextIO] = None,
    stdout: Optional[TextIO] = None,
) -> int:
    args = parse_args(argv)
    config_logging(args.log_level)
    source = stdin if stdin is not None else sys.stdin
    out = stdout if stdout is not None else sys.stdout
    count = args.count if args.count > 0 else None

    try:
        if args.input:
            with open(args.input, encoding="utf-8") as fh:
                run(fh, out, count=count, width=args.width, strategy=args.strategy)
        else:
            run(source, out, count=count, width=args.width, strategy=args.strategy)
    except (EOFError, OSError, ValueError) as exc:
        logger.error("%s", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
