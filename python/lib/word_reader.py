#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
word_reader.py
--------------

Turns whitespace‑delimited text into fixed‑width keys for a
:class:`red_black_tree.RedBlackTree`.

Each token is UTF‑8 encoded, then truncated or right‑padded with NUL bytes
to exactly ``width`` bytes.  Because the tree compares keys over their full
width, NUL padding makes a word sort directly before any longer word it is
a prefix of (``b"fig\\0..."`` < ``b"figs..."``).
"""

from __future__ import annotations

import logging
from typing import Iterator, Optional, TextIO, Union

from red_black_tree import DEFAULT_KEY_WIDTH, RedBlackTree

logger = logging.getLogger(__name__)

PAD_BYTE = b"\0"


def fit_to_width(token: Union[str, bytes], width: int = DEFAULT_KEY_WIDTH) -> bytes:
    """Return *token* as exactly ``width`` bytes, NUL‑padded or truncated."""
    if width <= 0:
        raise ValueError(f"key width must be positive, got {width}")
    raw = token.encode("utf-8") if isinstance(token, str) else bytes(token)
    if len(raw) > width:
        logger.debug("truncating %r to %d bytes", raw, width)
        return raw[:width]
    return raw.ljust(width, PAD_BYTE)


def read_words(
    stream: TextIO,
    limit: Optional[int] = None,
    width: int = DEFAULT_KEY_WIDTH,
) -> Iterator[bytes]:
    """
    Yield the whitespace‑delimited tokens of *stream* as fixed‑width keys,
    stopping after ``limit`` tokens when one is given.
    """
    if limit is not None and limit <= 0:
        return
    produced = 0
    for line in stream:
        for token in line.split():
            yield fit_to_width(token, width)
            produced += 1
            if limit is not None and produced >= limit:
                return


def load_tree(tree: RedBlackTree, stream: TextIO, limit: Optional[int] = None) -> int:
    """
    Insert the words of *stream* into *tree* and return how many were read.

    Raises ``EOFError`` when ``limit`` words were requested but the stream
    ran out first; the words read so far stay in the tree.
    """
    count = 0
    for key in read_words(stream, limit=limit, width=tree.width):
        tree.insert(key)
        count += 1
    if limit is not None and count < limit:
        logger.warning("expected %d words, input ended after %d", limit, count)
        raise EOFError(f"expected {limit} words, got {count}")
    return count
