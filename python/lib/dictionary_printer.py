#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
dictionary_printer.py
---------------------

Text rendering of a :class:`red_black_tree.RedBlackTree`: one ``word COLOR``
line per stored key, in ascending key order.
"""

from __future__ import annotations

from typing import TextIO

from red_black_tree import RED, RedBlackTree


def color_label(color: bool) -> str:
    return "RED" if color == RED else "BLACK"


def display_key(key: bytes) -> str:
    """The text of *key* up to its first NUL byte."""
    return key.split(b"\0", 1)[0].decode("utf-8", errors="replace")


def format_entry(key: bytes, color: bool) -> str:
    return f"{display_key(key)} {color_label(color)}"


def write_tree(tree: RedBlackTree, stream: TextIO) -> int:
    """Write every entry of *tree* to *stream*, one per line; return the count."""
    written = 0
    for key, color in tree.traverse_in_order():
        stream.write(format_entry(key, color) + "\n")
        written += 1
    return written
