#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
test_dictionary_printer.py
--------------------------

Tests for the ``word COLOR`` text rendering of a tree.
"""

import io
import unittest

from dictionary_printer import color_label, display_key, format_entry, write_tree
from red_black_tree import BLACK, RED, RedBlackTree


class TestDictionaryPrinter(unittest.TestCase):
    def test_color_label(self):
        self.assertEqual(color_label(RED), "RED")
        self.assertEqual(color_label(BLACK), "BLACK")

    def test_display_key_stops_at_nul(self):
        self.assertEqual(display_key(b"cat\0\0X\0\0"), "cat")
        self.assertEqual(display_key(b"full"), "full")
        self.assertEqual(display_key(b"\xc3\0"), "�")

    def test_format_entry(self):
        self.assertEqual(format_entry(b"egg\0\0", BLACK), "egg BLACK")

    def test_write_tree(self):
        tree = RedBlackTree(width=8)
        for word in (b"banana", b"apple", b"cherry"):
            tree.insert(word.ljust(8, b"\0"))

        out = io.StringIO()
        self.assertEqual(write_tree(tree, out), 3)
        self.assertEqual(
            out.getvalue(), "apple RED\nbanana BLACK\ncherry RED\n"
        )

    def test_write_empty_tree(self):
        out = io.StringIO()
        self.assertEqual(write_tree(RedBlackTree(), out), 0)
        self.assertEqual(out.getvalue(), "")


if __name__ == "__main__":
    unittest.main(verbosity=2)
