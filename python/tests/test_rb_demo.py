#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
test_rb_demo.py
---------------

End‑to‑end runs of the demo driver on small inputs.
"""

import io
import os
import tempfile
import unittest
from unittest import mock

from rb_demo import main, parse_args, starts_with_vowel

EXPECTED = (
    "Complete tree:\n"
    "apple BLACK\n"
    "banana BLACK\n"
    "cherry RED\n"
    "egg BLACK\n"
    "fig RED\n"
    "\n"
    "Reduced tree:\n"
    "banana BLACK\n"
    "cherry BLACK\n"
    "fig BLACK\n"
)


class TestRbDemo(unittest.TestCase):
    def _run(self, argv, text):
        out = io.StringIO()
        code = main(argv, stdin=io.StringIO(text), stdout=out)
        return code, out.getvalue()

    def test_starts_with_vowel(self):
        self.assertTrue(starts_with_vowel(b"apple"))
        self.assertTrue(starts_with_vowel(b"u\0\0"))
        self.assertFalse(starts_with_vowel(b"banana"))
        self.assertFalse(starts_with_vowel(b"Apple"))

    def test_vowel_scenario_from_stdin(self):
        for strategy in ("rescan", "snapshot"):
            with self.subTest(strategy=strategy):
                code, output = self._run(
                    ["--count", "5", "--strategy", strategy],
                    "banana apple cherry egg fig",
                )
                self.assertEqual(code, 0)
                self.assertEqual(output, EXPECTED)

    def test_count_zero_reads_everything(self):
        code, output = self._run(["--count", "0"], "banana apple\ncherry egg fig\n")
        self.assertEqual(code, 0)
        self.assertEqual(output, EXPECTED)

    def test_short_input_fails(self):
        with self.assertLogs(level="ERROR"):
            code, _ = self._run(["--count", "10"], "banana apple")
        self.assertEqual(code, 1)

    def test_reads_input_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "words.txt")
            with open(path, "w", encoding="utf-8") as fh:
                fh.write("banana apple cherry egg fig\n")
            code, output = self._run(["--input", path, "--count", "5"], "")
        self.assertEqual(code, 0)
        self.assertEqual(output, EXPECTED)

    def test_missing_input_file_fails(self):
        with self.assertLogs(level="ERROR"):
            code, _ = self._run(["--input", "/nonexistent/words.txt"], "")
        self.assertEqual(code, 1)

    def test_environment_defaults(self):
        env = {"RB_DEMO_COUNT": "7", "RB_DEMO_WIDTH": "16", "RB_DEMO_STRATEGY": "snapshot"}
        with mock.patch.dict(os.environ, env):
            args = parse_args([])
        self.assertEqual(args.count, 7)
        self.assertEqual(args.width, 16)
        self.assertEqual(args.strategy, "snapshot")
        self.assertIsNone(args.input)


if __name__ == "__main__":
    unittest.main(verbosity=2)
