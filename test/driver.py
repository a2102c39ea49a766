# python
"""
Demo driver tests (main.py).

Scope
- The driver prints every parsed value on success and returns 0.
- On a parse failure it prints the diagnostic to standard error and returns 1.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import io
import unittest
from contextlib import redirect_stdout, redirect_stderr
from unittest import TestCase

import main


class TestDriver(TestCase):
    def testPrintsParsedValues(self):
        buffer = io.StringIO()
        with redirect_stdout(buffer):
            status = main.main(["prog", "-v", "-r", "5", "42", "Alice", "slow"])
        self.assertEqual(status, 0)
        self.assertEqual(buffer.getvalue(), (
            "Verbose: true\n"
            "Retries: 5\n"
            "Output file: default.txt\n"
            "ID: 42\n"
            "Name: Alice\n"
            "Mode: slow\n"
        ))

    def testDefaults(self):
        buffer = io.StringIO()
        with redirect_stdout(buffer):
            status = main.main(["prog", "7"])
        self.assertEqual(status, 0)
        self.assertIn("Name: Yorgos Lanthimos\n", buffer.getvalue())
        self.assertIn("Mode: auto\n", buffer.getvalue())

    def testFailureReportsDiagnostic(self):
        buffer = io.StringIO()
        with redirect_stderr(buffer):
            status = main.main(["prog"])
        self.assertEqual(status, 1)
        self.assertIn("Error: No value provided for positional argument id", buffer.getvalue())


if __name__ == "__main__":
    unittest.main()
