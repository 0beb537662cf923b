"""
Argument tokenizer tests.

The defining property: an argument vector normalizes to the same tokens
whether or not the shell already split it on '=' and ','.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from clausal.faults import ValidationError
from clausal.tokenizer import split, tokenize


class TestTokenize(TestCase):

    def testJoinedAndSplitFormsAgree(self):
        joined = tokenize(["-f=file1.txt,file2.txt"])
        spread = tokenize(["-f", "=", "file1.txt", ",", "file2.txt"])
        self.assertEqual(joined, ["-f", "file1.txt", "file2.txt"])
        self.assertEqual(joined, spread)

    def testSpacesAroundEqualsAreTrimmed(self):
        self.assertEqual(tokenize(["file = file1.txt"]), ["file", "file1.txt"])

    def testShellLikeString(self):
        self.assertEqual(tokenize("file = file1.txt"), ["file", "file1.txt"])
        self.assertEqual(tokenize("copy 'my file.txt'"), ["copy", "my file.txt"])

    def testLoneDelimitersContributeNothing(self):
        self.assertEqual(tokenize(["=", ",", "quit"]), ["quit"])
        self.assertEqual(list(split("=,")), [])

    def testBlankArgumentsContributeNothing(self):
        self.assertEqual(tokenize(["  ", "quit", ""]), ["quit"])

    def testPropertyToken(self):
        self.assertEqual(tokenize(["-Dkey=value"]), ["-Dkey", "value"])

    def testEmptyVectorRaises(self):
        with self.assertRaises(ValidationError):
            tokenize([])

    def testNonStringArgumentRaises(self):
        with self.assertRaises(ValidationError):
            tokenize(["file", 1])

    def testOverlongArgumentRaises(self):
        with self.assertRaises(ValidationError):
            tokenize(["x" * 257])

    def testTooManyArgumentsRaises(self):
        with self.assertRaises(ValidationError):
            tokenize(["quit"] * 257)


if __name__ == "__main__":
    unittest.main()
