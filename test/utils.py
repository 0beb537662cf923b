"""
Utility tests (sentinel, read-only mirrors, validation, ordinals).
"""

from __future__ import annotations

import unittest
from unittest import TestCase

import clausal
from clausal.commands import Command
from clausal.faults import FaultCode, ValidationError
from clausal.utils import MAX_LENGTH, Unset, UnsetType, coalesce, ordinal, validate, validate_all


class TestUnset(TestCase):

    def testSingletonAndFalsey(self):
        self.assertIs(UnsetType(), Unset)
        self.assertFalse(Unset)
        self.assertEqual(repr(Unset), "Unset")

    def testNotSubclassable(self):
        with self.assertRaises(TypeError):
            type("Derived", (UnsetType,), {})

    def testNoUnionOperators(self):
        with self.assertRaises(TypeError):
            Unset | str

    def testCoalesce(self):
        self.assertEqual(coalesce(Unset, "x"), "x")
        self.assertIsNone(coalesce(None, "x"))
        self.assertEqual(coalesce("", "x"), "")


class TestMirror(TestCase):

    def testVariablesAreCopies(self):
        command = Command("file")
        command.add("name", "a")
        command.variables["name"].append("b")
        command.values("name").append("c")
        self.assertEqual(command.values("name"), ["a"])

    def testCommandAccessors(self):
        command = Command("file")
        self.assertFalse(command.has_variables())
        self.assertEqual(command.value("name", "none"), "none")
        command.add("name", "a")
        command.add("name", "b")
        self.assertTrue(command.has_variables())
        self.assertIn("name", command)
        self.assertEqual(command.value("name"), "a")
        self.assertEqual(repr(command), "command(name='file', variables={'name': ['a', 'b']})")

    def testCommandNeedsAName(self):
        with self.assertRaises(TypeError):
            Command("")


class TestValidate(TestCase):

    def testAcceptsText(self):
        self.assertEqual(validate("file", "definition"), "file")
        self.assertEqual(validate("", "argument", empty=True), "")

    def testRejects(self):
        for value in (None, "", " ", "x" * (MAX_LENGTH + 1)):
            with self.subTest(value=value), self.assertRaises(ValidationError) as context:
                validate(value, "definition")
            self.assertEqual(context.exception.code, FaultCode.INVALID_INPUT)

    def testSequences(self):
        self.assertEqual(validate_all(("a", "b"), "clause"), ["a", "b"])
        for values in ("ab", [], ["a"] * (MAX_LENGTH + 1), 3):
            with self.subTest(values=values), self.assertRaises(ValidationError):
                validate_all(values, "clause")


class TestMetadata(TestCase):

    def testAuthor(self):
        self.assertEqual(clausal.__author__, "Clausal Developers")
        self.assertEqual(clausal.__title__, "clausal")


class TestOrdinal(TestCase):

    def testWordsAndSuffixes(self):
        self.assertEqual(ordinal(1), "first")
        self.assertEqual(ordinal(10), "tenth")
        self.assertEqual(ordinal(11), "11th")
        self.assertEqual(ordinal(21), "21st")
        self.assertEqual(ordinal(112), "112th")
        self.assertEqual(ordinal(103), "103rd")


if __name__ == "__main__":
    unittest.main()
