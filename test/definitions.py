"""
Definition grammar tests (clause splitting, classification, compilation).

Scope
- Validate sigil classification and list suffix handling.
- Validate every compile-time rule and the fault it raises.
- Validate that compile() never touches the variables it is given.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from clausal.definitions import (
    CommandDefinition,
    Token,
    TokenKind,
    clauses,
    classify,
    compile,
    tokenize,
)
from clausal.faults import (
    DuplicateError,
    FaultCode,
    MissingError,
    UnsupportedError,
    ValidationError,
)


class TestClauses(TestCase):

    def testStringIsSplitOnCommas(self):
        self.assertEqual(clauses("file ,  !name,#Load a file"), ["file", "!name", "#Load a file"])

    def testSequenceIsNeverSplitAgain(self):
        self.assertEqual(clauses(["file", " !name ", r":[\w,]+"]), ["file", "!name", r":[\w,]+"])

    def testEmptyClausesVanish(self):
        self.assertEqual(clauses("file, , !name,"), ["file", "!name"])

    def testEmptyDefinitionRaises(self):
        for source in ("", "   ", []):
            with self.subTest(source=source), self.assertRaises(ValidationError):
                clauses(source)

    def testNonStringClauseRaises(self):
        with self.assertRaises(ValidationError):
            clauses(["file", 42])

    def testOverlongDefinitionRaises(self):
        with self.assertRaises(ValidationError):
            clauses("x" * 257)


class TestClassify(TestCase):

    def testSigils(self):
        cases = {
            "file": Token(TokenKind.COMMAND, "file"),
            "#Load a file": Token(TokenKind.DESCRIPTION, "Load a file"),
            r":\d+": Token(TokenKind.REGEX_VALUE, r"\d+"),
            "!name": Token(TokenKind.REQUIRED_VALUE, "name"),
            "!names...": Token(TokenKind.REQUIRED_LIST_VALUE, "names"),
            "?mode": Token(TokenKind.OPTIONAL_VALUE, "mode"),
            "?modes...": Token(TokenKind.OPTIONAL_LIST_VALUE, "modes"),
        }
        for clause, token in cases.items():
            with self.subTest(clause=clause):
                self.assertEqual(classify(clause), token)

    def testTokenizeKeepsSourceOrder(self):
        kinds = [token.kind for token in tokenize(r"file, !name, :\d+\.txt, #desc")]
        self.assertEqual(kinds, [
            TokenKind.COMMAND,
            TokenKind.REQUIRED_VALUE,
            TokenKind.REGEX_VALUE,
            TokenKind.DESCRIPTION,
        ])


class TestCompile(TestCase):

    def define(self, source, variables=frozenset()):
        return compile(tokenize(source), variables)

    def testFullDefinition(self):
        definition = self.define(r"-f, --file, !first, ?second, ?rest..., :\w+\.txt, #Load files")
        self.assertEqual(definition.names, ("-f", "--file"))
        self.assertEqual(definition.name, "-f")
        self.assertEqual(definition.description, "Load files")
        self.assertEqual(definition.regex, r"\w+\.txt")
        self.assertEqual(definition.required, ("first",))
        self.assertEqual(definition.optional, ("second",))
        self.assertIsNone(definition.required_list)
        self.assertEqual(definition.optional_list, "rest")
        self.assertEqual(definition.variables, ("first", "second", "rest"))

    def testPatternIsCompiledOnce(self):
        definition = self.define(r"file, !name, :\d+\.txt")
        self.assertIs(definition.pattern, definition.pattern)
        self.assertIsNotNone(definition.pattern.fullmatch("1.txt"))

    def testNoRegexMeansNoPattern(self):
        self.assertIsNone(self.define("quit").pattern)

    def testCommandMayShareItsNameWithAVariable(self):
        definition = self.define("file, !file")
        self.assertEqual(definition.required, ("file",))

    def testRepresentation(self):
        self.assertTrue(repr(self.define("file")).startswith("command-definition(names=('file',)"))

    def testEquality(self):
        self.assertEqual(self.define("file, !name"), CommandDefinition(["file"], required=["name"]))

    def testDescriptionOnlyRaisesMissing(self):
        with self.assertRaises(MissingError) as context:
            self.define("#only a description")
        self.assertEqual(context.exception.code, FaultCode.MISSING_NAME)

    def testSigilWithoutNameRaisesMissing(self):
        for source in ("file, !", "file, ?...", "file, !..."):
            with self.subTest(source=source), self.assertRaises(MissingError):
                self.define(source)

    def testRepeatedCommandRaisesDuplicate(self):
        with self.assertRaises(DuplicateError) as context:
            self.define("file, file, !name")
        self.assertEqual(context.exception.code, FaultCode.DUPLICATE_NAME)

    def testSecondDescriptionRaisesDuplicate(self):
        with self.assertRaises(DuplicateError) as context:
            self.define("file, #one, #two")
        self.assertEqual(context.exception.code, FaultCode.DUPLICATE_DESCRIPTION)

    def testEmptyDescriptionStillCountsAsTheOne(self):
        with self.assertRaises(DuplicateError) as context:
            self.define("cmd, #, #second")
        self.assertEqual(context.exception.code, FaultCode.DUPLICATE_DESCRIPTION)

    def testEmptyRegexStillCountsAsTheOne(self):
        with self.assertRaises(DuplicateError) as context:
            self.define(["cmd", ":", r":\d+"])
        self.assertEqual(context.exception.code, FaultCode.DUPLICATE_REGEX)

    def testSecondRegexRaisesDuplicate(self):
        with self.assertRaises(DuplicateError) as context:
            self.define(r"file, :\d+, :\w+")
        self.assertEqual(context.exception.code, FaultCode.DUPLICATE_REGEX)

    def testRequiredAndOptionalWithSameNameRaisesDuplicate(self):
        with self.assertRaises(DuplicateError) as context:
            self.define("file, !fileName, ?fileName")
        self.assertEqual(context.exception.code, FaultCode.DUPLICATE_VARIABLE)

    def testVariableClaimedElsewhereRaisesDuplicate(self):
        with self.assertRaises(DuplicateError):
            self.define("copy, !source", {"source"})

    def testSecondListRaisesUnsupported(self):
        with self.assertRaises(UnsupportedError) as context:
            self.define("file, !fileNames..., ?fileNames...")
        self.assertEqual(context.exception.code, FaultCode.SECOND_LIST)
        self.assertEqual(context.exception.suggestions, [])

    def testRequiredAfterOptionalRaisesUnsupported(self):
        for source in ("file, ?a..., !b...", "file, ?a, !b"):
            with self.subTest(source=source), self.assertRaises(UnsupportedError) as context:
                self.define(source)
            self.assertEqual(context.exception.code, FaultCode.REQUIRED_AFTER_OPTIONAL)

    def testWhitespaceInNameRaisesUnsupported(self):
        for source in ("file !fileName ?fileTypes", "file, !file name"):
            with self.subTest(source=source), self.assertRaises(UnsupportedError) as context:
                self.define(source)
            self.assertEqual(context.exception.code, FaultCode.WHITESPACE_NAME)

    def testInvalidRegexRaisesUnsupported(self):
        with self.assertRaises(UnsupportedError) as context:
            self.define("file, !name, :[")
        self.assertEqual(context.exception.code, FaultCode.INVALID_REGEX)

    def testUnknownTokenKindRaisesUnsupported(self):
        with self.assertRaises(UnsupportedError) as context:
            compile([Token(TokenKind.COMMAND, "file"), Token("bogus", "x")])
        self.assertEqual(context.exception.code, FaultCode.UNKNOWN_TOKEN_KIND)

    def testCompileDoesNotMutateClaimedVariables(self):
        claimed = {"other"}
        self.define("file, !name", claimed)
        self.assertEqual(claimed, {"other"})


if __name__ == "__main__":
    unittest.main()
