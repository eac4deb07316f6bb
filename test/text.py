"""
Text layout behavioral tests (break classes, break opportunities, optimal wrapping).

Scope
- Validate the ASCII line-break classification table and the pair table lookups.
- Validate break-opportunity scanning (spaces, mandatory breaks, leading blanks).
- Validate paragraph wrapping: layout choice, overflow fallback, blank paragraphs,
  contiguity of emitted lines and idempotence on already-short lines.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from rigging.text import LineBreakClass, BreakAction, classify, action, breaks, wrap

FOX = "The quick brown fox jumps over the lazy dog"


class TestClassify(TestCase):
    """Behavioral tests for classify() and action()."""

    def testLettersAreAlphabetic(self):
        for char in "azAZ&*@_~":
            self.assertIs(classify(char), LineBreakClass.AL, char)

    def testDigitsAreNumeric(self):
        for char in "0123456789":
            self.assertIs(classify(char), LineBreakClass.NU)

    def testPunctuationClasses(self):
        expected = {
            "(": LineBreakClass.OP,
            "[": LineBreakClass.OP,
            "{": LineBreakClass.OP,
            ")": LineBreakClass.CP,
            "]": LineBreakClass.CP,
            "}": LineBreakClass.CL,
            "!": LineBreakClass.EX,
            "?": LineBreakClass.EX,
            "\"": LineBreakClass.QU,
            "'": LineBreakClass.QU,
            "$": LineBreakClass.PR,
            "+": LineBreakClass.PR,
            "\\": LineBreakClass.PR,
            "%": LineBreakClass.PO,
            ",": LineBreakClass.IS,
            ".": LineBreakClass.IS,
            ":": LineBreakClass.IS,
            ";": LineBreakClass.IS,
            "/": LineBreakClass.SY,
            "-": LineBreakClass.HY,
            "|": LineBreakClass.BA,
        }
        for char, cls in expected.items():
            self.assertIs(classify(char), cls, char)

    def testControlCharacters(self):
        self.assertIs(classify(" "), LineBreakClass.SP)
        self.assertIs(classify("\r"), LineBreakClass.SP)
        self.assertIs(classify("\t"), LineBreakClass.BA)
        self.assertIs(classify("\n"), LineBreakClass.MB)
        self.assertIs(classify("\v"), LineBreakClass.MB)
        self.assertIs(classify("\f"), LineBreakClass.MB)
        self.assertIs(classify("\0"), LineBreakClass.CM)
        self.assertIs(classify(127), LineBreakClass.CM)

    def testIntegersAndHighCodes(self):
        self.assertIs(classify(ord("a")), LineBreakClass.AL)
        self.assertIs(classify(200), LineBreakClass.AL)
        self.assertIs(classify("é"), LineBreakClass.AL)

    def testInvalidArguments(self):
        with self.assertRaises(TypeError):
            classify("ab")
        with self.assertRaises(TypeError):
            classify(1.5)
        with self.assertRaises(ValueError):
            classify(-1)

    def testPairTable(self):
        self.assertIs(action(LineBreakClass.AL, LineBreakClass.AL), BreakAction.INDIRECT)
        self.assertIs(action(LineBreakClass.OP, LineBreakClass.AL), BreakAction.PROHIBITED)
        self.assertIs(action(LineBreakClass.AL, LineBreakClass.OP), BreakAction.DIRECT)
        self.assertIs(action(LineBreakClass.AL, LineBreakClass.CM), BreakAction.COMBINING_INDIRECT)
        self.assertIs(action(LineBreakClass.OP, LineBreakClass.CM), BreakAction.COMBINING_PROHIBITED)


class TestBreaks(TestCase):
    """Behavioral tests for break-opportunity scanning."""

    def testBreaksAfterSpaces(self):
        self.assertEqual(breaks("The quick brown"), [4, 10, 15])

    def testSingleWord(self):
        self.assertEqual(breaks("word"), [4])

    def testEmptyLine(self):
        self.assertEqual(breaks(""), [])

    def testMandatoryBreak(self):
        self.assertEqual(breaks("ab\fcd"), [3, 5])

    def testLeadingSpaceDoesNotBreak(self):
        self.assertEqual(breaks(" ab"), [3])

    def testOffsetsIncreaseAndEndAtLength(self):
        offsets = breaks(FOX)
        self.assertEqual(offsets, sorted(set(offsets)))
        self.assertEqual(offsets[-1], len(FOX))
        self.assertNotIn(0, offsets)

    def testRejectsNonStrings(self):
        with self.assertRaises(TypeError):
            breaks(b"bytes")


class TestWrap(TestCase):
    """Behavioral tests for wrap()."""

    def testOptimalLayout(self):
        self.assertEqual(wrap(FOX, 15), ["The quick ", "brown fox ", "jumps over the ", "lazy dog"])

    def testShortTextIsOneLine(self):
        self.assertEqual(wrap("hello", 80), ["hello"])

    def testEmptyText(self):
        self.assertEqual(wrap("", 10), [""])

    def testParagraphsAndBlankLines(self):
        self.assertEqual(wrap("a\n\nb", 10), ["a", "", "b"])

    def testOverflowFallback(self):
        self.assertEqual(wrap("abcdefghij klm", 4), ["abcdefghij ", "klm"])

    def testNoLineExceedsWidth(self):
        for width in range(6, 30):
            for line in wrap(FOX, width):
                self.assertLessEqual(len(line), width)

    def testLinesAreContiguousSlices(self):
        for width in range(1, 50):
            self.assertEqual("".join(wrap(FOX, width)), FOX)

    def testRewrappingShortLinesIsIdempotent(self):
        for line in wrap(FOX, 15):
            line = line.rstrip()
            self.assertEqual(wrap(line, 15), [line])

    def testDeterministic(self):
        self.assertEqual(wrap(FOX, 12), wrap(FOX, 12))

    def testInvalidArguments(self):
        with self.assertRaises(ValueError):
            wrap("text", 0)
        with self.assertRaises(TypeError):
            wrap("text", 1.5)
        with self.assertRaises(TypeError):
            wrap(42, 10)


if __name__ == "__main__":
    unittest.main()
