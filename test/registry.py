"""
Registry behavioral tests (shape, lookups, occurrences, typed queries, help, global holder).

Scope
- Validate construction rules (duplicates, ownership of descriptors).
- Validate record_occurrence() faults and storage policies.
- Validate has()/count()/get() and the checked projection of stored kinds.
- Validate help layout (column, next-line fallback, continuation indent, hidden options).
- Validate the explicit init()/instance()/reset() lifecycle.

Conventions
- Test method names follow CamelCase per project convention.
- Tests use the public API (Registry, flag, option, multiple, init, instance, reset).
"""

from __future__ import annotations

import io
import pathlib
import unittest
from unittest import TestCase

from rigging import Registry, flag, option, multiple, init, instance, reset
from rigging.faults import (
    UnknownOptionError,
    NoParameterError,
    OptionNotSpecifiedError,
    InvalidParameterTypeError,
    WrongTypeCastError,
    InvalidArgumentError,
    OptionDoesNotAcceptArgumentError,
    MissingArgumentError,
    FaultCode,
)


def registry(**options):
    return Registry(
        flag("verbose,v", "be chatty"),
        option("level", int, 1, "how hard to try"),
        option("name"),
        option("ratio", float),
        option("out", pathlib.Path),
        multiple("include,I"),
        **options
    )


class TestConstruction(TestCase):
    """Behavioral tests for registry shape."""

    def testOptionsKeepInsertionOrder(self):
        r = registry()
        self.assertEqual([o.name for o in r.options], ["verbose", "level", "name", "ratio", "out", "include"])

    def testDuplicateNamesRejected(self):
        with self.assertRaises(ValueError):
            Registry(flag("alpha"), option("alpha"))

    def testDuplicateShortNamesRejected(self):
        with self.assertRaises(ValueError):
            Registry(flag("alpha,a"), flag("all,a"))
        with self.assertRaises(ValueError):
            Registry(flag("a"), flag("all,a"))

    def testNonOptionsRejected(self):
        with self.assertRaises(TypeError):
            Registry("verbose")

    def testUsageMustBeAString(self):
        with self.assertRaises(TypeError):
            Registry(usage=1)

    def testRegistryOwnsCopies(self):
        verbose = flag("verbose,v")
        r = Registry(verbose)
        r.record_occurrence("verbose")
        self.assertEqual(r.count("verbose"), 1)
        self.assertEqual(verbose.count, 0)

    def testOptionsAreSnapshots(self):
        r = registry()
        r.record_occurrence("level", "4")
        r.record_occurrence("include", "a")
        level = r.options[1]
        self.assertEqual(level.count, 1)
        self.assertEqual(level.value, 4)
        level.observe()
        level.assign("9")
        r.options[5].assign("b")
        self.assertEqual(r.count("level"), 1)
        self.assertEqual(r.get("level", int), 4)
        self.assertEqual(r.get("include", list), ["a"])
        self.assertIsNot(r.options[1], r.resolve("level"))

    def testOperandsAreACopy(self):
        r = registry()
        r.add_operand("file")
        r.operands.append("other")
        self.assertEqual(r.operands, ["file"])


class TestLookups(TestCase):
    """Behavioral tests for resolve()."""

    def testResolveByLongAndShortName(self):
        r = registry()
        self.assertIs(r.resolve("verbose"), r.resolve("v"))
        self.assertEqual(r.resolve("I").name, "include")

    def testResolveUnknown(self):
        self.assertIsNone(registry().resolve("bogus"))

    def testSuggest(self):
        self.assertEqual(registry().suggest("levle"), ["level"])


class TestOccurrences(TestCase):
    """Behavioral tests for record_occurrence()."""

    def testSingleValuesOverwrite(self):
        r = registry()
        r.record_occurrence("level", "2")
        r.record_occurrence("level", "5")
        self.assertEqual(r.get("level", int), 5)
        self.assertEqual(r.count("level"), 2)

    def testMultiValuesAppend(self):
        r = registry()
        r.record_occurrence("include", "a")
        r.record_occurrence("include", "b")
        self.assertEqual(r.get("include", list[str]), ["a", "b"])

    def testCountCanBeSkipped(self):
        r = registry()
        r.record_occurrence("name", "x", count=False)
        self.assertEqual(r.count("name"), 0)
        self.assertEqual(r.resolve("name").value, "x")

    def testFlagRejectsArgument(self):
        with self.assertRaises(OptionDoesNotAcceptArgumentError) as context:
            registry().record_occurrence("verbose", "yes")
        self.assertEqual(context.exception.options["input"], "verbose")
        self.assertIs(context.exception.options["code"], FaultCode.OPTION_DOES_NOT_ACCEPT_ARGUMENT)

    def testValueOptionRequiresArgument(self):
        with self.assertRaises(MissingArgumentError) as context:
            registry().record_occurrence("level")
        self.assertEqual(context.exception.options["input"], "level")

    def testConversionFailureNamesTheOption(self):
        with self.assertRaises(InvalidArgumentError) as context:
            registry().record_occurrence("level", "high")
        self.assertEqual(context.exception.options["input"], "level")
        self.assertEqual(context.exception.options["argument"], "high")

    def testOutOfRangeIsAnInvalidArgument(self):
        with self.assertRaises(InvalidArgumentError):
            registry().record_occurrence("ratio", "1e999")

    def testContextIsAttached(self):
        with self.assertRaises(MissingArgumentError) as context:
            registry().record_occurrence("level", line=4)
        self.assertEqual(context.exception.options["line"], 4)
        self.assertIn("line 4", context.exception.message)


class TestQueries(TestCase):
    """Behavioral tests for has(), count() and get()."""

    def testHasAndCount(self):
        r = registry()
        self.assertFalse(r.has("verbose"))
        self.assertTrue(r.has("level"))  # default
        self.assertFalse(r.has("name"))
        self.assertFalse(r.has("bogus"))
        self.assertEqual(r.count("bogus"), 0)
        r.record_occurrence("verbose")
        self.assertTrue(r.has("v"))
        self.assertEqual(r.count("v"), 1)

    def testGetDefault(self):
        r = registry()
        self.assertEqual(r.get("level"), 1)
        self.assertEqual(r.get("level", int), 1)
        self.assertEqual(r.count("level"), 0)

    def testGetPath(self):
        r = registry()
        r.record_occurrence("out", "a/b")
        self.assertEqual(r.get("out", pathlib.Path), pathlib.Path("a/b"))

    def testGetUnknown(self):
        with self.assertRaises(UnknownOptionError) as context:
            registry().get("bogus")
        self.assertEqual(context.exception.options["input"], "bogus")

    def testGetFlag(self):
        with self.assertRaises(NoParameterError):
            registry().get("verbose")

    def testGetUnsetOption(self):
        with self.assertRaises(OptionNotSpecifiedError) as context:
            registry().get("name", str)
        self.assertIsInstance(context.exception, NoParameterError)
        self.assertEqual(context.exception.options["input"], "name")

    def testWrongTypeCast(self):
        r = registry()
        for type in (str, float, list, list[int]):
            with self.assertRaises(WrongTypeCastError, msg=repr(type)) as context:
                r.get("level", type)
            self.assertIsInstance(context.exception, InvalidParameterTypeError)

    def testInvalidParameterType(self):
        r = registry()
        for type in (dict, bool, bytes, dict[str, int], list[bool]):
            with self.assertRaises(InvalidParameterTypeError, msg=repr(type)) as context:
                r.get("level", type)
            self.assertNotIsInstance(context.exception, WrongTypeCastError)

    def testTypeErrorsAreDistinguishable(self):
        r = registry()
        with self.assertRaises(WrongTypeCastError):
            r.get("level", str)
        with self.assertRaises(OptionNotSpecifiedError):
            r.get("name", str)
        self.assertFalse(issubclass(WrongTypeCastError, NoParameterError))
        self.assertFalse(issubclass(OptionNotSpecifiedError, InvalidParameterTypeError))

    def testMultiProjection(self):
        r = registry()
        self.assertEqual(r.get("include", list), [])
        r.record_occurrence("include", "a")
        self.assertEqual(r.get("include", list), ["a"])
        self.assertEqual(r.get("include", list[str]), ["a"])
        self.assertEqual(r.get("include"), ["a"])
        with self.assertRaises(WrongTypeCastError):
            r.get("include", str)
        with self.assertRaises(WrongTypeCastError):
            r.get("include", list[int])

    def testMultiValueIsACopy(self):
        r = registry()
        r.record_occurrence("include", "a")
        r.get("include", list).append("b")
        self.assertEqual(r.get("include", list), ["a"])


class TestHelp(TestCase):
    """Behavioral tests for width(), format_help() and print_help()."""

    def setUp(self):
        self.registry = Registry(
            flag("verbose,v", "be chatty"),
            option("level", int, 1, "how hard"),
            flag("x"),
            flag("secret", "not shown", hidden=True),
            usage="usage: tool [options]",
        )

    def testWidth(self):
        self.assertEqual(self.registry.width(), 20)

    def testLayout(self):
        self.assertEqual(self.registry.format_help(80), (
            "usage: tool [options]\n"
            "  -v [ --verbose ]  be chatty\n"
            "  --level arg (=1)  how hard\n"
            "  -x\n"
        ))

    def testDescriptionMovesToNextLineWhenNamesDoNotFit(self):
        r = Registry(flag("verbose,v", "be chatty"))
        self.assertEqual(r.format_help(30), (
            "  -v [ --verbose ]\n"
            "               be chatty\n"
        ))

    def testContinuationLinesAreIndented(self):
        r = Registry(flag("a", "aaa bbb ccc"))
        self.assertEqual(r.format_help(14), (
            "  -a   aaa\n"
            "       bbb ccc\n"
        ))

    def testFloatDefaultRendering(self):
        r = Registry(option("ratio", float, 0.5))
        self.assertEqual(r.format_help(80), "  --ratio arg (=0.5)\n")

    def testFloatDefaultKeepsPrecision(self):
        r = Registry(option("ratio", float, 1234567.0))
        self.assertEqual(r.format_help(80), "  --ratio arg (=1234567)\n")

    def testHiddenOptionsAreSkipped(self):
        self.assertNotIn("secret", self.registry.format_help(80))

    def testPrintHelpToFile(self):
        buffer = io.StringIO()
        self.registry.print_help(buffer, 80)
        self.assertEqual(buffer.getvalue(), self.registry.format_help(80))

    def testInvalidWidth(self):
        with self.assertRaises(ValueError):
            self.registry.format_help(0)
        with self.assertRaises(TypeError):
            self.registry.format_help("80")


class TestGlobalHolder(TestCase):
    """Behavioral tests for init()/instance()/reset()."""

    def setUp(self):
        reset()

    def tearDown(self):
        reset()

    def testInstanceBeforeInit(self):
        with self.assertRaises(RuntimeError):
            instance()

    def testInitAndReset(self):
        r = init(flag("verbose,v"), usage="usage: tool")
        self.assertIs(instance(), r)
        self.assertEqual(r.usage, "usage: tool")
        reset()
        with self.assertRaises(RuntimeError):
            instance()

    def testInitReplaces(self):
        first = init(flag("verbose"))
        second = init(flag("quiet"))
        self.assertIsNot(first, second)
        self.assertIs(instance(), second)


if __name__ == "__main__":
    unittest.main()
