"""
Faults module behavioral tests (codes, rendering, triggering).

Scope
- Validate the fault hierarchy and its stdlib bases.
- Validate rich rendering in plain and fancy modes.
- Validate trigger() in raising and shell modes, and host overrides read
  from __main__ (__codes__, __docs__, __prog__).

Conventions
- Test method names follow CamelCase per project convention.
- Console output is captured with a rich Console writing to a StringIO.
"""

from __future__ import annotations

import io
import sys
import unittest
from unittest import TestCase, mock

from rich.console import Console

from cardinals import faults
from cardinals import (
    Arguments,
    ArgumentFault,
    ConfigurationError,
    ParseError,
    MissingArgumentError,
    InvalidArgumentValueError,
    TooManyArgumentsError,
    UnknownArgumentError,
    ArgumentIndexError,
    FaultCode,
    trigger,
    getdoc,
)


def _missing():
    arguments = Arguments("tool")
    arguments.add_arg("name", "", True)
    try:
        arguments.parse_args([])
    except MissingArgumentError as exception:
        return exception
    raise AssertionError("parse_args() did not fail")


def _render(renderable):
    console = Console(file=io.StringIO(), width=100, color_system=None)
    console.print(renderable)
    return console.file.getvalue()


class TestFaultHierarchy(TestCase):

    def testFamilies(self):
        self.assertTrue(issubclass(ConfigurationError, ValueError))
        self.assertTrue(issubclass(UnknownArgumentError, KeyError))
        self.assertTrue(issubclass(ArgumentIndexError, IndexError))
        self.assertTrue(issubclass(ParseError, ArgumentFault))
        self.assertFalse(issubclass(ParseError, ValueError))

    def testOptionsAreReadOnly(self):
        fault = ArgumentFault("boom", code=FaultCode.MISSING_ARGUMENT)
        with self.assertRaises(TypeError):
            fault.options["code"] = None
        self.assertEqual(str(fault), "boom")
        self.assertIs(fault.code, FaultCode.MISSING_ARGUMENT)

    def testMessageIsOptional(self):
        self.assertEqual(str(ArgumentFault()), "")

    def testReplaceKeepsTypeAndMergesOptions(self):
        fault = _missing()
        copy = fault.__replace__(shell=True)
        self.assertIsInstance(copy, MissingArgumentError)
        self.assertEqual(copy.message, fault.message)
        self.assertTrue(copy.options["shell"])
        self.assertNotIn("shell", fault.options)
        self.assertEqual(copy.options["position"], 1)


class TestFaultRendering(TestCase):

    def testPlainRendering(self):
        output = _render(_missing().__replace__(colorful=False))
        self.assertIn("tool", output)
        self.assertIn("22102", output)
        self.assertIn("Missing Argument", output)
        self.assertIn("must set value for the argument 'name'", output)
        self.assertIn("provide a value for name", output)

    def testFancyRenderingUsesPanel(self):
        output = _render(_missing().__replace__(fancy=True, colorful=False, ratio=1))
        self.assertIn("╭", output)
        self.assertIn("22102", output)

    def testHostCodesAndProgram(self):
        main = sys.modules["__main__"]
        with mock.patch.object(main, "__codes__", {FaultCode.MISSING_ARGUMENT: "E-MISS"}, create=True), \
                mock.patch.object(main, "__prog__", "greeter", create=True):
            self.assertEqual(FaultCode.MISSING_ARGUMENT.normalize(), "E-MISS")
            output = _render(_missing().__replace__(colorful=False))
        self.assertIn("E-MISS", output)
        self.assertIn("greeter", output)

    def testNormalizeDefaultsToNumber(self):
        self.assertEqual(FaultCode.TOO_MANY_ARGUMENTS.normalize(), "22103")


class TestTrigger(TestCase):

    def testTriggerRaisesOutsideShell(self):
        fault = _missing()
        with self.assertRaises(MissingArgumentError) as context:
            trigger(fault, hint="try again")
        self.assertIsNot(context.exception, fault)
        self.assertEqual(context.exception.options["hint"], "try again")

    def testTriggerPrintsAndExitsInShell(self):
        console = Console(file=io.StringIO(), width=100, color_system=None)
        with mock.patch.object(faults, "console", console):
            with self.assertRaises(SystemExit) as context:
                trigger(_missing(), shell=True, colorful=False)
        self.assertEqual(context.exception.code, 1)
        self.assertIn("must set value", console.file.getvalue())

    def testTriggerDeferredDoesNotExit(self):
        console = Console(file=io.StringIO(), width=100, color_system=None)
        fault = TooManyArgumentsError("entered too many arguments: ['b']", code=FaultCode.TOO_MANY_ARGUMENTS)
        with mock.patch.object(faults, "console", console):
            self.assertIsNone(trigger(fault, shell=True, deferred=True, colorful=False))
        self.assertIn("['b']", console.file.getvalue())

    def testTriggerKeepsValidatorCause(self):
        arguments = Arguments("tool")
        arguments.add_arg("count").with_validator(int)
        try:
            arguments.parse_args(["many"])
        except InvalidArgumentValueError as exception:
            fault = exception
        else:
            self.fail("parse_args() did not fail")

        with self.assertRaises(InvalidArgumentValueError) as context:
            trigger(fault, hint="use digits")
        self.assertIsInstance(context.exception.__cause__, ValueError)
        self.assertIs(context.exception.__cause__, fault.__cause__)

    def testTriggerRejectsPlainObjects(self):
        with self.assertRaises(TypeError):
            trigger(ValueError("nope"))


class TestGetdoc(TestCase):

    def testMissingDocsIsNone(self):
        self.assertIsNone(getdoc(FaultCode.UNKNOWN_ARGUMENT))

    def testHostDocs(self):
        main = sys.modules["__main__"]
        docs = {FaultCode.MISSING_ARGUMENT: "see docs/arguments.md"}
        with mock.patch.object(main, "__docs__", docs, create=True):
            self.assertEqual(getdoc(FaultCode.MISSING_ARGUMENT), "see docs/arguments.md")
            fault = _missing()
        self.assertEqual(fault.options["docs"], "see docs/arguments.md")
        self.assertIn("see docs/arguments.md", _render(fault.__replace__(colorful=False)))

    def testRejectsNonCodes(self):
        with self.assertRaises(TypeError):
            getdoc(22102)


if __name__ == "__main__":
    unittest.main()
