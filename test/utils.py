"""
Utils module behavioral tests (sentinel, helpers, name predicate, logging).

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import logging
import unittest
from unittest import TestCase

from cardinals import Arguments
from cardinals.utils import Unset, UnsetType, coalesce, rename, mirror, ordinal, isgoodname, log


class TestUnset(TestCase):

    def testSingletonAndFalsey(self):
        self.assertIs(UnsetType(), Unset)
        self.assertFalse(Unset)
        self.assertEqual(repr(Unset), "Unset")

    def testNotSubclassable(self):
        with self.assertRaises(TypeError):
            class Other(UnsetType):  # NOQA: F-841
                pass

    def testCoalesce(self):
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(Unset))
        self.assertIsNone(coalesce(None, "fallback"))
        self.assertEqual(coalesce(0, 1), 0)


class TestHelpers(TestCase):

    def testRenameBothForms(self):
        def work():
            pass

        self.assertIs(rename(work, "job"), work)
        self.assertEqual(work.__name__, "job")

        @rename("task")
        def other():
            pass

        self.assertEqual(other.__qualname__, "task")
        with self.assertRaises(TypeError):
            rename()

    def testMirrorCopiesContainers(self):
        class Holder:
            items = mirror("items")

            def __init__(self):
                self._items = ["a"]

        holder = Holder()
        holder.items.append("b")
        self.assertEqual(holder.items, ["a"])

    def testOrdinal(self):
        self.assertEqual(ordinal(1), "first")
        self.assertEqual(ordinal(10), "tenth")
        self.assertEqual(ordinal(11), "11th")
        self.assertEqual(ordinal(21), "21st")
        self.assertEqual(ordinal(22), "22nd")
        self.assertEqual(ordinal(113), "113th")

    def testIsGoodName(self):
        for name in ("a", "files", "out_dir", "x-2", "  padded  "):
            with self.subTest(name=name):
                self.assertTrue(isgoodname(name))
        for name in ("", "   ", "1st", "_x", "has space", "a.b", None, 3):
            with self.subTest(name=name):
                self.assertFalse(isgoodname(name))


class TestLogging(TestCase):

    def testRegistrationAndParsingAreTraced(self):
        with self.assertLogs(log, level=logging.DEBUG) as captured:
            arguments = Arguments("tool")
            arguments.add_arg("name", "", True)
            arguments.parse_args(["alice"])
        output = "\n".join(captured.output)
        self.assertIn("Added", output)
        self.assertIn("Parsing", output)
        self.assertIn("Bound 'alice'", output)


if __name__ == "__main__":
    unittest.main()
