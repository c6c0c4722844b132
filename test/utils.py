"""
Utils module tests (sentinel, coalesce, rename, mirror).

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from argbox.utils import Unset, UnsetType, coalesce, mirror, rename


class TestUnset(TestCase):

    def testSingletonAndFalsy(self):
        self.assertIs(UnsetType(), Unset)
        self.assertFalse(Unset)
        self.assertEqual(repr(Unset), "Unset")

    def testNotSubclassable(self):
        with self.assertRaises(TypeError):
            type("Other", (UnsetType,), {})

    def testNoUnionSupport(self):
        with self.assertRaises(TypeError):
            Unset | str

    def testCoalescePreservesFalsyValues(self):
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(None, "fallback"))
        self.assertEqual(coalesce(0, 1), 0)


class TestRename(TestCase):

    def testFunctionForm(self):
        def work():
            pass

        self.assertIs(rename(work, "runner"), work)
        self.assertEqual((work.__name__, work.__qualname__), ("runner", "runner"))

    def testDecoratorForm(self):
        @rename("runner")
        def work():
            pass

        self.assertEqual(work.__name__, "runner")

    def testRejectsNonCallable(self):
        with self.assertRaises(TypeError):
            rename("x", "y")


class TestMirror(TestCase):

    def testReadOnlyCopy(self):
        class Holder:
            items = mirror("items")

            def __init__(self):
                self._items = ["a"]

        holder = Holder()
        holder.items.append("b")
        self.assertEqual(holder.items, ["a"])
        with self.assertRaises(AttributeError):
            holder.items = []


if __name__ == "__main__":
    unittest.main()
