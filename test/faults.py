"""
Faults module tests (codes, options, replacement, rendering, trigger).

Conventions
- Test method names follow CamelCase per project convention.
- Rendering is captured through a dedicated rich Console without colors.
"""

from __future__ import annotations

import copy
import unittest
from unittest import TestCase

from rich.console import Console

from argbox.faults import (
    CommandException,
    DuplicateArgumentError,
    FaultCode,
    MissingValueError,
    UnknownFlagError,
    getdoc,
    trigger,
)


def render(renderable):
    console = Console(width=100, color_system=None, record=True)
    with console.capture() as capture:
        console.print(renderable)
    return capture.get()


class TestFaults(TestCase):
    """Behavioral tests for fault construction and options."""

    def testDefaultsPerSubclass(self):
        fault = DuplicateArgumentError("duplicate argument")
        self.assertIs(fault.code, FaultCode.DUPLICATE_ARGUMENT)
        self.assertEqual(fault.options["title"], "duplicate argument")
        self.assertEqual(str(fault), "duplicate argument")

    def testExplicitOptionsOverrideDefaults(self):
        fault = MissingValueError("expected value", hint="try again")
        self.assertEqual(fault.options["hint"], "try again")
        self.assertIs(fault.code, FaultCode.MISSING_VALUE)

    def testOptionsAreReadOnly(self):
        fault = MissingValueError("expected value")
        with self.assertRaises(TypeError):
            fault.options["hint"] = "x"  # type: ignore[index]

    def testMessageMustBeString(self):
        with self.assertRaises(TypeError):
            CommandException(42)

    def testReplaceKeepsTypeAndMessage(self):
        fault = UnknownFlagError("unexpected flag '-x'")
        replaced = copy.replace(fault, input="-x", index=3)
        self.assertIsInstance(replaced, UnknownFlagError)
        self.assertEqual(replaced.message, fault.message)
        self.assertEqual(replaced.options["index"], 3)
        self.assertNotIn("index", fault.options)

    def testCodesAreGroupedAndUnique(self):
        values = [code.value for code in FaultCode]
        self.assertEqual(len(values), len(set(values)))
        self.assertEqual(FaultCode.UNKNOWN_FLAG.normalize(), "21123")

    def testGetdocWithoutHostDocs(self):
        self.assertIsNone(getdoc(FaultCode.MISSING_VALUE))

    def testGetdocRejectsNonCodes(self):
        with self.assertRaises(TypeError):
            getdoc(21101)


class TestTrigger(TestCase):
    """trigger() raises outside shell mode and exits inside it."""

    def testRaisesWithOptionsMerged(self):
        with self.assertRaises(UnknownFlagError) as context:
            trigger(UnknownFlagError("unexpected flag '-x'"), input="-x", shell=False)
        self.assertEqual(context.exception.options["input"], "-x")

    def testShellExits(self):
        with self.assertRaises(SystemExit) as context:
            trigger(UnknownFlagError("unexpected flag '-x'"), shell=True, colorful=False)
        self.assertEqual(context.exception.code, 1)

    def testRejectsNonFaults(self):
        with self.assertRaises(TypeError):
            trigger(ValueError("nope"))


class TestRendering(TestCase):
    """Plain and panel rendering."""

    def testPlainRendering(self):
        fault = UnknownFlagError("unexpected flag '--nope'", input="--nope", index=1, colorful=False)
        output = render(fault)
        self.assertIn("21123", output)
        self.assertIn("Unknown Flag", output)
        self.assertIn("unexpected flag '--nope'", output)
        self.assertIn("while processing '--nope' at second position", output)
        self.assertIn("→", output)

    def testFancyRendering(self):
        fault = DuplicateArgumentError("duplicate argument", fancy=True, colorful=False)
        output = render(fault)
        self.assertIn("Duplicate Argument", output)
        self.assertIn("duplicate argument", output)
        self.assertIn("[ argbox", output)

    def testExplicitDocsRendered(self):
        fault = MissingValueError("expected value", docs="values follow their option", colorful=False)
        self.assertIn("values follow their option", render(fault))


if __name__ == "__main__":
    unittest.main()
