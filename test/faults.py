"""
Fault tests (codes, rendering, trigger boundary).

Conventions
- Test method names follow CamelCase per project convention.
"""
import io
import unittest
from unittest import TestCase

from rich.console import Console

from helmsman import (
    CommandException,
    CoercionError,
    FaultCode,
    InvalidChoiceError,
    UnknownCommandError,
    getdoc,
    trigger,
)


class TestFaults(TestCase):

    def setUp(self):
        self.fault = UnknownCommandError(
            "unknown command: bogus",
            title="unknown command",
            code=FaultCode.UNKNOWN_COMMAND,
            hint="run 'example-cli --help' to see all commands",
        )

    def testHierarchy(self):
        self.assertTrue(issubclass(InvalidChoiceError, CoercionError))
        self.assertTrue(issubclass(CoercionError, CommandException))

    def testMessage(self):
        self.assertEqual(str(self.fault), "unknown command: bogus")
        self.assertEqual(self.fault.options["title"], "unknown command")

    def testCodesNormalizeToNumbers(self):
        self.assertEqual(FaultCode.UNKNOWN_COMMAND.normalize(), "11101")

    def testGetdocWithoutHostDocs(self):
        self.assertIsNone(getdoc(FaultCode.MISSING_VALUE))
        with self.assertRaises(TypeError):
            getdoc(11101)

    def testReplaceMergesOptions(self):
        replaced = self.fault.__replace__(colorful=True)
        self.assertIsNot(replaced, self.fault)
        self.assertIs(type(replaced), UnknownCommandError)
        self.assertTrue(replaced.options["colorful"])
        self.assertEqual(replaced.options["title"], "unknown command")

    def testRendering(self):
        console = Console(file=io.StringIO(), width=120)
        console.print(self.fault)
        printed = console.file.getvalue()
        self.assertIn("11101", printed)
        self.assertIn("Unknown Command", printed)
        self.assertIn("unknown command: bogus", printed)
        self.assertIn("run 'example-cli --help'", printed)

    def testDefaultsPerFaultClass(self):
        fault = InvalidChoiceError("option 'target' must be one of: [main, app], got 'lib'")
        self.assertIs(fault.code, FaultCode.INVALID_CHOICE)
        self.assertEqual(fault.title, "invalid choice")
        self.assertIs(self.fault.__replace__(code=FaultCode.MISSING_VALUE).code, FaultCode.MISSING_VALUE)

    def testDocsLine(self):
        console = Console(file=io.StringIO(), width=120)
        console.print(self.fault.__replace__(docs="commands are listed by --help"))
        self.assertIn("commands are listed by --help", console.file.getvalue())

    def testTriggerRaisesOutsideShell(self):
        with self.assertRaises(UnknownCommandError) as caught:
            trigger(self.fault, shell=False)
        self.assertFalse(caught.exception.options["shell"])

    def testTriggerExitsInShell(self):
        with self.assertRaises(SystemExit) as caught:
            trigger(self.fault, shell=True)
        self.assertEqual(caught.exception.code, 1)

    def testTriggerRequiresTriggerable(self):
        with self.assertRaises(TypeError):
            trigger(ValueError("plain"))


if __name__ == '__main__':
    unittest.main()
