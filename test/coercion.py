"""
Type coercion and validation tests.

Scope
- coerce(): bool/number/string rules, bare flags, choices.
- validate(): default injection and required-option enforcement.

Conventions
- Test method names follow CamelCase per project convention.
"""
import unittest
from unittest import TestCase

from helmsman import Option, ParseResult, coerce, validate, parse
from helmsman import CoercionError, InvalidChoiceError, MissingRequiredOptionError, FaultCode


class TestCoerce(TestCase):
    """Behavioral tests for coerce()."""

    def setUp(self):
        self.flag = Option("dev", "bool", "D")
        self.number = Option("port", "number", "p")
        self.string = Option("name", "string", "n")
        self.target = Option("target", "string", "t", choices=("main", "app"))

    def testBooleans(self):
        self.assertIs(coerce(True, self.flag), True)
        self.assertIs(coerce("true", self.flag), True)
        self.assertIs(coerce("false", self.flag), False)

    def testBooleanLiteralsAreCaseSensitive(self):
        with self.assertRaises(CoercionError):
            coerce("True", self.flag)
        with self.assertRaises(CoercionError):
            coerce("yes", self.flag)

    def testNumbers(self):
        self.assertEqual(coerce("3", self.number), 3.0)
        self.assertEqual(coerce("-2.5", self.number), -2.5)

    def testNumberRejectsTextAndBareFlags(self):
        with self.assertRaises(CoercionError) as caught:
            coerce("three", self.number)
        self.assertIs(caught.exception.options["code"], FaultCode.UNCOERCIBLE_VALUE)
        with self.assertRaises(CoercionError):
            coerce(True, self.number)

    def testStrings(self):
        self.assertEqual(coerce("Ann", self.string), "Ann")

    def testStringRejectsNumericTextAndBareFlags(self):
        with self.assertRaises(CoercionError):
            coerce("42", self.string)
        with self.assertRaises(CoercionError):
            coerce(True, self.string)

    def testChoices(self):
        self.assertEqual(coerce("app", self.target), "app")
        with self.assertRaises(InvalidChoiceError) as caught:
            coerce("lib", self.target)
        self.assertIsInstance(caught.exception, CoercionError)
        self.assertEqual(caught.exception.options["choices"], ("main", "app"))
        self.assertIn("main, app", str(caught.exception))


class TestValidate(TestCase):
    """Behavioral tests for validate()."""

    def testMissingRequiredOption(self):
        schema = [Option("name", "string", "n", required=True)]
        with self.assertRaises(MissingRequiredOptionError) as caught:
            validate(parse(["greet"], schema), schema)
        self.assertEqual(caught.exception.options["option"].name, "name")
        self.assertEqual(str(caught.exception), "missing required option: --name (-n)")

    def testFirstMissingInSchemaOrder(self):
        schema = [Option("a", "number", required=True), Option("b", "number", required=True)]
        with self.assertRaises(MissingRequiredOptionError) as caught:
            validate(parse(["calc", "-b", "4"], schema), schema)
        self.assertEqual(caught.exception.options["option"].name, "a")

    def testDefaultSatisfiesRequired(self):
        schema = [Option("target", "string", "t", required=True, default="main")]
        result = validate(ParseResult("install", (), {}), schema)
        self.assertEqual(result.options, {"target": "main"})

    def testDefaultsDoNotOverrideValues(self):
        schema = [Option("target", "string", "t", default="main")]
        result = validate(ParseResult("install", (), {"target": "app"}), schema)
        self.assertEqual(result.options, {"target": "app"})

    def testReturnsSameResult(self):
        result = ParseResult("install", ("pk1",), {})
        self.assertIs(validate(result, [Option("dev", "bool", "D")]), result)
        self.assertEqual(result.options, {})


if __name__ == '__main__':
    unittest.main()
