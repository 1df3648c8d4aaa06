"""
Value model tests: kinds, numeric parsing and user-facing formatting.

Conventions
- Test method names follow CamelCase per project convention.
"""
import math
import unittest
from unittest import TestCase

from helmsman.values import Kind, kindof, parse_number, render_value


class KindTest(TestCase):
    """kindof() maps Python values onto the three option kinds."""

    def testBoolIsCheckedBeforeNumbers(self):
        self.assertIs(kindof(True), Kind.BOOL)
        self.assertIs(kindof(False), Kind.BOOL)

    def testIntegersAndFloatsAreNumbers(self):
        self.assertIs(kindof(3), Kind.NUMBER)
        self.assertIs(kindof(3.5), Kind.NUMBER)

    def testStrings(self):
        self.assertIs(kindof(""), Kind.STRING)

    def testAbsentIsNotAValue(self):
        with self.assertRaises(TypeError):
            kindof(None)

    def testKindsCompareAsStrings(self):
        self.assertEqual(Kind("number"), Kind.NUMBER)
        self.assertEqual(str(Kind.BOOL), "bool")


class ParseNumberTest(TestCase):

    def testNumericText(self):
        self.assertEqual(parse_number("3"), 3.0)
        self.assertEqual(parse_number("-2.5"), -2.5)

    def testNonNumericTextIsReturnedAsIs(self):
        self.assertEqual(parse_number("three"), "three")
        self.assertEqual(parse_number(""), "")

    def testSpecialFloats(self):
        self.assertTrue(math.isinf(parse_number("inf")))


class RenderValueTest(TestCase):

    def testBooleans(self):
        self.assertEqual(render_value(True), "true")
        self.assertEqual(render_value(False), "false")

    def testIntegralFloatsDropTheFraction(self):
        self.assertEqual(render_value(7000.0), "7000")
        self.assertEqual(render_value(1.5), "1.5")

    def testStrings(self):
        self.assertEqual(render_value("main"), "main")


if __name__ == '__main__':
    unittest.main()
