"""
Command registry tests.

Conventions
- Test method names follow CamelCase per project convention.
"""
import unittest
from unittest import TestCase

from helmsman import Command, Registry


class TestRegistry(TestCase):

    def setUp(self):
        self.greet = Command("greet", print, "Greet someone")
        self.calc = Command("calc", print, "Add two numbers")
        self.registry = Registry([self.greet, self.calc])

    def testGet(self):
        self.assertIs(self.registry.get("greet"), self.greet)
        self.assertIsNone(self.registry.get("bogus"))

    def testEnumerationFollowsRegistrationOrder(self):
        self.assertEqual(self.registry.names(), ("greet", "calc"))
        self.assertEqual(list(self.registry), [self.greet, self.calc])
        self.assertEqual(len(self.registry), 2)

    def testContains(self):
        self.assertIn("calc", self.registry)
        self.assertNotIn("bogus", self.registry)

    def testLastRegistrationWins(self):
        replacement = Command("greet", print, "Greet loudly")
        self.registry.put("greet", replacement)
        self.assertIs(self.registry.get("greet"), replacement)
        self.assertEqual(len(self.registry), 2)

    def testOnlyCommands(self):
        with self.assertRaises(TypeError):
            self.registry.put("greet", print)

    def testEmpty(self):
        registry = Registry()
        self.assertEqual(len(registry), 0)
        self.assertEqual(registry.names(), ())

    def testRepr(self):
        self.assertEqual(repr(self.registry), "registry('greet', 'calc')")


if __name__ == '__main__':
    unittest.main()
