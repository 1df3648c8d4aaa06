"""
Utility helpers tests (sentinel, coalesce, rename, mirror, ordinal).

Conventions
- Test method names follow CamelCase per project convention.
"""
import unittest
from types import MappingProxyType
from unittest import TestCase

from helmsman.utils import *


class UnsetTest(TestCase):
    """Semantic guarantees of the Unset sentinel."""

    def testSingleton(self):
        self.assertIs(UnsetType(), Unset)

    def testFalsy(self):
        self.assertFalse(Unset)
        self.assertIsNot(Unset, None)

    def testRepr(self):
        self.assertEqual(repr(Unset), "Unset")

    def testUnionInIsinstance(self):
        self.assertTrue(isinstance(Unset, str | Unset))
        self.assertTrue(isinstance("x", str | Unset))

    def testFinalClass(self):
        with self.assertRaises(TypeError):
            type("UnsetChild", (UnsetType,), {})


class HelpersTest(TestCase):
    """Behavior of coalesce, rename, mirror and ordinal."""

    def testCoalesceReplacesOnlyUnset(self):
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(Unset))
        self.assertIs(coalesce(False, True), False)
        self.assertIsNone(coalesce(None, "fallback"))

    def testRename(self):
        @rename("decorated")
        def other():
            pass

        self.assertEqual(other.__name__, "decorated")
        self.assertEqual(other.__qualname__, "decorated")

    def testRenameRejectsBadArguments(self):
        with self.assertRaises(TypeError):
            rename(42)
        with self.assertRaises(TypeError):
            rename("name")(42)

    def testMirrorFreezesContainers(self):
        class Holder:
            items = mirror("items")
            table = mirror("table")
            missing = mirror("missing")

            def __init__(self):
                self._items = ["a", ["b"]]
                self._table = {"k": [1]}
                self._missing = Unset

        holder = Holder()
        self.assertEqual(holder.items, ("a", ("b",)))
        self.assertIsInstance(holder.table, MappingProxyType)
        self.assertEqual(holder.table["k"], (1,))
        self.assertIsNone(holder.missing)
        with self.assertRaises(AttributeError):
            holder.items = ()

    def testOrdinal(self):
        self.assertEqual(ordinal(1), "first")
        self.assertEqual(ordinal(10), "tenth")
        self.assertEqual(ordinal(11), "11th")
        self.assertEqual(ordinal(22), "22nd")
        self.assertEqual(ordinal(113), "113th")


if __name__ == '__main__':
    unittest.main()
