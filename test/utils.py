"""
Utils module behavioral tests (sentinel, coalesce, rename, mirror, once, qualify).

Conventions
- Test method names follow CamelCase per project convention.
"""
import unittest
from unittest import TestCase

from tether.utils import Unset, UnsetType, coalesce, rename, mirror, once, qualify
from tether.void import void


class TestUnset(TestCase):
    """The Unset sentinel."""

    def testSingleton(self):
        self.assertIs(UnsetType(), Unset)

    def testFalsyAndRepr(self):
        self.assertFalse(Unset)
        self.assertEqual(repr(Unset), "Unset")

    def testFinalClass(self):
        with self.assertRaises(TypeError):
            type("Subclass", (UnsetType,), {})

    def testUnionSupport(self):
        self.assertIsInstance("text", str | Unset)
        self.assertIsInstance(Unset, str | Unset)


class TestCoalesce(TestCase):
    """Unset replacement preserving other falsey values."""

    def testReplacesUnsetOnly(self):
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(Unset))
        self.assertIsNone(coalesce(None, "fallback"))
        self.assertEqual(coalesce("", "fallback"), "")


class TestRename(TestCase):
    """Stable names for generated callables."""

    def testFunctionForm(self):
        function = rename(lambda: None, "named")
        self.assertEqual(function.__name__, "named")
        self.assertEqual(function.__qualname__, "named")

    def testDecoratorForm(self):
        @rename("named")
        def function():
            pass

        self.assertEqual(function.__name__, "named")

    def testWrongArity(self):
        with self.assertRaises(TypeError):
            rename()


class TestQualify(TestCase):
    """Type names in diagnostics."""

    def testBuiltinsStayShort(self):
        self.assertEqual(qualify(int), "int")

    def testOtherClassesCarryTheirModule(self):
        self.assertEqual(qualify(TestQualify), f"{__name__}.TestQualify")

    def testNonClassesUseRepr(self):
        self.assertEqual(qualify(void), "(void)")
        self.assertEqual(qualify("str"), "'str'")


class TestProperties(TestCase):
    """mirror() and once() property factories."""

    def testMirrorFreezesContainers(self):
        class Holder:
            items = mirror("items")

            def __init__(self):
                self._items = [1, 2]

        self.assertEqual(Holder().items, (1, 2))

    def testOnceComputesOnFirstReadOnly(self):
        calls = []

        class Holder:
            value = once("value", lambda self: calls.append(self) or ("computed",))

            def __init__(self):
                self._value = Unset

        holder = Holder()
        self.assertEqual(calls, [])
        first = holder.value
        second = holder.value
        self.assertIs(first, second)
        self.assertEqual(len(calls), 1)

    def testOnceRequiresCallable(self):
        with self.assertRaises(TypeError):
            once("value", "not callable")


if __name__ == "__main__":
    unittest.main()
