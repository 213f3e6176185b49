"""
Notations module behavioral tests (text to typed values).

Scope
- Validate the enum parser: case-insensitive lookup, no partial matching,
  diagnostics listing every valid value, describe() contract.
- Validate the boolean, string and flag variants.
- Validate the cached notation() lookup and the text-only source check.

Conventions
- Test method names follow CamelCase per project convention.
- Tests use the public API re-exported by the package.
"""
import unittest
from collections.abc import Sequence
from enum import Enum, Flag
from typing import Protocol
from unittest import TestCase

from tether import (
    BooleanNotationParser,
    EnumNotationParser,
    FlagNotationParser,
    StringNotationParser,
    TypeConversionError,
    UnsupportedNotationError,
    FaultCode,
    convertible,
    notation,
    void,
)


class Color(Enum):
    RED = 1
    GREEN = 2
    BLUE = 3


class Shade(Enum):
    RED = 1
    CRIMSON = 1  # alias of RED
    NAVY = 2


class Perm(Flag):
    R = 1
    W = 2
    ALL = R | W


class Sized(Protocol):
    size: int


class TestEnumNotationParser(TestCase):
    """Behavioral tests for the enum variant."""

    def setUp(self):
        self.parser = EnumNotationParser(Color)

    def testParseIgnoresCase(self):
        for text in ("green", "GREEN", "Green", "gReEn"):
            with self.subTest(text=text):
                self.assertIs(self.parser.parse_type(text), Color.GREEN)

    def testParseGoesThroughSourceCheck(self):
        self.assertIs(self.parser.parse("blue"), Color.BLUE)

    def testUnknownValueListsEveryMember(self):
        with self.assertRaises(TypeConversionError) as caught:
            self.parser.parse_type("purple")
        message = str(caught.exception)
        self.assertIn("'purple'", message)
        self.assertIn("RED, GREEN, BLUE", message)
        self.assertIn("case insensitive", message)
        self.assertIs(caught.exception.code, FaultCode.UNCONVERTIBLE_VALUE)
        self.assertEqual(caught.exception.options["choices"], ("RED", "GREEN", "BLUE"))

    def testNoPrefixMatching(self):
        for text in ("gre", "re", "blu", "greenish", ""):
            with self.subTest(text=text):
                with self.assertRaises(TypeConversionError):
                    self.parser.parse_type(text)

    def testAliasesAreNotSeparateValues(self):
        parser = EnumNotationParser(Shade)
        self.assertEqual(parser.choices(), ("RED", "NAVY"))
        self.assertIs(parser.parse_type("red"), Shade.RED)
        with self.assertRaises(TypeConversionError):
            parser.parse_type("crimson")

    def testNamedFlagCompositesAreValues(self):
        parser = EnumNotationParser(Perm)
        self.assertEqual(parser.choices(), ("R", "W", "ALL"))
        self.assertIs(parser.parse_type("all"), Perm.ALL)
        self.assertIs(parser.parse_type("w"), Perm.W)
        with self.assertRaises(TypeConversionError) as caught:
            parser.parse_type("x")
        self.assertIn("R, W, ALL", str(caught.exception))

    def testNonTextNotationRejected(self):
        with self.assertRaises(UnsupportedNotationError) as caught:
            self.parser.parse(2)
        self.assertIsInstance(caught.exception, TypeConversionError)
        self.assertIs(caught.exception.code, FaultCode.UNSUPPORTED_NOTATION)

    def testDescribeAppendsOneEntryPerCall(self):
        formats = []
        self.parser.describe(formats)
        self.assertEqual(len(formats), 1)
        for name in ("RED", "GREEN", "BLUE"):
            self.assertIn(name, formats[0])
        self.parser.describe(formats)
        self.assertEqual(len(formats), 2)
        self.assertEqual(formats[0], formats[1])

    def testChoicesFollowDefinitionOrder(self):
        self.assertEqual(self.parser.choices(), ("RED", "GREEN", "BLUE"))

    def testTargetIsTheEnumType(self):
        self.assertIs(self.parser.target, Color)

    def testConstructorRejectsNonEnum(self):
        with self.assertRaises(TypeError):
            EnumNotationParser(str)
        with self.assertRaises(TypeError):
            EnumNotationParser(Color.RED)


class TestBooleanNotationParser(TestCase):
    """Behavioral tests for the boolean variant."""

    def setUp(self):
        self.parser = BooleanNotationParser()

    def testCanonicalLiterals(self):
        self.assertIs(self.parser.parse("true"), True)
        self.assertIs(self.parser.parse("false"), False)

    def testCaseSensitive(self):
        for text in ("True", "FALSE", "tRue"):
            with self.subTest(text=text):
                with self.assertRaises(TypeConversionError):
                    self.parser.parse(text)

    def testOtherTextRejected(self):
        for text in ("notabool", "yes", "1", ""):
            with self.subTest(text=text):
                with self.assertRaises(TypeConversionError) as caught:
                    self.parser.parse(text)
                self.assertIn(repr(text), str(caught.exception))

    def testChoicesAndDescribe(self):
        self.assertEqual(self.parser.choices(), ("true", "false"))
        formats = []
        self.parser.describe(formats)
        self.assertEqual(len(formats), 1)
        self.assertIn("true", formats[0])
        self.assertIn("false", formats[0])


class TestStringNotationParser(TestCase):
    """Behavioral tests for the free-text variant."""

    def testPassesTextThrough(self):
        parser = StringNotationParser(str)
        for text in ("", "hello world", "--not-an-option", "TRUE"):
            with self.subTest(text=text):
                self.assertIs(parser.parse(text), text)

    def testNoChoices(self):
        self.assertEqual(StringNotationParser(str).choices(), ())

    def testDescribe(self):
        formats = []
        StringNotationParser(object).describe(formats)
        self.assertEqual(len(formats), 1)


class TestFlagNotationParser(TestCase):
    """Behavioral tests for the presence-only variant."""

    def testTargetIsVoid(self):
        self.assertIs(FlagNotationParser().target, void)

    def testAnyValueRejected(self):
        with self.assertRaises(TypeConversionError):
            FlagNotationParser().parse("true")

    def testNoChoices(self):
        self.assertEqual(FlagNotationParser().choices(), ())


class TestNotationLookup(TestCase):
    """Behavioral tests for convertible() and notation()."""

    def testVariantPerOptionType(self):
        self.assertIsInstance(notation(void), FlagNotationParser)
        self.assertIsInstance(notation(bool), BooleanNotationParser)
        self.assertIsInstance(notation(Color), EnumNotationParser)
        self.assertIsInstance(notation(str), StringNotationParser)
        self.assertIsInstance(notation(object), StringNotationParser)
        self.assertIsInstance(notation(Sequence), StringNotationParser)

    def testLookupIsCached(self):
        self.assertIs(notation(Color), notation(Color))
        self.assertIsNot(notation(Color), notation(Shade))

    def testUnsupportedTypesRejected(self):
        for type in (int, float, list, bytes):
            with self.subTest(type=type):
                self.assertFalse(convertible(type))
                with self.assertRaises(TypeError):
                    notation(type)

    def testNonClassesAreNotConvertible(self):
        self.assertFalse(convertible("str"))
        self.assertFalse(convertible(void))

    def testProtocolsWithoutClassChecksAreNotConvertible(self):
        self.assertFalse(convertible(Sized))
        with self.assertRaises(TypeError):
            notation(Sized)


if __name__ == "__main__":
    unittest.main()
