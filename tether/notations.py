"""
Tether notation parsers: turn raw option text into typed values.

Overview
- NotationParser
  • Base of every parser. parse(notation) checks the notation is text, then
    hands it to parse_type(notation), which each variant implements.
  • describe(formats) appends one human-readable entry describing the accepted
    notations to an externally supplied list (help/diagnostics tooling).
  • choices() lists the legal textual values, when the set is closed.

- Variants (closed set, selected by option type)
  • FlagNotationParser: presence-only options (option type is `void`); accepts no value.
  • BooleanNotationParser: "true" / "false", case-sensitive.
  • StringNotationParser: any text, passed through unchanged.
  • EnumNotationParser: enum member names, case-insensitive.

- notation(option_type)
  • Cached lookup returning the parser for an option type. New value types are
    added as new variants here.

Parsers are stateless: every call is independent and nothing is mutated after
construction, so a single cached instance per option type is shared freely.

Quick example
    >>> class Color(Enum):
    ...     RED = 1
    ...     GREEN = 2
    >>> notation(Color).parse("green")
    <Color.GREEN: 2>
"""
import builtins
import functools
from enum import Enum

from .faults import TypeConversionError, UnsupportedNotationError
from .utils import mirror, qualify
from .void import void


def convertible(type, /):
    """
    Whether option text can be converted to the given parameter type.

    True for bool, for enum types, and for any class a str is assignable to
    (str itself, object, str's bases and protocols such as Sequence).
    Classes refusing subclass checks are not convertible.
    """
    if not isinstance(type, builtins.type):
        return False
    if type is bool or issubclass(type, Enum):
        return True
    try:
        return issubclass(str, type)
    except TypeError:
        # protocols without @runtime_checkable refuse class checks
        return False


class NotationParser:
    """
    Base notation parser: text in, typed value out.

    Subclasses implement parse_type() and describe(); choices() defaults to an
    empty tuple (open value set).
    """
    __source__ = str

    def __init__(self, target, /):
        self._target = target

    target = mirror("target")

    def parse(self, notation, /):
        if not isinstance(notation, type(self).__source__):
            raise UnsupportedNotationError(
                f"cannot convert a {type(notation).__name__!r} notation to a value of type "
                f"{qualify(self.target)!r}; only text notations are supported",
                notation=notation,
            )
        return self.parse_type(notation)

    def parse_type(self, notation, /):
        raise NotImplementedError

    def describe(self, formats, /):
        raise NotImplementedError

    def choices(self):
        return ()

    def __repr__(self):
        return f"{type(self).__name__}({qualify(self.target)})"


class FlagNotationParser(NotationParser):
    def __init__(self):
        super().__init__(void)

    def parse_type(self, notation, /):
        raise TypeConversionError(
            f"cannot coerce string value {notation!r}: presence-only options take no value",
            value=notation,
        )

    def describe(self, formats, /):
        formats.append("no value, presence alone sets the option")


class BooleanNotationParser(NotationParser):
    __literals__ = {"true": True, "false": False}

    def __init__(self):
        super().__init__(bool)

    def parse_type(self, notation, /):
        try:
            return type(self).__literals__[notation]
        except KeyError:
            raise TypeConversionError(
                f"cannot coerce string value {notation!r} to a boolean "
                f"(valid values: {', '.join(self.choices())})",
                value=notation,
            ) from None

    def describe(self, formats, /):
        formats.append(f"strings, valid values: {', '.join(self.choices())}")

    def choices(self):
        return tuple(type(self).__literals__)


class StringNotationParser(NotationParser):
    def parse_type(self, notation, /):
        return notation

    def describe(self, formats, /):
        formats.append("strings, any value")


class EnumNotationParser(NotationParser):
    """
    Enum member lookup by name, ignoring case.

    - parse_type("green"), parse_type("GREEN") and parse_type("Green") all
      return Color.GREEN.
    - No prefix or partial matching; aliases resolve through their canonical
      member only.
    - Named composite members of Flag enums (ALL = R | W) are values too.
    - An unknown name raises TypeConversionError listing every valid value.
    """

    def __init__(self, type, /):
        if not (isinstance(type, builtins.type) and issubclass(type, Enum)):
            raise TypeError("EnumNotationParser() argument must be an enum type")
        super().__init__(type)

    def parse_type(self, notation, /):
        wanted = notation.lower()
        for member in self._members():
            if member.name.lower() == wanted:
                return member
        raise TypeConversionError(
            f"cannot coerce string value {notation!r} to an enum value of type "
            f"{qualify(self.target)!r} (valid case insensitive values: {', '.join(self.choices())})",
            value=notation,
            choices=self.choices(),
        )

    def describe(self, formats, /):
        formats.append(f"strings, valid case insensitive values: {', '.join(self.choices())}")

    def choices(self):
        return tuple(member.name for member in self._members())

    def _members(self):
        # canonical names only, named Flag composites included
        return (member for name, member in self.target.__members__.items() if member.name == name)


@functools.cache
def notation(type, /):
    """
    Resolve the notation parser converting text into values of `type`.

    - void        → FlagNotationParser
    - bool        → BooleanNotationParser
    - Enum types  → EnumNotationParser(type)
    - str-assignable classes → StringNotationParser(type)

    Raises TypeError for anything else. Results are cached per type.
    """
    if type is void:
        return FlagNotationParser()
    if not convertible(type):
        raise TypeError(f"no notation parser converts strings to {qualify(type)!r}")
    if type is bool:
        return BooleanNotationParser()
    if issubclass(type, Enum):
        return EnumNotationParser(type)
    return StringNotationParser(type)


__all__ = (
    "NotationParser",
    "FlagNotationParser",
    "BooleanNotationParser",
    "StringNotationParser",
    "EnumNotationParser",
    "convertible",
    "notation",
)
