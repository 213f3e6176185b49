"""
Tether faults (errors) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every fault the binding
  layers can raise. Codes are grouped by the moment they surface.
- OptionException: base type that carries message + options and knows how to
  render itself in a friendly, lowercased, and actionable way.
- trigger(): central entry point to surface any fault (respecting shell/fancy/colorful).
- getdoc(): optional description lookup for a code from the host application.

When faults surface
- construction time: OptionValidationError, before any value is applied.
- apply time: TypeConversionError / UnsupportedNotationError per value,
  InvalidArgumentError per option.
- invocation time: UnknownOptionError, when a name has no element.

Integration
- Core layers only raise; they never print, log, retry, or swallow.
- The invocation harness calls trigger(fault, **ctx). In non-shell mode the
  fault is raised; in shell mode it is rendered via rich and the process exits.
"""
import copy
import sys
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes used across the binding layers (stable identifiers).

    grouping (by high-level domain)
    - declaration (2110x)
      • INVALID_OPTION
    - conversion (2111x)
      • UNCONVERTIBLE_VALUE, UNSUPPORTED_NOTATION
    - arity (2112x)
      • TOO_MANY_VALUES
    - routing (2113x)
      • UNKNOWN_OPTION
    """
    # --- declaration errors (21xxx) ---
    INVALID_OPTION              = 21101

    # --- conversion errors (21xxx) ---
    UNCONVERTIBLE_VALUE         = 21111
    UNSUPPORTED_NOTATION        = 21112

    # --- arity errors (21xxx) ---
    TOO_MANY_VALUES             = 21121

    # --- routing errors (21xxx) ---
    UNKNOWN_OPTION              = 21131

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class OptionException(Exception):
    """
    base type for every binding fault.

    - message: the one-sentence body (str).
    - options: read-only mapping of rendering context. Subclasses provide
      defaults for 'code', 'title' and 'hint' through __defaults__; call sites
      may add anything else (e.g. 'option', 'value') for the renderer or the
      host application.
    """
    __defaults__ = MappingProxyType({})

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        self.message = message
        self.options = MappingProxyType(type(self).__defaults__ | options)
        super().__init__(message)

    def __str__(self):
        return str(self.message) if self.message is not Unset else ""

    @property
    def code(self):
        return self.options.get("code")

    def __rich__(self):
        main = __import__("__main__")

        styles = defaultdict(str, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        } | getattr(main, "__styles__", {}))

        colorful = self.options.get("colorful", False)
        fancy = self.options.get("fancy", False)

        def styler(style):
            return styles[style] if colorful else ""

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if not colorful:
                return Text(str(fragment))
            if isinstance(fragment, Text):
                return fragment
            return Text(str(fragment), style)

        prog = text(getattr(main, "__prog__", self.options.get("prog", "tether")), styler("prog-name"))

        header = Text.assemble(
            "[ ",
            prog,
            " — ",
            text(self.code.normalize() if self.code is not None else "", styler("code")),
            " | ",
            text(self.options.get("title", "").title(), styler("error-title")),
            " ]"
        )
        message = text(str(self), styler("error-message"))
        hint = Text.assemble(text(" → ", styler("hint-arrow")), text(self.options.get("hint"), styler("hint")))

        if fancy:
            return Panel(Group(message, hint), title=header, title_align="left")

        return Group(header, message, hint)

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            raise self from None
        console.print(self)
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class OptionValidationError(OptionException):
    __defaults__ = MappingProxyType({
        "code": FaultCode.INVALID_OPTION,
        "title": "invalid option",
        "hint": "fix the option declaration; it is rejected before any value is applied",
    })


class TypeConversionError(OptionException):
    __defaults__ = MappingProxyType({
        "code": FaultCode.UNCONVERTIBLE_VALUE,
        "title": "unconvertible value",
        "hint": "pass one of the accepted values for this option",
    })


class UnsupportedNotationError(TypeConversionError):
    __defaults__ = MappingProxyType({
        "code": FaultCode.UNSUPPORTED_NOTATION,
        "title": "unsupported notation",
        "hint": "option values must be given as text",
    })


class InvalidArgumentError(OptionException):
    __defaults__ = MappingProxyType({
        "code": FaultCode.TOO_MANY_VALUES,
        "title": "too many values",
        "hint": "pass the option at most once, with a single value",
    })


class UnknownOptionError(OptionException):
    __defaults__ = MappingProxyType({
        "code": FaultCode.UNKNOWN_OPTION,
        "title": "unknown option",
        "hint": "check the spelling of the option name",
    })


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see OptionException).
    - options are merged into the fault via __replace__(**options) before triggering.
    - in shell mode, rendering happens via rich console; otherwise, the fault is raised.

    typical options
    - shell, fancy, colorful, prog, and any other context the reporter may
      want to show (e.g., option/value/target).
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    copy.replace(fault, **options).__trigger__()


def getdoc(code, /):
    """
    optional documentation fetch for a fault code.

    the host application may expose a __docs__ mapping in __main__ where keys
    are FaultCode instances and values are short documentation strings. when
    not found, returns None.
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    try:
        return getattr(__import__("__main__"), "__docs__", {})[code]
    except KeyError:
        return None


__all__ = (
    "OptionException",
    "OptionValidationError",
    "TypeConversionError",
    "UnsupportedNotationError",
    "InvalidArgumentError",
    "UnknownOptionError",
    "FaultCode",
    "trigger",
    "getdoc",
)
