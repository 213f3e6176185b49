"""
Tether bindings: declare option setters on a class, discover them, and apply
a set of raw option values to an instance.

What this module provides
- option(name, descr=...): decorator marking a method as the setter of an option.
- discover(cls): one OptionElement per marked method of cls (inherited ones
  included), sorted by option name. Cached per class.
- invoke(target, values, **options): route each (name -> raw values) entry to
  its element and apply it to target.

Quick start
    from enum import Enum
    from tether import option, invoke

    class Level(Enum):
        LOW = 1
        HIGH = 2

    class Task:
        @option("dry-run", descr="only print what would happen")
        def set_dry_run(self):
            self.dry_run = True

        @option("level", descr="how hard to try")
        def set_level(self, level: Level):
            self.level = level

    task = invoke(Task(), {"dry-run": [], "level": ["high"]})

Design notes
- Tokenizing the command line is left to the caller: values is already a
  mapping of option name to a list of raw strings.
- Declaration errors surface at discovery, before any value is applied.
- Faults are surfaced through trigger(): raised by default, rendered with rich
  and followed by exit status 1 when shell=True.
"""
import difflib
import functools
import inspect
from collections.abc import Mapping
from types import MethodType

from .elements import Option, Setter, OptionElement
from .faults import *
from .utils import *


def option(name, /, descr=Unset):
    """
    Decorator marking a method as the setter of an option.

    Usage
        class Task:
            @option("verbose", descr="print more")
            def set_verbose(self, verbose: bool): ...

    Behavior
    - Attaches an __option__ hook returning the declared Option; the method
      itself is returned unchanged and stays callable as usual.
    - A method carries at most one option; decorating twice raises TypeError.
    - Nothing about the setter is validated here; discover() validates.
    """
    declared = Option(name, descr)

    @rename("option")
    def wrapper(callback, /):
        if not callable(callback):
            raise TypeError("@option() must be applied to a callable")
        if hasattr(callback, "__option__"):
            raise TypeError("@option() must be applied only once")
        callback.__option__ = MethodType(rename(lambda self: declared, "__option__"), callback)
        return callback

    return wrapper


@functools.cache
def discover(cls, /):
    """
    Build the option elements declared on a class and its bases.

    Rules
    - Members are collected along the MRO, base classes first; a subclass
      redefining a marked method under the same attribute name replaces it.
    - The setter bound is the one the class resolves for that attribute, so
      overrides are honored; declaring_type is the class holding the marker.
    - Two attributes declaring the same option name raise OptionValidationError.
    - A subclass rebinding a marked attribute to a non-callable raises
      OptionValidationError.
    - Each element validates its own setter and name (OptionValidationError).

    Returns
    - tuple[OptionElement, ...] sorted by option name.

    Results are cached per class for the life of the process, and each cached
    element refers back to its class, so discovered classes stay alive.
    Callers building classes on the fly release them with discover.cache_clear().
    """
    if not isinstance(cls, type):
        raise TypeError("discover() argument must be a class")

    declarations = {}
    for owner in reversed(cls.__mro__):
        for attribute, member in vars(owner).items():
            if inspect.isfunction(member) and callable(getattr(member, "__option__", None)):
                declarations[attribute] = (member.__option__(), owner)

    elements = {}
    for attribute, (declared, owner) in declarations.items():
        function = inspect.getattr_static(cls, attribute)
        if not callable(function):
            raise OptionValidationError(
                f"option {declared.name!r} cannot be linked to non-callable attribute {attribute!r} "
                f"in class {cls.__qualname__!r}",
                option=declared.name,
            )
        element = OptionElement(declared, Setter.inspect(function, owner))
        if (other := elements.get(element.option_name)) is not None:
            raise OptionValidationError(
                f"option {element.option_name!r} is declared twice in class {cls.__qualname__!r} "
                f"(by {other.element_name!r} and {element.element_name!r})",
                option=element.option_name,
            )
        elements[element.option_name] = element

    return tuple(elements[name] for name in sorted(elements))


def invoke(target, values, /, *, shell=False, colorful=True, fancy=False):
    """
    Apply raw option values to a target instance.

    Parameters
    - target: instance whose class declares option setters (see option()).
    - values: Mapping[str, Sequence[str]] from option name to raw values, in
      the order they should be applied.
    - shell: when True, faults are printed with rich and the process exits
      with status 1; otherwise they are raised.
    - colorful / fancy: rendering toggles forwarded to the faults.

    Returns
    - target, for chaining.

    Faults
    - OptionValidationError: the target class declares a malformed option.
    - UnknownOptionError: a name has no element (the hint suggests the closest one).
    - TypeConversionError / InvalidArgumentError: from OptionElement.apply().
    """
    if not isinstance(values, Mapping):
        raise TypeError("invoke() second argument must be a mapping")

    options = {"shell": bool(shell), "colorful": bool(colorful), "fancy": bool(fancy)}

    try:
        elements = {element.option_name: element for element in discover(type(target))}
    except OptionException as fault:
        trigger(fault, **options)
        return target

    for name, raw in values.items():
        if isinstance(raw, str):
            raise TypeError(f"values of option {name!r} must be a sequence of strings, not a string")
        if (element := elements.get(name)) is None:
            context = {"option": name}
            if matches := difflib.get_close_matches(str(name), elements, n=1):
                context["hint"] = f"did you mean {matches[0]!r}?"
            trigger(UnknownOptionError(f"unknown option {name!r} for {type(target).__qualname__!r}", **context), **options)
            continue
        try:
            element.apply(target, raw)
        except OptionException as fault:
            trigger(fault, **options)

    return target


__all__ = (
    "option",
    "discover",
    "invoke",
)
