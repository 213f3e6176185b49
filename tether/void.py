# python
"""
Marker for options that carry no value.

This module exposes a single instance: `void`. An option element whose setter
takes no parameter reports `void` as its option type, the same way a setter
taking a `bool` reports `bool`. It is falsy, pretty-prints as "(void)", and
renders with colors in Rich.

Common patterns
- Flag detection:
    if element.option_type is void: ...
- Notation lookup:
    notation(void)  # -> the flag notation parser

Notes
- `void` is a cached singleton (per-process).
- It is an instance, not a class; compare by identity.
"""
from rich.text import Text

void = type("void-type", (), {
    "__module__": None,
    "__slots__": (),
    "__rich__": lambda self: Text.assemble(("(", "yellow"), ("void", "red"), (")", "yellow")),
    "__repr__": lambda self: "(void)",
    "__bool__": lambda self: False,
    "__doc__": "option type of presence-only options (setters without parameters)",
    # Cache the singleton creation so repeated instantiation returns the same object.
    "__new__": __import__("functools").cache(lambda cls: super(type, cls).__new__(cls)),
})()


__all__ = ("void",)
