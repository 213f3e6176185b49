"""
Tether option elements: bind one declared option to one setter.

Overview
- Option
  • Declared metadata of an option: its name and a free-text description.
    Nothing is validated here; the element validates when binding.

- Setter
  • Explicit callback standing for "the operation an option value is applied
    to". It receives the target object first, then zero or one value.
  • Carries its declared parameter types, its owner type and its name, so the
    element can validate without reflecting on the callback.
  • Setter.inspect(function, owner) builds one from a plain function, using
    its signature and resolved annotations (self is skipped).

- OptionElement
  • Validates the setter shape and the option name at construction.
  • Exposes option_type, the resolved notation parser, and the lazily
    computed available_values.
  • apply(target, values) drives the setter with a flag value or a
    converted value.

Option types
- void: setter without parameters (presence-only, flag).
- bool: setter taking a bool.
- enum types: setter taking an Enum subclass.
- any class str is assignable to: setter taking free text.

Quick example
    >>> class Build:
    ...     def set_mode(self, mode: Mode): self.mode = mode
    >>> element = OptionElement(Option("mode"), Setter.inspect(Build.set_mode, Build))
    >>> element.apply(build := Build(), ["release"])
    >>> build.mode
    <Mode.RELEASE: 2>
"""
import inspect
import typing
from inspect import Parameter

from .faults import OptionValidationError, InvalidArgumentError
from .notations import convertible, notation
from .utils import *
from .void import void


class Option:
    """
    Declared option metadata (name + description).

    - name: str, the option name as typed on the command line (without dashes).
    - descr: str | None, short free-text description used by help tooling.
    """

    def __init__(self, name, /, descr=Unset):
        if not isinstance(name, str | None):
            raise TypeError("option name must be a string")
        if not isinstance(descr, str | Unset):
            raise TypeError("option 'descr' must be a string")
        self._name = name
        self._descr = coalesce(descr)

    name = mirror("name")
    descr = mirror("descr")

    def __repr__(self):
        return f"option(name={self.name!r}, descr={self.descr!r})"

    def __eq__(self, other):
        if not isinstance(other, Option):
            return NotImplemented
        return (self.name, self.descr) == (other.name, other.descr)

    def __hash__(self):
        return hash((self.name, self.descr))


class Setter:
    """
    Callback an option value is applied to.

    Parameters
    - callback: Callable[[target, *values], Any]
    - parameters: the declared parameter types, excluding the target (0 or 1
      are supported by OptionElement; more are rejected there).
    - owner: the type declaring the setter (diagnostics and discovery).
    - name: the setter name (diagnostics only); defaults to the callback name.
    """

    def __init__(self, callback, /, *parameters, owner=Unset, name=Unset):
        if not callable(callback):
            raise TypeError("setter callback must be callable")
        self._callback = callback
        self._parameters = parameters
        self._owner = coalesce(owner)
        self._name = coalesce(name, getattr(callback, "__name__", repr(callback)))

    callback = mirror("callback")
    parameters = mirror("parameters")
    owner = mirror("owner")
    name = mirror("name")

    @classmethod
    def inspect(cls, function, /, owner=Unset):
        """
        Build a setter from a plain function (or unbound method).

        - The first parameter receives the target, like `self` in a method;
          pass the function itself, not a bound method.
        - Each remaining parameter contributes its resolved annotation;
          unannotated parameters are taken as `object`.
        - Variadic and keyword-only parameters are counted too, so that an
          unsupported shape is reported by the element instead of being
          silently ignored.
        """
        signature = inspect.signature(function)
        try:
            hints = typing.get_type_hints(function)
        except NameError as exception:
            raise OptionValidationError(
                f"cannot resolve the annotations of setter {function.__qualname__!r}: {exception}",
                setter=function,
            ) from None

        parameters = list(signature.parameters.values())
        if not parameters or parameters[0].kind not in (Parameter.POSITIONAL_ONLY, Parameter.POSITIONAL_OR_KEYWORD):
            raise TypeError(f"setter {function.__qualname__!r} must accept the target as its first parameter")
        del parameters[0]

        return cls(
            function,
            *(hints.get(parameter.name, object) for parameter in parameters),
            owner=owner,
            name=function.__name__,
        )

    def __call__(self, target, /, *values):
        return self._callback(target, *values)

    def __repr__(self):
        owner = qualify(self.owner) + "." if self.owner is not None else ""
        return f"setter({owner}{self.name}({', '.join(map(qualify, self.parameters))}))"


class OptionElement:
    """
    One bindable option: an Option bound to a Setter.

    Construction (all checks run here, before any value is applied)
    - a setter with more than one parameter is rejected;
    - a single parameter must be bool, an enum type, or a class str is
      assignable to;
    - the option name must be a non-empty string.
    Any failure raises OptionValidationError.

    Properties
    - option_name, element_name, declaring_type, description
    - option_type: void, bool, an enum type or the string-assignable type
    - notation: notation parser for option_type (resolved once)
    - available_values: tuple of legal textual values (computed on first read)
    """

    def __init__(self, option, setter, /):
        if not isinstance(option, Option):
            raise TypeError("OptionElement() first argument must be an option")
        if not isinstance(setter, Setter):
            raise TypeError("OptionElement() second argument must be a setter")
        self._option_name = option.name
        self._description = option.descr
        self._setter = setter
        self._declaring_type = setter.owner
        self._element_name = setter.name

        self._assert_setter_supported()
        self._option_type = void if not setter.parameters else setter.parameters[0]
        self._assert_valid_option_name()

        self._notation = notation(self._option_type)
        self._available_values = Unset

    option_name = mirror("option_name")
    element_name = mirror("element_name")
    declaring_type = mirror("declaring_type")
    description = mirror("description")
    option_type = mirror("option_type")
    notation = mirror("notation")
    setter = mirror("setter")

    available_values = once("available_values", lambda self: tuple(self._notation.choices()))

    def _where(self):
        if self._declaring_type is None:
            return repr(self._element_name)
        return f"'{qualify(self._declaring_type)}#{self._element_name}'"

    def _assert_setter_supported(self):
        parameters = self._setter.parameters
        if len(parameters) > 1:
            raise OptionValidationError(
                f"option {self._option_name!r} cannot be linked to setters with multiple parameters "
                f"in {self._where()}",
                option=self._option_name,
            )
        if len(parameters) == 1 and not convertible(parameter := parameters[0]):
            raise OptionValidationError(
                f"option {self._option_name!r} cannot be casted to parameter type {qualify(parameter)!r} "
                f"in {self._where()}",
                option=self._option_name,
            )

    def _assert_valid_option_name(self):
        if not isinstance(self._option_name, str) or not self._option_name:
            raise OptionValidationError(
                f"no option name set on {self._where()}",
                option=self._option_name,
            )

    def apply(self, target, values, /):
        """
        Apply raw values to the target through the setter.

        - no value: the setter is called with True (flag semantics), or with
          nothing at all when it takes no parameter;
        - one value: converted by the notation parser, then passed on;
        - more values: InvalidArgumentError, lists are not supported.

        Conversion failures raise TypeConversionError. The element itself is
        never modified.
        """
        values = list(values)
        if not values:
            if self._option_type is void:
                self._setter(target)
            else:
                self._setter(target, True)
        elif len(values) > 1:
            raise InvalidArgumentError(
                f"lists not supported for option {self._option_name!r}",
                option=self._option_name,
                values=tuple(values),
            )
        else:
            self._setter(target, self._notation.parse(values[0]))

    def __repr__(self):
        return (
            f"option-element(option_name={self.option_name!r}, option_type={qualify(self.option_type)}, "
            f"setter={self.setter!r})"
        )


__all__ = (
    "Option",
    "Setter",
    "OptionElement",
)
