"""
Clausal utilities (internal helpers, carefully exposed)

Scope
- Small building blocks shared by the compiler, the matcher and the session so
  that defaults, read-only state and input validation behave the same everywhere.

Overview
- UnsetType / Unset
  • Singleton sentinel to represent “value not provided” without conflating with None.
  • Falsey (bool(Unset) is False), printable as "Unset", and non-subclassable.

- coalesce(value, default=None)
  • Replace Unset with a concrete default, but preserve legitimate falsey values.

- rename(callable, name) / @rename("name")
  • Assign stable __name__/__qualname__ to generated callables.

- mirror("attr")
  • Read-only property factory exposing a private backing field (self._attr),
    handing out copies of containers so public state cannot be mutated.

- IntrospectiveType
  • Metaclass publishing every name in __introspectable__ as a mirrored property
    and deriving __repr__/__rich_repr__ from them.

- validate(value, label) / validate_all(values, label)
  • Boundary checks for public entry points: strings only, non-empty and at most
    MAX_LENGTH characters; sequences at most MAX_LENGTH items.

Quick examples
    >>> coalesce(Unset, "fallback")
    'fallback'
    >>> validate("file", "definition")
    'file'
"""
import builtins
import functools
import operator
import re
from collections.abc import Sequence, Mapping, Set
from typing import final

from .faults import ValidationError, FaultCode

MAX_LENGTH = 256
"""Upper bound for any string handed to the public API and for the number of clauses or arguments."""


@final
class UnsetType:
    """
    Internal sentinel type representing a value that was not provided.

    Characteristics
    - Boolean-false: bool(Unset) is False, but it is distinct from None and 0.
    - Printable: repr(Unset) -> "Unset".
    - Non-subclassable and a singleton per process.
    """

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __init_subclass__(cls, **options):
        raise TypeError("type 'UnsetType' is not an acceptable base type")


def coalesce(object, default=None, /):
    """
    Resolve the Unset sentinel to a concrete default.

    None, 0, "" and [] are preserved as-is; only Unset is replaced.

    Examples
    - coalesce("name", "fallback") -> "name"
    - coalesce(Unset, "fallback")  -> "fallback"
    - coalesce(None, "fallback")   -> None
    """
    return object if object is not Unset else default


def rename(*parameters):
    """
    Set a stable __name__/__qualname__ on a callable, or return a decorator
    that will do so later.

    Forms
    - rename(callable, name) -> callable
    - rename(name) -> decorator
    """
    match len(parameters):
        case 2:
            callable, name = parameters
            if not builtins.callable(callable):
                raise TypeError("rename() first argument must be callable")
            if not isinstance(name, str):
                raise TypeError("rename() second argument must be a string")
            try:
                callable.__qualname__ = name
                callable.__name__ = name
            except (AttributeError, TypeError):
                raise TypeError("rename() first argument must be a updatable callable") from None
            return callable
        case 1:
            name, = parameters
            if not isinstance(name, str):
                raise TypeError("@rename() argument must be a string")

            def wrapper(callable):
                if not builtins.callable(callable):
                    raise TypeError("@rename() must be applied to a callable")
                return rename(callable, name)

            return rename(wrapper, "rename")
        case _:
            raise TypeError("rename takes 1 to 2 arguments but %d were given" % len(parameters))


def _immortalize(object):
    """
    Recursively copy container values.

    - Sequence (non-string) → new list, Mapping → new dict, Set → new set.
    - Tuples stay tuples so that frozen metadata keeps its shape.
    - Anything else is returned as-is.
    """
    if isinstance(object, tuple):
        return tuple(map(_immortalize, object))
    if isinstance(object, Sequence) and not isinstance(object, str):
        return list(map(_immortalize, object))
    elif isinstance(object, Mapping):
        return dict(zip(object.keys(), map(_immortalize, object.values())))
    elif isinstance(object, Set):
        return set(map(_immortalize, object))
    else:
        return object


def mirror(name, /):
    """
    Define a read-only property that mirrors the private attribute "_{name}".

    Containers are copied on every access (see _immortalize), so callers can
    never reach the backing state through the public API.
    """
    if not isinstance(name, str):
        raise TypeError("mirror() argument must be a string")

    @rename(name)
    def getter(self):
        return _immortalize(getattr(self, "_" + name))

    return property(getter)


class IntrospectiveType(type):
    """
    Metaclass that exposes declared fields as read-only properties.

    Conventions
    - __introspectable__: names published through mirror(); the instance stores
      them as "_{name}".
    - __displayable__: optional narrower subset used by __repr__/__rich_repr__.
    - __typename__: hyphenated, lowercased class name used in representations
      (CommandDefinition → "command-definition").
    """

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            return f"{type(self).__typename__}({', '.join(map(functools.partial(operator.mod, '%s=%r'), self.__rich_repr__()))})"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for name in getattr(type(self), "__displayable__", None) or type(self).__introspectable__:
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


def validate(value, label, /, *, empty=False):
    """
    Check a single public input string and return it unchanged.

    Raises ValidationError when the value is not a string, is empty (or only
    whitespace) unless empty=True, or exceeds MAX_LENGTH characters.
    """
    if not isinstance(value, str):
        raise ValidationError(
            "%s must be a string, not %s" % (label, type(value).__name__),
            title="invalid input",
            code=FaultCode.INVALID_INPUT,
            input=value,
            hint="pass %s as text" % label,
        )
    if not empty and not value.strip():
        raise ValidationError(
            "%s must not be empty" % label,
            title="invalid input",
            code=FaultCode.INVALID_INPUT,
            input=value,
            hint="provide a non-empty %s" % label,
        )
    if len(value) > MAX_LENGTH:
        raise ValidationError(
            "%s is longer than %d characters" % (label, MAX_LENGTH),
            title="invalid input",
            code=FaultCode.INVALID_INPUT,
            input=value,
            hint="shorten the %s" % label,
        )
    return value


def validate_all(values, label, /, *, empty=False):
    """
    Check a sequence of public input strings and return them as a list.

    Raises ValidationError for an empty sequence, one longer than MAX_LENGTH
    items, or any element rejected by validate().
    """
    if isinstance(values, str) or not isinstance(values, Sequence):
        raise ValidationError(
            "%s must be a sequence of strings" % label,
            title="invalid input",
            code=FaultCode.INVALID_INPUT,
            input=values,
            hint="pass a list of strings",
        )
    if not values:
        raise ValidationError(
            "%s must not be empty" % label,
            title="invalid input",
            code=FaultCode.INVALID_INPUT,
            input=values,
            hint="provide at least one %s" % label,
        )
    if len(values) > MAX_LENGTH:
        raise ValidationError(
            "%s holds more than %d items" % (label, MAX_LENGTH),
            title="invalid input",
            code=FaultCode.INVALID_INPUT,
            input=values,
            hint="split the input into smaller batches",
        )
    return [validate(value, label, empty=empty) for value in values]


@functools.cache
def ordinal(number):
    """
    Return a human-friendly ordinal label for a 1-based position.

    - 1..10 are rendered as words ("first"…"tenth").
    - Other numbers use numeric ordinals with correct English suffixes.
    """
    try:
        return {
            1: "first",
            2: "second",
            3: "third",
            4: "fourth",
            5: "fifth",
            6: "sixth",
            7: "seventh",
            8: "eighth",
            9: "ninth",
            10: "tenth",
        }[number]
    except KeyError:
        pass

    if 10 < number % 100 < 20:
        return f"{number}th"

    return f'{number}%s' % {1: "st", 2: "nd", 3: "rd"}.get(number % 10, "th")


Unset = UnsetType()
"""
Internal sentinel for “not provided”.

Use Unset as a default when None is a meaningful value but “no input” must
still be distinguishable; materialize it with coalesce().
"""


__all__ = (
    # Functions
    "coalesce",
    "rename",
    "mirror",
    "validate",
    "validate_all",
    "ordinal",

    # Types
    "UnsetType",
    "IntrospectiveType",

    # Constants
    "Unset",
    "MAX_LENGTH",
)
