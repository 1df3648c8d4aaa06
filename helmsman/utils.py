"""
Helmsman internal helpers.

- Unset: "argument not given" marker for API defaults where None already means
  something (an absent alias, an absent default).
- coalesce(): swap Unset for a concrete fallback.
- rename(): decorator giving generated functions a readable __name__/__qualname__.
- mirror(): read-only property over a private "_name" slot, returning frozen copies.
- ordinal(): 1-based position words used in parser messages.
"""
import functools
from collections.abc import Sequence, Mapping, Set
from types import MappingProxyType
from typing import final


@final
class UnsetType:
    """
    Type of the Unset marker; there is exactly one instance.

    Unset is falsy, prints as "Unset" and can be combined with types in
    isinstance checks: isinstance(value, str | Unset).
    """

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __or__(self, other, /):
        try:
            return type(self) | other
        except TypeError:
            return NotImplemented

    def __ror__(self, other, /):
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __init_subclass__(cls, **options):
        raise TypeError("type 'UnsetType' is not an acceptable base type")


Unset = UnsetType()


def coalesce(object, default=None, /):
    """
    object, unless it is Unset; then default.

    >>> coalesce(Unset, "main")
    'main'
    >>> coalesce(False, True)
    False
    """
    return default if object is Unset else object


def rename(name, /):
    """
    decorator: set __name__ and __qualname__ of the decorated function to name.
    """
    if not isinstance(name, str):
        raise TypeError("rename() argument must be a string")

    def decorator(function):
        if not callable(function):
            raise TypeError("rename() must decorate a callable")
        function.__name__ = function.__qualname__ = name
        return function

    return decorator


def _freeze(object):
    # tuple / mappingproxy / frozenset all the way down; Unset reads as None.
    if isinstance(object, Mapping):
        return MappingProxyType({key: _freeze(value) for key, value in object.items()})
    if isinstance(object, Sequence) and not isinstance(object, str):
        return tuple(_freeze(item) for item in object)
    if isinstance(object, Set):
        return frozenset(_freeze(item) for item in object)
    return coalesce(object)


def mirror(name, /):
    """
    Property exposing self._<name> read-only.

    Containers come back frozen, so a caller holding an Option or a Context
    cannot change the schema or the parsed values behind it.
    """
    if not isinstance(name, str):
        raise TypeError("mirror() argument must be a string")

    @rename(name)
    def getter(self):
        return _freeze(getattr(self, "_" + name))

    return property(getter)


_WORDS = ("first", "second", "third", "fourth", "fifth", "sixth", "seventh", "eighth", "ninth", "tenth")


@functools.cache
def ordinal(number, /):
    """
    'first' … 'tenth', then '11th', '22nd', '103rd', '112th'.
    """
    if 1 <= number <= len(_WORDS):
        return _WORDS[number - 1]
    if number % 100 in (11, 12, 13):
        return f"{number}th"
    suffix = {1: "st", 2: "nd", 3: "rd"}.get(number % 10, "th")
    return f"{number}{suffix}"


__all__ = (
    "coalesce",
    "rename",
    "mirror",
    "ordinal",
    "UnsetType",
    "Unset",
)
