"""
Helmsman value model.

A parsed option value is one of exactly three Python types:

- bool   (Kind.BOOL)    flags, and "true"/"false" literals for boolean options
- str    (Kind.STRING)  free text, optionally restricted by choices
- float  (Kind.NUMBER)  every number, integral or not

“Absent” is never a value: it is a missing key in a result mapping (or None on
optional schema attributes), so an unset option cannot be mistaken for False,
0.0 or "".
"""
import math
from enum import StrEnum

Value = bool | str | float


class Kind(StrEnum):
    """
    declared type of an option, fixed when the schema is defined.
    """
    BOOL = "bool"
    STRING = "string"
    NUMBER = "number"


def kindof(value, /):
    """
    return the Kind of a value.

    bool is checked before numbers because bool is an int subclass in Python;
    ints are accepted as numbers for convenience when values are declared in code.
    """
    if isinstance(value, bool):
        return Kind.BOOL
    if isinstance(value, str):
        return Kind.STRING
    if isinstance(value, int | float):
        return Kind.NUMBER
    raise TypeError(f"kindof() argument must be a bool, a string or a number, not {type(value).__name__!r}")


def parse_number(text, /):
    """
    try-numeric-else-string: a float when the text parses as one, the text otherwise.

    >>> parse_number("3")
    3.0
    >>> parse_number("three")
    'three'
    """
    try:
        return float(text)
    except ValueError:
        return text


def render_value(value, /):
    """
    format a value the way users type it: true/false, 7000 rather than 7000.0.
    """
    match kindof(value):
        case Kind.BOOL:
            return "true" if value else "false"
        case Kind.NUMBER:
            if math.isfinite(value) and float(value).is_integer():
                return str(int(value))
            return str(float(value))
        case _:
            return value


__all__ = (
    "Value",
    "Kind",
    "kindof",
    "parse_number",
    "render_value",
)
