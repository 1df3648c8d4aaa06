r"""
Helmsman schema model: options, commands and the option merger.

Overview
- Option: a named, typed, optionally-required value or flag, reachable as
  --name or by its short alias (-a).
- Command: a named unit of behavior with its own options and a handler.
- check_collisions(options): enforce unique names/aliases within one resolution scope.
- merge(globals, options): global options first, then command options, validated
  as a single scope before the second parse pass.

Introspection & representation
- SchemaType metaclass provides stable __repr__/__rich_repr__ and exposes the
  fields listed in __introspectable__ as read-only properties (frozen snapshots).

Metadata (sanitized on construction)
- Option
  • name: identifier, must not start with '-' and must match r"[^\W_][\w-]*".
  • alias: Unset | identifier of one to three characters (the dash is not part of it).
  • type: Kind | "bool" | "string" | "number".
  • required: bool.
  • default: Unset | value already of the declared type (ints become floats).
  • choices: strings only, string options only, duplicates rejected.
  • descr: Unset | non-empty str | Text.
- Command
  • name, descr as above; handler: callable taking a Context; options: Iterable[Option].

Validation highlights
- Invalid definitions raise TypeError (wrong kind of object) or ValueError
  (right kind, bad content), always prefixed with the typename.
"""
import functools
import operator
import re
from collections.abc import Iterable

from rich.text import Text

from .utils import *
from .values import Kind, kindof


class SchemaType(type):
    """
    Metaclass that turns schema classes into introspectable, read-only records.

    Responsibilities
    - Derive __typename__ from the class name (camel-case split with hyphens)
      for consistent messages.
    - Expose every name listed in __introspectable__ as a read-only property
      mirroring the private backing field ("_" + name).
    - Provide stable __repr__/__rich_repr__ implementations for diagnostics.
    """
    __introspectable__ = ()
    __displayable__ = Unset

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
            """
            Return a concise, stable representation with key metadata.

            Example
            - option(name='dev', alias='D', type=<Kind.BOOL: 'bool'>, ...)
            """
            return f"{type(self).__typename__}({', '.join(map(functools.partial(operator.mod, '%s=%r'), self.__rich_repr__()))})"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            """
            Yield (name, object) pairs for pretty printers.
            """
            for name in coalesce(type(self).__displayable__, type(self).__introspectable__):
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


def _sanitize_identifier(cls, metadata, name, /):
    """
    Internal: validate an identifier-like field (option name/alias, command name).
    """
    if not isinstance(identifier := metadata[name], str | Unset):
        raise TypeError(f"{cls.__typename__} {name!r} must be a string")
    if isinstance(identifier, str):
        if not (identifier := identifier.strip()):
            raise ValueError(f"{cls.__typename__} {name!r} cannot be empty")
        if identifier.startswith("-"):
            raise ValueError(f"{cls.__typename__} {name!r} must be given without leading dashes")
        if not re.fullmatch(r"[^\W_][\w-]*", identifier):
            raise ValueError(f"{cls.__typename__} {name!r} must be a valid identifier (unicodes are allowed)")
    metadata[name] = identifier


def _sanitize_descr(cls, metadata, /):
    """
    Internal: 'descr' is Unset or a non-empty (trimmed) string or rich Text.
    """
    if not isinstance(descr := metadata["descr"], str | Text | Unset):
        raise TypeError(f"{cls.__typename__} 'descr' must be a string")
    elif isinstance(descr, str) and not (descr := descr.strip()):
        raise ValueError(f"{cls.__typename__} 'descr' cannot be empty")
    metadata["descr"] = descr


def _sanitize_typed_metadata(cls, metadata, /):
    """
    Internal: validate the fields that depend on the declared type.

    - type: normalized to Kind.
    - default: must already be of the declared kind; numbers are stored as float.
    - choices: string options only; strings only; no duplicates; declaration order kept.
      A default on an option with choices must be one of them.
    """
    try:
        metadata["type"] = kind = Kind(metadata["type"])
    except ValueError:
        raise ValueError(f"{cls.__typename__} 'type' must be one of {', '.join(map(repr, map(str, Kind)))}") from None

    if (default := metadata["default"]) is not Unset:
        try:
            matches = kindof(default) is kind
        except TypeError:
            matches = False
        if not matches:
            raise TypeError(f"{cls.__typename__} 'default' must be a {kind} value")
        if kind is Kind.NUMBER:
            metadata["default"] = float(default)

    if isinstance(choices := metadata["choices"], str) or not isinstance(choices, Iterable):
        raise TypeError(f"{cls.__typename__} 'choices' must be an iterable of strings")
    sanitized = []
    for choice in choices:
        if not isinstance(choice, str):
            raise TypeError(f"{cls.__typename__} 'choices' must be an iterable of strings")
        if choice in sanitized:
            raise ValueError(f"{cls.__typename__} 'choices' cannot contain duplicates")
        sanitized.append(choice)
    if sanitized and kind is not Kind.STRING:
        raise TypeError(f"{cls.__typename__} 'choices' are only allowed on string options")
    if sanitized and default is not Unset and default not in sanitized:
        raise ValueError(f"{cls.__typename__} 'default' must be one of its 'choices'")
    metadata["choices"] = tuple(sanitized)


class Option(metaclass=SchemaType):
    """
    Named, typed option specification.

    An option is matched by its long form (--name) or its short alias (-a);
    both resolve to the same option and results are always keyed by name.

    Properties
    - The names listed in __introspectable__ are exposed as read-only attributes
      on instances, mirroring the sanitized metadata values (Unset becomes None).
    """

    __introspectable__ = (
        "name",
        "alias",
        "type",
        "required",
        "default",
        "choices",
        "descr",
    )

    def __new__(
            cls,
            name,
            type,
            /,
            alias=Unset,
            *,
            required=False,
            default=Unset,
            choices=(),
            descr=Unset
    ):
        """
        Construct an Option with the provided metadata.

        Parameters
        - name: str
          Canonical long-form identifier (used as --name and as the result key).
        - type: Kind | str
          "bool", "string" or "number".
        - alias: Unset | str
          Short form, one to three characters, used as -alias.
        - required: bool
          When True, the option must be present after parsing (a default satisfies it).
        - default: Unset | bool | str | int | float
          Pre-typed value injected when the user supplies nothing.
        - choices: Iterable[str]
          Allow-list for string options; exact match.
        - descr: Unset | str | Text
          Short description for help output.

        Raises
        - TypeError/ValueError on invalid metadata.
        """
        metadata = {
            "name": name,
            "alias": alias,
            "type": type,
            "required": bool(required),
            "default": default,
            "choices": choices,
            "descr": descr,
        }
        if name is Unset:
            raise TypeError(f"{cls.__typename__} must specify a name")
        _sanitize_identifier(cls, metadata, "name")
        _sanitize_identifier(cls, metadata, "alias")
        if isinstance(alias := metadata["alias"], str) and len(alias) > 3:
            raise ValueError(f"{cls.__typename__} 'alias' must be one to three characters long")
        _sanitize_typed_metadata(cls, metadata)
        _sanitize_descr(cls, metadata)

        self = super().__new__(cls)
        for name, object in metadata.items():
            setattr(self, "_" + name, coalesce(object))
        return self

    @property
    def flags(self):
        """
        Command-line spellings of this option, short form first ('-a', '--name').
        """
        return tuple(filter(None, (self.alias and "-" + self.alias, "--" + self.name)))


def check_collisions(options, /):
    """
    Validate that a set of options can live in one resolution scope.

    Rules
    - names are unique;
    - aliases are unique;
    - an alias never equals the name of another option.

    Returns the options as a tuple, in the given order.

    Raises
    - TypeError: when an element is not an Option.
    - ValueError: on the first collision found (schema order).
    """
    options = tuple(options)
    names = {}
    aliases = {}
    for option in options:
        if not isinstance(option, Option):
            raise TypeError("options must be an iterable of options")
        if option.name in names:
            raise ValueError(f"option name {option.name!r} is already in use")
        if option.name in aliases and aliases[option.name] is not option:
            raise ValueError(f"option name {option.name!r} is already in use as an alias")
        names[option.name] = option
        if option.alias is None:
            continue
        if option.alias in aliases:
            raise ValueError(f"option alias {option.alias!r} is already in use")
        if option.alias in names and names[option.alias] is not option:
            raise ValueError(f"option alias {option.alias!r} is already in use as a name")
        aliases[option.alias] = option
    return options


def merge(globals, options, /):
    """
    Build the resolution schema for a command: global options, then the
    command's own options, relative order preserved within each group.

    A command option colliding with a global option is a schema error and
    raises ValueError (see check_collisions).
    """
    return check_collisions((*globals, *options))


class Command(metaclass=SchemaType):
    """
    Named unit of behavior: description, options and a handler.

    A command is callable: calling it with a Context forwards to the handler,
    so it can stand wherever a handler is expected.
    """

    __introspectable__ = (
        "name",
        "descr",
        "options",
        "handler",
    )

    __displayable__ = (
        "name",
        "descr",
        "options",
    )

    def __new__(cls, name, handler, /, descr=Unset, options=()):
        """
        Construct a Command.

        Parameters
        - name: str
          Registry key; the first positional token selects the command.
        - handler: Callable[[Context], Any]
          Receives a validated Context; its exceptions propagate to the caller of dispatch.
        - descr: Unset | str | Text
          Shown in listings and command help.
        - options: Iterable[Option]
          Command-specific options, merged after the global ones at dispatch time.

        Raises
        - TypeError/ValueError on invalid metadata or colliding options.
        """
        if not callable(handler):
            raise TypeError(f"{cls.__typename__} 'handler' must be callable")
        if isinstance(options, str) or not isinstance(options, Iterable):
            raise TypeError(f"{cls.__typename__} 'options' must be an iterable of options")

        metadata = {
            "name": name,
            "descr": descr,
            "options": check_collisions(options),
            "handler": handler,
        }
        _sanitize_identifier(cls, metadata, "name")
        if metadata["name"] is Unset:
            raise TypeError(f"{cls.__typename__} must specify a name")
        _sanitize_descr(cls, metadata)

        self = super().__new__(cls)
        for name, object in metadata.items():
            setattr(self, "_" + name, coalesce(object))
        return self

    def __call__(self, context, /):
        return self._handler(context)


__all__ = (
    "Option",
    "Command",
    "check_collisions",
    "merge",
)
