"""
Helmsman faults: what can go wrong in an invocation, and how it is shown.

Faults are ordinary exceptions raised by the parser, the coercion layer and the
context accessors. They never print or exit on their own; App.run() hands them
to trigger(), which either raises them or prints them on stderr and exits with
status 1 (shell mode).

Every fault carries a message plus free-form keyword options. The ones the
renderer reads:
- code, title, hint, docs: identity and copy of the report.
- tool, fancy, colorful: merged in by the boundary (the App and its flags).
- shell: print-and-exit instead of raising.
Parser-side faults also attach option/input/index/expected for callers that
want to inspect them.

Host hooks, read from __main__ when present
- __prog__: program name shown in the report header.
- __codes__: FaultCode → label, replacing the numeric code in reports.
- __docs__: FaultCode → one-line documentation, shown under the hint.
- __styles__: palette overrides (keys below).

Schema-definition mistakes are programmer errors and stay plain TypeError/ValueError.
"""
import sys
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset

console = Console(stderr=True)

_styles = {
    "prog-name": "bold #E6E6F0",
    "code": "bold #00E5FF",
    "error-title": "bold #FF4DA6",
    "error-message": "#C8C8D0",
    "hint-arrow": "#9CE19C dim",
    "hint": "italic #9CE19C",
    "docs": "#737373",
}


class FaultCode(IntEnum):
    """
    stable numeric identifiers of user-facing faults.

    - 1110x: routing (UNKNOWN_COMMAND)
    - 1111x/1112x: option values (MISSING_VALUE, UNCOERCIBLE_VALUE,
      INVALID_CHOICE, MISSING_REQUIRED_OPTION)
    """
    UNKNOWN_COMMAND             = 11101

    MISSING_VALUE               = 11117
    UNCOERCIBLE_VALUE           = 11118
    INVALID_CHOICE              = 11124
    MISSING_REQUIRED_OPTION     = 11125

    def normalize(self):
        """
        label shown in reports: __main__.__codes__[self] if the host defines it, else the number.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class CommandException(Exception):
    """
    base fault: message + keyword options, renderable with rich.

    subclasses set __code__ and __title__; the 'code' and 'title' options
    override them per instance.
    """
    __code__ = Unset
    __title__ = "error"

    def __init__(self, message=Unset, /, **options):
        if not isinstance(message, str | Unset):
            raise TypeError("fault message must be a string")
        if message:
            super().__init__(message)
        else:
            super().__init__()
        self.message = message
        self.options = MappingProxyType(options)

    @property
    def code(self):
        return self.options.get("code", self.__code__)

    @property
    def title(self):
        return self.options.get("title", self.__title__)

    def _paint(self, fragment, style):
        if not fragment:
            return Text("")
        if not self.options.get("colorful", False):
            return Text(str(fragment))
        if isinstance(fragment, Text):
            return fragment
        styles = _styles | getattr(__import__("__main__"), "__styles__", {})
        return Text(str(fragment), styles.get(style, ""))

    def _header(self):
        main = __import__("__main__")
        prog = getattr(main, "__prog__", getattr(self.options.get("tool"), "name", "helmsman"))
        parts = ["[ ", self._paint(prog, "prog-name")]
        if self.code:
            parts += [" — ", self._paint(self.code.normalize(), "code")]
        parts += [" | ", self._paint(self.title.title(), "error-title"), " ]"]
        return Text.assemble(*parts)

    def _body(self):
        lines = [self._paint(self.message, "error-message")]
        if hint := self.options.get("hint"):
            lines.append(Text.assemble(self._paint(" → ", "hint-arrow"), self._paint(hint, "hint")))
        if docs := self.options.get("docs"):
            lines.append(self._paint(docs, "docs"))
        return lines

    def __rich__(self):
        if self.options.get("fancy", False):
            return Panel(Group(*self._body()), title=self._header(), title_align="left")
        return Group(self._header(), *self._body())

    def __trigger__(self):
        if not self.options.get("shell", False):
            raise self from None
        console.print(self)
        sys.exit(1)

    def __replace__(self, **overrides):
        return type(self)(self.message, **self.options | overrides)


class MissingValueError(CommandException):
    __code__ = FaultCode.MISSING_VALUE
    __title__ = "missing option value"


class CoercionError(CommandException):
    __code__ = FaultCode.UNCOERCIBLE_VALUE
    __title__ = "invalid option value"


class InvalidChoiceError(CoercionError):
    __code__ = FaultCode.INVALID_CHOICE
    __title__ = "invalid choice"


class MissingRequiredOptionError(CommandException):
    __code__ = FaultCode.MISSING_REQUIRED_OPTION
    __title__ = "missing required option"


class UnknownCommandError(CommandException):
    __code__ = FaultCode.UNKNOWN_COMMAND
    __title__ = "unknown command"


def trigger(fault, /, **options):
    """
    raise or report a fault, after merging options into a copy of it.

    fault needs __replace__(**options) and __trigger__(); CommandException has both.
    """
    if not callable(getattr(fault, "__trigger__", None)) or not callable(getattr(fault, "__replace__", None)):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    fault.__replace__(**options).__trigger__()


def getdoc(code, /):
    """
    __main__.__docs__[code], or None when the host documents nothing for it.
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    return getattr(__import__("__main__"), "__docs__", {}).get(code)


__all__ = (
    "CommandException",
    "MissingValueError",
    "CoercionError",
    "InvalidChoiceError",
    "MissingRequiredOptionError",
    "UnknownCommandError",
    "FaultCode",
    "trigger",
    "getdoc",
)
