"""
Helmsman application layer: register commands, dispatch an invocation, run it.

What this module provides
- App: application identity (name, version, descr), global options, the command
  registry, and the two-pass dispatcher.
- Context: what a handler receives (app name/version, args, validated options,
  and the console to print on).
- Outcome: the terminal state reached by one dispatch.

Dispatch (one invocation, no retry)
1. pass 1: lenient parse against the global options only.
2. help requested → command help when a command token was captured, top-level help otherwise.
3. version requested → version line.
4. nothing to dispatch (no arguments, or no command token) → top-level help.
5. unknown command → fault report plus the command listing; not an error.
6. known command → merge global + command options, strict pass 2, validate,
   build a Context and call the handler. Handler exceptions propagate unmodified.

Error boundary
- dispatch() raises faults (MissingValueError, CoercionError, ...) as exceptions.
- run() is the single place deciding what a fault means for the process: in shell
  mode it is printed on stderr and the process exits with status 1, otherwise it is raised.

Quick start
    from helmsman import App

    app = App("example-cli", "1.0.0", "A simple example CLI.", shell=True)

    @app.command("greet", "Greet someone").option("name", "string", "n", required=True)
    def greet(context):
        context.console.print(f"Hello, {context.take_string('name')}!")

    if __name__ == "__main__":
        app.run()
"""
import difflib
import logging
import shlex
import sys
from collections.abc import Iterable
from enum import Enum

from rich.console import Console

from .builder import CommandBuilder
from .coercion import validate
from .faults import *
from .parser import parse
from .registry import Registry
from .rendering import listing, render_help, render_command_help, render_version
from .schema import SchemaType, Option, Command, check_collisions, merge
from .utils import *
from .values import Kind, kindof

logger = logging.getLogger(__name__)


class Outcome(Enum):
    """
    terminal state of one dispatch.
    """
    HELP_SHOWN = "help-shown"
    VERSION_SHOWN = "version-shown"
    NO_ARGS_HELP = "no-args-help"
    UNKNOWN_COMMAND = "unknown-command"
    DISPATCHED = "dispatched"


class Context(metaclass=SchemaType):
    """
    Validated invocation handed to exactly one handler call.

    Fields
    - name, version: application identity.
    - args: positional arguments after the command name (tuple).
    - options: option name → value (read-only mapping; defaults included).
    - console: the application's rich console, for handler output.
    """

    __introspectable__ = (
        "name",
        "version",
        "args",
        "options",
        "console",
    )

    __displayable__ = (
        "name",
        "version",
        "args",
        "options",
    )

    def __new__(cls, name, version, args, options, console):
        self = super().__new__(cls)
        self._name = name
        self._version = version
        self._args = tuple(args)
        self._options = dict(options)
        self._console = console
        return self

    def get(self, name, default=None, /):
        return self._options.get(name, default)

    def _take(self, name, kind):
        try:
            value = self._options[name]
        except KeyError:
            value = None
        if value is None or kindof(value) is not kind:
            raise CoercionError(
                "value of option %r is not a %s" % (name, kind),
                title="invalid option value",
                code=FaultCode.UNCOERCIBLE_VALUE,
                hint="declare --%s as a %s option or read it with the matching accessor" % (name, kind),
                input=value,
                expected=kind,
                docs=getdoc(FaultCode.UNCOERCIBLE_VALUE)
            )
        return value

    def take_bool(self, name, /):
        """
        read a boolean option; 'true'/'false' strings are accepted as well.
        """
        if self._options.get(name) in ("true", "false"):
            return self._options[name] == "true"
        return self._take(name, Kind.BOOL)

    def take_string(self, name, /):
        return self._take(name, Kind.STRING)

    def take_number(self, name, /):
        return float(self._take(name, Kind.NUMBER))


def _tokenize(prompt):
    """
    Normalize a prompt into a list of tokens (program name excluded).

    - Unset: sys.argv[1:].
    - str: shell-like string, split via shlex.split.
    - Iterable[str]: each element is trimmed; empty elements are dropped.
    """
    if prompt is Unset:
        return sys.argv[1:]
    if isinstance(prompt, str):
        return shlex.split(prompt)
    if isinstance(prompt, Iterable):
        def _sanitized(iterable):
            for item in iterable:
                if not isinstance(item, str):
                    raise TypeError("dispatch() argument must be a string or an iterable of strings")
                if item := item.strip():
                    yield item
        return list(_sanitized(prompt))
    raise TypeError("dispatch() argument must be a string or an iterable of strings")


class App:
    """
    Command-line application: identity, global options and registered commands.

    Parameters
    - name, version: shown in help/version output and passed to handlers.
    - descr: Unset | str, shown on top of the top-level help.
    - helpers: bool (keyword-only)
      install the reserved global options help (-h) and version (-V).
    - shell, fancy, colorful: bool (keyword-only)
      runtime flags: shell turns faults into print-and-exit inside run(); fancy
      wraps output in panels; colorful enables the palette.
    - console: Unset | rich Console used for help/version output and handed to handlers.
    """

    def __init__(
            self,
            name,
            version,
            /,
            descr=Unset,
            *,
            helpers=True,
            shell=False,
            fancy=False,
            colorful=False,
            console=Unset
    ):
        if not isinstance(name, str) or not (name := name.strip()):
            raise TypeError("app 'name' must be a non-empty string")
        if not isinstance(version, str) or not (version := version.strip()):
            raise TypeError("app 'version' must be a non-empty string")
        if not isinstance(descr, str | Unset):
            raise TypeError("app 'descr' must be a string")

        self.name = name
        self.version = version
        self.descr = coalesce(descr)
        self.shell = bool(shell)
        self.fancy = bool(fancy)
        self.colorful = bool(colorful)
        self.console = coalesce(console, Console())
        self.registry = Registry()
        self._options = []

        if helpers:
            self.option("help", Kind.BOOL, "h", descr="Show help information")
            self.option("version", Kind.BOOL, "V", descr="Show version number")

    @property
    def options(self):
        """
        Global options, in declaration order.
        """
        return tuple(self._options)

    def option(self, source, /, *args, **kwargs):
        """
        Add a global option, given as an Option or as Option(...) arguments.

        Returns the app, so calls can be chained.
        """
        option = source if isinstance(source, Option) else Option(source, *args, **kwargs)
        check_collisions((*self._options, option))
        self._options.append(option)
        return self

    def add_command(self, command, /):
        """
        Register a command (last registration under a name wins) and return it.
        """
        if not isinstance(command, Command):
            raise TypeError("add_command() argument must be a command")
        self.registry.put(command.name, command)
        return command

    def command(self, name, descr=Unset, /):
        """
        Start a fluent command definition; see CommandBuilder.
        """
        return CommandBuilder(self, name, descr)

    def _unknown(self, name):
        suggestions = difflib.get_close_matches(name, self.registry.names(), 5)
        try:
            hint = "did you mean %r? you can also run '%s --help' to see all commands" % (suggestions[0], self.name)
        except IndexError:
            hint = "run '%s --help' to see all commands" % self.name
        fault = UnknownCommandError(
            "unknown command: %s" % name,
            title="unknown command",
            code=FaultCode.UNKNOWN_COMMAND,
            hint=hint,
            input=name,
            suggestions=suggestions,
            docs=getdoc(FaultCode.UNKNOWN_COMMAND)
        )
        self.console.print(fault.__replace__(tool=self, fancy=self.fancy, colorful=self.colorful))
        if (table := listing(self)) is not None:
            self.console.print(table)
        return Outcome.UNKNOWN_COMMAND

    def dispatch(self, prompt=Unset, /):
        """
        Run one parse-dispatch cycle and return its Outcome.

        Raises
        - MissingValueError, CoercionError, InvalidChoiceError, MissingRequiredOptionError
          for malformed invocations.
        - ValueError when a command option collides with a global option.
        - whatever the handler raises, unmodified.
        """
        tokens = _tokenize(prompt)

        logger.debug("pass 1 over %d tokens with %d global options", len(tokens), len(self._options))
        sniffed = parse(tokens, self.options, strict=False)

        if sniffed.options.get("help") is True:
            if sniffed.command is None:
                render_help(self, self.console)
                return Outcome.HELP_SHOWN
            if (command := self.registry.get(sniffed.command)) is None:
                return self._unknown(sniffed.command)
            render_command_help(self, command, self.console)
            return Outcome.HELP_SHOWN

        if sniffed.options.get("version") is True:
            render_version(self, self.console)
            return Outcome.VERSION_SHOWN

        if not tokens or sniffed.command is None:
            render_help(self, self.console)
            return Outcome.NO_ARGS_HELP

        if (command := self.registry.get(sniffed.command)) is None:
            return self._unknown(sniffed.command)

        schema = merge(self.options, command.options)
        logger.debug("pass 2 for %r with %d options", command.name, len(schema))
        result = validate(parse(tokens, schema), schema)

        command(Context(self.name, self.version, result.args, result.options, self.console))
        logger.debug("dispatched %r", command.name)
        return Outcome.DISPATCHED

    def run(self, prompt=Unset, /):
        """
        Top-level boundary: dispatch, and surface faults according to the runtime flags.

        In shell mode a fault is rendered on stderr and the process exits with
        status 1; otherwise the fault is raised. Non-fault exceptions from handlers
        propagate unmodified.
        """
        try:
            return self.dispatch(prompt)
        except CommandException as fault:
            trigger(fault, tool=self, shell=self.shell, fancy=self.fancy, colorful=self.colorful)

    def __repr__(self):
        return f"app(name={self.name!r}, version={self.version!r}, commands={self.registry.names()!r})"


__all__ = (
    "App",
    "Context",
    "Outcome",
)
