"""
Helmsman fluent command builder.

    app.command("greet", "Greet someone") \
        .option("name", "string", "n", required=True, descr="Name to greet") \
        .option("loud", "bool", "l") \
        .action(greet)

or, as a decorator:

    @app.command("greet", "Greet someone").option("name", "string", "n")
    def greet(context): ...

Options are validated when they are added; the command itself is built and
registered on the app by action() (or by calling the builder on a handler).
"""
from .schema import Option, Command, check_collisions
from .utils import Unset


class CommandBuilder:
    """
    accumulates options for one command, then registers it on an app.
    """

    def __init__(self, app, name, descr=Unset, /):
        self._app = app
        self._name = name
        self._descr = descr
        self._options = []

    def option(self, source, /, *args, **kwargs):
        """
        add an option, given as an Option or as Option(...) arguments; returns the builder.
        """
        option = source if isinstance(source, Option) else Option(source, *args, **kwargs)
        check_collisions((*self._options, option))
        self._options.append(option)
        return self

    def action(self, handler, /):
        """
        build the command around handler, register it and return it.
        """
        return self._app.add_command(Command(self._name, handler, self._descr, self._options))

    def __call__(self, handler, /):
        return self.action(handler)

    def __repr__(self):
        return f"command-builder(name={self._name!r}, options={[option.name for option in self._options]!r})"


__all__ = (
    "CommandBuilder",
)
