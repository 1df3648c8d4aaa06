"""
Helmsman command registry: a name-keyed store of commands.

Commands are registered once at startup and read-only afterwards. Registering a
name twice replaces the earlier command (last registration wins, no error).
Iteration follows registration order, which is also the listing order in help.
"""
import logging

from .schema import Command

logger = logging.getLogger(__name__)


class Registry:
    """
    name → Command mapping with put/get and ordered enumeration.
    """

    def __init__(self, commands=(), /):
        self._commands = {}
        for command in commands:
            self.put(command.name, command)

    def put(self, name, command, /):
        if not isinstance(command, Command):
            raise TypeError("registry values must be commands")
        if name in self._commands:
            logger.debug("replacing command %r", name)
        self._commands[name] = command

    def get(self, name, /):
        """
        return the command registered under name, or None.
        """
        return self._commands.get(name)

    def names(self):
        return tuple(self._commands)

    def __contains__(self, name, /):
        return name in self._commands

    def __iter__(self):
        return iter(tuple(self._commands.values()))

    def __len__(self):
        return len(self._commands)

    def __repr__(self):
        return f"registry({', '.join(map(repr, self._commands))})"


__all__ = (
    "Registry",
)
