"""Commands.

Commands are the host's side effects. A script invokes them by name with
integer arguments that the interpreter has already converted to decimal
strings. The :class:`CommandDispatcher` resolves a name against its
:class:`CommandRegistry` by exact name-or-alias match, first registered match
wins.

Commands validate their own arguments. :class:`ArgumentPredicate` is the
contract for that validation; :class:`IntegerArgumentPredicate` and
:class:`BooleanPredicate` cover the common cases.


File: commands.py
Version: 0.1.0
License: MIT
"""

import logging
import sys
from abc import ABC, abstractmethod
from typing import Generic, TextIO, TypeVar

from asescript.exceptions import (
    CommandFailedException,
    IntegerOutOfBoundsException,
    InvalidArgumentException,
    InvalidArgumentSizeException,
    InvalidCommandException,
    ScriptException,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


class AbstractCommand(ABC):
    """
    Base command structure.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """The canonical name of the command."""

    @property
    def aliases(self) -> frozenset[str]:
        """Alternative names the command answers to."""
        return frozenset()

    @abstractmethod
    def execute(self, args: list[str]) -> None:
        """
        Execute the command.

        Parameters:
            args (list[str]): The arguments, in invocation order.
        """

    def is_name(self, name: str) -> bool:
        return self.name == name

    def is_alias(self, name: str) -> bool:
        return name in self.aliases

    def is_name_or_alias(self, name: str) -> bool:
        """
        Return ``True`` if ``name`` is the name or an alias of this command.
        """
        return self.is_name(name) or self.is_alias(name)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"


class ArgumentPredicate(ABC, Generic[T]):
    """
    Validates a string argument and converts it to ``T``.
    """

    @abstractmethod
    def validate(self, argument: str) -> T:
        """
        Validate ``argument`` and return it converted.

        Raises:
            CommandException: If the argument is not acceptable.
        """


class IntegerArgumentPredicate(ArgumentPredicate[int]):
    """
    Accepts integers within an inclusive range.
    """

    def __init__(self, lowest: int, highest: int):
        self.lowest = lowest
        self.highest = highest

    def validate(self, argument: str) -> int:
        """
        Parse ``argument`` to an integer within ``[lowest, highest]``.

        Raises:
            InvalidArgumentException: If the argument is not an integer.
            IntegerOutOfBoundsException: If the integer is out of range.
        """
        try:
            num = int(argument)
        except ValueError as e:
            raise InvalidArgumentException(
                f"Could not parse {argument} into a valid integer."
            ) from e
        if num < self.lowest or num > self.highest:
            raise IntegerOutOfBoundsException(
                f"Integer, {num}, was not within the bounds of {self.lowest} and {self.highest}"
            )
        return num


class BooleanPredicate(ArgumentPredicate[bool]):
    """
    Accepts ``on``/``true`` and ``off``/``false``.
    """

    def validate(self, argument: str) -> bool:
        if argument in ("on", "true"):
            return True
        if argument in ("off", "false"):
            return False
        raise InvalidArgumentException(
            "Could not parse argument to boolean. (on/off) or (true/false)"
        )


def check_argument_count(args: list[str], expected: int) -> None:
    """
    Raise :class:`InvalidArgumentSizeException` unless ``len(args) == expected``.
    """
    if len(args) != expected:
        raise InvalidArgumentSizeException(expected, len(args))


class EchoCommand(AbstractCommand):
    """
    Writes each invocation as a line of text.

    Used by the command line host in place of real drawing commands, so a
    script's effects can be observed.
    """

    def __init__(self, name: str, aliases=(), stream: TextIO | None = None):
        self._name = name
        self._aliases = frozenset(aliases)
        self.stream = stream

    @property
    def name(self) -> str:
        return self._name

    @property
    def aliases(self) -> frozenset[str]:
        return self._aliases

    def execute(self, args: list[str]) -> None:
        stream = self.stream if self.stream is not None else sys.stdout
        print(" ".join([self.name, *args]), file=stream)

    @classmethod
    def from_spec(cls, spec: str, stream: TextIO | None = None) -> "EchoCommand":
        """
        Build a command from ``name[:alias...]``.

        Raises:
            ValueError: If the spec has no name.
        """
        name, *aliases = spec.split(":")
        if not name:
            raise ValueError(f"Command spec '{spec}' has no name")
        return cls(name, [alias for alias in aliases if alias], stream)


class CommandRegistry:
    """
    Ordered, append-only collection of commands.
    """

    def __init__(self):
        self._commands: list[AbstractCommand] = []

    @property
    def commands(self) -> tuple[AbstractCommand, ...]:
        return tuple(self._commands)

    def register(self, command: AbstractCommand) -> None:
        """
        Register a command. Earlier registrations win name clashes.
        """
        self._commands.append(command)
        logger.debug("Registered command %r", command)

    def find(self, name: str) -> AbstractCommand | None:
        """
        Return the first command whose name or alias is ``name``.
        """
        for command in self._commands:
            if command.is_name_or_alias(name):
                return command
        return None

    def __len__(self) -> int:
        return len(self._commands)


class CommandDispatcher:
    """
    Dispatches commands stored in a :class:`CommandRegistry`.
    """

    def __init__(self, registry: CommandRegistry | None = None):
        self.registry = registry if registry is not None else CommandRegistry()

    def dispatch(self, name: str, args: list[str]) -> None:
        """
        Resolve ``name`` and execute the matching command.

        Parameters:
            name (str): The command name or alias.
            args (list[str]): The arguments to pass through.

        Raises:
            InvalidCommandException: If no command matches.
            CommandException: If the command fails.
        """
        command = self.registry.find(name)
        if command is None:
            raise InvalidCommandException(name)
        logger.debug("Dispatching %s %s", command.name, args)
        try:
            command.execute(list(args))
        except ScriptException:
            raise
        except Exception as e:
            raise CommandFailedException(name, e) from e
