"""Errors.

Every failure a script can produce derives from :class:`ScriptException` and
carries a :class:`FailureKind`, so hosts can tell a syntax error from an
invalid command without matching on exception classes.


File: exceptions.py
Version: 0.1.0
License: MIT
"""

from enum import Enum


class FailureKind(str, Enum):
    """
    Kinds of failure that abort a script execution.
    """

    SYNTAX = "syntax"
    INVALID_COMMAND = "invalid_command"
    UNDEFINED_VARIABLE = "undefined_variable"
    ARITHMETIC = "arithmetic"
    METHOD_RESOLUTION = "method_resolution"
    TYPE_MISMATCH = "type_mismatch"
    COMMAND = "command"
    RECURSION = "recursion"
    INTERNAL = "internal"

    def __str__(self) -> str:  # pragma: no cover - trivial
        return self.value


class ScriptException(Exception):
    """
    Base class for all script failures.
    """
    kind = FailureKind.INTERNAL

    def __init__(self, message, line=None, file=None):
        self.reason = message
        self.line = line
        self.file = file
        super().__init__(self._format())

    def _format(self) -> str:
        message = self.reason
        if self.line is not None:
            message += f" on line {self.line}"
        if self.file is not None:
            message += f" in {self.file}"
        return message

    def locate(self, line, file=None) -> "ScriptException":
        """
        Attach a location to an error that was raised without one.
        """
        if self.line is None:
            self.line = line
            if self.file is None:
                self.file = file
            self.args = (self._format(),)
        return self


class SyntaxException(ScriptException):
    """
    Error for scripts that do not match the grammar.

    ``incomplete`` is set when the parser ran out of tokens, which means more
    input could still make the script valid.
    """
    kind = FailureKind.SYNTAX

    def __init__(self, line, message, file=None, incomplete=False):
        self.incomplete = incomplete
        super().__init__(message, line, file)


class InvalidCommandException(ScriptException):
    """
    Error for command names with no registered command or alias.
    """
    kind = FailureKind.INVALID_COMMAND

    def __init__(self, name, line=None, file=None):
        self.name = name
        super().__init__(f"Invalid command '{name}' was entered", line, file)


class UndefinedVariableException(ScriptException):
    """
    Error for undefined variables.
    """
    kind = FailureKind.UNDEFINED_VARIABLE

    def __init__(self, varname, line=None, file=None):
        self.varname = varname
        super().__init__(f"Undefined variable '{varname}'", line, file)


class DivisionByZeroException(ScriptException):
    """
    Error for integer division by zero.
    """
    kind = FailureKind.ARITHMETIC

    def __init__(self, line=None, file=None):
        super().__init__("Division by zero", line, file)


class IntegerOverflowException(ScriptException):
    """
    Error for integers too large to convert to decimal text.
    """
    kind = FailureKind.ARITHMETIC

    def __init__(self, line=None, file=None):
        super().__init__("Integer too large to convert to a decimal argument", line, file)


class MethodResolutionException(ScriptException):
    """
    Error for method invocations no defined method can accept.
    """
    kind = FailureKind.METHOD_RESOLUTION

    def __init__(self, name, arity, line=None, file=None):
        self.name = name
        self.arity = arity
        super().__init__(
            f"No method accepting {arity} argument(s) found for '{name}'", line, file
        )


class TypeMismatchException(ScriptException):
    """
    Error for operands of the wrong runtime type.
    """
    kind = FailureKind.TYPE_MISMATCH


class UnknownOpException(ScriptException):
    """
    Error for unknown operations.
    """
    kind = FailureKind.INTERNAL

    def __init__(self, op, line=None, file=None):
        self.op = op
        super().__init__(f"Unknown operation '{op}'", line, file)


class RecursionLimitException(ScriptException):
    """
    Error for method invocations nested deeper than the host stack allows.
    """
    kind = FailureKind.RECURSION

    def __init__(self, file=None):
        super().__init__("Maximum method invocation depth exceeded", file=file)


class CommandException(ScriptException):
    """
    Base class for failures raised by command implementations.
    """
    kind = FailureKind.COMMAND


class InvalidArgumentException(CommandException):
    """
    Error for command arguments that cannot be parsed.
    """


class IntegerOutOfBoundsException(CommandException):
    """
    Error for integer arguments outside the accepted range.
    """


class InvalidArgumentSizeException(CommandException):
    """
    Error for commands invoked with the wrong number of arguments.
    """
    def __init__(self, expected, actual):
        self.expected = expected
        self.actual = actual
        super().__init__(f"Expected {expected} arguments instead received {actual}.")


class CommandFailedException(CommandException):
    """
    Wraps an arbitrary error raised while a command executed.
    """
    def __init__(self, name, error):
        self.name = name
        self.error = error
        super().__init__(f"Command '{name}' failed: {error}")
