"""ASE Script.

A small line-oriented scripting language for driving host commands. Scripts
are lexed by a character state machine, parsed into an AST by a recursive
descent parser and walked by a tree interpreter that forwards command
invocations to a :class:`~asescript.commands.CommandDispatcher`.


File: __init__.py
Version: 0.1.0
License: MIT
"""

import logging

from asescript.commands import AbstractCommand, CommandDispatcher, CommandRegistry
from asescript.environment import ExecutionResult, ScriptEnvironment, execute
from asescript.exceptions import FailureKind, ScriptException

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "AbstractCommand",
    "CommandDispatcher",
    "CommandRegistry",
    "ExecutionResult",
    "FailureKind",
    "ScriptEnvironment",
    "ScriptException",
    "execute",
]
