"""Script environment.

Wires the lexer, parser and interpreter into a single entry point:

1. The lexer turns the script text into tokens.
2. The parser builds an AST rooted at a block.
3. The interpreter walks the AST, forwarding commands to the dispatcher.

Failures from any stage are returned as an :class:`ExecutionResult` rather than
raised, so a host can decide how to present them.


File: environment.py
Version: 0.1.0
License: MIT
"""

import logging
from dataclasses import dataclass

from asescript.commands import CommandDispatcher
from asescript.exceptions import FailureKind, RecursionLimitException, ScriptException
from asescript.interpreter import ExecutionContext, Interpreter
from asescript.lexer import Token, tokenize
from asescript.nodes import Block
from asescript.parser import Parser

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExecutionResult:
    """
    Outcome of executing a script.

    ``context`` holds the bindings and methods as they were when execution
    stopped; ``error`` is ``None`` on success.
    """
    context: ExecutionContext
    error: ScriptException | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def kind(self) -> FailureKind | None:
        return None if self.error is None else self.error.kind

    @property
    def message(self) -> str | None:
        return None if self.error is None else str(self.error)

    @property
    def variables(self) -> dict[str, int]:
        return self.context.global_scope

    def raise_for_error(self) -> None:
        """
        Raise the stored error, if any.
        """
        if self.error is not None:
            raise self.error


class ScriptEnvironment:
    """Used to execute a script against a command dispatcher."""

    def __init__(self, dispatcher: CommandDispatcher, file: str | None = "<script>"):
        """
        Initialize the environment.

        Parameters:
            dispatcher (CommandDispatcher): Resolves the commands a script invokes.
            file (str): The name of the script, used in error messages.
        """
        self.dispatcher = dispatcher
        self.file = file

    def tokenize(self, script: str) -> list[Token]:
        return tokenize(script)

    def parse(self, script: str) -> Block:
        """
        Lex and parse ``script``.

        Raises:
            SyntaxException: If the script does not match the grammar.
        """
        return Parser(self.tokenize(script), self.file).parse()

    def execute(self, script: str, context: ExecutionContext | None = None) -> ExecutionResult:
        """
        Lex, parse and interpret ``script``.

        Parameters:
            script (str): The script text.
            context (ExecutionContext): State to continue from. A fresh context is
                created when omitted, so separate calls never share bindings.

        Returns:
            ExecutionResult: the final context and the first failure, if any.
        """
        context = context if context is not None else ExecutionContext()
        try:
            program = self.parse(script)
            Interpreter(self.dispatcher, self.file).run(program, context)
        except ScriptException as e:
            logger.debug("Execution failed: %s", e)
            return ExecutionResult(context, e)
        except RecursionError:
            error = RecursionLimitException(self.file)
            logger.debug("Execution failed: %s", error)
            return ExecutionResult(context, error)
        return ExecutionResult(context)


def execute(script: str, dispatcher: CommandDispatcher) -> ExecutionResult:
    """
    Execute ``script`` in a fresh environment.
    """
    return ScriptEnvironment(dispatcher).execute(script)
