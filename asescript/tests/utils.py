"""
Utility functions shared across ASE Script tests.
"""
from asescript.commands import AbstractCommand, CommandDispatcher
from asescript.interpreter import ExecutionContext, Interpreter
from asescript.lexer import tokenize
from asescript.nodes import Block
from asescript.parser import Parser


class CircleCommandMock(AbstractCommand):
    """
    Stand-in for a drawing command that records its arguments.
    """

    def __init__(self):
        self.calls: list[list[str]] = []

    @property
    def name(self) -> str:
        return "circle"

    def execute(self, args: list[str]) -> None:
        self.calls.append(args)


class RecordingDispatcher(CommandDispatcher):
    """
    Dispatcher that records every dispatch before resolving it.
    """

    def __init__(self, registry=None):
        super().__init__(registry)
        self.dispatched: list[tuple[str, list[str]]] = []

    def dispatch(self, name: str, args: list[str]) -> None:
        self.dispatched.append((name, list(args)))
        super().dispatch(name, args)


def parse_source(source: str) -> Block:
    """
    Parse source code and return the AST.
    """
    return Parser(tokenize(source), "<test>").parse()


def run_source(source: str, dispatcher: CommandDispatcher) -> ExecutionContext:
    """
    Parse and run source code, returning the context after execution.
    """
    return Interpreter(dispatcher, "<test>").run(parse_source(source))
