"""Statement parsing utilities for ASE Script.

These functions operate on a `asescript.parser.parser.Parser` instance and
handle the line-oriented statement forms of the language: conditionals,
loops, method definitions, assignments, method invocations and command
invocations.


File: statements.py
Version: 0.1.0
License: MIT
"""

from typing import TYPE_CHECKING

from asescript.lexer import TokenType
from asescript.nodes import (
    Assignment,
    Block,
    CommandInvoke,
    Expression,
    If,
    MethodDef,
    MethodInvoke,
    Statement,
    While,
)

if TYPE_CHECKING:
    from asescript.parser import Parser


BLOCK_TERMINATORS = frozenset({"Endif", "Endloop", "Endmethod"})


def parse_block(parser: 'Parser', terminator: str) -> Block:
    """
    Parse a nested block of statements and its closing keyword.

    Syntax:
        <statement>* <terminator>

    Args:
        parser: The parser instance.
        terminator: The keyword that must close this block.

    Returns:
        Block: the statements of the block.
    """
    statements = []
    while parser.peek().value not in BLOCK_TERMINATORS:
        if parser.at_end():
            raise parser.error(
                f"Expected {terminator} but reached end of script", incomplete=True
            )
        if parser.peek().type == TokenType.NEW_LINE:
            parser.eat_newline()
        else:
            statements.append(parser.statement())
    parser.expect(terminator)
    return Block(tuple(statements))


def parse_statement(parser: 'Parser') -> Statement:
    """
    Parse a single statement, keyed on the first token of the line.

    Args:
        parser: The parser instance.

    Returns:
        Statement: the AST node.
    """
    while parser.peek().type == TokenType.NEW_LINE:
        parser.eat_newline()

    tok = parser.peek()
    if tok.type == TokenType.KEYWORD:
        match tok.value:
            case "If":
                return parser.parse_if()
            case "While":
                return parser.parse_while()
            case "Method":
                return parser.parse_method_def()
        raise parser.error(f"Unexpected {tok.value}")
    if tok.type == TokenType.IDENTIFIER:
        return _parse_identifier_statement(parser)
    raise parser.error(f"Couldn't parse token: {tok.value}")


def _parse_identifier_statement(parser: 'Parser') -> Statement:
    """
    Parse a statement starting with a plain identifier.

    Syntax:
        <identifier> = <expression>
        <identifier>(<term>, ...)
        <identifier> <term>, <term>, ...
    """
    line = parser.line
    name = parser.advance().value

    if parser.accept("="):
        value = parser.sum_difference()
        parser.eat_newline()
        return Assignment(name, value, line)

    if parser.accept("("):
        return MethodInvoke(name, parser.arguments(), line)

    return CommandInvoke(name, _parse_command_arguments(parser), line)


def _parse_command_arguments(parser: 'Parser') -> tuple[Expression, ...]:
    """Parse command arguments up to and including the end of the line."""
    args = []
    while not parser.accept_type(TokenType.NEW_LINE):
        args.append(parser.term())
        parser.accept(",")
    return tuple(args)


def parse_if(parser: 'Parser') -> If:
    """
    Parse a conditional 'If' statement. There is no else branch.

    Syntax:
        If <comparison>
            <block>
        Endif
    """
    line = parser.line
    parser.advance()
    condition = parser.comparison()
    parser.eat_newline()
    body = parser.block("Endif")
    return If(condition, body, line)


def parse_while(parser: 'Parser') -> While:
    """
    Parse a 'While' loop statement.

    Syntax:
        While <comparison>
            <block>
        Endloop
    """
    line = parser.line
    parser.advance()
    condition = parser.comparison()
    parser.eat_newline()
    body = parser.block("Endloop")
    return While(condition, body, line)


def parse_method_def(parser: 'Parser') -> MethodDef:
    """
    Parse a method definition.

    Syntax:
        Method <name>(<params>)
            <block>
        Endmethod
    """
    line = parser.line
    parser.advance()
    name_tok = parser.peek()
    if name_tok.type != TokenType.IDENTIFIER:
        raise parser.error(
            f"Expected method name instead received: {parser.describe(name_tok)}"
        )
    parser.advance()
    if not parser.accept("("):
        raise parser.error("Expecting param list in method declaration")
    params = parser.parameters()
    parser.eat_newline()
    body = parser.block("Endmethod")
    return MethodDef(name_tok.value, params, body, line)
