"""
Main parser entry point for ASE Script.

This module defines the `Parser` class, which owns the token cursor and
coordinates the recursive descent parsing process. The actual parsing
routines are split across `asescript.parser.expressions` and
`asescript.parser.statements`.
"""

import logging

from asescript.exceptions import SyntaxException
from asescript.lexer import Token, TokenType
from asescript.nodes import Block, Expression, Identifier, Statement

from . import expressions as _expr
from . import statements as _stmt

logger = logging.getLogger(__name__)


class Parser:
    """ASE Script parser."""

    def __init__(self, tokens: list[Token], file: str | None = None):
        """
        Initialize the parser with a list of tokens.

        Parameters:
            tokens (list): A list of Token instances.
            file (str): The name of the script, used in error messages.
        """
        self.tokens = tokens
        self.position = 0
        self.line = 1
        self.source_file = file

    # Cursor
    def at_end(self) -> bool:
        """
        Return ``True`` once the cursor has reached the last token.

        Parsing stops one token before the physical end, which is always the
        trailing ``NEW_LINE`` the lexer emits.
        """
        return self.position >= len(self.tokens) - 1

    def peek(self) -> Token:
        """
        Return the upcoming token without consuming it.

        Raises:
            SyntaxException: If every token has been consumed.
        """
        if self.position >= len(self.tokens):
            raise self.error("Unexpected end of script", incomplete=True)
        return self.tokens[self.position]

    def advance(self) -> Token:
        """
        Consume and return the upcoming token, counting consumed newlines.
        """
        token = self.peek()
        self.position += 1
        if token.type == TokenType.NEW_LINE:
            self.line += 1
        return token

    def accept(self, value: str) -> bool:
        """
        Consume the upcoming token if its lexeme equals ``value``.
        """
        if self.peek().value == value:
            self.advance()
            return True
        return False

    def accept_type(self, token_type: TokenType) -> bool:
        """
        Consume the upcoming token if it is of ``token_type``.
        """
        if self.peek().type == token_type:
            self.advance()
            return True
        return False

    def eat_newline(self) -> None:
        """
        Consume a newline.

        Raises:
            SyntaxException: If the upcoming token is not a newline.
        """
        if not self.accept_type(TokenType.NEW_LINE):
            raise self.error(f"Expected newline instead received: {self.peek().value}")

    def expect(self, value: str) -> None:
        """
        Consume a token whose lexeme is ``value``.

        Raises:
            SyntaxException: If the upcoming lexeme differs.
        """
        if not self.accept(value):
            raise self.error(f"Expected {value} instead received: {self.describe(self.peek())}")

    @staticmethod
    def describe(token: Token) -> str:
        """
        Render a token's lexeme for error messages.
        """
        return "newline" if token.type == TokenType.NEW_LINE else token.value

    def error(self, message: str, incomplete: bool = False) -> SyntaxException:
        """
        Build a syntax error for the current line.
        """
        return SyntaxException(self.line, message, self.source_file, incomplete)

    # Expression wrappers
    def term(self) -> Expression:
        """
        Parse a number, identifier, or single parenthesized term.
        """
        return _expr.parse_term(self)

    def product_quotient(self) -> Expression:
        """
        Parse a multiplication or division expression.
        """
        return _expr.parse_product_quotient(self)

    def sum_difference(self) -> Expression:
        """
        Parse an addition or subtraction expression.
        """
        return _expr.parse_sum_difference(self)

    def comparison(self) -> Expression:
        """
        Parse a single relational or logical comparison.
        """
        return _expr.parse_comparison(self)

    def arguments(self) -> tuple[Expression, ...]:
        """
        Parse a comma separated argument list closed by ``)``.
        """
        return _expr.parse_arguments(self)

    def parameters(self) -> tuple[Identifier, ...]:
        """
        Parse a method's parameter list closed by ``)``.
        """
        return _expr.parse_parameters(self)

    # Statement wrappers
    def block(self, terminator: str) -> Block:
        """
        Parse a nested block closed by ``terminator``.
        """
        return _stmt.parse_block(self, terminator)

    def statement(self) -> Statement:
        """
        Parse a single statement.
        """
        return _stmt.parse_statement(self)

    def parse_if(self) -> Statement:
        """
        Parse an 'If' conditional statement.
        """
        return _stmt.parse_if(self)

    def parse_while(self) -> Statement:
        """
        Parse a 'While' loop statement.
        """
        return _stmt.parse_while(self)

    def parse_method_def(self) -> Statement:
        """
        Parse a method definition statement.
        """
        return _stmt.parse_method_def(self)

    def parse(self) -> Block:
        """
        Parse the full input into a block of statements.
        """
        statements = []
        while not self.at_end():
            if self.peek().type == TokenType.NEW_LINE:
                self.eat_newline()
            else:
                statements.append(self.statement())
        logger.debug("Parsed %d top-level statement(s)", len(statements))
        return Block(tuple(statements))
