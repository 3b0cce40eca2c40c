"""
Expression parsing utilities for ASE Script.

These functions operate on a `asescript.parser.parser.Parser` instance and
implement the recursive descent logic for expressions, maintaining
operator precedence and left associativity.

Parentheses wrap a single term only, so ``(a + b)`` is not an expression
the grammar accepts.
"""

from typing import TYPE_CHECKING

from asescript.lexer import Token, TokenType
from asescript.nodes import BinaryOp, Comparison, Expression, Identifier, Integer, format_expr
from asescript.operations import COMPARISON_OPS, PRODUCT_OPS, SUM_OPS, Op

if TYPE_CHECKING:
    from asescript.parser import Parser


_OPERATORS = {op.value: op for op in Op}


def _operator(token: Token, allowed: frozenset) -> Op | None:
    """Return the operator ``token`` spells if it is one of ``allowed``."""
    if token.type != TokenType.OPERATOR:
        return None
    op = _OPERATORS.get(token.value)
    return op if op in allowed else None


# ---- Highest precedence ----

def parse_term(parser: 'Parser') -> Expression:
    """
    Parse a term.

    Syntax:
        <number> | <identifier> | ( <term> )
    """
    tok = parser.peek()
    if tok.type == TokenType.NUMBER:
        try:
            value = int(tok.value)
        except ValueError:
            raise parser.error(f"Could not parse term: {tok.value}") from None
        parser.advance()
        return Integer(value)

    if tok.type == TokenType.IDENTIFIER:
        parser.advance()
        return Identifier(tok.value)

    if tok.value == "(":
        parser.advance()
        inner = parser.term()
        if not parser.accept(")"):
            raise parser.error(
                f"Expected ) instead received: {parser.describe(parser.peek())}"
            )
        return inner

    raise parser.error(f"Could not parse term: {parser.describe(tok)}")


def parse_product_quotient(parser: 'Parser') -> Expression:
    """Parse multiplication and division expressions."""
    result = parser.term()
    while (op := _operator(parser.peek(), PRODUCT_OPS)) is not None:
        parser.advance()
        result = BinaryOp(result, op, parser.term())
    return result


def parse_sum_difference(parser: 'Parser') -> Expression:
    """Parse addition and subtraction expressions."""
    result = parser.product_quotient()
    while (op := _operator(parser.peek(), SUM_OPS)) is not None:
        parser.advance()
        result = BinaryOp(result, op, parser.product_quotient())
    return result


# ---- Lowest precedence ----

def parse_comparison(parser: 'Parser') -> Expression:
    """
    Parse a single comparison. Comparisons do not chain.

    Syntax:
        <sum_difference> <op> <sum_difference>
    """
    left = parser.sum_difference()
    tok = parser.peek()
    op = _operator(tok, COMPARISON_OPS)
    if op is None:
        raise parser.error(
            f"Expected comparison operator instead received: {parser.describe(tok)}"
        )
    parser.advance()
    right = parser.sum_difference()
    return Comparison(left, op, right)


def parse_arguments(parser: 'Parser') -> tuple[Expression, ...]:
    """
    Parse an argument list after its opening parenthesis.

    Syntax:
        <term>, <term>, ... )
    """
    args = []
    while not parser.accept(")"):
        args.append(parser.term())
        parser.accept(",")
    return tuple(args)


def parse_parameters(parser: 'Parser') -> tuple[Identifier, ...]:
    """
    Parse a method parameter list after its opening parenthesis.

    Syntax:
        <identifier>, <identifier>, ... )
    """
    params = []
    for term in parser.arguments():
        if not isinstance(term, Identifier):
            raise parser.error(
                f"Method parameters must be identifiers, received: {format_expr(term)}"
            )
        params.append(term)
    return tuple(params)
