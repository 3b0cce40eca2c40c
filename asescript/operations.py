"""Shared definitions for AST operator identifiers.

The parser stores operators on ``BinaryOp`` and ``Comparison`` nodes as
members of :class:`Op`, and the interpreter matches on the same members.
Because :class:`Op` subclasses ``str`` each member compares equal to its raw
lexeme.
"""

from enum import Enum


class Op(str, Enum):
    """
    Enumeration of supported operators, valued by their source lexeme.
    """

    # Arithmetic
    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"

    # Comparison
    EQ = "=="
    NE = "!="
    LE = "<="
    GE = ">="
    GT = ">"
    LT = "<"

    # Boolean
    AND = "&&"
    OR = "||"

    def __str__(self) -> str:  # pragma: no cover - trivial
        """
        Return the underlying lexeme for nicer debug output.
        """
        return self.value


SUM_OPS = frozenset({Op.ADD, Op.SUB})
PRODUCT_OPS = frozenset({Op.MUL, Op.DIV})
RELATIONAL_OPS = frozenset({Op.EQ, Op.NE, Op.LE, Op.GE, Op.GT, Op.LT})
LOGICAL_OPS = frozenset({Op.AND, Op.OR})
COMPARISON_OPS = RELATIONAL_OPS | LOGICAL_OPS


__all__ = [
    "Op",
    "SUM_OPS",
    "PRODUCT_OPS",
    "RELATIONAL_OPS",
    "LOGICAL_OPS",
    "COMPARISON_OPS",
]
