"""AST node definitions for ASE Script.

The tree is a closed set of immutable node types. Statements and
expressions are kept in separate unions so the interpreter can match them
exhaustively. Statement nodes record the source line they start on; the line
is excluded from equality so trees built by hand compare equal to parsed ones.


File: nodes.py
Version: 0.1.0
License: MIT
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union


@dataclass(frozen=True)
class Integer:
    value: int


@dataclass(frozen=True)
class Identifier:
    name: str


@dataclass(frozen=True)
class BinaryOp:
    """Arithmetic operation."""
    left: Expression
    operator: str
    right: Expression


@dataclass(frozen=True)
class Comparison:
    """Relational or logical operation producing a boolean."""
    left: Expression
    operator: str
    right: Expression


@dataclass(frozen=True)
class Block:
    statements: tuple[Statement, ...] = ()


@dataclass(frozen=True)
class If:
    condition: Expression
    body: Block
    line: int = field(default=0, compare=False)


@dataclass(frozen=True)
class While:
    condition: Expression
    body: Block
    line: int = field(default=0, compare=False)


@dataclass(frozen=True)
class Assignment:
    name: str
    value: Expression
    line: int = field(default=0, compare=False)


@dataclass(frozen=True)
class MethodDef:
    name: str
    params: tuple[Identifier, ...]
    body: Block
    line: int = field(default=0, compare=False)


@dataclass(frozen=True)
class MethodInvoke:
    name: str
    args: tuple[Expression, ...]
    line: int = field(default=0, compare=False)


@dataclass(frozen=True)
class CommandInvoke:
    name: str
    args: tuple[Expression, ...]
    line: int = field(default=0, compare=False)


Expression = Union[Integer, Identifier, BinaryOp, Comparison]
Statement = Union[Block, If, While, Assignment, MethodDef, MethodInvoke, CommandInvoke]
Node = Union[Statement, Expression]


def format_expr(node: Expression) -> str:
    """
    Convert an expression back to readable source for error messages.

    Args:
        node: An expression node.

    Returns:
        str: A string representation of the expression.
    """
    match node:
        case Integer(value=value):
            return str(value)
        case Identifier(name=name):
            return name
        case BinaryOp(left=left, operator=op, right=right) | Comparison(
            left=left, operator=op, right=right
        ):
            return f"({format_expr(left)} {op} {format_expr(right)})"
    return f"<expr {type(node).__name__}>"


__all__ = [
    "Integer",
    "Identifier",
    "BinaryOp",
    "Comparison",
    "Block",
    "If",
    "While",
    "Assignment",
    "MethodDef",
    "MethodInvoke",
    "CommandInvoke",
    "Expression",
    "Statement",
    "Node",
    "format_expr",
]
