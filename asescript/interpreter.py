"""Interpreter.

This is a tree-walk interpreter for the AST produced by the parser.

1. Execution Model
Statements are executed via `execute()` and expressions are evaluated via
`evaluate()`. Both match exhaustively over the node types in
`asescript.nodes`.

2. Context
All mutable state lives in an `ExecutionContext`: the global scope and the
method table. The context and the active scope are passed explicitly through
every call, so one `Interpreter` can run any number of scripts without them
sharing bindings. The interpreter itself only holds the command dispatcher.

3. Scoping
There is one global scope per context and one fresh local scope per method
invocation. Identifiers are looked up in the active scope only. The right
hand side of an assignment is always evaluated against the global scope,
even when the assignment binds into a method's local scope.

4. Methods
`Method` definitions register when the statement is reached. An invocation
selects the first registered method whose parameter count equals the number
of arguments; the invoked name is not consulted. Methods return nothing.

5. Commands
Command arguments are evaluated to integers and forwarded to the dispatcher
as decimal strings.

6. Error Handling
Runtime errors are raised as `ScriptException` subclasses carrying the line
of the statement being executed and the script name.


File: interpreter.py
Version: 0.1.0
License: MIT
"""

import logging
from dataclasses import dataclass, field
from typing import assert_never

from asescript.commands import CommandDispatcher
from asescript.exceptions import (
    DivisionByZeroException,
    IntegerOverflowException,
    MethodResolutionException,
    ScriptException,
    TypeMismatchException,
    UndefinedVariableException,
    UnknownOpException,
)
from asescript.nodes import (
    Assignment,
    BinaryOp,
    Block,
    CommandInvoke,
    Comparison,
    Expression,
    Identifier,
    If,
    Integer,
    MethodDef,
    MethodInvoke,
    Statement,
    While,
    format_expr,
)
from asescript.operations import Op

logger = logging.getLogger(__name__)

Value = int | bool
Scope = dict[str, int]


@dataclass(frozen=True)
class MethodSignature:
    """Key of the method table."""
    name: str
    arity: int

    def __str__(self) -> str:
        return f"{self.name}/{self.arity}"


@dataclass
class ExecutionContext:
    """Mutable state of one script execution."""
    global_scope: Scope = field(default_factory=dict)
    methods: dict[MethodSignature, MethodDef] = field(default_factory=dict)


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _divide(left: int, right: int) -> int:
    """Integer division truncating toward zero."""
    quotient = abs(left) // abs(right)
    return quotient if (left < 0) == (right < 0) else -quotient


class Interpreter:
    """Tree-walk interpreter for ASE Script."""

    def __init__(self, dispatcher: CommandDispatcher, file: str | None = None):
        """Initialize the interpreter."""
        self.dispatcher = dispatcher
        self.file = file

    def run(self, program: Block, context: ExecutionContext | None = None) -> ExecutionContext:
        """
        Execute a parsed program against the global scope of ``context``.

        Parameters:
            program (Block): The root of the AST.
            context (ExecutionContext): State to run against. A fresh context is
                created when omitted.

        Returns:
            ExecutionContext: The context after execution.
        """
        context = context if context is not None else ExecutionContext()
        self.execute(program, context.global_scope, context)
        return context

    def execute(self, node: Statement, scope: Scope, context: ExecutionContext) -> None:
        """
        Execute a single statement in ``scope``.

        Raises:
            ScriptException: On the first runtime failure.
        """
        match node:
            case Block(statements=statements):
                for statement in statements:
                    self.execute(statement, scope, context)

            case Assignment(name=name, value=value_node):
                value = self.evaluate(value_node, context.global_scope, context, node.line)
                scope[name] = self._require_int(value, value_node, node.line)

            case If(condition=condition, body=body):
                if self._condition(condition, scope, context, node.line):
                    self.execute(body, scope, context)

            case While(condition=condition, body=body):
                while self._condition(condition, scope, context, node.line):
                    self.execute(body, scope, context)

            case MethodDef(name=name, params=params):
                signature = MethodSignature(name, len(params))
                context.methods[signature] = node
                logger.debug("Defined method %s", signature)

            case MethodInvoke():
                self._invoke_method(node, scope, context)

            case CommandInvoke(name=name, args=arg_nodes):
                args = []
                for arg in arg_nodes:
                    value = self.evaluate(arg, scope, context, node.line)
                    value = self._require_int(value, arg, node.line)
                    args.append(self._decimal(value, node.line))
                try:
                    self.dispatcher.dispatch(name, args)
                except ScriptException as e:
                    e.locate(node.line, self.file)
                    raise

            case _:
                assert_never(node)

    def _invoke_method(self, node: MethodInvoke, scope: Scope, context: ExecutionContext) -> None:
        """
        Invoke the first method whose arity matches, in a fresh local scope.
        """
        arity = len(node.args)
        found = next(
            (method for sig, method in context.methods.items() if sig.arity == arity),
            None,
        )
        if found is None:
            raise MethodResolutionException(node.name, arity, node.line, self.file)

        local_scope: Scope = {}
        for param, arg in zip(found.params, node.args):
            value = self.evaluate(arg, scope, context, node.line)
            local_scope[param.name] = self._require_int(value, arg, node.line)
        logger.debug("Invoking %s as %s with %s", node.name, found.name, local_scope)
        self.execute(found.body, local_scope, context)

    def _condition(
        self, condition: Expression, scope: Scope, context: ExecutionContext, line: int
    ) -> bool:
        value = self.evaluate(condition, scope, context, line)
        if not isinstance(value, bool):
            raise TypeMismatchException(
                f"Condition {format_expr(condition)} must be a boolean", line, self.file
            )
        return value

    def _decimal(self, value: int, line: int | None) -> str:
        try:
            return str(value)
        except ValueError as e:
            raise IntegerOverflowException(line, self.file) from e

    def _require_int(self, value: Value, node: Expression, line: int | None) -> int:
        if not _is_int(value):
            raise TypeMismatchException(
                f"Expected an integer but {format_expr(node)} is {type(value).__name__}",
                line,
                self.file,
            )
        return value

    def evaluate(
        self,
        node: Expression,
        scope: Scope,
        context: ExecutionContext,
        line: int | None = None,
    ) -> Value:
        """
        Recursively evaluate an expression node and return its value.

        Parameters:
            node (Expression): The expression to evaluate.
            scope (dict): The active variable scope.
            context (ExecutionContext): The execution state.
            line (int): Line of the enclosing statement, for error messages.

        Returns:
            int | bool: Arithmetic yields integers, comparisons yield booleans.

        Raises:
            UndefinedVariableException: If a variable has no binding in ``scope``.
            DivisionByZeroException: On division by zero.
            TypeMismatchException: If an operand has the wrong type.
            UnknownOpException: If an operator is not recognised.
        """
        match node:
            case Integer(value=value):
                return value

            case Identifier(name=name):
                if name in scope:
                    return scope[name]
                raise UndefinedVariableException(name, line, self.file)

            case BinaryOp(left=left_node, operator=op, right=right_node):
                lhs = self.evaluate(left_node, scope, context, line)
                rhs = self.evaluate(right_node, scope, context, line)
                lhs = self._require_int(lhs, left_node, line)
                rhs = self._require_int(rhs, right_node, line)
                match op:
                    case Op.ADD:
                        return lhs + rhs
                    case Op.SUB:
                        return lhs - rhs
                    case Op.MUL:
                        return lhs * rhs
                    case Op.DIV:
                        if rhs == 0:
                            raise DivisionByZeroException(line, self.file)
                        return _divide(lhs, rhs)
                    case _:
                        raise UnknownOpException(op, line, self.file)

            case Comparison(left=left_node, operator=op, right=right_node):
                lhs = self.evaluate(left_node, scope, context, line)
                rhs = self.evaluate(right_node, scope, context, line)
                return self._compare(node, lhs, rhs, line)

            case _:
                assert_never(node)

    def _compare(self, node: Comparison, lhs: Value, rhs: Value, line: int | None) -> bool:
        op = node.operator
        if op in (Op.AND, Op.OR):
            if not isinstance(lhs, bool) or not isinstance(rhs, bool):
                raise TypeMismatchException(
                    f"Operator {op} requires boolean operands {format_expr(node)}",
                    line,
                    self.file,
                )
            return (lhs and rhs) if op == Op.AND else (lhs or rhs)

        if not _is_int(lhs) or not _is_int(rhs):
            raise TypeMismatchException(
                f"Operator {op} requires integer operands {format_expr(node)}",
                line,
                self.file,
            )
        match op:
            case Op.EQ:
                return lhs == rhs
            case Op.NE:
                return lhs != rhs
            case Op.LE:
                return lhs <= rhs
            case Op.GE:
                return lhs >= rhs
            case Op.GT:
                return lhs > rhs
            case Op.LT:
                return lhs < rhs
            case _:
                raise UnknownOpException(op, line, self.file)
