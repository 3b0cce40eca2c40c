"""
Tests for parsing ASE Script into an AST.
"""
import pytest

from asescript.exceptions import FailureKind, SyntaxException
from asescript.nodes import (
    Assignment,
    BinaryOp,
    Block,
    CommandInvoke,
    Comparison,
    Identifier,
    If,
    Integer,
    MethodDef,
    MethodInvoke,
    While,
)
from asescript.operations import Op

from asescript.tests.utils import parse_source


def test_assignment():
    assert parse_source("var1 = 11") == Block((Assignment("var1", Integer(11)),))


def test_multiplication_binds_tighter():
    ast = parse_source("x = 2 + 3 * 4")
    assert ast.statements[0] == Assignment(
        "x", BinaryOp(Integer(2), "+", BinaryOp(Integer(3), "*", Integer(4)))
    )


def test_arithmetic_is_left_associative():
    ast = parse_source("x = 10 - 4 - 3")
    assert ast.statements[0].value == BinaryOp(
        BinaryOp(Integer(10), Op.SUB, Integer(4)), Op.SUB, Integer(3)
    )


def test_parenthesized_term():
    ast = parse_source("x = (5) * y")
    assert ast.statements[0].value == BinaryOp(Integer(5), Op.MUL, Identifier("y"))


def test_parentheses_wrap_a_single_term_only():
    with pytest.raises(SyntaxException) as exc:
        parse_source("x = (1 + 2)")
    assert "Expected )" in str(exc.value)


def test_command_with_arguments():
    ast = parse_source("circle 10, radius\nmoveto 1 2\nclear")
    assert ast.statements == (
        CommandInvoke("circle", (Integer(10), Identifier("radius"))),
        CommandInvoke("moveto", (Integer(1), Integer(2))),
        CommandInvoke("clear", ()),
    )


def test_method_definition_and_invocation():
    source = (
        "Method DrawCircle(radius)\n"
        "circle radius\n"
        "Endmethod\n"
        "DrawCircle(11)"
    )
    ast = parse_source(source)
    assert ast.statements == (
        MethodDef(
            "DrawCircle",
            (Identifier("radius"),),
            Block((CommandInvoke("circle", (Identifier("radius"),)),)),
        ),
        MethodInvoke("DrawCircle", (Integer(11),)),
    )


def test_method_with_several_parameters():
    ast = parse_source("Method Move(x, y)\nmoveto x, y\nEndmethod\nMove(1, 2)")
    method, invoke = ast.statements
    assert method.params == (Identifier("x"), Identifier("y"))
    assert invoke.args == (Integer(1), Integer(2))


def test_if_statement():
    ast = parse_source("If a == 1\ncircle a\nEndif\n")
    assert ast.statements == (
        If(
            Comparison(Identifier("a"), Op.EQ, Integer(1)),
            Block((CommandInvoke("circle", (Identifier("a"),)),)),
        ),
    )


def test_nested_blocks():
    source = (
        "Method DrawCircle(radius)\n"
        "  While radius > 0\n"
        "    If radius <= 10\n"
        "      circle radius\n"
        "    Endif\n"
        "    radius = radius - 5\n"
        "  Endloop\n"
        "Endmethod\n"
    )
    method = parse_source(source).statements[0]
    loop = method.body.statements[0]
    assert isinstance(loop, While)
    assert loop.condition == Comparison(Identifier("radius"), Op.GT, Integer(0))
    assert isinstance(loop.body.statements[0], If)
    assert loop.body.statements[1] == Assignment(
        "radius", BinaryOp(Identifier("radius"), Op.SUB, Integer(5))
    )


@pytest.mark.parametrize("operator", ["==", "!=", "<=", ">=", ">", "<", "&&", "||"])
def test_comparison_operators(operator):
    ast = parse_source(f"If a {operator} b\nEndif")
    assert ast.statements[0].condition.operator == operator


def test_statements_record_their_line():
    ast = parse_source("x = 1\n\ny = 2\nIf x < y\ncircle x\nEndif")
    assert [stmt.line for stmt in ast.statements] == [1, 3, 4]
    assert ast.statements[2].body.statements[0].line == 5


@pytest.mark.parametrize("source", ["", "\n", "\n\n\n", "   \n\t\n"])
def test_empty_script_is_empty_block(source):
    assert parse_source(source) == Block()


def test_while_closed_by_endif():
    source = "While 10!=10\ncircle 20\nEndif\n"
    with pytest.raises(SyntaxException) as exc:
        parse_source(source)
    assert exc.value.kind is FailureKind.SYNTAX
    assert exc.value.line == 3
    assert "Expected Endloop instead received: Endif" in str(exc.value)


@pytest.mark.parametrize(
    "source, terminator",
    [
        ("If 10!=10\ncircle 20\ncircle 15\n", "Endif"),
        ("While 10!=10\ncircle 20\n", "Endloop"),
        ("Method M(a)\ncircle a\n", "Endmethod"),
    ],
)
def test_unterminated_block_is_incomplete(source, terminator):
    with pytest.raises(SyntaxException) as exc:
        parse_source(source)
    assert exc.value.incomplete
    assert terminator in str(exc.value)


@pytest.mark.parametrize(
    "source, message",
    [
        ("If 1 == 1 circle 1\nEndif", "Expected newline instead received: circle"),
        ("x = (5", "Expected ) instead received: newline"),
        ("5 = x", "Couldn't parse token: 5"),
        ("If a\nEndif", "Expected comparison operator instead received: newline"),
        ("If a = b\nEndif", "Expected comparison operator instead received: ="),
        ("Method M(1)\nEndmethod", "Method parameters must be identifiers"),
        ("Method M\nEndmethod", "Expecting param list in method declaration"),
        ("Method 5(a)\nEndmethod", "Expected method name"),
        ("Endif", "Unexpected Endif"),
        ("circle If", "Could not parse term: If"),
        ("x = 1 circle", "Expected newline instead received: circle"),
    ],
)
def test_syntax_errors(source, message):
    with pytest.raises(SyntaxException) as exc:
        parse_source(source)
    assert message in str(exc.value)
    assert not exc.value.incomplete


def test_syntax_error_reports_line_and_file():
    with pytest.raises(SyntaxException) as exc:
        parse_source("x = 1\ny = 2\n5")
    assert exc.value.line == 3
    assert str(exc.value).endswith("on line 3 in <test>")


def test_literal_too_long_to_convert():
    with pytest.raises(SyntaxException) as exc:
        parse_source("x = 1\ny = " + "9" * 5000)
    assert exc.value.line == 2
    assert exc.value.reason.startswith("Could not parse term: 999")
