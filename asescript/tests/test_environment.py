"""
Tests for running whole scripts through a ScriptEnvironment.
"""
import pytest

from asescript import FailureKind, ScriptException, execute
from asescript.exceptions import SyntaxException
from asescript.interpreter import ExecutionContext


def test_binding_without_commands(env, dispatcher):
    result = env.execute("var1 = 11")
    assert result.ok
    assert result.error is None and result.kind is None and result.message is None
    assert result.variables == {"var1": 11}
    assert dispatcher.dispatched == []


def test_command_sees_variable_value(env, dispatcher):
    result = env.execute("radius = 11\ncircle radius")
    assert result.ok
    assert dispatcher.dispatched == [("circle", ["11"])]
    assert dispatcher.registry.find("circle").calls == [["11"]]


def test_method_invocation(env, dispatcher):
    script = (
        "Method DrawCircle(radius)\n"
        "circle radius\n"
        "Endmethod\n"
        "DrawCircle(11)"
    )
    result = env.execute(script)
    assert result.ok
    assert dispatcher.dispatched == [("circle", ["11"])]
    assert "radius" not in result.variables


def test_mismatched_terminator(env, dispatcher):
    result = env.execute("While 10!=10\ncircle 20\nEndif\n")
    assert not result.ok
    assert result.kind is FailureKind.SYNTAX
    assert result.error.line == 3
    assert "Expected Endloop" in result.message
    assert dispatcher.dispatched == []


def test_invalid_command(env):
    result = env.execute("cicle 10")
    assert result.kind is FailureKind.INVALID_COMMAND
    assert result.message == "Invalid command 'cicle' was entered on line 1 in <test>"


@pytest.mark.parametrize("script", ["", "\n", "\n\n  \n"])
def test_empty_script_is_a_no_op(env, dispatcher, script):
    result = env.execute(script)
    assert result.ok
    assert result.variables == {}
    assert dispatcher.dispatched == []


def test_precedence(env):
    assert env.execute("x = 2 + 3 * 4").variables == {"x": 14}


def test_execution_is_deterministic(env, dispatcher):
    script = "x = 3\nWhile x > 0\ncircle x\nx = x - 1\nEndloop"
    first = env.execute(script)
    first_calls = list(dispatcher.dispatched)
    dispatcher.dispatched.clear()
    second = env.execute(script)
    assert first.variables == second.variables
    assert dispatcher.dispatched == first_calls


def test_executions_do_not_share_bindings(env):
    env.execute("x = 1")
    result = env.execute("circle x")
    assert result.kind is FailureKind.UNDEFINED_VARIABLE


def test_context_is_kept_on_failure(env):
    result = env.execute("x = 1\ny = 1 / 0\nz = 2")
    assert result.kind is FailureKind.ARITHMETIC
    assert result.variables == {"x": 1}


def test_explicit_context_persists(env, dispatcher):
    context = ExecutionContext()
    env.execute("size = 9", context)
    env.execute("Method Draw(r)\ncircle r\nEndmethod", context)
    result = env.execute("Draw(size)", context)
    assert result.ok
    assert result.context is context
    assert dispatcher.dispatched == [("circle", ["9"])]


def test_unbounded_recursion(env):
    result = env.execute("Method R(a)\nR(a)\nEndmethod\nR(1)")
    assert result.kind is FailureKind.RECURSION
    assert result.message == "Maximum method invocation depth exceeded in <test>"


def test_incomplete_script_flagged(env):
    result = env.execute("If 1 == 1\ncircle 1\n")
    assert isinstance(result.error, SyntaxException)
    assert result.error.incomplete


def test_raise_for_error(env):
    env.execute("x = 1").raise_for_error()
    with pytest.raises(ScriptException):
        env.execute("x = y").raise_for_error()


def test_parse_raises(env):
    with pytest.raises(SyntaxException):
        env.parse("Endloop")


def test_module_level_execute(dispatcher):
    result = execute("circle 5", dispatcher)
    assert result.ok
    assert dispatcher.dispatched == [("circle", ["5"])]


def test_oversized_literal_is_a_syntax_failure(env):
    result = env.execute("x = " + "9" * 5000)
    assert result.kind is FailureKind.SYNTAX


def test_oversized_command_argument_is_an_arithmetic_failure(env, dispatcher):
    script = "x = 10\ni = 0\nWhile i < 14\nx = x * x\ni = i + 1\nEndloop\ncircle x"
    result = env.execute(script)
    assert result.kind is FailureKind.ARITHMETIC
    assert result.message == (
        "Integer too large to convert to a decimal argument on line 7 in <test>"
    )
    assert dispatcher.dispatched == []
