"""
Tests for function definitions, calls and statement values.
"""
import pytest

from pukimo.exceptions import ArityMismatchException, NotCallableException
from pukimo.interpreter import FunctionValue, Interpreter
from pukimo.tests.utils import output_lines, parse_source, run_source


def test_call_returns_last_value(capsys):
    """
    A call evaluates to the value of the last statement executed.
    """
    run_source("define add(a, b) { a + b; }\nprint(add(2, 3));")
    assert output_lines(capsys) == ['5']


def test_recursion_through_if_values(capsys):
    """
    An if statement yields the value of the branch it ran.
    """
    run_source(
        "define fact(n) {\n"
        "    if (n <= 1) { 1; } else { n * fact(n - 1); }\n"
        "}\n"
        "print(fact(5));\n"
    )
    assert output_lines(capsys) == ['120']


def test_functions_are_values(capsys):
    """
    Functions can be passed around and called through any expression.
    """
    run_source(
        "define twice(f, x) { f(f(x)); }\n"
        "define inc(n) { n + 1; }\n"
        "print(twice(inc, 3));\n"
        "define make() { define inner() { 42; } }\n"
        "print(make()());\n"
        "print(inc);\n"
    )
    assert output_lines(capsys) == ['5', '42', '<function inc(n)>']


def test_empty_body_returns_null(capsys):
    """
    A function with no statements evaluates to null.
    """
    run_source("define nothing() { }\nprint(nothing());")
    assert output_lines(capsys) == ['null']


def test_print_and_explore_are_null(capsys):
    """
    print and explore statements evaluate to null.
    """
    run_source(
        "define p() { print(1); }\n"
        "define e() { explore 1 { } }\n"
        "print(p());\n"
        "print(e());\n"
    )
    assert output_lines(capsys) == ['1', 'null', 'null']


def test_arity_mismatch():
    """
    Calls must pass exactly one argument per parameter.
    """
    with pytest.raises(ArityMismatchException) as exc:
        run_source("define add(a, b) { a + b; }\nadd(1);")
    assert "add() expects 2 arguments but got 1" in str(exc.value)
    assert exc.value.line == 2


@pytest.mark.parametrize("source", ["x = 1;\nx();", '"name"();', "null();"])
def test_not_callable(source):
    """
    Only function values can be called.
    """
    with pytest.raises(NotCallableException):
        run_source(source)


def test_evaluate_returns_last_statement_value():
    """
    The interpreter reports the value of the last top-level statement.
    """
    interpreter = Interpreter("<test>")
    assert interpreter.evaluate(parse_source("if (false) { 1; }")) is None
    assert interpreter.evaluate(parse_source("if (true) { 2; }")) == 2
    assert interpreter.evaluate(parse_source("x = 3;")) == 3
    assert interpreter.evaluate(parse_source("const Y = [1];")) == [1]
    value = interpreter.evaluate(parse_source("define f(a) { }"))
    assert isinstance(value, FunctionValue)
    assert value.params == ['a']
    assert value.closure is interpreter.globals


def test_arguments_evaluated_left_to_right(capsys):
    """
    Argument expressions run in source order before the call.
    """
    run_source(
        "define show(x) { print(x); x + 0; }\n"
        "define pair(a, b) { a + b; }\n"
        "print(pair(show(1), show(2)));\n"
    )
    assert output_lines(capsys) == ['1', '2', '3']
