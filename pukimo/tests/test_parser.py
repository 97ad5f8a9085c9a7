"""
Tests for the PukiMO parser.
"""
import pytest

from pukimo.exceptions import (
    ExpectedTokenException,
    IllegalExitOutsideControlBlockException,
    InvalidAssignmentTargetException,
    ParseException,
    UnexpectedStandaloneIdentifierException,
)
from pukimo.lexer import Token
from pukimo.operations import Op
from pukimo.parser import Parser
from pukimo.tests.utils import parse_source


def test_precedence_of_arithmetic():
    """
    Multiplication binds tighter than addition.
    """
    ast = parse_source("x = 1 + 2 * 3;")
    assert ast == [
        ('var_decl', 'x',
         (Op.ADD, ('number', 1, 1), (Op.MUL, ('number', 2, 1), ('number', 3, 1), 1), 1),
         1),
    ]


def test_logical_precedence():
    """
    && binds tighter than ||, comparisons tighter than both.
    """
    (stmt,) = parse_source("x = a || b && c < 1;")
    expr = stmt[2]
    assert expr[0] == Op.OR
    assert expr[2][0] == Op.AND
    assert expr[2][2][0] == Op.LT


def test_assignment_is_right_associative():
    """
    a = b = 1 assigns b first and uses the result for a.
    """
    assert parse_source("a = b = 1;") == [
        ('var_decl', 'a', ('assign', ('ident', 'b', 1), ('number', 1, 1), 1), 1),
    ]


def test_property_assignment_is_an_expression():
    """
    Assigning to a property is an expression statement with a dot target.
    """
    (stmt,) = parse_source("zone.balls = 3;")
    assert stmt == (
        'expr_stmt',
        ('assign', ('dot', ('ident', 'zone', 1), 'balls', 1), ('number', 3, 1), 1),
        1,
    )


@pytest.mark.parametrize("source", ["1 = 2;", "f() = 3;", "p->levelUp() = 1;"])
def test_invalid_assignment_target(source):
    """
    Only variables and properties can be assigned.
    """
    with pytest.raises(InvalidAssignmentTargetException):
        parse_source(source)


def test_suffix_chain():
    """
    Method calls, property access and calls chain left to right.
    """
    (stmt,) = parse_source('team->find("Eevee").level;')
    assert stmt == (
        'expr_stmt',
        ('dot',
         ('method_call', ('ident', 'team', 1), 'find', [('string', 'Eevee', 1)], [], 1),
         'level', 1),
        1,
    )


def test_method_without_arguments():
    """
    The argument list of a method call is optional.
    """
    (stmt,) = parse_source("p->levelUp;")
    assert stmt[1] == ('method_call', ('ident', 'p', 1), 'levelUp', [], [], 1)


def test_constructor_with_named_arguments():
    """
    Constructors take positional arguments followed by named ones.
    """
    (stmt,) = parse_source('p = Pokemon("Pikachu", level = 5, caught = true);')
    assert stmt[2] == (
        'construct', 'Pokemon',
        [('string', 'Pikachu', 1)],
        [('level', ('number', 5, 1)), ('caught', ('bool', True, 1))],
        1,
    )


def test_positional_after_named_argument():
    """
    Positional arguments may not follow named ones.
    """
    with pytest.raises(ParseException) as exc:
        parse_source('p = Pokemon(level = 5, "Pikachu");')
    assert "Positional argument follows named argument" in str(exc.value)


def test_duplicate_named_argument():
    """
    A name can only be given once per call.
    """
    with pytest.raises(ParseException) as exc:
        parse_source("t = team->filter(level = 1, level = 2);")
    assert "Duplicate named argument 'level'" in str(exc.value)


def test_list_literal_allows_trailing_comma():
    """
    List literals accept a trailing comma.
    """
    (stmt,) = parse_source("xs = [1, 2,];")
    assert stmt[2] == ('list', [('number', 1, 1), ('number', 2, 1)], 1)


def test_define_without_parentheses():
    """
    A function with no parameters may omit its parameter list.
    """
    assert parse_source("define greet { print(1); }") == [
        ('define', 'greet', [], ('block', [('print', ('number', 1, 1), 1)], 1), 1),
    ]


def test_define_rejects_duplicate_parameters():
    """
    Parameter names must be unique.
    """
    with pytest.raises(ParseException):
        parse_source("define f(a, a) { }")


def test_if_else_shape():
    """
    if/else keeps both blocks; the else block is None when absent.
    """
    ast = parse_source("if (x) { print(1); } else { print(2); }\nif (y) { }")
    assert ast[0][0] == 'if'
    assert ast[0][3] == ('block', [('print', ('number', 2, 1), 1)], 1)
    assert ast[1] == ('if', ('ident', 'y', 2), ('block', [], 2), None, 2)


def test_bodies_require_braces():
    """
    Conditional bodies must be blocks.
    """
    with pytest.raises(ExpectedTokenException) as exc:
        parse_source("if (true) print(1);")
    assert exc.value.expected == "'{'"


@pytest.mark.parametrize("source", [
    "explore 3 { run; }",
    "if (true) { run; }",
    "explore 2 { if (x) { run; } }",
])
def test_run_inside_control_block(source):
    """
    run is accepted anywhere inside an if or explore body.
    """
    assert parse_source(source)


@pytest.mark.parametrize("source", [
    "run;",
    "{ run; }",
    "define f() { run; }",
])
def test_run_outside_control_block(source):
    """
    run is rejected at top level, in plain blocks, and in a function defined there.
    """
    with pytest.raises(IllegalExitOutsideControlBlockException):
        parse_source(source)


def test_define_keeps_enclosing_depth():
    """
    A function body inherits the depth of the code around it.
    """
    ast = parse_source("explore 1 { define f() { } run; }")
    assert ast[0][2][1][1] == ('run', 1)

    ast = parse_source("explore 2 { define f() { run; } }")
    define = ast[0][2][1][0]
    assert define[0] == 'define'
    assert define[3][1] == [('run', 1)]


def test_missing_semicolon_at_end():
    """
    Running out of input reports the expected token at end of input.
    """
    with pytest.raises(ExpectedTokenException) as exc:
        parse_source("print(1)")
    assert exc.value.at_end
    assert str(exc.value) == "Expected ';' at end of input on line 1 in <test>"


def test_unclosed_block_is_at_end():
    """
    An unclosed block fails at the EOF token.
    """
    with pytest.raises(ParseException) as exc:
        parse_source("explore 2 {\n  print(1);\n")
    assert exc.value.at_end


def test_standalone_identifier():
    """
    A bare identifier is not a useful statement.
    """
    with pytest.raises(UnexpectedStandaloneIdentifierException) as exc:
        parse_source("x = 1;\nx;")
    assert exc.value.name == 'x'
    assert exc.value.line == 2


def test_unexpected_token_reports_lexeme():
    """
    Errors point at the offending token.
    """
    with pytest.raises(ExpectedTokenException) as exc:
        parse_source("print(});")
    assert "Expected expression at '}'" in str(exc.value)


def test_parser_adds_missing_eof():
    """
    A token list without EOF (or no tokens at all) still parses.
    """
    assert not Parser([]).parse()
    tokens = [
        Token('ID', 'x', None, 1),
        Token('ASSIGN', '=', None, 1),
        Token('NUMBER', '1', 1, 1),
        Token('SEMICOLON', ';', None, 1),
    ]
    assert Parser(tokens).parse() == [('var_decl', 'x', ('number', 1, 1), 1)]
