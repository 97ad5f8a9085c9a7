"""Expression parsing utilities for PukiMO.

These functions operate on a `pukimo.parser.parser.Parser` instance and
implement the recursive descent logic for expressions, maintaining
operator precedence and associativity.

Precedence, lowest to highest: assignment, ``||``, ``&&``, ``== !=``,
``< <= > >=``, ``+ -``, ``* / %``, unary ``! -``, the suffix chain
(``.name``, ``->name(...)``, ``(...)``) and finally primaries.


File: expressions.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.1
License: MIT
"""

from typing import TYPE_CHECKING

from pukimo.exceptions import (
    ExpectedTokenException,
    InvalidAssignmentTargetException,
    ParseException,
)
from pukimo.operations import Op

if TYPE_CHECKING:
    from pukimo.parser import Parser


CONSTRUCTOR_TOKENS = ('SAFARIZONE', 'TEAM', 'POKEMON')


def _left_assoc(parser: 'Parser', operand, op_map: dict) -> tuple:
    result = operand()
    while parser.curr_token.type in op_map:
        op_tok = parser.eat(parser.curr_token.type)
        result = (op_map[op_tok.type], result, operand(), op_tok.line)
    return result


# ---- Lowest precedence ----

def parse_expr(parser: 'Parser') -> tuple:
    """Parse a full expression."""
    return parser.assignment()


def parse_assignment(parser: 'Parser') -> tuple:
    """
    Parse an assignment expression.

    Syntax:
        <target> = <expression>

    The target must be a variable or a property access; the right-hand side
    may itself be an assignment, so ``a = b = 1`` binds both names.

    Returns:
        tuple: ('assign', target, value, line_number) or the plain expression.
    """
    target = parser.logical_or()
    if parser.curr_token.type != 'ASSIGN':
        return target
    assign_tok = parser.eat('ASSIGN')
    if target[0] not in ('ident', 'dot'):
        raise InvalidAssignmentTargetException(assign_tok, parser.source_file)
    value = parser.assignment()
    return ('assign', target, value, assign_tok.line)


def parse_logical_or(parser: 'Parser') -> tuple:
    """Parse logical OR expressions using '||'."""
    return _left_assoc(parser, parser.logical_and, {'OR': Op.OR})


def parse_logical_and(parser: 'Parser') -> tuple:
    """Parse logical AND expressions using '&&'."""
    return _left_assoc(parser, parser.equality, {'AND': Op.AND})


def parse_equality(parser: 'Parser') -> tuple:
    """Parse equality expressions (==, !=)."""
    op_map = {
        'EQ': Op.EQ,
        'NE': Op.NE,
    }
    return _left_assoc(parser, parser.comparison, op_map)


def parse_comparison(parser: 'Parser') -> tuple:
    """Parse comparison expressions (<, <=, >, >=)."""
    op_map = {
        'LT': Op.LT,
        'LE': Op.LE,
        'GT': Op.GT,
        'GE': Op.GE,
    }
    return _left_assoc(parser, parser.additive, op_map)


def parse_additive(parser: 'Parser') -> tuple:
    """Parse addition and subtraction expressions."""
    op_map = {
        'PLUS': Op.ADD,
        'MINUS': Op.SUB,
    }
    return _left_assoc(parser, parser.term, op_map)


def parse_term(parser: 'Parser') -> tuple:
    """Parse multiplication, division, and modulus expressions."""
    op_map = {
        'MUL': Op.MUL,
        'DIV': Op.DIV,
        'MOD': Op.MOD,
    }
    return _left_assoc(parser, parser.unary, op_map)


def parse_unary(parser: 'Parser') -> tuple:
    """Parse prefix negation ('-') and logical not ('!')."""
    tok = parser.curr_token
    if tok.type in ('NOT', 'MINUS'):
        parser.eat(tok.type)
        op = Op.NOT if tok.type == 'NOT' else Op.SUB
        return ('unary', op, parser.unary(), tok.line)
    return parser.call()


def parse_call(parser: 'Parser') -> tuple:
    """
    Parse a primary followed by any number of suffixes.

    Syntax:
        <primary> ( .<name> | -><name>[( <args> )] | ( <args> ) )*

    Returns:
        tuple: The primary node wrapped in 'dot', 'method_call' and
        'func_call' nodes, innermost suffix first.
    """
    node = parser.primary()
    while True:
        tok = parser.curr_token
        if tok.type == 'DOT':
            parser.eat('DOT')
            name_tok = parser.eat('ID', "property name")
            node = ('dot', node, name_tok.lexeme, name_tok.line)
        elif tok.type == 'ARROW':
            parser.eat('ARROW')
            name_tok = parser.eat('ID', "method name")
            args, named = [], []
            if parser.curr_token.type == 'LPAREN':
                args, named = parser.arguments(allow_named=True)
            node = ('method_call', node, name_tok.lexeme, args, named, name_tok.line)
        elif tok.type == 'LPAREN':
            args, _ = parser.arguments()
            node = ('func_call', node, args, tok.line)
        else:
            return node


# ---- Highest precedence ----

def parse_primary(parser: 'Parser') -> tuple:
    """Parse a literal, variable, constructor call, list or parenthesized expression."""
    tok = parser.curr_token

    if tok.type == 'NUMBER':
        parser.eat('NUMBER')
        return ('number', tok.literal, tok.line)

    if tok.type == 'STRING':
        parser.eat('STRING')
        return ('string', tok.literal, tok.line)

    if tok.type in ('TRUE', 'FALSE'):
        parser.eat(tok.type)
        return ('bool', tok.literal, tok.line)

    if tok.type == 'NULL':
        parser.eat('NULL')
        return ('null', None, tok.line)

    if tok.type == 'ID':
        parser.eat('ID')
        return ('ident', tok.lexeme, tok.line)

    if tok.type in CONSTRUCTOR_TOKENS:
        parser.eat(tok.type)
        args, named = parser.arguments(allow_named=True)
        return ('construct', tok.lexeme, args, named, tok.line)

    if tok.type == 'LBRACKET':
        parser.eat('LBRACKET')
        elements = []
        while parser.curr_token.type != 'RBRACKET':
            elements.append(parser.expr())
            if parser.curr_token.type != 'COMMA':
                break
            parser.eat('COMMA')
        parser.eat('RBRACKET')
        return ('list', elements, tok.line)

    if tok.type == 'LPAREN':
        parser.eat('LPAREN')
        node = parser.expr()
        parser.eat('RPAREN')
        return node

    raise ExpectedTokenException(tok, "expression", parser.source_file)


def parse_arguments(parser: 'Parser', allow_named: bool = False) -> tuple[list, list]:
    """
    Parse a parenthesized, comma separated argument list.

    Syntax:
        ( <expr>, ..., <name> = <expr>, ... )

    Named arguments are only recognized when ``allow_named`` is set (method
    and constructor calls) and must follow every positional argument. A
    trailing comma is accepted.

    Returns:
        tuple: (positional_nodes, [(name, node), ...])
    """
    parser.eat('LPAREN')
    args, named = [], []
    seen = set()
    while parser.curr_token.type != 'RPAREN':
        if allow_named and parser.curr_token.type == 'ID' and parser.peek().type == 'ASSIGN':
            name_tok = parser.eat('ID')
            parser.eat('ASSIGN')
            if name_tok.lexeme in seen:
                raise ParseException(
                    name_tok, f"Duplicate named argument '{name_tok.lexeme}'",
                    parser.source_file,
                )
            seen.add(name_tok.lexeme)
            named.append((name_tok.lexeme, parser.expr()))
        else:
            if named:
                raise ParseException(
                    parser.curr_token, "Positional argument follows named argument",
                    parser.source_file,
                )
            args.append(parser.expr())
        if parser.curr_token.type != 'COMMA':
            break
        parser.eat('COMMA')
    parser.eat('RPAREN')
    return args, named
