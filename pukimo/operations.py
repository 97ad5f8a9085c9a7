"""Shared definitions for AST operation identifiers and value semantics.

This module centralizes the operator constants used by the parser and
interpreter to label nodes in the abstract syntax tree, together with the small
value predicates (truthiness, numeric checks, structural equality) that both
the interpreter and the built-in objects rely on.

AST nodes are tuples whose first element is the node kind and whose last
element is the source line:

Statements
    ('expr_stmt', expr, line)
    ('var_decl', name, expr, line)
    ('const_decl', name, expr, line)
    ('print', expr, line)
    ('if', condition, then_block, else_block_or_None, line)
    ('block', [statement, ...], line)
    ('explore', count_expr, block, line)
    ('define', name, [param, ...], block, line)
    ('throw_ball', expr, line)
    ('run', line)

Expressions
    ('number' | 'string' | 'bool' | 'null', value, line)
    ('list', [expr, ...], line)
    ('ident', name, line)
    ('unary', Op.SUB | Op.NOT, operand, line)
    (Op.<binary>, lhs, rhs, line)
    ('assign', target, value, line)
    ('func_call', callee, [arg, ...], line)
    ('dot', target, name, line)
    ('method_call', target, name, [arg, ...], [(name, expr), ...], line)
    ('construct', kind, [arg, ...], [(name, expr), ...], line)


File: operations.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.1
License: MIT
"""

from enum import Enum


class Op(str, Enum):
    """
    Enumeration of supported AST operation names.
    """

    # Arithmetic
    ADD = "add"
    SUB = "sub"
    MUL = "mul"
    DIV = "div"
    MOD = "mod"

    # Comparison
    EQ = "eq"
    NE = "ne"
    GT = "gt"
    LT = "lt"
    GE = "ge"
    LE = "le"

    # Boolean
    AND = "and"
    OR = "or"
    NOT = "not"

    def __str__(self) -> str:  # pragma: no cover - trivial
        """
        Return the underlying string value for nicer debug output.
        """
        return self.value


SYMBOLS = {
    Op.ADD: '+',
    Op.SUB: '-',
    Op.MUL: '*',
    Op.DIV: '/',
    Op.MOD: '%',
    Op.EQ: '==',
    Op.NE: '!=',
    Op.GT: '>',
    Op.LT: '<',
    Op.GE: '>=',
    Op.LE: '<=',
    Op.AND: '&&',
    Op.OR: '||',
    Op.NOT: '!',
}

BINARY_OPS = frozenset(op for op in Op if op is not Op.NOT)


def is_integer(value) -> bool:
    """
    Return ``True`` for integers. Booleans are not numbers in PukiMO.
    """
    return isinstance(value, int) and not isinstance(value, bool)


def is_number(value) -> bool:
    """
    Return ``True`` for integers and decimals.
    """
    return is_integer(value) or isinstance(value, float)


def is_truthy(value) -> bool:
    """
    ``null`` is false, booleans are themselves, everything else is true.
    """
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    return True


def values_equal(lhs, rhs) -> bool:
    """
    Structural equality used by ``==``, ``!=`` and ``Team->filter``.
    """
    if isinstance(lhs, bool) or isinstance(rhs, bool):
        return isinstance(lhs, bool) and isinstance(rhs, bool) and lhs == rhs
    if is_number(lhs) and is_number(rhs):
        return lhs == rhs
    if isinstance(lhs, list) and isinstance(rhs, list):
        return len(lhs) == len(rhs) and all(
            values_equal(a, b) for a, b in zip(lhs, rhs)
        )
    if isinstance(lhs, (str, type(None))) or isinstance(rhs, (str, type(None))):
        return type(lhs) is type(rhs) and lhs == rhs
    return lhs is rhs


__all__ = [
    "Op",
    "SYMBOLS",
    "BINARY_OPS",
    "is_integer",
    "is_number",
    "is_truthy",
    "values_equal",
]
