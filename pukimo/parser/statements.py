"""Statement parsing utilities for PukiMO.

These functions operate on a `pukimo.parser.parser.Parser` instance and
handle the various statement forms in the language such as blocks,
conditionals, loops, and function definitions.


File: statements.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.1
License: MIT
"""

from typing import TYPE_CHECKING

from pukimo.exceptions import (
    IllegalExitOutsideControlBlockException,
    ParseException,
    UnexpectedStandaloneIdentifierException,
)

if TYPE_CHECKING:
    from pukimo.parser import Parser


def parse_block(parser: 'Parser') -> tuple:
    """
    Parse a block of statements enclosed in braces.

    Syntax:
        { <statement>* }

    Args:
        parser: The parser instance.

    Returns:
        tuple: ('block', list_of_statements, line_number)
    """
    tok = parser.eat('LBRACE')
    statements = []
    while parser.curr_token.type not in ('RBRACE', 'EOF'):
        statements.append(parser.statement())
    parser.eat('RBRACE')
    return ('block', statements, tok.line)


def parse_statement(parser: 'Parser') -> tuple:
    """
    Parse a single statement.

    An identifier directly followed by ``=`` starts a variable declaration;
    any other statement that does not begin with a keyword or ``{`` is an
    expression statement.

    Args:
        parser: The parser instance.

    Returns:
        tuple: representing the AST node.
    """
    tok = parser.curr_token
    if tok.type == 'IF':
        return parser.parse_if()
    elif tok.type == 'EXPLORE':
        return parser.parse_explore()
    elif tok.type == 'RUN':
        return parser.parse_run()
    elif tok.type == 'DEFINE':
        return parser.parse_define()
    elif tok.type == 'PRINT':
        return parser.parse_print()
    elif tok.type == 'THROWBALL':
        return parser.parse_throw_ball()
    elif tok.type == 'CONST':
        return parser.parse_const()
    elif tok.type == 'LBRACE':
        return parser.block()
    elif tok.type == 'ID' and parser.peek().type == 'ASSIGN':
        return parser.parse_declaration()
    return parser.parse_expr_statement()


def parse_if(parser: 'Parser') -> tuple:
    """
    Parse an 'if' statement with an optional 'else' block.

    Syntax:
        if ( <expression> ) { <statement>* } [ else { <statement>* } ]

    Args:
        parser: The parser instance.

    Returns:
        tuple: ('if', condition, then_block, else_block_or_None, line_number)
    """
    tok = parser.eat('IF')
    parser.eat('LPAREN')
    condition = parser.expr()
    parser.eat('RPAREN')

    parser.control_depth += 1
    try:
        then_block = parser.block()
        else_block = None
        if parser.match('ELSE'):
            else_block = parser.block()
    finally:
        parser.control_depth -= 1
    return ('if', condition, then_block, else_block, tok.line)


def parse_explore(parser: 'Parser') -> tuple:
    """
    Parse an 'explore' bounded loop.

    Syntax:
        explore <expression> { <statement>* }

    Args:
        parser: The parser instance.

    Returns:
        tuple: ('explore', count_expression, block, line_number)
    """
    tok = parser.eat('EXPLORE')
    count = parser.expr()
    parser.control_depth += 1
    try:
        body = parser.block()
    finally:
        parser.control_depth -= 1
    return ('explore', count, body, tok.line)


def parse_run(parser: 'Parser') -> tuple:
    """
    Parse a 'run' statement.

    Syntax:
        run ;

    Args:
        parser: The parser instance.

    Returns:
        tuple: ('run', line_number)

    Raises:
        IllegalExitOutsideControlBlockException: If no 'if' or 'explore' body is open.
    """
    tok = parser.eat('RUN')
    if parser.control_depth <= 0:
        raise IllegalExitOutsideControlBlockException(tok, parser.source_file)
    parser.eat('SEMICOLON')
    return ('run', tok.line)


def parse_define(parser: 'Parser') -> tuple:
    """
    Parse a function definition.

    Syntax:
        define <identifier> [ ( <identifier>, ... ) ] { <statement>* }

    The body keeps the enclosing control depth. A 'run' that leaves the
    function at runtime is reported by the interpreter.

    Args:
        parser: The parser instance.

    Returns:
        tuple: ('define', name, params, block, line_number)
    """
    tok = parser.eat('DEFINE')
    name_tok = parser.eat('ID', "function name")
    params = []
    if parser.match('LPAREN'):
        while parser.curr_token.type != 'RPAREN':
            param_tok = parser.eat('ID', "parameter name")
            if param_tok.lexeme in params:
                raise ParseException(
                    param_tok, f"Duplicate parameter '{param_tok.lexeme}'",
                    parser.source_file,
                )
            params.append(param_tok.lexeme)
            if parser.curr_token.type != 'COMMA':
                break
            parser.eat('COMMA')
        parser.eat('RPAREN')

    body = parser.block()
    return ('define', name_tok.lexeme, params, body, tok.line)


def parse_print(parser: 'Parser') -> tuple:
    """
    Parse a 'print' statement.

    Syntax:
        print ( <expression> ) ;
    """
    tok = parser.eat('PRINT')
    parser.eat('LPAREN')
    expr_node = parser.expr()
    parser.eat('RPAREN')
    parser.eat('SEMICOLON')
    return ('print', expr_node, tok.line)


def parse_throw_ball(parser: 'Parser') -> tuple:
    """
    Parse a 'throwBall' statement.

    Syntax:
        throwBall ( <expression> ) ;
    """
    tok = parser.eat('THROWBALL')
    parser.eat('LPAREN')
    expr_node = parser.expr()
    parser.eat('RPAREN')
    parser.eat('SEMICOLON')
    return ('throw_ball', expr_node, tok.line)


def parse_const(parser: 'Parser') -> tuple:
    """
    Parse a constant declaration.

    Syntax:
        const <identifier> = <expression> ;
    """
    tok = parser.eat('CONST')
    name_tok = parser.eat('ID', "constant name")
    parser.eat('ASSIGN')
    value = parser.expr()
    parser.eat('SEMICOLON')
    return ('const_decl', name_tok.lexeme, value, tok.line)


def parse_declaration(parser: 'Parser') -> tuple:
    """
    Parse a variable declaration.

    Syntax:
        <identifier> = <expression> ;

    Returns:
        tuple: ('var_decl', name, expression_node, line_number)
    """
    name_tok = parser.eat('ID')
    parser.eat('ASSIGN')
    value = parser.expr()
    parser.eat('SEMICOLON')
    return ('var_decl', name_tok.lexeme, value, name_tok.line)


def parse_expr_statement(parser: 'Parser') -> tuple:
    """
    Parse an expression statement.

    Syntax:
        <expression> ;

    Raises:
        UnexpectedStandaloneIdentifierException: If the expression is a bare identifier.
    """
    tok = parser.curr_token
    expr_node = parser.expr()
    if expr_node[0] == 'ident':
        raise UnexpectedStandaloneIdentifierException(tok, expr_node[1], parser.source_file)
    parser.eat('SEMICOLON')
    return ('expr_stmt', expr_node, expr_node[-1])
