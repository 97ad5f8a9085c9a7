"""Main parser entry point for PukiMO.

This module defines the `Parser` class, which coordinates the recursive
descent parsing process. The actual parsing routines are split across
`pukimo.parser.expressions` and `pukimo.parser.statements`.

Besides the token cursor the parser tracks ``control_depth``, the number of
``if``/``explore`` bodies currently open. ``run;`` is only accepted while it
is above zero.


File: parser.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.1
License: MIT
"""

import logging

from pukimo.exceptions import ExpectedTokenException
from pukimo.lexer import TOKEN_LITERALS, Token

from . import expressions as _expr
from . import statements as _stmt

logger = logging.getLogger(__name__)

TOKEN_DESCRIPTIONS = {
    'ID': "identifier",
    'NUMBER': "number",
    'STRING': "string",
    'EOF': "end of input",
}


def describe(token_type: str) -> str:
    """
    Return the text used for ``token_type`` in "Expected ..." messages.
    """
    if token_type in TOKEN_LITERALS:
        return f"'{TOKEN_LITERALS[token_type]}'"
    return TOKEN_DESCRIPTIONS.get(token_type, token_type)


class Parser:
    """PukiMO parser."""

    def __init__(self, tokens: list, file: str = "<stdin>"):
        """
        Initialize the parser with a list of tokens.

        Parameters:
            tokens (list): A list of Token instances, normally ending in EOF.
            file (str): The name of the script.
        """
        tokens = list(tokens)
        if not tokens or tokens[-1].type != 'EOF':
            line = tokens[-1].line if tokens else 1
            tokens.append(Token('EOF', '', None, line))
        self.tokens = tokens
        self.position = 0
        self.curr_token = self.tokens[self.position]
        self.source_file = file
        self.control_depth = 0

    def eat(self, token_type: str, expected: str | None = None) -> Token:
        """
        Consume the current token if it matches the expected type.

        Parameters:
            token_type (str): The expected token type.
            expected (str): Optional description used in the error message.

        Returns:
            Token: The consumed token.

        Raises:
            ExpectedTokenException: If the token does not match the expected type.
        """
        tok = self.curr_token
        if tok.type != token_type:
            raise ExpectedTokenException(
                tok, expected or describe(token_type), self.source_file
            )
        if tok.type != 'EOF':
            self.position += 1
            self.curr_token = self.tokens[self.position]
        return tok

    def peek(self, offset: int = 1) -> Token:
        """
        Return the token ``offset`` places ahead without consuming anything.
        """
        index = min(self.position + offset, len(self.tokens) - 1)
        return self.tokens[index]

    def match(self, *token_types: str) -> Token | None:
        """
        Consume and return the current token if its type is one of ``token_types``.
        """
        if self.curr_token.type in token_types:
            return self.eat(self.curr_token.type)
        return None


    # Expression wrappers
    def expr(self) -> tuple:
        """
        Parse a full expression, starting at assignment precedence.
        """
        return _expr.parse_expr(self)

    def assignment(self) -> tuple:
        """
        Parse a right-associative assignment expression.
        """
        return _expr.parse_assignment(self)

    def logical_or(self) -> tuple:
        """
        Parse a logical OR expression.
        """
        return _expr.parse_logical_or(self)

    def logical_and(self) -> tuple:
        """
        Parse a logical AND expression.
        """
        return _expr.parse_logical_and(self)

    def equality(self) -> tuple:
        """
        Parse an equality expression using '==' or '!='.
        """
        return _expr.parse_equality(self)

    def comparison(self) -> tuple:
        """
        Parse a comparison expression using relational operators.
        """
        return _expr.parse_comparison(self)

    def additive(self) -> tuple:
        """
        Parse an addition or subtraction expression.
        """
        return _expr.parse_additive(self)

    def term(self) -> tuple:
        """
        Parse a term in an expression, involving multiplication, division or modulus.
        """
        return _expr.parse_term(self)

    def unary(self) -> tuple:
        """
        Parse a prefix '!' or '-' expression.
        """
        return _expr.parse_unary(self)

    def call(self) -> tuple:
        """
        Parse a primary expression followed by property, method and call suffixes.
        """
        return _expr.parse_call(self)

    def primary(self) -> tuple:
        """
        Parse a literal, variable, constructor, list or parenthesized group.
        """
        return _expr.parse_primary(self)

    def arguments(self, allow_named: bool = False) -> tuple[list, list]:
        """
        Parse a parenthesized argument list.
        """
        return _expr.parse_arguments(self, allow_named)


    # Statement wrappers
    def block(self) -> tuple:
        """
        Parse a block of statements enclosed in braces.
        """
        return _stmt.parse_block(self)

    def statement(self) -> tuple:
        """
        Parse a single statement.
        """
        return _stmt.parse_statement(self)

    def parse_if(self) -> tuple:
        """
        Parse an 'if' conditional statement.
        """
        return _stmt.parse_if(self)

    def parse_explore(self) -> tuple:
        """
        Parse an 'explore' bounded loop.
        """
        return _stmt.parse_explore(self)

    def parse_run(self) -> tuple:
        """
        Parse a 'run' statement for early loop exit.
        """
        return _stmt.parse_run(self)

    def parse_define(self) -> tuple:
        """
        Parse a function definition statement.
        """
        return _stmt.parse_define(self)

    def parse_print(self) -> tuple:
        """
        Parse a 'print' statement used for output.
        """
        return _stmt.parse_print(self)

    def parse_throw_ball(self) -> tuple:
        """
        Parse a 'throwBall' statement.
        """
        return _stmt.parse_throw_ball(self)

    def parse_const(self) -> tuple:
        """
        Parse a constant declaration.
        """
        return _stmt.parse_const(self)

    def parse_declaration(self) -> tuple:
        """
        Parse a variable declaration of the form ``name = expr;``.
        """
        return _stmt.parse_declaration(self)

    def parse_expr_statement(self) -> tuple:
        """
        Parse an expression used as a statement.
        """
        return _stmt.parse_expr_statement(self)


    def parse(self) -> list:
        """
        Parse the full input into a list of statements.
        """
        statements = []
        while self.curr_token.type != 'EOF':
            statements.append(self.statement())
        logger.debug("Parsed %d top-level statements from %s", len(statements), self.source_file)
        return statements
