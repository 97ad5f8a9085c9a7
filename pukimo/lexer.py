"""Lexer for PukiMO.

This lexer performs a single pass over the source code using a combined
regular expression of named groups. Each match yields a :class:`Token`
containing its type, source text, decoded literal value and line number.

Tokens cover literals (integers, decimals, strings, booleans, ``null``),
keywords (``if``, ``explore``, ``throwBall`` …), operators and delimiters.
Two-character operators (``->``, ``==``, ``&&`` …) are listed before their
one-character prefixes so the longest form always wins. Comments starting with
``:>`` run to the end of the line; ``/* … */`` comments may span several lines
and still advance the line counter.

The token list always ends with a single ``EOF`` token whose line is the line
the scanner stopped on: ``1 + <number of newlines in the source>``.


File: lexer.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.1
License: MIT
"""

import logging
import re

from pukimo.exceptions import (
    InvalidNumberException,
    UnexpectedCharacterException,
    UnterminatedCommentException,
    UnterminatedStringException,
)

logger = logging.getLogger(__name__)


class Token:
    """
    Represents a lexical token.
    """
    def __init__(self, type_, lexeme, literal, line):
        """
        Initialize a new token.

        Parameters:
            type_ (str): The token type.
            lexeme (str): The source text of the token.
            literal (Any): The decoded value of a literal token, otherwise None.
            line (int): The line the token starts on.
        """
        self.type = type_
        self.lexeme = lexeme
        self.literal = literal
        self.line = line

    def __eq__(self, other) -> bool:
        if not isinstance(other, Token):
            return NotImplemented
        return (self.type, self.lexeme, self.literal, self.line) == (
            other.type, other.lexeme, other.literal, other.line
        )

    def __repr__(self) -> str:
        """
        Return a string representation of the token.
        """
        return f"Token({self.type}, {self.lexeme!r}, line={self.line})"


KEYWORDS = {
    'if': 'IF',
    'else': 'ELSE',
    'explore': 'EXPLORE',
    'run': 'RUN',
    'define': 'DEFINE',
    'print': 'PRINT',
    'throwBall': 'THROWBALL',
    'SafariZone': 'SAFARIZONE',
    'Team': 'TEAM',
    'Pokemon': 'POKEMON',
    'const': 'CONST',
    'true': 'TRUE',
    'false': 'FALSE',
    'null': 'NULL',
}

LITERAL_VALUES = {'TRUE': True, 'FALSE': False, 'NULL': None}

# Order matters: two-character operators come before their prefixes.
OPERATORS = [
    ('ARROW',     '->'),
    ('EQ',        '=='),
    ('NE',        '!='),
    ('LE',        '<='),
    ('GE',        '>='),
    ('AND',       '&&'),
    ('OR',        '||'),
    ('PLUS',      '+'),
    ('MINUS',     '-'),
    ('MUL',       '*'),
    ('DIV',       '/'),
    ('MOD',       '%'),
    ('ASSIGN',    '='),
    ('LT',        '<'),
    ('GT',        '>'),
    ('NOT',       '!'),
    ('LPAREN',    '('),
    ('RPAREN',    ')'),
    ('LBRACE',    '{'),
    ('RBRACE',    '}'),
    ('LBRACKET',  '['),
    ('RBRACKET',  ']'),
    ('COMMA',     ','),
    ('DOT',       '.'),
    ('SEMICOLON', ';'),
]

# Source text for each fixed token type, used in parser error messages.
TOKEN_LITERALS = dict(OPERATORS)
TOKEN_LITERALS.update({type_: word for word, type_ in KEYWORDS.items()})

token_specification = [
    # Comments
    ('COMMENT',       r':>[^\n]*'),
    ('BLOCK_COMMENT', r'/\*[\s\S]*?\*/'),
    ('OPEN_COMMENT',  r'/\*'),

    # Literals
    ('NUMBER',        r'\d[\w.]*'),
    ('STRING',        r'"(?:[^"\\]|\\[\s\S])*"'),
    ('OPEN_STRING',   r'"'),

    # Identifiers and keywords
    ('ID',            r'[^\W\d]\w*'),

    # Operators and delimiters
    *((name, re.escape(symbol)) for name, symbol in OPERATORS),

    # Miscellaneous
    ('NEWLINE',       r'\n'),
    ('SKIP',          r'[^\S\n]+'),
    ('MISMATCH',      r'.'),
]

TOKEN_REGEX = re.compile(
    '|'.join(f'(?P<{name}>{pattern})' for name, pattern in token_specification)
)

NUMBER_PATTERN = re.compile(r'\d+(?:\.\d+)?')

ESCAPES = {'n': '\n', 't': '\t', '\\': '\\', '"': '"'}


def _unescape(text: str) -> str:
    """
    Decode backslash escapes. Unknown escapes keep the escaped character.
    """
    return re.sub(
        r'\\([\s\S])', lambda m: ESCAPES.get(m.group(1), m.group(1)), text
    )


def tokenize(code: str, file: str = "<stdin>") -> list[Token]:
    """
    Convert a string of source code into a list of tokens.

    Parameters:
        code (str): The source code to tokenize.
        file (str): The name of the source, used in error messages.

    Returns:
        list[Token]: A list of Token instances ending with an EOF token.

    Raises:
        UnterminatedCommentException: If a ``/*`` comment is never closed.
        UnterminatedStringException: If a string literal is never closed.
        InvalidNumberException: If a numeric literal is malformed.
        UnexpectedCharacterException: If no token starts at a character.
    """
    tokens = []
    line_num = 1

    for match_obj in TOKEN_REGEX.finditer(code):
        kind = match_obj.lastgroup
        value = match_obj.group()

        if kind == 'NEWLINE':
            line_num += 1
            continue
        if kind in ('SKIP', 'COMMENT'):
            continue
        if kind == 'BLOCK_COMMENT':
            line_num += value.count('\n')
            continue
        if kind == 'OPEN_COMMENT':
            raise UnterminatedCommentException(line_num, file)
        if kind == 'OPEN_STRING':
            raise UnterminatedStringException(line_num, file)
        if kind == 'MISMATCH':
            raise UnexpectedCharacterException(value, line_num, file)

        if kind == 'NUMBER':
            if not NUMBER_PATTERN.fullmatch(value):
                raise InvalidNumberException(value, line_num, file)
            literal = float(value) if '.' in value else int(value)
            tokens.append(Token('NUMBER', value, literal, line_num))
        elif kind == 'STRING':
            tokens.append(Token('STRING', value, _unescape(value[1:-1]), line_num))
            line_num += value.count('\n')
        elif kind == 'ID':
            type_ = KEYWORDS.get(value, 'ID')
            tokens.append(Token(type_, value, LITERAL_VALUES.get(type_), line_num))
        else:
            tokens.append(Token(kind, value, None, line_num))

    tokens.append(Token('EOF', '', None, line_num))
    logger.debug("Tokenized %s into %d tokens", file, len(tokens))
    return tokens
