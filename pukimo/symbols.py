"""Top-level symbol index for PukiMO documents.

Used by the language server for definition lookup, hover text and the
document outline. Only top-level ``define``, ``const`` and variable
declarations are indexed; a name declared twice keeps both entries in source
order. Lines are zero-based, as editors count them.


File: symbols.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.1
License: MIT
"""

import logging
from dataclasses import dataclass

from pukimo.exceptions import LexException, ParseException
from pukimo.lexer import tokenize
from pukimo.parser import Parser

logger = logging.getLogger(__name__)

FUNCTION = "function"
CONSTANT = "constant"
VARIABLE = "variable"


@dataclass
class Symbol:
    """Represents a top-level symbol in a PukiMO file."""

    name: str
    kind: str
    uri: str
    line: int
    detail: str


def index_symbols(source: str, uri: str) -> list[Symbol]:
    """
    Parse ``source`` and extract its top-level symbols.

    Documents that fail to tokenize or parse produce an empty index.
    """
    try:
        program = Parser(tokenize(source, uri), uri).parse()
    except (LexException, ParseException) as e:
        logger.debug("Not indexing %s: %s", uri, e)
        return []

    symbols = []
    for node in program:
        tag = node[0]
        if tag == 'define':
            _, name, params, _, line = node
            detail = f"define {name}({', '.join(params)})"
            symbols.append(Symbol(name, FUNCTION, uri, line - 1, detail))
        elif tag == 'const_decl':
            _, name, _, line = node
            symbols.append(Symbol(name, CONSTANT, uri, line - 1, f"const {name}"))
        elif tag == 'var_decl':
            _, name, _, line = node
            symbols.append(Symbol(name, VARIABLE, uri, line - 1, name))
    return symbols
