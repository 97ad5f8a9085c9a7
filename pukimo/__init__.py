"""PukiMO, a small scripting language about Safari Zones, teams and Pokemon.

The pipeline is ``tokenize`` -> ``parse`` -> ``evaluate``; ``run_source`` does
all three. The package logs through the standard ``logging`` module under the
``pukimo`` logger and installs only a ``NullHandler``.


File: __init__.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.1
License: MIT
"""

import logging

from pukimo.config import InterpreterConfig
from pukimo.interpreter import Interpreter
from pukimo.lexer import Token, tokenize
from pukimo.parser import Parser

__version__ = "0.1.1"

logging.getLogger(__name__).addHandler(logging.NullHandler())


def parse(tokens: list, file: str = "<stdin>") -> list:
    """
    Parse a token list into a program (a list of statement nodes).
    """
    return Parser(tokens, file).parse()


def evaluate(program: list, interpreter: Interpreter | None = None) -> Interpreter:
    """
    Run ``program`` and return the interpreter holding the resulting state.
    """
    interpreter = interpreter or Interpreter()
    interpreter.evaluate(program)
    return interpreter


def run_source(source: str, file: str = "<stdin>",
               config: InterpreterConfig | None = None) -> Interpreter:
    """
    Tokenize, parse and evaluate ``source``.
    """
    program = parse(tokenize(source, file), file)
    return evaluate(program, Interpreter(file, config))


__all__ = [
    "InterpreterConfig",
    "Interpreter",
    "Parser",
    "Token",
    "tokenize",
    "parse",
    "evaluate",
    "run_source",
    "__version__",
]
