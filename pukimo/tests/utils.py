"""
Utility functions shared across PukiMO tests.
"""
from pukimo.config import InterpreterConfig
from pukimo.interpreter import Interpreter
from pukimo.lexer import tokenize
from pukimo.parser import Parser


def parse_source(source: str) -> list:
    """
    Parse source code and return the AST.
    """
    return Parser(tokenize(source, "<test>"), "<test>").parse()


def run_source(source: str, config: InterpreterConfig | None = None) -> Interpreter:
    """
    Run source code and return the interpreter instance after execution.
    """
    interpreter = Interpreter("<test>", config)
    interpreter.evaluate(parse_source(source))
    return interpreter


def output_lines(capsys) -> list[str]:
    """
    Return the captured stdout as a list of lines.
    """
    return capsys.readouterr().out.splitlines()
