"""
PukiMO Language Interpreter

This is the main entry point for the PukiMO language interpreter.

Workflow:
1. The source script is read from the file specified on the command line.
2. The Lexer tokenizes the source code into meaningful tokens.
3. The Parser processes tokens into an AST following the language grammar.
4. The Interpreter walks the AST, evaluating expressions and executing statements.

Settings come from the environment (see ``pukimo.config``): ``PUKIDEBUG`` dumps
tokens and the AST and turns on debug logging, ``PUKI_MAX_STEPS`` caps the
number of executed statements and ``PUKI_STRICT`` rejects assignment to names
that were never declared.


File: puki.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.1
License: MIT
"""
import logging
import sys

from pukimo.config import InterpreterConfig
from pukimo.exceptions import (
    LexException,
    ParseException,
    UnterminatedCommentException,
    UnterminatedStringException,
)
from pukimo.interpreter import Interpreter
from pukimo.lexer import tokenize
from pukimo.parser import Parser
from pukimo.printer import format_program

logger = logging.getLogger("puki")


def print_usage():
    """
    Print usage.
    """
    print()
    print("PukiMO Language Interpreter")
    print()
    print("Usage:")
    print("    puki <script.puki>")
    print()
    print("Arguments:")
    print("    <script.puki>")
    print("        Path to a PukiMO source file to execute.")
    print()
    print("Example:")
    print("    puki examples/safari.puki")
    print()
    print("Or run with no arguments to enter interactive mode (REPL).")
    print()
    print("Options:")
    print("    -h, --help")
    print("        Show this help message and exit.")
    print()
    print("Environment:")
    print("    PUKIDEBUG=1         Print tokens and AST before running.")
    print("    PUKI_MAX_STEPS=<n>  Stop after <n> executed statements.")
    print("    PUKI_STRICT=1       Reject assignment to undeclared names.")


def configure_logging(config: InterpreterConfig) -> None:
    """
    Send log records to stderr; debug mode shows everything.
    """
    logging.basicConfig(
        level=logging.DEBUG if config.debug else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def debug_print_tokens_ast(tokens, ast):
    """
    Print tokenized source and AST
    """
    print("\nTokens:\n")
    print(tokens)
    print("\nAST:\n")
    print(format_program(ast))
    print(" ")


def report(error: Exception) -> None:
    """
    Print an error the way the CLI shows it.
    """
    print(f"{type(error).__name__}: {error}")


def run_script(script_name: str, config: InterpreterConfig) -> int:
    """
    Run a PukiMO script and return the process exit code.
    """
    try:
        with open(script_name, "r", encoding="utf-8") as f:
            code = f.read()
    except OSError as e:
        report(e)
        return 1

    logger.debug("Running %s", script_name)
    try:
        tokens = tokenize(code, script_name)
        ast = Parser(tokens, script_name).parse()

        if config.debug:
            debug_print_tokens_ast(tokens, ast)

        Interpreter(script_name, config).evaluate(ast)
    except (SyntaxError, RuntimeError) as e:
        report(e)
        return 1
    return 0


def is_incomplete(error: Exception) -> bool:
    """
    Return ``True`` if ``error`` means the input stopped in the middle of a construct.
    """
    if isinstance(error, ParseException):
        return error.at_end
    return isinstance(error, (UnterminatedStringException, UnterminatedCommentException))


def brace_balance(source: str) -> int:
    """
    Count unclosed ``{`` in ``source``, ignoring strings and comments.
    """
    try:
        tokens = tokenize(source)
    except LexException:
        return 0
    depth = 0
    for tok in tokens:
        if tok.type == 'LBRACE':
            depth += 1
        elif tok.type == 'RBRACE':
            depth -= 1
    return depth


def run_repl(config: InterpreterConfig):
    """
    Run the interactive REPL
    """
    print("PukiMO Language Interpreter - REPL")
    print("Type `exit` or `quit` to leave.")
    interpreter = Interpreter("<stdin>", config)
    buffer: list[str] = []
    while True:
        try:
            prompt = ">>> " if not buffer else "... "
            line = input(prompt)
            if not buffer and line.strip() in {"exit", "quit"}:
                break
            buffer.append(line)
            source = "\n".join(buffer)
            if brace_balance(source) > 0:
                continue
            try:
                tokens = tokenize(source)
                ast = Parser(tokens, "<stdin>").parse()
                if config.debug:
                    debug_print_tokens_ast(tokens, ast)
                interpreter.evaluate(ast)
                buffer.clear()
            except SyntaxError as e:
                # Input that ends inside a construct keeps buffering.
                if is_incomplete(e):
                    continue
                report(e)
                buffer.clear()
            except RuntimeError as e:
                report(e)
                buffer.clear()
        except KeyboardInterrupt:
            print("\nInterrupted.")
            break
        except EOFError:
            print()
            break


def main(argv: list[str]) -> int:
    """
    Entry point for the CLI.

    Behaviour:
    - No arguments: enter the REPL.
    - One argument equal to ``-h`` or ``--help``: print usage and exit.
    - One argument that is not an option: treat it as the path to a script and run it.
    - Any other pattern: print usage and return a non-zero exit code.
    """
    args = argv[1:]
    if len(args) == 1 and args[0] in ('-h', '--help'):
        print_usage()
        return 0

    try:
        config = InterpreterConfig.from_env()
    except ValueError as e:
        report(e)
        return 2
    configure_logging(config)

    if not args:
        run_repl(config)
        return 0
    if len(args) == 1:
        return run_script(args[0], config)
    print_usage()
    return 1


def cli() -> None:
    """
    Console script entry point.
    """
    sys.exit(main(sys.argv))


if __name__ == "__main__":
    cli()
