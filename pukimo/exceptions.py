"""Errors.

PukiMO reports problems in three tiers, one per pipeline stage:

- ``LexException`` for malformed source text (scanner),
- ``ParseException`` for token sequences that do not fit the grammar (parser),
- ``InterpreterException`` for failures while the program runs (evaluator).

Every error carries the source line (and the file name when one is known) and
formats its message as ``"<detail> on line <n> in <file>"``. ``BreakLoop`` is
not an error: it is the control signal raised by ``run;``.


File: exceptions.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.1
License: MIT
"""


def _located(detail: str, line=None, file=None) -> str:
    message = detail
    if line is not None:
        message += f" on line {line}"
    if file is not None:
        message += f" in {file}"
    return message


# ----------------------------------------------------------------------
# Lexical errors
# ----------------------------------------------------------------------

class LexException(SyntaxError):
    """
    Base class for errors raised while scanning source text.
    """
    def __init__(self, detail, line=None, file=None):
        self.detail = detail
        self.line = line
        self.file = file
        super().__init__(_located(detail, line, file))


class UnterminatedStringException(LexException):
    """
    Error for a string literal without a closing quote.
    """
    def __init__(self, line=None, file=None):
        super().__init__("Unterminated string", line, file)


class UnterminatedCommentException(LexException):
    """
    Error for a ``/*`` comment without a closing ``*/``.
    """
    def __init__(self, line=None, file=None):
        super().__init__("Unterminated multi-line comment", line, file)


class InvalidNumberException(LexException):
    """
    Error for malformed numeric literals such as ``12abc`` or ``1.2.3``.
    """
    def __init__(self, text, line=None, file=None):
        self.text = text
        super().__init__(f"Invalid number '{text}'", line, file)


class UnexpectedCharacterException(LexException):
    """
    Error for characters that do not start any token.
    """
    def __init__(self, char, line=None, file=None):
        self.char = char
        super().__init__(f"Unexpected character '{char}'", line, file)


# ----------------------------------------------------------------------
# Parse errors
# ----------------------------------------------------------------------

class ParseException(SyntaxError):
    """
    Base class for grammar errors. Keeps the offending token.
    """
    def __init__(self, token, detail, file=None):
        self.token = token
        self.detail = detail
        self.line = token.line if token is not None else None
        self.file = file
        if token is None or token.type == 'EOF':
            where = "end of input"
        else:
            where = f"'{token.lexeme}'"
        super().__init__(_located(f"{detail} at {where}", self.line, file))

    @property
    def at_end(self) -> bool:
        """
        Return ``True`` if the parser ran out of tokens.
        """
        return self.token is not None and self.token.type == 'EOF'


class ExpectedTokenException(ParseException):
    """
    Error for a token that does not match what the grammar requires.
    """
    def __init__(self, token, expected, file=None):
        self.expected = expected
        super().__init__(token, f"Expected {expected}", file)


class InvalidAssignmentTargetException(ParseException):
    """
    Error for ``=`` with a left-hand side that is not a variable or property.
    """
    def __init__(self, token, file=None):
        super().__init__(token, "Invalid assignment target", file)


class IllegalExitOutsideControlBlockException(ParseException):
    """
    Error for ``run;`` written outside an ``if`` or ``explore`` block.
    """
    def __init__(self, token, file=None):
        super().__init__(
            token, "'run' can only be used inside an 'if' or 'explore' block", file
        )


class UnexpectedStandaloneIdentifierException(ParseException):
    """
    Error for an expression statement made of a bare identifier.
    """
    def __init__(self, token, name, file=None):
        self.name = name
        super().__init__(token, f"Unexpected standalone identifier '{name}'", file)


# ----------------------------------------------------------------------
# Runtime errors
# ----------------------------------------------------------------------

class InterpreterException(RuntimeError):
    """
    Base class for errors raised while evaluating a program.

    Errors raised by the environment or by built-in objects do not know where
    they happened; the interpreter attaches the location with ``locate``.
    """
    def __init__(self, detail, line=None, file=None):
        self.detail = detail
        self.line = line
        self.file = file
        super().__init__(_located(detail, line, file))

    def locate(self, line, file=None) -> 'InterpreterException':
        """
        Attach a source location unless the error already carries one.
        """
        if self.line is None:
            self.line = line
            if self.file is None:
                self.file = file
            self.args = (_located(self.detail, self.line, self.file),)
        return self


class UndefinedVariableException(InterpreterException):
    """
    Error for undefined variables.
    """
    def __init__(self, varname, line=None, file=None):
        self.varname = varname
        super().__init__(f"Undefined variable '{varname}'", line, file)


class UnknownPropertyException(InterpreterException):
    """
    Error for reading or writing a property an object does not have.
    """
    def __init__(self, kind, name, line=None, file=None):
        self.name = name
        super().__init__(f"{kind} has no property '{name}'", line, file)


class ReadOnlyPropertyException(InterpreterException):
    """
    Error for writing a property that cannot be set.
    """
    def __init__(self, kind, name, line=None, file=None):
        self.name = name
        super().__init__(f"Property '{name}' of {kind} is read-only", line, file)


class UnknownMethodException(InterpreterException):
    """
    Error for calling a method an object does not have.
    """
    def __init__(self, kind, name, line=None, file=None):
        self.name = name
        super().__init__(f"{kind} has no method '{name}'", line, file)


class TypeMismatchException(InterpreterException):
    """
    Error for operands or arguments of the wrong type.
    """


class NotFoundException(InterpreterException):
    """
    Error for lookups by name that find nothing.
    """


class DivisionByZeroException(InterpreterException):
    """
    Error for ``/`` or ``%`` with a zero divisor.
    """
    def __init__(self, line=None, file=None):
        super().__init__("Division by zero", line, file)


class NumericRangeException(InterpreterException):
    """
    Error for a number too large, infinite or undefined for the operation.
    """


class ArityMismatchException(InterpreterException):
    """
    Error for calls with the wrong number (or names) of arguments.
    """


class NotAnObjectException(InterpreterException):
    """
    Error for ``.`` or ``->`` applied to a value that is not a built-in object.
    """


class NotCallableException(InterpreterException):
    """
    Error for calling a value that is not a function.
    """


class NonLvalueAssignmentException(InterpreterException):
    """
    Error for assignment nodes whose target cannot hold a value.
    """


class ConstantReassignmentException(InterpreterException):
    """
    Error for assigning to a name declared with ``const``.
    """
    def __init__(self, name, line=None, file=None):
        self.name = name
        super().__init__(f"Cannot reassign constant '{name}'", line, file)


class DuplicateEntityException(InterpreterException):
    """
    Error for adding a Pokemon whose name is already on the team.
    """
    def __init__(self, name, line=None, file=None):
        self.name = name
        super().__init__(f"A Pokemon named '{name}' is already on the team", line, file)


class InvalidArgumentException(InterpreterException):
    """
    Error for arguments of the right type but an unusable value.
    """


class EarlyExitOutsideLoopException(InterpreterException):
    """
    Error for ``run;`` executed with no enclosing ``explore`` loop.
    """
    def __init__(self, line=None, file=None):
        super().__init__("'run' used outside of an 'explore' loop", line, file)


class StepLimitExceededException(InterpreterException):
    """
    Error for programs that execute more statements than the configured budget.
    """
    def __init__(self, limit, line=None, file=None):
        self.limit = limit
        super().__init__(f"Step limit of {limit} statements exceeded", line, file)


# ----------------------------------------------------------------------
# Control flow
# ----------------------------------------------------------------------

class BreakLoop(Exception):
    """
    Control flow handling for ``run`` statements.
    """
    def __init__(self, line=None):
        super().__init__()
        self.line = line
