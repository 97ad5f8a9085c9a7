"""Interpreter.

This is a tree-walk interpreter for evaluating AST nodes produced by the parser. It supports
arithmetic, variables and constants, function definitions and calls, conditionals, bounded
loops, output statements and the built-in Safari Zone objects.

1. Execution Model
The interpreter evaluates an abstract syntax tree (AST) in a top-down, recursive manner.
Statements are executed via the `execute()` method, and expressions are evaluated using
`eval_expr()`. Both methods operate over structured tuples representing nodes in the AST.
Every statement produces a value; a block (and so a function body) yields the value of the
last statement it executed.

2. Environment
The interpreter keeps a chain of `Environment` frames. `self.env` is the frame currently in
use; blocks, loop iterations and function calls swap in a child frame and restore the previous
one when they finish, whether or not an error was raised. Functions capture the frame they were
defined in, so calls see the bindings that were visible at the definition (lexical scoping).

3. Expression Evaluation
Expression nodes (arithmetic, comparisons, literals, variable references, property access,
method and function calls, constructors) are evaluated recursively. Operand types are checked
and `TypeMismatchException` is raised for unsupported combinations. Booleans are never numbers.

4. Control Flow
Control constructs include:
- `if`/`else`: executes one of two blocks based on the truthiness of a condition.
- `explore` (bounded loop): runs a block a fixed number of times.
- `run`: leaves the nearest enclosing `explore` loop.
- `block`: executes a nested sequence of statements in a new frame.

5. Error Handling
Runtime errors are surfaced as `InterpreterException` subclasses. Errors raised by the
environment or by built-in objects carry no location of their own; the interpreter attaches
the line of the innermost node being evaluated and the script file name.


File: interpreter.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.1
License: MIT
"""

import logging

from pukimo.config import InterpreterConfig
from pukimo.environment import Environment
from pukimo.exceptions import (
    ArityMismatchException,
    BreakLoop,
    DivisionByZeroException,
    EarlyExitOutsideLoopException,
    InterpreterException,
    NonLvalueAssignmentException,
    NotAnObjectException,
    NotCallableException,
    NumericRangeException,
    StepLimitExceededException,
    TypeMismatchException,
)
from pukimo.objects import CONSTRUCTORS, BuiltinObject, SafariZone
from pukimo.operations import (
    BINARY_OPS,
    SYMBOLS,
    Op,
    is_integer,
    is_number,
    is_truthy,
    values_equal,
)
from pukimo.printer import format_node, stringify

logger = logging.getLogger(__name__)


class FunctionValue:
    """Runtime representation of a function value."""

    def __init__(self, name, params, body, closure):
        self.name = name
        self.params = params
        self.body = body
        # Frame the function was defined in.
        self.closure = closure

    def __repr__(self) -> str:
        return f"<function {self.name}({', '.join(self.params)})>"

    __str__ = __repr__


def type_name(value) -> str:
    """
    Return the PukiMO name of a runtime value's type, for error messages.
    """
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if is_integer(value):
        return "integer"
    if isinstance(value, float):
        return "decimal"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "list"
    if isinstance(value, BuiltinObject):
        return value.kind
    if isinstance(value, FunctionValue):
        return "function"
    return type(value).__name__


class Interpreter:
    """Tree-walk interpreter for PukiMO."""

    def __init__(self, file: str = "<stdin>", config: InterpreterConfig | None = None):
        """Initialize the interpreter with an empty global frame."""
        self.file = file
        self.config = config or InterpreterConfig()
        self.globals = Environment()
        self.env = self.globals
        self.steps = 0

    @property
    def vars(self) -> dict:
        """
        Bindings of the global frame.
        """
        return self.globals.values

    def evaluate(self, program: list):
        """
        Run a parsed program in the global frame.

        Bindings made before an error are kept, so a REPL can continue with the
        same interpreter. The statement budget is counted per call.

        Returns:
            The value of the last top-level statement executed.

        Raises:
            InterpreterException: On any runtime error.
        """
        self.env = self.globals
        self.steps = 0
        try:
            return self.execute(program)
        except BreakLoop as e:
            raise EarlyExitOutsideLoopException(e.line, self.file) from None
        finally:
            self.env = self.globals

    def _tick(self, line) -> None:
        self.steps += 1
        limit = self.config.max_steps
        if limit is not None and self.steps > limit:
            raise StepLimitExceededException(limit, line, self.file)

    # ------------------------------------------------------------------
    # Statements
    # ------------------------------------------------------------------

    def execute(self, statements: list):
        """
        Executes a list of statements in the current frame.

        Parameters:
            statements (list): Statement nodes.

        Returns:
            The value of the last statement executed, or None for an empty list.
        """
        value = None
        for stmt in statements:
            line = stmt[-1]
            self._tick(line)
            try:
                value = self.execute_statement(stmt)
            except InterpreterException as e:
                e.locate(line, self.file)
                raise
        return value

    def execute_block(self, statements: list, env: Environment):
        """
        Execute ``statements`` with ``env`` as the current frame.
        """
        previous = self.env
        self.env = env
        try:
            return self.execute(statements)
        finally:
            self.env = previous

    def execute_statement(self, stmt: tuple):
        """
        Execute one statement node and return its value.

        Raises:
            InterpreterException: For unknown statement types and runtime errors.
        """
        kind = stmt[0]

        if kind == 'expr_stmt':
            return self.eval_expr(stmt[1])

        elif kind == 'var_decl':
            _, name, expr_node, _ = stmt
            value = self.eval_expr(expr_node)
            if name in self.env:
                self.env.set(name, value)
            else:
                self.env.define(name, value)
            return value

        elif kind == 'const_decl':
            _, name, expr_node, _ = stmt
            value = self.eval_expr(expr_node)
            self.env.define(name, value, constant=True)
            return value

        elif kind == 'print':
            print(stringify(self.eval_expr(stmt[1])))
            return None

        elif kind == 'if':
            _, cond_node, then_block, else_block, _ = stmt
            if is_truthy(self.eval_expr(cond_node)):
                return self.execute_block(then_block[1], self.env.child())
            if else_block is not None:
                return self.execute_block(else_block[1], self.env.child())
            return None

        elif kind == 'block':
            return self.execute_block(stmt[1], self.env.child())

        elif kind == 'explore':
            _, count_node, body, line = stmt
            count = self.eval_expr(count_node)
            if not is_integer(count):
                raise TypeMismatchException(
                    f"explore expects an integer count, got {type_name(count)}"
                )
            logger.debug("explore %d iterations on line %s", max(count, 0), line)
            for _ in range(count):
                try:
                    self.execute_block(body[1], self.env.child())
                except BreakLoop:
                    break
            return None

        elif kind == 'run':
            raise BreakLoop(stmt[-1])

        elif kind == 'define':
            _, name, params, body, _ = stmt
            func = FunctionValue(name, params, body, self.env)
            self.env.define(name, func)
            return func

        elif kind == 'throw_ball':
            zone = self.eval_expr(stmt[1])
            if not isinstance(zone, SafariZone):
                raise TypeMismatchException(
                    f"throwBall expects a SafariZone, got {type_name(zone)}"
                )
            caught, messages = zone.throw_ball()
            for message in messages:
                print(message)
            return caught

        raise InterpreterException(f"Unknown statement type: {kind}")

    # ------------------------------------------------------------------
    # Expressions
    # ------------------------------------------------------------------

    def eval_expr(self, node: tuple):
        """
        Recursively evaluate an expression node and return its computed value.

        Parameters:
            node (tuple): An expression node, structured as a tuple.
                        The first element is the node kind (e.g., 'ident', Op.ADD),
                        followed by operands and the line number for error reporting.

        Returns:
            The evaluated result of the expression.

        Raises:
            InterpreterException: On runtime errors, located at the innermost node.
        """
        try:
            return self._eval(node)
        except InterpreterException as e:
            e.locate(node[-1], self.file)
            raise

    def _eval(self, node: tuple):
        kind = node[0]

        # Literals
        if kind in ('number', 'string', 'bool', 'null'):
            return node[1]
        elif kind == 'list':
            return [self.eval_expr(elem) for elem in node[1]]

        # Variables
        elif kind == 'ident':
            return self.env.get(node[1])

        elif kind == 'assign':
            return self._assign(node)

        # Operators
        elif kind == 'unary':
            _, operator, operand_node, _ = node
            operand = self.eval_expr(operand_node)
            if operator == Op.NOT:
                return not is_truthy(operand)
            if not is_number(operand):
                raise TypeMismatchException(
                    f"Unary minus (-) requires a numeric operand, got "
                    f"{type_name(operand)}: {format_node(node)}"
                )
            return -operand
        elif kind in BINARY_OPS:
            return self._binary(node)

        # Objects
        elif kind == 'dot':
            _, target_node, name, _ = node
            return self._object(target_node, '.').get_property(name)
        elif kind == 'method_call':
            _, target_node, name, arg_nodes, named_nodes, _ = node
            target = self._object(target_node, '->')
            args = [self.eval_expr(arg) for arg in arg_nodes]
            kwargs = {key: self.eval_expr(value) for key, value in named_nodes}
            return target.call_method(name, args, kwargs)
        elif kind == 'construct':
            _, type_key, arg_nodes, named_nodes, _ = node
            args = [self.eval_expr(arg) for arg in arg_nodes]
            kwargs = {key: self.eval_expr(value) for key, value in named_nodes}
            return CONSTRUCTORS[type_key].construct(args, kwargs)

        # Function calls
        elif kind == 'func_call':
            _, func_node, arg_nodes, _ = node
            func = self.eval_expr(func_node)
            args = [self.eval_expr(arg) for arg in arg_nodes]
            return self.call_function(func, args, format_node(func_node))

        raise InterpreterException(f"Invalid expression node: {kind}")

    def _object(self, target_node: tuple, accessor: str) -> BuiltinObject:
        target = self.eval_expr(target_node)
        if not isinstance(target, BuiltinObject):
            raise NotAnObjectException(
                f"Cannot use '{accessor}' on {type_name(target)} "
                f"'{format_node(target_node)}'"
            )
        return target

    def _assign(self, node: tuple):
        _, target, value_node, _ = node
        if target[0] == 'ident':
            value = self.eval_expr(value_node)
            self.env.set(target[1], value, create_missing=not self.config.strict_assignment)
            return value
        if target[0] == 'dot':
            obj = self._object(target[1], '.')
            value = self.eval_expr(value_node)
            obj.set_property(target[2], value)
            return value
        raise NonLvalueAssignmentException(
            f"Cannot assign to '{format_node(target)}'"
        )

    def call_function(self, func, args: list, label: str = "<expr>"):
        """
        Invoke a function value with already evaluated arguments.

        The call frame is a child of the function's closure. A ``run`` that is
        not caught by a loop inside the body does not leak out of the call.

        Returns:
            The value of the last statement executed in the body.

        Raises:
            NotCallableException: If ``func`` is not a function.
            ArityMismatchException: If the argument count differs from the parameters.
            EarlyExitOutsideLoopException: If ``run`` escapes the function body.
        """
        if not isinstance(func, FunctionValue):
            raise NotCallableException(
                f"Attempted to call non-function '{label}' ({type_name(func)})"
            )
        if len(args) != len(func.params):
            raise ArityMismatchException(
                f"{func.name}() expects {len(func.params)} arguments but got {len(args)}"
            )

        frame = func.closure.child()
        for param, arg in zip(func.params, args):
            frame.define(param, arg)
        logger.debug("call %s at depth %d", func.name, frame.depth)

        try:
            return self.execute_block(func.body[1], frame)
        except BreakLoop as e:
            raise EarlyExitOutsideLoopException(e.line, self.file) from None

    def _binary(self, node: tuple):
        op, lhs_node, rhs_node, line = node
        lhs = self.eval_expr(lhs_node)

        # Short-circuit
        if op == Op.AND:
            return is_truthy(lhs) and is_truthy(self.eval_expr(rhs_node))
        if op == Op.OR:
            return is_truthy(lhs) or is_truthy(self.eval_expr(rhs_node))

        rhs = self.eval_expr(rhs_node)
        try:
            return self._apply(node, lhs, rhs)
        except OverflowError as e:
            raise NumericRangeException(
                f"Numeric overflow in {format_node(node)}: {e}", line, self.file
            ) from None

    def _apply(self, node: tuple, lhs, rhs):
        op, line = node[0], node[-1]
        match op:
            # Equality
            case Op.EQ:
                return values_equal(lhs, rhs)
            case Op.NE:
                return not values_equal(lhs, rhs)

            # Arithmetic
            case Op.ADD:
                if isinstance(lhs, str) or isinstance(rhs, str):
                    return stringify(lhs) + stringify(rhs)
                self._require_numbers(node, lhs, rhs)
                return lhs + rhs
            case Op.SUB:
                self._require_numbers(node, lhs, rhs)
                return lhs - rhs
            case Op.MUL:
                self._require_numbers(node, lhs, rhs)
                return lhs * rhs
            case Op.DIV:
                self._require_numbers(node, lhs, rhs)
                if rhs == 0:
                    raise DivisionByZeroException(line, self.file)
                return lhs / rhs
            case Op.MOD:
                if not (is_integer(lhs) and is_integer(rhs)):
                    raise TypeMismatchException(
                        f"Operator '%' expects integers, got {type_name(lhs)} and "
                        f"{type_name(rhs)}: {format_node(node)}"
                    )
                if rhs == 0:
                    raise DivisionByZeroException(line, self.file)
                remainder = abs(lhs) % abs(rhs)
                return -remainder if lhs < 0 else remainder

            # Comparison
            case Op.GT:
                self._require_numbers(node, lhs, rhs)
                return lhs > rhs
            case Op.LT:
                self._require_numbers(node, lhs, rhs)
                return lhs < rhs
            case Op.GE:
                self._require_numbers(node, lhs, rhs)
                return lhs >= rhs
            case Op.LE:
                self._require_numbers(node, lhs, rhs)
                return lhs <= rhs
            case _:
                raise InterpreterException(f"Unknown binary operator '{op}'")

    def _require_numbers(self, node: tuple, lhs, rhs) -> None:
        if not (is_number(lhs) and is_number(rhs)):
            raise TypeMismatchException(
                f"Operator '{SYMBOLS[node[0]]}' expects numbers, got "
                f"{type_name(lhs)} and {type_name(rhs)}: {format_node(node)}"
            )
