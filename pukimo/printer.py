"""Readable renderings of AST nodes and runtime values.

``format_node`` turns an AST node back into source-like text. The interpreter
uses it in error messages and the CLI uses it to dump the parsed program in
debug mode. ``stringify`` is the text ``print`` writes for a runtime value.


File: printer.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.1
License: MIT
"""

from pukimo.operations import BINARY_OPS, SYMBOLS, Op

INDENT = "    "


def stringify(value) -> str:
    """
    Render a runtime value the way ``print`` shows it.

    Args:
        value: Any PukiMO runtime value.

    Returns:
        str: ``null`` for no value, ``true``/``false`` for booleans, decimals
        without a trailing ``.0`` and lists as ``[a, b]``.
    """
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        text = repr(value)
        return text[:-2] if text.endswith(".0") else text
    if isinstance(value, list):
        return "[" + ", ".join(stringify(item) for item in value) + "]"
    return str(value)


def _arguments(args: list, named: list = ()) -> str:
    parts = [format_node(arg) for arg in args]
    parts.extend(f"{name}={format_node(value)}" for name, value in named)
    return ", ".join(parts)


def _block(node: tuple, depth: int) -> str:
    pad = INDENT * (depth + 1)
    body = "".join(f"{pad}{format_node(stmt, depth + 1)}\n" for stmt in node[1])
    return "{\n" + body + INDENT * depth + "}"


def format_node(node, depth: int = 0) -> str:
    """
    Convert an AST node back to a readable string.

    Args:
        node (tuple): A statement or expression node.
        depth (int): Indentation level for nested blocks.

    Returns:
        str: Source-like text for the node.
    """
    kind = node[0]
    match kind:
        # Statements
        case 'expr_stmt':
            return f"{format_node(node[1])};"
        case 'var_decl':
            return f"{node[1]} = {format_node(node[2])};"
        case 'const_decl':
            return f"const {node[1]} = {format_node(node[2])};"
        case 'print':
            return f"print({format_node(node[1])});"
        case 'throw_ball':
            return f"throwBall({format_node(node[1])});"
        case 'run':
            return "run;"
        case 'block':
            return _block(node, depth)
        case 'if':
            text = f"if ({format_node(node[1])}) {_block(node[2], depth)}"
            if node[3] is not None:
                text += f" else {_block(node[3], depth)}"
            return text
        case 'explore':
            return f"explore {format_node(node[1])} {_block(node[2], depth)}"
        case 'define':
            return f"define {node[1]}({', '.join(node[2])}) {_block(node[3], depth)}"

        # Expressions
        case 'number' | 'bool' | 'null':
            return stringify(node[1])
        case 'string':
            escaped = node[1].replace('\\', '\\\\').replace('"', '\\"').replace('\n', '\\n')
            return f'"{escaped}"'
        case 'list':
            return "[" + ", ".join(format_node(item) for item in node[1]) + "]"
        case 'ident':
            return node[1]
        case 'unary':
            return f"{SYMBOLS[node[1]]}{format_node(node[2])}"
        case 'assign':
            return f"{format_node(node[1])} = {format_node(node[2])}"
        case 'dot':
            return f"{format_node(node[1])}.{node[2]}"
        case 'func_call':
            return f"{format_node(node[1])}({_arguments(node[2])})"
        case 'method_call':
            return f"{format_node(node[1])}->{node[2]}({_arguments(node[3], node[4])})"
        case 'construct':
            return f"{node[1]}({_arguments(node[2], node[3])})"
        case _ if kind in BINARY_OPS:
            return f"({format_node(node[1])} {SYMBOLS[Op(kind)]} {format_node(node[2])})"
        case _:
            return f"<node {kind}>"


def format_program(program: list) -> str:
    """
    Render a whole program, one top-level statement per line.
    """
    return "\n".join(format_node(stmt) for stmt in program)
