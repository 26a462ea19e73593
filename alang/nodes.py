"""AST node kinds.

The parser emits plain tuples whose first element is one of the kinds below
and whose last element is the source line the node started on. The middle
fields per kind are:

    (Node.LITERAL, value, line)
    (Node.IDENT, name, line)
    (Node.ELEMENT, name, index_expr, line)
    (Node.BINARY, op, lhs, rhs, line)
    (Node.COMPARE, op, lhs, rhs, line)
    (Node.ASSIGN, name, expr, line)
    (Node.ELEMENT_ASSIGN, name, index_expr, expr, line)
    (Node.ARRAY_ASSIGN, name, [numbers], line)
    (Node.CALL, name, [args], line)
    (Node.FUNC_DEF, name, [params], block, line)
    (Node.IF, comparison, block, line)
    (Node.WHILE, comparison, block, line)
    (Node.BLOCK, [statements], line)
    (Node.LOAD, file_name, line)


File: nodes.py
Version: 0.1.0
License: MIT
"""

from enum import Enum


class Node(str, Enum):
    """
    Enumeration of AST node kinds.
    """

    # Expressions
    LITERAL = "literal"
    IDENT = "ident"
    ELEMENT = "element"
    BINARY = "binary"
    COMPARE = "compare"

    # Statements
    ASSIGN = "assign"
    ELEMENT_ASSIGN = "element_assign"
    ARRAY_ASSIGN = "array_assign"
    CALL = "call"
    FUNC_DEF = "func_def"
    IF = "if"
    WHILE = "while"
    BLOCK = "block"
    LOAD = "load"

    def __str__(self) -> str:  # pragma: no cover - trivial
        return self.value


__all__ = ["Node"]
