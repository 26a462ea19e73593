"""Shared definitions for operator identifiers.

This module centralizes the string constants used by the parser and
interpreter to label arithmetic and comparison operators in the abstract
syntax tree. Keeping them in one place prevents the two components from
drifting apart when an operator is added or renamed.


File: operations.py
Version: 0.1.0
License: MIT
"""

from enum import Enum


class Op(str, Enum):
    """
    Enumeration of supported operator names.
    """

    # Arithmetic
    ADD = "add"
    SUB = "sub"
    MUL = "mul"
    DIV = "div"
    POW = "pow"

    # Comparison
    EQ = "eq"
    NE = "ne"
    GT = "gt"
    GE = "ge"
    LT = "lt"
    LE = "le"

    def __str__(self) -> str:  # pragma: no cover - trivial
        """
        Return the underlying string value for nicer debug output.
        """
        return self.value


# Source spelling of each operator, used when formatting nodes for messages.
SYMBOLS = {
    Op.ADD: "+",
    Op.SUB: "-",
    Op.MUL: "*",
    Op.DIV: "/",
    Op.POW: "^",
    Op.EQ: "==",
    Op.NE: "!=",
    Op.GT: ">",
    Op.GE: ">=",
    Op.LT: "<",
    Op.LE: "<=",
}

ARITHMETIC = frozenset({Op.ADD, Op.SUB, Op.MUL, Op.DIV, Op.POW})
COMPARISON = frozenset({Op.EQ, Op.NE, Op.GT, Op.GE, Op.LT, Op.LE})


__all__ = ["Op", "SYMBOLS", "ARITHMETIC", "COMPARISON"]
