"""
Expression parsing utilities for AL.

These functions operate on a `alang.parser.parser.Parser` instance and
implement the recursive descent logic for expressions, maintaining
operator precedence and associativity:

    ^        right-associative, binds tightest
    * /      left-associative
    + -      left-associative

Comparisons are not expressions; they only appear as the condition of an
``if`` or ``while``.


File: expressions.py
Version: 0.1.0
License: MIT
"""

from typing import TYPE_CHECKING

from alang.nodes import Node
from alang.operations import Op

if TYPE_CHECKING:
    from alang.parser import Parser


COMPARATORS = {
    'EQ': Op.EQ,
    'NE': Op.NE,
    'GT': Op.GT,
    'GE': Op.GE,
    'LT': Op.LT,
    'LE': Op.LE,
}

TERM_OPERATORS = {
    'MUL': Op.MUL,
    'DIV': Op.DIV,
}

SUM_OPERATORS = {
    'PLUS': Op.ADD,
    'MINUS': Op.SUB,
}


def _is_signed_number(parser: 'Parser') -> bool:
    """A minus sign directly followed by digits, with no whitespace between."""
    tok = parser.curr_token
    nxt = parser.peek()
    return (
        tok.type == 'MINUS'
        and nxt.type == 'NUMBER'
        and nxt.line == tok.line
        and nxt.column == tok.column + 1
    )


# ---- Highest precedence ----

def parse_number(parser: 'Parser') -> tuple:
    """Parse a number literal, folding an attached minus sign into it."""
    tok = parser.curr_token
    if _is_signed_number(parser):
        parser.eat('MINUS')
        return (Node.LITERAL, -parser.eat('NUMBER').value, tok.line)
    if tok.type != 'NUMBER':
        raise parser.error(f"Expected a number but got {parser.describe(tok)}")
    parser.eat('NUMBER')
    return (Node.LITERAL, tok.value, tok.line)


def parse_value(parser: 'Parser') -> tuple:
    """Parse an array element, identifier, number or string."""
    tok = parser.curr_token

    if tok.type == 'NAME':
        parser.validate_id_or_raise(tok)
        parser.eat('NAME')
        if parser.curr_token.type == 'LBRACKET':
            parser.eat('LBRACKET')
            index_expr = parser.expr()
            parser.eat('RBRACKET')
            return (Node.ELEMENT, tok.value, index_expr, tok.line)
        return (Node.IDENT, tok.value, tok.line)

    if tok.type == 'NUMBER' or _is_signed_number(parser):
        return parser.number()

    if tok.type == 'STRING':
        parser.eat('STRING')
        return (Node.LITERAL, tok.value, tok.line)

    raise parser.error(f"Expected a value but got {parser.describe(tok)}")


def parse_factor(parser: 'Parser') -> tuple:
    """Parse a value or a parenthesized expression."""
    if parser.curr_token.type == 'LPAREN':
        parser.eat('LPAREN')
        node = parser.expr()
        parser.eat('RPAREN')
        return node
    return parser.value()


def parse_power(parser: 'Parser') -> tuple:
    """Parse exponentiation; ``2 ^ 3 ^ 2`` groups as ``2 ^ (3 ^ 2)``."""
    base = parser.factor()
    if parser.curr_token.type == 'POW':
        tok = parser.eat('POW')
        return (Node.BINARY, Op.POW, base, parser.power(), tok.line)
    return base


def parse_term(parser: 'Parser') -> tuple:
    """Parse multiplication and division expressions."""
    result = parser.power()
    while parser.curr_token.type in TERM_OPERATORS:
        op_tok = parser.eat(parser.curr_token.type)
        op = TERM_OPERATORS[op_tok.type]
        result = (Node.BINARY, op, result, parser.power(), op_tok.line)
    return result


def parse_add_sub(parser: 'Parser') -> tuple:
    """Parse addition and subtraction expressions."""
    result = parser.term()
    while parser.curr_token.type in SUM_OPERATORS:
        tok = parser.eat(parser.curr_token.type)
        result = (Node.BINARY, SUM_OPERATORS[tok.type], result, parser.term(), tok.line)
    return result


# ---- Entry points ----

def parse_expr(parser: 'Parser') -> tuple:
    """Parse an expression starting from the lowest-precedence operator."""
    return parser.add_sub()


def parse_comparison(parser: 'Parser') -> tuple:
    """Parse exactly one comparison (==, !=, >, >=, <, <=) between two expressions."""
    lhs = parser.expr()
    op_tok = parser.curr_token
    if op_tok.type not in COMPARATORS:
        raise parser.error(
            f"Expected a comparison operator but got {parser.describe(op_tok)}"
        )
    parser.eat(op_tok.type)
    rhs = parser.expr()
    return (Node.COMPARE, COMPARATORS[op_tok.type], lhs, rhs, op_tok.line)
