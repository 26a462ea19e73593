"""Statement parsing utilities for AL.

These functions operate on a `alang.parser.parser.Parser` instance and
handle the statement forms of the language: file inclusion, function
definitions and calls, assignments, loops, conditionals and bulk array
assignment.


File: statements.py
Version: 0.1.0
License: MIT
"""

from typing import TYPE_CHECKING

from alang.nodes import Node

if TYPE_CHECKING:
    from alang.parser import Parser


BUILTIN_TOKENS = ('PRINT', 'PRINTLN')


def _follows_parameter_list(parser: 'Parser') -> str:
    """
    Return the type of the token after the parenthesized list that starts at
    the next token, without consuming anything.

    Used to tell ``name(...) => { }`` definitions from ``name(...);`` calls.
    """
    depth = 0
    index = parser.position + 1
    while index < len(parser.tokens):
        tok_type = parser.tokens[index].type
        if tok_type == 'LPAREN':
            depth += 1
        elif tok_type == 'RPAREN':
            depth -= 1
            if depth == 0:
                return parser.tokens[min(index + 1, len(parser.tokens) - 1)].type
        elif tok_type in ('EOF', 'SEMI', 'LBRACE'):
            break
        index += 1
    return 'EOF'


def parse_block(parser: 'Parser') -> tuple:
    """
    Parse a non-empty block of statements enclosed in braces.

    Syntax:
        { <statement>+ }

    Args:
        parser: The parser instance.

    Returns:
        tuple: (Node.BLOCK, list_of_statements, line_number)
    """
    tok = parser.eat('LBRACE')
    if parser.curr_token.type == 'RBRACE':
        raise parser.error("Empty block: expected at least one statement")
    statements = []
    while parser.curr_token.type != 'RBRACE':
        if parser.curr_token.type == 'EOF':
            raise parser.error("Expected '}' but got EOF")
        statements.append(parser.statement())
    parser.eat('RBRACE')
    return (Node.BLOCK, statements, tok.line)


def parse_statement(parser: 'Parser') -> tuple:
    """
    Parse a single statement.

    Alternatives are tried in a fixed order: load, function definition,
    function call, assignment, while, if and bulk array assignment. Each is
    recognisable from its first two tokens, except definitions and calls which
    share ``name(...)`` and are told apart by what follows the parentheses.

    Args:
        parser: The parser instance.

    Returns:
        tuple: representing the AST node.
    """
    tok = parser.curr_token
    nxt = parser.peek()

    if tok.type == 'LOAD':
        return parser.parse_load()
    if tok.type in BUILTIN_TOKENS:
        return parser.parse_call()
    if tok.type == 'NAME' and nxt.type == 'LPAREN':
        if _follows_parameter_list(parser) == 'ARROW':
            return parser.parse_func_def()
        return parser.parse_call()
    if tok.type == 'NAME' and nxt.type == 'ASSIGN':
        return parser.parse_assignment()
    if tok.type == 'WHILE':
        return parser.parse_while()
    if tok.type == 'IF':
        return parser.parse_if()
    if tok.type == 'NAME' and nxt.type == 'LBRACKET':
        if parser.peek(2).type == 'RBRACKET':
            return parser.parse_array_assignment()
        return parser.parse_assignment()

    raise parser.error(f"Unexpected {parser.describe(tok)}: expected a statement")


def parse_load(parser: 'Parser') -> tuple:
    """
    Parse a 'load' statement.

    Syntax:
        load <file_name> ;
        load "<file_name>" ;

    Args:
        parser: The parser instance.

    Returns:
        tuple: (Node.LOAD, file_name, line_number)
    """
    tok = parser.eat('LOAD')
    name_tok = parser.curr_token
    if name_tok.type == 'NAME':
        parser.eat('NAME')
    elif name_tok.type == 'STRING' and name_tok.value:
        parser.eat('STRING')
    else:
        raise parser.error(
            f"Expected a file name after 'load' but got {parser.describe(name_tok)}"
        )
    parser.eat('SEMI')
    return (Node.LOAD, name_tok.value, tok.line)


def parse_func_def(parser: 'Parser') -> tuple:
    """
    Parse a function definition, with or without parameters.

    Syntax:
        <name>(<param>, ...) => { <block> }
        <name>() => { <block> }

    Args:
        parser: The parser instance.

    Returns:
        tuple: (Node.FUNC_DEF, name, params, block, line_number)

    Raises:
        ParseException: If a parameter name is repeated.
    """
    name_tok = parser.curr_token
    parser.validate_id_or_raise(name_tok)
    parser.eat('NAME')
    parser.eat('LPAREN')
    params = []
    if parser.curr_token.type != 'RPAREN':
        while True:
            param_tok = parser.curr_token
            parser.validate_id_or_raise(param_tok)
            if param_tok.value in params:
                raise parser.error(
                    f"Duplicate parameter '{param_tok.value}' in definition of "
                    f"'{name_tok.value}'",
                    param_tok,
                )
            params.append(param_tok.value)
            parser.eat('NAME')
            if parser.curr_token.type != 'COMMA':
                break
            parser.eat('COMMA')
    parser.eat('RPAREN')
    parser.eat('ARROW')
    body = parser.block()
    return (Node.FUNC_DEF, name_tok.value, params, body, name_tok.line)


def parse_call(parser: 'Parser') -> tuple:
    """
    Parse a function call statement. Arguments are values, not expressions.

    Syntax:
        <name>(<value>, ...) ;

    Args:
        parser: The parser instance.

    Returns:
        tuple: (Node.CALL, name, args, line_number)
    """
    name_tok = parser.curr_token
    if name_tok.type in BUILTIN_TOKENS:
        parser.eat(name_tok.type)
    else:
        parser.validate_id_or_raise(name_tok)
        parser.eat('NAME')
    parser.eat('LPAREN')
    args = []
    if parser.curr_token.type != 'RPAREN':
        args.append(parser.value())
        while parser.curr_token.type == 'COMMA':
            parser.eat('COMMA')
            args.append(parser.value())
    parser.eat('RPAREN')
    parser.eat('SEMI')
    return (Node.CALL, name_tok.value, args, name_tok.line)


def parse_assignment(parser: 'Parser') -> tuple:
    """
    Parse assignment to a variable or to one element of an array.

    Syntax:
        <name> = <expression> ;
        <name>[<expression>] = <expression> ;

    Args:
        parser: The parser instance.

    Returns:
        tuple: (Node.ASSIGN, name, expr, line_number) or
               (Node.ELEMENT_ASSIGN, name, index_expr, expr, line_number)
    """
    id_tok = parser.curr_token
    parser.validate_id_or_raise(id_tok)
    parser.eat('NAME')
    index_expr = None
    if parser.curr_token.type == 'LBRACKET':
        parser.eat('LBRACKET')
        index_expr = parser.expr()
        parser.eat('RBRACKET')
    parser.eat('ASSIGN')
    expr_node = parser.expr()
    parser.eat('SEMI')
    if index_expr is None:
        return (Node.ASSIGN, id_tok.value, expr_node, id_tok.line)
    return (Node.ELEMENT_ASSIGN, id_tok.value, index_expr, expr_node, id_tok.line)


def parse_while(parser: 'Parser') -> tuple:
    """
    Parse a 'while' loop.

    Syntax:
        while (<comparison>) { <block> }

    Args:
        parser: The parser instance.

    Returns:
        tuple: (Node.WHILE, comparison, block, line_number)
    """
    tok = parser.eat('WHILE')
    parser.eat('LPAREN')
    condition = parser.comparison()
    parser.eat('RPAREN')
    body = parser.block()
    return (Node.WHILE, condition, body, tok.line)


def parse_if(parser: 'Parser') -> tuple:
    """
    Parse an 'if' statement. There is no else branch.

    Syntax:
        if (<comparison>) { <block> }

    Args:
        parser: The parser instance.

    Returns:
        tuple: (Node.IF, comparison, block, line_number)
    """
    tok = parser.eat('IF')
    parser.eat('LPAREN')
    condition = parser.comparison()
    parser.eat('RPAREN')
    body = parser.block()
    return (Node.IF, condition, body, tok.line)


def parse_array_assignment(parser: 'Parser') -> tuple:
    """
    Parse a bulk array assignment of number literals.

    Syntax:
        <name>[] = <number>, <number>, ... ;

    Args:
        parser: The parser instance.

    Returns:
        tuple: (Node.ARRAY_ASSIGN, name, list_of_floats, line_number)
    """
    id_tok = parser.curr_token
    parser.validate_id_or_raise(id_tok)
    parser.eat('NAME')
    parser.eat('LBRACKET')
    parser.eat('RBRACKET')
    parser.eat('ASSIGN')
    numbers = [parser.number()[1]]
    while parser.curr_token.type == 'COMMA':
        parser.eat('COMMA')
        numbers.append(parser.number()[1])
    parser.eat('SEMI')
    return (Node.ARRAY_ASSIGN, id_tok.value, numbers, id_tok.line)
