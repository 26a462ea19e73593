"""
Main parser entry point for AL.

This module defines the `Parser` class, which coordinates the recursive
descent parsing process. The actual parsing routines are split across
`alang.parser.expressions` and `alang.parser.statements`.


File: parser.py
Version: 0.1.0
License: MIT
"""

from alang.exceptions import ParseException
from alang.lexer import Token

from . import expressions as _expr
from . import statements as _stmt


class Parser:
    """AL parser."""

    def __init__(self, tokens: list, token_map_literals: dict[str, str], file: str):
        """
        Initialize the parser with a list of tokens.

        Parameters:
            tokens (list): A list of Token instances ending with an ``EOF`` token.
            token_map_literals (dict): A dict of token spellings mapped to token types.
            file (str): The name of the script.
        """
        self.tokens = tokens
        self.token_map = token_map_literals
        self.reverse_token_map = {v: k for k, v in self.token_map.items()}
        self.position = 0
        self.curr_token = self.tokens[self.position]
        self.source_file = file

    def describe(self, tok: Token) -> str:
        """
        Render a token for error messages.
        """
        if tok.type == 'EOF':
            return "EOF"
        if tok.type == 'STRING':
            return f"string {tok.value!r}"
        if tok.type == 'NUMBER':
            return f"number {tok.value:g}"
        return f"'{tok.value}'"

    def error(self, message: str, tok: Token | None = None) -> ParseException:
        """
        Build a syntax error located at ``tok`` (default: the current token).
        """
        tok = tok or self.curr_token
        return ParseException(message, tok.line, tok.column, self.source_file)

    def peek(self, offset: int = 1) -> Token:
        """
        Return the token ``offset`` positions ahead without consuming anything.
        """
        index = min(self.position + offset, len(self.tokens) - 1)
        return self.tokens[index]

    def eat(self, token_type: str) -> Token:
        """
        Consume the current token if it matches the expected type.

        Parameters:
            token_type (str): The expected token type.

        Returns:
            Token: The consumed token.

        Raises:
            ParseException: If the token does not match the expected type.
        """
        tok = self.curr_token
        if tok.type == token_type:
            if tok.type != 'EOF':
                self.position += 1
                self.curr_token = self.tokens[self.position]
            return tok

        expd_value = self.reverse_token_map.get(token_type, token_type)
        raise self.error(
            f"Expected '{expd_value}' but got {self.describe(tok)}"
        )

    def validate_id_or_raise(self, tok: Token) -> None:
        """
        Ensure ``tok`` is a name made of letters only.

        Raises:
            ParseException: If the token is a reserved word, a literal, or a
                name containing digits.
        """
        if tok.type != 'NAME':
            raise self.error(f"Expected an identifier but got {self.describe(tok)}", tok)
        if not tok.value.isalpha():
            raise self.error(
                f"Invalid identifier '{tok.value}': identifiers may only contain letters",
                tok,
            )


    # Expression wrappers
    def value(self) -> tuple:
        """
        Parse a value: array element, identifier, number or string.
        """
        return _expr.parse_value(self)

    def number(self) -> tuple:
        """
        Parse a number literal with an optional attached minus sign.
        """
        return _expr.parse_number(self)

    def factor(self) -> tuple:
        """
        Parse a value or a parenthesized expression.
        """
        return _expr.parse_factor(self)

    def power(self) -> tuple:
        """
        Parse a right-associative exponentiation.
        """
        return _expr.parse_power(self)

    def term(self) -> tuple:
        """
        Parse a term in an expression, involving multiplication or division.
        """
        return _expr.parse_term(self)

    def add_sub(self) -> tuple:
        """
        Parse an addition or subtraction expression.
        """
        return _expr.parse_add_sub(self)

    def expr(self) -> tuple:
        """
        Parse a full arithmetic expression.
        """
        return _expr.parse_expr(self)

    def comparison(self) -> tuple:
        """
        Parse a comparison of two expressions.
        """
        return _expr.parse_comparison(self)


    # Statement wrappers
    def block(self) -> tuple:
        """
        Parse a block of statements enclosed in braces.
        """
        return _stmt.parse_block(self)

    def statement(self) -> tuple:
        """
        Parse a single statement.
        """
        return _stmt.parse_statement(self)

    def parse_load(self) -> tuple:
        """
        Parse a 'load' statement.
        """
        return _stmt.parse_load(self)

    def parse_func_def(self) -> tuple:
        """
        Parse a function definition.
        """
        return _stmt.parse_func_def(self)

    def parse_call(self) -> tuple:
        """
        Parse a function call statement.
        """
        return _stmt.parse_call(self)

    def parse_assignment(self) -> tuple:
        """
        Parse a variable or array element assignment.
        """
        return _stmt.parse_assignment(self)

    def parse_while(self) -> tuple:
        """
        Parse a 'while' loop.
        """
        return _stmt.parse_while(self)

    def parse_if(self) -> tuple:
        """
        Parse an 'if' statement.
        """
        return _stmt.parse_if(self)

    def parse_array_assignment(self) -> tuple:
        """
        Parse a bulk array assignment.
        """
        return _stmt.parse_array_assignment(self)


    def parse(self) -> list:
        """
        Parse the full input into a list of statements.

        Raises:
            ParseException: If the input is empty, malformed or nested deeper
                than the Python stack allows.
        """
        if self.curr_token.type == 'EOF':
            raise self.error("Expected at least one statement but got EOF")
        statements = []
        try:
            while self.curr_token.type != 'EOF':
                statements.append(self.statement())
        except RecursionError:
            raise self.error("Program is nested too deeply to parse") from None
        return statements
