"""Lexer for AL.

This lexer performs a single pass over the source code using a combined
regular expression of named groups. Each match yields a :class:`Token`
containing its type, value and the line and column it started on.

Tokens cover literals (numbers and strings), the reserved words (``load``,
``while``, ``if`` and the built-in print spellings), names, operators and
delimiters. Whitespace is insignificant and the language has no comments, so
any other character outside a string literal is a lexical error.

Number literals are unsigned here: a leading ``-`` is always emitted as a
``MINUS`` token and the parser folds it into a negative literal when it sits
directly against the digits in value position.


File: lexer.py
Version: 0.1.0
License: MIT
"""

import re

from alang.exceptions import ParseException


ESCAPES = {
    '"': '"',
    '\\': '\\',
    '/': '/',
    'b': '\b',
    'f': '\f',
    'n': '\n',
    'r': '\r',
    't': '\t',
}

TOKEN_SPECIFICATION: list[tuple[str, str]] = [
    # Literals
    ('NUMBER',    r'[0-9]+(?:\.[0-9]+)?'),
    ('STRING',    r'"(?:[^"\\]|\\[\s\S])*"'),
    ('BADSTRING', r'"'),

    # Keywords
    ('LOAD',      r'\bload\b'),
    ('WHILE',     r'\bwhile\b'),
    ('IF',        r'\bif\b'),
    ('PRINTLN',   r'\b[Pp]rintln\b'),
    ('PRINT',     r'\b[Pp]rint\b'),

    # Names (identifiers and load file names)
    ('NAME',      r'[A-Za-z][A-Za-z0-9]*'),

    # Multi-character operators before their prefixes
    ('ARROW',     r'=>'),
    ('EQ',        r'=='),
    ('NE',        r'!='),
    ('GE',        r'>='),
    ('LE',        r'<='),
    ('ASSIGN',    r'='),
    ('GT',        r'>'),
    ('LT',        r'<'),

    # Arithmetic operators
    ('PLUS',      r'\+'),
    ('MINUS',     r'-'),
    ('MUL',       r'\*'),
    ('DIV',       r'/'),
    ('POW',       r'\^'),

    # Delimiters
    ('LPAREN',    r'\('),
    ('RPAREN',    r'\)'),
    ('LBRACE',    r'\{'),
    ('RBRACE',    r'\}'),
    ('LBRACKET',  r'\['),
    ('RBRACKET',  r'\]'),
    ('COMMA',     r','),
    ('SEMI',      r';'),

    # Miscellaneous
    ('NEWLINE',   r'\n'),
    ('SKIP',      r'[ \t\r]+'),
    ('MISMATCH',  r'.'),
]

TOKEN_REGEX = re.compile(
    '|'.join(f'(?P<{name}>{pattern})' for name, pattern in TOKEN_SPECIFICATION)
)

_PATTERN_TOKENS = {'NUMBER', 'STRING', 'BADSTRING', 'NAME', 'NEWLINE', 'SKIP', 'MISMATCH'}


class Token:
    """
    Represents a lexical token with a type, value and source position.
    """
    def __init__(self, type_, value, line, column=1):
        """
        Initialize a new token.

        Parameters:
            type_ (str): The token type.
            value (Any): The token value.
            line (int): The 1-based line the token starts on.
            column (int): The 1-based column the token starts on.
        """
        self.type = type_
        self.value = value
        self.line = line
        self.column = column

    def __repr__(self) -> str:
        """
        Return a string representation of the token.
        """
        return f"Token({self.type}, {self.value!r}, line={self.line}, column={self.column})"


def _literal_map() -> dict[str, str]:
    """
    Map the source spelling of every fixed token to its token type.

    Keyword patterns are reduced to their lower-case spelling; patterns that
    are not a fixed string (literals, names, whitespace) are left out.
    """
    token_map_literals = {}
    for name, pattern in TOKEN_SPECIFICATION:
        if name in _PATTERN_TOKENS:
            continue
        literal = pattern.replace(r'\b', '').replace('[Pp]', 'p')
        token_map_literals[re.sub(r'\\(.)', r'\1', literal)] = name
    return token_map_literals


def unescape(body: str, line: int, column: int, file=None) -> str:
    """
    Resolve the escape sequences of a string literal body.

    Parameters:
        body (str): The text between the quotes.
        line (int): Line of the opening quote, for error reporting.
        column (int): Column of the opening quote, for error reporting.

    Returns:
        str: The decoded string.

    Raises:
        ParseException: If an escape outside the supported set is found.
    """
    out = []
    i = 0
    while i < len(body):
        char = body[i]
        if char != '\\':
            out.append(char)
            i += 1
            continue
        escaped = body[i + 1]
        if escaped not in ESCAPES:
            offset = body.rfind('\n', 0, i)
            err_line = line + body.count('\n', 0, i)
            err_column = column + 1 + i if offset < 0 else i - offset
            raise ParseException(
                f"Unknown escape sequence '\\{escaped}'",
                err_line,
                err_column,
                file,
            )
        out.append(ESCAPES[escaped])
        i += 2
    return ''.join(out)


def tokenize(code: str, file=None) -> tuple[list[Token], dict[str, str]]:
    """
    Convert a string of source code into a list of tokens.

    Parameters:
        code (str): The source code to tokenize.
        file (str): Optional name of the source, used in error messages.

    Returns:
        list[Token]: A list of Token instances terminated by an ``EOF`` token.
        dict[str, str]: A dict mapping fixed token spellings to token types.

    Raises:
        ParseException: If an unexpected character, an unterminated string or
            an unknown escape sequence is encountered.
    """
    tokens = []
    line_num = 1
    line_start = 0

    for match_obj in TOKEN_REGEX.finditer(code):
        kind = match_obj.lastgroup
        value = match_obj.group()
        column = match_obj.start() - line_start + 1

        if kind == 'NEWLINE':
            line_num += 1
            line_start = match_obj.end()
            continue
        if kind == 'SKIP':
            continue
        if kind == 'MISMATCH':
            raise ParseException(f"Unexpected character {value!r}", line_num, column, file)
        if kind == 'BADSTRING':
            raise ParseException("Unterminated string literal", line_num, column, file)

        if kind == 'NUMBER':
            tokens.append(Token('NUMBER', float(value), line_num, column))
        elif kind == 'STRING':
            text = unescape(value[1:-1], line_num, column, file)
            tokens.append(Token('STRING', text, line_num, column))
            # Strings may span lines
            newlines = value.count('\n')
            if newlines:
                line_num += newlines
                line_start = match_obj.start() + value.rfind('\n') + 1
        else:
            tokens.append(Token(kind, value, line_num, column))

    tokens.append(Token('EOF', None, line_num, len(code) - line_start + 1))
    return tokens, _literal_map()
