"""Errors.

Every failure an AL program can hit is fatal: there is no exception-handling
construct in the language, so each class below simply carries enough context
(offending name, line, file) for the command-line front end to report it.


File: exceptions.py
Version: 0.1.0
License: MIT
"""


def _locate(message: str, line=None, file=None, column=None) -> str:
    if line is not None:
        message += f" on line {line}"
        if column is not None:
            message += f", column {column}"
    if file is not None:
        message += f" in {file}"
    return message


class ALException(Exception):
    """
    Base class for all AL language errors.
    """
    def __init__(self, message, line=None, file=None, column=None):
        self.line = line
        self.file = file
        super().__init__(_locate(message, line, file, column))


class ParseException(ALException, SyntaxError):
    """
    Error for malformed source text, raised by the lexer and the parser.
    """
    def __init__(self, message, line=None, column=None, file=None):
        self.column = column
        super().__init__(message, line, file, column)
        self.lineno = line
        self.offset = column
        self.filename = file

    def __str__(self) -> str:
        return Exception.__str__(self)


class LoadException(ALException):
    """
    Error for source files that cannot be found, read or decoded.
    """
    def __init__(self, name, reason="not found", line=None, file=None):
        self.name = name
        self.reason = reason
        super().__init__(f"Cannot load '{name}': {reason}", line, file)


class ALRuntimeException(ALException):
    """
    Base class for errors raised while evaluating a parsed program.
    """


class UndefinedVariableException(ALRuntimeException):
    """
    Error for undefined variables.
    """
    def __init__(self, varname, line=None, file=None):
        self.varname = varname
        super().__init__(f"Undefined variable '{varname}'", line, file)


class UndefinedArrayException(ALRuntimeException):
    """
    Error for element access on an array that was never declared.
    """
    def __init__(self, name, line=None, file=None):
        self.name = name
        super().__init__(f"Undefined array '{name}'", line, file)


class UndefinedFunctionException(ALRuntimeException):
    """
    Error for calls to functions that were never defined.
    """
    def __init__(self, name, line=None, file=None):
        self.name = name
        super().__init__(f"Undefined function '{name}'", line, file)


class IndexOutOfRangeException(ALRuntimeException, IndexError):
    """
    Error for array indexes outside ``0 .. length - 1``.
    """
    def __init__(self, name, index, length, line=None, file=None):
        self.name = name
        self.index = index
        self.length = length
        super().__init__(
            f"Index {index} out of range for array '{name}' of length {length}",
            line,
            file,
        )


class TypeMismatchException(ALRuntimeException, TypeError):
    """
    Error for operands or arguments of the wrong runtime type.
    """


class ArityMismatchException(ALRuntimeException):
    """
    Error for calls whose argument count differs from the parameter count.
    """
    def __init__(self, name, expected, received, line=None, file=None):
        self.name = name
        self.expected = expected
        self.received = received
        super().__init__(
            f"Function '{name}' expects {expected} argument(s) but received {received}",
            line,
            file,
        )


class DivisionByZeroException(ALRuntimeException, ZeroDivisionError):
    """
    Error for division by zero.
    """
    def __init__(self, line=None, file=None):
        super().__init__("Division by zero", line, file)


class ExecutionLimitException(ALRuntimeException):
    """
    Error for programs exceeding the configured step budget or the call depth.
    """
