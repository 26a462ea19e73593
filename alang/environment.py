"""Program state for the AL interpreter.

An :class:`Environment` is the whole mutable state of a running program:
one table of variables (numbers, strings and arrays share it) and a separate
table of user-defined functions, so a function and a variable may carry the
same name. There is no nesting. Function parameters are written into the
same variable table as every other assignment and stay there after the call
returns.

One Environment is not safe for concurrent use; callers sharing one across
threads must synchronise access themselves.


File: environment.py
Version: 0.1.0
License: MIT
"""

from alang.exceptions import (
    TypeMismatchException,
    UndefinedArrayException,
    UndefinedFunctionException,
    UndefinedVariableException,
)


class FunctionDef:
    """Runtime representation of a user-defined function."""

    def __init__(self, name: str, params: list[str], body: tuple):
        self.name = name
        self.params = params
        self.body = body

    def __repr__(self) -> str:
        return f"FunctionDef({self.name}({', '.join(self.params)}))"


class Environment:
    """Global variable and function tables of one running program."""

    def __init__(self, file: str | None = None):
        self.file = file
        self.variables: dict[str, float | str | list[float]] = {}
        self.functions: dict[str, FunctionDef] = {}

    def reset(self) -> None:
        """Forget every variable and function."""
        self.variables.clear()
        self.functions.clear()

    # ------------------------------------------------------------------
    # Variables and arrays
    # ------------------------------------------------------------------

    def get(self, name: str, line=None):
        """
        Return the value bound to ``name``.

        Raises:
            UndefinedVariableException: If ``name`` was never assigned.
        """
        if name not in self.variables:
            raise UndefinedVariableException(name, line, self.file)
        return self.variables[name]

    def set(self, name: str, value) -> None:
        """
        Bind ``name`` to ``value``. Arrays are copied so no two names alias.
        """
        if isinstance(value, list):
            value = list(value)
        self.variables[name] = value

    def get_array(self, name: str, line=None) -> list[float]:
        """
        Return the array bound to ``name`` for element access.

        Raises:
            UndefinedArrayException: If ``name`` is not bound at all.
            TypeMismatchException: If ``name`` holds a number or a string.
        """
        if name not in self.variables:
            raise UndefinedArrayException(name, line, self.file)
        value = self.variables[name]
        if not isinstance(value, list):
            raise TypeMismatchException(
                f"'{name}' is not an array", line, self.file
            )
        return value

    # ------------------------------------------------------------------
    # Functions
    # ------------------------------------------------------------------

    def define_function(self, name: str, params: list[str], body: tuple) -> FunctionDef:
        """Register ``name``; an earlier definition is silently replaced."""
        func = FunctionDef(name, params, body)
        self.functions[name] = func
        return func

    def get_function(self, name: str, line=None) -> FunctionDef:
        """
        Return the function registered as ``name``.

        Raises:
            UndefinedFunctionException: If no such function was defined.
        """
        if name not in self.functions:
            raise UndefinedFunctionException(name, line, self.file)
        return self.functions[name]
