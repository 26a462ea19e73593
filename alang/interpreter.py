"""Interpreter.

This is a tree-walk interpreter for evaluating AST nodes produced by the parser. It supports
arithmetic, variables, arrays, function definitions and calls, conditionals, loops, file
inclusion and the built-in print statements.

1. Execution Model
The interpreter evaluates an abstract syntax tree (AST) in a top-down, recursive manner.
Statements are executed via the `execute()` method, and expressions are evaluated using
`eval_expr()`. Both methods operate over tuples labelled with a `Node` kind.

2. Environment
All state lives in a single global `Environment`: a variable table shared by numbers,
strings and arrays, and a separate function table. Function calls write their parameters
into the variable table and nothing is restored when the call returns.

3. Values
Numbers are Python floats, strings are str, arrays are lists of floats. Arithmetic and
ordering comparisons only accept numbers; `==` and `!=` also compare two strings.

4. Control Flow
- `if`: executes its block once when the comparison holds. There is no else branch.
- `while`: re-evaluates its comparison before every pass over the block.
- `load`: reads, parses and executes another source file at the point of the statement.

5. Error Handling
Every error is fatal and surfaces as a typed exception from `alang.exceptions` carrying the
line and file where it happened. Output printed before the error stays printed.


File: interpreter.py
Version: 0.1.0
License: MIT
"""

import logging
import math

from alang.environment import Environment
from alang.exceptions import (
    ArityMismatchException,
    DivisionByZeroException,
    ExecutionLimitException,
    IndexOutOfRangeException,
    LoadException,
    TypeMismatchException,
)
from alang.lexer import tokenize
from alang.loader import FileLoader
from alang.nodes import Node
from alang.operations import Op, SYMBOLS
from alang.parser import Parser

logger = logging.getLogger(__name__)

# Built-in spellings mapped to whether they terminate the line.
BUILTINS = {
    'print': False,
    'Print': False,
    'println': True,
    'Println': True,
}


def is_number(value) -> bool:
    """Return True for runtime numbers."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def type_name(value) -> str:
    """Name of a runtime value's type as used in error messages."""
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    return "number"


def format_number(value: float) -> str:
    """
    Canonical text form of a number.

    Integral values print without a fractional part, everything else uses the
    shortest representation that round-trips.
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


class Interpreter:
    """Tree-walk interpreter for AL."""

    def __init__(
        self,
        file: str,
        loader=None,
        output=None,
        max_steps: int | None = None,
        loading: set[str] | None = None,
    ):
        """
        Initialize the interpreter.

        Parameters:
            file (str): Name of the script being run, used in error messages.
            loader: Object with ``resolve(name)``, ``read(name)`` and ``nested(key)``
                used by ``load``. Defaults to a FileLoader rooted next to ``file``.
            output: Text stream for print output. ``None`` writes to ``sys.stdout``.
            max_steps (int): Optional budget of executed statements.
            loading (set): Resolved names of the files currently being executed,
                used to reject recursive loads.
        """
        self.file = file
        self.env = Environment(file)
        self.loader = loader if loader is not None else FileLoader.for_script(file)
        self.output = output
        self.max_steps = max_steps
        self.steps = 0
        self.loading = loading if loading is not None else set()

    @property
    def vars(self) -> dict:
        """The global variable table."""
        return self.env.variables

    @property
    def functions(self) -> dict:
        """The global function table."""
        return self.env.functions

    def reset(self) -> None:
        """Discard all program state so the interpreter can run a fresh program."""
        self.env.reset()
        self.steps = 0

    def parse(self, source: str, file: str | None = None) -> list:
        """
        Tokenize and parse ``source`` into a list of statements.

        Raises:
            ParseException: If the source is malformed.
        """
        file = file if file is not None else self.file
        tokens, token_map_literals = tokenize(source, file)
        return Parser(tokens, token_map_literals, file).parse()

    def run(self, source: str) -> None:
        """
        Parse the whole of ``source`` and then execute it.
        """
        self.execute(self.parse(source))

    # ------------------------------------------------------------------
    # File inclusion
    # ------------------------------------------------------------------

    def load(self, name: str, line=None) -> None:
        """
        Read, parse and execute the source named ``name`` in the current environment.

        Args:
            name (str): The file name as written after ``load``.
            line (int): Line of the ``load`` statement.

        Raises:
            LoadException: If the source cannot be read, or is already being loaded.
            ParseException: If the loaded source is malformed.
        """
        key = self.loader.resolve(name)
        if key in self.loading:
            raise LoadException(name, "recursive load", line, self.file)
        try:
            code = self.loader.read(name)
        except LoadException as e:
            raise LoadException(name, e.reason, line, self.file) from e

        ast = self.parse(code, key)
        logger.debug("Loaded %s (%d statements) on line %s", key, len(ast), line)

        saved_file, saved_loader = self.file, self.loader
        self.loading.add(key)
        self.file = self.env.file = key
        # Loads inside the included source resolve relative to it
        self.loader = saved_loader.nested(key)
        try:
            self.execute(ast)
        finally:
            self.file = self.env.file = saved_file
            self.loader = saved_loader
            self.loading.discard(key)

    # ------------------------------------------------------------------
    # Expressions
    # ------------------------------------------------------------------

    def _format_expr(self, node) -> str:
        """
        Convert an expression AST back to source-like text for error messages.

        Args:
            node (tuple): An expression node.

        Returns:
            str: A string representation of the expression.
        """
        kind = node[0]
        match kind:
            case Node.LITERAL:
                if isinstance(node[1], str):
                    return '"' + node[1] + '"'
                return format_number(node[1])
            case Node.IDENT:
                return node[1]
            case Node.ELEMENT:
                return f"{node[1]}[{self._format_expr(node[2])}]"
            case Node.BINARY | Node.COMPARE:
                spine = [node]
                while spine[-1][2][0] == Node.BINARY:
                    spine.append(spine[-1][2])
                text = self._format_expr(spine[-1][2])
                for binary in reversed(spine):
                    text = f"({text} {SYMBOLS[binary[1]]} {self._format_expr(binary[3])})"
                return text
            case _:
                return f"<{kind}>"

    def _index(self, name: str, array: list, index_expr, line) -> int:
        """
        Evaluate an index expression and check it against ``array``.

        Raises:
            TypeMismatchException: If the index is not a number.
            IndexOutOfRangeException: If the index is negative, fractional or too large.
        """
        index = self.eval_expr(index_expr)
        if not is_number(index):
            raise TypeMismatchException(
                f"Index of '{name}' must be a number, got {type_name(index)} "
                f"in {name}[{self._format_expr(index_expr)}]",
                line,
                self.file,
            )
        if not float(index).is_integer() or not 0 <= index < len(array):
            raise IndexOutOfRangeException(
                name, format_number(index), len(array), line, self.file
            )
        return int(index)

    def _power(self, base: float, exponent: float, line) -> float:
        """
        Raise ``base`` to ``exponent`` with IEEE results for domain and range errors.
        """
        if base == 0 and exponent < 0:
            raise DivisionByZeroException(line, self.file)
        try:
            return math.pow(base, exponent)
        except OverflowError:
            odd = float(exponent).is_integer() and int(exponent) % 2 == 1
            return -math.inf if base < 0 and odd else math.inf
        except ValueError:
            return math.nan

    def _arithmetic(self, node, lhs, rhs) -> float:
        """
        Apply the operator of the binary ``node`` to already evaluated operands.
        """
        _, op, _, _, line = node
        if not (is_number(lhs) and is_number(rhs)):
            raise TypeMismatchException(
                f"Operator '{SYMBOLS[op]}' requires numbers, got "
                f"{type_name(lhs)} and {type_name(rhs)} in {self._format_expr(node)}",
                line,
                self.file,
            )
        match op:
            case Op.ADD:
                return lhs + rhs
            case Op.SUB:
                return lhs - rhs
            case Op.MUL:
                return lhs * rhs
            case Op.DIV:
                if rhs == 0:
                    raise DivisionByZeroException(line, self.file)
                return lhs / rhs
            case Op.POW:
                return self._power(lhs, rhs, line)
        raise RuntimeError(f"Invalid arithmetic operator: {op}")

    def eval_expr(self, node):
        """
        Recursively evaluate an expression node and return its computed value.

        Parameters:
            node (tuple): An expression node. The first element is the node kind,
                        the last element the line number for error reporting.

        Returns:
            The evaluated result: a number, a string, an array, or for comparison
            nodes a bool.

        Raises:
            UndefinedVariableException: If a variable is read before it is assigned.
            UndefinedArrayException: If an element of an undeclared array is read.
            IndexOutOfRangeException: If an element index is out of bounds.
            TypeMismatchException: If an operator is applied to unsupported operands.
            DivisionByZeroException: If a number is divided by zero.
        """
        kind = node[0]
        line = node[-1]

        # Literals
        if kind == Node.LITERAL:
            return node[1]

        # Variables
        elif kind == Node.IDENT:
            return self.env.get(node[1], line)

        # Array elements
        elif kind == Node.ELEMENT:
            _, name, index_expr, _ = node
            array = self.env.get_array(name, line)
            return array[self._index(name, array, index_expr, line)]

        # Arithmetic
        elif kind == Node.BINARY:
            # Long left-folded chains (a + b + c ...) are walked iteratively
            spine = [node]
            while spine[-1][2][0] == Node.BINARY:
                spine.append(spine[-1][2])
            result = self.eval_expr(spine[-1][2])
            for binary in reversed(spine):
                result = self._arithmetic(binary, result, self.eval_expr(binary[3]))
            return result

        # Comparisons
        elif kind == Node.COMPARE:
            _, op, lhs_node, rhs_node, _ = node
            lhs = self.eval_expr(lhs_node)
            rhs = self.eval_expr(rhs_node)
            if is_number(lhs) and is_number(rhs):
                pass
            elif isinstance(lhs, str) and isinstance(rhs, str) and op in (Op.EQ, Op.NE):
                pass
            else:
                raise TypeMismatchException(
                    f"Cannot compare {type_name(lhs)} and {type_name(rhs)} with "
                    f"'{SYMBOLS[op]}' in {self._format_expr(node)}",
                    line,
                    self.file,
                )
            match op:
                case Op.EQ:
                    return lhs == rhs
                case Op.NE:
                    return lhs != rhs
                case Op.GT:
                    return lhs > rhs
                case Op.GE:
                    return lhs >= rhs
                case Op.LT:
                    return lhs < rhs
                case Op.LE:
                    return lhs <= rhs

        raise RuntimeError(f"Invalid expression node: {node}")

    # ------------------------------------------------------------------
    # Calls
    # ------------------------------------------------------------------

    def write(self, text: str) -> None:
        """
        Send ``text`` to the output stream.
        """
        print(text, end='', file=self.output)

    def _printable(self, arg_node, line) -> str:
        value = self.eval_expr(arg_node)
        if isinstance(value, str):
            return value
        if isinstance(value, list):
            raise TypeMismatchException(
                f"Cannot print array '{self._format_expr(arg_node)}'",
                line,
                self.file,
            )
        return format_number(value)

    def call(self, name: str, arg_nodes: list, line=None) -> None:
        """
        Invoke a built-in or user-defined function.

        Raises:
            UndefinedFunctionException: If ``name`` is neither built-in nor defined.
            ArityMismatchException: If the argument count differs from the parameter count.
            ExecutionLimitException: If calls nest deeper than Python's recursion limit.
        """
        if name in BUILTINS:
            text = ''.join(self._printable(arg, line) for arg in arg_nodes)
            if BUILTINS[name]:
                text += '\n'
            self.write(text)
            return

        func = self.env.get_function(name, line)
        if len(arg_nodes) != len(func.params):
            raise ArityMismatchException(
                name, len(func.params), len(arg_nodes), line, self.file
            )
        args = [self.eval_expr(arg) for arg in arg_nodes]
        for param, value in zip(func.params, args):
            self.env.set(param, value)

        logger.debug("Calling %s with %d argument(s) on line %s", name, len(args), line)
        try:
            self.execute(func.body[1])
        except RecursionError:
            raise ExecutionLimitException(
                f"Maximum call depth exceeded in '{name}'", line, self.file
            ) from None

    # ------------------------------------------------------------------
    # Statements
    # ------------------------------------------------------------------

    def _tick(self, line) -> None:
        if self.max_steps is None:
            return
        self.steps += 1
        if self.steps > self.max_steps:
            raise ExecutionLimitException(
                f"Execution exceeded {self.max_steps} steps", line, self.file
            )

    def execute(self, statements: list):
        """
        Execute a list of statements, reporting Python stack exhaustion as an AL error.

        Raises:
            ExecutionLimitException: If statements or expressions nest deeper than
                the Python stack allows.
        """
        try:
            self._execute(statements)
        except RecursionError:
            line = statements[0][-1] if statements else None
            raise ExecutionLimitException(
                "Maximum nesting depth exceeded", line, self.file
            ) from None

    def _execute(self, statements: list):
        """
        Executes a list of statements in order.

        Parameters:
            statements (list):
                A list of statement nodes (assign, element_assign, array_assign, call,
                func_def, if, while, block, load).

        Raises:
            RuntimeError: For unknown statement types.
        """
        for stmt in statements:
            kind = stmt[0]
            line = stmt[-1]
            self._tick(line)

            if kind == Node.ASSIGN:
                _, name, expr_node, _ = stmt
                self.env.set(name, self.eval_expr(expr_node))

            elif kind == Node.ELEMENT_ASSIGN:
                _, name, index_expr, expr_node, _ = stmt
                value = self.eval_expr(expr_node)
                array = self.env.get_array(name, line)
                index = self._index(name, array, index_expr, line)
                if not is_number(value):
                    raise TypeMismatchException(
                        f"Array elements must be numbers, got {type_name(value)} "
                        f"for {name}[{self._format_expr(index_expr)}]",
                        line,
                        self.file,
                    )
                array[index] = value

            elif kind == Node.ARRAY_ASSIGN:
                _, name, numbers, _ = stmt
                self.env.set(name, numbers)

            elif kind == Node.CALL:
                _, name, arg_nodes, _ = stmt
                self.call(name, arg_nodes, line)

            elif kind == Node.FUNC_DEF:
                _, name, params, body, _ = stmt
                self.env.define_function(name, params, body)
                logger.debug("Defined %s(%s) on line %s", name, ', '.join(params), line)

            elif kind == Node.IF:
                _, cond_node, block_node, _ = stmt
                if self.eval_expr(cond_node):
                    self.execute([block_node])

            elif kind == Node.WHILE:
                _, cond_node, block_node, _ = stmt
                while self.eval_expr(cond_node):
                    self.execute([block_node])

            elif kind == Node.BLOCK:
                _, block_statements, _ = stmt
                self.execute(block_statements)

            elif kind == Node.LOAD:
                _, name, _ = stmt
                self.load(name, line)

            else:
                raise RuntimeError(
                    f"Unknown statement type: {kind} "
                    f"on line {line} in {self.file}"
                )
