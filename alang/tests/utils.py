"""
Utility functions shared across AL Language tests.
"""
from pathlib import Path

from alang.lexer import tokenize
from alang.parser import Parser
from alang.interpreter import Interpreter


def parse_source(source: str):
    """
    Parse source code and return the AST.
    """
    tokens, token_map = tokenize(source, "<test>")
    parser = Parser(tokens, token_map, "<test>")
    return parser.parse()


def run_source(source: str, **kwargs) -> Interpreter:
    """
    Run source code and return the interpreter instance after execution.
    """
    interpreter = Interpreter("<test>", **kwargs)
    interpreter.execute(parse_source(source))
    return interpreter


def run_file(path: Path) -> Interpreter:
    """
    Run a file and return the interpreter instance after execution.
    """
    code = path.read_text(encoding="utf-8")
    interpreter = Interpreter(str(path))
    interpreter.run(code)
    return interpreter
