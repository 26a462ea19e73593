"""
AL Language Interpreter

This is the main entry point for the AL language interpreter.

Workflow:
1. The source script is read from the file specified on the command line.
2. The Lexer tokenizes the source code into meaningful tokens.
3. The Parser processes tokens into an AST following the language grammar.
4. The Interpreter walks the AST, evaluating expressions and executing statements.

Exit status:
    0   success
    2   bad command-line usage
    65  syntax error (in the script or in a loaded file)
    70  runtime error
    74  I/O error (unreadable script or failed ``load``)


File: al.py
Version: 0.1.0
License: MIT
"""
import argparse
import logging
import os
import sys

from alang.exceptions import ALRuntimeException, LoadException, ParseException
from alang.interpreter import Interpreter
from alang.lexer import tokenize
from alang.loader import DEFAULT_EXTENSION, FileLoader
from alang.parser import Parser

EXIT_OK = 0
EXIT_USAGE = 2
EXIT_SYNTAX_ERROR = 65
EXIT_RUNTIME_ERROR = 70
EXIT_IO_ERROR = 74


def build_arg_parser() -> argparse.ArgumentParser:
    """
    Build the command-line parser.
    """
    parser = argparse.ArgumentParser(
        prog="al",
        description="AL Language Interpreter. Run with no script to enter interactive mode (REPL).",
        allow_abbrev=False,
    )
    parser.add_argument(
        "script",
        nargs="?",
        help="Path to an AL source file to execute.",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log loads and function calls to stderr.",
    )
    parser.add_argument(
        "--max-steps",
        type=int,
        default=None,
        metavar="N",
        help="Abort after N executed statements (default: $AL_MAX_STEPS, or unlimited).",
    )
    parser.add_argument(
        "--ext",
        default=DEFAULT_EXTENSION,
        help=f"Extension appended to names given to 'load' (default: {DEFAULT_EXTENSION}).",
    )
    return parser


def debug_print_tokens_ast(tokens, ast):
    """
    Print tokenized source and AST
    """
    print("\nTokens:\n")
    print(tokens)
    print("\nAST:\n")
    print(ast)
    print(" ")


def report(e: Exception):
    """
    Print an error after any output the program already produced.
    """
    sys.stdout.flush()
    print(f"{type(e).__name__}: {e}", file=sys.stderr)


def run_script(script_name: str, max_steps: int | None = None,
               extension: str = DEFAULT_EXTENSION) -> int:
    """
    Run an AL script and return the process exit status.
    """
    try:
        with open(script_name, "r", encoding="utf-8") as f:
            code = f.read()
    except (OSError, UnicodeDecodeError) as e:
        report(e)
        return EXIT_IO_ERROR

    script_path = os.path.normpath(os.path.abspath(script_name))
    interpreter = Interpreter(
        script_name,
        loader=FileLoader.for_script(script_name, extension),
        max_steps=max_steps,
        loading={script_path},
    )

    try:
        tokens, token_map_literals = tokenize(code, script_name)
        parser = Parser(tokens, token_map_literals, script_name)
        ast = parser.parse()

        if os.environ.get('ALDEBUG'):
            debug_print_tokens_ast(tokens, ast)

        interpreter.execute(ast)
    except ParseException as e:
        report(e)
        return EXIT_SYNTAX_ERROR
    except LoadException as e:
        report(e)
        return EXIT_IO_ERROR
    except ALRuntimeException as e:
        report(e)
        return EXIT_RUNTIME_ERROR
    return EXIT_OK


def run_repl(max_steps: int | None = None, extension: str = DEFAULT_EXTENSION):
    """
    Run the interactive REPL
    """
    print("AL Language Interpreter - REPL")
    print("Type `exit` or `quit` to leave.")
    interpreter = Interpreter(
        "<stdin>",
        loader=FileLoader(os.getcwd(), extension),
        max_steps=max_steps,
    )
    buffer: list[str] = []
    while True:
        try:
            prompt = ">>> " if not buffer else "... "
            line = input(prompt)
            if not buffer and line.strip() in {"exit", "quit"}:
                break
            buffer.append(line)
            source = "\n".join(buffer)
            if not source.strip():
                buffer.clear()
                continue
            try:
                ast = interpreter.parse(source)
            except ParseException as e:
                # If the parser complains about reaching EOF, assume the input is incomplete
                if "EOF" in str(e):
                    continue
                report(e)
                buffer.clear()
                continue
            buffer.clear()
            try:
                interpreter.steps = 0
                interpreter.execute(ast)
            except (ParseException, LoadException, ALRuntimeException) as e:
                report(e)
        except KeyboardInterrupt:
            print("\nInterrupted.")
            break
        except EOFError:
            print()
            break


def main(argv: list[str]) -> int:
    """
    Entry point for the CLI.

    Behaviour:
    - No script: enter the REPL.
    - ``-h`` or ``--help``: print usage and exit.
    - A script path: run it and return its exit status.
    """
    args = build_arg_parser().parse_args(argv[1:])

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(levelname)s %(name)s: %(message)s",
            stream=sys.stderr,
        )

    max_steps = args.max_steps
    if max_steps is None and os.environ.get('AL_MAX_STEPS'):
        try:
            max_steps = int(os.environ['AL_MAX_STEPS'])
        except ValueError:
            print(f"Invalid AL_MAX_STEPS value: {os.environ['AL_MAX_STEPS']!r}", file=sys.stderr)
            return EXIT_USAGE

    if args.script is None:
        run_repl(max_steps, args.ext)
        return EXIT_OK
    return run_script(args.script, max_steps, args.ext)


def run():
    """
    Console-script entry point.
    """
    sys.exit(main(sys.argv))


if __name__ == "__main__":
    run()
