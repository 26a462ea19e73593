"""
Tests for the ``al`` command-line front end.
"""
import builtins
from pathlib import Path

import pytest

from al import (
    EXIT_IO_ERROR,
    EXIT_OK,
    EXIT_RUNTIME_ERROR,
    EXIT_SYNTAX_ERROR,
    EXIT_USAGE,
    main,
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.delenv('ALDEBUG', raising=False)
    monkeypatch.delenv('AL_MAX_STEPS', raising=False)


def write_script(tmp_path: Path, source: str) -> str:
    script = tmp_path / "main.al"
    script.write_text(source)
    return str(script)


def fake_input(monkeypatch, lines):
    """Feed ``lines`` to the REPL, then signal end of input."""
    remaining = iter(lines)

    def _input(prompt=""):
        try:
            return next(remaining)
        except StopIteration:
            raise EOFError from None

    monkeypatch.setattr(builtins, 'input', _input)


def test_run_script(tmp_path: Path, capsys):
    script = write_script(tmp_path, 'x = 2 ^ 3;\nprintln("x = ", x);\n')
    assert main(['al', script]) == EXIT_OK
    assert capsys.readouterr().out == "x = 8\n"


def test_script_with_load(tmp_path: Path, capsys):
    (tmp_path / "defs.al").write_text('hi() => { println("hi"); }\n')
    script = write_script(tmp_path, "load defs;\nhi();\n")
    assert main(['al', script]) == EXIT_OK
    assert capsys.readouterr().out == "hi\n"


def test_syntax_error_runs_nothing(tmp_path: Path, capsys):
    """
    Test that a syntax error anywhere stops the program before it starts.
    """
    script = write_script(tmp_path, 'println("first");\nx = ;\n')
    assert main(['al', script]) == EXIT_SYNTAX_ERROR
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "ParseException" in captured.err
    assert "line 2" in captured.err


def test_runtime_error_keeps_output(tmp_path: Path, capsys):
    script = write_script(tmp_path, 'println("before");\nx = y;\n')
    assert main(['al', script]) == EXIT_RUNTIME_ERROR
    captured = capsys.readouterr()
    assert captured.out == "before\n"
    assert "UndefinedVariableException: Undefined variable 'y' on line 2" in captured.err


def test_missing_script(tmp_path: Path, capsys):
    assert main(['al', str(tmp_path / "nothere.al")]) == EXIT_IO_ERROR
    assert capsys.readouterr().err


def test_failed_load(tmp_path: Path, capsys):
    script = write_script(tmp_path, "load nothere;\n")
    assert main(['al', script]) == EXIT_IO_ERROR
    assert "LoadException" in capsys.readouterr().err


def test_self_load_is_recursive(tmp_path: Path, capsys):
    script = write_script(tmp_path, "load main;\n")
    assert main(['al', script]) == EXIT_IO_ERROR
    assert "recursive load" in capsys.readouterr().err


def test_max_steps_option(tmp_path: Path, capsys):
    script = write_script(tmp_path, "x = 0;\nwhile (x < 1) { y = 1; }\n")
    assert main(['al', '--max-steps', '50', script]) == EXIT_RUNTIME_ERROR
    assert "ExecutionLimitException" in capsys.readouterr().err


def test_max_steps_from_environment(tmp_path: Path, monkeypatch, capsys):
    monkeypatch.setenv('AL_MAX_STEPS', '50')
    script = write_script(tmp_path, "x = 0;\nwhile (x < 1) { y = 1; }\n")
    assert main(['al', script]) == EXIT_RUNTIME_ERROR
    assert "50 steps" in capsys.readouterr().err


def test_invalid_max_steps_environment(tmp_path: Path, monkeypatch, capsys):
    monkeypatch.setenv('AL_MAX_STEPS', 'lots')
    script = write_script(tmp_path, "x = 1;\n")
    assert main(['al', script]) == EXIT_USAGE
    assert "AL_MAX_STEPS" in capsys.readouterr().err


def test_custom_extension(tmp_path: Path, capsys):
    (tmp_path / "defs.src").write_text("v = 7;\n")
    script = write_script(tmp_path, "load defs;\nprintln(v);\n")
    assert main(['al', '--ext', '.src', script]) == EXIT_OK
    assert capsys.readouterr().out == "7\n"


def test_debug_dump(tmp_path: Path, monkeypatch, capsys):
    monkeypatch.setenv('ALDEBUG', '1')
    script = write_script(tmp_path, "x = 1;\n")
    assert main(['al', script]) == EXIT_OK
    out = capsys.readouterr().out
    assert "Tokens:" in out
    assert "AST:" in out


def test_bad_usage(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(['al', '--max-steps', 'many', 'x.al'])
    assert excinfo.value.code == EXIT_USAGE


def test_repl_continues_incomplete_input(monkeypatch, capsys):
    """
    Test that the REPL keeps reading until the statement is complete.
    """
    fake_input(monkeypatch, ['x = 1 +', '2;', 'println(x);', 'exit'])
    assert main(['al']) == EXIT_OK
    out = capsys.readouterr().out
    assert "AL Language Interpreter - REPL" in out
    assert "3\n" in out


def test_repl_survives_errors(monkeypatch, capsys):
    """
    Test that errors are reported and the session goes on with its state.
    """
    fake_input(monkeypatch, ['v = 4;', 'println(nothing);', 'x = ;', 'println(v);'])
    assert main(['al']) == EXIT_OK
    captured = capsys.readouterr()
    assert "UndefinedVariableException" in captured.err
    assert "ParseException" in captured.err
    assert "4\n" in captured.out


def test_long_expression_runs(tmp_path: Path, capsys):
    script = write_script(tmp_path, "x = " + " + ".join(["1"] * 1200) + ";\nprintln(x);\n")
    assert main(['al', script]) == EXIT_OK
    assert capsys.readouterr().out == "1200\n"


def test_deeply_nested_expression_is_a_syntax_error(tmp_path: Path, capsys):
    script = write_script(tmp_path, "x = " + "(" * 2000 + "1" + ")" * 2000 + ";\n")
    assert main(['al', script]) == EXIT_SYNTAX_ERROR
    assert "nested too deeply" in capsys.readouterr().err
