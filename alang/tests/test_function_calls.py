"""
Tests for function definitions, calls and the print built-ins in AL Language.
"""
import io
import logging

import pytest

from alang.exceptions import (
    ArityMismatchException,
    ExecutionLimitException,
    UndefinedFunctionException,
)

from alang.tests.utils import run_source


def test_call_with_arguments(capsys):
    """
    Test that a defined function runs with its parameter bound.
    """
    run_source(
        'greet(name) => { println("Hello, ", name); }\n'
        'greet("World");\n'
    )
    assert capsys.readouterr().out == "Hello, World\n"


def test_zero_parameter_function(capsys):
    """
    Test that a function without parameters is called with no arguments.
    """
    run_source('hello() => { println("hi"); }\nhello();\nhello();\n')
    assert capsys.readouterr().out == "hi\nhi\n"


def test_arity_mismatch():
    """
    Test that a call with the wrong number of arguments fails.
    """
    with pytest.raises(ArityMismatchException) as excinfo:
        run_source('hello() => { println("hi"); }\nhello(1);\n')
    assert excinfo.value.name == 'hello'
    assert excinfo.value.expected == 0
    assert excinfo.value.received == 1
    assert excinfo.value.line == 2


def test_arity_is_checked_before_arguments_are_evaluated():
    """
    Test that a miscounted call reports the arity, not an undefined argument.
    """
    with pytest.raises(ArityMismatchException):
        run_source("f(a) => { x = a; }\nf(u, v);\n")


def test_parameters_and_assignments_are_global(capsys):
    """
    Test that parameters and variables set inside a call remain after it returns.
    """
    interpreter = run_source(
        "keep(v) => { y = v * 2; }\n"
        "keep(5);\n"
        "println(v, \" \", y);\n"
    )
    assert capsys.readouterr().out == "5 10\n"
    assert interpreter.vars['v'] == 5
    assert interpreter.vars['y'] == 10


def test_function_sees_globals_at_call_time(capsys):
    """
    Test that a function body reads the current global values.
    """
    run_source(
        "show() => { println(x); }\n"
        "x = 1;\n"
        "show();\n"
        "x = 2;\n"
        "show();\n"
    )
    assert capsys.readouterr().out == "1\n2\n"


def test_undefined_function():
    """
    Test that calling an unknown name fails.
    """
    with pytest.raises(UndefinedFunctionException) as excinfo:
        run_source("nope();")
    assert excinfo.value.name == 'nope'


def test_functions_and_variables_have_separate_namespaces(capsys):
    """
    Test that a function and a variable may share a name.
    """
    interpreter = run_source("f = 1;\nf() => { println(f); }\nf();\n")
    assert capsys.readouterr().out == "1\n"
    assert 'f' in interpreter.functions
    assert interpreter.vars['f'] == 1


def test_redefinition_replaces_function(capsys):
    """
    Test that a later definition wins.
    """
    run_source(
        'f() => { println("old"); }\n'
        'f() => { println("new"); }\n'
        "f();\n"
    )
    assert capsys.readouterr().out == "new\n"


def test_definition_does_not_run_body(capsys):
    """
    Test that defining a function has no visible effect.
    """
    run_source('f() => { println("body"); }\nx = 1;\n')
    assert capsys.readouterr().out == ""


def test_recursion(capsys):
    """
    Test a recursive countdown through a temporary variable.
    """
    run_source(
        "down(n) => {\n"
        "    if (n > 0) {\n"
        "        println(n);\n"
        "        m = n - 1;\n"
        "        down(m);\n"
        "    }\n"
        "}\n"
        "down(3);\n"
    )
    assert capsys.readouterr().out.splitlines() == ['3', '2', '1']


def test_unbounded_recursion_is_stopped():
    """
    Test that runaway recursion ends in an execution limit error.
    """
    with pytest.raises(ExecutionLimitException) as excinfo:
        run_source("f() => { f(); }\nf();\n")
    assert "depth exceeded" in str(excinfo.value)


def test_print_spellings(capsys):
    """
    Test that both capitalisations of the built-ins behave the same.
    """
    run_source('Print("a");\nprint("b");\nPrintln("c");\nprintln("d");\n')
    assert capsys.readouterr().out == "abc\nd\n"


def test_print_concatenates_arguments(capsys):
    """
    Test that arguments are written back to back with no separator.
    """
    run_source('x = 3;\nprintln("x=", x, "!", 1.5);\nprintln();\n')
    assert capsys.readouterr().out == "x=3!1.5\n\n"


def test_print_to_custom_stream():
    """
    Test that output can be redirected to any text stream.
    """
    stream = io.StringIO()
    run_source('print("to ");\nprintln("stream");\n', output=stream)
    assert stream.getvalue() == "to stream\n"


def test_calls_are_logged(caplog):
    """
    Test that user function calls are logged at debug level.
    """
    caplog.set_level(logging.DEBUG, logger="alang")
    run_source("f(a) => { x = a; }\nf(1);\n")
    assert any("Calling f with 1 argument(s)" in r.getMessage() for r in caplog.records)
