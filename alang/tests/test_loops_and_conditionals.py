"""
Tests for while loops, if statements and comparisons in AL Language.
"""
import pytest

from alang.exceptions import ExecutionLimitException, TypeMismatchException
from alang.interpreter import Interpreter
from alang.nodes import Node

from alang.tests.utils import parse_source, run_source


def test_loop_runs_until_condition_fails():
    """
    Test that the body runs exactly three times and leaves ``x == 3``.
    """
    interpreter = run_source(
        "x = 0;\n"
        "n = 0;\n"
        "while (x < 3) {\n"
        "    x = x + 1;\n"
        "    n = n + 1;\n"
        "}\n"
    )
    assert interpreter.vars['x'] == 3
    assert interpreter.vars['n'] == 3


def test_loop_with_false_condition_never_runs(capsys):
    """
    Test that the condition is checked before the first pass.
    """
    run_source('x = 5;\nwhile (x < 3) { println("never"); }\nprintln("done");\n')
    assert capsys.readouterr().out == "done\n"


def test_if_runs_block_once(capsys):
    """
    Test that an if block runs only when its comparison holds.
    """
    run_source(
        "x = 2;\n"
        'if (x == 2) { println("two"); }\n'
        'if (x > 2) { println("big"); }\n'
    )
    assert capsys.readouterr().out == "two\n"


def test_nested_control_flow(capsys):
    """
    Test conditionals nested inside a loop.
    """
    run_source(
        "i = 1;\n"
        "while (i <= 5) {\n"
        '    if (i == 3) { println("three"); }\n'
        "    if (i != 3) { println(i); }\n"
        "    i = i + 1;\n"
        "}\n"
    )
    assert capsys.readouterr().out.splitlines() == ['1', '2', 'three', '4', '5']


@pytest.mark.parametrize("comparison, expected", [
    ("1 == 1", True),
    ("1 != 1", False),
    ("2 > 1", True),
    ("2 >= 2", True),
    ("1 < 1", False),
    ("1 <= 1", True),
    ("0.1 + 0.2 > 0.3", True),
])
def test_numeric_comparisons(capsys, comparison, expected):
    """
    Test each comparator over numbers.
    """
    run_source(f'if ({comparison}) {{ println("yes"); }}')
    assert (capsys.readouterr().out == "yes\n") is expected


def test_string_equality(capsys):
    """
    Test that strings can be compared for equality and inequality.
    """
    run_source(
        's = "a";\n'
        'if (s == "a") { println("same"); }\n'
        'if (s != "b") { println("different"); }\n'
    )
    assert capsys.readouterr().out.splitlines() == ['same', 'different']


@pytest.mark.parametrize("comparison", [
    '"a" < "b"',
    '"1" == 1',
    '1 != "1"',
])
def test_unsupported_comparisons(comparison):
    """
    Test that string ordering and mixed comparisons are type errors.
    """
    with pytest.raises(TypeMismatchException):
        run_source(f"if ({comparison}) {{ x = 1; }}")


def test_array_comparison_is_a_type_error():
    """
    Test that whole arrays cannot be compared.
    """
    with pytest.raises(TypeMismatchException):
        run_source("a[] = 1;\nb[] = 1;\nif (a == b) { x = 1; }\n")


def test_step_budget_stops_runaway_loops():
    """
    Test that a loop whose condition never fails is stopped by ``max_steps``.
    """
    ast = parse_source("x = 0;\nwhile (x < 1) { y = 1; }\n")
    interpreter = Interpreter('<test>', max_steps=100)
    with pytest.raises(ExecutionLimitException) as excinfo:
        interpreter.execute(ast)
    assert "100 steps" in str(excinfo.value)


def test_step_budget_allows_terminating_programs():
    """
    Test that a budget large enough for the program changes nothing.
    """
    interpreter = run_source(
        "x = 0;\nwhile (x < 10) { x = x + 1; }\n",
        max_steps=1000,
    )
    assert interpreter.vars['x'] == 10


def test_nesting_past_the_stack_is_an_execution_limit():
    """
    Test that statements nested deeper than Python's stack fail with an AL error.
    """
    block = (Node.ASSIGN, 'x', (Node.LITERAL, 1.0, 1), 1)
    for _ in range(3000):
        block = (Node.BLOCK, [block], 1)
    interpreter = Interpreter('<test>')
    with pytest.raises(ExecutionLimitException) as excinfo:
        interpreter.execute([block])
    assert "depth exceeded" in str(excinfo.value)
