import math

import pytest

from stepwise.builtin.env_builtin import to_number, is_false, divide
from stepwise.interpreter import Interpreter
from stepwise.types.symbol import Symbol


def eval_text(source: str, definitions: str = "") -> str:
    interp = Interpreter(strict=False)
    result = interp.run(definitions, source)
    assert result.ok, result.format_error()
    return result.text


@pytest.mark.parametrize(
    "source,expected",
    [
        ("(+ 1 2)", "3"),
        ("(- 10 3)", "7"),
        ("(* 2 3)", "6"),
        ("(/ 12 3)", "4"),
        ("(/ 1 4)", "0.25"),
        ("(+ 1.5 1)", "2.5"),
        ("(+ (* 2 3) (- 10 4))", "12"),
        ("(/ (* (+ 8 2) 5) (- 20 10))", "5"),
        ("(+ -1 5)", "4"),
        ("(< 1 2)", "#t"),
        ("(> 1 2)", "#f"),
        ("(>= 2 2)", "#t"),
        ("(<= 3 2)", "#f"),
        ("(== 2 2)", "#t"),
        ("(= 2 3)", "#f"),
        ("(not #f)", "#t"),
        ("(not ())", "#t"),
        ("(not 0)", "#f"),
        ("(not #t)", "#f"),
    ]
)
def test_operators(source, expected):
    assert eval_text(source) == expected


def test_operators_are_binary():
    # Operands after the second are ignored
    assert eval_text("(+ 1 2 3)") == "3"


@pytest.mark.parametrize(
    "source,expected",
    [
        ('(+ 1 "2")', "3"),
        ('(+ "3abc" 1)', "4"),
        ('(+ 1 "abc")', "NaN"),
        ("(+ 1 #t)", "NaN"),
        ("(- 5)", "NaN"),
        ("(* (+ 1 unknown) 2)", "NaN"),
        ('(< "x" 1)', "#f"),
        ('(== "x" "x")', "#f"),
    ]
)
def test_non_numeric_operands_become_nan(source, expected):
    assert eval_text(source) == expected


@pytest.mark.parametrize(
    "source,expected",
    [
        ("(/ 1 0)", "Infinity"),
        ("(/ -1 0)", "-Infinity"),
        ("(/ 0 0)", "NaN"),
    ]
)
def test_division_by_zero_does_not_raise(source, expected):
    assert eval_text(source) == expected


@pytest.mark.parametrize(
    "source,expected",
    [
        ("(sqrt 16)", "4"),
        ("(floor 2.7)", "2"),
        ("(ceil 2.1)", "3"),
        ("(pow 2 10)", "1024"),
        ("(hypot 3 4)", "5"),
        ("(factorial 5)", "120"),
        ("(fabs -3.5)", "3.5"),
        ("(log2 8)", "3"),
        ("(log 1)", "0"),
        ("(isnan (/ 0 0))", "#t"),
        ("(sqrt -1)", "NaN"),
        ("(sqrt)", "NaN"),
        ("(frexp 8)", "(0.5 4)"),
    ]
)
def test_math_library(source, expected):
    assert eval_text(source) == expected


def test_math_arity_drops_extra_arguments():
    assert eval_text("(sqrt 9 100)") == "3"


@pytest.mark.parametrize(
    "value,expected",
    [
        (2.0, 2.0),
        ("12px", 12.0),
        ("  -3.5e1", -35.0),
        ("Infinity", math.inf),
    ]
)
def test_to_number(value, expected):
    assert to_number(value) == expected


@pytest.mark.parametrize("value", [True, False, "abc", Symbol("x"), [1.0], None])
def test_to_number_nan(value):
    assert math.isnan(to_number(value))


def test_is_false():
    assert is_false(False)
    assert is_false([])
    assert not is_false(0.0)
    assert not is_false("")
    assert not is_false([False])


def test_divide_signs():
    assert divide(3.0, -0.0) == -math.inf
    assert divide(6.0, 3.0) == 2.0
