# File: tests/test_parser.py

import pytest
from expr_parser import ExpressionSyntaxError, parse
from nodes import (
    constant,
    is_operator,
    is_parenthesis,
    is_unary_minus,
    operator,
    print_node,
    symbol,
)

# ─── 1) Parse then print ───────────────────────────────────────────────────────

@pytest.mark.parametrize("src, expected", [
    ("x + 3 + x + 2",   "x + 3 + x + 2"),
    ("x - y",           "x - y"),
    ("2*x**2 + x",      "2 * x^2 + x"),
    ("2*x^2 + x",       "2 * x^2 + x"),
    ("x + (a + b)",     "x + (a + b)"),
    ("x - (a + b)",     "x - (a + b)"),
    ("(x + y) * 2",     "(x + y) * 2"),
    ("x / (2 * y)",     "x / (2 * y)"),
    ("(x^2)^3",         "(x^2)^3"),
    ("x^2^3",           "x^2^3"),
    ("(-x)^2",          "(-x)^2"),
    ("-x^2",            "-x^2"),
    ("-(a + b)",        "-(a + b)"),
    ("sin(x) + 1",      "sin(x) + 1"),
    ("2.5 * x",         "2.5 * x"),
    ("+x",              "x"),
])
def test_round_trip(src, expected):
    assert print_node(parse(src)) == expected


def test_print_implicit_multiplication():
    assert print_node(operator("*", [constant(2), symbol("x")], implicit=True)) == "2x"
    term = operator("*", [constant(3), operator("^", [symbol("x"), constant(2)])],
                    implicit=True)
    assert str(term) == "3x^2"


# ─── 2) Flattening ─────────────────────────────────────────────────────────────

def test_sums_are_flattened():
    node = parse("a + b + c + d")
    assert is_operator(node, "+")
    assert [str(arg) for arg in node.args] == ["a", "b", "c", "d"]


def test_products_are_flattened():
    node = parse("a * b * c")
    assert is_operator(node, "*")
    assert len(node.args) == 3


def test_subtraction_becomes_addition():
    node = parse("a - b + c")
    assert is_operator(node, "+")
    assert len(node.args) == 3
    assert is_unary_minus(node.args[1])


def test_required_parentheses_are_kept():
    node = parse("x + (a + b) + x")
    assert len(node.args) == 3
    assert is_parenthesis(node.args[1])


def test_mixed_operators_not_flattened():
    node = parse("2 * x + 3")
    assert is_operator(node, "+")
    assert is_operator(node.args[0], "*")


# ─── 3) Errors ─────────────────────────────────────────────────────────────────

@pytest.mark.parametrize("src", [
    "x +",
    "x < y",
    "'a' + x",
    "True + x",
    "x % 2",
    "not x",
    "f(x=1)",
    "a.b + 1",
])
def test_syntax_errors(src):
    with pytest.raises(ExpressionSyntaxError):
        parse(src)
