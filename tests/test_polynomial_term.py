# File: tests/test_polynomial_term.py

import pytest
from expr_parser import parse
from nodes import parenthesis, symbol
from polynomial_term import PolynomialTerm, is_polynomial_term


@pytest.mark.parametrize("src, name, exponent, coefficient, negative", [
    ("x",            "x", None, None,   False),
    ("x^2",          "x", "2",  None,   False),
    ("3 * x",        "x", None, "3",    False),
    ("-2 * y^3",     "y", "3",  "-2",   False),
    ("2/3 * x",      "x", None, "2 / 3", False),
    ("x / 4",        "x", None, "1 / 4", False),
    ("-x / 4",       "x", None, "1 / 4", True),
    ("2*x/3",        "x", None, "2 / 3", False),
    ("3 * x^2 / 5",  "x", "2",  "3 / 5", False),
    ("-1/2 * x",     "x", None, "-1 / 2", False),
    ("-x",           "x", None, None,   True),
    ("-(3 * x^2)",   "x", "2",  "3",    True),
    ("x^0",          "x", "0",  None,   False),
    ("abc",          "abc", None, None, False),
])
def test_recognize(src, name, exponent, coefficient, negative):
    term = PolynomialTerm.recognize(parse(src))
    assert term is not None
    assert term.symbol_name == name
    assert (str(term.exponent) if term.exponent is not None else None) == exponent
    assert (str(term.coefficient) if term.has_coefficient() else None) == coefficient
    assert term.negative is negative


@pytest.mark.parametrize("src", [
    "x * y",
    "x^y",
    "x^-1",
    "2 * 3",
    "x + 1",
    "sin(x)",
    "2^x",
    "3",
    "x * 2",
    "y / x",
])
def test_not_a_polynomial_term(src):
    assert PolynomialTerm.recognize(parse(src)) is None
    assert not is_polynomial_term(parse(src))


def test_recognize_through_parentheses():
    term = PolynomialTerm.recognize(parenthesis(parenthesis(symbol("z"))))
    assert term.symbol_name == "z"
