from nodes import (
    constant,
    is_constant,
    is_constant_fraction,
    is_operator,
    is_symbol,
    is_unary_minus,
    operator,
    unwrap_parens,
)


class PolynomialTerm:
    """
    A term of the form coefficient * symbol^exponent, where the coefficient
    and exponent may be absent, e.g. `x`, `x^2`, `3 * x`, `-2/3 * x^2`, `x / 4`.

    Only the symbol name matters for collecting like terms; the coefficient
    and exponent nodes are kept for callers that need them.
    """

    def __init__(self, symbol_name, exponent=None, coefficient=None, negative=False):
        self.symbol_name = symbol_name
        self.exponent = exponent
        self.coefficient = coefficient
        self.negative = negative

    @classmethod
    def recognize(cls, node):
        """Return a PolynomialTerm for `node`, or None if it is not one."""
        node = unwrap_parens(node)
        negative = False
        if is_unary_minus(node):
            negative = True
            node = unwrap_parens(node.args[0])

        base = _recognize_power(node)
        if base is not None:
            name, exponent = base
            return cls(name, exponent, None, negative)

        if is_operator(node, "*") and len(node.args) == 2:
            coefficient, body = node.args
            base = _recognize_power(unwrap_parens(body))
            if base is not None and _is_coefficient(coefficient):
                name, exponent = base
                return cls(name, exponent, coefficient, negative)

        # x / 4 is x with coefficient 1/4, 2*x / 3 is x with coefficient 2/3
        if is_operator(node, "/") and len(node.args) == 2:
            body, divisor = node.args
            term = cls.recognize(body) if is_constant(divisor) else None
            if term is not None:
                numerator = term.coefficient if term.has_coefficient() else constant(1)
                return cls(term.symbol_name, term.exponent,
                           operator("/", [numerator, divisor]),
                           negative != term.negative)

        return None

    def has_coefficient(self) -> bool:
        return self.coefficient is not None

    def __repr__(self):
        return (f"PolynomialTerm(symbol_name={self.symbol_name!r}, "
                f"exponent={self.exponent}, coefficient={self.coefficient}, "
                f"negative={self.negative})")


def _is_coefficient(node) -> bool:
    node = unwrap_parens(node)
    return is_constant(node, allow_unary_minus=True) or is_constant_fraction(node, True)


def _recognize_power(node):
    """(symbol name, exponent node or None) for `x` and `x^n`, n >= 0."""
    if is_symbol(node):
        return node.name, None
    if is_operator(node, "^") and len(node.args) == 2:
        base, exponent = node.args
        if is_symbol(base) and is_constant(exponent) and exponent.number >= 0:
            return base.name, exponent
    return None


def is_polynomial_term(node) -> bool:
    return PolynomialTerm.recognize(node) is not None
