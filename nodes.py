import copy
from sympy import Rational

OPERATORS = ("+", "*", "-", "/", "^")


class Node:
    """
    Base class for expression tree nodes.

    Nodes compare and hash by identity, so a node can key a side-table
    (see Status.groups) even though it is mutable.
    """

    def __str__(self):
        return print_node(self)

    def __repr__(self):
        return f"<{type(self).__name__} {self}>"


class OperatorNode(Node):
    def __init__(self, op: str, args: list, implicit: bool = False):
        if op not in OPERATORS:
            raise ValueError(f"Unknown operator: {op!r}")
        self.op = op
        self.args = list(args)
        self.implicit = implicit


class ParenthesisNode(Node):
    def __init__(self, content: Node):
        self.content = content


class ConstantNode(Node):
    """An exact integer or decimal literal, kept as its source text."""

    def __init__(self, value):
        self.value = str(value)

    @property
    def number(self) -> Rational:
        return Rational(self.value)


class SymbolNode(Node):
    def __init__(self, name: str):
        self.name = name


class FunctionNode(Node):
    def __init__(self, name: str, args: list):
        self.name = name
        self.args = list(args)


# ─── Constructors ──────────────────────────────────────────────────────────────

def operator(op: str, args, implicit: bool = False) -> OperatorNode:
    return OperatorNode(op, args, implicit)


def parenthesis(content: Node) -> ParenthesisNode:
    return ParenthesisNode(content)


def constant(value) -> ConstantNode:
    return ConstantNode(value)


def symbol(name: str) -> SymbolNode:
    return SymbolNode(name)


def function(name: str, args) -> FunctionNode:
    return FunctionNode(name, args)


def unary_minus(arg: Node) -> OperatorNode:
    return OperatorNode("-", [arg])


def clone(node: Node) -> Node:
    """Independent deep copy; shares nothing with `node`."""
    return copy.deepcopy(node)


# ─── Predicates ────────────────────────────────────────────────────────────────

def is_operator(node, op: str = None) -> bool:
    return isinstance(node, OperatorNode) and (op is None or node.op == op)


def is_unary_minus(node) -> bool:
    return is_operator(node, "-") and len(node.args) == 1


def is_parenthesis(node) -> bool:
    return isinstance(node, ParenthesisNode)


def is_symbol(node) -> bool:
    return isinstance(node, SymbolNode)


def is_constant(node, allow_unary_minus: bool = False) -> bool:
    if allow_unary_minus and is_unary_minus(node):
        return isinstance(node.args[0], ConstantNode)
    return isinstance(node, ConstantNode)


def is_constant_fraction(node, allow_unary_minus: bool = False) -> bool:
    """
    True for a division of two numeric literals, e.g. 2/3. With
    `allow_unary_minus`, -(2/3), -2/3 and 2/-3 count too.
    """
    if allow_unary_minus and is_unary_minus(node):
        node = node.args[0]
    return (
        is_operator(node, "/")
        and len(node.args) == 2
        and all(is_constant(arg, allow_unary_minus) for arg in node.args)
    )


def unwrap_parens(node: Node) -> Node:
    while is_parenthesis(node):
        node = node.content
    return node


# ─── Printing ──────────────────────────────────────────────────────────────────

UNARY = "neg"
PRECEDENCE = {"+": 1, "-": 1, "*": 2, "/": 2, UNARY: 3, "^": 4}


def precedence(node) -> int:
    if isinstance(node, OperatorNode):
        return PRECEDENCE[UNARY] if is_unary_minus(node) else PRECEDENCE[node.op]
    # leaves, parentheses and calls never need extra parens
    return 10


def _wrap(node, min_precedence: int) -> str:
    text = print_node(node)
    if precedence(node) < min_precedence:
        return f"({text})"
    return text


def print_node(node) -> str:
    """
    Render a tree in infix form, e.g. `x^2 + (x + x) - 3`.
    Only ParenthesisNodes and operator precedence produce parentheses.
    """
    if isinstance(node, ConstantNode):
        return node.value
    if isinstance(node, SymbolNode):
        return node.name
    if isinstance(node, ParenthesisNode):
        return f"({print_node(node.content)})"
    if isinstance(node, FunctionNode):
        return f"{node.name}({', '.join(print_node(a) for a in node.args)})"
    if not isinstance(node, OperatorNode):
        raise TypeError(f"Cannot print {type(node).__name__}")

    if is_unary_minus(node):
        return "-" + _wrap(node.args[0], PRECEDENCE["*"])

    prec = PRECEDENCE[node.op]
    if node.op == "+":
        parts = [_wrap(node.args[0], prec)]
        for arg in node.args[1:]:
            if is_unary_minus(arg):
                parts.append(" - " + _wrap(arg.args[0], PRECEDENCE["*"]))
            else:
                parts.append(" + " + _wrap(arg, prec))
        return "".join(parts)

    if node.op == "*" and node.implicit:
        return "".join(_wrap(arg, prec + 1) for arg in node.args)

    if node.op == "^":
        # right-associative: the base needs parens at equal precedence
        left, right = node.args
        return f"{_wrap(left, prec + 1)}^{_wrap(right, prec)}"

    if node.op in ("-", "/"):
        left, right = node.args
        return f"{_wrap(left, prec)} {node.op} {_wrap(right, prec + 1)}"

    return f" {node.op} ".join(_wrap(arg, prec) for arg in node.args)
