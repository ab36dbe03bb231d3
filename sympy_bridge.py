from sympy import Add, Function, Mul, Pow, Symbol, simplify

from nodes import ConstantNode, FunctionNode, OperatorNode, ParenthesisNode, SymbolNode


def to_sympy(node):
    """Convert an expression tree into the equivalent SymPy expression."""
    if isinstance(node, ConstantNode):
        return node.number
    if isinstance(node, SymbolNode):
        return Symbol(node.name)
    if isinstance(node, ParenthesisNode):
        return to_sympy(node.content)
    if isinstance(node, FunctionNode):
        return Function(node.name)(*[to_sympy(arg) for arg in node.args])
    if not isinstance(node, OperatorNode):
        raise TypeError(f"Cannot convert {type(node).__name__} to SymPy")

    args = [to_sympy(arg) for arg in node.args]
    if node.op == "+":
        return Add(*args)
    if node.op == "*":
        return Mul(*args)
    if node.op == "^":
        return Pow(*args)
    if node.op == "/":
        left, right = args
        return left / right
    # "-"
    if len(args) == 1:
        return -args[0]
    left, right = args
    return left - right


def equivalent(a, b) -> bool:
    """True if both trees simplify to the same value."""
    return simplify(to_sympy(a) - to_sympy(b)) == 0
