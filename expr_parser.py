import ast

import nodes
from nodes import PRECEDENCE, UNARY, precedence

BINOPS = {
    ast.Add: "+",
    ast.Sub: "-",
    ast.Mult: "*",
    ast.Div: "/",
    ast.Pow: "^",
}


class ExpressionSyntaxError(ValueError):
    """The text is not an expression this front-end understands."""


class ExpressionParser(ast.NodeVisitor):
    """
    Parses an expression string with Python's `ast` and builds an
    expression tree that is already flattened for collecting like terms:
      - `a + b + c` and `a * b * c` become single n-ary nodes
      - `a - b` becomes `a + -b`
      - parentheses the grammar required, e.g. `x + (a + b)`, are kept
    `^` is read as power.
    """

    def parse(self, source: str) -> nodes.Node:
        try:
            tree = ast.parse(source.replace("^", "**").strip(), mode="eval")
        except SyntaxError as exc:
            raise ExpressionSyntaxError(f"Cannot parse {source!r}: {exc.msg}") from exc
        return self.visit(tree.body)

    def generic_visit(self, node):
        raise ExpressionSyntaxError(f"Unsupported syntax: {ast.unparse(node)}")

    def visit_Constant(self, node: ast.Constant):
        if isinstance(node.value, bool) or not isinstance(node.value, (int, float)):
            raise ExpressionSyntaxError(f"Not a number: {node.value!r}")
        return nodes.constant(node.value)

    def visit_Name(self, node: ast.Name):
        return nodes.symbol(node.id)

    def visit_Call(self, node: ast.Call):
        if not isinstance(node.func, ast.Name) or node.keywords:
            raise ExpressionSyntaxError(f"Unsupported call: {ast.unparse(node)}")
        return nodes.function(node.func.id, [self.visit(arg) for arg in node.args])

    def visit_UnaryOp(self, node: ast.UnaryOp):
        if isinstance(node.op, ast.UAdd):
            return self.visit(node.operand)
        if not isinstance(node.op, ast.USub):
            raise ExpressionSyntaxError(f"Unsupported operator in {ast.unparse(node)}")
        return nodes.unary_minus(self._operand(node.operand, PRECEDENCE[UNARY]))

    def visit_BinOp(self, node: ast.BinOp):
        op = BINOPS.get(type(node.op))
        if op is None:
            raise ExpressionSyntaxError(f"Unsupported operator in {ast.unparse(node)}")
        prec = PRECEDENCE[op]

        if op == "+" or op == "-":
            args = self._flatten(node.left, "+", prec)
            right = self._operand(node.right, prec + 1)
            args.append(nodes.unary_minus(right) if op == "-" else right)
            return nodes.operator("+", args)

        if op == "*":
            args = self._flatten(node.left, "*", prec)
            args.append(self._operand(node.right, prec + 1))
            return nodes.operator("*", args)

        if op == "^":
            # right-associative
            return nodes.operator("^", [self._operand(node.left, prec + 1),
                                        self._operand(node.right, prec)])

        return nodes.operator(op, [self._operand(node.left, prec),
                                   self._operand(node.right, prec + 1)])

    def _flatten(self, node, op: str, prec: int) -> list:
        """Left operand of an n-ary op: splice in children of the same op."""
        child = self._operand(node, prec)
        if nodes.is_operator(child, op):
            return list(child.args)
        return [child]

    def _operand(self, node, min_precedence: int):
        """Visit `node`, keeping the parentheses it must have had in the source."""
        child = self.visit(node)
        if isinstance(node, (ast.BinOp, ast.UnaryOp)) and precedence(child) < min_precedence:
            return nodes.parenthesis(child)
        return child


def parse(source: str) -> nodes.Node:
    return ExpressionParser().parse(source)
