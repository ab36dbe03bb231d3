import copy
import logging
from enum import Enum
from typing import NamedTuple, Optional

from nodes import (
    clone,
    is_constant,
    is_constant_fraction,
    is_operator,
    operator,
    parenthesis,
    unwrap_parens,
)
from polynomial_term import PolynomialTerm
from status import ChangeType, Status

logger = logging.getLogger(__name__)

COLLECTABLE_OPS = ("+", "*")


class CollectError(Exception):
    """Base class for errors raised while collecting like terms."""


class UnsupportedOperationError(CollectError):
    """Classification was asked for an operator other than + or *."""

    def __init__(self, op):
        super().__init__(f"Operation not supported: {op}")
        self.op = op


class TermCategory(Enum):
    CONSTANT = "constant"
    CONSTANT_FRACTION = "constantFraction"
    SYMBOL = "symbol"
    OTHER = "other"


class TermKey(NamedTuple):
    category: TermCategory
    name: Optional[str] = None

    def __str__(self):
        return self.name if self.category is TermCategory.SYMBOL else self.category.value


CONSTANT = TermKey(TermCategory.CONSTANT)
CONSTANT_FRACTION = TermKey(TermCategory.CONSTANT_FRACTION)
OTHER = TermKey(TermCategory.OTHER)


def _term_key(child, op: str) -> TermKey:
    node = unwrap_parens(child)
    if is_constant(node, allow_unary_minus=True):
        return CONSTANT
    if is_constant_fraction(node, allow_unary_minus=True):
        return CONSTANT_FRACTION

    term = PolynomialTerm.recognize(node)
    if term is None:
        return OTHER
    # under * only bare x or x^n are factors of x; 3*x is its own factor
    if op == "*" and (term.has_coefficient() or term.negative):
        return OTHER
    # the exponent is left out on purpose: x and x^2 land in the same bucket
    return TermKey(TermCategory.SYMBOL, term.symbol_name)


def classify(node, op: str = None) -> dict:
    """
    Bucket the children of a flattened + or * node by term key.

    Returns {TermKey: [child, ...]} with keys in first-seen order and
    children in their original left-to-right order.
    """
    op = op or getattr(node, "op", None)
    if op not in COLLECTABLE_OPS:
        raise UnsupportedOperationError(op)

    terms = {}
    for child in node.args:
        terms.setdefault(_term_key(child, op), []).append(child)

    logger.debug("classified %s: %s", node,
                 {str(key): len(members) for key, members in terms.items()})
    return terms


def can_collect(node) -> bool:
    """
    True if collecting would regroup something: there is more than one kind
    of term, and some kind other than OTHER occurs more than once.
    """
    if not any(is_operator(node, op) for op in COLLECTABLE_OPS):
        return False

    terms = classify(node, node.op)
    return len(terms) > 1 and any(
        len(members) > 1 for key, members in terms.items() if key != OTHER
    )


def _ordered_keys(terms: dict, op: str) -> list:
    keys = sorted(
        (key for key in terms if key.category is TermCategory.SYMBOL),
        key=lambda key: key.name,
    )
    if CONSTANT in terms:
        # 2 * 3 * x^2, but x^2 + x + 5
        if op == "*":
            keys.insert(0, CONSTANT)
        else:
            keys.append(CONSTANT)
    if CONSTANT_FRACTION in terms:
        keys.append(CONSTANT_FRACTION)
    return keys


def collect(node) -> Status:
    """
    Group like terms of a + or * node, e.g. `2 + x + 3 + x` -> `(x + x) + (2 + 3)`.

    Every collected input term, and the output node built from its group,
    is recorded in the returned Status' `groups` under the same group id.
    Terms that fit no group (OTHER) are appended last, as they are.
    """
    if not can_collect(node):
        return Status.no_change(node)

    op = node.op
    terms = classify(node, op)

    groups = {}
    new_args = []
    for group_id, key in enumerate(_ordered_keys(terms, op), start=1):
        members = terms[key]
        if len(members) == 1:
            new_arg = clone(members[0])
        else:
            new_arg = clone(parenthesis(operator(op, members)))
            for copied in new_arg.content.args:
                groups[copied] = group_id
        groups[new_arg] = group_id
        for member in members:
            groups[member] = group_id
        new_args.append(new_arg)

    new_args.extend(terms.get(OTHER, []))

    new_node = copy.copy(node)
    new_node.args = new_args
    logger.debug("collected like terms: %s -> %s", node, new_node)
    return Status.node_changed(
        ChangeType.COLLECT_LIKE_TERMS, node, new_node, manual=False, groups=groups)
