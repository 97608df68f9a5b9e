"""Predicates over ESTree syntax nodes."""

from __future__ import annotations

import re

from catchlint.models.syntax import Node

FUNCTION_TYPES = frozenset({"FunctionDeclaration", "FunctionExpression", "ArrowFunctionExpression"})
LOOP_TYPES = frozenset(
    {
        "DoWhileStatement",
        "ForStatement",
        "ForInStatement",
        "ForOfStatement",
        "WhileStatement",
    }
)
STATEMENT_TYPE = re.compile(r"(?:Statement|Declaration)$")


def is_function(node: Node | None) -> bool:
    """Check whether a node is a function declaration or expression (arrows included)."""
    return node is not None and node.type in FUNCTION_TYPES


def is_loop(node: Node | None) -> bool:
    return node is not None and node.type in LOOP_TYPES


def is_statement(node: Node | None) -> bool:
    """Check whether a node is a statement or a declaration."""
    return node is not None and STATEMENT_TYPE.search(node.type) is not None


def is_in_loop(node: Node) -> bool:
    """Check whether a node sits inside a loop, without crossing a function boundary."""
    current: Node | None = node
    while current is not None and not is_function(current):
        if is_loop(current):
            return True
        current = current.parent
    return False


def get_upper_function(node: Node) -> Node | None:
    """Return the nearest function node enclosing ``node`` (or ``node`` itself)."""
    current: Node | None = node
    while current is not None:
        if is_function(current):
            return current
        current = current.parent
    return None


def is_inside(inner: Node, outer: Node) -> bool:
    """Check whether ``inner``'s range nests inside ``outer``'s range."""
    return outer.contains(inner)


def is_unused_expression(node: Node) -> bool:
    """
    Check whether the value of an expression is discarded.

    That is the case for a bare expression statement, and for any element
    of a sequence expression except the last one. The last element inherits
    the verdict of the sequence itself.
    """
    current = node
    while True:
        parent = current.parent
        if parent is None:
            return False

        if parent.type == "ExpressionStatement":
            return True

        if parent.type == "SequenceExpression":
            expressions = parent.expressions
            if expressions[-1] is not current:
                return True
            current = parent
            continue

        return False
