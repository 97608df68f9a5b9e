"""Detection of function values that escape a self-assignment.

A read inside ``err = wrap(function () { log(err); })`` is not merely
recomputing ``err``: the function is handed to ``wrap`` and may run later,
so the read is a real use. Each step outward from the function is mapped to
one of a closed set of shapes, and the shape decides the verdict.
"""

from __future__ import annotations

from enum import Enum, auto

from catchlint.analysis.ast_utils import get_upper_function, is_inside, is_statement
from catchlint.models.syntax import Node


class ClosureShape(Enum):
    """How the value flowing out of ``node`` is consumed by its parent."""

    SEQUENCE_INNER = auto()  # discarded element of `(a, b)`
    SEQUENCE_LAST = auto()  # value of the whole sequence
    CALLEE = auto()  # invoked immediately
    CALL_ARGUMENT = auto()  # passed to another call
    ASSIGNED = auto()
    TAGGED_TEMPLATE = auto()
    YIELDED = auto()
    STATEMENT = auto()  # too complex to follow
    TRANSPARENT = auto()  # keep walking outward


def classify_step(node: Node, parent: Node) -> ClosureShape:
    """Classify how ``parent`` consumes the value of its child ``node``."""
    match parent.type:
        case "SequenceExpression":
            if parent.expressions[-1] is node:
                return ClosureShape.SEQUENCE_LAST
            return ClosureShape.SEQUENCE_INNER
        case "CallExpression" | "NewExpression":
            if parent.callee is node:
                return ClosureShape.CALLEE
            return ClosureShape.CALL_ARGUMENT
        case "AssignmentExpression":
            return ClosureShape.ASSIGNED
        case "TaggedTemplateExpression":
            return ClosureShape.TAGGED_TEMPLATE
        case "YieldExpression":
            return ClosureShape.YIELDED
        case _ if is_statement(parent):
            return ClosureShape.STATEMENT
        case _:
            return ClosureShape.TRANSPARENT


def is_storable_function(func_node: Node, rhs_node: Node) -> bool:
    """
    Check whether a function inside ``rhs_node`` may be kept for later.

    Walks from the function outward while staying inside ``rhs_node``.
    """
    node = func_node
    parent = func_node.parent

    while parent is not None and is_inside(parent, rhs_node):
        match classify_step(node, parent):
            case ClosureShape.SEQUENCE_INNER | ClosureShape.CALLEE:
                return False
            case (
                ClosureShape.CALL_ARGUMENT
                | ClosureShape.ASSIGNED
                | ClosureShape.TAGGED_TEMPLATE
                | ClosureShape.YIELDED
                | ClosureShape.STATEMENT
            ):
                return True
            case ClosureShape.SEQUENCE_LAST | ClosureShape.TRANSPARENT:
                pass

        node = parent
        parent = parent.parent

    return False


def is_inside_of_storable_function(identifier: Node, rhs_node: Node) -> bool:
    """Check whether ``identifier`` is read inside a storable function within ``rhs_node``."""
    func_node = get_upper_function(identifier)
    return (
        func_node is not None
        and is_inside(func_node, rhs_node)
        and is_storable_function(func_node, rhs_node)
    )
