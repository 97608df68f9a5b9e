"""Tracking of right-hand sides of pending self-assignments.

In ``err = err.toString()`` the read of ``err`` only feeds the new value of
``err``. Such reads do not count as handling the error unless something
reads the assignment target afterwards.
"""

from __future__ import annotations

from catchlint.analysis.ast_utils import is_in_loop, is_inside, is_unused_expression
from catchlint.analysis.closures import is_inside_of_storable_function
from catchlint.models.scope import Reference
from catchlint.models.syntax import Node


def can_be_used_later(ref: Reference) -> bool:
    """
    Check whether a write could be observed by code outside the current pass.

    That is the case when the reference lives in a different function than
    the declaration, or inside a loop where an earlier closure may see it.
    """
    ref_scope = ref.from_scope.variable_scope
    var_scope = ref.resolved.scope.variable_scope if ref.resolved else None
    return ref_scope is not var_scope or is_in_loop(ref.identifier)


def next_pending_rhs(ref: Reference, prev_rhs: Node | None) -> Node | None:
    """
    Return the right-hand side still pending after ``ref``.

    - ``prev_rhs`` when the reference lies inside it (``a = a + a``).
    - The right-hand side of ``a = <expr>;`` when ``ref`` is its target and
      the write cannot be used later.
    - ``None`` otherwise.
    """
    identifier = ref.identifier

    if prev_rhs is not None and is_inside(identifier, prev_rhs):
        return prev_rhs

    parent = identifier.parent
    grandparent = parent.parent if parent is not None else None
    if (
        parent is not None
        and grandparent is not None
        and parent.type == "AssignmentExpression"
        and grandparent.type == "ExpressionStatement"
        and parent.left is identifier
        and not can_be_used_later(ref)
    ):
        return parent.right

    return None


def is_self_update(ref: Reference) -> bool:
    """Check for `a += 1` or `a++` whose value is thrown away."""
    identifier = ref.identifier
    parent = identifier.parent
    if parent is None:
        return False

    if parent.type == "AssignmentExpression":
        return parent.left is identifier and is_unused_expression(parent)
    if parent.type == "UpdateExpression":
        return is_unused_expression(parent)
    return False


def is_read_for_itself(ref: Reference, rhs_node: Node | None) -> bool:
    """Check whether a read only serves to compute the variable's own new value."""
    if not ref.is_read():
        return False

    if is_self_update(ref):
        return True

    return (
        rhs_node is not None
        and is_inside(ref.identifier, rhs_node)
        and not is_inside_of_storable_function(ref.identifier, rhs_node)
    )
