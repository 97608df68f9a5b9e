"""Decide whether a variable is meaningfully read."""

from __future__ import annotations

from dataclasses import dataclass

from catchlint.analysis.rhs import is_read_for_itself, next_pending_rhs
from catchlint.models.scope import Reference, Variable
from catchlint.models.syntax import Node


@dataclass(frozen=True)
class UsageState:
    """Accumulator threaded through a variable's references in source order."""

    pending_rhs: Node | None = None
    used: bool = False


def is_for_in_ref(ref: Reference) -> bool:
    """
    Check for the loop variable of a ``for ... in`` whose body exits at once.

    ``for (err in obj) return;``, ``for (err in obj) { return; }``,
    ``for (err in obj) {}`` and ``for (err in obj);`` consume the binding
    through the loop header.
    """
    target = ref.identifier.parent
    if target is None:
        return False

    # "for (var name in obj) ..."
    if target.type == "VariableDeclarator":
        declaration = target.parent
        target = declaration.parent if declaration is not None else None

    if target is None or target.type != "ForInStatement":
        return False

    body = target.body
    if body.type == "EmptyStatement":
        return True
    if body.type == "BlockStatement":
        if not body.body:
            return True
        first = body.body[0]
    else:
        first = body

    return first.type == "ReturnStatement"


def step(state: UsageState, ref: Reference) -> UsageState:
    """Fold one reference into the usage state."""
    if is_for_in_ref(ref):
        return UsageState(pending_rhs=state.pending_rhs, used=True)

    for_itself = is_read_for_itself(ref, state.pending_rhs)
    pending_rhs = next_pending_rhs(ref, state.pending_rhs)

    return UsageState(
        pending_rhs=pending_rhs,
        used=ref.is_read() and not for_itself,
    )


def is_used_variable(variable: Variable) -> bool:
    """Check whether any reference to ``variable`` is a genuine read."""
    state = UsageState()
    for ref in variable.references:
        state = step(state, ref)
        if state.used:
            return True
    return False
