"""Collect catch bindings that are never handled."""

from __future__ import annotations

import logging

from catchlint.analysis.usage import is_used_variable
from catchlint.config import RuleOptions
from catchlint.models.scope import Scope, ScopeKind, Variable

logger = logging.getLogger(__name__)


def get_catch_binding(scope: Scope) -> Variable | None:
    """Return the exception binding of a catch scope, if it declares one."""
    if scope.kind is not ScopeKind.CATCH or not scope.variables:
        return None
    return scope.variables[0]


def is_unhandled_error(error_var: Variable, options: RuleOptions) -> bool:
    """Check whether a catch binding should be reported."""
    if not error_var.defs:
        logger.debug("Skipping %r: binding has no definitions", error_var.name)
        return False

    if options.is_ignored(error_var.defs[0].name.name):
        return False

    return not is_used_variable(error_var)


def collect_unhandled_errors(root: Scope, options: RuleOptions) -> list[Variable]:
    """
    Walk the scope tree in pre-order and collect unhandled catch bindings.

    Uses an explicit stack so deeply nested sources cannot exhaust the
    interpreter's recursion limit.
    """
    unhandled: list[Variable] = []
    stack: list[Scope] = [root]

    while stack:
        scope = stack.pop()

        error_var = get_catch_binding(scope)
        if error_var is not None and is_unhandled_error(error_var, options):
            unhandled.append(error_var)

        stack.extend(reversed(scope.child_scopes))

    return unhandled
