"""Choose where to report unhandled catch bindings and build diagnostics."""

from __future__ import annotations

from catchlint.config import RuleOptions
from catchlint.messages import format_message
from catchlint.models.results import Diagnostic, DiagnosticKind, Severity
from catchlint.models.scope import DefinitionType, Variable
from catchlint.models.syntax import Node
from catchlint.rules.protocol import RuleMeta

UNHANDLED_ERROR = "unhandledError"
NO_OPTIONAL_CATCH_BINDING = "noOptionalCatchBindingError"


def select_report_node(variable: Variable) -> Node:
    """
    Pick the node to blame for an unhandled binding.

    The last write made from the binding's own function-level scope wins,
    so ``catch (e) { e = 1; }`` points at the assignment. Without such a
    write the declaration is reported.
    """
    var_scope = variable.scope.variable_scope
    write_refs = [
        ref
        for ref in variable.references
        if ref.is_write() and ref.from_scope.variable_scope is var_scope
    ]
    if write_refs:
        return write_refs[-1].identifier
    return variable.identifiers[0]


def get_message_data(variable: Variable, options: RuleOptions) -> dict[str, str]:
    """Build the interpolation data of the unhandled-error message."""
    additional = ""
    def_type = variable.defs[0].type if variable.defs else None
    if def_type is DefinitionType.CATCH_CLAUSE and options.ignore_pattern is not None:
        additional = (
            f". Allowed unhandled exceptions must match regexp: {options.describe_pattern()}"
        )

    return {"errorName": variable.name, "additional": additional}


def report_unhandled(
    variables: list[Variable],
    options: RuleOptions,
    meta: RuleMeta,
    rule_id: str,
    severity: Severity = Severity.ERROR,
) -> list[Diagnostic]:
    """Emit one diagnostic per unhandled binding, in the given order."""
    diagnostics: list[Diagnostic] = []
    template = meta.messages[UNHANDLED_ERROR]

    for variable in variables:
        if not variable.defs or not variable.identifiers:
            continue

        data = get_message_data(variable, options)
        diagnostics.append(
            Diagnostic(
                rule_id=rule_id,
                kind=DiagnosticKind.UNHANDLED_BINDING,
                message_id=UNHANDLED_ERROR,
                message=format_message(template, data),
                node=select_report_node(variable),
                data=data,
                severity=severity,
            )
        )

    return diagnostics


def find_missing_catch_bindings(program: Node) -> list[Node]:
    """Return every catch clause that declares no binding, in source order."""
    return [
        node
        for node in program.walk()
        if node.type == "CatchClause" and node.get("param") is None
    ]


def report_missing_bindings(
    program: Node,
    meta: RuleMeta,
    rule_id: str,
    severity: Severity = Severity.ERROR,
) -> list[Diagnostic]:
    """Emit one diagnostic per `catch {}` without a binding, regardless of options."""
    message = meta.messages[NO_OPTIONAL_CATCH_BINDING]
    return [
        Diagnostic(
            rule_id=rule_id,
            kind=DiagnosticKind.MISSING_CATCH_BINDING,
            message_id=NO_OPTIONAL_CATCH_BINDING,
            message=message,
            node=catch_node,
            severity=severity,
        )
        for catch_node in find_missing_catch_bindings(program)
    ]
