"""Data models for catchlint."""

from catchlint.models.results import (
    CheckMetadata,
    CheckResults,
    Diagnostic,
    DiagnosticKind,
    FileReport,
    Severity,
)
from catchlint.models.scope import (
    Definition,
    DefinitionType,
    Reference,
    Scope,
    ScopeKind,
    Variable,
)
from catchlint.models.syntax import Node, Position, SourceLocation, link_parents

__all__ = [
    # Syntax models
    "Node",
    "Position",
    "SourceLocation",
    "link_parents",
    # Scope models
    "Definition",
    "DefinitionType",
    "Reference",
    "Scope",
    "ScopeKind",
    "Variable",
    # Results models
    "CheckMetadata",
    "CheckResults",
    "Diagnostic",
    "DiagnosticKind",
    "FileReport",
    "Severity",
]
