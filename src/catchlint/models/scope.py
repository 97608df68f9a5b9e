"""Scope, variable and reference model handed over by a scope resolver."""

from __future__ import annotations

import weakref
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator

from catchlint.models.syntax import Node


class ScopeKind(Enum):
    """Kinds of lexical scopes, named after eslint-scope's scope types."""

    GLOBAL = "global"
    MODULE = "module"
    FUNCTION = "function"
    FUNCTION_EXPRESSION_NAME = "function-expression-name"
    BLOCK = "block"
    CATCH = "catch"
    CLASS = "class"
    CLASS_FIELD_INITIALIZER = "class-field-initializer"
    CLASS_STATIC_BLOCK = "class-static-block"
    FOR = "for"
    SWITCH = "switch"
    WITH = "with"


# Scopes that own `var` declarations, i.e. function-level scopes
VARIABLE_SCOPE_KINDS = frozenset(
    {
        ScopeKind.GLOBAL,
        ScopeKind.MODULE,
        ScopeKind.FUNCTION,
        ScopeKind.CLASS_FIELD_INITIALIZER,
        ScopeKind.CLASS_STATIC_BLOCK,
    }
)


class DefinitionType(Enum):
    """How a variable was declared."""

    CATCH_CLAUSE = "CatchClause"
    CLASS_NAME = "ClassName"
    FUNCTION_NAME = "FunctionName"
    IMPLICIT_GLOBAL = "ImplicitGlobalVariable"
    IMPORT_BINDING = "ImportBinding"
    PARAMETER = "Parameter"
    VARIABLE = "Variable"


@dataclass(eq=False)
class Definition:
    """A declaration site of a variable."""

    type: DefinitionType
    name: Node  # the declaring Identifier
    node: Node | None = None  # the enclosing declaration node (e.g. CatchClause)


@dataclass(eq=False)
class Reference:
    """A single read and/or write occurrence of a variable."""

    identifier: Node
    from_scope: Scope
    read: bool = False
    write: bool = False
    resolved: Variable | None = None

    def is_read(self) -> bool:
        return self.read

    def is_write(self) -> bool:
        return self.write

    def is_read_write(self) -> bool:
        return self.read and self.write


@dataclass(eq=False)
class Variable:
    """A named binding together with its declarations and references."""

    name: str
    scope: Scope
    defs: list[Definition] = field(default_factory=list)
    identifiers: list[Node] = field(default_factory=list)
    references: list[Reference] = field(default_factory=list)


class Scope:
    """
    A node of the scope tree.

    The parent link is held weakly: the tree is owned top-down through
    ``child_scopes`` and a child never keeps its parent alive.
    """

    def __init__(self, kind: ScopeKind, block: Node, upper: Scope | None = None) -> None:
        self.kind = kind
        self.block = block
        self._upper = weakref.ref(upper) if upper is not None else None
        self.child_scopes: list[Scope] = []
        self.variables: list[Variable] = []
        if upper is not None:
            upper.child_scopes.append(self)

    def __repr__(self) -> str:
        return f"<Scope {self.kind.value} at {self.block.range}>"

    @property
    def upper(self) -> Scope | None:
        return self._upper() if self._upper is not None else None

    @property
    def variable_scope(self) -> Scope:
        """The nearest enclosing function-level scope, this scope included."""
        scope: Scope | None = self
        while scope is not None:
            if scope.kind in VARIABLE_SCOPE_KINDS:
                return scope
            scope = scope.upper
        return self

    def add_variable(self, name: str) -> Variable:
        variable = Variable(name=name, scope=self)
        self.variables.append(variable)
        return variable

    def find_variable(self, name: str) -> Variable | None:
        """Find a variable declared directly in this scope."""
        for variable in self.variables:
            if variable.name == name:
                return variable
        return None

    def walk(self) -> Iterator[Scope]:
        """Yield this scope and all nested scopes in pre-order."""
        stack: list[Scope] = [self]
        while stack:
            scope = stack.pop()
            yield scope
            stack.extend(reversed(scope.child_scopes))
