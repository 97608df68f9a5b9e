"""Rule protocol and metadata."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from catchlint.config import RuleOptions
    from catchlint.models.results import Diagnostic, Severity
    from catchlint.models.scope import Scope


@dataclass(frozen=True)
class RuleMeta:
    """Static description of a rule."""

    type: str  # "problem", "suggestion" or "layout"
    description: str
    category: str
    url: str | None = None
    schema: list[dict[str, Any]] = field(default_factory=list)
    messages: dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "docs": {
                "description": self.description,
                "category": self.category,
                "url": self.url,
            },
            "schema": self.schema,
            "messages": self.messages,
        }


@runtime_checkable
class Rule(Protocol):
    """Protocol for catchlint rules.

    A rule receives the global scope of one analyzed unit, fully resolved,
    and returns its diagnostics. Rules must not mutate the scope tree.
    """

    @property
    def name(self) -> str:
        """Rule name without the plugin prefix, e.g. ``no-unhandled-catch``."""
        ...

    @property
    def meta(self) -> RuleMeta:
        ...

    def check(
        self,
        global_scope: Scope,
        options: RuleOptions,
        severity: Severity = ...,
    ) -> list[Diagnostic]:
        """Analyze one unit.

        Args:
            global_scope: Root of the scope tree; its ``block`` is the Program node
            options: Validated, compiled rule options
            severity: Severity to stamp on emitted diagnostics

        Returns:
            Diagnostics in the order the rule produced them
        """
        ...
