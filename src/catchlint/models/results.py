"""Data models for analysis results."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any

from catchlint.models.syntax import Node


class DiagnosticKind(Enum):
    """What a diagnostic complains about."""

    UNHANDLED_BINDING = "unhandled-binding"
    MISSING_CATCH_BINDING = "missing-catch-binding"


class Severity(Enum):
    OFF = 0
    WARN = 1
    ERROR = 2

    @classmethod
    def parse(cls, value: "str | int | Severity") -> "Severity":
        """Accept eslint-style severities: "off"/"warn"/"error" or 0/1/2."""
        if isinstance(value, Severity):
            return value
        if isinstance(value, int):
            return cls(value)
        return {"off": cls.OFF, "warn": cls.WARN, "error": cls.ERROR}[value.lower()]


@dataclass
class Diagnostic:
    """A problem reported by a rule against one syntax node."""

    rule_id: str
    kind: DiagnosticKind
    message_id: str
    message: str
    node: Node
    data: dict[str, str] = field(default_factory=dict)
    severity: Severity = Severity.ERROR

    @property
    def name(self) -> str | None:
        """Name of the offending binding, if the diagnostic has one."""
        return self.data.get("errorName")

    @property
    def suffix(self) -> str | None:
        return self.data.get("additional") or None

    @property
    def line(self) -> int | None:
        return self.node.loc.start.line if self.node.loc else None

    @property
    def column(self) -> int | None:
        # eslint reports 1-based columns
        return self.node.loc.start.column + 1 if self.node.loc else None

    def sort_key(self) -> tuple[int, int]:
        if self.node.loc:
            return (self.node.loc.start.line, self.node.loc.start.column)
        return (0, self.node.range[0])

    def to_dict(self) -> dict[str, Any]:
        return {
            "ruleId": self.rule_id,
            "kind": self.kind.value,
            "messageId": self.message_id,
            "message": self.message,
            "severity": self.severity.value,
            "nodeType": self.node.type,
            "range": list(self.node.range),
            "line": self.line,
            "column": self.column,
            "data": dict(self.data),
        }


@dataclass
class FileReport:
    """Diagnostics for one analyzed unit."""

    file: Path
    diagnostics: list[Diagnostic] = field(default_factory=list)
    error: str | None = None

    @property
    def error_count(self) -> int:
        return sum(1 for d in self.diagnostics if d.severity is Severity.ERROR)

    @property
    def warning_count(self) -> int:
        return sum(1 for d in self.diagnostics if d.severity is Severity.WARN)

    def to_dict(self) -> dict[str, Any]:
        return {
            "file": str(self.file),
            "errorCount": self.error_count,
            "warningCount": self.warning_count,
            "messages": [d.to_dict() for d in sorted(self.diagnostics, key=Diagnostic.sort_key)],
            "error": self.error,
        }


@dataclass
class CheckMetadata:
    """Metadata about a check run."""

    analyzed_at: datetime
    catchlint_version: str
    files_analyzed: int
    analysis_duration_ms: int
    ignore_pattern: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "analyzed_at": self.analyzed_at.isoformat(),
            "catchlint_version": self.catchlint_version,
            "files_analyzed": self.files_analyzed,
            "analysis_duration_ms": self.analysis_duration_ms,
            "ignore_pattern": self.ignore_pattern,
        }


@dataclass
class CheckResults:
    """Complete results of a check run."""

    version: str = "1.0"
    metadata: CheckMetadata | None = None
    reports: list[FileReport] = field(default_factory=list)

    @property
    def diagnostic_count(self) -> int:
        return sum(len(r.diagnostics) for r in self.reports)

    @property
    def has_load_errors(self) -> bool:
        return any(r.error for r in self.reports)

    def by_kind(self) -> dict[str, int]:
        counts: dict[str, int] = {}
        for report in self.reports:
            for diagnostic in report.diagnostics:
                counts[diagnostic.kind.value] = counts.get(diagnostic.kind.value, 0) + 1
        return counts

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"version": self.version}

        if self.metadata:
            result["metadata"] = self.metadata.to_dict()

        result["summary"] = {
            "diagnostics": self.diagnostic_count,
            "by_kind": self.by_kind(),
        }
        result["results"] = [r.to_dict() for r in self.reports]

        return result
