"""Plain-text formatters for check results."""

from catchlint.models.results import CheckResults, Diagnostic, FileReport, Severity

SEVERITY_LABELS = {Severity.ERROR: "Error", Severity.WARN: "Warning"}


def format_diagnostic(file: str, diagnostic: Diagnostic) -> str:
    """Format one diagnostic the way eslint's compact formatter does."""
    label = SEVERITY_LABELS.get(diagnostic.severity, "Error")
    line = diagnostic.line if diagnostic.line is not None else 0
    column = diagnostic.column if diagnostic.column is not None else 0
    return (
        f"{file}: line {line}, col {column}, {label} - "
        f"{diagnostic.message} ({diagnostic.rule_id})"
    )


def format_report(report: FileReport) -> list[str]:
    if report.error:
        return [f"{report.file}: line 0, col 0, Error - {report.error}"]
    return [
        format_diagnostic(str(report.file), diagnostic)
        for diagnostic in sorted(report.diagnostics, key=Diagnostic.sort_key)
    ]


def format_compact(results: CheckResults) -> str:
    """Render all reports as compact lines plus a problem count."""
    lines: list[str] = []
    for report in results.reports:
        lines.extend(format_report(report))

    total = results.diagnostic_count + sum(1 for r in results.reports if r.error)
    if total:
        lines.append("")
        lines.append(f"{total} problem{'s' if total != 1 else ''}")
    return "\n".join(lines)
