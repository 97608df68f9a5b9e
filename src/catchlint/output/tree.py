"""Rich tree visualization for check results."""

from pathlib import Path

from rich.text import Text
from rich.tree import Tree

from catchlint.models.results import CheckResults, Diagnostic, DiagnosticKind, FileReport

KIND_STYLES = {
    DiagnosticKind.UNHANDLED_BINDING: "red",
    DiagnosticKind.MISSING_CATCH_BINDING: "yellow",
}


def build_results_tree(results: CheckResults, project_root: Path) -> Tree:
    """Build a Rich tree showing diagnostics grouped by directory and file."""
    root = Tree(f"[bold]{project_root.name or project_root}[/]", guide_style="dim")

    by_file: dict[Path, FileReport] = {}
    for report in results.reports:
        if not report.diagnostics and not report.error:
            continue
        try:
            rel_path = report.file.relative_to(project_root)
        except ValueError:
            rel_path = report.file
        by_file[rel_path] = report

    dir_nodes: dict[Path, Tree] = {}

    for file_path in sorted(by_file):
        report = by_file[file_path]

        parent = root
        for i, part in enumerate(file_path.parts[:-1]):
            dir_path = Path(*file_path.parts[: i + 1])
            if dir_path not in dir_nodes:
                dir_nodes[dir_path] = parent.add(f"[bold blue]{part}/[/]")
            parent = dir_nodes[dir_path]

        file_node = parent.add(f"[yellow]{file_path.name}[/]")

        if report.error:
            file_node.add(Text(f"! {report.error}", style="magenta"))
            continue

        for diagnostic in sorted(report.diagnostics, key=Diagnostic.sort_key):
            file_node.add(_diagnostic_text(diagnostic))

    return root


def _diagnostic_text(diagnostic: Diagnostic) -> Text:
    style = KIND_STYLES.get(diagnostic.kind, "red")
    text = Text()
    text.append("x ", style=f"{style} bold")
    text.append(diagnostic.name or "catch", style=style)
    text.append(f" ({diagnostic.kind.value}, line {diagnostic.line}, ", style="dim")
    text.append(f"col {diagnostic.column}", style="dim")
    text.append(")", style="dim")
    return text


def build_summary_tree(results: CheckResults) -> Tree:
    """Build a summary tree grouped by diagnostic kind."""
    root = Tree("[bold]Catch Handling Summary[/]", guide_style="dim")

    for kind, count in sorted(results.by_kind().items()):
        root.add(f"[cyan]{kind}[/] ({count} items)")

    failed = [r for r in results.reports if r.error]
    if failed:
        root.add(f"[magenta]unreadable dumps[/] ({len(failed)} files)")

    return root
