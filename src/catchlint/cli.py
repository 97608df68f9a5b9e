"""catchlint CLI - report caught errors that are never handled."""

import logging
from enum import Enum
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from catchlint import __version__
from catchlint.config import (
    RuleOptions,
    find_project_config,
    get_excludes,
    get_includes,
    get_rule_options,
    get_severity,
    load_config,
)
from catchlint.engine import run_check
from catchlint.errors import ConfigurationError
from catchlint.exclusion import FileExcluder, discover_dumps
from catchlint.models.results import CheckResults, Severity
from catchlint.output.formatter import format_compact
from catchlint.output.json_writer import results_to_json, write_results
from catchlint.output.tree import build_results_tree, build_summary_tree
from catchlint.rules import CONFIGS, get_registry

app = typer.Typer(
    name="catchlint",
    help="Report caught errors that are never handled",
    no_args_is_help=True,
    rich_markup_mode="rich",
)
console = Console()
err_console = Console(stderr=True)


class OutputFormat(str, Enum):
    compact = "compact"
    json = "json"
    tree = "tree"


def _configure_logging(verbose: bool) -> None:
    """Route the ``catchlint`` logger through rich on stderr."""
    logger = logging.getLogger("catchlint")
    logger.handlers.clear()
    logger.addHandler(RichHandler(console=err_console, show_path=False, rich_tracebacks=True))
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.propagate = False


def version_callback(value: bool) -> None:
    if value:
        console.print(f"catchlint version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """Report caught errors that are never handled."""


@app.command()
def check(
    paths: List[Path] = typer.Argument(
        ...,
        help="Scope dump files, or directories to search for *.scope.json dumps",
    ),
    ignore_pattern: Optional[str] = typer.Option(
        None,
        "--ignore-pattern",
        help="Regexp of catch binding names that may stay unhandled",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to a JSON or TOML config file (default: [tool.catchlint] in pyproject.toml)",
    ),
    output_format: OutputFormat = typer.Option(
        OutputFormat.compact,
        "--format",
        "-f",
        help="Output format",
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Also write JSON results to this file",
    ),
    include_ignored: bool = typer.Option(
        False,
        "--include-ignored",
        help="Include files normally excluded by .gitignore and config",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable debug logging",
    ),
) -> None:
    """Check scope dumps for unhandled catch bindings."""
    _configure_logging(verbose)
    project_root = Path.cwd()

    try:
        config_data = load_config(config) if config else find_project_config(project_root)
        rule_options = get_rule_options(config_data)
        if ignore_pattern is not None:
            rule_options["ignorePattern"] = ignore_pattern
        options = RuleOptions.from_options(rule_options)
        severity = _parse_severity(get_severity(config_data))
    except ConfigurationError as e:
        err_console.print(f"[red]Configuration error:[/] {e}")
        raise typer.Exit(2)

    excluder = FileExcluder(
        project_root,
        include_ignored=include_ignored,
        extra_excludes=get_excludes(config_data),
    )
    files = discover_dumps(paths, excluder, get_includes(config_data))
    if not files:
        err_console.print("[yellow]No scope dumps found.[/]")
        raise typer.Exit(0)

    results = run_check(files, options, severity)

    if output:
        write_results(results, output)
        err_console.print(f"[green]Results saved to:[/] {output}")

    _display_results(results, output_format, project_root)
    raise typer.Exit(_exit_code(results))


@app.command()
def rules() -> None:
    """List the available rules and presets."""
    table = Table(title="catchlint rules")
    table.add_column("Rule", style="cyan")
    table.add_column("Type")
    table.add_column("Description")
    table.add_column("Presets", style="dim")

    for rule in get_registry().all_rules():
        rule_id = f"catchlint/{rule.name}"
        presets = ", ".join(name for name, preset in CONFIGS.items() if rule_id in preset["rules"])
        table.add_row(rule_id, rule.meta.type, rule.meta.description, presets)

    console.print(table)


def _parse_severity(value: str) -> Severity:
    try:
        return Severity.parse(value)
    except (KeyError, ValueError) as e:
        raise ConfigurationError(f"Invalid severity {value!r}") from e


def _display_results(results: CheckResults, output_format: OutputFormat, project_root: Path) -> None:
    if output_format is OutputFormat.json:
        typer.echo(results_to_json(results))
    elif output_format is OutputFormat.tree:
        console.print(build_results_tree(results, project_root))
        console.print(build_summary_tree(results))
    else:
        text = format_compact(results)
        if text:
            typer.echo(text)


def _exit_code(results: CheckResults) -> int:
    if results.has_load_errors:
        return 2
    if any(r.error_count for r in results.reports):
        return 1
    return 0


if __name__ == "__main__":
    app()
