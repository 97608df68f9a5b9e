"""Run registered rules over scope trees and dump files."""

from __future__ import annotations

import logging
import time
from datetime import datetime
from pathlib import Path

from catchlint import __version__
from catchlint.config import RuleOptions
from catchlint.errors import ScopeDumpError
from catchlint.loader import load_dump
from catchlint.models.results import CheckMetadata, CheckResults, Diagnostic, FileReport, Severity
from catchlint.models.scope import Scope
from catchlint.rules import get_registry

logger = logging.getLogger(__name__)

DEFAULT_RULE = "no-unhandled-catch"


def analyze(
    global_scope: Scope,
    options: RuleOptions | None = None,
    severity: Severity = Severity.ERROR,
    rule_name: str = DEFAULT_RULE,
) -> list[Diagnostic]:
    """Analyze one resolved scope tree with a registered rule."""
    rule = get_registry().get(rule_name)
    if rule is None:
        raise KeyError(f"Unknown rule: {rule_name}")
    return rule.check(global_scope, options or RuleOptions(), severity)


def check_file(
    path: Path,
    options: RuleOptions,
    severity: Severity = Severity.ERROR,
) -> FileReport:
    """Load one dump and analyze it. Load failures end up in the report."""
    try:
        dump = load_dump(path)
    except ScopeDumpError as e:
        logger.error("%s", e)
        return FileReport(file=path, error=str(e))

    diagnostics = analyze(dump.global_scope, options, severity)
    logger.debug("%s: %d diagnostic(s)", path, len(diagnostics))
    return FileReport(file=path, diagnostics=diagnostics)


def run_check(
    files: list[Path],
    options: RuleOptions,
    severity: Severity = Severity.ERROR,
) -> CheckResults:
    """Check every dump file and collect the results."""
    start_time = time.time()

    reports = [check_file(path, options, severity) for path in files]

    duration_ms = int((time.time() - start_time) * 1000)
    metadata = CheckMetadata(
        analyzed_at=datetime.now(),
        catchlint_version=__version__,
        files_analyzed=len(files),
        analysis_duration_ms=duration_ms,
        ignore_pattern=options.pattern_source,
    )
    return CheckResults(metadata=metadata, reports=reports)
