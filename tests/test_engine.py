"""Tests for running rules over scope trees and dump files."""

import json
from pathlib import Path

import pytest

from catchlint.config import RuleOptions
from catchlint.engine import analyze, check_file, run_check
from catchlint.models.results import DiagnosticKind, Severity
from jsast import analyze_js, try_catch

DUMPS = Path(__file__).parent / "fixtures" / "dumps"


class TestAnalyze:
    """Tests for analyze on resolved scope trees."""

    def test_default_rule(self):
        _, scope = analyze_js(try_catch("err"))
        (diagnostic,) = analyze(scope)
        assert diagnostic.rule_id == "catchlint/no-unhandled-catch"

    def test_unknown_rule(self):
        _, scope = analyze_js(try_catch("err"))
        with pytest.raises(KeyError, match="no-such-rule"):
            analyze(scope, rule_name="no-such-rule")


class TestCheckFile:
    """Tests for check_file on fixture dumps."""

    def test_unhandled_dump(self):
        report = check_file(DUMPS / "unhandled.scope.json", RuleOptions())

        assert report.error is None
        (diagnostic,) = report.diagnostics
        assert diagnostic.name == "err"
        assert (diagnostic.line, diagnostic.column) == (1, 12)

    def test_handled_dump(self):
        report = check_file(DUMPS / "handled.scope.json", RuleOptions())
        assert report.diagnostics == []
        assert report.error is None

    def test_mixed_dump(self):
        report = check_file(DUMPS / "nested" / "mixed.scope.json", RuleOptions())

        unhandled, missing = report.diagnostics
        assert unhandled.kind is DiagnosticKind.UNHANDLED_BINDING
        assert unhandled.name == "e"
        # the reassignment is blamed rather than the parameter
        assert unhandled.column == 15
        assert missing.kind is DiagnosticKind.MISSING_CATCH_BINDING
        assert missing.column == 24

    def test_ignore_pattern(self):
        options = RuleOptions.from_options({"ignorePattern": "^err$"})
        report = check_file(DUMPS / "unhandled.scope.json", options)
        assert report.diagnostics == []

    def test_load_error_is_reported(self, tmp_path: Path):
        path = tmp_path / "broken.scope.json"
        path.write_text("[]")

        report = check_file(path, RuleOptions())
        assert report.diagnostics == []
        assert "dump must be a JSON object" in report.error


class TestRunCheck:
    """Tests for run_check."""

    def test_collects_reports_and_metadata(self):
        files = [DUMPS / "handled.scope.json", DUMPS / "unhandled.scope.json"]
        options = RuleOptions.from_options({"ignorePattern": "^ignore"})

        results = run_check(files, options, Severity.WARN)

        assert [r.file for r in results.reports] == files
        assert results.diagnostic_count == 1
        assert not results.has_load_errors
        assert results.metadata.files_analyzed == 2
        assert results.metadata.ignore_pattern == "^ignore"
        assert results.reports[1].warning_count == 1
        assert results.reports[1].error_count == 0


class TestMalformedDumps:
    """A bad dump is reported and the other files still run."""

    def test_non_utf8_dump(self, tmp_path: Path):
        bad = tmp_path / "binary.scope.json"
        bad.write_bytes(b'{"ast": "\xff"}')

        results = run_check([bad, DUMPS / "unhandled.scope.json"], RuleOptions())

        assert "not valid UTF-8" in results.reports[0].error
        assert results.reports[1].error is None
        assert len(results.reports[1].diagnostics) == 1
        assert results.has_load_errors

    def test_bad_range_shape(self, tmp_path: Path):
        bad = tmp_path / "range.scope.json"
        bad.write_text(json.dumps({"ast": {"type": "Program", "range": [0]}, "scopes": {}}))

        results = run_check([bad, DUMPS / "unhandled.scope.json"], RuleOptions())

        assert "malformed dump" in results.reports[0].error
        assert len(results.reports[1].diagnostics) == 1
