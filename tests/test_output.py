"""Tests for the output module."""

import io
import json
from pathlib import Path

from rich.console import Console

from catchlint.config import RuleOptions
from catchlint.engine import run_check
from catchlint.models.results import CheckResults, FileReport
from catchlint.output.formatter import format_compact
from catchlint.output.json_writer import load_results, results_to_json, write_results
from catchlint.output.tree import build_results_tree, build_summary_tree

DUMPS = Path(__file__).parent / "fixtures" / "dumps"
MIXED = DUMPS / "nested" / "mixed.scope.json"


def render(renderable) -> str:
    """Helper rendering a rich object to plain text."""
    console = Console(file=io.StringIO(), width=200, color_system=None)
    console.print(renderable)
    return console.file.getvalue()


class TestFormatCompact:
    """Tests for the compact text formatter."""

    def test_lines_sorted_by_position(self):
        results = run_check([MIXED], RuleOptions())
        lines = format_compact(results).splitlines()

        assert lines == [
            f"{MIXED}: line 1, col 15, Error - 'e' error is caught but never handled. "
            "(catchlint/no-unhandled-catch)",
            f"{MIXED}: line 1, col 24, Error - Optional catch binding is disallowed, "
            "please handle the caught error. (catchlint/no-unhandled-catch)",
            "",
            "2 problems",
        ]

    def test_clean_results_are_empty(self):
        results = run_check([DUMPS / "handled.scope.json"], RuleOptions())
        assert format_compact(results) == ""

    def test_load_error_line(self):
        results = CheckResults(reports=[FileReport(file=Path("x.scope.json"), error="boom")])
        assert format_compact(results).splitlines() == [
            "x.scope.json: line 0, col 0, Error - boom",
            "",
            "1 problem",
        ]


class TestJsonWriter:
    """Tests for JSON output."""

    def test_results_to_json(self):
        results = run_check([MIXED], RuleOptions())
        data = json.loads(results_to_json(results))

        assert data["version"] == "1.0"
        assert data["summary"] == {
            "diagnostics": 2,
            "by_kind": {"unhandled-binding": 1, "missing-catch-binding": 1},
        }
        (report,) = data["results"]
        assert report["errorCount"] == 2
        assert [m["messageId"] for m in report["messages"]] == [
            "unhandledError",
            "noOptionalCatchBindingError",
        ]
        assert report["messages"][0]["data"] == {"errorName": "e", "additional": ""}

    def test_write_and_load(self, tmp_path: Path):
        results = run_check([DUMPS / "unhandled.scope.json"], RuleOptions())
        output = tmp_path / "out" / "results.json"

        write_results(results, output)

        data = load_results(output)
        assert data["metadata"]["files_analyzed"] == 1
        assert data["results"][0]["messages"][0]["line"] == 1


class TestTree:
    """Tests for the rich tree views."""

    def test_results_tree_groups_by_directory(self):
        results = run_check(
            [DUMPS / "handled.scope.json", DUMPS / "unhandled.scope.json", MIXED],
            RuleOptions(),
        )
        text = render(build_results_tree(results, DUMPS))

        assert "nested/" in text
        assert "mixed.scope.json" in text
        assert "unhandled.scope.json" in text
        # clean files are left out
        assert "handled.scope.json" not in text.replace("unhandled.scope.json", "")
        assert "missing-catch-binding" in text

    def test_summary_tree(self):
        results = run_check([MIXED], RuleOptions())
        results.reports.append(FileReport(file=Path("bad.scope.json"), error="boom"))
        text = render(build_summary_tree(results))

        assert "unhandled-binding (1 items)" in text
        assert "missing-catch-binding (1 items)" in text
        assert "unreadable dumps (1 files)" in text
