"""Tests for the command line interface."""

import json
from pathlib import Path

import pytest
from rich.console import Console
from typer.testing import CliRunner

from catchlint import __version__, cli

DUMPS = Path(__file__).parent / "fixtures" / "dumps"

runner = CliRunner()


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run every command away from this repository's pyproject.toml."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


def check(*args: str):
    return runner.invoke(cli.app, ["check", *args])


class TestCheckCommand:
    """Tests for `catchlint check`."""

    def test_unhandled_exits_one(self):
        result = check(str(DUMPS / "unhandled.scope.json"))

        assert result.exit_code == 1
        assert "line 1, col 12, Error - 'err' error is caught but never handled." in result.output
        assert "1 problem" in result.output

    def test_clean_exits_zero(self):
        result = check(str(DUMPS / "handled.scope.json"))

        assert result.exit_code == 0
        assert "problem" not in result.output

    def test_ignore_pattern_option(self):
        result = check(str(DUMPS / "unhandled.scope.json"), "--ignore-pattern", "^err$")
        assert result.exit_code == 0

    def test_ignore_pattern_suffix(self):
        result = check(str(DUMPS / "unhandled.scope.json"), "--ignore-pattern", "^ignore")

        assert result.exit_code == 1
        assert "Allowed unhandled exceptions must match regexp: /^ignore/u." in result.output

    def test_invalid_pattern_exits_two(self):
        result = check(str(DUMPS / "unhandled.scope.json"), "--ignore-pattern", "(")

        assert result.exit_code == 2
        assert "Configuration error" in result.output

    def test_broken_dump_exits_two(self, isolated_cwd: Path):
        broken = isolated_cwd / "broken.scope.json"
        broken.write_text("{")

        result = check(str(broken))

        assert result.exit_code == 2
        assert "invalid JSON" in result.output

    def test_directory_search(self):
        result = check(str(DUMPS))

        assert result.exit_code == 1
        assert "mixed.scope.json: line 1, col 24" in result.output
        assert "3 problems" in result.output

    def test_no_dumps_found(self, isolated_cwd: Path):
        result = check(str(isolated_cwd))

        assert result.exit_code == 0
        assert "No scope dumps found" in result.output

    def test_config_file_severity(self, isolated_cwd: Path):
        config = isolated_cwd / "catchlint.json"
        config.write_text(json.dumps({"severity": "warn"}))

        result = check(str(DUMPS / "unhandled.scope.json"), "--config", str(config))

        assert result.exit_code == 0
        assert "Warning - 'err' error is caught" in result.output

    def test_pyproject_options(self, isolated_cwd: Path):
        (isolated_cwd / "pyproject.toml").write_text('[tool.catchlint]\nignore-pattern = "^err"\n')

        result = check(str(DUMPS / "unhandled.scope.json"))

        assert result.exit_code == 0

    def test_invalid_severity_exits_two(self, isolated_cwd: Path):
        config = isolated_cwd / "catchlint.json"
        config.write_text(json.dumps({"severity": "loud"}))

        result = check(str(DUMPS / "unhandled.scope.json"), "-c", str(config))

        assert result.exit_code == 2
        assert "Invalid severity" in result.output

    def test_json_format_and_output_file(self, isolated_cwd: Path):
        output = isolated_cwd / "results.json"

        result = check(
            str(DUMPS / "nested" / "mixed.scope.json"),
            "--format",
            "json",
            "--output",
            str(output),
        )

        assert result.exit_code == 1
        data = json.loads(output.read_text())
        assert data["summary"]["diagnostics"] == 2
        assert data["results"][0]["messages"][0]["column"] == 15


class TestOtherCommands:
    """Tests for `--version` and `rules`."""

    def test_version(self):
        result = runner.invoke(cli.app, ["--version"])

        assert result.exit_code == 0
        assert f"catchlint version {__version__}" in result.output

    def test_rules(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setattr(cli, "console", Console(width=200))

        result = runner.invoke(cli.app, ["rules"])

        assert result.exit_code == 0
        assert "catchlint/no-unhandled-catch" in result.output
        assert "disallow unused errors in try-catch statements" in result.output
