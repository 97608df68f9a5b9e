"""Configuration loading and rule option handling for catchlint."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import tomli

from catchlint.errors import ConfigurationError

# Keys accepted in the rule's single options object
OPTION_KEYS = frozenset({"ignorePattern"})


@dataclass(frozen=True)
class RuleOptions:
    """
    Immutable options for one analysis session.

    The ignore pattern is compiled once here and shared by every pass.
    """

    ignore_pattern: re.Pattern[str] | None = None

    @classmethod
    def from_options(cls, options: dict[str, Any] | None = None) -> RuleOptions:
        """
        Validate a rule options object and compile its ignore pattern.

        Raises:
            ConfigurationError: unknown keys, a non-string pattern, or a
                pattern that does not compile.
        """
        if not options:
            return cls()

        if not isinstance(options, dict):
            raise ConfigurationError(f"Rule options must be an object, got {type(options).__name__}")

        unknown = set(options) - OPTION_KEYS
        if unknown:
            raise ConfigurationError(
                f"Unexpected rule option(s): {', '.join(sorted(unknown))}"
            )

        pattern = options.get("ignorePattern")
        if pattern is None:
            return cls()
        if not isinstance(pattern, str):
            raise ConfigurationError(
                f"ignorePattern must be a string, got {type(pattern).__name__}"
            )
        return cls(ignore_pattern=compile_ignore_pattern(pattern))

    @property
    def pattern_source(self) -> str | None:
        return self.ignore_pattern.pattern if self.ignore_pattern else None

    def is_ignored(self, name: str) -> bool:
        """Check whether a binding name is exempted by the ignore pattern."""
        return bool(self.ignore_pattern and self.ignore_pattern.search(name))

    def describe_pattern(self) -> str:
        """Render the pattern the way a JavaScript RegExp prints itself."""
        return f"/{self.pattern_source}/u" if self.ignore_pattern else ""


def compile_ignore_pattern(pattern: str) -> re.Pattern[str]:
    """Compile an ignore pattern, surfacing syntax errors as configuration errors."""
    try:
        return re.compile(pattern)
    except re.error as e:
        raise ConfigurationError(f"Invalid ignorePattern {pattern!r}: {e}") from e


def load_config(config_path: Path) -> dict:
    """Load a catchlint configuration from a JSON or TOML file.

    For ``pyproject.toml`` only the ``[tool.catchlint]`` table is returned.
    """
    try:
        if config_path.suffix == ".toml":
            with open(config_path, "rb") as f:
                data = tomli.load(f)
            if config_path.name == "pyproject.toml":
                data = data.get("tool", {}).get("catchlint", {})
        else:
            with open(config_path, "r", encoding="utf-8") as f:
                data = json.load(f)
    except OSError as e:
        raise ConfigurationError(f"Cannot read config file {config_path}: {e}") from e
    except (json.JSONDecodeError, tomli.TOMLDecodeError) as e:
        raise ConfigurationError(f"Cannot parse config file {config_path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file {config_path} must contain an object")
    return data


def find_project_config(project_path: Path) -> dict:
    """Return ``[tool.catchlint]`` from the project's pyproject.toml, if any."""
    pyproject = project_path / "pyproject.toml"
    if not pyproject.exists():
        return {}
    return load_config(pyproject)


def get_rule_options(config: dict) -> dict[str, Any]:
    """Get the rule options object from config.

    Both ``ignorePattern`` and the TOML-style ``ignore-pattern`` are accepted.
    """
    options = dict(config.get("options", {}))
    for key in ("ignorePattern", "ignore-pattern", "ignore_pattern"):
        if key in config:
            options["ignorePattern"] = config[key]
    return options


def get_severity(config: dict) -> str:
    """Get the rule severity from config."""
    return config.get("severity", "error")


def get_excludes(config: dict) -> list[str]:
    """Get exclude patterns for dump discovery from config."""
    return list(config.get("exclude", []))


def get_includes(config: dict) -> list[str]:
    """Get include globs for dump discovery from config."""
    return config.get("include", ["**/*.scope.json"])
