"""File discovery and exclusion for scope dumps.

Handles .gitignore patterns, ``[tool.catchlint]`` excludes and default
patterns using the pathspec library for gitignore-style matching.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

import pathspec
import tomli

logger = logging.getLogger(__name__)


@dataclass
class ExclusionConfig:
    """Configuration for file exclusion."""

    gitignore_patterns: list[str] = field(default_factory=list)
    pyproject_patterns: list[str] = field(default_factory=list)
    default_patterns: list[str] = field(default_factory=list)
    sources: list[str] = field(default_factory=list)


# Default patterns that are always excluded
DEFAULT_EXCLUDES = [
    "node_modules",
    ".git",
    ".venv",
    "venv",
    "__pycache__",
    "coverage",
    "build",
    "dist",
]

DEFAULT_INCLUDES = ["**/*.scope.json"]


class FileExcluder:
    """Handles file exclusion with gitignore-style pattern matching."""

    def __init__(
        self,
        project_root: Path,
        include_ignored: bool = False,
        extra_excludes: list[str] | None = None,
    ) -> None:
        """Initialize the file excluder.

        Args:
            project_root: Root directory that patterns are relative to.
            include_ignored: If True, don't exclude any files.
            extra_excludes: Additional patterns to exclude.
        """
        self.project_root = project_root
        self.include_ignored = include_ignored
        self._config = ExclusionConfig()
        self._spec: pathspec.PathSpec | None = None

        if not include_ignored:
            self._load_patterns(extra_excludes or [])
            self._build_spec()

    def _load_patterns(self, extra_excludes: list[str]) -> None:
        self._config.default_patterns = list(DEFAULT_EXCLUDES)
        self._config.sources.append("defaults")

        self._load_gitignore()
        self._load_pyproject_excludes()

        if extra_excludes:
            self._config.default_patterns.extend(extra_excludes)

    def _load_gitignore(self) -> None:
        gitignore_path = self.project_root / ".gitignore"
        if not gitignore_path.exists():
            return

        try:
            content = gitignore_path.read_text(encoding="utf-8")
        except OSError as e:
            logger.warning("Cannot read %s: %s", gitignore_path, e)
            return

        self._config.gitignore_patterns = [
            line.strip()
            for line in content.splitlines()
            if line.strip() and not line.startswith("#")
        ]
        self._config.sources.append(str(gitignore_path))

    def _load_pyproject_excludes(self) -> None:
        """Load ``[tool.catchlint] exclude`` from pyproject.toml."""
        pyproject_path = self.project_root / "pyproject.toml"
        if not pyproject_path.exists():
            return

        try:
            with open(pyproject_path, "rb") as f:
                data = tomli.load(f)
        except (OSError, tomli.TOMLDecodeError) as e:
            logger.warning("Cannot read %s: %s", pyproject_path, e)
            return

        exclude = data.get("tool", {}).get("catchlint", {}).get("exclude")
        if not exclude:
            return

        if isinstance(exclude, list):
            self._config.pyproject_patterns = [str(p) for p in exclude]
        else:
            self._config.pyproject_patterns = [str(exclude)]
        self._config.sources.append(str(pyproject_path))

    def _build_spec(self) -> None:
        self._spec = pathspec.PathSpec.from_lines("gitwildmatch", self.patterns)

    def should_exclude(self, file_path: Path) -> bool:
        """Check if a file should be excluded."""
        if self.include_ignored or self._spec is None:
            return False

        try:
            rel_path = file_path.relative_to(self.project_root)
        except ValueError:
            return False

        if self._spec.match_file(rel_path.as_posix()):
            return True

        # Patterns like "node_modules" must also match "node_modules/x/y.json"
        return any(self._spec.match_file(part) for part in rel_path.parts[:-1])

    def filter_files(self, files: list[Path]) -> list[Path]:
        """Filter a list of files, removing excluded ones."""
        if self.include_ignored:
            return files
        return [f for f in files if not self.should_exclude(f)]

    @property
    def sources(self) -> list[str]:
        """Return list of config sources used."""
        return self._config.sources

    @property
    def patterns(self) -> list[str]:
        return (
            self._config.default_patterns
            + self._config.gitignore_patterns
            + self._config.pyproject_patterns
        )


def discover_dumps(
    paths: list[Path],
    excluder: FileExcluder,
    includes: list[str] | None = None,
) -> list[Path]:
    """
    Expand files and directories into a sorted list of dump files.

    Files named explicitly are always kept; directories are searched with
    the include globs and filtered through ``excluder``.
    """
    includes = includes or DEFAULT_INCLUDES
    found: set[Path] = set()

    for path in paths:
        if path.is_file():
            found.add(path)
            continue
        if not path.is_dir():
            logger.warning("No such file or directory: %s", path)
            continue
        for pattern in includes:
            candidates = [p for p in path.glob(pattern) if p.is_file()]
            found.update(excluder.filter_files(candidates))

    return sorted(found)
