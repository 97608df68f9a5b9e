"""JSON output writers for check results."""

import json
from pathlib import Path

from catchlint.models.results import CheckResults


def results_to_json(results: CheckResults) -> str:
    return json.dumps(results.to_dict(), indent=2)


def write_results(results: CheckResults, output_path: Path) -> None:
    """Write check results to a JSON file."""
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(results.to_dict(), f, indent=2)


def load_results(results_path: Path) -> dict:
    """Load a previously written results file."""
    with open(results_path, "r", encoding="utf-8") as f:
        return json.load(f)
