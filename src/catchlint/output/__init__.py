"""Output modules for CLI display and file writing."""

from catchlint.output.formatter import format_compact
from catchlint.output.json_writer import results_to_json, write_results
from catchlint.output.tree import build_results_tree, build_summary_tree

__all__ = [
    "build_results_tree",
    "build_summary_tree",
    "format_compact",
    "results_to_json",
    "write_results",
]
