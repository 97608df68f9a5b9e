"""Analysis modules for unhandled catch binding detection."""

from catchlint.analysis.closures import ClosureShape, is_inside_of_storable_function
from catchlint.analysis.collector import collect_unhandled_errors
from catchlint.analysis.reporter import find_missing_catch_bindings, select_report_node
from catchlint.analysis.rhs import is_read_for_itself, next_pending_rhs
from catchlint.analysis.usage import UsageState, is_used_variable

__all__ = [
    "ClosureShape",
    "UsageState",
    "collect_unhandled_errors",
    "find_missing_catch_bindings",
    "is_inside_of_storable_function",
    "is_read_for_itself",
    "is_used_variable",
    "next_pending_rhs",
    "select_report_node",
]
