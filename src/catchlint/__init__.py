"""catchlint - report caught errors that are never handled."""

__version__ = "0.1.0"

from catchlint.config import RuleOptions  # noqa: E402
from catchlint.engine import analyze  # noqa: E402

__all__ = ["RuleOptions", "__version__", "analyze"]
