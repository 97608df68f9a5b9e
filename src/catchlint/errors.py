"""Exception types raised by catchlint."""


class CatchlintError(Exception):
    """Base class for all catchlint errors."""


class ConfigurationError(CatchlintError):
    """Rule options or a configuration file are invalid."""


class ScopeDumpError(CatchlintError):
    """A scope dump could not be read or is malformed."""

    def __init__(self, message: str, source: str | None = None) -> None:
        self.source = source
        if source:
            message = f"{source}: {message}"
        super().__init__(message)
