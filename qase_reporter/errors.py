"""Exception hierarchy for the reporter.

Malformed lines (``LineError``) are recovered locally by skipping the line.
Everything else is fatal for the CLI.
"""

from typing import Optional


class ReporterError(Exception):
    """Base class for all reporter errors."""


class LineError(ReporterError):
    """A single input line could not be turned into a test record."""


class DecodeError(LineError):
    """Line is not valid JSON of the expected shape."""


class ValidationError(LineError):
    """Line decoded fine but a required field is missing or invalid."""


class InputReadError(ReporterError):
    """The input source could not be opened or read."""


class ConfigError(ReporterError):
    """Configuration is missing required values or cannot be loaded."""


class CapacityExceededError(ReporterError):
    """The bulk result limit was reached before the input ended.

    ``results`` carries the batch collected so far, so callers can decide
    whether a partial submission is acceptable.
    """

    def __init__(self, results: list, limit: Optional[int] = None):
        self.results = results
        self.limit = limit if limit is not None else len(results)
        super().__init__(f"max bulk request limit reached ({self.limit} results)")


class QaseAPIError(ReporterError):
    """A call to the Qase API failed or returned a non-success status."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        body: Optional[str] = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.body = body
