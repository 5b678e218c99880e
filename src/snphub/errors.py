"""SNPHub exception hierarchy.

Every failure in an ingestion run is fatal: nothing is retried or recovered
locally. Errors propagate to the CLI, which logs them and exits non-zero.
"""

from __future__ import annotations


class SNPHubError(Exception):
    """Base exception for all SNPHub failures."""


class ConfigError(SNPHubError):
    """Raised for missing or invalid run configuration."""


class NotFoundError(SNPHubError):
    """Raised when the requested genotype upload does not exist."""


class StorageError(SNPHubError):
    """Raised for any read or write failure against catalog storage."""


class UnknownFormat(SNPHubError):
    """Raised when an upload declares a vendor format we cannot parse."""


class MalformedLine(SNPHubError):
    """Raised when a data line violates its format's layout."""

    def __init__(self, message: str, *, line_number: int | None = None) -> None:
        self.line_number = line_number
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)
