"""
Application-level exceptions.

Source adapters raise SourceError subclasses; the aggregator captures them as
failed SourceResults and never lets them reach the HTTP layer.
"""

from __future__ import annotations


class X402Error(Exception):
    """Base class for backend errors."""


class SourceError(X402Error):
    """A data source could not deliver tokens for this cycle."""

    def __init__(self, source: str, message: str) -> None:
        super().__init__(f"{source}: {message}")
        self.source = source
        self.message = message


class SourceHTTPError(SourceError):
    """Non-2xx response from a data source."""

    def __init__(self, source: str, status_code: int, message: str = "") -> None:
        detail = f"HTTP {status_code}"
        if status_code == 429:
            detail += " (rate limited)"
        if message:
            detail = f"{detail}: {message}"
        super().__init__(source, detail)
        self.status_code = status_code

    @property
    def rate_limited(self) -> bool:
        return self.status_code == 429


class SourceTimeoutError(SourceError):
    """Request to a data source exceeded its timeout."""


class SourceResponseError(SourceError):
    """Data source answered with a payload we cannot parse."""
