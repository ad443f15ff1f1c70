"""Errors raised by the recurring attendance engine.

Both are raised before any data is fetched; the router maps them to
HTTP 422 (ValidationError) and HTTP 400 (ConfigurationError).
"""

from typing import Optional


class AnalyticsError(Exception):
    """Base class for report generation errors."""

    def __init__(self, message: str, *, field: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.field = field


class ValidationError(AnalyticsError):
    """A request parameter is missing or out of range."""


class ConfigurationError(AnalyticsError):
    """The requested scope or period kind is not one the engine knows."""
