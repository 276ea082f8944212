"""
Custom exceptions for the dashboard pipeline.
"""
from typing import Any, Dict, Optional


class DashboardError(Exception):
    """Base exception for all dashboard errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        """
        Initialize exception.

        Args:
            message: Error message
            details: Additional error details
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ReadError(DashboardError):
    """Raised when an uploaded blob cannot be decoded as a spreadsheet."""
    pass


class ValidationError(DashboardError):
    """Raised when a filter or sort request is invalid."""
    pass


class ConfigurationError(DashboardError):
    """Raised when configuration is invalid."""
    pass


class UploadError(DashboardError):
    """Raised when an upload is refused before its content is read."""

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        status_code: int = 400,
    ):
        super().__init__(message, details)
        self.status_code = status_code
