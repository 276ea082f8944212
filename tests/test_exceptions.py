"""
Unit tests for custom exceptions.
"""
from cid_dashboard.core.exceptions import (
    ConfigurationError,
    DashboardError,
    ReadError,
    UploadError,
    ValidationError,
)


def test_base_exception():
    """Test base exception class."""
    exc = DashboardError("Test error", details={"key": "value"})
    assert str(exc) == "Test error"
    assert exc.message == "Test error"
    assert exc.details == {"key": "value"}


def test_exception_hierarchy():
    """Test exception inheritance."""
    assert issubclass(ReadError, DashboardError)
    assert issubclass(ValidationError, DashboardError)
    assert issubclass(ConfigurationError, DashboardError)
    assert issubclass(UploadError, DashboardError)


def test_exception_with_details():
    """Test exception with details dictionary."""
    exc = ReadError("Invalid spreadsheet file", details={"filename": "a.xls", "engine": "xlrd"})
    assert exc.message == "Invalid spreadsheet file"
    assert exc.details["filename"] == "a.xls"
    assert exc.details["engine"] == "xlrd"


def test_exception_without_details():
    """Test exception without details."""
    exc = ValidationError("Unknown sort key")
    assert exc.details == {}


def test_upload_error_status_code():
    """Upload rejections carry the HTTP status they map to."""
    assert UploadError("Invalid file type").status_code == 400

    exc = UploadError("File too large", details={"limit": 10}, status_code=413)
    assert exc.status_code == 413
    assert exc.details == {"limit": 10}
