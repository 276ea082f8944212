"""
Unit tests for configuration module.
"""
import pytest
from pydantic import ValidationError

from cid_dashboard.core.config import get_settings, reset_settings


def test_settings_defaults():
    """Test default configuration values."""
    settings = get_settings()
    assert settings.app_name == "CID Financial Investigations Dashboard"
    assert settings.port == 8000
    assert settings.log_level == "INFO"
    assert settings.header_rows == 6
    assert settings.day_format == "%d/%m/%Y"
    assert settings.deposit_keyword == "deposit"
    assert settings.transfer_keyword == "transfer"
    assert settings.empty_sentinel == "-"
    assert settings.max_upload_bytes == 20 * 1024 * 1024


def test_settings_from_environment(monkeypatch):
    monkeypatch.setenv("HEADER_ROWS", "3")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    reset_settings()
    settings = get_settings()
    assert settings.header_rows == 3
    assert settings.log_level == "DEBUG"


def test_settings_validation_port(monkeypatch):
    """Test port validation."""
    monkeypatch.setenv("PORT", "99999")
    reset_settings()
    with pytest.raises(ValidationError):
        get_settings()


def test_settings_validation_log_level(monkeypatch):
    """Test log level validation."""
    monkeypatch.setenv("LOG_LEVEL", "INVALID")
    reset_settings()
    with pytest.raises(ValidationError):
        get_settings()


def test_settings_validation_header_rows(monkeypatch):
    monkeypatch.setenv("HEADER_ROWS", "-1")
    reset_settings()
    with pytest.raises(ValidationError):
        get_settings()


def test_settings_validation_keyword(monkeypatch):
    monkeypatch.setenv("DEPOSIT_KEYWORD", "   ")
    reset_settings()
    with pytest.raises(ValidationError):
        get_settings()


def test_settings_singleton():
    """Test settings singleton behavior."""
    settings1 = get_settings()
    settings2 = get_settings()
    assert settings1 is settings2
