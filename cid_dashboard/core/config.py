"""
Centralized configuration management.
All environment variables and settings are defined here.
"""
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # Application
    app_name: str = Field(default="CID Financial Investigations Dashboard", alias="APP_NAME")
    host: str = Field(default="127.0.0.1", alias="HOST")
    port: int = Field(default=8000, alias="PORT")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Spreadsheet layout
    header_rows: int = Field(default=6, alias="HEADER_ROWS")
    max_upload_mb: int = Field(default=20, alias="MAX_UPLOAD_MB")

    # Aggregation
    day_format: str = Field(default="%d/%m/%Y", alias="DAY_FORMAT")
    deposit_keyword: str = Field(default="deposit", alias="DEPOSIT_KEYWORD")
    transfer_keyword: str = Field(default="transfer", alias="TRANSFER_KEYWORD")
    empty_sentinel: str = Field(default="-", alias="EMPTY_SENTINEL")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        """Validate log level is one of the standard levels."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return v_upper

    @field_validator("port")
    @classmethod
    def validate_port(cls, v):
        """Validate port is in valid range."""
        if not (1 <= v <= 65535):
            raise ValueError("Port must be between 1 and 65535")
        return v

    @field_validator("header_rows")
    @classmethod
    def validate_header_rows(cls, v):
        if v < 0:
            raise ValueError("Header rows cannot be negative")
        return v

    @field_validator("max_upload_mb")
    @classmethod
    def validate_max_upload(cls, v):
        if v < 1:
            raise ValueError("Max upload size must be at least 1 MB")
        return v

    @field_validator("deposit_keyword", "transfer_keyword")
    @classmethod
    def validate_keyword(cls, v):
        """Type keywords are matched against lowercased types."""
        v = v.strip().lower()
        if not v:
            raise ValueError("Type keyword cannot be empty")
        return v

    @property
    def max_upload_bytes(self) -> int:
        return self.max_upload_mb * 1024 * 1024


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """
    Get application settings singleton.

    Returns:
        Settings instance
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Reset settings singleton (useful for testing)."""
    global _settings
    _settings = None
