"""
Main entry point for the transaction dashboard.

This module loads configuration and starts the FastAPI server.
"""
import sys
from pathlib import Path

from dotenv import load_dotenv
from pydantic import ValidationError as SettingsValidationError

from cid_dashboard.core.config import Settings, get_settings
from cid_dashboard.core.exceptions import ConfigurationError
from cid_dashboard.core.logger import setup_logger

logger = setup_logger(__name__)


def load_environment(env_file: Path = Path(".env")) -> None:
    """Load a .env file into the environment if one exists."""
    if env_file.exists():
        load_dotenv(env_file)
    else:
        logger.info(f"No {env_file} file found, using environment variables or defaults")


def load_settings() -> Settings:
    """
    Load and validate settings.

    Raises:
        ConfigurationError: If any setting fails validation
    """
    try:
        return get_settings()
    except SettingsValidationError as e:
        raise ConfigurationError(
            "Invalid configuration",
            details={"errors": [f"{'.'.join(map(str, err['loc']))}: {err['msg']}" for err in e.errors()]},
        )


def main():
    """Main application entry point."""
    load_environment()

    try:
        settings = load_settings()

        import uvicorn
        from cid_dashboard.app.api import app

        logger.info(f"Starting {settings.app_name}")
        logger.info(f"Log Level: {settings.log_level}")
        logger.info(f"Header rows skipped: {settings.header_rows}")
        logger.info(f"Max upload size: {settings.max_upload_mb} MB")
        logger.info(f"Starting server on {settings.host}:{settings.port}")

        uvicorn.run(
            app,
            host=settings.host,
            port=settings.port,
            log_level=settings.log_level.lower(),
        )

    except ConfigurationError as e:
        logger.error(f"Configuration error: {e.message}")
        if e.details:
            logger.error(f"Details: {e.details}")
        sys.exit(1)


if __name__ == "__main__":
    main()
