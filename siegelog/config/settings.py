"""
Configuration settings for the guild siege log parser.

Handles environment variables, database location, server options and
siege timing for the CLI and the HTTP API.
"""

import os
import re
import logging
from typing import List
from pathlib import Path
from dataclasses import dataclass, field


TIME_OF_DAY = re.compile(r"^[0-9]{1,2}:[0-9]{2}:[0-9]{2}$")


@dataclass
class DatabaseSettings:
    """Database configuration settings."""

    sqlite_path: str = "siege_logs.db"

    @classmethod
    def from_env(cls) -> "DatabaseSettings":
        """Load database settings from environment variables."""
        return cls(sqlite_path=os.getenv("SIEGELOG_DB_PATH", "siege_logs.db"))


@dataclass
class ServerSettings:
    """Server configuration settings."""

    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "info"

    @classmethod
    def from_env(cls) -> "ServerSettings":
        """Load server settings from environment variables."""
        return cls(
            host=os.getenv("SIEGELOG_HOST", "0.0.0.0"),
            port=int(os.getenv("SIEGELOG_PORT", "8000")),
            log_level=os.getenv("LOG_LEVEL", "info").lower(),
        )


@dataclass
class SiegeSettings:
    """Siege event timing."""

    # Time of day the siege ends; the life timeline counts down to it
    end_time: str = "21:15:00"

    @classmethod
    def from_env(cls) -> "SiegeSettings":
        return cls(end_time=os.getenv("SIEGE_END_TIME", "21:15:00").strip())


@dataclass
class UploadSettings:
    """File upload configuration settings."""

    max_file_size: int = 10485760  # 10MB
    allowed_extensions: List[str] = field(default_factory=lambda: [".txt", ".log"])

    @classmethod
    def from_env(cls) -> "UploadSettings":
        """Load upload settings from environment variables."""
        return cls(max_file_size=int(os.getenv("MAX_UPLOAD_SIZE", "10485760")))

    def is_allowed(self, filename: str) -> bool:
        return Path(filename or "").suffix.lower() in self.allowed_extensions


@dataclass
class ApplicationSettings:
    """Main application settings container."""

    database: DatabaseSettings
    server: ServerSettings
    siege: SiegeSettings
    upload: UploadSettings

    # Runtime settings
    environment: str = "development"
    debug: bool = False

    @classmethod
    def from_env(cls) -> "ApplicationSettings":
        """Load all settings from environment variables."""
        return cls(
            database=DatabaseSettings.from_env(),
            server=ServerSettings.from_env(),
            siege=SiegeSettings.from_env(),
            upload=UploadSettings.from_env(),
            environment=os.getenv("ENVIRONMENT", "development"),
            debug=os.getenv("DEBUG", "false").lower() == "true",
        )

    def setup_logging(self):
        """Configure logging based on settings."""
        level = getattr(logging, self.server.log_level.upper(), logging.INFO)
        if self.debug:
            level = logging.DEBUG

        logging.basicConfig(
            level=level,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    def validate(self):
        """Validate configuration settings."""
        errors = []

        if not self.database.sqlite_path:
            errors.append("Database path must not be empty")

        if not (1 <= self.server.port <= 65535):
            errors.append(f"Invalid port number: {self.server.port}")

        if not TIME_OF_DAY.match(self.siege.end_time):
            errors.append(f"Invalid siege end time (expected HH:MM:SS): {self.siege.end_time}")

        if self.upload.max_file_size <= 0:
            errors.append(f"Invalid max upload size: {self.upload.max_file_size}")

        if errors:
            raise ValueError(f"Configuration validation failed: {'; '.join(errors)}")

    def log_configuration(self):
        """Log current configuration."""
        logger = logging.getLogger(__name__)

        logger.info("=== Siegelog Configuration ===")
        logger.info(f"Environment: {self.environment}")
        logger.info(f"Debug: {self.debug}")
        logger.info(f"Database: SQLite ({self.database.sqlite_path})")
        logger.info(f"Server: {self.server.host}:{self.server.port}")
        logger.info(f"Log Level: {self.server.log_level}")
        logger.info(f"Siege End Time: {self.siege.end_time}")
        logger.info(f"Max Upload Size: {self.upload.max_file_size / (1024 * 1024):.1f}MB")
        logger.info("=== End Configuration ===")


# Global settings instance
settings = ApplicationSettings.from_env()


def get_settings() -> ApplicationSettings:
    """Get the global settings instance."""
    return settings


def reload_settings() -> ApplicationSettings:
    """Reload settings from environment variables."""
    global settings
    settings = ApplicationSettings.from_env()
    return settings
