"""
Configuration management using environment variables.
Holds the MongoDB, server and logging settings for the book service.
"""

from pathlib import Path
from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings


class BookyConfig(BaseSettings):
    """
    Service settings, read from the environment and an optional .env file.
    """

    # MongoDB Configuration
    mongodb_url: str = "mongodb://localhost:27017"
    mongodb_database: str = "booky"
    mongodb_collection: str = "books"
    mongodb_server_selection_timeout_ms: int = 5000

    # Server Settings
    host: str = "127.0.0.1"
    port: int = 8080
    debug: bool = False

    # Logging Configuration
    log_level: str = "INFO"
    log_format: str = "json"
    log_file: Optional[str] = None

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }

    @field_validator("mongodb_server_selection_timeout_ms")
    @classmethod
    def validate_selection_timeout(cls, v):
        """Ensure server selection timeout is reasonable."""
        if v < 100 or v > 60000:
            raise ValueError("mongodb_server_selection_timeout_ms must be between 100 and 60000")
        return v

    @field_validator("port")
    @classmethod
    def validate_port(cls, v):
        if v < 1 or v > 65535:
            raise ValueError("port must be between 1 and 65535")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        """Ensure log level is valid."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"log_level must be one of: {valid_levels}")
        return v.upper()

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v):
        """Ensure log format is valid."""
        valid_formats = ["json", "console"]
        if v.lower() not in valid_formats:
            raise ValueError(f"log_format must be one of: {valid_formats}")
        return v.lower()

    def get_log_file_path(self) -> Optional[Path]:
        """Get log file path as Path object."""
        if self.log_file:
            return Path(self.log_file)
        return None

    def get_client_options(self) -> dict:
        """Keyword arguments for the MongoDB client."""
        return {"serverSelectionTimeoutMS": self.mongodb_server_selection_timeout_ms}


# Global configuration instance
config = BookyConfig()
