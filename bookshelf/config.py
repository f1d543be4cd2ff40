"""Configuration loading for the Bookshelf catalog.

This module provides centralized configuration management:
- Load settings from environment variables and .env files
- Validate configuration using pydantic
- Provide typed access to all settings
"""

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment.

    Uses pydantic-settings for environment variable handling with
    .env file support via python-dotenv.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Durable slot configuration
    store_backend: Literal["sqlite", "json_file"] = Field(
        default="sqlite",
        description="Backend holding the durable catalog slot",
    )
    store_sqlite_path: str = Field(
        default="./data/bookshelf.db",
        description="SQLite database file path",
    )
    store_json_dir: str = Field(
        default="./data/slots",
        description="Directory for JSON slot files",
    )
    slot_key: str = Field(
        default="library_books_v1",
        description="Key of the durable slot holding the catalog",
    )

    # Catalog behaviour
    id_length: int = Field(
        default=12,
        description="Length of generated book ids",
    )
    assume_yes: bool = Field(
        default=False,
        description="Confirm remove/clear without asking",
    )

    # Logging configuration
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Log level",
    )
    log_format: Literal["json", "text"] = Field(
        default="text",
        description="Log format",
    )

    @field_validator("slot_key")
    @classmethod
    def validate_slot_key(cls, v: str) -> str:
        """Ensure the slot key is not blank."""
        if not v.strip():
            raise ValueError("slot_key must be a non-empty string")
        return v

    @field_validator("id_length")
    @classmethod
    def validate_id_length(cls, v: int) -> int:
        """Keep ids short but with enough entropy to avoid collisions."""
        if v < 6 or v > 32:
            raise ValueError("id_length must be between 6 and 32")
        return v


def load_settings(env_file: str | None = None) -> Settings:
    """Load application settings from environment.

    Args:
        env_file: Optional path to .env file. If not provided,
                 uses the default .env in the current directory.

    Returns:
        Validated Settings instance.

    Raises:
        ValidationError: If settings validation fails.
    """
    if env_file:
        return Settings(_env_file=env_file)  # type: ignore[call-arg]
    return Settings()


__all__ = ["Settings", "load_settings"]
