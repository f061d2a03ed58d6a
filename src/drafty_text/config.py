"""Configuration management for Drafty."""

from pathlib import Path
from typing import Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration via environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Format printed by the CLI when no output file is given: json, html or txt
    output_format: str = Field(
        default="json",
        alias="DRAFTY_OUTPUT_FORMAT",
    )
    json_indent: int = Field(
        default=2,
        alias="DRAFTY_JSON_INDENT",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="WARNING",
        alias="DRAFTY_LOG_LEVEL",
    )

    # DOCX output
    docx_font_name: str = Field(
        default="Calibri",
        alias="DRAFTY_DOCX_FONT",
    )
    docx_font_size: int = Field(
        default=11,
        alias="DRAFTY_DOCX_FONT_SIZE",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value):
        return value.upper() if isinstance(value, str) else value


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance, creating it if needed."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def load_settings(env_file: Optional[Path] = None) -> Settings:
    """Load settings from an optional specific .env file."""
    global _settings
    if env_file:
        _settings = Settings(_env_file=env_file)
    else:
        _settings = Settings()
    return _settings
