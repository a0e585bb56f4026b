# src/config/settings.py - v1
"""Typed configuration loaded from environment / .env via pydantic-settings.

Variables are prefixed with CLAUDIA_ (e.g. CLAUDIA_DEFAULT_MODEL).
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import ValidationError, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from claudia.logging.handlers import parse_size


class ConfigurationError(Exception):
    """Raised when configuration values are invalid or inconsistent."""


class Settings(BaseSettings):
    """Application settings loaded from .env file."""

    model_config = SettingsConfigDict(
        env_prefix="CLAUDIA_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # === Request defaults (used by RequestBuilder / build_request) ===
    default_model: str = ""
    default_max_tokens: int = 1024

    # === Logging ===
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["json", "text"] = "text"
    log_file: Path | None = None
    log_rotation: str = "10MB"
    log_retention: int = 5

    @model_validator(mode="after")
    def validate_config_consistency(self) -> Settings:
        errors: list[str] = []

        if self.default_max_tokens < 1:
            errors.append("DEFAULT_MAX_TOKENS must be >= 1")

        if self.log_retention < 0:
            errors.append("LOG_RETENTION must be >= 0")

        try:
            parse_size(self.log_rotation)
        except ValueError as e:
            errors.append(f"LOG_ROTATION: {e}")

        if errors:
            raise ConfigurationError("; ".join(errors))

        return self


def load_settings(**overrides: object) -> Settings:
    """Load settings from .env with optional overrides.

    Raises:
        ConfigurationError: If configuration is invalid.
    """
    try:
        return Settings(**overrides)  # type: ignore[arg-type]
    except ValidationError as e:
        raise ConfigurationError(
            "; ".join(
                f"{'.'.join(str(p) for p in err['loc']).upper()}: {err['msg']}"
                for err in e.errors(include_url=False)
            )
        ) from e
