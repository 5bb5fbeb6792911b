"""Configuration management using Pydantic Settings.

This module provides type-safe configuration management with automatic
environment variable loading and validation using Pydantic Settings v2.

The configuration is organized into logical groups:
- LoggingConfig: Logging levels, files, and debugging options
- MatchingConfig: Fuzzy matching thresholds and weights
- ListeningConfig: Listening session duration inference and buffering
- StatisticsConfig: Statistics availability floor and ranking sizes
"""

from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LoggingConfig(BaseModel):
    """Logging configuration for console and file output."""

    console_level: str = "INFO"
    file_level: str = "DEBUG"
    log_file: Path = Path("spinstats.log")
    real_time_debug: bool = True


class MatchingConfig(BaseModel):
    """Fuzzy matching configuration.

    Scores are dissimilarities: 0.0 is identical, 1.0 is unrelated.
    """

    acceptance_threshold: float = Field(default=0.4, ge=0.0, le=1.0)
    title_weight: float = Field(default=0.7, gt=0.0)
    artist_weight: float = Field(default=0.3, ge=0.0)
    tie_epsilon: float = Field(default=1e-9, ge=0.0)

    @model_validator(mode="after")
    def check_weights(self) -> "MatchingConfig":
        """Title matches must weigh at least as much as artist matches."""
        if self.title_weight < self.artist_weight:
            raise ValueError("title_weight must be >= artist_weight")
        return self


class ListeningConfig(BaseModel):
    """Listening session configuration."""

    max_play_gap_seconds: int | None = Field(default=1800, ge=1)
    buffer_window_seconds: int = Field(default=0, ge=0)  # 0 disables buffering
    buffer_min_detections: int = Field(default=1, ge=1)
    history_size: int = Field(default=100, ge=1)


class StatisticsConfig(BaseModel):
    """Statistics availability and presentation configuration."""

    min_listening_seconds: int = Field(default=1800, ge=0)  # 30 minutes
    ranking_limit: int = Field(default=5, ge=1)


class Settings(BaseSettings):
    """Main application settings with environment variable support.

    Environment variables can be set using flat naming or nested naming:
    - Flat: ACCEPTANCE_THRESHOLD, CONSOLE_LOG_LEVEL, MIN_LISTENING_SECONDS
    - Nested: MATCHING__ACCEPTANCE_THRESHOLD, LOGGING__CONSOLE_LEVEL

    The .env file is automatically loaded for development convenience.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
    )

    # Nested configuration groups
    logging: LoggingConfig = LoggingConfig()
    matching: MatchingConfig = MatchingConfig()
    listening: ListeningConfig = ListeningConfig()
    statistics: StatisticsConfig = StatisticsConfig()

    @model_validator(mode="before")
    @classmethod
    def transform_flat_env_vars(cls, data: Any) -> Any:
        """Transform flat environment variables to nested structure.

        Handles flat env vars (ACCEPTANCE_THRESHOLD) and maps them to the
        nested structure expected by the models (matching.acceptance_threshold).
        """
        if not isinstance(data, dict):
            return data

        transformed: dict[str, dict[str, Any]] = {}

        for section, mapping in _FLAT_ENV_MAPPINGS.items():
            for env_key, field_key in mapping.items():
                if env_key in data:
                    transformed.setdefault(section, {})[field_key] = data.pop(env_key)

        # Nested values given explicitly win over flat ones
        for section, values in transformed.items():
            existing = data.get(section)
            if isinstance(existing, dict):
                data[section] = {**values, **existing}
            elif existing is None:
                data[section] = values

        return data


_FLAT_ENV_MAPPINGS: dict[str, dict[str, str]] = {
    "logging": {
        "console_log_level": "console_level",
        "file_log_level": "file_level",
        "log_file": "log_file",
        "log_real_time_debug": "real_time_debug",
    },
    "matching": {
        "acceptance_threshold": "acceptance_threshold",
        "title_weight": "title_weight",
        "artist_weight": "artist_weight",
    },
    "listening": {
        "max_play_gap_seconds": "max_play_gap_seconds",
        "buffer_window_seconds": "buffer_window_seconds",
        "buffer_min_detections": "buffer_min_detections",
        "history_size": "history_size",
    },
    "statistics": {
        "min_listening_seconds": "min_listening_seconds",
        "ranking_limit": "ranking_limit",
    },
}


# Singleton instance for application use
settings = Settings()

