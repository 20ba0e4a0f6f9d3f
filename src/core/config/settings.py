# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Application configuration settings using Pydantic Settings.

Settings are loaded from environment variables (and an optional ``.env``
file) with sensible defaults. The Settings class aggregates all
subsettings; a cached instance is provided via get_settings().

Example:
    >>> from src.core.config.settings import get_settings
    >>> settings = get_settings()
    >>> settings.notifications.due_soon_days
    3
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal, Self

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class PlannerSettings(BaseSettings):
    """Planner store configuration.

    Attributes:
        seed_on_startup: Load the fixture applications and study tasks
            when the API starts.
        seed_file: Path to the seed YAML file. Defaults to the bundled
            ``config/seed/planner.yaml``.
    """

    model_config = SettingsConfigDict(
        env_prefix="PLANNER_",
        extra="ignore",
    )

    seed_on_startup: bool = True
    seed_file: Path | None = None


class NotificationSettings(BaseSettings):
    """Windows and thresholds used when deriving alerts.

    Day windows are inclusive and measured in whole calendar days from
    today. Reminder windows are measured in minutes from now.

    Attributes:
        due_soon_days: Study tasks due within this many days are "due soon".
        deadline_window_days: Application deadlines within this many days alert.
        deadline_high_days: Deadline alerts at or below this are high priority.
        deadline_medium_days: Deadline alerts at or below this are medium priority.
        application_task_window_days: Checklist items due within this many days alert.
        application_task_high_days: Checklist alerts at or below this are high priority.
        application_task_medium_days: Checklist alerts at or below this are medium priority.
        reminder_lookbehind_minutes: How long a fired reminder keeps alerting.
        reminder_lookahead_minutes: How early an upcoming reminder starts alerting.
    """

    model_config = SettingsConfigDict(
        env_prefix="NOTIFY_",
        extra="ignore",
    )

    due_soon_days: int = Field(default=3, ge=0)
    deadline_window_days: int = Field(default=30, ge=0)
    deadline_high_days: int = Field(default=7, ge=0)
    deadline_medium_days: int = Field(default=14, ge=0)
    application_task_window_days: int = Field(default=14, ge=0)
    application_task_high_days: int = Field(default=3, ge=0)
    application_task_medium_days: int = Field(default=7, ge=0)
    reminder_lookbehind_minutes: int = Field(default=60, ge=0)
    reminder_lookahead_minutes: int = Field(default=1440, ge=0)

    @model_validator(mode="after")
    def validate_tiers(self) -> Self:
        """Priority tiers must nest inside their alert window.

        Raises:
            ValueError: If a tier threshold exceeds the next one up.
        """
        if not (
            self.deadline_high_days
            <= self.deadline_medium_days
            <= self.deadline_window_days
        ):
            raise ValueError(
                "Deadline thresholds must satisfy high <= medium <= window"
            )
        if not (
            self.application_task_high_days
            <= self.application_task_medium_days
            <= self.application_task_window_days
        ):
            raise ValueError(
                "Application task thresholds must satisfy high <= medium <= window"
            )
        return self


class CORSSettings(BaseSettings):
    """CORS configuration for API.

    Attributes:
        origins: Comma-separated list of allowed origins.
        allow_credentials: Whether to allow credentials.
        allow_methods: Allowed HTTP methods.
        allow_headers: Allowed HTTP headers.
    """

    model_config = SettingsConfigDict(
        env_prefix="CORS_",
        extra="ignore",
    )

    origins: str = "http://localhost:3000,http://localhost:5173"
    allow_credentials: bool = True
    allow_methods: list[str] = ["*"]
    allow_headers: list[str] = ["*"]

    @property
    def origins_list(self) -> list[str]:
        """Parse origins string into a list."""
        return [origin.strip() for origin in self.origins.split(",") if origin.strip()]


class APISettings(BaseSettings):
    """API server configuration.

    Attributes:
        host: Host to bind to.
        port: Port to listen on.
    """

    model_config = SettingsConfigDict(
        env_prefix="API_",
        extra="ignore",
    )

    host: str = "0.0.0.0"
    port: int = 8000


class Settings(BaseSettings):
    """Main application settings aggregating all subsettings.

    Use get_settings() to obtain a cached singleton instance.

    Attributes:
        environment: Current environment (development, staging, production).
        debug: Enable debug mode.
        log_level: Logging level.
        planner: Planner store settings.
        notifications: Alert derivation windows.
        cors: CORS settings.
        api: API server settings.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    # Environment
    environment: Literal["development", "staging", "production"] = "development"
    debug: bool = True
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    # Subsettings - loaded with their own env prefixes
    planner: PlannerSettings = Field(default_factory=PlannerSettings)
    notifications: NotificationSettings = Field(default_factory=NotificationSettings)
    cors: CORSSettings = Field(default_factory=CORSSettings)
    api: APISettings = Field(default_factory=APISettings)

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance.

    Call clear_settings_cache() if you need to reload settings.

    Returns:
        Cached Settings instance.
    """
    return Settings()


def clear_settings_cache() -> None:
    """Clear the settings cache.

    Useful for testing or when the environment changes at runtime.
    """
    get_settings.cache_clear()
