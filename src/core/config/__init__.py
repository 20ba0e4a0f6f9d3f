# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Configuration package for the study planner.

- Settings: Pydantic-based settings loaded from environment variables
- YAML loader: Loading of fixture files

Example:
    >>> from src.core.config import get_settings
    >>> settings = get_settings()
    >>> settings.environment
    'development'
"""

from src.core.config.settings import (
    APISettings,
    CORSSettings,
    NotificationSettings,
    PlannerSettings,
    Settings,
    clear_settings_cache,
    get_settings,
)
from src.core.config.yaml_loader import YAMLLoadError, load_yaml

__all__ = [
    # Settings
    "Settings",
    "get_settings",
    "clear_settings_cache",
    # Subsettings
    "PlannerSettings",
    "NotificationSettings",
    "CORSSettings",
    "APISettings",
    # YAML utilities
    "load_yaml",
    "YAMLLoadError",
]
