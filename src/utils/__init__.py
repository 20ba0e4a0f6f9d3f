# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Utility functions and helpers for the study planner.

This package contains cross-cutting utilities:
- logging: Structured logging with structlog
- datetime: Timezone-aware date and datetime arithmetic
"""

from src.utils.datetime import (
    as_instant,
    assume_utc,
    days_between,
    ensure_utc,
    minutes_between,
    start_of_day,
    utc_now,
    utc_today,
)
from src.utils.logging import get_logger, setup_logging

__all__ = [
    # Logging
    "setup_logging",
    "get_logger",
    # Datetime
    "utc_now",
    "ensure_utc",
    "assume_utc",
    "start_of_day",
    "as_instant",
    "utc_today",
    "days_between",
    "minutes_between",
]
