# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Pytest configuration and shared fixtures.

This module provides fixtures used across all test types:
- Unit tests
- Integration tests
"""

from collections.abc import Generator
from datetime import date, datetime, timezone

import pytest

from src.core.config import NotificationSettings, clear_settings_cache
from src.domains.planner import AppDataStore
from src.models.planner import (
    Application,
    ApplicationStatus,
    ApplicationTask,
    AuthoredStudyTask,
    TaskPriority,
)


# =============================================================================
# Environment Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def clean_settings() -> Generator[None, None, None]:
    """Reset cached settings around every test."""
    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def notification_settings() -> NotificationSettings:
    """Provide default notification thresholds."""
    return NotificationSettings()


# =============================================================================
# Marker Configuration
# =============================================================================


def pytest_configure(config: pytest.Config) -> None:
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test"
    )


# =============================================================================
# Planner Fixtures
# =============================================================================


@pytest.fixture
def now() -> datetime:
    """Provide a fixed reference instant (2025-11-10 12:00 UTC)."""
    return datetime(2025, 11, 10, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def sample_application() -> Application:
    """Provide an application with two checklist items."""
    return Application(
        id=1,
        university="Stanford University",
        program="MS in Computer Science",
        country="USA",
        deadline=date(2025, 12, 1),
        status=ApplicationStatus.PLANNING,
        tasks=[
            ApplicationTask(id=1, task="Request transcript"),
            ApplicationTask(
                id=2,
                task="Write Statement of Purpose",
                due_date=date(2025, 11, 15),
            ),
        ],
    )


@pytest.fixture
def second_application() -> Application:
    """Provide an application without checklist items."""
    return Application(
        id=2,
        university="MIT",
        program="PhD in Artificial Intelligence",
        country="USA",
        deadline=date(2025, 12, 15),
        status=ApplicationStatus.IN_PROGRESS,
    )


@pytest.fixture
def sample_study_task() -> AuthoredStudyTask:
    """Provide a student-authored study task."""
    return AuthoredStudyTask(
        id="math-1",
        task="Complete math homework",
        subject="Mathematics",
        date=date(2025, 11, 12),
        priority=TaskPriority.HIGH,
        estimated_hours=2,
    )


@pytest.fixture
def store(
    sample_application: Application,
    sample_study_task: AuthoredStudyTask,
) -> AppDataStore:
    """Provide a store with one application and one authored task."""
    return AppDataStore([sample_application], [sample_study_task])
