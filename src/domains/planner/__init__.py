# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Planner domain package.

This package provides the application tracker and study calendar:
- AppDataStore: in-memory applications and study tasks of one session
- Synchronization of applications onto the study calendar
- Reminder targets and legacy target resolution
- Seed fixture loading
"""

from src.domains.planner.errors import (
    ApplicationNotFoundError,
    ApplicationTaskNotFoundError,
    DerivedTaskEditError,
    DuplicateIdError,
    InvalidTargetError,
    PlannerError,
    SeedLoadError,
    StudyTaskNotFoundError,
)
from src.domains.planner.seed import create_seeded_store, get_seed_file, load_seed
from src.domains.planner.store import AppDataStore
from src.domains.planner.sync import project_application, sync_application_to_study
from src.domains.planner.targets import resolve_target

__all__ = [
    "AppDataStore",
    "project_application",
    "sync_application_to_study",
    "resolve_target",
    "create_seeded_store",
    "get_seed_file",
    "load_seed",
    "PlannerError",
    "ApplicationNotFoundError",
    "ApplicationTaskNotFoundError",
    "StudyTaskNotFoundError",
    "DuplicateIdError",
    "DerivedTaskEditError",
    "InvalidTargetError",
    "SeedLoadError",
]
