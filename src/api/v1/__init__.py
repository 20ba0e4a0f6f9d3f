# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""API v1 routes package.

This package contains all v1 API endpoint definitions.
Each module provides a FastAPI router for a specific area.

Modules:
    applications: Application tracker (CRUD, checklist, status, stats).
    study_tasks: Study calendar (CRUD, schedule, completion).
    reminders: Reminder state for applications, checklist items and tasks.
    notifications: Derived alerts.
"""

from fastapi import APIRouter

from src.api.v1 import applications, notifications, reminders, study_tasks

# Create the main v1 router
router = APIRouter(prefix="/api/v1")

router.include_router(applications.router, prefix="/applications", tags=["Applications"])
router.include_router(study_tasks.router, prefix="/study-tasks", tags=["Study Tasks"])
router.include_router(reminders.router, prefix="/reminders", tags=["Reminders"])
router.include_router(notifications.router, prefix="/notifications", tags=["Notifications"])

__all__ = ["router"]
