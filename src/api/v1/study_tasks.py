# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Study calendar API endpoints.

This module provides endpoints for study tasks:
- GET / - List all study tasks
- GET /schedule - All tasks ordered by date
- GET /by-date/{day} - Tasks scheduled on a date
- GET /{task_id} - Get a study task
- POST / - Create a study task
- PATCH /{task_id} - Partially update a study task
- DELETE /{task_id} - Delete a study task
- POST /{task_id}/toggle-complete - Toggle completion

Tasks derived from applications (``source == "application"``) only
accept reminder and completion changes, which are applied to the source
application. Other edits return 409.
"""

import logging
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Response, status
from pydantic import ValidationError

from src.api.dependencies import get_store
from src.domains.planner import (
    AppDataStore,
    DerivedTaskEditError,
    DuplicateIdError,
    StudyTaskNotFoundError,
)
from src.models.planner import StudyTask, StudyTaskCreate, StudyTaskUpdate

logger = logging.getLogger(__name__)

router = APIRouter()


def _not_found(task_id: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Study task '{task_id}' not found",
    )


def _conflict(error: Exception) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_409_CONFLICT,
        detail=str(error),
    )


@router.get(
    "",
    response_model=list[StudyTask],
    summary="List study tasks",
)
async def list_study_tasks(
    store: AppDataStore = Depends(get_store),
) -> list[StudyTask]:
    """List authored and derived study tasks."""
    return store.study_tasks


@router.get(
    "/schedule",
    response_model=list[StudyTask],
    summary="Study schedule",
    description="All study tasks ordered by date.",
)
async def get_schedule(
    store: AppDataStore = Depends(get_store),
) -> list[StudyTask]:
    """Get the schedule."""
    return store.schedule()


@router.get(
    "/by-date/{day}",
    response_model=list[StudyTask],
    summary="Tasks for a date",
)
async def get_tasks_for_date(
    day: date,
    store: AppDataStore = Depends(get_store),
) -> list[StudyTask]:
    """Get the study tasks scheduled on a date."""
    return store.tasks_for_date(day)


@router.get(
    "/{task_id}",
    response_model=StudyTask,
    summary="Get study task",
)
async def get_study_task(
    task_id: str,
    store: AppDataStore = Depends(get_store),
) -> StudyTask:
    """Get a study task.

    Raises:
        HTTPException: If the task does not exist.
    """
    task = store.get_study_task(task_id)
    if task is None:
        raise _not_found(task_id)
    return task


@router.post(
    "",
    response_model=StudyTask,
    status_code=status.HTTP_201_CREATED,
    summary="Create study task",
)
async def create_study_task(
    data: StudyTaskCreate,
    store: AppDataStore = Depends(get_store),
) -> StudyTask:
    """Create a student-authored study task.

    Raises:
        HTTPException: If the id is already taken.
    """
    try:
        return store.add_study_task(data)
    except DuplicateIdError as e:
        raise _conflict(e)


@router.patch(
    "/{task_id}",
    response_model=StudyTask,
    summary="Update study task",
    description=(
        "Partially update a study task. Derived tasks accept only "
        "reminder and completion changes."
    ),
)
async def update_study_task(
    task_id: str,
    data: StudyTaskUpdate,
    store: AppDataStore = Depends(get_store),
) -> StudyTask:
    """Update a study task.

    Raises:
        HTTPException: If the task does not exist, the edit targets a
            field owned by an application, or the result is invalid.
    """
    try:
        task = store.update_study_task(task_id, data)
    except DerivedTaskEditError as e:
        raise _conflict(e)
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(e),
        )
    if task is None:
        raise _not_found(task_id)
    return task


@router.delete(
    "/{task_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete study task",
)
async def delete_study_task(
    task_id: str,
    store: AppDataStore = Depends(get_store),
) -> Response:
    """Delete a student-authored study task.

    Raises:
        HTTPException: If the task does not exist or is derived.
    """
    try:
        deleted = store.delete_study_task(task_id)
    except DerivedTaskEditError as e:
        raise _conflict(e)
    if not deleted:
        raise _not_found(task_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/{task_id}/toggle-complete",
    response_model=StudyTask,
    summary="Toggle completion",
    description=(
        "Flip completion. For an application checklist task the checklist "
        "item is toggled; application deadline tasks follow the "
        "application status and return 409."
    ),
)
async def toggle_study_task_completed(
    task_id: str,
    store: AppDataStore = Depends(get_store),
) -> StudyTask:
    """Toggle completion of a study task.

    Raises:
        HTTPException: If the task does not exist or is a deadline task.
    """
    try:
        return store.toggle_study_task_completed(task_id)
    except StudyTaskNotFoundError:
        raise _not_found(task_id)
    except DerivedTaskEditError as e:
        raise _conflict(e)
