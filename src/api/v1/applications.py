# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Application tracker API endpoints.

This module provides endpoints for university applications:
- GET / - List applications with status filter and sorting
- GET /stats - Tracker statistics
- GET /{application_id} - Get application details
- POST / - Create an application
- PATCH /{application_id} - Partially update an application
- DELETE /{application_id} - Delete an application and its calendar tasks
- POST /{application_id}/tasks - Add a checklist item
- POST /{application_id}/tasks/{sub_task_id}/toggle - Toggle a checklist item
- PUT /{application_id}/status - Change status

Every change is reflected on the study calendar immediately.

Example:
    POST /api/v1/applications
    {
        "id": 4,
        "university": "ETH Zurich",
        "program": "MSc in Data Science",
        "country": "Switzerland",
        "deadline": "2025-12-15"
    }
"""

import logging
from typing import Annotated, Literal

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from pydantic import ValidationError

from src.api.dependencies import get_store
from src.domains.planner import (
    AppDataStore,
    ApplicationNotFoundError,
    ApplicationTaskNotFoundError,
    DuplicateIdError,
)
from src.models.planner import (
    Application,
    ApplicationStats,
    ApplicationStatus,
    ApplicationTask,
    ApplicationTaskCreate,
    ApplicationUpdate,
    StatusUpdate,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _not_found(application_id: int) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Application {application_id} not found",
    )


@router.get(
    "",
    response_model=list[Application],
    summary="List applications",
    description="List applications, optionally filtered by status and sorted.",
)
async def list_applications(
    status_filter: Annotated[
        ApplicationStatus | None,
        Query(alias="status", description="Filter by status"),
    ] = None,
    sort_by: Annotated[
        Literal["university", "deadline", "status"],
        Query(alias="sortBy", description="Sort field"),
    ] = "deadline",
    descending: Annotated[bool, Query(description="Sort descending")] = False,
    store: AppDataStore = Depends(get_store),
) -> list[Application]:
    """List applications.

    Args:
        status_filter: Optional status filter.
        sort_by: Sort field.
        descending: Reverse the order.
        store: Planner store.

    Returns:
        Matching applications.
    """
    return store.list_applications(
        status=status_filter,
        sort_by=sort_by,
        descending=descending,
    )


@router.get(
    "/stats",
    response_model=ApplicationStats,
    summary="Application statistics",
    description="Counts of applications by tracker group.",
)
async def application_stats(
    store: AppDataStore = Depends(get_store),
) -> ApplicationStats:
    """Get tracker statistics."""
    return store.application_stats()


@router.get(
    "/{application_id}",
    response_model=Application,
    summary="Get application",
)
async def get_application(
    application_id: int,
    store: AppDataStore = Depends(get_store),
) -> Application:
    """Get application details.

    Raises:
        HTTPException: If the application does not exist.
    """
    application = store.get_application(application_id)
    if application is None:
        raise _not_found(application_id)
    return application


@router.post(
    "",
    response_model=Application,
    status_code=status.HTTP_201_CREATED,
    summary="Create application",
    description="Create an application. Its deadline and checklist appear on the study calendar.",
)
async def create_application(
    data: Application,
    store: AppDataStore = Depends(get_store),
) -> Application:
    """Create an application.

    Args:
        data: Application with caller-assigned id.
        store: Planner store.

    Returns:
        Created application.

    Raises:
        HTTPException: If the id is already taken.
    """
    logger.info("Creating application: id=%d, university=%s", data.id, data.university)

    try:
        return store.add_application(data)
    except DuplicateIdError:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Application {data.id} already exists",
        )


@router.patch(
    "/{application_id}",
    response_model=Application,
    summary="Update application",
    description="Partially update an application. Only the fields sent are changed.",
)
async def update_application(
    application_id: int,
    data: ApplicationUpdate,
    store: AppDataStore = Depends(get_store),
) -> Application:
    """Update an application.

    Raises:
        HTTPException: If the application does not exist or the merged
            application is invalid.
    """
    try:
        application = store.update_application(application_id, data)
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(e),
        )
    if application is None:
        raise _not_found(application_id)
    return application


@router.delete(
    "/{application_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete application",
    description="Delete an application and every calendar task derived from it.",
)
async def delete_application(
    application_id: int,
    store: AppDataStore = Depends(get_store),
) -> Response:
    """Delete an application.

    Raises:
        HTTPException: If the application does not exist.
    """
    if not store.delete_application(application_id):
        raise _not_found(application_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/{application_id}/tasks",
    response_model=ApplicationTask,
    status_code=status.HTTP_201_CREATED,
    summary="Add checklist item",
)
async def add_application_task(
    application_id: int,
    data: ApplicationTaskCreate,
    store: AppDataStore = Depends(get_store),
) -> ApplicationTask:
    """Append a checklist item to an application.

    Raises:
        HTTPException: If the application does not exist.
    """
    try:
        return store.add_application_task(application_id, data.task, data.due_date)
    except ApplicationNotFoundError:
        raise _not_found(application_id)


@router.post(
    "/{application_id}/tasks/{sub_task_id}/toggle",
    response_model=ApplicationTask,
    summary="Toggle checklist item",
)
async def toggle_application_task(
    application_id: int,
    sub_task_id: int,
    store: AppDataStore = Depends(get_store),
) -> ApplicationTask:
    """Flip completion of a checklist item.

    Raises:
        HTTPException: If the application or item does not exist.
    """
    try:
        return store.toggle_application_task(application_id, sub_task_id)
    except (ApplicationNotFoundError, ApplicationTaskNotFoundError) as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        )


@router.put(
    "/{application_id}/status",
    response_model=Application,
    summary="Change status",
)
async def update_application_status(
    application_id: int,
    data: StatusUpdate,
    store: AppDataStore = Depends(get_store),
) -> Application:
    """Change an application's status.

    Raises:
        HTTPException: If the application does not exist.
    """
    try:
        return store.update_application_status(application_id, data.status)
    except ApplicationNotFoundError:
        raise _not_found(application_id)
