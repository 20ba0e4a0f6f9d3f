# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Reminder API endpoints.

This module provides endpoints for reminder state:
- POST /set - Turn on a reminder at a time
- POST /unset - Turn off a reminder
- POST /toggle - Flip the reminder flag

The body names the target either as a typed ``target`` or in the legacy
form ``{"id": ..., "isApplication": ...}``, where a checklist item is
written as ``"{applicationId}-{subTaskId}"``.

Example:
    POST /api/v1/reminders/set
    {
        "target": {"kind": "application_task", "applicationId": 1, "subTaskId": 3},
        "reminderDate": "2025-11-10T09:00:00Z"
    }
"""

import logging
from datetime import datetime
from typing import Callable

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import model_validator

from src.api.dependencies import get_store
from src.domains.planner import AppDataStore, InvalidTargetError, resolve_target
from src.models.planner import PlannerModel, ReminderTarget

logger = logging.getLogger(__name__)

router = APIRouter()


class ReminderRequest(PlannerModel):
    """Reminder target, typed or legacy."""

    target: ReminderTarget | None = None
    id: int | str | None = None
    is_application: bool = False

    @model_validator(mode="after")
    def validate_target(self) -> "ReminderRequest":
        """Exactly one addressing form must be used."""
        if (self.target is None) == (self.id is None):
            raise ValueError("Provide either 'target' or 'id'")
        return self


class SetReminderRequest(ReminderRequest):
    """Reminder target plus the time it fires."""

    reminder_date: datetime


class ReminderResponse(PlannerModel):
    """Result of a reminder change."""

    target: ReminderTarget
    updated: bool


def _apply(
    data: ReminderRequest,
    mutate: Callable[[ReminderTarget], bool],
) -> ReminderResponse:
    """Resolve the request target and run a store reminder mutator on it.

    Raises:
        HTTPException: If a legacy id cannot be parsed or the target does
            not exist.
    """
    if data.target is not None:
        target = data.target
    else:
        try:
            target = resolve_target(data.id, data.is_application)
        except InvalidTargetError as e:
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail=str(e),
            )

    if not mutate(target):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Reminder target not found",
        )
    return ReminderResponse(target=target, updated=True)


@router.post(
    "/set",
    response_model=ReminderResponse,
    summary="Set reminder",
    description="Turn on a reminder. Calendar dates follow the reminder date.",
)
async def set_reminder(
    data: SetReminderRequest,
    store: AppDataStore = Depends(get_store),
) -> ReminderResponse:
    """Set a reminder."""
    return _apply(data, lambda target: store.set_reminder(target, data.reminder_date))


@router.post(
    "/unset",
    response_model=ReminderResponse,
    summary="Unset reminder",
)
async def unset_reminder(
    data: ReminderRequest,
    store: AppDataStore = Depends(get_store),
) -> ReminderResponse:
    """Clear a reminder."""
    return _apply(data, store.unset_reminder)


@router.post(
    "/toggle",
    response_model=ReminderResponse,
    summary="Toggle reminder",
    description="Flip the reminder flag, keeping the reminder time.",
)
async def toggle_reminder(
    data: ReminderRequest,
    store: AppDataStore = Depends(get_store),
) -> ReminderResponse:
    """Toggle a reminder."""
    return _apply(data, store.toggle_task_reminder)
