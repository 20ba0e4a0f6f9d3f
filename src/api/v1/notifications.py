# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Notification API endpoints.

- GET / - Derived alerts, ranked by priority then date
"""

import logging
from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field

from src.api.dependencies import get_notification_service
from src.core.notifications import NotificationService

logger = logging.getLogger(__name__)

router = APIRouter()


class AlertResponse(BaseModel):
    """A derived planner alert."""
    id: str = Field(description="Alert identifier")
    type: str = Field(description="overdue, due_soon, reminder or application_deadline")
    title: str
    message: str
    date: datetime = Field(description="Instant the alert is about")
    priority: str = Field(description="low, medium or high")
    icon: str


@router.get(
    "",
    response_model=list[AlertResponse],
    summary="List notifications",
    description="Alerts derived from the current study tasks and applications.",
)
async def list_notifications(
    now: Annotated[
        datetime | None,
        Query(description="Reference time (defaults to the server time)"),
    ] = None,
    service: NotificationService = Depends(get_notification_service),
) -> list[AlertResponse]:
    """List the current alerts.

    Args:
        now: Optional reference time.
        service: Notification service.

    Returns:
        Ranked alerts.
    """
    alerts = service.get_notifications(now)
    return [AlertResponse(**alert.to_dict()) for alert in alerts]
