# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""FastAPI dependency injection definitions.

The planner store and its notification service belong to one
application instance and live on ``app.state``. Endpoints receive them
through these dependencies.

Example:
    @router.get("/applications")
    async def list_applications(
        store: AppDataStore = Depends(get_store),
    ):
        ...
"""

import logging

from fastapi import HTTPException, Request, status

from src.core.notifications import NotificationService
from src.domains.planner import AppDataStore

logger = logging.getLogger(__name__)


def get_store(request: Request) -> AppDataStore:
    """Get the planner store of this application instance.

    Raises:
        HTTPException: If the store was not initialized.
    """
    store: AppDataStore | None = getattr(request.app.state, "store", None)
    if store is None:
        logger.error("Planner store not initialized")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Planner store not initialized",
        )
    return store


def get_notification_service(request: Request) -> NotificationService:
    """Get the notification service of this application instance.

    Raises:
        HTTPException: If the service was not initialized.
    """
    service: NotificationService | None = getattr(
        request.app.state, "notification_service", None
    )
    if service is None:
        logger.error("Notification service not initialized")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Notification service not initialized",
        )
    return service
