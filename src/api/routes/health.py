# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Health check endpoints.

This module provides health and readiness endpoints for the API.
"""

import logging
import time
from datetime import datetime, timezone
from typing import Any

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from src import __version__
from src.api.dependencies import get_store
from src.core.config import get_settings
from src.domains.planner import AppDataStore

logger = logging.getLogger(__name__)

router = APIRouter()

# Track server start time for uptime calculation
_server_start_time = time.time()


class StoreHealth(BaseModel):
    """Planner store status."""
    status: str = Field(description="Component status")
    revision: int = Field(description="Store revision")
    applications: int = Field(description="Number of applications")
    study_tasks: int = Field(description="Number of study tasks")


class HealthResponse(BaseModel):
    """Health check response model."""
    status: str = Field(description="Overall health status")
    timestamp: datetime = Field(description="Current server timestamp")
    version: str = Field(description="API version")
    environment: str = Field(description="Deployment environment")
    uptime_seconds: int = Field(description="Server uptime in seconds")
    store: StoreHealth


class ReadinessResponse(BaseModel):
    """Readiness check response model."""
    ready: bool = Field(description="Whether the service is ready")
    checks: dict[str, Any] = Field(description="Individual check results")


def check_store(store: AppDataStore) -> StoreHealth:
    """Summarize the planner store."""
    return StoreHealth(
        status="healthy",
        revision=store.revision,
        applications=len(store.applications),
        study_tasks=len(store.study_tasks),
    )


@router.get("/health", response_model=HealthResponse)
async def health_check(store: AppDataStore = Depends(get_store)) -> HealthResponse:
    """Check if the API is healthy.

    Returns:
        HealthResponse with store details.
    """
    settings = get_settings()
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(timezone.utc),
        version=__version__,
        environment=settings.environment,
        uptime_seconds=int(time.time() - _server_start_time),
        store=check_store(store),
    )


@router.get("/ready", response_model=ReadinessResponse)
async def readiness_check(store: AppDataStore = Depends(get_store)) -> ReadinessResponse:
    """Check if the API is ready to accept traffic.

    Returns:
        ReadinessResponse with individual check results.
    """
    store_health = check_store(store)
    return ReadinessResponse(
        ready=store_health.status == "healthy",
        checks={"store": store_health.model_dump()},
    )
