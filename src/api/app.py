# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""FastAPI Application Factory.

This module provides the main application factory for the study planner
API.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src import __version__
from src.api.routes import health
from src.api.v1 import router as v1_router
from src.core.config import Settings, get_settings
from src.core.notifications import NotificationService
from src.domains.planner import AppDataStore, create_seeded_store
from src.utils.logging import setup_logging

logger = logging.getLogger(__name__)


def build_store(settings: Settings) -> AppDataStore:
    """Create the planner store for one application instance.

    Args:
        settings: Application settings.

    Returns:
        A seeded store when seeding is enabled, an empty one otherwise.
    """
    if settings.planner.seed_on_startup:
        return create_seeded_store(settings.planner.seed_file)
    return AppDataStore()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Configures logging on startup and releases event subscriptions on
    shutdown.

    Args:
        app: The FastAPI application instance.

    Yields:
        None during application runtime.
    """
    settings = get_settings()
    setup_logging(settings)

    store: AppDataStore = app.state.store
    logger.info(
        "Starting study planner API (environment=%s, applications=%d, study_tasks=%d)",
        settings.environment,
        len(store.applications),
        len(store.study_tasks),
    )

    yield

    store.events.clear()
    logger.info("Shutting down study planner API")


def create_app(store: AppDataStore | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Each application instance owns one planner store and one notification
    service, kept on ``app.state``.

    Args:
        store: Store to serve. Built from settings when omitted.

    Returns:
        Configured FastAPI application instance.
    """
    settings = get_settings()

    app = FastAPI(
        title="Study Planner API",
        description="Application tracker and study calendar with derived notifications",
        version=__version__,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        openapi_url="/openapi.json" if settings.debug else None,
        lifespan=lifespan,
        redirect_slashes=False,
    )

    # =========================================================================
    # State
    # =========================================================================
    app.state.store = store if store is not None else build_store(settings)
    app.state.notification_service = NotificationService(
        app.state.store,
        settings.notifications,
    )

    # =========================================================================
    # Middleware
    # =========================================================================
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors.origins_list,
        allow_credentials=settings.cors.allow_credentials,
        allow_methods=settings.cors.allow_methods,
        allow_headers=settings.cors.allow_headers,
    )

    # =========================================================================
    # Routes
    # =========================================================================
    app.include_router(health.router, tags=["Health"])
    app.include_router(v1_router)

    return app
