# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Seed data loader for the planner store.

The fixture applications and study tasks live in config/seed/planner.yaml
and are validated against the planner models before the store is built.
"""

from pathlib import Path
from typing import Any

from pydantic import ValidationError

from src.core.config.yaml_loader import YAMLLoadError, load_yaml
from src.domains.planner.errors import SeedLoadError
from src.domains.planner.store import AppDataStore
from src.infrastructure.events import EventBus
from src.models.planner import Application, AuthoredStudyTask
from src.utils.logging import get_logger

logger = get_logger(__name__)


def get_seed_file() -> Path:
    """Get the bundled seed fixture.

    Returns:
        Path to config/seed/planner.yaml
    """
    return Path(__file__).parent.parent.parent.parent / "config" / "seed" / "planner.yaml"


def _section(data: dict[str, Any], key: str, path: Path) -> list[Any]:
    items = data.get(key) or []
    if not isinstance(items, list):
        raise SeedLoadError(f"'{key}' in {path} must be a list")
    return items


def load_seed(
    seed_file: Path | None = None,
) -> tuple[list[Application], list[AuthoredStudyTask]]:
    """Load and validate seed applications and study tasks.

    Only authored study tasks are seeded; application tasks are derived
    when the store is built.

    Args:
        seed_file: Optional path to the fixture (defaults to the bundled one).

    Returns:
        Tuple of (applications, study_tasks).

    Raises:
        SeedLoadError: If the file cannot be read or fails validation.
    """
    path = seed_file or get_seed_file()

    try:
        data = load_yaml(path)
    except YAMLLoadError as e:
        raise SeedLoadError(str(e)) from e

    try:
        applications = [
            Application.model_validate(item)
            for item in _section(data, "applications", path)
        ]
        study_tasks = [
            AuthoredStudyTask.model_validate(item)
            for item in _section(data, "study_tasks", path)
        ]
    except ValidationError as e:
        raise SeedLoadError(f"Validation failed for seed file '{path}': {e}") from e

    ids = [a.id for a in applications]
    if len(ids) != len(set(ids)):
        raise SeedLoadError(f"Duplicate application ids in seed file '{path}'")

    logger.debug(
        "loaded_seed",
        path=str(path),
        applications=len(applications),
        study_tasks=len(study_tasks),
    )
    return applications, study_tasks


def create_seeded_store(
    seed_file: Path | None = None,
    event_bus: EventBus | None = None,
) -> AppDataStore:
    """Build a store holding the seed data.

    Synchronization runs once per seeded application.

    Args:
        seed_file: Optional path to the fixture.
        event_bus: Optional event bus for the store.

    Returns:
        Populated AppDataStore.
    """
    applications, study_tasks = load_seed(seed_file)
    store = AppDataStore(applications, study_tasks, event_bus=event_bus)
    logger.info(
        "seeded_store",
        applications=len(store.applications),
        study_tasks=len(store.study_tasks),
    )
    return store
