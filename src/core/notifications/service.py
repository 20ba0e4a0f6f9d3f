# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Notification service for deriving planner alerts.

derive_notifications() runs every monitor over one snapshot of the
planner and returns the alerts ranked by priority (high first), then by
date (earliest first). It is a pure function of its inputs.

NotificationService wraps it for one AppDataStore. It subscribes to the
store's change events and reuses the previous result until the store
changes or "now" moves to another minute.

Usage:
    alerts = derive_notifications(store.study_tasks, store.applications, now)

    service = NotificationService(store)
    alerts = service.get_notifications()
"""

import logging
from collections.abc import Sequence
from datetime import datetime

from src.core.config.settings import NotificationSettings
from src.core.notifications.monitors.applications import (
    ApplicationDeadlineMonitor,
    ApplicationReminderMonitor,
    ApplicationTaskMonitor,
)
from src.core.notifications.monitors.base import (
    AlertData,
    BaseMonitor,
    PlannerSnapshot,
)
from src.core.notifications.monitors.study_tasks import (
    DueSoonTaskMonitor,
    OverdueTaskMonitor,
    TaskReminderMonitor,
)
from src.domains.planner.store import AppDataStore
from src.infrastructure.events import EventData, EventPatterns
from src.models.planner import Application, AuthoredStudyTask, DerivedStudyTask
from src.utils.datetime import ensure_utc, utc_now

logger = logging.getLogger(__name__)


def default_monitors(settings: NotificationSettings | None = None) -> list[BaseMonitor]:
    """Build the monitor set, in rule order.

    Args:
        settings: Alert windows and thresholds.

    Returns:
        One instance of every planner monitor.
    """
    settings = settings or NotificationSettings()
    return [
        OverdueTaskMonitor(settings),
        DueSoonTaskMonitor(settings),
        TaskReminderMonitor(settings),
        ApplicationDeadlineMonitor(settings),
        ApplicationTaskMonitor(settings),
        ApplicationReminderMonitor(settings),
    ]


def sort_alerts(alerts: list[AlertData]) -> list[AlertData]:
    """Order alerts by priority rank descending, then date ascending."""
    return sorted(alerts, key=lambda a: (-a.priority.rank, a.date))


def derive_notifications(
    study_tasks: Sequence[AuthoredStudyTask | DerivedStudyTask],
    applications: Sequence[Application],
    now: datetime | None = None,
    settings: NotificationSettings | None = None,
    monitors: list[BaseMonitor] | None = None,
) -> list[AlertData]:
    """Derive the ranked alert list for a planner state.

    Args:
        study_tasks: Authored and derived study tasks.
        applications: Applications.
        now: Reference instant, defaults to the current time.
        settings: Alert windows and thresholds (ignored when ``monitors``
            is given).
        monitors: Monitors to run instead of the default set.

    Returns:
        Alerts ranked by priority, then date.
    """
    snapshot = PlannerSnapshot(
        study_tasks=study_tasks,
        applications=applications,
        now=ensure_utc(now) if now is not None else utc_now(),
    )

    alerts: list[AlertData] = []
    for monitor in monitors if monitors is not None else default_monitors(settings):
        found = monitor.check(snapshot)
        if found:
            logger.debug("Monitor %s generated %d alerts", monitor.name, len(found))
        alerts.extend(found)

    return sort_alerts(alerts)


class NotificationService:
    """Memoized alert derivation for one planner store.

    Attributes:
        monitors: Monitors run on every derivation.
    """

    def __init__(
        self,
        store: AppDataStore,
        settings: NotificationSettings | None = None,
    ) -> None:
        """Initialize the service and subscribe to store changes.

        Args:
            store: Store to derive alerts from.
            settings: Alert windows and thresholds.
        """
        self._store = store
        self.monitors = default_monitors(settings)
        self._cache_key: tuple[int, datetime] | None = None
        self._cached: list[AlertData] = []
        self._derivations = 0

        store.events.subscribe(EventPatterns.ALL_PLANNER, self._on_store_changed)

        logger.info(
            "NotificationService initialized with %d monitors",
            len(self.monitors),
        )

    @property
    def derivations(self) -> int:
        """How many times alerts were actually recomputed."""
        return self._derivations

    def get_notifications(self, now: datetime | None = None) -> list[AlertData]:
        """Get the current alert list.

        Args:
            now: Reference instant, defaults to the current time.

        Returns:
            Alerts ranked by priority, then date.
        """
        now = ensure_utc(now) if now is not None else utc_now()
        key = (self._store.revision, now.replace(second=0, microsecond=0))
        if key == self._cache_key:
            return list(self._cached)

        self._cached = derive_notifications(
            self._store.study_tasks,
            self._store.applications,
            now,
            monitors=self.monitors,
        )
        self._cache_key = key
        self._derivations += 1
        logger.debug(
            "Derived %d alerts at revision %d",
            len(self._cached),
            self._store.revision,
        )
        return list(self._cached)

    def invalidate(self) -> None:
        """Drop the memoized result."""
        self._cache_key = None

    def _on_store_changed(self, event: EventData) -> None:
        logger.debug("Store changed (%s), invalidating alerts", event.event_type)
        self.invalidate()
