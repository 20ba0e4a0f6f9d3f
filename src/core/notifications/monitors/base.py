# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Base monitor classes and shared types for planner notifications.

This module provides the abstract base class for all notification
monitors and the data structures they share. Each monitor looks at one
snapshot of the planner (study tasks, applications, current time) and
reports the alerts its rule produces.

Day windows compare calendar dates with the UTC day containing "now".
Reminder windows compare instants in minutes.
"""

import logging
import math
from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any

from src.core.config.settings import NotificationSettings
from src.models.planner import Application, AuthoredStudyTask, DerivedStudyTask
from src.utils.datetime import as_instant, minutes_between


class AlertType(str, Enum):
    """Types of planner alerts."""

    OVERDUE = "overdue"
    DUE_SOON = "due_soon"
    REMINDER = "reminder"
    APPLICATION_DEADLINE = "application_deadline"


class AlertPriority(str, Enum):
    """Alert priority levels."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def rank(self) -> int:
        """Sort weight, higher first."""
        return _PRIORITY_RANK[self]


_PRIORITY_RANK = {
    AlertPriority.LOW: 1,
    AlertPriority.MEDIUM: 2,
    AlertPriority.HIGH: 3,
}


class AlertIcon(str, Enum):
    """Icon names rendered next to an alert."""

    WARNING = "alert-triangle"
    CLOCK = "clock"
    BELL = "bell"
    CALENDAR = "calendar"
    CHECKLIST = "check-square"


@dataclass
class AlertData:
    """A derived planner alert.

    Attributes:
        id: Stable identifier, built from the alert kind and source id.
        type: Alert type.
        title: Short human-readable title.
        message: Alert message.
        date: Instant the alert is about (dates map to midnight UTC).
        priority: Priority level.
        icon: Icon name.
    """

    id: str
    type: AlertType
    title: str
    message: str
    date: datetime
    priority: AlertPriority
    icon: AlertIcon

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-friendly dictionary."""
        return {
            "id": self.id,
            "type": self.type.value,
            "title": self.title,
            "message": self.message,
            "date": self.date.isoformat(),
            "priority": self.priority.value,
            "icon": self.icon.value,
        }


@dataclass(frozen=True)
class PlannerSnapshot:
    """Inputs of one derivation pass.

    Attributes:
        study_tasks: Authored and derived study tasks.
        applications: Applications.
        now: Reference instant (UTC).
    """

    study_tasks: Sequence[AuthoredStudyTask | DerivedStudyTask]
    applications: Sequence[Application]
    now: datetime


def describe_days(days: int) -> str:
    """Phrase a non-negative day distance ("today", "in 3 days")."""
    if days == 0:
        return "today"
    if days == 1:
        return "tomorrow"
    return f"in {days} days"


def describe_minutes(minutes: float) -> str:
    """Phrase a reminder offset relative to now.

    Past offsets read "N minutes ago", offsets under an hour read
    "in N minutes", anything later reads "in N hours".
    """
    if minutes <= 0:
        return f"{math.floor(-minutes)} minutes ago"
    if minutes < 60:
        return f"in {math.ceil(minutes)} minutes"
    hours = round(minutes / 60)
    return f"in {hours} hour" if hours == 1 else f"in {hours} hours"


class BaseMonitor(ABC):
    """Abstract base class for notification monitors.

    Monitors are stateless apart from their thresholds, which come from
    NotificationSettings.
    """

    def __init__(self, settings: NotificationSettings | None = None) -> None:
        """Initialize the monitor.

        Args:
            settings: Alert windows and thresholds. Defaults are used when
                omitted.
        """
        self.settings = settings or NotificationSettings()
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the monitor name."""
        ...

    @property
    @abstractmethod
    def alert_type(self) -> AlertType:
        """Return the type of alert this monitor generates."""
        ...

    @abstractmethod
    def check(self, snapshot: PlannerSnapshot) -> list[AlertData]:
        """Collect the alerts this monitor's rule produces.

        Args:
            snapshot: Planner state and current time.

        Returns:
            Alerts in input order.
        """
        ...

    def reminder_offset(
        self,
        now: datetime,
        reminder: bool,
        reminder_date: datetime | None,
    ) -> float | None:
        """Minutes from now to a reminder, if it is inside the alert window.

        Args:
            now: Reference instant.
            reminder: Reminder flag.
            reminder_date: Reminder time.

        Returns:
            Offset in minutes (negative once passed), or None when the
            reminder is off or outside the window.
        """
        if not reminder or reminder_date is None:
            return None
        minutes = minutes_between(now, reminder_date)
        lookbehind = self.settings.reminder_lookbehind_minutes
        lookahead = self.settings.reminder_lookahead_minutes
        if -lookbehind <= minutes <= lookahead:
            return minutes
        return None

    @staticmethod
    def instant(value: date | datetime) -> datetime:
        """Normalize an alert date for sorting."""
        return as_instant(value)
