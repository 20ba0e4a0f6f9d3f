# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Monitors for university applications.

Deadline tiers (default NotificationSettings):
- High: deadline within 7 days
- Medium: within 14 days
- Low: within 30 days

Checklist tiers: high within 3 days, medium within 7, low within 14.
"""

from src.core.notifications.monitors.base import (
    AlertData,
    AlertIcon,
    AlertPriority,
    AlertType,
    BaseMonitor,
    PlannerSnapshot,
    describe_days,
    describe_minutes,
)
from src.utils.datetime import days_between


def _tier(days: int, high: int, medium: int) -> AlertPriority:
    if days <= high:
        return AlertPriority.HIGH
    if days <= medium:
        return AlertPriority.MEDIUM
    return AlertPriority.LOW


class ApplicationDeadlineMonitor(BaseMonitor):
    """Alerts on application deadlines in the coming weeks."""

    @property
    def name(self) -> str:
        """Return the monitor name."""
        return "application_deadline_monitor"

    @property
    def alert_type(self) -> AlertType:
        """Return the type of alert this monitor generates."""
        return AlertType.APPLICATION_DEADLINE

    def check(self, snapshot: PlannerSnapshot) -> list[AlertData]:
        """Collect deadline alerts.

        Applications are checked whatever their status.

        Args:
            snapshot: Planner state and current time.

        Returns:
            One alert per application with a deadline inside the window.
        """
        s = self.settings
        alerts: list[AlertData] = []
        for application in snapshot.applications:
            days_until = days_between(snapshot.now, application.deadline)
            if not 0 <= days_until <= s.deadline_window_days:
                continue

            alerts.append(
                AlertData(
                    id=f"app-deadline-{application.id}",
                    type=self.alert_type,
                    title="Application Deadline",
                    message=(
                        f"{application.university} - {application.program} "
                        f"deadline is {describe_days(days_until)}"
                    ),
                    date=self.instant(application.deadline),
                    priority=_tier(
                        days_until, s.deadline_high_days, s.deadline_medium_days
                    ),
                    icon=AlertIcon.CALENDAR,
                )
            )
        return alerts


class ApplicationTaskMonitor(BaseMonitor):
    """Alerts on incomplete checklist items with an upcoming due date."""

    @property
    def name(self) -> str:
        """Return the monitor name."""
        return "application_task_monitor"

    @property
    def alert_type(self) -> AlertType:
        """Return the type of alert this monitor generates."""
        return AlertType.DUE_SOON

    def check(self, snapshot: PlannerSnapshot) -> list[AlertData]:
        """Collect due-soon alerts for checklist items."""
        s = self.settings
        alerts: list[AlertData] = []
        for application in snapshot.applications:
            for item in application.tasks:
                if item.completed or item.due_date is None:
                    continue
                days_until = days_between(snapshot.now, item.due_date)
                if not 0 <= days_until <= s.application_task_window_days:
                    continue

                alerts.append(
                    AlertData(
                        id=f"app-task-{application.id}-{item.id}",
                        type=self.alert_type,
                        title="Application Task Due",
                        message=(
                            f"{item.task} ({application.university}) is due "
                            f"{describe_days(days_until)}"
                        ),
                        date=self.instant(item.due_date),
                        priority=_tier(
                            days_until,
                            s.application_task_high_days,
                            s.application_task_medium_days,
                        ),
                        icon=AlertIcon.CHECKLIST,
                    )
                )
        return alerts


class ApplicationReminderMonitor(BaseMonitor):
    """Alerts on application deadline reminders."""

    @property
    def name(self) -> str:
        """Return the monitor name."""
        return "application_reminder_monitor"

    @property
    def alert_type(self) -> AlertType:
        """Return the type of alert this monitor generates."""
        return AlertType.REMINDER

    def check(self, snapshot: PlannerSnapshot) -> list[AlertData]:
        """Collect reminder alerts for applications."""
        alerts: list[AlertData] = []
        for application in snapshot.applications:
            minutes = self.reminder_offset(
                snapshot.now, application.reminder, application.reminder_date
            )
            if minutes is None:
                continue

            alerts.append(
                AlertData(
                    id=f"app-reminder-{application.id}",
                    type=self.alert_type,
                    title="Application Reminder",
                    message=(
                        f"{application.university} - {application.program}: "
                        f"{describe_minutes(minutes)}"
                    ),
                    date=self.instant(application.reminder_date),
                    priority=AlertPriority.HIGH if minutes <= 0 else AlertPriority.MEDIUM,
                    icon=AlertIcon.BELL,
                )
            )
        return alerts
