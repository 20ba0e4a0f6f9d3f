# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Monitors for study tasks on the calendar.

Rules (incomplete tasks only):
- Overdue: scheduled before today.
- Due soon: scheduled today or within the next few days.
- Reminder: reminder fires within the lookbehind/lookahead window.
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
from src.models.planner import TaskPriority
from src.utils.datetime import days_between


class OverdueTaskMonitor(BaseMonitor):
    """Alerts on incomplete study tasks whose date has passed."""

    @property
    def name(self) -> str:
        """Return the monitor name."""
        return "overdue_task_monitor"

    @property
    def alert_type(self) -> AlertType:
        """Return the type of alert this monitor generates."""
        return AlertType.OVERDUE

    def check(self, snapshot: PlannerSnapshot) -> list[AlertData]:
        """Collect overdue alerts.

        Args:
            snapshot: Planner state and current time.

        Returns:
            One high priority alert per overdue task.
        """
        alerts: list[AlertData] = []
        for task in snapshot.study_tasks:
            if task.completed:
                continue
            days_until = days_between(snapshot.now, task.date)
            if days_until >= 0:
                continue

            overdue = -days_until
            unit = "day" if overdue == 1 else "days"
            alerts.append(
                AlertData(
                    id=f"overdue-{task.id}",
                    type=self.alert_type,
                    title="Overdue Task",
                    message=f"{task.task} ({task.subject}) is {overdue} {unit} overdue",
                    date=self.instant(task.date),
                    priority=AlertPriority.HIGH,
                    icon=AlertIcon.WARNING,
                )
            )
        return alerts


class DueSoonTaskMonitor(BaseMonitor):
    """Alerts on incomplete study tasks due in the next few days.

    Priority is high when the task is due today or is itself a high
    priority task, medium otherwise.
    """

    @property
    def name(self) -> str:
        """Return the monitor name."""
        return "due_soon_task_monitor"

    @property
    def alert_type(self) -> AlertType:
        """Return the type of alert this monitor generates."""
        return AlertType.DUE_SOON

    def check(self, snapshot: PlannerSnapshot) -> list[AlertData]:
        """Collect due-soon alerts for study tasks."""
        window = self.settings.due_soon_days
        alerts: list[AlertData] = []
        for task in snapshot.study_tasks:
            if task.completed:
                continue
            days_until = days_between(snapshot.now, task.date)
            if not 0 <= days_until <= window:
                continue

            urgent = days_until == 0 or task.priority == TaskPriority.HIGH
            alerts.append(
                AlertData(
                    id=f"due-soon-{task.id}",
                    type=self.alert_type,
                    title="Due Today" if days_until == 0 else "Due Soon",
                    message=f"{task.task} ({task.subject}) is due {describe_days(days_until)}",
                    date=self.instant(task.date),
                    priority=AlertPriority.HIGH if urgent else AlertPriority.MEDIUM,
                    icon=AlertIcon.CLOCK,
                )
            )
        return alerts


class TaskReminderMonitor(BaseMonitor):
    """Alerts on study task reminders that fired recently or fire soon."""

    @property
    def name(self) -> str:
        """Return the monitor name."""
        return "task_reminder_monitor"

    @property
    def alert_type(self) -> AlertType:
        """Return the type of alert this monitor generates."""
        return AlertType.REMINDER

    def check(self, snapshot: PlannerSnapshot) -> list[AlertData]:
        """Collect reminder alerts for study tasks."""
        alerts: list[AlertData] = []
        for task in snapshot.study_tasks:
            if task.completed:
                continue
            minutes = self.reminder_offset(
                snapshot.now, task.reminder, task.reminder_date
            )
            if minutes is None:
                continue

            alerts.append(
                AlertData(
                    id=f"reminder-{task.id}",
                    type=self.alert_type,
                    title="Reminder",
                    message=f"{task.task}: {describe_minutes(minutes)}",
                    date=self.instant(task.reminder_date),
                    priority=AlertPriority.HIGH if minutes <= 0 else AlertPriority.MEDIUM,
                    icon=AlertIcon.BELL,
                )
            )
        return alerts
