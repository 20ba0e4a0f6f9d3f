# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Notification monitors for the study planner.

Monitors:
- OverdueTaskMonitor: Incomplete study tasks scheduled before today
- DueSoonTaskMonitor: Incomplete study tasks due in the next few days
- TaskReminderMonitor: Study task reminders around now
- ApplicationDeadlineMonitor: Application deadlines in the coming weeks
- ApplicationTaskMonitor: Checklist items with an upcoming due date
- ApplicationReminderMonitor: Application reminders around now

Usage:
    from src.core.notifications.monitors import OverdueTaskMonitor

    alerts = OverdueTaskMonitor().check(snapshot)
"""

from src.core.notifications.monitors.applications import (
    ApplicationDeadlineMonitor,
    ApplicationReminderMonitor,
    ApplicationTaskMonitor,
)
from src.core.notifications.monitors.base import (
    AlertData,
    AlertIcon,
    AlertPriority,
    AlertType,
    BaseMonitor,
    PlannerSnapshot,
)
from src.core.notifications.monitors.study_tasks import (
    DueSoonTaskMonitor,
    OverdueTaskMonitor,
    TaskReminderMonitor,
)

__all__ = [
    # Base types
    "AlertData",
    "AlertIcon",
    "AlertPriority",
    "AlertType",
    "BaseMonitor",
    "PlannerSnapshot",
    # Monitors
    "OverdueTaskMonitor",
    "DueSoonTaskMonitor",
    "TaskReminderMonitor",
    "ApplicationDeadlineMonitor",
    "ApplicationTaskMonitor",
    "ApplicationReminderMonitor",
]
