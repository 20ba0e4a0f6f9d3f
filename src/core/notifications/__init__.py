# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Planner notifications.

Derives the in-app alert list (overdue tasks, tasks due soon, reminders,
approaching application deadlines) from the planner state.

Key Components:
- derive_notifications: Pure function over study tasks, applications, now
- NotificationService: Per-store memoization driven by change events
- Monitors: One rule each

Usage:
    from src.core.notifications import NotificationService

    service = NotificationService(store)
    alerts = service.get_notifications()
"""

from src.core.notifications.monitors import (
    AlertData,
    AlertIcon,
    AlertPriority,
    AlertType,
    BaseMonitor,
    PlannerSnapshot,
)
from src.core.notifications.service import (
    NotificationService,
    default_monitors,
    derive_notifications,
    sort_alerts,
)

__all__ = [
    # Service
    "NotificationService",
    "derive_notifications",
    "default_monitors",
    "sort_alerts",
    # Base types
    "AlertData",
    "AlertIcon",
    "AlertPriority",
    "AlertType",
    "BaseMonitor",
    "PlannerSnapshot",
]
