# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Centralized event type definitions for the study planner.

The store publishes one of these after every successful mutation. Using
constants instead of string literals keeps publishers and pattern
subscribers in step.
"""


class EventTypes:
    """All planner event types organized by aggregate."""

    class Application:
        """Application aggregate events."""

        ADDED = "planner.application.added"
        UPDATED = "planner.application.updated"
        DELETED = "planner.application.deleted"
        REPLACED = "planner.application.replaced"

    class StudyTask:
        """Study task events."""

        ADDED = "planner.study_task.added"
        UPDATED = "planner.study_task.updated"
        DELETED = "planner.study_task.deleted"
        REPLACED = "planner.study_task.replaced"

    class Reminder:
        """Reminder state events."""

        CHANGED = "planner.reminder.changed"


class EventPatterns:
    """Wildcard patterns for subscribing to groups of events."""

    ALL_PLANNER = "planner.*"
    ALL_APPLICATION = "planner.application.*"
    ALL_STUDY_TASK = "planner.study_task.*"

    # Global wildcard
    ALL = "*"
