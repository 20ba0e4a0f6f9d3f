# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Projection of applications onto the study calendar.

Every application appears on the calendar as one deadline task plus one
task per checklist item. The projection is a pure function of the
application, so running it twice gives the same result and it never
looks at other applications' entries.

Scheduling date rules:
- Deadline task: the date part of the application's reminder when one is
  set, else the deadline.
- Checklist task: the date part of the item's reminder when one is set,
  else its due date, else the application deadline.
"""

from datetime import date, datetime

from src.models.planner import (
    APPLICATIONS_SUBJECT,
    Application,
    ApplicationTask,
    AuthoredStudyTask,
    DerivedStudyTask,
    SourceRef,
    TaskPriority,
)

DEADLINE_TASK_HOURS = 1
SUB_TASK_HOURS = 2


def _reminder_day(reminder: bool, reminder_date: datetime | None) -> date | None:
    if reminder and reminder_date is not None:
        return reminder_date.date()
    return None


def deadline_task(application: Application) -> DerivedStudyTask:
    """Build the deadline task for an application."""
    day = _reminder_day(application.reminder, application.reminder_date)
    return DerivedStudyTask(
        id=SourceRef(application_id=application.id).task_id,
        task=f"{application.university} - {application.program} Application Deadline",
        subject=APPLICATIONS_SUBJECT,
        date=day or application.deadline,
        completed=application.is_terminal,
        priority=TaskPriority.HIGH,
        estimated_hours=DEADLINE_TASK_HOURS,
        source_ref=SourceRef(application_id=application.id),
        reminder=application.reminder,
        reminder_date=application.reminder_date,
    )


def sub_task_task(application: Application, item: ApplicationTask) -> DerivedStudyTask:
    """Build the calendar task for one checklist item."""
    ref = SourceRef(application_id=application.id, sub_task_id=item.id)
    day = _reminder_day(item.reminder, item.reminder_date)
    return DerivedStudyTask(
        id=ref.task_id,
        task=f"{item.task} ({application.university})",
        subject=APPLICATIONS_SUBJECT,
        date=day or item.due_date or application.deadline,
        completed=item.completed,
        priority=TaskPriority.MEDIUM,
        estimated_hours=SUB_TASK_HOURS,
        source_ref=ref,
        reminder=item.reminder,
        reminder_date=item.reminder_date,
    )


def project_application(application: Application) -> list[DerivedStudyTask]:
    """Compute the calendar tasks of an application.

    Args:
        application: Application to project.

    Returns:
        The deadline task followed by one task per checklist item, in
        checklist order.
    """
    return [deadline_task(application)] + [
        sub_task_task(application, item) for item in application.tasks
    ]


def sync_application_to_study(
    study_tasks: list[AuthoredStudyTask | DerivedStudyTask],
    application: Application,
) -> list[AuthoredStudyTask | DerivedStudyTask]:
    """Replace an application's calendar tasks with a fresh projection.

    Every entry linked to ``application.id`` is dropped and the new
    projection is appended. Entries of other applications and authored
    tasks keep their order.

    Args:
        study_tasks: Current study task collection.
        application: Application to synchronize.

    Returns:
        New study task list.
    """
    kept = [t for t in study_tasks if t.application_id != application.id]
    return kept + project_application(application)


def remove_application_tasks(
    study_tasks: list[AuthoredStudyTask | DerivedStudyTask],
    application_id: int,
) -> list[AuthoredStudyTask | DerivedStudyTask]:
    """Drop every calendar task linked to an application."""
    return [t for t in study_tasks if t.application_id != application_id]
