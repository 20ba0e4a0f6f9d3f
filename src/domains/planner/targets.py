# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Reminder target resolution.

Reminders are addressed with typed targets (ApplicationTarget,
SubTaskTarget, StudyTaskTarget). Older clients address them with an id
plus an ``is_application`` flag, where a sub-task is written as
``"{application_id}-{sub_task_id}"``. resolve_target() turns that legacy
form into a typed target.
"""

import re

from src.domains.planner.errors import InvalidTargetError
from src.models.planner import ApplicationTarget, StudyTaskTarget, SubTaskTarget

_APPLICATION_ID = re.compile(r"^\d+$")
_SUB_TASK_ID = re.compile(r"^(\d+)-(\d+)$")

Target = ApplicationTarget | SubTaskTarget | StudyTaskTarget


def resolve_target(
    target_id: int | str,
    is_application: bool = False,
) -> Target:
    """Resolve a legacy ``(id, is_application)`` pair to a typed target.

    Args:
        target_id: Study task id, application id, or
            ``"{application_id}-{sub_task_id}"``.
        is_application: Whether the id refers to the application side.

    Returns:
        The typed reminder target.

    Raises:
        InvalidTargetError: If an application-side id matches neither form.
    """
    if not is_application:
        return StudyTaskTarget(task_id=str(target_id))

    if isinstance(target_id, int):
        return ApplicationTarget(application_id=target_id)

    raw = target_id.strip()
    if _APPLICATION_ID.match(raw):
        return ApplicationTarget(application_id=int(raw))

    match = _SUB_TASK_ID.match(raw)
    if match is None:
        raise InvalidTargetError(
            f"Cannot resolve application target from id '{target_id}'"
        )
    return SubTaskTarget(
        application_id=int(match.group(1)),
        sub_task_id=int(match.group(2)),
    )
