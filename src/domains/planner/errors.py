# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Planner domain exceptions."""


class PlannerError(Exception):
    """Base exception for planner errors."""

    pass


class ApplicationNotFoundError(PlannerError):
    """Raised when an application is not found."""

    def __init__(self, application_id: int) -> None:
        self.application_id = application_id
        super().__init__(f"Application {application_id} not found")


class ApplicationTaskNotFoundError(PlannerError):
    """Raised when a checklist item is not found in its application."""

    def __init__(self, application_id: int, sub_task_id: int) -> None:
        self.application_id = application_id
        self.sub_task_id = sub_task_id
        super().__init__(
            f"Task {sub_task_id} not found in application {application_id}"
        )


class StudyTaskNotFoundError(PlannerError):
    """Raised when a study task is not found."""

    def __init__(self, task_id: str) -> None:
        self.task_id = task_id
        super().__init__(f"Study task '{task_id}' not found")


class DuplicateIdError(PlannerError):
    """Raised when an id is already taken."""

    pass


class DerivedTaskEditError(PlannerError):
    """Raised on a direct edit of a field owned by the source application."""

    def __init__(self, task_id: str, fields: list[str] | None = None) -> None:
        self.task_id = task_id
        self.fields = fields or []
        detail = f" ({', '.join(self.fields)})" if self.fields else ""
        super().__init__(
            f"Study task '{task_id}' is derived from an application and "
            f"cannot be edited directly{detail}"
        )


class InvalidTargetError(PlannerError):
    """Raised when a legacy reminder target id cannot be parsed."""

    pass


class SeedLoadError(PlannerError):
    """Raised when the seed fixture cannot be loaded or validated."""

    pass
