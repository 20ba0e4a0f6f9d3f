# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Planner data models.

This module defines the Pydantic models for university applications, their
checklists, and the study tasks shown on the study calendar. Study tasks
come in two variants discriminated on ``source``:

- AuthoredStudyTask: created and edited directly by the student.
- DerivedStudyTask: projected from an Application by synchronization and
  linked back to it through ``source_ref``.

Fields serialize in camelCase (``dueDate``, ``reminderDate``,
``estimatedHours``) and accept either camelCase or snake_case on input.
"""

import datetime as dt
from datetime import date, datetime
from enum import Enum
from typing import Annotated, Literal, Union
from uuid import uuid4

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    TypeAdapter,
    computed_field,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

from src.utils.datetime import assume_utc


DEADLINE_ID_PREFIX = "app-deadline-"
SUB_TASK_ID_PREFIX = "app-task-"
APPLICATIONS_SUBJECT = "Applications"


class ApplicationStatus(str, Enum):
    """Lifecycle of a university application."""

    PLANNING = "planning"
    IN_PROGRESS = "in-progress"
    SUBMITTED = "submitted"
    INTERVIEW = "interview"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    WAITLISTED = "waitlisted"


# No deadline action is left once an application reaches one of these.
# Waitlisted is intentionally absent.
TERMINAL_STATUSES = frozenset(
    {
        ApplicationStatus.SUBMITTED,
        ApplicationStatus.ACCEPTED,
        ApplicationStatus.REJECTED,
    }
)

# Grouping used by the tracker statistics
SUBMITTED_STATUSES = frozenset(
    {
        ApplicationStatus.SUBMITTED,
        ApplicationStatus.INTERVIEW,
        ApplicationStatus.ACCEPTED,
        ApplicationStatus.REJECTED,
        ApplicationStatus.WAITLISTED,
    }
)
ACTIVE_STATUSES = frozenset(
    {
        ApplicationStatus.PLANNING,
        ApplicationStatus.IN_PROGRESS,
    }
)


class TaskPriority(str, Enum):
    """Study task priority levels."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class TaskSource(str, Enum):
    """Where a study task comes from."""

    STUDY = "study"
    APPLICATION = "application"


class PlannerModel(BaseModel):
    """Base model with camelCase aliases."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


class ReminderFields(PlannerModel):
    """Reminder flag and time shared by applications, sub-tasks and tasks.

    Attributes:
        reminder: Whether a reminder is set.
        reminder_date: When the reminder fires (naive input is UTC).
    """

    reminder: bool = False
    reminder_date: datetime | None = None

    @field_validator("reminder_date")
    @classmethod
    def normalize_reminder_date(cls, v: datetime | None) -> datetime | None:
        return assume_utc(v)

    @property
    def has_active_reminder(self) -> bool:
        """True when the reminder is on and has a time to fire at."""
        return self.reminder and self.reminder_date is not None


class ApplicationTask(ReminderFields):
    """Checklist item of an application.

    Attributes:
        id: Identifier, unique within the owning application only.
        task: Checklist text.
        completed: Whether the item is done.
        due_date: Optional due date.
    """

    id: int
    task: str = Field(..., min_length=1)
    completed: bool = False
    due_date: date | None = None


class Application(ReminderFields):
    """A university/program admission attempt with a deadline and checklist.

    Attributes:
        id: Caller-assigned unique identifier.
        university: University name.
        program: Program name.
        country: Country of the university.
        deadline: Hard application deadline.
        status: Current application status.
        notes: Free-form notes.
        tasks: Ordered checklist.
    """

    id: int
    university: str = Field(..., min_length=1)
    program: str = Field(..., min_length=1)
    country: str = ""
    deadline: date
    status: ApplicationStatus = ApplicationStatus.PLANNING
    notes: str | None = None
    tasks: list[ApplicationTask] = Field(default_factory=list)

    @model_validator(mode="after")
    def validate_unique_task_ids(self) -> "Application":
        """Checklist ids must be unique within the application."""
        seen: set[int] = set()
        for item in self.tasks:
            if item.id in seen:
                raise ValueError(
                    f"Duplicate task id {item.id} in application {self.id}"
                )
            seen.add(item.id)
        return self

    @property
    def is_terminal(self) -> bool:
        """Whether the deadline needs no further action."""
        return self.status in TERMINAL_STATUSES

    def find_task(self, sub_task_id: int) -> ApplicationTask | None:
        """Get a checklist item by id."""
        return next((t for t in self.tasks if t.id == sub_task_id), None)

    def next_task_id(self) -> int:
        """Id for a new checklist item."""
        return max((t.id for t in self.tasks), default=0) + 1


class SourceRef(PlannerModel):
    """Link from a derived study task back to what it was projected from.

    ``sub_task_id`` is None for the application deadline task.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    application_id: int
    sub_task_id: int | None = None

    @property
    def is_deadline(self) -> bool:
        return self.sub_task_id is None

    @property
    def task_id(self) -> str:
        """Deterministic study task id for this source."""
        if self.sub_task_id is None:
            return f"{DEADLINE_ID_PREFIX}{self.application_id}"
        return f"{SUB_TASK_ID_PREFIX}{self.application_id}-{self.sub_task_id}"


class StudyTaskBase(ReminderFields):
    """Fields common to every study task.

    Attributes:
        id: Unique identifier.
        task: Task description.
        subject: Subject shown on the calendar.
        date: Effective scheduling date.
        completed: Whether the task is done.
        priority: Task priority.
        estimated_hours: Estimated effort in hours.
    """

    id: str
    task: str = Field(..., min_length=1)
    subject: str
    date: dt.date
    completed: bool = False
    priority: TaskPriority = TaskPriority.MEDIUM
    estimated_hours: float = Field(default=1, gt=0)


class AuthoredStudyTask(StudyTaskBase):
    """Study task created by the student."""

    id: str = Field(default_factory=lambda: uuid4().hex)
    source: Literal["study"] = "study"

    @property
    def application_id(self) -> None:
        return None

    @property
    def is_derived(self) -> bool:
        return False


class DerivedStudyTask(StudyTaskBase):
    """Study task projected from an application or one of its checklist items."""

    source: Literal["application"] = "application"
    source_ref: SourceRef

    @computed_field(alias="applicationId")
    @property
    def application_id(self) -> int:
        return self.source_ref.application_id

    @property
    def is_derived(self) -> bool:
        return True


StudyTask = Annotated[
    Union[AuthoredStudyTask, DerivedStudyTask],
    Field(discriminator="source"),
]

study_task_adapter: TypeAdapter[AuthoredStudyTask | DerivedStudyTask] = TypeAdapter(
    StudyTask
)


# =============================================================================
# Request models
# =============================================================================


class ApplicationUpdate(ReminderFields):
    """Partial update of an application. Only fields that are set apply."""

    reminder: bool | None = None  # type: ignore[assignment]
    university: str | None = Field(default=None, min_length=1)
    program: str | None = Field(default=None, min_length=1)
    country: str | None = None
    deadline: date | None = None
    status: ApplicationStatus | None = None
    notes: str | None = None
    tasks: list[ApplicationTask] | None = None


class ApplicationTaskCreate(PlannerModel):
    """New checklist item; the id is assigned by the store."""

    task: str = Field(..., min_length=1)
    due_date: date | None = None


class StatusUpdate(PlannerModel):
    """Status change request."""

    status: ApplicationStatus


class StudyTaskCreate(ReminderFields):
    """New student-authored study task."""

    id: str | None = None
    task: str = Field(..., min_length=1)
    subject: str
    date: dt.date
    completed: bool = False
    priority: TaskPriority = TaskPriority.MEDIUM
    estimated_hours: float = Field(default=1, gt=0)

    def to_task(self) -> AuthoredStudyTask:
        data = self.model_dump(exclude_none=True)
        return AuthoredStudyTask(**data)


class StudyTaskUpdate(ReminderFields):
    """Partial update of a study task. Only fields that are set apply."""

    reminder: bool | None = None  # type: ignore[assignment]
    task: str | None = Field(default=None, min_length=1)
    subject: str | None = None
    date: dt.date | None = None
    completed: bool | None = None
    priority: TaskPriority | None = None
    estimated_hours: float | None = Field(default=None, gt=0)


# Fields of a derived task the student may change; everything else is
# owned by the source application.
DERIVED_EDITABLE_FIELDS = frozenset({"reminder", "reminder_date", "completed"})

# Fields an update may explicitly clear
NULLABLE_FIELDS = frozenset({"notes", "reminder_date", "due_date"})


class ApplicationStats(PlannerModel):
    """Application counts shown on the tracker dashboard."""

    total: int = 0
    submitted: int = 0
    accepted: int = 0
    in_progress: int = 0


# =============================================================================
# Reminder targets
# =============================================================================


class ApplicationTarget(PlannerModel):
    """Reminder target: an application's own deadline."""

    kind: Literal["application"] = "application"
    application_id: int


class SubTaskTarget(PlannerModel):
    """Reminder target: a checklist item of an application."""

    kind: Literal["application_task"] = "application_task"
    application_id: int
    sub_task_id: int


class StudyTaskTarget(PlannerModel):
    """Reminder target: a study task, authored or derived."""

    kind: Literal["study_task"] = "study_task"
    task_id: str


ReminderTarget = Annotated[
    Union[ApplicationTarget, SubTaskTarget, StudyTaskTarget],
    Field(discriminator="kind"),
]
