# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""In-memory planner store.

AppDataStore owns the applications and study tasks of one session and
keeps the calendar projection of every application in sync with it:

- Every mutation of an application (including its checklist and reminder)
  re-runs synchronization for that application.
- Deleting an application removes all of its calendar tasks.
- Reminder and completion edits made through a derived calendar task are
  written to the source application or checklist item, then synchronized.

The mutators callers use for everyday edits (add/update/delete and the
reminder mutators) return None or False when the id is unknown. The
browsing and checklist helpers raise the typed errors from
``src.domains.planner.errors`` instead.

Every successful mutation bumps ``revision`` and publishes an event on
the store's EventBus.

Example:
    store = AppDataStore()
    store.add_application(application)
    store.set_reminder(SubTaskTarget(application_id=1, sub_task_id=2), when)
    tasks = store.tasks_for_date(date(2025, 11, 10))
"""

import logging
from collections.abc import Callable, Iterable
from datetime import date, datetime
from typing import Any, Literal

from pydantic import BaseModel

from src.domains.planner.errors import (
    ApplicationNotFoundError,
    ApplicationTaskNotFoundError,
    DerivedTaskEditError,
    DuplicateIdError,
    StudyTaskNotFoundError,
)
from src.domains.planner.sync import (
    project_application,
    remove_application_tasks,
    sync_application_to_study,
)
from src.domains.planner.targets import Target, resolve_target
from src.infrastructure.events import EventBus, EventTypes
from src.models.planner import (
    ACTIVE_STATUSES,
    DERIVED_EDITABLE_FIELDS,
    NULLABLE_FIELDS,
    SUBMITTED_STATUSES,
    Application,
    ApplicationStats,
    ApplicationStatus,
    ApplicationTarget,
    ApplicationTask,
    ApplicationUpdate,
    AuthoredStudyTask,
    DerivedStudyTask,
    ReminderFields,
    StudyTaskCreate,
    StudyTaskTarget,
    StudyTaskUpdate,
    SubTaskTarget,
)
from src.utils.datetime import assume_utc

logger = logging.getLogger(__name__)

StudyTaskItem = AuthoredStudyTask | DerivedStudyTask
SortKey = Literal["university", "deadline", "status"]


def _changes(
    updates: BaseModel | dict[str, Any],
    schema: type[BaseModel],
) -> dict[str, Any]:
    """Normalize a partial update to snake_case keys that were actually set.

    None only clears fields that may be empty; elsewhere it means "leave
    unchanged".
    """
    if isinstance(updates, dict):
        updates = schema.model_validate(updates)
    data = updates.model_dump(exclude_unset=True)
    return {
        key: value
        for key, value in data.items()
        if value is not None or key in NULLABLE_FIELDS
    }



def _repeated(ids: list[Any]) -> list[Any]:
    """Ids that occur more than once, in first-seen order."""
    seen: set[Any] = set()
    repeated: list[Any] = []
    for item in ids:
        if item in seen and item not in repeated:
            repeated.append(item)
        seen.add(item)
    return repeated

class AppDataStore:
    """Applications and study tasks of one planner session.

    Attributes:
        events: Event bus the store publishes change events on.
    """

    def __init__(
        self,
        applications: Iterable[Application] | None = None,
        study_tasks: Iterable[StudyTaskItem] | None = None,
        event_bus: EventBus | None = None,
    ) -> None:
        """Initialize the store.

        Args:
            applications: Initial applications; each one is synchronized.
            study_tasks: Initial authored study tasks. Derived entries are
                ignored and recomputed from the applications.
            event_bus: Bus for change events. A private bus is created
                when omitted.
        """
        self.events = event_bus or EventBus()
        self._applications: list[Application] = []
        self._study_tasks: list[StudyTaskItem] = []
        self._revision = 0
        self._rebuild(applications or [], study_tasks or [])

        logger.debug(
            "AppDataStore initialized: applications=%d, study_tasks=%d",
            len(self._applications),
            len(self._study_tasks),
        )

    # =========================================================================
    # Read access
    # =========================================================================

    @property
    def applications(self) -> list[Application]:
        """Applications in insertion order."""
        return list(self._applications)

    @property
    def study_tasks(self) -> list[StudyTaskItem]:
        """Authored and derived study tasks."""
        return list(self._study_tasks)

    @property
    def revision(self) -> int:
        """Counter bumped by every successful mutation."""
        return self._revision

    def get_application(self, application_id: int) -> Application | None:
        """Get an application by id."""
        return next(
            (a for a in self._applications if a.id == application_id), None
        )

    def get_study_task(self, task_id: str) -> StudyTaskItem | None:
        """Get a study task by id."""
        return next((t for t in self._study_tasks if t.id == task_id), None)

    # =========================================================================
    # Application mutators
    # =========================================================================

    def add_application(self, application: Application) -> Application:
        """Add an application and project it onto the calendar.

        Raises:
            DuplicateIdError: If the id is already taken.
        """
        if self.get_application(application.id) is not None:
            raise DuplicateIdError(f"Application {application.id} already exists")

        self._applications.append(application)
        self._sync(application)
        logger.info(
            "Application added: id=%d, university=%s",
            application.id,
            application.university,
        )
        self._commit(EventTypes.Application.ADDED, application_id=application.id)
        return application

    def update_application(
        self,
        application_id: int,
        updates: ApplicationUpdate | dict[str, Any],
    ) -> Application | None:
        """Merge a partial update into an application and resynchronize.

        Args:
            application_id: Application to update.
            updates: Fields to change.

        Returns:
            The updated application, or None if it does not exist.
        """
        current = self.get_application(application_id)
        if current is None:
            logger.debug("update_application: no application %d", application_id)
            return None

        changes = _changes(updates, ApplicationUpdate)
        updated = Application.model_validate({**current.model_dump(), **changes})
        self._replace_application(updated)
        self._commit(
            EventTypes.Application.UPDATED,
            application_id=application_id,
            fields=sorted(changes),
        )
        return updated

    def delete_application(self, application_id: int) -> bool:
        """Delete an application and every calendar task derived from it.

        Returns:
            True if the application existed.
        """
        if self.get_application(application_id) is None:
            return False

        self._applications = [
            a for a in self._applications if a.id != application_id
        ]
        self._study_tasks = remove_application_tasks(self._study_tasks, application_id)
        logger.info("Application deleted: id=%d", application_id)
        self._commit(EventTypes.Application.DELETED, application_id=application_id)
        return True

    def set_applications(self, applications: Iterable[Application]) -> None:
        """Replace all applications and rebuild their calendar tasks.

        Raises:
            DuplicateIdError: If two applications share an id. The store is
                left unchanged.
        """
        self._rebuild(applications, self._authored_tasks())
        self._commit(
            EventTypes.Application.REPLACED, count=len(self._applications)
        )

    def add_application_task(
        self,
        application_id: int,
        task: str,
        due_date: date | None = None,
    ) -> ApplicationTask:
        """Append a checklist item to an application.

        The new item gets the next id after the largest existing one.

        Raises:
            ApplicationNotFoundError: If the application does not exist.
        """
        application = self._require_application(application_id)
        item = ApplicationTask(
            id=application.next_task_id(),
            task=task,
            due_date=due_date,
        )
        self._replace_application(
            application.model_copy(update={"tasks": [*application.tasks, item]})
        )
        self._commit(
            EventTypes.Application.UPDATED,
            application_id=application_id,
            fields=["tasks"],
        )
        return item

    def toggle_application_task(
        self, application_id: int, sub_task_id: int
    ) -> ApplicationTask:
        """Flip completion of a checklist item.

        Raises:
            ApplicationNotFoundError: If the application does not exist.
            ApplicationTaskNotFoundError: If the item does not exist.
        """
        application = self._require_application(application_id)
        item = application.find_task(sub_task_id)
        if item is None:
            raise ApplicationTaskNotFoundError(application_id, sub_task_id)

        toggled = item.model_copy(update={"completed": not item.completed})
        self._replace_sub_task(application, toggled)
        self._commit(
            EventTypes.Application.UPDATED,
            application_id=application_id,
            fields=["tasks"],
        )
        return toggled

    def update_application_status(
        self, application_id: int, status: ApplicationStatus
    ) -> Application:
        """Change an application's status.

        Raises:
            ApplicationNotFoundError: If the application does not exist.
        """
        application = self._require_application(application_id)
        updated = application.model_copy(update={"status": ApplicationStatus(status)})
        self._replace_application(updated)
        logger.info(
            "Application status changed: id=%d, %s -> %s",
            application_id,
            application.status.value,
            updated.status.value,
        )
        self._commit(
            EventTypes.Application.UPDATED,
            application_id=application_id,
            fields=["status"],
        )
        return updated

    # =========================================================================
    # Study task mutators
    # =========================================================================

    def add_study_task(
        self, task: AuthoredStudyTask | StudyTaskCreate
    ) -> AuthoredStudyTask:
        """Add a student-authored study task.

        Raises:
            DerivedTaskEditError: If given a derived task.
            DuplicateIdError: If the id is already taken.
        """
        if isinstance(task, DerivedStudyTask):
            raise DerivedTaskEditError(task.id)
        if isinstance(task, StudyTaskCreate):
            task = task.to_task()
        if self.get_study_task(task.id) is not None:
            raise DuplicateIdError(f"Study task '{task.id}' already exists")

        self._study_tasks.append(task)
        logger.info("Study task added: id=%s, subject=%s", task.id, task.subject)
        self._commit(EventTypes.StudyTask.ADDED, task_id=task.id)
        return task

    def update_study_task(
        self,
        task_id: str,
        updates: StudyTaskUpdate | dict[str, Any],
    ) -> StudyTaskItem | None:
        """Merge a partial update into a study task.

        Authored tasks are updated in place. For a derived task only the
        reminder fields and completion of a checklist task may change, and
        they are written to the source before resynchronizing.

        Args:
            task_id: Study task to update.
            updates: Fields to change.

        Returns:
            The updated task, or None if it does not exist.

        Raises:
            DerivedTaskEditError: If the update touches a field of a
                derived task that belongs to its application.
        """
        current = self.get_study_task(task_id)
        if current is None:
            logger.debug("update_study_task: no study task %s", task_id)
            return None

        changes = _changes(updates, StudyTaskUpdate)

        if isinstance(current, DerivedStudyTask):
            self._write_back(current, changes)
            self._commit(
                EventTypes.StudyTask.UPDATED,
                task_id=task_id,
                application_id=current.application_id,
                fields=sorted(changes),
            )
            return self.get_study_task(task_id)

        updated = AuthoredStudyTask.model_validate({**current.model_dump(), **changes})
        self._replace_study_task(updated)
        self._commit(EventTypes.StudyTask.UPDATED, task_id=task_id, fields=sorted(changes))
        return updated

    def delete_study_task(self, task_id: str) -> bool:
        """Delete an authored study task.

        Returns:
            True if the task existed.

        Raises:
            DerivedTaskEditError: If the task is derived from an application.
        """
        current = self.get_study_task(task_id)
        if current is None:
            return False
        if isinstance(current, DerivedStudyTask):
            raise DerivedTaskEditError(task_id)

        self._study_tasks = [t for t in self._study_tasks if t.id != task_id]
        logger.info("Study task deleted: id=%s", task_id)
        self._commit(EventTypes.StudyTask.DELETED, task_id=task_id)
        return True

    def set_study_tasks(self, study_tasks: Iterable[StudyTaskItem]) -> None:
        """Replace the authored study tasks.

        Derived entries in the input are ignored; the calendar tasks of the
        current applications are recomputed.

        Raises:
            DuplicateIdError: If two study tasks share an id.
        """
        self._rebuild(self._applications, study_tasks)
        self._commit(EventTypes.StudyTask.REPLACED, count=len(self._study_tasks))

    def toggle_study_task_completed(self, task_id: str) -> StudyTaskItem:
        """Flip completion of a study task.

        A derived checklist task toggles its checklist item.

        Raises:
            StudyTaskNotFoundError: If the task does not exist.
            DerivedTaskEditError: If the task is an application deadline,
                whose completion follows the application status.
        """
        current = self.get_study_task(task_id)
        if current is None:
            raise StudyTaskNotFoundError(task_id)

        updated = self.update_study_task(task_id, {"completed": not current.completed})
        if updated is None:
            raise StudyTaskNotFoundError(task_id)
        return updated

    # =========================================================================
    # Reminder mutators
    # =========================================================================

    def set_reminder(
        self,
        target: Target | int | str,
        reminder_date: datetime,
        *,
        is_application: bool = False,
    ) -> bool:
        """Turn on a reminder at the given time.

        Args:
            target: Typed target, or a legacy id resolved with
                ``is_application``.
            reminder_date: When the reminder fires.
            is_application: Legacy addressing flag.

        Returns:
            True if the target exists.
        """
        when = assume_utc(reminder_date)
        return self._apply_reminder(
            target,
            is_application,
            lambda _: {"reminder": True, "reminder_date": when},
        )

    def unset_reminder(
        self,
        target: Target | int | str,
        *,
        is_application: bool = False,
    ) -> bool:
        """Turn off a reminder and clear its time.

        Returns:
            True if the target exists.
        """
        return self._apply_reminder(
            target,
            is_application,
            lambda _: {"reminder": False, "reminder_date": None},
        )

    def toggle_task_reminder(
        self,
        target: Target | int | str,
        *,
        is_application: bool = False,
    ) -> bool:
        """Flip the reminder flag, keeping its time.

        Returns:
            True if the target exists.
        """
        return self._apply_reminder(
            target,
            is_application,
            lambda current: {"reminder": not current.reminder},
        )

    # =========================================================================
    # Browsing
    # =========================================================================

    def tasks_for_date(self, day: date) -> list[StudyTaskItem]:
        """Study tasks scheduled on a calendar date."""
        return [t for t in self._study_tasks if t.date == day]

    def schedule(self) -> list[StudyTaskItem]:
        """All study tasks ordered by date (stable within a day)."""
        return sorted(self._study_tasks, key=lambda t: t.date)

    def list_applications(
        self,
        status: ApplicationStatus | None = None,
        sort_by: SortKey = "deadline",
        descending: bool = False,
    ) -> list[Application]:
        """Filter and sort applications for the tracker.

        Args:
            status: Only return applications with this status.
            sort_by: "university", "deadline" or "status".
            descending: Reverse the order.

        Returns:
            Matching applications.
        """
        items = [
            a for a in self._applications if status is None or a.status == status
        ]
        keys = {
            "university": lambda a: a.university.casefold(),
            "deadline": lambda a: a.deadline,
            "status": lambda a: a.status.value,
        }
        return sorted(items, key=keys[sort_by], reverse=descending)

    def application_stats(self) -> ApplicationStats:
        """Count applications by tracker group."""
        return ApplicationStats(
            total=len(self._applications),
            submitted=sum(
                1 for a in self._applications if a.status in SUBMITTED_STATUSES
            ),
            accepted=sum(
                1
                for a in self._applications
                if a.status == ApplicationStatus.ACCEPTED
            ),
            in_progress=sum(
                1 for a in self._applications if a.status in ACTIVE_STATUSES
            ),
        )

    # =========================================================================
    # Internals
    # =========================================================================

    def _commit(self, event_type: str, **payload: Any) -> None:
        self._revision += 1
        self.events.publish(event_type, {"revision": self._revision, **payload})

    def _authored_tasks(self) -> list[AuthoredStudyTask]:
        return [t for t in self._study_tasks if isinstance(t, AuthoredStudyTask)]

    def _rebuild(
        self,
        applications: Iterable[Application],
        study_tasks: Iterable[StudyTaskItem],
    ) -> None:
        applications = list(applications)
        application_ids = [a.id for a in applications]
        if len(set(application_ids)) != len(application_ids):
            raise DuplicateIdError(
                f"Duplicate application ids: {_repeated(application_ids)}"
            )

        authored = [t for t in study_tasks if isinstance(t, AuthoredStudyTask)]
        derived: list[StudyTaskItem] = []
        for application in applications:
            derived.extend(project_application(application))
        rebuilt = [*authored, *derived]
        task_ids = [t.id for t in rebuilt]
        if len(set(task_ids)) != len(task_ids):
            raise DuplicateIdError(f"Duplicate study task ids: {_repeated(task_ids)}")

        self._applications = applications
        self._study_tasks = rebuilt

    def _sync(self, application: Application) -> None:
        self._study_tasks = sync_application_to_study(self._study_tasks, application)

    def _require_application(self, application_id: int) -> Application:
        application = self.get_application(application_id)
        if application is None:
            raise ApplicationNotFoundError(application_id)
        return application

    def _replace_application(self, application: Application) -> None:
        self._applications = [
            application if a.id == application.id else a for a in self._applications
        ]
        self._sync(application)

    def _replace_sub_task(self, application: Application, item: ApplicationTask) -> None:
        tasks = [item if t.id == item.id else t for t in application.tasks]
        self._replace_application(application.model_copy(update={"tasks": tasks}))

    def _replace_study_task(self, task: StudyTaskItem) -> None:
        self._study_tasks = [task if t.id == task.id else t for t in self._study_tasks]

    def _write_back(self, task: DerivedStudyTask, changes: dict[str, Any]) -> None:
        """Apply an edit of a derived task to its source and resynchronize."""
        forbidden = sorted(set(changes) - DERIVED_EDITABLE_FIELDS)
        if forbidden:
            raise DerivedTaskEditError(task.id, forbidden)

        ref = task.source_ref
        application = self._require_application(ref.application_id)

        if ref.sub_task_id is None:
            if "completed" in changes and changes["completed"] != task.completed:
                raise DerivedTaskEditError(task.id, ["completed"])
            source_changes = {k: v for k, v in changes.items() if k != "completed"}
            self._replace_application(application.model_copy(update=source_changes))
            return

        item = application.find_task(ref.sub_task_id)
        if item is None:
            raise ApplicationTaskNotFoundError(ref.application_id, ref.sub_task_id)
        self._replace_sub_task(application, item.model_copy(update=changes))

    def _apply_reminder(
        self,
        target: Target | int | str,
        is_application: bool,
        build: Callable[[ReminderFields], dict[str, Any]],
    ) -> bool:
        """Apply reminder field changes to whatever ``target`` addresses.

        ``build`` receives the current holder of the reminder fields and
        returns the changes to apply.
        """
        if not isinstance(target, ApplicationTarget | SubTaskTarget | StudyTaskTarget):
            target = resolve_target(target, is_application)

        if isinstance(target, StudyTaskTarget):
            task = self.get_study_task(target.task_id)
            if task is None:
                logger.debug("Reminder target not found: %s", target)
                return False
            if isinstance(task, DerivedStudyTask):
                ref = task.source_ref
                if ref.sub_task_id is None:
                    target = ApplicationTarget(application_id=ref.application_id)
                else:
                    target = SubTaskTarget(
                        application_id=ref.application_id,
                        sub_task_id=ref.sub_task_id,
                    )
            else:
                self._replace_study_task(task.model_copy(update=build(task)))
                self._commit(EventTypes.Reminder.CHANGED, task_id=task.id)
                return True

        application = self.get_application(target.application_id)
        if application is None:
            logger.debug("Reminder target not found: %s", target)
            return False

        if isinstance(target, ApplicationTarget):
            self._replace_application(
                application.model_copy(update=build(application))
            )
            self._commit(
                EventTypes.Reminder.CHANGED, application_id=application.id
            )
            return True

        item = application.find_task(target.sub_task_id)
        if item is None:
            logger.debug("Reminder target not found: %s", target)
            return False
        self._replace_sub_task(application, item.model_copy(update=build(item)))
        self._commit(
            EventTypes.Reminder.CHANGED,
            application_id=application.id,
            sub_task_id=item.id,
        )
        return True
