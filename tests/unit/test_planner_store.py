# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for the in-memory planner store."""

from datetime import date, datetime, timezone

import pytest
from pydantic import ValidationError

from src.domains.planner import (
    AppDataStore,
    ApplicationNotFoundError,
    ApplicationTaskNotFoundError,
    DerivedTaskEditError,
    DuplicateIdError,
    StudyTaskNotFoundError,
)
from src.infrastructure.events import EventData, EventTypes
from src.models.planner import (
    Application,
    ApplicationStatus,
    ApplicationUpdate,
    AuthoredStudyTask,
    DerivedStudyTask,
    SourceRef,
    StudyTaskCreate,
    StudyTaskUpdate,
)


def _ids(store: AppDataStore) -> list[str]:
    return [t.id for t in store.study_tasks]


class TestConstruction:
    """Tests for building a store."""

    def test_initial_applications_are_synchronized(self, store: AppDataStore) -> None:
        """Test that every initial application is projected."""
        assert _ids(store) == [
            "math-1",
            "app-deadline-1",
            "app-task-1-1",
            "app-task-1-2",
        ]
        assert store.revision == 0

    def test_initial_derived_entries_are_recomputed(
        self, sample_application: Application
    ) -> None:
        """Test that stale derived input is dropped in favor of projection."""
        stale = DerivedStudyTask(
            id="app-task-9-9",
            task="Orphan",
            subject="Applications",
            date=date(2025, 1, 1),
            source_ref=SourceRef(application_id=9, sub_task_id=9),
        )

        store = AppDataStore([sample_application], [stale])

        assert "app-task-9-9" not in _ids(store)
        assert "app-deadline-1" in _ids(store)

    def test_empty_store(self) -> None:
        """Test a store without data."""
        store = AppDataStore()

        assert store.applications == []
        assert store.study_tasks == []

    def test_duplicate_initial_application_ids_raise(
        self, sample_application: Application
    ) -> None:
        """Test that two initial applications with one id are rejected."""
        with pytest.raises(DuplicateIdError):
            AppDataStore([sample_application, sample_application])

    def test_duplicate_initial_study_task_ids_raise(
        self, sample_study_task: AuthoredStudyTask
    ) -> None:
        """Test that two initial study tasks with one id are rejected."""
        with pytest.raises(DuplicateIdError):
            AppDataStore([], [sample_study_task, sample_study_task])


class TestApplicationMutators:
    """Tests for application add/update/delete."""

    def test_add_application_projects_it(
        self, store: AppDataStore, second_application: Application
    ) -> None:
        """Test that adding an application adds its deadline task."""
        store.add_application(second_application)

        assert store.get_application(2) == second_application
        assert "app-deadline-2" in _ids(store)

    def test_add_duplicate_application_raises(
        self, store: AppDataStore, sample_application: Application
    ) -> None:
        """Test that application ids are unique."""
        with pytest.raises(DuplicateIdError):
            store.add_application(sample_application)

    def test_update_application_merges_fields(self, store: AppDataStore) -> None:
        """Test that only the given fields change."""
        updated = store.update_application(
            1, ApplicationUpdate(notes="Ask Prof. Lee", deadline=date(2025, 12, 5))
        )

        assert updated is not None
        assert updated.notes == "Ask Prof. Lee"
        assert updated.university == "Stanford University"
        assert len(updated.tasks) == 2
        assert store.get_study_task("app-deadline-1").date == date(2025, 12, 5)

    def test_update_application_accepts_camel_case_dict(
        self, store: AppDataStore
    ) -> None:
        """Test a raw client dict as the update."""
        when = "2025-11-25T10:00:00Z"

        store.update_application(1, {"reminder": True, "reminderDate": when})

        application = store.get_application(1)
        assert application.reminder is True
        assert application.reminder_date == datetime(
            2025, 11, 25, 10, 0, tzinfo=timezone.utc
        )

    def test_update_can_clear_notes(self, store: AppDataStore) -> None:
        """Test that an explicit None clears a nullable field."""
        store.update_application(1, {"notes": "draft"})
        store.update_application(1, {"notes": None})

        assert store.get_application(1).notes is None

    def test_update_none_leaves_required_field(self, store: AppDataStore) -> None:
        """Test that None on a required field leaves it unchanged."""
        store.update_application(1, {"university": None})

        assert store.get_application(1).university == "Stanford University"

    def test_update_unknown_application_returns_none(
        self, store: AppDataStore
    ) -> None:
        """Test the lenient not-found result."""
        assert store.update_application(99, {"notes": "x"}) is None
        assert store.revision == 0

    def test_update_invalid_value_raises(self, store: AppDataStore) -> None:
        """Test that malformed input is rejected."""
        with pytest.raises(ValidationError):
            store.update_application(1, {"deadline": "not-a-date"})

    def test_terminal_status_completes_deadline_task(
        self, store: AppDataStore
    ) -> None:
        """Test that the deadline task follows the application status."""
        store.update_application(1, {"status": "submitted"})

        assert store.get_study_task("app-deadline-1").completed is True

        store.update_application_status(1, ApplicationStatus.WAITLISTED)

        assert store.get_study_task("app-deadline-1").completed is False

    def test_delete_application_cascades(
        self, store: AppDataStore, second_application: Application
    ) -> None:
        """Test that deleting removes every derived task of that application."""
        store.add_application(second_application)

        assert store.delete_application(1) is True

        assert store.get_application(1) is None
        assert _ids(store) == ["math-1", "app-deadline-2"]
        assert all(t.application_id != 1 for t in store.study_tasks)

    def test_delete_unknown_application(self, store: AppDataStore) -> None:
        """Test deleting an unknown id."""
        assert store.delete_application(99) is False

    def test_set_applications_prunes_orphans(
        self, store: AppDataStore, second_application: Application
    ) -> None:
        """Test that replacing applications rebuilds derived tasks."""
        store.set_applications([second_application])

        assert _ids(store) == ["math-1", "app-deadline-2"]

    def test_set_applications_duplicate_ids_leave_store_unchanged(
        self, store: AppDataStore, sample_application: Application
    ) -> None:
        """Test that a replacement with repeated ids is rejected as a whole."""
        received: list[EventData] = []
        store.events.subscribe("*", received.append)

        with pytest.raises(DuplicateIdError):
            store.set_applications([sample_application, sample_application])

        assert [a.id for a in store.applications] == [1]
        assert _ids(store).count("app-deadline-1") == 1
        assert store.revision == 0
        assert received == []


class TestChecklistHelpers:
    """Tests for checklist and status helpers."""

    def test_add_application_task_assigns_next_id(self, store: AppDataStore) -> None:
        """Test that a new item gets the next id and a calendar task."""
        item = store.add_application_task(1, "Pay fee", date(2025, 11, 20))

        assert item.id == 3
        derived = store.get_study_task("app-task-1-3")
        assert derived.task == "Pay fee (Stanford University)"
        assert derived.date == date(2025, 11, 20)

    def test_add_application_task_unknown_application(
        self, store: AppDataStore
    ) -> None:
        """Test the strict not-found error."""
        with pytest.raises(ApplicationNotFoundError):
            store.add_application_task(99, "Pay fee")

    def test_toggle_application_task(self, store: AppDataStore) -> None:
        """Test that toggling flips both the item and its calendar task."""
        toggled = store.toggle_application_task(1, 2)

        assert toggled.completed is True
        assert store.get_study_task("app-task-1-2").completed is True

    def test_toggle_unknown_sub_task(self, store: AppDataStore) -> None:
        """Test toggling a checklist id that does not exist."""
        with pytest.raises(ApplicationTaskNotFoundError):
            store.toggle_application_task(1, 42)

    def test_update_status_unknown_application(self, store: AppDataStore) -> None:
        """Test status change on an unknown application."""
        with pytest.raises(ApplicationNotFoundError):
            store.update_application_status(99, ApplicationStatus.ACCEPTED)


class TestStudyTaskMutators:
    """Tests for study task add/update/delete."""

    def test_add_from_create_request(self, store: AppDataStore) -> None:
        """Test adding an authored task from a create request."""
        task = store.add_study_task(
            StudyTaskCreate(task="Essay", subject="English", date=date(2025, 11, 11))
        )

        assert store.get_study_task(task.id) == task

    def test_add_duplicate_study_task(
        self, store: AppDataStore, sample_study_task: AuthoredStudyTask
    ) -> None:
        """Test that study task ids are unique."""
        with pytest.raises(DuplicateIdError):
            store.add_study_task(sample_study_task)

    def test_add_derived_task_rejected(self, store: AppDataStore) -> None:
        """Test that derived tasks cannot be added directly."""
        derived = store.get_study_task("app-deadline-1")

        with pytest.raises(DerivedTaskEditError):
            store.add_study_task(derived)  # type: ignore[arg-type]

    def test_update_authored_task(self, store: AppDataStore) -> None:
        """Test merging a partial update into an authored task."""
        updated = store.update_study_task(
            "math-1", StudyTaskUpdate(completed=True, estimated_hours=3)
        )

        assert updated.completed is True
        assert updated.estimated_hours == 3
        assert updated.subject == "Mathematics"

    def test_update_unknown_task_returns_none(self, store: AppDataStore) -> None:
        """Test the lenient not-found result."""
        assert store.update_study_task("nope", {"completed": True}) is None

    def test_update_derived_owned_field_raises(self, store: AppDataStore) -> None:
        """Test that fields owned by the application cannot be edited."""
        with pytest.raises(DerivedTaskEditError) as exc_info:
            store.update_study_task("app-task-1-2", {"task": "Rename", "date": "2025-11-01"})

        assert exc_info.value.fields == ["date", "task"]
        assert store.get_study_task("app-task-1-2").task == (
            "Write Statement of Purpose (Stanford University)"
        )

    def test_complete_derived_sub_task_writes_back(self, store: AppDataStore) -> None:
        """Test that completing a checklist task completes the checklist item."""
        updated = store.update_study_task("app-task-1-1", {"completed": True})

        assert updated.completed is True
        assert store.get_application(1).find_task(1).completed is True

    def test_complete_deadline_task_rejected(self, store: AppDataStore) -> None:
        """Test that deadline completion follows the status only."""
        with pytest.raises(DerivedTaskEditError):
            store.update_study_task("app-deadline-1", {"completed": True})

    def test_derived_reminder_edit_writes_back(self, store: AppDataStore) -> None:
        """Test that a reminder edit on a derived task lands on the source."""
        when = datetime(2025, 11, 14, 9, 0, tzinfo=timezone.utc)

        store.update_study_task(
            "app-deadline-1", {"reminder": True, "reminderDate": when}
        )

        assert store.get_application(1).reminder_date == when
        derived = store.get_study_task("app-deadline-1")
        assert derived.reminder is True
        assert derived.date == date(2025, 11, 14)

    def test_delete_authored_task(self, store: AppDataStore) -> None:
        """Test deleting an authored task."""
        assert store.delete_study_task("math-1") is True
        assert store.get_study_task("math-1") is None
        assert store.delete_study_task("math-1") is False

    def test_delete_derived_task_rejected(self, store: AppDataStore) -> None:
        """Test that derived tasks are removed only through their application."""
        with pytest.raises(DerivedTaskEditError):
            store.delete_study_task("app-task-1-1")

    def test_set_study_tasks_keeps_derived(self, store: AppDataStore) -> None:
        """Test that replacing authored tasks keeps the projection."""
        replacement = AuthoredStudyTask(
            id="bio-1", task="Lab report", subject="Biology", date=date(2025, 11, 13)
        )

        store.set_study_tasks([replacement])

        assert _ids(store) == [
            "bio-1",
            "app-deadline-1",
            "app-task-1-1",
            "app-task-1-2",
        ]

    def test_set_study_tasks_duplicate_ids_raise(
        self, store: AppDataStore, sample_study_task: AuthoredStudyTask
    ) -> None:
        """Test that repeated authored ids are rejected."""
        with pytest.raises(DuplicateIdError):
            store.set_study_tasks([sample_study_task, sample_study_task])

        assert _ids(store).count("math-1") == 1

    def test_toggle_study_task_completed(self, store: AppDataStore) -> None:
        """Test toggling authored and derived completion."""
        assert store.toggle_study_task_completed("math-1").completed is True
        assert store.toggle_study_task_completed("math-1").completed is False
        assert store.toggle_study_task_completed("app-task-1-2").completed is True

    def test_toggle_unknown_study_task(self, store: AppDataStore) -> None:
        """Test the strict not-found error."""
        with pytest.raises(StudyTaskNotFoundError):
            store.toggle_study_task_completed("nope")

    def test_toggle_raises_when_task_vanishes(
        self, store: AppDataStore, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test the not-found error when the update finds nothing."""
        monkeypatch.setattr(store, "update_study_task", lambda *args, **kwargs: None)

        with pytest.raises(StudyTaskNotFoundError):
            store.toggle_study_task_completed("math-1")


class TestBrowsing:
    """Tests for calendar and tracker views."""

    def test_tasks_for_date(self, store: AppDataStore) -> None:
        """Test filtering tasks by calendar date."""
        tasks = store.tasks_for_date(date(2025, 12, 1))

        assert [t.id for t in tasks] == ["app-deadline-1", "app-task-1-1"]

    def test_schedule_is_sorted_by_date(self, store: AppDataStore) -> None:
        """Test the date-ordered schedule."""
        assert [t.id for t in store.schedule()] == [
            "math-1",
            "app-task-1-2",
            "app-deadline-1",
            "app-task-1-1",
        ]

    def test_list_applications_filter_and_sort(
        self, store: AppDataStore, second_application: Application
    ) -> None:
        """Test status filtering and the sort keys."""
        store.add_application(second_application)

        assert [a.id for a in store.list_applications()] == [1, 2]
        assert [a.id for a in store.list_applications(descending=True)] == [2, 1]
        assert [a.id for a in store.list_applications(sort_by="university")] == [2, 1]
        assert [a.id for a in store.list_applications(sort_by="status")] == [2, 1]
        assert [
            a.id
            for a in store.list_applications(status=ApplicationStatus.IN_PROGRESS)
        ] == [2]

    def test_application_stats(
        self, store: AppDataStore, second_application: Application
    ) -> None:
        """Test tracker statistics."""
        store.add_application(second_application)
        store.update_application_status(1, ApplicationStatus.ACCEPTED)

        stats = store.application_stats()

        assert stats.total == 2
        assert stats.submitted == 1
        assert stats.accepted == 1
        assert stats.in_progress == 1


class TestChangeEvents:
    """Tests for revisions and published events."""

    def test_mutations_bump_revision_and_publish(self, store: AppDataStore) -> None:
        """Test one event per successful mutation."""
        received: list[EventData] = []
        store.events.subscribe("planner.*", received.append)

        store.update_application(1, {"notes": "x"})
        store.delete_study_task("math-1")

        assert store.revision == 2
        assert [e.event_type for e in received] == [
            EventTypes.Application.UPDATED,
            EventTypes.StudyTask.DELETED,
        ]
        assert received[0].payload == {
            "revision": 1,
            "application_id": 1,
            "fields": ["notes"],
        }

    def test_failed_mutation_publishes_nothing(self, store: AppDataStore) -> None:
        """Test that not-found results leave the revision alone."""
        received: list[EventData] = []
        store.events.subscribe("*", received.append)

        store.delete_application(99)
        store.update_study_task("nope", {"completed": True})

        assert store.revision == 0
        assert received == []
