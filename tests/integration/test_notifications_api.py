# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Integration tests for Notifications and Health API endpoints."""

from fastapi import FastAPI
from fastapi.testclient import TestClient

from src.domains.planner import AppDataStore

NOW = "2025-11-10T12:00:00Z"


class TestNotificationsAPIEndpoints:
    """Tests for the notifications endpoint."""

    def test_list_notifications(self, client: TestClient) -> None:
        """Test the ranked alert list at a fixed time."""
        response = client.get("/api/v1/notifications", params={"now": NOW})

        assert response.status_code == 200
        alerts = response.json()
        assert [a["id"] for a in alerts] == [
            "due-soon-math-1",
            "app-task-1-2",
            "app-deadline-1",
        ]
        assert alerts[0] == {
            "id": "due-soon-math-1",
            "type": "due_soon",
            "title": "Due Soon",
            "message": "Complete math homework (Mathematics) is due in 2 days",
            "date": "2025-11-12T00:00:00Z",
            "priority": "high",
            "icon": "clock",
        }
        assert alerts[1]["priority"] == "medium"
        assert alerts[2]["priority"] == "low"

    def test_alerts_follow_store_changes(self, client: TestClient) -> None:
        """Test that a mutation is reflected on the next read."""
        before = client.get("/api/v1/notifications", params={"now": NOW}).json()

        client.post("/api/v1/study-tasks/math-1/toggle-complete")
        after = client.get("/api/v1/notifications", params={"now": NOW}).json()

        assert "due-soon-math-1" in [a["id"] for a in before]
        assert "due-soon-math-1" not in [a["id"] for a in after]

    def test_reminder_alerts(self, client: TestClient) -> None:
        """Test the two reminder alerts of an application reminder."""
        client.post(
            "/api/v1/reminders/set",
            json={
                "id": "1",
                "isApplication": True,
                "reminderDate": "2025-11-10T11:40:00Z",
            },
        )

        alerts = client.get("/api/v1/notifications", params={"now": NOW}).json()
        by_id = {a["id"]: a for a in alerts}

        assert by_id["app-reminder-1"]["message"] == (
            "Stanford University - MS in Computer Science: 20 minutes ago"
        )
        assert by_id["app-reminder-1"]["priority"] == "high"
        assert "reminder-app-deadline-1" in by_id


class TestHealthAPIEndpoints:
    """Tests for health endpoints."""

    def test_health(self, client: TestClient, store: AppDataStore) -> None:
        """Test the health response."""
        response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["store"]["applications"] == 1
        assert data["store"]["study_tasks"] == len(store.study_tasks)

    def test_ready(self, client: TestClient) -> None:
        """Test the readiness response."""
        response = client.get("/ready")

        assert response.json()["ready"] is True

    def test_lifespan_runs(self, app: FastAPI) -> None:
        """Test startup and shutdown with the application lifespan."""
        with TestClient(app) as client:
            assert client.get("/health").status_code == 200
