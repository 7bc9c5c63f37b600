"""
Integration tests for schedule, phase, program and health endpoints.

Today is 2025-01-15 (week 2, push-day) with an evening-cardio secondary
session configured.
"""
import json

import pytest
from fastapi.testclient import TestClient

from backend.main import create_app
from tests.fakes import create_program


@pytest.mark.integration
class TestHealth:
    def test_health(self, client):
        assert client.get("/health").json() == {"status": "ok", "persistence": "ok"}

    def test_store_missing(self, app, client):
        app.state.training_store = None
        assert client.get("/health").status_code == 503


@pytest.mark.integration
class TestScheduleDay:
    def test_today_with_secondary(self, client):
        body = client.get("/schedule/2025-01-15").json()
        assert [w["id"] for w in body["workouts"]] == ["push-day", "evening-cardio"]
        assert body["is_today"] is True
        assert body["status"] == "pending"
        assert body["week_focus"] == "Week 2"
        assert body["phase"]["weekNumber"] == 2
        assert body["phase"]["phaseLabel"] == "Build Phase"

    def test_other_day_has_no_secondary(self, client):
        body = client.get("/schedule/2025-01-13").json()
        assert [w["id"] for w in body["workouts"]] == ["full-body"]
        assert body["is_today"] is False

    def test_rest_day(self, client):
        body = client.get("/schedule/2025-01-16").json()
        assert body["is_rest_day"] is True
        assert body["status"] == "rest"

    def test_before_program(self, client):
        body = client.get("/schedule/2024-12-31").json()
        assert body["workouts"] == []
        assert body["phase"] is None

    def test_cycle_repeats(self, client):
        assert client.get("/schedule/2025-02-03").json()["workouts"][0]["id"] == "push-day"

    def test_completed_day(self, client):
        client.post("/sessions/complete", json={})
        body = client.get("/schedule/2025-01-15").json()
        assert body["status"] == "completed"
        assert len(body["records"]) == 1

    def test_single_workout(self, client):
        body = client.get("/schedule/2025-01-08/workout").json()
        assert body["workout"]["id"] == "pull-day"
        assert body["workout"]["exercises"][1]["info"] == "4x8 @ 70 kg"
        assert client.get("/schedule/2025-01-09/workout").json() == {
            "date": "2025-01-09",
            "workout": None,
            "is_rest_day": True,
        }

    def test_invalid_date(self, client):
        assert client.get("/schedule/not-a-date").status_code == 422


@pytest.mark.integration
class TestScheduleRanges:
    def test_week(self, client):
        body = client.get("/schedule/week/2025-01-15").json()
        assert body["start"] == "2025-01-13"
        assert body["end"] == "2025-01-19"
        assert len(body["days"]) == 7
        assert body["phase"]["weekNumber"] == 2

    def test_month(self, client):
        client.post("/sessions/complete", json={})
        body = client.get("/schedule/month/2025-01-01").json()
        assert body["month"] == "2025-01-01"
        assert len(body["days"]) == 31
        assert body["completed_days"] == 1


@pytest.mark.integration
class TestPhase:
    def test_phase(self, client):
        body = client.get("/phase/2025-03-10").json()
        assert body["program_start"] == "2025-01-06"
        assert body["total_weeks"] == 16
        assert body["phase"]["weekNumber"] == 10
        assert body["phase"]["phaseLabel"] == "Peak Phase"

    def test_outside_plan(self, client):
        assert client.get("/phase/2026-01-01").json()["phase"] is None


@pytest.mark.integration
class TestPrograms:
    @pytest.fixture
    def plan(self):
        return {
            "programName": "Home Plan",
            "weeks": 6,
            "schedule": [
                {"day": 3, "focus": "Full body", "exercises": [{"name": "Burpees", "sets": 3, "reps": 15}]},
            ],
            "progressionNotes": "Add one rep per set each week",
        }

    def test_active_program(self, client):
        body = client.get("/programs/active").json()
        assert body["id"] == "test-program"
        assert body["cycle_weeks"] == 4
        assert len(body["weeks"]) == 4

    def test_import_plan(self, client, plan):
        response = client.post("/programs/import", json={"plan": plan})

        assert response.status_code == 200
        body = response.json()
        assert body["activated"] is True
        assert body["program"]["id"] == "home-plan"
        assert body["program"]["start_date"] == "2025-01-13"
        # Wednesday is plan day 3
        assert client.get("/schedule/2025-01-15").json()["workouts"][0]["title"] == "Full body"

    def test_import_from_text(self, client, plan):
        response = client.post(
            "/programs/import",
            json={"text": "Sure! Here it is:\n" + json.dumps(plan), "activate": False},
        )
        assert response.status_code == 200
        assert response.json()["activated"] is False
        assert client.get("/programs/active").json()["id"] == "test-program"

    def test_invalid_plan(self, client):
        response = client.post("/programs/import", json={"plan": {"programName": "x", "schedule": []}})
        assert response.status_code == 422
        detail = response.json()["detail"]
        assert detail["message"] == "Invalid plan data"
        assert detail["issues"][0]["location"] == "schedule"

    def test_requires_one_source(self, client, plan):
        assert client.post("/programs/import", json={}).status_code == 422
        assert client.post("/programs/import", json={"plan": plan, "text": "x"}).status_code == 422

    def test_import_survives_restart(self, client, plan, settings, kv_store, clock):
        client.post("/programs/import", json={"plan": plan})

        restarted = TestClient(
            create_app(settings=settings, kv_store=kv_store, clock=clock, program=create_program())
        )

        body = restarted.get("/programs/active").json()
        assert body["id"] == "home-plan"
        assert body["start_date"] == "2025-01-13"
        assert restarted.get("/schedule/2025-01-15").json()["workouts"][0]["title"] == "Full body"

    def test_catalog(self, client, plan):
        client.post("/programs/import", json={"plan": plan, "activate": False})

        body = client.get("/programs").json()

        assert body["active_program_id"] == "test-program"
        assert [(p["id"], p["is_active"]) for p in body["programs"]] == [
            ("test-program", True),
            ("home-plan", False),
        ]

    def test_switch_active_program(self, client, plan):
        client.post("/programs/import", json={"plan": plan, "activate": False})

        response = client.put("/programs/active", json={"program_id": "home-plan"})

        assert response.status_code == 200
        assert response.json()["active_program_id"] == "home-plan"
        assert client.get("/programs/active").json()["id"] == "home-plan"

    def test_switch_to_unknown_program(self, client):
        assert client.put("/programs/active", json={"program_id": "nope"}).status_code == 404

    def test_delete_program(self, client, plan):
        client.post("/programs/import", json={"plan": plan})

        response = client.delete("/programs/home-plan")

        assert response.status_code == 200
        assert response.json()["active_program_id"] == "test-program"
        assert client.delete("/programs/home-plan").status_code == 404

    def test_configured_program_cannot_be_deleted(self, client):
        assert client.delete("/programs/test-program").status_code == 409
