"""
Integration tests for the session ledger endpoints.

Tests cover:
- Complete / skip today's workout
- Reflection merge outcomes (404 / 409)
- Undo today
- History, streak and stats reads
- Persistence failure reporting
"""
from datetime import datetime

import pytest

from application.use_cases.training_store import PERSISTENCE_WARNING


@pytest.mark.integration
class TestCompleteWorkout:
    def test_complete(self, client):
        response = client.post(
            "/sessions/complete",
            json={
                "exercise_progress": {"push-day-main": [True, True, True, True]},
                "mood": "great",
                "reflection": {"effort": 8, "tags": ["strong"]},
            },
        )

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["streak"] == 1
        assert body["persistence_warning"] is None
        record = body["record"]
        assert record["status"] == "completed"
        assert record["workout"]["id"] == "push-day"
        assert record["exerciseProgress"] == {"push-day-main": [True, True, True, True]}
        assert record["reflectionData"]["effort"] == 8
        assert body["stats"]["totalCompleted"] == 1

    def test_secondary_workout(self, client):
        response = client.post("/sessions/complete", json={"workout_id": "evening-cardio"})
        assert response.status_code == 200
        assert response.json()["record"]["workout"]["id"] == "evening-cardio"

    def test_unknown_workout(self, client):
        response = client.post("/sessions/complete", json={"workout_id": "yoga"})
        assert response.status_code == 404

    def test_too_many_tags(self, client):
        response = client.post(
            "/sessions/complete",
            json={"reflection": {"tags": ["a", "b", "c", "d"]}},
        )
        assert response.status_code == 422

    def test_effort_out_of_range(self, client):
        response = client.post("/sessions/complete", json={"reflection": {"effort": 11}})
        assert response.status_code == 422


@pytest.mark.integration
class TestSkipWorkout:
    def test_skip(self, client):
        response = client.post(
            "/sessions/skip",
            json={"reason": "Tired", "reflection": {"notes": "Bad sleep"}},
        )
        assert response.status_code == 200
        record = response.json()["record"]
        assert record["status"] == "skipped"
        assert record["skipReason"] == "tired"
        assert record["reflectionData"]["skipReason"] == "tired"
        assert response.json()["streak"] == 0

    def test_unknown_reason(self, client):
        response = client.post("/sessions/skip", json={"reason": "bored"})
        assert response.status_code == 422


@pytest.mark.integration
class TestReflection:
    def test_nothing_logged(self, client):
        response = client.put("/sessions/reflection", json={"effort": 5})
        assert response.status_code == 404

    def test_single_session(self, client):
        client.post("/sessions/complete", json={})
        response = client.put("/sessions/reflection", json={"effort": 6, "tags": [" focus ", "focus"]})
        assert response.status_code == 200
        assert response.json()["record"]["reflectionData"]["tags"] == ["focus"]

    def test_ambiguous(self, client):
        client.post("/sessions/complete", json={})
        client.post("/sessions/complete", json={"workout_id": "evening-cardio"})

        response = client.put("/sessions/reflection", json={"effort": 6})

        assert response.status_code == 409
        assert "workout_id" in response.json()["detail"]

    def test_targeted(self, client):
        client.post("/sessions/complete", json={})
        client.post("/sessions/complete", json={"workout_id": "evening-cardio"})

        response = client.put("/sessions/reflection", json={"effort": 6, "workout_id": "push-day"})

        assert response.status_code == 200
        assert response.json()["record"]["workout"]["id"] == "push-day"


@pytest.mark.integration
class TestResetToday:
    def test_undo(self, client):
        client.post("/sessions/complete", json={})
        response = client.delete("/sessions/today")
        assert response.status_code == 200
        assert response.json()["removed"] == 1
        assert client.get("/sessions").json()["count"] == 0

    def test_nothing_to_undo(self, client):
        response = client.delete("/sessions/today")
        assert response.status_code == 200
        assert response.json()["removed"] == 0


@pytest.mark.integration
class TestReads:
    def test_history_most_recent_first(self, client, clock):
        clock.set(datetime(2025, 1, 14, 18, 0))
        client.post("/sessions/complete", json={})
        clock.set(datetime(2025, 1, 15, 18, 0))
        client.post("/sessions/skip", json={"reason": "busy"})

        body = client.get("/sessions").json()

        assert body["count"] == 2
        assert [r["status"] for r in body["records"]] == ["skipped", "completed"]

    def test_history_limit(self, client):
        client.post("/sessions/complete", json={})
        client.post("/sessions/complete", json={"workout_id": "evening-cardio"})
        body = client.get("/sessions", params={"limit": 1}).json()
        assert len(body["records"]) == 1
        assert body["count"] == 2

    def test_streak_grace_day(self, client, clock):
        clock.set(datetime(2025, 1, 14, 18, 0))
        client.post("/sessions/complete", json={})
        clock.set(datetime(2025, 1, 15, 7, 0))

        body = client.get("/sessions/streak").json()

        assert body == {"streak": 1, "today": "2025-01-15"}

    def test_stats(self, client):
        client.post("/sessions/complete", json={})
        client.post("/sessions/skip", json={"reason": "time", "workout_id": "evening-cardio"})
        assert client.get("/sessions/stats").json() == {
            "totalCompleted": 1,
            "thisMonthCompleted": 1,
            "completionRate": 50,
        }


@pytest.mark.integration
class TestPersistenceFailure:
    def test_warning_and_health(self, client, kv_store):
        kv_store.fail_next_writes(3)

        response = client.post("/sessions/complete", json={})

        assert response.status_code == 200
        assert response.json()["persistence_warning"] == PERSISTENCE_WARNING
        assert client.get("/health").json() == {"status": "ok", "persistence": "pending"}
        # The session is still visible
        assert client.get("/sessions").json()["count"] == 1

    def test_recovers_on_next_write(self, client, kv_store):
        kv_store.fail_next_writes(3)
        client.post("/sessions/complete", json={})
        client.put("/sessions/reflection", json={"effort": 4})

        assert client.get("/health").json()["persistence"] == "ok"
        assert len(kv_store.get_all()["workout_history"]) == 1
