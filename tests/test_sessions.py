from datetime import datetime, timezone

from fastapi.testclient import TestClient

from workout_tracker.core.config import settings


def test_create_session_starts_active(client: TestClient):
    r = client.post("/rpc/createWorkoutSession", json={"name": "Morning"})
    assert r.status_code == 200, r.text
    s = r.json()
    assert s["name"] == "Morning"
    assert s["end_time"] is None
    assert s["template_id"] is None
    assert s["is_active"] is True
    assert s["start_time"]


def test_create_session_from_template(client: TestClient, make_template, make_session):
    t = make_template()
    s = make_session("Push", template_id=t["id"])
    assert s["template_id"] == t["id"]


def test_create_session_unknown_template_is_not_found(client: TestClient):
    r = client.post("/rpc/createWorkoutSession", json={"name": "Ghost", "template_id": 999999})
    assert r.status_code == 404
    assert "999999" in r.json()["detail"]
    assert client.get("/rpc/getWorkoutSessions").json() == []


def test_sessions_listed_newest_first(client: TestClient, make_session):
    ids = [make_session(f"S{i}")["id"] for i in range(3)]
    listed = [s["id"] for s in client.get("/rpc/getWorkoutSessions").json()]
    assert listed == list(reversed(ids))


def test_get_missing_session_is_not_found(client: TestClient):
    r = client.get("/rpc/getWorkoutSession", params={"id": 123456})
    assert r.status_code == 404
    assert r.json()["error"] == "NOT_FOUND"


def test_end_session_scenario(client: TestClient, make_session, make_exercise):
    s = make_session("Morning")
    make_exercise(s["id"], name="Squat", category="Strength", sets=4, reps=8, weight=225.0)

    exercises = client.get("/rpc/getExercises", params={"workout_session_id": s["id"]}).json()
    assert len(exercises) == 1

    now = datetime.now(timezone.utc)
    r = client.post("/rpc/updateWorkoutSession", json={"id": s["id"], "end_time": now.isoformat()})
    assert r.status_code == 200, r.text

    fetched = client.get("/rpc/getWorkoutSession", params={"id": s["id"]}).json()
    assert fetched["end_time"] is not None
    assert fetched["is_active"] is False
    listed = client.get("/rpc/getWorkoutSessions").json()
    assert all(x["end_time"] is not None for x in listed if x["id"] == s["id"])


def test_update_session_is_partial(client: TestClient, make_session):
    s = make_session("Morning")

    r = client.post("/rpc/updateWorkoutSession", json={"id": s["id"], "name": "Evening"})
    assert r.status_code == 200
    updated = r.json()
    assert updated["name"] == "Evening"
    assert updated["end_time"] is None
    assert updated["start_time"] == s["start_time"]
    assert updated["created_at"] == s["created_at"]


def test_update_session_keeps_end_time_when_null_sent(client: TestClient, make_session):
    s = make_session()
    client.post("/rpc/updateWorkoutSession", json={"id": s["id"], "end_time": "2026-01-01T10:00:00+00:00"})

    r = client.post("/rpc/updateWorkoutSession", json={"id": s["id"], "end_time": None})
    assert r.json()["end_time"] is not None


def test_update_session_converts_end_time_to_utc(client: TestClient, make_session):
    s = make_session()
    r = client.post("/rpc/updateWorkoutSession", json={"id": s["id"], "end_time": "2026-01-01T12:00:00+02:00"})
    end_time = datetime.fromisoformat(r.json()["end_time"].replace("Z", "+00:00"))
    assert end_time == datetime(2026, 1, 1, 10, 0, tzinfo=timezone.utc)


def test_update_missing_session_is_not_found(client: TestClient):
    r = client.post("/rpc/updateWorkoutSession", json={"id": 999, "name": "x"})
    assert r.status_code == 404


def test_delete_session_cascades_to_exercises(client: TestClient, make_session, make_exercise):
    s = make_session()
    other = make_session("Other")
    for i in range(3):
        make_exercise(s["id"], name=f"Ex{i}")
    kept = make_exercise(other["id"])

    r = client.post("/rpc/deleteWorkoutSession", json={"id": s["id"]})
    assert r.json() == {"success": True}
    assert client.get("/rpc/getExercises", params={"workout_session_id": s["id"]}).json() == []
    assert client.get("/rpc/getWorkoutSession", params={"id": s["id"]}).status_code == 404

    remaining = client.get("/rpc/getExercises", params={"workout_session_id": other["id"]}).json()
    assert [e["id"] for e in remaining] == [kept["id"]]


def test_delete_session_without_exercises(client: TestClient, make_session):
    s = make_session()
    assert client.post("/rpc/deleteWorkoutSession", json={"id": s["id"]}).json() == {"success": True}


def test_delete_missing_session_reports_failure(client: TestClient):
    r = client.post("/rpc/deleteWorkoutSession", json={"id": 999999})
    assert r.status_code == 200
    assert r.json() == {"success": False}


def test_single_active_session_enforced_when_enabled(client: TestClient, make_session, monkeypatch):
    monkeypatch.setattr(settings, "SINGLE_ACTIVE_SESSION", True)
    first = make_session("First")

    r = client.post("/rpc/createWorkoutSession", json={"name": "Second"})
    assert r.status_code == 409
    assert r.json()["error"] == "CONSTRAINT_VIOLATION"

    client.post(
        "/rpc/updateWorkoutSession",
        json={"id": first["id"], "end_time": datetime.now(timezone.utc).isoformat()},
    )
    assert client.post("/rpc/createWorkoutSession", json={"name": "Second"}).status_code == 200


def test_multiple_active_sessions_allowed_by_default(client: TestClient, make_session):
    make_session("A")
    make_session("B")
    listed = client.get("/rpc/getWorkoutSessions").json()
    assert sum(1 for s in listed if s["is_active"]) == 2
