import os
import tempfile
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine

DB_PATH = Path(tempfile.mkdtemp(prefix="workout_tracker_tests_")) / "test_workouts.db"

# Settings are read at import time, so point them at the throwaway database first
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{DB_PATH}"
os.environ["APP_ENV"] = "test"
os.environ["LOG_LEVEL"] = "WARNING"


def _clean_tables() -> None:
    from workout_tracker.core.db import Base

    engine = create_engine(f"sqlite:///{DB_PATH}")
    with engine.begin() as connection:
        for table in reversed(Base.metadata.sorted_tables):
            connection.execute(table.delete())
    engine.dispose()


@pytest.fixture()
def client():
    from workout_tracker.main import app

    with TestClient(app) as c:
        yield c

    _clean_tables()


@pytest.fixture()
def make_template(client: TestClient):
    def _make(name: str = "Push Day", description: str | None = None) -> dict:
        r = client.post("/rpc/createWorkoutTemplate", json={"name": name, "description": description})
        assert r.status_code == 200, r.text
        return r.json()

    return _make


@pytest.fixture()
def make_session(client: TestClient):
    def _make(name: str = "Morning", template_id: int | None = None) -> dict:
        payload = {"name": name}
        if template_id is not None:
            payload["template_id"] = template_id
        r = client.post("/rpc/createWorkoutSession", json=payload)
        assert r.status_code == 200, r.text
        return r.json()

    return _make


@pytest.fixture()
def make_exercise(client: TestClient):
    def _make(session_id: int, **overrides) -> dict:
        payload = {
            "name": "Squat",
            "category": "Strength",
            "sets": 4,
            "reps": 8,
            "weight": 225.0,
            "workout_session_id": session_id,
        }
        payload.update(overrides)
        r = client.post("/rpc/createExercise", json=payload)
        assert r.status_code == 200, r.text
        return r.json()

    return _make


@pytest.fixture()
def make_template_exercise(client: TestClient):
    def _make(template_id: int, **overrides) -> dict:
        payload = {
            "template_id": template_id,
            "name": "Bench Press",
            "category": "Strength",
            "sets": 3,
            "reps": 10,
            "weight": 135.5,
            "order_index": 0,
        }
        payload.update(overrides)
        r = client.post("/rpc/createTemplateExercise", json=payload)
        assert r.status_code == 200, r.text
        return r.json()

    return _make
