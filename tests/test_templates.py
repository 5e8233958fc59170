from fastapi.testclient import TestClient


def test_create_template_defaults_description_to_null(client: TestClient):
    r = client.post("/rpc/createWorkoutTemplate", json={"name": "Leg Day"})
    assert r.status_code == 200, r.text
    body = r.json()
    assert body["name"] == "Leg Day"
    assert body["description"] is None
    assert isinstance(body["id"], int)
    assert body["created_at"]


def test_get_template_and_list(client: TestClient, make_template):
    first = make_template("Push Day", "Chest and triceps")
    second = make_template("Pull Day")
    assert first["id"] != second["id"]

    r_one = client.get("/rpc/getWorkoutTemplate", params={"id": first["id"]})
    assert r_one.status_code == 200
    assert r_one.json()["description"] == "Chest and triceps"

    r_all = client.get("/rpc/getWorkoutTemplates")
    assert r_all.status_code == 200
    assert [t["name"] for t in r_all.json()] == ["Push Day", "Pull Day"]


def test_get_missing_template_is_not_found(client: TestClient):
    r = client.get("/rpc/getWorkoutTemplate", params={"id": 424242})
    assert r.status_code == 404
    assert r.json()["error"] == "NOT_FOUND"
    assert "424242" in r.json()["detail"]


def test_delete_template_always_reports_success(client: TestClient, make_template):
    t = make_template()

    r = client.post("/rpc/deleteWorkoutTemplate", json={"id": t["id"]})
    assert r.status_code == 200
    assert r.json() == {"success": True}
    assert client.get("/rpc/getWorkoutTemplate", params={"id": t["id"]}).status_code == 404

    r_again = client.post("/rpc/deleteWorkoutTemplate", json={"id": t["id"]})
    assert r_again.json() == {"success": True}


def test_delete_template_does_not_cascade(client: TestClient, make_template, make_template_exercise):
    t = make_template()
    make_template_exercise(t["id"])

    r = client.post("/rpc/deleteWorkoutTemplate", json={"id": t["id"]})
    assert r.status_code == 409
    assert r.json()["error"] == "CONSTRAINT_VIOLATION"
    assert len(client.get("/rpc/getTemplateExercises", params={"template_id": t["id"]}).json()) == 1


def test_create_template_exercise_scenario(client: TestClient, make_template):
    t = make_template("Push Day")
    r = client.post(
        "/rpc/createTemplateExercise",
        json={
            "template_id": t["id"],
            "name": "Bench Press",
            "category": "Strength",
            "sets": 3,
            "reps": 10,
            "weight": 135.5,
            "order_index": 0,
        },
    )
    assert r.status_code == 200, r.text
    created = r.json()
    assert created["weight"] == 135.5
    assert created["template_id"] == t["id"]

    rows = client.get("/rpc/getTemplateExercises", params={"template_id": t["id"]}).json()
    assert len(rows) == 1
    assert rows[0]["weight"] == 135.5
    assert rows[0]["order_index"] == 0
    assert rows[0]["name"] == "Bench Press"


def test_create_template_exercise_unknown_template(client: TestClient):
    r = client.post(
        "/rpc/createTemplateExercise",
        json={
            "template_id": 999999,
            "name": "Bench Press",
            "category": "Strength",
            "sets": 3,
            "reps": 10,
            "weight": 135.5,
            "order_index": 0,
        },
    )
    assert r.status_code == 404
    assert r.json()["detail"] == "Template with id 999999 not found"


def test_template_exercises_sorted_by_order_index(client: TestClient, make_template, make_template_exercise):
    t = make_template()
    for name, idx in [("C", 5), ("A", 0), ("D", 5), ("B", 2)]:
        make_template_exercise(t["id"], name=name, order_index=idx)

    rows = client.get("/rpc/getTemplateExercises", params={"template_id": t["id"]}).json()
    assert [r["order_index"] for r in rows] == [0, 2, 5, 5]
    assert [r["name"] for r in rows] == ["A", "B", "C", "D"]


def test_template_exercises_empty_for_unknown_or_empty_template(client: TestClient, make_template):
    t = make_template()
    assert client.get("/rpc/getTemplateExercises", params={"template_id": t["id"]}).json() == []
    assert client.get("/rpc/getTemplateExercises", params={"template_id": 999999}).json() == []


def test_weight_is_rounded_to_two_decimals(client: TestClient, make_template, make_template_exercise):
    t = make_template()
    te = make_template_exercise(t["id"], weight=20.125)
    assert te["weight"] == 20.13
