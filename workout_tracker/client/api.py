from datetime import datetime
from typing import Any

import httpx
from pydantic import BaseModel

from workout_tracker.schemas.workouts import (
    Category,
    DeleteResult,
    ExerciseOut,
    HealthOut,
    TemplateExerciseOut,
    WorkoutSessionOut,
    WorkoutTemplateOut,
)


class ApiError(Exception):
    """Non-2xx answer from the workout tracker API."""

    def __init__(self, status_code: int, error: str, detail: Any):
        super().__init__(f"{status_code} {error}: {detail}")
        self.status_code = status_code
        self.error = error
        self.detail = detail


class WorkoutTrackerClient:
    """Procedure client for the workout tracker API.

    Queries go out as GET with the input in the query string, mutations as
    POST with a JSON body. Pass ``http_client`` to reuse an existing
    ``httpx.Client`` (FastAPI's TestClient works too).
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        *,
        http_client: httpx.Client | None = None,
        timeout: float = 10.0,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._owns_client = http_client is None
        self._http = http_client or httpx.Client(base_url=self.base_url, timeout=timeout)

    def close(self) -> None:
        if self._owns_client:
            self._http.close()

    def __enter__(self) -> "WorkoutTrackerClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # --- transport ---

    def _raise_for_status(self, resp: httpx.Response) -> None:
        if resp.is_success:
            return
        try:
            body = resp.json()
        except ValueError:
            body = {"detail": resp.text}
        error = body.get("error", "VALIDATION_ERROR" if resp.status_code == 422 else "HTTP_ERROR")
        raise ApiError(resp.status_code, error, body.get("detail"))

    def _query(self, name: str, params: dict[str, Any] | None = None) -> Any:
        resp = self._http.get(f"/rpc/{name}", params=params)
        self._raise_for_status(resp)
        return resp.json()

    def _mutation(self, name: str, payload: dict[str, Any]) -> Any:
        resp = self._http.post(f"/rpc/{name}", json=payload)
        self._raise_for_status(resp)
        return resp.json()

    @staticmethod
    def _parse(model: type[BaseModel], data: Any):
        return model.model_validate(data)

    @staticmethod
    def _parse_list(model: type[BaseModel], data: list) -> list:
        return [model.model_validate(item) for item in data]

    # --- health ---

    def healthcheck(self) -> HealthOut:
        return self._parse(HealthOut, self._query("healthcheck"))

    # --- workout sessions ---

    def create_workout_session(self, name: str, template_id: int | None = None) -> WorkoutSessionOut:
        payload: dict[str, Any] = {"name": name}
        if template_id is not None:
            payload["template_id"] = template_id
        return self._parse(WorkoutSessionOut, self._mutation("createWorkoutSession", payload))

    def get_workout_sessions(self) -> list[WorkoutSessionOut]:
        return self._parse_list(WorkoutSessionOut, self._query("getWorkoutSessions"))

    def get_workout_session(self, session_id: int) -> WorkoutSessionOut:
        return self._parse(WorkoutSessionOut, self._query("getWorkoutSession", {"id": session_id}))

    def update_workout_session(
        self,
        session_id: int,
        *,
        name: str | None = None,
        end_time: datetime | None = None,
    ) -> WorkoutSessionOut:
        payload: dict[str, Any] = {"id": session_id}
        if name is not None:
            payload["name"] = name
        if end_time is not None:
            payload["end_time"] = end_time.isoformat()
        return self._parse(WorkoutSessionOut, self._mutation("updateWorkoutSession", payload))

    def delete_workout_session(self, session_id: int) -> DeleteResult:
        return self._parse(DeleteResult, self._mutation("deleteWorkoutSession", {"id": session_id}))

    # --- exercises ---

    def create_exercise(
        self,
        *,
        name: str,
        category: Category | str,
        sets: int,
        reps: int,
        weight: float,
        workout_session_id: int,
        template_id: int | None = None,
    ) -> ExerciseOut:
        payload: dict[str, Any] = {
            "name": name,
            "category": Category(category).value,
            "sets": sets,
            "reps": reps,
            "weight": weight,
            "workout_session_id": workout_session_id,
        }
        if template_id is not None:
            payload["template_id"] = template_id
        return self._parse(ExerciseOut, self._mutation("createExercise", payload))

    def get_exercises(self, workout_session_id: int) -> list[ExerciseOut]:
        data = self._query("getExercises", {"workout_session_id": workout_session_id})
        return self._parse_list(ExerciseOut, data)

    def update_exercise(self, exercise_id: int, **fields: Any) -> ExerciseOut:
        payload = {k: v for k, v in fields.items() if v is not None}
        if "category" in payload:
            payload["category"] = Category(payload["category"]).value
        payload["id"] = exercise_id
        return self._parse(ExerciseOut, self._mutation("updateExercise", payload))

    def delete_exercise(self, exercise_id: int) -> DeleteResult:
        return self._parse(DeleteResult, self._mutation("deleteExercise", {"id": exercise_id}))

    # --- templates ---

    def create_workout_template(self, name: str, description: str | None = None) -> WorkoutTemplateOut:
        payload = {"name": name, "description": description}
        return self._parse(WorkoutTemplateOut, self._mutation("createWorkoutTemplate", payload))

    def get_workout_templates(self) -> list[WorkoutTemplateOut]:
        return self._parse_list(WorkoutTemplateOut, self._query("getWorkoutTemplates"))

    def get_workout_template(self, template_id: int) -> WorkoutTemplateOut:
        return self._parse(WorkoutTemplateOut, self._query("getWorkoutTemplate", {"id": template_id}))

    def delete_workout_template(self, template_id: int) -> DeleteResult:
        return self._parse(DeleteResult, self._mutation("deleteWorkoutTemplate", {"id": template_id}))

    def create_template_exercise(
        self,
        *,
        template_id: int,
        name: str,
        category: Category | str,
        sets: int,
        reps: int,
        weight: float,
        order_index: int,
    ) -> TemplateExerciseOut:
        payload = {
            "template_id": template_id,
            "name": name,
            "category": Category(category).value,
            "sets": sets,
            "reps": reps,
            "weight": weight,
            "order_index": order_index,
        }
        return self._parse(TemplateExerciseOut, self._mutation("createTemplateExercise", payload))

    def get_template_exercises(self, template_id: int) -> list[TemplateExerciseOut]:
        data = self._query("getTemplateExercises", {"template_id": template_id})
        return self._parse_list(TemplateExerciseOut, data)
