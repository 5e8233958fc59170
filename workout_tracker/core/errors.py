import structlog
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError

logger = structlog.get_logger(__name__)


class WorkoutTrackerError(Exception):
    error_code = "ERROR"
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class NotFoundError(WorkoutTrackerError):
    error_code = "NOT_FOUND"
    status_code = status.HTTP_404_NOT_FOUND


class ConstraintViolationError(WorkoutTrackerError):
    error_code = "CONSTRAINT_VIOLATION"
    status_code = status.HTTP_409_CONFLICT


class WorkoutSessionNotFound(NotFoundError):
    def __init__(self, session_id: int):
        super().__init__(f"Workout session with id {session_id} not found")


class WorkoutTemplateNotFound(NotFoundError):
    def __init__(self, template_id: int):
        super().__init__(f"Template with id {template_id} not found")


class ExerciseNotFound(NotFoundError):
    def __init__(self, exercise_id: int):
        super().__init__(f"Exercise with id {exercise_id} not found")


class ActiveSessionExists(ConstraintViolationError):
    def __init__(self, session_id: int):
        super().__init__(f"Workout session {session_id} is still active")


def _error_body(error_code: str, detail: str) -> dict:
    return {"error": error_code, "detail": detail}


async def workout_tracker_error_handler(request: Request, exc: WorkoutTrackerError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=_error_body(exc.error_code, exc.detail))


async def integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
    logger.warning("integrity_error", path=request.url.path, error=str(exc.orig))
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content=_error_body(ConstraintViolationError.error_code, str(exc.orig)),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(WorkoutTrackerError, workout_tracker_error_handler)
    app.add_exception_handler(IntegrityError, integrity_error_handler)
