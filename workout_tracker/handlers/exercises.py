import structlog
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from workout_tracker.core.errors import ExerciseNotFound
from workout_tracker.handlers.common import exercise_out, weight_to_column
from workout_tracker.handlers.sessions import get_session_or_404
from workout_tracker.handlers.templates import get_template_or_404
from workout_tracker.models.exercise import Exercise
from workout_tracker.schemas.workouts import (
    CreateExerciseIn,
    DeleteResult,
    ExerciseOut,
    UpdateExerciseIn,
)

logger = structlog.get_logger(__name__)


async def create_exercise(db: AsyncSession, payload: CreateExerciseIn) -> ExerciseOut:
    await get_session_or_404(db, payload.workout_session_id)
    if payload.template_id is not None:
        await get_template_or_404(db, payload.template_id)

    ex = Exercise(
        workout_session_id=payload.workout_session_id,
        template_id=payload.template_id,
        name=payload.name,
        category=payload.category.value,
        sets=payload.sets,
        reps=payload.reps,
        weight=weight_to_column(payload.weight),
    )
    db.add(ex)
    await db.commit()
    await db.refresh(ex)

    logger.info("exercise_created", exercise_id=ex.id, session_id=ex.workout_session_id)
    return exercise_out(ex)


async def get_exercises(db: AsyncSession, session_id: int) -> list[ExerciseOut]:
    res = await db.execute(
        select(Exercise)
        .where(Exercise.workout_session_id == session_id)
        .order_by(Exercise.id.asc())
    )
    return [exercise_out(e) for e in res.scalars().all()]


async def update_exercise(db: AsyncSession, payload: UpdateExerciseIn) -> ExerciseOut:
    ex = await db.get(Exercise, payload.id)
    if ex is None:
        logger.info("exercise_not_found", exercise_id=payload.id)
        raise ExerciseNotFound(payload.id)

    data = payload.model_dump(exclude={"id"}, exclude_none=True)
    if "name" in data:
        ex.name = data["name"]
    if "category" in data:
        ex.category = data["category"].value
    if "sets" in data:
        ex.sets = data["sets"]
    if "reps" in data:
        ex.reps = data["reps"]
    if "weight" in data:
        ex.weight = weight_to_column(data["weight"])

    await db.commit()
    await db.refresh(ex)

    logger.info("exercise_updated", exercise_id=ex.id, fields=sorted(data))
    return exercise_out(ex)


async def delete_exercise(db: AsyncSession, exercise_id: int) -> DeleteResult:
    await db.execute(delete(Exercise).where(Exercise.id == exercise_id))
    await db.commit()

    logger.info("exercise_deleted", exercise_id=exercise_id)
    return DeleteResult(success=True)
