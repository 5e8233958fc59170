import structlog
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from workout_tracker.core.errors import WorkoutTemplateNotFound
from workout_tracker.handlers.common import (
    template_exercise_out,
    template_out,
    weight_to_column,
)
from workout_tracker.models.template_exercise import TemplateExercise
from workout_tracker.models.workout_template import WorkoutTemplate
from workout_tracker.schemas.workouts import (
    CreateTemplateExerciseIn,
    CreateWorkoutTemplateIn,
    DeleteResult,
    TemplateExerciseOut,
    WorkoutTemplateOut,
)

logger = structlog.get_logger(__name__)


async def get_template_or_404(db: AsyncSession, template_id: int) -> WorkoutTemplate:
    template = await db.get(WorkoutTemplate, template_id)
    if template is None:
        logger.info("workout_template_not_found", template_id=template_id)
        raise WorkoutTemplateNotFound(template_id)
    return template


async def create_workout_template(db: AsyncSession, payload: CreateWorkoutTemplateIn) -> WorkoutTemplateOut:
    t = WorkoutTemplate(
        name=payload.name,
        description=payload.description,
    )
    db.add(t)
    await db.commit()
    await db.refresh(t)

    logger.info("workout_template_created", template_id=t.id)
    return template_out(t)


async def get_workout_template(db: AsyncSession, template_id: int) -> WorkoutTemplateOut:
    return template_out(await get_template_or_404(db, template_id))


async def get_workout_templates(db: AsyncSession) -> list[WorkoutTemplateOut]:
    res = await db.execute(select(WorkoutTemplate).order_by(WorkoutTemplate.id.asc()))
    return [template_out(t) for t in res.scalars().all()]


async def delete_workout_template(db: AsyncSession, template_id: int) -> DeleteResult:
    """Delete a template. Reports success whether or not the row existed.

    Template exercises and sessions that reference the template are left
    alone, so the storage-level foreign keys reject the delete while any
    still exist.
    """
    await db.execute(delete(WorkoutTemplate).where(WorkoutTemplate.id == template_id))
    await db.commit()

    logger.info("workout_template_deleted", template_id=template_id)
    return DeleteResult(success=True)


async def create_template_exercise(db: AsyncSession, payload: CreateTemplateExerciseIn) -> TemplateExerciseOut:
    # Explicit pre-check so a bad template id reads as NotFound, not a raw FK error
    await get_template_or_404(db, payload.template_id)

    te = TemplateExercise(
        template_id=payload.template_id,
        name=payload.name,
        category=payload.category.value,
        sets=payload.sets,
        reps=payload.reps,
        weight=weight_to_column(payload.weight),
        order_index=payload.order_index,
    )
    db.add(te)
    await db.commit()
    await db.refresh(te)

    logger.info("template_exercise_created", template_id=te.template_id, template_exercise_id=te.id)
    return template_exercise_out(te)


async def get_template_exercises(db: AsyncSession, template_id: int) -> list[TemplateExerciseOut]:
    res = await db.execute(
        select(TemplateExercise)
        .where(TemplateExercise.template_id == template_id)
        .order_by(TemplateExercise.order_index.asc(), TemplateExercise.id.asc())
    )
    return [template_exercise_out(te) for te in res.scalars().all()]
