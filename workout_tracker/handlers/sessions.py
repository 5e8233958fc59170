import structlog
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from workout_tracker.core.config import settings
from workout_tracker.core.errors import ActiveSessionExists, WorkoutSessionNotFound
from workout_tracker.handlers.common import session_out
from workout_tracker.handlers.templates import get_template_or_404
from workout_tracker.models.exercise import Exercise
from workout_tracker.models.timestamps import as_utc, utcnow
from workout_tracker.models.workout_session import WorkoutSession
from workout_tracker.schemas.workouts import (
    CreateWorkoutSessionIn,
    DeleteResult,
    UpdateWorkoutSessionIn,
    WorkoutSessionOut,
)

logger = structlog.get_logger(__name__)


async def get_session_or_404(db: AsyncSession, session_id: int) -> WorkoutSession:
    session = await db.get(WorkoutSession, session_id)
    if session is None:
        logger.info("workout_session_not_found", session_id=session_id)
        raise WorkoutSessionNotFound(session_id)
    return session


async def create_workout_session(db: AsyncSession, payload: CreateWorkoutSessionIn) -> WorkoutSessionOut:
    if payload.template_id is not None:
        await get_template_or_404(db, payload.template_id)

    if settings.SINGLE_ACTIVE_SESSION:
        res = await db.execute(
            select(WorkoutSession.id).where(WorkoutSession.end_time.is_(None)).limit(1)
        )
        active_id = res.scalar_one_or_none()
        if active_id is not None:
            logger.info("workout_session_rejected_active_exists", active_session_id=active_id)
            raise ActiveSessionExists(active_id)

    now = utcnow()
    session = WorkoutSession(
        name=payload.name,
        template_id=payload.template_id,
        start_time=now,
        end_time=None,
        created_at=now,
    )
    db.add(session)
    await db.commit()
    await db.refresh(session)

    logger.info("workout_session_created", session_id=session.id, template_id=session.template_id)
    return session_out(session)


async def get_workout_session(db: AsyncSession, session_id: int) -> WorkoutSessionOut:
    return session_out(await get_session_or_404(db, session_id))


async def get_workout_sessions(db: AsyncSession) -> list[WorkoutSessionOut]:
    res = await db.execute(
        select(WorkoutSession).order_by(WorkoutSession.created_at.desc(), WorkoutSession.id.desc())
    )
    return [session_out(s) for s in res.scalars().all()]


async def update_workout_session(db: AsyncSession, payload: UpdateWorkoutSessionIn) -> WorkoutSessionOut:
    session = await get_session_or_404(db, payload.id)

    # None means "leave as is"; an ended session never goes back to active
    data = payload.model_dump(exclude={"id"}, exclude_none=True)
    if "name" in data:
        session.name = data["name"]
    if "end_time" in data:
        session.end_time = as_utc(data["end_time"])

    await db.commit()
    await db.refresh(session)

    logger.info("workout_session_updated", session_id=session.id, fields=sorted(data))
    return session_out(session)


async def delete_workout_session(db: AsyncSession, session_id: int) -> DeleteResult:
    """Delete a session together with its exercises.

    Unlike template and exercise deletes, success is only reported when the
    session row actually existed.
    """
    ex_del = await db.execute(delete(Exercise).where(Exercise.workout_session_id == session_id))
    res = await db.execute(delete(WorkoutSession).where(WorkoutSession.id == session_id))
    await db.commit()

    deleted = (res.rowcount or 0) > 0
    logger.info(
        "workout_session_deleted",
        session_id=session_id,
        deleted=deleted,
        deleted_exercises=ex_del.rowcount or 0,
    )
    return DeleteResult(success=deleted)
