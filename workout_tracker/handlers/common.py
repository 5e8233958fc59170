"""Row -> output conversions shared by the handlers.

Weights live in NUMERIC(8, 2) columns and come back from the driver as
``Decimal``; callers only ever see floats. Timestamps are reported in UTC.
"""
from decimal import ROUND_HALF_UP, Decimal

from workout_tracker.models.exercise import Exercise
from workout_tracker.models.template_exercise import TemplateExercise
from workout_tracker.models.timestamps import as_utc
from workout_tracker.models.workout_session import WorkoutSession
from workout_tracker.models.workout_template import WorkoutTemplate
from workout_tracker.schemas.workouts import (
    ExerciseOut,
    TemplateExerciseOut,
    WorkoutSessionOut,
    WorkoutTemplateOut,
)

WEIGHT_QUANTUM = Decimal("0.01")


def weight_to_column(value: float) -> Decimal:
    return Decimal(str(value)).quantize(WEIGHT_QUANTUM, rounding=ROUND_HALF_UP)


def weight_from_column(value: Decimal | float) -> float:
    return float(value)


def template_out(t: WorkoutTemplate) -> WorkoutTemplateOut:
    return WorkoutTemplateOut(
        id=t.id,
        name=t.name,
        description=t.description,
        created_at=as_utc(t.created_at),
    )


def template_exercise_out(te: TemplateExercise) -> TemplateExerciseOut:
    return TemplateExerciseOut(
        id=te.id,
        template_id=te.template_id,
        name=te.name,
        category=te.category,
        sets=te.sets,
        reps=te.reps,
        weight=weight_from_column(te.weight),
        order_index=te.order_index,
        created_at=as_utc(te.created_at),
    )


def session_out(s: WorkoutSession) -> WorkoutSessionOut:
    return WorkoutSessionOut(
        id=s.id,
        name=s.name,
        start_time=as_utc(s.start_time),
        end_time=as_utc(s.end_time),
        template_id=s.template_id,
        created_at=as_utc(s.created_at),
        is_active=s.is_active,
    )


def exercise_out(e: Exercise) -> ExerciseOut:
    return ExerciseOut(
        id=e.id,
        name=e.name,
        category=e.category,
        sets=e.sets,
        reps=e.reps,
        weight=weight_from_column(e.weight),
        workout_session_id=e.workout_session_id,
        template_id=e.template_id,
        created_at=as_utc(e.created_at),
    )
