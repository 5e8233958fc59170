from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from workout_tracker.core.db import get_db
from workout_tracker.handlers import templates
from workout_tracker.schemas.workouts import (
    CreateTemplateExerciseIn,
    CreateWorkoutTemplateIn,
    DeleteResult,
    GetTemplateExercisesIn,
    IdIn,
    TemplateExerciseOut,
    WorkoutTemplateOut,
)

router = APIRouter(prefix="/rpc", tags=["workout-templates"])


@router.post("/createWorkoutTemplate", response_model=WorkoutTemplateOut)
async def create_workout_template(
    payload: CreateWorkoutTemplateIn,
    db: AsyncSession = Depends(get_db),
):
    return await templates.create_workout_template(db, payload)


@router.get("/getWorkoutTemplates", response_model=list[WorkoutTemplateOut])
async def get_workout_templates(db: AsyncSession = Depends(get_db)):
    return await templates.get_workout_templates(db)


@router.get("/getWorkoutTemplate", response_model=WorkoutTemplateOut)
async def get_workout_template(
    params: Annotated[IdIn, Query()],
    db: AsyncSession = Depends(get_db),
):
    return await templates.get_workout_template(db, params.id)


@router.post("/deleteWorkoutTemplate", response_model=DeleteResult)
async def delete_workout_template(
    payload: IdIn,
    db: AsyncSession = Depends(get_db),
):
    return await templates.delete_workout_template(db, payload.id)


@router.post("/createTemplateExercise", response_model=TemplateExerciseOut)
async def create_template_exercise(
    payload: CreateTemplateExerciseIn,
    db: AsyncSession = Depends(get_db),
):
    return await templates.create_template_exercise(db, payload)


@router.get("/getTemplateExercises", response_model=list[TemplateExerciseOut])
async def get_template_exercises(
    params: Annotated[GetTemplateExercisesIn, Query()],
    db: AsyncSession = Depends(get_db),
):
    return await templates.get_template_exercises(db, params.template_id)
