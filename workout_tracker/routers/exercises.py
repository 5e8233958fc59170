from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from workout_tracker.core.db import get_db
from workout_tracker.handlers import exercises
from workout_tracker.schemas.workouts import (
    CreateExerciseIn,
    DeleteResult,
    ExerciseOut,
    GetExercisesIn,
    IdIn,
    UpdateExerciseIn,
)

router = APIRouter(prefix="/rpc", tags=["exercises"])


@router.post("/createExercise", response_model=ExerciseOut)
async def create_exercise(
    payload: CreateExerciseIn,
    db: AsyncSession = Depends(get_db),
):
    return await exercises.create_exercise(db, payload)


@router.get("/getExercises", response_model=list[ExerciseOut])
async def get_exercises(
    params: Annotated[GetExercisesIn, Query()],
    db: AsyncSession = Depends(get_db),
):
    return await exercises.get_exercises(db, params.workout_session_id)


@router.post("/updateExercise", response_model=ExerciseOut)
async def update_exercise(
    payload: UpdateExerciseIn,
    db: AsyncSession = Depends(get_db),
):
    return await exercises.update_exercise(db, payload)


@router.post("/deleteExercise", response_model=DeleteResult)
async def delete_exercise(
    payload: IdIn,
    db: AsyncSession = Depends(get_db),
):
    return await exercises.delete_exercise(db, payload.id)
