from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from workout_tracker.core.db import get_db
from workout_tracker.handlers import sessions
from workout_tracker.schemas.workouts import (
    CreateWorkoutSessionIn,
    DeleteResult,
    IdIn,
    UpdateWorkoutSessionIn,
    WorkoutSessionOut,
)

router = APIRouter(prefix="/rpc", tags=["workout-sessions"])


@router.post("/createWorkoutSession", response_model=WorkoutSessionOut)
async def create_workout_session(
    payload: CreateWorkoutSessionIn,
    db: AsyncSession = Depends(get_db),
):
    return await sessions.create_workout_session(db, payload)


@router.get("/getWorkoutSessions", response_model=list[WorkoutSessionOut])
async def get_workout_sessions(db: AsyncSession = Depends(get_db)):
    return await sessions.get_workout_sessions(db)


@router.get("/getWorkoutSession", response_model=WorkoutSessionOut)
async def get_workout_session(
    params: Annotated[IdIn, Query()],
    db: AsyncSession = Depends(get_db),
):
    return await sessions.get_workout_session(db, params.id)


@router.post("/updateWorkoutSession", response_model=WorkoutSessionOut)
async def update_workout_session(
    payload: UpdateWorkoutSessionIn,
    db: AsyncSession = Depends(get_db),
):
    return await sessions.update_workout_session(db, payload)


@router.post("/deleteWorkoutSession", response_model=DeleteResult)
async def delete_workout_session(
    payload: IdIn,
    db: AsyncSession = Depends(get_db),
):
    return await sessions.delete_workout_session(db, payload.id)
