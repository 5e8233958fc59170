from datetime import datetime
from enum import Enum
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field

# NUMERIC(8, 2) upper bound
MAX_WEIGHT = 999999.99
# INTEGER column range
INT_MIN = -(2**31)
INT_MAX = 2**31 - 1

RowId = Annotated[int, Field(ge=INT_MIN, le=INT_MAX)]
Count = Annotated[int, Field(ge=0, le=INT_MAX)]
SessionName = Annotated[str, Field(max_length=100)]
TemplateName = Annotated[str, Field(max_length=100)]
ExerciseName = Annotated[str, Field(max_length=120)]


class Category(str, Enum):
    STRENGTH = "Strength"
    CARDIO = "Cardio"
    PLYOMETRICS = "Plyometrics"
    FLEXIBILITY = "Flexibility"
    OTHER = "Other"


# --- Workout sessions ---

class CreateWorkoutSessionIn(BaseModel):
    name: SessionName
    template_id: RowId | None = None

class UpdateWorkoutSessionIn(BaseModel):
    id: RowId
    name: SessionName | None = None
    end_time: datetime | None = None

class WorkoutSessionOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    start_time: datetime
    end_time: datetime | None
    template_id: int | None
    created_at: datetime
    is_active: bool


# --- Exercises ---

class CreateExerciseIn(BaseModel):
    name: ExerciseName
    category: Category
    sets: Count
    reps: Count
    weight: float = Field(ge=0, le=MAX_WEIGHT)
    workout_session_id: RowId
    template_id: RowId | None = None

class UpdateExerciseIn(BaseModel):
    id: RowId
    name: ExerciseName | None = None
    category: Category | None = None
    sets: Count | None = None
    reps: Count | None = None
    weight: float | None = Field(default=None, ge=0, le=MAX_WEIGHT)

class GetExercisesIn(BaseModel):
    workout_session_id: RowId

class ExerciseOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    category: Category
    sets: int
    reps: int
    weight: float
    workout_session_id: int
    template_id: int | None
    created_at: datetime


# --- Templates ---

class CreateWorkoutTemplateIn(BaseModel):
    name: TemplateName
    description: str | None = None

class WorkoutTemplateOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str | None
    created_at: datetime


class CreateTemplateExerciseIn(BaseModel):
    template_id: RowId
    name: ExerciseName
    category: Category
    sets: Count
    reps: Count
    weight: float = Field(ge=0, le=MAX_WEIGHT)
    order_index: Count

class GetTemplateExercisesIn(BaseModel):
    template_id: RowId

class TemplateExerciseOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    template_id: int
    name: str
    category: Category
    sets: int
    reps: int
    weight: float
    order_index: int
    created_at: datetime


# --- Shared ---

class IdIn(BaseModel):
    id: RowId

class DeleteResult(BaseModel):
    success: bool

class HealthOut(BaseModel):
    status: str
    timestamp: datetime
