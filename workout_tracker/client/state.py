"""Client application state.

All UI state lives in one immutable ``AppState``. Changes happen only by
dispatching an action to the ``Store``, which runs ``reduce`` and notifies
subscribers with the new state.
"""
from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone

from workout_tracker.schemas.workouts import (
    Category,
    ExerciseOut,
    TemplateExerciseOut,
    WorkoutSessionOut,
    WorkoutTemplateOut,
)

CATEGORY_COLORS: dict[Category, str] = {
    Category.STRENGTH: "blue",
    Category.CARDIO: "red",
    Category.PLYOMETRICS: "green",
    Category.FLEXIBILITY: "purple",
    Category.OTHER: "gray",
}


def category_color(category: Category | str) -> str:
    return CATEGORY_COLORS[Category(category)]


def format_duration(start: datetime, end: datetime | None = None) -> str:
    """Whole minutes between ``start`` and ``end`` (now for open sessions)."""
    end = end or datetime.now(timezone.utc)
    minutes = int((end - start).total_seconds() // 60)
    return f"{minutes} min"


# --- actions ---

@dataclass(frozen=True)
class SessionsLoaded:
    sessions: list[WorkoutSessionOut]

@dataclass(frozen=True)
class SessionStarted:
    session: WorkoutSessionOut

@dataclass(frozen=True)
class SessionEnded:
    session: WorkoutSessionOut

@dataclass(frozen=True)
class ExercisesLoaded:
    session_id: int
    exercises: list[ExerciseOut]

@dataclass(frozen=True)
class ExerciseLogged:
    exercise: ExerciseOut

@dataclass(frozen=True)
class ExerciseRemoved:
    exercise_id: int

@dataclass(frozen=True)
class TemplatesLoaded:
    templates: list[WorkoutTemplateOut]

@dataclass(frozen=True)
class TemplateExercisesLoaded:
    template_id: int
    exercises: list[TemplateExerciseOut]

@dataclass(frozen=True)
class RestTimerTicked:
    remaining: int

@dataclass(frozen=True)
class RestTimerCleared:
    pass


@dataclass(frozen=True)
class AppState:
    sessions: tuple[WorkoutSessionOut, ...] = ()
    active_session: WorkoutSessionOut | None = None
    active_exercises: tuple[ExerciseOut, ...] = ()
    templates: tuple[WorkoutTemplateOut, ...] = ()
    template_exercises: dict[int, tuple[TemplateExerciseOut, ...]] = field(default_factory=dict)
    rest_remaining: int | None = None


def _find_active(sessions) -> WorkoutSessionOut | None:
    # getWorkoutSessions is newest first, so the first open one wins
    return next((s for s in sessions if s.end_time is None), None)


def reduce(state: AppState, action) -> AppState:
    if isinstance(action, SessionsLoaded):
        sessions = tuple(action.sessions)
        active = _find_active(sessions)
        exercises = state.active_exercises
        if active is None or (state.active_session and state.active_session.id != active.id):
            exercises = ()
        return replace(state, sessions=sessions, active_session=active, active_exercises=exercises)

    if isinstance(action, SessionStarted):
        others = tuple(s for s in state.sessions if s.id != action.session.id)
        return replace(
            state,
            sessions=(action.session,) + others,
            active_session=action.session,
            active_exercises=(),
        )

    if isinstance(action, SessionEnded):
        sessions = tuple(action.session if s.id == action.session.id else s for s in state.sessions)
        if state.active_session and state.active_session.id == action.session.id:
            return replace(state, sessions=sessions, active_session=None, active_exercises=())
        return replace(state, sessions=sessions)

    if isinstance(action, ExercisesLoaded):
        if state.active_session is None or state.active_session.id != action.session_id:
            return state
        return replace(state, active_exercises=tuple(action.exercises))

    if isinstance(action, ExerciseLogged):
        if state.active_session is None or state.active_session.id != action.exercise.workout_session_id:
            return state
        return replace(state, active_exercises=state.active_exercises + (action.exercise,))

    if isinstance(action, ExerciseRemoved):
        kept = tuple(e for e in state.active_exercises if e.id != action.exercise_id)
        return replace(state, active_exercises=kept)

    if isinstance(action, TemplatesLoaded):
        return replace(state, templates=tuple(action.templates))

    if isinstance(action, TemplateExercisesLoaded):
        cached = dict(state.template_exercises)
        cached[action.template_id] = tuple(action.exercises)
        return replace(state, template_exercises=cached)

    if isinstance(action, RestTimerTicked):
        return replace(state, rest_remaining=action.remaining)

    if isinstance(action, RestTimerCleared):
        return replace(state, rest_remaining=None)

    raise TypeError(f"Unknown action: {action!r}")


class Store:
    def __init__(self, state: AppState | None = None) -> None:
        self._state = state or AppState()
        self._listeners: list[Callable[[AppState], None]] = []

    @property
    def state(self) -> AppState:
        return self._state

    def subscribe(self, listener: Callable[[AppState], None]) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def dispatch(self, action) -> AppState:
        self._state = reduce(self._state, action)
        for listener in list(self._listeners):
            listener(self._state)
        return self._state
