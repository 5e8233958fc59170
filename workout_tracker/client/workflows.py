from datetime import datetime, timezone

import structlog

from workout_tracker.client.api import WorkoutTrackerClient
from workout_tracker.client.state import (
    ExerciseLogged,
    ExerciseRemoved,
    ExercisesLoaded,
    RestTimerCleared,
    RestTimerTicked,
    SessionEnded,
    SessionsLoaded,
    SessionStarted,
    Store,
    TemplateExercisesLoaded,
    TemplatesLoaded,
)
from workout_tracker.client.timer import RestTimer
from workout_tracker.schemas.workouts import Category, ExerciseOut, WorkoutSessionOut

logger = structlog.get_logger(__name__)


def refresh_sessions(client: WorkoutTrackerClient, store: Store) -> None:
    store.dispatch(SessionsLoaded(client.get_workout_sessions()))
    active = store.state.active_session
    if active is not None:
        store.dispatch(ExercisesLoaded(active.id, client.get_exercises(active.id)))


def refresh_templates(client: WorkoutTrackerClient, store: Store) -> None:
    store.dispatch(TemplatesLoaded(client.get_workout_templates()))


def load_template_exercises(client: WorkoutTrackerClient, store: Store, template_id: int) -> None:
    store.dispatch(TemplateExercisesLoaded(template_id, client.get_template_exercises(template_id)))


def start_session(
    client: WorkoutTrackerClient,
    store: Store,
    name: str,
    template_id: int | None = None,
) -> WorkoutSessionOut:
    """Create a session and seed it with the template's exercises, in order."""
    session = client.create_workout_session(name, template_id=template_id)
    store.dispatch(SessionStarted(session))

    if template_id is not None:
        planned = client.get_template_exercises(template_id)
        for te in planned:
            client.create_exercise(
                name=te.name,
                category=te.category,
                sets=te.sets,
                reps=te.reps,
                weight=te.weight,
                workout_session_id=session.id,
                template_id=template_id,
            )
        logger.info("session_seeded_from_template", session_id=session.id, template_id=template_id, count=len(planned))

    store.dispatch(ExercisesLoaded(session.id, client.get_exercises(session.id)))
    return session


def end_session(client: WorkoutTrackerClient, store: Store, session_id: int | None = None) -> WorkoutSessionOut:
    if session_id is None:
        if store.state.active_session is None:
            raise ValueError("No active session")
        session_id = store.state.active_session.id

    ended = client.update_workout_session(session_id, end_time=datetime.now(timezone.utc))
    store.dispatch(SessionEnded(ended))
    return ended


def log_exercise(
    client: WorkoutTrackerClient,
    store: Store,
    *,
    name: str,
    category: Category | str,
    sets: int,
    reps: int,
    weight: float,
) -> ExerciseOut:
    active = store.state.active_session
    if active is None:
        raise ValueError("No active session")

    exercise = client.create_exercise(
        name=name,
        category=category,
        sets=sets,
        reps=reps,
        weight=weight,
        workout_session_id=active.id,
    )
    store.dispatch(ExerciseLogged(exercise))
    return exercise


def remove_exercise(client: WorkoutTrackerClient, store: Store, exercise_id: int) -> None:
    client.delete_exercise(exercise_id)
    store.dispatch(ExerciseRemoved(exercise_id))


def bind_rest_timer(store: Store, interval: float = 1.0) -> RestTimer:
    def on_tick(remaining):
        if remaining is None:
            store.dispatch(RestTimerCleared())
        else:
            store.dispatch(RestTimerTicked(remaining))

    return RestTimer(on_tick, interval=interval)
