from datetime import datetime, timedelta, timezone

import pytest

from workout_tracker.client.state import (
    CATEGORY_COLORS,
    AppState,
    ExerciseLogged,
    ExercisesLoaded,
    RestTimerCleared,
    RestTimerTicked,
    SessionEnded,
    SessionsLoaded,
    SessionStarted,
    Store,
    TemplateExercisesLoaded,
    category_color,
    format_duration,
    reduce,
)
from workout_tracker.schemas.workouts import Category, ExerciseOut, WorkoutSessionOut

NOW = datetime(2026, 10, 19, 8, 0, tzinfo=timezone.utc)


def _session(id: int, end_time=None) -> WorkoutSessionOut:
    return WorkoutSessionOut(
        id=id,
        name=f"S{id}",
        start_time=NOW,
        end_time=end_time,
        template_id=None,
        created_at=NOW,
        is_active=end_time is None,
    )


def _exercise(id: int, session_id: int) -> ExerciseOut:
    return ExerciseOut(
        id=id,
        name="Squat",
        category=Category.STRENGTH,
        sets=4,
        reps=8,
        weight=225.0,
        workout_session_id=session_id,
        template_id=None,
        created_at=NOW,
    )


def test_sessions_loaded_finds_active_session():
    state = reduce(AppState(), SessionsLoaded([_session(3), _session(2, end_time=NOW), _session(1)]))
    assert state.active_session.id == 3
    assert len(state.sessions) == 3


def test_sessions_loaded_without_active_clears_exercises():
    state = AppState(active_session=_session(1), active_exercises=(_exercise(1, 1),))
    state = reduce(state, SessionsLoaded([_session(1, end_time=NOW)]))
    assert state.active_session is None
    assert state.active_exercises == ()


def test_session_started_then_ended():
    state = reduce(AppState(), SessionStarted(_session(1)))
    assert state.active_session.id == 1
    state = reduce(state, ExerciseLogged(_exercise(10, 1)))
    assert [e.id for e in state.active_exercises] == [10]

    state = reduce(state, SessionEnded(_session(1, end_time=NOW)))
    assert state.active_session is None
    assert state.active_exercises == ()
    assert state.sessions[0].end_time == NOW


def test_exercises_for_other_session_are_ignored():
    state = reduce(AppState(), SessionStarted(_session(1)))
    assert reduce(state, ExerciseLogged(_exercise(10, 2))) == state
    assert reduce(state, ExercisesLoaded(2, [_exercise(11, 2)])) == state


def test_reducer_does_not_mutate_previous_state():
    before = AppState()
    after = reduce(before, TemplateExercisesLoaded(7, []))
    assert before.template_exercises == {}
    assert after.template_exercises == {7: ()}


def test_rest_timer_actions():
    state = reduce(AppState(), RestTimerTicked(42))
    assert state.rest_remaining == 42
    assert reduce(state, RestTimerCleared()).rest_remaining is None


def test_unknown_action_rejected():
    with pytest.raises(TypeError):
        reduce(AppState(), object())


def test_store_notifies_subscribers_until_unsubscribed():
    store = Store()
    seen = []
    unsubscribe = store.subscribe(lambda s: seen.append(s.rest_remaining))
    store.dispatch(RestTimerTicked(5))
    unsubscribe()
    store.dispatch(RestTimerTicked(4))
    assert seen == [5]
    assert store.state.rest_remaining == 4


def test_unsubscribe_twice_is_harmless():
    store = Store()
    seen = []
    unsubscribe = store.subscribe(lambda s: seen.append(s.rest_remaining))
    unsubscribe()
    unsubscribe()
    store.dispatch(RestTimerTicked(3))
    assert seen == []


def test_category_colors_cover_every_category():
    assert set(CATEGORY_COLORS) == set(Category)
    assert category_color("Cardio") == "red"
    with pytest.raises(ValueError):
        category_color("Yoga")


def test_format_duration():
    assert format_duration(NOW, NOW + timedelta(minutes=45, seconds=59)) == "45 min"
    assert format_duration(datetime.now(timezone.utc) - timedelta(minutes=3)) == "3 min"
