"""
Workout session lifecycle.

Sessions are created at workout start, mutated while active and frozen
once finished.  The only way to change a finished session is
``edit_session``.
"""

from datetime import date, datetime, timezone
from typing import Sequence

from .models import Exercise, WorkoutSession, WorkoutSet
from .templates import starting_exercises


class SessionStateError(Exception):
    """Raised when a session operation does not fit its lifecycle state."""

    pass


def _require_active(session: WorkoutSession) -> None:
    if not session.in_progress:
        raise SessionStateError(f"Session {session.id} is finished; use edit_session to change it")


def _find_exercise(session: WorkoutSession, exercise_id: str) -> Exercise:
    for ex in session.exercises:
        if ex.id == exercise_id:
            return ex
    raise KeyError(f"No exercise {exercise_id!r} in session {session.id}")


def start_session(
    workout_type: str,
    history: Sequence[WorkoutSession],
    now_ms: int,
    day: date | None = None,
) -> WorkoutSession:
    """
    Create a new in-progress session pre-populated with exercises.

    Args:
        workout_type: Label from the scheduler (or chosen by the user)
        history: Past sessions, used for the user's own exercise list
        now_ms: Start time in epoch milliseconds
        day: Calendar date of the session (default: derived from now_ms, UTC)

    Returns:
        Session with empty exercises in starting order
    """
    if day is None:
        day = datetime.fromtimestamp(now_ms / 1000, tz=timezone.utc).date()
    return WorkoutSession(
        date=day.isoformat(),
        type=workout_type,
        start_time=now_ms,
        exercises=[Exercise(name=name) for name in starting_exercises(workout_type, history)],
    )


def add_exercise(session: WorkoutSession, name: str = "", muscle_group: str | None = None) -> Exercise:
    """
    Add an exercise at the top of an active session.

    A muscle-group prefix produces a "Group: " name ready to be completed.
    """
    _require_active(session)
    if not name and muscle_group:
        name = f"{muscle_group}: "
    exercise = Exercise(name=name, muscle_group=muscle_group)
    session.exercises.insert(0, exercise)
    return exercise


def remove_exercise(session: WorkoutSession, exercise_id: str) -> None:
    _require_active(session)
    session.exercises.remove(_find_exercise(session, exercise_id))


def rename_exercise(session: WorkoutSession, exercise_id: str, name: str) -> None:
    _require_active(session)
    _find_exercise(session, exercise_id).name = name


def add_set(
    session: WorkoutSession,
    exercise_id: str,
    now_ms: int,
    weight: float | None = None,
    reps: int | None = None,
) -> WorkoutSet:
    """
    Append a set to an exercise of an active session.

    Omitted weight or reps are copied from the exercise's previous set
    (0 for the first set).

    Raises:
        SessionStateError: If the session is finished
        KeyError: If the exercise is not part of the session
    """
    _require_active(session)
    exercise = _find_exercise(session, exercise_id)
    previous = exercise.sets[-1] if exercise.sets else None
    if weight is None:
        weight = previous.weight if previous else 0.0
    if reps is None:
        reps = previous.reps if previous else 0
    new_set = WorkoutSet(weight=weight, reps=reps, timestamp=now_ms)
    exercise.sets.append(new_set)
    return new_set


def update_set(
    session: WorkoutSession,
    exercise_id: str,
    set_id: str,
    weight: float | None = None,
    reps: int | None = None,
) -> WorkoutSet:
    """Change weight and/or reps of a set; weight never drops below zero."""
    _require_active(session)
    exercise = _find_exercise(session, exercise_id)
    for s in exercise.sets:
        if s.id == set_id:
            if weight is not None:
                s.weight = max(0.0, weight)
            if reps is not None:
                s.reps = max(0, reps)
            return s
    raise KeyError(f"No set {set_id!r} in exercise {exercise_id!r}")


def finish_session(session: WorkoutSession, now_ms: int) -> WorkoutSession:
    """
    Finalize a session: stamp end time and duration in seconds.

    Exercises left without a name are dropped.

    Raises:
        SessionStateError: If the session was already finished
    """
    _require_active(session)
    session.exercises = [ex for ex in session.exercises if ex.name.strip()]
    session.end_time = now_ms
    session.duration = max(0, (now_ms - session.start_time) // 1000)
    return session


def edit_session(
    session: WorkoutSession,
    exercises: list[Exercise] | None = None,
    duration: int | None = None,
) -> WorkoutSession:
    """Explicit edit path for a finished session's exercises and duration."""
    if session.in_progress:
        raise SessionStateError(f"Session {session.id} is still in progress")
    if exercises is not None:
        session.exercises = exercises
    if duration is not None:
        if duration < 0:
            raise ValueError("duration must be non-negative")
        session.duration = duration
    return session
