"""
Pure metric computation functions over workout sessions.

All functions are pure and typed for testability.
"""

from typing import Sequence

from .config import REPORT_MIN_SESSIONS
from .models import Exercise, Profile, WorkoutSession, WorkoutSet, normalize_name


def set_volume(s: WorkoutSet) -> float:
    return s.weight * s.reps


def exercise_volume(exercise: Exercise) -> float:
    """Sum of weight x reps over all sets of one exercise."""
    return sum(set_volume(s) for s in exercise.sets)


def session_volume(session: WorkoutSession) -> float:
    """
    Total tonnage of a session.

    Args:
        session: Session to sum

    Returns:
        Sum of weight x reps over every set of every exercise
    """
    return sum(exercise_volume(ex) for ex in session.exercises)


def best_set(sets: Sequence[WorkoutSet]) -> WorkoutSet | None:
    """
    Set with the highest weight x reps.

    Ties keep the first set encountered.

    Returns:
        Best set, or None for an empty sequence
    """
    best: WorkoutSet | None = None
    for s in sets:
        if best is None or set_volume(s) > set_volume(best):
            best = s
    return best


def format_duration(seconds: int) -> str:
    """Format seconds as HH:MM:SS."""
    seconds = max(0, int(seconds))
    h = seconds // 3600
    m = (seconds % 3600) // 60
    s = seconds % 60
    return f"{h:02d}:{m:02d}:{s:02d}"


def get_last_performance(history: Sequence[WorkoutSession], exercise_name: str) -> Exercise | None:
    """
    First exercise in ``history`` order matching the name that has sets.

    History is expected newest first, as the store's ``load_history(newest_first=True)``
    returns it.  Names are matched trimmed and case-insensitively.
    """
    key = normalize_name(exercise_name)
    for session in history:
        for ex in session.exercises:
            if ex.normalized_name == key and ex.sets:
                return ex
    return None


def preferred_exercises(history: Sequence[WorkoutSession]) -> dict[str, list[str]]:
    """
    Exercise names per workout type, taken from the most recent session of
    each type.

    Blank names are dropped.  Sessions are ordered by date (newest first)
    before picking, so input order does not matter.
    """
    result: dict[str, list[str]] = {}
    for session in sorted(history, key=lambda s: (s.day, s.start_time), reverse=True):
        if session.type in result:
            continue
        names = [ex.name.strip() for ex in session.exercises if ex.name.strip()]
        if names:
            result[session.type] = names
    return result


def report_ready(sessions: Sequence[WorkoutSession]) -> bool:
    """True once enough sessions exist for a progression report."""
    return len(sessions) >= REPORT_MIN_SESSIONS


def build_report_payload(
    sessions: Sequence[WorkoutSession],
    profile: Profile | None = None,
) -> dict:
    """
    Aggregate sessions into the data handed to the report model.

    Per exercise: heaviest set weight, total volume and average reps.

    Args:
        sessions: Sessions to summarize
        profile: Optional profile for body-metric context

    Returns:
        JSON-compatible dict with "profile" and "sessions" keys
    """
    workout_data = []
    for s in sessions:
        exercises = []
        for ex in s.exercises:
            reps = [st.reps for st in ex.sets]
            exercises.append(
                {
                    "name": ex.name,
                    "best_set_weight": max((st.weight for st in ex.sets), default=0.0),
                    "total_volume": exercise_volume(ex),
                    "avg_reps": sum(reps) / len(reps) if reps else 0.0,
                }
            )
        workout_data.append({"date": s.date, "type": s.type, "exercises": exercises})

    context = None
    if profile is not None:
        context = {
            "name": profile.name,
            "age": profile.age,
            "weight_kg": profile.weight_kg,
            "height_cm": profile.height_cm,
        }

    return {"profile": context, "session_count": len(workout_data), "sessions": workout_data}
