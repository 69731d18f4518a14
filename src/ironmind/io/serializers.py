"""
JSON serialization for workout and nutrition models.

Handles conversion between dataclasses and JSON-compatible dicts, plus the
compact set notation used on the command line.
"""

import json
import re
import warnings
from typing import Any

from ..core.models import (
    Exercise,
    FoodLog,
    Profile,
    SplitConfig,
    WaterLog,
    WorkoutSession,
    WorkoutSet,
)


class ValidationError(Exception):
    """Raised when data validation fails."""

    pass


def validate_date(date_str: str) -> str:
    """
    Validate a YYYY-MM-DD date string.

    Raises:
        ValidationError: If the format or the date itself is invalid
    """
    from datetime import datetime

    if not isinstance(date_str, str) or not re.match(r"^\d{4}-\d{2}-\d{2}$", date_str):
        raise ValidationError(f"Invalid date format: {date_str}. Expected YYYY-MM-DD")
    try:
        datetime.strptime(date_str, "%Y-%m-%d")
    except ValueError as e:
        raise ValidationError(f"Invalid date: {date_str}") from e
    return date_str


def _require(data: dict[str, Any], key: str, kind: str) -> Any:
    if key not in data:
        raise ValidationError(f"{kind} record missing '{key}'")
    return data[key]


# ---------------------------------------------------------------------------
# Sessions
# ---------------------------------------------------------------------------


def workout_set_to_dict(s: WorkoutSet) -> dict[str, Any]:
    return {"id": s.id, "weight": s.weight, "reps": s.reps, "timestamp": s.timestamp}


def dict_to_workout_set(data: dict[str, Any]) -> WorkoutSet:
    try:
        return WorkoutSet(
            weight=float(_require(data, "weight", "set")),
            reps=int(_require(data, "reps", "set")),
            timestamp=int(data.get("timestamp") or 0),
            **({"id": str(data["id"])} if data.get("id") else {}),
        )
    except (TypeError, ValueError) as e:
        raise ValidationError(f"Invalid set: {e}") from e


def exercise_to_dict(exercise: Exercise) -> dict[str, Any]:
    d: dict[str, Any] = {
        "id": exercise.id,
        "name": exercise.name,
        "sets": [workout_set_to_dict(s) for s in exercise.sets],
    }
    if exercise.muscle_group:
        d["muscleGroup"] = exercise.muscle_group
    return d


def dict_to_exercise(data: dict[str, Any]) -> Exercise:
    name = _require(data, "name", "exercise")
    if not isinstance(name, str):
        raise ValidationError(f"Exercise name must be a string, got {name!r}")
    return Exercise(
        name=name,
        sets=[dict_to_workout_set(s) for s in data.get("sets") or []],
        muscle_group=data.get("muscleGroup") or data.get("muscle_group"),
        **({"id": str(data["id"])} if data.get("id") else {}),
    )


def session_to_dict(session: WorkoutSession) -> dict[str, Any]:
    """
    Convert WorkoutSession to a JSON-compatible dict.

    Field names follow the hosted table (start_time/end_time in epoch ms).
    """
    return {
        "id": session.id,
        "date": session.date,
        "type": session.type,
        "start_time": session.start_time,
        "end_time": session.end_time,
        "duration": session.duration,
        "exercises": [exercise_to_dict(ex) for ex in session.exercises],
    }


def dict_to_session(data: dict[str, Any]) -> WorkoutSession:
    """
    Convert dict to WorkoutSession.

    Accepts both snake_case and camelCase time keys.

    Raises:
        ValidationError: If data is invalid
    """
    try:
        start_time = data.get("start_time", data.get("startTime")) or 0
        end_time = data.get("end_time", data.get("endTime"))
        duration = data.get("duration")
        return WorkoutSession(
            date=str(_require(data, "date", "session")),
            type=str(_require(data, "type", "session")),
            exercises=[dict_to_exercise(ex) for ex in data.get("exercises") or []],
            start_time=int(start_time),
            end_time=int(end_time) if end_time is not None else None,
            duration=int(duration) if duration is not None else None,
            **({"id": str(data["id"])} if data.get("id") else {}),
        )
    except (TypeError, ValueError) as e:
        raise ValidationError(f"Invalid session: {e}") from e


def session_to_json_line(session: WorkoutSession) -> str:
    """Serialize a session to a single JSON line (no trailing newline)."""
    return json.dumps(session_to_dict(session), separators=(",", ":"))


def json_line_to_session(line: str) -> WorkoutSession:
    """
    Deserialize a JSON line to a WorkoutSession.

    Raises:
        ValidationError: If JSON is invalid or data validation fails
    """
    try:
        data = json.loads(line.strip())
    except json.JSONDecodeError as e:
        raise ValidationError(f"Invalid JSON: {e}") from e
    if not isinstance(data, dict):
        raise ValidationError("Session line must be a JSON object")
    return dict_to_session(data)


# ---------------------------------------------------------------------------
# Profile
# ---------------------------------------------------------------------------


def split_to_dict(split: SplitConfig) -> dict[str, Any]:
    return {
        "split_type": split.split_type,
        "split_days": list(split.days),
        "split_rest_pattern": split.rest_pattern,
        "split_current_day_index": split.current_day_index,
        "split_start_date": split.start_date,
    }


def dict_to_split(data: dict[str, Any]) -> SplitConfig | None:
    """
    Read the flat ``split_*`` columns of a profile record.

    Returns None (legacy weekly schedule) when split_type, split_days or
    split_start_date is absent, or when the rotation is unusable.  A rest
    pattern below 1 is treated as absent and an out-of-range day index as 0.
    """
    split_type = data.get("split_type")
    days = data.get("split_days")
    start = data.get("split_start_date")
    if not split_type or not days or not start:
        return None
    if not isinstance(days, list):
        warnings.warn(f"ironmind: ignoring split with non-list split_days {days!r}", stacklevel=2)
        return None
    days = [str(d) for d in days]

    rest = data.get("split_rest_pattern")
    if isinstance(rest, bool) or not isinstance(rest, (int, float)) or rest < 1:
        rest = None
    else:
        rest = int(rest)

    index = data.get("split_current_day_index")
    if isinstance(index, bool):
        index = None
    elif isinstance(index, int) and not 0 <= index < len(days):
        index = 0

    try:
        return SplitConfig(
            split_type=str(split_type),
            days=days,
            start_date=str(start),
            rest_pattern=rest,
            current_day_index=index if isinstance(index, int) else None,
        )
    except ValueError as e:
        warnings.warn(f"ironmind: ignoring invalid split ({e}); using the weekly schedule", stacklevel=2)
        return None


def profile_to_dict(profile: Profile) -> dict[str, Any]:
    """Convert Profile to a JSON-compatible dict with flat split columns."""
    d: dict[str, Any] = {
        "name": profile.name,
        "age": profile.age,
        "weight": profile.weight_kg,
        "height_cm": profile.height_cm,
        "gender": profile.gender,
        "activity_level": profile.activity_level,
        "calorie_goal": profile.calorie_goal,
        "protein_goal": profile.protein_goal,
    }
    if profile.split is not None:
        d.update(split_to_dict(profile.split))
    return d


def dict_to_profile(data: dict[str, Any]) -> Profile:
    """
    Convert dict to Profile.

    Raises:
        ValidationError: If required fields are missing or invalid
    """
    try:
        return Profile(
            name=str(_require(data, "name", "profile")),
            age=int(_require(data, "age", "profile")),
            weight_kg=float(_require(data, "weight", "profile")),
            height_cm=float(_require(data, "height_cm", "profile")),
            gender=data.get("gender"),
            activity_level=data.get("activity_level"),
            calorie_goal=int(data["calorie_goal"]) if data.get("calorie_goal") else None,
            protein_goal=int(data["protein_goal"]) if data.get("protein_goal") else None,
            split=dict_to_split(data),
        )
    except (TypeError, ValueError) as e:
        raise ValidationError(f"Invalid profile: {e}") from e


# ---------------------------------------------------------------------------
# Nutrition logs
# ---------------------------------------------------------------------------


def food_log_to_dict(log: FoodLog) -> dict[str, Any]:
    return {
        "kind": "food",
        "id": log.id,
        "date": log.date,
        "timestamp": log.timestamp,
        "name": log.name,
        "calories": log.calories,
        "protein": log.protein,
        "carbs": log.carbs,
        "fat": log.fat,
        "amount": log.amount,
        "unit": log.unit,
        "source": log.source,
    }


def water_log_to_dict(log: WaterLog) -> dict[str, Any]:
    return {
        "kind": "water",
        "id": log.id,
        "date": log.date,
        "timestamp": log.timestamp,
        "amount": log.amount,
    }


def dict_to_nutrition_log(data: dict[str, Any]) -> FoodLog | WaterLog:
    """
    Convert a nutrition record to FoodLog or WaterLog by its "kind".

    Raises:
        ValidationError: On unknown kind or invalid data
    """
    kind = data.get("kind")
    extra = {"id": str(data["id"])} if data.get("id") else {}
    try:
        if kind == "water":
            return WaterLog(
                date=str(_require(data, "date", "water")),
                amount=int(_require(data, "amount", "water")),
                timestamp=int(data.get("timestamp") or 0),
                **extra,
            )
        if kind == "food":
            return FoodLog(
                date=str(_require(data, "date", "food")),
                name=str(_require(data, "name", "food")),
                calories=int(data.get("calories", 0)),
                protein=float(data.get("protein", 0.0)),
                carbs=float(data.get("carbs", 0.0)),
                fat=float(data.get("fat", 0.0)),
                amount=float(data.get("amount", 0.0)),
                unit=data.get("unit", "g"),
                source=data.get("source", "manual"),
                timestamp=int(data.get("timestamp") or 0),
                **extra,
            )
    except (TypeError, ValueError) as e:
        raise ValidationError(f"Invalid {kind} log: {e}") from e
    raise ValidationError(f"Unknown nutrition record kind: {kind!r}")


# ---------------------------------------------------------------------------
# Command-line set notation
# ---------------------------------------------------------------------------

_SET_PATTERN = re.compile(
    r"^\s*(?P<weight>\d+(?:\.\d+)?)\s*(?:kg)?\s*[xX×]\s*(?P<reps>\d+)"
    r"(?:\s*[xX×]\s*(?P<count>\d+))?\s*$"
)


def parse_sets_string(s: str) -> list[tuple[float, int]]:
    """
    Parse a comma-separated list of sets.

    Each item is WEIGHTxREPS, optionally repeated with a third factor:
        "50x10"           -> one set of 10 reps at 50 kg
        "52.5kg x 8"      -> one set of 8 reps at 52.5 kg
        "60x5x3"          -> three sets of 5 reps at 60 kg
        "50x10, 52.5x8"   -> two sets

    Returns:
        List of (weight_kg, reps) tuples in entry order

    Raises:
        ValidationError: If any item is malformed
    """
    result: list[tuple[float, int]] = []
    for item in s.split(","):
        if not item.strip():
            continue
        m = _SET_PATTERN.match(item)
        if m is None:
            raise ValidationError(
                f"Invalid set: {item.strip()!r}. Expected WEIGHTxREPS, e.g. 50x10 or 60x5x3"
            )
        weight = float(m.group("weight"))
        reps = int(m.group("reps"))
        count = int(m.group("count") or 1)
        if count < 1:
            raise ValidationError(f"Set count must be at least 1 in {item.strip()!r}")
        result.extend([(weight, reps)] * count)
    if not result:
        raise ValidationError("No sets given")
    return result


def parse_exercise_spec(spec: str) -> tuple[str, list[tuple[float, int]]]:
    """
    Parse "Exercise name: sets" as given to --exercise.

    The sets part is everything after the last colon, so names keeping the
    "Muscle: Movement" convention work: "Back: Lat Pulldown: 50x10, 55x8".

    Raises:
        ValidationError: If no colon separates name and sets
    """
    name, sep, sets_part = spec.rpartition(":")
    if not sep or not name.strip():
        raise ValidationError(f"Invalid exercise entry: {spec!r}. Expected 'Name: 50x10, 52.5x8'")
    return name.strip(), parse_sets_string(sets_part)
