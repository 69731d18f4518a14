"""
Starting exercises for each workout day.

A new session is pre-populated from the user's most recent session of the
same type when there is one, otherwise from the static tables here: the
legacy weekday day types, the preset split days, and keyword detection for
custom day names.
"""

import re
from dataclasses import dataclass, replace
from typing import Sequence

from .config import (
    BACK_ABS,
    BICEPS_SHOULDERS,
    CHEST_TRICEPS,
    LEGS_REAR_DELT_FOREARMS,
    REST_DAY,
)
from .metrics import preferred_exercises
from .models import WorkoutSession


@dataclass(frozen=True)
class MuscleGroup:
    """A muscle-group section of the active workout."""

    name: str
    color: str
    exercises: tuple[str, ...]

    def only(self, *exercises: str) -> "MuscleGroup":
        """Copy restricted to the given exercises."""
        return replace(self, exercises=tuple(exercises))


# Legacy weekday day types
DEFAULT_EXERCISES: dict[str, list[str]] = {
    CHEST_TRICEPS: [
        "Chest Press",
        "Incline Press",
        "Dips",
        "Cable Tricep Pushdowns",
        "Rope Extensions",
    ],
    BACK_ABS: [
        "Back: Deadlifts",
        "Back: Lat Pulldowns",
        "Back: High Row",
        "Back: ISO-Lateral Row",
        "Abs: Machine Crunches",
        "Abs: Hanging Leg Raises",
    ],
    BICEPS_SHOULDERS: [
        "EZ Bar Curls",
        "Hammer Curls",
        "Preacher Machine Curls",
        "Cable Bicep Curls",
    ],
    LEGS_REAR_DELT_FOREARMS: [
        "Leg Press",
        "Leg Extensions",
        "Lying Leg Curls",
        "Rear Delt Fly",
        "Dumbbell Forearm Curls",
    ],
    REST_DAY: [],
}

CHEST = MuscleGroup("Chest", "#ef4444", (
    "Chest: Bench Press", "Chest: Incline Press", "Chest: Cable Fly", "Chest: Pec Deck",
))
TRICEPS = MuscleGroup("Triceps", "#f97316", (
    "Triceps: Pushdown", "Triceps: Overhead Extension", "Triceps: Dips",
))
SHOULDERS = MuscleGroup("Shoulders", "#eab308", (
    "Shoulders: Shoulder Press", "Shoulders: Lateral Raise", "Shoulders: Front Raise",
))
BACK = MuscleGroup("Back", "#3b82f6", (
    "Back: Lat Pulldown", "Back: Seated Row", "Back: Cable Row", "Back: Pull-ups",
))
BICEPS = MuscleGroup("Biceps", "#22c55e", (
    "Biceps: Bicep Curl", "Biceps: Hammer Curl", "Biceps: Preacher Curl",
))
REAR_DELTS = MuscleGroup("Rear Delts", "#8b5cf6", (
    "Rear Delts: Face Pulls", "Rear Delts: Reverse Fly",
))
QUADS = MuscleGroup("Quads", "#a855f7", (
    "Quads: Leg Press", "Quads: Squats", "Quads: Leg Extension", "Quads: Lunges",
))
HAMSTRINGS = MuscleGroup("Hamstrings", "#ec4899", (
    "Hamstrings: Leg Curl", "Hamstrings: Romanian Deadlift",
))
GLUTES = MuscleGroup("Glutes", "#f472b6", (
    "Glutes: Hip Thrust", "Glutes: Cable Kickback",
))
CALVES = MuscleGroup("Calves", "#06b6d4", (
    "Calves: Calf Raise", "Calves: Seated Calf Raise",
))
ABS = MuscleGroup("Abs", "#14b8a6", (
    "Abs: Cable Crunch", "Abs: Hanging Leg Raise", "Abs: Ab Roller",
))

LEG_GROUPS: tuple[MuscleGroup, ...] = (QUADS, HAMSTRINGS, GLUTES, CALVES)

SPLIT_DAY_EXERCISES: dict[str, tuple[MuscleGroup, ...]] = {
    # Push/Pull/Legs
    "Push": (CHEST, SHOULDERS, TRICEPS),
    "Pull": (BACK, BICEPS, REAR_DELTS),
    "Legs": LEG_GROUPS,
    # Bro split
    "Chest": (CHEST,),
    "Back": (BACK, REAR_DELTS),
    "Shoulders": (SHOULDERS, REAR_DELTS.only("Rear Delts: Face Pulls")),
    "Arms": (BICEPS, TRICEPS),
    # Upper/Lower
    "Upper": (
        CHEST.only("Chest: Bench Press", "Chest: Incline Press"),
        BACK.only("Back: Lat Pulldown", "Back: Seated Row"),
        SHOULDERS.only("Shoulders: Shoulder Press", "Shoulders: Lateral Raise"),
        BICEPS.only("Biceps: Bicep Curl"),
        TRICEPS.only("Triceps: Pushdown"),
    ),
    "Lower": LEG_GROUPS,
    # Full body
    "Full Body": (
        CHEST.only("Chest: Bench Press"),
        BACK.only("Back: Lat Pulldown", "Back: Seated Row"),
        SHOULDERS.only("Shoulders: Shoulder Press"),
        QUADS.only("Quads: Squats", "Quads: Leg Press"),
        HAMSTRINGS.only("Hamstrings: Leg Curl"),
    ),
}

# Whole words only: "Tabata" or "Lab Day" add no abs section
_ABS_PATTERN = re.compile(r"\b(?:abs?|core)\b")

# Whole-day keywords, checked in order before individual muscles
_DAY_KEYWORDS: tuple[tuple[tuple[str, ...], str], ...] = (
    (("push",), "Push"),
    (("pull",), "Pull"),
    (("leg", "lower"), "Legs"),
    (("upper",), "Upper"),
    (("full body", "fullbody"), "Full Body"),
)


def muscle_groups_for_day(day_name: str) -> list[MuscleGroup]:
    """
    Muscle-group sections for a workout day.

    Exact preset names map directly.  Custom names are scanned for whole-day
    keywords (push, pull, leg/lower, upper, full body) and then for
    individual muscles; "arm" adds both biceps and triceps.

    Args:
        day_name: Split day or custom label (e.g. "Chest & Back")

    Returns:
        Sections in display order, possibly empty
    """
    if day_name in SPLIT_DAY_EXERCISES:
        return list(SPLIT_DAY_EXERCISES[day_name])

    lower = day_name.lower()
    for keywords, preset in _DAY_KEYWORDS:
        if any(k in lower for k in keywords):
            return list(SPLIT_DAY_EXERCISES[preset])

    groups: list[MuscleGroup] = []
    if "chest" in lower:
        groups.append(CHEST)
    if "back" in lower:
        groups.append(BACK)
    if "shoulder" in lower:
        groups.append(SHOULDERS)
    if "bicep" in lower or "arm" in lower:
        groups.append(BICEPS)
    if "tricep" in lower or "arm" in lower:
        groups.append(TRICEPS)
    if _ABS_PATTERN.search(lower):
        groups.append(ABS)

    # "Biceps & Arms" would list biceps twice
    unique: list[MuscleGroup] = []
    for g in groups:
        if g not in unique:
            unique.append(g)
    return unique


def exercises_for_day(day_name: str) -> list[str]:
    """Flat exercise list for a workout day, duplicates removed."""
    names: list[str] = []
    for group in muscle_groups_for_day(day_name):
        for name in group.exercises:
            if name not in names:
                names.append(name)
    return names


def starting_exercises(workout_type: str, history: Sequence[WorkoutSession] = ()) -> list[str]:
    """
    Exercise names to pre-populate a new session with.

    Order of preference: the most recent session of the same type, the
    legacy day-type defaults, the split day catalog.
    """
    if workout_type == "" or workout_type.lower() == REST_DAY.lower():
        return []

    previous = preferred_exercises(history).get(workout_type)
    if previous:
        return previous
    if workout_type in DEFAULT_EXERCISES:
        return list(DEFAULT_EXERCISES[workout_type])
    return exercises_for_day(workout_type)
