"""
Data models for ironmind.

Plain dataclasses for workout sessions, profiles, split rotations, the
Smart Target output and nutrition logs.  Validation happens in
``__post_init__`` and raises ValueError.
"""

import re
import uuid
from dataclasses import dataclass, field
from typing import Literal

from .config import ACTIVITY_LEVELS, SPLIT_TYPES

Gender = Literal["male", "female"]
Trend = Literal["progressing", "maintaining", "regressing", "unknown"]
FoodUnit = Literal["g", "ml"]
FoodSource = Literal["manual", "barcode", "ai"]

_DATE_PREFIX = re.compile(r"^\d{4}-\d{2}-\d{2}")


def generate_id() -> str:
    """Return a short random identifier for sets, exercises and sessions."""
    return uuid.uuid4().hex[:9]


def _check_date_prefix(value: str, name: str) -> None:
    if not isinstance(value, str) or not _DATE_PREFIX.match(value):
        raise ValueError(f"Invalid {name}: {value!r}. Expected YYYY-MM-DD or ISO timestamp")


@dataclass
class WorkoutSet:
    """
    One performed repetition group.

    ``timestamp`` is epoch milliseconds at entry time.
    """

    weight: float
    reps: int
    timestamp: int = 0
    id: str = field(default_factory=generate_id)

    def __post_init__(self) -> None:
        if self.weight < 0:
            raise ValueError("weight must be non-negative")
        if self.reps < 0:
            raise ValueError("reps must be non-negative")

    @property
    def volume(self) -> float:
        """Weight times reps."""
        return self.weight * self.reps


@dataclass
class Exercise:
    """
    A named movement within a session.

    Names may carry a "Muscle: " prefix (e.g. "Back: Lat Pulldown").
    History lookups match on the trimmed, lower-cased name only.
    """

    name: str
    sets: list[WorkoutSet] = field(default_factory=list)
    muscle_group: str | None = None
    id: str = field(default_factory=generate_id)

    @property
    def normalized_name(self) -> str:
        return normalize_name(self.name)


@dataclass
class WorkoutSession:
    """
    A completed or in-progress workout.

    ``date`` is an ISO date or ISO timestamp; its first ten characters are
    the calendar date.  ``type`` is either a legacy day label or a split day
    name.  A session is in progress while ``end_time`` is None.
    """

    date: str
    type: str
    exercises: list[Exercise] = field(default_factory=list)
    start_time: int = 0  # epoch ms
    end_time: int | None = None  # epoch ms
    duration: int | None = None  # seconds, set on finish
    id: str = field(default_factory=generate_id)

    def __post_init__(self) -> None:
        _check_date_prefix(self.date, "session date")
        if self.duration is not None and self.duration < 0:
            raise ValueError("duration must be non-negative")

    @property
    def in_progress(self) -> bool:
        return self.end_time is None

    @property
    def day(self) -> str:
        """Calendar date part of ``date`` (YYYY-MM-DD)."""
        return self.date[:10]


@dataclass
class SplitConfig:
    """
    A workout rotation anchored to an absolute start date.

    ``rest_pattern`` is the number of consecutive workout days before one
    rest day; None means no rest day is ever inserted.
    ``current_day_index`` is the rotation slot occupied on ``start_date``.
    """

    split_type: str
    days: list[str]
    start_date: str
    rest_pattern: int | None = None
    current_day_index: int | None = 0

    def __post_init__(self) -> None:
        if self.split_type not in SPLIT_TYPES:
            raise ValueError(f"Invalid split_type: {self.split_type!r}. Must be one of {SPLIT_TYPES}")
        if not self.days:
            raise ValueError("split days must not be empty")
        if self.rest_pattern is not None and self.rest_pattern < 1:
            raise ValueError("rest_pattern must be at least 1")
        if self.current_day_index is not None and not 0 <= self.current_day_index < len(self.days):
            raise ValueError(
                f"current_day_index must be in [0, {len(self.days)}), got {self.current_day_index}"
            )
        _check_date_prefix(self.start_date, "split start_date")

    @property
    def cycle_length(self) -> int:
        """Workout days plus the one rest day."""
        rest = self.rest_pattern if self.rest_pattern is not None else len(self.days)
        return rest + 1


@dataclass
class Profile:
    """
    User profile: body metrics, activity level, nutrition goals, rotation.

    A profile with ``split=None`` follows the legacy weekly schedule.
    """

    name: str
    age: int
    weight_kg: float
    height_cm: float
    gender: Gender | None = None
    activity_level: str | None = None
    calorie_goal: int | None = None
    protein_goal: int | None = None
    split: SplitConfig | None = None

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise ValueError("name must not be empty")
        if self.age <= 0:
            raise ValueError("age must be positive")
        if self.weight_kg <= 0:
            raise ValueError("weight_kg must be positive")
        if self.height_cm <= 0:
            raise ValueError("height_cm must be positive")
        if self.gender is not None and self.gender not in ("male", "female"):
            raise ValueError(f"Invalid gender: {self.gender}")
        if self.activity_level is not None and self.activity_level not in ACTIVITY_LEVELS:
            raise ValueError(
                f"Invalid activity_level: {self.activity_level!r}. "
                f"Must be one of {', '.join(ACTIVITY_LEVELS)}"
            )


@dataclass
class HistoryEntry:
    """One past appearance of an exercise, as seen by the progression engine."""

    date: str
    days_ago: int
    sets: list[WorkoutSet]
    best_set: WorkoutSet
    total_volume: float


@dataclass
class SmartTarget:
    """
    Suggested target for an exercise plus the evidence behind it.
    """

    has_data: bool
    session_count: int
    last_session: HistoryEntry | None
    days_since_last_session: int | None
    missed_last_week: bool
    trend: Trend
    plateau_detected: bool
    target_weight: float | None
    target_reps: int | None
    message: str
    confidence: str


@dataclass
class FoodItem:
    """Catalog food with nutrition per 100 g and a typical portion."""

    name: str
    calories_per_100g: float
    protein_per_100g: float
    carbs_per_100g: float
    fat_per_100g: float
    default_portion_g: float
    portion_name: str
    aliases: list[str] = field(default_factory=list)


@dataclass
class FoodLog:
    date: str
    name: str
    calories: int
    protein: float
    carbs: float
    fat: float
    amount: float
    unit: FoodUnit = "g"
    source: FoodSource = "manual"
    timestamp: int = 0
    id: str = field(default_factory=generate_id)

    def __post_init__(self) -> None:
        _check_date_prefix(self.date, "food log date")
        if self.unit not in ("g", "ml"):
            raise ValueError(f"Invalid unit: {self.unit}")
        if self.source not in ("manual", "barcode", "ai"):
            raise ValueError(f"Invalid source: {self.source}")
        for name in ("calories", "protein", "carbs", "fat", "amount"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be non-negative")


@dataclass
class WaterLog:
    date: str
    amount: int  # ml
    timestamp: int = 0
    id: str = field(default_factory=generate_id)

    def __post_init__(self) -> None:
        _check_date_prefix(self.date, "water log date")
        if self.amount <= 0:
            raise ValueError("amount must be positive")


@dataclass
class NutritionGoals:
    calories: int
    protein: int
    carbs: int
    fat: int
    water: int  # ml


@dataclass
class DailyNutrition:
    """Totals for one calendar day."""

    date: str
    total_calories: int = 0
    total_protein: float = 0.0
    total_carbs: float = 0.0
    total_fat: float = 0.0
    total_water: int = 0
    foods: list[FoodLog] = field(default_factory=list)
    water_logs: list[WaterLog] = field(default_factory=list)


def normalize_name(name: str) -> str:
    """Join key for exercise history: trimmed and lower-cased."""
    return name.strip().lower()
