"""
Smart Target progression engine.

Builds an exercise's recent timeline from same-type sessions, classifies
its trend, detects volume plateaus and turns that into a weight/rep target
with a short explanation.

Only sessions of the queried workout type are compared: different muscle
groups have incomparable volume scales.  The engine is a pure function of
its inputs and never raises; unusable data degrades to a less confident
answer.
"""

import math
from datetime import date
from typing import Sequence

from .config import (
    CONFIDENCE_BUILDING,
    CONFIDENCE_FIRST_SESSION,
    CONFIDENCE_NO_DATA,
    DELOAD_FACTOR,
    HISTORY_LOOKBACK_DAYS,
    MAINTAIN_REP_BONUS,
    MIN_ENTRIES_FOR_RULES,
    MIN_ENTRIES_FOR_TREND,
    MISSED_WEEK_DAYS,
    PLATEAU_TOLERANCE,
    PLATEAU_WINDOW,
    REGRESSION_REP_BONUS,
    TREND_MAINTAINING,
    TREND_PROGRESSING,
    TREND_REGRESSING,
    TREND_UNKNOWN,
    TREND_WINDOW,
    WEIGHT_INCREMENT_KG,
)
from .dates import days_between, parse_date
from .metrics import best_set, set_volume
from .models import HistoryEntry, SmartTarget, WorkoutSession, normalize_name


def round_to_increment(value: float, increment: float = WEIGHT_INCREMENT_KG) -> float:
    """
    Round to the nearest plate increment, halves rounding up.

    round_to_increment(40.5) -> 40.0, round_to_increment(41.25) -> 42.5
    """
    return math.floor(value / increment + 0.5) * increment


def format_weight(weight: float) -> str:
    """50.0 -> "50", 52.5 -> "52.5"."""
    return f"{weight:g}"


def _is_valid_set(s: object) -> bool:
    weight = getattr(s, "weight", None)
    reps = getattr(s, "reps", None)
    return (
        isinstance(weight, (int, float))
        and isinstance(reps, (int, float))
        and not isinstance(weight, bool)
        and not isinstance(reps, bool)
    )


def _days_phrase(days: int) -> str:
    return "1 day ago" if days == 1 else f"{days} days ago"


def get_exercise_history(
    exercise_name: str,
    history: Sequence[WorkoutSession],
    workout_type: str,
    today: date,
) -> list[HistoryEntry]:
    """
    Reconstruct an exercise's recent timeline.

    Keeps sessions whose type equals ``workout_type`` exactly and that are at
    most HISTORY_LOOKBACK_DAYS old, then the exercise matching the
    normalized name with at least one set.

    Args:
        exercise_name: Exercise to look up (case/whitespace-insensitive)
        history: All sessions, any order
        workout_type: Session type to restrict to
        today: Reference date for ages

    Returns:
        Entries sorted most recent first
    """
    key = normalize_name(exercise_name or "")
    entries: list[HistoryEntry] = []

    for session in history or []:
        if getattr(session, "type", None) != workout_type:
            continue
        session_day = parse_date(getattr(session, "date", None))
        if session_day is None:
            continue
        days_ago = days_between(session_day, today)
        if days_ago > HISTORY_LOOKBACK_DAYS:
            continue

        match = next(
            (
                ex
                for ex in getattr(session, "exercises", None) or []
                if isinstance(getattr(ex, "name", None), str) and normalize_name(ex.name) == key
            ),
            None,
        )
        if match is None:
            continue
        sets = [s for s in getattr(match, "sets", None) or [] if _is_valid_set(s)]
        top = best_set(sets)
        if top is None:
            continue
        entries.append(
            HistoryEntry(
                date=session.date,
                days_ago=days_ago,
                sets=sets,
                best_set=top,
                total_volume=sum(set_volume(s) for s in sets),
            )
        )

    # Stable sort: same-day sessions keep their input order
    entries.sort(key=lambda e: e.days_ago)
    return entries


def calculate_trend(entries: Sequence[HistoryEntry]) -> str:
    """
    Classify the best-set volume trend over the most recent entries.

    Each adjacent pair among the newest TREND_WINDOW entries votes
    improving or declining; equal volumes do not vote.

    Args:
        entries: History entries, most recent first

    Returns:
        "progressing", "regressing", "maintaining" or "unknown" (< 2 entries)
    """
    if len(entries) < MIN_ENTRIES_FOR_TREND:
        return TREND_UNKNOWN

    recent = entries[:TREND_WINDOW]
    improving = 0
    declining = 0
    for current, previous in zip(recent, recent[1:]):
        current_vol = set_volume(current.best_set)
        previous_vol = set_volume(previous.best_set)
        if current_vol > previous_vol:
            improving += 1
        elif current_vol < previous_vol:
            declining += 1

    if improving > declining:
        return TREND_PROGRESSING
    if declining > improving:
        return TREND_REGRESSING
    return TREND_MAINTAINING


def detect_plateau(entries: Sequence[HistoryEntry]) -> bool:
    """
    Detect a best-set volume plateau.

    Plateau = (max - min) / max < PLATEAU_TOLERANCE over the newest
    PLATEAU_WINDOW entries.  All-zero volumes are not a plateau.
    """
    if len(entries) < PLATEAU_WINDOW:
        return False

    volumes = [set_volume(e.best_set) for e in entries[:PLATEAU_WINDOW]]
    highest = max(volumes)
    if highest <= 0:
        return False
    return (highest - min(volumes)) / highest < PLATEAU_TOLERANCE


def compute_smart_target(
    exercise_name: str,
    history: Sequence[WorkoutSession],
    workout_type: str,
    today: date,
) -> SmartTarget:
    """
    Suggest today's weight and reps for an exercise.

    Tiers by number of history entries:
    - 0: no target
    - 1: repeat the last session
    - 2-3: +2.5 kg if progressing, otherwise repeat
    - 4+: first matching rule of missed week, plateau, progressing,
      regressing, maintaining

    Args:
        exercise_name: Exercise to target
        history: All sessions
        workout_type: Session type the exercise is performed in
        today: Reference date

    Returns:
        SmartTarget with target, trend, flags and message
    """
    entries = get_exercise_history(exercise_name, history, workout_type, today)

    if not entries:
        return SmartTarget(
            has_data=False,
            session_count=0,
            last_session=None,
            days_since_last_session=None,
            missed_last_week=False,
            trend=TREND_UNKNOWN,
            plateau_detected=False,
            target_weight=None,
            target_reps=None,
            message="New exercise - log it today to start tracking.",
            confidence=CONFIDENCE_NO_DATA,
        )

    last = entries[0]
    days_since = last.days_ago
    missed = days_since > MISSED_WEEK_DAYS
    trend = calculate_trend(entries)
    plateau = detect_plateau(entries)
    count = len(entries)

    last_weight = last.best_set.weight
    last_reps = last.best_set.reps
    last_str = f"{format_weight(last_weight)}kg x {last_reps}"

    target_weight = last_weight
    target_reps = last_reps

    if count == 1:
        message = f"Last time: {last_str}"
        if days_since > 0:
            message += f" ({_days_phrase(days_since)})"
        if missed:
            message += ". You missed last week - match it before pushing on."
        else:
            message += ". Match or beat it today!"
        confidence = CONFIDENCE_FIRST_SESSION

    elif count < MIN_ENTRIES_FOR_RULES:
        confidence = CONFIDENCE_BUILDING
        if missed:
            message = f"Back after {days_since} days - match {last_str} today."
        elif trend == TREND_PROGRESSING:
            target_weight = last_weight + WEIGHT_INCREMENT_KG
            message = (
                f"Progressing - try {format_weight(target_weight)}kg x {target_reps} "
                f"(last: {last_str})."
            )
        else:
            message = f"Match {last_str} today and build consistency."

    else:
        confidence = f"Based on {count} sessions"
        if missed:
            message = f"Back after {days_since} days - match {last_str} before adding weight."
        elif plateau:
            target_weight = round_to_increment(last_weight * DELOAD_FACTOR)
            message = (
                f"Plateau detected - deload to {format_weight(target_weight)}kg x {target_reps}, "
                "or swap in a variation of this exercise."
            )
        elif trend == TREND_PROGRESSING:
            target_weight = last_weight + WEIGHT_INCREMENT_KG
            message = f"Progressing - go for {format_weight(target_weight)}kg x {target_reps}."
        elif trend == TREND_REGRESSING:
            target_weight = round_to_increment(last_weight * DELOAD_FACTOR)
            target_reps = last_reps + REGRESSION_REP_BONUS
            message = (
                f"Regressing - form check: {format_weight(target_weight)}kg x {target_reps} "
                "to rebuild."
            )
        else:
            target_reps = last_reps + MAINTAIN_REP_BONUS
            message = (
                f"Holding steady - add a rep: {format_weight(target_weight)}kg x {target_reps}."
            )

    return SmartTarget(
        has_data=True,
        session_count=count,
        last_session=last,
        days_since_last_session=days_since,
        missed_last_week=missed,
        trend=trend,  # type: ignore[arg-type]
        plateau_detected=plateau,
        target_weight=target_weight,
        target_reps=target_reps,
        message=message,
        confidence=confidence,
    )


def compute_smart_targets(
    exercise_names: Sequence[str],
    history: Sequence[WorkoutSession],
    workout_type: str,
    today: date,
) -> dict[str, SmartTarget]:
    """Smart targets for every exercise of a workout, in the given order."""
    return {
        name: compute_smart_target(name, history, workout_type, today)
        for name in exercise_names
    }
