"""
Split scheduler: which workout applies to a given calendar date.

The rotation is anchored to an absolute start date instead of a stored
"current day" counter, so the answer for any date depends only on the
profile and the date, however long the app goes unopened.
"""

from datetime import date, timedelta

from .config import PRESET_SPLITS, REST_DAY, WEEKLY_SCHEDULE
from .dates import days_between, parse_date
from .models import Profile, SplitConfig


def legacy_workout_label(today: date) -> str:
    """
    Fixed weekday table for profiles without a rotation.

    Monday/Thursday chest & triceps, Tuesday back & abs, Wednesday biceps &
    shoulders, Friday legs; weekends are rest days.
    """
    return WEEKLY_SCHEDULE.get(today.weekday(), REST_DAY)


def resolve_workout_label(profile: Profile | None, today: date) -> str:
    """
    Resolve today's workout label.

    cycle = rest_pattern + 1
    position = (current_day_index + days_since_start) mod cycle
    position >= rest_pattern -> "Rest Day"
    otherwise days[position mod len(days)]

    Missing rotation fields fall back to the legacy weekday table; a missing
    rest pattern means one full pass through ``days`` between rest days.
    Never raises.

    Args:
        profile: User profile (may be None or have no split)
        today: Date to resolve

    Returns:
        Day label or "Rest Day"
    """
    split = getattr(profile, "split", None) if profile is not None else None
    days = list(getattr(split, "days", None) or [])
    start = parse_date(getattr(split, "start_date", None))

    if split is None or not days or start is None:
        return legacy_workout_label(today)

    rest_pattern = getattr(split, "rest_pattern", None)
    if not isinstance(rest_pattern, int) or isinstance(rest_pattern, bool) or rest_pattern < 1:
        rest_pattern = len(days)

    index = getattr(split, "current_day_index", None)
    if not isinstance(index, int) or isinstance(index, bool):
        index = 0

    days_since_start = days_between(start, today)
    cycle_length = rest_pattern + 1
    # Python's % is already non-negative for a positive modulus, which keeps
    # dates before the anchor on the same cycle.
    position = (index + days_since_start) % cycle_length

    if position >= rest_pattern:
        return REST_DAY
    return days[position % len(days)]


def upcoming_labels(profile: Profile | None, start: date, count: int) -> list[tuple[date, str]]:
    """Labels for ``count`` consecutive dates beginning at ``start``."""
    return [
        (start + timedelta(days=i), resolve_workout_label(profile, start + timedelta(days=i)))
        for i in range(count)
    ]


def build_split(
    split_type: str,
    start_date: str,
    days: list[str] | None = None,
    rest_pattern: int | None = None,
    current_day_index: int = 0,
) -> SplitConfig:
    """
    Build a SplitConfig from a preset name or a custom day list.

    Presets supply their own days and rest pattern; explicit arguments
    override them.

    Raises:
        ValueError: If a custom split has no days or the config is invalid
    """
    preset = PRESET_SPLITS.get(split_type)
    if preset is not None:
        days = days or list(preset["days"])
        rest_pattern = rest_pattern if rest_pattern is not None else preset["rest_pattern"]
    elif not days:
        raise ValueError("A custom split needs at least one day name")

    return SplitConfig(
        split_type=split_type,
        days=[d.strip() for d in days if d.strip()],
        start_date=start_date,
        rest_pattern=rest_pattern,
        current_day_index=current_day_index,
    )
