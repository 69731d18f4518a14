"""
Rule tests for the Smart Target progression engine.

Expected targets are hand-computed from the rules:
- trend: adjacent best-set volume votes over the newest 4 entries
- plateau: (max - min) / max < 5 % over the newest 3 entries
- deload: round(weight * 0.9) to the nearest 2.5 kg, halves up
"""

from datetime import date, datetime, timedelta
from types import SimpleNamespace

import pytest

from ironmind.core.config import (
    CONFIDENCE_BUILDING,
    CONFIDENCE_FIRST_SESSION,
    CONFIDENCE_NO_DATA,
    DELOAD_FACTOR,
    HISTORY_LOOKBACK_DAYS,
    MAINTAIN_REP_BONUS,
    MISSED_WEEK_DAYS,
    PLATEAU_TOLERANCE,
    PLATEAU_WINDOW,
    REGRESSION_REP_BONUS,
    TREND_WINDOW,
    WEIGHT_INCREMENT_KG,
)
from ironmind.core.models import Exercise, WorkoutSession, WorkoutSet
from ironmind.core.progression import (
    calculate_trend,
    compute_smart_target,
    compute_smart_targets,
    detect_plateau,
    format_weight,
    get_exercise_history,
    round_to_increment,
)

# ---------------------------------------------------------------------------
# Shared helpers
# ---------------------------------------------------------------------------

TODAY = date(2024, 6, 15)


def _ago(days: int) -> str:
    return (TODAY - timedelta(days=days)).isoformat()


def _session(days_ago: int, sets: list[tuple[float, int]], name: str = "Bench Press", type: str = "Push") -> WorkoutSession:
    return WorkoutSession(
        date=_ago(days_ago),
        type=type,
        exercises=[Exercise(name=name, sets=[WorkoutSet(weight=w, reps=r) for w, r in sets])],
    )


def _series(*points: tuple[int, float, int]) -> list[WorkoutSession]:
    """(days_ago, weight, reps) per session, one set each."""
    return [_session(d, [(w, r)]) for d, w, r in points]


def _target(history, name: str = "Bench Press", type: str = "Push"):
    return compute_smart_target(name, history, type, TODAY)


# ===========================================================================
# Constants
# ===========================================================================


class TestConstants:
    """Pin the tuning constants the expected values below depend on."""

    def test_values(self):
        assert HISTORY_LOOKBACK_DAYS == 56
        assert MISSED_WEEK_DAYS == 7
        assert WEIGHT_INCREMENT_KG == 2.5
        assert PLATEAU_TOLERANCE == 0.05
        assert TREND_WINDOW == 4
        assert PLATEAU_WINDOW == 3
        assert DELOAD_FACTOR == 0.90
        assert REGRESSION_REP_BONUS == 2
        assert MAINTAIN_REP_BONUS == 1


# ===========================================================================
# Rounding
# ===========================================================================


class TestRounding:
    def test_rounds_down_below_half(self):
        assert round_to_increment(40.5) == 40.0

    def test_half_rounds_up(self):
        # 41.25 / 2.5 = 16.5 -> 17 -> 42.5
        assert round_to_increment(41.25) == 42.5

    def test_exact_multiple_unchanged(self):
        assert round_to_increment(45.0) == 45.0

    def test_format_weight_drops_trailing_zero(self):
        assert format_weight(50.0) == "50"
        assert format_weight(52.5) == "52.5"


# ===========================================================================
# History reconstruction
# ===========================================================================


class TestExerciseHistory:
    def test_sorted_most_recent_first(self):
        history = _series((10, 40, 10), (2, 45, 10), (5, 42.5, 10))
        entries = get_exercise_history("Bench Press", history, "Push", TODAY)
        assert [e.days_ago for e in entries] == [2, 5, 10]

    def test_name_match_ignores_case_and_whitespace(self):
        history = [_session(3, [(50, 10)], name="  bench PRESS ")]
        entries = get_exercise_history("Bench Press", history, "Push", TODAY)
        assert len(entries) == 1
        assert entries[0].best_set.weight == 50

    def test_other_workout_types_never_mix(self):
        history = [_session(3, [(50, 10)], type="Pull")]
        assert get_exercise_history("Bench Press", history, "Push", TODAY) == []
        assert _target(history).has_data is False

    def test_type_match_is_exact(self):
        history = [_session(3, [(50, 10)], type="push")]
        assert get_exercise_history("Bench Press", history, "Push", TODAY) == []

    def test_lookback_boundary(self):
        assert len(get_exercise_history("Bench Press", _series((56, 50, 10)), "Push", TODAY)) == 1
        assert get_exercise_history("Bench Press", _series((57, 50, 10)), "Push", TODAY) == []

    def test_best_set_is_highest_volume(self):
        history = [_session(1, [(50, 10), (60, 5), (40, 12)])]
        entry = get_exercise_history("Bench Press", history, "Push", TODAY)[0]
        assert (entry.best_set.weight, entry.best_set.reps) == (50, 10)
        assert entry.total_volume == 500 + 300 + 480

    def test_best_set_tie_keeps_first(self):
        history = [_session(1, [(50, 10), (100, 5)])]
        entry = get_exercise_history("Bench Press", history, "Push", TODAY)[0]
        assert entry.best_set.weight == 50

    def test_exercise_without_sets_is_skipped(self):
        history = [_session(1, [])]
        assert get_exercise_history("Bench Press", history, "Push", TODAY) == []

    def test_only_first_matching_exercise_counts(self):
        session = WorkoutSession(
            date=_ago(1),
            type="Push",
            exercises=[
                Exercise(name="Bench Press", sets=[]),
                Exercise(name="bench press", sets=[WorkoutSet(weight=50, reps=10)]),
            ],
        )
        assert get_exercise_history("Bench Press", [session], "Push", TODAY) == []

    def test_timestamp_dates_use_calendar_day(self):
        session = WorkoutSession(
            date=f"{_ago(3)}T21:15:00.000Z",
            type="Push",
            exercises=[Exercise(name="Bench Press", sets=[WorkoutSet(weight=50, reps=10)])],
        )
        assert get_exercise_history("Bench Press", [session], "Push", TODAY)[0].days_ago == 3

    def test_unreadable_records_are_skipped(self):
        good = _session(2, [(50, 10)])
        bad_date = SimpleNamespace(type="Push", date="someday", exercises=good.exercises)
        no_exercises = SimpleNamespace(type="Push", date=_ago(1), exercises=None)
        bad_set = SimpleNamespace(
            type="Push",
            date=_ago(3),
            exercises=[SimpleNamespace(name="Bench Press", sets=[SimpleNamespace(weight="heavy", reps=5)])],
        )
        entries = get_exercise_history("Bench Press", [bad_date, no_exercises, bad_set, good], "Push", TODAY)
        assert [e.days_ago for e in entries] == [2]

    def test_future_dated_session_included(self):
        entries = get_exercise_history("Bench Press", _series((-1, 50, 10)), "Push", TODAY)
        assert entries[0].days_ago == -1


# ===========================================================================
# Trend and plateau
# ===========================================================================


class TestTrend:
    def _entries(self, *volumes_kg_x10: float):
        history = [_session(i + 1, [(w, 10)]) for i, w in enumerate(volumes_kg_x10)]
        return get_exercise_history("Bench Press", history, "Push", TODAY)

    def test_fewer_than_two_is_unknown(self):
        assert calculate_trend([]) == "unknown"
        assert calculate_trend(self._entries(50)) == "unknown"

    def test_strictly_increasing_is_progressing(self):
        assert calculate_trend(self._entries(47.5, 45, 42.5, 40)) == "progressing"

    def test_strictly_decreasing_is_regressing(self):
        assert calculate_trend(self._entries(40, 45, 50, 55)) == "regressing"

    def test_equal_volumes_do_not_vote(self):
        assert calculate_trend(self._entries(50, 50)) == "maintaining"

    def test_only_newest_four_entries_vote(self):
        # newest four: 50 > 45, 45 = 45, 45 < 50 -> 1 vs 1; the fifth would tip it
        assert calculate_trend(self._entries(50, 45, 45, 50, 60)) == "maintaining"

    def test_plateau_within_five_percent(self):
        # volumes 500, 510, 495: (510 - 495) / 510 = 2.9 %
        assert detect_plateau(self._entries(50, 51, 49.5)) is True

    def test_no_plateau_beyond_five_percent(self):
        # (475 - 425) / 475 = 10.5 %
        assert detect_plateau(self._entries(47.5, 45, 42.5)) is False

    def test_plateau_needs_three_entries(self):
        assert detect_plateau(self._entries(50, 50)) is False

    def test_all_zero_volume_is_not_a_plateau(self):
        assert detect_plateau(self._entries(0, 0, 0)) is False


# ===========================================================================
# Smart Target tiers
# ===========================================================================


class TestTimeOfDay:
    """A datetime reference compares at midnight granularity."""

    EVENING = datetime(2024, 6, 15, 18, 30)

    def test_history_ages_ignore_clock_time(self):
        entries = get_exercise_history("Bench Press", _series((3, 50, 10)), "Push", self.EVENING)
        assert [e.days_ago for e in entries] == [3]

    def test_target_from_datetime(self):
        history = _series((3, 50, 10))
        target = compute_smart_target("Bench Press", history, "Push", self.EVENING)
        assert target == _target(history)
        assert target.days_since_last_session == 3


class TestNoData:
    def test_empty_history(self):
        target = _target([])
        assert target.has_data is False
        assert target.session_count == 0
        assert target.target_weight is None
        assert target.target_reps is None
        assert target.last_session is None
        assert target.trend == "unknown"
        assert target.confidence == CONFIDENCE_NO_DATA
        assert "New exercise" in target.message


class TestFirstSession:
    def test_repeat_last_session(self):
        target = _target(_series((3, 50, 10)))
        assert target.has_data is True
        assert (target.target_weight, target.target_reps) == (50, 10)
        assert target.message == "Last time: 50kg x 10 (3 days ago). Match or beat it today!"
        assert target.confidence == CONFIDENCE_FIRST_SESSION
        assert target.days_since_last_session == 3
        assert target.missed_last_week is False

    def test_one_day_singular(self):
        assert "(1 day ago)" in _target(_series((1, 50, 10))).message

    def test_same_day_has_no_age(self):
        assert _target(_series((0, 50, 10))).message.startswith("Last time: 50kg x 10.")

    def test_missed_week_cautions(self):
        target = _target(_series((10, 50, 10)))
        assert target.missed_last_week is True
        assert "missed last week" in target.message
        assert (target.target_weight, target.target_reps) == (50, 10)


class TestBuildingData:
    def test_progressing_adds_increment(self):
        target = _target(_series((2, 50, 10), (5, 47.5, 10)))
        assert target.trend == "progressing"
        assert (target.target_weight, target.target_reps) == (52.5, 10)
        assert target.confidence == CONFIDENCE_BUILDING

    def test_otherwise_match(self):
        target = _target(_series((2, 50, 10), (5, 50, 10)))
        assert target.trend == "maintaining"
        assert (target.target_weight, target.target_reps) == (50, 10)
        assert target.message.startswith("Match 50kg x 10")

    def test_three_entries_report_plateau_flag_only(self):
        target = _target(_series((2, 50, 10), (5, 51, 10), (8, 49.5, 10)))
        assert target.plateau_detected is True
        assert target.confidence == CONFIDENCE_BUILDING
        assert target.target_weight == 50

    def test_missed_week_matches(self):
        target = _target(_series((9, 45, 10), (12, 42.5, 10)))
        assert target.missed_last_week is True
        assert target.message.startswith("Back after 9 days")
        assert target.target_weight == 45


class TestFullRules:
    def test_progressing(self):
        target = _target(_series((2, 47.5, 10), (5, 45, 10), (8, 42.5, 10), (11, 40, 10)))
        assert target.trend == "progressing"
        assert target.plateau_detected is False
        assert (target.target_weight, target.target_reps) == (50, 10)
        assert target.confidence == "Based on 4 sessions"
        assert target.session_count == 4

    def test_plateau_deloads(self):
        # volumes 500, 510, 495, 450: plateau beats the progressing vote
        target = _target(_series((2, 50, 10), (5, 51, 10), (8, 49.5, 10), (11, 45, 10)))
        assert target.trend == "progressing"
        assert target.plateau_detected is True
        # 50 * 0.9 = 45
        assert (target.target_weight, target.target_reps) == (45, 10)
        assert target.message.startswith("Plateau detected")

    def test_regressing_deloads_and_adds_reps(self):
        target = _target(_series((2, 40, 10), (5, 45, 10), (8, 50, 10), (11, 55, 10)))
        assert target.trend == "regressing"
        # 40 * 0.9 = 36 -> 35; 10 + 2 reps
        assert (target.target_weight, target.target_reps) == (35, 12)
        assert target.message.startswith("Regressing")

    def test_maintaining_adds_a_rep(self):
        target = _target(_series((2, 50, 10), (5, 45, 10), (8, 45, 10), (11, 50, 10)))
        assert target.trend == "maintaining"
        assert target.plateau_detected is False
        assert (target.target_weight, target.target_reps) == (50, 11)

    def test_missed_week_beats_other_rules(self):
        target = _target(_series((10, 50, 10), (13, 51, 10), (16, 49.5, 10), (19, 45, 10)))
        assert target.plateau_detected is True
        assert target.missed_last_week is True
        assert target.message.startswith("Back after 10 days")
        assert (target.target_weight, target.target_reps) == (50, 10)

    def test_confidence_counts_all_entries(self):
        history = _series(*[(2 + 3 * i, 50 - 2.5 * i, 10) for i in range(6)])
        assert _target(history).confidence == "Based on 6 sessions"


class TestManyTargets:
    def test_keeps_order_and_names(self):
        history = [_session(2, [(50, 10)]), _session(2, [(20, 12)], name="Lateral Raise")]
        targets = compute_smart_targets(["Lateral Raise", "Bench Press", "Dips"], history, "Push", TODAY)
        assert list(targets) == ["Lateral Raise", "Bench Press", "Dips"]
        assert targets["Lateral Raise"].target_weight == 20
        assert targets["Dips"].has_data is False


@pytest.mark.parametrize("weight", [45.0, 47.5, 52.5, 100.0])
def test_deload_lands_on_plate_increment(weight):
    assert round_to_increment(weight * DELOAD_FACTOR) % WEIGHT_INCREMENT_KG == 0
