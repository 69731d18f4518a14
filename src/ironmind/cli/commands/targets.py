"""Planning commands: today, target, report-data."""

import json
from typing import Annotated, Optional

import typer

from ...core.config import REPORT_MIN_SESSIONS, REST_DAY
from ...core.metrics import build_report_payload, report_ready
from ...core.progression import compute_smart_target, compute_smart_targets
from ...core.scheduler import resolve_workout_label, upcoming_labels
from ...core.templates import starting_exercises
from ...io.serializers import ValidationError
from .. import views
from ..app import DateOption, HistoryPathOption, app, require_store, resolve_date


@app.command()
def today(
    date: DateOption = None,
    days: Annotated[
        int,
        typer.Option("--days", "-n", help="Also show the schedule for this many days"),
    ] = 0,
    history_path: HistoryPathOption = None,
    json_out: Annotated[
        bool,
        typer.Option("--json", "-j", help="Output as JSON for machine processing"),
    ] = False,
) -> None:
    """
    Show the scheduled workout and its starting exercises.
    """
    store = require_store(history_path)
    day = resolve_date(date)
    profile = store.load_profile()

    try:
        history = store.load_history()
    except ValidationError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    label = resolve_workout_label(profile, day)
    exercises = starting_exercises(label, history)
    schedule = upcoming_labels(profile, day, days) if days > 0 else []

    if json_out:
        print(json.dumps({
            "date": day.isoformat(),
            "workout": label,
            "rest_day": label == REST_DAY,
            "exercises": exercises,
            "schedule": [{"date": d.isoformat(), "workout": w} for d, w in schedule],
        }, indent=2))
        return

    views.print_today(day, label, exercises)
    if schedule:
        views.console.print()
        views.console.print(views.format_schedule_table(schedule, day))


@app.command()
def target(
    exercise: Annotated[
        Optional[str],
        typer.Argument(help="Exercise name (default: every exercise of the day)"),
    ] = None,
    workout_type: Annotated[
        Optional[str],
        typer.Option("--type", "-t", help="Workout type (default: the scheduled day)"),
    ] = None,
    date: DateOption = None,
    history_path: HistoryPathOption = None,
    json_out: Annotated[
        bool,
        typer.Option("--json", "-j", help="Output as JSON for machine processing"),
    ] = False,
) -> None:
    """
    Show Smart Targets: suggested weight and reps from recent sessions.

    Only sessions of the same workout type are compared.
    """
    store = require_store(history_path)
    day = resolve_date(date)

    try:
        history = store.load_history()
    except ValidationError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    if workout_type is None:
        workout_type = resolve_workout_label(store.load_profile(), day)

    if exercise is not None:
        targets = {exercise: compute_smart_target(exercise, history, workout_type, day)}
    else:
        if workout_type == REST_DAY:
            views.print_info(f"{day.isoformat()} is a rest day. Pass --type to see targets.")
            raise typer.Exit(0)
        names = starting_exercises(workout_type, history)
        targets = compute_smart_targets(names, history, workout_type, day)

    if json_out:
        print(json.dumps({
            "date": day.isoformat(),
            "workout": workout_type,
            "targets": {name: views.smart_target_to_dict(t) for name, t in targets.items()},
        }, indent=2))
        return

    views.console.print()
    views.print_targets(workout_type, targets)
    views.console.print()


@app.command("report-data")
def report_data(
    history_path: HistoryPathOption = None,
    limit: Annotated[
        Optional[int],
        typer.Option("--limit", "-l", help="Only the most recent N sessions"),
    ] = None,
) -> None:
    """
    Print the aggregated progress-report payload as JSON.

    Needs at least 8 logged sessions.
    """
    store = require_store(history_path)

    if limit is not None and limit < 1:
        views.print_error("--limit must be at least 1")
        raise typer.Exit(1)

    try:
        sessions = store.load_history()
    except ValidationError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    if not report_ready(sessions):
        views.print_error(
            f"Need at least {REPORT_MIN_SESSIONS} sessions for a report "
            f"({len(sessions)} logged)."
        )
        raise typer.Exit(1)

    if limit is not None:
        sessions = sessions[-limit:]

    payload = build_report_payload(sessions, store.load_profile())
    print(json.dumps(payload, indent=2))
