"""Session commands: log-session, show-history, delete-record, and helpers."""

import json
from typing import Annotated, Optional

import typer

from ...core.config import REST_DAY
from ...core.dates import now_ms
from ...core.metrics import format_duration, get_last_performance, session_volume
from ...core.models import Exercise, WorkoutSession, WorkoutSet
from ...core.progression import compute_smart_target, format_weight
from ...core.scheduler import resolve_workout_label
from ...core.session import add_exercise, add_set, finish_session, remove_exercise, start_session
from ...io.serializers import ValidationError, parse_exercise_spec, parse_sets_string, session_to_dict
from .. import views
from ..app import DateOption, HistoryPathOption, app, get_store, require_store, resolve_date


def _interactive_exercise(session: WorkoutSession, exercise: Exercise, history: list[WorkoutSession]) -> None:
    """
    Prompt sets for one exercise of an active session.

    Each line is WEIGHTxREPS (or several, comma-separated); "=" repeats the
    previous set; an empty line moves on.
    """
    last = get_last_performance(history, exercise.name)
    target = compute_smart_target(exercise.name, history, session.type, resolve_date(session.day))

    views.console.print()
    views.console.print(f"[bold cyan]{exercise.name}[/bold cyan]")
    if last is not None:
        sets = ", ".join(f"{format_weight(s.weight)}x{s.reps}" for s in last.sets)
        views.console.print(f"  [dim]Last: {sets}[/dim]")
    views.console.print(f"  [dim]{target.message}[/dim]")

    while True:
        raw = views.console.input(f"  Set {len(exercise.sets) + 1}: ").strip()
        if not raw:
            return
        if raw == "=":
            if not exercise.sets:
                views.print_error("No previous set to repeat")
                continue
            add_set(session, exercise.id, now_ms())
            continue
        try:
            parsed = parse_sets_string(raw)
        except ValidationError as e:
            views.print_error(str(e))
            continue
        for weight, reps in parsed:
            add_set(session, exercise.id, now_ms(), weight=weight, reps=reps)


def _interactive_session(session: WorkoutSession, history: list[WorkoutSession]) -> None:
    """Walk through a session's exercises, then offer extra ones."""
    views.console.print()
    views.console.print("[bold]Enter sets as WEIGHTxREPS[/bold], e.g. [green]50x10[/green]  [green]60x5x3[/green]")
    views.console.print("  [green]=[/green] repeats the previous set; an empty line moves on.")

    for exercise in list(session.exercises):
        _interactive_exercise(session, exercise, history)

    while True:
        views.console.print()
        name = views.console.input("Extra exercise (Enter to finish): ").strip()
        if not name:
            break
        exercise = add_exercise(session, name)
        _interactive_exercise(session, exercise, history)

    for exercise in list(session.exercises):
        if not exercise.sets:
            remove_exercise(session, exercise.id)


def _menu_delete_record() -> None:
    """Interactive delete-session helper called from the main menu."""
    store = get_store(None)
    try:
        sessions = store.load_history()
    except (FileNotFoundError, ValidationError) as e:
        views.print_error(str(e))
        return

    if not sessions:
        views.print_info("No sessions to delete.")
        return

    views.print_history(sessions)

    while True:
        raw = views.console.input("Delete session # (Enter to cancel): ").strip()
        if not raw:
            views.print_info("Cancelled.")
            return
        try:
            record_id = int(raw)
        except ValueError:
            views.print_error("Enter a number")
            continue

        if record_id < 1 or record_id > len(sessions):
            views.print_error(f"Enter a number between 1 and {len(sessions)}")
            continue

        target = sessions[record_id - 1]
        if views.confirm_action(f"Delete {target.day} ({target.type})?"):
            store.delete_session_at(record_id - 1)
            views.print_success(f"Deleted session #{record_id}: {target.day} ({target.type})")
        else:
            views.print_info("Cancelled.")
        return


@app.command("log-session")
def log_session(
    exercises: Annotated[
        Optional[list[str]],
        typer.Option(
            "--exercise",
            "-e",
            help='Exercise and sets, e.g. "Bench Press: 50x10, 52.5x8" (repeatable)',
        ),
    ] = None,
    workout_type: Annotated[
        Optional[str],
        typer.Option("--type", "-t", help="Workout type (default: the scheduled day)"),
    ] = None,
    date: DateOption = None,
    duration_min: Annotated[
        Optional[int],
        typer.Option("--duration", help="Workout length in minutes"),
    ] = None,
    history_path: HistoryPathOption = None,
    json_out: Annotated[
        bool,
        typer.Option("--json", "-j", help="Output as JSON for machine processing"),
    ] = False,
) -> None:
    """
    Log a completed workout session.

    Without --exercise, walks through the day's exercises interactively.
    One-liner use:

      ironmind log-session --type Push --duration 55 \\
        -e "Chest: Bench Press: 60x8, 62.5x6" -e "Triceps: Dips: 0x12x3"
    """
    store = require_store(history_path)
    day = resolve_date(date)

    try:
        history = store.load_history(newest_first=True)
    except ValidationError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    if workout_type is None:
        workout_type = resolve_workout_label(store.load_profile(), day)
        if workout_type == REST_DAY:
            views.print_error(f"{day.isoformat()} is a rest day. Pass --type to log anyway.")
            raise typer.Exit(1)

    if duration_min is not None and duration_min < 0:
        views.print_error("Duration must be non-negative")
        raise typer.Exit(1)

    end_ms = now_ms()
    start_ms = end_ms - (duration_min or 0) * 60_000

    if exercises:
        try:
            parsed = [parse_exercise_spec(spec) for spec in exercises]
        except ValidationError as e:
            views.print_error(f"Invalid exercise format: {e}")
            raise typer.Exit(1)
        session = WorkoutSession(
            date=day.isoformat(),
            type=workout_type,
            start_time=start_ms,
            exercises=[
                Exercise(name=name, sets=[WorkoutSet(weight=w, reps=r, timestamp=end_ms) for w, r in sets])
                for name, sets in parsed
            ],
        )
    else:
        session = start_session(workout_type, history, start_ms, day)
        _interactive_session(session, history)
        if not session.exercises:
            views.print_info("Nothing logged.")
            raise typer.Exit(0)
        if duration_min is None:
            # untimed: the walk-through itself is the workout
            end_ms = now_ms()

    finish_session(session, end_ms)
    store.append_session(session)

    if json_out:
        print(json.dumps(session_to_dict(session), indent=2))
        return

    views.console.print()
    views.print_success(f"Logged {session.type} session for {session.day}")
    views.print_session_summary(session)
    views.print_info(f"Volume: {session_volume(session):g} kg  Duration: {format_duration(session.duration or 0)}")


@app.command("show-history")
def show_history(
    history_path: HistoryPathOption = None,
    limit: Annotated[
        Optional[int],
        typer.Option("--limit", "-l", help="Limit number of sessions to show"),
    ] = None,
    workout_type: Annotated[
        Optional[str],
        typer.Option("--type", "-t", help="Only sessions of this workout type"),
    ] = None,
    json_out: Annotated[
        bool,
        typer.Option("--json", "-j", help="Output as JSON for machine processing"),
    ] = False,
) -> None:
    """
    Display workout history as a table.
    """
    store = require_store(history_path)

    if limit is not None and limit < 1:
        views.print_error("--limit must be at least 1")
        raise typer.Exit(1)

    try:
        sessions = store.load_history()
    except (FileNotFoundError, ValidationError) as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    if workout_type is not None:
        sessions = [s for s in sessions if s.type == workout_type]
    if limit is not None:
        sessions = sessions[-limit:]

    if json_out:
        output = []
        for s in sessions:
            d = session_to_dict(s)
            d["volume"] = session_volume(s)
            output.append(d)
        print(json.dumps(output, indent=2))
        return

    views.print_history(sessions)


@app.command("delete-record")
def delete_record(
    record_id: Annotated[
        int,
        typer.Argument(help="Session ID to delete (see # column in show-history)"),
    ],
    history_path: HistoryPathOption = None,
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Skip confirmation prompt"),
    ] = False,
) -> None:
    """
    Remove a session by its ID.

    Use 'show-history' to see session IDs in the # column.
    """
    store = get_store(history_path)

    try:
        sessions = store.load_history()
    except (FileNotFoundError, ValidationError) as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    if not sessions:
        views.print_error("No sessions in history.")
        raise typer.Exit(1)

    if record_id < 1 or record_id > len(sessions):
        views.print_error(f"Record ID must be between 1 and {len(sessions)}")
        raise typer.Exit(1)

    target = sessions[record_id - 1]
    views.console.print(f"Session to delete: [bold]{target.day}[/bold] ({target.type})")

    if not force and not views.confirm_action("Delete this session?"):
        views.print_info("Cancelled.")
        raise typer.Exit(0)

    store.delete_session_at(record_id - 1)
    views.print_success(f"Deleted session #{record_id}: {target.day} ({target.type})")
