"""
CLI view formatters using Rich for pretty console output.

Handles table formatting and display of workout, target and nutrition data.
"""

from datetime import date

from rich.console import Console
from rich.table import Table

from ..core.config import REST_DAY, TREND_PROGRESSING, TREND_REGRESSING, WATER_GLASSES_PER_DAY
from ..core.metrics import format_duration, session_volume
from ..core.models import DailyNutrition, NutritionGoals, Profile, SmartTarget, WorkoutSession
from ..core.progression import format_weight

console = Console()

_TREND_STYLE = {
    TREND_PROGRESSING: "green",
    TREND_REGRESSING: "red",
}


def _fmt_sets(session: WorkoutSession) -> int:
    return sum(len(ex.sets) for ex in session.exercises)


def format_session_table(sessions: list[WorkoutSession]) -> Table:
    """
    Create a Rich table displaying session history.

    Args:
        sessions: List of sessions to display (row numbers follow this order)

    Returns:
        Rich Table object
    """
    table = Table(title="Workout History")

    table.add_column("#", justify="right", style="dim", width=3)
    table.add_column("Date", style="cyan")
    table.add_column("Type", style="magenta")
    table.add_column("Exercises")
    table.add_column("Sets", justify="right")
    table.add_column("Volume(kg)", justify="right", style="bold")
    table.add_column("Duration", justify="right")

    for i, session in enumerate(sessions, 1):
        names = ", ".join(ex.name for ex in session.exercises) or "-"
        table.add_row(
            str(i),
            session.day,
            session.type,
            names,
            str(_fmt_sets(session)),
            f"{session_volume(session):g}",
            format_duration(session.duration) if session.duration is not None else "-",
        )

    return table


def print_history(sessions: list[WorkoutSession]) -> None:
    """Print session history to console."""
    if not sessions:
        console.print("[yellow]No sessions recorded yet.[/yellow]")
        return
    console.print(format_session_table(sessions))


def print_session_summary(session: WorkoutSession) -> None:
    """Per-exercise set listing for a just-logged session."""
    console.print(f"[bold]{session.type}[/bold] on {session.day}")
    for ex in session.exercises:
        sets = ", ".join(f"{format_weight(s.weight)}x{s.reps}" for s in ex.sets)
        console.print(f"  {ex.name}: {sets or '-'}")


def _fmt_target(target: SmartTarget) -> str:
    if target.target_weight is None or target.target_reps is None:
        return "-"
    return f"{format_weight(target.target_weight)}kg x {target.target_reps}"


def _fmt_last(target: SmartTarget) -> str:
    if target.last_session is None:
        return "-"
    best = target.last_session.best_set
    return f"{format_weight(best.weight)}kg x {best.reps}"


def format_targets_table(workout_type: str, targets: dict[str, SmartTarget]) -> Table:
    """
    Create a Rich table of Smart Targets for a workout.

    Args:
        workout_type: Day label the targets were computed for
        targets: Exercise name -> SmartTarget, in display order

    Returns:
        Rich Table object
    """
    table = Table(title=f"Smart Targets - {workout_type}")

    table.add_column("Exercise", style="cyan")
    table.add_column("Last", justify="right")
    table.add_column("Target", justify="right", style="bold")
    table.add_column("Trend")
    table.add_column("Confidence", style="dim")

    for name, target in targets.items():
        style = _TREND_STYLE.get(target.trend)
        trend = f"[{style}]{target.trend}[/{style}]" if style else target.trend
        if target.plateau_detected:
            trend += " [yellow](plateau)[/yellow]"
        table.add_row(name, _fmt_last(target), _fmt_target(target), trend, target.confidence)

    return table


def print_targets(workout_type: str, targets: dict[str, SmartTarget]) -> None:
    """Print the targets table followed by each exercise's advice."""
    if not targets:
        console.print("[yellow]No exercises to target.[/yellow]")
        return
    console.print(format_targets_table(workout_type, targets))
    for name, target in targets.items():
        console.print(f"  [cyan]{name}[/cyan]: {target.message}")


def smart_target_to_dict(target: SmartTarget) -> dict:
    """JSON-compatible form of a SmartTarget."""
    last = target.last_session
    return {
        "has_data": target.has_data,
        "session_count": target.session_count,
        "last_session": None if last is None else {
            "date": last.date,
            "days_ago": last.days_ago,
            "best_set": {"weight": last.best_set.weight, "reps": last.best_set.reps},
            "total_volume": last.total_volume,
            "sets": [{"weight": s.weight, "reps": s.reps} for s in last.sets],
        },
        "days_since_last_session": target.days_since_last_session,
        "missed_last_week": target.missed_last_week,
        "trend": target.trend,
        "plateau_detected": target.plateau_detected,
        "target_weight": target.target_weight,
        "target_reps": target.target_reps,
        "message": target.message,
        "confidence": target.confidence,
    }


def print_today(day: date, label: str, exercises: list[str]) -> None:
    """Print the workout for a day and its starting exercise list."""
    console.print()
    console.print(f"[bold]{day.strftime('%A %d %b %Y')}[/bold]: [magenta]{label}[/magenta]")
    if label == REST_DAY:
        console.print("[dim]Recover well. No workout scheduled.[/dim]")
        return
    for name in exercises:
        console.print(f"  - {name}")


def format_schedule_table(rows: list[tuple[date, str]], today: date) -> Table:
    """Upcoming day labels; today's row is marked with '>'."""
    table = Table(title="Schedule")

    table.add_column("", width=1)
    table.add_column("Date", style="cyan")
    table.add_column("Day")
    table.add_column("Workout", style="magenta")

    for day, label in rows:
        marker = ">" if day == today else ""
        workout = f"[dim]{label}[/dim]" if label == REST_DAY else label
        table.add_row(marker, day.isoformat(), day.strftime("%a"), workout)

    return table


def format_profile_display(profile: Profile) -> str:
    """Format a profile and its rotation as a text block."""
    lines = [
        f"Profile: {profile.name}",
        f"- Age: {profile.age}",
        f"- Weight: {profile.weight_kg:.1f} kg",
        f"- Height: {profile.height_cm:.0f} cm",
    ]
    if profile.activity_level:
        lines.append(f"- Activity: {profile.activity_level}")
    split = profile.split
    if split is None:
        lines.append("- Schedule: weekly (Mon-Fri, weekends off)")
    else:
        rest = split.rest_pattern if split.rest_pattern is not None else len(split.days)
        lines.append(
            f"- Split: {split.split_type} [{' / '.join(split.days)}], "
            f"rest after {rest} days, from {split.start_date[:10]}"
        )
    return "\n".join(lines)


def _bar(percent: float, width: int = 20) -> str:
    filled = int(percent / 100 * width)
    return "#" * filled + "." * (width - filled)


def format_nutrition_table(
    totals: DailyNutrition,
    goals: NutritionGoals,
    progress: dict[str, float],
) -> Table:
    """
    Create a Rich table of one day's intake against goals.

    Args:
        totals: Day totals
        goals: Daily goals
        progress: Percent of each goal reached (0-100)

    Returns:
        Rich Table object
    """
    table = Table(title=f"Nutrition - {totals.date}")

    table.add_column("", style="cyan")
    table.add_column("Eaten", justify="right", style="bold")
    table.add_column("Goal", justify="right")
    table.add_column("Progress")

    rows = [
        ("Calories", f"{totals.total_calories}", f"{goals.calories} kcal", "calories"),
        ("Protein", f"{totals.total_protein:g} g", f"{goals.protein} g", "protein"),
        ("Carbs", f"{totals.total_carbs:g} g", f"{goals.carbs} g", "carbs"),
        ("Fat", f"{totals.total_fat:g} g", f"{goals.fat} g", "fat"),
        ("Water", f"{totals.total_water} ml", f"{goals.water} ml", "water"),
    ]
    for label, eaten, goal, key in rows:
        pct = progress[key]
        table.add_row(label, eaten, goal, f"{_bar(pct)} {pct:.0f}%")

    return table


def print_nutrition(totals: DailyNutrition, goals: NutritionGoals, progress: dict[str, float]) -> None:
    console.print(format_nutrition_table(totals, goals, progress))
    glass_ml = goals.water / WATER_GLASSES_PER_DAY
    glasses = int(totals.total_water // glass_ml) if glass_ml > 0 else 0
    console.print(f"Water: {glasses}/{WATER_GLASSES_PER_DAY} glasses")
    if totals.foods:
        console.print("[bold]Foods[/bold]")
        for food in totals.foods:
            console.print(
                f"  {food.name} ({food.amount:g}{food.unit}): {food.calories} kcal, "
                f"P {food.protein:g} / C {food.carbs:g} / F {food.fat:g}"
            )


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[green]{message}[/green]")


def print_error(message: str) -> None:
    """Print an error message."""
    console.print(f"[red]Error: {message}[/red]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"[yellow]Warning: {message}[/yellow]")


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[blue]{message}[/blue]")


def confirm_action(message: str) -> bool:
    """
    Prompt user for confirmation.

    Args:
        message: Confirmation message

    Returns:
        True if confirmed, False otherwise
    """
    response = console.input(f"{message} [y/N]: ")
    return response.lower() in ("y", "yes")
