"""Profile commands: init, set-split, show-profile, and menu helpers."""

from typing import Annotated, Optional

import typer

from ...core.config import ACTIVITY_LEVELS, PRESET_SPLITS, SPLIT_TYPES
from ...core.dates import today_iso
from ...core.models import Profile
from ...core.scheduler import build_split
from ...io.serializers import ValidationError, validate_date
from .. import views
from ..app import HistoryPathOption, app, get_store


@app.command()
def init(
    name: Annotated[
        str,
        typer.Option("--name", "-n", help="Display name"),
    ] = "Athlete",
    age: Annotated[
        int,
        typer.Option("--age", "-a", help="Age in years"),
    ] = 30,
    weight_kg: Annotated[
        float,
        typer.Option("--weight-kg", "-w", help="Bodyweight in kg"),
    ] = 80.0,
    height_cm: Annotated[
        float,
        typer.Option("--height-cm", help="Height in centimeters"),
    ] = 175.0,
    gender: Annotated[
        Optional[str],
        typer.Option("--gender", "-g", help="male/female (used for calorie goals)"),
    ] = None,
    activity_level: Annotated[
        str,
        typer.Option("--activity", help=f"Activity level: {', '.join(ACTIVITY_LEVELS)}"),
    ] = "moderate",
    calorie_goal: Annotated[
        Optional[int],
        typer.Option("--calorie-goal", help="Daily kcal goal (default: computed)"),
    ] = None,
    protein_goal: Annotated[
        Optional[int],
        typer.Option("--protein-goal", help="Daily protein goal in g (default: 2 g/kg)"),
    ] = None,
    history_path: HistoryPathOption = None,
) -> None:
    """
    Initialize user profile and history files.

    An existing rotation and existing logs are kept; only profile fields
    are replaced.
    """
    store = get_store(history_path)

    if activity_level not in ACTIVITY_LEVELS:
        views.print_error(f"Activity level must be one of: {', '.join(ACTIVITY_LEVELS)}")
        raise typer.Exit(1)

    old_profile = store.load_profile()

    try:
        profile = Profile(
            name=name,
            age=age,
            weight_kg=weight_kg,
            height_cm=height_cm,
            gender=gender,  # type: ignore[arg-type]
            activity_level=activity_level,
            calorie_goal=calorie_goal,
            protein_goal=protein_goal,
            split=old_profile.split if old_profile is not None else None,
        )
    except ValueError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    store.init()
    store.save_profile(profile)

    if old_profile is not None:
        views.print_success(f"Updated profile at {store.profile_path}")
    else:
        views.print_success(f"Initialized profile at {store.profile_path}")
    views.print_success(f"History file: {store.history_path}")


@app.command("set-split")
def set_split(
    split_type: Annotated[
        Optional[str],
        typer.Argument(help=f"Split type: {', '.join(SPLIT_TYPES)}"),
    ] = None,
    days: Annotated[
        Optional[str],
        typer.Option("--days", help="Comma-separated day names (required for custom)"),
    ] = None,
    rest_pattern: Annotated[
        Optional[int],
        typer.Option("--rest-after", "-r", help="Workout days before each rest day"),
    ] = None,
    start_date: Annotated[
        Optional[str],
        typer.Option("--start", "-s", help="Rotation start date (YYYY-MM-DD, default: today)"),
    ] = None,
    day_index: Annotated[
        int,
        typer.Option("--day-index", help="Rotation slot on the start date (0-based)"),
    ] = 0,
    clear: Annotated[
        bool,
        typer.Option("--clear", help="Remove the rotation and use the weekly schedule"),
    ] = False,
    history_path: HistoryPathOption = None,
) -> None:
    """
    Choose a workout rotation.

    Presets: ppl, bro, upper_lower, full_body.  A custom split takes its
    own day names:

      ironmind set-split custom --days "Chest & Back,Legs,Arms" --rest-after 3
    """
    store = get_store(history_path)
    profile = store.load_profile()
    if profile is None:
        views.print_error(f"Profile not found: {store.profile_path}")
        views.print_info("Run 'init' first to create profile.")
        raise typer.Exit(1)

    if clear:
        profile.split = None
        store.save_profile(profile)
        views.print_success("Rotation cleared; using the weekly schedule.")
        return

    if split_type is None:
        views.print_error("Give a split type or --clear")
        raise typer.Exit(1)

    if split_type not in SPLIT_TYPES:
        views.print_error(f"Split type must be one of: {', '.join(SPLIT_TYPES)}")
        raise typer.Exit(1)

    try:
        start = validate_date(start_date) if start_date else today_iso()
        day_list = days.split(",") if days else None
        profile.split = build_split(
            split_type,
            start,
            days=day_list,
            rest_pattern=rest_pattern,
            current_day_index=day_index,
        )
    except (ValidationError, ValueError) as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    store.save_profile(profile)
    label = PRESET_SPLITS.get(split_type, {}).get("name", "Custom split")
    views.print_success(f"{label}: {' / '.join(profile.split.days)} starting {start}")


@app.command("show-profile")
def show_profile(history_path: HistoryPathOption = None) -> None:
    """Show profile fields and the active rotation."""
    store = get_store(history_path)
    profile = store.load_profile()
    if profile is None:
        views.print_error(f"Profile not found: {store.profile_path}")
        views.print_info("Run 'init' first to create profile.")
        raise typer.Exit(1)

    views.console.print()
    views.console.print(views.format_profile_display(profile))
    views.console.print()


def _menu_set_split() -> None:
    """Interactive rotation picker called from the main menu."""
    store = get_store(None)
    profile = store.load_profile()
    if profile is None:
        views.print_error("No profile yet. Run setup first.")
        return

    views.console.print()
    keys = list(PRESET_SPLITS)
    for i, key in enumerate(keys, 1):
        preset = PRESET_SPLITS[key]
        views.console.print(f"  \\[{i}] {preset['name']} ({' / '.join(preset['days'])})")
    views.console.print(f"  \\[{len(keys) + 1}] Custom")
    views.console.print("  \\[0] Weekly schedule (no rotation)")

    raw = views.console.input("Choice [1]: ").strip() or "1"
    if raw == "0":
        profile.split = None
        store.save_profile(profile)
        views.print_success("Rotation cleared; using the weekly schedule.")
        return

    try:
        choice = int(raw)
    except ValueError:
        views.print_error(f"Unknown choice: {raw}")
        return

    try:
        if 1 <= choice <= len(keys):
            profile.split = build_split(keys[choice - 1], today_iso())
        elif choice == len(keys) + 1:
            names = views.console.input("Day names, comma-separated: ").strip()
            rest_raw = views.console.input("Workout days before a rest day [all]: ").strip()
            profile.split = build_split(
                "custom",
                today_iso(),
                days=names.split(","),
                rest_pattern=int(rest_raw) if rest_raw else None,
            )
        else:
            views.print_error(f"Unknown choice: {raw}")
            return
    except ValueError as e:
        views.print_error(str(e))
        return

    store.save_profile(profile)
    views.print_success(f"Rotation set: {' / '.join(profile.split.days)}")


def _menu_init() -> None:
    """Interactive profile setup helper called from the main menu."""
    store = get_store(None)
    old = store.load_profile()

    views.console.print()
    views.console.print("[bold]Setup / Edit Profile[/bold]")
    views.console.print("[dim]Press Enter to keep the current value.[/dim]")
    views.console.print()

    def _ask(label: str, default, cast):
        while True:
            raw = views.console.input(f"{label} [{default}]: ").strip()
            if not raw:
                return default
            try:
                value = cast(raw)
                if value > 0:
                    return value
            except ValueError:
                pass
            views.print_error("Enter a positive number")

    name = views.console.input(f"Name [{old.name if old else 'Athlete'}]: ").strip()
    name = name or (old.name if old else "Athlete")
    age = _ask("Age", old.age if old else 30, int)
    weight_kg = _ask("Bodyweight kg", old.weight_kg if old else 80.0, float)
    height_cm = _ask("Height cm", old.height_cm if old else 175.0, float)

    default_level = (old.activity_level if old else None) or "moderate"
    while True:
        level = views.console.input(
            f"Activity ({'/'.join(ACTIVITY_LEVELS)}) [{default_level}]: "
        ).strip() or default_level
        if level in ACTIVITY_LEVELS:
            break
        views.print_error(f"Enter one of: {', '.join(ACTIVITY_LEVELS)}")

    profile = Profile(
        name=name,
        age=age,
        weight_kg=weight_kg,
        height_cm=height_cm,
        gender=old.gender if old else None,
        activity_level=level,
        calorie_goal=old.calorie_goal if old else None,
        protein_goal=old.protein_goal if old else None,
        split=old.split if old else None,
    )
    store.init()
    store.save_profile(profile)
    views.print_success(f"Profile saved at {store.profile_path}")
