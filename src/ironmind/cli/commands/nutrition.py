"""Nutrition commands: log-food, log-water, nutrition, foods."""

import json
from typing import Annotated, Optional

import typer

from ...core.dates import now_ms
from ...core.foods import all_foods
from ...core.models import FoodLog, WaterLog
from ...core.nutrition import (
    calculate_goals,
    calculate_nutrition,
    daily_nutrition,
    goal_progress,
    parse_natural_input,
    search_food,
)
from ...io.serializers import ValidationError
from .. import views
from ..app import DateOption, HistoryPathOption, app, require_store, resolve_date


@app.command("log-food")
def log_food(
    entry: Annotated[
        str,
        typer.Argument(help='What you ate, e.g. "250g chicken", "2 eggs", "banana"'),
    ],
    grams: Annotated[
        Optional[float],
        typer.Option("--grams", "-g", help="Portion in grams (overrides the entry)"),
    ] = None,
    date: DateOption = None,
    history_path: HistoryPathOption = None,
) -> None:
    """
    Log a food from the catalog.

    Quantities: "250g chicken" is 250 g; "2 eggs" is two default portions;
    a bare name is one default portion.
    """
    store = require_store(history_path)
    day = resolve_date(date)

    parsed = parse_natural_input(entry)
    if parsed is None:
        views.print_error(f"No food matches '{entry}'. See 'ironmind foods' for the catalog.")
        raise typer.Exit(1)

    food, amount, quantity = parsed
    if grams is not None:
        if grams <= 0:
            views.print_error("Grams must be positive")
            raise typer.Exit(1)
        amount = grams

    macros = calculate_nutrition(food, amount)
    log = FoodLog(
        date=day.isoformat(),
        name=food.name,
        calories=int(macros["calories"]),
        protein=macros["protein"],
        carbs=macros["carbs"],
        fat=macros["fat"],
        amount=amount,
        timestamp=now_ms(),
    )
    store.append_food(log)

    portion = f"{quantity} x {food.portion_name}" if quantity > 1 and grams is None else f"{amount:g} g"
    views.print_success(
        f"Logged {food.name} ({portion}): {log.calories} kcal, "
        f"P {log.protein:g} / C {log.carbs:g} / F {log.fat:g}"
    )


@app.command("log-water")
def log_water(
    amount_ml: Annotated[
        int,
        typer.Argument(help="Water in ml"),
    ] = 250,
    date: DateOption = None,
    history_path: HistoryPathOption = None,
) -> None:
    """Log water intake (default: one 250 ml glass)."""
    store = require_store(history_path)
    day = resolve_date(date)

    try:
        log = WaterLog(date=day.isoformat(), amount=amount_ml, timestamp=now_ms())
    except ValueError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    store.append_water(log)
    views.print_success(f"Logged {amount_ml} ml water")


@app.command()
def nutrition(
    date: DateOption = None,
    history_path: HistoryPathOption = None,
    json_out: Annotated[
        bool,
        typer.Option("--json", "-j", help="Output as JSON for machine processing"),
    ] = False,
) -> None:
    """
    Show one day's intake against calorie, macro and water goals.
    """
    store = require_store(history_path)
    day = resolve_date(date)

    profile = store.load_profile()
    if profile is None:
        views.print_error(f"Profile not found: {store.profile_path}")
        views.print_info("Run 'init' first to create profile.")
        raise typer.Exit(1)

    try:
        food_logs, water_logs = store.load_nutrition()
    except ValidationError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    totals = daily_nutrition(food_logs, water_logs, day.isoformat())
    goals = calculate_goals(profile)
    progress = goal_progress(totals, goals)

    if json_out:
        print(json.dumps({
            "date": totals.date,
            "totals": {
                "calories": totals.total_calories,
                "protein": totals.total_protein,
                "carbs": totals.total_carbs,
                "fat": totals.total_fat,
                "water": totals.total_water,
            },
            "goals": {
                "calories": goals.calories,
                "protein": goals.protein,
                "carbs": goals.carbs,
                "fat": goals.fat,
                "water": goals.water,
            },
            "progress": {k: round(v, 1) for k, v in progress.items()},
        }, indent=2))
        return

    views.console.print()
    views.print_nutrition(totals, goals, progress)
    views.console.print()


@app.command()
def foods(
    query: Annotated[
        Optional[str],
        typer.Argument(help="Search text (default: list all)"),
    ] = None,
) -> None:
    """List catalog foods, optionally filtered by name or alias."""
    matches = search_food(query) if query else all_foods()
    if not matches:
        views.print_warning(f"No food matches '{query}'.")
        return
    for food in matches:
        views.console.print(
            f"  [cyan]{food.name}[/cyan]  {food.calories_per_100g:g} kcal/100g  "
            f"[dim]({food.portion_name}: {food.default_portion_g:g} g)[/dim]"
        )
