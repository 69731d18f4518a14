"""
Nutrition arithmetic: portions, natural-language entries, daily totals
and goals.
"""

import math
import re
from typing import Sequence

from .config import (
    ACTIVITY_LEVELS,
    DEFAULT_ACTIVITY_LEVEL,
    DEFAULT_WATER_GOAL_ML,
    FAT_ENERGY_FRACTION,
    KCAL_PER_G_CARBS,
    KCAL_PER_G_FAT,
    KCAL_PER_G_PROTEIN,
    PROTEIN_G_PER_KG,
)
from .foods import all_foods
from .models import DailyNutrition, FoodItem, FoodLog, NutritionGoals, Profile, WaterLog

_GRAMS_PATTERN = re.compile(r"(\d+)\s*(?:g|grams?)\s+(.+)", re.IGNORECASE)
_QUANTITY_PATTERN = re.compile(r"(\d+)\s+(.+)", re.IGNORECASE)


def search_food(query: str, foods: Sequence[FoodItem] | None = None) -> list[FoodItem]:
    """Catalog foods whose name or an alias contains the query (case-insensitive)."""
    q = query.lower().strip()
    if not q:
        return []
    catalog = all_foods() if foods is None else foods
    return [
        food
        for food in catalog
        if q in food.name.lower() or any(q in alias.lower() for alias in food.aliases)
    ]


def _round_half_up(value: float, digits: int = 0) -> float:
    scale = 10**digits
    return math.floor(value * scale + 0.5) / scale


def calculate_nutrition(food: FoodItem, grams: float) -> dict[str, float]:
    """
    Nutrition for a portion.

    Calories round to whole numbers, macros to one decimal (halves up).
    """
    multiplier = grams / 100
    return {
        "calories": int(_round_half_up(food.calories_per_100g * multiplier)),
        "protein": _round_half_up(food.protein_per_100g * multiplier, 1),
        "carbs": _round_half_up(food.carbs_per_100g * multiplier, 1),
        "fat": _round_half_up(food.fat_per_100g * multiplier, 1),
    }


def parse_natural_input(
    text: str,
    foods: Sequence[FoodItem] | None = None,
) -> tuple[FoodItem, float, int] | None:
    """
    Parse entries like "250g chicken", "2 eggs" or "banana".

    Returns:
        (food, grams, quantity), or None if no catalog food matches
    """
    text = text.lower().strip()

    m = _GRAMS_PATTERN.match(text)
    if m:
        matches = search_food(m.group(2), foods)
        if matches:
            return matches[0], float(m.group(1)), 1

    m = _QUANTITY_PATTERN.match(text)
    if m:
        matches = search_food(m.group(2), foods)
        if matches:
            quantity = int(m.group(1))
            return matches[0], matches[0].default_portion_g * quantity, quantity

    matches = search_food(text, foods)
    if matches:
        return matches[0], matches[0].default_portion_g, 1
    return None


def daily_nutrition(
    food_logs: Sequence[FoodLog],
    water_logs: Sequence[WaterLog],
    day: str,
) -> DailyNutrition:
    """Totals for the logs dated ``day`` (YYYY-MM-DD)."""
    foods = [f for f in food_logs if f.date[:10] == day]
    water = [w for w in water_logs if w.date[:10] == day]
    return DailyNutrition(
        date=day,
        total_calories=sum(f.calories for f in foods),
        total_protein=round(sum(f.protein for f in foods), 1),
        total_carbs=round(sum(f.carbs for f in foods), 1),
        total_fat=round(sum(f.fat for f in foods), 1),
        total_water=sum(w.amount for w in water),
        foods=foods,
        water_logs=water,
    )


def _percent(value: float, goal: float) -> float:
    if goal <= 0:
        return 100.0
    return min(value / goal * 100, 100.0)


def goal_progress(totals: DailyNutrition, goals: NutritionGoals) -> dict[str, float]:
    """Percent of each goal reached, capped at 100."""
    return {
        "calories": _percent(totals.total_calories, goals.calories),
        "protein": _percent(totals.total_protein, goals.protein),
        "carbs": _percent(totals.total_carbs, goals.carbs),
        "fat": _percent(totals.total_fat, goals.fat),
        "water": _percent(totals.total_water, goals.water),
    }


def basal_metabolic_rate(profile: Profile) -> float:
    """
    Mifflin-St Jeor BMR in kcal/day.

    BMR = 10 * kg + 6.25 * cm - 5 * age + s, s = +5 (male) / -161 (female).
    Without a recorded gender the midpoint of the two offsets is used.
    """
    offset = {"male": 5.0, "female": -161.0}.get(profile.gender or "", -78.0)
    return 10 * profile.weight_kg + 6.25 * profile.height_cm - 5 * profile.age + offset


def calculate_goals(profile: Profile) -> NutritionGoals:
    """
    Daily nutrition goals for a profile.

    Explicit calorie/protein goals on the profile win.  Otherwise calories
    are BMR x activity multiplier and protein is PROTEIN_G_PER_KG of
    bodyweight.  Fat takes FAT_ENERGY_FRACTION of calories and carbs the
    remainder.
    """
    level = profile.activity_level or DEFAULT_ACTIVITY_LEVEL
    multiplier = ACTIVITY_LEVELS[level]["multiplier"]

    calories = profile.calorie_goal or int(_round_half_up(basal_metabolic_rate(profile) * multiplier))
    protein = profile.protein_goal or int(_round_half_up(profile.weight_kg * PROTEIN_G_PER_KG))
    fat = int(_round_half_up(calories * FAT_ENERGY_FRACTION / KCAL_PER_G_FAT))
    carbs_kcal = calories - protein * KCAL_PER_G_PROTEIN - fat * KCAL_PER_G_FAT
    carbs = max(0, int(_round_half_up(carbs_kcal / KCAL_PER_G_CARBS)))

    return NutritionGoals(
        calories=calories,
        protein=protein,
        carbs=carbs,
        fat=fat,
        water=DEFAULT_WATER_GOAL_ML,
    )
