"""
Configuration constants for the workout scheduler and progression engine.

All adjustable parameters are centralized here for easy tuning.
"""

from typing import Final

# =============================================================================
# DAY LABELS
# =============================================================================

CHEST_TRICEPS: Final[str] = "Chest & Triceps"
BACK_ABS: Final[str] = "Back & Abs"
BICEPS_SHOULDERS: Final[str] = "Biceps & Shoulders"
LEGS_REAR_DELT_FOREARMS: Final[str] = "Legs, Rear Delt & Forearms"
REST_DAY: Final[str] = "Rest Day"

# =============================================================================
# LEGACY WEEKLY SCHEDULE (accounts without a rotation)
# =============================================================================

# Keyed by date.weekday(): Monday=0 ... Sunday=6
WEEKLY_SCHEDULE: Final[dict[int, str]] = {
    0: CHEST_TRICEPS,
    1: BACK_ABS,
    2: BICEPS_SHOULDERS,
    3: CHEST_TRICEPS,
    4: LEGS_REAR_DELT_FOREARMS,
    5: REST_DAY,
    6: REST_DAY,
}

# =============================================================================
# PRESET SPLITS
# =============================================================================

SPLIT_TYPES: Final[tuple[str, ...]] = ("ppl", "bro", "upper_lower", "full_body", "custom")

# rest_pattern = workout days before each rest day
PRESET_SPLITS: Final[dict[str, dict]] = {
    "ppl": {
        "name": "Push/Pull/Legs",
        "days": ["Push", "Pull", "Legs"],
        "rest_pattern": 6,  # PPL PPL Rest
    },
    "bro": {
        "name": "Bro Split",
        "days": ["Chest", "Back", "Shoulders", "Arms", "Legs"],
        "rest_pattern": 5,
    },
    "upper_lower": {
        "name": "Upper/Lower",
        "days": ["Upper", "Lower"],
        "rest_pattern": 4,  # Upper Lower Upper Lower Rest
    },
    "full_body": {
        "name": "Full Body",
        "days": ["Full Body"],
        "rest_pattern": 2,
    },
}

# =============================================================================
# SMART TARGET PROGRESSION
# =============================================================================

HISTORY_LOOKBACK_DAYS: Final[int] = 56  # Sessions older than this are ignored
MISSED_WEEK_DAYS: Final[int] = 7  # Gap (days) that counts as a missed week
WEIGHT_INCREMENT_KG: Final[float] = 2.5  # Smallest plate jump; also the rounding step
PLATEAU_TOLERANCE: Final[float] = 0.05  # Relative best-set volume spread
TREND_WINDOW: Final[int] = 4  # Most recent entries examined for trend
PLATEAU_WINDOW: Final[int] = 3  # Most recent entries examined for plateau
DELOAD_FACTOR: Final[float] = 0.90  # Weight multiplier for plateau/regression
REGRESSION_REP_BONUS: Final[int] = 2  # Extra reps when rebuilding after regression
MAINTAIN_REP_BONUS: Final[int] = 1  # Extra rep when maintaining

MIN_ENTRIES_FOR_TREND: Final[int] = 2
MIN_ENTRIES_FOR_RULES: Final[int] = 4  # Full rule set from this many sessions on

TREND_PROGRESSING: Final[str] = "progressing"
TREND_MAINTAINING: Final[str] = "maintaining"
TREND_REGRESSING: Final[str] = "regressing"
TREND_UNKNOWN: Final[str] = "unknown"

CONFIDENCE_NO_DATA: Final[str] = "No data yet"
CONFIDENCE_FIRST_SESSION: Final[str] = "First session logged"
CONFIDENCE_BUILDING: Final[str] = "Building data..."

# =============================================================================
# AI REPORT PAYLOAD
# =============================================================================

REPORT_MIN_SESSIONS: Final[int] = 8  # Two weeks of a four-day routine

# =============================================================================
# NUTRITION
# =============================================================================

ACTIVITY_LEVELS: Final[dict[str, dict]] = {
    "sedentary": {"label": "Sedentary", "multiplier": 1.2, "description": "Little or no exercise"},
    "light": {"label": "Lightly Active", "multiplier": 1.375, "description": "Light exercise 1-3 days/week"},
    "moderate": {"label": "Moderately Active", "multiplier": 1.55, "description": "Moderate exercise 3-5 days/week"},
    "active": {"label": "Active", "multiplier": 1.725, "description": "Hard exercise 6-7 days/week"},
    "very_active": {"label": "Very Active", "multiplier": 1.9, "description": "Very hard exercise & physical job"},
}
DEFAULT_ACTIVITY_LEVEL: Final[str] = "moderate"

PROTEIN_G_PER_KG: Final[float] = 2.0
FAT_ENERGY_FRACTION: Final[float] = 0.25
KCAL_PER_G_PROTEIN: Final[int] = 4
KCAL_PER_G_CARBS: Final[int] = 4
KCAL_PER_G_FAT: Final[int] = 9
DEFAULT_WATER_GOAL_ML: Final[int] = 3000
WATER_GLASSES_PER_DAY: Final[int] = 8
