"""
YAML -> FoodItem loader.

Loads the food catalog from the bundled ``src/ironmind/foods.yaml``.  A
user file at ``~/.ironmind/foods.yaml`` is deep-merged over it, so only
changed keys need to be listed; foods that exist only in the user file are
added to the catalog.

Usage (internal, called by registry.py):
    from .loader import load_foods_from_yaml
    foods = load_foods_from_yaml()   # dict or None on failure
"""

from __future__ import annotations

import os
import warnings
from pathlib import Path

import yaml

from ..models import FoodItem

_REQUIRED_FOOD_FIELDS: frozenset[str] = frozenset(
    {
        "name",
        "calories_per_100g",
        "protein_per_100g",
        "carbs_per_100g",
        "fat_per_100g",
        "default_portion_g",
        "portion_name",
    }
)


def food_from_dict(d: dict) -> FoodItem:
    """Convert a raw dict (from YAML) to a FoodItem.

    Raises ValueError if any required field is absent or a value is negative.
    """
    missing = _REQUIRED_FOOD_FIELDS - set(d)
    if missing:
        raise ValueError(f"FoodItem missing fields: {sorted(missing)}")

    food = FoodItem(
        name=str(d["name"]),
        calories_per_100g=float(d["calories_per_100g"]),
        protein_per_100g=float(d["protein_per_100g"]),
        carbs_per_100g=float(d["carbs_per_100g"]),
        fat_per_100g=float(d["fat_per_100g"]),
        default_portion_g=float(d["default_portion_g"]),
        portion_name=str(d["portion_name"]),
        aliases=[str(a) for a in d.get("aliases") or []],
    )
    for field_name in ("calories_per_100g", "protein_per_100g", "carbs_per_100g", "fat_per_100g"):
        if getattr(food, field_name) < 0:
            raise ValueError(f"{field_name} must be non-negative")
    if food.default_portion_g <= 0:
        raise ValueError("default_portion_g must be positive")
    return food


def _load_yaml_file(path: Path) -> dict:
    """Load a YAML file; return {} if it is unreadable or not a mapping."""
    try:
        with open(path, "r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
    except (OSError, yaml.YAMLError) as exc:
        warnings.warn(f"ironmind: ignoring {path} ({exc})", stacklevel=2)
        return {}
    return data if isinstance(data, dict) else {}


def _deep_merge(base: dict, override: dict) -> dict:
    """Recursively merge override into base (non-destructive to base)."""
    result = dict(base)
    for k, v in override.items():
        if isinstance(v, dict) and isinstance(result.get(k), dict):
            result[k] = _deep_merge(result[k], v)
        else:
            result[k] = v
    return result


def get_bundled_foods_path() -> Path | None:
    """Return the bundled foods.yaml, or None if not found."""
    # loader.py lives at src/ironmind/core/foods/loader.py
    candidate = Path(__file__).parent.parent.parent / "foods.yaml"
    return candidate if candidate.is_file() else None


def get_user_foods_path() -> Path | None:
    """Return ~/.ironmind/foods.yaml if it exists, else None."""
    home = Path(os.environ.get("HOME", "~")).expanduser()
    p = home / ".ironmind" / "foods.yaml"
    return p if p.is_file() else None


def load_foods_from_yaml(
    bundled_path: Path | None = None,
    user_path: Path | None = None,
) -> dict[str, FoodItem] | None:
    """Return {food_id: FoodItem} from the bundled catalog plus user overrides.

    Entries that fail validation are skipped with a warning.  Returns None
    when no catalog could be read at all.
    """
    bundled_path = bundled_path or get_bundled_foods_path()
    user_path = user_path or get_user_foods_path()

    raw: dict = {}
    if bundled_path is not None:
        raw = _load_yaml_file(bundled_path).get("foods") or {}
        if not isinstance(raw, dict):
            raw = {}
    if user_path is not None and user_path.is_file():
        user_raw = _load_yaml_file(user_path).get("foods") or {}
        if isinstance(user_raw, dict):
            raw = _deep_merge(raw, user_raw)

    result: dict[str, FoodItem] = {}
    for food_id, entry in raw.items():
        if not isinstance(entry, dict):
            warnings.warn(f"ironmind: skipping food '{food_id}' (not a mapping)", stacklevel=2)
            continue
        try:
            result[str(food_id)] = food_from_dict(entry)
        except (ValueError, TypeError) as exc:
            warnings.warn(f"ironmind: skipping food '{food_id}' ({exc})", stacklevel=2)

    return result or None
