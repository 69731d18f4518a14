"""
Food catalog registry.

The catalog is loaded from YAML at import time.  If nothing can be loaded
a RuntimeError is raised: quick-add and natural-language logging cannot
work without it.

User overrides: ~/.ironmind/foods.yaml.
"""

from ..models import FoodItem


def _build_registry() -> dict[str, FoodItem]:
    from .loader import load_foods_from_yaml

    loaded = load_foods_from_yaml()
    if not loaded:
        raise RuntimeError(
            "ironmind: no food definitions could be loaded from YAML. "
            "Check that src/ironmind/foods.yaml is present and valid."
        )
    return loaded


FOOD_REGISTRY: dict[str, FoodItem] = _build_registry()


def get_food(food_id: str) -> FoodItem:
    """
    Return the FoodItem for the given catalog id.

    Raises:
        ValueError: If food_id is not in the registry
    """
    if food_id not in FOOD_REGISTRY:
        valid = ", ".join(FOOD_REGISTRY)
        raise ValueError(f"Unknown food '{food_id}'. Valid IDs: {valid}")
    return FOOD_REGISTRY[food_id]


def all_foods() -> list[FoodItem]:
    """Catalog foods in file order."""
    return list(FOOD_REGISTRY.values())
