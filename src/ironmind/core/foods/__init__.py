"""
Food catalog for quick-add nutrition logging.
"""

from .registry import FOOD_REGISTRY, all_foods, get_food

__all__ = [
    "FOOD_REGISTRY",
    "all_foods",
    "get_food",
]
