from __future__ import annotations

from typing import List, Sequence

from .models import Recipe

FEATURE_NAMES: tuple[str, ...] = ("calories", "protein", "carbs", "fat", "cooking_time")

# Divisors bring every dimension into a comparable single-digit range.
_SCALES: tuple[float, ...] = (100.0, 10.0, 10.0, 10.0, 10.0)


def to_feature_vector(recipe: Recipe) -> List[float]:
    """Return the scaled [calories, protein, carbs, fat, cooking_time] vector."""
    raw = (recipe.calories, recipe.protein, recipe.carbs, recipe.fat, recipe.cooking_time)
    return [float(value) / scale for value, scale in zip(raw, _SCALES)]


def feature_matrix(recipes: Sequence[Recipe]) -> List[List[float]]:
    return [to_feature_vector(r) for r in recipes]


def nutrition_features(recipe: Recipe) -> List[float]:
    """Unscaled regression inputs: calories, protein, carbs."""
    return [float(recipe.calories), float(recipe.protein), float(recipe.carbs)]
