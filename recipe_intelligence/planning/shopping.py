from __future__ import annotations

from typing import Iterable, Mapping, Sequence

from ..corpus.models import Recipe
from .models import MealPlan, ShoppingItem

SHOPPING_CATEGORIES: tuple[str, ...] = ("produce", "proteins", "dairy", "pantry", "other")

# Checked in order; the first category with a matching keyword wins.
_CATEGORY_KEYWORDS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("produce", (
        "lettuce", "spinach", "tomato", "onion", "pepper", "carrot",
        "broccoli", "cucumber", "fruit", "berries", "avocado", "vegetable",
    )),
    ("proteins", (
        "chicken", "beef", "fish", "salmon", "egg", "tofu", "beans",
        "lentil", "turkey",
    )),
    ("dairy", ("milk", "cheese", "yogurt", "butter", "cream", "feta")),
    ("pantry", (
        "rice", "pasta", "bread", "flour", "oil", "spice", "salt",
        "sugar", "vinegar", "quinoa", "granola", "honey", "tortilla",
    )),
)


def categorize_ingredient(name: str) -> str:
    lowered = name.lower()
    for category, keywords in _CATEGORY_KEYWORDS:
        if any(keyword in lowered for keyword in keywords):
            return category
    return "other"


def build_shopping_list(plan: MealPlan, recipes: Sequence[Recipe]) -> dict[str, list[ShoppingItem]]:
    """
    Count how many planned meals use each ingredient, grouped by category.

    Ingredient names are merged case-insensitively; the first spelling seen
    is kept. Empty categories are dropped from the result.
    """
    by_id = {r.id: r for r in recipes}
    grouped: dict[str, dict[str, ShoppingItem]] = {c: {} for c in SHOPPING_CATEGORIES}

    for day in plan.days:
        for meal in day.meals:
            recipe = by_id.get(meal.recipe_id)
            if recipe is None:
                continue
            for ingredient in recipe.ingredients:
                key = ingredient.lower()
                bucket = grouped[categorize_ingredient(ingredient)]
                item = bucket.get(key)
                if item is None:
                    item = bucket[key] = ShoppingItem(name=ingredient, quantity=0)
                item.quantity += 1
                if recipe.title not in item.recipes:
                    item.recipes.append(recipe.title)

    return {
        category: list(items.values())
        for category, items in grouped.items()
        if items
    }


def estimate_shopping_time(shopping_list: dict[str, list[ShoppingItem]]) -> int:
    """Minutes: 10 base, 2 per item, 3 per aisle category, at least 15."""
    item_count = sum(len(items) for items in shopping_list.values())
    return max(15, 10 + item_count * 2 + len(shopping_list) * 3)


# Walking distance between store sections, in aisles. Pairs missing here
# cost UNKNOWN_SECTION_DISTANCE.
SECTION_DISTANCES: dict[str, dict[str, float]] = {
    "entrance": {"produce": 2, "dairy": 5, "proteins": 4, "pantry": 3},
    "produce": {"entrance": 2, "dairy": 3, "proteins": 6, "pantry": 4},
    "dairy": {"entrance": 5, "produce": 3, "proteins": 2, "pantry": 3},
    "proteins": {"entrance": 4, "produce": 6, "dairy": 2, "pantry": 5},
    "pantry": {"entrance": 3, "produce": 4, "dairy": 3, "proteins": 5},
}
UNKNOWN_SECTION_DISTANCE = 10.0


def section_distance(
    origin: str,
    destination: str,
    distances: Mapping[str, Mapping[str, float]] = SECTION_DISTANCES,
) -> float:
    return distances.get(origin, {}).get(destination, UNKNOWN_SECTION_DISTANCE)


def optimize_shopping_route(
    sections: Iterable[str],
    distances: Mapping[str, Mapping[str, float]] = SECTION_DISTANCES,
    start: str = "entrance",
) -> list[str]:
    """
    Order the sections to visit with a nearest-neighbour walk from ``start``.

    ``sections`` may be a shopping list, whose keys are its categories.
    Duplicates are visited once. On equal distances the section listed
    first wins. The returned route begins with ``start``.
    """
    pending = [s for s in dict.fromkeys(sections) if s != start]
    route = [start]
    current = start
    while pending:
        nearest = min(pending, key=lambda s: section_distance(current, s, distances))
        pending.remove(nearest)
        route.append(nearest)
        current = nearest
    return route


def route_distance(
    route: Sequence[str],
    distances: Mapping[str, Mapping[str, float]] = SECTION_DISTANCES,
) -> float:
    return sum(section_distance(a, b, distances) for a, b in zip(route, route[1:]))
