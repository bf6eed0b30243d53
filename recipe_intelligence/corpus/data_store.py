from __future__ import annotations

from pathlib import Path
from typing import List

import pandas as pd

from .models import Recipe

CANONICAL_COLUMNS: List[str] = [
    "id",
    "title",
    "calories",
    "protein",
    "carbs",
    "fat",
    "cooking_time",
    "estimated_cost",
    "ingredients",
    "cuisine",
    "difficulty",
    "tags",
    "ratings",
]

_LIST_SEPARATOR = "|"


def _split(value: object) -> list[str]:
    if value is None or (isinstance(value, float) and pd.isna(value)):
        return []
    return [part.strip() for part in str(value).split(_LIST_SEPARATOR) if part.strip()]


def _split_ratings(value: object) -> list[float]:
    out: list[float] = []
    for part in _split(value):
        try:
            out.append(float(part))
        except ValueError as exc:
            raise ValueError(f"invalid rating {part!r} in {value!r}") from exc
    return out


def recipes_from_dataframe(df: pd.DataFrame) -> list[Recipe]:
    """
    Convert a canonical recipe table into Recipe records.

    List-valued columns (ingredients, tags, ratings) hold ``|``-separated
    strings. Missing optional columns fall back to the Recipe defaults.
    """
    missing = [c for c in ("id", "title", "calories", "protein", "carbs", "fat", "cooking_time") if c not in df.columns]
    if missing:
        raise ValueError(f"recipe table is missing required columns: {missing}")

    recipes: list[Recipe] = []
    for _, row in df.iterrows():
        rid = row["id"]
        recipes.append(Recipe(
            id=int(rid) if pd.api.types.is_number(rid) and float(rid).is_integer() else str(rid),
            title=str(row["title"]),
            calories=float(row["calories"]),
            protein=float(row["protein"]),
            carbs=float(row["carbs"]),
            fat=float(row["fat"]),
            cooking_time=float(row["cooking_time"]),
            estimated_cost=float(row["estimated_cost"]) if pd.notna(row.get("estimated_cost")) else 0.0,
            ingredients=[i.lower() for i in _split(row.get("ingredients"))],
            cuisine=str(row["cuisine"]).strip().lower() if pd.notna(row.get("cuisine")) else "",
            difficulty=int(row["difficulty"]) if pd.notna(row.get("difficulty")) else 1,
            tags=[t.lower() for t in _split(row.get("tags"))],
            ratings=_split_ratings(row.get("ratings")),
        ))
    return recipes


def load_recipes_csv(path: Path | str) -> list[Recipe]:
    """Read a canonical recipe CSV from disk."""
    df = pd.read_csv(path)
    return recipes_from_dataframe(df)


def recipes_to_dataframe(recipes: list[Recipe]) -> pd.DataFrame:
    rows = []
    for r in recipes:
        rows.append({
            "id": r.id,
            "title": r.title,
            "calories": r.calories,
            "protein": r.protein,
            "carbs": r.carbs,
            "fat": r.fat,
            "cooking_time": r.cooking_time,
            "estimated_cost": r.estimated_cost,
            "ingredients": _LIST_SEPARATOR.join(r.ingredients),
            "cuisine": r.cuisine,
            "difficulty": r.difficulty,
            "tags": _LIST_SEPARATOR.join(sorted(r.tags)),
            "ratings": _LIST_SEPARATOR.join(str(x) for x in r.ratings),
        })
    return pd.DataFrame(rows, columns=CANONICAL_COLUMNS)
