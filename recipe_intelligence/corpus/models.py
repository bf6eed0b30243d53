from __future__ import annotations

from typing import Annotated, Dict, Union

from pydantic import BaseModel, ConfigDict, Field

RecipeId = Union[int, str]
UserId = Union[int, str]
Rating = Annotated[float, Field(ge=0, le=5)]

# user id -> {recipe id -> rating}
RatingMatrix = Dict[UserId, Dict[RecipeId, float]]


class Recipe(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: RecipeId
    title: str = Field(..., min_length=1)
    calories: float = Field(..., ge=0)
    protein: float = Field(..., ge=0)
    carbs: float = Field(..., ge=0)
    fat: float = Field(..., ge=0)
    cooking_time: float = Field(..., ge=0, description="Minutes")
    estimated_cost: float = Field(default=0.0, ge=0)
    ingredients: tuple[str, ...] = ()
    cuisine: str = ""
    difficulty: int = Field(default=1, ge=1, le=5)
    tags: frozenset[str] = frozenset()
    ratings: tuple[Rating, ...] = ()

    @property
    def average_rating(self) -> float:
        """Mean of the rating sample, 0.0 when nobody has rated the recipe."""
        if not self.ratings:
            return 0.0
        return sum(self.ratings) / len(self.ratings)


class UserPreferences(BaseModel):
    model_config = ConfigDict(frozen=True)

    max_calories: float | None = Field(default=None, ge=0)
    min_protein: float | None = Field(default=None, ge=0)
    max_cooking_time: float | None = Field(default=None, ge=0)
    budget: float | None = Field(default=None, ge=0)
    dietary_restrictions: frozenset[str] = frozenset()
    preferred_cuisines: frozenset[str] = frozenset()


class UserProfile(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: UserId
    preferences: UserPreferences = Field(default_factory=UserPreferences)
    ratings: Dict[RecipeId, Rating] = Field(
        default_factory=dict,
        description="Explicit rating history, recipe id -> 0..5",
    )
