from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from ..corpus.models import RecipeId


class PlanTargets(BaseModel):
    """Per-day nutrition and spending targets for a plan request."""

    model_config = ConfigDict(frozen=True)

    daily_calories: float = Field(default=2000.0, gt=0)
    daily_protein: float = Field(default=150.0, ge=0)
    daily_budget: float = Field(default=50.0, ge=0)


class NutritionTotals(BaseModel):
    calories: float = 0.0
    protein: float = 0.0
    carbs: float = 0.0
    fat: float = 0.0
    cost: float = 0.0


class PlannedMeal(BaseModel):
    slot: str
    recipe_id: RecipeId
    title: str


class DayPlan(BaseModel):
    day: str
    meals: list[PlannedMeal] = Field(default_factory=list)
    totals: NutritionTotals = Field(default_factory=NutritionTotals)


class PlanMetrics(BaseModel):
    weekly_totals: NutritionTotals
    daily_averages: NutritionTotals
    variety_score: float
    unique_recipes: int
    total_slots: int
    processing_time_ms: float = 0.0


class MealPlan(BaseModel):
    days: list[DayPlan] = Field(default_factory=list)
    fitness: float
    generations: int
    metrics: PlanMetrics
    fitness_history: list[float] = Field(default_factory=list)


class ShoppingItem(BaseModel):
    name: str
    quantity: int
    recipes: list[str] = Field(default_factory=list)
