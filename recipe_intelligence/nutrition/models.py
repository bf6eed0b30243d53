from __future__ import annotations

import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

ActivityLevel = Literal["sedentary", "light", "moderate", "active", "very_active"]
Goal = Literal["lose", "maintain", "gain"]


class BodyProfile(BaseModel):
    model_config = ConfigDict(frozen=True)

    age: int = Field(..., gt=0)
    gender: str
    weight: float = Field(..., gt=0, description="Kilograms")
    height: float = Field(..., gt=0, description="Centimetres")
    goal: Goal = "maintain"


class NutritionNeeds(BaseModel):
    calories: int
    protein: int
    carbohydrates: int
    fat: int
    fiber: int
    water: int
    bmr: int
    tdee: int
    activity_level: str


class TrendForecast(BaseModel):
    predictions: list[float] = Field(default_factory=list)
    trend: Literal["increasing", "decreasing", "stable"]
    slope: float
    confidence: float


class ConsistencyScore(BaseModel):
    score: float
    standard_deviation: float
    interpretation: Literal["high", "moderate", "low"]


class DailyIntake(BaseModel):
    """One logged day of eating."""

    model_config = ConfigDict(frozen=True)

    date: datetime.date
    calories: float = Field(default=0.0, ge=0)
    protein: float = Field(default=0.0, ge=0)
    carbs: float = Field(default=0.0, ge=0)
    fat: float = Field(default=0.0, ge=0)
    meals: int = Field(default=0, ge=0, description="Meals logged that day")


class MealFrequency(BaseModel):
    average: float
    most_common: int
    min: int
    max: int


class IntakeAverages(BaseModel):
    calories: float = 0.0
    protein: float = 0.0
    carbs: float = 0.0
    fat: float = 0.0


Trend = Literal["increasing", "decreasing", "stable"]


class MacroTrends(BaseModel):
    calories: Trend
    protein: Trend
    carbs: Trend
    fat: Trend
    weekly: list[IntakeAverages] = Field(default_factory=list)


class RiskFactor(BaseModel):
    type: str
    severity: Literal["low", "medium", "high"]


class EatingPatterns(BaseModel):
    data_points: int
    averages: IntakeAverages
    meal_frequency: MealFrequency
    weekday: IntakeAverages
    weekend: IntakeAverages
    macro_trends: MacroTrends | None = Field(
        default=None, description="None until at least a week of entries exists",
    )
    consistency: ConsistencyScore
    next_week_calories: int
    adjustments: list[str] = Field(default_factory=list)
    risk_factors: list[RiskFactor] = Field(default_factory=list)
    suggestions: list[str] = Field(default_factory=list)
