from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from ..corpus.models import Recipe, RecipeId, UserId


class SimilarUser(BaseModel):
    user_id: UserId
    similarity: float


class CollaborativeRecommendation(BaseModel):
    recipe: Recipe
    predicted_rating: float
    supporting_users: int


class CollaborativeResult(BaseModel):
    recommendations: list[CollaborativeRecommendation] = Field(default_factory=list)
    similar_users: list[SimilarUser] = Field(default_factory=list)
    status: str = "ok"


class ScoredRecipe(BaseModel):
    recipe: Recipe
    score: float
    reasons: list[str] = Field(default_factory=list)


class ExclusionRecord(BaseModel):
    recipe_id: RecipeId
    title: str
    reason: str


class RuleEngineResult(BaseModel):
    recommendations: list[ScoredRecipe] = Field(default_factory=list)
    exclusions: list[ExclusionRecord] = Field(default_factory=list)
    candidates: int = 0


class AlgorithmMetrics(BaseModel):
    algorithm: str
    processing_time_ms: float
    candidates: int = 0
    returned: int = 0
    status: str = "ok"
    details: dict[str, Any] = Field(default_factory=dict)


class RecommendationBundle(BaseModel):
    cluster_based: list[Recipe] = Field(default_factory=list)
    collaborative: list[CollaborativeRecommendation] = Field(default_factory=list)
    rule_based: list[ScoredRecipe] = Field(default_factory=list)
    metrics: dict[str, AlgorithmMetrics] = Field(default_factory=dict)
    total_processing_time_ms: float = 0.0
