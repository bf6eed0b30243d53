from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from ..corpus.models import Recipe


class ClusterCharacteristics(BaseModel):
    model_config = ConfigDict(frozen=True)

    avg_calories: float
    avg_protein: float
    avg_carbs: float
    avg_fat: float
    avg_cooking_time: float
    avg_cost: float
    avg_rating: float
    cuisines: frozenset[str] = frozenset()
    tags: frozenset[str] = frozenset()
    count: int


class Cluster(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    centroid: tuple[float, ...]
    members: tuple[Recipe, ...] = ()
    characteristics: ClusterCharacteristics | None = None

    @property
    def size(self) -> int:
        return len(self.members)

    @property
    def member_ids(self) -> list:
        return [r.id for r in self.members]


class ClusteringMetrics(BaseModel):
    iterations: int
    converged: bool
    convergence_time_ms: float
    silhouette_score: float
    empty_cluster_resets: int = 0


class ClusteringResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    clusters: tuple[Cluster, ...] = Field(default_factory=tuple)
    metrics: ClusteringMetrics
