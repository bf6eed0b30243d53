from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class KMeansConfig:
    """
    Configuration for k-means clustering and cluster-based recommendation.
    """

    k: int = 3
    max_iterations: int = 100
    tolerance: float = 1e-4
    recommendation_limit: int = 3

    # Used by score_for_user when the user leaves a preference unset.
    default_max_calories: float = 500.0
    default_min_protein: float = 15.0
    default_max_cooking_time: float = 45.0


DEFAULT_KMEANS_CONFIG = KMeansConfig()
