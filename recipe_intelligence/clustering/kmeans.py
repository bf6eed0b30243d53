from __future__ import annotations

import logging
import math
import random
import time
from typing import List, Sequence

from ..corpus.features import feature_matrix
from ..corpus.models import Recipe, UserPreferences
from ..errors import EmptyCorpus
from .config import DEFAULT_KMEANS_CONFIG, KMeansConfig
from .models import Cluster, ClusterCharacteristics, ClusteringMetrics, ClusteringResult

logger = logging.getLogger(__name__)

Point = List[float]


def euclidean_distance(a: Sequence[float], b: Sequence[float]) -> float:
    return math.sqrt(sum((x - y) ** 2 for x, y in zip(a, b)))


def _feature_bounds(points: Sequence[Point]) -> list[tuple[float, float]]:
    dims = len(points[0])
    return [
        (min(p[d] for p in points), max(p[d] for p in points))
        for d in range(dims)
    ]


def _random_centroid(bounds: Sequence[tuple[float, float]], rng: random.Random) -> Point:
    return [rng.uniform(lo, hi) for lo, hi in bounds]


def _nearest(point: Point, centroids: Sequence[Point]) -> int:
    """Index of the closest centroid; ties go to the lowest index."""
    best_idx = 0
    best_dist = math.inf
    for idx, centroid in enumerate(centroids):
        dist = euclidean_distance(point, centroid)
        if dist < best_dist:
            best_dist = dist
            best_idx = idx
    return best_idx


def _assign(points: Sequence[Point], centroids: Sequence[Point]) -> list[int]:
    return [_nearest(p, centroids) for p in points]


def _mean(points: Sequence[Point]) -> Point:
    n = len(points)
    return [sum(p[d] for p in points) / n for d in range(len(points[0]))]


def _characteristics(members: Sequence[Recipe]) -> ClusterCharacteristics | None:
    if not members:
        return None
    n = len(members)
    cuisines = {r.cuisine for r in members if r.cuisine}
    tags: set[str] = set()
    for r in members:
        tags.update(r.tags)
    return ClusterCharacteristics(
        avg_calories=sum(r.calories for r in members) / n,
        avg_protein=sum(r.protein for r in members) / n,
        avg_carbs=sum(r.carbs for r in members) / n,
        avg_fat=sum(r.fat for r in members) / n,
        avg_cooking_time=sum(r.cooking_time for r in members) / n,
        avg_cost=sum(r.estimated_cost for r in members) / n,
        avg_rating=sum(r.average_rating for r in members) / n,
        cuisines=frozenset(cuisines),
        tags=frozenset(tags),
        count=n,
    )


def silhouette_score(points: Sequence[Point], labels: Sequence[int]) -> float:
    """
    Mean silhouette over all points.

    For each point, ``a`` is the mean distance to the other members of its
    own cluster (0 for a singleton) and ``b`` the smallest mean distance to
    the members of any other cluster. The per-point score is
    ``(b - a) / max(a, b)``. Returns 0.0 when fewer than two clusters are
    populated.
    """
    groups: dict[int, list[int]] = {}
    for idx, label in enumerate(labels):
        groups.setdefault(label, []).append(idx)
    if len(groups) < 2:
        return 0.0

    total = 0.0
    for idx, label in enumerate(labels):
        point = points[idx]
        own = groups[label]
        if len(own) > 1:
            a = sum(euclidean_distance(point, points[j]) for j in own if j != idx) / (len(own) - 1)
        else:
            a = 0.0
        b = min(
            sum(euclidean_distance(point, points[j]) for j in members) / len(members)
            for other, members in groups.items()
            if other != label
        )
        denom = max(a, b)
        total += (b - a) / denom if denom > 0 else 0.0
    return total / len(points)


def fit(
    recipes: Sequence[Recipe],
    k: int | None = None,
    rng: random.Random | None = None,
    config: KMeansConfig = DEFAULT_KMEANS_CONFIG,
) -> ClusteringResult:
    """
    Run k-means over the recipes' feature vectors.

    Centroids start at uniform samples inside each dimension's observed
    range. A cluster that loses all its members is re-seeded the same way.
    Iteration stops once no populated centroid moves by more than
    ``config.tolerance`` in any coordinate, or after
    ``config.max_iterations`` rounds. Re-seeded centroids are left out of
    that check, so k larger than the corpus can still converge.
    """
    if not recipes:
        raise EmptyCorpus("cannot cluster an empty recipe corpus")
    k = config.k if k is None else k
    if k < 1:
        raise ValueError(f"k must be at least 1, got {k}")
    rng = rng or random.Random()

    start_time = time.time()
    points = feature_matrix(recipes)
    bounds = _feature_bounds(points)
    centroids = [_random_centroid(bounds, rng) for _ in range(k)]

    iterations = 0
    converged = False
    resets = 0
    while iterations < config.max_iterations:
        assignments = _assign(points, centroids)

        new_centroids: list[Point] = []
        reseeded: set[int] = set()
        for c in range(k):
            members = [points[i] for i, a in enumerate(assignments) if a == c]
            if members:
                new_centroids.append(_mean(members))
            else:
                new_centroids.append(_random_centroid(bounds, rng))
                reseeded.add(c)
                resets += 1

        iterations += 1
        shift = max(
            (
                abs(new - old)
                for c, (centroid, new_centroid) in enumerate(zip(centroids, new_centroids))
                if c not in reseeded
                for old, new in zip(centroid, new_centroid)
            ),
            default=0.0,
        )
        centroids = new_centroids
        if shift <= config.tolerance:
            converged = True
            break

    # Final membership is taken against the centroids being returned.
    assignments = _assign(points, centroids)
    clusters: list[Cluster] = []
    for c in range(k):
        members = tuple(recipes[i] for i, a in enumerate(assignments) if a == c)
        clusters.append(Cluster(
            id=c,
            centroid=tuple(centroids[c]),
            members=members,
            characteristics=_characteristics(members),
        ))

    if resets:
        logger.warning("k-means re-seeded %d empty cluster(s) (k=%d, n=%d)", resets, k, len(recipes))

    metrics = ClusteringMetrics(
        iterations=iterations,
        converged=converged,
        convergence_time_ms=round((time.time() - start_time) * 1000, 3),
        silhouette_score=silhouette_score(points, assignments),
        empty_cluster_resets=resets,
    )
    logger.info(
        "k-means finished: k=%d iterations=%d converged=%s silhouette=%.4f",
        k, iterations, converged, metrics.silhouette_score,
    )
    return ClusteringResult(clusters=tuple(clusters), metrics=metrics)


def score_for_user(
    cluster: Cluster,
    prefs: UserPreferences,
    config: KMeansConfig = DEFAULT_KMEANS_CONFIG,
) -> float:
    """Additive fit of a cluster's averages to the user's limits, floored at 0."""
    char = cluster.characteristics
    if char is None:
        return 0.0

    max_calories = prefs.max_calories if prefs.max_calories is not None else config.default_max_calories
    min_protein = prefs.min_protein if prefs.min_protein is not None else config.default_min_protein
    max_time = (
        prefs.max_cooking_time if prefs.max_cooking_time is not None else config.default_max_cooking_time
    )

    score = 0.0
    if char.avg_calories <= max_calories:
        score += 30
    else:
        score -= (char.avg_calories - max_calories) / 10

    if char.avg_protein >= min_protein:
        score += 30
    else:
        score -= min_protein - char.avg_protein

    if char.avg_cooking_time <= max_time:
        score += 40
    else:
        score -= 2 * (char.avg_cooking_time - max_time)

    score += (char.avg_rating - 3) * 10
    return max(0.0, score)


def recommend_from_clusters(
    clusters: Sequence[Cluster],
    prefs: UserPreferences,
    config: KMeansConfig = DEFAULT_KMEANS_CONFIG,
) -> tuple[Cluster | None, list[Recipe]]:
    """Pick the best-scoring populated cluster and return its first members."""
    best: Cluster | None = None
    best_score = -math.inf
    for cluster in clusters:
        if not cluster.members:
            continue
        score = score_for_user(cluster, prefs, config)
        if score > best_score:
            best_score = score
            best = cluster
    if best is None:
        return None, []
    return best, list(best.members[: config.recommendation_limit])
