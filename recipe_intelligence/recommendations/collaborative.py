from __future__ import annotations

import logging
import math
from typing import Mapping, Sequence

from ..corpus.models import RatingMatrix, Recipe, RecipeId, UserId, UserPreferences, UserProfile
from .config import DEFAULT_RECOMMENDER_CONFIG, RecommenderConfig
from .models import CollaborativeRecommendation, CollaborativeResult, SimilarUser

logger = logging.getLogger(__name__)


def preference_vector(
    prefs: UserPreferences, config: RecommenderConfig = DEFAULT_RECOMMENDER_CONFIG,
) -> list[float]:
    return [
        prefs.max_calories if prefs.max_calories is not None else config.default_max_calories,
        prefs.min_protein if prefs.min_protein is not None else config.default_min_protein,
        prefs.max_cooking_time if prefs.max_cooking_time is not None else config.default_max_cooking_time,
    ]


def similarity(
    a: UserPreferences,
    b: UserPreferences,
    config: RecommenderConfig = DEFAULT_RECOMMENDER_CONFIG,
) -> float:
    """
    Cosine similarity of two users' stated [max_calories, min_protein,
    max_cooking_time] vectors. Rating history plays no part here.
    """
    va = preference_vector(a, config)
    vb = preference_vector(b, config)
    dot = sum(x * y for x, y in zip(va, vb))
    na = math.sqrt(sum(x * x for x in va))
    nb = math.sqrt(sum(y * y for y in vb))
    if na == 0 or nb == 0:
        return 0.0
    return dot / (na * nb)


def matches_preferences(
    recipe: Recipe, prefs: UserPreferences, config: RecommenderConfig = DEFAULT_RECOMMENDER_CONFIG,
) -> bool:
    max_calories, min_protein, max_time = preference_vector(prefs, config)
    return (
        recipe.calories <= max_calories
        and recipe.protein >= min_protein
        and recipe.cooking_time <= max_time
    )


def build_rating_matrix(
    users: Sequence[UserProfile],
    recipes: Sequence[Recipe] = (),
    history: Mapping[UserId, Mapping[RecipeId, float]] | None = None,
    config: RecommenderConfig = DEFAULT_RECOMMENDER_CONFIG,
) -> RatingMatrix:
    """
    Snapshot every user's ratings as ``{user id: {recipe id: rating}}``.

    Explicit ratings on the profile are merged with ``history`` (history
    wins). A user with no ratings at all is given implied ratings: the
    corpus mean rating of each rated recipe that fits their stated limits.
    """
    matrix: RatingMatrix = {}
    for user in users:
        ratings: dict[RecipeId, float] = dict(user.ratings)
        if history and user.id in history:
            ratings.update(history[user.id])
        if not ratings:
            ratings = {
                r.id: r.average_rating
                for r in recipes
                if r.ratings and matches_preferences(r, user.preferences, config)
            }
        if ratings:
            matrix[user.id] = ratings
    return matrix


def top_k_similar(
    target: UserPreferences,
    users: Sequence[UserProfile],
    k: int | None = None,
    exclude_user_id: UserId | None = None,
    config: RecommenderConfig = DEFAULT_RECOMMENDER_CONFIG,
) -> list[SimilarUser]:
    """Users ranked by similarity, descending; ties keep enumeration order."""
    k = config.top_k_users if k is None else k
    scored = [
        SimilarUser(user_id=user.id, similarity=similarity(target, user.preferences, config))
        for user in users
        if exclude_user_id is None or user.id != exclude_user_id
    ]
    scored.sort(key=lambda s: s.similarity, reverse=True)
    return scored[:k]


def recommend(
    target: UserPreferences,
    users: Sequence[UserProfile],
    recipes: Sequence[Recipe],
    ratings: RatingMatrix | None = None,
    exclude_user_id: UserId | None = None,
    config: RecommenderConfig = DEFAULT_RECOMMENDER_CONFIG,
) -> CollaborativeResult:
    """
    Similarity-weighted mean rating over recipes rated by the top-k users.

    Recipes none of the top-k users rated are left out rather than given a
    default score. When no such recipe exists the result is empty with
    status ``insufficient_similar_users``.
    """
    matrix = ratings if ratings is not None else build_rating_matrix(users, recipes, config=config)
    similar = top_k_similar(target, users, exclude_user_id=exclude_user_id, config=config)
    by_id = {r.id: r for r in recipes}

    weighted: dict[RecipeId, float] = {}
    weights: dict[RecipeId, float] = {}
    support: dict[RecipeId, int] = {}
    for neighbour in similar:
        for recipe_id, rating in matrix.get(neighbour.user_id, {}).items():
            if recipe_id not in by_id:
                continue
            weighted[recipe_id] = weighted.get(recipe_id, 0.0) + rating * neighbour.similarity
            weights[recipe_id] = weights.get(recipe_id, 0.0) + neighbour.similarity
            support[recipe_id] = support.get(recipe_id, 0) + 1

    predictions = [
        CollaborativeRecommendation(
            recipe=by_id[recipe_id],
            predicted_rating=weighted[recipe_id] / total,
            supporting_users=support[recipe_id],
        )
        for recipe_id, total in weights.items()
        if total > 0
    ]
    if not predictions:
        logger.warning(
            "collaborative filter found no rated recipes among %d similar user(s)", len(similar),
        )
        return CollaborativeResult(similar_users=similar, status="insufficient_similar_users")

    predictions.sort(key=lambda p: p.predicted_rating, reverse=True)
    return CollaborativeResult(
        recommendations=predictions[: config.collaborative_limit],
        similar_users=similar,
    )
