import pytest

from recipe_intelligence.corpus.models import Recipe, UserPreferences, UserProfile
from recipe_intelligence.corpus.sample_data import SAMPLE_RATINGS, SAMPLE_RECIPES, SAMPLE_USERS
from recipe_intelligence.recommendations.collaborative import (
    build_rating_matrix,
    recommend,
    similarity,
    top_k_similar,
)


def test_similarity_is_symmetric():
    a = UserPreferences(max_calories=400, min_protein=20, max_cooking_time=30)
    b = UserPreferences(max_calories=600, min_protein=35, max_cooking_time=60)
    assert similarity(a, b) == pytest.approx(similarity(b, a))


def test_similarity_of_identical_preferences_is_one():
    prefs = UserPreferences(max_calories=500, min_protein=25, max_cooking_time=45)
    assert similarity(prefs, prefs) == pytest.approx(1.0)


def test_unset_preferences_use_defaults():
    explicit = UserPreferences(max_calories=400, min_protein=15, max_cooking_time=30)
    assert similarity(UserPreferences(), explicit) == pytest.approx(1.0)


def test_top_k_ties_keep_enumeration_order():
    prefs = UserPreferences(max_calories=400, min_protein=20, max_cooking_time=30)
    users = [
        UserProfile(id="b", preferences=prefs),
        UserProfile(id="a", preferences=prefs),
        UserProfile(id="c", preferences=UserPreferences(max_calories=100, min_protein=90, max_cooking_time=5)),
    ]
    ranked = top_k_similar(prefs, users, k=3)
    assert [s.user_id for s in ranked] == ["b", "a", "c"]


def test_top_k_excludes_requesting_user():
    ranked = top_k_similar(SAMPLE_USERS[0].preferences, SAMPLE_USERS, exclude_user_id=1)
    assert 1 not in [s.user_id for s in ranked]
    assert len(ranked) == 4


def test_prediction_is_similarity_weighted_mean():
    target = UserPreferences(max_calories=400, min_protein=20, max_cooking_time=30)
    other = UserPreferences(max_calories=500, min_protein=25, max_cooking_time=45)
    users = [UserProfile(id=1, preferences=target), UserProfile(id=2, preferences=other)]
    ratings = {1: {5: 5.0}, 2: {5: 3.0}}

    result = recommend(target, users, SAMPLE_RECIPES, ratings=ratings)

    s1, s2 = similarity(target, target), similarity(target, other)
    [prediction] = result.recommendations
    assert prediction.recipe.id == 5
    assert prediction.predicted_rating == pytest.approx((5.0 * s1 + 3.0 * s2) / (s1 + s2))
    assert prediction.supporting_users == 2


def test_recipes_no_neighbour_rated_are_left_out():
    result = recommend(
        SAMPLE_USERS[0].preferences, SAMPLE_USERS, SAMPLE_RECIPES, ratings=SAMPLE_RATINGS,
    )
    rated = {rid for user_ratings in SAMPLE_RATINGS.values() for rid in user_ratings}
    assert result.status == "ok"
    assert 0 < len(result.recommendations) <= 3
    assert all(r.recipe.id in rated for r in result.recommendations)
    ratings = [r.predicted_rating for r in result.recommendations]
    assert ratings == sorted(ratings, reverse=True)


def test_no_overlapping_ratings_reports_insufficient_users():
    unrated = [
        Recipe(id=1, title="Plain Rice", calories=200, protein=4, carbs=45, fat=0, cooking_time=20),
    ]
    users = [UserProfile(id=1, preferences=UserPreferences(max_calories=300))]

    result = recommend(UserPreferences(), users, unrated)

    assert result.recommendations == []
    assert result.status == "insufficient_similar_users"


def test_rating_matrix_merges_history_and_implies_missing_ratings():
    history = {1: {2: 1.0, 9: 3.0}}
    matrix = build_rating_matrix(SAMPLE_USERS, SAMPLE_RECIPES, history=history)

    assert matrix[1][2] == 1.0
    assert matrix[1][9] == 3.0
    assert matrix[1][5] == 4.0

    # user 4 has no ratings; implied ratings come from recipes within their limits
    implied = matrix[4]
    by_id = {r.id: r for r in SAMPLE_RECIPES}
    assert implied
    for rid, rating in implied.items():
        recipe = by_id[rid]
        assert recipe.protein >= 30
        assert rating == pytest.approx(recipe.average_rating)
