import random

import pytest
from sklearn.metrics import silhouette_score as sklearn_silhouette

from recipe_intelligence.clustering import kmeans
from recipe_intelligence.clustering.config import KMeansConfig
from recipe_intelligence.clustering.models import Cluster, ClusterCharacteristics
from recipe_intelligence.corpus.features import to_feature_vector
from recipe_intelligence.corpus.models import UserPreferences
from recipe_intelligence.corpus.sample_data import SAMPLE_RECIPES
from recipe_intelligence.errors import EmptyCorpus


def _characteristics(**overrides) -> ClusterCharacteristics:
    values = dict(
        avg_calories=350.0, avg_protein=25.0, avg_carbs=30.0, avg_fat=12.0,
        avg_cooking_time=20.0, avg_cost=7.0, avg_rating=4.5,
        cuisines=frozenset(), tags=frozenset(), count=2,
    )
    values.update(overrides)
    return ClusterCharacteristics(**values)


def test_fit_partitions_every_recipe():
    result = kmeans.fit(SAMPLE_RECIPES, k=3, rng=random.Random(7))
    assert len(result.clusters) == 3
    assert sum(c.size for c in result.clusters) == len(SAMPLE_RECIPES)
    ids = sorted(rid for c in result.clusters for rid in c.member_ids)
    assert ids == sorted(r.id for r in SAMPLE_RECIPES)


def test_fit_terminates_within_iteration_cap():
    result = kmeans.fit(SAMPLE_RECIPES, k=3, rng=random.Random(1))
    assert 1 <= result.metrics.iterations <= 100


def test_every_member_is_closest_to_its_own_centroid():
    result = kmeans.fit(SAMPLE_RECIPES, k=4, rng=random.Random(3))
    for cluster in result.clusters:
        for recipe in cluster.members:
            point = to_feature_vector(recipe)
            own = kmeans.euclidean_distance(point, cluster.centroid)
            for other in result.clusters:
                assert own <= kmeans.euclidean_distance(point, other.centroid) + 1e-12


def test_same_seed_gives_same_clusters():
    first = kmeans.fit(SAMPLE_RECIPES, k=3, rng=random.Random(11))
    second = kmeans.fit(SAMPLE_RECIPES, k=3, rng=random.Random(11))
    assert [c.member_ids for c in first.clusters] == [c.member_ids for c in second.clusters]


def test_empty_corpus_raises():
    with pytest.raises(EmptyCorpus):
        kmeans.fit([], k=3)


def test_more_clusters_than_recipes_keeps_empty_clusters():
    result = kmeans.fit(SAMPLE_RECIPES[:4], k=6, rng=random.Random(0))
    assert len(result.clusters) == 6
    assert sum(c.size for c in result.clusters) == 4
    empty = [c for c in result.clusters if c.size == 0]
    assert empty
    assert all(c.characteristics is None for c in empty)


@pytest.mark.parametrize("seed", [0, 1, 7])
def test_more_clusters_than_recipes_still_converges(seed):
    result = kmeans.fit(SAMPLE_RECIPES[:4], k=6, rng=random.Random(seed))
    assert result.metrics.converged
    assert result.metrics.iterations < KMeansConfig().max_iterations
    assert result.metrics.empty_cluster_resets >= 2


def test_max_iterations_respected():
    config = KMeansConfig(max_iterations=1)
    result = kmeans.fit(SAMPLE_RECIPES, k=3, rng=random.Random(5), config=config)
    assert result.metrics.iterations == 1


def test_cluster_characteristics_are_member_means():
    result = kmeans.fit(SAMPLE_RECIPES, k=2, rng=random.Random(2))
    for cluster in result.clusters:
        if not cluster.members:
            continue
        expected = sum(r.calories for r in cluster.members) / cluster.size
        assert cluster.characteristics.avg_calories == pytest.approx(expected)
        assert cluster.characteristics.count == cluster.size


def test_silhouette_matches_sklearn_when_no_singletons():
    points = [
        [0.0, 0.0], [0.5, 0.2], [0.1, 0.7],
        [5.0, 5.0], [5.5, 4.8], [4.9, 5.6],
        [9.0, 0.5], [9.4, 0.1],
    ]
    labels = [0, 0, 0, 1, 1, 1, 2, 2]
    assert kmeans.silhouette_score(points, labels) == pytest.approx(
        sklearn_silhouette(points, labels), abs=1e-9,
    )


def test_silhouette_single_cluster_is_zero():
    assert kmeans.silhouette_score([[0.0], [1.0], [2.0]], [0, 0, 0]) == 0.0


def test_score_for_user_rewards_fit():
    cluster = Cluster(id=0, centroid=(0.0,), characteristics=_characteristics())
    prefs = UserPreferences(max_calories=400, min_protein=20, max_cooking_time=30)
    # 30 + 30 + 40 + (4.5 - 3) * 10
    assert kmeans.score_for_user(cluster, prefs) == pytest.approx(115.0)


def test_score_for_user_is_floored_at_zero():
    cluster = Cluster(
        id=0,
        centroid=(0.0,),
        characteristics=_characteristics(
            avg_calories=600.0, avg_protein=10.0, avg_cooking_time=55.0, avg_rating=3.0,
        ),
    )
    # defaults 500 / 15 / 45: -10 - 5 - 20
    assert kmeans.score_for_user(cluster, UserPreferences()) == 0.0


def test_recommend_from_clusters_skips_empty_clusters():
    result = kmeans.fit(SAMPLE_RECIPES[:3], k=5, rng=random.Random(4))
    best, recipes = kmeans.recommend_from_clusters(result.clusters, UserPreferences())
    assert best is not None
    assert best.size > 0
    assert 0 < len(recipes) <= 3
    assert all(r in best.members for r in recipes)
