from __future__ import annotations

import random

from recipe_intelligence.clustering import kmeans
from recipe_intelligence.corpus.sample_data import SAMPLE_RECIPES
from recipe_intelligence.recommendations.cache import ModelCache


def _clustering():
    return kmeans.fit(SAMPLE_RECIPES, k=2, rng=random.Random(0))


def test_cache_miss_then_hit():
    cache = ModelCache()
    assert cache.get() is None

    cache.store(2, _clustering(), None)
    assert cache.get() is not None

    stats = cache.stats()
    assert stats["misses"] == 1
    assert stats["hits"] == 1
    assert stats["hit_rate"] == 50.0


def test_store_replaces_previous_entry():
    cache = ModelCache()
    first = cache.store(2, _clustering(), None)
    second = cache.store(3, _clustering(), None)

    assert second.version == first.version + 1
    assert cache.get() is second
    assert cache.get().k == 3


def test_invalidate_clears_entry():
    cache = ModelCache()
    cache.store(2, _clustering(), None)
    cache.invalidate()
    assert not cache.is_trained
    assert cache.get() is None
    assert cache.stats()["trained"] is False
