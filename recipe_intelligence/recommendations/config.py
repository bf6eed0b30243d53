from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class RecommenderConfig:
    """
    Configuration for the collaborative filter and the rule engine.
    """

    top_k_users: int = 5
    collaborative_limit: int = 3
    rule_limit: int = 5

    # Preference vector defaults for similarity (kcal, g, minutes).
    default_max_calories: float = 400.0
    default_min_protein: float = 15.0
    default_max_cooking_time: float = 30.0

    # Rule-engine reason thresholds when the user leaves a field unset.
    reason_max_calories: float = 500.0
    reason_max_cooking_time: float = 30.0
    highly_rated_threshold: float = 4.5

    cuisine_boost_weight: float = 1.0

    meat_ingredients: frozenset[str] = frozenset({
        "chicken", "beef", "fish", "salmon", "pork", "turkey", "lamb",
        "bacon", "ham", "tuna", "shrimp", "prawn", "sausage", "anchovy",
    })
    animal_products: frozenset[str] = frozenset({
        "egg", "milk", "cheese", "yogurt", "butter", "cream", "honey", "feta", "gelatin",
    })


DEFAULT_RECOMMENDER_CONFIG = RecommenderConfig()
