from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Sequence

from ..corpus.models import Recipe, UserPreferences
from .config import DEFAULT_RECOMMENDER_CONFIG, RecommenderConfig
from .models import ExclusionRecord, RuleEngineResult, ScoredRecipe

logger = logging.getLogger(__name__)


class RuleAction(str, Enum):
    exclude = "exclude"
    boost = "boost"


class RuleCheck(str, Enum):
    over_budget = "over_budget"
    over_time = "over_time"
    dietary_violation = "dietary_violation"
    under_protein = "under_protein"
    over_calories = "over_calories"
    cuisine_match = "cuisine_match"


@dataclass(frozen=True)
class Rule:
    check: RuleCheck
    action: RuleAction
    reason: str
    weight: float = 0.0


def default_rules(config: RecommenderConfig = DEFAULT_RECOMMENDER_CONFIG) -> tuple[Rule, ...]:
    """
    Built-in rule set. Exclusion order decides which reason is reported,
    never whether a recipe is excluded.
    """
    return (
        Rule(RuleCheck.over_budget, RuleAction.exclude, "Over budget"),
        Rule(RuleCheck.over_time, RuleAction.exclude, "Takes too long"),
        Rule(RuleCheck.dietary_violation, RuleAction.exclude, "Violates dietary restriction"),
        Rule(RuleCheck.under_protein, RuleAction.exclude, "Insufficient protein"),
        Rule(RuleCheck.over_calories, RuleAction.exclude, "Too many calories"),
        Rule(
            RuleCheck.cuisine_match,
            RuleAction.boost,
            "Matches preferred cuisine",
            weight=config.cuisine_boost_weight,
        ),
    )


def _ingredient_tokens(ingredient: str) -> set[str]:
    tokens: set[str] = set()
    for word in ingredient.lower().replace("-", " ").split():
        tokens.add(word)
        if word.endswith("s"):
            tokens.add(word[:-1])
    return tokens


def violates_dietary_restrictions(
    recipe: Recipe,
    restrictions: frozenset[str] | set[str],
    config: RecommenderConfig = DEFAULT_RECOMMENDER_CONFIG,
) -> bool:
    """
    Vegetarian excludes any ingredient naming a meat; vegan additionally
    excludes animal products. Other restrictions are not checked.
    """
    wanted = {r.lower() for r in restrictions}
    forbidden: set[str] = set()
    if "vegetarian" in wanted or "vegan" in wanted:
        forbidden |= config.meat_ingredients
    if "vegan" in wanted:
        forbidden |= config.animal_products
    if not forbidden:
        return False
    return any(_ingredient_tokens(ing) & forbidden for ing in recipe.ingredients)


def _over_budget(recipe: Recipe, prefs: UserPreferences, config: RecommenderConfig) -> bool:
    return prefs.budget is not None and recipe.estimated_cost > prefs.budget


def _over_time(recipe: Recipe, prefs: UserPreferences, config: RecommenderConfig) -> bool:
    return prefs.max_cooking_time is not None and recipe.cooking_time > prefs.max_cooking_time


def _dietary_violation(recipe: Recipe, prefs: UserPreferences, config: RecommenderConfig) -> bool:
    return bool(prefs.dietary_restrictions) and violates_dietary_restrictions(
        recipe, prefs.dietary_restrictions, config,
    )


def _under_protein(recipe: Recipe, prefs: UserPreferences, config: RecommenderConfig) -> bool:
    return prefs.min_protein is not None and recipe.protein < prefs.min_protein


def _over_calories(recipe: Recipe, prefs: UserPreferences, config: RecommenderConfig) -> bool:
    return prefs.max_calories is not None and recipe.calories > prefs.max_calories


def _cuisine_match(recipe: Recipe, prefs: UserPreferences, config: RecommenderConfig) -> bool:
    preferred = {c.lower() for c in prefs.preferred_cuisines}
    return bool(recipe.cuisine) and recipe.cuisine.lower() in preferred


_CHECKS: dict[RuleCheck, Callable[[Recipe, UserPreferences, RecommenderConfig], bool]] = {
    RuleCheck.over_budget: _over_budget,
    RuleCheck.over_time: _over_time,
    RuleCheck.dietary_violation: _dietary_violation,
    RuleCheck.under_protein: _under_protein,
    RuleCheck.over_calories: _over_calories,
    RuleCheck.cuisine_match: _cuisine_match,
}


def evaluate_check(
    check: RuleCheck,
    recipe: Recipe,
    prefs: UserPreferences,
    config: RecommenderConfig = DEFAULT_RECOMMENDER_CONFIG,
) -> bool:
    return _CHECKS[check](recipe, prefs, config)


def exclusion_reason(
    recipe: Recipe,
    prefs: UserPreferences,
    rules: Sequence[Rule] | None = None,
    config: RecommenderConfig = DEFAULT_RECOMMENDER_CONFIG,
) -> str | None:
    """Reason of the first exclude rule that fires, or None if the recipe survives."""
    rules = default_rules(config) if rules is None else rules
    for rule in rules:
        if rule.action is RuleAction.exclude and evaluate_check(rule.check, recipe, prefs, config):
            return rule.reason
    return None


def filter_recipes(
    recipes: Sequence[Recipe],
    prefs: UserPreferences,
    rules: Sequence[Rule] | None = None,
    config: RecommenderConfig = DEFAULT_RECOMMENDER_CONFIG,
) -> tuple[list[Recipe], list[ExclusionRecord]]:
    rules = default_rules(config) if rules is None else rules
    survivors: list[Recipe] = []
    exclusions: list[ExclusionRecord] = []
    for recipe in recipes:
        reason = exclusion_reason(recipe, prefs, rules, config)
        if reason is None:
            survivors.append(recipe)
        else:
            exclusions.append(ExclusionRecord(recipe_id=recipe.id, title=recipe.title, reason=reason))
    return survivors, exclusions


def score_recipe(
    recipe: Recipe,
    prefs: UserPreferences,
    rules: Sequence[Rule] | None = None,
    config: RecommenderConfig = DEFAULT_RECOMMENDER_CONFIG,
) -> float:
    rules = default_rules(config) if rules is None else rules
    min_protein = prefs.min_protein if prefs.min_protein is not None else config.default_min_protein

    score = recipe.average_rating * 20
    if recipe.protein >= min_protein:
        score += 25
    score += max(0.0, 30 - recipe.cooking_time)
    if recipe.calories > 0:
        score += recipe.protein / (recipe.calories / 100) * 8
    if prefs.budget:
        score += max(0.0, (1 - recipe.estimated_cost / prefs.budget) * 15)
    for rule in rules:
        if rule.action is RuleAction.boost and evaluate_check(rule.check, recipe, prefs, config):
            score += rule.weight * 20
    return score


def match_reasons(
    recipe: Recipe,
    prefs: UserPreferences,
    rules: Sequence[Rule] | None = None,
    config: RecommenderConfig = DEFAULT_RECOMMENDER_CONFIG,
) -> list[str]:
    rules = default_rules(config) if rules is None else rules
    min_protein = prefs.min_protein if prefs.min_protein is not None else config.default_min_protein
    max_time = prefs.max_cooking_time if prefs.max_cooking_time is not None else config.reason_max_cooking_time
    max_calories = prefs.max_calories if prefs.max_calories is not None else config.reason_max_calories

    reasons: list[str] = []
    if recipe.protein >= min_protein:
        reasons.append("High protein content")
    if recipe.cooking_time <= max_time:
        reasons.append("Quick to prepare")
    if recipe.calories <= max_calories:
        reasons.append("Calorie-friendly")
    if prefs.budget is not None and recipe.estimated_cost <= prefs.budget:
        reasons.append("Within budget")
    if recipe.average_rating >= config.highly_rated_threshold:
        reasons.append("Highly rated")
    for rule in rules:
        if rule.action is RuleAction.boost and evaluate_check(rule.check, recipe, prefs, config):
            reasons.append(rule.reason)
    return reasons


def recommend(
    recipes: Sequence[Recipe],
    prefs: UserPreferences,
    rules: Sequence[Rule] | None = None,
    config: RecommenderConfig = DEFAULT_RECOMMENDER_CONFIG,
) -> RuleEngineResult:
    """Filter with the exclude rules, then rank survivors by score."""
    rules = default_rules(config) if rules is None else rules
    survivors, exclusions = filter_recipes(recipes, prefs, rules, config)
    scored = [
        ScoredRecipe(
            recipe=r,
            score=score_recipe(r, prefs, rules, config),
            reasons=match_reasons(r, prefs, rules, config),
        )
        for r in survivors
    ]
    scored.sort(key=lambda s: s.score, reverse=True)

    if not scored:
        logger.warning("rule engine excluded all %d recipes", len(recipes))
    return RuleEngineResult(
        recommendations=scored[: config.rule_limit],
        exclusions=exclusions,
        candidates=len(survivors),
    )
