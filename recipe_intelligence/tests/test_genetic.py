import random

import pytest

from recipe_intelligence.corpus.models import UserPreferences
from recipe_intelligence.corpus.sample_data import SAMPLE_RECIPES
from recipe_intelligence.errors import EmptyCorpus
from recipe_intelligence.planning.config import PlannerConfig
from recipe_intelligence.planning.genetic import (
    Individual,
    MealPlanOptimizer,
    crossover,
    evaluate_fitness,
    mutate,
    random_individual,
    tournament_select,
)
from recipe_intelligence.planning.models import PlanTargets

BY_ID = {r.id: r for r in SAMPLE_RECIPES}
SMALL = PlannerConfig(population_size=12, generations=15, elite_count=3)


def _uniform_plan(recipe_id) -> Individual:
    return Individual(days=tuple((recipe_id,) * 3 for _ in range(7)))


def test_fitness_of_uniform_plan():
    # Parfait: 280 kcal, 22 g protein, $4 -> per day 840 kcal, 66 g, $12
    plan = _uniform_plan(8)
    per_day = 0 + 50 * 66 / 150 + 30 + 10
    assert evaluate_fitness(plan, BY_ID, PlanTargets()) == pytest.approx(7 * per_day + 5)


def test_fitness_when_targets_met_exactly():
    plan = _uniform_plan(8)
    targets = PlanTargets(daily_calories=840, daily_protein=66, daily_budget=12)
    assert evaluate_fitness(plan, BY_ID, targets) == pytest.approx(7 * (100 + 50 + 30 + 10) + 5)


def test_over_budget_is_penalised():
    plan = _uniform_plan(3)  # $18 a meal
    within = evaluate_fitness(plan, BY_ID, PlanTargets(daily_budget=60))
    over = evaluate_fitness(plan, BY_ID, PlanTargets(daily_budget=44))
    # +30 per day becomes -2 * (54 - 44) per day
    assert within - over == pytest.approx(7 * (30 + 20))


def test_crossover_splits_on_day_boundary():
    a = _uniform_plan(1)
    b = _uniform_plan(2)
    point = random.Random(9).randrange(7)

    child = crossover(a, b, random.Random(9))

    assert child.days[:point] == a.days[:point]
    assert child.days[point:] == b.days[point:]


def test_mutation_changes_at_most_one_slot():
    original = _uniform_plan(1)
    mutated = mutate(original, [2], random.Random(0))
    changed = [
        (d, m)
        for d in range(7)
        for m in range(3)
        if original.days[d][m] != mutated.days[d][m]
    ]
    assert len(changed) == 1
    assert len(mutated.days) == 7


def test_tournament_over_whole_population_returns_best():
    evaluated = [(_uniform_plan(1), 10.0), (_uniform_plan(2), 30.0), (_uniform_plan(3), 20.0)]
    assert tournament_select(evaluated, random.Random(0), size=3) == _uniform_plan(2)


def test_random_individual_shape():
    ind = random_individual([1, 2, 3], random.Random(0))
    assert len(ind.days) == 7
    assert all(len(day) == 3 for day in ind.days)
    assert set(ind.recipe_ids()) <= {1, 2, 3}


def test_optimize_is_reproducible_with_seed():
    first = MealPlanOptimizer(SMALL, random.Random(42)).optimize(SAMPLE_RECIPES)
    second = MealPlanOptimizer(SMALL, random.Random(42)).optimize(SAMPLE_RECIPES)
    assert first.fitness == second.fitness
    assert [[m.recipe_id for m in d.meals] for d in first.days] == [
        [m.recipe_id for m in d.meals] for d in second.days
    ]


def test_default_config_is_reproducible_with_seed():
    targets = PlanTargets(daily_calories=2000, daily_protein=150, daily_budget=50)
    first = MealPlanOptimizer(rng=random.Random(2024)).optimize(SAMPLE_RECIPES, targets)
    second = MealPlanOptimizer(rng=random.Random(2024)).optimize(SAMPLE_RECIPES, targets)
    assert first.fitness == second.fitness
    assert first.fitness_history == second.fitness_history
    assert [[m.recipe_id for m in d.meals] for d in first.days] == [
        [m.recipe_id for m in d.meals] for d in second.days
    ]


def test_best_fitness_never_decreases():
    plan = MealPlanOptimizer(rng=random.Random(1)).optimize(SAMPLE_RECIPES, PlanTargets())
    history = plan.fitness_history
    assert len(history) == 101
    assert all(later >= earlier for earlier, later in zip(history, history[1:]))
    assert plan.fitness == history[-1]
    assert plan.generations == 100


def test_plan_structure_and_metrics():
    plan = MealPlanOptimizer(SMALL, random.Random(3)).optimize(SAMPLE_RECIPES)

    assert [d.day for d in plan.days][0] == "Monday"
    assert len(plan.days) == 7
    assert all([m.slot for m in d.meals] == ["breakfast", "lunch", "dinner"] for d in plan.days)

    ids = [m.recipe_id for d in plan.days for m in d.meals]
    assert plan.metrics.total_slots == 21
    assert plan.metrics.unique_recipes == len(set(ids))
    assert plan.metrics.variety_score == pytest.approx(len(set(ids)) / 21)

    weekly = sum(BY_ID[i].calories for i in ids)
    assert plan.metrics.weekly_totals.calories == pytest.approx(weekly)
    assert plan.metrics.daily_averages.calories == pytest.approx(weekly / 7)


def test_preferences_restrict_candidates():
    plan = MealPlanOptimizer(SMALL, random.Random(5)).optimize(
        SAMPLE_RECIPES, prefs=UserPreferences(budget=5),
    )
    ids = {m.recipe_id for d in plan.days for m in d.meals}
    assert ids <= {6, 8, 9}


def test_unsatisfiable_preferences_fall_back_to_corpus():
    plan = MealPlanOptimizer(SMALL, random.Random(5)).optimize(
        SAMPLE_RECIPES, prefs=UserPreferences(max_calories=1),
    )
    assert len(plan.days) == 7


def test_empty_corpus_raises():
    with pytest.raises(EmptyCorpus):
        MealPlanOptimizer(SMALL, random.Random(0)).optimize([])
