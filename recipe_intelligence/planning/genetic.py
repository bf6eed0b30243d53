from __future__ import annotations

import logging
import random
import time
from dataclasses import dataclass
from typing import Mapping, Sequence, Tuple

from ..corpus.models import Recipe, RecipeId, UserPreferences
from ..errors import EmptyCorpus
from ..recommendations.rules import filter_recipes
from .config import DEFAULT_PLANNER_CONFIG, PlannerConfig
from .models import DayPlan, MealPlan, NutritionTotals, PlanMetrics, PlannedMeal, PlanTargets

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Individual:
    """One candidate plan: ``days[d][m]`` is the recipe id for meal ``m`` of day ``d``."""

    days: Tuple[Tuple[RecipeId, ...], ...]

    def recipe_ids(self) -> list[RecipeId]:
        return [rid for day in self.days for rid in day]


Population = Tuple[Individual, ...]
Evaluated = Sequence[Tuple[Individual, float]]


def evaluate_fitness(
    individual: Individual,
    recipes_by_id: Mapping[RecipeId, Recipe],
    targets: PlanTargets,
) -> float:
    """
    Sum of per-day scores plus a whole-plan variety bonus.

    Per day: calorie closeness ``max(0, 100 - |kcal - target| / 10)``,
    protein (50, or 50 x ratio when short), budget (30, or -2 x overage),
    and 10 per distinct recipe that day. Whole plan: 5 per distinct recipe.
    """
    fitness = 0.0
    for day in individual.days:
        meals = [recipes_by_id[rid] for rid in day]
        calories = sum(r.calories for r in meals)
        protein = sum(r.protein for r in meals)
        cost = sum(r.estimated_cost for r in meals)

        fitness += max(0.0, 100 - abs(calories - targets.daily_calories) / 10)

        if protein >= targets.daily_protein:
            fitness += 50
        else:
            fitness += 50 * (protein / targets.daily_protein)

        if cost <= targets.daily_budget:
            fitness += 30
        else:
            fitness -= 2 * (cost - targets.daily_budget)

        fitness += 10 * len(set(day))

    fitness += 5 * len(set(individual.recipe_ids()))
    return fitness


def random_individual(
    candidates: Sequence[RecipeId], rng: random.Random, config: PlannerConfig = DEFAULT_PLANNER_CONFIG,
) -> Individual:
    return Individual(days=tuple(
        tuple(rng.choice(candidates) for _ in range(config.meals_per_day))
        for _ in range(config.days)
    ))


def crossover(parent1: Individual, parent2: Individual, rng: random.Random) -> Individual:
    """Single-point crossover on day boundaries: days before the point from parent1."""
    point = rng.randrange(len(parent1.days))
    return Individual(days=parent1.days[:point] + parent2.days[point:])


def mutate(individual: Individual, candidates: Sequence[RecipeId], rng: random.Random) -> Individual:
    """Replace one random meal slot with a random candidate recipe."""
    day_idx = rng.randrange(len(individual.days))
    day = individual.days[day_idx]
    slot_idx = rng.randrange(len(day))
    new_day = day[:slot_idx] + (rng.choice(candidates),) + day[slot_idx + 1:]
    return Individual(days=individual.days[:day_idx] + (new_day,) + individual.days[day_idx + 1:])


def tournament_select(evaluated: Evaluated, rng: random.Random, size: int) -> Individual:
    contestants = rng.sample(list(evaluated), min(size, len(evaluated)))
    best, _ = max(contestants, key=lambda pair: pair[1])
    return best


class MealPlanOptimizer:
    """Genetic algorithm producing a 7-day breakfast/lunch/dinner plan."""

    def __init__(
        self,
        config: PlannerConfig = DEFAULT_PLANNER_CONFIG,
        rng: random.Random | None = None,
    ) -> None:
        self.config = config
        self.rng = rng or random.Random()

    def optimize(
        self,
        recipes: Sequence[Recipe],
        targets: PlanTargets | None = None,
        prefs: UserPreferences | None = None,
    ) -> MealPlan:
        if not recipes:
            raise EmptyCorpus("cannot plan meals from an empty recipe corpus")
        targets = targets or PlanTargets()
        start_time = time.time()

        recipes_by_id = {r.id: r for r in recipes}
        candidates = self._candidate_pool(recipes, prefs)
        memo: dict[Individual, float] = {}

        def score(ind: Individual) -> float:
            if ind not in memo:
                memo[ind] = evaluate_fitness(ind, recipes_by_id, targets)
            return memo[ind]

        population: Population = tuple(
            random_individual(candidates, self.rng, self.config)
            for _ in range(self.config.population_size)
        )

        history: list[float] = []
        for generation in range(self.config.generations):
            evaluated = self._evaluate(population, score)
            history.append(evaluated[0][1])
            logger.debug("generation %d best fitness %.2f", generation, evaluated[0][1])
            population = self._next_generation(evaluated, candidates)

        evaluated = self._evaluate(population, score)
        best, best_fitness = evaluated[0]
        history.append(best_fitness)

        plan = self._to_meal_plan(best, best_fitness, recipes_by_id, history)
        plan.metrics.processing_time_ms = round((time.time() - start_time) * 1000, 1)
        logger.info(
            "meal plan optimised: generations=%d fitness=%.2f variety=%.2f",
            self.config.generations, best_fitness, plan.metrics.variety_score,
        )
        return plan

    # ------------------------------------------------------------------
    # Generation steps
    # ------------------------------------------------------------------
    @staticmethod
    def _evaluate(population: Population, score) -> list[tuple[Individual, float]]:
        evaluated = [(ind, score(ind)) for ind in population]
        evaluated.sort(key=lambda pair: pair[1], reverse=True)
        return evaluated

    def _next_generation(self, evaluated: Evaluated, candidates: Sequence[RecipeId]) -> Population:
        elite_count = min(self.config.elite_count, len(evaluated))
        next_generation = [ind for ind, _ in evaluated[:elite_count]]

        while len(next_generation) < self.config.population_size:
            parent1 = tournament_select(evaluated, self.rng, self.config.tournament_size)
            parent2 = tournament_select(evaluated, self.rng, self.config.tournament_size)
            child = crossover(parent1, parent2, self.rng)
            if self.rng.random() < self.config.mutation_rate:
                child = mutate(child, candidates, self.rng)
            next_generation.append(child)

        return tuple(next_generation)

    def _candidate_pool(self, recipes: Sequence[Recipe], prefs: UserPreferences | None) -> list[RecipeId]:
        if prefs is None:
            return [r.id for r in recipes]
        survivors, _ = filter_recipes(recipes, prefs)
        if not survivors:
            logger.warning("no recipe satisfies the plan preferences; planning from the full corpus")
            return [r.id for r in recipes]
        return [r.id for r in survivors]

    # ------------------------------------------------------------------
    # Result assembly
    # ------------------------------------------------------------------
    def _to_meal_plan(
        self,
        best: Individual,
        fitness: float,
        recipes_by_id: Mapping[RecipeId, Recipe],
        history: list[float],
    ) -> MealPlan:
        weekly = NutritionTotals()
        days: list[DayPlan] = []
        for day_idx, day in enumerate(best.days):
            totals = NutritionTotals()
            meals: list[PlannedMeal] = []
            for slot_idx, rid in enumerate(day):
                recipe = recipes_by_id[rid]
                meals.append(PlannedMeal(slot=self._slot_label(slot_idx), recipe_id=rid, title=recipe.title))
                totals.calories += recipe.calories
                totals.protein += recipe.protein
                totals.carbs += recipe.carbs
                totals.fat += recipe.fat
                totals.cost += recipe.estimated_cost
            days.append(DayPlan(day=self._day_label(day_idx), meals=meals, totals=totals))
            for field in ("calories", "protein", "carbs", "fat", "cost"):
                setattr(weekly, field, getattr(weekly, field) + getattr(totals, field))

        n_days = len(best.days)
        averages = NutritionTotals(**{
            field: getattr(weekly, field) / n_days
            for field in ("calories", "protein", "carbs", "fat", "cost")
        })
        ids = best.recipe_ids()
        unique = len(set(ids))
        metrics = PlanMetrics(
            weekly_totals=weekly,
            daily_averages=averages,
            variety_score=unique / len(ids),
            unique_recipes=unique,
            total_slots=len(ids),
        )
        return MealPlan(
            days=days,
            fitness=fitness,
            generations=self.config.generations,
            metrics=metrics,
            fitness_history=history,
        )

    def _day_label(self, idx: int) -> str:
        labels = self.config.day_labels
        return labels[idx] if idx < len(labels) else f"Day {idx + 1}"

    def _slot_label(self, idx: int) -> str:
        slots = self.config.meal_slots
        return slots[idx] if idx < len(slots) else f"meal {idx + 1}"
