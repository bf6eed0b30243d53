from __future__ import annotations

import argparse
import dataclasses
import datetime
import logging
import random

from .analytics.aggregator import compute_analytics
from .analytics.store import EventLog
from .config import load_engine_config
from .corpus.data_store import load_recipes_csv
from .corpus.models import UserPreferences
from .corpus.sample_data import SAMPLE_RATINGS, SAMPLE_RECIPES, SAMPLE_USERS
from .engine import RecipeIntelligenceEngine
from .planning.models import PlanTargets
from .nutrition.models import DailyIntake
from .nutrition.patterns import analyze_eating_patterns
from .planning.shopping import build_shopping_list, estimate_shopping_time, optimize_shopping_route


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Train, recommend and plan meals on a recipe corpus")
    parser.add_argument("--seed", type=int, default=None, help="Random seed (overrides RECIPE_ENGINE_SEED)")
    parser.add_argument("--csv", default=None, help="Recipe CSV to load instead of the bundled sample corpus")
    parser.add_argument("--k", type=int, default=None, help="Number of clusters")
    parser.add_argument("--generations", type=int, default=None, help="Genetic algorithm generations")
    parser.add_argument("--verbose", action="store_true", help="Log at DEBUG level")
    return parser


def main(args: list[str] | None = None) -> None:
    opts = build_parser().parse_args(args=args)
    logging.basicConfig(
        level=logging.DEBUG if opts.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = load_engine_config()
    if opts.seed is not None:
        config = dataclasses.replace(config, seed=opts.seed)
    if opts.generations is not None:
        config = dataclasses.replace(
            config, planner=dataclasses.replace(config.planner, generations=opts.generations),
        )

    recipes = load_recipes_csv(opts.csv) if opts.csv else SAMPLE_RECIPES
    events = EventLog()
    engine = RecipeIntelligenceEngine(
        recipes,
        users=SAMPLE_USERS,
        ratings=SAMPLE_RATINGS,
        config=config,
        rng=random.Random(config.seed),
        event_log=events,
    )

    model = engine.train(k=opts.k)
    print(f"Clusters (silhouette {model.clustering.metrics.silhouette_score:.3f}):")
    for cluster in model.clustering.clusters:
        print(f"  #{cluster.id}: {', '.join(r.title for r in cluster.members) or '(empty)'}")
    if model.regression is not None:
        print(f"Satisfaction model: R2={model.regression.r_squared:.3f} RMSE={model.regression.rmse:.3f}")

    prefs = UserPreferences(max_calories=400, min_protein=20, max_cooking_time=30, budget=10)
    bundle = engine.recommend(prefs)
    print("\nCluster picks:   ", ", ".join(r.title for r in bundle.cluster_based) or "-")
    print("Similar users:   ", ", ".join(
        f"{c.recipe.title} ({c.predicted_rating:.2f})" for c in bundle.collaborative
    ) or bundle.metrics["collaborative"].status)
    print("Rule engine:")
    for scored in bundle.rule_based:
        print(f"  {scored.score:6.1f}  {scored.recipe.title}: {'; '.join(scored.reasons)}")

    plan = engine.plan(PlanTargets(daily_calories=1200, daily_protein=80, daily_budget=25))
    print(f"\nMeal plan (fitness {plan.fitness:.1f}, variety {plan.metrics.variety_score:.2f}):")
    for day in plan.days:
        meals = ", ".join(f"{m.slot}: {m.title}" for m in day.meals)
        print(f"  {day.day:<9} {day.totals.calories:6.0f} kcal  ${day.totals.cost:5.2f}  {meals}")

    shopping = build_shopping_list(plan, recipes)
    print(f"\nShopping list (about {estimate_shopping_time(shopping)} min):")
    for category, items in shopping.items():
        print(f"  {category}: {', '.join(f'{i.name} x{i.quantity}' for i in items)}")
    print(f"  route: {' -> '.join(optimize_shopping_route(shopping))}")

    today = datetime.date.today()
    week_start = today - datetime.timedelta(days=today.weekday())
    intake = [
        DailyIntake(
            date=week_start + datetime.timedelta(days=i),
            calories=day.totals.calories,
            protein=day.totals.protein,
            carbs=day.totals.carbs,
            fat=day.totals.fat,
            meals=len(day.meals),
        )
        for i, day in enumerate(plan.days)
    ]
    patterns = analyze_eating_patterns(intake)
    print(
        f"\nPlanned intake: {patterns.averages.calories:.0f} kcal/day, "
        f"consistency {patterns.consistency.interpretation}"
    )
    for advice in patterns.adjustments:
        print(f"  - {advice}")

    summary = compute_analytics(events.get_events())
    print(f"\nEvents: {summary['event_counts']}  avg {summary['avg_processing_time_ms']}ms")


if __name__ == "__main__":
    main()
