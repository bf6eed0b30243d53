from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PlannerConfig:
    """
    Configuration for the genetic meal-plan optimiser.
    """

    population_size: int = 50
    generations: int = 100
    elite_count: int = 10
    tournament_size: int = 3
    mutation_rate: float = 0.1
    days: int = 7
    meals_per_day: int = 3

    day_labels: tuple[str, ...] = (
        "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday",
    )
    meal_slots: tuple[str, ...] = ("breakfast", "lunch", "dinner")


DEFAULT_PLANNER_CONFIG = PlannerConfig()
