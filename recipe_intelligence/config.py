from __future__ import annotations

import dataclasses
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from .clustering.config import DEFAULT_KMEANS_CONFIG, KMeansConfig
from .planning.config import DEFAULT_PLANNER_CONFIG, PlannerConfig
from .recommendations.config import DEFAULT_RECOMMENDER_CONFIG, RecommenderConfig

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent / ".env")


@dataclass(frozen=True)
class EngineConfig:
    kmeans: KMeansConfig = DEFAULT_KMEANS_CONFIG
    recommender: RecommenderConfig = DEFAULT_RECOMMENDER_CONFIG
    planner: PlannerConfig = DEFAULT_PLANNER_CONFIG
    seed: int | None = None


DEFAULT_ENGINE_CONFIG = EngineConfig()


def _env_int(name: str) -> int | None:
    raw = os.getenv(name, "").strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from exc


def load_engine_config() -> EngineConfig:
    """
    Defaults overridden by RECIPE_ENGINE_SEED, RECIPE_ENGINE_K and
    RECIPE_ENGINE_GENERATIONS from the environment or the project's .env.
    """
    config = DEFAULT_ENGINE_CONFIG

    seed = _env_int("RECIPE_ENGINE_SEED")
    if seed is not None:
        config = dataclasses.replace(config, seed=seed)

    k = _env_int("RECIPE_ENGINE_K")
    if k is not None:
        config = dataclasses.replace(config, kmeans=dataclasses.replace(config.kmeans, k=k))

    generations = _env_int("RECIPE_ENGINE_GENERATIONS")
    if generations is not None:
        config = dataclasses.replace(
            config, planner=dataclasses.replace(config.planner, generations=generations),
        )
    return config
