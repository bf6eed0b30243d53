from __future__ import annotations

import logging
import random
import time
from typing import Sequence

from .analytics.store import EventLog
from .clustering import kmeans
from .corpus.features import nutrition_features
from .corpus.models import RatingMatrix, Recipe, UserId, UserPreferences, UserProfile
from .config import DEFAULT_ENGINE_CONFIG, EngineConfig
from .errors import SingularMatrix
from .planning.genetic import MealPlanOptimizer
from .planning.models import MealPlan, PlanTargets
from .recommendations import collaborative, rules
from .recommendations.cache import ModelCache, TrainedModel
from .recommendations.models import AlgorithmMetrics, RecommendationBundle
from .regression.linear import fit_satisfaction_model, predict

logger = logging.getLogger(__name__)

RATING_MIN = 0.0
RATING_MAX = 5.0


def _elapsed_ms(start_time: float) -> float:
    return round((time.time() - start_time) * 1000, 1)


class RecipeIntelligenceEngine:
    """
    Entry point tying the algorithms to one recipe corpus.

    ``train()`` clusters the corpus and fits the satisfaction model, storing
    both in ``self.cache``. ``recommend()`` reads that cache (training on
    first use) and runs the three recommenders side by side. ``plan()`` runs
    the genetic optimiser. When an ``EventLog`` is supplied every call
    records an event in it.
    """

    def __init__(
        self,
        recipes: Sequence[Recipe],
        users: Sequence[UserProfile] = (),
        ratings: RatingMatrix | None = None,
        config: EngineConfig = DEFAULT_ENGINE_CONFIG,
        rng: random.Random | None = None,
        event_log: EventLog | None = None,
    ) -> None:
        self.recipes = tuple(recipes)
        self.users = tuple(users)
        self.ratings = ratings
        self.config = config
        self.rng = rng or random.Random(config.seed)
        self.event_log = event_log
        self.cache = ModelCache()

    def _record(self, event_type: str, data: dict) -> None:
        if self.event_log is not None:
            self.event_log.record_event(event_type, data)

    # ------------------------------------------------------------------
    # Training
    # ------------------------------------------------------------------
    def train(self, k: int | None = None) -> TrainedModel:
        start_time = time.time()
        k = self.config.kmeans.k if k is None else k

        clustering = kmeans.fit(self.recipes, k=k, rng=self.rng, config=self.config.kmeans)
        try:
            regression = fit_satisfaction_model(self.recipes)
        except SingularMatrix as exc:
            logger.warning("satisfaction model not updated, training data is degenerate: %s", exc)
            regression = None

        entry = self.cache.store(k, clustering, regression)
        processing_ms = _elapsed_ms(start_time)
        logger.info(
            "trained model v%d: k=%d iterations=%d regression=%s (%.1fms)",
            entry.version, k, clustering.metrics.iterations,
            "ok" if regression is not None else "skipped", processing_ms,
        )
        self._record("train", {
            "processing_time_ms": processing_ms,
            "k": k,
            "iterations": clustering.metrics.iterations,
            "silhouette": clustering.metrics.silhouette_score,
            "r_squared": regression.r_squared if regression is not None else None,
        })
        return entry

    def _trained(self) -> TrainedModel:
        entry = self.cache.get()
        if entry is None:
            entry = self.train()
        return entry

    # ------------------------------------------------------------------
    # Recommendation
    # ------------------------------------------------------------------
    def recommend(
        self,
        prefs: UserPreferences,
        target_user_id: UserId | None = None,
    ) -> RecommendationBundle:
        """
        Cluster-based, collaborative and rule-based lists for one request.

        ``target_user_id`` keeps the requesting user out of their own
        neighbourhood when they are also part of ``self.users``.
        """
        start_time = time.time()
        model = self._trained()
        metrics: dict[str, AlgorithmMetrics] = {}

        # Cluster lookup
        step_start = time.time()
        best, cluster_based = kmeans.recommend_from_clusters(
            model.clustering.clusters, prefs, self.config.kmeans,
        )
        metrics["cluster_based"] = AlgorithmMetrics(
            algorithm="kmeans",
            processing_time_ms=_elapsed_ms(step_start),
            candidates=best.size if best is not None else 0,
            returned=len(cluster_based),
            status="ok" if best is not None else "no_clusters",
            details={
                "cluster_id": best.id if best is not None else None,
                "cluster_score": (
                    kmeans.score_for_user(best, prefs, self.config.kmeans) if best is not None else None
                ),
                "silhouette": model.clustering.metrics.silhouette_score,
                "model_version": model.version,
            },
        )

        # Collaborative filtering
        step_start = time.time()
        matrix = collaborative.build_rating_matrix(
            self.users, self.recipes, history=self.ratings, config=self.config.recommender,
        )
        cf = collaborative.recommend(
            prefs,
            self.users,
            self.recipes,
            ratings=matrix,
            exclude_user_id=target_user_id,
            config=self.config.recommender,
        )
        metrics["collaborative"] = AlgorithmMetrics(
            algorithm="collaborative_filtering",
            processing_time_ms=_elapsed_ms(step_start),
            candidates=len(cf.similar_users),
            returned=len(cf.recommendations),
            status=cf.status,
            details={"similar_users": [s.user_id for s in cf.similar_users]},
        )

        # Rule engine
        step_start = time.time()
        rule_result = rules.recommend(self.recipes, prefs, config=self.config.recommender)
        metrics["rule_based"] = AlgorithmMetrics(
            algorithm="rule_engine",
            processing_time_ms=_elapsed_ms(step_start),
            candidates=rule_result.candidates,
            returned=len(rule_result.recommendations),
            status="ok" if rule_result.recommendations else "all_excluded",
            details={"excluded": len(rule_result.exclusions)},
        )

        bundle = RecommendationBundle(
            cluster_based=cluster_based,
            collaborative=cf.recommendations,
            rule_based=rule_result.recommendations,
            metrics=metrics,
            total_processing_time_ms=_elapsed_ms(start_time),
        )
        self._record("recommend", {
            "processing_time_ms": bundle.total_processing_time_ms,
            "cluster_based": len(bundle.cluster_based),
            "collaborative": len(bundle.collaborative),
            "rule_based": len(bundle.rule_based),
        })
        return bundle

    # ------------------------------------------------------------------
    # Planning
    # ------------------------------------------------------------------
    def plan(
        self,
        targets: PlanTargets | None = None,
        prefs: UserPreferences | None = None,
        rng: random.Random | None = None,
    ) -> MealPlan:
        optimizer = MealPlanOptimizer(self.config.planner, rng or self.rng)
        meal_plan = optimizer.optimize(self.recipes, targets, prefs)
        self._record("plan", {
            "processing_time_ms": meal_plan.metrics.processing_time_ms,
            "best_fitness": meal_plan.fitness,
            "generations": meal_plan.generations,
            "variety": meal_plan.metrics.variety_score,
        })
        return meal_plan

    # ------------------------------------------------------------------
    # Satisfaction
    # ------------------------------------------------------------------
    def predict_satisfaction(self, recipe: Recipe) -> float | None:
        """Predicted rating on the 0-5 scale, or None when no model could be fitted."""
        model = self._trained().regression
        if model is None:
            return None
        raw = predict(nutrition_features(recipe), model.coefficients)
        return min(RATING_MAX, max(RATING_MIN, raw))
