from __future__ import annotations

import logging
import math
from typing import Sequence

from ..corpus.features import nutrition_features
from ..corpus.models import Recipe
from ..errors import DimensionMismatch, SingularMatrix
from ..linalg.matrix import inverse, multiply, multiply_vector, transpose
from .models import RegressionModel

logger = logging.getLogger(__name__)

SATISFACTION_FEATURES: tuple[str, ...] = ("calories", "protein", "carbs")


def solve_normal_equations(features: Sequence[Sequence[float]], targets: Sequence[float]) -> list[float]:
    """Return theta = (X^T X)^-1 X^T y with a leading column of ones in X."""
    if len(features) != len(targets):
        raise DimensionMismatch(f"{len(features)} feature rows but {len(targets)} targets")
    if not features:
        raise SingularMatrix("no training rows")

    x = [[1.0] + [float(v) for v in row] for row in features]
    xt = transpose(x)
    xtx_inv = inverse(multiply(xt, x))
    xty = multiply_vector(xt, [float(t) for t in targets])
    return multiply_vector(xtx_inv, xty)


def predict(features: Sequence[float], coefficients: Sequence[float]) -> float:
    if len(features) + 1 != len(coefficients):
        raise DimensionMismatch(
            f"model has {len(coefficients) - 1} feature weights, got {len(features)} features"
        )
    return coefficients[0] + sum(c * float(f) for c, f in zip(coefficients[1:], features))


def r_squared(targets: Sequence[float], predictions: Sequence[float]) -> float:
    """1 - SSres/SStot. Not clamped: a fit worse than the mean is negative."""
    mean = sum(targets) / len(targets)
    ss_tot = sum((t - mean) ** 2 for t in targets)
    ss_res = sum((t - p) ** 2 for t, p in zip(targets, predictions))
    if ss_tot == 0:
        return 1.0 if ss_res == 0 else 0.0
    return 1 - ss_res / ss_tot


def rmse(targets: Sequence[float], predictions: Sequence[float]) -> float:
    return math.sqrt(sum((t - p) ** 2 for t, p in zip(targets, predictions)) / len(targets))


def fit(
    features: Sequence[Sequence[float]],
    targets: Sequence[float],
    feature_names: Sequence[str] = (),
) -> RegressionModel:
    coefficients = solve_normal_equations(features, targets)
    predictions = [predict(row, coefficients) for row in features]
    return RegressionModel(
        coefficients=tuple(coefficients),
        r_squared=r_squared(targets, predictions),
        rmse=rmse(targets, predictions),
        n_samples=len(targets),
        feature_names=tuple(feature_names),
    )


def fit_satisfaction_model(recipes: Sequence[Recipe]) -> RegressionModel:
    """Regress each rated recipe's mean rating on calories, protein and carbs."""
    rated = [r for r in recipes if r.ratings]
    model = fit(
        [nutrition_features(r) for r in rated],
        [r.average_rating for r in rated],
        feature_names=SATISFACTION_FEATURES,
    )
    logger.info(
        "satisfaction model fitted on %d recipes: r2=%.4f rmse=%.4f",
        model.n_samples, model.r_squared, model.rmse,
    )
    return model
