from __future__ import annotations

import math
from typing import Sequence

from ..regression.linear import fit, predict
from .models import ConsistencyScore, TrendForecast

MIN_FORECAST_POINTS = 3
SLOPE_EPSILON = 1e-9


def forecast(history: Sequence[float], steps: int = 7) -> TrendForecast | None:
    """
    Fit value ~ day index and extrapolate ``steps`` days past the history.

    Returns None for fewer than three points. Confidence is the fit's R²
    clamped to [0, 1].
    """
    if len(history) < MIN_FORECAST_POINTS:
        return None

    model = fit([[float(day)] for day in range(len(history))], history, feature_names=("day",))
    slope = model.coefficients[1]
    n = len(history)
    predictions = [round(predict([float(n + i)], model.coefficients), 2) for i in range(steps)]

    if slope > SLOPE_EPSILON:
        trend = "increasing"
    elif slope < -SLOPE_EPSILON:
        trend = "decreasing"
    else:
        trend = "stable"

    return TrendForecast(
        predictions=predictions,
        trend=trend,
        slope=slope,
        confidence=min(1.0, max(0.0, model.r_squared)),
    )


def consistency_score(values: Sequence[float]) -> ConsistencyScore | None:
    """
    ``max(0, 1 - sd / (0.3 * mean))`` with the population standard deviation.

    A series whose mean is not positive scores 0.
    """
    if not values:
        return None
    n = len(values)
    mean = sum(values) / n
    sd = math.sqrt(sum((v - mean) ** 2 for v in values) / n)
    score = max(0.0, 1 - sd / (mean * 0.3)) if mean > 0 else 0.0

    if score > 0.7:
        interpretation = "high"
    elif score > 0.4:
        interpretation = "moderate"
    else:
        interpretation = "low"
    return ConsistencyScore(score=score, standard_deviation=sd, interpretation=interpretation)
