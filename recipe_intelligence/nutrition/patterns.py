from __future__ import annotations

import logging
from collections import Counter
from typing import Sequence

from .models import (
    DailyIntake,
    EatingPatterns,
    IntakeAverages,
    MacroTrends,
    MealFrequency,
    RiskFactor,
    Trend,
)
from .trends import consistency_score

logger = logging.getLogger(__name__)

DAYS_PER_WEEK = 7
WEEKLY_TREND_THRESHOLD = 0.1

LOW_CALORIE_ADVICE = 1200.0
LOW_CALORIE_RISK = 1000.0
MIN_PROTEIN_ENERGY_SHARE = 0.15

IMPROVEMENT_SUGGESTIONS: tuple[str, ...] = (
    "Maintain regular meal times for better metabolism",
    "Include a variety of nutrients in your daily intake",
    "Consider meal prep to improve consistency",
)


def _positive_mean(values: Sequence[float]) -> float:
    """Mean of the positive values; unlogged (zero) days do not drag it down."""
    positive = [v for v in values if v > 0]
    return sum(positive) / len(positive) if positive else 0.0


def average_intake(entries: Sequence[DailyIntake]) -> IntakeAverages:
    return IntakeAverages(
        calories=_positive_mean([e.calories for e in entries]),
        protein=_positive_mean([e.protein for e in entries]),
        carbs=_positive_mean([e.carbs for e in entries]),
        fat=_positive_mean([e.fat for e in entries]),
    )


def meal_frequency(entries: Sequence[DailyIntake]) -> MealFrequency:
    """Meals-per-day statistics. Ties for the most common count go to the larger count."""
    counts = [e.meals for e in entries]
    if not counts:
        return MealFrequency(average=0.0, most_common=0, min=0, max=0)
    tally = Counter(counts)
    return MealFrequency(
        average=sum(counts) / len(counts),
        most_common=max(tally, key=lambda m: (tally[m], m)),
        min=min(counts),
        max=max(counts),
    )


def _weekly_trend(values: Sequence[float]) -> Trend:
    if len(values) < 2:
        return "stable"
    first, last = values[0], values[-1]
    if first == 0:
        return "increasing" if last > 0 else "stable"
    change = (last - first) / first
    if change > WEEKLY_TREND_THRESHOLD:
        return "increasing"
    if change < -WEEKLY_TREND_THRESHOLD:
        return "decreasing"
    return "stable"


def macro_trends(entries: Sequence[DailyIntake]) -> MacroTrends | None:
    """
    Compare the first and last weekly averages of each macro.

    Entries are sorted by date and chunked into consecutive groups of seven
    (the last group may be shorter). A relative change above 10% is
    increasing, below -10% decreasing, anything else stable. Returns None
    with less than a week of entries.
    """
    if len(entries) < DAYS_PER_WEEK:
        return None
    ordered = sorted(entries, key=lambda e: e.date)
    weeks = [
        average_intake(ordered[i:i + DAYS_PER_WEEK])
        for i in range(0, len(ordered), DAYS_PER_WEEK)
    ]
    return MacroTrends(
        calories=_weekly_trend([w.calories for w in weeks]),
        protein=_weekly_trend([w.protein for w in weeks]),
        carbs=_weekly_trend([w.carbs for w in weeks]),
        fat=_weekly_trend([w.fat for w in weeks]),
        weekly=weeks,
    )


def predict_next_week_calories(entries: Sequence[DailyIntake]) -> int:
    """Average daily calories over the most recent seven logged days."""
    recent = sorted(entries, key=lambda e: e.date)[-DAYS_PER_WEEK:]
    return round(_positive_mean([e.calories for e in recent]))


def analyze_eating_patterns(entries: Sequence[DailyIntake]) -> EatingPatterns | None:
    """
    Summarise an intake log and derive advice from it.

    Weekdays are Monday to Friday. Averages skip days with a zero value.
    Returns None for an empty log.
    """
    if not entries:
        logger.info("no intake entries to analyse")
        return None

    averages = average_intake(entries)
    consistency = consistency_score([e.calories for e in entries])

    adjustments: list[str] = []
    if averages.calories < LOW_CALORIE_ADVICE:
        adjustments.append("Consider increasing calorie intake for better health")
    if averages.protein < averages.calories * MIN_PROTEIN_ENERGY_SHARE / 4:
        adjustments.append("Increase protein intake to support muscle health")
    if consistency.score < 0.5:
        adjustments.append("Try to maintain more consistent eating patterns")

    risks: list[RiskFactor] = []
    if averages.calories < LOW_CALORIE_RISK:
        risks.append(RiskFactor(type="low_calorie", severity="high"))
    if consistency.score < 0.3:
        risks.append(RiskFactor(type="inconsistent_eating", severity="medium"))

    patterns = EatingPatterns(
        data_points=len(entries),
        averages=averages,
        meal_frequency=meal_frequency(entries),
        weekday=average_intake([e for e in entries if e.date.weekday() < 5]),
        weekend=average_intake([e for e in entries if e.date.weekday() >= 5]),
        macro_trends=macro_trends(entries),
        consistency=consistency,
        next_week_calories=predict_next_week_calories(entries),
        adjustments=adjustments,
        risk_factors=risks,
        suggestions=list(IMPROVEMENT_SUGGESTIONS),
    )
    logger.info(
        "eating patterns analysed: days=%d avg_kcal=%.0f consistency=%.2f",
        len(entries), averages.calories, consistency.score,
    )
    return patterns
