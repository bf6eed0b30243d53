import datetime

import pytest

from recipe_intelligence.nutrition.models import DailyIntake
from recipe_intelligence.nutrition.patterns import (
    IMPROVEMENT_SUGGESTIONS,
    analyze_eating_patterns,
    macro_trends,
    meal_frequency,
)

MONDAY = datetime.date(2026, 1, 5)


def _log(calories, protein=100.0, carbs=250.0, fat=70.0, meals=3, start=MONDAY):
    return [
        DailyIntake(
            date=start + datetime.timedelta(days=i),
            calories=kcal, protein=protein, carbs=carbs, fat=fat, meals=meals,
        )
        for i, kcal in enumerate(calories)
    ]


def test_two_steady_weeks_with_rising_calories():
    entries = _log([2000] * 7 + [2400] * 7)
    patterns = analyze_eating_patterns(entries)

    assert patterns.data_points == 14
    assert patterns.averages.calories == pytest.approx(2200)
    assert patterns.macro_trends.calories == "increasing"
    assert patterns.macro_trends.protein == "stable"
    assert [w.calories for w in patterns.macro_trends.weekly] == [2000, 2400]
    # sd 200 against 30% of a 2200 mean
    assert patterns.consistency.score == pytest.approx(1 - 200 / 660)
    assert patterns.consistency.interpretation == "moderate"
    assert patterns.next_week_calories == 2400
    assert patterns.adjustments == []
    assert patterns.risk_factors == []
    assert patterns.suggestions == list(IMPROVEMENT_SUGGESTIONS)


def test_weekday_and_weekend_are_split():
    entries = _log([1800] * 5 + [2500] * 2)
    weekend_protein = {5: 80.0, 6: 80.0}
    entries = [
        e.model_copy(update={"protein": weekend_protein.get(i, 120.0)})
        for i, e in enumerate(entries)
    ]
    patterns = analyze_eating_patterns(entries)

    assert patterns.weekday.calories == pytest.approx(1800)
    assert patterns.weekday.protein == pytest.approx(120)
    assert patterns.weekend.calories == pytest.approx(2500)
    assert patterns.weekend.protein == pytest.approx(80)


def test_low_and_erratic_intake_flags_risks():
    patterns = analyze_eating_patterns(_log([900, 400, 1400], protein=10))

    assert patterns.averages.calories == pytest.approx(900)
    assert patterns.macro_trends is None
    assert patterns.consistency.score == 0.0
    assert patterns.adjustments == [
        "Consider increasing calorie intake for better health",
        "Increase protein intake to support muscle health",
        "Try to maintain more consistent eating patterns",
    ]
    assert [(r.type, r.severity) for r in patterns.risk_factors] == [
        ("low_calorie", "high"),
        ("inconsistent_eating", "medium"),
    ]
    assert patterns.next_week_calories == 900


def test_unlogged_days_do_not_lower_averages():
    patterns = analyze_eating_patterns(_log([0, 2000, 2000], protein=0))
    assert patterns.averages.calories == pytest.approx(2000)
    assert patterns.averages.protein == 0.0


def test_meal_frequency_ties_go_to_larger_count():
    entries = [
        e.model_copy(update={"meals": m})
        for e, m in zip(_log([2000] * 5), [3, 3, 2, 2, 4])
    ]
    freq = meal_frequency(entries)
    assert freq.average == pytest.approx(2.8)
    assert freq.most_common == 3
    assert (freq.min, freq.max) == (2, 4)


def test_trends_sort_entries_by_date():
    entries = _log([2000] * 7 + [1500] * 3, fat=70)
    trends = macro_trends(list(reversed(entries)))
    assert len(trends.weekly) == 2
    assert trends.calories == "decreasing"
    assert trends.fat == "stable"


def test_trend_from_zero_first_week():
    third_week = MONDAY + datetime.timedelta(days=14)
    trends = macro_trends(_log([2000] * 14, protein=0) + _log([2000] * 7, start=third_week))
    assert trends.protein == "increasing"
    assert trends.calories == "stable"


def test_empty_log_has_no_patterns():
    assert analyze_eating_patterns([]) is None
    assert meal_frequency([]).most_common == 0
