from __future__ import annotations

import logging

from .models import ActivityLevel, BodyProfile, Goal, NutritionNeeds

logger = logging.getLogger(__name__)

ACTIVITY_MULTIPLIERS: dict[ActivityLevel, float] = {
    "sedentary": 1.2,
    "light": 1.375,
    "moderate": 1.55,
    "active": 1.725,
    "very_active": 1.9,
}
DEFAULT_ACTIVITY_MULTIPLIER = 1.55

GOAL_ADJUSTMENTS: dict[Goal, float] = {"lose": -500.0, "maintain": 0.0, "gain": 500.0}


def basal_metabolic_rate(profile: BodyProfile) -> float:
    """Mifflin-St Jeor equation."""
    base = 10 * profile.weight + 6.25 * profile.height - 5 * profile.age
    return base + 5 if profile.gender.lower() == "male" else base - 161


def predict_nutrition_needs(
    profile: BodyProfile,
    activity_level: ActivityLevel | str = "moderate",
) -> NutritionNeeds:
    """
    Daily targets from BMR, an activity multiplier and the profile's goal.

    Macros split the target energy 25/45/30 between protein, carbohydrates
    and fat at 4/4/9 kcal per gram. Unknown activity levels count as
    moderate.
    """
    bmr = basal_metabolic_rate(profile)
    multiplier = ACTIVITY_MULTIPLIERS.get(activity_level)
    if multiplier is None:
        logger.debug("unknown activity level %r, using moderate", activity_level)
        multiplier = DEFAULT_ACTIVITY_MULTIPLIER
    tdee = bmr * multiplier
    target = tdee + GOAL_ADJUSTMENTS[profile.goal]

    return NutritionNeeds(
        calories=round(target),
        protein=round(target * 0.25 / 4),
        carbohydrates=round(target * 0.45 / 4),
        fat=round(target * 0.30 / 9),
        fiber=round(profile.weight * 0.5),
        water=round(profile.weight * 35),
        bmr=round(bmr),
        tdee=round(tdee),
        activity_level=activity_level,
    )
