"""Per-meal nutrition targets."""

from meal_planner.domain.plans import MealTarget, PlanPreferences
from meal_planner.domain.tuning import MEAL_ORDER, MEAL_TARGET_SHARES, SNACKS

MEALS_WITH_SNACKS = 4


def meal_types_for(meals_per_day: int) -> list[str]:
    """Return the meal types to plan, in generation order."""
    if meals_per_day >= MEALS_WITH_SNACKS:
        return list(MEAL_ORDER)
    return [meal_type for meal_type in MEAL_ORDER if meal_type != SNACKS]


def compute_meal_targets(
    preferences: PlanPreferences,
    shares: dict[str, float] | None = None,
) -> dict[str, MealTarget]:
    """Split daily targets into per-meal targets.

    Snacks only receive a target when four meals a day are requested; with
    three meals the snack share is left unallocated.
    """
    resolved_shares = shares or MEAL_TARGET_SHARES
    targets: dict[str, MealTarget] = {}
    for meal_type in meal_types_for(preferences.meals_per_day):
        share = resolved_shares[meal_type]
        targets[meal_type] = MealTarget(
            meal_type=meal_type,
            calories=round(preferences.daily_calories * share),
            protein=round(preferences.protein_goal * share),
            carbs=round(preferences.carbs_goal * share),
            fat=round(preferences.fat_goal * share),
        )
    return targets
