"""Serving multiplier and nutrition scaling."""

import math
from dataclasses import dataclass

from meal_planner.domain.nutrition import NutritionProfile, atwater_calories
from meal_planner.domain.tuning import ScalingConfig


@dataclass(frozen=True)
class ScaledNutrition:
    """Nutrition for a recipe after applying a serving multiplier."""

    servings: int
    nutrition: NutritionProfile


def serving_multiplier(
    recipe_calories: float,
    target_calories: float,
    config: ScalingConfig | None = None,
) -> int:
    """Return the whole number of servings that best approaches the target."""
    resolved = config or ScalingConfig()
    ratio = target_calories / recipe_calories if recipe_calories > 0 else 1.0
    servings = math.ceil(ratio * resolved.ratio_factor)
    return max(resolved.min_servings, min(resolved.max_servings, servings))


def scale_nutrition(
    raw: NutritionProfile,
    target_calories: float,
    config: ScalingConfig | None = None,
) -> ScaledNutrition:
    """Scale a recipe's nutrition to a meal's calorie target.

    Calories are recomputed from the scaled macros with Atwater factors and
    replace the provider's reported figure.
    """
    servings = serving_multiplier(raw.calories, target_calories, config)
    protein = raw.protein * servings
    carbs = raw.carbs * servings
    fat = raw.fat * servings
    scaled = NutritionProfile(
        calories=atwater_calories(protein=protein, fat=fat, carbs=carbs),
        protein=protein,
        carbs=carbs,
        fat=fat,
        fiber=(raw.fiber or 0.0) * servings,
        sugar=(raw.sugar or 0.0) * servings,
        sodium=(raw.sodium or 0.0) * servings,
    )
    return ScaledNutrition(servings=servings, nutrition=scaled)
