"""Macro distribution scoring for scaled recipes."""

from dataclasses import dataclass

from meal_planner.domain.nutrition import (
    CARBS_KCAL_PER_G,
    FAT_KCAL_PER_G,
    PROTEIN_KCAL_PER_G,
    MacroPercentages,
    NutritionProfile,
)
from meal_planner.domain.plans import MealTarget
from meal_planner.domain.tuning import MacroRange, ScoringConfig


@dataclass(frozen=True)
class MacroEvaluation:
    """Result of scoring a scaled recipe against a meal target."""

    percentages: MacroPercentages
    score: float
    within_range: bool


def score_nutrition(
    nutrition: NutritionProfile,
    target: MealTarget,
    config: ScoringConfig | None = None,
) -> MacroEvaluation:
    """Score how well a scaled recipe fits the target macro distribution."""
    resolved = config or ScoringConfig()
    if nutrition.calories <= 0:
        return MacroEvaluation(
            percentages=MacroPercentages(protein=0.0, fat=0.0, carbs=0.0),
            score=0.0,
            within_range=False,
        )

    percentages = macro_percentages(nutrition)
    calorie_range = MacroRange(
        low=target.calories * resolved.calorie_low_factor,
        high=target.calories * resolved.calorie_high_factor,
    )
    protein_score = _axis_score(
        percentages.protein,
        resolved.protein_range,
        resolved.protein_range.midpoint,
        resolved.score_floor,
    )
    fat_score = _axis_score(
        percentages.fat,
        resolved.fat_range,
        resolved.fat_range.midpoint,
        resolved.score_floor,
    )
    carbs_score = _axis_score(
        percentages.carbs,
        resolved.carbs_range,
        resolved.carbs_range.midpoint,
        resolved.score_floor,
    )
    calorie_score = _axis_score(
        nutrition.calories,
        calorie_range,
        target.calories,
        resolved.score_floor,
    )
    score = (
        protein_score * resolved.protein_weight
        + fat_score * resolved.fat_weight
        + carbs_score * resolved.carbs_weight
        + calorie_score * resolved.calorie_weight
    ) / resolved.total_weight
    return MacroEvaluation(
        percentages=percentages,
        score=score,
        within_range=score >= resolved.pass_threshold,
    )


def macro_percentages(nutrition: NutritionProfile) -> MacroPercentages:
    """Return each macro's share of the profile's calories."""
    if nutrition.calories <= 0:
        return MacroPercentages(protein=0.0, fat=0.0, carbs=0.0)
    return MacroPercentages(
        protein=nutrition.protein * PROTEIN_KCAL_PER_G / nutrition.calories * 100,
        fat=nutrition.fat * FAT_KCAL_PER_G / nutrition.calories * 100,
        carbs=nutrition.carbs * CARBS_KCAL_PER_G / nutrition.calories * 100,
    )


def _axis_score(
    actual: float, bounds: MacroRange, midpoint: float, floor: float
) -> float:
    if bounds.contains(actual):
        return 1.0
    if midpoint <= 0:
        return floor
    return max(floor, 1 - abs(actual - midpoint) / midpoint)
