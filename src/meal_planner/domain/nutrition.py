"""Nutrition domain models."""

from dataclasses import dataclass

PROTEIN_KCAL_PER_G = 4
FAT_KCAL_PER_G = 9
CARBS_KCAL_PER_G = 4


@dataclass(frozen=True)
class NutritionProfile:
    """Nutrition totals for a recipe or a scaled portion of one."""

    calories: float
    protein: float
    carbs: float
    fat: float
    fiber: float = 0.0
    sugar: float = 0.0
    sodium: float = 0.0


@dataclass(frozen=True)
class MacroPercentages:
    """Share of calories contributed by each macro, in percent."""

    protein: float
    fat: float
    carbs: float


def atwater_calories(protein: float, fat: float, carbs: float) -> float:
    """Return calories computed from macro grams."""
    return (
        protein * PROTEIN_KCAL_PER_G
        + fat * FAT_KCAL_PER_G
        + carbs * CARBS_KCAL_PER_G
    )
