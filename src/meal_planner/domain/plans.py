"""Domain models for meal plan generation."""

from dataclasses import dataclass, field
from datetime import date
from uuid import UUID

from meal_planner.domain.nutrition import MacroPercentages, NutritionProfile
from meal_planner.domain.recipes import ConvertedRecipe


@dataclass(frozen=True)
class PlanPreferences:
    """Daily targets and habits used to generate a plan."""

    daily_calories: float
    protein_goal: float
    carbs_goal: float
    fat_goal: float
    fiber_goal: float | None = None
    dietary_restrictions: list[str] = field(default_factory=list)
    meals_per_day: int = 3


@dataclass(frozen=True)
class MealTarget:
    """Slice of the daily targets allocated to one meal type."""

    meal_type: str
    calories: float
    protein: float
    carbs: float
    fat: float


@dataclass(frozen=True)
class Candidate:
    """Scaled and scored recipe eligible for a meal slot."""

    meal_type: str
    recipe: ConvertedRecipe
    serving_multiplier: int
    adjusted_nutrition: NutritionProfile
    macro_percentages: MacroPercentages
    macro_score: float
    within_range: bool
    is_fallback: bool = False


@dataclass(frozen=True)
class MealPlanItem:
    """Assignment of a stored recipe to a date and meal type."""

    recipe_id: UUID
    date: date
    meal_type: str


@dataclass(frozen=True)
class MealPlan:
    """Persisted meal plan for a user."""

    id: UUID
    user_id: UUID
    start_date: date
    end_date: date
    items: list[MealPlanItem]


@dataclass(frozen=True)
class GenerationSummary:
    """Aggregate numbers reported after a generation run."""

    total_meals_generated: int
    days_planned: int
    average_daily_calories: int
    meals_per_day: int


@dataclass(frozen=True)
class GenerationResult:
    """Outcome of a successful generation run."""

    meal_plan: MealPlan
    summary: GenerationSummary
