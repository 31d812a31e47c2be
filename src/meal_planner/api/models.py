"""Request models for the meal planner API."""

from datetime import date
from typing import Literal

from pydantic import BaseModel, Field

from meal_planner.domain.plans import PlanPreferences


class PreferencesPayload(BaseModel):
    """Daily targets submitted with a generation request."""

    daily_calories: float = Field(gt=0)
    protein_goal: float = Field(ge=0)
    carbs_goal: float = Field(ge=0)
    fat_goal: float = Field(ge=0)
    fiber_goal: float | None = Field(default=None, ge=0)
    dietary_restrictions: list[str] = Field(default_factory=list)
    meals_per_day: Literal[3, 4] = 3

    def to_domain(self) -> PlanPreferences:
        """Convert to the domain preferences model."""
        return PlanPreferences(
            daily_calories=self.daily_calories,
            protein_goal=self.protein_goal,
            carbs_goal=self.carbs_goal,
            fat_goal=self.fat_goal,
            fiber_goal=self.fiber_goal,
            dietary_restrictions=list(self.dietary_restrictions),
            meals_per_day=self.meals_per_day,
        )


class GenerateMealPlanRequest(BaseModel):
    """Body of a meal plan generation request."""

    start_date: date
    end_date: date
    preferences: PreferencesPayload
