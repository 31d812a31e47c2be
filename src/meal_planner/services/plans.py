"""Meal plan persistence interface."""

from datetime import date
from typing import Protocol
from uuid import UUID

from meal_planner.domain.plans import MealPlan, MealPlanItem
from meal_planner.domain.recipes import ConvertedRecipe


class PlanRepository(Protocol):
    """Persistence interface for generated recipes and meal plans."""

    def save_recipe(self, recipe: ConvertedRecipe) -> UUID:
        """Store a recipe and return its id."""

    def upsert_plan(
        self,
        user_id: UUID,
        start_date: date,
        end_date: date,
        items: list[MealPlanItem],
    ) -> MealPlan:
        """Create the plan for (user, start date) or replace its items."""
