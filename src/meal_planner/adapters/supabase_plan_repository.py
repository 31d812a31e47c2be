"""Supabase repository for generated recipes and meal plans."""

from dataclasses import asdict, dataclass
from datetime import UTC, date, datetime
from uuid import UUID

from supabase import Client

from meal_planner.domain.plans import MealPlan, MealPlanItem
from meal_planner.domain.recipes import ConvertedRecipe
from meal_planner.services.plans import PlanRepository


@dataclass
class SupabasePlanRepository(PlanRepository):
    """Supabase implementation for meal plan persistence."""

    client: Client

    def save_recipe(self, recipe: ConvertedRecipe) -> UUID:
        """Insert a recipe row and return its id."""
        nutrition = recipe.nutrition
        response = (
            self.client.table("recipes")
            .insert(
                {
                    "title": recipe.title,
                    "description": recipe.description,
                    "image_url": recipe.image_url,
                    "total_time": recipe.total_time,
                    "servings": recipe.servings,
                    "estimated_cost_per_serving": recipe.estimated_cost_per_serving,
                    "ingredients": [asdict(item) for item in recipe.ingredients],
                    "instructions": [asdict(step) for step in recipe.instructions],
                    "calories": nutrition.calories,
                    "protein": nutrition.protein,
                    "carbs": nutrition.carbs,
                    "fat": nutrition.fat,
                    "fiber": nutrition.fiber,
                    "sugar": nutrition.sugar,
                    "sodium": nutrition.sodium,
                    "dietary_tags": list(recipe.dietary_tags),
                    "source": recipe.source,
                    "source_ref": recipe.source_ref,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create recipe")
        return UUID(response.data[0]["id"])

    def upsert_plan(
        self,
        user_id: UUID,
        start_date: date,
        end_date: date,
        items: list[MealPlanItem],
    ) -> MealPlan:
        """Create the plan for (user, start date) or replace an existing one."""
        existing = (
            self.client.table("meal_plans")
            .select("id")
            .eq("user_id", str(user_id))
            .eq("start_date", start_date.isoformat())
            .limit(1)
            .execute()
        )
        if existing.data:
            plan_id = UUID(existing.data[0]["id"])
            self.client.table("meal_plan_items").delete().eq(
                "meal_plan_id", str(plan_id)
            ).execute()
            self.client.table("meal_plans").update(
                {
                    "end_date": end_date.isoformat(),
                    "updated_at": datetime.now(tz=UTC).isoformat(),
                }
            ).eq("id", str(plan_id)).execute()
        else:
            created = (
                self.client.table("meal_plans")
                .insert(
                    {
                        "user_id": str(user_id),
                        "start_date": start_date.isoformat(),
                        "end_date": end_date.isoformat(),
                    }
                )
                .execute()
            )
            if not created.data:
                raise RuntimeError("Failed to create meal plan")
            plan_id = UUID(created.data[0]["id"])

        if items:
            self.client.table("meal_plan_items").insert(
                [
                    {
                        "meal_plan_id": str(plan_id),
                        "recipe_id": str(item.recipe_id),
                        "date": item.date.isoformat(),
                        "meal_type": item.meal_type,
                    }
                    for item in items
                ]
            ).execute()

        return MealPlan(
            id=plan_id,
            user_id=user_id,
            start_date=start_date,
            end_date=end_date,
            items=list(items),
        )
