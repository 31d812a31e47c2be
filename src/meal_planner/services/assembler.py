"""Day-by-day assignment of candidates to meal slots."""

import logging
import random
from dataclasses import dataclass, field, replace
from datetime import date, timedelta

from meal_planner.domain.plans import Candidate, MealPlanItem
from meal_planner.domain.recipes import ConvertedRecipe
from meal_planner.domain.tuning import DEFAULT_TUNING, PlannerTuning
from meal_planner.services.plans import PlanRepository

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AssemblyResult:
    """Items produced by the assembler with per-day calorie totals."""

    items: list[MealPlanItem]
    daily_calories: dict[date, float]

    @property
    def days_planned(self) -> int:
        """Return the number of days walked."""
        return len(self.daily_calories)


def pick_meal(pool: list[Candidate], rng: random.Random, top_n: int = 3) -> Candidate:
    """Pick uniformly at random among the first ``top_n`` candidates."""
    if not pool:
        raise ValueError("Cannot pick a meal from an empty pool")
    return rng.choice(pool[: min(top_n, len(pool))])


def scale_recipe_for_plan(candidate: Candidate) -> ConvertedRecipe:
    """Return the recipe as it should be stored for this candidate."""
    recipe = candidate.recipe
    servings = candidate.serving_multiplier
    title = recipe.title
    if servings > 1:
        title = f"{title} ({servings} servings)"
    return replace(
        recipe,
        title=title,
        ingredients=[
            replace(ingredient, amount=ingredient.amount * servings)
            for ingredient in recipe.ingredients
        ],
        instructions=list(recipe.instructions),
        nutrition=candidate.adjusted_nutrition,
        servings=servings,
    )


def iter_dates(start_date: date, end_date: date) -> list[date]:
    """Return each date from start to end inclusive."""
    days = (end_date - start_date).days
    return [start_date + timedelta(days=offset) for offset in range(days + 1)]


@dataclass
class DailyAssembler:
    """Walks a date range and assigns one recipe per meal type per day."""

    repository: PlanRepository
    rng: random.Random = field(default_factory=random.Random)
    tuning: PlannerTuning = DEFAULT_TUNING

    def assemble(
        self,
        start_date: date,
        end_date: date,
        pools: dict[str, list[Candidate]],
        meal_types: list[str],
        daily_calorie_target: float,
    ) -> AssemblyResult:
        """Assign meals for every date and return the created items."""
        assigned: set[tuple[date, str]] = set()
        items: list[MealPlanItem] = []
        daily_calories: dict[date, float] = {}

        for day in iter_dates(start_date, end_date):
            day_total = 0.0
            for meal_type in meal_types:
                key = (day, meal_type)
                if key in assigned:
                    continue
                pool = pools.get(meal_type) or []
                if not pool:
                    _logger.warning(
                        "No candidates to assign: date=%s meal_type=%s", day, meal_type
                    )
                    continue
                candidate = pick_meal(pool, self.rng, self.tuning.top_n)
                try:
                    recipe_id = self.repository.save_recipe(
                        scale_recipe_for_plan(candidate)
                    )
                except Exception:
                    _logger.exception(
                        "Failed to store recipe, leaving slot empty: "
                        "date=%s meal_type=%s",
                        day,
                        meal_type,
                    )
                    continue
                assigned.add(key)
                items.append(
                    MealPlanItem(recipe_id=recipe_id, date=day, meal_type=meal_type)
                )
                day_total += candidate.adjusted_nutrition.calories

            daily_calories[day] = day_total
            self._check_variance(day, day_total, daily_calorie_target)

        return AssemblyResult(items=items, daily_calories=daily_calories)

    def _check_variance(self, day: date, total: float, target: float) -> None:
        if target <= 0:
            return
        variance = abs(total - target) / target
        if variance > self.tuning.daily_variance_threshold:
            _logger.warning(
                "Daily calories off target: date=%s total=%.0f target=%.0f "
                "variance=%.1f%%",
                day,
                total,
                target,
                variance * 100,
            )
