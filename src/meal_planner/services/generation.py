"""Meal plan generation orchestration."""

import asyncio
import logging
from dataclasses import dataclass
from datetime import date

from meal_planner.domain.plans import (
    Candidate,
    GenerationResult,
    GenerationSummary,
    MealTarget,
    PlanPreferences,
)
from meal_planner.domain.tuning import DEFAULT_TUNING, PlannerTuning
from meal_planner.services.assembler import DailyAssembler
from meal_planner.services.candidates import CandidateCollector
from meal_planner.services.plans import PlanRepository
from meal_planner.services.ranking import Ranker
from meal_planner.services.targets import compute_meal_targets, meal_types_for
from meal_planner.services.users import UserService

_logger = logging.getLogger(__name__)


class UserNotFoundError(LookupError):
    """Raised when the requesting user does not exist."""


class InvalidDateRangeError(ValueError):
    """Raised when the end date precedes the start date."""


class NoMealsGeneratedError(RuntimeError):
    """Raised when a run produces no meal plan items."""

    def __init__(self, candidate_counts: dict[str, int]) -> None:
        super().__init__("No meals could be generated for the requested range")
        self.candidate_counts = candidate_counts


@dataclass
class MealPlanGenerator:
    """Builds a meal plan from targets, recipe search and ranking."""

    user_service: UserService
    collector: CandidateCollector
    ranker: Ranker
    assembler: DailyAssembler
    repository: PlanRepository
    tuning: PlannerTuning = DEFAULT_TUNING

    async def generate(
        self,
        user_identifier: str,
        start_date: date,
        end_date: date,
        preferences: PlanPreferences,
    ) -> GenerationResult:
        """Generate and persist a meal plan for the date range."""
        user = self.user_service.find_user(user_identifier)
        if user is None:
            raise UserNotFoundError(user_identifier)
        if end_date < start_date:
            raise InvalidDateRangeError(
                f"end_date {end_date} is before start_date {start_date}"
            )

        meal_types = meal_types_for(preferences.meals_per_day)
        targets = compute_meal_targets(preferences, self.tuning.meal_shares)
        pool_list = await asyncio.gather(
            *(
                self._build_pool(targets[meal_type], preferences)
                for meal_type in meal_types
            )
        )
        pools = dict(zip(meal_types, pool_list, strict=True))
        candidate_counts = {
            meal_type: len(pool) for meal_type, pool in pools.items()
        }

        assembly = self.assembler.assemble(
            start_date=start_date,
            end_date=end_date,
            pools=pools,
            meal_types=meal_types,
            daily_calorie_target=preferences.daily_calories,
        )
        if not assembly.items:
            _logger.error(
                "No meals generated: user_id=%s candidates=%s",
                user.id,
                candidate_counts,
            )
            raise NoMealsGeneratedError(candidate_counts)

        meal_plan = self.repository.upsert_plan(
            user_id=user.id,
            start_date=start_date,
            end_date=end_date,
            items=assembly.items,
        )
        days = max(assembly.days_planned, 1)
        summary = GenerationSummary(
            total_meals_generated=len(assembly.items),
            days_planned=assembly.days_planned,
            average_daily_calories=round(sum(assembly.daily_calories.values()) / days),
            meals_per_day=preferences.meals_per_day,
        )
        _logger.info(
            "Generated meal plan: user_id=%s plan_id=%s items=%s days=%s",
            user.id,
            meal_plan.id,
            summary.total_meals_generated,
            summary.days_planned,
        )
        return GenerationResult(meal_plan=meal_plan, summary=summary)

    async def _build_pool(
        self, target: MealTarget, preferences: PlanPreferences
    ) -> list[Candidate]:
        candidates = await self.collector.collect(
            target, preferences.dietary_restrictions
        )
        if len(candidates) <= 1:
            return candidates
        return await self.ranker.rank(target.meal_type, candidates, preferences)
