"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from meal_planner.api.models import GenerateMealPlanRequest
from meal_planner.app_logging import configure_logging
from meal_planner.containers import AppContainer
from meal_planner.domain.plans import GenerationResult, MealPlan
from meal_planner.services.generation import (
    InvalidDateRangeError,
    NoMealsGeneratedError,
    UserNotFoundError,
)


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/users/{user_id}/meal-plans/generate", response_model=None)
    async def generate_meal_plan(
        user_id: str, payload: GenerateMealPlanRequest, request: Request
    ) -> dict[str, object] | JSONResponse:
        """Generate a meal plan for the user and date range."""
        state_container: AppContainer = request.app.state.container
        try:
            result = await state_container.meal_plan_generator.generate(
                user_id,
                payload.start_date,
                payload.end_date,
                payload.preferences.to_domain(),
            )
        except UserNotFoundError:
            return JSONResponse(
                status_code=status.HTTP_404_NOT_FOUND,
                content={"error": "User not found"},
            )
        except InvalidDateRangeError as exc:
            return JSONResponse(
                status_code=status.HTTP_400_BAD_REQUEST,
                content={"error": str(exc)},
            )
        except NoMealsGeneratedError as exc:
            logger.warning("Meal plan generation produced no meals: user=%s", user_id)
            return JSONResponse(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                content={
                    "error": "No meals generated",
                    "candidate_counts": exc.candidate_counts,
                },
            )
        return _serialize_result(result)

    return app


def _serialize_result(result: GenerationResult) -> dict[str, object]:
    summary = result.summary
    return {
        "meal_plan": _serialize_plan(result.meal_plan),
        "summary": {
            "total_meals_generated": summary.total_meals_generated,
            "days_planned": summary.days_planned,
            "average_daily_calories": summary.average_daily_calories,
            "meals_per_day": summary.meals_per_day,
        },
    }


def _serialize_plan(plan: MealPlan) -> dict[str, object]:
    return {
        "id": str(plan.id),
        "user_id": str(plan.user_id),
        "start_date": plan.start_date.isoformat(),
        "end_date": plan.end_date.isoformat(),
        "items": [
            {
                "recipe_id": str(item.recipe_id),
                "date": item.date.isoformat(),
                "meal_type": item.meal_type,
            }
            for item in plan.items
        ],
    }
