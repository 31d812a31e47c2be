"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, replace

from supabase import create_client

from meal_planner.adapters.fatsecret_client import HttpxFatSecretClient
from meal_planner.adapters.openai_ranking_client import OpenAIRankingClient
from meal_planner.adapters.supabase_plan_repository import SupabasePlanRepository
from meal_planner.adapters.supabase_user_repository import SupabaseUserRepository
from meal_planner.config import Settings
from meal_planner.domain.tuning import DEFAULT_TUNING
from meal_planner.services.assembler import DailyAssembler
from meal_planner.services.cache import InMemoryCache
from meal_planner.services.candidates import CandidateCollector
from meal_planner.services.generation import MealPlanGenerator
from meal_planner.services.ranking import LlmRanker, PassthroughRanker, Ranker
from meal_planner.services.recipes import FatSecretRecipeSource
from meal_planner.services.users import UserService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    user_service: UserService
    meal_plan_generator: MealPlanGenerator
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    user_service = UserService(SupabaseUserRepository(supabase_client))
    plan_repository = SupabasePlanRepository(supabase_client)
    tuning = replace(DEFAULT_TUNING, search_limit=resolved_settings.recipe_search_limit)

    fatsecret_client = HttpxFatSecretClient.create(
        client_id=resolved_settings.fatsecret_client_id,
        client_secret=resolved_settings.fatsecret_client_secret,
        auth_url=resolved_settings.fatsecret_auth_url,
        api_url=resolved_settings.fatsecret_api_url,
        token_cache=InMemoryCache(),
        timeout_seconds=resolved_settings.fatsecret_timeout_seconds,
    )
    recipe_source = FatSecretRecipeSource(
        client=fatsecret_client, debug=resolved_settings.debug
    )
    ranker: Ranker
    if resolved_settings.ai_ranking_enabled:
        ranker = LlmRanker(
            client=OpenAIRankingClient.create(
                api_key=resolved_settings.openai_api_key,
                timeout_seconds=resolved_settings.openai_timeout_seconds,
            ),
            model=resolved_settings.openai_model,
            reasoning_effort=resolved_settings.openai_reasoning_effort,
            store=resolved_settings.openai_store,
        )
    else:
        ranker = PassthroughRanker()

    generator = MealPlanGenerator(
        user_service=user_service,
        collector=CandidateCollector(source=recipe_source, tuning=tuning),
        ranker=ranker,
        assembler=DailyAssembler(repository=plan_repository, tuning=tuning),
        repository=plan_repository,
        tuning=tuning,
    )

    async def close_resources() -> None:
        await fatsecret_client.close()

    return AppContainer(
        settings=resolved_settings,
        user_service=user_service,
        meal_plan_generator=generator,
        close_resources=close_resources,
    )
