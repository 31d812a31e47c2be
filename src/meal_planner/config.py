"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    openai_api_key: str
    openai_model: str = "gpt-5-nano"
    openai_reasoning_effort: str | None = "low"
    openai_store: bool = False
    openai_timeout_seconds: float = 8.0
    ai_ranking_enabled: bool = True
    fatsecret_client_id: str
    fatsecret_client_secret: str
    fatsecret_auth_url: str = "https://oauth.fatsecret.com/connect/token"
    fatsecret_api_url: str = "https://platform.fatsecret.com/rest/server.api"
    fatsecret_timeout_seconds: float = 5.0
    recipe_search_limit: int = 10
    debug: bool = False
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )
