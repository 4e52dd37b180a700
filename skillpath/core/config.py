"""Application configuration from environment."""
from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """App settings loaded from env / .env."""

    app_name: str = "SkillPath"
    debug: bool = False

    # Database
    database_url: str = "sqlite+aiosqlite:///./skillpath.db"
    seed_on_startup: bool = True

    # JWT bearer tokens
    secret_key: str = "change-me-in-production-use-env"
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24 * 7  # 7 days

    # OpenAI-compatible content generation
    llm_base_url: str = "https://api.openai.com/v1"
    llm_api_key: str = ""
    llm_model: str = "gpt-4o-mini"
    llm_temperature: float = 0.7
    llm_timeout_seconds: float = 60.0

    leaderboard_default_limit: int = 10

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


@lru_cache
def get_settings() -> Settings:
    return Settings()
