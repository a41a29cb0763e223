"""Environment-based library settings. Read-only; no business logic."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from environment variables and an optional .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = Field(default="mmr-rerank", description="Library/service name used in logs")
    environment: Literal["development", "staging", "production"] = Field(
        default="development", description="Runtime environment"
    )
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: str = Field(default="INFO", description="Log level name")

    # MMR defaults (see config/mmr for the validated aggregator model)
    mmr_lambda: float = Field(default=0.7, ge=0.0, le=1.0, description="Relevance/diversity trade-off")
    mmr_max_results: int | None = Field(default=None, ge=0, description="Max results; None means unbounded")
    mmr_min_score: float | None = Field(default=None, description="Drop matches scoring below this")
    mmr_force_embedding_generation: bool = Field(
        default=False, description="Always embed contents from scratch"
    )
    mmr_strategy: str | None = Field(
        default=None, description="generate|use_existing|hybrid; None selects automatically"
    )

    # Embedding provider profile (see config/embedding/static.json)
    embedding_profile: str = Field(default="active", description="Profile name or 'active'")


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()
