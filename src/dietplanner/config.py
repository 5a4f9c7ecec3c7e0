"""Application configuration using pydantic-settings."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # USDA SR26 data (directory holding NUTR_DEF.txt, FOOD_DES.txt, NUT_DATA.txt)
    usda_data_dir: str = "."

    # Search
    step_size: int = Field(default=5, ge=1)  # grams added/removed per trial move
    max_rounds: int | None = Field(default=None, ge=1)  # None = run to a local optimum
    verify_consistency: bool = False  # recompute nutrient totals after every move
    consistency_tolerance: float = 0.5

    # Redis (Celery broker and result backend)
    redis_url: str = "redis://localhost:6379/0"

    # Application
    environment: str = "development"
    log_level: str = "INFO"
    log_file: str | None = None  # also write logs to this file
    allowed_origins: str = "http://localhost:3000,http://localhost:8000"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
