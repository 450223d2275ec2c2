"""Application configuration."""

import os

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    edamam_app_id: str
    edamam_app_key: str
    edamam_base_url: str = "https://api.edamam.com"
    expiring_threshold_days: int = Field(default=3, ge=0)
    max_missing_ingredients: int = Field(default=3, ge=0)
    recipe_result_limit: int = Field(default=15, ge=1)
    max_search_queries: int = Field(default=6, ge=1)
    recipe_search_ttl_seconds: int = 3600
    default_fridge_days: int = Field(default=7, ge=0)
    default_freezer_days: int = Field(default=30, ge=0)
    default_shelf_days: int = Field(default=7, ge=0)
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )
