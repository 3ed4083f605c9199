"""Application configuration."""

import os
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")

LookupProfile = Literal["aggregate", "usda_only"]

_PROFILE_RESULT_LIMITS: dict[str, int] = {"aggregate": 10, "usda_only": 15}


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Every credential is optional: a missing one turns the matching lookup
    stage into a no-op instead of failing startup.
    """

    usda_api_key: str | None = None
    usda_base_url: str = "https://api.nal.usda.gov/fdc/v1"
    usda_page_size: int = 15
    edamam_app_id: str | None = None
    edamam_app_key: str | None = None
    edamam_base_url: str = "https://api.edamam.com/api/food-database/v2"
    edamam_category: str = "generic-foods"
    openai_api_key: str | None = None
    openai_model: str = "gpt-4o-mini"
    openai_temperature: float = 0.2
    lookup_profile: LookupProfile = "aggregate"
    result_limit: int | None = None
    edamam_threshold: int = 6
    normalize_queries: bool = True
    debug: bool = False
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    @property
    def has_usda(self) -> bool:
        """Whether a USDA FoodData Central key is configured."""
        return bool(self.usda_api_key)

    @property
    def has_edamam(self) -> bool:
        """Whether both Edamam credentials are configured."""
        return bool(self.edamam_app_id and self.edamam_app_key)

    @property
    def has_openai(self) -> bool:
        """Whether an OpenAI key is configured for the generative estimate."""
        return bool(self.openai_api_key)

    @property
    def effective_result_limit(self) -> int:
        """Configured result cap, or the lookup profile's default (10 or 15)."""
        if self.result_limit is not None:
            return self.result_limit
        return _PROFILE_RESULT_LIMITS[self.lookup_profile]
