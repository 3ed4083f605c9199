"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from calorie_lookup.adapters.edamam_client import HttpxEdamamClient
from calorie_lookup.adapters.fdc_client import HttpxFdcClient
from calorie_lookup.adapters.openai_chat_client import OpenAIChatClient
from calorie_lookup.config import Settings
from calorie_lookup.services.estimator import FallbackEstimator
from calorie_lookup.services.lookup import (
    FoodLookupService,
    LookupStage,
    below,
    when_empty,
)
from calorie_lookup.services.providers import EdamamProvider, UsdaProvider


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    lookup_service: FoodLookupService
    close_resources: Callable[[], Awaitable[None]]


def build_stages(
    settings: Settings,
    usda: UsdaProvider,
    edamam: EdamamProvider,
    estimator: FallbackEstimator,
) -> list[LookupStage]:
    """Arrange providers into the cascade for the configured profile."""
    stages = [LookupStage(name="usda", fetch=usda.search)]
    if settings.lookup_profile == "aggregate":
        stages.append(
            LookupStage(
                name="edamam",
                fetch=edamam.search,
                should_run=below(settings.edamam_threshold),
            )
        )
    stages.append(
        LookupStage(
            name="fallback",
            fetch=estimator.search,
            should_run=when_empty,
            uses_normalized_query=False,
        )
    )
    return stages


def build_lookup_service(
    settings: Settings,
    usda: UsdaProvider,
    edamam: EdamamProvider,
    estimator: FallbackEstimator,
) -> FoodLookupService:
    """Create the lookup service for the configured profile."""
    return FoodLookupService(
        stages=build_stages(settings, usda, edamam, estimator),
        limit=settings.effective_result_limit,
        normalize=settings.normalize_queries,
        debug=settings.debug,
    )


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    fdc_client = None
    if resolved_settings.has_usda:
        fdc_client = HttpxFdcClient.create(
            api_key=resolved_settings.usda_api_key,
            base_url=resolved_settings.usda_base_url,
        )
    edamam_client = None
    if resolved_settings.has_edamam:
        edamam_client = HttpxEdamamClient.create(
            app_id=resolved_settings.edamam_app_id,
            app_key=resolved_settings.edamam_app_key,
            base_url=resolved_settings.edamam_base_url,
            category=resolved_settings.edamam_category,
        )
    openai_client = None
    if resolved_settings.has_openai:
        openai_client = OpenAIChatClient.create(resolved_settings.openai_api_key)

    estimate_source = (
        "fallback" if resolved_settings.lookup_profile == "usda_only" else "ai"
    )
    lookup_service = build_lookup_service(
        resolved_settings,
        usda=UsdaProvider(fdc_client, page_size=resolved_settings.usda_page_size),
        edamam=EdamamProvider(edamam_client),
        estimator=FallbackEstimator(
            client=openai_client,
            model=resolved_settings.openai_model,
            temperature=resolved_settings.openai_temperature,
            source=estimate_source,
        ),
    )

    async def close_resources() -> None:
        for client in (fdc_client, edamam_client, openai_client):
            if client is not None:
                await client.close()

    return AppContainer(
        settings=resolved_settings,
        lookup_service=lookup_service,
        close_resources=close_resources,
    )
