"""Shared test fixtures."""

from dataclasses import dataclass, field

import pytest

from calorie_lookup.adapters.edamam_client import EdamamClient
from calorie_lookup.adapters.fdc_client import FdcClient
from calorie_lookup.config import Settings
from calorie_lookup.containers import AppContainer, build_lookup_service
from calorie_lookup.services.estimator import CompletionClient, FallbackEstimator
from calorie_lookup.services.providers import EdamamProvider, UsdaProvider


def usda_food(
    description: str,
    kcal: float,
    serving_size: float | None = None,
    serving_unit: str | None = None,
) -> dict[str, object]:
    """Build an FDC search hit with a single energy nutrient."""
    food: dict[str, object] = {
        "description": description,
        "foodNutrients": [
            {
                "nutrientId": 1008,
                "nutrientName": "Energy",
                "unitName": "KCAL",
                "value": kcal,
            }
        ],
    }
    if serving_size is not None:
        food["servingSize"] = serving_size
        food["servingSizeUnit"] = serving_unit
    return food


def edamam_hint(label: str, kcal: float) -> dict[str, object]:
    """Build an Edamam parser hint."""
    return {"food": {"label": label, "nutrients": {"ENERC_KCAL": kcal}}}


@dataclass
class FakeFdcClient(FdcClient):
    """Fake FDC client returning a fixed list of foods."""

    foods: list[dict[str, object]] = field(
        default_factory=lambda: [usda_food("Chicken, breast, grilled", 165)]
    )
    error: Exception | None = None
    queries: list[str] = field(default_factory=list)

    async def search_foods(self, query: str, page_size: int = 15) -> dict[str, object]:
        self.queries.append(query)
        if self.error is not None:
            raise self.error
        return {"foods": self.foods}


@dataclass
class FakeEdamamClient(EdamamClient):
    """Fake Edamam client returning a fixed list of hints."""

    hints: list[dict[str, object]] = field(
        default_factory=lambda: [edamam_hint("Chicken Breast", 120)]
    )
    error: Exception | None = None
    queries: list[str] = field(default_factory=list)

    async def parse(self, ingredient: str) -> dict[str, object]:
        self.queries.append(ingredient)
        if self.error is not None:
            raise self.error
        return {"hints": self.hints}


@dataclass
class FakeCompletionClient(CompletionClient):
    """Fake completion client that records prompts."""

    reply: str = "165"
    error: Exception | None = None
    prompts: list[str] = field(default_factory=list)
    temperatures: list[float] = field(default_factory=list)

    async def complete(self, *, model: str, prompt: str, temperature: float) -> str:
        self.prompts.append(prompt)
        self.temperatures.append(temperature)
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        usda_api_key="usda-key",
        edamam_app_id="edamam-id",
        edamam_app_key="edamam-key",
        openai_api_key="openai-key",
    )


@pytest.fixture
def fdc_client() -> FakeFdcClient:
    return FakeFdcClient()


@pytest.fixture
def edamam_client() -> FakeEdamamClient:
    return FakeEdamamClient()


@pytest.fixture
def completion_client() -> FakeCompletionClient:
    return FakeCompletionClient()


@pytest.fixture
def container(
    settings: Settings,
    fdc_client: FakeFdcClient,
    edamam_client: FakeEdamamClient,
    completion_client: FakeCompletionClient,
) -> AppContainer:
    lookup_service = build_lookup_service(
        settings,
        usda=UsdaProvider(fdc_client, page_size=settings.usda_page_size),
        edamam=EdamamProvider(edamam_client),
        estimator=FallbackEstimator(
            client=completion_client,
            model=settings.openai_model,
            temperature=settings.openai_temperature,
        ),
    )

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        lookup_service=lookup_service,
        close_resources=close_resources,
    )
