"""Nutrition providers mapping external payloads to food records."""

import logging
import math
from dataclasses import dataclass
from typing import Protocol

from calorie_lookup.adapters.edamam_client import EdamamClient
from calorie_lookup.adapters.fdc_client import FdcClient
from calorie_lookup.domain.foods import (
    ExternalFoodRecord,
    normalize_name,
    provider_kcal,
    to_number,
)

_ENERGY_NUTRIENT_ID = 1008

# FDC reports branded serving sizes in grams as "GRM".
_GRAM_UNITS = frozenset({"g", "grm"})

_logger = logging.getLogger(__name__)


class FoodProvider(Protocol):
    """Interface for a provider stage in the lookup cascade."""

    async def search(self, query: str) -> list[ExternalFoodRecord]:
        """Return candidate records, or an empty list on any failure."""


@dataclass
class UsdaProvider(FoodProvider):
    """Provider backed by USDA FoodData Central search."""

    fdc_client: FdcClient | None
    page_size: int = 15

    async def search(self, query: str) -> list[ExternalFoodRecord]:
        """Search FDC and normalize energy values to kcal per 100 g."""
        if self.fdc_client is None:
            return []
        try:
            payload = await self.fdc_client.search_foods(query, page_size=self.page_size)
            records = parse_usda_foods(payload)
        except Exception as exc:
            _logger.warning(
                "USDA search failed (status=%s): %s",
                _status_code_from_exception(exc),
                exc,
            )
            return []
        return records[: self.page_size]


@dataclass
class EdamamProvider(FoodProvider):
    """Provider backed by the Edamam food-database parser."""

    edamam_client: EdamamClient | None

    async def search(self, query: str) -> list[ExternalFoodRecord]:
        """Search Edamam hints, already expressed per 100 g."""
        if self.edamam_client is None:
            return []
        try:
            payload = await self.edamam_client.parse(query)
            return parse_edamam_hints(payload)
        except Exception as exc:
            _logger.warning(
                "Edamam search failed (status=%s): %s",
                _status_code_from_exception(exc),
                exc,
            )
            return []


def parse_usda_foods(payload: dict[str, object]) -> list[ExternalFoodRecord]:
    """Map an FDC search payload to records tagged ``usda``."""
    foods = payload.get("foods")
    if not isinstance(foods, list):
        return []
    records: list[ExternalFoodRecord] = []
    for food in foods:
        if not isinstance(food, dict):
            continue
        name = normalize_name(
            food.get("description") or food.get("lowercaseDescription")
        )
        if not name:
            continue
        energy = _find_energy_nutrient(food.get("foodNutrients") or [])
        if energy is None:
            continue
        kcal = to_number(energy.get("value", energy.get("amount")))
        serving_size = to_number(food.get("servingSize"))
        serving_unit = str(food.get("servingSizeUnit") or "").lower()
        in_grams = serving_unit in _GRAM_UNITS
        if in_grams and math.isfinite(serving_size) and serving_size > 0:
            kcal = kcal / serving_size * 100
        kcal_per_100g = provider_kcal(kcal)
        if kcal_per_100g is None:
            continue
        records.append(
            ExternalFoodRecord(name=name, kcal_per_100g=kcal_per_100g, source="usda")
        )
    return records


def parse_edamam_hints(payload: dict[str, object]) -> list[ExternalFoodRecord]:
    """Map an Edamam parser payload to records tagged ``edamam``."""
    hints = payload.get("hints")
    if not isinstance(hints, list):
        return []
    records: list[ExternalFoodRecord] = []
    for hint in hints:
        food = hint.get("food") if isinstance(hint, dict) else None
        if not isinstance(food, dict):
            continue
        name = normalize_name(food.get("label"))
        nutrients = food.get("nutrients") or {}
        kcal_per_100g = provider_kcal(to_number(nutrients.get("ENERC_KCAL")))
        if not name or kcal_per_100g is None:
            continue
        records.append(
            ExternalFoodRecord(
                name=name, kcal_per_100g=kcal_per_100g, source="edamam"
            )
        )
    return records


def _find_energy_nutrient(nutrients: list[object]) -> dict[str, object] | None:
    """Pick the kcal energy entry, by nutrient id first and then by name."""
    entries = [nutrient for nutrient in nutrients if isinstance(nutrient, dict)]
    for nutrient in entries:
        nutrient_info = nutrient.get("nutrient") or {}
        nutrient_id = nutrient.get("nutrientId") or nutrient_info.get("id")
        if nutrient_id == _ENERGY_NUTRIENT_ID:
            return nutrient
    for nutrient in entries:
        nutrient_info = nutrient.get("nutrient") or {}
        name = str(nutrient.get("nutrientName") or nutrient_info.get("name") or "")
        unit = str(nutrient.get("unitName") or nutrient_info.get("unitName") or "")
        if "energy" in name.lower() and unit.lower() != "kj":
            return nutrient
    return None


def _status_code_from_exception(exc: Exception) -> str:
    """Extract HTTP status code from an exception, if available."""
    response = getattr(exc, "response", None)
    status_code = getattr(response, "status_code", None)
    if isinstance(status_code, int):
        return str(status_code)
    return "n/a"
