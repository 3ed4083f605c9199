"""Last-resort calorie estimate from an LLM or keyword heuristics."""

import logging
import math
import re
from dataclasses import dataclass
from typing import Protocol

from calorie_lookup.domain.estimation import Estimation
from calorie_lookup.domain.foods import (
    ExternalFoodRecord,
    FoodSource,
    normalize_name,
    round_kcal,
)

DEFAULT_KCAL = 180

# First match wins; free text often hits several categories ("chicken soup").
_KEYWORD_CATEGORIES: tuple[tuple[str, re.Pattern[str], int], ...] = (
    (
        "vegetables",
        re.compile(
            r"\b(salad|insalat|ensalad|vegetable|veggie|verdur|lettuce|lattug"
            r"|lechug|spinach|spinac|espinac|broccoli|brocoli|zucchin|tomato"
            r"|pomodor|cucumber|cetriol|pepino|carrot|carot|zanahori)",
            re.IGNORECASE,
        ),
        40,
    ),
    (
        "fruit",
        re.compile(
            r"\b(fruit|frutt|fruta|apple|mela\b|manzana|banana|platano|orange"
            r"|arancia|naranja|pear|pera\b|berr|fragol|fresa|grape|uva|melon)",
            re.IGNORECASE,
        ),
        55,
    ),
    (
        "soup",
        re.compile(r"\b(soup|zupp|minestr|sopa|broth|brodo|caldo)", re.IGNORECASE),
        60,
    ),
    (
        "poultry",
        re.compile(
            r"\b(chicken|pollo|turkey|tacchin|pavo|duck|anatra)", re.IGNORECASE
        ),
        160,
    ),
    (
        "grain",
        re.compile(
            r"\b(pasta|spaghetti|penne|noodle|rice\b|riso|arroz|oat|avena|quinoa"
            r"|couscous|cereal)",
            re.IGNORECASE,
        ),
        150,
    ),
    (
        "fish",
        re.compile(
            r"\b(fish|pesce|pescado|salmon|tuna|tonno|atun|cod\b|merluzz"
            r"|bacalao|shrimp|gamber|tilapia)",
            re.IGNORECASE,
        ),
        180,
    ),
    (
        "red_meat",
        re.compile(
            r"\b(beef|manzo|steak|bistecc|pork|maiale|cerdo|lamb|agnello|cordero"
            r"|veal|vitello|ternera|carne|burger|hamburg)",
            re.IGNORECASE,
        ),
        240,
    ),
    (
        "bread",
        re.compile(r"\b(bread|pane\b|pan\b|toast|bagel|baguette)", re.IGNORECASE),
        260,
    ),
    (
        "cheese",
        re.compile(
            r"\b(cheese|formagg|queso|mozzarell|ricott|parmigian|parmesan|cheddar)",
            re.IGNORECASE,
        ),
        330,
    ),
    (
        "dessert",
        re.compile(
            r"\b(dessert|dolc|postre|cake|torta|pastel|cookie|biscott|galleta"
            r"|chocolate|cioccolat|brownie|pastry)",
            re.IGNORECASE,
        ),
        380,
    ),
)

_NUMBER = re.compile(r"-?\d+(?:[.,]\d+)?")

_logger = logging.getLogger(__name__)


class CompletionClient(Protocol):
    """Interface for a text completion backend."""

    async def complete(self, *, model: str, prompt: str, temperature: float) -> str:
        """Return the model's reply to a single user prompt."""


@dataclass
class FallbackEstimator:
    """Produce exactly one estimate for a query, never failing."""

    client: CompletionClient | None
    model: str
    temperature: float = 0.2
    source: FoodSource = "ai"

    async def estimate(self, query: str) -> ExternalFoodRecord:
        """Estimate kcal per 100 g, defaulting to the keyword heuristic."""
        estimation = await self.ask_model(query)
        if estimation.error is not None:
            _logger.info("Using keyword heuristic for %r: %s", query, estimation.error)
        kcal = estimation.unwrap_or_else(lambda: heuristic_kcal(query))
        return ExternalFoodRecord(
            name=normalize_name(query),
            kcal_per_100g=round_kcal(kcal),
            source=self.source,
        )

    async def search(self, query: str) -> list[ExternalFoodRecord]:
        """Provider-shaped wrapper returning the single estimate."""
        return [await self.estimate(query)]

    async def ask_model(self, query: str) -> Estimation:
        """Ask the completion backend for a bare kcal-per-100g number."""
        if self.client is None:
            return Estimation.failed("no completion client configured")
        try:
            reply = await self.client.complete(
                model=self.model,
                prompt=_build_prompt(query),
                temperature=self.temperature,
            )
        except Exception as exc:
            _logger.warning("Calorie estimate request failed: %s", exc)
            return Estimation.failed("completion request failed", str(exc))
        value = parse_estimate(reply)
        if not math.isfinite(value) or round_kcal(value) <= 0:
            return Estimation.failed("unusable completion", repr(reply))
        return Estimation.ok(value)


def heuristic_kcal(query: str) -> int:
    """Pick a representative kcal per 100 g from keywords in the query."""
    for _category, pattern, kcal in _KEYWORD_CATEGORIES:
        if pattern.search(query):
            return kcal
    return DEFAULT_KCAL


def parse_estimate(text: str) -> float:
    """Read the first number in a reply, accepting a comma decimal separator."""
    match = _NUMBER.search(text or "")
    if match is None:
        return math.nan
    return float(match.group(0).replace(",", "."))


def _build_prompt(query: str) -> str:
    return (
        "Estimate the energy density of the following food in kcal per 100 g. "
        "Answer with a single number only, no units and no text.\n"
        f"Food: {query}"
    )
