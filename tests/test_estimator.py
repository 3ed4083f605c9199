"""Tests for the fallback estimator."""

import asyncio
import math

import pytest

from calorie_lookup.domain.estimation import Estimation, EstimationError
from calorie_lookup.services.estimator import (
    DEFAULT_KCAL,
    FallbackEstimator,
    heuristic_kcal,
    parse_estimate,
)
from tests.conftest import FakeCompletionClient


@pytest.mark.parametrize(
    ("query", "expected"),
    [
        ("caesar salad", 40),
        ("insalata mista", 40),
        ("green apple", 55),
        ("minestrone", 60),
        ("chicken soup", 60),
        ("grilled chicken breast", 160),
        ("pollo arrosto", 160),
        ("spaghetti carbonara", 150),
        ("brown rice", 150),
        ("salmone affumicato", 180),
        ("beef steak", 240),
        ("whole wheat bread", 260),
        ("cheddar", 330),
        ("ricotta", 330),
        ("chocolate cake", 380),
        ("mystery dish", DEFAULT_KCAL),
    ],
)
def test_heuristic_kcal_categories(query: str, expected: int) -> None:
    assert heuristic_kcal(query) == expected


def test_heuristic_kcal_is_case_insensitive() -> None:
    assert heuristic_kcal("GRILLED CHICKEN") == 160


@pytest.mark.parametrize(
    ("text", "expected"),
    [("165", 165.0), ("12,5", 12.5), ("About 89.7 kcal", 89.7), (" 240\n", 240.0)],
)
def test_parse_estimate_reads_numbers(text: str, expected: float) -> None:
    assert parse_estimate(text) == expected


def test_parse_estimate_returns_nan_without_number() -> None:
    assert math.isnan(parse_estimate("I don't know"))


def test_estimate_uses_model_reply() -> None:
    client = FakeCompletionClient(reply="172,6")
    estimator = FallbackEstimator(client=client, model="gpt-4o-mini")

    record = asyncio.run(estimator.estimate("  roast   duck "))

    assert record.name == "roast duck"
    assert record.kcal_per_100g == 173
    assert record.source == "ai"
    assert client.temperatures == [0.2]
    assert "roast   duck" in client.prompts[0]


def test_estimate_without_client_uses_heuristic() -> None:
    estimator = FallbackEstimator(client=None, model="gpt-4o-mini")

    record = asyncio.run(estimator.estimate("grilled chicken breast"))

    assert record.kcal_per_100g == 160
    assert record.source == "ai"


@pytest.mark.parametrize(
    "client",
    [
        FakeCompletionClient(error=RuntimeError("network down")),
        FakeCompletionClient(reply="unknown"),
        FakeCompletionClient(reply="-20"),
        FakeCompletionClient(reply="0"),
    ],
)
def test_estimate_falls_back_to_heuristic(client: FakeCompletionClient) -> None:
    estimator = FallbackEstimator(client=client, model="gpt-4o-mini")

    record = asyncio.run(estimator.estimate("chocolate cookie"))

    assert record.kcal_per_100g == 380


def test_ask_model_reports_error_variant() -> None:
    estimator = FallbackEstimator(
        client=FakeCompletionClient(reply="n/a"), model="gpt-4o-mini"
    )

    estimation = asyncio.run(estimator.ask_model("bread"))

    assert not estimation.is_ok
    assert isinstance(estimation.error, EstimationError)
    assert estimation.error.reason == "unusable completion"


def test_estimation_unwrap_or_else() -> None:
    assert Estimation.ok(12.0).unwrap_or_else(lambda: 99) == 12.0
    assert Estimation.failed("boom").unwrap_or_else(lambda: 99) == 99


def test_search_wraps_single_estimate() -> None:
    estimator = FallbackEstimator(client=None, model="gpt-4o-mini", source="fallback")

    records = asyncio.run(estimator.search("tomato soup"))

    assert len(records) == 1
    assert records[0].source == "fallback"
    assert records[0].kcal_per_100g == 40


def test_estimate_rounds_half_up() -> None:
    estimator = FallbackEstimator(
        client=FakeCompletionClient(reply="52,5"), model="gpt-4o-mini"
    )

    record = asyncio.run(estimator.estimate("apple"))

    assert record.kcal_per_100g == 53


def test_estimate_below_half_uses_heuristic() -> None:
    estimator = FallbackEstimator(
        client=FakeCompletionClient(reply="0,4"), model="gpt-4o-mini"
    )

    record = asyncio.run(estimator.estimate("green tea"))

    assert record.kcal_per_100g == DEFAULT_KCAL
    assert record.source == "ai"
