"""Food lookup domain models."""

import math
import re
from dataclasses import dataclass
from typing import Literal

FoodSource = Literal["usda", "edamam", "ai", "fallback"]

PROVIDER_KCAL_CEILING = 1000

_WHITESPACE = re.compile(r"\s+")


@dataclass(frozen=True)
class ExternalFoodRecord:
    """A candidate food with its energy density in kcal per 100 g."""

    name: str
    kcal_per_100g: int
    source: FoodSource

    @property
    def dedup_key(self) -> tuple[str, int]:
        """Key under which two records count as the same candidate."""
        return (self.name.lower(), self.kcal_per_100g)


def normalize_name(raw: object) -> str:
    """Collapse internal whitespace and trim a display name."""
    if not isinstance(raw, str):
        return ""
    return _WHITESPACE.sub(" ", raw).strip()


def to_number(raw: object) -> float:
    """Parse a number that may use a comma as decimal separator.

    Returns NaN when the value can't be read as a number.
    """
    if isinstance(raw, bool) or raw is None:
        return math.nan
    if isinstance(raw, int | float):
        return float(raw)
    try:
        return float(str(raw).strip().replace(",", "."))
    except ValueError:
        return math.nan


def round_kcal(value: float) -> int:
    """Round to the nearest integer with ties going up (52.5 -> 53)."""
    return math.floor(value + 0.5)


def provider_kcal(value: float) -> int | None:
    """Round a provider value, or return None when it fails the sanity bound.

    The bound is checked on the rounded value so no record ends up at 0 kcal.
    """
    if not math.isfinite(value):
        return None
    rounded = round_kcal(value)
    if 0 < rounded < PROVIDER_KCAL_CEILING:
        return rounded
    return None
