"""Result type for generative calorie estimates."""

from collections.abc import Callable
from dataclasses import dataclass


class EstimationError(Exception):
    """Raised or carried when a generative estimate can't be used."""

    def __init__(self, reason: str, detail: str | None = None) -> None:
        message = reason if detail is None else f"{reason}: {detail}"
        super().__init__(message)
        self.reason = reason
        self.detail = detail


@dataclass(frozen=True)
class Estimation:
    """Either a usable kcal-per-100g value or the error that prevented one."""

    value: float | None = None
    error: EstimationError | None = None

    @classmethod
    def ok(cls, value: float) -> "Estimation":
        return cls(value=value)

    @classmethod
    def failed(cls, reason: str, detail: str | None = None) -> "Estimation":
        return cls(error=EstimationError(reason, detail))

    @property
    def is_ok(self) -> bool:
        return self.error is None and self.value is not None

    def unwrap_or_else(self, default: Callable[[], float]) -> float:
        """Return the value, or compute the default for any error."""
        if self.is_ok:
            return self.value  # type: ignore[return-value]
        return default()
