"""Cascading food lookup across providers with deduplication."""

import logging
from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass, field

from calorie_lookup.domain.foods import ExternalFoodRecord
from calorie_lookup.services.query import normalize_query

_logger = logging.getLogger(__name__)

StageFetch = Callable[[str], Awaitable[list[ExternalFoodRecord]]]
StagePredicate = Callable[[int], bool]


def always(count: int) -> bool:
    return True


def below(threshold: int) -> StagePredicate:
    """Run a stage while fewer than ``threshold`` unique records exist."""

    def predicate(count: int) -> bool:
        return count < threshold

    return predicate


def when_empty(count: int) -> bool:
    return count == 0


@dataclass(frozen=True)
class LookupStage:
    """A named step of the cascade and the condition under which it runs."""

    name: str
    fetch: StageFetch
    should_run: StagePredicate = always
    uses_normalized_query: bool = True


@dataclass
class RecordAggregator:
    """Order-preserving accumulator that drops duplicate records."""

    records: list[ExternalFoodRecord] = field(default_factory=list)
    _seen: set[tuple[str, int]] = field(default_factory=set)

    def __len__(self) -> int:
        return len(self.records)

    def add_all(self, candidates: Iterable[ExternalFoodRecord]) -> int:
        """Append unseen candidates and return how many were kept."""
        added = 0
        for record in candidates:
            if record.dedup_key in self._seen:
                continue
            self._seen.add(record.dedup_key)
            self.records.append(record)
            added += 1
        return added

    def result(self, limit: int | None) -> list[ExternalFoodRecord]:
        if limit is None:
            return list(self.records)
        return self.records[:limit]


def aggregate_records(
    batches: Iterable[Iterable[ExternalFoodRecord]], limit: int | None = None
) -> list[ExternalFoodRecord]:
    """Merge per-provider lists in priority order, deduplicated and capped."""
    aggregator = RecordAggregator()
    for batch in batches:
        aggregator.add_all(batch)
    return aggregator.result(limit)


@dataclass
class FoodLookupService:
    """Run the lookup stages for a query and aggregate their records."""

    stages: list[LookupStage]
    limit: int | None = 10
    normalize: bool = True
    debug: bool = False

    async def lookup(self, query: str) -> list[ExternalFoodRecord]:
        """Return deduplicated candidates for a free-text query."""
        raw_query = query.strip()
        provider_query = normalize_query(raw_query) if self.normalize else raw_query
        aggregator = RecordAggregator()
        for stage in self.stages:
            if not stage.should_run(len(aggregator)):
                if self.debug:
                    _logger.info(
                        "Lookup stage skipped: stage=%s count=%s",
                        stage.name,
                        len(aggregator),
                    )
                continue
            stage_query = provider_query if stage.uses_normalized_query else raw_query
            added = aggregator.add_all(await stage.fetch(stage_query))
            if self.debug:
                _logger.info(
                    "Lookup stage ran: stage=%s query=%s added=%s",
                    stage.name,
                    stage_query,
                    added,
                )
        return aggregator.result(self.limit)
