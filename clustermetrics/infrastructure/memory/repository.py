from __future__ import annotations

from typing import Dict, Mapping

from clustermetrics.core.errors import DataUnavailableError
from clustermetrics.domain.models import WindowDataset
from clustermetrics.domain.ranges import TimeRange
from clustermetrics.infrastructure.base import WindowStore, check_complete_set


class InMemoryWindowStore(WindowStore):
    """Process-local store; swapping the per-entity dict is the atomic publish."""

    def __init__(self) -> None:
        self._entities: Dict[str, Dict[TimeRange, WindowDataset]] = {}

    async def load(self, entity_id: str, time_range: TimeRange) -> WindowDataset:
        try:
            return self._entities[entity_id][time_range]
        except KeyError:
            raise DataUnavailableError(
                "no dataset generated for this entity and time range",
                entity_id=entity_id,
                time_range=time_range.value,
            ) from None

    async def replace_all(
        self, entity_id: str, datasets: Mapping[TimeRange, WindowDataset]
    ) -> None:
        check_complete_set(entity_id, datasets)
        self._entities[entity_id] = dict(datasets)

    def entities(self) -> list[str]:
        return sorted(self._entities)
