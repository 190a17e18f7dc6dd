from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Mapping

from clustermetrics.core.errors import DataUnavailableError
from clustermetrics.domain.models import WindowDataset
from clustermetrics.domain.ranges import TimeRange


class WindowStore(ABC):
    """Repository of per-(entity, time range) window datasets.

    Single writer, many readers: ``replace_all`` publishes a complete set for
    one entity in one step, and ``load`` never sees a half-written set.
    """

    @abstractmethod
    async def load(self, entity_id: str, time_range: TimeRange) -> WindowDataset:
        """Return the dataset or raise DataUnavailableError."""

    @abstractmethod
    async def replace_all(
        self, entity_id: str, datasets: Mapping[TimeRange, WindowDataset]
    ) -> None:
        """Atomically replace every dataset of ``entity_id``."""

    async def ping(self) -> bool:
        return True

    async def close(self) -> None:
        return None


def check_complete_set(
    entity_id: str, datasets: Mapping[TimeRange, WindowDataset]
) -> None:
    missing = [r.value for r in TimeRange if r not in datasets]
    if missing:
        raise ValueError(f"dataset set for {entity_id} is missing ranges {missing}")
    for time_range, dataset in datasets.items():
        if dataset.entity_id != entity_id or dataset.time_range is not time_range:
            raise ValueError(
                f"dataset for {dataset.entity_id}/{dataset.time_range.value} "
                f"filed under {entity_id}/{time_range.value}"
            )


def check_loaded(
    dataset: WindowDataset, entity_id: str, time_range: TimeRange
) -> WindowDataset:
    """Reject a stored dataset that cannot be served as-is."""
    problem = dataset.series.invariant_violation()
    if problem is None and dataset.time_range is not time_range:
        problem = f"artifact holds {dataset.time_range.value}"
    if problem is not None:
        raise DataUnavailableError(
            f"dataset is unreadable: {problem}",
            entity_id=entity_id,
            time_range=time_range.value,
        )
    return dataset
