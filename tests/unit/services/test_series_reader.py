from datetime import datetime, timedelta, timezone

import pytest
from clustermetrics.domain.models import WindowDataset
from clustermetrics.domain.ranges import Resolution, TimeRange
from clustermetrics.services.series_reader import SeriesReader
from helpers.series import make_series


class SingleDatasetStore:
    def __init__(self, dataset):
        self.dataset = dataset
        self.calls = []

    async def load(self, entity_id, time_range):
        self.calls.append((entity_id, time_range))
        return self.dataset


def dataset_with(points, time_range=TimeRange.H24):
    start = datetime(2025, 1, 1, tzinfo=timezone.utc)
    series = make_series(
        (start + timedelta(minutes=i), float(i), 0.0, 0.0, 0.0) for i in range(points)
    )
    return WindowDataset(
        entity_id="c1",
        time_range=time_range,
        resolution=Resolution.MIN_15,
        series=series,
    )


@pytest.mark.asyncio
async def test_within_budget_passes_through():
    dataset = dataset_with(96)
    store = SingleDatasetStore(dataset)

    series = await SeriesReader(store).load("c1", TimeRange.H24)

    assert series is dataset.series
    assert store.calls == [("c1", TimeRange.H24)]


@pytest.mark.asyncio
async def test_over_budget_is_decimated_to_policy_target():
    store = SingleDatasetStore(dataset_with(1441))

    series = await SeriesReader(store).load("c1", TimeRange.H24)

    assert len(series) == 96
    assert series.timestamps[0] == store.dataset.series.timestamps[0]


@pytest.mark.asyncio
async def test_target_follows_requested_range():
    store = SingleDatasetStore(dataset_with(200, TimeRange.H1))

    series = await SeriesReader(store).load("c1", TimeRange.H1)

    assert len(series) == 60
