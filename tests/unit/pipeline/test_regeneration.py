from datetime import time, timedelta

import pytest
from clustermetrics.core.errors import AggregationInvariantError
from clustermetrics.domain.models import Series
from clustermetrics.domain.ranges import TimeRange
from clustermetrics.infrastructure.memory.repository import InMemoryWindowStore
from clustermetrics.pipeline.regeneration import WindowRegenerator
from clustermetrics.pipeline.resolution import RESOLUTION_TABLE
from helpers.series import column_lengths


class TestMaterialize:
    @pytest.mark.parametrize(
        "time_range,points",
        [
            (TimeRange.H1, 61),
            (TimeRange.H6, 361),
            (TimeRange.H24, 1441),
            (TimeRange.D7, 168),
            (TimeRange.D30, 720),
            (TimeRange.D90, 91),
        ],
    )
    def test_window_sizes(self, full_datasets, time_range, points):
        assert len(full_datasets[time_range].series) == points

    def test_every_range_present_and_tagged(self, full_datasets, now):
        assert set(full_datasets) == set(TimeRange)
        for time_range, dataset in full_datasets.items():
            assert dataset.entity_id == "c1"
            assert dataset.time_range is time_range
            assert dataset.resolution is RESOLUTION_TABLE[time_range].resolution
            assert dataset.generated_at == now

    def test_windows_end_at_now(self, full_datasets, now):
        assert full_datasets[TimeRange.H1].series.end_time == now
        assert full_datasets[TimeRange.H1].series.start_time == now - timedelta(hours=1)
        assert full_datasets[TimeRange.D7].series.end_time == now.replace(minute=0)

    def test_series_are_well_formed(self, full_datasets):
        for dataset in full_datasets.values():
            assert dataset.series.invariant_violation() is None
            assert len(column_lengths(dataset.series)) == 1

    def test_daily_points_share_clock_of_now(self, full_datasets):
        daily = full_datasets[TimeRange.D90].series
        assert {ts.time() for ts in daily.timestamps} == {time(15, 37)}

    def test_short_history_leaves_long_ranges_partial(self, small_datasets):
        assert len(small_datasets[TimeRange.H24].series) == 1441
        assert len(small_datasets[TimeRange.D7].series) == 49
        assert len(small_datasets[TimeRange.D90].series) == 3

    def test_now_is_floored_to_minute(self, seeded_generator, now):
        regenerator = WindowRegenerator(InMemoryWindowStore(), seeded_generator, span_days=1)
        datasets = regenerator.materialize("c1", now=now + timedelta(seconds=59))

        assert datasets[TimeRange.H1].generated_at == now


class ExplodingGenerator:
    def generate(self, span_days, now=None):
        raise RuntimeError("generator crashed")


class EmptyGenerator:
    def generate(self, span_days, now=None):
        return Series()


class TestRegenerate:
    @pytest.mark.asyncio
    async def test_publishes_complete_set(self, seeded_generator, now):
        store = InMemoryWindowStore()
        regenerator = WindowRegenerator(store, seeded_generator, span_days=1)

        datasets = await regenerator.regenerate("c1", now=now)

        for time_range in TimeRange:
            assert await store.load("c1", time_range) is datasets[time_range]
        assert store.entities() == ["c1"]

    @pytest.mark.asyncio
    async def test_failed_generation_keeps_previous_set(self, small_datasets, now):
        store = InMemoryWindowStore()
        await store.replace_all("c1", small_datasets)

        with pytest.raises(RuntimeError):
            await WindowRegenerator(store, ExplodingGenerator()).regenerate("c1", now=now)

        for time_range in TimeRange:
            assert await store.load("c1", time_range) is small_datasets[time_range]

    @pytest.mark.asyncio
    async def test_empty_raw_input_aborts_before_publish(self, now):
        store = InMemoryWindowStore()

        with pytest.raises(AggregationInvariantError, match="hourly: input series is empty"):
            await WindowRegenerator(store, EmptyGenerator()).regenerate("c1", now=now)

        assert store.entities() == []
