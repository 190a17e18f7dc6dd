import pytest
from clustermetrics.domain.ranges import AggregationLevel, Resolution, TimeRange
from clustermetrics.pipeline.resolution import (
    DEFAULT_PLAN,
    RESOLUTION_TABLE,
    ranges_for_level,
    resolve,
)

EXPECTED = {
    "1h": ("1min", 60, "raw"),
    "6h": ("5min", 72, "raw"),
    "24h": ("15min", 96, "raw"),
    "7d": ("1h", 168, "hourly"),
    "30d": ("6h", 120, "hourly"),
    "90d": ("1d", 90, "daily"),
}


class TestResolve:
    @pytest.mark.parametrize("time_range,expected", sorted(EXPECTED.items()))
    def test_table_rows(self, time_range, expected):
        resolution, target, level = expected
        plan = resolve(TimeRange(time_range))

        assert plan.resolution == Resolution(resolution)
        assert plan.target_points == target
        assert plan.source_level == AggregationLevel(level)

    @pytest.mark.parametrize("time_range", sorted(EXPECTED))
    def test_accepts_plain_strings(self, time_range):
        assert resolve(time_range) == RESOLUTION_TABLE[TimeRange(time_range)]

    @pytest.mark.parametrize("value", ["", "2h", "1y", None, 42, "24H"])
    def test_unknown_input_falls_back_to_24h(self, value):
        plan = resolve(value)

        assert plan is DEFAULT_PLAN
        assert plan.time_range is TimeRange.H24
        assert plan.resolution is Resolution.MIN_15
        assert plan.target_points == 96

    def test_table_covers_every_range(self):
        assert set(RESOLUTION_TABLE) == set(TimeRange)

    def test_budgets_stay_chartable(self):
        assert all(60 <= p.target_points <= 168 for p in RESOLUTION_TABLE.values())


def test_ranges_for_level_are_ordered_by_span():
    assert ranges_for_level(AggregationLevel.RAW) == [
        TimeRange.H1,
        TimeRange.H6,
        TimeRange.H24,
    ]
    assert ranges_for_level(AggregationLevel.HOURLY) == [TimeRange.D7, TimeRange.D30]
    assert ranges_for_level(AggregationLevel.DAILY) == [TimeRange.D90]
