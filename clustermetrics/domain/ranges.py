"""Enumerations shared by every stage of the pipeline."""

from __future__ import annotations

from datetime import timedelta
from enum import Enum


class TimeRange(str, Enum):
    """Requested historical span. Ordered by span length, not lexically."""

    H1 = "1h"
    H6 = "6h"
    H24 = "24h"
    D7 = "7d"
    D30 = "30d"
    D90 = "90d"

    @property
    def span(self) -> timedelta:
        return _SPANS[self]

    def __lt__(self, other):  # type: ignore[override]
        if not isinstance(other, TimeRange):
            return NotImplemented
        return self.span < other.span

    def __le__(self, other):  # type: ignore[override]
        if not isinstance(other, TimeRange):
            return NotImplemented
        return self.span <= other.span

    def __gt__(self, other):  # type: ignore[override]
        if not isinstance(other, TimeRange):
            return NotImplemented
        return self.span > other.span

    def __ge__(self, other):  # type: ignore[override]
        if not isinstance(other, TimeRange):
            return NotImplemented
        return self.span >= other.span


_SPANS = {
    TimeRange.H1: timedelta(hours=1),
    TimeRange.H6: timedelta(hours=6),
    TimeRange.H24: timedelta(hours=24),
    TimeRange.D7: timedelta(days=7),
    TimeRange.D30: timedelta(days=30),
    TimeRange.D90: timedelta(days=90),
}


class Resolution(str, Enum):
    """Nominal distance between consecutive returned points."""

    MIN_1 = "1min"
    MIN_5 = "5min"
    MIN_15 = "15min"
    HOUR_1 = "1h"
    HOUR_6 = "6h"
    DAY_1 = "1d"

    @property
    def interval(self) -> timedelta:
        return _INTERVALS[self]


_INTERVALS = {
    Resolution.MIN_1: timedelta(minutes=1),
    Resolution.MIN_5: timedelta(minutes=5),
    Resolution.MIN_15: timedelta(minutes=15),
    Resolution.HOUR_1: timedelta(hours=1),
    Resolution.HOUR_6: timedelta(hours=6),
    Resolution.DAY_1: timedelta(days=1),
}


class AggregationLevel(str, Enum):
    """Granularity a window dataset is cut from."""

    RAW = "raw"
    HOURLY = "hourly"
    DAILY = "daily"

    @property
    def artifact_prefix(self) -> str:
        """Prefix of the consolidated file name, e.g. ``hourly-aggregated``."""
        if self is AggregationLevel.RAW:
            return "raw-metrics"
        return f"{self.value}-aggregated"
