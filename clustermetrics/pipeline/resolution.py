"""Static time range -> (resolution, point budget, source level) table.

This table is the only place these numbers live; the window stores, the
reader and the service all look them up here.
"""

from __future__ import annotations

from typing import Any, NamedTuple

from clustermetrics.domain.ranges import AggregationLevel, Resolution, TimeRange


class ResolutionPlan(NamedTuple):
    time_range: TimeRange
    resolution: Resolution
    target_points: int
    source_level: AggregationLevel


RESOLUTION_TABLE: dict[TimeRange, ResolutionPlan] = {
    # keep 60-168 points per chart for smooth rendering
    TimeRange.H1: ResolutionPlan(TimeRange.H1, Resolution.MIN_1, 60, AggregationLevel.RAW),
    TimeRange.H6: ResolutionPlan(TimeRange.H6, Resolution.MIN_5, 72, AggregationLevel.RAW),
    TimeRange.H24: ResolutionPlan(TimeRange.H24, Resolution.MIN_15, 96, AggregationLevel.RAW),
    TimeRange.D7: ResolutionPlan(TimeRange.D7, Resolution.HOUR_1, 168, AggregationLevel.HOURLY),
    TimeRange.D30: ResolutionPlan(TimeRange.D30, Resolution.HOUR_6, 120, AggregationLevel.HOURLY),
    TimeRange.D90: ResolutionPlan(TimeRange.D90, Resolution.DAY_1, 90, AggregationLevel.DAILY),
}

DEFAULT_PLAN = RESOLUTION_TABLE[TimeRange.H24]


def resolve(time_range: Any) -> ResolutionPlan:
    """Look up the plan for a time range; never raises.

    Accepts a TimeRange or its string value. Anything else (None, typos,
    other types) falls back to the 24h plan.
    """
    if isinstance(time_range, TimeRange):
        return RESOLUTION_TABLE[time_range]
    try:
        return RESOLUTION_TABLE[TimeRange(time_range)]
    except ValueError:
        return DEFAULT_PLAN


def ranges_for_level(level: AggregationLevel) -> list[TimeRange]:
    return sorted(r for r, plan in RESOLUTION_TABLE.items() if plan.source_level is level)
