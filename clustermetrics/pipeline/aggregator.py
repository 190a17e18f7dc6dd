"""Bucket averaging: raw -> hourly -> daily.

The chain is fixed. Hourly is only ever derived from raw samples and daily
only from hourly points, so ``to_daily`` rejects input that is not
hour-aligned.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable, Iterable

from clustermetrics.core.errors import AggregationInvariantError
from clustermetrics.domain.models import ChannelColumns, Series

from .bucketing import daily_stamp, day_bucket, hour_bucket, is_hour_aligned

BucketFn = Callable[[datetime], datetime]


def _mean(values: Iterable[float], count: int) -> float:
    return round(sum(values) / count, 1)


def _check_input(series: Series, stage: str) -> None:
    if len(series) == 0:
        raise AggregationInvariantError(f"{stage}: input series is empty")
    problem = series.invariant_violation()
    if problem:
        raise AggregationInvariantError(f"{stage}: {problem}")


def _group(series: Series, bucket: BucketFn) -> list[tuple[datetime, int, int]]:
    """Contiguous ``(bucket, start, stop)`` index runs of a chronological series."""
    runs: list[tuple[datetime, int, int]] = []
    current: datetime | None = None
    start = 0
    for i, ts in enumerate(series.timestamps):
        b = bucket(ts)
        if b != current:
            if current is not None:
                runs.append((current, start, i))
            current, start = b, i
    if current is not None:
        runs.append((current, start, len(series)))
    return runs


def _average(series: Series, runs: list[tuple[datetime, int, int]], stamp: BucketFn) -> Series:
    ir, iw, tr, tw = series.channels()
    out = Series(iops=ChannelColumns(), throughput=ChannelColumns())
    for bucket, lo, hi in runs:
        n = hi - lo
        out.timestamps.append(stamp(bucket))
        out.iops.read.append(_mean(ir[lo:hi], n))
        out.iops.write.append(_mean(iw[lo:hi], n))
        out.throughput.read.append(_mean(tr[lo:hi], n))
        out.throughput.write.append(_mean(tw[lo:hi], n))
    return out


def to_hourly(raw: Series) -> Series:
    """One averaged point per non-empty hour, stamped at the top of the hour."""
    _check_input(raw, "hourly")
    return _average(raw, _group(raw, hour_bucket), lambda b: b)


def to_daily(hourly: Series, now: datetime | None = None) -> Series:
    """One averaged point per calendar day present in ``hourly``.

    Every daily point carries the wall-clock hour:minute of ``now`` rather
    than midnight, so all points of a 90 day chart share the same time of day.
    """
    _check_input(hourly, "daily")
    misaligned = next((ts for ts in hourly.timestamps if not is_hour_aligned(ts)), None)
    if misaligned is not None:
        raise AggregationInvariantError(
            f"daily: expected hourly input, got timestamp {misaligned.isoformat()}"
        )
    clock = now or datetime.now(timezone.utc)
    return _average(hourly, _group(hourly, day_bucket), lambda b: daily_stamp(b, clock))
