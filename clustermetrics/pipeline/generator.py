"""Synthetic per-minute telemetry with a day/night and weekday/weekend shape.

Stands in for a real telemetry ingester: one sample per minute, each channel
drawn uniformly inside a band that scales with a smooth activity envelope.
"""

from __future__ import annotations

import math
import random
from datetime import datetime, timezone
from typing import Iterator, NamedTuple

from clustermetrics.core.logger import get_logger
from clustermetrics.domain.models import ChannelPair, Sample, Series

from .bucketing import enumerate_minutes

logger = get_logger("clustermetrics.generator")

MINUTES_PER_DAY = 1440


class ChannelRange(NamedTuple):
    min: float
    max: float


CHANNEL_RANGES: dict[str, ChannelRange] = {
    "iops.read": ChannelRange(5_000, 70_000),
    "iops.write": ChannelRange(100, 2_000),
    "throughput.read": ChannelRange(10, 200),
    "throughput.write": ChannelRange(100, 2_000),
}


def hour_activity(hour: int) -> float:
    """Day/night envelope: highest around midday, lowest before dawn."""
    return max(0.1, min(1.0, 0.3 + 0.7 * math.sin((hour - 6) * math.pi / 12)))


def weekend_multiplier(ts: datetime) -> float:
    return 0.8 if ts.weekday() >= 5 else 1.0


class SampleGenerator:
    def __init__(self, rng: random.Random | None = None):
        self.rng = rng or random.Random()

    def activity(self, ts: datetime) -> float:
        minute_noise = self.rng.uniform(0.8, 1.2)
        return hour_activity(ts.hour) * minute_noise * weekend_multiplier(ts)

    def _draw(self, channel: str, activity: float) -> float:
        band = CHANNEL_RANGES[channel]
        return round(self.rng.uniform(band.min * activity, band.max * activity), 1)

    def sample_at(self, ts: datetime) -> Sample:
        activity = self.activity(ts)
        return Sample(
            timestamp=ts,
            iops=ChannelPair(
                read=self._draw("iops.read", activity),
                write=self._draw("iops.write", activity),
            ),
            throughput=ChannelPair(
                read=self._draw("throughput.read", activity),
                write=self._draw("throughput.write", activity),
            ),
        )

    def iter_samples(
        self, span_days: int = 90, now: datetime | None = None
    ) -> Iterator[Sample]:
        """Yield ``span_days * 1440`` chronological samples ending at ``now``.

        ``now`` is floored to the minute; the last sample sits exactly there.
        """
        if span_days <= 0:
            raise ValueError("span_days must be positive")
        now = now or datetime.now(timezone.utc)
        for ts in enumerate_minutes(now, span_days * MINUTES_PER_DAY):
            yield self.sample_at(ts)

    def generate(self, span_days: int = 90, now: datetime | None = None) -> Series:
        series = Series.from_samples(self.iter_samples(span_days, now))
        logger.info(
            "raw_samples_generated",
            extra={
                "points": len(series),
                "span_days": span_days,
                "start": series.start_time.isoformat(),
                "end": series.end_time.isoformat(),
            },
        )
        return series
