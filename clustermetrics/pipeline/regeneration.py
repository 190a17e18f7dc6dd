"""Batch materialization of the six window datasets for an entity.

One pass generates raw samples, derives hourly from raw and daily from
hourly, cuts each time range out of its source level, and hands the full set
to the store in a single ``replace_all``. Every dataset of an entity therefore
comes from the same raw generation.
"""

from __future__ import annotations

import time
from datetime import datetime, timezone
from typing import Dict

from clustermetrics.core.logger import get_logger
from clustermetrics.core.metrics import (
    REGENERATION_DURATION_SECONDS,
    REGENERATION_POINTS_TOTAL,
    REGENERATION_RUNS_TOTAL,
)
from clustermetrics.domain.models import Series, WindowDataset
from clustermetrics.domain.ranges import AggregationLevel, TimeRange
from clustermetrics.infrastructure.base import WindowStore
from clustermetrics.utils.concurrency import run_blocking

from . import aggregator
from .bucketing import floor_to_minute
from .generator import SampleGenerator
from .resolution import ranges_for_level, resolve

logger = get_logger("clustermetrics.regeneration")


def build_datasets(
    entity_id: str,
    levels: Dict[AggregationLevel, Series],
    now: datetime,
) -> Dict[TimeRange, WindowDataset]:
    """Cut every time range out of its source level.

    Raw and hourly ranges keep the inclusive window ``[now - span, now]``;
    the 90 day range takes the whole daily series.
    """
    datasets: Dict[TimeRange, WindowDataset] = {}
    for level, source in levels.items():
        for time_range in ranges_for_level(level):
            if level is AggregationLevel.DAILY:
                series = source
            else:
                series = source.between(now - time_range.span, now)
            datasets[time_range] = WindowDataset(
                entity_id=entity_id,
                time_range=time_range,
                resolution=resolve(time_range).resolution,
                generated_at=now,
                series=series,
            )
    return datasets


class WindowRegenerator:
    def __init__(
        self,
        store: WindowStore,
        generator: SampleGenerator | None = None,
        span_days: int = 90,
    ):
        self.store = store
        self.generator = generator or SampleGenerator()
        self.span_days = span_days

    def materialize(
        self, entity_id: str, now: datetime | None = None
    ) -> Dict[TimeRange, WindowDataset]:
        """Build the dataset set in memory; nothing is published."""
        now = floor_to_minute(now or datetime.now(timezone.utc))
        raw = self.generator.generate(self.span_days, now=now)
        hourly = aggregator.to_hourly(raw)
        daily = aggregator.to_daily(hourly, now=now)
        logger.info(
            "levels_derived",
            extra={
                "entity_id": entity_id,
                "raw_points": len(raw),
                "hourly_points": len(hourly),
                "daily_points": len(daily),
            },
        )
        levels = {
            AggregationLevel.RAW: raw,
            AggregationLevel.HOURLY: hourly,
            AggregationLevel.DAILY: daily,
        }
        return build_datasets(entity_id, levels, now)

    async def regenerate(
        self, entity_id: str, now: datetime | None = None
    ) -> Dict[TimeRange, WindowDataset]:
        """Regenerate and publish every window of ``entity_id``.

        All-or-nothing: any failure before ``replace_all`` leaves the
        previously published set untouched.
        """
        started = time.perf_counter()
        try:
            datasets = await run_blocking(self.materialize, entity_id, now)
            await self.store.replace_all(entity_id, datasets)
        except Exception:
            REGENERATION_RUNS_TOTAL.labels(outcome="failed").inc()
            logger.exception("regeneration_failed", extra={"entity_id": entity_id})
            raise
        duration = time.perf_counter() - started
        REGENERATION_DURATION_SECONDS.observe(duration)
        REGENERATION_RUNS_TOTAL.labels(outcome="ok").inc()
        for time_range, dataset in datasets.items():
            REGENERATION_POINTS_TOTAL.labels(time_range=time_range.value).inc(
                len(dataset.series)
            )
        logger.info(
            "regeneration_complete",
            extra={
                "entity_id": entity_id,
                "duration_s": round(duration, 3),
                "points": {r.value: len(d.series) for r, d in datasets.items()},
            },
        )
        return datasets
