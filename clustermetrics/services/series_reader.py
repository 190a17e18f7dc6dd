from __future__ import annotations

from clustermetrics.core.logger import get_logger
from clustermetrics.core.metrics import METRICS_DECIMATED_TOTAL
from clustermetrics.domain.models import Series
from clustermetrics.domain.ranges import TimeRange
from clustermetrics.infrastructure.base import WindowStore
from clustermetrics.pipeline.decimation import decimate
from clustermetrics.pipeline.resolution import resolve

logger = get_logger("clustermetrics.reader")


class SeriesReader:
    """Loads a window dataset and holds it to the policy's point budget.

    Window datasets are pre-sized at regeneration, so decimation here is a
    safety net: most reads pass straight through.
    """

    def __init__(self, store: WindowStore):
        self.store = store

    async def load(self, entity_id: str, time_range: TimeRange) -> Series:
        dataset = await self.store.load(entity_id, time_range)
        target = resolve(time_range).target_points
        series = dataset.series
        if len(series) > target:
            METRICS_DECIMATED_TOTAL.labels(time_range=time_range.value).inc()
            logger.debug(
                "series_decimated",
                extra={
                    "entity_id": entity_id,
                    "time_range": time_range.value,
                    "from_points": len(series),
                    "to_points": target,
                },
            )
        return decimate(series, target)
