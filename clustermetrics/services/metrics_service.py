import time

from clustermetrics.core.errors import DataUnavailableError, MetricsError
from clustermetrics.core.logger import get_logger
from clustermetrics.core.metrics import (
    METRICS_REQUEST_LATENCY_SECONDS,
    METRICS_REQUESTS_TOTAL,
)
from clustermetrics.domain.models import MetricsSeries, Series, SeriesMetadata
from clustermetrics.domain.ranges import Resolution, TimeRange
from clustermetrics.domain.requests import DEFAULT_TIME_RANGE, MetricsRequest
from clustermetrics.pipeline.resolution import resolve

from .series_reader import SeriesReader

logger = get_logger("clustermetrics.service")

AGGREGATION_METHOD = "avg"
INVALID_RANGE_LABEL = "invalid"


def range_label(time_range: str | TimeRange | None) -> str:
    """Bounded ``time_range`` metric label for raw caller input."""
    if time_range in (None, ""):
        return DEFAULT_TIME_RANGE.value
    try:
        return TimeRange(time_range).value
    except ValueError:
        return INVALID_RANGE_LABEL


class MetricsService:
    """Entry point of the read path: request in, MetricsSeries out.

    Raises MetricsValidationError for malformed input (before any I/O) and
    DataUnavailableError when the entity's windows have not been generated.
    Nothing is retried here. Every call, rejected ones included, is counted
    by outcome and timed.
    """

    def __init__(self, reader: SeriesReader):
        self.reader = reader

    async def get_metrics(
        self,
        entity_id: str | None,
        time_range: str | TimeRange | None = None,
        resolution: str | Resolution | None = None,
    ) -> MetricsSeries:
        started = time.perf_counter()
        label = range_label(time_range)
        outcome = "ok"
        try:
            request = MetricsRequest.parse(entity_id, time_range, resolution)
            return await self.fetch(request)
        except MetricsError as exc:
            outcome = type(exc).__name__
            logger.info(
                "metrics_request_rejected",
                extra={
                    "entity_id": exc.entity_id,
                    "time_range": exc.time_range,
                    "reason": exc.message,
                },
            )
            raise
        except Exception:
            outcome = "error"
            raise
        finally:
            METRICS_REQUESTS_TOTAL.labels(time_range=label, outcome=outcome).inc()
            METRICS_REQUEST_LATENCY_SECONDS.observe(time.perf_counter() - started)

    async def fetch(self, request: MetricsRequest) -> MetricsSeries:
        """Serve an already validated request."""
        # the override only relabels; data always follows the time range
        resolution = request.resolution or resolve(request.time_range).resolution
        series = await self.reader.load(request.entity_id, request.time_range)
        return MetricsSeries(
            entity_id=request.entity_id,
            time_range=request.time_range,
            resolution=resolution,
            series=series,
            metadata=self._metadata(request, resolution, series),
        )

    @staticmethod
    def _metadata(
        request: MetricsRequest, resolution: Resolution, series: Series
    ) -> SeriesMetadata:
        if len(series) == 0:
            raise DataUnavailableError(
                "dataset holds no points",
                entity_id=request.entity_id,
                time_range=request.time_range.value,
            )
        return SeriesMetadata(
            total_points=len(series),
            start_time=series.timestamps[0],
            end_time=series.timestamps[-1],
            interval_seconds=int(resolution.interval.total_seconds()),
            aggregation_method=AGGREGATION_METHOD,
        )
