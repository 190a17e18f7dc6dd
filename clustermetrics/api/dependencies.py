from fastapi import Depends, Request

from clustermetrics.infrastructure.base import WindowStore
from clustermetrics.services.metrics_service import MetricsService
from clustermetrics.services.series_reader import SeriesReader


def get_store(request: Request) -> WindowStore:
    return request.app.state.store  # type: ignore[return-value]


def get_metrics_service(store: WindowStore = Depends(get_store)) -> MetricsService:
    return MetricsService(SeriesReader(store))
