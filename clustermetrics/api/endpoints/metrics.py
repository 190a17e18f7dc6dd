from fastapi import APIRouter, Depends, Query

from clustermetrics.domain.models import MetricsSeries
from clustermetrics.services.metrics_service import MetricsService

from ..dependencies import get_metrics_service

router = APIRouter(prefix="/api")


@router.get(
    "/metrics",
    response_model=MetricsSeries,
    summary="Time series metrics for one entity",
    response_description="Bounded series with metadata",
)
async def get_metrics(
    entity_id: str | None = Query(None, alias="entityId"),
    cluster_id: str | None = Query(None, alias="clusterId"),
    time_range: str | None = Query(None, alias="timeRange"),
    resolution: str | None = Query(None),
    svc: MetricsService = Depends(get_metrics_service),
):
    """Resolution is picked from the time range unless one is given; a given
    resolution only relabels the response."""
    return await svc.get_metrics(entity_id or cluster_id, time_range, resolution)
