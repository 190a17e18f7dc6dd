from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from clustermetrics.core.errors import MetricsValidationError

from .ranges import Resolution, TimeRange

DEFAULT_TIME_RANGE = TimeRange.H24


class MetricsRequest(BaseModel):
    """Explicit request for one metrics series.

    Defaults:
        time_range: ``24h`` when the caller does not pick one.
        resolution: None, meaning the policy resolution is reported. A value
            here only relabels the response; the dataset and the point budget
            still follow the time range.
    """

    entity_id: str = Field(min_length=1)
    time_range: TimeRange = DEFAULT_TIME_RANGE
    resolution: Resolution | None = None

    model_config = ConfigDict(frozen=True)

    @classmethod
    def parse(
        cls,
        entity_id: str | None,
        time_range: str | TimeRange | None = None,
        resolution: str | Resolution | None = None,
    ) -> MetricsRequest:
        """Build a request from loosely typed caller input.

        Raises:
            MetricsValidationError: empty entity id, or a time range /
                resolution outside the enumerated set.
        """
        if not entity_id or not entity_id.strip():
            raise MetricsValidationError(
                "entityId is required", time_range=_raw(time_range)
            )
        entity_id = entity_id.strip()

        if time_range in (None, ""):
            parsed_range = DEFAULT_TIME_RANGE
        else:
            try:
                parsed_range = TimeRange(time_range)
            except ValueError:
                raise MetricsValidationError(
                    f"unsupported timeRange '{time_range}'",
                    entity_id=entity_id,
                    time_range=_raw(time_range),
                ) from None

        parsed_resolution: Resolution | None = None
        if resolution not in (None, ""):
            try:
                parsed_resolution = Resolution(resolution)
            except ValueError:
                raise MetricsValidationError(
                    f"unsupported resolution '{resolution}'",
                    entity_id=entity_id,
                    time_range=parsed_range.value,
                ) from None

        return cls(
            entity_id=entity_id,
            time_range=parsed_range,
            resolution=parsed_resolution,
        )


def _raw(value: str | TimeRange | None) -> str | None:
    if isinstance(value, TimeRange):
        return value.value
    return value
