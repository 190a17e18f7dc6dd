"""Error taxonomy of the metrics pipeline.

MetricsValidationError and DataUnavailableError are caller-facing and carry
the entity/range context needed to render a message. AggregationInvariantError
is internal to batch regeneration; it aborts the run for that entity before
anything is published.
"""

from __future__ import annotations


class MetricsError(Exception):
    """Base class for every error raised by the pipeline."""

    def __init__(
        self,
        message: str,
        entity_id: str | None = None,
        time_range: str | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.entity_id = entity_id
        self.time_range = time_range

    def to_dict(self) -> dict:
        return {
            "error": self.message,
            "entityId": self.entity_id,
            "timeRange": self.time_range,
        }


class MetricsValidationError(MetricsError):
    """The request itself is malformed (missing entity, unknown enum value)."""


class DataUnavailableError(MetricsError):
    """Well-formed request, but no usable dataset has been generated for it."""


class AggregationInvariantError(MetricsError):
    """Aggregator input was empty, misaligned or out of order."""
