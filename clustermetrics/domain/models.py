from __future__ import annotations

from bisect import bisect_left, bisect_right
from datetime import datetime
from typing import Iterable, Sequence

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .ranges import Resolution, TimeRange


class ChannelPair(BaseModel):
    """Read/write values of one channel family at a single instant."""

    read: float
    write: float

    model_config = ConfigDict(frozen=True)


class Sample(BaseModel):
    """One point observation; the four numeric channels travel together."""

    timestamp: datetime
    iops: ChannelPair
    throughput: ChannelPair

    model_config = ConfigDict(frozen=True)


class ChannelColumns(BaseModel):
    read: list[float] = Field(default_factory=list)
    write: list[float] = Field(default_factory=list)


class Series(BaseModel):
    """Columnar time series.

    Invariants (see ``invariant_violation``):
        - every column has the same length as ``timestamps``
        - timestamps are strictly increasing (so also unique)

    The model does not enforce these on construction; the aggregator and the
    window stores check them at their boundaries and raise their own errors.
    """

    timestamps: list[datetime] = Field(default_factory=list)
    iops: ChannelColumns = Field(default_factory=ChannelColumns)
    throughput: ChannelColumns = Field(default_factory=ChannelColumns)

    def __len__(self) -> int:
        return len(self.timestamps)

    @property
    def start_time(self) -> datetime | None:
        return self.timestamps[0] if self.timestamps else None

    @property
    def end_time(self) -> datetime | None:
        return self.timestamps[-1] if self.timestamps else None

    def channels(self) -> tuple[list[float], list[float], list[float], list[float]]:
        return (
            self.iops.read,
            self.iops.write,
            self.throughput.read,
            self.throughput.write,
        )

    def invariant_violation(self) -> str | None:
        """Return a description of the first broken invariant, or None."""
        n = len(self.timestamps)
        names = ("iops.read", "iops.write", "throughput.read", "throughput.write")
        for name, column in zip(names, self.channels()):
            if len(column) != n:
                return f"{name} has {len(column)} values for {n} timestamps"
        for i in range(1, n):
            if self.timestamps[i] <= self.timestamps[i - 1]:
                return f"timestamp at index {i} is not after index {i - 1}"
        return None

    def take(self, indices: Sequence[int]) -> Series:
        """Gather every column at exactly the given indices."""
        ir, iw, tr, tw = self.channels()
        return Series(
            timestamps=[self.timestamps[i] for i in indices],
            iops=ChannelColumns(read=[ir[i] for i in indices], write=[iw[i] for i in indices]),
            throughput=ChannelColumns(
                read=[tr[i] for i in indices], write=[tw[i] for i in indices]
            ),
        )

    def between(self, start: datetime, end: datetime) -> Series:
        """Inclusive ``[start, end]`` slice; relies on chronological order."""
        lo = bisect_left(self.timestamps, start)
        hi = bisect_right(self.timestamps, end)
        return self.take(range(lo, hi))

    @classmethod
    def from_samples(cls, samples: Iterable[Sample]) -> Series:
        """Pivot chronological samples into columns."""
        series = cls()
        for s in samples:
            series.timestamps.append(s.timestamp)
            series.iops.read.append(s.iops.read)
            series.iops.write.append(s.iops.write)
            series.throughput.read.append(s.throughput.read)
            series.throughput.write.append(s.throughput.write)
        return series


class WindowDataset(BaseModel):
    """Persisted, pre-materialized series for one (entity, time range).

    Serialized with the aliases (``cluster_id``, ``data``) so the stored
    document keeps the consolidated-file layout the dashboard already reads.
    """

    entity_id: str = Field(alias="cluster_id")
    time_range: TimeRange
    resolution: Resolution
    generated_at: datetime | None = None
    series: Series = Field(alias="data")

    model_config = ConfigDict(populate_by_name=True)


class SeriesMetadata(BaseModel):
    total_points: int
    start_time: datetime
    end_time: datetime
    interval_seconds: int
    aggregation_method: str = "avg"

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class MetricsSeries(BaseModel):
    """Response value; rebuilt per request, never persisted."""

    entity_id: str
    time_range: TimeRange
    resolution: Resolution
    series: Series
    metadata: SeriesMetadata

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
