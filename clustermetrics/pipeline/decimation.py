from __future__ import annotations

from clustermetrics.domain.models import Series


def decimation_indices(current_points: int, target_points: int) -> list[int]:
    """Uniform-stride selection of ``target_points`` out of ``current_points``.

    Picks ``floor(i * current / target)`` for ``i < target``; integer
    arithmetic keeps the choice exact for any length. The result is strictly
    increasing whenever ``current > target``.
    """
    if target_points <= 0:
        raise ValueError("target_points must be positive")
    if current_points <= target_points:
        return list(range(current_points))
    return [
        min((i * current_points) // target_points, current_points - 1)
        for i in range(target_points)
    ]


def decimate(series: Series, target_points: int) -> Series:
    """Bound ``series`` to ``target_points`` by selecting a subsequence.

    Series already within budget are returned as-is (same object), which
    makes repeated decimation with the same budget a no-op.
    """
    if len(series) <= target_points:
        return series
    return series.take(decimation_indices(len(series), target_points))
