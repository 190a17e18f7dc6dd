from datetime import datetime, timedelta, timezone

import pytest
from clustermetrics.pipeline.decimation import decimate, decimation_indices
from helpers.series import column_lengths, make_series

START = datetime(2025, 3, 14, tzinfo=timezone.utc)


def minute_series(n):
    return make_series(
        (START + timedelta(minutes=i), float(i), i + 0.5, i * 2.0, -float(i))
        for i in range(n)
    )


class TestDecimationIndices:
    def test_within_budget_keeps_everything(self):
        assert decimation_indices(5, 10) == [0, 1, 2, 3, 4]
        assert decimation_indices(10, 10) == list(range(10))

    def test_uniform_stride(self):
        assert decimation_indices(10, 4) == [0, 2, 5, 7]

    @pytest.mark.parametrize("n,t", [(61, 60), (361, 72), (1441, 96), (721, 120), (91, 90), (10007, 97)])
    def test_exact_count_strictly_increasing(self, n, t):
        idx = decimation_indices(n, t)

        assert len(idx) == t
        assert idx[0] == 0
        assert all(b > a for a, b in zip(idx, idx[1:]))
        assert idx[-1] < n

    def test_rejects_non_positive_target(self):
        with pytest.raises(ValueError):
            decimation_indices(10, 0)


class TestDecimate:
    def test_on_budget_series_returned_unchanged(self):
        series = minute_series(96)

        assert decimate(series, 96) is series
        assert decimate(series, 200) is series

    def test_over_budget_is_subsequence(self):
        series = minute_series(1441)
        out = decimate(series, 96)

        assert len(out) == 96
        assert out.invariant_violation() is None
        positions = [series.timestamps.index(t) for t in out.timestamps]
        assert positions == sorted(set(positions))

    def test_channels_follow_their_timestamps(self):
        series = minute_series(500)
        out = decimate(series, 60)

        assert len(column_lengths(out)) == 1
        for t, ir, iw, tr, tw in zip(out.timestamps, *out.channels()):
            i = int((t - START).total_seconds() // 60)
            assert (ir, iw, tr, tw) == (float(i), i + 0.5, i * 2.0, -float(i))

    def test_idempotent(self):
        once = decimate(minute_series(721), 120)
        twice = decimate(once, 120)

        assert twice is once

    def test_empty_series(self):
        empty = minute_series(0)
        assert decimate(empty, 60) is empty
