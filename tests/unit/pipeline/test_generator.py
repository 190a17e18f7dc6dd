import random
from datetime import timedelta
from statistics import mean

import pytest
from clustermetrics.pipeline.generator import (
    CHANNEL_RANGES,
    MINUTES_PER_DAY,
    SampleGenerator,
    hour_activity,
    weekend_multiplier,
)

# activity spans [0.1 * 0.8 * 0.8, 1.0 * 1.2 * 1.0]
MIN_ACTIVITY = 0.064
MAX_ACTIVITY = 1.2


class TestEnvelope:
    def test_hour_activity_peaks_at_midday(self):
        assert hour_activity(12) == pytest.approx(1.0)

    def test_hour_activity_clamped_at_night(self):
        assert hour_activity(0) == pytest.approx(0.1)
        assert all(0.1 <= hour_activity(h) <= 1.0 for h in range(24))

    def test_hour_activity_dawn_value(self):
        assert hour_activity(6) == pytest.approx(0.3)

    def test_weekend_multiplier(self, now):
        saturday = now + timedelta(days=1)
        assert weekend_multiplier(now) == 1.0
        assert weekend_multiplier(saturday) == 0.8
        assert weekend_multiplier(saturday + timedelta(days=1)) == 0.8


class TestGenerate:
    def test_sample_count_and_end(self, seeded_generator, now):
        series = seeded_generator.generate(3, now=now + timedelta(seconds=42))

        assert len(series) == 3 * MINUTES_PER_DAY
        assert series.end_time == now
        assert series.start_time == now - timedelta(minutes=3 * MINUTES_PER_DAY - 1)

    def test_strictly_chronological_one_minute_apart(self, seeded_generator, now):
        series = seeded_generator.generate(1, now=now)

        assert series.invariant_violation() is None
        steps = {b - a for a, b in zip(series.timestamps, series.timestamps[1:])}
        assert steps == {timedelta(minutes=1)}

    def test_values_within_channel_bands(self, seeded_generator, now):
        series = seeded_generator.generate(2, now=now)
        columns = dict(
            zip(
                ["iops.read", "iops.write", "throughput.read", "throughput.write"],
                series.channels(),
            )
        )

        for name, values in columns.items():
            band = CHANNEL_RANGES[name]
            assert min(values) >= band.min * MIN_ACTIVITY - 0.05
            assert max(values) <= band.max * MAX_ACTIVITY + 0.05
            assert all(round(v, 1) == v for v in values)

    def test_weekends_are_quieter(self, seeded_generator, now):
        # ends Friday 15:37; the week before covers Sat+Sun fully
        samples = seeded_generator.iter_samples(7, now=now)
        weekend, weekday = [], []
        for sample in samples:
            if 9 <= sample.timestamp.hour < 15:
                bucket = weekend if sample.timestamp.weekday() >= 5 else weekday
                bucket.append(sample.iops.read)

        assert mean(weekend) < mean(weekday)

    def test_rejects_non_positive_span(self, seeded_generator):
        with pytest.raises(ValueError):
            seeded_generator.generate(0)

    def test_generate_pivots_the_sample_stream(self, now):
        samples = list(SampleGenerator(random.Random(5)).iter_samples(1, now=now))
        series = SampleGenerator(random.Random(5)).generate(1, now=now)

        assert series.timestamps == [s.timestamp for s in samples]
        assert series.iops.write == [s.iops.write for s in samples]
        assert series.throughput.read == [s.throughput.read for s in samples]
