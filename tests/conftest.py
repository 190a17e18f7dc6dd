import random
from datetime import datetime, timezone

import pytest
from clustermetrics.infrastructure.memory.repository import InMemoryWindowStore
from clustermetrics.pipeline.generator import SampleGenerator
from clustermetrics.pipeline.regeneration import WindowRegenerator

# A Friday afternoon; 90 days back crosses plenty of weekends.
NOW = datetime(2025, 3, 14, 15, 37, tzinfo=timezone.utc)


@pytest.fixture(scope="session")
def now() -> datetime:
    return NOW


@pytest.fixture(scope="session")
def full_datasets():
    """Complete 90-day window set for entity c1, built once per session."""
    regenerator = WindowRegenerator(
        InMemoryWindowStore(), SampleGenerator(random.Random(7)), span_days=90
    )
    return regenerator.materialize("c1", now=NOW)


@pytest.fixture
def small_datasets():
    """Window set built from two days of raw data (fast, partial long ranges)."""
    regenerator = WindowRegenerator(
        InMemoryWindowStore(), SampleGenerator(random.Random(3)), span_days=2
    )
    return regenerator.materialize("c1", now=NOW)


@pytest.fixture
def seeded_generator() -> SampleGenerator:
    return SampleGenerator(random.Random(42))
