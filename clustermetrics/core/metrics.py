from shared.metrics import get_counter, get_histogram

SERVICE = "clustermetrics"

# Request path
METRICS_REQUESTS_TOTAL = get_counter(
    "requests_total",
    "Metrics series requests by outcome.",
    SERVICE,
    labelnames=("time_range", "outcome"),
)
METRICS_REQUEST_LATENCY_SECONDS = get_histogram(
    "request_latency_seconds",
    "Latency of building a metrics series response.",
    SERVICE,
    buckets=[0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0],
)
METRICS_DECIMATED_TOTAL = get_counter(
    "decimated_total",
    "Series that exceeded their point budget and were decimated.",
    SERVICE,
    labelnames=("time_range",),
)

# Batch regeneration
REGENERATION_RUNS_TOTAL = get_counter(
    "regeneration_runs_total",
    "Window regeneration runs by outcome.",
    SERVICE,
    labelnames=("outcome",),
)
REGENERATION_DURATION_SECONDS = get_histogram(
    "regeneration_duration_seconds",
    "Wall time of a full regeneration pass for one entity.",
    SERVICE,
    buckets=[0.5, 1.0, 2.5, 5.0, 10.0, 30.0, 60.0],
)
REGENERATION_POINTS_TOTAL = get_counter(
    "regeneration_points_total",
    "Points published to window datasets.",
    SERVICE,
    labelnames=("time_range",),
)
