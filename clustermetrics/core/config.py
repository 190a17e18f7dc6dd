from typing import Literal

from shared.config import BaseServiceConfig


class Settings(BaseServiceConfig):
    # Window store
    metrics_store_backend: Literal["filesystem", "redis", "memory"] = "filesystem"
    metrics_data_dir: str = "data"
    metrics_retained_versions: int = 1  # published versions kept besides current

    # Redis (used when metrics_store_backend == "redis")
    redis_host: str = "redis"
    redis_port: int = 6379
    redis_db: int = 0
    redis_key_prefix: str = "metrics:windows"

    # Batch regeneration
    generation_span_days: int = 90
    clusters_file: str = "data/clusters.json"

    otel_service_name: str = "clustermetrics"


settings = Settings()
