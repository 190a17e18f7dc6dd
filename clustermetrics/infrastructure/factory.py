from __future__ import annotations

import redis.asyncio as redis

from clustermetrics.core.config import Settings, settings as default_settings

from .base import WindowStore
from .filesystem.repository import FileWindowStore
from .memory.repository import InMemoryWindowStore
from .redis.repository import RedisWindowStore


def build_window_store(settings: Settings | None = None) -> WindowStore:
    cfg = settings or default_settings
    backend = cfg.metrics_store_backend
    if backend == "filesystem":
        return FileWindowStore(cfg.metrics_data_dir, cfg.metrics_retained_versions)
    if backend == "redis":
        client = redis.Redis(
            host=cfg.redis_host,
            port=cfg.redis_port,
            db=cfg.redis_db,
            decode_responses=True,
        )
        return RedisWindowStore(client, cfg.redis_key_prefix)
    if backend == "memory":
        return InMemoryWindowStore()
    raise ValueError(f"Unknown metrics store backend: {backend}")
