from __future__ import annotations

from typing import Mapping

from pydantic import ValidationError
from redis.asyncio import Redis

from clustermetrics.core.errors import DataUnavailableError
from clustermetrics.core.logger import get_logger
from clustermetrics.domain.models import WindowDataset
from clustermetrics.domain.ranges import TimeRange
from clustermetrics.infrastructure.base import (
    WindowStore,
    check_complete_set,
    check_loaded,
)

from . import constants

logger = get_logger("clustermetrics.store.redis")


class RedisWindowStore(WindowStore):
    """Redis-backed window datasets.

    Notes:
        - Each entity is a single hash keyed by time range value.
        - ``replace_all`` runs DEL + HSET in one MULTI/EXEC transaction, so
          readers see the previous set or the new one, never a mix.
    """

    def __init__(self, redis: Redis, key_prefix: str = "metrics:windows"):
        self.r = redis
        self.key_prefix = key_prefix

    def key(self, entity_id: str) -> str:
        return constants.WINDOW_HASH.format(prefix=self.key_prefix, entity_id=entity_id)

    async def load(self, entity_id: str, time_range: TimeRange) -> WindowDataset:
        raw = await self.r.hget(self.key(entity_id), time_range.value)  # type: ignore[misc]
        if raw is None:
            raise DataUnavailableError(
                "no dataset generated for this entity and time range",
                entity_id=entity_id,
                time_range=time_range.value,
            )
        try:
            dataset = WindowDataset.model_validate_json(raw)
        except ValidationError as exc:
            logger.warning(
                "dataset_parse_failed",
                extra={
                    "entity_id": entity_id,
                    "time_range": time_range.value,
                    "error_count": exc.error_count(),
                },
            )
            raise DataUnavailableError(
                "dataset is unreadable",
                entity_id=entity_id,
                time_range=time_range.value,
            ) from exc
        return check_loaded(dataset, entity_id, time_range)

    async def replace_all(
        self, entity_id: str, datasets: Mapping[TimeRange, WindowDataset]
    ) -> None:
        check_complete_set(entity_id, datasets)
        key = self.key(entity_id)
        mapping = {
            time_range.value: dataset.model_dump_json(by_alias=True)
            for time_range, dataset in datasets.items()
        }
        async with self.r.pipeline(transaction=True) as pipe:
            pipe.delete(key)
            pipe.hset(key, mapping=mapping)  # type: ignore[arg-type]
            await pipe.execute()
        logger.info(
            "datasets_published", extra={"entity_id": entity_id, "hash_name": key}
        )

    async def ping(self) -> bool:
        return bool(await self.r.ping())

    async def close(self) -> None:
        await self.r.aclose()
