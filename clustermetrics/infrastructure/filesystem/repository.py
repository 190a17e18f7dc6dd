from __future__ import annotations

import os
import re
import shutil
import tempfile
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Mapping

from pydantic import ValidationError

from clustermetrics.core.errors import DataUnavailableError, MetricsValidationError
from clustermetrics.core.logger import get_logger
from clustermetrics.domain.models import WindowDataset
from clustermetrics.domain.ranges import TimeRange
from clustermetrics.infrastructure.base import (
    WindowStore,
    check_complete_set,
    check_loaded,
)
from clustermetrics.pipeline.resolution import resolve
from clustermetrics.utils.concurrency import run_blocking

from . import constants

logger = get_logger("clustermetrics.store.filesystem")

_ENTITY_RE = re.compile(r"^[A-Za-z0-9][A-Za-z0-9._-]*$")


def artifact_name(time_range: TimeRange) -> str:
    """Consolidated file name, e.g. ``hourly-aggregated-7d.json``."""
    level = resolve(time_range).source_level
    return constants.ARTIFACT_FILE.format(
        prefix=level.artifact_prefix, time_range=time_range.value
    )


class FileWindowStore(WindowStore):
    """One directory per entity holding one JSON file per time range.

    Layout::

        <root>/<entity_id>/current -> versions/<version>
        <root>/<entity_id>/versions/<version>/raw-metrics-1h.json
        ...

    A regeneration writes a complete new version next to the published one,
    then swaps the ``current`` symlink with ``os.replace`` (atomic on POSIX).
    Readers resolve ``current`` once per read, so they see either the old or
    the new set, never a mix. Files laid out directly under ``<entity_id>/``
    (no ``current`` link) are still readable.
    """

    def __init__(self, root: Path | str, retained_versions: int = 1):
        self.root = Path(root)
        self.retained_versions = max(0, retained_versions)

    # Paths
    def entity_dir(self, entity_id: str) -> Path:
        if not _ENTITY_RE.match(entity_id):
            raise MetricsValidationError(
                f"entityId '{entity_id}' cannot be used as a dataset key",
                entity_id=entity_id,
            )
        return self.root / entity_id

    def artifact_path(self, entity_id: str, time_range: TimeRange) -> Path:
        base = self.entity_dir(entity_id)
        current = base / constants.CURRENT_LINK
        if current.exists():
            return current / artifact_name(time_range)
        return base / artifact_name(time_range)

    # Read
    async def load(self, entity_id: str, time_range: TimeRange) -> WindowDataset:
        return await run_blocking(self._load_sync, entity_id, time_range)

    def _load_sync(self, entity_id: str, time_range: TimeRange) -> WindowDataset:
        path = self.artifact_path(entity_id, time_range)
        try:
            body = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            raise DataUnavailableError(
                "no dataset generated for this entity and time range",
                entity_id=entity_id,
                time_range=time_range.value,
            ) from None
        try:
            dataset = WindowDataset.model_validate_json(body)
        except ValidationError as exc:
            logger.warning(
                "dataset_parse_failed",
                extra={
                    "entity_id": entity_id,
                    "time_range": time_range.value,
                    "path": str(path),
                    "error_count": exc.error_count(),
                },
            )
            raise DataUnavailableError(
                "dataset is unreadable",
                entity_id=entity_id,
                time_range=time_range.value,
            ) from exc
        return check_loaded(dataset, entity_id, time_range)

    # Write
    async def replace_all(
        self, entity_id: str, datasets: Mapping[TimeRange, WindowDataset]
    ) -> None:
        check_complete_set(entity_id, datasets)
        await run_blocking(self._replace_all_sync, entity_id, dict(datasets))

    def _replace_all_sync(
        self, entity_id: str, datasets: dict[TimeRange, WindowDataset]
    ) -> None:
        base = self.entity_dir(entity_id)
        versions = base / constants.VERSIONS_DIR
        versions.mkdir(parents=True, exist_ok=True)

        staging = Path(tempfile.mkdtemp(prefix=constants.STAGING_PREFIX, dir=versions))
        try:
            for time_range, dataset in datasets.items():
                target = staging / artifact_name(time_range)
                target.write_text(
                    dataset.model_dump_json(by_alias=True, indent=2),
                    encoding="utf-8",
                )
            version = self._version_name()
            published = versions / version
            staging.rename(published)
        except BaseException:
            shutil.rmtree(staging, ignore_errors=True)
            raise

        link_tmp = base / f".{constants.CURRENT_LINK}-{uuid.uuid4().hex[:8]}"
        os.symlink(Path(constants.VERSIONS_DIR) / version, link_tmp)
        os.replace(link_tmp, base / constants.CURRENT_LINK)
        logger.info(
            "datasets_published",
            extra={"entity_id": entity_id, "version": version, "path": str(published)},
        )
        self._prune(base, versions, keep=version)

    def _prune(self, base: Path, versions: Path, keep: str) -> None:
        published = sorted(
            p.name
            for p in versions.iterdir()
            if p.is_dir() and not p.name.startswith(".") and p.name != keep
        )
        stale = published[: max(0, len(published) - self.retained_versions)]
        for name in stale:
            shutil.rmtree(versions / name, ignore_errors=True)
        # Loose files from the pre-versioned layout are shadowed by `current`.
        for time_range in TimeRange:
            legacy = base / artifact_name(time_range)
            if legacy.is_file():
                legacy.unlink()
        if stale:
            logger.debug(
                "dataset_versions_pruned",
                extra={"entity_dir": str(base), "removed": stale},
            )

    @staticmethod
    def _version_name() -> str:
        stamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%S%fZ")
        return f"{stamp}-{uuid.uuid4().hex[:6]}"

    async def ping(self) -> bool:
        return await run_blocking(os.access, self.root, os.R_OK)
