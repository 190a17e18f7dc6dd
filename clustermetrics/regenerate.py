"""Batch entry point: rebuild the window datasets of every configured cluster.

Usage::

    clustermetrics-regenerate                       # clusters from settings.clusters_file
    clustermetrics-regenerate --entity <uuid> ...   # explicit entities
    clustermetrics-regenerate --clusters-file data/clusters.json --span-days 30

Run one instance at a time; the stores assume a single writer per entity.
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path
from typing import List, Sequence

from pydantic import BaseModel, TypeAdapter, ValidationError

from clustermetrics.core.config import settings
from clustermetrics.core.logger import configure_logging, get_logger
from clustermetrics.infrastructure.factory import build_window_store
from clustermetrics.pipeline.regeneration import WindowRegenerator

logger = get_logger("clustermetrics.regenerate")


class ClusterRef(BaseModel):
    uuid: str
    cluster_name: str = ""


_CLUSTERS = TypeAdapter(List[ClusterRef])


def load_clusters(path: Path) -> List[ClusterRef]:
    return _CLUSTERS.validate_json(path.read_bytes())


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="clustermetrics-regenerate",
        description="Regenerate consolidated window datasets per cluster.",
    )
    parser.add_argument(
        "--clusters-file",
        type=Path,
        default=None,
        help=f"JSON list of {{uuid, cluster_name}} (default: {settings.clusters_file})",
    )
    parser.add_argument(
        "--entity",
        action="append",
        default=[],
        help="Entity id to regenerate; may be repeated",
    )
    parser.add_argument(
        "--span-days",
        type=int,
        default=settings.generation_span_days,
        help="Days of raw history to generate",
    )
    return parser.parse_args(argv)


def resolve_entities(args: argparse.Namespace) -> List[ClusterRef]:
    entities = [ClusterRef(uuid=e) for e in args.entity]
    clusters_file = args.clusters_file
    if clusters_file is None and not entities:
        clusters_file = Path(settings.clusters_file)
    if clusters_file is not None:
        entities.extend(load_clusters(clusters_file))
    return entities


async def run(args: argparse.Namespace) -> int:
    try:
        entities = resolve_entities(args)
    except (OSError, ValidationError) as exc:
        logger.error("clusters_file_unreadable", extra={"error": str(exc)})
        return 2
    if not entities:
        logger.error("no_entities_to_regenerate")
        return 2

    store = build_window_store(settings)
    regenerator = WindowRegenerator(store, span_days=args.span_days)
    failures = 0
    try:
        for cluster in entities:
            logger.info(
                "regenerating_cluster",
                extra={"entity_id": cluster.uuid, "cluster_name": cluster.cluster_name},
            )
            try:
                await regenerator.regenerate(cluster.uuid)
            except Exception:  # noqa: BLE001 - logged by the regenerator
                failures += 1
    finally:
        await store.close()

    logger.info(
        "regeneration_finished",
        extra={"entities": len(entities), "failures": failures},
    )
    return 1 if failures else 0


def main(argv: Sequence[str] | None = None) -> int:
    configure_logging(service="clustermetrics-regenerate")
    args = parse_args(argv)
    return asyncio.run(run(args))


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
