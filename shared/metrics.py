"""Unified metrics helpers.

Thin wrappers around prometheus_client primitives with optional component
name prefixing, label support and basic naming validation. Keeps the default
registry unless one is passed, so tests can collect into an isolated
CollectorRegistry.
"""

from __future__ import annotations

import re
from typing import Sequence

from prometheus_client import REGISTRY, CollectorRegistry, Counter, Histogram

_NAME_RE = re.compile(r"^[a-z_][a-z0-9_]*$")


def _validate(name: str) -> str:
    if not _NAME_RE.match(name):
        raise ValueError(
            f"Invalid metric name '{name}'. Use snake_case alphanumerics/underscores."
        )
    return name


def _prefix(name: str, service: str | None) -> str:
    if service and not name.startswith(service + "_"):
        return f"{service}_{name}"
    return name


def get_counter(
    name: str,
    documentation: str,
    service: str | None = None,
    labelnames: Sequence[str] = (),
    registry: CollectorRegistry = REGISTRY,
) -> Counter:
    return Counter(
        _validate(_prefix(name, service)),
        documentation,
        labelnames=labelnames,
        registry=registry,
    )


def get_histogram(
    name: str,
    documentation: str,
    service: str | None = None,
    buckets: list[float] | None = None,
    labelnames: Sequence[str] = (),
    registry: CollectorRegistry = REGISTRY,
) -> Histogram:
    full_name = _validate(_prefix(name, service))
    if buckets is None:
        return Histogram(
            full_name, documentation, labelnames=labelnames, registry=registry
        )
    return Histogram(
        full_name,
        documentation,
        labelnames=labelnames,
        buckets=buckets,
        registry=registry,
    )


__all__ = [
    "get_counter",
    "get_histogram",
]
