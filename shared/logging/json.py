"""JSON logging utilities.

Provides the CustomJsonFormatter and configure_logging used by the metrics
API and the batch regeneration CLI. Context passed through ``extra=`` ends up
as top-level keys of the emitted JSON object; keys matching a redaction
pattern are masked.
"""

from __future__ import annotations

import json
import logging
import os
import socket
import traceback
from datetime import datetime, timezone
from typing import Iterable

# Attributes every LogRecord carries; anything else came in through `extra=`.
_RECORD_ATTRS = frozenset(
    logging.LogRecord("", 0, "", 0, "", (), None).__dict__.keys()
) | {"message", "asctime", "taskName"}


class SensitiveDataFilter:
    def __init__(self, patterns: Iterable[str]):
        self.patterns = [p.lower() for p in patterns]

    def filter(self, data: dict) -> dict:
        out = {}
        for k, v in data.items():
            lk = k.lower()
            if any(p in lk for p in self.patterns):
                out[k] = "[REDACTED]"
            elif isinstance(v, dict):
                out[k] = self.filter(v)
            else:
                out[k] = v
        return out


class CustomJsonFormatter(logging.Formatter):  # type: ignore[misc]
    def __init__(
        self,
        service: str,
        environment: str,
        redaction_patterns: Iterable[str],
    ):
        super().__init__()
        self.hostname = socket.gethostname()
        self.pid = os.getpid()
        self.service_name = service
        self.environment = environment
        self.sensitive_filter = SensitiveDataFilter(redaction_patterns)

    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        data = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "service": self.service_name,
            "environment": self.environment,
            "hostname": self.hostname,
            "pid": self.pid,
        }
        data.update(self.extra_fields(record))
        if record.exc_info:
            data["exception"] = self.format_exception(record.exc_info)
        data = self.sensitive_filter.filter(data)
        return json.dumps(data, default=str)

    @staticmethod
    def extra_fields(record: logging.LogRecord) -> dict:
        return {
            k: v
            for k, v in record.__dict__.items()
            if k not in _RECORD_ATTRS and not k.startswith("_")
        }

    @staticmethod
    def format_exception(exc_info):  # type: ignore[override]
        et, ev, tb = exc_info
        return {
            "type": et.__name__,
            "message": str(ev),
            "stack": traceback.format_tb(tb),
        }


def configure_logging(
    service: str,
    environment: str,
    level: str,
    redaction_patterns: Iterable[str],
    json_output: bool = True,
):
    handler = logging.StreamHandler()
    if json_output:
        handler.setFormatter(
            CustomJsonFormatter(service, environment, redaction_patterns)
        )
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        )
    root = logging.getLogger()
    root.handlers = [handler]  # deterministic single handler
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    from shared.logging.logger import mark_configured

    mark_configured()
    return root


__all__ = [
    "CustomJsonFormatter",
    "configure_logging",
    "SensitiveDataFilter",
]
