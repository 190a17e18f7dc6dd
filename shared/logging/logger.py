"""``get_logger`` for modules that may be imported before logging is set up.

Entry points call ``shared.logging.json.configure_logging`` first. A module
imported on its own (a test, a REPL, the regeneration CLI parsing arguments)
still gets readable output: the first ``get_logger`` call installs a plain
text ``basicConfig`` unless configuration already happened.
"""

from __future__ import annotations

import logging

_FALLBACK_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_configured = False


def get_logger(name: str, auto_configure: bool = True) -> logging.Logger:
    """Return ``logging.getLogger(name)``, propagating to the root handler.

    Args:
        name: Dotted component name, e.g. ``clustermetrics.store.redis``
        auto_configure: Install the plain text fallback on first use
    """
    if auto_configure and not _configured:
        logging.basicConfig(level=logging.INFO, format=_FALLBACK_FORMAT)
        mark_configured()

    logger = logging.getLogger(name)
    logger.propagate = True
    return logger


def mark_configured() -> None:
    """Record that the root logger is set up; called by configure_logging."""
    global _configured
    _configured = True
