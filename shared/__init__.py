"""Shared utilities and components for the metrics pipeline and its API."""

from .config import BaseLoggingConfig, BaseServiceConfig
from .constants import Environment

__all__ = [
    "Environment",
    "BaseServiceConfig",
    "BaseLoggingConfig",
]
