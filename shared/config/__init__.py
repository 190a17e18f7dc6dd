"""Shared configuration base classes.

Common settings every entry point needs (logging, service identity). The API
and the batch regeneration CLI both inherit from these so their environment
variables line up.
"""

from pydantic_settings import BaseSettings


class BaseLoggingConfig(BaseSettings):
    """Common logging configuration."""

    app_log_level: str = "INFO"
    app_log_redaction_patterns: list[str] = [
        "password",
        "token",
        "secret",
        "key",
        "authorization",
        "cookie",
        "session",
    ]
    app_environment: str = "production"


class BaseServiceConfig(BaseLoggingConfig):
    """Base configuration for a runnable component.

    Components should inherit from this and add their own settings.
    The otel_service_name should be overridden by each component.
    """

    otel_service_name: str = "unknown"  # Should be overridden by component


__all__ = ["BaseLoggingConfig", "BaseServiceConfig"]
