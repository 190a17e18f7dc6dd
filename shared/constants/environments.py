from enum import Enum


class Environment(str, Enum):
    """Deployment environment, read from ``APP_ENVIRONMENT``."""

    PRODUCTION = "production"
    STAGING = "staging"
    TESTING = "testing"
    DEVELOPMENT = "development"

    @classmethod
    def _matches(cls, env: str, member: "Environment") -> bool:
        return env.strip().lower() == member.value

    @classmethod
    def is_testing(cls, env: str) -> bool:
        return cls._matches(env, cls.TESTING)

    @classmethod
    def is_development(cls, env: str) -> bool:
        return cls._matches(env, cls.DEVELOPMENT)

    @classmethod
    def wants_json_logs(cls, env: str) -> bool:
        """Plain text logs on a developer terminal or under test; JSON elsewhere."""
        return not (cls.is_development(env) or cls.is_testing(env))
