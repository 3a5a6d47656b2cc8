"""Core settings resolved from the environment.

Settings are read on every call rather than cached at import time so that a
caller (or a test) can change the environment between operations.
"""

from dataclasses import dataclass

from common.config.env import get_env_bool, get_env_float, get_env_str

DEFAULT_CONNECT_TIMEOUT_SECONDS = 10.0
DEFAULT_PG_SCHEMA = "public"


@dataclass(frozen=True)
class CoreSettings:
    """Tunables for the introspection and DDL core."""

    connect_timeout_seconds: float = DEFAULT_CONNECT_TIMEOUT_SECONDS
    pg_schema: str = DEFAULT_PG_SCHEMA
    classified_error_telemetry: bool = True

    @classmethod
    def from_env(cls) -> "CoreSettings":
        """Build settings from environment variables, falling back to defaults."""
        timeout = get_env_float(
            "DB_CONNECT_TIMEOUT_SECONDS", DEFAULT_CONNECT_TIMEOUT_SECONDS, positive=True
        )

        pg_schema = (get_env_str("INTROSPECTION_PG_SCHEMA") or "").strip() or DEFAULT_PG_SCHEMA

        return cls(
            connect_timeout_seconds=timeout,
            pg_schema=pg_schema,
            classified_error_telemetry=bool(get_env_bool("DAL_CLASSIFIED_ERROR_TELEMETRY", True)),
        )


def get_settings() -> CoreSettings:
    """Return the current settings snapshot."""
    return CoreSettings.from_env()
