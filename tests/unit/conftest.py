"""Unit test environment helpers."""

import pytest

_CORE_ENV = (
    "DB_CONNECT_TIMEOUT_SECONDS",
    "INTROSPECTION_PG_SCHEMA",
    "DAL_TRACE_QUERIES",
    "DAL_CLASSIFIED_ERROR_TELEMETRY",
    "OTEL_EXPORTER_OTLP_ENDPOINT",
    "OTEL_DISABLE_EXPORTER",
)


@pytest.fixture(autouse=True)
def _minimal_env(monkeypatch):
    """Run every unit test against default settings with tracing off."""
    for name in _CORE_ENV:
        monkeypatch.delenv(name, raising=False)
    yield
