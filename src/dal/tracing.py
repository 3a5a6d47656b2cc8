import hashlib
import logging
import os
from typing import Awaitable, Optional, TypeVar

from common.config.env import get_env_bool

T = TypeVar("T")
logger = logging.getLogger(__name__)


def trace_enabled() -> bool:
    """Return True when DAL tracing is enabled explicitly or an OTEL exporter is configured."""
    raw = os.getenv("DAL_TRACE_QUERIES")
    if raw is not None:
        try:
            return get_env_bool("DAL_TRACE_QUERIES", False) is True
        except ValueError:
            logger.warning("Invalid DAL_TRACE_QUERIES value '%s'; tracing disabled.", raw)
            return False
    if get_env_bool("OTEL_DISABLE_EXPORTER", False):
        return False
    return bool((os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT") or "").strip())


def _hash_sql(sql: str) -> str:
    return hashlib.sha256(sql.encode("utf-8")).hexdigest()


async def trace_query_operation(
    name: str,
    provider: str,
    sql: Optional[str],
    operation: Awaitable[T],
) -> T:
    """Trace a DAL driver operation with OTEL when enabled.

    Only a hash of the statement is recorded; statement text never reaches a span.
    """
    if not trace_enabled():
        return await operation

    from opentelemetry import trace

    tracer = trace.get_tracer("dal")
    with tracer.start_as_current_span(name) as span:
        span.set_attribute("db.provider", provider)
        if sql:
            span.set_attribute("db.statement_hash", _hash_sql(sql))
        try:
            result = await operation
            span.set_attribute("db.status", "ok")
            return result
        except Exception:
            span.set_attribute("db.status", "error")
            raise
