from __future__ import annotations

import asyncio
import logging

from common.config.settings import get_settings

logger = logging.getLogger(__name__)

# Server error codes reported by MySQL/MariaDB (first element of exc.args).
_MYSQL_CODE_CATEGORIES: dict[int, str] = {
    1044: "auth",
    1045: "auth",
    1142: "auth",
    1049: "undefined_object",
    1146: "undefined_object",
    1824: "undefined_object",
    1050: "duplicate_object",
    1060: "duplicate_object",
    1061: "duplicate_object",
    1064: "syntax",
    2002: "connectivity",
    2003: "connectivity",
    2005: "connectivity",
    2006: "connectivity",
    2013: "connectivity",
}

# asyncpg exception class names, lowercased.
_ASYNCPG_CLASS_CATEGORIES: dict[str, str] = {
    "invalidpassworderror": "auth",
    "invalidauthorizationspecificationerror": "auth",
    "insufficientprivilegeerror": "auth",
    "postgressyntaxerror": "syntax",
    "duplicatetableerror": "duplicate_object",
    "duplicatecolumnerror": "duplicate_object",
    "duplicateobjecterror": "duplicate_object",
    "undefinedtableerror": "undefined_object",
    "undefinedcolumnerror": "undefined_object",
    "undefinedobjecterror": "undefined_object",
    "invalidcatalognameerror": "undefined_object",
    "connectiondoesnotexisterror": "connectivity",
    "cannotconnectnowerror": "connectivity",
}

RECOVERY_HINTS: dict[str, str] = {
    "timeout": "Check that the host is reachable or raise DB_CONNECT_TIMEOUT_SECONDS",
    "connectivity": "Check network configuration and database availability",
    "auth": "Verify credentials and permission grants for the requested operation",
    "syntax": "Review the statement; it may use an invalid type or literal",
    "duplicate_object": "An object with that name already exists",
    "undefined_object": "A referenced database, table or column does not exist",
    "unknown": "Inspect error details for root cause",
}


def classify_error(dialect: str, exc: BaseException) -> str:
    """Classify a driver exception into a provider-agnostic category."""
    message = str(exc).lower()
    class_name = exc.__class__.__name__.lower()

    if isinstance(exc, (TimeoutError, asyncio.TimeoutError)) or _matches_any(
        message, ("timeout", "timed out")
    ):
        return "timeout"

    if dialect == "mysql":
        code = exc.args[0] if exc.args else None
        if isinstance(code, int) and code in _MYSQL_CODE_CATEGORIES:
            return _MYSQL_CODE_CATEGORIES[code]
    elif dialect == "postgres" and class_name in _ASYNCPG_CLASS_CATEGORIES:
        return _ASYNCPG_CLASS_CATEGORIES[class_name]

    if isinstance(exc, (ConnectionError, OSError)) or _matches_any(
        message,
        ("could not connect", "connection refused", "connection reset", "can't connect"),
    ):
        return "connectivity"
    if _matches_any(
        message,
        ("permission denied", "access denied", "password authentication failed"),
    ):
        return "auth"
    if _matches_any(message, ("syntax error", "error in your sql syntax")):
        return "syntax"
    if _matches_any(message, ("already exists",)):
        return "duplicate_object"
    if _matches_any(message, ("does not exist", "doesn't exist", "unknown database")):
        return "undefined_object"
    return "unknown"


def emit_classified_error(dialect: str, operation: str, category: str, exc: BaseException) -> None:
    """Emit structured telemetry for a classified driver error when enabled."""
    if not get_settings().classified_error_telemetry:
        return

    recovery_hint = RECOVERY_HINTS.get(category, RECOVERY_HINTS["unknown"])

    from opentelemetry import trace

    span = trace.get_current_span()
    if span.is_recording():
        span.set_attribute("error.classification.category", category)
        span.set_attribute("error.classification.provider", dialect)
        span.set_attribute("error.classification.operation", operation)
        span.add_event(
            "dal.error.classified",
            {"provider": dialect, "category": category, "operation": operation},
        )

    logger.error(
        "dal_error_classified",
        extra={
            "event": "dal_error_classified",
            "provider": dialect,
            "operation": operation,
            "error_category": category,
            "error_type": exc.__class__.__name__,
            "recovery_hint": recovery_hint,
        },
    )


def _matches_any(text: str, fragments: tuple[str, ...]) -> bool:
    return any(fragment in text for fragment in fragments)
