"""Error taxonomy for the introspection and DDL core.

``ValidationError`` is raised before any connection is opened.
``IntrospectionError`` and ``DriverError`` originate at the database and are
surfaced to the caller unchanged; nothing here retries.
"""

from typing import Optional

from dal.error_classification import classify_error, emit_classified_error


class ValidationError(ValueError):
    """Raised when DDL input is malformed (empty or duplicate names, unsafe identifiers)."""

    def __init__(self, message: str, *, reason_code: str) -> None:
        """Attach a stable reason code to the validation failure."""
        super().__init__(message)
        self.reason_code = reason_code


class IntrospectionError(RuntimeError):
    """Raised when a catalog query fails or returns unusable rows."""

    def __init__(self, message: str, *, dialect: str, table: Optional[str] = None) -> None:
        """Capture the dialect and, when known, the table being introspected."""
        super().__init__(message)
        self.dialect = dialect
        self.table = table


class DriverError(RuntimeError):
    """Raised when the database driver or server rejects an operation."""

    def __init__(
        self,
        message: str,
        *,
        dialect: str,
        operation: str,
        server_message: str,
        category: str = "unknown",
    ) -> None:
        """Capture the server message and a provider-agnostic error category."""
        super().__init__(message)
        self.dialect = dialect
        self.operation = operation
        self.server_message = server_message
        self.category = category


def driver_error_from(dialect: str, operation: str, exc: BaseException) -> DriverError:
    """Wrap a native driver exception, classifying it on the way out."""
    server_message = str(exc) or exc.__class__.__name__
    category = classify_error(dialect, exc)
    emit_classified_error(dialect, operation, category, exc)
    return DriverError(
        f"{dialect} {operation} failed: {server_message}",
        dialect=dialect,
        operation=operation,
        server_message=server_message,
        category=category,
    )
