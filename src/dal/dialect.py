"""Dialect tag and alias normalization.

Canonical dialect IDs (lowercase):
- "mysql"    - MySQL-style catalogs (SHOW / DESCRIBE), backtick quoting
- "postgres" - Postgres-style catalogs (information_schema), double-quote quoting

Example:
    >>> normalize_dialect("PostgreSQL")
    <Dialect.POSTGRES: 'postgres'>
    >>> normalize_dialect("mariadb")
    <Dialect.MYSQL: 'mysql'>
"""

from enum import Enum
from typing import Any


class Dialect(str, Enum):
    """Closed set of supported SQL dialects."""

    MYSQL = "mysql"
    POSTGRES = "postgres"


DIALECT_ALIASES: dict[str, Dialect] = {
    "mysql": Dialect.MYSQL,
    "mysql-like": Dialect.MYSQL,
    "mariadb": Dialect.MYSQL,
    "postgres": Dialect.POSTGRES,
    "postgres-like": Dialect.POSTGRES,
    "postgresql": Dialect.POSTGRES,
    "pg": Dialect.POSTGRES,
}

DEFAULT_PORTS: dict[Dialect, int] = {
    Dialect.MYSQL: 3306,
    Dialect.POSTGRES: 5432,
}


def normalize_dialect(value: Any) -> Dialect:
    """Normalize a dialect value or alias to its canonical ``Dialect``.

    Raises:
        ValueError: If the value is not a known dialect or alias.
    """
    if isinstance(value, Dialect):
        return value
    if not isinstance(value, str):
        raise ValueError(f"Unsupported dialect: {value!r}")
    cleaned = value.strip().lower()
    try:
        return DIALECT_ALIASES[cleaned]
    except KeyError:
        allowed = ", ".join(sorted(DIALECT_ALIASES))
        raise ValueError(f"Unsupported dialect '{value}'. Allowed: {allowed}") from None
