"""Postgres-style catalog, quoting and driver adapter."""

from .catalog import fetch_raw_catalog, normalize_table
from .driver import PostgresDriverConnection, connect
from .quoting import quote_identifier

__all__ = [
    "PostgresDriverConnection",
    "connect",
    "fetch_raw_catalog",
    "normalize_table",
    "quote_identifier",
]
