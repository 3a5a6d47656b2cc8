"""MySQL-style catalog, quoting and driver adapter."""

from .catalog import fetch_raw_catalog, normalize_table
from .driver import MysqlDriverConnection, connect
from .quoting import escape_identifier, quote_identifier

__all__ = [
    "MysqlDriverConnection",
    "connect",
    "escape_identifier",
    "fetch_raw_catalog",
    "normalize_table",
    "quote_identifier",
]
