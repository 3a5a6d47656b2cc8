"""Data access layer: catalog introspection, DDL synthesis and query execution
for MySQL-style and Postgres-style databases.
"""

from dal.connection import ConnectionDescriptor, open_connection
from dal.database import create_table, execute_query, list_databases, list_tables, test_connection
from dal.ddl import synthesize
from dal.dialect import Dialect, normalize_dialect
from dal.errors import DriverError, IntrospectionError, ValidationError
from dal.normalizer import normalize
from dal.query_result import QueryResult
from dal.raw_catalog import RawTableCatalog

__all__ = [
    "ConnectionDescriptor",
    "Dialect",
    "DriverError",
    "IntrospectionError",
    "QueryResult",
    "RawTableCatalog",
    "ValidationError",
    "create_table",
    "execute_query",
    "list_databases",
    "list_tables",
    "normalize",
    "normalize_dialect",
    "open_connection",
    "synthesize",
    "test_connection",
]
