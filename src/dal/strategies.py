"""Per-dialect strategy functions.

Each dialect is a small bundle of plain functions (quoting, catalog fetch, row
normalization, driver connect) keyed by the ``Dialect`` tag. Everything
downstream of the normalizer works on canonical models and never branches on
dialect.
"""

from dataclasses import dataclass
from typing import Any, Awaitable, Callable, List, Optional

from common.config.settings import CoreSettings
from dal import mysql, postgres
from dal.dialect import Dialect, normalize_dialect
from dal.mysql import catalog as mysql_catalog
from dal.postgres import catalog as postgres_catalog
from dal.raw_catalog import RawTableCatalog
from schema import Table


@dataclass(frozen=True)
class DialectStrategy:
    """Dialect-specific behaviour consumed by the dialect-free core."""

    dialect: Dialect
    quote_identifier: Callable[[str], str]
    connect: Callable[..., Awaitable[Any]]
    fetch_raw_catalog: Callable[[Any, str, CoreSettings], Awaitable[List[RawTableCatalog]]]
    normalize_table: Callable[[RawTableCatalog], Table]
    list_databases_sql: str
    database_name_field: str


_STRATEGIES = {
    Dialect.MYSQL: DialectStrategy(
        dialect=Dialect.MYSQL,
        quote_identifier=mysql.quote_identifier,
        connect=mysql.connect,
        fetch_raw_catalog=mysql.fetch_raw_catalog,
        normalize_table=mysql.normalize_table,
        list_databases_sql=mysql_catalog.LIST_DATABASES_SQL,
        database_name_field=mysql_catalog.DATABASE_NAME_FIELD,
    ),
    Dialect.POSTGRES: DialectStrategy(
        dialect=Dialect.POSTGRES,
        quote_identifier=postgres.quote_identifier,
        connect=postgres.connect,
        fetch_raw_catalog=postgres.fetch_raw_catalog,
        normalize_table=postgres.normalize_table,
        list_databases_sql=postgres_catalog.LIST_DATABASES_SQL,
        database_name_field=postgres_catalog.DATABASE_NAME_FIELD,
    ),
}


def get_strategy(dialect: Optional[Any]) -> DialectStrategy:
    """Return the strategy for a dialect tag or alias."""
    return _STRATEGIES[normalize_dialect(dialect)]
