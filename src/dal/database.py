"""Operations exposed to the UI layer.

Every operation takes the connection descriptor (and database) explicitly and
opens its own connection for the duration of the call; no session state is
held between calls.
"""

import logging
from typing import List, Optional, Sequence

from common.config.settings import get_settings
from dal.connection import ConnectionDescriptor, open_connection
from dal.ddl import ColumnInput, synthesize
from dal.errors import DriverError, IntrospectionError
from dal.normalizer import normalize
from dal.query_result import QueryResult
from dal.raw_catalog import MalformedCatalogRow, row_text
from dal.strategies import get_strategy
from schema import DatabaseInfo, Table

logger = logging.getLogger(__name__)


async def test_connection(conn: ConnectionDescriptor) -> bool:
    """Open and immediately close a connection.

    Returns False instead of raising when the server cannot be reached or the
    credentials are rejected.
    """
    try:
        async with open_connection(conn):
            pass
    except DriverError as exc:
        logger.warning(
            "Connection test failed for %s:%s (%s): %s",
            conn.host,
            conn.port,
            conn.dialect.value,
            exc.category,
        )
        return False
    return True


test_connection.__test__ = False  # not a pytest test


async def list_databases(conn: ConnectionDescriptor) -> List[DatabaseInfo]:
    """List the databases visible to the connecting user."""
    strategy = get_strategy(conn.dialect)
    try:
        async with open_connection(conn) as db:
            rows = await db.fetch(strategy.list_databases_sql)
        return [DatabaseInfo(name=row_text(row, strategy.database_name_field)) for row in rows]
    except DriverError as exc:
        raise IntrospectionError(
            f"Failed to retrieve databases: {exc.server_message}",
            dialect=strategy.dialect.value,
        ) from exc
    except MalformedCatalogRow as exc:
        raise IntrospectionError(str(exc), dialect=strategy.dialect.value) from exc


async def list_tables(conn: ConnectionDescriptor, database: str) -> List[Table]:
    """Introspect ``database`` and return its tables in catalog order."""
    strategy = get_strategy(conn.dialect)
    settings = get_settings()
    try:
        async with open_connection(conn, database, settings) as db:
            raw_catalog = await strategy.fetch_raw_catalog(db, database, settings)
    except DriverError as exc:
        raise IntrospectionError(
            f"Failed to retrieve tables from '{database}': {exc.server_message}",
            dialect=strategy.dialect.value,
        ) from exc

    tables = normalize(strategy.dialect, raw_catalog)
    logger.info(
        "Introspected %s database '%s'",
        strategy.dialect.value,
        database,
        extra={"event": "dal_tables_listed", "table_count": len(tables)},
    )
    return tables


async def create_table(
    conn: ConnectionDescriptor,
    database: str,
    table_name: str,
    columns: Sequence[ColumnInput],
) -> str:
    """Synthesize and execute a ``CREATE TABLE`` statement; return the statement.

    Validation happens before any connection is opened.

    Raises:
        ValidationError: If the table definition is malformed.
        DriverError: If the server rejects the statement.
    """
    sql = synthesize(conn.dialect, table_name, columns)
    async with open_connection(conn, database) as db:
        await db.execute(sql)
    logger.info("Created table '%s' in %s database '%s'", table_name, conn.dialect.value, database)
    return sql


async def execute_query(
    conn: ConnectionDescriptor, database: Optional[str], query: str
) -> QueryResult:
    """Run ``query`` verbatim against ``database``.

    The text is neither parsed nor rewritten; callers own its safety.

    Raises:
        DriverError: Carrying the server message when execution fails.
    """
    async with open_connection(conn, database) as db:
        return await db.query(query)
