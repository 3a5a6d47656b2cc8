import asyncio
import logging
from typing import Any, Dict, List, Optional

import aiomysql

from dal.errors import DriverError, driver_error_from
from dal.query_result import QueryResult
from dal.tracing import trace_query_operation

logger = logging.getLogger(__name__)

PROVIDER = "mysql"

_DRIVER_ERRORS = (aiomysql.MySQLError, OSError, asyncio.TimeoutError)


async def connect(
    *,
    host: str,
    port: int,
    user: str,
    password: str,
    database: Optional[str],
    timeout: float,
) -> "MysqlDriverConnection":
    """Open a dedicated autocommit connection; the caller must close it."""

    async def _run():
        return await aiomysql.connect(
            host=host,
            port=port,
            user=user,
            password=password,
            db=database,
            autocommit=True,
            connect_timeout=timeout,
        )

    try:
        conn = await trace_query_operation(
            "dal.connection.open", provider=PROVIDER, sql=None, operation=_run()
        )
    except _DRIVER_ERRORS as exc:
        raise driver_error_from(PROVIDER, "connect", exc) from exc
    logger.debug("Opened MySQL connection to %s:%s (database=%s)", host, port, database)
    return MysqlDriverConnection(conn)


class MysqlDriverConnection:
    """Adapter exposing fetch/execute/query over one aiomysql connection."""

    dialect = PROVIDER

    def __init__(self, conn: aiomysql.Connection) -> None:
        self._conn = conn

    async def _guard(self, name: str, operation: str, sql: str, coro) -> Any:
        try:
            return await trace_query_operation(name, provider=PROVIDER, sql=sql, operation=coro)
        except DriverError:
            raise
        except _DRIVER_ERRORS as exc:
            raise driver_error_from(PROVIDER, operation, exc) from exc

    async def fetch(self, sql: str, *params: Any) -> List[Dict[str, Any]]:
        """Run a catalog statement and return its rows as dicts."""

        async def _run():
            async with self._conn.cursor(aiomysql.DictCursor) as cursor:
                await cursor.execute(sql, params or None)
                rows = await cursor.fetchall()
                return [dict(row) for row in rows]

        return await self._guard("dal.catalog.fetch", "fetch", sql, _run())

    async def execute(self, sql: str) -> None:
        """Execute a statement verbatim, discarding any result."""

        async def _run():
            async with self._conn.cursor() as cursor:
                await cursor.execute(sql)

        await self._guard("dal.ddl.execute", "execute", sql, _run())

    async def query(self, sql: str) -> QueryResult:
        """Execute an ad-hoc statement verbatim and shape its result set."""

        async def _run():
            async with self._conn.cursor() as cursor:
                await cursor.execute(sql)
                if not cursor.description:
                    return QueryResult()
                columns = [entry[0] for entry in cursor.description]
                records = await cursor.fetchall()
                return QueryResult(
                    columns=columns,
                    rows=[dict(zip(columns, record)) for record in records],
                )

        return await self._guard("dal.query.execute", "query", sql, _run())

    async def close(self) -> None:
        self._conn.close()
