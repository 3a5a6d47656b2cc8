import asyncio
import logging
from typing import Any, Dict, List, Optional

import asyncpg

from dal.errors import DriverError, driver_error_from
from dal.query_result import QueryResult
from dal.tracing import trace_query_operation

logger = logging.getLogger(__name__)

PROVIDER = "postgres"

_DRIVER_ERRORS = (asyncpg.PostgresError, asyncpg.InterfaceError, OSError, asyncio.TimeoutError)


async def connect(
    *,
    host: str,
    port: int,
    user: str,
    password: str,
    database: Optional[str],
    timeout: float,
) -> "PostgresDriverConnection":
    """Open a dedicated connection; the caller must close it.

    Without ``database`` the server default (the user's name) is used.
    """

    async def _run():
        return await asyncpg.connect(
            host=host,
            port=port,
            user=user,
            password=password,
            database=database,
            timeout=timeout,
        )

    try:
        conn = await trace_query_operation(
            "dal.connection.open", provider=PROVIDER, sql=None, operation=_run()
        )
    except _DRIVER_ERRORS as exc:
        raise driver_error_from(PROVIDER, "connect", exc) from exc
    logger.debug("Opened Postgres connection to %s:%s (database=%s)", host, port, database)
    return PostgresDriverConnection(conn)


class PostgresDriverConnection:
    """Adapter exposing fetch/execute/query over one asyncpg connection."""

    dialect = PROVIDER

    def __init__(self, conn: asyncpg.Connection) -> None:
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
            rows = await self._conn.fetch(sql, *params)
            return [dict(row) for row in rows]

        return await self._guard("dal.catalog.fetch", "fetch", sql, _run())

    async def execute(self, sql: str) -> None:
        """Execute a statement verbatim, discarding the status string."""

        async def _run():
            await self._conn.execute(sql)

        await self._guard("dal.ddl.execute", "execute", sql, _run())

    async def query(self, sql: str) -> QueryResult:
        """Execute an ad-hoc statement verbatim and shape its result set."""

        async def _run():
            statement = await self._conn.prepare(sql)
            columns = [attr.name for attr in statement.get_attributes()]
            records = await statement.fetch()
            if not columns:
                return QueryResult()
            return QueryResult(
                columns=columns,
                rows=[{name: record[i] for i, name in enumerate(columns)} for record in records],
            )

        return await self._guard("dal.query.execute", "query", sql, _run())

    async def close(self) -> None:
        await self._conn.close()
