"""Create, introspect and query tables on live servers.

Each dialect runs only when its server is configured, e.g.::

    INTEGRATION_MYSQL_HOST=127.0.0.1 INTEGRATION_MYSQL_PASSWORD=secret \
    INTEGRATION_MYSQL_DATABASE=scratch RUN_INTEGRATION_TESTS=1 pytest tests/integration
"""

import os
import uuid

import pytest

from dal import ConnectionDescriptor, DriverError, create_table, execute_query, list_tables
from dal import database
from schema import CascadeAction
from schema.graph import build_graph


def _descriptor(dialect: str):
    prefix = f"INTEGRATION_{dialect.upper()}_"
    host = os.getenv(prefix + "HOST")
    db_name = os.getenv(prefix + "DATABASE")
    if not host or not db_name:
        pytest.skip(f"{prefix}HOST / {prefix}DATABASE not set")
    conn = ConnectionDescriptor(
        host=host,
        port=os.getenv(prefix + "PORT"),
        user=os.getenv(prefix + "USER", "root" if dialect == "mysql" else "postgres"),
        password=os.getenv(prefix + "PASSWORD", ""),
        dialect=dialect,
    )
    return conn, db_name


@pytest.mark.asyncio
@pytest.mark.parametrize("dialect", ["mysql", "postgres"])
async def test_create_then_introspect(dialect):
    conn, db_name = _descriptor(dialect)
    suffix = uuid.uuid4().hex[:8]
    parent, child = f"it_users_{suffix}", f"it_orders_{suffix}"

    assert await database.test_connection(conn) is True

    await create_table(
        conn,
        db_name,
        parent,
        [
            {"name": "id", "type": "integer", "isPrimaryKey": True},
            {"name": "email", "type": "varchar", "length": 120, "isUnique": True},
        ],
    )
    await create_table(
        conn,
        db_name,
        child,
        [
            {"name": "id", "type": "integer", "isPrimaryKey": True},
            {
                "name": "user_id",
                "type": "integer",
                "isForeignKey": True,
                "references": {"table": parent, "column": "id", "onDelete": "CASCADE"},
            },
        ],
    )
    try:
        tables = {t.name: t for t in await list_tables(conn, db_name)}

        assert tables[parent].column("id").is_primary_key
        assert tables[parent].column("email").is_unique
        ref = tables[child].column("user_id").references
        assert ref.table == parent
        assert ref.on_delete == CascadeAction.CASCADE

        graph = build_graph([tables[parent], tables[child]])
        assert [e.id for e in graph.edges] == [f"{child}-user_id-{parent}-id"]

        result = await execute_query(conn, db_name, f"SELECT id, email FROM {parent}")
        assert result.columns == ["id", "email"]
        assert result.rows == []

        with pytest.raises(DriverError):
            await create_table(conn, db_name, parent, [{"name": "id", "type": "integer"}])
    finally:
        await execute_query(conn, db_name, f"DROP TABLE {child}")
        await execute_query(conn, db_name, f"DROP TABLE {parent}")
