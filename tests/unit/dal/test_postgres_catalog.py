import pytest

from common.config.settings import CoreSettings
from dal.postgres.catalog import (
    COLUMNS_SQL,
    FOREIGN_KEYS_SQL,
    LIST_TABLES_SQL,
    fetch_raw_catalog,
    normalize_table,
)
from dal.raw_catalog import RawTableCatalog
from schema import CascadeAction


class _FakeConn:
    def __init__(self, tables, columns, fks):
        self._tables = tables
        self._columns = columns
        self._fks = fks
        self.calls = []

    async def fetch(self, sql, *params):
        self.calls.append((sql, params))
        if sql == LIST_TABLES_SQL:
            return self._tables
        if sql == COLUMNS_SQL:
            return self._columns[params[1]]
        if sql == FOREIGN_KEYS_SQL:
            return self._fks.get(params[1], [])
        raise AssertionError(f"Unexpected SQL: {sql}")


def _col(name, data_type, nullable="YES", constraint=None, width=0, length=None, default=None):
    return {
        "column_name": name,
        "data_type": data_type,
        "character_maximum_length": length,
        "is_nullable": nullable,
        "column_default": default,
        "constraint_type": constraint,
        "constraint_width": width,
    }


@pytest.mark.asyncio
async def test_fetch_raw_catalog_uses_configured_schema():
    conn = _FakeConn(
        tables=[{"table_name": "orders"}, {"table_name": "users"}],
        columns={"orders": [_col("id", "integer")], "users": [_col("id", "integer")]},
        fks={},
    )

    catalog = await fetch_raw_catalog(conn, "shop", CoreSettings(pg_schema="sales"))

    assert [raw.name for raw in catalog] == ["orders", "users"]
    assert conn.calls[0] == (LIST_TABLES_SQL, ("sales",))
    assert conn.calls[1] == (COLUMNS_SQL, ("sales", "orders"))
    assert conn.calls[2] == (FOREIGN_KEYS_SQL, ("sales", "orders"))
    assert conn.calls[3] == (COLUMNS_SQL, ("sales", "users"))


def test_list_tables_query_excludes_views():
    assert "table_type = 'BASE TABLE'" in LIST_TABLES_SQL


def test_normalize_table_folds_constraint_rows():
    """A column in both a PK and a UNIQUE constraint appears on two rows."""
    rows = [
        _col("id", "integer", "NO", "PRIMARY KEY", 1, default="nextval('users_id_seq'::regclass)"),
        _col("id", "integer", "NO", "UNIQUE", 1),
        _col("email", "character varying", "NO", "UNIQUE", 1, length=255),
        _col("bio", "text"),
    ]

    table = normalize_table(RawTableCatalog(name="users", column_rows=rows))

    assert [col.name for col in table.columns] == ["id", "email", "bio"]
    id_col, email, bio = table.columns
    assert id_col.is_primary_key and id_col.is_unique and not id_col.is_nullable
    assert id_col.default_value == "nextval('users_id_seq'::regclass)"
    assert email.type == "character varying(255)"
    assert email.is_unique and not email.is_primary_key
    assert bio.is_nullable and not bio.is_unique


def test_composite_unique_does_not_mark_members_unique():
    rows = [
        _col("tenant_id", "integer", "NO", "UNIQUE", 2),
        _col("slug", "text", "NO", "UNIQUE", 2),
    ]

    table = normalize_table(RawTableCatalog(name="pages", column_rows=rows))

    assert not any(col.is_unique for col in table.columns)


def test_composite_primary_key_marks_every_member():
    rows = [
        _col("group_id", "integer", "NO", "PRIMARY KEY", 2),
        _col("user_id", "integer", "NO", "PRIMARY KEY", 2),
    ]

    table = normalize_table(RawTableCatalog(name="memberships", column_rows=rows))

    assert [col.name for col in table.primary_key_columns] == ["group_id", "user_id"]


def test_normalize_table_attaches_references():
    rows = [_col("id", "integer", "NO", "PRIMARY KEY", 1), _col("user_id", "integer")]
    fks = [
        {
            "column_name": "user_id",
            "referenced_table": "users",
            "referenced_column": "id",
            "delete_rule": "CASCADE",
            "update_rule": "NO ACTION",
        }
    ]

    table = normalize_table(RawTableCatalog(name="orders", column_rows=rows, foreign_key_rows=fks))

    user_id = table.column("user_id")
    assert user_id.is_foreign_key
    assert user_id.references.table == "users"
    assert user_id.references.on_delete == CascadeAction.CASCADE
    assert user_id.references.on_update == CascadeAction.NO_ACTION
    assert table.column("id").references is None
