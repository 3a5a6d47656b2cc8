"""MySQL-style catalog queries and row normalization.

Columns come from the flat ``DESCRIBE`` output (Field, Type, Null, Key,
Default, Extra); foreign keys come from ``KEY_COLUMN_USAGE`` joined with
``REFERENTIAL_CONSTRAINTS`` for the cascade rules.

On a table without a PRIMARY KEY, ``DESCRIBE`` reports the first
``UNIQUE NOT NULL`` column as ``PRI``. The primary key is therefore read from
the ``PRIMARY KEY`` constraint itself; a ``PRI`` column outside it is unique only.
"""

import logging
from typing import Any, Dict, List, Sequence

from common.config.settings import CoreSettings
from dal.errors import IntrospectionError
from dal.mysql.quoting import escape_identifier
from dal.raw_catalog import (
    CatalogRow,
    MalformedCatalogRow,
    RawTableCatalog,
    build_table,
    row_text,
    row_value,
)
from schema import Reference, Table

logger = logging.getLogger(__name__)

LIST_DATABASES_SQL = "SHOW DATABASES"
DATABASE_NAME_FIELD = "Database"

LIST_TABLES_SQL = "SHOW FULL TABLES"

FOREIGN_KEYS_SQL = """
    SELECT
        kcu.COLUMN_NAME,
        kcu.REFERENCED_TABLE_NAME,
        kcu.REFERENCED_COLUMN_NAME,
        rc.DELETE_RULE,
        rc.UPDATE_RULE
    FROM INFORMATION_SCHEMA.KEY_COLUMN_USAGE kcu
    JOIN INFORMATION_SCHEMA.REFERENTIAL_CONSTRAINTS rc
        ON rc.CONSTRAINT_SCHEMA = kcu.CONSTRAINT_SCHEMA
        AND rc.CONSTRAINT_NAME = kcu.CONSTRAINT_NAME
    WHERE kcu.TABLE_SCHEMA = %s
    AND kcu.TABLE_NAME = %s
    AND kcu.REFERENCED_TABLE_NAME IS NOT NULL
    ORDER BY kcu.CONSTRAINT_NAME, kcu.ORDINAL_POSITION
"""

PRIMARY_KEY_SQL = """
    SELECT kcu.COLUMN_NAME
    FROM INFORMATION_SCHEMA.TABLE_CONSTRAINTS tc
    JOIN INFORMATION_SCHEMA.KEY_COLUMN_USAGE kcu
        ON kcu.CONSTRAINT_SCHEMA = tc.CONSTRAINT_SCHEMA
        AND kcu.CONSTRAINT_NAME = tc.CONSTRAINT_NAME
        AND kcu.TABLE_NAME = tc.TABLE_NAME
    WHERE tc.CONSTRAINT_TYPE = 'PRIMARY KEY'
    AND tc.TABLE_SCHEMA = %s
    AND tc.TABLE_NAME = %s
    ORDER BY kcu.ORDINAL_POSITION
"""


def describe_sql(table_name: str) -> str:
    return f"DESCRIBE {escape_identifier(table_name)}"


def table_names_from_rows(rows: Sequence[CatalogRow]) -> List[str]:
    """Extract base table names from ``SHOW [FULL] TABLES`` rows, in catalog order.

    The name is the first column (``Tables_in_<db>``); views are skipped when
    the ``Table_type`` column is present.
    """
    names: List[str] = []
    for row in rows:
        if not row:
            raise MalformedCatalogRow("Empty row in SHOW TABLES output.")
        table_type = row_value(row, "Table_type", required=False)
        if table_type is not None and str(table_type).upper() != "BASE TABLE":
            continue
        first = next(iter(row.values()))
        if isinstance(first, (bytes, bytearray)):
            first = first.decode("utf-8")
        names.append(str(first))
    return names


async def fetch_raw_catalog(conn, database: str, settings: CoreSettings) -> List[RawTableCatalog]:
    """Fetch tables, DESCRIBE rows and foreign key rows for ``database``.

    Fetches run sequentially on the one connection, keeping catalog table order.
    """
    _ = settings
    table_rows = await conn.fetch(LIST_TABLES_SQL)
    try:
        names = table_names_from_rows(table_rows)
    except MalformedCatalogRow as exc:
        raise IntrospectionError(str(exc), dialect="mysql") from exc

    catalog: List[RawTableCatalog] = []
    for name in names:
        logger.debug("Fetching MySQL catalog rows for %s.%s", database, name)
        column_rows = await conn.fetch(describe_sql(name))
        pk_rows = await conn.fetch(PRIMARY_KEY_SQL, database, name)
        fk_rows = await conn.fetch(FOREIGN_KEYS_SQL, database, name)
        catalog.append(
            RawTableCatalog(
                name=name,
                column_rows=column_rows,
                foreign_key_rows=fk_rows,
                primary_key_rows=pk_rows,
            )
        )
    return catalog


def _column_fields(row: CatalogRow) -> Dict[str, Any]:
    key = str(row_value(row, "Key", required=False) or "").upper()
    nullable = str(row_value(row, "Null")).upper() == "YES"
    default = row_value(row, "Default", required=False)
    return {
        "name": row_text(row, "Field"),
        "type": row_text(row, "Type"),
        "is_primary_key": key == "PRI",
        "is_nullable": nullable,
        "is_unique": key in {"PRI", "UNI"},
        "default_value": None if default is None else str(default),
    }


def _reference(row: CatalogRow) -> Reference:
    on_delete = row_value(row, "DELETE_RULE", required=False)
    on_update = row_value(row, "UPDATE_RULE", required=False)
    try:
        return Reference(
            table=row_text(row, "REFERENCED_TABLE_NAME"),
            column=row_text(row, "REFERENCED_COLUMN_NAME"),
            on_delete=on_delete,
            on_update=on_update,
        )
    except ValueError as exc:
        raise MalformedCatalogRow(f"Unusable foreign key row {dict(row)!r}: {exc}") from exc


def normalize_table(raw: RawTableCatalog) -> Table:
    """Normalize one table's DESCRIBE and foreign key rows into a ``Table``."""
    column_fields = [_column_fields(row) for row in raw.column_rows]
    if raw.primary_key_rows is not None:
        primary_keys = {row_text(row, "COLUMN_NAME") for row in raw.primary_key_rows}
        for fields in column_fields:
            fields["is_primary_key"] = fields["name"] in primary_keys
    references = [
        (row_text(row, "COLUMN_NAME"), _reference(row)) for row in raw.foreign_key_rows
    ]
    return build_table(raw.name, column_fields, references)
