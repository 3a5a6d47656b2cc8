"""Postgres-style catalog queries and row normalization.

Column rows come from ``information_schema.columns`` LEFT JOINed with the
PRIMARY KEY / UNIQUE constraints each column takes part in, so a column can
appear on several rows. Rows are folded per column name before the foreign
key join.
"""

import logging
from typing import Any, Dict, List

from common.config.settings import CoreSettings
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

LIST_DATABASES_SQL = """
    SELECT datname
    FROM pg_database
    WHERE datistemplate = false
    ORDER BY datname
"""
DATABASE_NAME_FIELD = "datname"

LIST_TABLES_SQL = """
    SELECT table_name
    FROM information_schema.tables
    WHERE table_schema = $1
    AND table_type = 'BASE TABLE'
    ORDER BY table_name
"""

COLUMNS_SQL = """
    SELECT
        c.column_name,
        c.data_type,
        c.character_maximum_length,
        c.is_nullable,
        c.column_default,
        tc.constraint_type,
        (
            SELECT count(*)
            FROM information_schema.key_column_usage k2
            WHERE k2.constraint_schema = tc.constraint_schema
            AND k2.constraint_name = tc.constraint_name
        ) AS constraint_width
    FROM information_schema.columns c
    LEFT JOIN information_schema.key_column_usage kcu
        ON kcu.table_schema = c.table_schema
        AND kcu.table_name = c.table_name
        AND kcu.column_name = c.column_name
    LEFT JOIN information_schema.table_constraints tc
        ON tc.constraint_schema = kcu.constraint_schema
        AND tc.constraint_name = kcu.constraint_name
        AND tc.constraint_type IN ('PRIMARY KEY', 'UNIQUE')
    WHERE c.table_schema = $1
    AND c.table_name = $2
    ORDER BY c.ordinal_position, tc.constraint_type
"""

# The referenced column is paired by position_in_unique_constraint so composite
# keys do not cross-multiply.
FOREIGN_KEYS_SQL = """
    SELECT
        kcu.column_name,
        ref.table_name AS referenced_table,
        ref.column_name AS referenced_column,
        rc.delete_rule,
        rc.update_rule
    FROM information_schema.table_constraints tc
    JOIN information_schema.key_column_usage kcu
        ON kcu.constraint_schema = tc.constraint_schema
        AND kcu.constraint_name = tc.constraint_name
    JOIN information_schema.referential_constraints rc
        ON rc.constraint_schema = tc.constraint_schema
        AND rc.constraint_name = tc.constraint_name
    JOIN information_schema.key_column_usage ref
        ON ref.constraint_schema = rc.unique_constraint_schema
        AND ref.constraint_name = rc.unique_constraint_name
        AND ref.ordinal_position = kcu.position_in_unique_constraint
    WHERE tc.constraint_type = 'FOREIGN KEY'
    AND tc.table_schema = $1
    AND tc.table_name = $2
    ORDER BY tc.constraint_name, kcu.ordinal_position
"""


async def fetch_raw_catalog(conn, database: str, settings: CoreSettings) -> List[RawTableCatalog]:
    """Fetch tables, column rows and foreign key rows for the configured schema.

    Fetches run sequentially on the one connection, keeping catalog table order.
    """
    schema = settings.pg_schema
    table_rows = await conn.fetch(LIST_TABLES_SQL, schema)

    catalog: List[RawTableCatalog] = []
    for row in table_rows:
        name = str(row_value(row, "table_name"))
        logger.debug("Fetching Postgres catalog rows for %s.%s.%s", database, schema, name)
        column_rows = await conn.fetch(COLUMNS_SQL, schema, name)
        fk_rows = await conn.fetch(FOREIGN_KEYS_SQL, schema, name)
        catalog.append(
            RawTableCatalog(name=name, column_rows=column_rows, foreign_key_rows=fk_rows)
        )
    return catalog


def _type_string(row: CatalogRow) -> str:
    data_type = row_text(row, "data_type")
    length = row_value(row, "character_maximum_length", required=False)
    if length is not None:
        return f"{data_type}({length})"
    return data_type


def _fold_columns(rows: List[CatalogRow]) -> List[Dict[str, Any]]:
    folded: Dict[str, Dict[str, Any]] = {}
    for row in rows:
        name = row_text(row, "column_name")
        fields = folded.get(name)
        if fields is None:
            default = row_value(row, "column_default", required=False)
            fields = {
                "name": name,
                "type": _type_string(row),
                "is_primary_key": False,
                "is_nullable": str(row_value(row, "is_nullable")).upper() == "YES",
                "is_unique": False,
                "default_value": None if default is None else str(default),
            }
            folded[name] = fields

        constraint_type = str(row_value(row, "constraint_type", required=False) or "").upper()
        width = row_value(row, "constraint_width", required=False)
        if constraint_type == "PRIMARY KEY":
            fields["is_primary_key"] = True
        elif constraint_type == "UNIQUE" and (width is None or int(width) == 1):
            fields["is_unique"] = True
    return list(folded.values())


def _reference(row: CatalogRow) -> Reference:
    try:
        return Reference(
            table=row_text(row, "referenced_table"),
            column=row_text(row, "referenced_column"),
            on_delete=row_value(row, "delete_rule", required=False),
            on_update=row_value(row, "update_rule", required=False),
        )
    except ValueError as exc:
        raise MalformedCatalogRow(f"Unusable foreign key row {dict(row)!r}: {exc}") from exc


def normalize_table(raw: RawTableCatalog) -> Table:
    """Normalize one table's folded column rows and foreign key rows into a ``Table``."""
    column_fields = _fold_columns(list(raw.column_rows))
    references = [
        (row_text(row, "column_name"), _reference(row)) for row in raw.foreign_key_rows
    ]
    return build_table(raw.name, column_fields, references)
