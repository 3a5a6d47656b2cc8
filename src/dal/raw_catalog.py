"""Raw catalog rows and the dialect-independent column/foreign key join."""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from schema import Column, Reference, Table

logger = logging.getLogger(__name__)

CatalogRow = Mapping[str, Any]


class MalformedCatalogRow(ValueError):
    """Raised when a catalog row lacks a required field or holds an unusable value."""


@dataclass(frozen=True)
class RawTableCatalog:
    """Catalog rows fetched for one table, exactly as the driver returned them.

    ``primary_key_rows`` is only fetched by dialects whose column listing cannot
    tell a primary key apart from a promoted unique key; ``None`` means the
    column rows are authoritative.
    """

    name: str
    column_rows: Sequence[CatalogRow] = ()
    foreign_key_rows: Sequence[CatalogRow] = ()
    primary_key_rows: Optional[Sequence[CatalogRow]] = None


def _as_text(value: Any) -> Any:
    # MySQL 8 reports some DESCRIBE fields as bytes.
    if isinstance(value, (bytes, bytearray)):
        return value.decode("utf-8")
    return value


def row_value(row: CatalogRow, key: str, required: bool = True) -> Any:
    """Look up ``key`` in a catalog row, ignoring key case."""
    if key in row:
        return _as_text(row[key])
    lowered = key.lower()
    for candidate, value in row.items():
        if isinstance(candidate, str) and candidate.lower() == lowered:
            return _as_text(value)
    if required:
        raise MalformedCatalogRow(f"Catalog row is missing field '{key}': {dict(row)!r}")
    return None


def row_text(row: CatalogRow, key: str) -> str:
    """Return a required, non-empty text field from a catalog row."""
    value = row_value(row, key)
    if value is None or str(value) == "":
        raise MalformedCatalogRow(f"Catalog row has an empty '{key}': {dict(row)!r}")
    return str(value)


def build_table(
    name: str,
    column_fields: Sequence[Dict[str, Any]],
    references: Sequence[Tuple[str, Reference]],
) -> Table:
    """Join column fields with (column name, reference) pairs into a ``Table``.

    At most one reference attaches to a column; the first one wins. References
    for columns missing from ``column_fields`` are dropped with a warning. The
    referenced table itself is never checked.
    """
    known = {fields["name"] for fields in column_fields}
    by_column: Dict[str, Reference] = {}
    for column_name, ref in references:
        if column_name not in known:
            logger.warning(
                "Foreign key on unknown column '%s.%s' ignored", name, column_name
            )
            continue
        if column_name in by_column:
            logger.warning(
                "Column '%s.%s' has more than one foreign key; keeping reference to %s.%s",
                name,
                column_name,
                by_column[column_name].table,
                by_column[column_name].column,
            )
            continue
        by_column[column_name] = ref

    columns: List[Column] = []
    for fields in column_fields:
        ref: Optional[Reference] = by_column.get(fields["name"])
        columns.append(Column(**fields, is_foreign_key=ref is not None, references=ref))
    return Table(name=name, columns=tuple(columns))
