"""DDL Synthesizer: canonical column definitions into a ``CREATE TABLE`` statement.

Output layout is fixed so statements are deterministic::

    CREATE TABLE "t" (
    "id" integer NOT NULL,
    "name" varchar(50),
    PRIMARY KEY ("id")
    )

Identifier quoting is the only dialect-specific part. Nothing here touches the
network; executing the statement is the driver adapter's job.
"""

import logging
from typing import Any, Callable, List, Mapping, Sequence, Union

from pydantic import ValidationError as PydanticValidationError

from dal.errors import ValidationError
from dal.strategies import get_strategy
from schema import Column

logger = logging.getLogger(__name__)

CHARACTER_TYPES = frozenset(
    {
        "char",
        "varchar",
        "character",
        "character varying",
        "nchar",
        "nvarchar",
        "national char",
        "national character",
    }
)

TEMPORAL_TYPES = frozenset(
    {
        "date",
        "time",
        "datetime",
        "timestamp",
        "timestamptz",
        "timetz",
        "year",
        "interval",
        "time with time zone",
        "time without time zone",
        "timestamp with time zone",
        "timestamp without time zone",
    }
)

ColumnInput = Union[Column, Mapping[str, Any]]


def base_type(type_name: str) -> str:
    """Return the lowercased type name without its parameter list."""
    base = type_name.split("(", 1)[0]
    return " ".join(base.lower().split())


def is_quoted_default_type(type_name: str) -> bool:
    """Return True when defaults for this type are written as quoted literals."""
    base = base_type(type_name)
    return "char" in base or "text" in base or base in TEMPORAL_TYPES


def render_type(column: Column) -> str:
    """Render the column type, appending the length to character types."""
    type_name = column.type.strip()
    length = (column.length or "").strip()
    if length and "(" not in type_name and base_type(type_name) in CHARACTER_TYPES:
        return f"{type_name}({length})"
    return type_name


def _coerce_columns(columns: Sequence[ColumnInput]) -> List[Column]:
    coerced: List[Column] = []
    for index, col in enumerate(columns):
        if isinstance(col, Column):
            coerced.append(col)
            continue
        try:
            coerced.append(Column.model_validate(dict(col)))
        except (PydanticValidationError, TypeError) as exc:
            raise ValidationError(
                f"Column #{index + 1} is not a valid column definition: {exc}",
                reason_code="INVALID_COLUMN",
            ) from exc
    return coerced


def _validate(table_name: str, columns: List[Column]) -> None:
    if not table_name or not table_name.strip():
        raise ValidationError("Table name must not be empty.", reason_code="EMPTY_TABLE_NAME")
    if not columns:
        raise ValidationError(
            f"Table '{table_name}' needs at least one column.", reason_code="NO_COLUMNS"
        )
    seen = set()
    for col in columns:
        if not col.name or not col.name.strip():
            raise ValidationError(
                f"Table '{table_name}' has a column with an empty name.",
                reason_code="EMPTY_COLUMN_NAME",
            )
        if col.name in seen:
            raise ValidationError(
                f"Table '{table_name}' defines column '{col.name}' more than once.",
                reason_code="DUPLICATE_COLUMN",
            )
        seen.add(col.name)
        if not col.type or not col.type.strip():
            raise ValidationError(
                f"Column '{col.name}' has no type.", reason_code="EMPTY_COLUMN_TYPE"
            )
        if col.is_foreign_key:
            ref = col.references
            if ref is None or not ref.table.strip() or not ref.column.strip():
                raise ValidationError(
                    f"Foreign key column '{col.name}' needs a referenced table and column.",
                    reason_code="EMPTY_REFERENCE",
                )


def column_definition(column: Column, quote: Callable[[str], str]) -> str:
    parts = [quote(column.name), render_type(column)]
    if not column.is_nullable or column.is_primary_key:
        parts.append("NOT NULL")
    if column.is_unique and not column.is_primary_key:
        parts.append("UNIQUE")
    if column.default_value and column.default_value.strip():
        if is_quoted_default_type(column.type):
            parts.append(f"DEFAULT '{column.default_value}'")
        else:
            parts.append(f"DEFAULT {column.default_value}")
    return " ".join(parts)


def foreign_key_clause(column: Column, quote: Callable[[str], str]) -> str:
    ref = column.references
    clause = (
        f"FOREIGN KEY ({quote(column.name)}) "
        f"REFERENCES {quote(ref.table)}({quote(ref.column)})"
    )
    if ref.on_delete is not None:
        clause += f" ON DELETE {ref.on_delete.value}"
    if ref.on_update is not None:
        clause += f" ON UPDATE {ref.on_update.value}"
    return clause


def synthesize(dialect: Any, table_name: str, columns: Sequence[ColumnInput]) -> str:
    """Build a ``CREATE TABLE`` statement for ``dialect``.

    Args:
        dialect: Dialect tag or alias (``"mysql"``, ``"postgres"``, ...).
        table_name: Name of the table to create.
        columns: Column models or mappings (snake_case or camelCase keys), in table order.

    Returns:
        The statement text.

    Raises:
        ValidationError: On empty or duplicate names, an empty column list, a
            foreign key without a target, or identifiers that cannot be quoted safely.
    """
    strategy = get_strategy(dialect)
    quote = strategy.quote_identifier
    cols = _coerce_columns(columns)
    _validate(table_name, cols)

    parts = [column_definition(col, quote) for col in cols]

    primary_keys = [quote(col.name) for col in cols if col.is_primary_key]
    if primary_keys:
        parts.append(f"PRIMARY KEY ({', '.join(primary_keys)})")

    parts.extend(foreign_key_clause(col, quote) for col in cols if col.is_foreign_key)

    statement = f"CREATE TABLE {quote(table_name)} (\n" + ",\n".join(parts) + "\n)"
    logger.debug(
        "Synthesized %s DDL for table '%s' (%d columns)",
        strategy.dialect.value,
        table_name,
        len(cols),
    )
    return statement
