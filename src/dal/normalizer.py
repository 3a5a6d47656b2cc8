"""Schema Normalizer: raw catalog rows from either dialect into canonical tables."""

import logging
from typing import Any, List, Sequence

from dal.errors import IntrospectionError
from dal.raw_catalog import MalformedCatalogRow, RawTableCatalog
from dal.strategies import get_strategy
from schema import Table

logger = logging.getLogger(__name__)


def normalize(dialect: Any, raw_catalog: Sequence[RawTableCatalog]) -> List[Table]:
    """Normalize raw catalog rows into canonical ``Table`` values.

    Output order follows ``raw_catalog``. Each call builds fresh values.

    Raises:
        IntrospectionError: If a table's rows are malformed (missing fields,
            unknown cascade rules, duplicate column names).
    """
    strategy = get_strategy(dialect)
    tables: List[Table] = []
    for raw in raw_catalog:
        try:
            tables.append(strategy.normalize_table(raw))
        except (MalformedCatalogRow, ValueError) as exc:
            raise IntrospectionError(
                f"Malformed catalog rows for table '{raw.name}': {exc}",
                dialect=strategy.dialect.value,
                table=raw.name,
            ) from exc
    logger.debug("Normalized %d %s tables", len(tables), strategy.dialect.value)
    return tables
