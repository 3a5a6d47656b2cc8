"""Relationship graph construction.

Turns a set of canonical tables into positioned nodes and foreign key edges.
Layout is a fixed grid: same input order gives the same positions, so
diagrams are reproducible across reloads.
"""

import logging
from typing import Dict, Iterable, List

from schema.table_def import Table

from .data import GraphData
from .edge import Edge
from .node import Node, Position

logger = logging.getLogger(__name__)

GRID_COLUMNS = 3
START_X = 50
START_Y = 50
X_GAP = 350
Y_GAP = 300

EDGE_ID_SEPARATOR = "-"


def grid_position(index: int) -> Position:
    """Return the grid position of the node at ``index``."""
    row, col = divmod(index, GRID_COLUMNS)
    return Position(x=START_X + col * X_GAP, y=START_Y + row * Y_GAP)


def _escape_id_part(part: str) -> str:
    return part.replace("\\", "\\\\").replace(EDGE_ID_SEPARATOR, "\\" + EDGE_ID_SEPARATOR)


def edge_id(source: str, source_column: str, target: str, target_column: str) -> str:
    """Build a deterministic edge id; separators inside names are escaped."""
    parts = (source, source_column, target, target_column)
    return EDGE_ID_SEPARATOR.join(_escape_id_part(part) for part in parts)


def build_graph(tables: Iterable[Table]) -> GraphData:
    """Build diagram nodes and foreign key edges from canonical tables.

    A foreign key whose referenced table is not part of ``tables`` yields no
    edge; callers may render a subset of a database.
    """
    nodes: List[Node] = []
    by_name: Dict[str, Table] = {}

    for table in tables:
        if table.name in by_name:
            logger.warning("Skipping duplicate table '%s' in graph input", table.name)
            continue
        by_name[table.name] = table
        nodes.append(
            Node(
                id=table.name,
                label=table.name,
                position=grid_position(len(nodes)),
                columns=table.columns,
            )
        )

    edges: List[Edge] = []
    for table in by_name.values():
        for col in table.foreign_key_columns:
            ref = col.references
            if ref is None or ref.table not in by_name:
                continue
            edges.append(
                Edge(
                    id=edge_id(table.name, col.name, ref.table, ref.column),
                    source=table.name,
                    target=ref.table,
                    source_handle=col.name,
                    target_handle=ref.column,
                    label=f"{col.name} → {ref.column}",
                )
            )

    logger.debug("Built graph with %d nodes and %d edges", len(nodes), len(edges))
    return GraphData(nodes=tuple(nodes), edges=tuple(edges))
