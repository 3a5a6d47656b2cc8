from typing import Tuple

from pydantic import BaseModel

from schema.column_def import Column


class Position(BaseModel):
    """Canvas coordinates of a node's top-left corner."""

    x: float
    y: float

    model_config = {"frozen": True}


class Node(BaseModel):
    """A table rendered as a diagram node.

    Attributes:
        id: Table name; unique across the node set.
        type: Renderer node type.
        label: Display label (the table name).
        position: Grid position assigned by the builder.
        columns: The table's columns, in table order.
    """

    id: str
    type: str = "table"
    label: str
    position: Position
    columns: Tuple[Column, ...] = ()

    model_config = {"frozen": True}
