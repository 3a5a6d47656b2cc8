from typing import Optional

from pydantic import BaseModel


class Edge(BaseModel):
    """A foreign key relationship between two table nodes.

    Attributes:
        id: Deterministic id derived from (source, source column, target, target column).
        source: Name of the table owning the foreign key column.
        target: Name of the referenced table.
        source_handle: Foreign key column name.
        target_handle: Referenced column name.
        label: Display label, e.g. "user_id → id".
        animated: Renderer hint.
    """

    id: str
    source: str
    target: str
    source_handle: str
    target_handle: str
    label: Optional[str] = None
    animated: bool = True

    model_config = {"frozen": True}
