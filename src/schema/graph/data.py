from typing import Any, Dict, List, Tuple

from pydantic import BaseModel

from .edge import Edge
from .node import Node


class GraphData(BaseModel):
    """Nodes and edges of a relationship diagram."""

    nodes: Tuple[Node, ...] = ()
    edges: Tuple[Edge, ...] = ()

    model_config = {"frozen": True}

    def to_flow(self) -> Dict[str, List[Dict[str, Any]]]:
        """Return a render-ready payload with camelCase keys for a flow canvas."""
        nodes = [
            {
                "id": node.id,
                "type": node.type,
                "position": {"x": node.position.x, "y": node.position.y},
                "data": {
                    "label": node.label,
                    "columns": [
                        col.model_dump(mode="json", by_alias=True, exclude={"length"})
                        for col in node.columns
                    ],
                },
            }
            for node in self.nodes
        ]
        edges = [
            {
                "id": edge.id,
                "source": edge.source,
                "target": edge.target,
                "sourceHandle": edge.source_handle,
                "targetHandle": edge.target_handle,
                "label": edge.label,
                "animated": edge.animated,
            }
            for edge in self.edges
        ]
        return {"nodes": nodes, "edges": edges}
