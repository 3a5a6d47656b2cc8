"""Relationship graph models and builder."""

from .builder import build_graph, edge_id
from .data import GraphData
from .edge import Edge
from .node import Node, Position

__all__ = ["Edge", "GraphData", "Node", "Position", "build_graph", "edge_id"]
