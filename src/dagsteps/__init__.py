"""Dependency graph ordering: layered topological sort and hierarchical step numbering."""

__all__ = [
    "CycleError",
    "DependencyEntry",
    "Graph",
    "GraphDocument",
    "GraphError",
    "GraphFileError",
    "LinkConflictError",
    "LinkEntry",
    "Node",
    "NodeEntry",
    "SelfReferenceError",
    "ShrinkingGraph",
    "TopologyOrder",
    "export_order_to_toml",
    "graph_from_document",
    "load_graph_from_toml",
    "order_to_dict",
    "transitive_closure",
]

from ._errors import CycleError, GraphError, LinkConflictError, SelfReferenceError
from ._graph import Graph, ShrinkingGraph, transitive_closure
from ._io import (
    DependencyEntry,
    GraphDocument,
    GraphFileError,
    LinkEntry,
    NodeEntry,
    export_order_to_toml,
    graph_from_document,
    load_graph_from_toml,
    order_to_dict,
)
from ._models import Node, TopologyOrder
