"""Graph module providing the dependency graph and its orderings.

This module contains:
- Graph[T]: A mutable directed acyclic graph with cycle-checked declarations
- ShrinkingGraph[T]: A disposable snapshot consumed by ordering algorithms
- transitive_closure: Breadth-first reachability in either direction
- HierarchicalOrderAssigner: Dotted/lettered step numbering
"""

from ._algorithms import peel_layers, transitive_closure
from ._dependency_graph import Graph
from ._edge_index import EdgeIndex
from ._hierarchy import DEFAULT_STEP_WIDTH, HierarchicalOrderAssigner, branch_letters
from ._shrinking import ShrinkingGraph
from ._view import GraphView

__all__ = [
    "DEFAULT_STEP_WIDTH",
    "EdgeIndex",
    "Graph",
    "GraphView",
    "HierarchicalOrderAssigner",
    "ShrinkingGraph",
    "branch_letters",
    "peel_layers",
    "transitive_closure",
]
